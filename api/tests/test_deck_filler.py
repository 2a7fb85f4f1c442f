import threading
from datetime import datetime, timezone
from unittest.mock import MagicMock

import pytest

from weekly_words.core.exceptions import (
    AcquisitionExhausted,
    FetchFailure,
    GenerationCancelled,
    NoDefinitionFound,
    PersistenceFailure,
)
from weekly_words.services.deck_filler import DeckFiller, DeckShell, FillState
from weekly_words.services.retry import Pause

from tests.conftest import ScriptedResolver, make_card

CREATED = datetime(2026, 10, 18, tzinfo=timezone.utc)


def _filler(resolver, store, pause, **kwargs):
    options = dict(deck_size=20, max_attempts=100, persist_max_attempts=3, backoff_base=1.0, backoff_max=8.0)
    options.update(kwargs)
    return DeckFiller(resolver=resolver, store=store, pause=pause, **options)


def test_fills_twenty_cards_and_persists_once(pause):
    cards = [make_card(i) for i in range(20)]
    store = MagicMock()
    store.create_generated_deck.return_value = 7
    filler = _filler(ScriptedResolver(cards), store, pause)
    shell = DeckShell(week=3, created=CREATED)

    deck_id = filler.fill(shell)

    assert deck_id == 7
    assert filler.state is FillState.PERSISTED
    store.create_generated_deck.assert_called_once_with(3, CREATED, cards)
    persisted_cards = store.create_generated_deck.call_args.args[2]
    assert len(persisted_cards) == 20
    assert all(card.word for card in persisted_cards)


def test_cards_are_appended_in_acquisition_order(pause):
    cards = [make_card(i) for i in range(5)]
    store = MagicMock()
    filler = _filler(ScriptedResolver(cards), store, pause, deck_size=5)

    filler.fill(DeckShell(week=1, created=CREATED))

    assert [c.word for c in store.create_generated_deck.call_args.args[2]] == [
        "word0", "word1", "word2", "word3", "word4"
    ]


def test_no_definition_consumes_attempt_without_adding_card(pause):
    outcomes = [make_card(0), NoDefinitionFound("zzyzx"), NoDefinitionFound("qwxz"), make_card(1)]
    resolver = ScriptedResolver(outcomes)
    store = MagicMock()
    filler = _filler(resolver, store, pause, deck_size=2)
    shell = DeckShell(week=1, created=CREATED)

    filler.fill(shell)

    assert resolver.calls == 4
    assert filler.attempts == 4
    assert [c.word for c in shell.cards] == ["word0", "word1"]


def test_attempt_budget_bounds_no_definition_loop(pause):
    resolver = ScriptedResolver([make_card(0)] + [NoDefinitionFound("x")] * 10)
    store = MagicMock()
    filler = _filler(resolver, store, pause, deck_size=5, max_attempts=4)
    shell = DeckShell(week=1, created=CREATED)

    with pytest.raises(AcquisitionExhausted):
        filler.fill(shell)

    assert resolver.calls == 4
    assert filler.state is FillState.FAILED
    assert shell.cards == []
    store.create_generated_deck.assert_not_called()


def test_fetch_failure_on_card_fifteen_discards_accumulated_cards(pause):
    outcomes = [make_card(i) for i in range(14)] + [FetchFailure("WordsAPI down", source="WordsAPI")]
    store = MagicMock()
    filler = _filler(ScriptedResolver(outcomes), store, pause)
    shell = DeckShell(week=1, created=CREATED)

    with pytest.raises(FetchFailure):
        filler.fill(shell)

    assert filler.state is FillState.FAILED
    assert shell.cards == []
    store.create_generated_deck.assert_not_called()


def test_persistence_failure_is_retried_with_backoff(pause):
    store = MagicMock()
    store.create_generated_deck.side_effect = [
        PersistenceFailure("db unavailable"),
        PersistenceFailure("db unavailable"),
        11,
    ]
    resolver = ScriptedResolver([make_card(i) for i in range(3)])
    filler = _filler(resolver, store, pause, deck_size=3)

    assert filler.fill(DeckShell(week=2, created=CREATED)) == 11
    assert store.create_generated_deck.call_count == 3
    assert pause.delays == [1.0, 2.0]
    # Cards are not fetched again for a persistence retry
    assert resolver.calls == 3


def test_persistence_failure_is_surfaced_when_retries_run_out(pause):
    store = MagicMock()
    store.create_generated_deck.side_effect = PersistenceFailure("db unavailable")
    filler = _filler(ScriptedResolver([make_card(0)]), store, pause, deck_size=1, persist_max_attempts=2)

    with pytest.raises(PersistenceFailure):
        filler.fill(DeckShell(week=1, created=CREATED))

    assert filler.state is FillState.FAILED
    assert store.create_generated_deck.call_count == 2


def test_week_conflict_recomputes_week_before_retry(pause):
    store = MagicMock()
    store.create_generated_deck.side_effect = [
        PersistenceFailure("week 4 taken", week_conflict=True),
        21,
    ]
    store.count_generated_decks.return_value = 4
    filler = _filler(ScriptedResolver([make_card(0)]), store, pause, deck_size=1)
    shell = DeckShell(week=4, created=CREATED)

    filler.fill(shell)

    assert shell.week == 5
    assert store.create_generated_deck.call_args_list[-1].args[0] == 5


def test_stop_event_cancels_filling():
    stop_event = threading.Event()
    stop_event.set()
    resolver = ScriptedResolver([make_card(0)])
    filler = DeckFiller(resolver=resolver, store=MagicMock(), deck_size=1, pause=Pause(stop_event))

    with pytest.raises(GenerationCancelled):
        filler.fill(DeckShell(week=1, created=CREATED))

    assert resolver.calls == 0
    assert filler.state is FillState.FAILED


def test_fill_against_real_store(store, pause):
    filler = _filler(ScriptedResolver([make_card(i) for i in range(20)]), store, pause)

    deck_id = filler.fill(DeckShell(week=1, created=CREATED))

    assert deck_id is not None
    assert store.count_generated_decks() == 1
