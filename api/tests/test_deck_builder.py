from datetime import datetime, timezone
from unittest.mock import MagicMock

import pytest
from sqlmodel import Session, select

from weekly_words.core.exceptions import (
    AcquisitionExhausted,
    FetchFailure,
    GenerationAborted,
    NoDefinitionFound,
    PersistenceFailure,
)
from weekly_words.models.generated_deck import GeneratedDeck
from weekly_words.services.deck_builder import DeckBuilder
from weekly_words.services.deck_filler import DeckFiller

from tests.conftest import ScriptedResolver, make_card

NOW = datetime(2026, 10, 18, 12, 0, tzinfo=timezone.utc)


def _builder(store, resolver, pause, **kwargs):
    options = dict(max_restarts=3, backoff_base=1.0, backoff_max=4.0)
    options.update(kwargs)
    return DeckBuilder(
        store=store,
        filler_factory=lambda: DeckFiller(
            resolver=resolver, store=store, deck_size=20, max_attempts=100,
            persist_max_attempts=1, backoff_base=0, pause=pause,
        ),
        pause=pause,
        clock=lambda: NOW,
        **options,
    )


def test_new_shell_uses_count_plus_one():
    store = MagicMock()
    store.count_generated_decks.return_value = 4
    builder = _builder(store, ScriptedResolver([]), MagicMock())

    shell = builder.new_shell()

    assert shell.week == 5
    assert shell.created == NOW
    assert shell.cards == []


def test_nth_generation_is_week_n(store, pause):
    resolver = ScriptedResolver([make_card(i) for i in range(60)])
    builder = _builder(store, resolver, pause)

    for _ in range(3):
        builder.generate()

    assert store.count_generated_decks() == 3
    with Session(store.engine) as session:
        decks = session.exec(select(GeneratedDeck).order_by(GeneratedDeck.week)).all()
    assert [deck.week for deck in decks] == [1, 2, 3]
    assert all(len(deck.cards) == 20 for deck in decks)
    assert pause.delays == []


def test_fetch_failure_restarts_from_a_fresh_deck(store, pause):
    outcomes = (
        [make_card(i) for i in range(14)]
        + [FetchFailure("timeout", source="WordsAPI")]
        + [make_card(100 + i) for i in range(20)]
    )
    builder = _builder(store, ScriptedResolver(outcomes), pause)

    deck_id = builder.generate()

    with Session(store.engine) as session:
        deck = session.get(GeneratedDeck, deck_id)
        cards = deck.card_list()
    assert deck.week == 1
    assert len(cards) == 20
    # None of the 14 cards from the failed attempt survive
    assert [card.word for card in cards] == [f"word{100 + i}" for i in range(20)]
    assert pause.delays == [1.0]


def test_restarts_are_bounded_with_exponential_backoff(pause):
    store = MagicMock()
    store.count_generated_decks.return_value = 0
    failures = [FetchFailure("down", source="WordsAPI") for _ in range(10)]
    resolver = ScriptedResolver(failures)
    builder = _builder(store, resolver, pause, max_restarts=3)

    with pytest.raises(GenerationAborted):
        builder.generate()

    assert resolver.calls == 4  # first run + 3 restarts
    assert pause.delays == [1.0, 2.0, 4.0]
    store.create_generated_deck.assert_not_called()


def test_backoff_is_capped(pause):
    store = MagicMock()
    store.count_generated_decks.return_value = 0
    resolver = ScriptedResolver([FetchFailure("down") for _ in range(10)])
    builder = _builder(store, resolver, pause, max_restarts=5, backoff_base=1.0, backoff_max=4.0)

    with pytest.raises(GenerationAborted):
        builder.generate()

    assert pause.delays == [1.0, 2.0, 4.0, 4.0, 4.0]


def test_exhausted_attempts_also_restart(pause):
    store = MagicMock()
    store.count_generated_decks.return_value = 0
    store.create_generated_deck.return_value = 1
    resolver = ScriptedResolver([NoDefinitionFound("x"), make_card(0)])
    builder = DeckBuilder(
        store=store,
        filler_factory=lambda: DeckFiller(
            resolver=resolver, store=store, deck_size=1, max_attempts=1, pause=pause,
        ),
        max_restarts=1,
        backoff_base=0,
        pause=pause,
    )

    assert builder.generate() == 1
    assert resolver.calls == 2


def test_persistence_failure_is_not_restarted(pause):
    store = MagicMock()
    store.count_generated_decks.return_value = 0
    store.create_generated_deck.side_effect = PersistenceFailure("db down")
    resolver = ScriptedResolver([make_card(i) for i in range(20)])
    builder = _builder(store, resolver, pause)

    with pytest.raises(PersistenceFailure):
        builder.generate()

    assert resolver.calls == 20
    assert store.count_generated_decks.call_count == 1


def test_zero_restarts_aborts_on_first_failure(pause):
    store = MagicMock()
    store.count_generated_decks.return_value = 0
    builder = _builder(store, ScriptedResolver([AcquisitionExhausted("budget")]), pause, max_restarts=0)

    with pytest.raises(GenerationAborted):
        builder.generate()

    assert pause.delays == []
