"""
Deck filler - acquires cards one at a time until a deck is complete, then persists it.

States of one in-progress deck::

    FILLING  --card-->          FILLING | COMPLETE
    FILLING  --no definition--> FILLING   (one attempt consumed)
    FILLING  --fetch failure--> FAILED    (cards discarded, error propagates)
    COMPLETE --create-->        PERSISTED
    COMPLETE --create fails-->  COMPLETE  (retried with backoff) | FAILED
"""
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import List, Optional
import logging

from weekly_words.core.config import settings
from weekly_words.core.exceptions import (
    AcquisitionExhausted,
    FetchFailure,
    GenerationCancelled,
    NoDefinitionFound,
    PersistenceFailure,
)
from weekly_words.models.card import Card
from weekly_words.services.card_resolver import CardSourceResolver
from weekly_words.services.deck_store import GeneratedDeckStore
from weekly_words.services.retry import Pause, backoff_delay

logger = logging.getLogger(__name__)


class FillState(str, Enum):
    FILLING = "filling"
    COMPLETE = "complete"
    PERSISTED = "persisted"
    FAILED = "failed"


@dataclass
class DeckShell:
    """A generated deck that exists only in memory while it is being filled."""
    week: int
    created: datetime
    cards: List[Card] = field(default_factory=list)


class DeckFiller:
    """Run the fill loop for one shell and persist it once it is complete."""

    def __init__(
        self,
        resolver: CardSourceResolver,
        store: GeneratedDeckStore,
        deck_size: Optional[int] = None,
        max_attempts: Optional[int] = None,
        persist_max_attempts: Optional[int] = None,
        backoff_base: Optional[float] = None,
        backoff_max: Optional[float] = None,
        pause: Optional[Pause] = None,
    ):
        self.resolver = resolver
        self.store = store
        self.deck_size = deck_size or settings.deck_size
        self.max_attempts = max_attempts or settings.max_acquisition_attempts
        self.persist_max_attempts = max(1, persist_max_attempts or settings.persist_max_attempts)
        self.backoff_base = settings.backoff_base if backoff_base is None else backoff_base
        self.backoff_max = settings.backoff_max if backoff_max is None else backoff_max
        self.pause = pause or Pause()
        self.state = FillState.FILLING
        self.attempts = 0

    def fill(self, shell: DeckShell) -> int:
        """Fill ``shell`` to ``deck_size`` cards and persist it; returns the new deck id."""
        self.state = FillState.FILLING
        self.attempts = 0

        try:
            while self.state is FillState.FILLING:
                self._acquire(shell)
        except (FetchFailure, AcquisitionExhausted, GenerationCancelled):
            self.state = FillState.FAILED
            logger.warning(f"Discarding week {shell.week} deck with {len(shell.cards)} card(s)")
            shell.cards.clear()
            raise

        try:
            deck_id = self._persist(shell)
        except (PersistenceFailure, GenerationCancelled):
            self.state = FillState.FAILED
            raise
        self.state = FillState.PERSISTED
        logger.info(f"Persisted generated deck {deck_id} for week {shell.week} ({len(shell.cards)} cards)")
        return deck_id

    def _acquire(self, shell: DeckShell) -> None:
        self.pause.check()
        if self.attempts >= self.max_attempts:
            raise AcquisitionExhausted(
                f"Only {len(shell.cards)} of {self.deck_size} cards after {self.attempts} attempts"
            )
        self.attempts += 1

        try:
            card = self.resolver.resolve()
        except NoDefinitionFound as e:
            logger.info(f"Attempt {self.attempts}: {e}, trying another word")
            return

        shell.cards.append(card)
        logger.info(f"Card {len(shell.cards)}/{self.deck_size} for week {shell.week}: '{card.word}'")
        if len(shell.cards) >= self.deck_size:
            self.state = FillState.COMPLETE

    def _persist(self, shell: DeckShell) -> int:
        for attempt in range(1, self.persist_max_attempts + 1):
            try:
                return self.store.create_generated_deck(shell.week, shell.created, list(shell.cards))
            except PersistenceFailure as e:
                if attempt >= self.persist_max_attempts:
                    logger.error(
                        f"Giving up persisting week {shell.week} deck after {attempt} attempt(s)",
                        exc_info=e,
                    )
                    raise
                logger.warning(f"Persisting week {shell.week} deck failed (attempt {attempt}): {e}")
                self.pause(backoff_delay(attempt, self.backoff_base, self.backoff_max))
                if e.week_conflict:
                    shell.week = self.store.count_generated_decks() + 1
                    logger.info(f"Week number taken, retrying as week {shell.week}")
        raise PersistenceFailure(f"Week {shell.week} deck was never persisted")
