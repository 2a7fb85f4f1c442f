"""
Deck builder - one generation cycle: week number, shell, fill, restart on failure.
"""
from datetime import datetime, timezone
from typing import Callable, Optional
import logging

from weekly_words.core.config import settings
from weekly_words.core.exceptions import AcquisitionExhausted, FetchFailure, GenerationAborted
from weekly_words.services.card_resolver import CardSourceResolver
from weekly_words.services.deck_filler import DeckFiller, DeckShell
from weekly_words.services.deck_store import GeneratedDeckStore
from weekly_words.services.retry import Pause, backoff_delay

logger = logging.getLogger(__name__)


class DeckBuilder:
    """Build and persist one complete generated deck.

    A fetch failure (or an exhausted attempt budget) discards the whole
    in-progress deck and starts again from the week number computation.
    Restarts are capped at ``max_restarts`` and spaced by exponential backoff.
    Persistence failures are not restarted; the filler already retried them.
    """

    def __init__(
        self,
        store: GeneratedDeckStore,
        filler_factory: Callable[[], DeckFiller],
        max_restarts: Optional[int] = None,
        backoff_base: Optional[float] = None,
        backoff_max: Optional[float] = None,
        pause: Optional[Pause] = None,
        clock: Callable[[], datetime] = lambda: datetime.now(timezone.utc),
    ):
        self.store = store
        self.filler_factory = filler_factory
        self.max_restarts = settings.max_restarts if max_restarts is None else max_restarts
        self.backoff_base = settings.backoff_base if backoff_base is None else backoff_base
        self.backoff_max = settings.backoff_max if backoff_max is None else backoff_max
        self.pause = pause or Pause()
        self.clock = clock

    def next_week(self) -> int:
        return self.store.count_generated_decks() + 1

    def new_shell(self) -> DeckShell:
        """Allocate an empty in-memory deck for the next week."""
        return DeckShell(week=self.next_week(), created=self.clock(), cards=[])

    def generate(self) -> int:
        """Run one generation cycle and return the persisted deck id."""
        restarts = 0
        while True:
            shell = self.new_shell()
            logger.info(f"Generating deck for week {shell.week}")
            filler = self.filler_factory()
            try:
                return filler.fill(shell)
            except (FetchFailure, AcquisitionExhausted) as e:
                if restarts >= self.max_restarts:
                    logger.error(f"Deck generation aborted after {restarts} restart(s): {e}")
                    raise GenerationAborted(
                        f"Deck generation aborted after {restarts} restart(s): {e}"
                    ) from e
                restarts += 1
                delay = backoff_delay(restarts, self.backoff_base, self.backoff_max)
                logger.warning(
                    f"Deck generation failed ({e}); restart {restarts}/{self.max_restarts} in {delay:.1f}s"
                )
                self.pause(delay)


def create_deck_builder(store: Optional[GeneratedDeckStore] = None, pause: Optional[Pause] = None) -> DeckBuilder:
    """Wire a DeckBuilder from settings with live HTTP clients."""
    store = store or GeneratedDeckStore()
    pause = pause or Pause()
    resolver = CardSourceResolver()

    return DeckBuilder(
        store=store,
        filler_factory=lambda: DeckFiller(resolver=resolver, store=store, pause=pause),
        pause=pause,
    )
