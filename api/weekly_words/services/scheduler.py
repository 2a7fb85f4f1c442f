"""
Recurring deck generation.

``DeckScheduler`` owns one background thread that generates a deck every
``interval_ms`` milliseconds (one week by default). Runs are serialized: a
tick or manual trigger that arrives while a run is in progress is skipped,
so two generations in the same process never compute the same week number.
"""
from datetime import datetime, timezone
from threading import Event, Lock, Thread
from typing import Any, Callable, Dict, List, Optional
import logging

from weekly_words.core.config import settings
from weekly_words.core.exceptions import DeckGenerationError, GenerationCancelled
from weekly_words.services.deck_builder import DeckBuilder, create_deck_builder
from weekly_words.services.retry import Pause

logger = logging.getLogger(__name__)


def _default_builder_factory(pause: Pause) -> DeckBuilder:
    return create_deck_builder(pause=pause)


class DeckScheduler:

    def __init__(
        self,
        builder_factory: Callable[[Pause], DeckBuilder] = _default_builder_factory,
        interval_ms: Optional[int] = None,
        run_on_start: Optional[bool] = None,
    ):
        self.builder_factory = builder_factory
        self.interval_ms = interval_ms or settings.generation_interval_ms
        self.run_on_start = settings.run_on_start if run_on_start is None else run_on_start

        self._stop_event = Event()
        self._run_lock = Lock()
        self._status_lock = Lock()
        self._thread: Optional[Thread] = None
        self._workers: List[Thread] = []
        self._status: Dict[str, Any] = {
            'generating': False,
            'runs': 0,
            'failures': 0,
            'skipped': 0,
            'last_started': None,
            'last_finished': None,
            'last_deck_id': None,
            'last_error': None,
        }

    @property
    def interval_seconds(self) -> float:
        return self.interval_ms / 1000

    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        """Start the timer thread. Calling start on a running scheduler is a no-op."""
        if self.is_running:
            return
        self._stop_event.clear()
        self._thread = Thread(target=self._loop, name="deck-scheduler", daemon=True)
        self._thread.start()
        logger.info(f"Deck scheduler started (interval {self.interval_ms} ms)")

    def stop(self, timeout: Optional[float] = None) -> None:
        """Stop the timer and cancel any generation in progress."""
        self._stop_event.set()
        threads = [t for t in [self._thread, *self._workers] if t is not None]
        for thread in threads:
            thread.join(timeout)
        self._thread = None
        self._workers = [t for t in self._workers if t.is_alive()]
        logger.info("Deck scheduler stopped")

    def _loop(self) -> None:
        if self.run_on_start:
            self.run_once()
        while not self._stop_event.wait(self.interval_seconds):
            self.run_once()

    def trigger(self) -> bool:
        """Start one generation in the background. Returns False if one is already running."""
        if not self._run_lock.acquire(blocking=False):
            logger.warning("Deck generation already in progress, trigger ignored")
            return False
        # The worker inherits the run lock and releases it when done
        worker = Thread(target=self._run_locked, name="deck-generation", daemon=True)
        self._workers = [t for t in self._workers if t.is_alive()]
        self._workers.append(worker)
        worker.start()
        return True

    def run_once(self) -> Optional[int]:
        """Generate one deck in the calling thread; returns the deck id, or None if skipped or failed."""
        if not self._run_lock.acquire(blocking=False):
            logger.warning("Deck generation already in progress, skipping this run")
            with self._status_lock:
                self._status['skipped'] += 1
            return None
        return self._run_locked()

    def _run_locked(self) -> Optional[int]:
        """Run one generation; the caller must hold ``_run_lock``, which is released here."""
        try:
            with self._status_lock:
                self._status['generating'] = True
                self._status['runs'] += 1
                self._status['last_started'] = datetime.now(timezone.utc)

            deck_id = None
            error = None
            try:
                builder = self.builder_factory(Pause(self._stop_event))
                deck_id = builder.generate()
            except GenerationCancelled as e:
                logger.info("Deck generation cancelled by shutdown")
                error = e
            except DeckGenerationError as e:
                logger.error(f"Deck generation failed: {str(e)}", exc_info=e)
                error = e
            except Exception as e:
                # Keep the timer thread alive; the next tick tries again
                logger.error(f"Unexpected error during deck generation: {str(e)}", exc_info=e)
                error = e

            with self._status_lock:
                self._status['last_finished'] = datetime.now(timezone.utc)
                if error is None:
                    self._status['last_deck_id'] = deck_id
                    self._status['last_error'] = None
                else:
                    self._status['failures'] += 1
                    self._status['last_error'] = f"{type(error).__name__}: {str(error)}"
            return deck_id
        finally:
            with self._status_lock:
                self._status['generating'] = False
            self._run_lock.release()

    def status(self) -> Dict[str, Any]:
        with self._status_lock:
            snapshot = dict(self._status)
        snapshot['running'] = self.is_running
        snapshot['interval_ms'] = self.interval_ms
        return snapshot
