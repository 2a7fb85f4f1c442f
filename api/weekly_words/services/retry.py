"""
Backoff and cancellable waiting for the deck pipeline.
"""
from typing import Optional
import threading
import time

from weekly_words.core.exceptions import GenerationCancelled


def backoff_delay(attempt: int, base: float, maximum: float) -> float:
    """Exponential delay for the nth retry (1-based): base, 2*base, 4*base, ... capped at maximum."""
    if base <= 0 or attempt < 1:
        return 0.0
    return min(maximum, base * 2 ** (attempt - 1))


class Pause:
    """Sleep that a stop event can interrupt.

    Without an event this is plain ``time.sleep``. With one, a set event
    raises ``GenerationCancelled`` instead of returning.
    """

    def __init__(self, stop_event: Optional[threading.Event] = None):
        self.stop_event = stop_event

    def check(self) -> None:
        if self.stop_event is not None and self.stop_event.is_set():
            raise GenerationCancelled("Deck generation cancelled")

    def __call__(self, seconds: float) -> None:
        self.check()
        if seconds <= 0:
            return
        if self.stop_event is None:
            time.sleep(seconds)
        elif self.stop_event.wait(seconds):
            raise GenerationCancelled("Deck generation cancelled")
