"""
Custom exceptions for the application.
"""
from typing import Optional


class WeeklyWordsException(Exception):
    """Base exception for all Weekly Words application exceptions."""
    pass


class NotFoundError(WeeklyWordsException):
    """Raised when a requested resource is not found."""
    pass


class ConflictError(WeeklyWordsException):
    """Raised when there's a conflict (e.g., duplicate entry)."""
    pass


class AuthenticationError(WeeklyWordsException):
    """Raised when authentication fails."""
    pass


# ============================================================================
# Deck generation
# ============================================================================

class DeckGenerationError(WeeklyWordsException):
    """Base exception for the deck generation pipeline."""
    pass


class FetchFailure(DeckGenerationError):
    """Raised on a transport error, timeout, bad status or malformed JSON from a word source."""

    def __init__(self, message: str, source: str = "", original_exception: Optional[Exception] = None):
        super().__init__(message)
        self.source = source
        self.original_exception = original_exception


class NoDefinitionFound(DeckGenerationError):
    """Raised when neither source produced a usable definition for a word."""

    def __init__(self, word: str):
        super().__init__(f"No definition found for '{word}'")
        self.word = word


class AcquisitionExhausted(DeckGenerationError):
    """Raised when a deck could not be filled within the attempt budget."""
    pass


class PersistenceFailure(DeckGenerationError):
    """Raised when the durable store rejects a completed deck."""

    def __init__(self, message: str, original_exception: Optional[Exception] = None, week_conflict: bool = False):
        super().__init__(message)
        self.original_exception = original_exception
        self.week_conflict = week_conflict


class GenerationAborted(DeckGenerationError):
    """Raised when a generation cycle gave up after its restart budget."""
    pass


class GenerationCancelled(DeckGenerationError):
    """Raised when a generation cycle is cancelled by scheduler shutdown."""
    pass
