"""
Card source resolver - turns one random word into at most one Card.
"""
from typing import Optional
import logging

from weekly_words.core.exceptions import NoDefinitionFound
from weekly_words.models.card import Card
from weekly_words.services.card_normalizer import card_from_primary, card_from_secondary
from weekly_words.services.word_sources import WordsApiClient, WebsterClient

logger = logging.getLogger(__name__)


class CardSourceResolver:
    """Acquire one card: WordsAPI first, Merriam-Webster when WordsAPI has no definition.

    Each call to :meth:`resolve` makes one primary request and at most one
    secondary request. ``FetchFailure`` from either client propagates;
    ``NoDefinitionFound`` is raised when neither source has a usable entry.
    """

    def __init__(self, primary: Optional[WordsApiClient] = None, secondary: Optional[WebsterClient] = None):
        self.primary = primary or WordsApiClient()
        self.secondary = secondary or WebsterClient()

    def resolve(self) -> Card:
        response = self.primary.random_word()

        card = card_from_primary(response)
        if card is not None:
            return card

        word = response.get("word") if isinstance(response, dict) else None
        if not isinstance(word, str) or not word.strip():
            logger.warning("WordsAPI response carried no word, skipping dictionary lookup")
            raise NoDefinitionFound("")

        logger.info(f"No WordsAPI definition for '{word}', asking Merriam-Webster")
        card = card_from_secondary(word, self.secondary.lookup(word))
        if card is None:
            raise NoDefinitionFound(word)
        return card
