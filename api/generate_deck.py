"""
Script to generate one weekly deck immediately, outside the scheduler.

Runs a full generation cycle (WordsAPI with Merriam-Webster fallback) against
the configured database and exits non-zero if the deck could not be persisted.
"""
import sys
import logging
from weekly_words.core.database import init_db
from weekly_words.core.exceptions import DeckGenerationError
from weekly_words.services.deck_builder import create_deck_builder

logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')
logger = logging.getLogger(__name__)


def main():
    """Main function to generate and persist one deck."""
    logger.info("Starting manual deck generation...")
    init_db()

    try:
        deck_id = create_deck_builder().generate()
    except DeckGenerationError as e:
        logger.error("Deck generation failed: %s", e, exc_info=True)
        sys.exit(1)

    logger.info("Successfully completed! Generated deck id: %d", deck_id)


if __name__ == "__main__":
    main()
