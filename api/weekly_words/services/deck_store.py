"""
Durable store for generated decks.

The deck pipeline touches the database through exactly two calls: counting
existing generated decks and creating one completed deck.
"""
from datetime import datetime
from typing import List, Optional
import logging

from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlmodel import Session, select, func

from weekly_words.core.exceptions import PersistenceFailure
from weekly_words.models.card import Card
from weekly_words.models.generated_deck import GeneratedDeck

logger = logging.getLogger(__name__)


class GeneratedDeckStore:
    """Count and create GeneratedDeck rows, one short session per call."""

    def __init__(self, engine: Optional[Engine] = None):
        if engine is None:
            from weekly_words.core.database import engine as default_engine
            engine = default_engine
        self.engine = engine

    def count_generated_decks(self) -> int:
        try:
            with Session(self.engine) as session:
                return session.exec(select(func.count()).select_from(GeneratedDeck)).one()
        except SQLAlchemyError as e:
            logger.error(f"Failed to count generated decks: {str(e)}")
            raise PersistenceFailure(f"Failed to count generated decks: {str(e)}", original_exception=e) from e

    def create_generated_deck(self, week: int, created: datetime, cards: List[Card]) -> int:
        """Insert a completed deck in a single transaction and return its id."""
        deck = GeneratedDeck(
            week=week,
            created=created,
            cards=[card.to_document() for card in cards],
        )
        try:
            with Session(self.engine) as session:
                session.add(deck)
                session.commit()
                session.refresh(deck)
                return deck.id
        except IntegrityError as e:
            logger.error(f"Generated deck for week {week} already exists: {str(e.orig)}")
            raise PersistenceFailure(
                f"Generated deck for week {week} already exists",
                original_exception=e,
                week_conflict=True,
            ) from e
        except SQLAlchemyError as e:
            logger.error(f"Failed to create generated deck for week {week}: {str(e)}")
            raise PersistenceFailure(
                f"Failed to create generated deck for week {week}: {str(e)}",
                original_exception=e,
            ) from e
