"""
GeneratedDeck model.
"""
from sqlmodel import SQLModel, Field, Relationship
from sqlalchemy import Column, JSON
from typing import Optional, List, TYPE_CHECKING
from datetime import datetime

from weekly_words.models.card import Card

if TYPE_CHECKING:
    from weekly_words.models.deck import Deck


class GeneratedDeck(SQLModel, table=True):
    """GeneratedDeck table - the canonical weekly deck built by the server."""
    __tablename__ = "generated_deck"

    id: Optional[int] = Field(default=None, primary_key=True)
    week: int = Field(unique=True, index=True, ge=1)  # count of existing decks + 1
    created: datetime
    cards: List[dict] = Field(default_factory=list, sa_column=Column(JSON, nullable=False))

    # Relationships
    decks: List["Deck"] = Relationship(back_populates="generated_deck")

    def card_list(self) -> List[Card]:
        """Return the embedded cards as Card models, in deck order."""
        return [Card.model_validate(card) for card in self.cards]
