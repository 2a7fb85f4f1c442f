"""
Deck model.
"""
from sqlmodel import SQLModel, Field, Relationship
from sqlalchemy import UniqueConstraint
from typing import Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from weekly_words.models.user import User
    from weekly_words.models.generated_deck import GeneratedDeck


class Deck(SQLModel, table=True):
    """Deck table - a user's instance of a generated deck plus their stats."""
    __tablename__ = "deck"
    __table_args__ = (
        UniqueConstraint("user_id", "generated_deck_id", name="uq_deck_user_generated_deck"),
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="user.id", index=True)
    generated_deck_id: int = Field(foreign_key="generated_deck.id")
    deck_name: str
    deck_review_total: int = Field(default=0)
    deck_highest_accuracy: float = Field(default=0)
    deck_average_accuracy: float = Field(default=0)
    deck_fastest_time: float = Field(default=0)  # Seconds
    deck_average_time: float = Field(default=0)  # Seconds

    # Relationships
    user: Optional["User"] = Relationship(back_populates="decks")
    generated_deck: Optional["GeneratedDeck"] = Relationship(back_populates="decks")
