"""
Deck and generated deck schemas.
"""
from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional
from datetime import datetime


class CardResponse(BaseModel):
    """One card of a generated deck, with the camelCase keys clients use."""
    model_config = ConfigDict(populate_by_name=True)

    word: str
    part_of_speech: str = Field("", alias="partOfSpeech")
    definition: str = ""
    usage: str = ""


class GeneratedDeckResponse(BaseModel):
    """Generated deck response schema."""
    id: int
    week: int
    created: datetime
    cards: List[CardResponse]


class GeneratedDeckSummary(BaseModel):
    """Generated deck without its cards."""
    id: int
    week: int
    created: datetime
    card_count: int


class DeckResponse(BaseModel):
    """A user's deck with its stats."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    deck_name: str
    deck_review_total: int
    deck_highest_accuracy: float
    deck_average_accuracy: float
    deck_fastest_time: float
    deck_average_time: float
    generated_deck_id: int
    week: Optional[int] = None


class DeckStatsUpdate(BaseModel):
    """Stat fields a client may update after reviewing a deck."""
    deck_name: Optional[str] = Field(None, min_length=1, max_length=100)
    deck_review_total: Optional[int] = Field(None, ge=0)
    deck_highest_accuracy: Optional[float] = Field(None, ge=0, le=100)
    deck_average_accuracy: Optional[float] = Field(None, ge=0, le=100)
    deck_fastest_time: Optional[float] = Field(None, ge=0)
    deck_average_time: Optional[float] = Field(None, ge=0)

    class Config:
        json_schema_extra = {
            "example": {
                "deck_review_total": 3,
                "deck_highest_accuracy": 95,
                "deck_average_accuracy": 80.5,
                "deck_fastest_time": 42.0,
                "deck_average_time": 61.3
            }
        }


class GenerationTriggerResponse(BaseModel):
    """Response for a manual generation trigger."""
    started: bool
    message: str


class SchedulerStatusResponse(BaseModel):
    """Snapshot of the deck scheduler."""
    running: bool
    generating: bool
    interval_ms: int
    runs: int
    failures: int
    skipped: int
    last_started: Optional[datetime] = None
    last_finished: Optional[datetime] = None
    last_deck_id: Optional[int] = None
    last_error: Optional[str] = None
