"""
Card model.
"""
from pydantic import BaseModel, ConfigDict, Field


class Card(BaseModel):
    """One word/definition/usage unit, embedded in a generated deck.

    Cards are immutable once built. They are stored inside the deck's JSON
    column with the camelCase keys the clients expect (``partOfSpeech``).
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    word: str = Field(..., min_length=1)
    part_of_speech: str = Field(default="", alias="partOfSpeech")
    definition: str = ""
    usage: str = ""

    def to_document(self) -> dict:
        """Serialize for the deck's JSON column."""
        return self.model_dump(by_alias=True)
