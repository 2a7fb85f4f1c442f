"""
Models module - re-exports all models.

Importing this module registers every table on ``SQLModel.metadata``.
"""
from weekly_words.models.card import Card
from weekly_words.models.generated_deck import GeneratedDeck
from weekly_words.models.deck import Deck
from weekly_words.models.user import User

__all__ = [
    'Card',
    'GeneratedDeck',
    'Deck',
    'User',
]
