"""
Deck service for per-user deck provisioning and stat updates.
"""
import logging
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select
from typing import List

from weekly_words.core.exceptions import NotFoundError
from weekly_words.models.models import Deck, GeneratedDeck, User
from weekly_words.schemas.deck import DeckStatsUpdate

logger = logging.getLogger(__name__)


def default_deck_name(generated_deck: GeneratedDeck) -> str:
    return f"Week {generated_deck.week}"


def get_user_or_404(session: Session, user_id: int) -> User:
    user = session.get(User, user_id)
    if not user:
        raise NotFoundError(f"User with id {user_id} not found")
    return user


def _add_missing_decks(session: Session, user_id: int) -> int:
    owned_ids = set(session.exec(
        select(Deck.generated_deck_id).where(Deck.user_id == user_id)
    ).all())

    generated_decks = session.exec(select(GeneratedDeck)).all()
    missing = [gd for gd in generated_decks if gd.id not in owned_ids]

    for generated_deck in missing:
        session.add(Deck(
            user_id=user_id,
            generated_deck_id=generated_deck.id,
            deck_name=default_deck_name(generated_deck),
        ))

    if missing:
        session.commit()
    return len(missing)


def provision_user_decks(session: Session, user_id: int) -> List[Deck]:
    """
    Return all of a user's decks, creating any that are missing.

    Every generated deck gets exactly one Deck per user. Decks are created
    lazily here, the first time the user asks for their decks after a new
    generated deck exists. If a concurrent request provisions the same decks
    first, the unique constraint rejects this commit; the session is rolled
    back and the missing set is recomputed once.

    Args:
        session: Database session
        user_id: The user ID

    Returns:
        The user's decks ordered by week, newest first

    Raises:
        NotFoundError: If user not found
    """
    get_user_or_404(session, user_id)

    try:
        created = _add_missing_decks(session, user_id)
    except IntegrityError:
        session.rollback()
        logger.warning(f"Decks for user {user_id} were provisioned concurrently, retrying")
        created = _add_missing_decks(session, user_id)

    if created:
        logger.info(f"Provisioned {created} deck(s) for user {user_id}")

    return list(session.exec(
        select(Deck)
        .join(GeneratedDeck, Deck.generated_deck_id == GeneratedDeck.id)
        .where(Deck.user_id == user_id)
        .order_by(GeneratedDeck.week.desc())
    ).all())


def update_deck_stats(session: Session, user_id: int, deck_id: int, update: DeckStatsUpdate) -> Deck:
    """Apply the provided stat fields to one of the user's decks."""
    deck = session.get(Deck, deck_id)
    if not deck or deck.user_id != user_id:
        raise NotFoundError(f"Deck {deck_id} not found for user {user_id}")

    for field_name, value in update.model_dump(exclude_unset=True).items():
        setattr(deck, field_name, value)

    session.add(deck)
    session.commit()
    session.refresh(deck)
    return deck
