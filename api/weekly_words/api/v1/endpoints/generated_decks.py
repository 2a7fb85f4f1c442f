"""
Endpoints for the server-generated weekly decks and their scheduler.
"""
from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlmodel import Session, select
from typing import List
from weekly_words.core.database import get_session
from weekly_words.models.models import GeneratedDeck
from weekly_words.schemas.deck import (
    CardResponse,
    GeneratedDeckResponse,
    GeneratedDeckSummary,
    GenerationTriggerResponse,
    SchedulerStatusResponse,
)
from weekly_words.services.scheduler import DeckScheduler
import logging

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/generated-decks", tags=["generated-decks"])


def get_scheduler(request: Request) -> DeckScheduler:
    """Dependency returning the scheduler owned by the application."""
    scheduler = getattr(request.app.state, "scheduler", None)
    if scheduler is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Deck scheduler is not available"
        )
    return scheduler


def build_generated_deck_response(generated_deck: GeneratedDeck) -> GeneratedDeckResponse:
    return GeneratedDeckResponse(
        id=generated_deck.id,
        week=generated_deck.week,
        created=generated_deck.created,
        cards=[CardResponse.model_validate(card) for card in generated_deck.cards],
    )


@router.get("", response_model=List[GeneratedDeckSummary])
async def list_generated_decks(
    session: Session = Depends(get_session)
):
    """List generated decks, newest week first."""
    decks = session.exec(select(GeneratedDeck).order_by(GeneratedDeck.week.desc())).all()
    return [
        GeneratedDeckSummary(
            id=deck.id,
            week=deck.week,
            created=deck.created,
            card_count=len(deck.cards),
        )
        for deck in decks
    ]


@router.get("/latest", response_model=GeneratedDeckResponse)
async def get_latest_generated_deck(
    session: Session = Depends(get_session)
):
    """Get the generated deck with the highest week number."""
    deck = session.exec(select(GeneratedDeck).order_by(GeneratedDeck.week.desc())).first()
    if not deck:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="No generated decks yet"
        )
    return build_generated_deck_response(deck)


@router.get("/week/{week}", response_model=GeneratedDeckResponse)
async def get_generated_deck_for_week(
    week: int,
    session: Session = Depends(get_session)
):
    """Get the generated deck for a given week."""
    deck = session.exec(select(GeneratedDeck).where(GeneratedDeck.week == week)).first()
    if not deck:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"No generated deck for week {week}"
        )
    return build_generated_deck_response(deck)


@router.post("/generate", response_model=GenerationTriggerResponse, status_code=status.HTTP_202_ACCEPTED)
async def trigger_generation(
    scheduler: DeckScheduler = Depends(get_scheduler)
):
    """Start one deck generation in the background."""
    if not scheduler.trigger():
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Deck generation already in progress"
        )
    logger.info("Deck generation triggered manually")
    return GenerationTriggerResponse(
        started=True,
        message="Deck generation started. Check the scheduler status for progress."
    )


@router.get("/scheduler", response_model=SchedulerStatusResponse)
async def get_scheduler_status(
    scheduler: DeckScheduler = Depends(get_scheduler)
):
    """Get the deck scheduler status."""
    return SchedulerStatusResponse(**scheduler.status())
