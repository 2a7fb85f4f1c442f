from fastapi import APIRouter, Depends, status
from sqlmodel import Session, select
from typing import List
from weekly_words.core.database import get_session
from weekly_words.core.exceptions import AuthenticationError, ConflictError
from weekly_words.models.models import User, Deck
from weekly_words.schemas.auth import LoginRequest, RegisterRequest, AuthResponse, UserResponse
from weekly_words.schemas.deck import DeckResponse, DeckStatsUpdate
from weekly_words.services.deck_service import provision_user_decks, update_deck_stats

router = APIRouter(prefix="/users", tags=["users"])


def build_user_response(user: User) -> UserResponse:
    return UserResponse(
        id=user.id,
        username=user.username,
        name=user.name,
        created_at=user.created_at.isoformat(),
    )


def build_deck_response(deck: Deck) -> DeckResponse:
    response = DeckResponse.model_validate(deck)
    if deck.generated_deck is not None:
        response.week = deck.generated_deck.week
    return response


@router.post("/login", response_model=AuthResponse)
async def login(
    login_data: LoginRequest,
    session: Session = Depends(get_session)
):
    """Login with username and password."""
    user = session.exec(select(User).where(User.username == login_data.username)).first()

    if not user or not user.verify_password(login_data.password):
        raise AuthenticationError("Invalid username or password")

    return AuthResponse(user=build_user_response(user), message="Login successful")


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def register(
    register_data: RegisterRequest,
    session: Session = Depends(get_session)
):
    """Register a new user."""
    existing_user = session.exec(select(User).where(User.username == register_data.username)).first()
    if existing_user:
        raise ConflictError("Username already exists")

    new_user = User(
        username=register_data.username,
        password=User.hash_password(register_data.password),
        name=register_data.name,
    )

    session.add(new_user)
    session.commit()
    session.refresh(new_user)

    return AuthResponse(user=build_user_response(new_user), message="Registration successful")


@router.get("/{user_id}/decks", response_model=List[DeckResponse])
async def get_user_decks(
    user_id: int,
    session: Session = Depends(get_session)
):
    """
    List a user's decks, newest week first.

    A deck is created for every generated deck the user does not have yet.
    """
    decks = provision_user_decks(session, user_id)
    return [build_deck_response(deck) for deck in decks]


@router.patch("/{user_id}/decks/{deck_id}", response_model=DeckResponse)
async def patch_user_deck(
    user_id: int,
    deck_id: int,
    update_data: DeckStatsUpdate,
    session: Session = Depends(get_session)
):
    """Update the review stats of one of the user's decks."""
    deck = update_deck_stats(session, user_id, deck_id, update_data)
    return build_deck_response(deck)
