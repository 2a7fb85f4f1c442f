import pytest
from typing import Generator, Iterable, List, Union

from sqlalchemy.pool import StaticPool
from sqlmodel import Session, create_engine

from weekly_words.core.database import init_db
from weekly_words.models.card import Card
from weekly_words.services.deck_store import GeneratedDeckStore


def make_card(index: int) -> Card:
    """Build a distinct, fully populated card."""
    return Card(
        word=f"word{index}",
        part_of_speech="noun",
        definition=f"definition {index}",
        usage=f"usage {index}",
    )


class ScriptedResolver:
    """Resolver double that plays back a list of cards and exceptions in order."""

    def __init__(self, outcomes: Iterable[Union[Card, Exception]]):
        self.outcomes: List[Union[Card, Exception]] = list(outcomes)
        self.calls = 0

    def resolve(self) -> Card:
        self.calls += 1
        if not self.outcomes:
            raise AssertionError("resolver called more times than scripted")
        outcome = self.outcomes.pop(0)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


class RecordingPause:
    """Pause double that records requested delays instead of sleeping."""

    def __init__(self):
        self.delays: List[float] = []

    def check(self) -> None:
        pass

    def __call__(self, seconds: float) -> None:
        self.delays.append(seconds)


# --- Database Fixtures ---
@pytest.fixture
def engine():
    """In-memory SQLite engine shared across threads, with all tables created."""
    test_engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(test_engine)
    try:
        yield test_engine
    finally:
        test_engine.dispose()


@pytest.fixture
def session(engine) -> Generator[Session, None, None]:
    with Session(engine) as db_session:
        yield db_session


@pytest.fixture
def store(engine) -> GeneratedDeckStore:
    return GeneratedDeckStore(engine)


@pytest.fixture
def pause() -> RecordingPause:
    return RecordingPause()
