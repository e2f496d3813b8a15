import os

# Settings are read at import time, so configure the environment first
os.environ["DATABASE_URL"] = "sqlite://"
os.environ.setdefault("AUTH_URL", "http://auth.test")
os.environ.setdefault("AUTH_ANON_KEY", "anon-key")
os.environ.setdefault("AUTH_SERVICE_ROLE_KEY", "service-role-key")
os.environ.setdefault("OPENROUTER_API_KEY", "test-openrouter-key")

from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient
from sqlmodel import Session, SQLModel

import revi.models  # noqa: F401
from revi.core.database import engine
from revi.main import app
from revi.models import ReviewSession
from revi.schemas.account import AuthenticatedUser
from revi.services.auth_service import auth_client
from revi.services.store import StudyStore
from revi.utils.time_utils import to_utc

USER_ID = "user-1"
OTHER_USER_ID = "user-2"

TOKENS = {
    "token-user-1": AuthenticatedUser(id=USER_ID, email="one@example.com"),
    "token-user-2": AuthenticatedUser(id=OTHER_USER_ID, email="two@example.com"),
}


@pytest.fixture(autouse=True)
def database():
    SQLModel.metadata.create_all(engine)
    yield engine
    SQLModel.metadata.drop_all(engine)


@pytest.fixture(autouse=True)
def fake_auth_provider(monkeypatch):
    """Resolve the known test tokens without calling the real provider."""
    calls = []

    def fake_get_user(token):
        calls.append(token)
        return TOKENS.get(token)

    monkeypatch.setattr(auth_client, "get_user", fake_get_user)
    return calls


@pytest.fixture
def session(database):
    with Session(database) as session:
        yield session


@pytest.fixture
def store(session):
    return StudyStore(session, USER_ID)


@pytest.fixture
def other_store(session):
    return StudyStore(session, OTHER_USER_ID)


@pytest.fixture
def client():
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def auth_headers():
    return {"Authorization": "Bearer token-user-1"}


@pytest.fixture
def other_auth_headers():
    return {"Authorization": "Bearer token-user-2"}


@pytest.fixture
def make_session(session):
    """Insert a ReviewSession directly, bypassing the recorder."""
    def _make(deck, easy=0, medium=0, hard=0, started_at=None, duration_seconds=0, user_id=USER_ID):
        started_at = to_utc(started_at) or datetime(2024, 1, 1, 10, 0, 0, tzinfo=timezone.utc)
        review_session = ReviewSession(
            deck_id=deck.id,
            user_id=user_id,
            started_at=started_at,
            ended_at=started_at + timedelta(seconds=duration_seconds),
            duration_seconds=duration_seconds,
            total_cards=easy + medium + hard,
            easy_count=easy,
            medium_count=medium,
            hard_count=hard,
        )
        session.add(review_session)
        session.commit()
        session.refresh(review_session)
        return review_session
    return _make


@pytest.fixture
def deck_with_cards(store):
    """A 'Bio' deck with two cards owned by the default test user."""
    deck = store.create_deck("Bio", "Biology basics")
    first = store.create_card(deck.id, "What is a cell?", "The basic unit of life.")
    second = store.create_card(deck.id, "What is DNA?", "The molecule that carries genetic information.")
    return deck, [first, second]
