from datetime import datetime, timedelta, timezone

from sqlmodel import Session, select

from revi.models import Card, Deck, ReviewSession
from revi.schemas.review import CardRatingData
from revi.services.review_service import record_session
from revi.utils.time_utils import to_utc, utcnow


def test_utcnow_is_timezone_aware():
    now = utcnow()
    assert now.tzinfo is not None
    assert now.utcoffset() == timedelta(0)


def test_to_utc_normalizes_offsets_and_naive_values():
    assert to_utc(None) is None
    assert to_utc(datetime(2024, 1, 1, 10, 0)) == datetime(2024, 1, 1, 10, 0, tzinfo=timezone.utc)
    shifted = datetime(2024, 1, 1, 12, 0, tzinfo=timezone(timedelta(hours=2)))
    assert to_utc(shifted) == datetime(2024, 1, 1, 10, 0, tzinfo=timezone.utc)
    assert to_utc(shifted).utcoffset() == timedelta(0)


def test_timestamps_round_trip_as_utc(database, store):
    deck = store.create_deck("Bio")
    card = store.create_card(deck.id, "What is a cell?", "The basic unit of life.")

    with Session(database) as fresh:
        stored_deck = fresh.exec(select(Deck).where(Deck.id == deck.id)).one()
        stored_card = fresh.exec(select(Card).where(Card.id == card.id)).one()

    assert stored_deck.created_at.utcoffset() == timedelta(0)
    assert stored_card.updated_at.utcoffset() == timedelta(0)
    assert abs(utcnow() - stored_deck.created_at) < timedelta(minutes=1)


def test_naive_session_times_are_stored_as_utc(database, store):
    deck = store.create_deck("Bio")
    card = store.create_card(deck.id, "Q", "A")

    review_session, _ = record_session(
        store,
        deck_id=deck.id,
        started_at=datetime(2024, 1, 1, 10, 0, 0),
        ended_at=datetime(2024, 1, 1, 10, 0, 30, tzinfo=timezone.utc),
        ratings=[CardRatingData(card_id=card.id, rating="easy")],
    )

    with Session(database) as fresh:
        stored = fresh.exec(select(ReviewSession).where(ReviewSession.id == review_session.id)).one()

    assert stored.started_at == datetime(2024, 1, 1, 10, 0, 0, tzinfo=timezone.utc)
    assert stored.duration_seconds == 30
