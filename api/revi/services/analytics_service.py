"""
Analytics aggregation over a user's decks and review sessions.

All values are computed from rows fetched through the user's StudyStore; nothing
is cached between calls, so repeated calls without writes return the same data.
"""
import logging
import uuid
from datetime import date, datetime
from typing import Dict, List, Optional, Sequence

from revi.models import ReviewSession
from revi.schemas.analytics import (
    ActivityDay,
    ActivityResponse,
    DashboardResponse,
    DeckMastery,
    DeckPerformanceResponse,
    OverviewResponse,
)
from revi.schemas.review import HistoryEntry, RatingBreakdown
from revi.services.store import StudyStore
from revi.utils.number_utils import average, percentage, round_half_up
from revi.utils.time_utils import to_utc, utcnow

logger = logging.getLogger(__name__)

# Number of most recent sessions that make up a deck's rolling mastery
MASTERY_WINDOW = 3


def summarize_ratings(sessions: Sequence[ReviewSession], as_percentages: bool) -> RatingBreakdown:
    """
    Total easy/medium/hard ratings across sessions.

    Args:
        sessions: Sessions to aggregate
        as_percentages: If True, each level is its share of all ratings (0-100,
                        rounded half up, all 0 when there are no ratings).
                        If False, raw counts are returned.
    """
    easy = sum(s.easy_count or 0 for s in sessions)
    medium = sum(s.medium_count or 0 for s in sessions)
    hard = sum(s.hard_count or 0 for s in sessions)

    if not as_percentages:
        return RatingBreakdown(easy=easy, medium=medium, hard=hard)

    total = easy + medium + hard
    return RatingBreakdown(
        easy=percentage(easy, total),
        medium=percentage(medium, total),
        hard=percentage(hard, total),
    )


def compute_mastery(recent_sessions: Sequence[ReviewSession]) -> int:
    """
    Average percentage of cards rated easy across the given sessions.

    A session with total_cards == 0 contributes 0. No sessions means mastery 0.
    """
    if not recent_sessions:
        return 0
    easy_percentages = [
        (s.easy_count / s.total_cards * 100) if s.total_cards else 0.0
        for s in recent_sessions
    ]
    return round_half_up(average(easy_percentages))


def total_study_seconds(sessions: Sequence[ReviewSession]) -> int:
    return sum(s.duration_seconds or 0 for s in sessions)


def _session_day(review_session: ReviewSession) -> Optional[date]:
    moment = to_utc(review_session.started_at or review_session.ended_at)
    return moment.date() if moment else None


def compute_study_streak(sessions: Sequence[ReviewSession], today: Optional[date] = None) -> int:
    """
    Number of consecutive days, ending today, with at least one session.

    A streak is broken by the first missing day; if there was no session today
    the streak is 0.
    """
    if today is None:
        today = utcnow().date()

    days = sorted({d for d in (_session_day(s) for s in sessions) if d is not None}, reverse=True)

    streak = 0
    for day in days:
        days_ago = (today - day).days
        if days_ago == streak:
            streak += 1
        elif days_ago > streak:
            break
    return streak


def _latest(values: List[Optional[datetime]]) -> Optional[datetime]:
    present = [to_utc(v) for v in values if v is not None]
    return max(present) if present else None


def _earliest(values: List[Optional[datetime]]) -> Optional[datetime]:
    present = [to_utc(v) for v in values if v is not None]
    return min(present) if present else None


def get_overview(store: StudyStore, today: Optional[date] = None) -> OverviewResponse:
    """
    Profile summary for the user.

    overall_ratings are raw counts. total_study_minutes is the sum of all
    session durations divided by 60, rounded half up.
    """
    decks = store.list_decks()
    sessions = store.list_review_sessions()

    return OverviewResponse(
        total_decks=len(decks),
        total_cards=store.count_cards() if decks else 0,
        total_sessions=len(sessions),
        total_study_minutes=round_half_up(total_study_seconds(sessions) / 60),
        overall_ratings=summarize_ratings(sessions, as_percentages=False),
        first_session_at=_earliest([s.started_at for s in sessions]),
        last_session_at=_latest([s.ended_at for s in sessions]),
        study_streak=compute_study_streak(sessions, today=today),
    )


def get_dashboard(store: StudyStore) -> DashboardResponse:
    """
    Dashboard summary for the user.

    overall_ratings are percentages of all ratings. deck_mastery holds the
    rolling mastery of every deck over its last MASTERY_WINDOW sessions.
    """
    decks = store.list_decks()
    sessions = store.list_review_sessions()

    deck_mastery = [
        DeckMastery(
            deck_id=deck.id,
            deck_name=deck.name,
            mastery=compute_mastery(store.recent_sessions_for_deck(deck.id, limit=MASTERY_WINDOW)),
        )
        for deck in decks
    ]

    return DashboardResponse(
        total_decks=len(decks),
        total_cards=store.count_cards() if decks else 0,
        total_attempts=len(sessions),
        total_study_time=total_study_seconds(sessions),
        deck_mastery=deck_mastery,
        overall_ratings=summarize_ratings(sessions, as_percentages=True),
    )


def get_history(store: StudyStore) -> List[HistoryEntry]:
    """All of the user's sessions with their deck name, most recent first."""
    history = []
    for review_session, deck_name in store.list_history():
        entry = HistoryEntry.model_validate(review_session, from_attributes=True)
        entry.deck_name = deck_name
        history.append(entry)
    return history


def get_activity(
    store: StudyStore,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None
) -> ActivityResponse:
    """
    Study activity aggregated per calendar day (UTC), oldest day first.

    Both bounds are inclusive and optional. Sessions without any timestamp
    are skipped.
    """
    by_day: Dict[date, ActivityDay] = {}
    for review_session in store.list_review_sessions():
        day = _session_day(review_session)
        if day is None:
            continue
        if start_date and day < start_date:
            continue
        if end_date and day > end_date:
            continue

        bucket = by_day.setdefault(day, ActivityDay(date=day))
        bucket.sessions += 1
        bucket.cards_studied += review_session.total_cards or 0
        bucket.easy += review_session.easy_count or 0
        bucket.medium += review_session.medium_count or 0
        bucket.hard += review_session.hard_count or 0
        bucket.study_seconds += review_session.duration_seconds or 0

    return ActivityResponse(days=[by_day[day] for day in sorted(by_day)])


def get_deck_performance(store: StudyStore, deck_id: uuid.UUID) -> DeckPerformanceResponse:
    """
    Aggregate performance for one deck.

    Raises:
        NotFoundError: If the deck does not belong to the user
    """
    deck = store.get_deck(deck_id)
    sessions = store.recent_sessions_for_deck(deck.id)

    return DeckPerformanceResponse(
        deck_id=deck.id,
        deck_name=deck.name,
        total_sessions=len(sessions),
        total_cards_reviewed=sum(s.total_cards or 0 for s in sessions),
        mastery=compute_mastery(sessions[:MASTERY_WINDOW]),
        ratings=summarize_ratings(sessions, as_percentages=True),
    )
