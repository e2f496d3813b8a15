from datetime import date, datetime, timedelta, timezone

from revi.services import analytics_service
from revi.services.analytics_service import (
    compute_mastery,
    compute_study_streak,
    summarize_ratings,
)
from revi.utils.number_utils import percentage, round_half_up


def test_round_half_up_rounds_halves_away_from_even():
    assert round_half_up(2.5) == 3
    assert round_half_up(0.5) == 1
    assert round_half_up(66.666) == 67
    assert round_half_up(33.333) == 33
    assert percentage(1, 3) == 33
    assert percentage(2, 3) == 67
    assert percentage(5, 0) == 0


def test_overview_with_no_data(store):
    overview = analytics_service.get_overview(store)

    assert overview.total_decks == 0
    assert overview.total_cards == 0
    assert overview.total_sessions == 0
    assert overview.total_study_minutes == 0
    assert overview.overall_ratings.model_dump() == {"easy": 0, "medium": 0, "hard": 0}
    assert overview.first_session_at is None
    assert overview.last_session_at is None
    assert overview.study_streak == 0


def test_dashboard_with_decks_but_no_sessions(store, deck_with_cards):
    deck, _ = deck_with_cards

    dashboard = analytics_service.get_dashboard(store)

    assert dashboard.total_decks == 1
    assert dashboard.total_cards == 2
    assert dashboard.total_attempts == 0
    assert dashboard.total_study_time == 0
    assert dashboard.overall_ratings.model_dump() == {"easy": 0, "medium": 0, "hard": 0}
    assert len(dashboard.deck_mastery) == 1
    assert dashboard.deck_mastery[0].deck_id == deck.id
    assert dashboard.deck_mastery[0].mastery == 0


def test_overview_totals_and_raw_counts(store, deck_with_cards, make_session):
    deck, _ = deck_with_cards
    make_session(deck, easy=2, hard=1, started_at=datetime(2024, 1, 1, 9, 0), duration_seconds=90)
    make_session(deck, easy=1, medium=1, started_at=datetime(2024, 1, 2, 9, 0), duration_seconds=60)

    overview = analytics_service.get_overview(store)

    assert overview.total_sessions == 2
    # 150 seconds = 2.5 minutes
    assert overview.total_study_minutes == 3
    assert overview.overall_ratings.model_dump() == {"easy": 3, "medium": 1, "hard": 1}
    assert overview.first_session_at == datetime(2024, 1, 1, 9, 0, tzinfo=timezone.utc)
    assert overview.last_session_at == datetime(2024, 1, 2, 9, 1, tzinfo=timezone.utc)


def test_dashboard_percentages_and_mastery_window(store, deck_with_cards, make_session):
    deck, _ = deck_with_cards
    # Oldest session falls outside the three-session window
    make_session(deck, hard=4, started_at=datetime(2024, 1, 1, 9, 0))
    make_session(deck, easy=1, hard=2, started_at=datetime(2024, 1, 2, 9, 0))
    make_session(deck, easy=2, hard=1, started_at=datetime(2024, 1, 3, 9, 0))
    make_session(deck, easy=1, medium=1, started_at=datetime(2024, 1, 4, 9, 0))

    dashboard = analytics_service.get_dashboard(store)

    # (33.33 + 66.67 + 50) / 3 = 50
    assert dashboard.deck_mastery[0].mastery == 50
    assert dashboard.total_attempts == 4
    # 4 easy, 1 medium, 7 hard out of 12
    assert dashboard.overall_ratings.model_dump() == {"easy": 33, "medium": 8, "hard": 58}


def test_mastery_session_without_cards_counts_as_zero(store, deck_with_cards, make_session):
    deck, _ = deck_with_cards
    empty = make_session(deck, started_at=datetime(2024, 1, 1, 9, 0))
    full = make_session(deck, easy=3, started_at=datetime(2024, 1, 2, 9, 0))

    assert compute_mastery([full, empty]) == 50
    assert compute_mastery([]) == 0


def test_summarize_ratings_without_ratings():
    assert summarize_ratings([], as_percentages=True).model_dump() == {"easy": 0, "medium": 0, "hard": 0}


def test_analytics_are_idempotent(store, deck_with_cards, make_session):
    deck, _ = deck_with_cards
    make_session(deck, easy=1, medium=1, hard=1, started_at=datetime(2024, 1, 1, 9, 0), duration_seconds=45)

    assert analytics_service.get_dashboard(store) == analytics_service.get_dashboard(store)
    today = date(2024, 1, 1)
    assert analytics_service.get_overview(store, today=today) == analytics_service.get_overview(store, today=today)


def test_analytics_only_see_own_sessions(store, other_store, deck_with_cards, make_session):
    deck, _ = deck_with_cards
    make_session(deck, easy=2, started_at=datetime(2024, 1, 1, 9, 0))

    overview = analytics_service.get_overview(other_store)
    assert overview.total_sessions == 0
    assert overview.total_decks == 0


def test_study_streak(store, deck_with_cards, make_session):
    deck, _ = deck_with_cards
    today = date(2024, 3, 10)
    sessions = [
        make_session(deck, easy=1, started_at=datetime(2024, 3, 10, 8, 0)),
        make_session(deck, easy=1, started_at=datetime(2024, 3, 10, 20, 0)),
        make_session(deck, easy=1, started_at=datetime(2024, 3, 9, 8, 0)),
        make_session(deck, easy=1, started_at=datetime(2024, 3, 7, 8, 0)),
    ]

    assert compute_study_streak(sessions, today=today) == 2
    assert compute_study_streak(sessions, today=today + timedelta(days=1)) == 0
    assert compute_study_streak([], today=today) == 0


def test_history_includes_deck_name(store, deck_with_cards, make_session):
    deck, _ = deck_with_cards
    older = make_session(deck, easy=1, started_at=datetime(2024, 1, 1, 9, 0))
    newer = make_session(deck, hard=1, started_at=datetime(2024, 1, 5, 9, 0))

    history = analytics_service.get_history(store)

    assert [entry.id for entry in history] == [newer.id, older.id]
    assert all(entry.deck_name == "Bio" for entry in history)


def test_activity_groups_sessions_by_day(store, deck_with_cards, make_session):
    deck, _ = deck_with_cards
    make_session(deck, easy=2, started_at=datetime(2024, 1, 2, 9, 0), duration_seconds=30)
    make_session(deck, hard=1, started_at=datetime(2024, 1, 2, 18, 0), duration_seconds=15)
    make_session(deck, medium=1, started_at=datetime(2024, 1, 1, 9, 0), duration_seconds=10)
    make_session(deck, easy=1, started_at=datetime(2024, 1, 5, 9, 0), duration_seconds=10)

    activity = analytics_service.get_activity(store, start_date=date(2024, 1, 1), end_date=date(2024, 1, 2))

    assert [day.date for day in activity.days] == [date(2024, 1, 1), date(2024, 1, 2)]
    second_day = activity.days[1]
    assert second_day.sessions == 2
    assert second_day.cards_studied == 3
    assert second_day.easy == 2
    assert second_day.hard == 1
    assert second_day.study_seconds == 45


def test_deck_performance(store, deck_with_cards, make_session):
    deck, _ = deck_with_cards
    make_session(deck, easy=1, hard=1, started_at=datetime(2024, 1, 1, 9, 0))
    make_session(deck, easy=2, started_at=datetime(2024, 1, 2, 9, 0))

    performance = analytics_service.get_deck_performance(store, deck.id)

    assert performance.deck_name == "Bio"
    assert performance.total_sessions == 2
    assert performance.total_cards_reviewed == 4
    assert performance.mastery == 75
    assert performance.ratings.model_dump() == {"easy": 75, "medium": 0, "hard": 25}


def test_study_streak_uses_utc_calendar_days(store, deck_with_cards, make_session):
    deck, _ = deck_with_cards
    # 23:30 at UTC-05:00 is already the next day in UTC
    evening = datetime(2024, 3, 9, 23, 30, tzinfo=timezone(timedelta(hours=-5)))
    sessions = [make_session(deck, easy=1, started_at=evening)]

    assert compute_study_streak(sessions, today=date(2024, 3, 10)) == 1
    activity = analytics_service.get_activity(store)
    assert [day.date for day in activity.days] == [date(2024, 3, 10)]
