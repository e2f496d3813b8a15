"""
Review session recording.

Turns a finished session's ratings into a stored ReviewSession plus one
CardReview row per rating, and compares the result with the previous session
for the same deck.
"""
import logging
import math
import uuid
from datetime import datetime
from typing import Dict, Optional, Sequence, Tuple

from sqlalchemy.exc import SQLAlchemyError

from revi.core.exceptions import ValidationError
from revi.models import CardReview, Rating, ReviewSession
from revi.schemas.review import CardRatingData, ImprovementResponse, RatingBreakdown
from revi.services.store import StudyStore
from revi.utils.number_utils import percentage
from revi.utils.time_utils import to_utc, utcnow

logger = logging.getLogger(__name__)


def count_ratings(ratings: Sequence[CardRatingData]) -> Dict[Rating, int]:
    """Number of ratings at each level."""
    counts = {level: 0 for level in Rating}
    for entry in ratings:
        counts[Rating(entry.rating)] += 1
    return counts


def compute_duration_seconds(started_at: Optional[datetime], ended_at: Optional[datetime]) -> int:
    """
    Whole seconds between start and end, never negative.
    Returns 0 when either timestamp is missing.
    """
    if started_at is None or ended_at is None:
        return 0
    elapsed = (to_utc(ended_at) - to_utc(started_at)).total_seconds()
    return max(0, math.floor(elapsed))


def rating_percentages(review_session: ReviewSession) -> RatingBreakdown:
    """A session's rating counts as percentages of its own total_cards."""
    total = review_session.total_cards or 0
    return RatingBreakdown(
        easy=percentage(review_session.easy_count, total),
        medium=percentage(review_session.medium_count, total),
        hard=percentage(review_session.hard_count, total),
    )


def compute_improvement(
    current: ReviewSession,
    previous: Optional[ReviewSession]
) -> ImprovementResponse:
    """
    Compare a session with the previous one for the same deck.

    change.<level> = current.<level> - previous.<level>, in percentage points.
    previous and change are None when there is no earlier session.
    """
    current_pct = rating_percentages(current)
    if previous is None:
        return ImprovementResponse(current=current_pct)

    previous_pct = rating_percentages(previous)
    change = RatingBreakdown(
        easy=current_pct.easy - previous_pct.easy,
        medium=current_pct.medium - previous_pct.medium,
        hard=current_pct.hard - previous_pct.hard,
    )
    return ImprovementResponse(current=current_pct, previous=previous_pct, change=change)


def record_session(
    store: StudyStore,
    deck_id: Optional[uuid.UUID],
    started_at: Optional[datetime],
    ended_at: Optional[datetime],
    ratings: Optional[Sequence[CardRatingData]]
) -> Tuple[ReviewSession, ImprovementResponse]:
    """
    Record a finished review session.

    This function:
    1. Validates deck_id is present and the deck belongs to the user
    2. Counts ratings per level and computes the duration
    3. Saves the ReviewSession row
    4. Saves one CardReview row per rating (best effort)
    5. Computes the improvement against the previous session for the deck

    The two writes are not one transaction. If saving the CardReview rows
    fails, the error is logged and the session is still returned as saved.

    Returns:
        Tuple of (saved ReviewSession, improvement against the previous session)

    Raises:
        ValidationError: If deck_id is missing
        NotFoundError: If the deck does not belong to the user
    """
    if not deck_id:
        raise ValidationError("deck_id is required")

    store.get_deck(deck_id)

    ratings = list(ratings or [])
    counts = count_ratings(ratings)

    review_session = ReviewSession(
        deck_id=deck_id,
        user_id=store.user_id,
        started_at=to_utc(started_at),
        ended_at=to_utc(ended_at),
        duration_seconds=compute_duration_seconds(started_at, ended_at),
        total_cards=len(ratings),
        easy_count=counts[Rating.EASY],
        medium_count=counts[Rating.MEDIUM],
        hard_count=counts[Rating.HARD],
    )

    logger.info(f"Saving review session for user {store.user_id} deck {deck_id}")
    review_session = store.add_review_session(review_session)

    if ratings:
        reviewed_at = utcnow()
        rows = [
            CardReview(
                session_id=review_session.id,
                card_id=entry.card_id,
                rating=Rating(entry.rating).value,
                reviewed_at=reviewed_at,
            )
            for entry in ratings
        ]
        try:
            store.add_card_reviews(rows)
        except SQLAlchemyError as e:
            # Session row is already committed; keep it
            store.rollback()
            logger.error(
                f"Failed to save card reviews for session {review_session.id}: {str(e)}",
                exc_info=e
            )

    previous = store.previous_session(deck_id, exclude_session_id=review_session.id)
    improvement = compute_improvement(review_session, previous)

    logger.info(
        f"Saved review session {review_session.id}: "
        f"{review_session.total_cards} cards, "
        f"{review_session.easy_count} easy, "
        f"{review_session.medium_count} medium, "
        f"{review_session.hard_count} hard, "
        f"{review_session.duration_seconds}s"
    )

    return review_session, improvement
