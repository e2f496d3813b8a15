"""
Review session endpoints.
"""
from fastapi import APIRouter, Depends
from typing import List

from revi.core.security import get_store
from revi.schemas.review import (
    CreateReviewSessionRequest,
    CreateReviewSessionResponse,
    HistoryEntry,
    ReviewSessionResponse,
)
from revi.services.analytics_service import get_history
from revi.services.review_service import record_session
from revi.services.store import StudyStore

router = APIRouter(tags=["reviews"])


@router.post("/review-sessions", response_model=CreateReviewSessionResponse)
async def create_review_session(
    request: CreateReviewSessionRequest,
    store: StudyStore = Depends(get_store)
):
    """
    Record a finished review session.

    This endpoint:
    1. Counts the submitted ratings per level and computes the duration
    2. Saves the session and one review row per rated card
    3. Compares the rating percentages with the previous session for the deck
    """
    review_session, improvement = record_session(
        store,
        deck_id=request.deck_id,
        started_at=request.started_at,
        ended_at=request.ended_at,
        ratings=request.card_ratings,
    )
    return CreateReviewSessionResponse(
        session=ReviewSessionResponse.model_validate(review_session),
        improvement=improvement
    )


@router.get("/history", response_model=List[HistoryEntry])
async def get_review_history(store: StudyStore = Depends(get_store)):
    """All of the user's review sessions with deck names, most recent first."""
    return get_history(store)
