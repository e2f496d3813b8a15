"""
Analytics endpoints.
"""
from fastapi import APIRouter, Depends
from datetime import date
from typing import Optional
import uuid

from revi.core.exceptions import ValidationError
from revi.core.security import get_store
from revi.schemas.analytics import (
    ActivityResponse,
    DashboardResponse,
    DeckPerformanceResponse,
    OverviewResponse,
)
from revi.services import analytics_service
from revi.services.store import StudyStore

router = APIRouter(prefix="/analytics", tags=["analytics"])


@router.get("/overview", response_model=OverviewResponse)
async def get_overview(store: StudyStore = Depends(get_store)):
    """Profile summary: totals, raw rating counts, study time, streak and session timestamps."""
    return analytics_service.get_overview(store)


@router.get("/dashboard", response_model=DashboardResponse)
async def get_dashboard(store: StudyStore = Depends(get_store)):
    """Dashboard summary: totals, rating percentages and per-deck mastery."""
    return analytics_service.get_dashboard(store)


@router.get("/activity", response_model=ActivityResponse)
async def get_activity(
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    store: StudyStore = Depends(get_store)
):
    """Per-day study activity between two optional dates (inclusive)."""
    if start_date and end_date and start_date > end_date:
        raise ValidationError("start_date must not be after end_date")
    return analytics_service.get_activity(store, start_date=start_date, end_date=end_date)


@router.get("/decks/{deck_id}", response_model=DeckPerformanceResponse)
async def get_deck_performance(
    deck_id: uuid.UUID,
    store: StudyStore = Depends(get_store)
):
    """Session count, rating percentages and mastery for one deck."""
    return analytics_service.get_deck_performance(store, deck_id)
