"""
Analytics schemas.

Aggregate payloads are serialized with camelCase keys.
"""
from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel
from typing import List, Optional
from datetime import date, datetime
import uuid

from revi.schemas.review import RatingBreakdown


class CamelModel(BaseModel):
    class Config:
        alias_generator = to_camel
        populate_by_name = True


class OverviewResponse(CamelModel):
    """Profile summary. overall_ratings are raw counts."""
    total_decks: int = Field(0, description="Number of decks owned by the user")
    total_cards: int = Field(0, description="Cards across all of the user's decks")
    total_sessions: int = Field(0, description="Completed review sessions")
    total_study_minutes: int = Field(0, description="Sum of session durations, in minutes (rounded)")
    overall_ratings: RatingBreakdown = Field(default_factory=RatingBreakdown)
    first_session_at: Optional[datetime] = None
    last_session_at: Optional[datetime] = None
    study_streak: int = Field(0, description="Consecutive days with at least one session, ending today")


class DeckMastery(BaseModel):
    """Rolling mastery for one deck."""
    deck_id: uuid.UUID
    deck_name: str
    mastery: int = Field(0, description="Average easy percentage over the last three sessions")


class DashboardResponse(CamelModel):
    """Dashboard summary. overall_ratings are percentages."""
    total_decks: int = 0
    total_cards: int = 0
    total_attempts: int = 0
    total_study_time: int = Field(0, description="Sum of session durations, in seconds")
    deck_mastery: List[DeckMastery] = Field(default_factory=list)
    overall_ratings: RatingBreakdown = Field(default_factory=RatingBreakdown)


class ActivityDay(CamelModel):
    """Study activity aggregated over one calendar day (UTC)."""
    date: date
    sessions: int = 0
    cards_studied: int = 0
    easy: int = 0
    medium: int = 0
    hard: int = 0
    study_seconds: int = 0


class ActivityResponse(CamelModel):
    """Per-day activity in ascending date order."""
    days: List[ActivityDay] = Field(default_factory=list)


class DeckPerformanceResponse(CamelModel):
    """Aggregate performance for a single deck."""
    deck_id: uuid.UUID
    deck_name: str
    total_sessions: int = 0
    total_cards_reviewed: int = 0
    mastery: int = 0
    ratings: RatingBreakdown = Field(default_factory=RatingBreakdown)
