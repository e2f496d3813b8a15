"""
Review session schemas.
"""
from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import datetime
import uuid

from revi.models.enums import Rating


class CardRatingData(BaseModel):
    """One rated card within a finished session."""
    card_id: uuid.UUID = Field(..., description="Card that was rated")
    rating: Rating = Field(..., description="Rating: 'easy', 'medium' or 'hard'")


class CreateReviewSessionRequest(BaseModel):
    """Request to record a finished review session."""
    deck_id: Optional[uuid.UUID] = Field(None, description="Deck that was reviewed (required)")
    started_at: Optional[datetime] = Field(None, description="Session start time (ISO-8601)")
    ended_at: Optional[datetime] = Field(None, description="Session end time (ISO-8601)")
    card_ratings: Optional[List[CardRatingData]] = Field(None, description="Ratings given during the session")

    class Config:
        json_schema_extra = {
            "example": {
                "deck_id": "6f1c2a9e-4b2d-4b8a-9d43-6a1f1f0e8a11",
                "started_at": "2024-01-01T10:00:00Z",
                "ended_at": "2024-01-01T10:04:30Z",
                "card_ratings": [
                    {"card_id": "0b6a0f7e-2d1e-4c55-8f8f-1f0f6f1b2c33", "rating": "easy"},
                    {"card_id": "9a3c5d1e-7b2f-4e6a-8c4d-2e5f6a7b8c99", "rating": "hard"}
                ]
            }
        }


class ReviewSessionResponse(BaseModel):
    """Stored review session."""
    id: uuid.UUID
    deck_id: uuid.UUID
    user_id: str
    started_at: Optional[datetime] = None
    ended_at: Optional[datetime] = None
    duration_seconds: int
    total_cards: int
    easy_count: int
    medium_count: int
    hard_count: int

    class Config:
        from_attributes = True


class RatingBreakdown(BaseModel):
    """Per-level rating values (percentages or counts depending on context)."""
    easy: int = 0
    medium: int = 0
    hard: int = 0


class ImprovementResponse(BaseModel):
    """
    Rating percentages of this session compared with the previous one for the same deck.
    previous and change are null for the first session of a deck.
    """
    current: RatingBreakdown
    previous: Optional[RatingBreakdown] = None
    change: Optional[RatingBreakdown] = None


class CreateReviewSessionResponse(BaseModel):
    """Response from recording a review session."""
    session: ReviewSessionResponse
    improvement: ImprovementResponse


class HistoryEntry(ReviewSessionResponse):
    """Review session joined with its deck name."""
    deck_name: Optional[str] = None
