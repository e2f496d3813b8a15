"""
Card review model.
"""
from sqlmodel import SQLModel, Field, Relationship
from typing import Optional, TYPE_CHECKING
from datetime import datetime
import uuid

from revi.utils.time_utils import utcnow

if TYPE_CHECKING:
    from revi.models.review_session import ReviewSession


class CardReview(SQLModel, table=True):
    """
    CardReview table - one rating given to one card within a session.

    There is no user_id column: ownership is resolved through the session.
    card_id is not a foreign key: deleting a card keeps its rating history.
    """
    __tablename__ = "card_reviews"

    id: Optional[int] = Field(default=None, primary_key=True)
    session_id: uuid.UUID = Field(foreign_key="review_sessions.id", index=True)
    card_id: uuid.UUID = Field(index=True)
    rating: str = Field(max_length=10)  # Rating value: 'easy', 'medium' or 'hard'
    reviewed_at: datetime = Field(default_factory=utcnow)

    # Relationships
    session: "ReviewSession" = Relationship(back_populates="card_reviews")
