"""
Review session model.
"""
from sqlmodel import SQLModel, Field, Relationship
from typing import Optional, List, TYPE_CHECKING
from datetime import datetime
import uuid

if TYPE_CHECKING:
    from revi.models.deck import Deck
    from revi.models.card_review import CardReview


class ReviewSession(SQLModel, table=True):
    """
    ReviewSession table - one completed study pass over a deck.

    Written once when the session finishes and never updated afterwards.
    easy_count + medium_count + hard_count == total_cards.
    """
    __tablename__ = "review_sessions"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    deck_id: uuid.UUID = Field(foreign_key="decks.id", index=True)
    user_id: str = Field(index=True)
    started_at: Optional[datetime] = Field(default=None, index=True)
    ended_at: Optional[datetime] = None
    duration_seconds: int = Field(default=0)
    total_cards: int = Field(default=0)  # Number of ratings submitted, not the deck size
    easy_count: int = Field(default=0)
    medium_count: int = Field(default=0)
    hard_count: int = Field(default=0)

    # Relationships
    deck: "Deck" = Relationship(back_populates="review_sessions")
    card_reviews: List["CardReview"] = Relationship(back_populates="session")
