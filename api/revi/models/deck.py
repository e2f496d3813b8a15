"""
Deck model.
"""
from sqlmodel import SQLModel, Field, Relationship
from typing import List, TYPE_CHECKING
from datetime import datetime
import uuid

from revi.utils.time_utils import utcnow

if TYPE_CHECKING:
    from revi.models.card import Card
    from revi.models.review_session import ReviewSession


class Deck(SQLModel, table=True):
    """Deck table - a named collection of cards owned by one user."""
    __tablename__ = "decks"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    user_id: str = Field(index=True)  # Identity issued by the auth provider
    name: str
    description: str = Field(default="")
    created_at: datetime = Field(default_factory=utcnow)

    # Relationships
    cards: List["Card"] = Relationship(back_populates="deck")
    review_sessions: List["ReviewSession"] = Relationship(back_populates="deck")
