"""
Card model.
"""
from sqlmodel import SQLModel, Field, Relationship
from typing import TYPE_CHECKING
from datetime import datetime
import uuid

from revi.utils.time_utils import utcnow

if TYPE_CHECKING:
    from revi.models.deck import Deck


class Card(SQLModel, table=True):
    """Card table - a single question/answer pair belonging to a deck."""
    __tablename__ = "cards"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    deck_id: uuid.UUID = Field(foreign_key="decks.id", index=True)
    user_id: str = Field(index=True)
    question: str
    answer: str
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    # Relationships
    deck: "Deck" = Relationship(back_populates="cards")
