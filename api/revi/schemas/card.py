"""
Card schemas.
"""
from pydantic import AliasChoices, BaseModel, Field
from typing import Optional
from datetime import datetime
import uuid


class CreateCardRequest(BaseModel):
    """Request schema for adding a card to a deck. Accepts deck_id or deckId."""
    deck_id: Optional[uuid.UUID] = Field(
        None,
        validation_alias=AliasChoices("deck_id", "deckId"),
        description="Deck the card belongs to"
    )
    question: Optional[str] = Field(None, description="Question (front side)")
    answer: Optional[str] = Field(None, description="Answer (back side)")


class UpdateCardRequest(BaseModel):
    """Request schema for editing a card."""
    question: Optional[str] = Field(None, description="New question text")
    answer: Optional[str] = Field(None, description="New answer text")


class CardResponse(BaseModel):
    """Card response schema."""
    id: uuid.UUID
    deck_id: uuid.UUID
    user_id: str
    question: str
    answer: str
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class CardEnvelope(BaseModel):
    """Single card wrapper."""
    card: CardResponse
