"""
Deck schemas.
"""
from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import datetime
import uuid

from revi.schemas.card import CardResponse


class CreateDeckRequest(BaseModel):
    """Request schema for creating a deck."""
    name: Optional[str] = Field(None, max_length=200, description="Deck name (required, non-empty)")
    description: Optional[str] = Field(None, description="Optional deck description")

    class Config:
        json_schema_extra = {
            "example": {
                "name": "Biology",
                "description": "Cell structure and function"
            }
        }


class DeckResponse(BaseModel):
    """Deck response schema."""
    id: uuid.UUID
    user_id: str
    name: str
    description: str = ""
    created_at: datetime

    class Config:
        from_attributes = True


class DeckEnvelope(BaseModel):
    """Single deck wrapper returned by the create endpoint."""
    deck: DeckResponse


class DecksResponse(BaseModel):
    """Response schema for the deck list."""
    decks: List[DeckResponse]


class DeckDetailResponse(BaseModel):
    """A deck together with its cards (oldest first)."""
    deck: DeckResponse
    cards: List[CardResponse]


class BulkDeleteDecksRequest(BaseModel):
    """Request schema for deleting several decks at once."""
    deck_ids: Optional[List[uuid.UUID]] = Field(None, alias="deckIds", description="IDs of the decks to delete")

    class Config:
        populate_by_name = True


class DeleteResponse(BaseModel):
    """Response for delete operations."""
    success: bool = True
    deleted: Optional[int] = Field(None, description="Number of decks removed (bulk delete only)")
