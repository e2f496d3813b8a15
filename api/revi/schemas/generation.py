"""
Flashcard generation schemas.
"""
from pydantic import BaseModel, Field
from typing import List, Optional


class Flashcard(BaseModel):
    """A generated question/answer pair (not yet stored)."""
    question: str
    answer: str


class GenerateFlashcardsRequest(BaseModel):
    """Request to generate flashcards from raw text."""
    text: Optional[str] = Field(None, description="Source text (at least 50 characters)")
    num_cards: Optional[int] = Field(None, alias="numCards", description="Number of cards to generate (1-50, default 10)")

    class Config:
        populate_by_name = True
        json_schema_extra = {
            "example": {
                "text": "Mitochondria are membrane-bound organelles that generate most of the chemical energy...",
                "numCards": 5
            }
        }


class GenerateFlashcardsResponse(BaseModel):
    """Generated flashcards."""
    success: bool = True
    flashcards: List[Flashcard]


class UploadMetadata(BaseModel):
    filename: str
    total_cards: int = Field(..., alias="totalCards")

    class Config:
        populate_by_name = True


class UploadFileResponse(BaseModel):
    """Flashcards generated from an uploaded document."""
    success: bool = True
    flashcards: List[Flashcard]
    metadata: UploadMetadata
