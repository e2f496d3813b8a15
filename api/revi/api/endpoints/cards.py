"""
Card endpoints.
"""
from fastapi import APIRouter, Depends
import uuid

from revi.core.security import get_store
from revi.schemas.card import CardEnvelope, CardResponse, CreateCardRequest, UpdateCardRequest
from revi.schemas.deck import DeleteResponse
from revi.services.store import StudyStore

router = APIRouter(prefix="/cards", tags=["cards"])


@router.post("", response_model=CardEnvelope)
async def create_card(
    request: CreateCardRequest,
    store: StudyStore = Depends(get_store)
):
    """Add a card to one of the user's decks."""
    card = store.create_card(request.deck_id, request.question, request.answer)
    return CardEnvelope(card=CardResponse.model_validate(card))


@router.put("/{card_id}", response_model=CardEnvelope)
async def update_card(
    card_id: uuid.UUID,
    request: UpdateCardRequest,
    store: StudyStore = Depends(get_store)
):
    """Update a card's question and/or answer. Only the owner's card is matched."""
    card = store.update_card(card_id, request.question, request.answer)
    return CardEnvelope(card=CardResponse.model_validate(card))


@router.delete("/{card_id}", response_model=DeleteResponse, response_model_exclude_none=True)
async def delete_card(
    card_id: uuid.UUID,
    store: StudyStore = Depends(get_store)
):
    """Delete a card."""
    store.delete_card(card_id)
    return DeleteResponse(success=True)
