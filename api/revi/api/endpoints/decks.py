"""
Deck endpoints.
"""
from fastapi import APIRouter, Depends
from typing import Optional
import logging
import uuid

from revi.core.exceptions import ValidationError
from revi.core.security import get_store
from revi.schemas.card import CardResponse
from revi.schemas.deck import (
    BulkDeleteDecksRequest,
    CreateDeckRequest,
    DeckDetailResponse,
    DeckEnvelope,
    DeckResponse,
    DecksResponse,
    DeleteResponse,
)
from revi.services.store import StudyStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/decks", tags=["decks"])


@router.get("", response_model=DecksResponse)
async def get_decks(store: StudyStore = Depends(get_store)):
    """Get the user's decks. Sorted by created_at descending (most recent first)."""
    decks = store.list_decks()
    return DecksResponse(decks=[DeckResponse.model_validate(deck) for deck in decks])


@router.post("", response_model=DeckEnvelope)
async def create_deck(
    request: CreateDeckRequest,
    store: StudyStore = Depends(get_store)
):
    """Create a new deck. The name is required and must not be blank."""
    deck = store.create_deck(request.name, request.description)
    return DeckEnvelope(deck=DeckResponse.model_validate(deck))


@router.get("/{deck_id}", response_model=DeckDetailResponse)
async def get_deck(
    deck_id: uuid.UUID,
    store: StudyStore = Depends(get_store)
):
    """Get a single deck with its cards (oldest card first)."""
    deck = store.get_deck(deck_id)
    cards = store.list_cards(deck.id)
    return DeckDetailResponse(
        deck=DeckResponse.model_validate(deck),
        cards=[CardResponse.model_validate(card) for card in cards]
    )


@router.delete("/{deck_id}", response_model=DeleteResponse, response_model_exclude_none=True)
async def delete_deck(
    deck_id: uuid.UUID,
    store: StudyStore = Depends(get_store)
):
    """
    Delete a deck.

    Card reviews and review sessions of the deck are deleted together with
    its cards and the deck itself.
    """
    store.delete_deck(deck_id)
    return DeleteResponse(success=True)


@router.delete("", response_model=DeleteResponse)
async def bulk_delete_decks(
    request: Optional[BulkDeleteDecksRequest] = None,
    store: StudyStore = Depends(get_store)
):
    """Delete several decks at once. Ids the user does not own are ignored."""
    if request is None or not request.deck_ids:
        raise ValidationError("deckIds must be a non-empty list")

    deleted = store.delete_decks(request.deck_ids)
    return DeleteResponse(success=True, deleted=deleted)
