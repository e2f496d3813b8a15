"""
Flashcard generation endpoints (raw text and document upload).
"""
from fastapi import APIRouter, Depends, File, Form, UploadFile
from starlette.concurrency import run_in_threadpool
from typing import Optional
import logging

from revi.core.config import settings
from revi.core.exceptions import ValidationError
from revi.core.security import get_current_user
from revi.schemas.account import AuthenticatedUser
from revi.schemas.generation import (
    GenerateFlashcardsRequest,
    GenerateFlashcardsResponse,
    UploadFileResponse,
    UploadMetadata,
)
from revi.services.flashcard_service import flashcard_service
from revi.services.text_extraction_service import SUPPORTED_MEDIA_TYPES, extract_text

logger = logging.getLogger(__name__)

router = APIRouter(tags=["generation"])


def parse_num_cards(value: Optional[str]) -> int:
    """
    Lenient numCards parsing for multipart forms.
    Unparseable values fall back to the default; the result is clamped to the allowed range.
    """
    try:
        num_cards = int(str(value).strip())
    except (TypeError, ValueError):
        return settings.default_num_cards
    if num_cards < 1:
        return settings.default_num_cards
    return min(num_cards, settings.max_num_cards)


def has_sufficient_text(text: Optional[str]) -> bool:
    return bool(text) and len(text.strip()) >= settings.min_text_length


@router.post("/generate-flashcards", response_model=GenerateFlashcardsResponse)
async def generate_flashcards(
    request: GenerateFlashcardsRequest,
    user: AuthenticatedUser = Depends(get_current_user)
):
    """Generate flashcards from raw text with the LLM fallback chain."""
    if not has_sufficient_text(request.text):
        raise ValidationError("Text is too short")

    num_cards = request.num_cards if request.num_cards is not None else settings.default_num_cards
    if num_cards < 1 or num_cards > settings.max_num_cards:
        raise ValidationError(f"numCards must be between 1 and {settings.max_num_cards}")

    logger.info(f"Generating {num_cards} flashcard(s) from text for user {user.id}")
    flashcards = await run_in_threadpool(flashcard_service.generate, request.text, num_cards)
    return GenerateFlashcardsResponse(success=True, flashcards=flashcards)


@router.post("/upload-file", response_model=UploadFileResponse)
async def upload_file(
    file: Optional[UploadFile] = File(None),
    num_cards: Optional[str] = Form(None, alias="numCards"),
    user: AuthenticatedUser = Depends(get_current_user)
):
    """
    Generate flashcards from an uploaded PDF or DOCX document.

    This endpoint:
    1. Validates the file type and size (PDF or DOCX, at most 10 MB)
    2. Extracts the document text
    3. Generates flashcards from the text
    """
    if file is None or not file.filename:
        raise ValidationError("No file uploaded")

    if file.content_type not in SUPPORTED_MEDIA_TYPES:
        raise ValidationError("Only PDF and DOCX files are supported")

    # One byte past the limit is enough to reject the upload
    content = await file.read(settings.max_upload_bytes + 1)
    if len(content) > settings.max_upload_bytes:
        raise ValidationError(
            f"File too large (maximum {settings.max_upload_bytes // (1024 * 1024)}MB)"
        )

    requested_cards = parse_num_cards(num_cards)

    text = await run_in_threadpool(extract_text, content, file.content_type)
    if not has_sufficient_text(text):
        raise ValidationError("Could not extract sufficient text from file")

    logger.info(f"Generating {requested_cards} flashcard(s) from {file.filename} for user {user.id}")
    flashcards = await run_in_threadpool(flashcard_service.generate, text, requested_cards)

    return UploadFileResponse(
        success=True,
        flashcards=flashcards,
        metadata=UploadMetadata(filename=file.filename, total_cards=len(flashcards))
    )
