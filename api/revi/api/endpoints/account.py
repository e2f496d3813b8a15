"""
Account endpoints.
"""
from fastapi import APIRouter, Depends
from starlette.concurrency import run_in_threadpool
from typing import Optional
import logging

from revi.core.exceptions import ValidationError
from revi.core.security import get_current_user, get_store
from revi.schemas.account import AuthenticatedUser, DeleteAccountRequest
from revi.services.auth_service import auth_client
from revi.services.store import StudyStore

logger = logging.getLogger(__name__)

router = APIRouter(tags=["account"])

DELETE_CONFIRMATION = "DELETE"


@router.delete("/account")
async def delete_account(
    request: Optional[DeleteAccountRequest] = None,
    user: AuthenticatedUser = Depends(get_current_user),
    store: StudyStore = Depends(get_store)
):
    """
    Permanently delete the current user.

    The request body must carry confirmText == "DELETE" (case-sensitive).
    The identity is removed at the auth provider first; only then are the
    user's decks, cards and review sessions deleted.
    """
    confirm_text = request.confirm_text if request else None
    if confirm_text != DELETE_CONFIRMATION:
        raise ValidationError('Confirmation text must be "DELETE"')

    await run_in_threadpool(auth_client.delete_user, user.id)
    counts = store.delete_all_user_data()

    logger.info(f"Deleted account {user.id}: {counts}")
    return {"success": True}
