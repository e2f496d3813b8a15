"""
Authentication gate and per-request store factory.
"""
import logging
from typing import Optional

from fastapi import Depends, Request
from sqlmodel import Session

from revi.core.database import get_session
from revi.core.exceptions import AuthenticationError
from revi.schemas.account import AuthenticatedUser
from revi.services.auth_service import auth_client
from revi.services.store import StudyStore

logger = logging.getLogger(__name__)

BEARER_PREFIX = "Bearer "


def extract_bearer_token(authorization: Optional[str]) -> str:
    """
    Return the token from an Authorization header value.

    Raises:
        AuthenticationError: If the header is missing, not prefixed with
                             "Bearer ", or carries an empty token
    """
    if not authorization or not authorization.startswith(BEARER_PREFIX):
        raise AuthenticationError("No authorization token provided")
    token = authorization[len(BEARER_PREFIX):].strip()
    if not token:
        raise AuthenticationError("No authorization token provided")
    return token


def get_current_user(request: Request) -> AuthenticatedUser:
    """
    Dependency that authenticates the request.

    A plain function, so FastAPI runs the blocking provider call in its
    threadpool.

    Resolves the bearer token through the auth provider and attaches the user
    to request.state.user. Any failure while resolving is reported as an
    authentication failure.
    """
    token = extract_bearer_token(request.headers.get("Authorization"))

    try:
        user = auth_client.get_user(token)
    except Exception as e:
        logger.error(f"Auth provider error on {request.method} {request.url.path}: {str(e)}")
        raise AuthenticationError("Authentication failed") from e

    if user is None:
        logger.warning(f"Rejected token on {request.method} {request.url.path} (length {len(token)})")
        raise AuthenticationError("Invalid or expired token")

    request.state.user = user
    return user


def get_store(
    user: AuthenticatedUser = Depends(get_current_user),
    session: Session = Depends(get_session)
) -> StudyStore:
    """Build a store handle bound to the authenticated user for this request only."""
    return StudyStore(session, user.id)
