"""
Client for the external auth provider.

Token resolution uses the public (anon) key together with the user's bearer
token. Deleting a user requires the service-role key and is only used by the
account endpoint.
"""
import logging
from typing import Optional

import requests

from revi.core.config import settings
from revi.core.exceptions import UpstreamError
from revi.schemas.account import AuthenticatedUser

logger = logging.getLogger(__name__)


class AuthProviderClient:
    """Thin wrapper around the provider's REST auth API."""

    def __init__(self):
        self.base_url = settings.auth_url.rstrip("/")
        self.anon_key = settings.auth_anon_key
        self.service_role_key = settings.auth_service_role_key
        self.timeout = settings.auth_timeout_seconds

        if not self.base_url:
            logger.warning("Auth provider URL not configured. All protected requests will be rejected.")

    def get_user(self, token: str) -> Optional[AuthenticatedUser]:
        """
        Resolve a bearer token to a user.

        Returns:
            The user, or None if the provider rejects the token

        Raises:
            UpstreamError: If the provider cannot be reached or answers unexpectedly
        """
        if not self.base_url:
            raise UpstreamError("Auth provider not configured")

        try:
            response = requests.get(
                f"{self.base_url}/auth/v1/user",
                headers={
                    "apikey": self.anon_key,
                    "Authorization": f"Bearer {token}",
                },
                timeout=self.timeout
            )
        except requests.exceptions.RequestException as e:
            raise UpstreamError(f"Auth provider request failed: {str(e)}") from e

        if response.status_code in (401, 403):
            return None
        if not response.ok:
            raise UpstreamError(f"Auth provider returned status {response.status_code}")

        data = response.json()
        if not data or not data.get("id"):
            return None
        return AuthenticatedUser(id=str(data["id"]), email=data.get("email"))

    def delete_user(self, user_id: str) -> None:
        """
        Delete a user identity through the provider's admin API.

        Raises:
            UpstreamError: If the provider is not configured or the deletion fails
        """
        if not self.base_url or not self.service_role_key:
            raise UpstreamError("Auth provider admin access not configured")

        try:
            response = requests.delete(
                f"{self.base_url}/auth/v1/admin/users/{user_id}",
                headers={
                    "apikey": self.service_role_key,
                    "Authorization": f"Bearer {self.service_role_key}",
                },
                timeout=self.timeout
            )
        except requests.exceptions.RequestException as e:
            raise UpstreamError(f"Auth provider request failed: {str(e)}") from e

        if not response.ok:
            message = f"Failed to delete user: status {response.status_code}"
            try:
                error_data = response.json()
                message = error_data.get("msg") or error_data.get("message") or message
            except ValueError:
                pass
            logger.error(f"Delete user {user_id} failed: {message}")
            raise UpstreamError(message)

        logger.info(f"Deleted auth identity for user {user_id}")


auth_client = AuthProviderClient()
