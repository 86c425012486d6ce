from __future__ import annotations

import logging

from attendance_dashboard.models import UserProfile
from attendance_dashboard.services.api_client import ApiClient, DecodeError
from attendance_dashboard.services.identity import IdentityProvider

logger = logging.getLogger(__name__)


class NotAuthenticatedError(RuntimeError):
    """Raised when a profile update is attempted without a credential."""


class ProfileService:
    """Updates the signed-in user's editable profile fields."""

    def __init__(self, client: ApiClient, provider: IdentityProvider) -> None:
        self._client = client
        self._provider = provider

    def update_profile(self, first_name: str, last_name: str) -> UserProfile | None:
        token = self._provider.credential
        if not token:
            raise NotAuthenticatedError("No credential available for profile update.")

        first_name = first_name.strip()
        last_name = last_name.strip()
        if not first_name or not last_name:
            raise ValueError("First and last name are required.")

        payload = self._client.update_current_user(token, first_name=first_name, last_name=last_name)
        try:
            updated = UserProfile.from_payload(payload)
        except (KeyError, TypeError, ValueError) as exc:
            raise DecodeError(f"Malformed profile response: {exc}") from exc
        logger.info("Profile updated for user %s", updated.id)

        return self._provider.refresh() or updated
