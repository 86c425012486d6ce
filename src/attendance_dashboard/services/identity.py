from __future__ import annotations

import logging
import threading
from abc import ABC, abstractmethod
from typing import Callable, Optional

from attendance_dashboard.logging_setup import mask_token
from attendance_dashboard.models import Identity, UserProfile
from attendance_dashboard.services.api_client import ApiClient, ApiError, RemoteError

logger = logging.getLogger(__name__)

IdentityListener = Callable[[Optional[UserProfile], Optional[str]], None]


class MissingIdentityError(RuntimeError):
    """Raised when the signed-in user carries no student id."""


def resolve_identity(user: UserProfile | None) -> Identity | None:
    """Derive the student identity from the provider's user object.

    ``None`` means there is nothing to resolve yet; a user without a student id
    is a terminal error until the provider supplies better data.
    """
    if user is None:
        return None
    if user.student_id is None:
        raise MissingIdentityError(f"User {user.id} has no student id.")
    return Identity(int(user.student_id))


class IdentityProvider(ABC):
    """Source of the signed-in user, the bearer credential, and the API base URL."""

    @property
    @abstractmethod
    def user(self) -> UserProfile | None:
        ...

    @property
    @abstractmethod
    def credential(self) -> str | None:
        ...

    @property
    @abstractmethod
    def base_url(self) -> str:
        ...

    @property
    @abstractmethod
    def is_ready(self) -> bool:
        """True once the first resolution of the user has finished."""

    @abstractmethod
    def refresh(self) -> UserProfile | None:
        ...

    @abstractmethod
    def subscribe(self, listener: IdentityListener) -> Callable[[], None]:
        """Register a listener called with ``(user, credential)`` after every change."""


class ApiIdentityProvider(IdentityProvider):
    """Resolves the current user by calling ``/api/auth/me`` with a stored token."""

    def __init__(self, client: ApiClient, token: str | None = None) -> None:
        self._client = client
        self._token = token
        self._user: UserProfile | None = None
        self._ready = threading.Event()
        self._lock = threading.Lock()
        self._listeners: list[IdentityListener] = []

    @property
    def user(self) -> UserProfile | None:
        return self._user

    @property
    def credential(self) -> str | None:
        return self._token

    @property
    def base_url(self) -> str:
        return self._client.base_url

    @property
    def is_ready(self) -> bool:
        return self._ready.is_set()

    def subscribe(self, listener: IdentityListener) -> Callable[[], None]:
        with self._lock:
            self._listeners.append(listener)

        def _unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return _unsubscribe

    def refresh(self) -> UserProfile | None:
        """Resolve the user for the stored token.

        Readiness is signalled and listeners are notified even when the lookup
        fails, so pages gated on the provider never wait forever.
        """
        token = self._token
        user: UserProfile | None = None

        try:
            if token:
                logger.debug("Refreshing user with token %s", mask_token(token))
                try:
                    payload = self._client.fetch_current_user(token)
                    user = UserProfile.from_payload(payload)
                except (KeyError, TypeError, ValueError) as exc:
                    logger.warning("Malformed /api/auth/me payload: %s", exc)
                except RemoteError as exc:
                    logger.warning("Token validation failed with status %s; dropping credential", exc.status)
                    token = None
                except ApiError as exc:
                    logger.warning("Could not refresh user: %s", exc)
        finally:
            with self._lock:
                self._token = token
                self._user = user
                listeners = list(self._listeners)
            self._ready.set()

            logger.info("Identity refreshed: user=%s", user.id if user else None)
            for listener in listeners:
                listener(user, token)
        return user
