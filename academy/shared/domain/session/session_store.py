"""Session Store: authenticated identity and the lifecycle of the bearer token."""

from __future__ import annotations

import logging
from typing import Optional

from academy.shared.core import events
from academy.shared.core.errors import (
    AcademyError,
    NetworkUnavailable,
    RequestFailed,
    Unauthenticated,
)
from academy.shared.core.event_bus import EventBus
from academy.shared.domain.models import Session, User
from academy.shared.domain.resources.auth import AuthClient
from academy.shared.infrastructure.persistence.token_storage import CredentialProvider

logger = logging.getLogger(__name__)


class SessionStore:
    """Owns the Session for the lifetime of an authenticated browsing session.

    The credential provider is the only state shared with the resource
    clients; this class is the only writer.
    """

    def __init__(
        self,
        event_bus: EventBus,
        auth_client: AuthClient,
        credentials: CredentialProvider,
    ) -> None:
        self.event_bus = event_bus
        self.auth = auth_client
        self.credentials = credentials
        self._session: Optional[Session] = None

    # --- Read access ---

    @property
    def session(self) -> Optional[Session]:
        return self._session

    @property
    def user(self) -> Optional[User]:
        return self._session.user if self._session else None

    @property
    def is_authenticated(self) -> bool:
        return self._session is not None

    # --- Lifecycle ---

    async def login(self, email: str, password: str) -> Session:
        """Authenticate and persist the token.

        Raises:
            InvalidCredentials: The server rejected the credentials
            NetworkUnavailable: The server could not be reached
        """
        user, token = await self.auth.login(email, password)
        self.credentials.set_token(token)
        self._session = Session(user=user, token=token)
        logger.info(f"Logged in as {user.email}")
        await self.event_bus.publish(
            events.TOPIC_SESSION_STARTED,
            events.create_session_event(user.id, "login"),
        )
        return self._session

    async def logout(self) -> None:
        """Drop the token locally first, then tell the server if we can."""
        token = self.credentials.get_token()
        user_id = self._session.user_id if self._session else None
        self.credentials.clear()
        self._session = None

        if token:
            try:
                await self.auth.logout(token)
            except AcademyError as e:
                logger.debug(f"Ignoring logout notification failure: {e}")

        logger.info("Logged out")
        await self.event_bus.publish(
            events.TOPIC_SESSION_ENDED,
            events.create_session_event(user_id, "logout"),
        )

    async def current_user(self) -> Session:
        """Fetch the user behind the persisted token.

        Raises:
            Unauthenticated: No token, or the server rejected it (token cleared)
            NetworkUnavailable: The server could not be reached (token kept)
            RequestFailed: The user payload could not be read (token kept)
        """
        token = self.credentials.get_token()
        if not token:
            self._session = None
            raise Unauthenticated()

        try:
            user = await self.auth.me()
        except Unauthenticated:
            await self.expire("rejected")
            raise
        except NetworkUnavailable:
            self._session = None
            raise
        except RequestFailed:
            # Unreadable user payload; the token stays
            self._session = None
            raise

        self._session = Session(user=user, token=token)
        await self.event_bus.publish(
            events.TOPIC_SESSION_REFRESHED,
            events.create_session_event(user.id, "refresh"),
        )
        return self._session

    async def restore(self) -> Optional[Session]:
        """Start-up check; never raises."""
        try:
            return await self.current_user()
        except AcademyError as e:
            logger.info(f"No session restored: {e}")
            return None

    async def refresh(self) -> Optional[Session]:
        """Re-read the user after a mutation that changed Session fields."""
        return await self.restore()

    async def expire(self, reason: str = "unauthenticated") -> None:
        """Tear down after any ``Unauthenticated``; the shell routes to login."""
        if self._session is None and not self.credentials.get_token():
            # Already torn down by a concurrent call
            return
        user_id = self._session.user_id if self._session else None
        self.credentials.clear()
        self._session = None
        logger.warning(f"Session expired ({reason})")
        await self.event_bus.publish(
            events.TOPIC_SESSION_EXPIRED,
            events.create_session_event(user_id, reason),
        )
