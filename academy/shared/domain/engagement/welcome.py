"""One-time welcome reveal for learners who have just been sorted into a faculty."""

from __future__ import annotations

import logging
from typing import Set

from academy.shared.core import events
from academy.shared.core.errors import AcademyError, Unauthenticated
from academy.shared.core.event_bus import EventBus, EventPayload
from academy.shared.domain.resources.profile import ProfileClient
from academy.shared.domain.session.session_store import SessionStore

logger = logging.getLogger(__name__)


class WelcomeGate:
    """Decides whether the welcome modal is shown.

    Visible iff the session user has a faculty and has not seen the modal.
    Dismissal hides it locally before anything else; that local hide holds
    for the rest of the session even when persisting the flag fails.
    """

    def __init__(
        self,
        event_bus: EventBus,
        session: SessionStore,
        profile: ProfileClient,
    ) -> None:
        self.event_bus = event_bus
        self.session = session
        self.profile = profile
        # User ids dismissed during this session
        self._dismissed: Set[str] = set()
        self._started = False

    async def initialize(self) -> None:
        if self._started:
            return
        await self.event_bus.subscribe(events.TOPIC_SESSION_ENDED, self._handle_session_closed)
        await self.event_bus.subscribe(events.TOPIC_SESSION_EXPIRED, self._handle_session_closed)
        self._started = True

    @property
    def visible(self) -> bool:
        user = self.session.user
        if user is None or user.id in self._dismissed:
            return False
        return user.faculty is not None and not user.has_seen_welcome_modal

    @property
    def faculty(self) -> str:
        user = self.session.user
        return (user.faculty or "") if user else ""

    async def dismiss(self) -> None:
        user = self.session.user
        if user is None or not self.visible:
            return
        self._dismissed.add(user.id)

        try:
            await self.profile.update_profile({"has_seen_welcome_modal": True})
        except Unauthenticated:
            await self.session.expire()
            return
        except AcademyError as e:
            # Stays hidden locally; the server flag may still be unset next session
            logger.warning(f"Could not persist welcome modal flag for {user.id}: {e}")
            return

        await self.session.refresh()

    async def _handle_session_closed(self, payload: EventPayload) -> None:
        self._dismissed.clear()
