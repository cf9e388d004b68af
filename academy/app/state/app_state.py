"""Application Shell State Management.

Holds the shell-level state a presentation layer renders around the
screens: the current route, pending notices and readiness.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from academy.shared.core import events
from academy.shared.core.event_bus import EventBus, EventPayload

logger = logging.getLogger(__name__)


class AppState:
    """State for the Application Shell.

    Subscribes to EventBus topics and keeps plain attributes up to date; the
    presentation layer re-renders from them.
    """

    def __init__(self, event_bus: EventBus) -> None:
        """Initialize application state.

        Args:
            event_bus: The shared event bus for cross-cutting concerns
        """
        self.bus = event_bus

        # Navigation State
        self.route: str = events.ROUTE_LOGIN

        # Status & Readiness
        self.is_ready: bool = False

        # One-shot notices waiting to be shown (each is {action, message, level, ts})
        self.notices: List[Dict[str, Any]] = []

        self._started = False

    async def initialize(self) -> None:
        """Bind to EventBus events. Safe to call more than once."""
        if self._started:
            return

        await self.bus.subscribe(events.TOPIC_NOTICE, self._handle_notice)
        await self.bus.subscribe(events.TOPIC_NAV_SELECT, self._handle_nav_select)
        await self.bus.subscribe(events.TOPIC_SESSION_STARTED, self._handle_session_started)
        await self.bus.subscribe(events.TOPIC_SESSION_REFRESHED, self._handle_session_started)
        await self.bus.subscribe(events.TOPIC_SESSION_ENDED, self._handle_session_closed)
        await self.bus.subscribe(events.TOPIC_SESSION_EXPIRED, self._handle_session_closed)

        self._started = True
        self.is_ready = True

    # --- Public Actions ---

    def set_nav(self, route_id: str) -> None:
        """Change the selected route."""
        self.route = route_id

    async def navigate(self, route_id: str) -> None:
        await self.bus.publish(events.TOPIC_NAV_SELECT, events.create_nav_select_event(route_id))

    def pop_notice(self) -> Optional[Dict[str, Any]]:
        """Take the oldest pending notice, if any."""
        return self.notices.pop(0) if self.notices else None

    # --- Event Handlers ---

    async def _handle_notice(self, payload: EventPayload) -> None:
        if payload.get("message"):
            self.notices.append(payload)

    async def _handle_nav_select(self, payload: EventPayload) -> None:
        selection = payload.get("id")
        if selection:
            self.route = str(selection)

    async def _handle_session_started(self, payload: EventPayload) -> None:
        if self.route == events.ROUTE_LOGIN:
            self.route = events.ROUTE_HOME

    async def _handle_session_closed(self, payload: EventPayload) -> None:
        logger.info(f"Session closed ({payload.get('reason')}), routing to login")
        self.route = events.ROUTE_LOGIN
