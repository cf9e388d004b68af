"""Base class for per-screen engagement state."""

from __future__ import annotations

import logging
from typing import Awaitable, Callable, Hashable, Optional, TypeVar

from academy.shared.core import events
from academy.shared.core.errors import AcademyError, Unauthenticated
from academy.shared.core.event_bus import EventBus
from academy.shared.domain.session.session_store import SessionStore

from .optimistic import OptimisticMutation, PendingGuard, run_optimistic

logger = logging.getLogger(__name__)

R = TypeVar("R")


class ScreenState:
    """State owned by one screen while it is on display.

    Screens never raise client failures to the presentation layer:
    mutations report once through a ``notice.show`` event and reads fall back
    to an empty/neutral state. ``Unauthenticated`` anywhere ends the session.

    A screen that has been closed ignores late responses, and each ``load``
    supersedes responses of the loads before it.
    """

    def __init__(self, event_bus: EventBus, session: SessionStore) -> None:
        self.event_bus = event_bus
        self.session = session
        self.guard = PendingGuard()
        self.loading = False
        self.loaded = False
        self._closed = False
        self._generation = 0

    # --- Lifecycle ---

    @property
    def closed(self) -> bool:
        return self._closed

    def close(self) -> None:
        """Tear down; in-flight calls may still finish but change nothing."""
        self._closed = True

    def is_busy(self, key: Hashable) -> bool:
        """True while the control identified by ``key`` should be disabled."""
        return self.guard.is_busy(key)

    def _begin_load(self) -> int:
        self._generation += 1
        self.loading = True
        return self._generation

    def _is_current(self, generation: int) -> bool:
        return not self._closed and generation == self._generation

    def _finish_load(self, generation: int) -> None:
        if generation == self._generation:
            self.loading = False
            self.loaded = True

    # --- Failure reporting ---

    async def _report_failure(self, action: str, error: AcademyError, notify: bool = True) -> None:
        if isinstance(error, Unauthenticated):
            await self.session.expire()
            return

        logger.warning(f"{action} failed: {error}")
        if notify and not self._closed:
            await self.event_bus.publish(
                events.TOPIC_NOTICE,
                events.create_notice_event(action, error.message),
            )

    async def _notify(self, action: str, message: str, level: str = "warning") -> None:
        if not self._closed:
            await self.event_bus.publish(
                events.TOPIC_NOTICE,
                events.create_notice_event(action, message, level),  # type: ignore[arg-type]
            )

    async def _read(self, action: str, call: Callable[[], Awaitable[R]], default: R) -> R:
        """Run a read; on failure log it and hand back ``default``."""
        try:
            return await call()
        except AcademyError as e:
            await self._report_failure(action, e, notify=False)
            return default

    # --- Mutations ---

    async def _guarded(
        self,
        key: Hashable,
        action: str,
        call: Callable[[], Awaitable[R]],
    ) -> Optional[R]:
        """Run a non-optimistic mutation with its control disabled.

        Returns the call's result, or None when the control was busy or the
        call failed.
        """
        if not self.guard.acquire(key):
            logger.debug(f"{action}: ignored, already in flight")
            return None
        try:
            return await call()
        except AcademyError as e:
            await self._report_failure(action, e)
            return None
        finally:
            self.guard.release(key)

    async def _optimistic(
        self,
        key: Hashable,
        action: str,
        mutation: OptimisticMutation[R],
    ) -> bool:
        """Run an optimistic toggle with its control disabled.

        Returns True when the server accepted the change.
        """
        if not self.guard.acquire(key):
            logger.debug(f"{action}: ignored, already in flight")
            return False
        try:
            await run_optimistic(mutation, is_live=lambda: not self._closed)
            return True
        except AcademyError as e:
            await self._report_failure(action, e)
            return False
        finally:
            self.guard.release(key)
