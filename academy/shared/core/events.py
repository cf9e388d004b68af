"""Canonical event definitions for the Academy client."""

from __future__ import annotations

import time
from typing import Literal, Optional

from .event_bus import EventPayload

# Application shell
TOPIC_NAV_SELECT = "nav.select"
TOPIC_NOTICE = "notice.show"

# Session lifecycle
TOPIC_SESSION_STARTED = "session.started"
TOPIC_SESSION_REFRESHED = "session.refreshed"
TOPIC_SESSION_ENDED = "session.ended"      # explicit logout
TOPIC_SESSION_EXPIRED = "session.expired"  # token rejected or missing

# Engagement
TOPIC_LESSON_COMPLETION_CHANGED = "lesson.completion.changed"
TOPIC_FAVORITE_CHANGED = "favorite.changed"
TOPIC_EARNINGS_UPDATED = "earnings.updated"

ROUTE_LOGIN = "login"
ROUTE_HOME = "home"


def create_notice_event(
    action: str,
    message: str,
    level: Literal["info", "warning", "error"] = "error",
) -> EventPayload:
    """Create a one-shot user-visible notice."""
    return {
        "action": action,
        "message": message,
        "level": level,
        "ts": time.time(),
    }


def create_session_event(user_id: Optional[str], reason: str = "") -> EventPayload:
    """Create a session lifecycle event."""
    return {
        "user_id": user_id,
        "reason": reason,
    }


def create_nav_select_event(route_id: str) -> EventPayload:
    return {"id": route_id}


def create_lesson_completion_event(module_id: str, lesson_number: int, is_completed: bool) -> EventPayload:
    return {
        "module_id": module_id,
        "lesson_number": lesson_number,
        "is_completed": is_completed,
    }


def create_favorite_event(module_id: str, lesson_number: int, is_favorite: bool) -> EventPayload:
    return {
        "module_id": module_id,
        "lesson_number": lesson_number,
        "is_favorite": is_favorite,
    }


def create_earnings_event(total_earnings: str, entries: int) -> EventPayload:
    """Create an earnings-updated event.

    The total travels as a string so Decimal precision survives the bus.
    """
    return {
        "total_earnings": total_earnings,
        "entries": entries,
    }
