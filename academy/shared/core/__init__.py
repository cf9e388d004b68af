"""
Shared Core Module
==================

Event system, configuration and the error taxonomy.
"""

# Event System
from .event_bus import EventBus, EventPayload
from . import events

# Errors
from .errors import (
    AcademyError,
    InvalidCredentials,
    NetworkUnavailable,
    Operation,
    RequestFailed,
    Unauthenticated,
    ValidationFailed,
)

# Configuration
from .configuration import (
    ConfigManager,
    SystemConfig,
    get_config_manager,
    get_config,
    ValidationLevel,
)

__all__ = [
    # Event System
    "EventBus",
    "EventPayload",
    "events",
    # Errors
    "AcademyError",
    "InvalidCredentials",
    "NetworkUnavailable",
    "Operation",
    "RequestFailed",
    "Unauthenticated",
    "ValidationFailed",
    # Configuration
    "ConfigManager",
    "SystemConfig",
    "get_config_manager",
    "get_config",
    "ValidationLevel",
]
