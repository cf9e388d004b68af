"""
Shared Domain Module
====================

API models, resource clients, session lifecycle and per-screen engagement state.
"""

# Resources
from academy.shared.domain.resources import (
    AdminClient,
    AuthClient,
    FavoritesClient,
    ModulesClient,
    ProfileClient,
    ProgressClient,
)

# Session
from academy.shared.domain.session.session_store import SessionStore

# Engagement
from academy.shared.domain.engagement import (
    AdminUsersScreen,
    EarningsScreen,
    FavoritesScreen,
    LessonScreen,
    ModulesScreen,
    ProgressScreen,
    WelcomeGate,
)

__all__ = [
    # Resources
    "AdminClient",
    "AuthClient",
    "FavoritesClient",
    "ModulesClient",
    "ProfileClient",
    "ProgressClient",
    # Session
    "SessionStore",
    # Engagement
    "AdminUsersScreen",
    "EarningsScreen",
    "FavoritesScreen",
    "LessonScreen",
    "ModulesScreen",
    "ProgressScreen",
    "WelcomeGate",
]
