"""Engagement state coordinator: one state object per screen.

Screens merge resource-client results into view state, run optimistic
toggles through a single helper, and reconcile with the server's answers.
"""

from .admin import AdminUsersScreen
from .base import ScreenState
from .earnings import EarningsScreen, parse_amount
from .favorites import FavoritesScreen, dedupe_favorites, filter_favorites
from .lesson import LessonScreen
from .modules import ModulesScreen
from .optimistic import OptimisticMutation, PendingGuard, run_optimistic
from .progress import ProgressScreen, validate_avatar
from .welcome import WelcomeGate

__all__ = [
    "AdminUsersScreen",
    "EarningsScreen",
    "FavoritesScreen",
    "LessonScreen",
    "ModulesScreen",
    "OptimisticMutation",
    "PendingGuard",
    "ProgressScreen",
    "ScreenState",
    "WelcomeGate",
    "dedupe_favorites",
    "filter_favorites",
    "parse_amount",
    "run_optimistic",
    "validate_avatar",
]
