"""Application shell state.

Architecture:
- AppState: Shell state (route, notices, readiness)
- Store: Service locator for session, clients and screen states
"""

from .app_state import AppState
from .store import Store

__all__ = ["AppState", "Store"]
