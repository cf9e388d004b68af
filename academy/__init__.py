"""Academy learner client package."""

from .shared.core.event_bus import EventBus
from .app.state import AppState, Store

__version__ = "0.3.0"

__all__ = ["AppState", "EventBus", "Store", "__version__"]
