"""Resource clients, one per API resource family."""

from .admin import AdminClient
from .auth import AuthClient
from .base import ResourceClient
from .favorites import FavoritesClient
from .modules import ModulesClient
from .profile import ProfileClient
from .progress import ProgressClient

__all__ = [
    "AdminClient",
    "AuthClient",
    "FavoritesClient",
    "ModulesClient",
    "ProfileClient",
    "ProgressClient",
    "ResourceClient",
]
