"""Global State Store - Service Locator Pattern.

Provides centralized access to the session, resource clients and screen
state factories from any presentation component.
"""

from __future__ import annotations

from typing import Optional

import httpx

from academy.app.state.app_state import AppState
from academy.shared.core.configuration import SystemConfig
from academy.shared.core.event_bus import EventBus
from academy.shared.domain.engagement import (
    AdminUsersScreen,
    EarningsScreen,
    FavoritesScreen,
    LessonScreen,
    ModulesScreen,
    ProgressScreen,
    WelcomeGate,
)
from academy.shared.domain.resources import (
    AdminClient,
    AuthClient,
    FavoritesClient,
    ModulesClient,
    ProfileClient,
    ProgressClient,
)
from academy.shared.domain.session.session_store import SessionStore
from academy.shared.infrastructure.http.api_client import ApiClient
from academy.shared.infrastructure.persistence.token_storage import (
    CredentialProvider,
    FileTokenStorage,
)


class Store:
    """Global state store for the client application.

    Owns one of everything that lives for the whole process (event bus,
    credential provider, HTTP client, resource clients, session store) and
    hands out fresh screen states on demand, since screens re-fetch every
    time they are shown.

    Usage:
        # During app initialization
        Store.initialize(config, event_bus)

        # In any UI component
        store = Store.get()
        screen = store.lesson_screen(module_id, 3)
        await screen.load()
    """

    _instance: Optional['Store'] = None

    def __init__(
        self,
        config: SystemConfig,
        event_bus: EventBus,
        credentials: Optional[CredentialProvider] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        """Initialize store.

        Note: Do not call directly. Use Store.initialize() instead.

        Args:
            config: Merged system configuration
            event_bus: The shared event bus instance
            credentials: Token provider; defaults to the configured file slot
            transport: Optional httpx transport, for tests
        """
        self.config = config
        self.bus = event_bus
        self.credentials = credentials or FileTokenStorage(
            config.storage.token_path, config.storage.token_key
        )
        self.api = ApiClient(
            config.api.base_url,
            self.credentials,
            timeout=config.api.timeout,
            transport=transport,
        )

        self.auth = AuthClient(self.api)
        self.modules = ModulesClient(self.api)
        self.progress = ProgressClient(self.api)
        self.favorites = FavoritesClient(self.api)
        self.profile = ProfileClient(self.api)
        self.admin = AdminClient(self.api)

        self.session = SessionStore(event_bus, self.auth, self.credentials)
        self.welcome = WelcomeGate(event_bus, self.session, self.profile)
        self.app = AppState(event_bus)

    @classmethod
    def initialize(
        cls,
        config: SystemConfig,
        event_bus: EventBus,
        credentials: Optional[CredentialProvider] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> 'Store':
        """Initialize the global store instance.

        Raises:
            RuntimeError: If store is already initialized
        """
        if cls._instance is not None:
            raise RuntimeError("Store already initialized!")

        cls._instance = cls(config, event_bus, credentials, transport)
        return cls._instance

    @classmethod
    def get(cls) -> 'Store':
        """Get the global store instance.

        Raises:
            RuntimeError: If store has not been initialized
        """
        if cls._instance is None:
            raise RuntimeError("Store not initialized! Call Store.initialize() first.")
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        """Reset the store instance.

        Primarily used for testing. In production, store persists for
        application lifetime.
        """
        cls._instance = None

    async def start(self) -> None:
        """Bind shell subscriptions."""
        await self.app.initialize()
        await self.welcome.initialize()

    async def aclose(self) -> None:
        await self.api.aclose()

    # --- Screen factories ---

    def lesson_screen(self, module_id: str, lesson_number: int) -> LessonScreen:
        return LessonScreen(
            self.bus, self.session, self.modules, self.progress, self.favorites,
            module_id, lesson_number,
        )

    def favorites_screen(self) -> FavoritesScreen:
        return FavoritesScreen(self.bus, self.session, self.favorites)

    def earnings_screen(self) -> EarningsScreen:
        return EarningsScreen(self.bus, self.session, self.profile)

    def progress_screen(self) -> ProgressScreen:
        return ProgressScreen(
            self.bus,
            self.session,
            self.profile,
            avatar_max_bytes=self.config.uploads.avatar_max_bytes,
            avatar_content_prefix=self.config.uploads.avatar_content_prefix,
        )

    def modules_screen(self) -> ModulesScreen:
        return ModulesScreen(self.bus, self.session, self.modules, self.progress)

    def admin_users_screen(self) -> AdminUsersScreen:
        return AdminUsersScreen(self.bus, self.session, self.admin, self.config.admin.faculties)
