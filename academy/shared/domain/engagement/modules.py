"""Modules screen: module list and module detail."""

from __future__ import annotations

import logging
from typing import List, Optional

from academy.shared.core.event_bus import EventBus
from academy.shared.domain.models import Module
from academy.shared.domain.resources.modules import ModulesClient
from academy.shared.domain.resources.progress import ProgressClient
from academy.shared.domain.session.session_store import SessionStore

from .base import ScreenState

logger = logging.getLogger(__name__)


class ModulesScreen(ScreenState):

    def __init__(
        self,
        event_bus: EventBus,
        session: SessionStore,
        modules: ModulesClient,
        progress: ProgressClient,
    ) -> None:
        super().__init__(event_bus, session)
        self.modules_client = modules
        self.progress = progress
        self.modules: List[Module] = []
        self.module: Optional[Module] = None

    async def load(self) -> None:
        generation = self._begin_load()
        try:
            modules = await self._read("Load modules", self.modules_client.list_modules, [])
            if self._is_current(generation):
                self.modules = sorted(modules, key=lambda module: module.number)
        finally:
            self._finish_load(generation)

    async def open_module(self, module_id: str) -> Optional[Module]:
        module = await self._read("Load module", lambda: self.modules_client.get_module(module_id), None)
        if not self._closed:
            self.module = module
        return module

    async def open_module_by_number(self, number: int) -> Optional[Module]:
        module = await self._read(
            "Load module", lambda: self.modules_client.get_module_by_number(number), None
        )
        if not self._closed:
            self.module = module
        return module

    async def complete_module(self, module_id: str) -> bool:
        """Mark a module done, then re-read it; progress is the server's number."""
        result = await self._guarded(
            ("complete", module_id),
            "Complete module",
            lambda: self.progress.complete_module(module_id),
        )
        if result is None:
            return False

        refreshed = await self._read(
            "Load module", lambda: self.modules_client.get_module(module_id), None
        )
        if refreshed is not None and not self._closed:
            self.modules = [refreshed if m.id == module_id else m for m in self.modules]
            if self.module is not None and self.module.id == module_id:
                self.module = refreshed
        return True
