"""Admin users screen: faculty assignment and admin rights."""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from academy.shared.core.event_bus import EventBus
from academy.shared.domain.models import AdminToggleResult, AdminUser
from academy.shared.domain.resources.admin import AdminClient
from academy.shared.domain.session.session_store import SessionStore

from .base import ScreenState
from .optimistic import OptimisticMutation

logger = logging.getLogger(__name__)

DEFAULT_FACULTIES = ("Продюсер", "Експерт", "Досвідчений")


class AdminUsersScreen(ScreenState):

    def __init__(
        self,
        event_bus: EventBus,
        session: SessionStore,
        admin: AdminClient,
        faculties: Sequence[str] = DEFAULT_FACULTIES,
    ) -> None:
        super().__init__(event_bus, session)
        self.admin = admin
        self.faculties = list(faculties)
        self.users: List[AdminUser] = []
        self.selected_user_id: Optional[str] = None
        self.selected_faculty = ""

    async def load(self) -> None:
        generation = self._begin_load()
        try:
            users = await self._read("Load users", self.admin.list_users, [])
            if self._is_current(generation):
                self.users = users
        finally:
            self._finish_load(generation)

    def user(self, user_id: str) -> Optional[AdminUser]:
        return next((u for u in self.users if u.id == user_id), None)

    # --- Faculty assignment ---

    def select_user(self, user_id: str) -> None:
        user = self.user(user_id)
        self.selected_user_id = user_id
        self.selected_faculty = (user.faculty if user else None) or ""

    def choose_faculty(self, faculty: str) -> None:
        self.selected_faculty = faculty

    def cancel_selection(self) -> None:
        self.selected_user_id = None
        self.selected_faculty = ""

    async def assign_faculty(self) -> bool:
        """Submit the selected faculty; nothing happens while none is chosen."""
        user_id = self.selected_user_id
        faculty = self.selected_faculty
        if not user_id or not faculty:
            logger.debug("Faculty assignment skipped: nothing selected")
            return False
        if faculty not in self.faculties:
            await self._notify("Assign faculty", f"Unknown faculty: {faculty}")
            return False

        result = await self._guarded(
            ("faculty", user_id),
            "Assign faculty",
            lambda: self.admin.assign_faculty(user_id, faculty),
        )
        if result is None:
            return False
        if self._closed:
            return True

        assigned = result.faculty or faculty
        self.users = [
            u.model_copy(update={"faculty": assigned}) if u.id == user_id else u
            for u in self.users
        ]
        self.cancel_selection()

        current = self.session.user
        if current is not None and current.id == user_id:
            await self.session.refresh()
        return True

    # --- Admin rights ---

    async def toggle_admin(self, user_id: str) -> bool:
        user = self.user(user_id)
        if user is None:
            return False
        previous = user.is_admin

        def apply_locally() -> None:
            self._set_admin(user_id, not previous)

        async def call_remote() -> AdminToggleResult:
            return await self.admin.toggle_admin(user_id)

        def reconcile(result: AdminToggleResult) -> None:
            self._set_admin(user_id, result.is_admin)

        def revert() -> None:
            self._set_admin(user_id, previous)

        return await self._optimistic(
            ("admin", user_id),
            "Change admin rights",
            OptimisticMutation(apply_locally, call_remote, reconcile, revert),
        )

    def _set_admin(self, user_id: str, value: bool) -> None:
        self.users = [
            u.model_copy(update={"is_admin": value}) if u.id == user_id else u
            for u in self.users
        ]
