"""Admin resource: user list, faculty assignment, admin flag."""

from __future__ import annotations

from typing import List

from academy.shared.core.errors import Operation
from academy.shared.domain.models import AdminToggleResult, AdminUser

from .base import ResourceClient


class AdminClient(ResourceClient):

    async def list_users(self) -> List[AdminUser]:
        data = await self.api.request(Operation.ADMIN_LIST_USERS, "GET", "/admin/users")
        return self._parse_list(AdminUser, data or [], Operation.ADMIN_LIST_USERS)

    async def assign_faculty(self, user_id: str, faculty: str) -> AdminUser:
        data = await self.api.request(
            Operation.ADMIN_ASSIGN_FACULTY,
            "PUT",
            f"/admin/users/{user_id}/faculty",
            json={"faculty": faculty},
        )
        return self._parse(AdminUser, data, Operation.ADMIN_ASSIGN_FACULTY)

    async def toggle_admin(self, user_id: str) -> AdminToggleResult:
        data = await self.api.request(
            Operation.ADMIN_TOGGLE_ADMIN, "PUT", f"/admin/users/{user_id}/admin", json={}
        )
        return self._parse(AdminToggleResult, data, Operation.ADMIN_TOGGLE_ADMIN)
