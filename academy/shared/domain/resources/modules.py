"""Modules resource. Reads are public; the mutation paths are admin-only."""

from __future__ import annotations

from typing import Any, Dict, List

from academy.shared.core.errors import Operation
from academy.shared.domain.models import Module

from .base import ResourceClient


class ModulesClient(ResourceClient):

    async def list_modules(self) -> List[Module]:
        data = await self.api.request(Operation.LIST_MODULES, "GET", "/modules", auth=False)
        return self._parse_list(Module, data or [], Operation.LIST_MODULES)

    async def get_module(self, module_id: str) -> Module:
        data = await self.api.request(Operation.GET_MODULE, "GET", f"/modules/{module_id}", auth=False)
        return self._parse(Module, data, Operation.GET_MODULE)

    async def get_module_by_number(self, number: int) -> Module:
        data = await self.api.request(
            Operation.GET_MODULE_BY_NUMBER, "GET", f"/modules/number/{number}", auth=False
        )
        return self._parse(Module, data, Operation.GET_MODULE_BY_NUMBER)

    async def create_module(self, fields: Dict[str, Any]) -> Module:
        data = await self.api.request(Operation.CREATE_MODULE, "POST", "/modules", json=fields)
        return self._parse(Module, data, Operation.CREATE_MODULE)

    async def update_module(self, module_id: str, fields: Dict[str, Any]) -> Module:
        data = await self.api.request(
            Operation.UPDATE_MODULE, "PUT", f"/modules/{module_id}", json=fields
        )
        return self._parse(Module, data, Operation.UPDATE_MODULE)

    async def delete_module(self, module_id: str) -> None:
        await self.api.request(Operation.DELETE_MODULE, "DELETE", f"/modules/{module_id}")
