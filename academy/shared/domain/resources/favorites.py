"""Favorites resource, keyed by ``(module_id, lesson_number)``."""

from __future__ import annotations

from typing import List

from academy.shared.core.errors import Operation, RequestFailed
from academy.shared.domain.models import FavoriteLesson, FavoriteMutationResult, FavoritesPage

from .base import ResourceClient


def _favorite_path(module_id: str, lesson_number: int) -> str:
    return f"/favorites/{module_id}/{lesson_number}"


class FavoritesClient(ResourceClient):

    async def add(self, module_id: str, lesson_number: int) -> FavoriteMutationResult:
        data = await self.api.request(
            Operation.FAVORITE_ADD, "POST", _favorite_path(module_id, lesson_number)
        )
        return self._checked(data, Operation.FAVORITE_ADD)

    async def remove(self, module_id: str, lesson_number: int) -> FavoriteMutationResult:
        data = await self.api.request(
            Operation.FAVORITE_REMOVE, "DELETE", _favorite_path(module_id, lesson_number)
        )
        return self._checked(data, Operation.FAVORITE_REMOVE)

    async def check(self, module_id: str, lesson_number: int) -> bool:
        data = await self.api.request(
            Operation.FAVORITE_CHECK, "GET", f"{_favorite_path(module_id, lesson_number)}/check"
        )
        return bool(isinstance(data, dict) and data.get("isFavorite"))

    async def list_favorites(self) -> List[FavoriteLesson]:
        data = await self.api.request(Operation.FAVORITES_LIST, "GET", "/favorites")
        return self._parse(FavoritesPage, data or {}, Operation.FAVORITES_LIST).favorites

    def _checked(self, data: object, operation: Operation) -> FavoriteMutationResult:
        result = self._parse(FavoriteMutationResult, data or {}, operation)
        if not result.success:
            raise RequestFailed(operation)
        return result
