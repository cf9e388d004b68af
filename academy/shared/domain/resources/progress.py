"""Progress resource.

Setting and clearing a lesson's completion are separate endpoints
(POST vs DELETE on the same path), never one call with a flag.
"""

from __future__ import annotations

from academy.shared.core.errors import Operation
from academy.shared.domain.models import (
    LessonCompletionResult,
    LessonStatus,
    ModuleCompletionResult,
)

from .base import ResourceClient


def _lesson_path(module_id: str, lesson_number: int) -> str:
    return f"/progress/lessons/{module_id}/{lesson_number}"


class ProgressClient(ResourceClient):

    async def complete_lesson(self, module_id: str, lesson_number: int) -> LessonCompletionResult:
        data = await self.api.request(
            Operation.COMPLETE_LESSON, "POST", f"{_lesson_path(module_id, lesson_number)}/complete"
        )
        return self._parse(LessonCompletionResult, data or {}, Operation.COMPLETE_LESSON)

    async def uncomplete_lesson(self, module_id: str, lesson_number: int) -> LessonCompletionResult:
        data = await self.api.request(
            Operation.UNCOMPLETE_LESSON, "DELETE", f"{_lesson_path(module_id, lesson_number)}/complete"
        )
        return self._parse(LessonCompletionResult, data or {}, Operation.UNCOMPLETE_LESSON)

    async def lesson_status(self, module_id: str, lesson_number: int) -> bool:
        data = await self.api.request(
            Operation.LESSON_STATUS, "GET", f"{_lesson_path(module_id, lesson_number)}/status"
        )
        return self._parse(LessonStatus, data or {}, Operation.LESSON_STATUS).is_completed

    async def complete_module(self, module_id: str) -> ModuleCompletionResult:
        data = await self.api.request(
            Operation.COMPLETE_MODULE, "POST", f"/progress/modules/{module_id}/complete"
        )
        return self._parse(ModuleCompletionResult, data or {}, Operation.COMPLETE_MODULE)
