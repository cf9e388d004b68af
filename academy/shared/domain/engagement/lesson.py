"""Lesson screen: lesson content plus its completion and favorite toggles."""

from __future__ import annotations

import asyncio
import logging
from typing import Optional

from academy.shared.core import events
from academy.shared.core.errors import AcademyError, Unauthenticated
from academy.shared.core.event_bus import EventBus
from academy.shared.domain.models import (
    FavoriteMutationResult,
    Lesson,
    LessonCompletionResult,
    Module,
)
from academy.shared.domain.resources.favorites import FavoritesClient
from academy.shared.domain.resources.modules import ModulesClient
from academy.shared.domain.resources.progress import ProgressClient
from academy.shared.domain.session.session_store import SessionStore

from .base import ScreenState
from .optimistic import OptimisticMutation

logger = logging.getLogger(__name__)

COMPLETION_CONTROL = "completion"
FAVORITE_CONTROL = "favorite"


class LessonScreen(ScreenState):

    def __init__(
        self,
        event_bus: EventBus,
        session: SessionStore,
        modules: ModulesClient,
        progress: ProgressClient,
        favorites: FavoritesClient,
        module_id: str,
        lesson_number: int,
    ) -> None:
        super().__init__(event_bus, session)
        self.modules = modules
        self.progress = progress
        self.favorites = favorites
        self.module_id = module_id
        self.lesson_number = lesson_number

        self.module: Optional[Module] = None
        self.lesson: Optional[Lesson] = None
        self.is_completed = False
        self.is_favorite = False

    @property
    def not_found(self) -> bool:
        return self.loaded and self.lesson is None

    async def load(self) -> None:
        generation = self._begin_load()
        try:
            module = await self._read(
                "Load lesson", lambda: self.modules.get_module(self.module_id), None
            )
            if not self._is_current(generation):
                return

            self.module = module
            self.lesson = module.lesson(self.lesson_number) if module else None
            if self.lesson is None:
                self.is_completed = False
                self.is_favorite = False
                return

            completed, favorite = await asyncio.gather(
                self._read(
                    "Load lesson status",
                    lambda: self.progress.lesson_status(self.module_id, self.lesson_number),
                    False,
                ),
                self._read(
                    "Check favorite",
                    lambda: self.favorites.check(self.module_id, self.lesson_number),
                    False,
                ),
            )
            if not self._is_current(generation):
                return
            self.is_completed = completed
            self.is_favorite = favorite
        finally:
            self._finish_load(generation)

    # --- Completion ---

    async def toggle_completion(self) -> bool:
        previous = self.is_completed
        target = not previous

        def apply_locally() -> None:
            self._set_completed(target)

        async def call_remote() -> LessonCompletionResult:
            if target:
                return await self.progress.complete_lesson(self.module_id, self.lesson_number)
            return await self.progress.uncomplete_lesson(self.module_id, self.lesson_number)

        async def reconcile(result: LessonCompletionResult) -> None:
            confirmed = result.is_completed
            if confirmed is None:
                confirmed = await self._confirm_completion(fallback=target)
            if self._closed:
                return
            self._set_completed(confirmed)
            await self.event_bus.publish(
                events.TOPIC_LESSON_COMPLETION_CHANGED,
                events.create_lesson_completion_event(self.module_id, self.lesson_number, confirmed),
            )

        def revert() -> None:
            self._set_completed(previous)

        action = "Mark lesson as completed" if target else "Mark lesson as not completed"
        return await self._optimistic(
            COMPLETION_CONTROL,
            action,
            OptimisticMutation(apply_locally, call_remote, reconcile, revert),
        )

    async def _confirm_completion(self, fallback: bool) -> bool:
        """Read back the server's completion state after a mutation.

        The mutation itself already succeeded, so a failed read keeps the
        requested value instead of reverting.
        """
        try:
            return await self.progress.lesson_status(self.module_id, self.lesson_number)
        except Unauthenticated:
            await self.session.expire()
        except AcademyError as e:
            logger.warning(f"Could not confirm completion of {self.module_id}/{self.lesson_number}: {e}")
        return fallback

    def _set_completed(self, value: bool) -> None:
        self.is_completed = value
        if self.lesson is not None:
            self.lesson.is_completed = value

    # --- Favorite ---

    async def toggle_favorite(self) -> bool:
        previous = self.is_favorite
        target = not previous

        def apply_locally() -> None:
            self.is_favorite = target

        async def call_remote() -> FavoriteMutationResult:
            if target:
                return await self.favorites.add(self.module_id, self.lesson_number)
            return await self.favorites.remove(self.module_id, self.lesson_number)

        async def reconcile(result: FavoriteMutationResult) -> None:
            confirmed = target if result.is_favorite is None else result.is_favorite
            self.is_favorite = confirmed
            await self.event_bus.publish(
                events.TOPIC_FAVORITE_CHANGED,
                events.create_favorite_event(self.module_id, self.lesson_number, confirmed),
            )

        def revert() -> None:
            self.is_favorite = previous

        action = "Add to favorites" if target else "Remove from favorites"
        return await self._optimistic(
            FAVORITE_CONTROL,
            action,
            OptimisticMutation(apply_locally, call_remote, reconcile, revert),
        )
