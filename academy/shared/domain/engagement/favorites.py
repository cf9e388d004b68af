"""Favorites screen: saved lessons with search and module filtering."""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional

from academy.shared.core import events
from academy.shared.core.event_bus import EventBus
from academy.shared.domain.models import FavoriteKey, FavoriteLesson, FavoriteMutationResult
from academy.shared.domain.resources.favorites import FavoritesClient
from academy.shared.domain.session.session_store import SessionStore

from .base import ScreenState
from .optimistic import OptimisticMutation

logger = logging.getLogger(__name__)


def dedupe_favorites(entries: Iterable[FavoriteLesson]) -> List[FavoriteLesson]:
    """Keep the first entry seen for each ``(module_id, lesson_number)``."""
    seen: set = set()
    unique: List[FavoriteLesson] = []
    for entry in entries:
        if entry.key in seen:
            continue
        seen.add(entry.key)
        unique.append(entry)
    return unique


def filter_favorites(
    entries: Iterable[FavoriteLesson],
    search_text: str = "",
    module_number: Optional[int] = None,
) -> List[FavoriteLesson]:
    """Filter a favorites snapshot without touching the network.

    Text matches case-insensitively as a substring of the lesson title or the
    module title; the module filter is an exact match on the module number.
    Both predicates must hold.
    """
    needle = search_text.lower()
    result = []
    for entry in entries:
        if needle and needle not in entry.lesson_title.lower() and needle not in entry.module_title.lower():
            continue
        if module_number is not None and entry.module_number != module_number:
            continue
        result.append(entry)
    return result


class FavoritesScreen(ScreenState):

    def __init__(
        self,
        event_bus: EventBus,
        session: SessionStore,
        favorites: FavoritesClient,
    ) -> None:
        super().__init__(event_bus, session)
        self.client = favorites
        self.favorites: List[FavoriteLesson] = []
        self.search_text = ""
        self.module_filter: Optional[int] = None

    async def load(self) -> None:
        generation = self._begin_load()
        try:
            entries = await self._read("Load favorites", self.client.list_favorites, [])
            if self._is_current(generation):
                self.favorites = dedupe_favorites(entries)
        finally:
            self._finish_load(generation)

    # --- Derived view ---

    @property
    def visible(self) -> List[FavoriteLesson]:
        return filter_favorites(self.favorites, self.search_text, self.module_filter)

    @property
    def module_numbers(self) -> List[int]:
        return sorted({entry.module_number for entry in self.favorites})

    @property
    def has_active_filters(self) -> bool:
        return bool(self.search_text) or self.module_filter is not None

    def set_search(self, text: str) -> None:
        self.search_text = text

    def set_module_filter(self, module_number: Optional[int]) -> None:
        self.module_filter = module_number

    def reset_filters(self) -> None:
        self.search_text = ""
        self.module_filter = None

    # --- Mutations ---

    async def remove(self, key: FavoriteKey) -> bool:
        """Optimistically drop a favorite; it comes back in place on failure."""
        index = next((i for i, entry in enumerate(self.favorites) if entry.key == key), None)
        if index is None:
            return False
        entry = self.favorites[index]
        module_id, lesson_number = key

        def apply_locally() -> None:
            self.favorites = [e for e in self.favorites if e.key != key]

        async def call_remote() -> FavoriteMutationResult:
            return await self.client.remove(module_id, lesson_number)

        async def reconcile(result: FavoriteMutationResult) -> None:
            if result.is_favorite:
                # Server still lists it
                self._restore(index, entry)
            await self.event_bus.publish(
                events.TOPIC_FAVORITE_CHANGED,
                events.create_favorite_event(module_id, lesson_number, bool(result.is_favorite)),
            )

        def revert() -> None:
            self._restore(index, entry)

        return await self._optimistic(
            ("remove", key),
            "Remove from favorites",
            OptimisticMutation(apply_locally, call_remote, reconcile, revert),
        )

    def _restore(self, index: int, entry: FavoriteLesson) -> None:
        if any(e.key == entry.key for e in self.favorites):
            return
        restored = list(self.favorites)
        restored.insert(min(index, len(restored)), entry)
        self.favorites = restored
