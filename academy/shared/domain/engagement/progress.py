"""My-progress screen: profile, stats, leaderboard and avatar."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, List, Optional

from academy.shared.core.errors import ValidationFailed
from academy.shared.core.event_bus import EventBus
from academy.shared.domain.models import LeaderboardEntry, ProfileResponse, ProfileStats, User
from academy.shared.domain.resources.profile import ProfileClient
from academy.shared.domain.session.session_store import SessionStore

from .base import ScreenState

logger = logging.getLogger(__name__)

AVATAR_CONTROL = "avatar"
PROFILE_CONTROL = "profile"

DEFAULT_AVATAR_MAX_BYTES = 5 * 1024 * 1024


def validate_avatar(
    content_type: str,
    size: int,
    max_bytes: int = DEFAULT_AVATAR_MAX_BYTES,
    content_prefix: str = "image/",
) -> None:
    """Client-side avatar checks.

    Raises:
        ValidationFailed: Not an image, or larger than ``max_bytes``
    """
    if not content_type or not content_type.startswith(content_prefix):
        raise ValidationFailed("Please choose an image", field="avatar")
    if size > max_bytes:
        limit_mb = max_bytes / (1024 * 1024)
        raise ValidationFailed(f"File is too large. Maximum size is {limit_mb:g}MB", field="avatar")


class ProgressScreen(ScreenState):

    def __init__(
        self,
        event_bus: EventBus,
        session: SessionStore,
        profile: ProfileClient,
        avatar_max_bytes: int = DEFAULT_AVATAR_MAX_BYTES,
        avatar_content_prefix: str = "image/",
    ) -> None:
        super().__init__(event_bus, session)
        self.profile_client = profile
        self.avatar_max_bytes = avatar_max_bytes
        self.avatar_content_prefix = avatar_content_prefix

        self.profile: Optional[User] = None
        self.stats: Optional[ProfileStats] = None
        self.leaderboard: List[LeaderboardEntry] = []

    @property
    def current_user_entry(self) -> Optional[LeaderboardEntry]:
        return next((entry for entry in self.leaderboard if entry.is_current_user), None)

    async def load(self) -> None:
        generation = self._begin_load()
        try:
            response, leaderboard = await asyncio.gather(
                self._read("Load profile", self.profile_client.get_profile, None),
                self._read("Load leaderboard", self.profile_client.leaderboard, []),
            )
            if not self._is_current(generation):
                return
            self._adopt_profile(response)
            self.leaderboard = sorted(leaderboard, key=lambda entry: entry.rank)
        finally:
            self._finish_load(generation)

    def _adopt_profile(self, response: Optional[ProfileResponse]) -> None:
        if response is None:
            self.profile = None
            self.stats = None
            return
        self.profile = response.user
        self.stats = response.stats

    async def upload_avatar(self, filename: str, content: bytes, content_type: str) -> bool:
        try:
            validate_avatar(content_type, len(content), self.avatar_max_bytes, self.avatar_content_prefix)
        except ValidationFailed as e:
            await self._notify("Upload avatar", e.message)
            return False

        result = await self._guarded(
            AVATAR_CONTROL,
            "Upload avatar",
            lambda: self.profile_client.upload_avatar(filename, content, content_type),
        )
        if result is None:
            return False
        if not self._closed:
            self.profile = result.user
        await self.session.refresh()
        return True

    async def update_profile(self, **fields: Any) -> bool:
        user = await self._guarded(
            PROFILE_CONTROL,
            "Update profile",
            lambda: self.profile_client.update_profile(fields),
        )
        if user is None:
            return False
        if not self._closed:
            self.profile = user
        await self.session.refresh()
        return True
