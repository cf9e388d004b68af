"""Profile resource: profile, avatar, earnings and leaderboard."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, List

from pydantic.alias_generators import to_camel

from academy.shared.core.errors import Operation
from academy.shared.domain.models import (
    AvatarUploadResult,
    EarningsSummary,
    LeaderboardEntry,
    ProfileResponse,
    User,
)

from .base import ResourceClient


class ProfileClient(ResourceClient):

    async def get_profile(self) -> ProfileResponse:
        data = await self.api.request(Operation.PROFILE_GET, "GET", "/profile")
        return self._parse(ProfileResponse, data, Operation.PROFILE_GET)

    async def update_profile(self, fields: Dict[str, Any]) -> User:
        """Partial update. Keys may be snake_case; they are sent camelCase."""
        payload = {to_camel(key): value for key, value in fields.items()}
        data = await self.api.request(Operation.PROFILE_UPDATE, "PUT", "/profile", json=payload)
        if isinstance(data, dict) and isinstance(data.get("user"), dict):
            data = data["user"]
        return self._parse(User, data, Operation.PROFILE_UPDATE)

    async def upload_avatar(self, filename: str, content: bytes, content_type: str) -> AvatarUploadResult:
        data = await self.api.request(
            Operation.AVATAR_UPLOAD,
            "POST",
            "/profile/avatar",
            files={"avatar": (filename, content, content_type)},
        )
        return self._parse(AvatarUploadResult, data, Operation.AVATAR_UPLOAD)

    # --- Earnings: every call hands back the history newest first ---

    async def list_earnings(self) -> EarningsSummary:
        data = await self.api.request(Operation.EARNINGS_LIST, "GET", "/profile/earnings")
        return self._parse(EarningsSummary, data or {}, Operation.EARNINGS_LIST).sorted()

    async def add_earning(self, amount: Decimal, date: datetime) -> EarningsSummary:
        data = await self.api.request(
            Operation.EARNING_ADD,
            "POST",
            "/profile/earnings",
            json={"amount": float(amount), "date": date.isoformat()},
        )
        return self._parse(EarningsSummary, data or {}, Operation.EARNING_ADD).sorted()

    async def delete_earning(self, earning_id: str) -> EarningsSummary:
        data = await self.api.request(
            Operation.EARNING_DELETE, "DELETE", f"/profile/earnings/{earning_id}"
        )
        return self._parse(EarningsSummary, data or {}, Operation.EARNING_DELETE).sorted()

    async def leaderboard(self) -> List[LeaderboardEntry]:
        data = await self.api.request(Operation.LEADERBOARD, "GET", "/profile/leaderboard")
        return self._parse_list(LeaderboardEntry, data or [], Operation.LEADERBOARD)
