"""Earnings screen: self-reported income history.

No speculative inserts or removals here. Each mutation waits for the
server's ``{totalEarnings, history}`` and replaces local state wholesale, so
the total shown is always the one the server computed.
"""

from __future__ import annotations

import logging
import math
from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation
from typing import Callable, List, Union

from academy.shared.core import events
from academy.shared.core.errors import ValidationFailed
from academy.shared.core.event_bus import EventBus
from academy.shared.domain.models import EarningRecord, EarningsSummary, sort_history
from academy.shared.domain.resources.profile import ProfileClient
from academy.shared.domain.session.session_store import SessionStore

from .base import ScreenState

logger = logging.getLogger(__name__)

ADD_CONTROL = "add"

AmountInput = Union[Decimal, int, float, str]


def parse_amount(value: AmountInput) -> Decimal:
    """Turn user input into a positive Decimal.

    Raises:
        ValidationFailed: Empty, non-numeric, non-finite or non-positive input, or a
            value that does not fit a JSON number
    """
    if isinstance(value, bool):
        raise ValidationFailed("Enter a valid amount", field="amount")
    try:
        if isinstance(value, str):
            amount = Decimal(value.strip().replace(",", "."))
        else:
            amount = Decimal(str(value))
    except (InvalidOperation, ValueError):
        raise ValidationFailed("Enter a valid amount", field="amount") from None

    if not amount.is_finite() or amount <= 0:
        raise ValidationFailed("Enter a valid amount", field="amount")
    # The wire format is a JSON number; it must survive the float conversion
    as_float = float(amount)
    if not math.isfinite(as_float) or as_float <= 0:
        raise ValidationFailed("Enter a valid amount", field="amount")
    return amount


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class EarningsScreen(ScreenState):

    def __init__(
        self,
        event_bus: EventBus,
        session: SessionStore,
        profile: ProfileClient,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        super().__init__(event_bus, session)
        self.profile = profile
        self.clock = clock
        self.total_earnings = Decimal("0")
        self.history: List[EarningRecord] = []

    async def load(self) -> None:
        generation = self._begin_load()
        try:
            summary = await self._read("Load earnings", self.profile.list_earnings, None)
            if summary is not None and self._is_current(generation):
                self._adopt(summary)
        finally:
            self._finish_load(generation)

    async def add(self, amount: AmountInput) -> bool:
        """Record an earning dated now. Invalid input never reaches the server."""
        try:
            value = parse_amount(amount)
        except ValidationFailed as e:
            await self._notify("Add earning", e.message)
            return False

        summary = await self._guarded(
            ADD_CONTROL,
            "Add earning",
            lambda: self.profile.add_earning(value, self.clock()),
        )
        return await self._apply_result(summary)

    async def delete(self, earning_id: str) -> bool:
        summary = await self._guarded(
            ("delete", earning_id),
            "Delete earning",
            lambda: self.profile.delete_earning(earning_id),
        )
        return await self._apply_result(summary)

    async def _apply_result(self, summary: EarningsSummary | None) -> bool:
        if summary is None:
            return False
        if self._closed:
            return True
        self._adopt(summary)
        await self.event_bus.publish(
            events.TOPIC_EARNINGS_UPDATED,
            events.create_earnings_event(str(self.total_earnings), len(self.history)),
        )
        return True

    def _adopt(self, summary: EarningsSummary) -> None:
        self.total_earnings = summary.total_earnings
        self.history = sort_history(summary.history)
