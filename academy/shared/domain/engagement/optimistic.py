"""Optimistic mutations and the per-control pending guard.

Every optimistic toggle (favorite flag, lesson completion, admin flag) goes
through :func:`run_optimistic`, so the apply/revert/reconcile rules live in
one place:

    Synced(v) -> Pending(v') -> Synced(server_v)   on success
                             -> Synced(v)          on failure
"""

from __future__ import annotations

import asyncio
import inspect
import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Generic, Hashable, Set, TypeVar

logger = logging.getLogger(__name__)

R = TypeVar("R")


class PendingGuard:
    """Tracks controls with a call in flight.

    A control is identified by any hashable key (``"favorite"``,
    ``("admin", user_id)``...). While its key is held, further triggers of the
    same control are ignored; other keys are unaffected.
    """

    def __init__(self) -> None:
        self._pending: Set[Hashable] = set()

    def is_busy(self, key: Hashable) -> bool:
        return key in self._pending

    def acquire(self, key: Hashable) -> bool:
        if key in self._pending:
            return False
        self._pending.add(key)
        return True

    def release(self, key: Hashable) -> None:
        self._pending.discard(key)

    @property
    def busy_keys(self) -> frozenset:
        return frozenset(self._pending)


@dataclass
class OptimisticMutation(Generic[R]):
    """The four moves of an optimistic update.

    Attributes:
        apply_locally: Show the expected value immediately
        call_remote: Issue the request
        reconcile: Adopt the server's answer verbatim; may be async
        revert: Restore the value held before ``apply_locally``
    """

    apply_locally: Callable[[], None]
    call_remote: Callable[[], Awaitable[R]]
    reconcile: Callable[[R], Any]
    revert: Callable[[], None]


async def run_optimistic(
    mutation: OptimisticMutation[R],
    is_live: Callable[[], bool] = lambda: True,
) -> R:
    """Apply, call, then reconcile or revert.

    ``is_live`` is consulted after the call returns; when the owning view has
    been torn down, neither reconcile nor revert touches its state.

    Raises:
        Whatever ``call_remote`` raised, after reverting
    """
    mutation.apply_locally()
    try:
        result = await mutation.call_remote()
    except (Exception, asyncio.CancelledError):
        if is_live():
            mutation.revert()
        else:
            logger.debug("Dropping revert for a closed view")
        raise

    if not is_live():
        logger.debug("Dropping stale response for a closed view")
        return result

    outcome = mutation.reconcile(result)
    if inspect.isawaitable(outcome):
        await outcome
    return result
