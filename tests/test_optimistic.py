import pytest

from academy.shared.core.errors import Operation, RequestFailed
from academy.shared.domain.engagement.optimistic import (
    OptimisticMutation,
    PendingGuard,
    run_optimistic,
)


class Flag:
    def __init__(self, value):
        self.value = value


def _mutation(flag, target, call_remote):
    previous = flag.value

    def apply_locally():
        flag.value = target

    def reconcile(result):
        flag.value = result

    def revert():
        flag.value = previous

    return OptimisticMutation(apply_locally, call_remote, reconcile, revert)


@pytest.mark.asyncio
async def test_success_adopts_server_value():
    flag = Flag(False)
    seen_during_call = []

    async def call_remote():
        seen_during_call.append(flag.value)
        return False

    result = await run_optimistic(_mutation(flag, True, call_remote))

    assert seen_during_call == [True]
    assert result is False
    assert flag.value is False


@pytest.mark.asyncio
async def test_failure_reverts_and_reraises():
    flag = Flag(False)

    async def call_remote():
        raise RequestFailed(Operation.FAVORITE_ADD)

    with pytest.raises(RequestFailed):
        await run_optimistic(_mutation(flag, True, call_remote))

    assert flag.value is False


@pytest.mark.asyncio
async def test_dead_view_is_left_alone():
    flag = Flag(False)
    live = {"value": True}

    async def call_remote():
        live["value"] = False
        return "server"

    await run_optimistic(_mutation(flag, True, call_remote), is_live=lambda: live["value"])

    assert flag.value is True


@pytest.mark.asyncio
async def test_async_reconcile_is_awaited():
    flag = Flag(0)

    async def call_remote():
        return 5

    async def reconcile(result):
        flag.value = result * 2

    mutation = OptimisticMutation(lambda: None, call_remote, reconcile, lambda: None)
    await run_optimistic(mutation)

    assert flag.value == 10


def test_pending_guard_is_per_key():
    guard = PendingGuard()

    assert guard.acquire("favorite")
    assert not guard.acquire("favorite")
    assert guard.acquire(("admin", "u2"))
    assert guard.busy_keys == {"favorite", ("admin", "u2")}

    guard.release("favorite")
    assert not guard.is_busy("favorite")
    assert guard.is_busy(("admin", "u2"))
