from pathlib import Path

import pytest
import pytest_asyncio
import yaml

from academy.app.main import bootstrap
from academy.app.state import AppState, Store
from academy.shared.core import events
from academy.shared.core.configuration import get_config_manager
from academy.shared.core.event_bus import EventBus
from academy.shared.domain.engagement import EarningsScreen
from academy.shared.infrastructure.persistence.token_storage import MemoryTokenStorage

from .conftest import TOKEN, module_payload, user_payload


@pytest_asyncio.fixture
async def app_state(bus):
    state = AppState(bus)
    await state.initialize()
    return state


@pytest.mark.asyncio
async def test_notices_are_queued_in_order(app_state, bus):
    await bus.publish(events.TOPIC_NOTICE, events.create_notice_event("Add to favorites", "first"))
    await bus.wait_until_idle()
    await bus.publish(events.TOPIC_NOTICE, events.create_notice_event("Add earning", "second"))
    await bus.wait_until_idle()

    assert app_state.pop_notice()["message"] == "first"
    assert app_state.pop_notice()["message"] == "second"
    assert app_state.pop_notice() is None


@pytest.mark.asyncio
async def test_navigate_updates_route(app_state, bus):
    await app_state.navigate("favorites")
    await bus.wait_until_idle()

    assert app_state.route == "favorites"


@pytest.mark.asyncio
async def test_refresh_keeps_current_route(app_state, signed_in, fake_api, bus):
    await bus.wait_until_idle()
    assert app_state.route == events.ROUTE_HOME

    await app_state.navigate("my-progress")
    await bus.wait_until_idle()
    await signed_in.current_user()
    await bus.wait_until_idle()
    assert app_state.route == "my-progress"


@pytest.mark.asyncio
async def test_unauthenticated_screen_call_routes_to_login(app_state, signed_in, fake_api, profile_client, bus):
    await bus.wait_until_idle()
    fake_api.fail("POST", "/profile/earnings", status=401)
    screen = EarningsScreen(bus, signed_in, profile_client)

    assert not await screen.add("10")
    await bus.wait_until_idle()

    assert app_state.route == events.ROUTE_LOGIN
    assert not signed_in.is_authenticated
    assert app_state.notices == []


# --- Bootstrap ---


@pytest.fixture
def project_root(tmp_path: Path):
    settings = tmp_path / "academy" / "config" / "settings"
    settings.mkdir(parents=True)
    (settings / "project.yaml").write_text(
        yaml.safe_dump({"api": {"base_url": "http://api.test"}, "logging": {"log_dir": str(tmp_path / "logs")}}),
        encoding="utf-8",
    )
    yield tmp_path
    Store.reset()
    get_config_manager(Path.cwd())


@pytest.mark.asyncio
async def test_bootstrap_restores_stored_session(project_root, fake_api):
    fake_api.route("GET", "/auth/me", {"user": user_payload()})
    fake_api.route("GET", "/modules/m1", module_payload("m1"))
    fake_api.route("GET", "/progress/lessons/m1/1/status", {"isCompleted": True})
    fake_api.route("GET", "/favorites/m1/1/check", {"isFavorite": False})

    store = await bootstrap(
        project_root,
        credentials=MemoryTokenStorage(TOKEN),
        transport=fake_api.transport,
        setup_logging=False,
    )
    try:
        await store.bus.wait_until_idle()
        assert Store.get() is store
        assert store.session.user.id == "u1"
        assert store.app.route == events.ROUTE_HOME

        lesson = store.lesson_screen("m1", 1)
        await lesson.load()
        assert lesson.is_completed
        assert fake_api.last("GET", "/auth/me").url.host == "api.test"
    finally:
        await store.aclose()


@pytest.mark.asyncio
async def test_bootstrap_without_token_stays_on_login(project_root, fake_api):
    store = await bootstrap(
        project_root,
        credentials=MemoryTokenStorage(),
        transport=fake_api.transport,
        setup_logging=False,
    )
    try:
        await store.bus.wait_until_idle()
        assert store.session.session is None
        assert store.app.route == events.ROUTE_LOGIN
        assert fake_api.count() == 0
    finally:
        await store.aclose()


def test_store_is_a_single_instance(project_root):
    config = get_config_manager(project_root).get_config()
    Store.initialize(config, EventBus(), credentials=MemoryTokenStorage())
    with pytest.raises(RuntimeError):
        Store.initialize(config, EventBus(), credentials=MemoryTokenStorage())
