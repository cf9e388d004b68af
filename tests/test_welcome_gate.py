import json

import pytest
import pytest_asyncio

from academy.shared.domain.engagement import WelcomeGate

from .conftest import user_payload


@pytest_asyncio.fixture
async def sorted_in(fake_api, session_store):
    fake_api.route("GET", "/auth/me", {"user": user_payload(faculty="Продюсер")})
    await session_store.current_user()
    return session_store


@pytest_asyncio.fixture
async def gate(bus, sorted_in, profile_client):
    welcome = WelcomeGate(bus, sorted_in, profile_client)
    await welcome.initialize()
    return welcome


@pytest.mark.asyncio
async def test_visible_for_sorted_user_who_has_not_seen_it(gate):
    assert gate.visible
    assert gate.faculty == "Продюсер"


@pytest.mark.asyncio
async def test_hidden_without_faculty(bus, signed_in, profile_client):
    welcome = WelcomeGate(bus, signed_in, profile_client)

    assert signed_in.user.faculty is None
    assert not welcome.visible


@pytest.mark.asyncio
async def test_hidden_once_seen(bus, fake_api, session_store, profile_client):
    fake_api.route("GET", "/auth/me", {"user": user_payload(faculty="Продюсер", hasSeenWelcomeModal=True)})
    await session_store.current_user()

    assert not WelcomeGate(bus, session_store, profile_client).visible


@pytest.mark.asyncio
async def test_dismiss_persists_flag(gate, fake_api, sorted_in):
    seen = user_payload(faculty="Продюсер", hasSeenWelcomeModal=True)
    fake_api.route("PUT", "/profile", {"user": seen})
    fake_api.route("GET", "/auth/me", {"user": seen})

    await gate.dismiss()

    assert not gate.visible
    assert json.loads(fake_api.last("PUT", "/profile").content) == {"hasSeenWelcomeModal": True}
    assert sorted_in.user.has_seen_welcome_modal


@pytest.mark.asyncio
async def test_dismiss_stays_hidden_when_persist_fails(gate, fake_api, notices, bus):
    fake_api.fail("PUT", "/profile", status=500)

    await gate.dismiss()
    await bus.wait_until_idle()

    assert not gate.visible
    assert fake_api.count("PUT", "/profile") == 1
    assert notices == []

    await gate.dismiss()
    assert fake_api.count("PUT", "/profile") == 1


@pytest.mark.asyncio
async def test_new_session_shows_it_again(gate, fake_api, sorted_in, bus):
    fake_api.fail("PUT", "/profile", status=500)
    await gate.dismiss()
    assert not gate.visible

    fake_api.route("POST", "/auth/logout", {"message": "ok"})
    fake_api.route("POST", "/auth/login", {"token": "tok-2", "user": user_payload(faculty="Продюсер")})
    await sorted_in.logout()
    await bus.wait_until_idle()
    await sorted_in.login("harry@example.com", "secret")

    assert gate.visible


@pytest.mark.asyncio
async def test_dismiss_without_user_does_nothing(bus, session_store, profile_client, fake_api):
    welcome = WelcomeGate(bus, session_store, profile_client)

    await welcome.dismiss()

    assert not welcome.visible
    assert fake_api.count("PUT", "/profile") == 0
