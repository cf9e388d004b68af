from __future__ import annotations

from typing import Any, Callable, Dict, List, Tuple, Union

import httpx
import pytest
import pytest_asyncio

from academy.shared.core import events
from academy.shared.core.event_bus import EventBus
from academy.shared.domain.resources import (
    AdminClient,
    AuthClient,
    FavoritesClient,
    ModulesClient,
    ProfileClient,
    ProgressClient,
)
from academy.shared.domain.session.session_store import SessionStore
from academy.shared.infrastructure.http.api_client import ApiClient
from academy.shared.infrastructure.persistence.token_storage import MemoryTokenStorage

BASE_URL = "http://api.test"
TOKEN = "tok-1"

Handler = Callable[[httpx.Request], httpx.Response]
RouteTarget = Union[Handler, Tuple[int, Any]]


class FakeApi:
    """In-process stand-in for the course API, served through httpx.MockTransport."""

    def __init__(self) -> None:
        self.routes: Dict[Tuple[str, str], RouteTarget] = {}
        self.calls: List[httpx.Request] = []

    def route(self, method: str, path: str, body: Any = None, status: int = 200) -> None:
        self.routes[(method, path)] = (status, body)

    def route_handler(self, method: str, path: str, handler: Handler) -> None:
        self.routes[(method, path)] = handler

    def fail(self, method: str, path: str, status: int = 500, message: str | None = None) -> None:
        self.route(method, path, {"message": message} if message else {}, status)

    def count(self, method: str | None = None, path: str | None = None) -> int:
        return sum(
            1 for request in self.calls
            if (method is None or request.method == method)
            and (path is None or request.url.path == path)
        )

    def last(self, method: str, path: str) -> httpx.Request:
        matching = [r for r in self.calls if r.method == method and r.url.path == path]
        assert matching, f"no {method} {path} issued"
        return matching[-1]

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.calls.append(request)
        target = self.routes.get((request.method, request.url.path))
        if target is None:
            return httpx.Response(404, json={"message": f"no route {request.method} {request.url.path}"})
        if callable(target):
            return target(request)
        status, body = target
        if body is None:
            return httpx.Response(status)
        return httpx.Response(status, json=body)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handle)


# --- Payload builders ---


def user_payload(**overrides: Any) -> Dict[str, Any]:
    data = {
        "id": "u1",
        "email": "harry@example.com",
        "firstName": "Harry",
        "lastName": "Potter",
        "faculty": None,
        "isAdmin": False,
        "hasCompletedSorting": True,
        "hasAcceptedRules": True,
        "hasSeenWelcomeModal": False,
    }
    data.update(overrides)
    return data


def lesson_payload(number: int, title: str = "", is_completed: bool = False) -> Dict[str, Any]:
    return {
        "number": number,
        "title": title or f"Lesson {number}",
        "videoUrl": f"https://youtu.be/v{number}",
        "description": "",
        "materials": [{"type": "pdf", "title": "Notes", "url": "https://cdn.test/notes.pdf"}],
        "homework": "",
        "duration": 15,
        "isCompleted": is_completed,
    }


def module_payload(module_id: str = "m1", number: int = 1, lessons: int = 3, **overrides: Any) -> Dict[str, Any]:
    data = {
        "_id": module_id,
        "number": number,
        "title": f"Module {number}",
        "description": "",
        "isLocked": False,
        "lessons": [lesson_payload(n) for n in range(1, lessons + 1)],
        "progress": 0,
        "category": "core",
    }
    data.update(overrides)
    return data


def favorite_payload(
    module_id: str = "m1",
    lesson_number: int = 1,
    module_number: int = 1,
    lesson_title: str = "Intro",
    module_title: str = "Basics",
) -> Dict[str, Any]:
    return {
        "moduleId": module_id,
        "moduleNumber": module_number,
        "moduleTitle": module_title,
        "lessonNumber": lesson_number,
        "lessonTitle": lesson_title,
        "videoUrl": "",
        "description": "",
        "duration": 10,
        "isCompleted": False,
        "addedAt": "2026-10-01T10:00:00Z",
    }


def earning_payload(earning_id: str, amount: float, date: str) -> Dict[str, Any]:
    return {"_id": earning_id, "amount": amount, "date": date, "createdAt": date}


def admin_user_payload(user_id: str, faculty: str | None = None, is_admin: bool = False) -> Dict[str, Any]:
    return {
        "id": user_id,
        "email": f"{user_id}@example.com",
        "firstName": user_id.upper(),
        "lastName": "",
        "faculty": faculty,
        "isAdmin": is_admin,
        "earnings": 0,
        "completedLessonsCount": 0,
        "completedModulesCount": 0,
    }


# --- Fixtures ---


@pytest.fixture
def fake_api() -> FakeApi:
    return FakeApi()


@pytest.fixture
def credentials() -> MemoryTokenStorage:
    return MemoryTokenStorage(TOKEN)


@pytest.fixture
def bus() -> EventBus:
    return EventBus()


@pytest_asyncio.fixture
async def api(fake_api: FakeApi, credentials: MemoryTokenStorage):
    client = ApiClient(BASE_URL, credentials, transport=fake_api.transport)
    yield client
    await client.aclose()


@pytest.fixture
def auth_client(api: ApiClient) -> AuthClient:
    return AuthClient(api)


@pytest.fixture
def modules_client(api: ApiClient) -> ModulesClient:
    return ModulesClient(api)


@pytest.fixture
def progress_client(api: ApiClient) -> ProgressClient:
    return ProgressClient(api)


@pytest.fixture
def favorites_client(api: ApiClient) -> FavoritesClient:
    return FavoritesClient(api)


@pytest.fixture
def profile_client(api: ApiClient) -> ProfileClient:
    return ProfileClient(api)


@pytest.fixture
def admin_client(api: ApiClient) -> AdminClient:
    return AdminClient(api)


@pytest.fixture
def session_store(bus: EventBus, auth_client: AuthClient, credentials: MemoryTokenStorage) -> SessionStore:
    return SessionStore(bus, auth_client, credentials)


@pytest_asyncio.fixture
async def signed_in(fake_api: FakeApi, session_store: SessionStore) -> SessionStore:
    """Session store with a live session for user ``u1``."""
    fake_api.route("GET", "/auth/me", {"user": user_payload()})
    await session_store.current_user()
    return session_store


@pytest_asyncio.fixture
async def notices(bus: EventBus) -> List[Dict[str, Any]]:
    received: List[Dict[str, Any]] = []

    async def collect(payload: Dict[str, Any]) -> None:
        received.append(payload)

    await bus.subscribe(events.TOPIC_NOTICE, collect)
    return received


@pytest_asyncio.fixture
async def expirations(bus: EventBus) -> List[Dict[str, Any]]:
    received: List[Dict[str, Any]] = []

    async def collect(payload: Dict[str, Any]) -> None:
        received.append(payload)

    await bus.subscribe(events.TOPIC_SESSION_EXPIRED, collect)
    return received
