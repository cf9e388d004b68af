import httpx
import pytest
import pytest_asyncio

from academy.shared.domain.engagement import FavoritesScreen
from academy.shared.domain.engagement.favorites import dedupe_favorites, filter_favorites
from academy.shared.domain.models import FavoriteLesson

from .conftest import favorite_payload


def _entries():
    return [
        FavoriteLesson.model_validate(p)
        for p in (
            favorite_payload("m1", 1, 1, "Вступ до курсу", "Основи"),
            favorite_payload("m1", 2, 1, "Алгоритми сортування", "Основи"),
            favorite_payload("m2", 1, 2, "Воронки продажів", "Маркетинг"),
            favorite_payload("m3", 4, 3, "Розбір кейсів", "Алгоритм запуску"),
        )
    ]


def test_search_matches_lesson_or_module_title():
    entries = _entries()

    result = filter_favorites(entries, "алгоритм")

    assert [e.key for e in result] == [("m1", 2), ("m3", 4)]


def test_search_and_module_filter_must_both_hold():
    entries = _entries()

    assert filter_favorites(entries, "алгоритм", module_number=2) == []
    assert [e.key for e in filter_favorites(entries, "", module_number=2)] == [("m2", 1)]
    assert filter_favorites(entries) == entries


def test_dedupe_keeps_first_entry_per_key():
    first, second, *_ = _entries()
    duplicate = first.model_copy(update={"lesson_title": "later copy"})

    unique = dedupe_favorites([first, second, duplicate])

    assert [e.lesson_title for e in unique] == ["Вступ до курсу", "Алгоритми сортування"]


@pytest_asyncio.fixture
async def screen(bus, signed_in, favorites_client, fake_api):
    payloads = [
        favorite_payload("m1", 1, 1, "Вступ до курсу", "Основи"),
        favorite_payload("m1", 2, 1, "Алгоритми сортування", "Основи"),
        favorite_payload("m2", 1, 2, "Воронки продажів", "Маркетинг"),
        favorite_payload("m1", 2, 1, "Алгоритми сортування", "Основи"),
    ]
    fake_api.route("GET", "/favorites", {"favorites": payloads, "total": len(payloads)})
    favorites = FavoritesScreen(bus, signed_in, favorites_client)
    await favorites.load()
    return favorites


@pytest.mark.asyncio
async def test_load_dedupes(screen):
    assert [e.key for e in screen.favorites] == [("m1", 1), ("m1", 2), ("m2", 1)]
    assert screen.module_numbers == [1, 2]


@pytest.mark.asyncio
async def test_filters_are_local_and_resettable(screen, fake_api):
    calls_before = fake_api.count()

    screen.set_search("алгоритм")
    screen.set_module_filter(2)
    assert screen.visible == []
    assert screen.has_active_filters

    screen.reset_filters()
    assert screen.search_text == ""
    assert screen.module_filter is None
    assert not screen.has_active_filters
    assert len(screen.visible) == 3
    assert fake_api.count() == calls_before


@pytest.mark.asyncio
async def test_remove_drops_entry(screen, fake_api):
    fake_api.route("DELETE", "/favorites/m1/2", {"success": True, "isFavorite": False})

    assert await screen.remove(("m1", 2))

    assert [e.key for e in screen.favorites] == [("m1", 1), ("m2", 1)]


@pytest.mark.asyncio
async def test_failed_remove_restores_in_place(screen, fake_api, notices, bus):
    fake_api.fail("DELETE", "/favorites/m1/2", status=500)

    assert not await screen.remove(("m1", 2))
    await bus.wait_until_idle()

    assert [e.key for e in screen.favorites] == [("m1", 1), ("m1", 2), ("m2", 1)]
    assert [n["message"] for n in notices] == ["Failed to remove lesson from favorites"]


@pytest.mark.asyncio
async def test_unknown_key_is_noop(screen, fake_api):
    calls_before = fake_api.count()

    assert not await screen.remove(("m9", 9))

    assert fake_api.count() == calls_before


@pytest.mark.asyncio
async def test_load_failure_leaves_empty_list(bus, signed_in, favorites_client, fake_api, notices):
    fake_api.fail("GET", "/favorites", status=500)
    favorites = FavoritesScreen(bus, signed_in, favorites_client)

    await favorites.load()
    await bus.wait_until_idle()

    assert favorites.favorites == []
    assert favorites.loaded
    assert notices == []


@pytest.mark.asyncio
async def test_repeated_adds_never_duplicate_an_entry(bus, signed_in, favorites_client, fake_api):
    # Server keeps every POST, including repeats for the same lesson
    stored = []

    def add(request):
        stored.append(favorite_payload("m1", 2, 1, "Алгоритми сортування", "Основи"))
        return httpx.Response(201, json={"success": True, "isFavorite": True})

    def remove(request):
        if stored:
            stored.pop()
        return httpx.Response(200, json={"success": True, "isFavorite": bool(stored)})

    fake_api.route_handler("POST", "/favorites/m1/2", add)
    fake_api.route_handler("DELETE", "/favorites/m1/2", remove)
    fake_api.route_handler("GET", "/favorites", lambda request: httpx.Response(200, json={"favorites": stored}))

    await favorites_client.add("m1", 2)
    await favorites_client.add("m1", 2)
    screen = FavoritesScreen(bus, signed_in, favorites_client)
    await screen.load()
    assert [e.key for e in screen.favorites] == [("m1", 2)]

    await screen.remove(("m1", 2))
    assert [e.key for e in screen.favorites] == [("m1", 2)]

    await screen.load()
    assert [e.key for e in screen.favorites] == [("m1", 2)]
