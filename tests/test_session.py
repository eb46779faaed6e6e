"""세션 상태 기계 종단 간 테스트."""

from __future__ import annotations

import asyncio
from urllib.parse import parse_qs

import pytest

from tests.mocks.mock_catalog_service import MockCatalogService, sample_activity, success_payload
from tottrot.core.config import get_settings
from tottrot.schemas.enums import DEFAULT_LOCATIONS, Screen, SearchStatus
from tottrot.schemas.selection import DURATION_VALUES, Selection
from tottrot.services.catalog_service import CatalogTransportError
from tottrot.services.favorites_store import FavoritesStore
from tottrot.state.navigator import NavigationError
from tottrot.state.session import AppSession, InvalidSelectionError


def _make_session(catalog: MockCatalogService, selection: Selection | None = None) -> AppSession:
    return AppSession(catalog, FavoritesStore(None), initial_selection=selection)


def test_structured_search_success_moves_to_results() -> None:
    activities = [sample_activity("sample_1", "Corner Store Adventure"), sample_activity("sample_2", "Library")]
    catalog = MockCatalogService(success_payload(*activities))
    session = _make_session(catalog, Selection(location="San Francisco", duration="1 hr"))
    session.toggle_filter("FREE")

    asyncio.run(session.search())

    (request,) = catalog.requests
    decoded = parse_qs(request.to_query_string())
    assert decoded["filters[]"] == ["FREE"]
    assert decoded["location"] == ["San Francisco"]
    assert decoded["duration"] == ["1 hr"]

    snapshot = session.snapshot()
    assert snapshot.screen == Screen.RESULTS
    assert snapshot.search_status == SearchStatus.SUCCESS
    assert [(item.id, item.title) for item in snapshot.results] == [
        ("sample_1", "Corner Store Adventure"),
        ("sample_2", "Library"),
    ]
    assert snapshot.error_message is None


def test_application_failure_stays_on_main_with_message() -> None:
    catalog = MockCatalogService({"success": False, "error": "no activities"})
    session = _make_session(catalog, Selection(location="San Francisco", duration="1 hr"))
    session.toggle_filter("FREE")

    asyncio.run(session.search())

    snapshot = session.snapshot()
    assert snapshot.screen == Screen.MAIN
    assert snapshot.search_status == SearchStatus.FAILED
    assert snapshot.error_message == "no activities"
    assert snapshot.results == []


def test_choose_location_commits_and_returns_to_main() -> None:
    catalog = MockCatalogService(
        weather_response={
            "success": True,
            "weather": {"temperature_high": 68, "weather_condition": "Sunny", "precipitation_chance": 10},
        }
    )
    session = _make_session(catalog)

    session.open_screen(Screen.LOCATION)
    asyncio.run(session.choose_location("Oakland"))

    assert session.screen == Screen.MAIN
    assert session.selection.location == "Oakland"
    assert catalog.weather_requests == ["Oakland"]
    assert session.weather is not None
    assert session.weather.condition == "Sunny"
    assert session.weather.temperature_high == 68


def test_choose_location_rejects_values_outside_domain() -> None:
    session = _make_session(MockCatalogService())
    session.open_screen(Screen.LOCATION)

    with pytest.raises(InvalidSelectionError):
        asyncio.run(session.choose_location("Atlantis"))

    assert session.screen == Screen.LOCATION
    assert session.selection.location == "Berkeley"


def test_choose_location_requires_location_screen() -> None:
    session = _make_session(MockCatalogService())

    with pytest.raises(NavigationError):
        asyncio.run(session.choose_location("Oakland"))
    assert session.selection.location == "Berkeley"


def test_choose_duration_commits_and_returns_to_main() -> None:
    session = _make_session(MockCatalogService())

    session.open_screen(Screen.DURATION)
    session.choose_duration("3+ hrs")

    assert session.screen == Screen.MAIN
    assert session.selection.duration == "3+ hrs"

    session.open_screen(Screen.DURATION)
    with pytest.raises(InvalidSelectionError):
        session.choose_duration("all day")
    assert session.selection.duration == "3+ hrs"


def test_interests_screen_toggles_interest_tags() -> None:
    session = _make_session(MockCatalogService())

    session.open_screen(Screen.INTERESTS)
    session.toggle_filter("ANIMALS")
    session.close_interests()

    assert session.screen == Screen.MAIN
    assert session.selection.active_filters == ("ANIMALS",)

    with pytest.raises(InvalidSelectionError):
        session.toggle_filter("SKYDIVING")


def test_new_search_clears_mood_query_only() -> None:
    catalog = MockCatalogService(success_payload(sample_activity("sample_1")))
    session = _make_session(catalog, Selection(location="Oakland", duration="30 min", active_filters=("INDOOR",)))
    session.set_mood_query("rainy day fun")

    asyncio.run(session.search())
    assert session.screen == Screen.RESULTS

    session.new_search()

    snapshot = session.snapshot()
    assert snapshot.screen == Screen.MAIN
    assert snapshot.selection == Selection(location="Oakland", duration="30 min", active_filters=("INDOOR",))
    assert snapshot.search_status == SearchStatus.IDLE
    assert snapshot.results == []


def test_new_search_requires_results_screen() -> None:
    session = _make_session(MockCatalogService())

    with pytest.raises(NavigationError):
        session.new_search()


def test_filters_disabled_while_mood_query_active() -> None:
    session = _make_session(MockCatalogService())
    session.toggle_filter("FREE")

    session.set_mood_query("  ")
    assert session.snapshot().filters_enabled is True

    session.set_mood_query("messy art")
    assert session.snapshot().filters_enabled is False

    session.clear_mood_query()
    assert session.snapshot().filters_enabled is True
    assert session.selection.active_filters == ("FREE",)


def test_later_search_wins_over_slower_earlier_search() -> None:
    catalog = MockCatalogService(
        responses_by_location={
            "Berkeley": success_payload(sample_activity("from_a")),
            "Oakland": success_payload(sample_activity("from_b")),
        }
    )
    session = _make_session(catalog)

    async def scenario():
        gate_a = asyncio.Event()
        gate_b = asyncio.Event()
        catalog.gates = {"Berkeley": gate_a, "Oakland": gate_b}

        task_a = asyncio.create_task(session.search())
        await asyncio.sleep(0)
        session.open_screen(Screen.LOCATION)
        await session.choose_location("Oakland")
        task_b = asyncio.create_task(session.search())
        await asyncio.sleep(0)

        gate_b.set()
        await task_b
        gate_a.set()
        return await task_a

    stale_outcome = asyncio.run(scenario())

    assert stale_outcome.is_current is False
    snapshot = session.snapshot()
    assert snapshot.screen == Screen.RESULTS
    assert [item.id for item in snapshot.results] == ["from_b"]


def test_stale_success_does_not_override_later_failure() -> None:
    catalog = MockCatalogService(
        responses_by_location={
            "Berkeley": success_payload(sample_activity("from_a")),
            "Oakland": {"success": False, "error": "nothing in Oakland right now"},
        }
    )
    session = _make_session(catalog)

    async def scenario():
        gate_a = asyncio.Event()
        catalog.gates = {"Berkeley": gate_a}

        task_a = asyncio.create_task(session.search())
        await asyncio.sleep(0)
        session.open_screen(Screen.LOCATION)
        await session.choose_location("Oakland")
        await session.search()
        gate_a.set()
        await task_a

    asyncio.run(scenario())

    snapshot = session.snapshot()
    assert snapshot.screen == Screen.MAIN
    assert snapshot.search_status == SearchStatus.FAILED
    assert snapshot.error_message == "nothing in Oakland right now"
    assert snapshot.results == []


def test_results_carry_favorite_flags_across_searches() -> None:
    catalog = MockCatalogService(success_payload(sample_activity("sample_1"), sample_activity("sample_2")))
    session = _make_session(catalog)

    asyncio.run(session.search())
    session.toggle_favorite("sample_1")
    session.new_search()

    asyncio.run(session.search())

    flags = {item.id: item.is_favorite for item in session.snapshot().results}
    assert flags == {"sample_1": True, "sample_2": False}
    assert session.snapshot().favorites == ["sample_1"]


def test_load_locations_uses_catalog_list() -> None:
    catalog = MockCatalogService(locations_response={"success": True, "locations": ["Oakland", "Alameda"]})
    session = _make_session(catalog)

    locations = asyncio.run(session.load_locations())

    assert locations == ("Oakland", "Alameda")
    assert session.selection.location == "Oakland"


def test_load_locations_falls_back_to_defaults() -> None:
    session = _make_session(MockCatalogService(error=CatalogTransportError("offline")))

    locations = asyncio.run(session.load_locations())

    assert locations == DEFAULT_LOCATIONS
    assert session.selection.location == "Berkeley"


def test_from_settings_replaces_unknown_default_duration(monkeypatch) -> None:
    monkeypatch.setenv("DEFAULT_DURATION", "4 days")
    get_settings.cache_clear()

    try:
        session = AppSession.from_settings(MockCatalogService(), FavoritesStore(None))
    finally:
        get_settings.cache_clear()

    assert session.selection.duration in DURATION_VALUES
    assert session.selection.duration == "2 hrs"


def test_from_settings_keeps_known_default_duration(monkeypatch) -> None:
    monkeypatch.setenv("DEFAULT_DURATION", "30 min")
    get_settings.cache_clear()

    try:
        session = AppSession.from_settings(MockCatalogService(), FavoritesStore(None))
    finally:
        get_settings.cache_clear()

    assert session.selection.duration == "30 min"


def test_search_finishing_on_picker_keeps_picker_open() -> None:
    catalog = MockCatalogService(success_payload(sample_activity("sample_1")))
    session = _make_session(catalog)

    async def scenario():
        gate = asyncio.Event()
        catalog.gates = {"Berkeley": gate}

        task = asyncio.create_task(session.search())
        await asyncio.sleep(0)
        session.open_screen(Screen.DURATION)
        gate.set()
        return await task

    outcome = asyncio.run(scenario())

    assert outcome.is_current is True
    snapshot = session.snapshot()
    assert snapshot.screen == Screen.DURATION
    assert snapshot.search_status == SearchStatus.SUCCESS
    assert [item.id for item in snapshot.results] == ["sample_1"]

    session.choose_duration("1 hr")
    assert session.screen == Screen.MAIN
