"""검색 오케스트레이터 상태 전이 및 stale 결과 폐기 테스트."""

from __future__ import annotations

import asyncio

from tests.mocks.mock_catalog_service import MockCatalogService, sample_activity, success_payload
from tottrot.schemas.enums import FailureKind, SearchMode, SearchStatus
from tottrot.schemas.selection import Selection
from tottrot.services.catalog_service import CatalogProtocolError, CatalogTimeoutError, CatalogTransportError
from tottrot.services.search_orchestrator import (
    CONNECTIVITY_ERROR_MESSAGE,
    TIMEOUT_ERROR_MESSAGE,
    SearchOrchestrator,
)


def test_initial_state_is_idle() -> None:
    orchestrator = SearchOrchestrator(MockCatalogService())

    assert orchestrator.status == SearchStatus.IDLE
    assert orchestrator.activities == []
    assert orchestrator.error_message is None


def test_successful_search_commits_activities() -> None:
    catalog = MockCatalogService(success_payload(sample_activity("sample_1"), sample_activity("sample_2")))
    orchestrator = SearchOrchestrator(catalog)

    outcome = asyncio.run(orchestrator.search(Selection(active_filters=("FREE",))))

    assert outcome.status == SearchStatus.SUCCESS
    assert outcome.is_current is True
    assert orchestrator.status == SearchStatus.SUCCESS
    assert [activity.id for activity in orchestrator.activities] == ["sample_1", "sample_2"]
    assert catalog.requests[0].mode == SearchMode.STRUCTURED


def test_mood_query_dispatches_mood_search() -> None:
    catalog = MockCatalogService()
    orchestrator = SearchOrchestrator(catalog)

    asyncio.run(orchestrator.search(Selection(mood_query="calm and cozy", active_filters=("HIGH ENERGY",))))

    (request,) = catalog.requests
    assert request.mode == SearchMode.MOOD
    assert request.to_body() == {"query": "calm and cozy", "location": "Berkeley"}


def test_application_failure_surfaces_api_message() -> None:
    orchestrator = SearchOrchestrator(MockCatalogService({"success": False, "error": "no activities"}))

    outcome = asyncio.run(orchestrator.search(Selection()))

    assert outcome.status == SearchStatus.FAILED
    assert outcome.failure_kind == FailureKind.APPLICATION
    assert orchestrator.error_message == "no activities"
    assert orchestrator.activities == []


def test_application_failure_without_message_uses_generic_message() -> None:
    orchestrator = SearchOrchestrator(MockCatalogService({"success": False}))

    asyncio.run(orchestrator.search(Selection()))

    assert orchestrator.error_message == CONNECTIVITY_ERROR_MESSAGE


def test_transport_and_protocol_failures_use_generic_message() -> None:
    for error, kind in (
        (CatalogTransportError("connection refused"), FailureKind.TRANSPORT),
        (CatalogProtocolError("undecodable"), FailureKind.PROTOCOL),
    ):
        orchestrator = SearchOrchestrator(MockCatalogService(error=error))

        outcome = asyncio.run(orchestrator.search(Selection()))

        assert outcome.status == SearchStatus.FAILED
        assert outcome.failure_kind == kind
        assert orchestrator.error_message == CONNECTIVITY_ERROR_MESSAGE


def test_catalog_timeout_uses_timeout_message() -> None:
    orchestrator = SearchOrchestrator(MockCatalogService(error=CatalogTimeoutError("read timed out")))

    outcome = asyncio.run(orchestrator.search(Selection()))

    assert outcome.failure_kind == FailureKind.TIMEOUT
    assert orchestrator.error_message == TIMEOUT_ERROR_MESSAGE


def test_bounded_wait_expiry_fails_with_timeout_message() -> None:
    catalog = MockCatalogService()
    orchestrator = SearchOrchestrator(catalog, timeout_seconds=0.05)

    async def scenario():
        catalog.gates["Berkeley"] = asyncio.Event()
        return await orchestrator.search(Selection())

    outcome = asyncio.run(scenario())

    assert outcome.status == SearchStatus.FAILED
    assert outcome.failure_kind == FailureKind.TIMEOUT
    assert orchestrator.error_message == TIMEOUT_ERROR_MESSAGE


def test_unexpected_exception_never_escapes() -> None:
    orchestrator = SearchOrchestrator(MockCatalogService(error=KeyError("boom")))

    outcome = asyncio.run(orchestrator.search(Selection()))

    assert outcome.status == SearchStatus.FAILED
    assert orchestrator.error_message == CONNECTIVITY_ERROR_MESSAGE


def test_new_search_replaces_results_wholesale() -> None:
    catalog = MockCatalogService(
        responses_by_location={
            "Berkeley": success_payload(sample_activity("a"), sample_activity("b")),
            "Oakland": success_payload(sample_activity("c")),
        }
    )
    orchestrator = SearchOrchestrator(catalog)

    asyncio.run(orchestrator.search(Selection(location="Berkeley")))
    asyncio.run(orchestrator.search(Selection(location="Oakland")))

    assert [activity.id for activity in orchestrator.activities] == ["c"]


def test_failed_search_accepts_retry_immediately() -> None:
    catalog = MockCatalogService(error=CatalogTransportError("offline"))
    orchestrator = SearchOrchestrator(catalog)

    asyncio.run(orchestrator.search(Selection()))
    assert orchestrator.status == SearchStatus.FAILED

    catalog.error = None
    catalog.default_response = success_payload(sample_activity("sample_1"))
    asyncio.run(orchestrator.search(Selection()))

    assert orchestrator.status == SearchStatus.SUCCESS
    assert orchestrator.error_message is None


def test_status_is_loading_while_request_in_flight() -> None:
    catalog = MockCatalogService(success_payload(sample_activity("sample_1")))
    orchestrator = SearchOrchestrator(catalog)

    async def scenario() -> SearchStatus:
        gate = asyncio.Event()
        catalog.gates["Berkeley"] = gate
        task = asyncio.create_task(orchestrator.search(Selection()))
        await asyncio.sleep(0.01)
        observed = orchestrator.status
        gate.set()
        await task
        return observed

    assert asyncio.run(scenario()) == SearchStatus.LOADING
    assert orchestrator.status == SearchStatus.SUCCESS


def test_earlier_search_resolving_later_is_discarded() -> None:
    catalog = MockCatalogService(
        responses_by_location={
            "Berkeley": success_payload(sample_activity("from_a")),
            "Oakland": success_payload(sample_activity("from_b")),
        }
    )
    orchestrator = SearchOrchestrator(catalog)

    async def scenario():
        gate_a = asyncio.Event()
        gate_b = asyncio.Event()
        catalog.gates = {"Berkeley": gate_a, "Oakland": gate_b}

        task_a = asyncio.create_task(orchestrator.search(Selection(location="Berkeley")))
        await asyncio.sleep(0)
        task_b = asyncio.create_task(orchestrator.search(Selection(location="Oakland")))
        await asyncio.sleep(0)

        gate_b.set()
        outcome_b = await task_b
        gate_a.set()
        outcome_a = await task_a
        return outcome_a, outcome_b

    outcome_a, outcome_b = asyncio.run(scenario())

    assert outcome_b.is_current is True
    assert outcome_a.is_current is False
    assert outcome_a.generation < outcome_b.generation
    assert [activity.id for activity in orchestrator.activities] == ["from_b"]
    assert orchestrator.status == SearchStatus.SUCCESS


def test_reset_marks_in_flight_search_stale() -> None:
    catalog = MockCatalogService(success_payload(sample_activity("late")))
    orchestrator = SearchOrchestrator(catalog)

    async def scenario():
        gate = asyncio.Event()
        catalog.gates["Berkeley"] = gate
        task = asyncio.create_task(orchestrator.search(Selection()))
        await asyncio.sleep(0)
        orchestrator.reset()
        gate.set()
        return await task

    outcome = asyncio.run(scenario())

    assert outcome.is_current is False
    assert orchestrator.status == SearchStatus.IDLE
    assert orchestrator.activities == []
