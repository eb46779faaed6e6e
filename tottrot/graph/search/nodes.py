"""활동 검색 그래프 노드 함수."""

from __future__ import annotations

from typing import Any

from langchain_core.runnables import RunnableConfig
from pydantic import ValidationError

from tottrot.core.logger import get_logger
from tottrot.graph.search.state import SearchState
from tottrot.schemas.activity import Activity
from tottrot.schemas.enums import FailureKind
from tottrot.schemas.search import StructuredSearch
from tottrot.services.catalog_service import (
    CatalogProtocolError,
    CatalogServiceProtocol,
    CatalogTimeoutError,
    CatalogTransportError,
)
from tottrot.services.query_builder import build_search_request

logger = get_logger(__name__)


def build_request(state: SearchState) -> dict[str, Any]:
    """Selection 스냅샷으로부터 요청 기술자를 만든다."""
    request = build_search_request(state["selection"])
    if isinstance(request, StructuredSearch):
        logger.info("Search request built: mode=%s %s?%s", request.mode, request.endpoint, request.to_query_string())
    else:
        logger.info("Search request built: mode=%s location=%s", request.mode, request.location)
    return {"request": request, "search_mode": request.mode}


async def dispatch_request(state: SearchState, config: RunnableConfig) -> dict[str, Any]:
    """카탈로그 API에 요청을 보내고 응답 본문을 상태에 담는다."""
    catalog: CatalogServiceProtocol = config["configurable"]["catalog"]

    try:
        payload = await catalog.fetch_activities(state["request"])
    except CatalogTimeoutError as exc:
        return {"error_kind": FailureKind.TIMEOUT, "error": str(exc) or "catalog timeout"}
    except CatalogProtocolError as exc:
        return {"error_kind": FailureKind.PROTOCOL, "error": str(exc)}
    except CatalogTransportError as exc:
        return {"error_kind": FailureKind.TRANSPORT, "error": str(exc)}

    return {"raw_response": payload}


def _parse_activities(raw_items: list[Any]) -> list[Activity]:
    activities: list[Activity] = []
    seen_ids: set[str] = set()
    for index, item in enumerate(raw_items):
        if not isinstance(item, dict):
            logger.warning("Skipping non-object activity at index=%d", index)
            continue
        try:
            activity = Activity.model_validate(item)
        except ValidationError as exc:
            logger.warning("Skipping invalid activity at index=%d: %s", index, exc.errors()[0].get("msg"))
            continue
        if activity.id in seen_ids:
            continue
        seen_ids.add(activity.id)
        activities.append(activity)
    return activities


def normalize_response(state: SearchState) -> dict[str, Any]:
    """응답 본문의 성공 여부를 판정하고 활동 목록을 정규화한다."""
    payload = state.get("raw_response") or {}
    success = payload.get("success")

    if success is False:
        api_error = payload.get("error")
        message = api_error.strip() if isinstance(api_error, str) and api_error.strip() else None
        return {
            "error_kind": FailureKind.APPLICATION,
            "error": message or "catalog reported failure without a message",
            "api_error": message,
        }

    if success is not True:
        return {"error_kind": FailureKind.PROTOCOL, "error": "missing success indicator"}

    raw_items = payload.get("activities")
    if not isinstance(raw_items, list):
        return {"error_kind": FailureKind.PROTOCOL, "error": "activities is not a list"}

    activities = _parse_activities(raw_items)
    logger.info("Search response normalized: received=%d kept=%d", len(raw_items), len(activities))
    return {"activities": activities}
