"""검색 요청의 생명주기(Idle → Loading → Success/Failed)를 관리하는 오케스트레이터."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field

from tottrot.core.logger import get_logger
from tottrot.graph.search import compiled_search_graph
from tottrot.graph.search.state import SearchState
from tottrot.schemas.activity import Activity
from tottrot.schemas.enums import FailureKind, SearchStatus
from tottrot.schemas.selection import Selection
from tottrot.services.catalog_service import CatalogServiceProtocol

logger = get_logger(__name__)

CONNECTIVITY_ERROR_MESSAGE = "Unable to connect to the activity catalog. Please try again."
TIMEOUT_ERROR_MESSAGE = "The search took too long. Please try again."


@dataclass(slots=True)
class SearchOutcome:
    """검색 1회의 결과.

    `is_current`가 False이면 더 최신 검색이 시작된 뒤 도착한 결과이며
    화면 상태에 반영되지 않았다.
    """

    generation: int
    status: SearchStatus
    activities: list[Activity] = field(default_factory=list)
    error_message: str | None = None
    failure_kind: FailureKind | None = None
    is_current: bool = True


def _resolve_error_message(kind: FailureKind | None, api_error: str | None) -> str:
    if kind == FailureKind.TIMEOUT:
        return TIMEOUT_ERROR_MESSAGE
    if kind == FailureKind.APPLICATION and api_error:
        return api_error
    return CONNECTIVITY_ERROR_MESSAGE


async def run_search_pipeline(selection: Selection, catalog: CatalogServiceProtocol) -> SearchState:
    """검색 그래프를 실행하고 최종 상태를 반환합니다."""
    initial_state: SearchState = {"selection": selection}
    return await compiled_search_graph.ainvoke(
        initial_state,
        config={"configurable": {"catalog": catalog}},
    )


class SearchOrchestrator:
    """검색 상태 기계.

    검색마다 단조 증가하는 세대(generation) 번호를 부여하고,
    가장 최근에 시작된 검색의 결과만 상태에 커밋한다.
    모든 실패는 Failed 상태와 사용자 메시지로 귀결되며 예외를 밖으로 던지지 않는다.
    """

    def __init__(self, catalog: CatalogServiceProtocol, timeout_seconds: float = 15) -> None:
        self._catalog = catalog
        self._timeout_seconds = timeout_seconds
        self._generation = 0
        self._status = SearchStatus.IDLE
        self._activities: list[Activity] = []
        self._error_message: str | None = None

    @property
    def status(self) -> SearchStatus:
        return self._status

    @property
    def activities(self) -> list[Activity]:
        return list(self._activities)

    @property
    def error_message(self) -> str | None:
        return self._error_message

    @property
    def generation(self) -> int:
        return self._generation

    def reset(self) -> None:
        """결과와 오류를 비우고 Idle로 돌아간다. 진행 중인 검색은 stale 처리된다."""
        self._generation += 1
        self._status = SearchStatus.IDLE
        self._activities = []
        self._error_message = None

    async def search(self, selection: Selection) -> SearchOutcome:
        """새 검색을 시작하고 완료 결과를 반환합니다."""
        self._generation += 1
        generation = self._generation
        self._status = SearchStatus.LOADING
        self._activities = []
        self._error_message = None
        logger.info("Search started: generation=%d location=%s", generation, selection.location)

        outcome = await self._execute(selection, generation)

        if generation != self._generation:
            outcome.is_current = False
            logger.info(
                "Discarding stale search result: generation=%d latest=%d status=%s",
                generation,
                self._generation,
                outcome.status,
            )
            return outcome

        self._status = outcome.status
        self._activities = list(outcome.activities)
        self._error_message = outcome.error_message
        logger.info(
            "Search committed: generation=%d status=%s results=%d",
            generation,
            outcome.status,
            len(outcome.activities),
        )
        return outcome

    async def _execute(self, selection: Selection, generation: int) -> SearchOutcome:
        try:
            result = await asyncio.wait_for(
                run_search_pipeline(selection, self._catalog),
                timeout=self._timeout_seconds,
            )
        except asyncio.CancelledError:
            raise
        except asyncio.TimeoutError:
            logger.warning("Search timed out: generation=%d timeout=%ss", generation, self._timeout_seconds)
            return SearchOutcome(
                generation=generation,
                status=SearchStatus.FAILED,
                error_message=TIMEOUT_ERROR_MESSAGE,
                failure_kind=FailureKind.TIMEOUT,
            )
        except Exception:
            logger.exception("Search pipeline raised unexpectedly: generation=%d", generation)
            return SearchOutcome(
                generation=generation,
                status=SearchStatus.FAILED,
                error_message=CONNECTIVITY_ERROR_MESSAGE,
                failure_kind=FailureKind.TRANSPORT,
            )

        if kind := result.get("error_kind"):
            failure_kind = FailureKind(kind)
            logger.warning(
                "Search failed: generation=%d kind=%s error=%s",
                generation,
                failure_kind,
                result.get("error"),
            )
            return SearchOutcome(
                generation=generation,
                status=SearchStatus.FAILED,
                error_message=_resolve_error_message(failure_kind, result.get("api_error")),
                failure_kind=failure_kind,
            )

        return SearchOutcome(
            generation=generation,
            status=SearchStatus.SUCCESS,
            activities=list(result.get("activities", [])),
        )
