"""세션 이벤트 API.

화면 렌더링 계층이 세션 상태 기계를 HTTP로 구동할 수 있도록
이름 있는 이벤트를 엔드포인트로 노출한다.
"""

from typing import NoReturn

from fastapi import APIRouter, Depends, HTTPException, status

from tottrot.api.dependencies import get_app_session
from tottrot.core.logger import get_logger
from tottrot.schemas.enums import FILTER_TAGS, INTEREST_TAGS, Screen
from tottrot.schemas.selection import DURATION_BUCKETS
from tottrot.schemas.session import (
    DurationChoice,
    FilterToggle,
    LocationChoice,
    MoodQueryBody,
    OptionsResponse,
    SessionSnapshot,
)
from tottrot.state.navigator import NavigationError
from tottrot.state.session import AppSession, InvalidSelectionError

router = APIRouter(prefix="/api/v1", tags=["session"])
logger = get_logger(__name__)


def _raise_http(exc: ValueError) -> NoReturn:
    if isinstance(exc, NavigationError):
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc)) from exc
    raise HTTPException(status_code=422, detail=str(exc)) from exc


@router.get("/session", response_model=SessionSnapshot)
def get_session(session: AppSession = Depends(get_app_session)) -> SessionSnapshot:  # noqa: B008
    """현재 세션 상태를 반환합니다."""
    return session.snapshot()


@router.get("/options", response_model=OptionsResponse)
def get_options(session: AppSession = Depends(get_app_session)) -> OptionsResponse:  # noqa: B008
    """선택 화면에 표시할 선택지를 반환합니다."""
    return OptionsResponse(
        locations=list(session.locations),
        durations=list(DURATION_BUCKETS),
        filter_tags=list(FILTER_TAGS),
        interest_tags=list(INTEREST_TAGS),
    )


@router.post("/session/screens/{screen}", response_model=SessionSnapshot)
def open_screen(screen: Screen, session: AppSession = Depends(get_app_session)) -> SessionSnapshot:  # noqa: B008
    """메인 화면에서 선택 화면으로 이동합니다."""
    try:
        session.open_screen(screen)
    except NavigationError as exc:
        _raise_http(exc)
    return session.snapshot()


@router.post("/session/location", response_model=SessionSnapshot)
async def choose_location(
    body: LocationChoice,
    session: AppSession = Depends(get_app_session),  # noqa: B008
) -> SessionSnapshot:
    """도시를 선택하고 메인으로 돌아갑니다."""
    try:
        await session.choose_location(body.location)
    except ValueError as exc:
        _raise_http(exc)
    return session.snapshot()


@router.post("/session/duration", response_model=SessionSnapshot)
def choose_duration(body: DurationChoice, session: AppSession = Depends(get_app_session)) -> SessionSnapshot:  # noqa: B008
    """소요 시간을 선택하고 메인으로 돌아갑니다."""
    try:
        session.choose_duration(body.duration)
    except ValueError as exc:
        _raise_http(exc)
    return session.snapshot()


@router.post("/session/interests/close", response_model=SessionSnapshot)
def close_interests(session: AppSession = Depends(get_app_session)) -> SessionSnapshot:  # noqa: B008
    try:
        session.close_interests()
    except NavigationError as exc:
        _raise_http(exc)
    return session.snapshot()


@router.post("/session/filters/toggle", response_model=SessionSnapshot)
def toggle_filter(body: FilterToggle, session: AppSession = Depends(get_app_session)) -> SessionSnapshot:  # noqa: B008
    try:
        session.toggle_filter(body.tag)
    except InvalidSelectionError as exc:
        _raise_http(exc)
    return session.snapshot()


@router.put("/session/mood", response_model=SessionSnapshot)
def set_mood_query(body: MoodQueryBody, session: AppSession = Depends(get_app_session)) -> SessionSnapshot:  # noqa: B008
    session.set_mood_query(body.query)
    return session.snapshot()


@router.delete("/session/mood", response_model=SessionSnapshot)
def clear_mood_query(session: AppSession = Depends(get_app_session)) -> SessionSnapshot:  # noqa: B008
    session.clear_mood_query()
    return session.snapshot()


@router.post("/session/search", response_model=SessionSnapshot)
async def search(session: AppSession = Depends(get_app_session)) -> SessionSnapshot:  # noqa: B008
    """현재 선택으로 검색합니다. 실패해도 200과 함께 오류 메시지를 담은 상태를 반환합니다."""
    outcome = await session.search()
    if not outcome.is_current:
        logger.info("Search request %d superseded by a newer search", outcome.generation)
    return session.snapshot()


@router.post("/session/new-search", response_model=SessionSnapshot)
def new_search(session: AppSession = Depends(get_app_session)) -> SessionSnapshot:  # noqa: B008
    """결과 화면에서 새 검색을 시작합니다."""
    try:
        session.new_search()
    except NavigationError as exc:
        _raise_http(exc)
    return session.snapshot()
