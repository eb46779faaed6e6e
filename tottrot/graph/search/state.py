"""활동 검색 그래프 상태 정의."""

from typing import Any, TypedDict

from tottrot.schemas.activity import Activity
from tottrot.schemas.search import SearchRequest
from tottrot.schemas.selection import Selection


class SearchState(TypedDict, total=False):
    """활동 검색 그래프 상태.

    Keys:
        selection: 검색 시점의 Selection 스냅샷
        request: Query Builder가 만든 요청 기술자
        search_mode: structured / mood
        raw_response: 카탈로그 응답 본문
        activities: 정규화된 활동 목록
        error_kind: 실패 분류 (transport / protocol / application)
        error: 로그용 실패 상세
        api_error: API가 선언한 오류 메시지 (있을 때만)
    """

    # Input
    selection: Selection

    # Processing
    request: SearchRequest
    search_mode: str
    raw_response: dict[str, Any]

    # Output
    activities: list[Activity]
    error_kind: str | None
    error: str | None
    api_error: str | None
