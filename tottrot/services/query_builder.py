"""Selection 스냅샷을 카탈로그 요청 기술자로 변환하는 순수 함수."""

from tottrot.schemas.search import MoodSearch, SearchRequest, StructuredSearch
from tottrot.schemas.selection import Selection


def build_search_request(selection: Selection) -> SearchRequest:
    """Selection 하나로부터 정확히 하나의 요청을 만든다.

    무드 검색어가 공백이 아닌 문자를 포함하면 무드 검색이 항상 우선하며,
    이때 소요 시간과 태그 필터는 요청에 포함하지 않는다.
    그 외에는 위치/소요 시간/태그(순서 유지, 대소문자 그대로)/평점 정렬로
    구성된 구조화 검색을 만든다.
    """
    mood_query = selection.mood_query.strip()
    if mood_query:
        return MoodSearch(query=mood_query, location=selection.location)

    return StructuredSearch(
        location=selection.location,
        duration=selection.duration,
        filters=tuple(selection.active_filters),
    )
