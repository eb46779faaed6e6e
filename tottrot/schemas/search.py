"""Query Builder가 만드는 요청 기술자(request descriptor)."""

from typing import Literal
from urllib.parse import urlencode

from pydantic import BaseModel, ConfigDict, Field

from tottrot.schemas.enums import SORT_BY_RATING, SearchMode


class StructuredSearch(BaseModel):
    """파라미터 기반 구조화 검색 (`GET activities`)."""

    model_config = ConfigDict(frozen=True)

    mode: Literal[SearchMode.STRUCTURED] = SearchMode.STRUCTURED
    method: Literal["GET"] = "GET"
    endpoint: Literal["activities"] = "activities"
    location: str = Field(..., description="도시")
    duration: str = Field(..., description="소요 시간 구간")
    filters: tuple[str, ...] = Field(default=(), description="태그 (순서 유지, 원문 그대로)")
    sort_by: str = Field(default=SORT_BY_RATING, description="정렬 기준")

    def to_params(self) -> list[tuple[str, str]]:
        """반복 파라미터(`filters[]`)를 포함한 쿼리 파라미터 목록을 반환한다."""
        params: list[tuple[str, str]] = [
            ("location", self.location),
            ("duration", self.duration),
        ]
        params.extend(("filters[]", tag) for tag in self.filters)
        params.append(("sort_by", self.sort_by))
        return params

    def to_query_string(self) -> str:
        return urlencode(self.to_params())


class MoodSearch(BaseModel):
    """자유 입력 무드 검색 (`POST activities/mood-search`)."""

    model_config = ConfigDict(frozen=True)

    mode: Literal[SearchMode.MOOD] = SearchMode.MOOD
    method: Literal["POST"] = "POST"
    endpoint: Literal["activities/mood-search"] = "activities/mood-search"
    query: str = Field(..., min_length=1, description="정리된 무드 검색어")
    location: str = Field(..., description="도시")

    def to_body(self) -> dict[str, str]:
        return {"query": self.query, "location": self.location}


SearchRequest = StructuredSearch | MoodSearch
