"""세션 스냅샷 및 HTTP 요청/응답 스키마."""

from pydantic import BaseModel, Field

from tottrot.schemas.activity import Activity
from tottrot.schemas.enums import Screen, SearchStatus
from tottrot.schemas.selection import DurationBucket, Selection
from tottrot.schemas.weather import WeatherSnapshot


class ActivityView(Activity):
    """즐겨찾기 여부가 표시된 결과 항목."""

    is_favorite: bool = Field(default=False, description="즐겨찾기 여부")


class SessionSnapshot(BaseModel):
    """세션 상태 기계의 현재 값.

    Fields:
        screen: 현재 화면
        selection: 현재 Selection
        search_status: 검색 상태
        error_message: 마지막 실패 메시지 (Failed일 때만)
        results: 현재 결과 목록
        filters_enabled: 무드 검색어가 있으면 태그 필터는 요청에 쓰이지 않으므로 False
        favorites: 즐겨찾기 ID 목록
        weather: 메인 화면 날씨
        locations: 선택 가능한 도시 목록
    """

    screen: Screen
    selection: Selection
    search_status: SearchStatus
    error_message: str | None = None
    results: list[ActivityView] = Field(default_factory=list)
    filters_enabled: bool = True
    favorites: list[str] = Field(default_factory=list)
    weather: WeatherSnapshot | None = None
    locations: list[str] = Field(default_factory=list)


class LocationChoice(BaseModel):
    location: str = Field(..., min_length=1, description="선택한 도시")


class DurationChoice(BaseModel):
    duration: str = Field(..., min_length=1, description="선택한 소요 시간 구간")


class FilterToggle(BaseModel):
    tag: str = Field(..., min_length=1, description="토글할 태그")


class MoodQueryBody(BaseModel):
    query: str = Field(..., description="무드 검색어")


class FavoriteToggle(BaseModel):
    activity_id: str = Field(..., min_length=1, description="활동 ID")


class FavoriteStatus(BaseModel):
    activity_id: str = Field(..., description="활동 ID")
    is_favorite: bool = Field(..., description="즐겨찾기 여부")


class OptionsResponse(BaseModel):
    """선택 화면에 표시할 닫힌 선택지 목록."""

    locations: list[str] = Field(..., description="도시 목록")
    durations: list[DurationBucket] = Field(..., description="소요 시간 구간 목록")
    filter_tags: list[str] = Field(..., description="메인 화면 필터 태그")
    interest_tags: list[str] = Field(..., description="관심사 화면 태그")
