"""사용자 선택 상태(Selection) 스키마."""

from pydantic import BaseModel, ConfigDict, Field


class DurationBucket(BaseModel):
    """선택 가능한 소요 시간 구간."""

    model_config = ConfigDict(frozen=True)

    value: str = Field(..., description="카탈로그에 전달하는 구간 토큰 (예: '2 hrs')")
    label: str = Field(..., description="화면 표시용 라벨")
    description: str = Field(..., description="구간 설명")
    max_minutes: int | None = Field(default=None, description="구간 상한(분), 상한이 없으면 None")


DURATION_BUCKETS: tuple[DurationBucket, ...] = (
    DurationBucket(
        value="30 min",
        label="30 minutes",
        description="A quick outing close to home",
        max_minutes=30,
    ),
    DurationBucket(
        value="1 hr",
        label="1 hour",
        description="Enough time for a short class or a park visit",
        max_minutes=60,
    ),
    DurationBucket(
        value="2 hrs",
        label="2 hours",
        description="A proper adventure with travel time included",
        max_minutes=120,
    ),
    DurationBucket(
        value="3+ hrs",
        label="3 hours or more",
        description="Half-day trips, hikes and museums",
        max_minutes=None,
    ),
)

DURATION_VALUES: tuple[str, ...] = tuple(bucket.value for bucket in DURATION_BUCKETS)


def find_duration_bucket(value: str) -> DurationBucket | None:
    """토큰 값에 해당하는 소요 시간 구간을 찾는다."""
    for bucket in DURATION_BUCKETS:
        if bucket.value == value:
            return bucket
    return None


class Selection(BaseModel):
    """아직 제출되지 않은 사용자의 검색 입력 스냅샷.

    불변 모델이며, 변경은 항상 새 인스턴스를 만든다.

    Fields:
        location: 선택한 도시
        duration: 소요 시간 구간 토큰
        active_filters: 활성화된 태그 (삽입 순서 유지, 중복 없음)
        mood_query: 자유 입력 무드 검색어 (빈 문자열이면 무드 검색 아님)
    """

    model_config = ConfigDict(frozen=True)

    location: str = Field(default="Berkeley", description="선택한 도시")
    duration: str = Field(default="2 hrs", description="소요 시간 구간")
    active_filters: tuple[str, ...] = Field(default=(), description="활성 태그 목록")
    mood_query: str = Field(default="", description="무드 검색어")

    @property
    def has_mood_query(self) -> bool:
        return bool(self.mood_query.strip())
