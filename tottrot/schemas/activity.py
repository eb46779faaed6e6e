"""카탈로그 API가 반환하는 활동(Activity) 모델."""

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, computed_field, field_validator, model_validator

from tottrot.schemas.enums import CostCategory


class Activity(BaseModel):
    """검색 결과로 받은 단일 활동.

    선택 필드는 응답에 없으면 None(또는 빈 목록)으로 남기며 임의로 채우지 않는다.
    """

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    id: str = Field(..., description="소스 시스템이 부여한 식별자")
    title: str = Field(..., description="활동 제목")
    description: str = Field(default="", description="기본 설명")
    enhanced_description: str | None = Field(default=None, description="표시 시 기본 설명을 대체하는 설명")
    duration_label: str | None = Field(
        default=None,
        validation_alias=AliasChoices("duration_label", "duration"),
        description="소요 시간 표시 문자열",
    )
    duration_minutes: float | None = Field(default=None, description="소요 시간(분)")
    cost_category: CostCategory = Field(default=CostCategory.UNKNOWN, description="비용 구분")
    price_min: float | None = Field(default=None, description="최저 가격 (유료일 때만)")
    price_max: float | None = Field(default=None, description="최고 가격 (유료일 때만)")
    venue_name: str | None = Field(default=None, description="장소 이름")
    address: str | None = Field(default=None, description="주소")
    city: str | None = Field(default=None, description="도시")
    rating: float = Field(default=0.0, description="평점 (0~5)")
    review_count: int | None = Field(default=None, description="리뷰 수")
    is_open_now: bool | None = Field(default=None, description="현재 영업 여부")
    tags: list[str] = Field(default_factory=list, description="태그 목록 (순서 유지)")
    mood_tags: list[str] = Field(default_factory=list, description="무드 태그 목록")
    joy_factors: str | None = Field(default=None, description="아이가 좋아할 포인트")
    parent_whisper: str | None = Field(default=None, description="보호자를 위한 팁")
    surprise_element: str | None = Field(default=None, description="깜짝 요소")
    spontaneity_score: float | None = Field(default=None, description="즉흥성 점수 (0~1)")
    source_system: str = Field(default="unknown", description="데이터 출처 시스템")

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, value: object) -> str:
        if value is None or isinstance(value, bool):
            raise ValueError("activity id is required")
        text = str(value).strip()
        if not text:
            raise ValueError("activity id is required")
        return text

    @field_validator("cost_category", mode="before")
    @classmethod
    def _normalize_cost_category(cls, value: object) -> CostCategory:
        normalized = str(value or "").strip().lower()
        try:
            return CostCategory(normalized)
        except ValueError:
            return CostCategory.UNKNOWN

    @field_validator("rating", mode="before")
    @classmethod
    def _clamp_rating(cls, value: object) -> float:
        try:
            numeric = float(value) if value is not None else 0.0
        except (TypeError, ValueError):
            numeric = 0.0
        return min(5.0, max(0.0, numeric))

    @field_validator("spontaneity_score", mode="before")
    @classmethod
    def _clamp_spontaneity(cls, value: object) -> float | None:
        if value is None:
            return None
        try:
            numeric = float(value)
        except (TypeError, ValueError):
            return None
        return min(1.0, max(0.0, numeric))

    @field_validator(
        "enhanced_description",
        "duration_label",
        "venue_name",
        "address",
        "city",
        "joy_factors",
        "parent_whisper",
        "surprise_element",
        mode="before",
    )
    @classmethod
    def _text_or_none(cls, value: object) -> str | None:
        return value if isinstance(value, str) else None

    @field_validator("description", mode="before")
    @classmethod
    def _text_or_empty(cls, value: object) -> str:
        return value if isinstance(value, str) else ""

    @field_validator("duration_minutes", "price_min", "price_max", mode="before")
    @classmethod
    def _number_or_none(cls, value: object) -> float | None:
        if value is None or isinstance(value, bool):
            return None
        try:
            return float(value)
        except (TypeError, ValueError):
            return None

    @field_validator("review_count", mode="before")
    @classmethod
    def _count_or_none(cls, value: object) -> int | None:
        if value is None or isinstance(value, bool):
            return None
        try:
            numeric = float(value)
        except (TypeError, ValueError):
            return None
        if numeric < 0 or not numeric.is_integer():
            return None
        return int(numeric)

    @field_validator("is_open_now", mode="before")
    @classmethod
    def _flag_or_none(cls, value: object) -> bool | None:
        if isinstance(value, bool):
            return value
        if isinstance(value, str):
            return {"true": True, "false": False}.get(value.strip().lower())
        return None

    @field_validator("tags", "mood_tags", mode="before")
    @classmethod
    def _string_entries(cls, value: object) -> list[str]:
        # 순서는 유지하고 문자열이 아닌 항목만 버린다
        if not isinstance(value, list):
            return []
        return [item for item in value if isinstance(item, str)]

    @model_validator(mode="after")
    def _drop_prices_unless_paid(self) -> "Activity":
        if self.cost_category is not CostCategory.PAID:
            self.price_min = None
            self.price_max = None
        return self

    @computed_field
    @property
    def display_description(self) -> str:
        return self.enhanced_description or self.description
