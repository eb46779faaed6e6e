"""메인 화면 표시용 날씨 스냅샷."""

from pydantic import BaseModel, Field


class WeatherSnapshot(BaseModel):
    """위치 변경 시마다 갱신되는 읽기 전용 날씨 정보."""

    location: str = Field(..., description="조회한 도시")
    temperature_high: float | None = Field(default=None, description="최고 기온")
    condition: str | None = Field(default=None, description="날씨 상태")
    precipitation_chance: float | None = Field(default=None, description="강수 확률")
