"""애플리케이션 전역 설정을 관리하는 모듈."""

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """환경 변수 기반 설정 모델."""

    CATALOG_BASE_URL: str = "http://localhost:8000/api"
    CATALOG_API_KEY: str | None = None
    REQUEST_TIMEOUT_SECONDS: int = 30
    SEARCH_TIMEOUT_SECONDS: int = 15
    CATALOG_TIMEOUT_SECONDS: int = 10
    WEATHER_TIMEOUT_SECONDS: int = 5
    FAVORITES_DATABASE_URL: str = "sqlite:///./tottrot_favorites.db"
    DEFAULT_LOCATION: str = "Berkeley"
    DEFAULT_DURATION: str = "2 hrs"
    LOG_LEVEL: str = "INFO"
    EXPOSE_INTERNAL_ERRORS: bool = False
    CORS_ALLOW_ORIGINS: str = ""
    CORS_ALLOW_METHODS: str = "GET,POST,PUT,DELETE,OPTIONS"
    CORS_ALLOW_HEADERS: str = "Content-Type"
    CORS_ALLOW_CREDENTIALS: bool = False
    SECURITY_HEADERS_ENABLED: bool = True

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("CATALOG_BASE_URL", mode="before")
    @classmethod
    def _strip_catalog_base_url(cls, value: object) -> str:
        text = str(value or "").strip()
        return text.rstrip("/") or "http://localhost:8000/api"


@lru_cache
def get_settings() -> Settings:
    """Settings 인스턴스를 반환한다. 최초 호출 시에만 생성되고 이후 캐싱된다."""
    return Settings()
