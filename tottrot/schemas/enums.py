"""도메인 전반에서 공유하는 열거형과 닫힌 선택지 정의."""

from enum import StrEnum


class Screen(StrEnum):
    """View Navigator가 관리하는 화면."""

    MAIN = "main"
    LOCATION = "location"
    DURATION = "duration"
    RESULTS = "results"
    INTERESTS = "interests"


class SearchStatus(StrEnum):
    """검색 오케스트레이터 상태."""

    IDLE = "idle"
    LOADING = "loading"
    SUCCESS = "success"
    FAILED = "failed"


class SearchMode(StrEnum):
    """Query Builder가 선택한 요청 형태."""

    STRUCTURED = "structured"
    MOOD = "mood"


class CostCategory(StrEnum):
    """활동 비용 구분."""

    FREE = "free"
    PAID = "paid"
    UNKNOWN = "unknown"


class FailureKind(StrEnum):
    """검색 실패 분류 (전송/프로토콜/애플리케이션/타임아웃)."""

    TRANSPORT = "transport"
    PROTOCOL = "protocol"
    APPLICATION = "application"
    TIMEOUT = "timeout"


DEFAULT_LOCATIONS: tuple[str, ...] = (
    "Berkeley",
    "San Francisco",
    "Oakland",
    "San Jose",
    "Palo Alto",
)

FILTER_TAGS: tuple[str, ...] = ("OUTDOOR", "INDOOR", "FREE", "LOW ENERGY", "HIGH ENERGY")

INTEREST_TAGS: tuple[str, ...] = (
    "ANIMALS",
    "ARTS & CRAFTS",
    "MUSIC",
    "NATURE",
    "PLAYGROUNDS",
    "STORY TIME",
)

ALL_TAGS: tuple[str, ...] = FILTER_TAGS + INTEREST_TAGS

SORT_BY_RATING = "rating"
