"""활동 카탈로그 서비스 추상 프로토콜 및 예외 정의."""

from abc import ABC, abstractmethod
from typing import Any

from tottrot.schemas.search import SearchRequest


class CatalogError(RuntimeError):
    """카탈로그 호출 실패의 기반 예외."""


class CatalogTransportError(CatalogError):
    """응답을 받기 전에 요청이 실패한 경우 (네트워크 단절 등)."""


class CatalogTimeoutError(CatalogTransportError):
    """카탈로그 응답 대기 시간이 초과된 경우."""


class CatalogProtocolError(CatalogError):
    """응답은 받았으나 기대한 형태로 해석할 수 없는 경우."""


class CatalogServiceProtocol(ABC):
    """활동 카탈로그 API 호출을 위한 인터페이스를 정의합니다.

    모든 메서드는 디코딩된 JSON 객체(`dict`)를 그대로 반환하며,
    `success` 필드 해석은 호출자가 담당합니다.
    """

    @abstractmethod
    async def fetch_activities(self, request: SearchRequest) -> dict[str, Any]:
        """구조화 검색 또는 무드 검색을 실행합니다.

        Args:
            request: Query Builder가 만든 요청 기술자

        Returns:
            `{success, activities, error?}` 형태의 응답 본문

        Raises:
            CatalogTransportError: 전송 실패
            CatalogProtocolError: 응답 해석 실패
        """
        raise NotImplementedError

    @abstractmethod
    async def fetch_locations(self) -> dict[str, Any]:
        """선택 가능한 도시 목록을 조회합니다 (`{success, locations}`)."""
        raise NotImplementedError

    @abstractmethod
    async def fetch_weather(self, location: str) -> dict[str, Any]:
        """도시의 날씨 정보를 조회합니다 (`{success, weather}`)."""
        raise NotImplementedError
