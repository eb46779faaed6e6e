"""requests 기반 활동 카탈로그 API 클라이언트."""

from __future__ import annotations

import asyncio
from functools import lru_cache
from typing import Any
from urllib.parse import quote

import requests

from tottrot.core.config import get_settings
from tottrot.core.logger import get_logger
from tottrot.core.timeout_policy import get_timeout_policy, to_requests_timeout
from tottrot.schemas.search import MoodSearch, SearchRequest
from tottrot.services.catalog_service import (
    CatalogProtocolError,
    CatalogServiceProtocol,
    CatalogTimeoutError,
    CatalogTransportError,
)

logger = get_logger(__name__)


class HttpCatalogService(CatalogServiceProtocol):
    """HTTP JSON API 기반 카탈로그 서비스."""

    _LOCATIONS_PATH = "locations"
    _WEATHER_PATH = "weather"

    def __init__(
        self,
        base_url: str,
        timeout_seconds: int = 10,
        weather_timeout_seconds: int = 5,
        api_key: str | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout_seconds = timeout_seconds
        self._weather_timeout_seconds = weather_timeout_seconds
        self._api_key = api_key.strip() if api_key else ""

    @classmethod
    def from_settings(cls) -> HttpCatalogService:
        """애플리케이션 설정으로 서비스 인스턴스를 생성합니다."""
        settings = get_settings()
        timeout_policy = get_timeout_policy(settings)
        return cls(
            base_url=settings.CATALOG_BASE_URL,
            timeout_seconds=timeout_policy.catalog_timeout_seconds,
            weather_timeout_seconds=timeout_policy.weather_timeout_seconds,
            api_key=settings.CATALOG_API_KEY,
        )

    async def fetch_activities(self, request: SearchRequest) -> dict[str, Any]:
        """요청 형태에 맞춰 활동 검색을 실행합니다."""
        if isinstance(request, MoodSearch):
            return await self._request(method="POST", path=request.endpoint, payload=request.to_body())
        return await self._request(method="GET", path=request.endpoint, params=request.to_params())

    async def fetch_locations(self) -> dict[str, Any]:
        return await self._request(method="GET", path=self._LOCATIONS_PATH)

    async def fetch_weather(self, location: str) -> dict[str, Any]:
        return await self._request(
            method="GET",
            path=f"{self._WEATHER_PATH}/{quote(location, safe='')}",
            timeout_seconds=self._weather_timeout_seconds,
        )

    async def _request(
        self,
        method: str,
        path: str,
        payload: dict[str, Any] | None = None,
        params: list[tuple[str, str]] | None = None,
        timeout_seconds: int | None = None,
    ) -> dict[str, Any]:
        url = f"{self._base_url}/{path}"
        headers = {"Accept": "application/json"}
        if payload is not None:
            headers["Content-Type"] = "application/json"
        if self._api_key:
            headers["Authorization"] = f"Bearer {self._api_key}"
        request_timeout = to_requests_timeout(timeout_seconds or self._timeout_seconds)

        def _send() -> requests.Response:
            with requests.Session() as session:
                return session.request(
                    method=method,
                    url=url,
                    json=payload,
                    params=params,
                    headers=headers,
                    timeout=request_timeout,
                )

        try:
            response = await asyncio.to_thread(_send)
        except requests.Timeout as exc:
            logger.error("Catalog request timed out: method=%s url=%s error=%s", method, url, exc)
            raise CatalogTimeoutError(str(exc)) from exc
        except requests.RequestException as exc:
            logger.error("Catalog request failed: method=%s url=%s error=%s", method, url, exc)
            raise CatalogTransportError(str(exc)) from exc

        try:
            body = response.json()
        except ValueError as exc:
            logger.error(
                "Catalog response parse failed: status=%s url=%s body=%s",
                response.status_code,
                url,
                (response.text or "")[:200],
            )
            raise CatalogProtocolError(f"undecodable response body (status={response.status_code})") from exc

        if not isinstance(body, dict):
            raise CatalogProtocolError(f"unexpected response shape: {type(body).__name__}")

        if not response.ok:
            logger.warning("Catalog API error: status=%s url=%s error=%s", response.status_code, url, body.get("error"))
            return {**body, "success": False}

        return body


@lru_cache(maxsize=1)
def get_catalog_service() -> HttpCatalogService:
    """설정 재사용을 위한 프로세스 단위 싱글톤을 반환합니다."""
    return HttpCatalogService.from_settings()
