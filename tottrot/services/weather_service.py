"""메인 화면 날씨 스냅샷 조회 서비스."""

from __future__ import annotations

import asyncio

from pydantic import ValidationError

from tottrot.core.logger import get_logger
from tottrot.schemas.weather import WeatherSnapshot
from tottrot.services.catalog_service import CatalogError, CatalogServiceProtocol

logger = get_logger(__name__)


async def load_weather(catalog: CatalogServiceProtocol, location: str) -> WeatherSnapshot | None:
    """도시의 날씨를 조회합니다. 표시 전용 데이터이므로 실패 시 None을 반환합니다."""
    try:
        payload = await catalog.fetch_weather(location)
    except asyncio.CancelledError:
        raise
    except CatalogError as exc:
        logger.warning("Weather lookup failed: location=%s error=%s", location, exc)
        return None

    weather = payload.get("weather")
    if payload.get("success") is not True or not isinstance(weather, dict):
        logger.warning("Weather lookup unsuccessful: location=%s error=%s", location, payload.get("error"))
        return None

    try:
        return WeatherSnapshot(
            location=location,
            temperature_high=weather.get("temperature_high"),
            condition=weather.get("weather_condition"),
            precipitation_chance=weather.get("precipitation_chance"),
        )
    except ValidationError as exc:
        logger.warning("Weather payload invalid: location=%s error=%s", location, exc)
        return None
