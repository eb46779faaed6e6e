"""선택 가능한 도시 목록을 카탈로그에서 불러오는 서비스."""

from __future__ import annotations

import asyncio
from typing import Any

from tottrot.core.logger import get_logger
from tottrot.schemas.enums import DEFAULT_LOCATIONS
from tottrot.services.catalog_service import CatalogError, CatalogServiceProtocol

logger = get_logger(__name__)


def _parse_locations(payload: dict[str, Any]) -> tuple[str, ...]:
    if payload.get("success") is not True:
        return ()
    raw = payload.get("locations")
    if not isinstance(raw, list):
        return ()

    seen: set[str] = set()
    locations: list[str] = []
    for item in raw:
        if not isinstance(item, str):
            continue
        name = item.strip()
        if not name or name in seen:
            continue
        seen.add(name)
        locations.append(name)
    return tuple(locations)


async def load_locations(catalog: CatalogServiceProtocol) -> tuple[str, ...]:
    """도시 목록을 조회하고, 실패하면 기본 도시 목록으로 대체합니다."""
    try:
        payload = await catalog.fetch_locations()
    except asyncio.CancelledError:
        raise
    except CatalogError as exc:
        logger.warning("Location lookup failed, using defaults: %s", exc)
        return DEFAULT_LOCATIONS

    locations = _parse_locations(payload)
    if not locations:
        logger.warning("Location lookup returned no usable cities, using defaults")
        return DEFAULT_LOCATIONS

    logger.info("Locations loaded: count=%d", len(locations))
    return locations
