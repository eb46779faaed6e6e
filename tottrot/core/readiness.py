"""애플리케이션 준비성(readiness) 체크 유틸."""

from __future__ import annotations

import asyncio
import socket
import sqlite3
from pathlib import Path
from urllib.parse import unquote, urlparse

from tottrot.core.config import Settings, get_settings
from tottrot.core.timeout_policy import TimeoutPolicy, get_timeout_policy

ReadinessCheck = dict[str, str | bool]


def _ok(detail: str, *, required: bool = True) -> ReadinessCheck:
    return {"status": "ok", "ok": True, "required": required, "detail": detail}


def _fail(detail: str, *, required: bool = True) -> ReadinessCheck:
    return {"status": "fail", "ok": False, "required": required, "detail": detail}


def _resolve_catalog_host_port(base_url: str) -> tuple[str, int] | None:
    parsed = urlparse(base_url)
    host = parsed.hostname
    if not host:
        return None
    default_port = 443 if parsed.scheme.lower() == "https" else 80
    return host, int(parsed.port or default_port)


def _normalize_sqlite_path(database_url: str) -> str | None:
    parsed = urlparse(database_url)
    if parsed.scheme.split("+")[0].lower() not in {"sqlite", "sqlite3"}:
        return None

    if database_url.endswith(":memory:"):
        return ":memory:"

    # sqlite:///relative.db 는 상대 경로, sqlite:////abs.db 는 절대 경로
    _, _, raw_path = database_url.partition(":///")
    db_path = unquote(raw_path)
    if not db_path:
        return ":memory:"
    return db_path


async def _check_tcp_connectivity(host: str, port: int, timeout_seconds: int, label: str) -> ReadinessCheck:
    def _connect() -> None:
        with socket.create_connection((host, port), timeout=timeout_seconds):
            return None

    try:
        await asyncio.to_thread(_connect)
        return _ok(f"{label} reachable ({host}:{port})")
    except OSError as exc:
        return _fail(f"{label} unreachable ({host}:{port}): {exc}")


async def _check_catalog_readiness(settings: Settings, timeout_policy: TimeoutPolicy) -> ReadinessCheck:
    host_port = _resolve_catalog_host_port(settings.CATALOG_BASE_URL)
    if host_port is None:
        return _fail("CATALOG_BASE_URL에서 호스트를 파싱할 수 없습니다.")

    host, port = host_port
    return await _check_tcp_connectivity(
        host=host,
        port=port,
        timeout_seconds=timeout_policy.catalog_timeout_seconds,
        label="Activity catalog",
    )


async def _check_favorites_readiness(settings: Settings) -> ReadinessCheck:
    database_url = (settings.FAVORITES_DATABASE_URL or "").strip()
    sqlite_path = _normalize_sqlite_path(database_url)
    if sqlite_path is None:
        # SQLite 외의 저장소는 즐겨찾기가 메모리로 대체될 수 있으므로 필수가 아니다
        return _ok("SQLite 외 저장소는 점검하지 않습니다.", required=False)

    def _check_sqlite() -> None:
        if sqlite_path != ":memory:":
            parent = Path(sqlite_path).parent
            if parent and not parent.exists():
                raise FileNotFoundError(f"DB 경로 디렉터리가 존재하지 않습니다: {parent}")
        connection = sqlite3.connect(sqlite_path)
        try:
            connection.execute("SELECT 1")
        finally:
            connection.close()

    try:
        await asyncio.to_thread(_check_sqlite)
        return _ok("Favorites SQLite 연결 확인 완료")
    except (OSError, sqlite3.Error) as exc:
        return _fail(f"Favorites SQLite 연결 실패: {exc}")


async def collect_readiness_status() -> dict[str, object]:
    """카탈로그 API와 즐겨찾기 저장소의 준비 상태를 점검합니다."""
    settings = get_settings()
    timeout_policy = get_timeout_policy(settings)

    catalog_check, favorites_check = await asyncio.gather(
        _check_catalog_readiness(settings, timeout_policy),
        _check_favorites_readiness(settings),
    )

    checks: dict[str, ReadinessCheck] = {
        "catalog": catalog_check,
        "favorites": favorites_check,
    }
    required_checks_ok = all(bool(check["ok"]) for check in checks.values() if bool(check.get("required", True)))

    return {
        "status": "ready" if required_checks_ok else "not_ready",
        "checks": checks,
    }
