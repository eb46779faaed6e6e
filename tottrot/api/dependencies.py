"""API 의존성 모음."""

from functools import lru_cache

from tottrot.services.favorites_store import FavoritesStore
from tottrot.services.http_catalog_service import get_catalog_service
from tottrot.state.session import AppSession


@lru_cache(maxsize=1)
def get_favorites_store() -> FavoritesStore:
    """프로세스 단위 즐겨찾기 저장소를 반환합니다."""
    return FavoritesStore.from_settings()


@lru_cache(maxsize=1)
def get_app_session() -> AppSession:
    """프로세스 단위 사용자 세션을 반환합니다. 세션 상태는 재시작 시 초기화됩니다."""
    return AppSession.from_settings(get_catalog_service(), get_favorites_store())
