"""즐겨찾기 활동 ID 집합을 관리하고 로컬 DB에 영속화하는 저장소."""

from __future__ import annotations

import threading

from sqlalchemy import Engine, delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from tottrot.core.config import get_settings
from tottrot.core.logger import get_logger
from tottrot.database import build_engine, get_session_local
from tottrot.models.base import Base
from tottrot.models.favorite import FavoriteActivity

logger = get_logger(__name__)


class FavoritesStore:
    """즐겨찾기 저장소.

    메모리의 ID 집합이 기준이며, 모든 변경은 반환 전에 DB에 커밋된다.
    저장 매체를 사용할 수 없으면 변경은 현재 세션 메모리에만 반영되고 경고 로그를 남긴다.
    동일 ID에 대한 연속 토글은 락으로 직렬화된다.
    """

    def __init__(self, engine: Engine | None) -> None:
        self._lock = threading.Lock()
        self._session_factory: sessionmaker[Session] | None = None
        if engine is not None:
            self._session_factory = get_session_local(engine)
        self._ids: set[str] = self._load(engine)

    @classmethod
    def from_url(cls, database_url: str) -> FavoritesStore:
        """DB URL로 저장소를 생성합니다. 엔진 생성에 실패하면 메모리 전용으로 동작합니다."""
        try:
            engine = build_engine(database_url)
        except SQLAlchemyError as exc:
            logger.warning("Favorites database unavailable, keeping favorites in memory: %s", exc)
            engine = None
        return cls(engine)

    @classmethod
    def from_settings(cls) -> FavoritesStore:
        return cls.from_url(get_settings().FAVORITES_DATABASE_URL)

    def _load(self, engine: Engine | None) -> set[str]:
        if engine is None or self._session_factory is None:
            return set()
        try:
            Base.metadata.create_all(bind=engine)
            with self._session_factory() as session:
                ids = set(session.scalars(select(FavoriteActivity.activity_id)).all())
        except SQLAlchemyError as exc:
            logger.warning("Failed to load favorites, starting empty: %s", exc)
            return set()
        logger.info("Favorites loaded: count=%d", len(ids))
        return ids

    def toggle(self, activity_id: str) -> bool:
        """즐겨찾기 여부를 뒤집고 새 상태를 반환합니다."""
        with self._lock:
            favorited = activity_id not in self._ids
            if favorited:
                self._ids.add(activity_id)
            else:
                self._ids.discard(activity_id)
            self._persist(activity_id, favorited)
            return favorited

    def is_favorite(self, activity_id: str) -> bool:
        return activity_id in self._ids

    def all(self) -> frozenset[str]:
        with self._lock:
            return frozenset(self._ids)

    def _persist(self, activity_id: str, favorited: bool) -> None:
        if self._session_factory is None:
            return
        try:
            with self._session_factory() as session:
                if favorited:
                    session.merge(FavoriteActivity(activity_id=activity_id))
                else:
                    session.execute(delete(FavoriteActivity).where(FavoriteActivity.activity_id == activity_id))
                session.commit()
        except SQLAlchemyError as exc:
            logger.warning(
                "Failed to persist favorite toggle: activity_id=%s favorited=%s error=%s",
                activity_id,
                favorited,
                exc,
            )
