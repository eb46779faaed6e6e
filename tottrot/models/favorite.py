# tottrot/models/favorite.py
from datetime import datetime

from sqlalchemy import DateTime, String, func
from sqlalchemy.orm import Mapped, mapped_column

from tottrot.models.base import Base


# 즐겨찾기 테이블: 행의 존재 자체가 멤버십을 의미한다
class FavoriteActivity(Base):
    __tablename__ = "favorite_activities"

    # 카탈로그가 부여한 활동 ID (불투명 문자열)
    activity_id: Mapped[str] = mapped_column(String(255), primary_key=True)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())

    def __repr__(self):
        return f"<FavoriteActivity(activity_id={self.activity_id})>"
