# tottrot/models/base.py
from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """모든 SQLAlchemy 모델의 기반이 되는 선언적 기본 클래스.

    로컬에 영속화되는 테이블들이 동일한 메타데이터 레지스트리를 공유하도록
    중앙 집중적 기본 클래스로 사용됩니다.
    """

    pass
