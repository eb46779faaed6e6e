from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import Session, sessionmaker


def build_engine(database_url: str) -> Engine:
    """URL로부터 `SQLAlchemy` 엔진을 생성한다.

    SQLite는 FastAPI 스레드풀에서 공유되므로 스레드 검사를 끈다.
    """
    connect_args = {"check_same_thread": False} if database_url.startswith("sqlite") else {}
    return create_engine(database_url, connect_args=connect_args)


def get_session_local(engine: Engine) -> sessionmaker[Session]:
    """`SessionLocal` 팩토리를 반환한다."""
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)
