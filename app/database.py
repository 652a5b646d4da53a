"""공유 저장소 핸들과 접근 직렬화.

프로세스 전체가 하나의 DB 연결을 공유하며, 모든 저장소 작업은
`StorageHandle.access()`로 배타적 접근권을 얻은 뒤에만 구문을 실행한다.
"""

from __future__ import annotations

import threading
from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy import Engine, create_engine, event
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.config import Settings, get_settings
from app.core.logger import get_logger

logger = get_logger(__name__)


def _is_sqlite(database_url: str) -> bool:
    return database_url.split(":", 1)[0].split("+")[0].lower() in {"sqlite", "sqlite3"}


def _enable_sqlite_foreign_keys(dbapi_connection, _connection_record) -> None:
    # SQLite는 연결마다 외래키 강제를 켜야 ON DELETE CASCADE가 동작한다
    cursor = dbapi_connection.cursor()
    try:
        cursor.execute("PRAGMA foreign_keys=ON")
    finally:
        cursor.close()


def build_engine(database_url: str, *, echo: bool = False) -> Engine:
    """단일 연결만 사용하는 `SQLAlchemy` 엔진을 생성한다.

    SQLite는 `StaticPool`로 하나의 연결을 모든 스레드가 공유하고,
    그 외 백엔드는 크기 1의 풀을 사용한다.
    """
    if _is_sqlite(database_url):
        engine = create_engine(
            database_url,
            echo=echo,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)
        return engine

    return create_engine(database_url, echo=echo, pool_size=1, max_overflow=0, pool_pre_ping=True)


class StorageHandle:
    """프로세스가 소유하는 공유 저장소 핸들.

    각 저장소/리포지토리/검색기 생성자에 참조로 전달된다. `access()`는
    잠금을 획득한 뒤 세션을 열고, 정상 종료 시 커밋, 예외 시 롤백하며,
    어떤 경로로 빠져나가든 세션을 닫고 잠금을 해제한다.

    한 번의 `access()` 안에서 실행된 구문들만 서로 원자적이다.
    서로 다른 `access()` 호출 사이에는 다른 작업이 끼어들 수 있다.
    """

    def __init__(self, engine: Engine) -> None:
        self._engine = engine
        self._lock = threading.Lock()
        self._session_factory = sessionmaker(
            bind=engine,
            autocommit=False,
            autoflush=False,
            expire_on_commit=False,
        )

    @classmethod
    def from_url(cls, database_url: str, *, echo: bool = False) -> StorageHandle:
        return cls(build_engine(database_url, echo=echo))

    @property
    def engine(self) -> Engine:
        return self._engine

    def locked(self) -> bool:
        """다른 작업이 현재 저장소를 점유 중인지 여부."""
        return self._lock.locked()

    @contextmanager
    def access(self) -> Iterator[Session]:
        """저장소에 대한 배타적 접근권을 얻어 세션을 제공한다.

        Yields:
            `Session`: 이번 임계 구역 동안만 유효한 세션.
        """
        with self._lock:
            session = self._session_factory()
            try:
                yield session
                session.commit()
            except Exception:
                session.rollback()
                raise
            finally:
                session.close()

    def create_schema(self) -> None:
        """모든 테이블을 생성한다. 이미 존재하는 테이블은 건드리지 않는다."""
        # 모델 모듈을 로드해야 메타데이터에 테이블이 등록된다
        from app.models import entity, travel_plan  # noqa: F401
        from app.models.base import Base

        with self._lock:
            Base.metadata.create_all(bind=self._engine)
        logger.info("Database schema ready: %s", self._engine.url.render_as_string(hide_password=True))

    def dispose(self) -> None:
        self._engine.dispose()


def create_storage_handle(settings: Settings | None = None) -> StorageHandle:
    """설정값으로부터 저장소 핸들을 생성한다."""
    resolved_settings = settings or get_settings()
    return StorageHandle.from_url(resolved_settings.DATABASE_URL, echo=resolved_settings.DB_ECHO)
