from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool


# 모든 모델 클래스가 상속받을 Base 클래스
Base = declarative_base()


def create_db_engine(database_url: str) -> Engine:
    """
    연결 문자열로 SQLAlchemy 엔진을 생성합니다.

    SQLite의 경우 요청마다 다른 스레드에서 세션을 사용하므로 check_same_thread를 끄고,
    외래 키 제약 조건을 활성화합니다. 메모리 DB는 모든 세션이 같은 연결을 공유해야 합니다.
    """
    if not database_url.startswith("sqlite"):
        return create_engine(database_url, pool_pre_ping=True)

    engine_kwargs = {"connect_args": {"check_same_thread": False}}
    if database_url in ("sqlite://", "sqlite:///:memory:"):
        engine_kwargs["poolclass"] = StaticPool
    engine = create_engine(database_url, **engine_kwargs)

    @event.listens_for(engine, "connect")
    def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    return engine


def create_session_factory(engine: Engine) -> sessionmaker:
    # autocommit=False, autoflush=False: 리포지토리가 명시적으로 commit 해야 DB에 반영됩니다.
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)