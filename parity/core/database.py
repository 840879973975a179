"""
데이터베이스 설정 및 연결
"""

from sqlalchemy.ext.asyncio import create_async_engine, AsyncEngine, AsyncSession, async_sessionmaker
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy import MetaData, event, types
from sqlalchemy.dialects.postgresql import UUID as PostgresUUID, insert as postgresql_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from typing import AsyncGenerator
import logging
import uuid
import ssl
from urllib.parse import urlsplit, urlunsplit, parse_qsl, urlencode

from parity.core.config import settings

logger = logging.getLogger(__name__)


# SQLite와 PostgreSQL 모두 지원하는 UUID 타입
class UUID(types.TypeDecorator):
    """Platform-independent UUID type.

    Uses PostgreSQL's UUID type when available, otherwise uses
    CHAR(36), storing as stringified hex values.
    """
    impl = types.CHAR(36)
    cache_ok = True

    def load_dialect_impl(self, dialect):
        if dialect.name == 'postgresql':
            return dialect.type_descriptor(PostgresUUID(as_uuid=True))
        else:
            return dialect.type_descriptor(types.CHAR(36))

    def process_bind_param(self, value, dialect):
        if value is None:
            return value
        elif dialect.name == 'postgresql':
            return value
        else:
            if isinstance(value, uuid.UUID):
                return str(value)
            else:
                return str(uuid.UUID(str(value)))

    def process_result_value(self, value, dialect):
        if value is None:
            return value
        if isinstance(value, uuid.UUID):
            return value
        return uuid.UUID(str(value))


def enable_sqlite_foreign_keys(async_engine: AsyncEngine) -> None:
    """SQLite는 연결마다 foreign_keys를 켜야 ON DELETE CASCADE가 동작한다."""

    @event.listens_for(async_engine.sync_engine, "connect")
    def _set_sqlite_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def _build_engine() -> AsyncEngine:
    if settings.DATABASE_URL.startswith("sqlite"):
        url = settings.DATABASE_URL
        if url.startswith("sqlite://"):
            url = url.replace("sqlite://", "sqlite+aiosqlite://", 1)
        sqlite_engine = create_async_engine(url, echo=settings.DEBUG, future=True)
        enable_sqlite_foreign_keys(sqlite_engine)
        return sqlite_engine

    # PostgreSQL의 경우 asyncpg 드라이버 사용
    raw_url = settings.DATABASE_URL.replace("postgresql://", "postgresql+asyncpg://", 1)
    # asyncpg는 sslmode 쿼리 파라미터를 받지 않으므로 URL에서 빼고 connect_args로 전달
    parts = urlsplit(raw_url)
    query_items = parse_qsl(parts.query, keep_blank_values=True)
    sslmode = next((v for (k, v) in query_items if k.lower() == "sslmode"), None)
    query_filtered = [(k, v) for (k, v) in query_items if k.lower() not in ("sslmode", "ssl")]
    engine_url = urlunsplit((parts.scheme, parts.netloc, parts.path, urlencode(query_filtered), parts.fragment))

    connect_args = {}
    if sslmode is not None:
        mode = str(sslmode).strip().lower()
        # libpq 의미: require/prefer는 암호화만, verify-*는 인증서 검증
        if mode in ("require", "prefer", "verify-ca", "verify-full"):
            ctx = ssl.create_default_context()
            if mode in ("require", "prefer"):
                ctx.check_hostname = False
                ctx.verify_mode = ssl.CERT_NONE
            connect_args["ssl"] = ctx

    return create_async_engine(
        engine_url,
        echo=settings.DEBUG,
        future=True,
        pool_pre_ping=True,
        pool_recycle=300,
        connect_args=connect_args,
    )


# SQLAlchemy 비동기 엔진 생성
engine = _build_engine()

# 세션 팩토리 생성
AsyncSessionLocal = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=False,
    autocommit=False,
)


# Base 클래스 정의
class Base(DeclarativeBase):
    """SQLAlchemy Base 클래스"""
    metadata = MetaData(
        naming_convention={
            "ix": "ix_%(column_0_label)s",
            "uq": "uq_%(table_name)s_%(column_0_name)s",
            "ck": "ck_%(table_name)s_%(constraint_name)s",
            "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
            "pk": "pk_%(table_name)s"
        }
    )


# 데이터베이스 세션 의존성
async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """데이터베이스 세션 의존성"""
    async with AsyncSessionLocal() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise


async def check_db_connection() -> bool:
    """데이터베이스 연결 테스트"""
    try:
        async with engine.connect() as conn:
            await conn.exec_driver_sql("SELECT 1")
        return True
    except Exception as e:
        logger.warning(f"데이터베이스 연결 실패: {e}")
        return False


def dialect_insert(db: AsyncSession):
    """ON CONFLICT를 지원하는 방언별 insert 생성자"""
    if db.get_bind().dialect.name == "postgresql":
        return postgresql_insert
    return sqlite_insert
