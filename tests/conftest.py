import fakeredis.aioredis
import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

import parity.models  # noqa: F401
from parity.core import redis_client as redis_module
from parity.core.database import Base, enable_sqlite_foreign_keys, get_db
from parity.models import Country, CountryGroup


@pytest.fixture
async def redis():
    client = fakeredis.aioredis.FakeRedis(decode_responses=True)
    previous = redis_module.redis_client
    redis_module.redis_client = client
    yield client
    redis_module.redis_client = previous
    await client.aclose()


@pytest.fixture
async def engine():
    test_engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    enable_sqlite_foreign_keys(test_engine)
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield test_engine
    await test_engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def db(session_factory, redis):
    async with session_factory() as session:
        yield session


@pytest.fixture
async def client(session_factory, redis):
    from parity.main import app

    async def _override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = _override_get_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
async def country_group(db):
    group = CountryGroup(name="Group A", recommended_discount_percentage=0.4)
    group.countries = [
        Country(name="India", code="IN"),
        Country(name="Egypt", code="EG"),
    ]
    db.add(group)
    await db.commit()
    return group


class RevalidateSpy:
    """revalidate_db_cache 호출을 기록하고 원본으로 위임"""

    def __init__(self, original):
        self.original = original
        self.calls = []

    async def __call__(self, **kwargs):
        self.calls.append(kwargs)
        await self.original(**kwargs)


@pytest.fixture
def revalidate_spy():
    def _install(monkeypatch, module):
        spy = RevalidateSpy(module.revalidate_db_cache)
        monkeypatch.setattr(module, "revalidate_db_cache", spy)
        return spy
    return _install
