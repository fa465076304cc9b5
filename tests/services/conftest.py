"""Service test fixtures — async DB + FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database (partial unique indexes included)
    - get_db dependency overridden to use test DB session
    - db_manager patched so the readiness probe hits the test engine

Design Decisions:
    - SQLite in-memory with StaticPool: every session shares the one connection,
      so rows committed through the client are visible to test_db
    - Partial index declared with sqlite_where: the single-active constraint is
      exercised here exactly as in production
"""

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from sqlalchemy.pool import StaticPool
from httpx import ASGITransport, AsyncClient

from rigbench.db.base import Base
from rigbench.infrastructure.database import get_db, DatabaseSessionManager
from rigbench.models.reference_value import ReferenceValue
import rigbench.models  # noqa: F401
import rigbench.infrastructure.database as db_module
from rigbench.main import app


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False, poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
async def client(test_engine, test_session_factory):
    """FastAPI test client with DB dependency overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    original_manager = db_module.db_manager
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    db_module.db_manager = fake_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager


@pytest.fixture
async def seed_species(test_db):
    """Insert one reference species for specimen tests to point at."""
    species = ReferenceValue(
        strength_group="high",
        common_name="Molave",
        botanical_name="Vitex parviflora",
        compression_parallel=57.0,
        shear_parallel=9.8,
    )
    test_db.add(species)
    await test_db.commit()
    return species
