"""Shared test fixtures.

Tests run against an in-memory SQLite database (aiosqlite) with a fresh
schema per test, so they need no external services.
"""

import os
from collections.abc import AsyncGenerator

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

TEST_DATABASE_URL = "sqlite+aiosqlite://"

os.environ.setdefault("DATABASE_URL", TEST_DATABASE_URL)
os.environ.setdefault("ENVIRONMENT", "development")

from cms.db.base import Base  # noqa: E402
from cms.main import create_app  # noqa: E402
from cms.models.category import Category  # noqa: E402, F401
from cms.repositories.category_repository import SqlCategoryRepository  # noqa: E402
from cms.services.category_service import CategoryService  # noqa: E402
from cms.services.list_query import PaginationDefaults  # noqa: E402
from tests.helpers import TickingClock  # noqa: E402


@pytest.fixture
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    """In-memory SQLite engine shared by every session of one test."""
    test_engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield test_engine
    await test_engine.dispose()


@pytest.fixture
def session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
def repository(session_factory) -> SqlCategoryRepository:
    return SqlCategoryRepository(session_factory)


@pytest.fixture
def clock() -> TickingClock:
    return TickingClock()


@pytest.fixture
def pagination_defaults() -> PaginationDefaults:
    return PaginationDefaults(
        page_size=10,
        max_page_size=100,
        order_column="createTime",
        order_type="desc",
        total_filtered=False,
    )


@pytest.fixture
def service(repository, pagination_defaults, clock) -> CategoryService:
    return CategoryService(repository, pagination_defaults, clock=clock)


@pytest.fixture
def app(engine, session_factory, clock):
    application = create_app(engine=engine, session_factory=session_factory)
    application.state.category_service.clock = clock
    return application


@pytest.fixture
async def client(app) -> AsyncGenerator[AsyncClient, None]:
    """HTTP test client for the FastAPI app."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c
