"""
Pytest configuration and fixtures for the locale routing tests
"""

import os
import sys
from collections.abc import AsyncGenerator

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))  # noqa: PTH100, PTH118, PTH119, PTH120

# Configure before the app modules read settings
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("LOG_JSON", "false")

from app.database import Base, get_db  # noqa: E402
from app.i18n.locale import get_locale_table  # noqa: E402
from app.models.recipe import Recipe  # noqa: E402
from app.services.content_store import SQLAlchemyContentStore  # noqa: E402
from utils.factories import add_recipe, add_translation  # noqa: E402

# SQLite in-memory, one shared connection per test engine
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest.fixture(scope="function")
async def test_engine():
    """Fresh in-memory database for each test function."""
    engine = create_async_engine(TEST_DATABASE_URL, echo=False, poolclass=StaticPool)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture(scope="function")
def session_factory(test_engine):
    return async_sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture(scope="function")
async def test_db(session_factory) -> AsyncGenerator[AsyncSession, None]:
    async with session_factory() as session:
        yield session


@pytest.fixture
def store(test_db: AsyncSession) -> SQLAlchemyContentStore:
    return SQLAlchemyContentStore(test_db)


@pytest.fixture
def table():
    return get_locale_table()


@pytest.fixture
async def lemon_tart(test_db: AsyncSession) -> Recipe:
    """Recipe 42 "lemon-tart" with a French translation "tarte-citron" and nothing else."""
    recipe = await add_recipe(test_db, 42, "lemon-tart", "Lemon Tart", "Sharp and sweet")
    await add_translation(test_db, 42, "fr", "tarte-citron", "Tarte au citron", "Acidulée et sucrée")
    return recipe


@pytest.fixture
async def client(session_factory) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client for the full application, bound to the test database."""
    from main import app

    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()
