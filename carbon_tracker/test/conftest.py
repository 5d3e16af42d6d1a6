"""
Pytest configuration and fixtures.

Every test runs against a freshly created schema on the test database and
gets its own engine, session maker and application instance.
"""
import logging

import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine

import carbon_tracker.database.schemas  # noqa: F401 registers the models on Base
from carbon_tracker.core.config import ConfigFile, get_config
from carbon_tracker.core.security import create_access_token
from carbon_tracker.create_app import get_app
from carbon_tracker.database import Base
from carbon_tracker.database.base import get_db_url, get_engine_kw
from carbon_tracker.database.session_manager.db_session import Database
from carbon_tracker.test.factory.user import UserFactory

logging.basicConfig(
    level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)


@pytest_asyncio.fixture(scope="function")
async def test_config():
    """
    Get test configuration.

    Returns configuration with test database settings.
    """
    return get_config(ConfigFile.TEST)


@pytest_asyncio.fixture(scope="function")
async def test_async_engine(test_config):
    """
    Create async database engine for schema management.
    """
    async_db_url = get_db_url(test_config)
    test_engine = create_async_engine(async_db_url, **get_engine_kw(async_db_url))

    yield test_engine

    await test_engine.dispose()


@pytest_asyncio.fixture(scope="function", autouse=True)
async def db_cleanup(test_async_engine):
    """
    Drop and recreate all tables before each test, drop them again after.
    """
    async with test_async_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)

    yield

    async with test_async_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


@pytest_asyncio.fixture(scope="function", autouse=True)
async def initialize_db_session(test_config, db_cleanup):
    """
    Initialize the Database session manager used by the app and the factories.
    """
    async_db_url = get_db_url(test_config)
    Database.init(async_db_url, engine_kw=get_engine_kw(async_db_url))

    yield

    await Database.dispose()


@pytest_asyncio.fixture(scope="function")
async def test_app(test_config):
    """
    Create FastAPI application with test configuration.
    """
    app = get_app(ConfigFile.TEST)
    app.state.config = test_config

    yield app


@pytest_asyncio.fixture(scope="function")
async def test_async_client(test_app):
    """
    Async HTTP client for API testing over ASGITransport.
    """
    transport = ASGITransport(app=test_app)
    async with AsyncClient(
        transport=transport, base_url="http://localhost:8000", follow_redirects=True
    ) as ac:
        yield ac


@pytest_asyncio.fixture(scope="function")
async def test_db_session():
    """
    Provide a database session for service tests.
    """
    async with Database() as session:
        yield session


@pytest_asyncio.fixture(scope="function")
async def test_user():
    """A registered account whose password is DEFAULT_PASSWORD."""
    return await UserFactory()


@pytest_asyncio.fixture(scope="function")
async def auth_headers(test_user, test_config):
    """Bearer headers for test_user."""
    token, _ = create_access_token(test_user.id, test_config.auth)
    return {"Authorization": f"Bearer {token}"}
