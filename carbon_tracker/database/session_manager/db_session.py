"""
Async session manager.

Database.init() is called once per process (application lifespan, scripts or
test fixtures); every unit of work then opens its own session with
``async with Database() as session``.
"""
import logging
from typing import Any, Optional

from sqlalchemy.engine.url import URL
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from carbon_tracker.database.session_manager.exceptions import DatabaseNotInitialized

logger = logging.getLogger(__name__)


class Database:
    """Process-wide engine and session maker holder."""

    _engine: Optional[AsyncEngine] = None
    _async_session_maker: Optional[async_sessionmaker] = None

    def __init__(self):
        self._session: Optional[AsyncSession] = None

    @classmethod
    def init(cls, async_db_url: URL | str, engine_kw: Optional[dict[str, Any]] = None):
        """
        Create the engine and session maker.

        Args:
            async_db_url: Async database URL
            engine_kw: Extra keyword arguments for create_async_engine
        """
        cls._engine = create_async_engine(async_db_url, **(engine_kw or {}))
        cls._async_session_maker = async_sessionmaker(
            bind=cls._engine, expire_on_commit=False, class_=AsyncSession
        )
        logger.debug(f"Database session maker bound to {cls._engine.url.get_backend_name()}")

    @classmethod
    async def dispose(cls):
        """Dispose the engine and forget the session maker."""
        if cls._engine is not None:
            await cls._engine.dispose()
        cls._engine = None
        cls._async_session_maker = None

    async def __aenter__(self) -> AsyncSession:
        if self._async_session_maker is None:
            raise DatabaseNotInitialized("Call Database.init() before opening a session")

        self._session = self._async_session_maker()
        return self._session

    async def __aexit__(self, exc_type, exc_value, traceback):
        try:
            if exc_type is not None:
                await self._session.rollback()
        finally:
            await self._session.close()
            self._session = None
