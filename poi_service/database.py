"""Database engine and session management"""
import logging
import time
from contextlib import asynccontextmanager
from typing import AsyncIterator

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base

from poi_service.config import Settings

logger = logging.getLogger(__name__)

# Base class for models
Base = declarative_base()


class Database:
    """Owns the async engine and session factory for one application instance.

    Constructed explicitly at startup and handed to the store; nothing here is
    resolved through module-level state.
    """

    def __init__(self, settings: Settings):
        self._settings = settings
        self._engine = create_async_engine(
            settings.database_url,
            echo=settings.debug,
            pool_pre_ping=True,
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
            pool_recycle=settings.db_pool_recycle,
            pool_timeout=settings.db_pool_timeout,
            connect_args={
                "server_settings": {"timezone": "UTC"},
                "command_timeout": settings.db_command_timeout,
            }
        )
        self._sessionmaker = async_sessionmaker(
            self._engine,
            class_=AsyncSession,
            expire_on_commit=False,
            autoflush=False
        )
        logger.info("Database engine initialized")

    @property
    def engine(self):
        return self._engine

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        """Yield a session; the caller commits."""
        async with self._sessionmaker() as session:
            yield session

    async def init_schema(self, reset: bool = False):
        """Create the POI table if missing; with reset, drop and recreate it."""
        # Register the mapped tables on Base.metadata
        from poi_service import models  # noqa: F401

        async with self._engine.begin() as conn:
            if reset:
                logger.warning("Dropping POI tables")
                await conn.run_sync(Base.metadata.drop_all)
            await conn.run_sync(Base.metadata.create_all)
        logger.info(f"Database schema ready (reset={reset})")

    async def health_check(self) -> dict:
        """Check database connection health"""
        start = time.time()
        try:
            async with self._engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
            latency = (time.time() - start) * 1000
            return {'healthy': True, 'latency_ms': latency, 'error': None}
        except Exception as e:
            latency = (time.time() - start) * 1000
            logger.warning(f"Database health check failed: {e}")
            return {'healthy': False, 'latency_ms': latency, 'error': str(e)}

    async def close(self):
        """Close database engine gracefully"""
        await self._engine.dispose()
        logger.info("Database engine closed")
