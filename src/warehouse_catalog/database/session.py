"""
Database handle: one async engine (connection pool) + one session factory.

The handle is created once at startup, injected into every repository and
disposed at shutdown. There is no module-level engine; tests and the app each
build their own `Database`.

Usage:
    database = Database.from_settings(get_settings())
    async with database.session() as session:
        await session.execute(...)
"""
import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from sqlalchemy import select, literal
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from ..config.settings import Settings
from .base import Base

logger = logging.getLogger(__name__)


class Database:
    """Owns the engine and the session factory for one storage backend."""

    def __init__(self, engine: AsyncEngine):
        self.engine = engine
        # expire_on_commit=False: repositories return ORM rows after the session
        # closes, their loaded attributes must stay readable.
        self.sessionmaker = async_sessionmaker(
            bind=engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @classmethod
    def from_url(
        cls,
        url: str,
        *,
        echo: bool = False,
        pool_size: int = 5,
        max_overflow: int = 10,
        pool_timeout: float = 30.0,
        pool_recycle: int = 3600,
    ) -> "Database":
        """
        Build the engine for `url`.

        Pool sizing only applies to server databases; SQLite (used by the test
        suite) runs on SQLAlchemy's default pool for its dialect.
        """
        engine_kwargs: dict = {"echo": echo, "pool_pre_ping": True}
        backend = make_url(url).get_backend_name()
        if backend != "sqlite":
            engine_kwargs.update(
                pool_size=pool_size,
                max_overflow=max_overflow,
                pool_timeout=pool_timeout,
                pool_recycle=pool_recycle,
            )

        engine = create_async_engine(url, **engine_kwargs)
        logger.info(
            "db.engine.created",
            extra={"backend": backend, "pool_size": engine_kwargs.get("pool_size")},
        )
        return cls(engine)

    @classmethod
    def from_settings(cls, settings: Settings) -> "Database":
        return cls.from_url(
            settings.DATABASE_URL,
            echo=settings.SQLALCHEMY_ECHO,
            pool_size=settings.DB_POOL_SIZE,
            max_overflow=settings.DB_MAX_OVERFLOW,
            pool_timeout=settings.DB_POOL_TIMEOUT,
            pool_recycle=settings.DB_POOL_RECYCLE,
        )

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        """Yield a session and ensure it's closed (connection returned to the pool)."""
        async with self.sessionmaker() as session:
            yield session

    async def ping(self) -> int | None:
        """Run `SELECT 1` on a dedicated connection and return the scalar."""
        async with self.engine.connect() as conn:
            result = await conn.execute(select(literal(1)))
            return result.scalar()

    async def create_all(self) -> None:
        """Create every table known to `Base.metadata` (tests and local runs only)."""
        # make sure every model is registered on the metadata
        from .. import models  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def drop_all(self) -> None:
        from .. import models  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)

    async def dispose(self) -> None:
        await self.engine.dispose()
        logger.info("db.engine.disposed")
