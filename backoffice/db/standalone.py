"""Database session utilities for code running outside the API process (CLI commands)."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from backoffice.db.engine import build_engine


@asynccontextmanager
async def standalone_session(database_url: str | None = None) -> AsyncGenerator[AsyncSession]:
    """Context manager that provides a database session bound to the current event loop.

    Creates a fresh engine, yields a session, commits on success and rolls back on
    error, then disposes the engine. Each asyncio.run() call creates a new event loop
    and connections must belong to it, so the module-level API engine is not reused.

    Usage:
        async with standalone_session() as session:
            number = await NumberingService(session).generate("ORDER")
    """
    engine = build_engine(database_url, pool_size=2)
    session_maker = async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )
    try:
        async with session_maker() as session:
            try:
                yield session
                await session.commit()
            except BaseException:
                await session.rollback()
                raise
    finally:
        await engine.dispose()
