"""Async engine construction shared by the API, the CLI and the test suite."""

from typing import Any

from sqlalchemy import event
from sqlalchemy.engine import Connection
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine

from backoffice.config import settings


def _use_immediate_transactions(engine: AsyncEngine) -> None:
    """Make every SQLite transaction take the write lock when it begins.

    SQLite has no SELECT ... FOR UPDATE. Starting transactions with BEGIN IMMEDIATE
    serializes read-modify-write sequences the same way a PostgreSQL row lock does.

    Read-only work (preview, listing) takes the same database-wide lock, held until
    its session commits, rolls back or closes. Keep such sessions short; SQLite is
    meant for development and tests, PostgreSQL previews take no lock.
    """

    @event.listens_for(engine.sync_engine, "connect")
    def _disable_driver_begin(dbapi_connection: Any, connection_record: Any) -> None:
        # Stop the driver from emitting its own deferred BEGIN
        dbapi_connection.isolation_level = None

    @event.listens_for(engine.sync_engine, "begin")
    def _begin_immediate(conn: Connection) -> None:
        conn.exec_driver_sql("BEGIN IMMEDIATE")


def build_engine(database_url: str | None = None, *, pool_size: int | None = None) -> AsyncEngine:
    """Create an async engine for the given URL (defaults to settings.database_url).

    Args:
        database_url: SQLAlchemy URL, e.g. "postgresql+asyncpg://..." or "sqlite+aiosqlite:///file.db"
        pool_size: Connection pool size for server databases (ignored for SQLite)

    Returns:
        Configured AsyncEngine
    """
    url = database_url or settings.database_url

    if url.startswith("sqlite"):
        engine = create_async_engine(
            url,
            echo=False,  # SQL logging controlled via structlog configuration
            future=True,
            connect_args={"timeout": 30},
        )
        _use_immediate_transactions(engine)
        return engine

    return create_async_engine(
        url,
        echo=False,
        future=True,
        pool_size=pool_size or settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
        pool_pre_ping=True,  # Verify connections before use
        pool_recycle=300,  # Recycle connections after 5 minutes
    )
