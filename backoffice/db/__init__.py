"""Database package with engine, session management and row locking."""

from backoffice.db.session import async_session_maker, dispose_engine, engine, get_session

__all__ = [
    "async_session_maker",
    "dispose_engine",
    "engine",
    "get_session",
]
