"""Shared fixtures: a fresh SQLite database per test and numbering rule factories."""

from collections.abc import AsyncGenerator, Awaitable, Callable
from datetime import datetime
from pathlib import Path
from typing import Any
from zoneinfo import ZoneInfo

import pytest
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker
from sqlmodel import SQLModel

import backoffice.models  # noqa: F401
from backoffice.db.engine import build_engine
from backoffice.models.numbering_rule import NumberingRule

PRAGUE = ZoneInfo("Europe/Prague")

# 2024-03-15 10:30:45 local time
NOW = datetime(2024, 3, 15, 10, 30, 45, tzinfo=PRAGUE)

RuleFactory = Callable[..., Awaitable[NumberingRule]]


def sqlite_url(path: Path) -> str:
    return f"sqlite+aiosqlite:///{path}"


@pytest.fixture
def now() -> datetime:
    return NOW


@pytest.fixture
def clock(now: datetime) -> Callable[[], datetime]:
    """Clock pinned to ``now``."""
    return lambda: now


@pytest.fixture
async def engine(tmp_path: Path) -> AsyncGenerator[AsyncEngine]:
    engine = build_engine(sqlite_url(tmp_path / "backoffice.db"))
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_maker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def session(session_maker: async_sessionmaker[AsyncSession]) -> AsyncGenerator[AsyncSession]:
    async with session_maker() as session:
        yield session


@pytest.fixture
def make_rule(session: AsyncSession) -> RuleFactory:
    """Insert a committed numbering rule; keyword arguments override the defaults."""

    async def factory(**overrides: Any) -> NumberingRule:
        fields: dict[str, Any] = {
            "code": "ORDER",
            "name": "Sales order",
            "prefix": "ORD",
            "date_format": "YYYYMMDD",
            "sequence_length": 4,
            "current_sequence": 0,
            "reset_period": "NEVER",
            "last_reset_at": None,
            "is_active": True,
        }
        fields.update(overrides)
        rule = NumberingRule(**fields)
        session.add(rule)
        await session.commit()
        return rule

    return factory
