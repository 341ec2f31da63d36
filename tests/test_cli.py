import asyncio
from pathlib import Path

import pytest
from click.testing import CliRunner
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import SQLModel

from backoffice.cli import cli
from backoffice.db.engine import build_engine
from backoffice.models.numbering_rule import NumberingRule


@pytest.fixture(autouse=True)
def _quiet_logging(monkeypatch):
    # CliRunner swaps stdout per invocation; a handler bound to it would outlive the run
    monkeypatch.setattr("backoffice.cli.setup_logging", lambda: None)


@pytest.fixture
def database_url(tmp_path: Path) -> str:
    """SQLite database with an ORDER rule (no date segment) and a disabled REFUND rule."""
    url = f"sqlite+aiosqlite:///{tmp_path / 'cli.db'}"

    async def prepare() -> None:
        engine = build_engine(url)
        async with engine.begin() as conn:
            await conn.run_sync(SQLModel.metadata.create_all)
        async with AsyncSession(engine) as session:
            session.add(NumberingRule(code="ORDER", name="Sales order", prefix="ORD", sequence_length=4,
                                      current_sequence=41, reset_period="NEVER"))
            session.add(NumberingRule(code="REFUND", name="Refund", prefix="RF", is_active=False))
            await session.commit()
        await engine.dispose()

    asyncio.run(prepare())
    return url


def test_generate_and_preview(database_url):
    runner = CliRunner()

    preview = runner.invoke(cli, ["--database-url", database_url, "preview", "ORDER"])
    generated = runner.invoke(cli, ["--database-url", database_url, "generate", "ORDER"])
    after = runner.invoke(cli, ["--database-url", database_url, "preview", "ORDER"])

    assert preview.exit_code == 0, preview.output
    assert preview.output.strip().endswith("ORD0042")
    assert generated.output.strip().endswith("ORD0042")
    assert after.output.strip().endswith("ORD0043")


def test_generate_disabled_rule_exits_with_error(database_url):
    result = CliRunner().invoke(cli, ["--database-url", database_url, "generate", "REFUND"])

    assert result.exit_code == 1
    assert "REFUND is disabled" in result.output


def test_reset_and_list(database_url):
    runner = CliRunner()

    reset = runner.invoke(cli, ["--database-url", database_url, "reset", "ORDER", "--yes"])
    listed = runner.invoke(cli, ["--database-url", database_url, "list", "--active"])

    assert reset.exit_code == 0, reset.output
    assert "Sequence for ORDER reset" in reset.output
    assert "ORDER" in listed.output
    assert "REFUND" not in listed.output
    assert "1 rule(s)" in listed.output


def test_unknown_code(database_url):
    result = CliRunner().invoke(cli, ["--database-url", database_url, "preview", "NOPE"])

    assert result.exit_code == 1
    assert "NOPE does not exist" in result.output
