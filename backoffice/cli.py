"""Operator CLI for numbering rules: backoffice list | preview | generate | reset."""

import asyncio
from collections.abc import Awaitable, Callable
from typing import TypeVar

import click
from sqlalchemy.ext.asyncio import AsyncSession

from backoffice.db.standalone import standalone_session
from backoffice.logging import setup_logging
from backoffice.services.exceptions import ServiceError
from backoffice.services.numbering.generator import NumberingService
from backoffice.services.numbering.rule_service import NumberingRuleService

T = TypeVar("T")


def _run(database_url: str | None, fn: Callable[[AsyncSession], Awaitable[T]]) -> T:
    """Run ``fn`` with a standalone session in a fresh event loop; service errors exit with code 1."""

    async def runner() -> T:
        async with standalone_session(database_url) as session:
            return await fn(session)

    try:
        return asyncio.run(runner())
    except ServiceError as e:
        raise click.ClickException(str(e)) from e


@click.group()
@click.option("--database-url", envvar="DATABASE_URL", default=None, help="Overrides the configured database URL.")
@click.pass_context
def cli(ctx: click.Context, database_url: str | None) -> None:
    """Back office numbering rule tools."""
    setup_logging()
    ctx.obj = database_url


@cli.command("list")
@click.option("--search", default=None, help="Match against rule code or name.")
@click.option("--active/--inactive", "is_active", default=None, help="Filter by active flag.")
@click.pass_obj
def list_rules(database_url: str | None, search: str | None, is_active: bool | None) -> None:
    """List numbering rules."""

    async def fn(session: AsyncSession) -> None:
        rules, pagination = await NumberingRuleService(session).list_rules(
            page=1, page_size=1000, search=search, is_active=is_active
        )
        for rule in rules:
            state = "active" if rule.is_active else "disabled"
            click.echo(
                f"{rule.code:<12} {rule.prefix:<10} {rule.date_format or '-':<9} "
                f"{rule.reset_period or '-':<8} {rule.current_sequence:>8}  {state}"
            )
        click.echo(f"{pagination.total} rule(s)")

    _run(database_url, fn)


@cli.command()
@click.argument("code")
@click.pass_obj
def preview(database_url: str | None, code: str) -> None:
    """Show the next number for CODE without consuming it."""
    number = _run(database_url, lambda session: NumberingService(session).preview_next_number(code))
    click.echo(number)


@cli.command()
@click.argument("code")
@click.pass_obj
def generate(database_url: str | None, code: str) -> None:
    """Issue the next number for CODE."""
    number = _run(database_url, lambda session: NumberingService(session).generate(code))
    click.echo(number)


@cli.command()
@click.argument("code")
@click.confirmation_option(prompt="Reset the counter? Numbers already issued in this period may be reissued.")
@click.pass_obj
def reset(database_url: str | None, code: str) -> None:
    """Reset the counter of CODE to zero."""

    async def fn(session: AsyncSession) -> None:
        service = NumberingRuleService(session)
        rule = await service.get_rule_by_code(code)
        await service.reset_sequence(rule.id)

    _run(database_url, fn)
    click.echo(f"Sequence for {code} reset")


if __name__ == "__main__":
    cli()
