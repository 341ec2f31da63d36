"""Numbering rule administration service.

Create, edit, list and delete numbering rules, and reset a rule's counter by
hand. Issuing numbers lives in NumberingService.
"""

import math
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime

import structlog
from sqlalchemy import func, or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import col, select
from ulid import ULID

from backoffice.models.numbering_rule import NumberingRule
from backoffice.services.numbering.exceptions import RuleCodeExists, RuleNotFound
from backoffice.services.numbering.schemas import NumberingRuleCreate, NumberingRuleUpdate
from backoffice.utils.datetime_utils import local_now, to_utc

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class Pagination:
    """Page metadata for list results."""

    total: int
    page: int
    page_size: int

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total / self.page_size)

    @property
    def has_next_page(self) -> bool:
        return self.page < self.total_pages

    @property
    def has_prev_page(self) -> bool:
        return self.page > 1


class NumberingRuleService:
    """Service for numbering rule administration."""

    def __init__(self, session: AsyncSession, *, now: Callable[[], datetime] = local_now):
        self.session = session
        self._now = now

    async def list_rules(
        self,
        *,
        page: int = 1,
        page_size: int = 20,
        search: str | None = None,
        is_active: bool | None = None,
    ) -> tuple[list[NumberingRule], Pagination]:
        """List rules ordered by code. Search matches code or name, case-insensitively."""
        filters = []
        if search:
            # Literal substring match: "_" and "%" in the search text are not wildcards
            filters.append(
                or_(
                    col(NumberingRule.code).icontains(search, autoescape=True),
                    col(NumberingRule.name).icontains(search, autoescape=True),
                )
            )
        if is_active is not None:
            filters.append(col(NumberingRule.is_active) == is_active)

        rules_statement = (
            select(NumberingRule)
            .where(*filters)
            .order_by(col(NumberingRule.code).asc())
            .offset((page - 1) * page_size)
            .limit(page_size)
        )
        rules_result = await self.session.execute(rules_statement)
        rules = list(rules_result.scalars().all())

        count_statement = select(func.count()).select_from(NumberingRule).where(*filters)
        count_result = await self.session.execute(count_statement)
        total = count_result.scalar() or 0

        return rules, Pagination(total=total, page=page, page_size=page_size)

    async def get_rule(self, rule_id: str) -> NumberingRule:
        """Get rule by id."""
        try:
            ULID.from_str(rule_id)
        except ValueError:
            raise RuleNotFound(rule_id) from None

        rule = await self.session.get(NumberingRule, rule_id)
        if rule is None:
            raise RuleNotFound(rule_id)
        return rule

    async def get_rule_by_code(self, code: str) -> NumberingRule:
        """Get rule by its code."""
        rule = await self._find_by_code(code)
        if rule is None:
            raise RuleNotFound(code)
        return rule

    async def create_rule(self, data: NumberingRuleCreate) -> NumberingRule:
        """Create a rule with its counter at zero."""
        if await self._find_by_code(data.code) is not None:
            raise RuleCodeExists(data.code)

        rule = NumberingRule(
            code=data.code,
            name=data.name,
            prefix=data.prefix,
            date_format=data.date_format,
            sequence_length=data.sequence_length,
            reset_period=data.reset_period,
            is_active=data.is_active,
            current_sequence=0,
        )
        self.session.add(rule)
        try:
            await self.session.commit()
        except IntegrityError:
            # A concurrent create inserted the same code after the check above
            await self.session.rollback()
            raise RuleCodeExists(data.code) from None

        logger.info("Created numbering rule", rule_id=rule.id, rule_code=rule.code)
        return rule

    async def update_rule(self, rule_id: str, data: NumberingRuleUpdate) -> NumberingRule:
        """Update editable fields; the code and counter state are left as they are."""
        rule = await self.get_rule(rule_id)

        rule.name = data.name
        rule.prefix = data.prefix
        rule.date_format = data.date_format
        rule.sequence_length = data.sequence_length
        rule.reset_period = data.reset_period
        rule.is_active = data.is_active
        rule.updated_at = to_utc(self._now())
        await self.session.commit()

        logger.info("Updated numbering rule", rule_id=rule.id, rule_code=rule.code, is_active=rule.is_active)
        return rule

    async def delete_rule(self, rule_id: str) -> None:
        """Delete a rule."""
        rule = await self.get_rule(rule_id)
        code = rule.code
        await self.session.delete(rule)
        await self.session.commit()

        logger.info("Deleted numbering rule", rule_id=rule_id, rule_code=code)

    async def reset_sequence(self, rule_id: str) -> NumberingRule:
        """Set the counter back to zero; the next generated number gets sequence 1."""
        rule = await self.get_rule(rule_id)

        now = to_utc(self._now())
        rule.current_sequence = 0
        rule.last_reset_at = now
        rule.updated_at = now
        await self.session.commit()

        logger.info("Reset numbering sequence", rule_id=rule.id, rule_code=rule.code)
        return rule

    async def _find_by_code(self, code: str) -> NumberingRule | None:
        result = await self.session.execute(select(NumberingRule).where(NumberingRule.code == code))
        return result.scalars().first()
