"""Sequence generator: issues formatted document numbers from numbering rules.

Callers (order creation, purchase orders, POS sessions, cashier shifts...) ask
for "the next number for rule X". Issuing a number is a locked read-modify-write
of the rule row, so concurrent requests for the same rule never receive the
same number. Different rules never block each other.
"""

from collections.abc import Callable
from datetime import datetime

import structlog
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from backoffice.db.row_lock import RowLock, RowNotFoundError
from backoffice.models.numbering_rule import NumberingRule
from backoffice.services.numbering.exceptions import PersistenceFailure, RuleDisabled, RuleNotFound
from backoffice.services.numbering.formatting import build_number, next_sequence
from backoffice.utils.datetime_utils import local_now, to_utc

logger = structlog.get_logger(__name__)


class NumberingService:
    """Generate and preview numbers for numbering rules.

    The session is used for a single locked transaction per generate() call; the
    transaction is committed before the number is returned.

    Args:
        session: Async database session
        now: Clock returning an aware datetime in the business timezone. Reset
             boundaries and date segments are evaluated in its timezone.
    """

    def __init__(self, session: AsyncSession, *, now: Callable[[], datetime] = local_now):
        self.session = session
        self._now = now

    async def generate(self, rule_code: str) -> str:
        """Issue the next number for ``rule_code`` and persist the counter.

        Raises:
            RuleNotFound: No rule has this code
            RuleDisabled: The rule is not active (counter left unchanged)
            PersistenceFailure: The locked update could not be committed
        """
        now = self._now()
        try:
            async with RowLock(self.session, NumberingRule, NumberingRule.code == rule_code) as lock:
                rule = lock.record
                assert rule is not None

                if not rule.is_active:
                    raise RuleDisabled(rule_code)

                sequence, reset = next_sequence(rule.current_sequence, rule.reset_period, rule.last_reset_at, now)
                changes: dict[str, object] = {"current_sequence": sequence, "updated_at": to_utc(now)}
                if reset:
                    changes["last_reset_at"] = to_utc(now)
                await lock.update_record(**changes)

                number = build_number(rule.prefix, rule.date_format, sequence, rule.sequence_length, now)

        except RowNotFoundError:
            logger.warning("Numbering rule not found", rule_code=rule_code)
            raise RuleNotFound(rule_code) from None
        except RuleDisabled:
            logger.warning("Numbering rule is disabled", rule_code=rule_code)
            raise
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error("Failed to persist numbering sequence", rule_code=rule_code, error=str(e), exc_info=True)
            raise PersistenceFailure(rule_code) from e

        logger.info("Generated number", rule_code=rule_code, number=number, sequence=sequence, reset=reset)
        return number

    async def preview_next_number(self, rule_code: str) -> str:
        """Return the number generate() would issue right now, without writing anything.

        Unlocked read: a concurrent generate() can make the result stale, so it is
        advisory only. The rule's active flag is not checked; a disabled rule still
        previews the number it would issue if it were enabled.

        Raises:
            RuleNotFound: No rule has this code
        """
        statement = (
            select(NumberingRule)
            .where(NumberingRule.code == rule_code)
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(statement)
        rule = result.scalars().first()
        if rule is None:
            raise RuleNotFound(rule_code)

        now = self._now()
        sequence, _ = next_sequence(rule.current_sequence, rule.reset_period, rule.last_reset_at, now)
        return build_number(rule.prefix, rule.date_format, sequence, rule.sequence_length, now)
