"""FastAPI dependencies for service injection."""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from backoffice.db import get_session
from backoffice.services.numbering.generator import NumberingService
from backoffice.services.numbering.rule_service import NumberingRuleService


async def get_numbering_rule_service(
    session: Annotated[AsyncSession, Depends(get_session)],
) -> NumberingRuleService:
    """Get a NumberingRuleService instance with the current session."""
    return NumberingRuleService(session)


async def get_numbering_service(
    session: Annotated[AsyncSession, Depends(get_session)],
) -> NumberingService:
    """Get a NumberingService instance with the current session."""
    return NumberingService(session)


# Type aliases for cleaner endpoint signatures
NumberingRuleServiceDep = Annotated[NumberingRuleService, Depends(get_numbering_rule_service)]
NumberingServiceDep = Annotated[NumberingService, Depends(get_numbering_service)]
