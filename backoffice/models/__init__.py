"""Database models."""

from sqlmodel import SQLModel

from backoffice.models.enums import DateFormat, ResetPeriod
from backoffice.models.numbering_rule import NumberingRule

__all__ = [
    "SQLModel",
    "NumberingRule",
    "DateFormat",
    "ResetPeriod",
]
