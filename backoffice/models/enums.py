"""Enum definitions for database models."""

from enum import StrEnum


class DateFormat(StrEnum):
    """Date segment embedded in generated numbers.

    Stored as plain text on the rule; values outside this enum produce an empty segment.
    """

    NONE = ""
    YEAR = "YYYY"
    YEAR_MONTH = "YYYYMM"
    YEAR_MONTH_DAY = "YYYYMMDD"


class ResetPeriod(StrEnum):
    """How often a rule's counter returns to zero.

    Stored as plain text on the rule; a missing or unknown value never resets.
    """

    DAILY = "DAILY"
    MONTHLY = "MONTHLY"
    YEARLY = "YEARLY"
    NEVER = "NEVER"
