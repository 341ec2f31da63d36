"""Pure helpers for numbering: reset decisions, date segments and number assembly.

Generated numbers are ``<prefix><date segment><zero-padded sequence>`` with no
separators. Calendar comparisons use the timezone of ``now``; stored reset
timestamps are converted into it first.
"""

from datetime import UTC, datetime

from backoffice.models.enums import DateFormat, ResetPeriod
from backoffice.utils.datetime_utils import ensure_aware

EPOCH = datetime(1970, 1, 1, tzinfo=UTC)


def should_reset(reset_period: str | None, last_reset_at: datetime | None, now: datetime) -> bool:
    """Decide whether the counter returns to zero before the next number is issued.

    Compares calendar components (day/month/year) in the timezone of ``now``, not
    elapsed time: a reset at 23:59 checked at 00:01 the next day is a new day.
    A missing ``last_reset_at`` counts as the epoch. Missing or unrecognized
    periods never reset.
    """
    if not reset_period or reset_period == ResetPeriod.NEVER:
        return False

    last = ensure_aware(last_reset_at or EPOCH).astimezone(now.tzinfo)

    if reset_period == ResetPeriod.DAILY:
        return last.date() != now.date()
    if reset_period == ResetPeriod.MONTHLY:
        return (last.year, last.month) != (now.year, now.month)
    if reset_period == ResetPeriod.YEARLY:
        return last.year != now.year
    return False


def format_date_segment(date_format: str | None, now: datetime) -> str:
    """Render the date segment for ``date_format``; unknown formats yield an empty string."""
    if date_format == DateFormat.YEAR_MONTH_DAY:
        return f"{now.year:04d}{now.month:02d}{now.day:02d}"
    if date_format == DateFormat.YEAR_MONTH:
        return f"{now.year:04d}{now.month:02d}"
    if date_format == DateFormat.YEAR:
        return f"{now.year:04d}"
    return ""


def pad_sequence(sequence: int, sequence_length: int) -> str:
    """Left-pad with zeros to at least ``sequence_length`` digits, never truncating."""
    return str(sequence).rjust(sequence_length, "0")


def next_sequence(
    current_sequence: int,
    reset_period: str | None,
    last_reset_at: datetime | None,
    now: datetime,
) -> tuple[int, bool]:
    """Return (next counter value, whether a reset happened first)."""
    reset = should_reset(reset_period, last_reset_at, now)
    base = 0 if reset else current_sequence
    return base + 1, reset


def build_number(prefix: str, date_format: str | None, sequence: int, sequence_length: int, now: datetime) -> str:
    """Assemble ``prefix + date segment + padded sequence``.

    Example:
        >>> build_number("ORD", "YYYYMMDD", 6, 4, datetime(2024, 3, 15))
        'ORD202403150006'
    """
    return f"{prefix}{format_date_segment(date_format, now)}{pad_sequence(sequence, sequence_length)}"
