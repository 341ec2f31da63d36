from datetime import UTC, datetime
from zoneinfo import ZoneInfo

import pytest

from backoffice.services.numbering.formatting import (
    build_number,
    format_date_segment,
    next_sequence,
    pad_sequence,
    should_reset,
)

PRAGUE = ZoneInfo("Europe/Prague")
NOW = datetime(2024, 3, 15, 10, 30, tzinfo=PRAGUE)


@pytest.mark.parametrize(
    ("date_format", "expected"),
    [
        ("YYYYMMDD", "20240315"),
        ("YYYYMM", "202403"),
        ("YYYY", "2024"),
        ("", ""),
        (None, ""),
        ("DD-MM-YYYY", ""),
    ],
)
def test_format_date_segment(date_format, expected):
    assert format_date_segment(date_format, NOW) == expected


def test_date_segment_uses_local_calendar_day():
    # 23:30 UTC on the 14th is already the 15th in Prague
    now = datetime(2024, 3, 14, 23, 30, tzinfo=UTC).astimezone(PRAGUE)
    assert format_date_segment("YYYYMMDD", now) == "20240315"


def test_pad_sequence_pads_to_minimum_width():
    assert pad_sequence(6, 4) == "0006"
    assert pad_sequence(1, 1) == "1"


def test_pad_sequence_never_truncates():
    assert pad_sequence(10000, 4) == "10000"
    assert pad_sequence(10000, 3) == "10000"


@pytest.mark.parametrize("reset_period", ["NEVER", None, "", "WEEKLY", "daily"])
def test_unrecognized_or_never_period_does_not_reset(reset_period):
    assert should_reset(reset_period, None, NOW) is False


@pytest.mark.parametrize("reset_period", ["DAILY", "MONTHLY", "YEARLY"])
def test_missing_last_reset_counts_as_epoch(reset_period):
    assert should_reset(reset_period, None, NOW) is True


def test_daily_reset_compares_calendar_days_not_elapsed_time():
    last = datetime(2024, 3, 14, 23, 59, tzinfo=PRAGUE)
    now = datetime(2024, 3, 15, 0, 1, tzinfo=PRAGUE)
    assert should_reset("DAILY", last, now) is True


def test_daily_no_reset_on_same_day():
    last = datetime(2024, 3, 15, 0, 0, 1, tzinfo=PRAGUE)
    assert should_reset("DAILY", last, NOW) is False


def test_daily_reset_converts_stored_utc_to_local_day():
    # Stored as naive UTC (as SQLite returns it): 23:30 UTC on the 14th is 00:30 on the 15th in Prague
    last = datetime(2024, 3, 14, 23, 30)
    assert should_reset("DAILY", last, NOW) is False


def test_monthly_reset():
    assert should_reset("MONTHLY", datetime(2024, 3, 1, 8, 0, tzinfo=PRAGUE), NOW) is False
    assert should_reset("MONTHLY", datetime(2024, 2, 29, 23, 59, tzinfo=PRAGUE), NOW) is True
    # Same month number in another year
    assert should_reset("MONTHLY", datetime(2023, 3, 15, 10, 0, tzinfo=PRAGUE), NOW) is True


def test_yearly_reset():
    assert should_reset("YEARLY", datetime(2024, 1, 1, 0, 0, tzinfo=PRAGUE), NOW) is False
    assert should_reset("YEARLY", datetime(2023, 12, 31, 23, 59, tzinfo=PRAGUE), NOW) is True


def test_next_sequence_increments_without_reset():
    assert next_sequence(5, "NEVER", None, NOW) == (6, False)


def test_next_sequence_restarts_at_one_after_reset():
    yesterday = datetime(2024, 3, 14, 9, 0, tzinfo=PRAGUE)
    assert next_sequence(999, "DAILY", yesterday, NOW) == (1, True)


def test_build_number_examples():
    assert build_number("ORD", "YYYYMMDD", 6, 4, NOW) == "ORD202403150006"
    assert build_number("PO", "YYYYMM", 11, 5, NOW) == "PO20240300011"
    assert build_number("INV", "YYYY", 100, 6, NOW) == "INV2024000100"
    assert build_number("C", None, 1000000, 6, NOW) == "C1000000"
