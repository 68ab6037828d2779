from datetime import date, datetime, timedelta

import pytest

from focus_engine.calendar_utils import (
    comparison_windows,
    days_remaining_in_week,
    month_bounds,
    shift_months,
    to_hours,
    week_bounds,
)


def test_week_bounds_monday_to_sunday():
    start, end = week_bounds(date(2025, 3, 12))
    assert start == datetime(2025, 3, 10, 0, 0)
    assert end.date() == date(2025, 3, 16)
    assert (end.hour, end.minute, end.second) == (23, 59, 59)


def test_days_remaining_counts_today():
    assert days_remaining_in_week(date(2025, 3, 10)) == 7
    assert days_remaining_in_week(date(2025, 3, 16)) == 1


def test_month_bounds_and_invalid_month():
    start, end = month_bounds(2024, 2)
    assert start == datetime(2024, 2, 1)
    assert end.date() == date(2024, 2, 29)
    with pytest.raises(ValueError):
        month_bounds(2024, 0)


def test_shift_months_clamps_day():
    assert shift_months(datetime(2025, 3, 31, 10), -1) == datetime(2025, 2, 28, 10)
    assert shift_months(datetime(2025, 1, 15), -2) == datetime(2024, 11, 15)


def test_comparison_windows():
    now = datetime(2025, 3, 12, 18)
    current, past = comparison_windows(now, 2)
    assert current == (datetime(2025, 2, 12, 18), now)
    assert past == (datetime(2024, 12, 12, 18), datetime(2025, 1, 12, 18) - timedelta(microseconds=1))


def test_to_hours_rounds_to_one_decimal():
    assert to_hours(95) == 1.6
    assert to_hours(0) == 0.0
