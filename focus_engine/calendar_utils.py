"""Calendar window helpers shared by the aggregation views."""

from __future__ import annotations

import calendar
from datetime import date, datetime, time, timedelta
from zoneinfo import ZoneInfo


def to_local(timestamp: datetime, tz_name: str) -> datetime:
    """Convert an aware timestamp to naive local time; naive values pass through."""

    if timestamp.tzinfo is None:
        return timestamp
    return timestamp.astimezone(ZoneInfo(tz_name)).replace(tzinfo=None)


def week_start(day: date) -> date:
    return day - timedelta(days=day.weekday())


def week_bounds(day: date) -> tuple[datetime, datetime]:
    """Monday 00:00:00 through Sunday 23:59:59 of the week containing ``day``."""

    monday = week_start(day)
    sunday = monday + timedelta(days=6)
    return datetime.combine(monday, time.min), datetime.combine(sunday, time.max)


def days_remaining_in_week(today: date) -> int:
    """Days left in the Monday-Sunday week, counting today (Monday -> 7, Sunday -> 1)."""

    return 7 - today.weekday()


def day_bounds(day: date) -> tuple[datetime, datetime]:
    return datetime.combine(day, time.min), datetime.combine(day, time.max)


def month_bounds(year: int, month: int) -> tuple[datetime, datetime]:
    if not 1 <= month <= 12:
        raise ValueError(f"Invalid month {month}")
    last_day = calendar.monthrange(year, month)[1]
    return datetime(year, month, 1), datetime.combine(date(year, month, last_day), time.max)


def year_bounds(year: int) -> tuple[datetime, datetime]:
    return datetime(year, 1, 1), datetime.combine(date(year, 12, 31), time.max)


def shift_months(moment: datetime, months: int) -> datetime:
    """Move ``moment`` by whole months, clamping the day to the target month length."""

    index = moment.year * 12 + (moment.month - 1) + months
    year, month = divmod(index, 12)
    month += 1
    day = min(moment.day, calendar.monthrange(year, month)[1])
    return moment.replace(year=year, month=month, day=day)


def comparison_windows(now: datetime, months_back: int = 1) -> tuple[tuple[datetime, datetime], tuple[datetime, datetime]]:
    """Return (current, past) windows.

    The current window is always the one month ending at ``now``; ``months_back`` only moves
    the one-month past window. The past window ends a microsecond before its end boundary so
    an entry on the shared instant is counted once, in the current window.
    """

    current = (shift_months(now, -1), now)
    past = (shift_months(now, -months_back - 1), shift_months(now, -months_back) - timedelta(microseconds=1))
    return current, past


def to_hours(minutes: float) -> float:
    """Presentation rounding: minutes to hours with one decimal."""

    return round(minutes / 60.0, 1)
