"""Period-over-period comparison."""

from __future__ import annotations

from datetime import datetime
from typing import Iterable

from focus_engine.rollup import period_summary
from focus_engine.schema import ActivityEntry


def indicator(current: float, past: float) -> str:
    if current > past:
        return "increased"
    if current < past:
        return "decreased"
    return "unchanged"


def compare(entries_a: Iterable[ActivityEntry], entries_b: Iterable[ActivityEntry], now: datetime) -> dict:
    """Compare hours, active days and average hours per active day of two entry sets.

    ``a`` is the period being judged (e.g. this month) and ``b`` the reference.
    """

    summary_a = period_summary(entries_a, datetime.min, datetime.max, now)
    summary_b = period_summary(entries_b, datetime.min, datetime.max, now)

    metrics = {
        "hours": (summary_a["total_minutes"] / 60.0, summary_b["total_minutes"] / 60.0),
        "days_active": (summary_a["active_days"], summary_b["active_days"]),
        "avg_hours_per_day": (summary_a["avg_hours_per_active_day"], summary_b["avg_hours_per_active_day"]),
    }

    result = {}
    for name, (value_a, value_b) in metrics.items():
        result[f"{name}_a"] = value_a
        result[f"{name}_b"] = value_b
        result[f"{name}_diff"] = value_a - value_b
        result[f"{name}_indicator"] = indicator(value_a, value_b)
    return result


def compare_windows(
    entries: Iterable[ActivityEntry],
    window_a: tuple[datetime, datetime],
    window_b: tuple[datetime, datetime],
    now: datetime,
) -> dict:
    entries = list(entries)
    in_a = [e for e in entries if window_a[0] <= e.start <= window_a[1]]
    in_b = [e for e in entries if window_b[0] <= e.start <= window_b[1]]
    return compare(in_a, in_b, now)
