"""Duration rollups over time windows."""

from __future__ import annotations

import logging
import math
from collections import defaultdict
from dataclasses import dataclass
from datetime import date, datetime
from typing import Iterable, Optional

from focus_engine.schema import ActivityEntry, Category

logger = logging.getLogger(__name__)

UNCATEGORIZED = None


def category_key(category_id: Optional[str]) -> Optional[str]:
    """Bucket key for a category id; missing or blank ids are uncategorized."""

    if category_id is None:
        return UNCATEGORIZED
    normalized = str(category_id).strip()
    return normalized or UNCATEGORIZED


def minutes_of(entry: ActivityEntry) -> int:
    """Duration with missing or negative values read as 0."""

    return max(entry.duration_minutes or 0, 0)


@dataclass
class CategoryTotals:
    """Integer minute sums for one rollup bucket."""

    total_minutes: int = 0
    deep_minutes: int = 0
    shallow_minutes: int = 0

    def add(self, entry: ActivityEntry) -> None:
        minutes = minutes_of(entry)
        self.total_minutes += minutes
        if entry.work_type == "deep":
            self.deep_minutes += minutes
        elif entry.work_type == "shallow":
            self.shallow_minutes += minutes


def safe_ratio(numerator: float, denominator: float) -> float:
    """Ratio that never raises: 0 for 0/x and 0/0, ``inf`` for positive/0."""

    if denominator == 0:
        return math.inf if numerator > 0 else 0.0
    return numerator / denominator


def is_completed(entry: ActivityEntry, now: datetime) -> bool:
    return entry.source == "logged" or entry.start <= now


def completed_in_window(
    entries: Iterable[ActivityEntry], window_start: datetime, window_end: datetime, now: datetime
) -> list[ActivityEntry]:
    return [e for e in entries if window_start <= e.start <= window_end and is_completed(e, now)]


def rollup(
    entries: Iterable[ActivityEntry], window_start: datetime, window_end: datetime, now: datetime
) -> dict[Optional[str], CategoryTotals]:
    """Sum completed minutes per category id (``None`` for uncategorized) inside the window."""

    buckets: dict[Optional[str], CategoryTotals] = defaultdict(CategoryTotals)
    for entry in completed_in_window(entries, window_start, window_end, now):
        buckets[category_key(entry.category_id)].add(entry)
    logger.debug("Rolled up %d buckets for %s..%s", len(buckets), window_start, window_end)
    return dict(buckets)


def daily_minutes(
    entries: Iterable[ActivityEntry], now: datetime, window_start: datetime = datetime.min, window_end: datetime = datetime.max
) -> dict[date, int]:
    """Completed minutes per calendar day."""

    by_day: dict[date, int] = defaultdict(int)
    for entry in completed_in_window(entries, window_start, window_end, now):
        by_day[entry.start.date()] += minutes_of(entry)
    return dict(by_day)


def active_dates(entries: Iterable[ActivityEntry], now: datetime) -> set[date]:
    return {day for day, minutes in daily_minutes(entries, now).items() if minutes > 0}


def period_summary(entries: Iterable[ActivityEntry], window_start: datetime, window_end: datetime, now: datetime) -> dict:
    """Headline numbers for a day/week/month/year view."""

    window = completed_in_window(entries, window_start, window_end, now)
    totals = CategoryTotals()
    for entry in window:
        totals.add(entry)
    days = {e.start.date() for e in window if minutes_of(e) > 0}

    return {
        "total_minutes": totals.total_minutes,
        "deep_minutes": totals.deep_minutes,
        "shallow_minutes": totals.shallow_minutes,
        "sessions": len(window),
        "active_days": len(days),
        "avg_hours_per_active_day": safe_ratio(totals.total_minutes / 60.0, len(days)),
        "deep_shallow_ratio": safe_ratio(totals.deep_minutes, totals.shallow_minutes),
    }


def planned_summary(entries: Iterable[ActivityEntry], window_start: datetime, window_end: datetime, now: datetime) -> dict:
    """Minutes of future planned entries inside the window, reported apart from completed time."""

    totals = CategoryTotals()
    for entry in entries:
        if window_start <= entry.start <= window_end and not is_completed(entry, now):
            totals.add(entry)
    return {
        "total_minutes": totals.total_minutes,
        "deep_minutes": totals.deep_minutes,
        "shallow_minutes": totals.shallow_minutes,
    }


def monthly_breakdown(entries: Iterable[ActivityEntry], year: int, now: datetime) -> list[int]:
    """Twelve monthly minute totals for ``year``."""

    months = [0] * 12
    for entry in entries:
        if entry.start.year == year and is_completed(entry, now):
            months[entry.start.month - 1] += minutes_of(entry)
    return months


def week_of_month_breakdown(entries: Iterable[ActivityEntry], year: int, month: int, now: datetime) -> list[int]:
    """Five buckets of minutes keyed by ``ceil(day / 7)``; days 29-31 land in the fifth."""

    weeks = [0] * 5
    for entry in entries:
        if entry.start.year == year and entry.start.month == month and is_completed(entry, now):
            weeks[math.ceil(entry.start.day / 7) - 1] += minutes_of(entry)
    return weeks


def top_level_category_totals(totals: dict[Optional[str], CategoryTotals], categories: Iterable[Category]) -> list[dict]:
    """Per-category minutes for top-level categories present in ``totals``, largest first."""

    rows = [
        {
            "category_id": category.id,
            "name": category.name,
            "emoji": category.emoji,
            "color": category.color,
            "total_minutes": totals[category.id].total_minutes,
        }
        for category in categories
        if category.is_top_level and category.id in totals
    ]
    return sorted(rows, key=lambda row: (-row["total_minutes"], row["name"]))
