"""Calendar heatmap and month grid bucketing."""

from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Iterable, Optional, Sequence

import numpy as np

from focus_engine.config import get_settings
from focus_engine.rollup import daily_minutes
from focus_engine.schema import ActivityEntry

OUTSIDE_YEAR = -1
MAX_WEEKS = 53


@dataclass(frozen=True)
class HeatmapCell:
    date: date
    level: int

    @property
    def in_year(self) -> bool:
        return self.level != OUTSIDE_YEAR


def classify_levels(hours: np.ndarray, thresholds: Optional[Sequence[float]] = None) -> np.ndarray:
    """Map daily hours to 0 (none), 1 (>0h) and one step per threshold crossed.

    Thresholds default to the configured ``heatmap_thresholds``.
    """

    if thresholds is None:
        thresholds = get_settings().heatmap_thresholds
    hours = np.asarray(hours, dtype=float)
    return (hours > 0).astype(int) + np.digitize(hours, np.asarray(thresholds, dtype=float), right=False)


def grid_start(year: int) -> date:
    """Sunday on or before Jan 1."""

    first = date(year, 1, 1)
    return first - timedelta(days=(first.weekday() + 1) % 7)


def heatmap(
    entries: Iterable[ActivityEntry],
    year: int,
    now: Optional[datetime] = None,
    thresholds: Optional[Sequence[float]] = None,
) -> list[list[HeatmapCell]]:
    """Sunday-first weekly columns covering ``year``; padding days get ``OUTSIDE_YEAR``.

    Without ``now`` only logged entries count.
    """

    first, last = date(year, 1, 1), date(year, 12, 31)
    start = grid_start(year)
    span = (last - start).days + 1
    n_days = min(-(-span // 7), MAX_WEEKS) * 7

    by_day = daily_minutes(entries, now if now is not None else datetime.min)
    days = [start + timedelta(days=offset) for offset in range(n_days)]
    hours = np.array([by_day.get(day, 0) / 60.0 for day in days])
    in_year = np.array([first <= day <= last for day in days])
    levels = np.where(in_year, classify_levels(hours, thresholds), OUTSIDE_YEAR)

    cells = [HeatmapCell(day, int(level)) for day, level in zip(days, levels)]
    return [cells[i : i + 7] for i in range(0, n_days, 7)]


def month_grid(year: int, month: int) -> list[list[Optional[int]]]:
    """Monday-first weeks of day numbers with ``None`` padding."""

    if not 1 <= month <= 12:
        raise ValueError(f"Invalid month {month}")
    return [[day or None for day in week] for week in calendar.Calendar(firstweekday=0).monthdayscalendar(year, month)]
