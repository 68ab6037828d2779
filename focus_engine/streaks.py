"""Consecutive active-day streaks."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta
from typing import Iterable


@dataclass
class StreakSummary:
    current: int = 0
    best: int = 0


def best_streak(days: list[date]) -> int:
    """Longest run of consecutive days in an ascending list of distinct dates."""

    if not days:
        return 0

    best = run = 1
    for previous, current in zip(days, days[1:]):
        if (current - previous).days == 1:
            run += 1
        else:
            run = 1
        best = max(best, run)
    return best


def current_streak(active: set[date], today: date) -> int:
    """Run ending today, or yesterday when nothing is tracked yet today."""

    anchor = today if today in active else today - timedelta(days=1)
    count = 0
    while anchor in active:
        count += 1
        anchor -= timedelta(days=1)
    return count


def streaks(active_dates: Iterable[date], today: date) -> StreakSummary:
    active = set(active_dates)
    return StreakSummary(current=current_streak(active, today), best=best_streak(sorted(active)))
