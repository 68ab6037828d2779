"""Assemble the dashboard views from the individual aggregations."""

from __future__ import annotations

import logging
import math
from dataclasses import asdict
from datetime import datetime
from typing import Iterable, Optional

from focus_engine.calendar_utils import (
    comparison_windows,
    day_bounds,
    days_remaining_in_week,
    month_bounds,
    to_hours,
    week_bounds,
    week_start,
    year_bounds,
)
from focus_engine.comparison import compare_windows
from focus_engine.goals import today_progress, week_totals, weekly_progress
from focus_engine.heatmap import heatmap
from focus_engine.normalizer import DraftRepository, collect_draft_weeks, normalize_entries
from focus_engine.rollup import (
    active_dates,
    monthly_breakdown,
    period_summary,
    planned_summary,
    rollup,
    top_level_category_totals,
    week_of_month_breakdown,
)
from focus_engine.schema import ActivityEntry, Category, DailyLog, WeeklyGoal
from focus_engine.streaks import streaks

logger = logging.getLogger(__name__)

INFINITY = "\u221e"


def presentable(value):
    """Replace infinite ratios with the ``INFINITY`` marker so the report is strict JSON."""

    if isinstance(value, dict):
        return {key: presentable(item) for key, item in value.items()}
    if isinstance(value, list):
        return [presentable(item) for item in value]
    if isinstance(value, float) and math.isinf(value):
        return INFINITY
    return value


def build_report(
    logged: Iterable[ActivityEntry],
    now: datetime,
    categories: Iterable[Category] = (),
    goals: Iterable[WeeklyGoal] = (),
    daily_logs: Iterable[DailyLog] = (),
    drafts: Optional[DraftRepository] = None,
    comparison_months: int = 1,
    thresholds: Optional[list[float]] = None,
) -> dict:
    """Run every aggregation for the day, week, month and year containing ``now``.

    Infinite ratios (time over a zero denominator) are reported as ``INFINITY``.
    """

    categories = list(categories)
    today = now.date()
    week_window = week_bounds(today)

    draft_weeks = collect_draft_weeks(drafts, week_start(today), week_window[1].date()) if drafts else None
    entries = normalize_entries(logged, draft_weeks)
    logger.debug("Building report over %d entries at %s", len(entries), now)

    week_logs = [log for log in daily_logs if week_window[0].date() <= log.log_date <= week_window[1].date()]
    progress = weekly_progress(
        goals,
        rollup(entries, *week_window, now),
        week_logs,
        days_remaining_in_week(today),
        categories,
    )

    month_window = month_bounds(today.year, today.month)
    year_window = year_bounds(today.year)
    year_totals = rollup(entries, *year_window, now)
    current_window, past_window = comparison_windows(now, comparison_months)

    report = {
        "today": {
            "summary": period_summary(entries, *day_bounds(today), now),
            "by_category": today_progress(rollup(entries, *day_bounds(today), now), categories),
        },
        "week": {
            "summary": period_summary(entries, *week_window, now),
            "planned": planned_summary(entries, *week_window, now),
            "goals": [dict(asdict(row), percent=row.percent) for row in progress],
            "totals": week_totals(progress),
            "days_remaining": days_remaining_in_week(today),
        },
        "month": {
            "summary": period_summary(entries, *month_window, now),
            "weekly_hours": [to_hours(m) for m in week_of_month_breakdown(entries, today.year, today.month, now)],
        },
        "year": {
            "summary": period_summary(entries, *year_window, now),
            "monthly_hours": [to_hours(m) for m in monthly_breakdown(entries, today.year, now)],
            "categories": [
                dict(row, hours=to_hours(row["total_minutes"])) for row in top_level_category_totals(year_totals, categories)
            ],
            "heatmap": [
                [{"date": cell.date.isoformat(), "level": cell.level} for cell in week]
                for week in heatmap(entries, today.year, now, thresholds)
            ],
        },
        "streaks": asdict(streaks(active_dates(entries, now), today)),
        "comparison": compare_windows(entries, current_window, past_window, now),
    }
    return presentable(report)
