"""Weekly goal progress against category rollups."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional

from focus_engine.rollup import CategoryTotals, safe_ratio
from focus_engine.schema import Category, DailyLog, WeeklyGoal


@dataclass
class GoalProgress:
    category_id: str
    target_hours: float
    current_hours: float
    deep_hours: float
    shallow_hours: float
    pace_needed_per_day: float
    name: str = ""
    emoji: str = ""
    color: str = "#6366f1"

    @property
    def percent(self) -> float:
        return safe_ratio(self.current_hours * 100.0, self.target_hours)


def upsert_goal(goals: Iterable[WeeklyGoal], goal: WeeklyGoal) -> list[WeeklyGoal]:
    """Return goals with ``goal`` replacing any existing goal for the same category."""

    kept = [existing for existing in goals if existing.category_id != goal.category_id]
    kept.append(goal)
    return kept


def pace_needed(target_hours: float, current_hours: float, days_remaining: int) -> float:
    if days_remaining <= 0:
        return 0.0
    return max(target_hours - current_hours, 0.0) / days_remaining


def self_reported_minutes(daily_logs: Iterable[DailyLog]) -> int:
    return sum(max(log.social_media_minutes or 0, 0) for log in daily_logs)


def weekly_progress(
    goals: Iterable[WeeklyGoal],
    totals: dict[Optional[str], CategoryTotals],
    daily_logs: Iterable[DailyLog],
    days_remaining: int,
    categories: Iterable[Category] = (),
) -> list[GoalProgress]:
    """Progress rows for enabled goals with a positive target.

    Categories tracked in ``self_reported`` mode take their current time from the
    daily logs' screen-time minutes instead of the rollup. Goals on sub-categories
    are skipped.
    """

    by_id = {category.id: category for category in categories}
    reported_hours = self_reported_minutes(daily_logs) / 60.0

    rows = []
    for goal in goals:
        if not goal.enabled or goal.target_hours <= 0:
            continue
        category = by_id.get(goal.category_id)
        if category is not None and not category.is_top_level:
            continue

        if category is not None and category.is_self_reported:
            current, deep, shallow = reported_hours, 0.0, reported_hours
        else:
            bucket = totals.get(goal.category_id, CategoryTotals())
            current = bucket.total_minutes / 60.0
            deep = bucket.deep_minutes / 60.0
            shallow = bucket.shallow_minutes / 60.0

        rows.append(
            GoalProgress(
                category_id=goal.category_id,
                target_hours=float(goal.target_hours),
                current_hours=current,
                deep_hours=deep,
                shallow_hours=shallow,
                pace_needed_per_day=pace_needed(goal.target_hours, current, days_remaining),
                name=category.name if category else "",
                emoji=category.emoji if category else "",
                color=category.color if category else "#6366f1",
            )
        )
    return rows


def week_totals(progress: Iterable[GoalProgress]) -> dict:
    rows = list(progress)
    current = sum(row.current_hours for row in rows)
    target = sum(row.target_hours for row in rows)
    percent = min(100, round(current / target * 100)) if target > 0 else 0
    return {"total_hours": current, "total_target": target, "percent": percent}


def today_progress(totals: dict[Optional[str], CategoryTotals], categories: Iterable[Category] = ()) -> list[dict]:
    """Today's per-category minutes, given a rollup over today's window."""

    by_id = {category.id: category for category in categories}
    rows = []
    for category_id, bucket in totals.items():
        category = by_id.get(category_id)
        rows.append(
            {
                "category_id": category_id,
                "name": category.name if category else "",
                "total_minutes": bucket.total_minutes,
                "deep_minutes": bucket.deep_minutes,
                "shallow_minutes": bucket.shallow_minutes,
            }
        )
    return sorted(rows, key=lambda row: -row["total_minutes"])
