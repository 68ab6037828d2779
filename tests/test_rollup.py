from datetime import datetime

from focus_engine.rollup import (
    UNCATEGORIZED,
    daily_minutes,
    monthly_breakdown,
    period_summary,
    planned_summary,
    rollup,
    safe_ratio,
    top_level_category_totals,
    week_of_month_breakdown,
)
from focus_engine.schema import ActivityEntry, Category

NOW = datetime.fromisoformat("2025-03-12T18:00:00")
WEEK = (datetime.fromisoformat("2025-03-10T00:00:00"), datetime.fromisoformat("2025-03-16T23:59:59"))


def entry(entry_id, start, minutes, category="study", work_type="deep", source="logged"):
    return ActivityEntry(entry_id, datetime.fromisoformat(start), minutes, category, work_type, source)


def sample_entries():
    return [
        entry("a", "2025-03-10T09:00:00", 120, "study", "deep"),
        entry("b", "2025-03-10T14:00:00", 30, "study", "shallow"),
        entry("c", "2025-03-11T10:00:00", 45, "study", "other"),
        entry("d", "2025-03-11T11:00:00", 60, None, "shallow"),
        entry("e", "2025-03-12T08:00:00", 90, "work", "deep", source="planned"),
        entry("f", "2025-03-14T08:00:00", 240, "work", "deep", source="planned"),
        entry("g", "2025-03-03T08:00:00", 500, "work", "deep"),
    ]


def test_rollup_sums_minutes_by_category_and_work_type():
    result = rollup(sample_entries(), *WEEK, NOW)
    assert result["study"].total_minutes == 195
    assert result["study"].deep_minutes == 120
    assert result["study"].shallow_minutes == 30
    assert result[UNCATEGORIZED].total_minutes == 60
    assert result[UNCATEGORIZED].shallow_minutes == 60


def test_rollup_excludes_future_planned_entries():
    result = rollup(sample_entries(), *WEEK, NOW)
    # past planned block counts, future one does not
    assert result["work"].total_minutes == 90


def test_rollup_empty_and_idempotent():
    assert rollup([], *WEEK, NOW) == {}
    entries = sample_entries()
    assert rollup(entries, *WEEK, NOW) == rollup(entries, *WEEK, NOW)


def test_rollup_is_additive_over_adjacent_windows():
    entries = sample_entries()
    start, end = datetime(2025, 3, 1), datetime(2025, 3, 31)
    middle = datetime(2025, 3, 10, 12, 0)
    whole = sum(t.total_minutes for t in rollup(entries, start, end, NOW).values())
    left = sum(t.total_minutes for t in rollup(entries, start, middle, NOW).values())
    right = sum(t.total_minutes for t in rollup(entries, middle, end, NOW).values())
    assert whole == left + right


def test_work_type_partition_never_exceeds_total():
    for totals in rollup(sample_entries(), *WEEK, NOW).values():
        assert totals.deep_minutes + totals.shallow_minutes <= totals.total_minutes


def test_safe_ratio_guards_zero_denominator():
    assert safe_ratio(0, 0) == 0.0
    assert safe_ratio(3, 0) == float("inf")
    assert safe_ratio(3, 2) == 1.5


def test_period_summary_counts_sessions_and_days():
    summary = period_summary(sample_entries(), *WEEK, NOW)
    assert summary["total_minutes"] == 345
    assert summary["sessions"] == 5
    assert summary["active_days"] == 3
    assert summary["avg_hours_per_active_day"] == 345 / 60 / 3


def test_period_summary_empty():
    summary = period_summary([], *WEEK, NOW)
    assert summary["total_minutes"] == 0
    assert summary["avg_hours_per_active_day"] == 0.0
    assert summary["deep_shallow_ratio"] == 0.0


def test_planned_summary_only_counts_future_planned():
    planned = planned_summary(sample_entries(), *WEEK, NOW)
    assert planned == {"total_minutes": 240, "deep_minutes": 240, "shallow_minutes": 0}


def test_daily_and_monthly_breakdowns():
    entries = sample_entries()
    by_day = daily_minutes(entries, NOW)
    assert by_day[datetime(2025, 3, 10).date()] == 150
    months = monthly_breakdown(entries, 2025, NOW)
    assert months[2] == 845
    assert sum(months) == 845


def test_week_of_month_breakdown_uses_day_of_month_buckets():
    entries = [entry("x", "2025-03-29T09:00:00", 60), entry("y", "2025-03-07T09:00:00", 30), entry("z", "2025-03-08T09:00:00", 15)]
    assert week_of_month_breakdown(entries, 2025, 3, NOW.replace(month=4)) == [30, 15, 0, 0, 60]


def test_top_level_category_totals_skip_subcategories():
    categories = [
        Category("study", "Study"),
        Category("work", "Work"),
        Category("calc", "Calculus", parent_id="study"),
    ]
    entries = sample_entries() + [entry("h", "2025-03-11T12:00:00", 20, "calc")]
    rows = top_level_category_totals(rollup(entries, *WEEK, NOW), categories)
    assert [row["category_id"] for row in rows] == ["study", "work"]


def test_blank_category_ids_roll_into_uncategorized():
    entries = [entry("s", "2025-03-10T09:00:00", 20, "  "), entry("t", "2025-03-10T10:00:00", 10, "")]
    result = rollup(entries, *WEEK, NOW)
    assert list(result) == [UNCATEGORIZED]
    assert result[UNCATEGORIZED].total_minutes == 30
