from datetime import date, datetime

import numpy as np
import pytest

from focus_engine.config import get_settings
from focus_engine.heatmap import OUTSIDE_YEAR, classify_levels, grid_start, heatmap, month_grid
from focus_engine.schema import ActivityEntry


def entry(entry_id, start, minutes, source="logged"):
    return ActivityEntry(entry_id, datetime.fromisoformat(start), minutes, "study", "deep", source)


def cell_for(weeks, day):
    return next(cell for week in weeks for cell in week if cell.date == day)


@pytest.mark.parametrize("year", [2023, 2024, 2025, 2026, 2028])
def test_grid_shape(year):
    weeks = heatmap([], year)
    assert len(weeks) == 53
    assert all(len(week) == 7 for week in weeks)
    assert weeks[0][0].date == grid_start(year)
    assert weeks[0][0].date.weekday() == 6


def test_levels_and_outside_sentinel():
    entries = [
        entry("a", "2025-03-10T09:00:00", 150),
        entry("b", "2025-03-11T09:00:00", 30),
        entry("c", "2025-03-12T09:00:00", 400),
    ]
    weeks = heatmap(entries, 2025)
    assert cell_for(weeks, date(2025, 3, 10)).level == 2
    assert cell_for(weeks, date(2025, 3, 11)).level == 1
    assert cell_for(weeks, date(2025, 3, 12)).level == 4
    assert cell_for(weeks, date(2025, 3, 13)).level == 0
    padding = cell_for(weeks, date(2024, 12, 29))
    assert padding.level == OUTSIDE_YEAR
    assert not padding.in_year


def test_planned_entries_need_now():
    entries = [entry("p", "2025-03-10T09:00:00", 300, source="planned")]
    assert cell_for(heatmap(entries, 2025), date(2025, 3, 10)).level == 0
    now = datetime(2025, 3, 11)
    assert cell_for(heatmap(entries, 2025, now), date(2025, 3, 10)).level == 3


def test_heatmap_is_deterministic():
    entries = [entry("a", "2025-06-01T09:00:00", 90)]
    assert heatmap(entries, 2025) == heatmap(entries, 2025)


def test_classify_levels_thresholds():
    levels = classify_levels(np.array([0.0, 0.5, 2.0, 3.99, 4.0, 6.0, 10.0]))
    assert levels.tolist() == [0, 1, 2, 2, 3, 4, 4]


def test_month_grid_starts_on_monday():
    grid = month_grid(2025, 3)
    assert grid[0] == [None, None, None, None, None, 1, 2]
    assert grid[-1][0] == 31
    with pytest.raises(ValueError):
        month_grid(2025, 13)


def test_leap_year_starting_saturday_is_capped():
    weeks = heatmap([], 2028)
    days = [cell.date for week in weeks for cell in week]
    assert len(weeks) == 53
    assert days[0] == date(2027, 12, 26)
    assert days[-1] == date(2028, 12, 30)
    assert date(2028, 12, 31) not in days


@pytest.fixture
def fresh_settings():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def test_thresholds_default_to_settings(monkeypatch, fresh_settings):
    entries = [entry("a", "2025-03-10T09:00:00", 90)]
    assert cell_for(heatmap(entries, 2025), date(2025, 3, 10)).level == 1

    monkeypatch.setenv("FOCUS_ENGINE_HEATMAP_THRESHOLDS", "[1, 3, 5]")
    get_settings.cache_clear()
    assert cell_for(heatmap(entries, 2025), date(2025, 3, 10)).level == 2
    assert cell_for(heatmap(entries, 2025, thresholds=[2, 4, 6]), date(2025, 3, 10)).level == 1
