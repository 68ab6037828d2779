from datetime import date, timedelta

from focus_engine.streaks import StreakSummary, best_streak, streaks

TODAY = date(2025, 3, 12)


def days_back(*offsets):
    return {TODAY - timedelta(days=offset) for offset in offsets}


def test_empty_and_single_date():
    assert streaks(set(), TODAY) == StreakSummary(current=0, best=0)
    assert best_streak([TODAY]) == 1


def test_best_streak_tracks_longest_run():
    active = days_back(0, 1, 5, 6, 7, 8, 20)
    result = streaks(active, TODAY)
    assert result.best == 4
    assert result.current == 2


def test_current_streak_anchors_on_yesterday():
    assert streaks(days_back(1, 2, 3), TODAY).current == 3


def test_broken_streak_is_zero():
    assert streaks(days_back(2, 3, 4), TODAY) == StreakSummary(current=0, best=3)


def test_extending_run_increments_current():
    active = days_back(1, 2)
    before = streaks(active, TODAY).current
    after = streaks(active | {TODAY}, TODAY).current
    assert after == before + 1


def test_gap_resets_current_to_one():
    assert streaks(days_back(0, 3, 4, 5), TODAY).current == 1
