"""Read interface to the record store the engine is fed from."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections import defaultdict
from datetime import date, datetime
from typing import Iterable

from focus_engine.goals import upsert_goal
from focus_engine.schema import ActivityEntry, DailyLog, WeeklyGoal


class EntryStore(ABC):
    """User-scoped queries; implementations do the access control."""

    @abstractmethod
    def fetch_entries(self, user_id: str, start: datetime, end: datetime) -> list[ActivityEntry]:
        pass

    @abstractmethod
    def fetch_goals(self, user_id: str) -> list[WeeklyGoal]:
        pass

    @abstractmethod
    def fetch_daily_logs(self, user_id: str, start: date, end: date) -> list[DailyLog]:
        pass


class InMemoryEntryStore(EntryStore):
    def __init__(self):
        self._entries: dict[str, list[ActivityEntry]] = defaultdict(list)
        self._goals: dict[str, list[WeeklyGoal]] = defaultdict(list)
        self._daily_logs: dict[str, list[DailyLog]] = defaultdict(list)

    def add_entries(self, user_id: str, entries: Iterable[ActivityEntry]) -> None:
        self._entries[user_id].extend(entries)

    def add_daily_logs(self, user_id: str, logs: Iterable[DailyLog]) -> None:
        self._daily_logs[user_id].extend(logs)

    def save_goal(self, user_id: str, goal: WeeklyGoal) -> None:
        self._goals[user_id] = upsert_goal(self._goals[user_id], goal)

    def fetch_entries(self, user_id: str, start: datetime, end: datetime) -> list[ActivityEntry]:
        return sorted(
            (e for e in self._entries.get(user_id, []) if start <= e.start <= end),
            key=lambda e: e.start,
        )

    def fetch_goals(self, user_id: str) -> list[WeeklyGoal]:
        return list(self._goals.get(user_id, []))

    def fetch_daily_logs(self, user_id: str, start: date, end: date) -> list[DailyLog]:
        return [log for log in self._daily_logs.get(user_id, []) if start <= log.log_date <= end]
