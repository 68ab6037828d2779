"""Core data schema for tracked focus time."""

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

WORK_TYPES = ("deep", "shallow", "other")
SOURCES = ("logged", "planned")
TRACKING_MODES = ("timed", "self_reported")


@dataclass
class ActivityEntry:
    """Normalized activity record used by all aggregation modules."""

    id: str
    start: datetime
    duration_minutes: Optional[int]
    category_id: Optional[str]
    work_type: str = "deep"
    source: str = "logged"


@dataclass
class Category:
    id: str
    name: str
    emoji: str = ""
    color: str = "#6366f1"
    parent_id: Optional[str] = None
    tracking_mode: str = "timed"

    @property
    def is_top_level(self) -> bool:
        return self.parent_id is None

    @property
    def is_self_reported(self) -> bool:
        return self.tracking_mode == "self_reported"


@dataclass
class WeeklyGoal:
    category_id: str
    target_hours: float
    enabled: bool = True


@dataclass
class DailyLog:
    """Daily reflection; only the self-reported screen time feeds the engine."""

    log_date: date
    social_media_minutes: int = 0


@dataclass
class DraftBlock:
    """Locally drafted planner block inside a Monday-based week."""

    id: str
    day: int
    start_hour: int
    duration_hours: float
    category_id: Optional[str] = None
    work_type: str = "deep"
    title: str = ""
    is_logged: bool = False
