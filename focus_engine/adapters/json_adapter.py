"""JSON adapter for logged records and the dashboard bundle."""

from __future__ import annotations

import json
from datetime import date, datetime
from typing import Optional

from focus_engine.calendar_utils import to_local
from focus_engine.config import get_settings
from focus_engine.schema import TRACKING_MODES, WORK_TYPES, ActivityEntry, Category, DailyLog, WeeklyGoal

_REQUIRED_FIELDS = {"id", "started_at"}


def _parse_item(item: dict, index: int, tz_name: str) -> ActivityEntry:
    missing = sorted(field for field in _REQUIRED_FIELDS if not item.get(field))
    if missing:
        raise ValueError(f"Item {index}: missing required fields {missing}")

    try:
        started_at = to_local(datetime.fromisoformat(str(item["started_at"])), tz_name)
    except Exception as exc:  # noqa: BLE001
        raise ValueError(f"Item {index}: malformed started_at") from exc

    duration_raw = item.get("duration_minutes")
    duration = None
    if duration_raw is not None:
        try:
            duration = int(duration_raw)
        except Exception as exc:  # noqa: BLE001
            raise ValueError(f"Item {index}: invalid duration_minutes") from exc

    work_type = str(item.get("work_type") or "other").strip()
    if work_type not in WORK_TYPES:
        raise ValueError(f"Item {index}: invalid work_type '{work_type}'")

    category_raw = item.get("category_id")
    category_id = str(category_raw).strip() if category_raw else None

    return ActivityEntry(
        id=str(item["id"]).strip(),
        start=started_at,
        duration_minutes=duration,
        category_id=category_id or None,
        work_type=work_type,
        source="logged",
    )


def _parse_category(item: dict, index: int) -> Category:
    if not item.get("id") or not item.get("name"):
        raise ValueError(f"Category {index}: missing id or name")
    tracking_mode = item.get("tracking_mode") or "timed"
    if tracking_mode not in TRACKING_MODES:
        raise ValueError(f"Category {index}: invalid tracking_mode '{tracking_mode}'")
    return Category(
        id=str(item["id"]),
        name=str(item["name"]),
        emoji=item.get("emoji") or "",
        color=item.get("color") or "#6366f1",
        parent_id=item.get("parent_id") or None,
        tracking_mode=tracking_mode,
    )


def _parse_goal(item: dict, index: int) -> WeeklyGoal:
    try:
        return WeeklyGoal(
            category_id=str(item["category_id"]),
            target_hours=float(item["target_hours"]),
            enabled=bool(item.get("enabled", True)),
        )
    except (KeyError, TypeError, ValueError) as exc:
        raise ValueError(f"Goal {index}: invalid goal") from exc


def _parse_daily_log(item: dict, index: int) -> DailyLog:
    try:
        return DailyLog(
            log_date=date.fromisoformat(str(item["log_date"])),
            social_media_minutes=int(item.get("social_media_minutes") or 0),
        )
    except (KeyError, TypeError, ValueError) as exc:
        raise ValueError(f"Daily log {index}: invalid daily log") from exc


def _load(file_path: str):
    with open(file_path, encoding="utf-8") as handle:
        return json.load(handle)


def parse(file_path: str, tz_name: Optional[str] = None) -> list[ActivityEntry]:
    """Parse a JSON list of logged records into activity entries."""

    payload = _load(file_path)
    if not isinstance(payload, list):
        raise ValueError("JSON payload must be a list of objects")

    tz_name = tz_name or get_settings().timezone
    return [_parse_item(item, i, tz_name) for i, item in enumerate(payload, start=1)]


def parse_bundle(file_path: str, tz_name: Optional[str] = None) -> dict:
    """Parse an object with ``entries``, ``categories``, ``goals`` and ``daily_logs`` lists."""

    payload = _load(file_path)
    if not isinstance(payload, dict):
        raise ValueError("JSON bundle must be an object")

    tz_name = tz_name or get_settings().timezone
    return {
        "entries": [_parse_item(item, i, tz_name) for i, item in enumerate(payload.get("entries", []), start=1)],
        "categories": [_parse_category(item, i) for i, item in enumerate(payload.get("categories", []), start=1)],
        "goals": [_parse_goal(item, i) for i, item in enumerate(payload.get("goals", []), start=1)],
        "daily_logs": [_parse_daily_log(item, i) for i, item in enumerate(payload.get("daily_logs", []), start=1)],
    }
