"""CSV adapter for logged activity records."""

from __future__ import annotations

import csv
from datetime import datetime
from typing import Iterable, Optional

from focus_engine.calendar_utils import to_local
from focus_engine.config import get_settings
from focus_engine.schema import WORK_TYPES, ActivityEntry

_REQUIRED_FIELDS = {"id", "started_at"}
EXPORT_FIELDS = ["date", "time", "duration_minutes", "work_type", "category_id"]


def _parse_row(row: dict, row_number: int, tz_name: str) -> ActivityEntry:
    missing = sorted(field for field in _REQUIRED_FIELDS if not row.get(field))
    if missing:
        raise ValueError(f"Row {row_number}: missing required fields {missing}")

    try:
        started_at = to_local(datetime.fromisoformat(row["started_at"].strip()), tz_name)
    except Exception as exc:  # noqa: BLE001
        raise ValueError(f"Row {row_number}: malformed started_at") from exc

    duration_raw = row.get("duration_minutes")
    duration = None
    if duration_raw not in (None, ""):
        try:
            duration = int(float(duration_raw))
        except Exception as exc:  # noqa: BLE001
            raise ValueError(f"Row {row_number}: invalid duration_minutes") from exc

    work_type = (row.get("work_type") or "other").strip()
    if work_type not in WORK_TYPES:
        raise ValueError(f"Row {row_number}: invalid work_type '{work_type}'")

    category_raw = row.get("category_id")
    category_id = category_raw.strip() if category_raw else None

    return ActivityEntry(
        id=row["id"].strip(),
        start=started_at,
        duration_minutes=duration,
        category_id=category_id or None,
        work_type=work_type,
        source="logged",
    )


def parse(file_path: str, tz_name: Optional[str] = None) -> list[ActivityEntry]:
    """Parse a CSV file of logged records into activity entries."""

    tz_name = tz_name or get_settings().timezone
    with open(file_path, newline="", encoding="utf-8") as handle:
        reader = csv.DictReader(handle)
        if not reader.fieldnames:
            return []

        entries: list[ActivityEntry] = []
        for row_number, row in enumerate(reader, start=2):
            entries.append(_parse_row(row, row_number, tz_name))
        return entries


def export_rows(entries: Iterable[ActivityEntry]) -> list[dict]:
    """Flat export rows for logged entries, ordered by start."""

    logged = sorted((e for e in entries if e.source == "logged"), key=lambda e: e.start)
    return [
        {
            "date": entry.start.date().isoformat(),
            "time": entry.start.strftime("%H:%M"),
            "duration_minutes": max(entry.duration_minutes or 0, 0),
            "work_type": entry.work_type,
            "category_id": entry.category_id or "",
        }
        for entry in logged
    ]


def export(entries: Iterable[ActivityEntry], file_path: str) -> int:
    """Write the export rows to ``file_path``; returns the number of rows written."""

    rows = export_rows(entries)
    with open(file_path, "w", newline="", encoding="utf-8") as handle:
        writer = csv.DictWriter(handle, fieldnames=EXPORT_FIELDS)
        writer.writeheader()
        writer.writerows(rows)
    return len(rows)
