"""Entry normalization from logged records and planner drafts."""

from __future__ import annotations

import json
import logging
import uuid
from abc import ABC, abstractmethod
from dataclasses import asdict, replace
from datetime import date, datetime, time, timedelta
from pathlib import Path
from typing import Iterable, Mapping, Optional

from focus_engine.calendar_utils import week_start
from focus_engine.rollup import category_key
from focus_engine.schema import WORK_TYPES, ActivityEntry, DraftBlock

logger = logging.getLogger(__name__)


def week_key(monday: date) -> str:
    return f"planner_blocks_{monday.isoformat()}"


class DraftRepository(ABC):
    """Storage of planner draft blocks keyed by week."""

    @abstractmethod
    def get_draft_blocks(self, key: str) -> list[DraftBlock]:
        pass

    @abstractmethod
    def save_draft_blocks(self, key: str, blocks: list[DraftBlock]) -> None:
        pass


class InMemoryDraftRepository(DraftRepository):
    def __init__(self, weeks: Optional[Mapping[str, list[DraftBlock]]] = None):
        self._weeks: dict[str, list[DraftBlock]] = {key: list(blocks) for key, blocks in (weeks or {}).items()}

    def get_draft_blocks(self, key: str) -> list[DraftBlock]:
        return list(self._weeks.get(key, []))

    def save_draft_blocks(self, key: str, blocks: list[DraftBlock]) -> None:
        self._weeks[key] = list(blocks)


class JsonDraftRepository(DraftRepository):
    """One JSON file per week under ``directory``."""

    def __init__(self, directory: Path | str):
        self.directory = Path(directory)

    def _path(self, key: str) -> Path:
        return self.directory / f"{key}.json"

    def get_draft_blocks(self, key: str) -> list[DraftBlock]:
        path = self._path(key)
        if not path.exists():
            return []

        with open(path, encoding="utf-8") as handle:
            payload = json.load(handle)
        if not isinstance(payload, list):
            raise ValueError(f"{path}: draft payload must be a list of objects")

        blocks = []
        for index, item in enumerate(payload, start=1):
            try:
                blocks.append(_block_from_dict(item))
            except (KeyError, TypeError, ValueError) as exc:
                logger.warning("Skipping malformed draft block %d in %s: %s", index, path, exc)
        return blocks

    def save_draft_blocks(self, key: str, blocks: list[DraftBlock]) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)
        self._path(key).write_text(json.dumps([asdict(block) for block in blocks], indent=2), encoding="utf-8")


def _block_from_dict(item: dict) -> DraftBlock:
    day = int(item["day"])
    if not 0 <= day <= 6:
        raise ValueError(f"day {day} outside 0-6")
    return DraftBlock(
        id=str(item["id"]),
        day=day,
        start_hour=int(item["start_hour"]),
        duration_hours=float(item["duration_hours"]),
        category_id=item.get("category_id") or None,
        work_type=item.get("work_type") or "deep",
        title=item.get("title") or "",
        is_logged=bool(item.get("is_logged", False)),
    )


def copy_previous_week(repository: DraftRepository, monday: date) -> list[DraftBlock]:
    """Copy last week's drafts into the week starting at ``monday`` with fresh ids."""

    previous = repository.get_draft_blocks(week_key(monday - timedelta(days=7)))
    copied = [replace(block, id=str(uuid.uuid4())) for block in previous if not block.is_logged]
    if copied:
        repository.save_draft_blocks(week_key(monday), copied)
    return copied


def _clamp_minutes(value, entry_id: str) -> int:
    if value is None:
        return 0
    minutes = int(value)
    if minutes < 0:
        logger.warning("Clamping negative duration %d on entry %s to 0", minutes, entry_id)
        return 0
    return minutes


def entry_from_block(block: DraftBlock, monday: date) -> ActivityEntry:
    start = datetime.combine(monday + timedelta(days=block.day), time(hour=block.start_hour))
    return ActivityEntry(
        id=block.id,
        start=start,
        duration_minutes=_clamp_minutes(round(block.duration_hours * 60), block.id),
        category_id=category_key(block.category_id),
        work_type=block.work_type if block.work_type in WORK_TYPES else "other",
        source="planned",
    )


def normalize_entries(
    logged: Iterable[ActivityEntry],
    draft_weeks: Optional[Mapping[date, Iterable[DraftBlock]]] = None,
) -> list[ActivityEntry]:
    """Merge logged records and draft blocks (keyed by week Monday) into one list ordered by start.

    Draft blocks flagged ``is_logged`` mirror an existing logged record and are dropped.
    """

    entries = [
        replace(
            record,
            duration_minutes=_clamp_minutes(record.duration_minutes, record.id),
            category_id=category_key(record.category_id),
            source="logged",
        )
        for record in logged
    ]

    discarded = 0
    for monday, blocks in (draft_weeks or {}).items():
        for block in blocks:
            if block.is_logged:
                discarded += 1
                continue
            entries.append(entry_from_block(block, monday))

    if discarded:
        logger.debug("Discarded %d draft blocks already logged", discarded)
    return sorted(entries, key=lambda e: (e.start, e.id))


def collect_draft_weeks(repository: DraftRepository, window_start: date, window_end: date) -> dict[date, list[DraftBlock]]:
    """Load the draft blocks of every week overlapping ``[window_start, window_end]``."""

    weeks = {}
    monday = week_start(window_start)
    while monday <= window_end:
        blocks = repository.get_draft_blocks(week_key(monday))
        if blocks:
            weeks[monday] = blocks
        monday += timedelta(days=7)
    return weeks


def load_entries(
    logged: Iterable[ActivityEntry],
    repository: DraftRepository,
    window_start: date,
    window_end: date,
) -> list[ActivityEntry]:
    return normalize_entries(logged, collect_draft_weeks(repository, window_start, window_end))
