"""Print a dashboard report from a CSV/JSON export of logged records."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from datetime import datetime
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from focus_engine.adapters import csv_adapter, json_adapter
from focus_engine.config import get_settings
from focus_engine.dashboard import build_report
from focus_engine.normalizer import JsonDraftRepository


def _load_bundle(path: Path) -> dict:
    suffix = path.suffix.lower()
    if suffix == ".csv":
        return {"entries": csv_adapter.parse(str(path))}
    if suffix == ".json":
        with open(path, encoding="utf-8") as handle:
            is_bundle = isinstance(json.load(handle), dict)
        if is_bundle:
            return json_adapter.parse_bundle(str(path))
        return {"entries": json_adapter.parse(str(path))}
    raise ValueError("Unsupported input format, expected .csv or .json")


def main() -> None:
    settings = get_settings()
    parser = argparse.ArgumentParser(description="Run focus-engine dashboard report")
    parser.add_argument("--data", required=True, help="Path to CSV/JSON records file")
    parser.add_argument("--now", help="ISO timestamp used as the current time (default: wall clock)")
    parser.add_argument("--compare-months", type=int, default=1, help="How many months back the comparison period sits")
    parser.add_argument("--drafts", default=str(settings.draft_dir), help="Directory of planner draft files")
    parser.add_argument("--export", help="Also write the CSV export of logged records to this path")
    args = parser.parse_args()

    logging.basicConfig(level=settings.log_level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    bundle = _load_bundle(Path(args.data))
    now = datetime.fromisoformat(args.now) if args.now else datetime.now()
    drafts_dir = Path(args.drafts)

    report = build_report(
        bundle["entries"],
        now,
        categories=bundle.get("categories", []),
        goals=bundle.get("goals", []),
        daily_logs=bundle.get("daily_logs", []),
        drafts=JsonDraftRepository(drafts_dir) if drafts_dir.is_dir() else None,
        comparison_months=args.compare_months,
        thresholds=settings.heatmap_thresholds,
    )
    print(json.dumps(report, indent=2, default=str, allow_nan=False))

    if args.export:
        count = csv_adapter.export(bundle["entries"], args.export)
        print(f"Exported {count} records to {args.export}", file=sys.stderr)


if __name__ == "__main__":
    main()
