"""Demo script for focus-engine."""

import sys
from datetime import datetime
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from focus_engine.adapters.json_adapter import parse_bundle
from focus_engine.dashboard import build_report


def main() -> None:
    bundle = parse_bundle("examples/sample_bundle.json")
    report = build_report(bundle["entries"], datetime(2025, 3, 12, 18, 0), bundle["categories"], bundle["goals"], bundle["daily_logs"])
    print("Week goals:", report["week"]["goals"])
    print("Streaks:", report["streaks"])
    print("Comparison:", report["comparison"])


if __name__ == "__main__":
    main()
