"""Streamlit demo UI for focus-engine."""

from __future__ import annotations

import tempfile
from datetime import datetime
from pathlib import Path
from typing import Any

from focus_engine.adapters import csv_adapter, json_adapter
from focus_engine.dashboard import build_report

DEMO_BUNDLE = "examples/sample_bundle.json"
LEVEL_GLYPHS = {-1: " ", 0: "·", 1: "░", 2: "▒", 3: "▓", 4: "█"}


def _parse_bundle_from_path(file_path: str) -> dict:
    suffix = Path(file_path).suffix.lower()
    if suffix == ".csv":
        return {"entries": csv_adapter.parse(file_path)}
    if suffix == ".json":
        return json_adapter.parse_bundle(file_path)
    raise ValueError("Unsupported file type. Please use .csv or .json")


def _parse_uploaded(uploaded_file) -> dict:
    suffix = Path(uploaded_file.name).suffix.lower()
    with tempfile.NamedTemporaryFile(delete=False, suffix=suffix) as handle:
        handle.write(uploaded_file.getbuffer())
        temp_path = handle.name
    return _parse_bundle_from_path(temp_path)


def _fmt_hours(minutes: float) -> str:
    return f"{minutes / 60.0:.1f}h"


def _heatmap_text(weeks: list[list[dict]]) -> str:
    rows = []
    for weekday in range(7):
        rows.append("".join(LEVEL_GLYPHS[week[weekday]["level"]] for week in weeks))
    return "\n".join(rows)


def run_engine(bundle: dict, now: datetime, comparison_months: int) -> dict[str, Any]:
    """Build the report for the loaded bundle at ``now``."""

    return build_report(
        bundle["entries"],
        now,
        categories=bundle.get("categories", []),
        goals=bundle.get("goals", []),
        daily_logs=bundle.get("daily_logs", []),
        comparison_months=comparison_months,
    )


def main() -> None:
    import streamlit as st

    st.set_page_config(page_title="Focus Engine Demo", layout="wide")
    st.title("Focus Engine — Streamlit Demo")

    with st.sidebar:
        st.header("Controls")
        uploaded = st.file_uploader("Upload records", type=["csv", "json"])
        use_demo = st.checkbox("Load demo dataset", value=True)
        now_date = st.date_input("Today", value=datetime(2025, 3, 12).date())
        now_hour = st.slider("Now hour", min_value=0, max_value=23, value=18)
        comparison_months = st.number_input("Compare with N months back", min_value=1, max_value=12, value=1, step=1)
        run = st.button("Run engine", type="primary")

    if not run:
        st.info("Configure inputs in the sidebar and click **Run engine**.")
        return

    try:
        if use_demo:
            bundle = json_adapter.parse_bundle(DEMO_BUNDLE)
            data_source = f"demo dataset ({DEMO_BUNDLE})"
        elif uploaded is not None:
            bundle = _parse_uploaded(uploaded)
            data_source = f"uploaded file ({uploaded.name})"
        else:
            st.error("Please upload a CSV/JSON file or enable 'Load demo dataset'.")
            return

        if not bundle["entries"]:
            st.error("No records were found in the selected input.")
            return

        now = datetime.combine(now_date, datetime.min.time()).replace(hour=int(now_hour))
        report = run_engine(bundle, now, int(comparison_months))

        st.success(f"Loaded {len(bundle['entries'])} records from {data_source}.")

        st.subheader("A) Today")
        today = report["today"]["summary"]
        c1, c2, c3 = st.columns(3)
        c1.metric("Total", _fmt_hours(today["total_minutes"]))
        c2.metric("Deep", _fmt_hours(today["deep_minutes"]))
        c3.metric("Shallow", _fmt_hours(today["shallow_minutes"]))

        st.subheader("B) Weekly Goals")
        week = report["week"]
        st.write(f"{week['totals']['total_hours']:.1f}h / {week['totals']['total_target']:.1f}h ({week['totals']['percent']}%)")
        st.table(
            [
                {
                    "category": row["name"] or row["category_id"],
                    "current": f"{row['current_hours']:.1f}h",
                    "target": f"{row['target_hours']:.1f}h",
                    "pace/day": f"{row['pace_needed_per_day']:.1f}h",
                }
                for row in week["goals"]
            ]
        )
        st.caption(f"Days remaining: {week['days_remaining']} · planned: {_fmt_hours(week['planned']['total_minutes'])}")

        st.subheader("C) Month")
        st.bar_chart({"hours": report["month"]["weekly_hours"]})

        st.subheader("D) Year")
        y1, y2, y3 = st.columns(3)
        y1.metric("Hours", _fmt_hours(report["year"]["summary"]["total_minutes"]))
        y2.metric("Best streak", report["streaks"]["best"])
        y3.metric("Current streak", report["streaks"]["current"])
        st.code(_heatmap_text(report["year"]["heatmap"]))

        st.subheader("E) Comparison")
        comparison = report["comparison"]
        st.table(
            [
                {
                    "metric": name,
                    "current": round(comparison[f"{name}_a"], 1),
                    "past": round(comparison[f"{name}_b"], 1),
                    "trend": comparison[f"{name}_indicator"],
                }
                for name in ("hours", "days_active", "avg_hours_per_day")
            ]
        )

    except ValueError as exc:
        st.error(f"Input error: {exc}")
    except Exception:
        st.error("Something went wrong while running the demo. Please verify the input format.")


if __name__ == "__main__":
    main()
