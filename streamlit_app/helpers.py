"""Utility helpers bridging the Streamlit UI and the plan compiler.

Pure functions for formatting and for turning segments / plans into
pandas tables.
"""

from __future__ import annotations

import json

import pandas as pd

from plan_compiler.models.segment import Segment
from plan_compiler.models.workout_plan import (
    Alert,
    DistanceGoal,
    Goal,
    SpeedAlert,
    SpeedRangeAlert,
    TimeGoal,
    WorkoutPlan,
)
from plan_compiler.plan_builder.alerts import pace_to_speed_kmh

SAMPLE_DEFINITION = {
    "steps": [
        {"type": "segment", "segment": {
            "segmentType": "warmup", "targetType": "duration", "durationSeconds": 600,
        }},
        {"type": "repeat", "repeatCount": 5, "steps": [
            {"type": "segment", "segment": {
                "segmentType": "work", "targetType": "distance", "distanceMeters": 1000,
                "paceSecondsPerKmMin": 240, "paceSecondsPerKmMax": 250,
            }},
            {"type": "segment", "segment": {
                "segmentType": "recovery", "targetType": "duration", "durationSeconds": 120,
            }},
        ]},
        {"type": "segment", "segment": {"segmentType": "cooldown", "targetType": "open"}},
    ]
}

# ---------------------------------------------------------------------------
# Formatting helpers
# ---------------------------------------------------------------------------


def format_pace(s_per_km: float | None) -> str:
    """Convert seconds-per-km to 'M:SS/km' string. e.g. 305.0 -> '5:05/km'."""
    if s_per_km is None or s_per_km <= 0:
        return "--"
    mins = int(s_per_km) // 60
    secs = int(s_per_km) % 60
    return f"{mins}:{secs:02d}/km"


def format_seconds(seconds: float) -> str:
    """Convert seconds to a short string. e.g. 330 -> '5m 30s', 3600 -> '1h'."""
    total = int(round(seconds))
    if total <= 0:
        return "0s"
    h, rem = divmod(total, 3600)
    m, s = divmod(rem, 60)
    parts = [f"{h}h" if h else "", f"{m}m" if m else "", f"{s}s" if s else ""]
    return " ".join(p for p in parts if p)


def format_goal(goal: Goal) -> str:
    if isinstance(goal, TimeGoal):
        return format_seconds(goal.seconds)
    if isinstance(goal, DistanceGoal):
        if goal.meters >= 1000:
            return f"{goal.meters / 1000:.2f} km"
        return f"{goal.meters:.0f} m"
    return "open"


def format_alert(alert: Alert | None) -> str:
    if isinstance(alert, SpeedAlert):
        return f"{alert.kmh:.1f} km/h"
    if isinstance(alert, SpeedRangeAlert):
        return f"{alert.low_kmh:.1f}-{alert.high_kmh:.1f} km/h"
    return "--"


def parse_definition(text: str) -> dict:
    """Parse definition JSON pasted into the UI; raises ValueError."""
    data = json.loads(text)
    if not isinstance(data, dict):
        raise ValueError("Definition must be a JSON object with a 'steps' list")
    return data


# ---------------------------------------------------------------------------
# Tables
# ---------------------------------------------------------------------------


def segments_to_frame(segments: list[Segment]) -> pd.DataFrame:
    """One row per flattened segment."""
    rows = [
        {
            "#": i,
            "segment": seg.segment_type,
            "target": seg.target_type,
            "duration": format_seconds(seg.duration_seconds) if seg.duration_seconds else "--",
            "distance_m": seg.distance_meters,
            "pace_fast": format_pace(seg.pace_min_s_per_km),
            "pace_slow": format_pace(seg.pace_max_s_per_km),
            "speed_kmh": (
                round(pace_to_speed_kmh(seg.pace_min_s_per_km), 2)
                if seg.pace_min_s_per_km and seg.pace_min_s_per_km > 0 else None
            ),
        }
        for i, seg in enumerate(segments, start=1)
    ]
    return pd.DataFrame(rows, columns=[
        "#", "segment", "target", "duration", "distance_m", "pace_fast", "pace_slow", "speed_kmh",
    ])


def plan_to_frame(plan: WorkoutPlan) -> pd.DataFrame:
    """One row per plan step: warmup, intervals, cooldown."""
    rows = []
    if plan.warmup is not None:
        rows.append(("warmup", plan.warmup.goal, plan.warmup.alert))
    for step in plan.intervals:
        rows.append((step.kind.value, step.goal, step.alert))
    if plan.cooldown is not None:
        rows.append(("cooldown", plan.cooldown.goal, plan.cooldown.alert))
    return pd.DataFrame(
        [{"step": name, "goal": format_goal(goal), "alert": format_alert(alert)}
         for name, goal, alert in rows],
        columns=["step", "goal", "alert"],
    )


def total_planned_seconds(plan: WorkoutPlan) -> float:
    """Sum of all time goals (open and distance steps count as zero)."""
    goals = [step.goal for step in plan.intervals]
    goals += [s.goal for s in (plan.warmup, plan.cooldown) if s is not None]
    return sum(g.seconds for g in goals if isinstance(g, TimeGoal))
