"""Garmin Connect JSON serialization for WorkoutPlan objects.

Converts a compiled WorkoutPlan → Garmin Connect-compatible JSON that can
be uploaded via Garmin Connect and synced to a Garmin watch.

All functions are pure (no I/O, no network calls).
"""

from __future__ import annotations

import json

from plan_compiler.models.enums import IntervalKind
from plan_compiler.models.workout_plan import (
    Alert,
    DistanceGoal,
    Goal,
    SpeedAlert,
    SpeedRangeAlert,
    TimeGoal,
    WorkoutPlan,
)

# Garmin enforces limits on certain text fields.
_GARMIN_NAME_MAX = 32

# Garmin stepTypeId / stepTypeKey pairs.
_WARMUP = (1, "warmup")
_COOLDOWN = (2, "cooldown")
_INTERVAL = (3, "interval")
_RECOVERY = (4, "recovery")
_REPEAT = (6, "repeat")

_SPORT_TYPE = {
    "sportTypeId": 1,
    "sportTypeKey": "running",
    "displayOrder": 1,
}


def to_garmin_json(plan: WorkoutPlan) -> dict:
    """Convert a WorkoutPlan to a Garmin Connect-compatible dict.

    Interval blocks with more than one iteration become RepeatGroupDTOs;
    single-iteration blocks are inlined between warmup and cooldown.
    Compiled plans always carry one single-iteration block; repeat groups
    only come from plans callers assemble themselves from IntervalBlock.
    """
    steps: list[dict] = []

    def next_order() -> int:
        return len(steps) + 1

    if plan.warmup is not None:
        steps.append(_convert_step(_WARMUP, plan.warmup.goal, plan.warmup.alert, next_order()))

    for block in plan.blocks:
        if block.iterations > 1:
            children = [
                _convert_step(_interval_type(s.kind), s.goal, s.alert, order)
                for order, s in enumerate(block.steps, start=1)
            ]
            steps.append(_convert_repeat(children, block.iterations, next_order()))
        else:
            for s in block.steps:
                steps.append(_convert_step(_interval_type(s.kind), s.goal, s.alert, next_order()))

    if plan.cooldown is not None:
        steps.append(_convert_step(_COOLDOWN, plan.cooldown.goal, plan.cooldown.alert, next_order()))

    return {
        "workoutName": plan.display_name[:_GARMIN_NAME_MAX],
        "sportType": dict(_SPORT_TYPE),
        "workoutSegments": [
            {
                "segmentOrder": 1,
                "sportType": dict(_SPORT_TYPE),
                "workoutSteps": steps,
            }
        ],
    }


def to_garmin_json_string(plan: WorkoutPlan, indent: int = 2) -> str:
    """Convert a WorkoutPlan to a Garmin-compatible JSON string."""
    return json.dumps(to_garmin_json(plan), indent=indent)


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _interval_type(kind: IntervalKind) -> tuple[int, str]:
    return _RECOVERY if kind == IntervalKind.RECOVERY else _INTERVAL


def _convert_step(
    step_type: tuple[int, str], goal: Goal, alert: Alert | None, step_order: int
) -> dict:
    """Build an ExecutableStepDTO."""
    type_id, type_key = step_type
    result = {
        "type": "ExecutableStepDTO",
        "stepOrder": step_order,
        "stepType": {
            "stepTypeId": type_id,
            "stepTypeKey": type_key,
        },
    }
    result.update(_build_end_condition(goal))
    result.update(_build_target(alert))
    return result


def _convert_repeat(children: list[dict], iterations: int, step_order: int) -> dict:
    """Build a RepeatGroupDTO around already-converted child steps."""
    type_id, type_key = _REPEAT
    return {
        "type": "RepeatGroupDTO",
        "stepOrder": step_order,
        "stepType": {
            "stepTypeId": type_id,
            "stepTypeKey": type_key,
        },
        "endCondition": {
            "conditionTypeId": 7,
            "conditionTypeKey": "iterations",
        },
        "endConditionValue": iterations,
        "workoutSteps": children,
    }


def _build_end_condition(goal: Goal) -> dict:
    """Time goal → seconds, distance goal → meters, else lap button."""
    if isinstance(goal, TimeGoal) and goal.seconds > 0:
        return {
            "endCondition": {"conditionTypeId": 2, "conditionTypeKey": "time"},
            "endConditionValue": goal.seconds,
        }
    if isinstance(goal, DistanceGoal) and goal.meters > 0:
        return {
            "endCondition": {"conditionTypeId": 3, "conditionTypeKey": "distance"},
            "endConditionValue": goal.meters,
        }
    # Open or zero-valued goal → lap button press
    return {
        "endCondition": {"conditionTypeId": 1, "conditionTypeKey": "lap.button"},
        "endConditionValue": None,
    }


def _build_target(alert: Alert | None) -> dict:
    """Build the target fields for a step.

    Speed alerts become ``pace.zone`` targets in m/s; the higher speed
    (faster pace) goes in targetValueOne.
    """
    if isinstance(alert, SpeedAlert):
        speed = _kmh_to_m_per_s(alert.kmh)
        return {
            "targetType": {
                "workoutTargetTypeId": 6,
                "workoutTargetTypeKey": "pace.zone",
            },
            "targetValueOne": speed,
            "targetValueTwo": speed,
        }

    if isinstance(alert, SpeedRangeAlert):
        return {
            "targetType": {
                "workoutTargetTypeId": 6,
                "workoutTargetTypeKey": "pace.zone",
            },
            "targetValueOne": _kmh_to_m_per_s(alert.high_kmh),
            "targetValueTwo": _kmh_to_m_per_s(alert.low_kmh),
        }

    return {
        "targetType": {
            "workoutTargetTypeId": 1,
            "workoutTargetTypeKey": "no.target",
        },
        "targetValueOne": None,
        "targetValueTwo": None,
    }


def _kmh_to_m_per_s(kmh: float) -> float:
    """Convert km/h to m/s. Example: 12.0 km/h → 3.333 m/s"""
    return kmh / 3.6
