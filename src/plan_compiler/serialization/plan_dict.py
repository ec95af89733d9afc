"""Plain-dict rendering of WorkoutPlan for logs, previews and JSON export."""

from __future__ import annotations

from plan_compiler.models.workout_plan import (
    Alert,
    DistanceGoal,
    Goal,
    SpeedAlert,
    SpeedRangeAlert,
    TimeGoal,
    WorkoutPlan,
    WorkoutStep,
)


def plan_to_dict(plan: WorkoutPlan) -> dict:
    """Render *plan* as JSON-compatible primitives."""
    return {
        "displayName": plan.display_name,
        "activity": plan.activity.value,
        "warmup": _step_to_dict(plan.warmup),
        "blocks": [
            {
                "iterations": block.iterations,
                "steps": [
                    {"kind": s.kind.value, "goal": goal_to_dict(s.goal), "alert": alert_to_dict(s.alert)}
                    for s in block.steps
                ],
            }
            for block in plan.blocks
        ],
        "cooldown": _step_to_dict(plan.cooldown),
    }


def goal_to_dict(goal: Goal) -> dict:
    if isinstance(goal, TimeGoal):
        return {"type": "time", "seconds": goal.seconds}
    if isinstance(goal, DistanceGoal):
        return {"type": "distance", "meters": goal.meters}
    return {"type": "open"}


def alert_to_dict(alert: Alert | None) -> dict | None:
    if isinstance(alert, SpeedAlert):
        return {"type": "speed", "kmh": alert.kmh}
    if isinstance(alert, SpeedRangeAlert):
        return {"type": "speedRange", "lowKmh": alert.low_kmh, "highKmh": alert.high_kmh}
    return None


def _step_to_dict(step: WorkoutStep | None) -> dict | None:
    if step is None:
        return None
    return {"goal": goal_to_dict(step.goal), "alert": alert_to_dict(step.alert)}
