"""Goal resolution — what ends a step."""

from __future__ import annotations

from plan_compiler.models.enums import TargetKind
from plan_compiler.models.segment import Segment
from plan_compiler.models.workout_plan import DistanceGoal, Goal, OpenGoal, TimeGoal


def goal_for_segment(segment: Segment) -> Goal:
    """Map a segment's target kind to a goal.

    ``duration`` → time, ``distance`` → distance, anything else → open.
    Missing numeric values default to zero.
    """
    if segment.target_type == TargetKind.DURATION:
        return TimeGoal(seconds=segment.duration_seconds or 0.0)
    if segment.target_type == TargetKind.DISTANCE:
        return DistanceGoal(meters=segment.distance_meters or 0.0)
    return OpenGoal()
