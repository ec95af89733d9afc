"""Data models for the plan compiler."""

from plan_compiler.models.enums import (
    ActivityType,
    ExtractionPolicy,
    IntervalKind,
    MalformedPolicy,
    NodeType,
    SegmentKind,
    TargetKind,
)
from plan_compiler.models.segment import Segment
from plan_compiler.models.workout_plan import (
    Alert,
    DistanceGoal,
    Goal,
    IntervalBlock,
    IntervalStep,
    OpenGoal,
    SpeedAlert,
    SpeedRangeAlert,
    TimeGoal,
    WorkoutPlan,
    WorkoutStep,
)

__all__ = [
    "ActivityType",
    "Alert",
    "DistanceGoal",
    "ExtractionPolicy",
    "Goal",
    "IntervalBlock",
    "IntervalKind",
    "IntervalStep",
    "MalformedPolicy",
    "NodeType",
    "OpenGoal",
    "Segment",
    "SegmentKind",
    "SpeedAlert",
    "SpeedRangeAlert",
    "TargetKind",
    "TimeGoal",
    "WorkoutPlan",
    "WorkoutStep",
]
