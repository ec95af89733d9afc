"""Workout plan compiler.

Turns a nested, user-authored workout definition into a flat plan that a
watch can schedule: optional warmup, one interval block, optional cooldown.
"""

from plan_compiler.compiler import compile_definition
from plan_compiler.exceptions import MalformedEntry, MalformedEntryError, PlanCompilerError
from plan_compiler.flattener import flatten_segments
from plan_compiler.plan_builder import (
    alert_for_segment,
    build_debug_plan,
    build_workout_plan,
    goal_for_segment,
)

__all__ = [
    "MalformedEntry",
    "MalformedEntryError",
    "PlanCompilerError",
    "alert_for_segment",
    "build_debug_plan",
    "build_workout_plan",
    "compile_definition",
    "flatten_segments",
    "goal_for_segment",
]
