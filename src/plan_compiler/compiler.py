"""Compiler facade — definition tree → flattened segments → WorkoutPlan."""

from __future__ import annotations

from collections.abc import Mapping

from plan_compiler.exceptions import MalformedEntry
from plan_compiler.flattener import flatten_segments
from plan_compiler.models.enums import ExtractionPolicy, MalformedPolicy
from plan_compiler.models.workout_plan import WorkoutPlan
from plan_compiler.plan_builder.builder import build_workout_plan


def compile_definition(
    title: str,
    definition: Mapping,
    extraction: ExtractionPolicy = ExtractionPolicy.BY_KIND,
    on_malformed: MalformedPolicy = MalformedPolicy.DROP,
    issues: list[MalformedEntry] | None = None,
) -> WorkoutPlan | None:
    """Compile a workout definition into a plan.

    Returns None when the definition flattens to no segments at all; a
    definition with only warmup/cooldown still compiles (the builder adds
    an open main interval).
    """
    segments = flatten_segments(definition, on_malformed=on_malformed, issues=issues)
    if not segments:
        return None
    return build_workout_plan(title, segments, extraction=extraction)
