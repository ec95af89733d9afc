"""Plan builder — turns flattened segments into a device-schedulable plan."""

from __future__ import annotations

from collections.abc import Sequence

from plan_compiler.models.enums import (
    DEBUG_MAIN_SECONDS,
    DEBUG_WARMUP_SECONDS,
    ExtractionPolicy,
    IntervalKind,
    SegmentKind,
)
from plan_compiler.models.segment import Segment
from plan_compiler.models.workout_plan import (
    IntervalBlock,
    IntervalStep,
    OpenGoal,
    TimeGoal,
    WorkoutPlan,
    WorkoutStep,
)
from plan_compiler.plan_builder.alerts import alert_for_segment
from plan_compiler.plan_builder.goals import goal_for_segment


def build_workout_plan(
    title: str,
    segments: Sequence[Segment],
    extraction: ExtractionPolicy = ExtractionPolicy.BY_KIND,
) -> WorkoutPlan:
    """Build a WorkoutPlan from flattened segments.

    Algorithm:
    1. Pull out the warmup segment (per *extraction*).
    2. Pull out the cooldown segment from what remains.
    3. Map every remaining segment to an interval step: ``recovery`` stays
       recovery, every other kind becomes work.
    4. If nothing remains, use one open-ended main interval.
    5. Attach goals and pace alerts to every step.

    Args:
        title: Display name shown on the watch.
        segments: Output of :func:`plan_compiler.flattener.flatten_segments`.
        extraction: BY_KIND scans the whole list; POSITIONAL only takes a
            leading warmup and a trailing cooldown.

    Returns:
        A frozen WorkoutPlan with at least one interval step.
    """
    core = list(segments)

    if extraction == ExtractionPolicy.POSITIONAL:
        warmup_seg = core.pop(0) if core and core[0].segment_type == SegmentKind.WARMUP else None
        cooldown_seg = core.pop() if core and core[-1].segment_type == SegmentKind.COOLDOWN else None
    else:
        warmup_seg = _pop_first_of_kind(core, SegmentKind.WARMUP)
        cooldown_seg = _pop_first_of_kind(core, SegmentKind.COOLDOWN)

    if not core:
        core = [Segment.open_main()]

    intervals = tuple(
        IntervalStep(
            kind=IntervalKind.RECOVERY if seg.segment_type == SegmentKind.RECOVERY else IntervalKind.WORK,
            goal=goal_for_segment(seg),
            alert=alert_for_segment(seg),
        )
        for seg in core
    )

    return WorkoutPlan(
        display_name=title,
        warmup=_step_for(warmup_seg),
        blocks=(IntervalBlock(steps=intervals, iterations=1),),
        cooldown=_step_for(cooldown_seg),
    )


def build_debug_plan(title: str) -> WorkoutPlan:
    """Fixed sample run: 5 min warmup, one 10 min work interval, open cooldown."""
    return WorkoutPlan(
        display_name=title,
        warmup=WorkoutStep(goal=TimeGoal(seconds=DEBUG_WARMUP_SECONDS)),
        blocks=(
            IntervalBlock(steps=(
                IntervalStep(kind=IntervalKind.WORK, goal=TimeGoal(seconds=DEBUG_MAIN_SECONDS)),
            )),
        ),
        cooldown=WorkoutStep(goal=OpenGoal()),
    )


def _pop_first_of_kind(core: list[Segment], kind: SegmentKind) -> Segment | None:
    for index, seg in enumerate(core):
        if seg.segment_type == kind:
            return core.pop(index)
    return None


def _step_for(segment: Segment | None) -> WorkoutStep | None:
    if segment is None:
        return None
    return WorkoutStep(goal=goal_for_segment(segment), alert=alert_for_segment(segment))
