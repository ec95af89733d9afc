"""Device-schedulable workout plan models.

A plan has an optional warmup, a single interval block and an optional
cooldown. Every step carries a goal (what ends it) and an optional speed
alert shown on the watch while the step runs.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union

from plan_compiler.models.enums import ActivityType, IntervalKind


# ---------------------------------------------------------------------------
# Goals
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class TimeGoal:
    seconds: float


@dataclass(frozen=True)
class DistanceGoal:
    meters: float


@dataclass(frozen=True)
class OpenGoal:
    """No target: the step ends when the athlete moves on."""


Goal = Union[TimeGoal, DistanceGoal, OpenGoal]


# ---------------------------------------------------------------------------
# Alerts
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class SpeedAlert:
    """Single target speed in km/h."""

    kmh: float


@dataclass(frozen=True)
class SpeedRangeAlert:
    """Target speed band in km/h; ``low_kmh`` <= ``high_kmh``."""

    low_kmh: float
    high_kmh: float


Alert = Union[SpeedAlert, SpeedRangeAlert]


# ---------------------------------------------------------------------------
# Steps and plan
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class WorkoutStep:
    """Warmup or cooldown step."""

    goal: Goal = field(default_factory=OpenGoal)
    alert: Alert | None = None


@dataclass(frozen=True)
class IntervalStep:
    """Work or recovery step inside the interval block."""

    kind: IntervalKind
    goal: Goal = field(default_factory=OpenGoal)
    alert: Alert | None = None


@dataclass(frozen=True)
class IntervalBlock:
    steps: tuple[IntervalStep, ...]
    iterations: int = 1


@dataclass(frozen=True)
class WorkoutPlan:
    """Custom workout ready to hand to a device scheduler.

    Built by :func:`plan_compiler.plan_builder.build_workout_plan`. The
    interval block is never empty.
    """

    display_name: str
    blocks: tuple[IntervalBlock, ...]
    warmup: WorkoutStep | None = None
    cooldown: WorkoutStep | None = None
    activity: ActivityType = ActivityType.RUNNING

    @property
    def intervals(self) -> tuple[IntervalStep, ...]:
        """All interval steps across blocks, in order."""
        return tuple(step for block in self.blocks for step in block.steps)
