"""Plan builder — flattened segments to a device-schedulable WorkoutPlan."""

from plan_compiler.plan_builder.alerts import alert_for_segment, pace_to_speed_kmh
from plan_compiler.plan_builder.builder import build_debug_plan, build_workout_plan
from plan_compiler.plan_builder.goals import goal_for_segment

__all__ = [
    "alert_for_segment",
    "build_debug_plan",
    "build_workout_plan",
    "goal_for_segment",
    "pace_to_speed_kmh",
]
