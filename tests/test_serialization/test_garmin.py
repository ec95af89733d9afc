"""Tests for Garmin Connect JSON serialization of compiled plans."""

from __future__ import annotations

import json

import pytest

from plan_compiler.compiler import compile_definition
from plan_compiler.models.enums import IntervalKind
from plan_compiler.models.workout_plan import (
    DistanceGoal,
    IntervalBlock,
    IntervalStep,
    OpenGoal,
    SpeedAlert,
    SpeedRangeAlert,
    TimeGoal,
    WorkoutPlan,
    WorkoutStep,
)
from plan_compiler.plan_builder.builder import build_debug_plan
from plan_compiler.serialization.garmin import (
    _build_end_condition,
    _build_target,
    _kmh_to_m_per_s,
    to_garmin_json,
    to_garmin_json_string,
)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _make_plan(*intervals: IntervalStep, iterations: int = 1, **overrides) -> WorkoutPlan:
    defaults = {
        "display_name": "Intervals",
        "blocks": (IntervalBlock(steps=tuple(intervals), iterations=iterations),),
    }
    defaults.update(overrides)
    return WorkoutPlan(**defaults)


# ---------------------------------------------------------------------------
# Unit conversion
# ---------------------------------------------------------------------------

class TestSpeedConversion:
    def test_12_kmh(self):
        """12 km/h (5:00/km) → 3.333 m/s."""
        assert abs(_kmh_to_m_per_s(12.0) - 3.333) < 0.01

    def test_15_kmh(self):
        """15 km/h (4:00/km) → 4.167 m/s."""
        assert abs(_kmh_to_m_per_s(15.0) - 4.167) < 0.01


# ---------------------------------------------------------------------------
# End conditions
# ---------------------------------------------------------------------------

class TestEndCondition:
    def test_time_goal_seconds(self):
        result = _build_end_condition(TimeGoal(seconds=600))
        assert result["endCondition"]["conditionTypeKey"] == "time"
        assert result["endConditionValue"] == 600

    def test_distance_goal_meters(self):
        result = _build_end_condition(DistanceGoal(meters=1500))
        assert result["endCondition"]["conditionTypeKey"] == "distance"
        assert result["endConditionValue"] == 1500

    @pytest.mark.parametrize("goal", [OpenGoal(), TimeGoal(seconds=0), DistanceGoal(meters=0)])
    def test_open_or_zero_is_lap_button(self, goal):
        result = _build_end_condition(goal)
        assert result["endCondition"]["conditionTypeKey"] == "lap.button"
        assert result["endConditionValue"] is None


# ---------------------------------------------------------------------------
# Targets
# ---------------------------------------------------------------------------

class TestTarget:
    def test_no_alert(self):
        result = _build_target(None)
        assert result["targetType"]["workoutTargetTypeKey"] == "no.target"
        assert result["targetValueOne"] is None

    def test_single_speed(self):
        result = _build_target(SpeedAlert(kmh=12.0))
        assert result["targetType"]["workoutTargetTypeKey"] == "pace.zone"
        assert result["targetValueOne"] == pytest.approx(12.0 / 3.6)
        assert result["targetValueTwo"] == pytest.approx(12.0 / 3.6)

    def test_range_faster_first(self):
        result = _build_target(SpeedRangeAlert(low_kmh=12.0, high_kmh=15.0))
        assert result["targetValueOne"] > result["targetValueTwo"]
        assert result["targetValueOne"] == pytest.approx(15.0 / 3.6)


# ---------------------------------------------------------------------------
# Whole workout
# ---------------------------------------------------------------------------

class TestToGarminJson:
    def test_debug_plan_step_order(self):
        result = to_garmin_json(build_debug_plan("Test Run"))
        steps = result["workoutSegments"][0]["workoutSteps"]
        assert [s["stepType"]["stepTypeKey"] for s in steps] == ["warmup", "interval", "cooldown"]
        assert [s["stepOrder"] for s in steps] == [1, 2, 3]
        assert steps[0]["endConditionValue"] == 300
        assert steps[1]["endConditionValue"] == 600
        assert steps[2]["endCondition"]["conditionTypeKey"] == "lap.button"

    def test_recovery_step_type(self):
        plan = _make_plan(
            IntervalStep(kind=IntervalKind.WORK, goal=TimeGoal(seconds=60)),
            IntervalStep(kind=IntervalKind.RECOVERY, goal=TimeGoal(seconds=60)),
        )
        steps = to_garmin_json(plan)["workoutSegments"][0]["workoutSteps"]
        assert [s["stepType"]["stepTypeId"] for s in steps] == [3, 4]

    def test_multi_iteration_block_becomes_repeat_group(self):
        plan = _make_plan(
            IntervalStep(kind=IntervalKind.WORK, goal=DistanceGoal(meters=400)),
            IntervalStep(kind=IntervalKind.RECOVERY, goal=TimeGoal(seconds=90)),
            iterations=6,
            warmup=WorkoutStep(goal=TimeGoal(seconds=600)),
        )
        steps = to_garmin_json(plan)["workoutSegments"][0]["workoutSteps"]
        assert len(steps) == 2
        repeat = steps[1]
        assert repeat["type"] == "RepeatGroupDTO"
        assert repeat["stepOrder"] == 2
        assert repeat["endConditionValue"] == 6
        assert len(repeat["workoutSteps"]) == 2

    def test_compiled_plan_repeats_are_inlined(self, interval_definition):
        plan = compile_definition("5x1k", interval_definition)
        steps = to_garmin_json(plan)["workoutSegments"][0]["workoutSteps"]
        assert all(s["type"] == "ExecutableStepDTO" for s in steps)
        assert len(steps) == 12

    def test_name_truncated(self):
        plan = _make_plan(IntervalStep(kind=IntervalKind.WORK), display_name="x" * 50)
        assert len(to_garmin_json(plan)["workoutName"]) == 32

    def test_sport_type_running(self):
        result = to_garmin_json(build_debug_plan("Run"))
        assert result["sportType"]["sportTypeKey"] == "running"

    def test_json_string_parses(self):
        text = to_garmin_json_string(build_debug_plan("Run"))
        assert json.loads(text)["workoutName"] == "Run"
