"""Flattened workout segment — one leg of a definition after unrolling repeats."""

from __future__ import annotations

from dataclasses import dataclass

from plan_compiler.models.enums import DEFAULT_TARGET_LABEL, SegmentKind, TargetKind


@dataclass(frozen=True)
class Segment:
    """A fully-resolved, non-repeating unit of a workout.

    Pace bounds are in seconds per km (lower = faster). ``pace_min_s_per_km``
    is the fast bound, ``pace_max_s_per_km`` the slow bound.
    """

    segment_type: str
    target_type: str
    target: str = DEFAULT_TARGET_LABEL
    duration_seconds: float | None = None
    distance_meters: float | None = None
    pace_min_s_per_km: float | None = None   # faster bound
    pace_max_s_per_km: float | None = None   # slower bound

    @classmethod
    def open_main(cls) -> Segment:
        """Synthetic open-ended main segment used when a plan has no core."""
        return cls(segment_type=SegmentKind.MAIN.value, target_type=TargetKind.OPEN.value)
