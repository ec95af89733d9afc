"""Pace alert resolution — converts pace bounds into on-watch speed alerts.

Pace (s/km) and speed (km/h) are inverses: the faster, numerically smaller
pace gives the larger speed. The fast pace bound therefore becomes the high
speed bound.
"""

from __future__ import annotations

from plan_compiler.models.enums import SECONDS_PER_HOUR, SPEED_EQUALITY_TOLERANCE_KMH
from plan_compiler.models.segment import Segment
from plan_compiler.models.workout_plan import Alert, SpeedAlert, SpeedRangeAlert


def alert_for_segment(segment: Segment) -> Alert | None:
    """Return a speed alert for *segment*, or None without a usable pace.

    - No fast bound, or a fast bound <= 0: no alert.
    - The slow bound defaults to the fast bound when absent or <= 0.
    - Speeds within 0.01 km/h of each other give a single-value alert at
      the fast speed, otherwise a range alert.
    """
    pace_min = segment.pace_min_s_per_km
    if pace_min is None or pace_min <= 0:
        return None
    pace_max = segment.pace_max_s_per_km
    if pace_max is None or pace_max <= 0:
        pace_max = pace_min

    speed_high = pace_to_speed_kmh(pace_min)
    speed_low = pace_to_speed_kmh(pace_max)
    if abs(speed_high - speed_low) < SPEED_EQUALITY_TOLERANCE_KMH:
        return SpeedAlert(kmh=speed_high)
    # Bounds given in the wrong order still produce an ordered range.
    return SpeedRangeAlert(
        low_kmh=min(speed_low, speed_high),
        high_kmh=max(speed_low, speed_high),
    )


def pace_to_speed_kmh(s_per_km: float) -> float:
    """Convert pace in seconds/km to speed in km/h.

    Example: 300 s/km (5:00/km) → 3600/300 = 12.0 km/h
    """
    return SECONDS_PER_HOUR / s_per_km
