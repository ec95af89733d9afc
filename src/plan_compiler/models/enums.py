"""Enumerations and constants for the workout plan compiler.

String-valued enums mirror the wire vocabulary used by the mobile client,
so ``SegmentKind.WARMUP == "warmup"`` holds and raw payload strings can be
compared directly.
"""

from enum import Enum, IntEnum, auto


class SegmentKind(str, Enum):
    """Well-known segment kinds.

    Segment kinds are free-form on the wire; anything not listed here is
    treated as a work segment by the plan builder.
    """

    WARMUP = "warmup"
    COOLDOWN = "cooldown"
    MAIN = "main"
    RECOVERY = "recovery"
    WORK = "work"


class TargetKind(str, Enum):
    """What ends a segment. Unknown values resolve to an open goal."""

    DURATION = "duration"
    DISTANCE = "distance"
    OPEN = "open"


class NodeType(str, Enum):
    """Tags of the definition tree nodes."""

    SEGMENT = "segment"
    REPEAT = "repeat"


class IntervalKind(str, Enum):
    """Interval step kinds accepted by the watch."""

    WORK = "work"
    RECOVERY = "recovery"


class ActivityType(str, Enum):
    RUNNING = "running"


class ExtractionPolicy(IntEnum):
    """How warmup and cooldown segments are pulled out of the core block.

    BY_KIND scans the whole list for the first ``warmup`` (and then
    ``cooldown``) segment regardless of position. POSITIONAL only accepts
    a warmup in first place and a cooldown in last place.
    """

    BY_KIND = auto()
    POSITIONAL = auto()


class MalformedPolicy(IntEnum):
    """What to do with a malformed segment leaf or payload."""

    DROP = auto()
    COLLECT = auto()
    ABORT = auto()


# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

# Two speeds closer than this (km/h) collapse into a single-value alert.
SPEED_EQUALITY_TOLERANCE_KMH = 0.01

SECONDS_PER_HOUR = 3600.0

# Label carried by segments that declare no explicit target.
DEFAULT_TARGET_LABEL = "none"

# Payload ids with this prefix compile to the fixed debug workout.
DEBUG_ID_PREFIX = "debug-"
DEBUG_WARMUP_SECONDS = 5 * 60
DEBUG_MAIN_SECONDS = 10 * 60
