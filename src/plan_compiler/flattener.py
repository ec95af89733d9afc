"""Segment flattener — unrolls a workout definition tree into flat segments.

The definition is the JSON-shaped mapping authored in the mobile client::

    {"steps": [
        {"type": "segment", "segment": {"segmentType": "warmup", ...}},
        {"type": "repeat", "repeatCount": 4, "steps": [...]},
    ]}

Traversal is depth-first and keeps sibling order. A repeat with count N > 1
emits the whole flattened child block N times; a count of 1 or less emits
it once. Unknown node tags are ignored.

All functions are pure (no I/O).
"""

from __future__ import annotations

import math
from collections.abc import Mapping, Sequence

from plan_compiler.exceptions import MalformedEntry
from plan_compiler.malformed import as_number, handle_malformed
from plan_compiler.models.enums import DEFAULT_TARGET_LABEL, MalformedPolicy, NodeType
from plan_compiler.models.segment import Segment

# Lower (fast) pace bound, in lookup order.
_PACE_MIN_KEYS = ("paceSecondsPerKmMin", "customPaceSecondsPerKm", "paceSecondsPerKm")
_PACE_MAX_KEY = "paceSecondsPerKmMax"


def flatten_segments(
    definition: Mapping,
    on_malformed: MalformedPolicy = MalformedPolicy.DROP,
    issues: list[MalformedEntry] | None = None,
) -> list[Segment]:
    """Flatten *definition* into an ordered list of leaf segments.

    A definition without a ``steps`` list yields ``[]``. Segment leaves
    missing ``segmentType`` or ``targetType`` are handed to
    :func:`handle_malformed` with *on_malformed*; under COLLECT they are
    appended to *issues*.
    """
    steps = definition.get("steps") if isinstance(definition, Mapping) else None
    if not _is_node_list(steps):
        return []

    out: list[Segment] = []
    for index, step in enumerate(steps):
        _flatten_step(step, f"steps[{index}]", out, on_malformed, issues)
    return out


def parse_segment(raw: Mapping) -> Segment | None:
    """Build a Segment from a raw ``segment`` mapping, or None if malformed."""
    if not isinstance(raw, Mapping):
        return None
    segment_type = raw.get("segmentType")
    target_type = raw.get("targetType")
    if not isinstance(segment_type, str) or not isinstance(target_type, str):
        return None

    target = raw.get("target")
    pace_min = next(
        (p for p in (as_number(raw.get(k)) for k in _PACE_MIN_KEYS) if p is not None),
        None,
    )
    pace_max = as_number(raw.get(_PACE_MAX_KEY))
    if pace_max is None:
        pace_max = pace_min

    return Segment(
        segment_type=segment_type,
        target_type=target_type,
        target=target if isinstance(target, str) else DEFAULT_TARGET_LABEL,
        duration_seconds=as_number(raw.get("durationSeconds")),
        distance_meters=as_number(raw.get("distanceMeters")),
        pace_min_s_per_km=pace_min,
        pace_max_s_per_km=pace_max,
    )


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _flatten_step(
    step: object,
    path: str,
    out: list[Segment],
    on_malformed: MalformedPolicy,
    issues: list[MalformedEntry] | None,
) -> None:
    if not isinstance(step, Mapping):
        return
    node_type = step.get("type")

    if node_type == NodeType.SEGMENT:
        segment = parse_segment(step.get("segment"))
        if segment is None:
            handle_malformed(
                MalformedEntry(path, "segment missing segmentType/targetType"),
                on_malformed,
                issues,
            )
            return
        out.append(segment)
        return

    if node_type == NodeType.REPEAT:
        count = as_number(step.get("repeatCount"))
        repeat_count = int(count) if count is not None and math.isfinite(count) else 1
        inner = step.get("steps")
        if not _is_node_list(inner):
            inner = []
        # Flatten the child block once; copies are identical frozen values.
        block: list[Segment] = []
        for index, child in enumerate(inner):
            _flatten_step(child, f"{path}.steps[{index}]", block, on_malformed, issues)
        out.extend(block * max(repeat_count, 1))
        return


def _is_node_list(value: object) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes))
