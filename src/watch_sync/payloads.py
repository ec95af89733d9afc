"""Scheduled-workout payloads as sent by the mobile client."""

from __future__ import annotations

import math
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime

from plan_compiler.malformed import as_number
from plan_compiler.models.enums import DEBUG_ID_PREFIX


class PayloadError(ValueError):
    """A payload is missing a required field or has the wrong shape."""


@dataclass(frozen=True)
class ScheduledWorkoutPayload:
    """One workout to put on the watch calendar.

    ``scheduled_at`` is local wall-clock time truncated to the minute.
    ``definition`` may be None only for debug payloads.
    """

    id: str
    title: str
    scheduled_at: datetime
    definition: Mapping | None = field(default=None, compare=False)

    @property
    def is_debug(self) -> bool:
        return self.id.startswith(DEBUG_ID_PREFIX)


def parse_payload(raw: object) -> ScheduledWorkoutPayload:
    """Validate a raw payload mapping.

    Requires string ``id`` and ``title`` plus a schedule time, taken from
    ``scheduledAtMs`` (epoch milliseconds) or else an ISO-8601
    ``scheduledAt`` string. Non-debug payloads also need a ``definition``
    mapping.

    Raises:
        PayloadError: with a short reason when the payload is unusable.
    """
    if not isinstance(raw, Mapping):
        raise PayloadError("payload is not an object")

    payload_id = raw.get("id")
    title = raw.get("title")
    if not isinstance(payload_id, str):
        raise PayloadError("missing id")
    if not isinstance(title, str):
        raise PayloadError("missing title")

    scheduled_at = _parse_schedule_time(raw)

    definition = raw.get("definition")
    if not isinstance(definition, Mapping):
        definition = None
    payload = ScheduledWorkoutPayload(
        id=payload_id, title=title, scheduled_at=scheduled_at, definition=definition,
    )
    if definition is None and not payload.is_debug:
        raise PayloadError("missing definition")
    return payload


def _parse_schedule_time(raw: Mapping) -> datetime:
    millis = as_number(raw.get("scheduledAtMs"))
    if millis is not None:
        if not math.isfinite(millis):
            raise PayloadError("scheduledAtMs is not finite")
        try:
            when = datetime.fromtimestamp(millis / 1000.0)
        except (OverflowError, OSError, ValueError) as exc:
            raise PayloadError(f"scheduledAtMs out of range: {exc}") from exc
        return when.replace(second=0, microsecond=0)

    iso = raw.get("scheduledAt")
    if isinstance(iso, str):
        try:
            when = datetime.fromisoformat(iso.replace("Z", "+00:00"))
        except ValueError as exc:
            raise PayloadError(f"bad scheduledAt: {iso!r}") from exc
        if when.tzinfo is not None:
            when = when.astimezone().replace(tzinfo=None)
        return when.replace(second=0, microsecond=0)

    raise PayloadError("missing scheduledAtMs")
