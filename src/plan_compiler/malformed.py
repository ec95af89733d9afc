"""Shared handling of malformed entries under a MalformedPolicy."""

from __future__ import annotations

import logging

from plan_compiler.exceptions import MalformedEntry, MalformedEntryError
from plan_compiler.models.enums import MalformedPolicy

logger = logging.getLogger(__name__)


def handle_malformed(
    entry: MalformedEntry,
    policy: MalformedPolicy,
    issues: list[MalformedEntry] | None = None,
) -> None:
    """Apply *policy* to a malformed *entry*.

    DROP logs at debug level, COLLECT appends to *issues* (when given) and
    logs a warning, ABORT raises :class:`MalformedEntryError`.
    """
    if policy == MalformedPolicy.ABORT:
        raise MalformedEntryError(entry)
    if policy == MalformedPolicy.COLLECT:
        logger.warning("Dropped malformed entry %s", entry)
        if issues is not None:
            issues.append(entry)
        return
    logger.debug("Dropped malformed entry %s", entry)


def as_number(value: object) -> float | None:
    """Return *value* as a float if it is a JSON number, else None.

    Booleans are rejected even though ``bool`` subclasses ``int``.
    """
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return float(value)
