"""Exceptions raised by the plan compiler."""

from __future__ import annotations

from dataclasses import dataclass


class PlanCompilerError(Exception):
    """Base exception for all plan_compiler errors."""


@dataclass(frozen=True)
class MalformedEntry:
    """A dropped segment leaf or payload.

    ``path`` locates the entry, e.g. ``steps[2].steps[0]`` or ``payloads[3]``.
    """

    path: str
    reason: str

    def __str__(self) -> str:
        return f"{self.path}: {self.reason}"


class MalformedEntryError(PlanCompilerError):
    """Raised under the ABORT policy when an entry cannot be used."""

    def __init__(self, entry: MalformedEntry) -> None:
        super().__init__(str(entry))
        self.entry = entry
