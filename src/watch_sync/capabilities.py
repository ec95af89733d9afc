"""Device capabilities consumed by the sync orchestrator.

The orchestrator only talks to these protocols; ``watch_sync.garmin``
provides the Garmin Connect implementations and tests inject fakes.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Protocol

from plan_compiler.models.workout_plan import WorkoutPlan


class AuthorizationStatus(str, Enum):
    """Authorization answers reported over the bridge."""

    AUTHORIZED = "authorized"
    DENIED = "denied"
    NOT_DETERMINED = "notDetermined"
    RESTRICTED = "restricted"
    UNKNOWN = "unknown"
    NOT_SUPPORTED = "notSupported"


class WorkoutScheduler(Protocol):
    """Puts a compiled plan on the device calendar."""

    def schedule(self, plan: WorkoutPlan, at: datetime) -> None: ...


class AuthorizationService(Protocol):
    def request_authorization(self) -> object: ...

    def authorization_status(self) -> object: ...


def normalize_status(status: object) -> AuthorizationStatus:
    """Map whatever a device service returns onto AuthorizationStatus.

    Enum members pass through; anything else is matched by substring of its
    lowercased string form, so ``WorkoutSchedulerStatus.notDetermined`` or
    ``"AUTHORIZED"`` both work. Unrecognized values map to UNKNOWN.
    """
    if isinstance(status, AuthorizationStatus):
        return status
    text = str(status).lower()
    # "notauthorized"-style strings must not match "authorized" first.
    if "denied" in text or "notauthorized" in text or "unauthorized" in text:
        return AuthorizationStatus.DENIED
    if "authorized" in text:
        return AuthorizationStatus.AUTHORIZED
    if "notdetermined" in text:
        return AuthorizationStatus.NOT_DETERMINED
    if "restricted" in text:
        return AuthorizationStatus.RESTRICTED
    if "notsupported" in text:
        return AuthorizationStatus.NOT_SUPPORTED
    return AuthorizationStatus.UNKNOWN
