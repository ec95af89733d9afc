"""Method-call surface exposed to the mobile client.

Mirrors the ``tcr/apple_watch_workoutkit`` channel: a method name plus an
arguments object in, a plain value out, or a BridgeError whose ``code`` the
client maps to its own error type.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Any

from watch_sync.capabilities import AuthorizationStatus
from watch_sync.exceptions import InvalidArgsError, MethodNotImplementedError, NotSupportedError
from watch_sync.orchestrator import SyncOrchestrator, SyncReport

logger = logging.getLogger(__name__)

CHANNEL_NAME = "tcr/apple_watch_workoutkit"


class WorkoutKitBridge:
    """Dispatches bridge calls to a SyncOrchestrator.

    Without an orchestrator (no scheduling capability on this host) the
    bridge answers as unsupported.
    """

    def __init__(self, orchestrator: SyncOrchestrator | None) -> None:
        self._orchestrator = orchestrator

    def handle(self, method: str, arguments: Any = None) -> Any:
        handlers = {
            "isSupported": lambda: self.is_supported(),
            "requestAuthorization": lambda: self.request_authorization(),
            "getAuthorizationStatus": lambda: self.get_authorization_status(),
            "syncScheduledWorkouts": lambda: self._handle_sync(arguments),
        }
        handler = handlers.get(method)
        if handler is None:
            raise MethodNotImplementedError(f"Unknown method {method!r}")
        return handler()

    def is_supported(self) -> bool:
        return self._orchestrator is not None

    def request_authorization(self) -> str:
        if self._orchestrator is None:
            return AuthorizationStatus.NOT_SUPPORTED.value
        return self._orchestrator.request_authorization().value

    def get_authorization_status(self) -> str:
        if self._orchestrator is None:
            return AuthorizationStatus.NOT_SUPPORTED.value
        return self._orchestrator.authorization_status().value

    def sync_scheduled_workouts(self, payloads: Sequence[object]) -> SyncReport:
        """Sync a payload batch; raises NotSupportedError without a device."""
        if self._orchestrator is None:
            raise NotSupportedError("No workout scheduler configured")
        return self._orchestrator.sync(payloads)

    def _handle_sync(self, arguments: Any) -> None:
        payloads = arguments.get("payloads") if isinstance(arguments, Mapping) else None
        if not isinstance(payloads, Sequence) or isinstance(payloads, (str, bytes)):
            raise InvalidArgsError("payloads missing")
        report = self.sync_scheduled_workouts(payloads)
        logger.debug("Bridge sync report: %s", report)
        return None
