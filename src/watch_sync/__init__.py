"""Watch sync — schedules compiled workout plans on a device, at most once per id."""

from watch_sync.bridge import CHANNEL_NAME, WorkoutKitBridge
from watch_sync.capabilities import (
    AuthorizationService,
    AuthorizationStatus,
    WorkoutScheduler,
    normalize_status,
)
from watch_sync.exceptions import (
    AuthorizationDeniedError,
    BridgeError,
    InvalidArgsError,
    MethodNotImplementedError,
    NotSupportedError,
    SyncFailedError,
)
from watch_sync.ledger import AuthorizationCache, SentIdLedger
from watch_sync.orchestrator import SyncOrchestrator, SyncReport, SyncState
from watch_sync.payloads import PayloadError, ScheduledWorkoutPayload, parse_payload
from watch_sync.settings import LedgerWriteMode, StatusSource, SyncSettings
from watch_sync.store import InMemoryStore, JsonFileStore, KeyValueStore, StoreError

__all__ = [
    "CHANNEL_NAME",
    "AuthorizationCache",
    "AuthorizationDeniedError",
    "AuthorizationService",
    "AuthorizationStatus",
    "BridgeError",
    "InMemoryStore",
    "InvalidArgsError",
    "JsonFileStore",
    "KeyValueStore",
    "LedgerWriteMode",
    "MethodNotImplementedError",
    "NotSupportedError",
    "PayloadError",
    "ScheduledWorkoutPayload",
    "SentIdLedger",
    "StatusSource",
    "StoreError",
    "SyncFailedError",
    "SyncOrchestrator",
    "SyncReport",
    "SyncSettings",
    "SyncState",
    "WorkoutKitBridge",
    "WorkoutScheduler",
    "normalize_status",
    "parse_payload",
]
