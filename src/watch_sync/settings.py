"""Behavioural switches for the sync orchestrator."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum, auto

from plan_compiler.models.enums import ExtractionPolicy, MalformedPolicy
from watch_sync.ledger import AUTHORIZED_KEY, SENT_IDS_KEY


class LedgerWriteMode(IntEnum):
    """When the sent-ID ledger is persisted.

    BATCH writes once after the whole batch; a crash mid-batch can
    reschedule payloads on retry. INCREMENTAL writes after every scheduled
    payload.
    """

    BATCH = auto()
    INCREMENTAL = auto()


class StatusSource(IntEnum):
    """Where ``getAuthorizationStatus`` reads from."""

    CACHED = auto()   # persisted flag: authorized / notDetermined
    LIVE = auto()     # ask the authorization service


@dataclass(frozen=True)
class SyncSettings:
    extraction: ExtractionPolicy = ExtractionPolicy.BY_KIND
    on_malformed: MalformedPolicy = MalformedPolicy.DROP
    ledger_write: LedgerWriteMode = LedgerWriteMode.BATCH
    status_source: StatusSource = StatusSource.CACHED
    sent_ids_key: str = SENT_IDS_KEY
    authorized_key: str = AUTHORIZED_KEY
