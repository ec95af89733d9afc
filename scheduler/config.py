"""Environment-variable-based configuration for the workout sync job."""

from __future__ import annotations

import os
from pathlib import Path

from plan_compiler.models.enums import ExtractionPolicy, MalformedPolicy
from watch_sync.settings import LedgerWriteMode, SyncSettings

GARMIN_EMAIL: str = os.environ.get("GARMIN_EMAIL", "")
GARMIN_PASSWORD: str = os.environ.get("GARMIN_PASSWORD", "")
TOKEN_DIR: Path = Path(os.environ.get("GARMIN_TOKEN_DIR", "~/.garminconnect")).expanduser()
NIGHTLY_HOUR: int = int(os.environ.get("SCHEDULER_HOUR", "21"))
NIGHTLY_MINUTE: int = int(os.environ.get("SCHEDULER_MINUTE", "0"))
PAYLOADS_PATH: Path = Path(
    os.environ.get("WORKOUT_PAYLOADS", "payloads/scheduled_workouts.json")
).expanduser()
STATE_PATH: Path = Path(
    os.environ.get("SYNC_STATE_PATH", "~/.workout_sync/state.json")
).expanduser()

ON_MALFORMED: MalformedPolicy = MalformedPolicy[os.environ.get("SYNC_ON_MALFORMED", "DROP").upper()]
WARMUP_EXTRACTION: ExtractionPolicy = ExtractionPolicy[
    os.environ.get("SYNC_WARMUP_EXTRACTION", "BY_KIND").upper()
]
LEDGER_WRITE: LedgerWriteMode = LedgerWriteMode[os.environ.get("SYNC_LEDGER_WRITE", "BATCH").upper()]

SYNC_SETTINGS = SyncSettings(
    extraction=WARMUP_EXTRACTION,
    on_malformed=ON_MALFORMED,
    ledger_write=LEDGER_WRITE,
)
