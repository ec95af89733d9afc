"""Nightly scheduler — pushes pending scheduled workouts to Garmin Connect.

Reads the payload batch exported by the app (``WORKOUT_PAYLOADS``), compiles
each workout definition and schedules the ones not sent before.

Usage:
    python -m scheduler.nightly --once       # single run (for cron)
    python -m scheduler.nightly --daemon     # APScheduler loop
    python -m scheduler.nightly --authorize  # log in once and cache the grant
"""

from __future__ import annotations

import argparse
import json
import logging
import sys

from garmin_client import GarminClient
from watch_sync import (
    AuthorizationStatus,
    BridgeError,
    JsonFileStore,
    SyncOrchestrator,
    WorkoutKitBridge,
)
from watch_sync.garmin import GarminAuthorizationService, GarminWorkoutScheduler

from scheduler.config import (
    GARMIN_EMAIL,
    GARMIN_PASSWORD,
    NIGHTLY_HOUR,
    NIGHTLY_MINUTE,
    PAYLOADS_PATH,
    STATE_PATH,
    SYNC_SETTINGS,
    TOKEN_DIR,
)

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


def _load_payloads() -> list:
    """Load the payload batch from disk.

    Accepts either a bare list or the bridge arguments object
    ``{"payloads": [...]}``.
    """
    with open(PAYLOADS_PATH) as f:
        data = json.load(f)
    if isinstance(data, dict):
        return data.get("payloads", [])
    return data


def _connect() -> GarminClient:
    return GarminClient(
        email=GARMIN_EMAIL,
        password=GARMIN_PASSWORD,
        token_dir=TOKEN_DIR,
        prompt_mfa=lambda: input("Garmin MFA code: "),
    )


def build_bridge() -> WorkoutKitBridge:
    """Wire the Garmin capabilities, the JSON state file and the orchestrator."""
    orchestrator = SyncOrchestrator(
        scheduler=GarminWorkoutScheduler(lambda: GarminClient.from_tokens(TOKEN_DIR)),
        authorizer=GarminAuthorizationService(TOKEN_DIR, connect=_connect),
        store=JsonFileStore(STATE_PATH),
        settings=SYNC_SETTINGS,
    )
    return WorkoutKitBridge(orchestrator)


def authorize() -> bool:
    """Interactive login; caches the grant for later unattended runs."""
    status = build_bridge().handle("requestAuthorization")
    logger.info("Authorization status: %s", status)
    return status == AuthorizationStatus.AUTHORIZED.value


def nightly_job() -> None:
    """Execute one sync cycle: load payloads, schedule the new ones."""
    logger.info("Starting workout sync")

    # 1. Wire the bridge; Garmin is only contacted on the first schedule
    bridge = build_bridge()

    # 2. Load the payload batch
    try:
        payloads = _load_payloads()
    except FileNotFoundError:
        logger.error("Payload file not found at %s", PAYLOADS_PATH)
        return

    # 3. Sync
    try:
        bridge.handle("syncScheduledWorkouts", {"payloads": payloads})
    except BridgeError as exc:
        logger.error("Sync failed [%s]: %s", exc.code, exc.message)
        return

    logger.info("Workout sync complete")


def main() -> None:
    parser = argparse.ArgumentParser(description="Scheduled workout sync")
    group = parser.add_mutually_exclusive_group(required=True)
    group.add_argument("--once", action="store_true", help="Run once and exit")
    group.add_argument("--daemon", action="store_true", help="Run as APScheduler daemon")
    group.add_argument("--authorize", action="store_true", help="Log in and cache the grant")
    args = parser.parse_args()

    if args.authorize:
        sys.exit(0 if authorize() else 1)
    if args.once:
        nightly_job()
        return

    from apscheduler.schedulers.blocking import BlockingScheduler

    scheduler = BlockingScheduler()
    scheduler.add_job(
        nightly_job,
        "cron",
        hour=NIGHTLY_HOUR,
        minute=NIGHTLY_MINUTE,
        id="nightly_job",
    )
    logger.info(
        "Scheduler started — workout sync at %02d:%02d",
        NIGHTLY_HOUR,
        NIGHTLY_MINUTE,
    )
    try:
        scheduler.start()
    except (KeyboardInterrupt, SystemExit):
        logger.info("Scheduler stopped")


if __name__ == "__main__":
    main()
