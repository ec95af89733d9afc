"""Sync orchestrator — authorization state and idempotent workout scheduling.

States::

    UNAUTHORIZED --grant--> AUTHORIZED_IDLE --sync--> AUTHORIZED_SYNCING
                                  ^                          |
                                  +--------------------------+

The authorization grant is cached in the key-value store so later runs
start in AUTHORIZED_IDLE without re-prompting. A batch runs payloads one
after another; there is no lock around the ledger, so two concurrent syncs
against one store can lose updates.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field, replace
from enum import IntEnum, auto

from plan_compiler.compiler import compile_definition
from plan_compiler.exceptions import MalformedEntry
from plan_compiler.malformed import handle_malformed
from plan_compiler.models.workout_plan import WorkoutPlan
from plan_compiler.plan_builder.builder import build_debug_plan
from watch_sync.capabilities import (
    AuthorizationService,
    AuthorizationStatus,
    WorkoutScheduler,
    normalize_status,
)
from watch_sync.exceptions import AuthorizationDeniedError, BridgeError, SyncFailedError
from watch_sync.ledger import AuthorizationCache, SentIdLedger
from watch_sync.payloads import PayloadError, ScheduledWorkoutPayload, parse_payload
from watch_sync.settings import LedgerWriteMode, StatusSource, SyncSettings
from watch_sync.store import KeyValueStore, StoreError

logger = logging.getLogger(__name__)


class SyncState(IntEnum):
    UNAUTHORIZED = auto()
    AUTHORIZED_IDLE = auto()
    AUTHORIZED_SYNCING = auto()


@dataclass
class SyncReport:
    """Outcome of one sync batch."""

    scheduled: list[str] = field(default_factory=list)
    duplicates: list[str] = field(default_factory=list)
    issues: list[MalformedEntry] = field(default_factory=list)


class SyncOrchestrator:
    """Compiles scheduled-workout payloads and hands them to the device.

    Usage::

        orchestrator = SyncOrchestrator(scheduler, authorizer, store)
        orchestrator.request_authorization()
        report = orchestrator.sync(payloads)
    """

    def __init__(
        self,
        scheduler: WorkoutScheduler,
        authorizer: AuthorizationService,
        store: KeyValueStore,
        settings: SyncSettings | None = None,
    ) -> None:
        self._scheduler = scheduler
        self._authorizer = authorizer
        self._settings = settings or SyncSettings()
        self._ledger = SentIdLedger(store, self._settings.sent_ids_key)
        self._auth_cache = AuthorizationCache(store, self._settings.authorized_key)
        self._syncing = False

    @property
    def settings(self) -> SyncSettings:
        return self._settings

    @property
    def state(self) -> SyncState:
        """Raises StoreError when the persisted state is unreadable."""
        if self._syncing:
            return SyncState.AUTHORIZED_SYNCING
        if self._auth_cache.get():
            return SyncState.AUTHORIZED_IDLE
        return SyncState.UNAUTHORIZED

    # ------------------------------------------------------------------
    # Authorization
    # ------------------------------------------------------------------

    def request_authorization(self) -> AuthorizationStatus:
        """Ask the device for permission and cache whether it was granted."""
        status = normalize_status(self._authorizer.request_authorization())
        try:
            self._auth_cache.put(status == AuthorizationStatus.AUTHORIZED)
        except StoreError as exc:
            raise SyncFailedError(str(exc)) from exc
        logger.info("Authorization request answered %s", status.value)
        return status

    def authorization_status(self) -> AuthorizationStatus:
        """Current status, from the cached flag unless configured LIVE."""
        if self._settings.status_source == StatusSource.LIVE:
            return normalize_status(self._authorizer.authorization_status())
        try:
            authorized = self._auth_cache.get()
        except StoreError as exc:
            raise SyncFailedError(str(exc)) from exc
        if authorized:
            return AuthorizationStatus.AUTHORIZED
        return AuthorizationStatus.NOT_DETERMINED

    # ------------------------------------------------------------------
    # Sync
    # ------------------------------------------------------------------

    def sync(self, payloads: Sequence[object]) -> SyncReport:
        """Schedule every payload not yet in the sent-ID ledger.

        Raises:
            AuthorizationDeniedError: no cached grant; nothing is touched.
            SyncFailedError: the state store is unreadable, or compiling or
                scheduling raised. The rest of the batch is abandoned; in
                BATCH mode the ledger is not written for this run.
        """
        try:
            if not self._auth_cache.get():
                raise AuthorizationDeniedError()
            self._syncing = True
            return self._run_batch(payloads)
        except BridgeError:
            raise
        except Exception as exc:
            logger.error("Sync batch failed: %s", exc)
            raise SyncFailedError(str(exc)) from exc
        finally:
            self._syncing = False

    def _run_batch(self, payloads: Sequence[object]) -> SyncReport:
        policy = self._settings.on_malformed
        report = SyncReport()
        sent = self._ledger.get()

        for index, raw in enumerate(payloads):
            path = f"payloads[{index}]"
            try:
                payload = parse_payload(raw)
            except PayloadError as exc:
                handle_malformed(MalformedEntry(path, str(exc)), policy, report.issues)
                continue

            if payload.id in sent:
                logger.debug("Skipping already scheduled payload %s", payload.id)
                report.duplicates.append(payload.id)
                continue

            plan = self._compile(payload, path, report.issues)
            if plan is None:
                handle_malformed(
                    MalformedEntry(path, "definition has no segments"), policy, report.issues,
                )
                continue

            self._scheduler.schedule(plan, payload.scheduled_at)
            sent.add(payload.id)
            report.scheduled.append(payload.id)
            logger.info(
                "Scheduled %s (%r) at %s", payload.id, payload.title,
                payload.scheduled_at.isoformat(timespec="minutes"),
            )
            if self._settings.ledger_write == LedgerWriteMode.INCREMENTAL:
                self._ledger.put(sent)

        if self._settings.ledger_write == LedgerWriteMode.BATCH:
            self._ledger.put(sent)
        logger.info(
            "Sync finished: %d scheduled, %d already sent, %d dropped",
            len(report.scheduled), len(report.duplicates), len(report.issues),
        )
        return report

    def _compile(
        self,
        payload: ScheduledWorkoutPayload,
        path: str,
        issues: list[MalformedEntry],
    ) -> WorkoutPlan | None:
        if payload.is_debug:
            return build_debug_plan(payload.title)

        segment_issues: list[MalformedEntry] = []
        plan = compile_definition(
            payload.title,
            payload.definition or {},
            extraction=self._settings.extraction,
            on_malformed=self._settings.on_malformed,
            issues=segment_issues,
        )
        issues.extend(
            replace(entry, path=f"{path}.definition.{entry.path}") for entry in segment_issues
        )
        return plan
