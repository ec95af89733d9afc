"""Persisted sync state: the sent-ID ledger and the authorization cache."""

from __future__ import annotations

import logging

from watch_sync.store import KeyValueStore

logger = logging.getLogger(__name__)

SENT_IDS_KEY = "apple_watch.workoutkit.sentIds"
AUTHORIZED_KEY = "apple_watch.workoutkit.isAuthorized"


class SentIdLedger:
    """Set of payload ids already handed to the device scheduler.

    Stored as a sorted list under one key. Never pruned.
    """

    def __init__(self, store: KeyValueStore, key: str = SENT_IDS_KEY) -> None:
        self._store = store
        self._key = key

    def get(self) -> set[str]:
        raw = self._store.get(self._key)
        if raw is None:
            return set()
        if not isinstance(raw, (list, tuple)):
            logger.warning("Ignoring sent-id ledger %s of type %s", self._key, type(raw).__name__)
            return set()
        return {item for item in raw if isinstance(item, str)}

    def put(self, ids: set[str]) -> None:
        self._store.put(self._key, sorted(ids))


class AuthorizationCache:
    """Last known authorization outcome, so later runs skip re-prompting."""

    def __init__(self, store: KeyValueStore, key: str = AUTHORIZED_KEY) -> None:
        self._store = store
        self._key = key

    def get(self) -> bool:
        return self._store.get(self._key) is True

    def put(self, authorized: bool) -> None:
        self._store.put(self._key, bool(authorized))
