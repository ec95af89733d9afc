"""Garmin Connect implementations of the device capabilities."""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path
from typing import Callable

from garmin_client.auth import has_saved_tokens, is_authenticated
from garmin_client.client import GarminClient
from garmin_client.exceptions import GarminAuthError, GarminMFARequired
from plan_compiler.models.workout_plan import WorkoutPlan
from plan_compiler.serialization.garmin import to_garmin_json
from watch_sync.capabilities import AuthorizationStatus

logger = logging.getLogger(__name__)


class GarminWorkoutScheduler:
    """Uploads a compiled plan to Garmin Connect and schedules it.

    Garmin's calendar is date-granular, so only the date of *at* is used.
    The client is created by *connect* on first use and then reused.
    """

    def __init__(self, connect: Callable[[], GarminClient]) -> None:
        self._connect = connect
        self._client: GarminClient | None = None

    def schedule(self, plan: WorkoutPlan, at: datetime) -> None:
        if self._client is None:
            self._client = self._connect()
        workout_id = self._client.upload_and_schedule(to_garmin_json(plan), at.date())
        logger.info("Plan %r is Garmin workout %d on %s", plan.display_name, workout_id, at.date())


class GarminAuthorizationService:
    """Treats a working Garmin token store as the authorization grant.

    ``request_authorization`` runs *connect* (typically a credential login
    that writes tokens) and reports the outcome; ``authorization_status``
    only inspects the saved tokens.
    """

    def __init__(
        self,
        token_dir: Path | str,
        connect: Callable[[], GarminClient] | None = None,
    ) -> None:
        self._token_dir = Path(token_dir).expanduser()
        self._connect = connect

    def request_authorization(self) -> AuthorizationStatus:
        if self._connect is None:
            return self.authorization_status()
        try:
            self._connect()
        except GarminMFARequired:
            logger.info("Garmin login needs MFA verification")
            return AuthorizationStatus.NOT_DETERMINED
        except GarminAuthError as exc:
            logger.warning("Garmin authorization denied: %s", exc)
            return AuthorizationStatus.DENIED
        return AuthorizationStatus.AUTHORIZED

    def authorization_status(self) -> AuthorizationStatus:
        if not has_saved_tokens(self._token_dir):
            return AuthorizationStatus.NOT_DETERMINED
        if is_authenticated(self._token_dir):
            return AuthorizationStatus.AUTHORIZED
        return AuthorizationStatus.DENIED
