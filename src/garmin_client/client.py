"""Garmin Connect workout client.

All methods wrap raw garminconnect calls with error handling and retry logic.
"""

from __future__ import annotations

import logging
import time
from datetime import date
from pathlib import Path
from typing import Any, Callable, Optional

from garminconnect import Garmin

from garmin_client.auth import create_session, resume_session
from garmin_client.exceptions import (
    GarminAPIError,
    GarminRateLimitError,
)

logger = logging.getLogger(__name__)

_DEFAULT_TOKEN_DIR = Path("~/.garminconnect").expanduser()
_MAX_RETRIES = 3
_BASE_BACKOFF_S = 2


class GarminClient:
    """Facade for uploading and scheduling workouts on Garmin Connect."""

    def __init__(
        self,
        email: str | None = None,
        password: str | None = None,
        token_dir: Path | str = _DEFAULT_TOKEN_DIR,
        prompt_mfa: Optional[Callable[[], str]] = None,
    ) -> None:
        self._token_dir = Path(token_dir)
        self._garmin = create_session(
            email=email or "",
            password=password or "",
            token_dir=self._token_dir,
            prompt_mfa=prompt_mfa,
        )

    @classmethod
    def from_garmin(cls, garmin: Garmin, token_dir: Path | str = _DEFAULT_TOKEN_DIR) -> "GarminClient":
        """Wrap an already-authenticated Garmin session."""
        obj = cls.__new__(cls)
        obj._token_dir = Path(token_dir)
        obj._garmin = garmin
        return obj

    @classmethod
    def from_tokens(cls, token_dir: Path | str = _DEFAULT_TOKEN_DIR) -> "GarminClient":
        """Build a client from saved tokens only; raises GarminAuthError."""
        return cls.from_garmin(resume_session(token_dir), token_dir)

    # ------------------------------------------------------------------
    # Workout operations
    # ------------------------------------------------------------------

    def upload_workout(self, workout_json: dict) -> int:
        """Upload a workout to Garmin Connect.

        Returns the workoutId assigned by Garmin.
        """
        resp = self._safe_call(self._garmin.upload_workout, workout_json)
        if isinstance(resp, dict) and "workoutId" in resp:
            workout_id = int(resp["workoutId"])
            logger.info("Uploaded workout id=%d", workout_id)
            return workout_id
        raise GarminAPIError(f"Unexpected upload response: {resp}")

    def schedule_workout(self, workout_id: int, target_date: date) -> None:
        """Put an uploaded workout on the calendar for *target_date*.

        python-garminconnect has no schedule call, so this posts through garth.
        """
        date_str = target_date.isoformat()
        self._safe_call(
            self._garmin.garth.post,
            "connectapi",
            f"/workout-service/schedule/{workout_id}",
            json={"date": date_str},
            api=True,
        )
        logger.info("Scheduled workout %d for %s", workout_id, date_str)

    def upload_and_schedule(self, workout_json: dict, target_date: date) -> int:
        """Upload a workout and schedule it on a date. Returns workoutId.

        If scheduling fails the uploaded workout is deleted again so no
        unscheduled copy is left in the library, and the scheduling error is
        re-raised even when the delete fails too.
        """
        workout_id = self.upload_workout(workout_json)
        try:
            self.schedule_workout(workout_id, target_date)
        except GarminAPIError:
            logger.warning("Scheduling workout %d failed, removing upload", workout_id)
            try:
                self.delete_workout(workout_id)
            except GarminAPIError as cleanup_exc:
                logger.error("Could not remove workout %d: %s", workout_id, cleanup_exc)
            raise
        return workout_id

    def delete_workout(self, workout_id: int) -> None:
        """Delete a workout from Garmin Connect."""
        self._safe_call(self._garmin.delete_workout, workout_id)
        logger.info("Deleted workout %d", workout_id)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _safe_call(self, fn: Callable, *args: Any, **kwargs: Any) -> Any:
        """Call *fn* with retry + exponential backoff on HTTP 429."""
        last_exc: Exception | None = None
        for attempt in range(_MAX_RETRIES):
            try:
                return fn(*args, **kwargs)
            except Exception as exc:
                last_exc = exc
                status = getattr(exc, "status", None) or getattr(
                    exc, "status_code", None
                )
                if status != 429:
                    raise GarminAPIError(str(exc), status_code=status) from exc
                wait = _BASE_BACKOFF_S * (2 ** attempt)
                logger.warning(
                    "Rate limited (attempt %d/%d), retrying in %ds",
                    attempt + 1,
                    _MAX_RETRIES,
                    wait,
                )
                time.sleep(wait)

        raise GarminRateLimitError(
            f"Rate limited after {_MAX_RETRIES} retries: {last_exc}"
        )
