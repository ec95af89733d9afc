"""Exception hierarchy for the Garmin Connect device client."""

from __future__ import annotations


class GarminClientError(Exception):
    """Base exception for all garmin_client errors."""


class GarminAuthError(GarminClientError):
    """No usable Garmin session (missing or expired tokens, bad credentials)."""


class GarminMFARequired(GarminAuthError):
    """Login stopped at the multi-factor verification step."""


class GarminAPIError(GarminClientError):
    """A Garmin Connect call failed while uploading or scheduling."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class GarminRateLimitError(GarminAPIError):
    """HTTP 429 persisted through every retry."""

    def __init__(self, message: str = "Rate limited by Garmin Connect") -> None:
        super().__init__(message, status_code=429)
