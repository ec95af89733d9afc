"""Garmin Connect session management.

A session is the device-side authorization grant for pushing workouts:
saved garth tokens in a token directory mean the user has authorized this
machine, a missing or rejected token store means they have not.
"""

from __future__ import annotations

import logging
import shutil
from pathlib import Path
from typing import Callable, Optional

from garminconnect import Garmin

from garmin_client.exceptions import GarminAuthError, GarminMFARequired

logger = logging.getLogger(__name__)

_DEFAULT_TOKEN_DIR = Path("~/.garminconnect").expanduser()
_TOKEN_FILE = "oauth1_token.json"


def has_saved_tokens(token_dir: Path | str = _DEFAULT_TOKEN_DIR) -> bool:
    """Return True if a token file exists (without validating it)."""
    return (Path(token_dir) / _TOKEN_FILE).exists()


def create_session(
    email: str,
    password: str,
    token_dir: Path | str = _DEFAULT_TOKEN_DIR,
    prompt_mfa: Optional[Callable[[], str]] = None,
) -> Garmin:
    """Return an authenticated Garmin session, logging in if needed.

    Saved tokens are tried first. Without them (or if they are rejected)
    a fresh SSO login runs with *email* / *password* and the new tokens
    are written to *token_dir*.

    Parameters
    ----------
    email : str
        Garmin Connect account email.
    password : str
        Garmin Connect account password.
    token_dir : Path | str
        Directory where garth tokens are persisted.
    prompt_mfa : callable, optional
        Returns the MFA code when Garmin asks for one. Without it an MFA
        challenge raises ``GarminMFARequired``.

    Returns
    -------
    Garmin
        Authenticated session.
    """
    token_dir = Path(token_dir)
    token_dir.mkdir(parents=True, exist_ok=True)

    if has_saved_tokens(token_dir):
        try:
            return resume_session(token_dir)
        except GarminAuthError:
            logger.info("Saved tokens rejected, falling back to SSO login")

    try:
        client = Garmin(email=email, password=password, prompt_mfa=prompt_mfa)
        client.login()
    except Exception as exc:
        msg = str(exc).lower()
        if "mfa" in msg or "verification" in msg or "two-factor" in msg:
            raise GarminMFARequired(str(exc)) from exc
        raise GarminAuthError(f"Login failed: {exc}") from exc

    client.garth.dump(str(token_dir))
    logger.info("Logged in via SSO and saved tokens to %s", token_dir)
    return client


def resume_session(token_dir: Path | str = _DEFAULT_TOKEN_DIR) -> Garmin:
    """Resume a session from saved tokens (no credentials needed).

    Raises ``GarminAuthError`` if tokens are missing or expired.
    """
    token_dir = Path(token_dir)
    if not has_saved_tokens(token_dir):
        raise GarminAuthError(f"No saved tokens at {token_dir}")

    try:
        client = Garmin()
        client.login(tokenstore=str(token_dir))
    except Exception as exc:
        raise GarminAuthError(f"Token resume failed: {exc}") from exc
    logger.debug("Resumed session from %s", token_dir)
    return client


def is_authenticated(token_dir: Path | str = _DEFAULT_TOKEN_DIR) -> bool:
    """Return True if the saved tokens at *token_dir* still log in."""
    try:
        resume_session(token_dir)
    except GarminAuthError:
        return False
    return True


def clear_tokens(token_dir: Path | str = _DEFAULT_TOKEN_DIR) -> None:
    """Delete saved tokens, revoking this machine's grant."""
    token_dir = Path(token_dir)
    if token_dir.exists():
        shutil.rmtree(token_dir)
        logger.info("Cleared tokens at %s", token_dir)
