"""Errors returned across the watch bridge.

Each error carries the wire ``code`` the mobile client switches on.
"""

from __future__ import annotations


class BridgeError(Exception):
    """Base exception for all watch_sync errors."""

    code = "error"

    def __init__(self, message: str = "") -> None:
        super().__init__(message or self.code)
        self.message = message or self.code


class InvalidArgsError(BridgeError):
    """The method call arguments do not have the expected shape."""

    code = "invalid_args"


class AuthorizationDeniedError(BridgeError):
    """Sync attempted without a prior successful authorization grant."""

    code = "authorization_denied"

    def __init__(self, message: str = "authorizationDenied") -> None:
        super().__init__(message)


class SyncFailedError(BridgeError):
    """Compiling or scheduling raised; the cause is chained."""

    code = "sync_failed"


class NotSupportedError(BridgeError):
    """No workout scheduling capability is available on this host."""

    code = "not_supported"


class MethodNotImplementedError(BridgeError):
    """The bridge has no handler for the requested method."""

    code = "not_implemented"
