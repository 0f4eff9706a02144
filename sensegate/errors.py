"""Exception hierarchy shared by all SenseGate modules."""

from typing import Optional


class SenseGateError(Exception):
    """Base class for all SenseGate errors."""


class InvalidArgument(SenseGateError, ValueError):
    """Raised when an identity or credential argument is empty."""

    def __init__(self, message: str, argument: Optional[str] = None):
        super().__init__(message)
        self.argument = argument


class NotAuthenticated(SenseGateError):
    """Raised when a caller has no active session."""


class UpstreamError(SenseGateError):
    """
    Raised when the openSenseMap API rejects a call or cannot be reached.

    Attributes:
        status_code: HTTP status to surface to the caller (upstream status,
            or 502 when the upstream never answered)
    """

    def __init__(self, message: str, status_code: int = 500):
        super().__init__(message)
        self.status_code = status_code


__all__ = ["SenseGateError", "InvalidArgument", "NotAuthenticated", "UpstreamError"]
