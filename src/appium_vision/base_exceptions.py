"""Base exception classes for appium-vision.

This module contains the root exception hierarchy and the failure-kind
classification that the wait engine uses to decide what is retried.
"""

from enum import Enum
from typing import Any


class FailureKind(Enum):
    """Classified failure kinds.

    The wait engine ignores failures by kind, so every exception raised by
    this package reports exactly one kind.
    """

    INVALID_ARGUMENT = "invalid_argument"
    MALFORMED = "malformed"
    NOT_FOUND = "not_found"
    TIMEOUT = "timeout"
    STALE = "stale"
    TRANSPORT_LOST = "transport_lost"
    REMOTE = "remote"
    UNKNOWN = "unknown"


class AppiumVisionException(Exception):
    """Base exception for all appium-vision errors.

    Attributes:
        message: Human-readable error message
        error_code: Optional error code for programmatic handling
        context: Additional context information
        kind: Failure kind used for retry classification
    """

    kind: FailureKind = FailureKind.UNKNOWN

    def __init__(
        self, message: str, error_code: str | None = None, context: dict[str, Any] | None = None
    ) -> None:
        """Initialize the exception.

        Args:
            message: Error message
            error_code: Optional error code
            context: Optional context dictionary
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.context = context or {}

    def __str__(self) -> str:
        """Return string representation."""
        if self.error_code:
            return f"[{self.error_code}] {self.message}"
        return self.message


def failure_kind_of(error: BaseException) -> FailureKind:
    """Return the failure kind of any exception.

    Exceptions from outside this package are UNKNOWN.
    """
    if isinstance(error, AppiumVisionException):
        return error.kind
    return FailureKind.UNKNOWN
