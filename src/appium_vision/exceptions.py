"""Exception taxonomy for image lookup, comparison and transport.

Each class fixes its FailureKind so callers can build ignore sets for the
wait engine from kinds instead of exception hierarchies.
"""

from typing import Any

from .base_exceptions import AppiumVisionException, FailureKind


class InvalidArgumentError(AppiumVisionException):
    """Raised for bad input to a mapping, encoder or command."""

    kind = FailureKind.INVALID_ARGUMENT

    def __init__(self, message: str, **kwargs: Any) -> None:
        super().__init__(message, error_code="INVALID_ARGUMENT", context=kwargs)


class MalformedResponseError(AppiumVisionException):
    """Raised when a server payload violates the response contract."""

    kind = FailureKind.MALFORMED

    def __init__(
        self, reason: str, missing: list[str] | None = None, payload: Any = None, **kwargs: Any
    ) -> None:
        """Initialize with validation details.

        Args:
            reason: What is wrong with the payload
            missing: Required fields that were absent
            payload: The raw payload, kept for diagnostics
        """
        message = f"Malformed response: {reason}"
        if missing:
            message += f" (missing: {', '.join(missing)})"
        super().__init__(
            message,
            error_code="MALFORMED_RESPONSE",
            context={"missing": missing or [], "payload": payload, **kwargs},
        )
        self.missing = missing or []


class TransientNotFoundError(AppiumVisionException):
    """Raised when the remote side has nothing to return yet."""

    kind = FailureKind.NOT_FOUND

    def __init__(self, message: str = "Not found yet", **kwargs: Any) -> None:
        super().__init__(message, error_code="NOT_FOUND", context=kwargs)


class StaleElementError(AppiumVisionException):
    """Raised when an image element is no longer backed by a live match."""

    kind = FailureKind.STALE

    def __init__(self, element_id: str | None = None, reason: str | None = None, **kwargs: Any) -> None:
        message = "Element is stale"
        if element_id:
            message = f"Element '{element_id}' is stale"
        if reason:
            message += f": {reason}"
        super().__init__(
            message,
            error_code="STALE_ELEMENT",
            context={"element_id": element_id, "reason": reason, **kwargs},
        )
        self.element_id = element_id


class WaitTimeoutError(AppiumVisionException):
    """Raised when a wait deadline elapses without a usable result.

    Attributes:
        timeout: Configured timeout in seconds
        interval: Configured polling interval in seconds
        elapsed: Time actually spent waiting
        attempts: Number of predicate invocations
        last_failure: Last ignored failure observed while polling, if any
    """

    kind = FailureKind.TIMEOUT

    def __init__(
        self,
        message: str | None,
        timeout: float,
        interval: float,
        elapsed: float = 0.0,
        attempts: int = 0,
        last_failure: BaseException | None = None,
        error_code: str = "WAIT_TIMEOUT",
        **kwargs: Any,
    ) -> None:
        text = f"Timed out after {timeout}s (interval {interval}s, {attempts} attempt(s))"
        if message:
            text = f"{message}: {text}"
        if last_failure is not None:
            text += f"; last failure: {last_failure}"
        super().__init__(
            text,
            error_code=error_code,
            context={
                "timeout": timeout,
                "interval": interval,
                "elapsed": elapsed,
                "attempts": attempts,
                **kwargs,
            },
        )
        self.custom_message = message
        self.timeout = timeout
        self.interval = interval
        self.elapsed = elapsed
        self.attempts = attempts
        self.last_failure = last_failure


class ElementNotFoundError(WaitTimeoutError):
    """Raised when an image element did not appear before the deadline."""

    def __init__(self, template: str, timeout_error: WaitTimeoutError) -> None:
        """Re-label a wait timeout for an image lookup.

        Args:
            template: Reference to the template image (path or digest)
            timeout_error: The timeout raised by the wait engine
        """
        super().__init__(
            f"Image element not found for template {template}",
            timeout=timeout_error.timeout,
            interval=timeout_error.interval,
            elapsed=timeout_error.elapsed,
            attempts=timeout_error.attempts,
            last_failure=timeout_error.last_failure,
            error_code="ELEMENT_NOT_FOUND",
            template=template,
        )
        self.template = template


class TransportError(AppiumVisionException):
    """Raised when the connection to the server is lost or unusable."""

    kind = FailureKind.TRANSPORT_LOST

    def __init__(self, message: str, endpoint: str | None = None, **kwargs: Any) -> None:
        super().__init__(
            message, error_code="TRANSPORT_ERROR", context={"endpoint": endpoint, **kwargs}
        )
        self.endpoint = endpoint


class SessionLostError(TransportError):
    """Raised when the remote session no longer exists."""


class RemoteTimeoutError(AppiumVisionException):
    """Raised when the server or the HTTP layer times out a single call."""

    kind = FailureKind.TIMEOUT

    def __init__(self, message: str, endpoint: str | None = None, **kwargs: Any) -> None:
        super().__init__(
            message, error_code="REMOTE_TIMEOUT", context={"endpoint": endpoint, **kwargs}
        )
        self.endpoint = endpoint


class RemoteCommandError(AppiumVisionException):
    """Raised for any other error reported by the server."""

    kind = FailureKind.REMOTE

    def __init__(
        self,
        error: str,
        message: str,
        endpoint: str | None = None,
        status_code: int | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(
            f"{error}: {message}",
            error_code="REMOTE_ERROR",
            context={"error": error, "endpoint": endpoint, "status_code": status_code, **kwargs},
        )
        self.error = error
        self.status_code = status_code
