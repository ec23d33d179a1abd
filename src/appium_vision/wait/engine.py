"""Bounded wait engine.

Turns an eventually-consistent remote predicate ("is the image there yet?")
into an operation that either returns a usable value, fails with a fatal
error on first occurrence, or fails with WaitTimeoutError at the deadline.
"""

from collections.abc import Callable, Iterable, Sized
from typing import Any, TypeVar

from ..base_exceptions import FailureKind, failure_kind_of
from ..config import ClientSettings, get_settings
from ..exceptions import WaitTimeoutError
from ..logging import get_logger
from .clock import Clock, SystemClock

logger = get_logger(__name__)

T = TypeVar("T")

IgnoredFailure = FailureKind | type[BaseException]

# Failures a poll treats as "not yet" unless told otherwise
DEFAULT_IGNORED: tuple[IgnoredFailure, ...] = (FailureKind.NOT_FOUND,)


def is_usable(value: Any) -> bool:
    """Check whether a predicate result ends the wait.

    None, False and empty sized collections mean "not yet". Everything else,
    including 0, is usable.
    """
    if value is None or value is False:
        return False
    if isinstance(value, Sized):
        return len(value) > 0
    return True


def is_ignored(error: BaseException, ignored: Iterable[IgnoredFailure]) -> bool:
    """Check whether ``error`` matches an entry of the ignore set.

    Entries are failure kinds or exception classes.
    """
    kind = failure_kind_of(error)
    for entry in ignored:
        if isinstance(entry, FailureKind):
            if entry is kind:
                return True
        elif isinstance(error, entry):
            return True
    return False


def wait(
    predicate: Callable[[], T],
    timeout: float,
    interval: float,
    ignored: Iterable[IgnoredFailure] = (),
    message: str | None = None,
    clock: Clock | None = None,
) -> T:
    """Poll ``predicate`` until it returns a usable value or the deadline passes.

    Args:
        predicate: Zero-argument callable, safe to invoke repeatedly
        timeout: Seconds until the deadline; <= 0 polls exactly once
        interval: Seconds between attempts; <= 0 polls without sleeping
        ignored: Failure kinds or exception classes treated as "not yet"
        message: Custom text for the timeout error
        clock: Time source, SystemClock by default

    Returns:
        The first usable predicate result

    Raises:
        WaitTimeoutError: If no usable value arrived before the deadline
        Exception: Any predicate failure not in ``ignored``, unchanged
    """
    clock = clock or SystemClock()
    ignored = tuple(ignored)
    start = clock.monotonic()
    deadline = start + timeout
    attempts = 0
    last_failure: BaseException | None = None

    while True:
        attempts += 1
        try:
            value = predicate()
        except Exception as e:
            if not is_ignored(e, ignored):
                raise
            last_failure = e
            logger.debug("wait_attempt_failed", attempt=attempts, error=str(e))
        else:
            if is_usable(value):
                return value
            logger.debug("wait_attempt_empty", attempt=attempts)

        now = clock.monotonic()
        if timeout <= 0 or now >= deadline:
            elapsed = now - start
            logger.info(
                "wait_timed_out",
                timeout=timeout,
                interval=interval,
                attempts=attempts,
                elapsed=round(elapsed, 3),
                custom_message=message,
            )
            raise WaitTimeoutError(
                message,
                timeout=timeout,
                interval=interval,
                elapsed=elapsed,
                attempts=attempts,
                last_failure=last_failure,
            ) from last_failure

        if interval > 0:
            clock.sleep(min(interval, deadline - now))


class Wait:
    """Reusable wait configuration.

    Example:
        waiter = Wait(timeout=5, interval=0.5)
        element = waiter.until(lambda: finder.try_find(image), "logo never showed up")
    """

    def __init__(
        self,
        timeout: float | None = None,
        interval: float | None = None,
        ignored: Iterable[IgnoredFailure] | None = None,
        clock: Clock | None = None,
        settings: ClientSettings | None = None,
    ) -> None:
        """Initialize with defaults taken from ClientSettings.

        Args:
            timeout: Deadline in seconds
            interval: Polling interval in seconds
            ignored: Ignore set, DEFAULT_IGNORED when omitted
            clock: Time source
            settings: Settings providing default timeout and interval
        """
        if timeout is None or interval is None:
            settings = settings or get_settings()
            timeout = settings.wait_timeout if timeout is None else timeout
            interval = settings.wait_interval if interval is None else interval
        self.timeout = timeout
        self.interval = interval
        self.ignored: tuple[IgnoredFailure, ...] = (
            DEFAULT_IGNORED if ignored is None else tuple(ignored)
        )
        self.clock = clock or SystemClock()

    def until(self, predicate: Callable[[], T], message: str | None = None) -> T:
        """Run the wait engine with this configuration."""
        return wait(
            predicate,
            timeout=self.timeout,
            interval=self.interval,
            ignored=self.ignored,
            message=message,
            clock=self.clock,
        )

    def with_timeout(self, seconds: float) -> "Wait":
        """Return a copy with a different timeout."""
        return Wait(timeout=seconds, interval=self.interval, ignored=self.ignored, clock=self.clock)
