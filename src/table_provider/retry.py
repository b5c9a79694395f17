"""Bounded retry-until-condition polling.

Every operation that has to wait for DynamoDB to finish an asynchronous
state transition goes through :func:`retry_until` or :func:`wait_until`.
The predicate performs one remote probe and returns ``True`` once the
expected condition holds; raising from the predicate aborts the loop.
"""

from __future__ import annotations

import logging
import threading
import time
from collections.abc import Callable
from dataclasses import dataclass

from .errors import ConvergenceTimeoutError, OperationCancelledError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RetryProfile:
    attempts: int
    interval_seconds: float

    def __post_init__(self) -> None:
        if self.attempts < 1:
            raise ValueError("attempts must be >= 1")
        if self.interval_seconds < 0:
            raise ValueError("interval_seconds must be >= 0")


SHORT_RETRY = RetryProfile(attempts=10, interval_seconds=1.0)
LONG_RETRY = RetryProfile(attempts=120, interval_seconds=5.0)


def _check_cancelled(cancel: threading.Event | None, deadline: float | None) -> None:
    if cancel is not None and cancel.is_set():
        raise OperationCancelledError("operation cancelled")
    if deadline is not None and time.monotonic() >= deadline:
        raise OperationCancelledError("operation deadline exceeded")


def _pause(
    seconds: float,
    *,
    sleep: Callable[[float], None] | None,
    cancel: threading.Event | None,
    deadline: float | None,
) -> None:
    if deadline is not None:
        seconds = min(seconds, max(0.0, deadline - time.monotonic()))
    if sleep is not None:
        if seconds > 0:
            sleep(seconds)
    elif cancel is not None:
        if cancel.wait(seconds):
            raise OperationCancelledError("operation cancelled")
    elif seconds > 0:
        time.sleep(seconds)
    _check_cancelled(cancel, deadline)


def retry_until(
    predicate: Callable[[], bool],
    profile: RetryProfile,
    *,
    sleep: Callable[[float], None] | None = None,
    cancel: threading.Event | None = None,
    deadline: float | None = None,
) -> bool:
    """Call ``predicate`` until it returns ``True`` or ``profile`` runs out.

    Returns ``False`` when every attempt came back negative. ``deadline`` is a
    :func:`time.monotonic` timestamp; passing it, or setting ``cancel``,
    raises :class:`OperationCancelledError`.

    Without ``sleep`` the pause between attempts waits on ``cancel`` so a
    cancellation from another thread ends it early. An injected ``sleep`` is
    always used as given; ``cancel`` is then checked after it returns.
    """
    for attempt in range(1, profile.attempts + 1):
        _check_cancelled(cancel, deadline)
        if predicate():
            return True
        logger.debug("condition not met (attempt %d/%d)", attempt, profile.attempts)
        if attempt < profile.attempts:
            _pause(profile.interval_seconds, sleep=sleep, cancel=cancel, deadline=deadline)
    return False


def wait_until(
    predicate: Callable[[], bool],
    profile: RetryProfile,
    *,
    resource: str,
    condition: str,
    sleep: Callable[[float], None] | None = None,
    cancel: threading.Event | None = None,
    deadline: float | None = None,
) -> None:
    if not retry_until(predicate, profile, sleep=sleep, cancel=cancel, deadline=deadline):
        raise ConvergenceTimeoutError(resource=resource, condition=condition, attempts=profile.attempts)
