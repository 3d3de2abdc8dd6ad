"""
Retry helper for callers that want to ride out short clock regressions.

Generators never retry on their own: a clock that moved backwards is
reported to the caller with the generator state untouched. Services that
prefer to wait (NTP slews are usually a few milliseconds) can wrap their
generate call with this decorator.
"""

from collections.abc import Callable
from typing import TypeVar

from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from sortable_ids.kernel.errors import ClockRegressionError
from sortable_ids.kernel.logging import get_logger

logger = get_logger(__name__)

T = TypeVar("T")


def retry_on_clock_regression(
    max_attempts: int = 3,
    min_wait_ms: int = 1,
    max_wait_ms: int = 50,
) -> Callable[[Callable[..., T]], Callable[..., T]]:
    """
    Retry decorator for ClockRegressionError with exponential backoff.

    Args:
        max_attempts: Maximum number of attempts (default: 3)
        min_wait_ms: Minimum wait time in milliseconds (default: 1)
        max_wait_ms: Maximum wait time in milliseconds (default: 50)

    Returns:
        Decorated function that retries on ClockRegressionError and re-raises
        the last error once attempts are exhausted

    Example:
        @retry_on_clock_regression(max_attempts=5)
        def next_order_id() -> str:
            return snowflake.generate()
    """
    return retry(
        retry=retry_if_exception_type(ClockRegressionError),
        stop=stop_after_attempt(max_attempts),
        wait=wait_exponential(
            multiplier=min_wait_ms / 1000.0,
            min=min_wait_ms / 1000.0,
            max=max_wait_ms / 1000.0,
        ),
        before_sleep=lambda retry_state: logger.warning(
            "Clock regression detected, retrying",
            attempt=retry_state.attempt_number,
            exception=str(retry_state.outcome.exception()) if retry_state.outcome else None,
        ),
        reraise=True,
    )
