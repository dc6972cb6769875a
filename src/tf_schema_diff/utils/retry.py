"""Retry logic for oracle calls using tenacity.

Transient failures (network errors, rate limits, 5xx) are retried with
exponential backoff and jitter. Everything else propagates immediately.
"""

from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

from tenacity import (
    AsyncRetrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_random_exponential,
)

from tf_schema_diff.exceptions import NetworkError, RateLimitError, ServerError
from tf_schema_diff.utils.logging import get_logger

logger = get_logger(__name__)

T = TypeVar("T")

TRANSIENT_ERRORS: tuple[type[Exception], ...] = (NetworkError, RateLimitError, ServerError)


async def call_with_retry(
    func: Callable[..., Awaitable[T]],
    *args: Any,
    max_attempts: int = 5,
    min_wait: float = 2,
    max_wait: float = 60,
    retry_on_exceptions: tuple[type[Exception], ...] = TRANSIENT_ERRORS,
    **kwargs: Any,
) -> T:
    """Await ``func(*args, **kwargs)``, retrying transient failures.

    Args:
        func: Coroutine function to call
        max_attempts: Maximum number of attempts (first call included)
        min_wait: Minimum wait time in seconds
        max_wait: Maximum wait time in seconds
        retry_on_exceptions: Exception types that trigger a retry

    Returns:
        Result of the coroutine

    Raises:
        The last exception once attempts are exhausted, or any
        non-retryable exception immediately.
    """
    try:
        async for attempt_obj in AsyncRetrying(
            stop=stop_after_attempt(max_attempts),
            wait=wait_random_exponential(multiplier=1, min=min_wait, max=max_wait),
            retry=retry_if_exception_type(retry_on_exceptions),
            reraise=True,
        ):
            with attempt_obj:
                attempt = attempt_obj.retry_state.attempt_number
                if attempt > 1:
                    logger.info(
                        "retry_attempt",
                        function=func.__name__,
                        attempt=attempt,
                        max_attempts=max_attempts,
                    )
                return await func(*args, **kwargs)
    except retry_on_exceptions as e:
        logger.error(
            "retry_exhausted",
            function=func.__name__,
            error=str(e),
            max_attempts=max_attempts,
        )
        raise
