"""Standardized retry logic for the Web2Cit fetch collaborators.

The translation core never retries; only the HTTP clients wrap their requests
with the retryer built here.
"""

from collections.abc import Callable
from typing import Any

import httpx
import logfire
from tenacity import (
    AsyncRetrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

TRANSIENT_ERRORS: tuple[type[Exception], ...] = (httpx.TransportError,)


def get_retryer(
    max_attempts: int = 3,
    wait_min: float = 0.5,
    wait_max: float = 5.0,
    wait_multiplier: float = 1.0,
    exceptions: tuple[type[Exception], ...] = TRANSIENT_ERRORS,
    log_callback: Callable[[Any], None] | None = None,
    reraise: bool = True,
) -> AsyncRetrying:
    """Create a standardized tenacity AsyncRetrying object.

    Args:
        max_attempts: Maximum number of attempts.
        wait_min: Minimum wait time between retries in seconds.
        wait_max: Maximum wait time between retries in seconds.
        wait_multiplier: Multiplier for exponential backoff.
        exceptions: Tuple of exception types to retry on.
        log_callback: Optional callback function for before_sleep logging.
                      Receives the retry state.
        reraise: Whether to reraise the exception after all retries fail.

    Returns:
        A configured tenacity.AsyncRetrying object.

    """
    return AsyncRetrying(
        stop=stop_after_attempt(max_attempts),
        wait=wait_exponential(multiplier=wait_multiplier, min=wait_min, max=wait_max),
        retry=retry_if_exception_type(exceptions),
        before_sleep=log_callback,
        reraise=reraise,
    )


def log_retry(retry_state: Any) -> None:
    """Default logging callback for retries.

    Args:
        retry_state: The tenacity retry state object.

    """
    exception = retry_state.outcome.exception()
    attempt = retry_state.attempt_number
    logfire.warn('Retrying request', attempt=attempt, error=str(exception) if exception else 'Unknown error')
