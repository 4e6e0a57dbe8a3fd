"""Retry utilities for network calls.

Implements exponential backoff with jitter for transient failures of the feed
host, the image host, Firestore and the object store. Permanent failures
(4xx, malformed documents, permission errors) are never retried.
"""

import logging
from dataclasses import dataclass
from functools import wraps
from typing import Callable, Optional

import requests
from botocore.exceptions import (
    ConnectTimeoutError,
    EndpointConnectionError,
    ReadTimeoutError,
)
from google.api_core import exceptions as gcp_exceptions
from tenacity import (
    RetryCallState,
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential_jitter,
)

logger = logging.getLogger(__name__)


class TransientHTTPError(requests.HTTPError):
    """HTTP response that is worth retrying (429 or 5xx)."""

    pass


@dataclass
class RetryConfig:
    """Configuration for retry behavior."""

    max_attempts: int = 3
    min_wait_seconds: float = 1
    max_wait_seconds: float = 30
    jitter: bool = True


DEFAULT_RETRY_CONFIG = RetryConfig()

# Minimal delays, used by the test-suite
TEST_RETRY_CONFIG = RetryConfig(
    max_attempts=3, min_wait_seconds=0, max_wait_seconds=0, jitter=False
)

HTTP_TRANSIENT_ERRORS = (
    requests.ConnectionError,
    requests.Timeout,
    TransientHTTPError,
)

FIRESTORE_TRANSIENT_ERRORS = (
    gcp_exceptions.ServiceUnavailable,
    gcp_exceptions.DeadlineExceeded,
    gcp_exceptions.InternalServerError,
    gcp_exceptions.Aborted,
    gcp_exceptions.TooManyRequests,
)

STORAGE_TRANSIENT_ERRORS = (
    EndpointConnectionError,
    ConnectTimeoutError,
    ReadTimeoutError,
)


def raise_for_transient_status(response: requests.Response) -> None:
    """
    Raise for an unsuccessful response, marking 429/5xx as retryable.

    Args:
        response: Response returned by requests

    Raises:
        TransientHTTPError: On 429 and 5xx statuses
        requests.HTTPError: On any other 4xx status
    """
    status = response.status_code
    if status == 429 or 500 <= status < 600:
        raise TransientHTTPError(
            f"HTTP {status} for {response.url}", response=response
        )
    response.raise_for_status()


def log_retry_attempt(retry_state: RetryCallState) -> None:
    """Log retry attempts for debugging."""
    if retry_state.outcome and retry_state.outcome.failed:
        exception = retry_state.outcome.exception()
        logger.warning(
            f"Retry attempt {retry_state.attempt_number} failed: "
            f"{type(exception).__name__}: {exception}"
        )


def with_retry(
    config: Optional[RetryConfig] = None,
    retry_on: tuple[type[BaseException], ...] = HTTP_TRANSIENT_ERRORS,
) -> Callable:
    """
    Decorator adding retry logic with exponential backoff.

    Usage:
        @with_retry(retry_on=FIRESTORE_TRANSIENT_ERRORS)
        def commit(batch):
            return batch.commit()

        fetch = with_retry(RetryConfig(max_attempts=5))(requests.get)

    Args:
        config: Retry configuration (DEFAULT_RETRY_CONFIG if None)
        retry_on: Exception types that trigger a retry

    Returns:
        Decorated function; the last exception is re-raised once attempts are exhausted
    """
    config = config or DEFAULT_RETRY_CONFIG

    def decorator(func: Callable) -> Callable:
        retry_decorator = retry(
            stop=stop_after_attempt(config.max_attempts),
            wait=wait_exponential_jitter(
                initial=config.min_wait_seconds,
                max=config.max_wait_seconds,
                jitter=config.max_wait_seconds if config.jitter else 0,
            ),
            retry=retry_if_exception_type(retry_on),
            before_sleep=log_retry_attempt,
            reraise=True,
        )
        retrying = retry_decorator(func)

        @wraps(func)
        def wrapper(*args, **kwargs):
            try:
                return retrying(*args, **kwargs)
            except retry_on as e:
                logger.error(
                    f"{func.__name__} failed after {config.max_attempts} attempts: "
                    f"{type(e).__name__}: {e}"
                )
                raise

        return wrapper

    return decorator
