"""Retry decorator for handling transient GitLab and Notion API failures.

This module provides a decorator that implements a small, bounded retry policy for
remote calls made through httpx or python-gitlab, including respect for rate limit
headers and exponential backoff.
"""

import asyncio
import functools
from typing import Any, Callable, TypeVar

import httpx
import requests
import structlog
from gitlab.exceptions import GitlabError

from gitlab_notion_sync.utils.constants import DEFAULT_MAX_ATTEMPTS, RETRYABLE_STATUS_CODES

logger = structlog.get_logger(__name__)

F = TypeVar("F", bound=Callable[..., Any])


def is_transient_error(exc: BaseException, idempotent: bool = True) -> bool:
    """Return True if the exception is worth retrying.

    Only transport failures and rate limit/server error responses qualify, whether
    they come from httpx (Notion) or python-gitlab (GitLab). Anything else, including
    malformed responses, is raised immediately. When the call is not idempotent, only
    failures that guarantee the request was never applied qualify: a refused
    connection or a 429 response.
    """
    if isinstance(exc, httpx.HTTPStatusError):
        status_code: int | None = exc.response.status_code
    elif isinstance(exc, GitlabError):
        status_code = exc.response_code
    elif isinstance(exc, httpx.TransportError):
        return idempotent or isinstance(exc, httpx.ConnectError)
    elif isinstance(exc, (requests.exceptions.ConnectionError, requests.exceptions.Timeout)):
        return idempotent
    else:
        return False

    if not idempotent:
        return status_code == 429
    return status_code in RETRYABLE_STATUS_CODES


def _retry_after_seconds(exc: BaseException) -> float | None:
    """Read the Retry-After header from a failed response, if there is one."""
    if not isinstance(exc, httpx.HTTPStatusError):
        return None
    retry_after = exc.response.headers.get("retry-after")
    if retry_after is None:
        return None
    try:
        return float(retry_after)
    except ValueError:
        logger.warning("Invalid retry-after header value", retry_after=retry_after)
        return None


def retry_on_transient_error(
    max_attempts: int | None = None,
    initial_delay: float = 1.0,
    max_delay: float = 30.0,
    exponential_base: float = 2.0,
    idempotent: bool = True,
) -> Callable[[F], F]:
    """Decorator for retrying async remote calls on transient failures.

    This decorator handles:
    - Transport errors (connection failures, timeouts)
    - Rate limit (429) and server error (5xx) responses
    - Respects the retry-after header, capped at max_delay
    - Implements exponential backoff otherwise

    Args:
        max_attempts: Total number of attempts including the first one. When None, the
            `max_attempts` attribute of the bound instance is used if present, falling
            back to DEFAULT_MAX_ATTEMPTS.
        initial_delay: Initial delay in seconds between attempts (default: 1.0)
        max_delay: Maximum delay in seconds between attempts (default: 30.0)
        exponential_base: Base for exponential backoff calculation (default: 2.0)
        idempotent: Whether repeating the call is safe once the request may have
            reached the server (default: True)

    Returns:
        Decorated function with retry logic

    Example:
        @retry_on_transient_error()
        async def list_labels(self) -> list[GitLabLabel]:
            ...
    """

    def decorator(func: F) -> F:
        if not asyncio.iscoroutinefunction(func):
            raise TypeError(f"Function {func.__name__} decorated with @retry_on_transient_error must be async.")

        @functools.wraps(func)
        async def async_wrapper(*args: Any, **kwargs: Any) -> Any:
            attempts = max_attempts
            if attempts is None:
                attempts = getattr(args[0], "max_attempts", DEFAULT_MAX_ATTEMPTS) if args else DEFAULT_MAX_ATTEMPTS
            delay = initial_delay

            for attempt in range(1, attempts + 1):
                try:
                    return await func(*args, **kwargs)
                except Exception as e:
                    if not is_transient_error(e, idempotent=idempotent):
                        raise

                    if attempt == attempts:
                        logger.error(
                            "Max attempts reached for transient error",
                            function=func.__name__,
                            attempt=attempt,
                            error_type=type(e).__name__,
                            error=str(e),
                        )
                        raise

                    wait_time = _retry_after_seconds(e)
                    if wait_time is None:
                        wait_time = delay
                    wait_time = min(wait_time, max_delay)

                    logger.warning(
                        f"Transient error, retrying in {wait_time} seconds",
                        function=func.__name__,
                        attempt=attempt,
                        max_attempts=attempts,
                        wait_time=wait_time,
                        error_type=type(e).__name__,
                    )

                    await asyncio.sleep(wait_time)

                    delay = min(delay * exponential_base, max_delay)

        return async_wrapper  # type: ignore

    return decorator
