"""Bounded retry with Riot-specific backoff.

The helper knows nothing about players: it wraps any awaitable factory and
decides, from the HTTP status carried by the raised error, how long to wait
before the next attempt.

- 429: wait the upstream ``Retry-After`` (10s when absent or unusable)
- 503: exponential, ``base * 2**attempt`` capped at 30s
- 404: no retry, the caller has a fallback for missing resources
- anything else: linear, ``base * (attempt + 1)``
"""

import asyncio
from dataclasses import dataclass
from typing import Awaitable, Callable, Optional, TypeVar

import structlog

logger = structlog.get_logger(__name__)

T = TypeVar("T")
Sleep = Callable[[float], Awaitable[None]]


@dataclass(frozen=True)
class RetryPolicy:
    """Retry budget and backoff parameters (all durations in seconds)."""

    max_attempts: int = 4
    base_delay: float = 1.0
    pre_delay: float = 0.1
    max_unavailable_delay: float = 30.0
    default_retry_after: float = 10.0

    def backoff_delay(self, error: BaseException, attempt: int) -> float:
        """Wait before the attempt following ``attempt`` (0-based) failed with ``error``."""
        status = getattr(error, "status_code", None)

        if status == 429:
            retry_after = getattr(error, "retry_after", None)
            if retry_after is None or retry_after < 0:
                return self.default_retry_after
            return float(retry_after)

        if status == 503:
            return min(self.base_delay * (2**attempt), self.max_unavailable_delay)

        return self.base_delay * (attempt + 1)


def is_not_found(error: BaseException) -> bool:
    return getattr(error, "status_code", None) == 404


async def retry_with_backoff(
    operation: Callable[[], Awaitable[T]],
    context: str,
    policy: Optional[RetryPolicy] = None,
    sleep: Sleep = asyncio.sleep,
) -> T:
    """
    Run ``operation`` until it succeeds or the retry budget is spent.

    Args:
        operation: Zero-argument callable returning a fresh awaitable per attempt
        context: Human readable label used in log lines
        policy: Retry budget and delays (defaults to ``RetryPolicy()``)
        sleep: Awaitable sleep, injectable for tests

    Returns:
        Result of the first successful attempt

    Raises:
        The 404 error immediately, otherwise the last error once every
        attempt failed.
    """
    policy = policy or RetryPolicy()
    if policy.max_attempts < 1:
        raise ValueError("max_attempts must be at least 1")
    last_error: Optional[BaseException] = None

    for attempt in range(policy.max_attempts):
        if policy.pre_delay > 0:
            await sleep(policy.pre_delay)

        try:
            return await operation()
        except Exception as e:
            if is_not_found(e):
                logger.debug("Resource not found, not retrying", context=context)
                raise

            last_error = e
            if attempt + 1 >= policy.max_attempts:
                break

            delay = policy.backoff_delay(e, attempt)
            logger.warning(
                "Upstream call failed, retrying",
                context=context,
                attempt=attempt + 1,
                max_attempts=policy.max_attempts,
                delay_seconds=delay,
                status_code=getattr(e, "status_code", None),
                error=str(e),
                error_type=type(e).__name__,
            )
            await sleep(delay)

    logger.warning(
        "Upstream call failed after all retries",
        context=context,
        attempts=policy.max_attempts,
        error=str(last_error),
        error_type=type(last_error).__name__,
    )
    raise last_error
