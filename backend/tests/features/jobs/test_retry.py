"""Tests for the retry/backoff helper."""

import pytest

from ranked_tracker.core.riot_api.errors import (
    NotFoundError,
    RateLimitError,
    RiotAPIError,
    ServiceUnavailableError,
)
from ranked_tracker.features.jobs.retry import RetryPolicy, retry_with_backoff

NO_PRE_DELAY = RetryPolicy(pre_delay=0)


class ScriptedOperation:
    """Raises the scripted errors in order, then returns ``result``."""

    def __init__(self, *errors, result="ok"):
        self.errors = list(errors)
        self.result = result
        self.calls = 0

    async def __call__(self):
        self.calls += 1
        if self.errors:
            raise self.errors.pop(0)
        return self.result


class TestBackoffDelay:
    def test_rate_limit_uses_retry_after(self):
        error = RateLimitError("Rate limit exceeded", status_code=429, retry_after=5)
        assert RetryPolicy().backoff_delay(error, attempt=0) == 5

    def test_rate_limit_without_header_waits_default(self):
        error = RateLimitError("Rate limit exceeded", status_code=429)
        assert RetryPolicy().backoff_delay(error, attempt=2) == 10

    def test_unavailable_is_exponential_and_capped(self):
        error = ServiceUnavailableError("Service unavailable", status_code=503)
        policy = RetryPolicy(base_delay=1.0)
        assert [policy.backoff_delay(error, n) for n in range(6)] == [1, 2, 4, 8, 16, 30]

    def test_other_errors_are_linear(self):
        error = RiotAPIError("Unexpected status 500", status_code=500)
        policy = RetryPolicy(base_delay=1.0)
        assert [policy.backoff_delay(error, n) for n in range(3)] == [1, 2, 3]

    def test_error_without_status_is_linear(self):
        assert RetryPolicy(base_delay=2.0).backoff_delay(ValueError("boom"), 1) == 4.0


async def test_returns_first_success_without_backoff(sleep):
    operation = ScriptedOperation()

    assert await retry_with_backoff(operation, "test", policy=RetryPolicy(), sleep=sleep) == "ok"
    assert operation.calls == 1
    assert sleep.delays == [0.1]


async def test_rate_limit_waits_retry_after(sleep):
    operation = ScriptedOperation(
        RateLimitError("Rate limit exceeded", status_code=429, retry_after=5)
    )

    result = await retry_with_backoff(operation, "test", policy=NO_PRE_DELAY, sleep=sleep)

    assert result == "ok"
    assert operation.calls == 2
    assert sleep.delays == [5]


async def test_not_found_is_never_retried(sleep):
    operation = ScriptedOperation(NotFoundError("Resource not found", status_code=404))

    with pytest.raises(NotFoundError):
        await retry_with_backoff(operation, "test", policy=NO_PRE_DELAY, sleep=sleep)

    assert operation.calls == 1
    assert sleep.delays == []


async def test_unavailable_backs_off_until_success(sleep):
    unavailable = [
        ServiceUnavailableError("Service unavailable", status_code=503) for _ in range(3)
    ]
    operation = ScriptedOperation(*unavailable)

    result = await retry_with_backoff(operation, "test", policy=NO_PRE_DELAY, sleep=sleep)

    assert result == "ok"
    assert operation.calls == 4
    assert sleep.delays == [1, 2, 4]


async def test_exhaustion_raises_last_error_without_final_sleep(sleep):
    errors = [RiotAPIError(f"failure {n}", status_code=500) for n in range(4)]
    operation = ScriptedOperation(*errors)

    with pytest.raises(RiotAPIError) as exc_info:
        await retry_with_backoff(operation, "test", policy=NO_PRE_DELAY, sleep=sleep)

    assert exc_info.value.message == "failure 3"
    assert operation.calls == 4
    assert sleep.delays == [1, 2, 3]


async def test_pre_delay_before_every_attempt(sleep):
    operation = ScriptedOperation(RiotAPIError("failure", status_code=500))
    policy = RetryPolicy(pre_delay=0.1, base_delay=1.0)

    await retry_with_backoff(operation, "test", policy=policy, sleep=sleep)

    assert sleep.delays == [0.1, 1.0, 0.1]


async def test_single_attempt_budget(sleep):
    operation = ScriptedOperation(RiotAPIError("failure", status_code=500))

    with pytest.raises(RiotAPIError):
        await retry_with_backoff(
            operation, "test", policy=RetryPolicy(max_attempts=1, pre_delay=0), sleep=sleep
        )

    assert operation.calls == 1
    assert sleep.delays == []


async def test_rejects_empty_budget(sleep):
    with pytest.raises(ValueError):
        await retry_with_backoff(
            ScriptedOperation(), "test", policy=RetryPolicy(max_attempts=0), sleep=sleep
        )
