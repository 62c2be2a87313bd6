from __future__ import annotations

import pytest

from hubcatalog.connectors.retry import RateLimitRetryPolicy, RetryState, RetryStep


def _replay(policy: RateLimitRetryPolicy, statuses: list[int]) -> list[RetryStep]:
    steps = [policy.start()]
    for status in statuses:
        step = policy.on_status(steps[-1], status)
        steps.append(step)
        if step.is_terminal:
            break
        steps.append(policy.after_backoff(step))
    return steps


def test_first_success_needs_no_backoff() -> None:
    steps = _replay(RateLimitRetryPolicy(), [200])

    assert [step.state for step in steps] == [RetryState.REQUESTING, RetryState.SUCCEEDED]
    assert steps[-1].attempt == 1


def test_non_rate_limit_error_ends_retry_loop() -> None:
    steps = _replay(RateLimitRetryPolicy(), [503])

    assert steps[-1].state is RetryState.SUCCEEDED
    assert steps[-1].attempt == 1


def test_four_rate_limits_then_success() -> None:
    steps = _replay(RateLimitRetryPolicy(max_attempts=5), [429, 429, 429, 429, 200])

    backoffs = [step for step in steps if step.state is RetryState.BACKOFF]
    assert len(backoffs) == 4
    assert steps[-1] == RetryStep(state=RetryState.SUCCEEDED, attempt=5)


def test_rate_limited_on_last_attempt_fails_without_backoff() -> None:
    steps = _replay(RateLimitRetryPolicy(max_attempts=5), [429] * 5)

    backoffs = [step for step in steps if step.state is RetryState.BACKOFF]
    assert len(backoffs) == 4
    assert steps[-1] == RetryStep(state=RetryState.FAILED, attempt=5)
    assert len(steps) <= RateLimitRetryPolicy(max_attempts=5).max_transitions + 1


def test_single_attempt_policy_fails_immediately() -> None:
    policy = RateLimitRetryPolicy(max_attempts=1)

    assert policy.on_status(policy.start(), 429).state is RetryState.FAILED


def test_terminal_steps_reject_transitions() -> None:
    policy = RateLimitRetryPolicy()
    done = policy.on_status(policy.start(), 200)

    with pytest.raises(ValueError):
        policy.on_status(done, 200)
    with pytest.raises(ValueError):
        policy.after_backoff(done)


def test_backoff_must_come_from_backoff_state() -> None:
    policy = RateLimitRetryPolicy()

    with pytest.raises(ValueError):
        policy.after_backoff(policy.start())


@pytest.mark.parametrize("kwargs", [{"max_attempts": 0}, {"backoff_seconds": -1.0}])
def test_invalid_policy_configuration(kwargs: dict) -> None:
    with pytest.raises(ValueError):
        RateLimitRetryPolicy(**kwargs)
