"""
hubcatalog/connectors/retry.py

Rate-limit retry policy expressed as a small state machine.

The fetcher drives it one response at a time:

    REQUESTING --(non-429)--> SUCCEEDED
    REQUESTING --(429, attempts left)--> BACKOFF --(wait)--> REQUESTING
    REQUESTING --(429, last attempt)--> FAILED

Steps are immutable, so a whole retry sequence can be replayed in tests
without a network or a clock.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

RATE_LIMITED_STATUS_CODE = 429


class RetryState(str, Enum):
    REQUESTING = "requesting"
    BACKOFF = "backoff"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


TERMINAL_STATES = frozenset({RetryState.SUCCEEDED, RetryState.FAILED})


@dataclass(frozen=True)
class RetryStep:
    state: RetryState
    attempt: int

    @property
    def is_terminal(self) -> bool:
        return self.state in TERMINAL_STATES


@dataclass(frozen=True)
class RateLimitRetryPolicy:
    """
    Fixed-interval retry on HTTP 429, bounded by `max_attempts` requests.
    """

    max_attempts: int = 5
    backoff_seconds: float = 10.0

    def __post_init__(self) -> None:
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be at least 1.")
        if self.backoff_seconds < 0:
            raise ValueError("backoff_seconds must not be negative.")

    @property
    def max_transitions(self) -> int:
        return 2 * self.max_attempts

    def start(self) -> RetryStep:
        return RetryStep(state=RetryState.REQUESTING, attempt=1)

    def on_status(self, step: RetryStep, status_code: int) -> RetryStep:
        """
        Advance a REQUESTING step with the HTTP status of its response.
        """

        self._require(step, RetryState.REQUESTING)
        if status_code != RATE_LIMITED_STATUS_CODE:
            return RetryStep(state=RetryState.SUCCEEDED, attempt=step.attempt)
        if step.attempt >= self.max_attempts:
            return RetryStep(state=RetryState.FAILED, attempt=step.attempt)
        return RetryStep(state=RetryState.BACKOFF, attempt=step.attempt)

    def after_backoff(self, step: RetryStep) -> RetryStep:
        self._require(step, RetryState.BACKOFF)
        return RetryStep(state=RetryState.REQUESTING, attempt=step.attempt + 1)

    @staticmethod
    def _require(step: RetryStep, expected: RetryState) -> None:
        if step.state is not expected:
            raise ValueError(f"Invalid retry transition from {step.state.value}; expected {expected.value}.")
