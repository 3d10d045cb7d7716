"""
Retry policy for live-chat API calls.

Implements a fixed-delay retry decision over classified attempt failures.
The decision is pure: all mutation happens in the dispatcher and the
session state store.
"""
from dataclasses import dataclass, field
from typing import Callable, FrozenSet, Iterable, Optional

from .models import AttemptContext, Failure, FailureKind

RATE_LIMITED_STATUS = 429

RETRYABLE_KINDS = frozenset(
    {
        FailureKind.TIMEOUT,
        FailureKind.NETWORK_ERROR,
        FailureKind.RETRYABLE_SERVER_ERROR,
    }
)


@dataclass(frozen=True)
class RetryPolicy:
    """
    Immutable per-operation retry configuration.

    Strategy: constant delay between every retry of an operation. Different
    operations may configure different delays.
    """

    max_attempts: int = 5  # retries allowed after the first attempt
    backoff_ms: int = 1000
    retry_on_429: bool = False
    header_overwrites: FrozenSet[str] = field(default_factory=frozenset)
    should_retry: Optional[Callable[[Failure], bool]] = field(
        default=None, compare=False
    )

    def __post_init__(self):
        if self.max_attempts < 0:
            raise ValueError(f"max_attempts must be >= 0, got {self.max_attempts}")
        if self.backoff_ms < 0:
            raise ValueError(f"backoff_ms must be >= 0, got {self.backoff_ms}")
        # Accept any iterable of header names from callers
        if not isinstance(self.header_overwrites, frozenset):
            object.__setattr__(
                self, "header_overwrites", frozenset(self.header_overwrites)
            )

    def get_delay(self) -> float:
        """
        Delay before the next retry.

        Returns:
            Delay in seconds
        """
        return self.backoff_ms / 1000

    def is_retryable(self, failure: Failure) -> bool:
        """
        Classify a failure with the custom predicate or the default rules.

        Args:
            failure: Classified failure of the last attempt

        Returns:
            True if the failure kind warrants another attempt
        """
        if self.should_retry is not None:
            return bool(self.should_retry(failure))
        return default_should_retry(failure, self.retry_on_429)


@dataclass(frozen=True)
class RetryDecision:
    """Verdict of the retry engine for one failed attempt."""

    retry: bool
    delay_ms: int
    headers_to_refresh: FrozenSet[str]


def default_should_retry(failure: Failure, retry_on_429: bool) -> bool:
    """
    Default retry classification.

    Retry on:
    - Timeouts
    - Network errors
    - 5xx server errors
    - 429, only when retry_on_429 is set

    Don't retry on:
    - Other 4xx client errors
    - Empty or invalid 2xx responses
    """
    if failure.status_code == RATE_LIMITED_STATUS:
        return retry_on_429
    return failure.kind in RETRYABLE_KINDS


def classify_status(status_code: int, retry_on_429: bool = False) -> FailureKind:
    """
    Map an HTTP error status to a failure kind.

    Args:
        status_code: HTTP status (>= 400)
        retry_on_429: Whether 429 counts as a retryable server-side condition

    Returns:
        FailureKind for the status
    """
    if status_code >= 500:
        return FailureKind.RETRYABLE_SERVER_ERROR
    if status_code == RATE_LIMITED_STATUS and retry_on_429:
        return FailureKind.RETRYABLE_SERVER_ERROR
    return FailureKind.NON_RETRYABLE_CLIENT_ERROR


def evaluate(
    attempt: AttemptContext, failure: Failure, policy: RetryPolicy
) -> RetryDecision:
    """
    Decide whether the failed attempt is retried.

    The attempt ceiling is hard: once attempt_number reaches max_attempts no
    classification can extend the call.

    Args:
        attempt: Context of the attempt that just failed
        failure: Its classified failure
        policy: Operation retry policy

    Returns:
        RetryDecision with delay and headers to refresh from session state
    """
    retry = attempt.attempt_number < policy.max_attempts and policy.is_retryable(
        failure
    )
    return RetryDecision(
        retry=retry,
        delay_ms=policy.backoff_ms,
        headers_to_refresh=policy.header_overwrites,
    )


def retry_including_not_found(failure: Failure) -> bool:
    """Default rules, plus 404 is treated as transient."""
    if failure.status_code == 404:
        return True
    return default_should_retry(failure, retry_on_429=False)


def session_init_retry_handler(retry_on_429: bool) -> Callable[[Failure], bool]:
    """
    Build the predicate used by session creation calls.

    Session creation is not idempotent on the server for client errors, so
    only 429 (when enabled), 5xx and transport failures are retried.
    Timeouts are not retried: the server may already have created the
    session.
    """

    def should_retry(failure: Failure) -> bool:
        if failure.status_code == RATE_LIMITED_STATUS:
            return retry_on_429
        if failure.status_code is not None:
            return failure.status_code >= 500
        return failure.kind == FailureKind.NETWORK_ERROR

    return should_retry


def no_retry_policy() -> RetryPolicy:
    """Create a no-retry policy (fail immediately)."""
    return RetryPolicy(max_attempts=0, backoff_ms=0)


def normalize_headers(names: Iterable[str]) -> FrozenSet[str]:
    """Header names as a lowercase frozenset for case-insensitive matching."""
    return frozenset(name.lower() for name in names)
