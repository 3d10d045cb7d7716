"""
Unit tests for the retry policy engine.
"""
import pytest

from chat_gateway.models import AttemptContext, Failure, FailureKind
from chat_gateway.retry_policy import (
    RetryPolicy,
    classify_status,
    default_should_retry,
    evaluate,
    no_retry_policy,
    normalize_headers,
    retry_including_not_found,
    session_init_retry_handler,
)


def server_error(status=500):
    return Failure(FailureKind.RETRYABLE_SERVER_ERROR, "boom", status_code=status)


def client_error(status=400):
    return Failure(FailureKind.NON_RETRYABLE_CLIENT_ERROR, "bad", status_code=status)


class TestRetryPolicy:
    """Test suite for RetryPolicy."""

    def test_get_delay_is_constant(self):
        """Delay does not grow with the attempt number."""
        policy = RetryPolicy(max_attempts=3, backoff_ms=250)

        assert policy.get_delay() == 0.25

    def test_negative_values_rejected(self):
        with pytest.raises(ValueError):
            RetryPolicy(max_attempts=-1)
        with pytest.raises(ValueError):
            RetryPolicy(backoff_ms=-5)

    def test_header_overwrites_coerced_to_frozenset(self):
        policy = RetryPolicy(header_overwrites=["AuthCodeNonce"])

        assert policy.header_overwrites == frozenset({"AuthCodeNonce"})

    def test_custom_predicate_wins(self):
        policy = RetryPolicy(should_retry=lambda failure: failure.status_code == 418)

        assert policy.is_retryable(client_error(418))
        assert not policy.is_retryable(server_error())

    def test_no_retry_policy(self):
        policy = no_retry_policy()

        assert policy.max_attempts == 0
        assert policy.backoff_ms == 0


class TestDefaultClassification:
    """Tests for default_should_retry and classify_status."""

    @pytest.mark.parametrize(
        "kind",
        [FailureKind.TIMEOUT, FailureKind.NETWORK_ERROR, FailureKind.RETRYABLE_SERVER_ERROR],
    )
    def test_transient_kinds_retried(self, kind):
        assert default_should_retry(Failure(kind, "x"), retry_on_429=False)

    @pytest.mark.parametrize(
        "kind",
        [
            FailureKind.NON_RETRYABLE_CLIENT_ERROR,
            FailureKind.EMPTY_RESPONSE,
            FailureKind.INVALID_RESPONSE,
        ],
    )
    def test_terminal_kinds_not_retried(self, kind):
        assert not default_should_retry(Failure(kind, "x"), retry_on_429=True)

    def test_429_follows_flag(self):
        failure = client_error(429)

        assert default_should_retry(failure, retry_on_429=True)
        assert not default_should_retry(failure, retry_on_429=False)

    def test_classify_status(self):
        assert classify_status(503) == FailureKind.RETRYABLE_SERVER_ERROR
        assert classify_status(404) == FailureKind.NON_RETRYABLE_CLIENT_ERROR
        assert classify_status(429) == FailureKind.NON_RETRYABLE_CLIENT_ERROR
        assert classify_status(429, retry_on_429=True) == FailureKind.RETRYABLE_SERVER_ERROR

    def test_retry_including_not_found(self):
        assert retry_including_not_found(client_error(404))
        assert not retry_including_not_found(client_error(400))
        assert retry_including_not_found(server_error())


class TestSessionInitRetryHandler:
    """Tests for the session creation predicate."""

    def test_retries_5xx_and_network_errors(self):
        should_retry = session_init_retry_handler(retry_on_429=True)

        assert should_retry(server_error(502))
        assert should_retry(Failure(FailureKind.NETWORK_ERROR, "reset"))

    def test_does_not_retry_timeouts_or_4xx(self):
        should_retry = session_init_retry_handler(retry_on_429=True)

        assert not should_retry(Failure(FailureKind.TIMEOUT, "slow"))
        assert not should_retry(client_error(400))

    def test_429_follows_flag(self):
        assert session_init_retry_handler(True)(client_error(429))
        assert not session_init_retry_handler(False)(client_error(429))


class TestEvaluate:
    """Tests for the pure retry decision."""

    def test_retry_below_ceiling(self):
        policy = RetryPolicy(max_attempts=2, backoff_ms=100, header_overwrites={"AuthCodeNonce"})

        decision = evaluate(AttemptContext(attempt_number=1), server_error(), policy)

        assert decision.retry
        assert decision.delay_ms == 100
        assert decision.headers_to_refresh == frozenset({"AuthCodeNonce"})

    def test_ceiling_is_hard(self):
        """No classification extends a call past max_attempts."""
        policy = RetryPolicy(max_attempts=2, should_retry=lambda failure: True)

        decision = evaluate(AttemptContext(attempt_number=2), server_error(), policy)

        assert not decision.retry

    def test_zero_attempts_never_retries(self):
        decision = evaluate(AttemptContext(), server_error(), RetryPolicy(max_attempts=0))

        assert not decision.retry

    def test_non_retryable_failure(self):
        decision = evaluate(AttemptContext(), client_error(), RetryPolicy(max_attempts=5))

        assert not decision.retry


def test_normalize_headers():
    assert normalize_headers(["AuthCodeNonce", "Oc-Sessionid"]) == frozenset(
        {"authcodenonce", "oc-sessionid"}
    )
