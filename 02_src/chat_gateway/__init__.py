"""
Live-chat request gateway.

Provides the retry policy engine, the shared session state store and the
request dispatcher that combines them.
"""
from .dispatcher import RequestDispatcher
from .models import (
    HTTP_TIMEOUT_MESSAGE,
    AttemptContext,
    ChatRequestError,
    Failure,
    FailureKind,
    OperationSpec,
    Result,
)
from .retry_policy import (
    RetryDecision,
    RetryPolicy,
    classify_status,
    default_should_retry,
    evaluate,
    no_retry_policy,
    retry_including_not_found,
    session_init_retry_handler,
)
from .session_state import SessionSnapshot, SessionStateStore, generate_nonce
from .timer import Timer

__all__ = [
    "RequestDispatcher",
    "HTTP_TIMEOUT_MESSAGE",
    "AttemptContext",
    "ChatRequestError",
    "Failure",
    "FailureKind",
    "OperationSpec",
    "Result",
    "RetryDecision",
    "RetryPolicy",
    "classify_status",
    "default_should_retry",
    "evaluate",
    "no_retry_policy",
    "retry_including_not_found",
    "session_init_retry_handler",
    "SessionSnapshot",
    "SessionStateStore",
    "generate_nonce",
    "Timer",
]
