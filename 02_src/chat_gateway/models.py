"""
Data models for the request gateway.

Defines attempt state, classified failures, operation specs and call results.
"""
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any, Dict, Optional

if TYPE_CHECKING:
    from .retry_policy import RetryPolicy

HTTP_TIMEOUT_MESSAGE = "ClientHttpTimeoutError: Request timed out"


class FailureKind(str, Enum):
    """Classified outcome of a failed attempt."""

    TIMEOUT = "timeout"
    NETWORK_ERROR = "network_error"
    RETRYABLE_SERVER_ERROR = "retryable_server_error"
    NON_RETRYABLE_CLIENT_ERROR = "non_retryable_client_error"
    EMPTY_RESPONSE = "empty_response"
    INVALID_RESPONSE = "invalid_response"


@dataclass(frozen=True)
class Failure:
    """Classified failure of one attempt."""

    kind: FailureKind
    message: str
    status_code: Optional[int] = None
    body: Any = None
    headers: Dict[str, str] = field(default_factory=dict, compare=False)
    cause: Optional[BaseException] = field(default=None, compare=False)

    @property
    def is_timeout(self) -> bool:
        return self.kind == FailureKind.TIMEOUT


class ChatRequestError(Exception):
    """Raised by Result.unwrap() when the call ended in a failure."""

    def __init__(self, failure: Failure, attempts: int = 1):
        super().__init__(failure.message)
        self.failure = failure
        self.attempts = attempts


@dataclass
class AttemptContext:
    """Mutable state of one logical call in flight."""

    attempt_number: int = 0
    started_at: float = field(default_factory=time.monotonic)
    last_failure: Optional[Failure] = None

    @property
    def attempts_dispatched(self) -> int:
        return self.attempt_number + 1


@dataclass
class OperationSpec:
    """One logical operation ready for dispatch."""

    name: str
    method: str
    url: str
    policy: "RetryPolicy"
    timeout_ms: Optional[int] = None
    headers: Dict[str, str] = field(default_factory=dict)
    params: Optional[Dict[str, str]] = None
    json: Any = None
    request_id: Optional[str] = None

    # Dispatcher behaviour switches
    authenticated: bool = False  # inject the auth nonce header
    require_body: bool = False  # empty 2xx body is EMPTY_RESPONSE
    reconnect: bool = False  # 204 is a terminal "not found"
    not_found_as_empty: bool = False  # 404 resolves to an empty success


@dataclass
class Result:
    """Outcome of one logical call: a value, a not-found marker, or a failure."""

    value: Any = None
    failure: Optional[Failure] = None
    status_code: Optional[int] = None
    headers: Dict[str, str] = field(default_factory=dict)
    attempts: int = 1
    not_found: bool = False

    @property
    def ok(self) -> bool:
        return self.failure is None

    def unwrap(self) -> Any:
        """
        Return the value or raise the failure.

        Raises:
            ChatRequestError: If the call failed
        """
        if self.failure is not None:
            raise ChatRequestError(self.failure, self.attempts)
        return self.value
