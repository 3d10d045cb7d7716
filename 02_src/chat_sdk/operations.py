"""
Operation catalog for the live-chat SDK.

Static per-operation retry behaviour, combined with SDKConfiguration into a
fresh RetryPolicy for every call.
"""
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional

from chat_gateway import headers as http_headers
from chat_gateway.models import Failure
from chat_gateway.retry_policy import (
    RetryPolicy,
    retry_including_not_found,
    session_init_retry_handler,
)

from .config import SDKConfiguration

NONCE_OVERWRITE = frozenset({http_headers.AUTH_CODE_NONCE})


@dataclass(frozen=True)
class OperationDefaults:
    """Static retry behaviour of one operation."""

    name: str
    retries: bool = True
    refresh_nonce: bool = True
    retry_on_429: bool = False
    should_retry: Optional[Callable[[Failure], bool]] = None


OPERATIONS: Dict[str, OperationDefaults] = {
    op.name: op
    for op in [
        OperationDefaults("get_lcw_fcs_details", refresh_nonce=False),
        OperationDefaults("get_chat_config", refresh_nonce=False),
        OperationDefaults("get_lwi_details", should_retry=retry_including_not_found),
        # retry_on_429 comes from SDKConfiguration
        OperationDefaults("get_chat_token"),
        OperationDefaults("get_reconnectable_chats", retries=False, refresh_nonce=False),
        OperationDefaults("get_reconnect_availability", retries=False, refresh_nonce=False),
        OperationDefaults("get_agent_availability"),
        OperationDefaults(
            "session_init",
            retry_on_429=True,
            should_retry=session_init_retry_handler(retry_on_429=True),
        ),
        OperationDefaults(
            "create_conversation",
            retry_on_429=True,
            should_retry=session_init_retry_handler(retry_on_429=True),
        ),
        OperationDefaults("session_close"),
        OperationDefaults("validate_auth_chat_record"),
        OperationDefaults("submit_post_chat_response"),
        OperationDefaults("get_survey_invite_link"),
        OperationDefaults("get_chat_transcripts"),
        OperationDefaults("email_transcript"),
        OperationDefaults("fetch_data_masking_info", refresh_nonce=False),
        OperationDefaults("make_secondary_channel_event_request"),
        OperationDefaults("send_typing_indicator", retries=False, refresh_nonce=False),
    ]
}


class OperationCatalog:
    """
    Fixed set of logical operations with their timeouts and retry policies.

    Policies are built per call and never shared between calls.
    """

    def __init__(self, configuration: SDKConfiguration):
        self.configuration = configuration

    @staticmethod
    def names() -> List[str]:
        return list(OPERATIONS)

    def defaults(self, name: str) -> OperationDefaults:
        """
        Raises:
            ValueError: If the operation is unknown
        """
        operation = OPERATIONS.get(name)
        if not operation:
            raise ValueError(f"Unknown operation: {name}")
        return operation

    def policy(self, name: str, current_retry_count: int = 0) -> RetryPolicy:
        """
        Build the retry policy for one call of an operation.

        Args:
            name: Operation name
            current_retry_count: Caller-requested retry budget (chat token only);
                used when larger than the configured budget

        Returns:
            RetryPolicy for this call
        """
        operation = self.defaults(name)
        config = self.configuration

        if not operation.retries:
            return RetryPolicy(max_attempts=0, backoff_ms=config.wait_time_for(name))

        max_attempts = config.max_request_retries_on_failure
        retry_on_429 = operation.retry_on_429

        if name == "get_chat_token":
            max_attempts = max(current_retry_count, max_attempts)
            retry_on_429 = config.get_chat_token_retry_on_429

        return RetryPolicy(
            max_attempts=max_attempts,
            backoff_ms=config.wait_time_for(name),
            retry_on_429=retry_on_429,
            header_overwrites=NONCE_OVERWRITE if operation.refresh_nonce else frozenset(),
            should_retry=operation.should_retry,
        )

    def timeout_ms(self, name: str) -> int:
        self.defaults(name)
        return self.configuration.timeout_for(name)
