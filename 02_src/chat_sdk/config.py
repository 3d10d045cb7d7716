"""
Configuration for the live-chat SDK.

Builds fully-populated configuration objects by merging caller overrides
over static defaults. Unknown keys are rejected at construction time.
Loads environment variables for standalone usage.
"""
import logging
import os
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

from dotenv import load_dotenv

from .constants import REQUIRED_OMNICHANNEL_PARAMETERS, ChannelId

load_dotenv()

DEFAULT_REQUEST_TIMEOUT_CONFIG: Dict[str, int] = {
    "get_lcw_fcs_details": 120000,
    "get_chat_config": 120000,
    "get_lwi_details": 15000,
    "get_chat_token": 15000,
    "get_reconnectable_chats": 15000,
    "get_reconnect_availability": 15000,
    "get_agent_availability": 15000,
    "session_init": 15000,
    "create_conversation": 15000,
    "session_close": 15000,
    "validate_auth_chat_record": 15000,
    "submit_post_chat_response": 15000,
    "get_survey_invite_link": 15000,
    "get_chat_transcripts": 30000,
    "email_transcript": 5000,
    "fetch_data_masking_info": 5000,
    "make_secondary_channel_event_request": 15000,
    "send_typing_indicator": 5000,
}

DEFAULT_WAIT_TIME_BETWEEN_RETRIES_CONFIG: Dict[str, int] = {
    name: 1000 for name in DEFAULT_REQUEST_TIMEOUT_CONFIG
}

_NUMERIC_FIELDS = (
    "get_chat_token_retry_count",
    "get_chat_token_time_between_retries_on_failure",
    "max_request_retries_on_failure",
    "default_request_timeout",
)


@dataclass
class SDKConfiguration:
    """SDK behaviour configuration. All times are in milliseconds."""

    auth_code_nonce: Optional[str] = None  # seed nonce; generated when None
    # Accepted for compatibility; the chat token budget comes from
    # max_request_retries_on_failure and wait_time_between_retries_config
    get_chat_token_retry_count: int = 10
    get_chat_token_time_between_retries_on_failure: int = 10000
    get_chat_token_retry_on_429: bool = True
    max_request_retries_on_failure: int = 5
    default_request_timeout: Optional[int] = None  # overrides every operation
    request_timeout_config: Dict[str, int] = field(
        default_factory=lambda: dict(DEFAULT_REQUEST_TIMEOUT_CONFIG)
    )
    use_unauth_reconnect_id_sig_query_param: bool = False
    wait_time_between_retries_config: Dict[str, int] = field(
        default_factory=lambda: dict(DEFAULT_WAIT_TIME_BETWEEN_RETRIES_CONFIG)
    )
    oc_user_agent: List[str] = field(default_factory=list)
    log_dir: Optional[str] = None

    def __post_init__(self):
        # Partial tables are completed from the defaults
        self.request_timeout_config = _merge_table(
            "request_timeout_config",
            DEFAULT_REQUEST_TIMEOUT_CONFIG,
            self.request_timeout_config,
        )
        self.wait_time_between_retries_config = _merge_table(
            "wait_time_between_retries_config",
            DEFAULT_WAIT_TIME_BETWEEN_RETRIES_CONFIG,
            self.wait_time_between_retries_config,
        )

        for name in _NUMERIC_FIELDS:
            value = getattr(self, name)
            if value is not None and value < 0:
                raise ValueError(f"{name} must be >= 0, got {value}")
        for table in ("request_timeout_config", "wait_time_between_retries_config"):
            for operation, value in getattr(self, table).items():
                if value < 0:
                    raise ValueError(f"{table}['{operation}'] must be >= 0, got {value}")

    @classmethod
    def from_dict(cls, overrides: Optional[Mapping[str, Any]] = None) -> "SDKConfiguration":
        """
        Merge overrides over defaults.

        Args:
            overrides: Partial configuration; empty or None means defaults

        Returns:
            Fully-populated SDKConfiguration

        Raises:
            ValueError: On unknown keys or negative counts and times

        Examples:
            >>> config = SDKConfiguration.from_dict({"max_request_retries_on_failure": 2})
            >>> config.request_timeout_config["get_chat_config"]
            120000
        """
        overrides = dict(overrides or {})
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(overrides) - known)
        if unknown:
            raise ValueError(f"Unknown SDK configuration keys: {', '.join(unknown)}")
        return cls(**overrides)

    def timeout_for(self, operation: str) -> int:
        """Request timeout for an operation, honouring default_request_timeout."""
        if self.default_request_timeout is not None:
            return self.default_request_timeout
        return self.request_timeout_config[operation]

    def wait_time_for(self, operation: str) -> int:
        return self.wait_time_between_retries_config[operation]


@dataclass
class OmnichannelConfiguration:
    """Identifies the org and widget the SDK talks to."""

    org_id: str
    org_url: str
    widget_id: str
    channel_id: str = ChannelId.LCW.value

    def __post_init__(self):
        if self.channel_id not in {c.value for c in ChannelId}:
            raise ValueError("Invalid channelId")
        self.org_url = self.org_url.rstrip("/")

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "OmnichannelConfiguration":
        """
        Raises:
            ValueError: If a required key is missing or channel id is invalid
        """
        for key in REQUIRED_OMNICHANNEL_PARAMETERS:
            if key not in data:
                raise ValueError(f"Missing '{key}' in OmnichannelConfiguration")
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in data.items() if k in known})


def _merge_table(
    name: str, defaults: Dict[str, int], overrides: Optional[Mapping[str, int]]
) -> Dict[str, int]:
    overrides = overrides or {}
    unknown = sorted(set(overrides) - set(defaults))
    if unknown:
        raise ValueError(f"Unknown operations in {name}: {', '.join(unknown)}")
    merged = dict(defaults)
    merged.update(overrides)
    return merged


def load_configuration_from_env() -> SDKConfiguration:
    """
    Get SDK configuration from environment variables.

    Recognised variables:
        - OCSDK_MAX_REQUEST_RETRIES: retries per operation (default: 5)
        - OCSDK_DEFAULT_REQUEST_TIMEOUT: timeout in ms for every operation
        - OCSDK_GET_CHAT_TOKEN_RETRY_ON_429: "true"/"false" (default: true)
        - OCSDK_USE_UNAUTH_RECONNECT_ID_SIG: "true"/"false" (default: false)
        - OCSDK_LOG_DIR: directory for JSONL logs

    Raises:
        ValueError: If a numeric variable cannot be parsed
    """
    overrides: Dict[str, Any] = {}

    max_retries = os.getenv("OCSDK_MAX_REQUEST_RETRIES")
    if max_retries:
        overrides["max_request_retries_on_failure"] = int(max_retries)

    default_timeout = os.getenv("OCSDK_DEFAULT_REQUEST_TIMEOUT")
    if default_timeout:
        overrides["default_request_timeout"] = int(default_timeout)

    retry_on_429 = os.getenv("OCSDK_GET_CHAT_TOKEN_RETRY_ON_429")
    if retry_on_429:
        overrides["get_chat_token_retry_on_429"] = _as_bool(retry_on_429)

    use_sig = os.getenv("OCSDK_USE_UNAUTH_RECONNECT_ID_SIG")
    if use_sig:
        overrides["use_unauth_reconnect_id_sig_query_param"] = _as_bool(use_sig)

    log_dir = os.getenv("OCSDK_LOG_DIR")
    if log_dir:
        overrides["log_dir"] = log_dir

    return SDKConfiguration.from_dict(overrides)


def _as_bool(value: str) -> bool:
    return value.strip().lower() in {"1", "true", "yes", "on"}


def setup_logging(log_file: Optional[str] = None, level: int = logging.INFO) -> None:
    """
    Setup file logging for the SDK loggers (optional, for standalone usage).

    Configures a FileHandler for the chat_gateway and chat_sdk loggers.
    For production use, prefer configuring logging at application level.

    Args:
        log_file: Path to log file (e.g., 'logs/ocsdk.log').
                  If None, only propagation to the root logger is configured.
        level: Logging level (default: INFO)
    """
    for name in ("chat_gateway", "chat_sdk"):
        logger = logging.getLogger(name)

        # Avoid adding duplicate handlers
        if logger.handlers:
            continue

        logger.setLevel(level)

        if log_file:
            log_path = Path(log_file)
            log_path.parent.mkdir(parents=True, exist_ok=True)

            handler = logging.FileHandler(log_file, encoding="utf-8")
            handler.setLevel(level)
            formatter = logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
            handler.setFormatter(formatter)
            logger.addHandler(handler)

        logger.propagate = True
