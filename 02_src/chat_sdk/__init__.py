"""
Live-chat SDK module.

Provides the LiveChatSDK client with its configuration, operation catalog
and telemetry.
"""
from .config import (
    OmnichannelConfiguration,
    SDKConfiguration,
    load_configuration_from_env,
    setup_logging,
)
from .constants import ChannelId, LiveChatVersion
from .operations import OperationCatalog, OperationDefaults
from .sdk import LiveChatSDK
from .telemetry import LogLevel, TelemetryLogger, TelemetryRecord, TelemetryStage

__all__ = [
    "OmnichannelConfiguration",
    "SDKConfiguration",
    "load_configuration_from_env",
    "setup_logging",
    "ChannelId",
    "LiveChatVersion",
    "OperationCatalog",
    "OperationDefaults",
    "LiveChatSDK",
    "LogLevel",
    "TelemetryLogger",
    "TelemetryRecord",
    "TelemetryStage",
]
