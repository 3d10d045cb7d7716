"""
Telemetry sink for SDK operations.

Writes one structured record per started/succeeded/failed event to the
standard logger and, when log_dir is set, to a JSONL file.
"""
import json
import logging
from dataclasses import asdict, dataclass
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional


class LogLevel(str, Enum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARN = "WARN"
    ERROR = "ERROR"


_PY_LEVELS = {
    LogLevel.DEBUG: logging.DEBUG,
    LogLevel.INFO: logging.INFO,
    LogLevel.WARN: logging.WARNING,
    LogLevel.ERROR: logging.ERROR,
}


class TelemetryStage(str, Enum):
    STARTED = "started"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


def event_name(operation: str, stage: TelemetryStage) -> str:
    """Event name, e.g. "get_chat_token.succeeded"."""
    return f"{operation}.{stage.value}"


@dataclass
class TelemetryRecord:
    """Structured fields of one telemetry event. Payload and headers arrive sanitized."""

    request_id: Optional[str] = None
    elapsed_ms: Optional[int] = None
    path: Optional[str] = None
    method: Optional[str] = None
    status_code: Optional[int] = None
    error: Optional[str] = None
    sanitized_payload: Any = None
    sanitized_headers: Optional[Dict[str, str]] = None
    transaction_id: Optional[str] = None
    error_code: Optional[str] = None
    region: Optional[str] = None
    attempts: Optional[int] = None
    auth_token_details: Optional[Dict[str, Any]] = None

    def to_dict(self) -> Dict[str, Any]:
        return {k: v for k, v in asdict(self).items() if v is not None}


class TelemetryLogger:
    """
    Telemetry sink.

    Features:
    - Python logging for every event
    - JSONL file <log_dir>/sdk/telemetry.jsonl when log_dir is set
    """

    def __init__(self, log_dir: Optional[str] = None):
        """
        Args:
            log_dir: Directory for logs (optional)
        """
        self.log_dir = log_dir
        self.logger = logging.getLogger(__name__)

    def log(
        self,
        level: LogLevel,
        event: str,
        record: TelemetryRecord,
        description: str,
    ):
        """
        Emit one telemetry event.

        Args:
            level: Severity
            event: Event name
            record: Structured fields
            description: Human readable summary
        """
        self.logger.log(
            _PY_LEVELS[level],
            "%s: %s (request_id=%s, elapsed_ms=%s)",
            event,
            description,
            record.request_id,
            record.elapsed_ms,
        )

        if not self.log_dir:
            return

        log_path = Path(self.log_dir) / "sdk" / "telemetry.jsonl"
        log_path.parent.mkdir(parents=True, exist_ok=True)

        log_entry = {
            "timestamp": datetime.now().isoformat(),
            "level": level.value,
            "event": event,
            "description": description,
            **record.to_dict(),
        }

        with open(log_path, "a", encoding="utf-8") as f:
            f.write(json.dumps(log_entry, ensure_ascii=False, default=str) + "\n")
