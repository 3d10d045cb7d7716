"""Global pytest configuration for the live-chat SDK."""
import sys
from pathlib import Path

import pytest

# Source packages live under 02_src; make them importable BEFORE any test imports
project_root = Path(__file__).parent
src_root = project_root / "02_src"
if str(src_root) not in sys.path:
    sys.path.insert(0, str(src_root))

SDK_ENV_VARS = (
    "OCSDK_MAX_REQUEST_RETRIES",
    "OCSDK_DEFAULT_REQUEST_TIMEOUT",
    "OCSDK_GET_CHAT_TOKEN_RETRY_ON_429",
    "OCSDK_USE_UNAUTH_RECONNECT_ID_SIG",
    "OCSDK_LOG_DIR",
)


@pytest.fixture
def clean_sdk_env(monkeypatch):
    """Remove OCSDK_* variables a local .env may have loaded."""
    for name in SDK_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch
