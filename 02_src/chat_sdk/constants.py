"""
Constants for the live-chat SDK.

Channel ids, live chat versions, default headers and supported locales.
"""
from enum import Enum, IntEnum
from typing import Dict, List


class ChannelId(str, Enum):
    """Supported channels."""

    LCW = "lcw"


class LiveChatVersion(IntEnum):
    """Live chat protocol versions."""

    V1 = 1
    V2 = 2


REQUIRED_OMNICHANNEL_PARAMETERS: List[str] = ["org_id", "org_url", "widget_id"]

DEFAULT_CHANNEL_ID = ChannelId.LCW.value
DEFAULT_LOCALE = "en-us"

DEFAULT_HEADERS: Dict[str, str] = {"Content-Type": "application/json"}

BYPASS_CACHE_HEADERS: Dict[str, str] = {
    "Cache-Control": "no-cache",
    "Pragma": "no-cache",
    "Expires": "0",
}

SDK_USER_AGENT = "ocsdk-python/0.5.17"

SUPPORTED_LOCALES = frozenset(
    [
        "ar-sa", "bg-bg", "ca-es", "cs-cz", "da-dk", "de-de", "el-gr",
        "en-us", "es-es", "et-ee", "eu-es", "fi-fi", "fr-fr", "gl-es",
        "he-il", "hi-in", "hr-hr", "hu-hu", "id-id", "it-it", "ja-jp",
        "kk-kz", "ko-kr", "lt-lt", "lv-lv", "ms-my", "nb-no", "nl-nl",
        "pl-pl", "pt-br", "pt-pt", "ro-ro", "ru-ru", "sk-sk", "sl-si",
        "sr-cyrl-cs", "sr-latn-cs", "sv-se", "th-th", "tr-tr", "uk-ua",
        "vi-vn", "zh-cn", "zh-hk", "zh-tw",
    ]
)


def validate_locale(locale: str) -> None:
    """
    Raises:
        ValueError: If the locale is not supported
    """
    if locale not in SUPPORTED_LOCALES:
        raise ValueError(f"Unsupported locale: '{locale}'")
