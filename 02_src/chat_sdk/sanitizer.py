"""
Strips sensitive values from request data before it reaches telemetry.
"""
import base64
import binascii
import copy
import json
from typing import Any, Dict, Mapping, Optional

from chat_gateway import headers as http_headers

MASK = "*"

SENSITIVE_HEADERS = frozenset(
    name.lower()
    for name in (
        http_headers.AUTHENTICATED_USER_TOKEN,
        http_headers.AUTHORIZATION,
        http_headers.AUTH_CODE_NONCE,
    )
)

GEOLOCATION_KEYS = ("latitude", "longitude")


def strip_request_headers(headers: Mapping[str, str]) -> Dict[str, str]:
    """Copy of headers with credentials masked."""
    return {
        name: MASK if name.lower() in SENSITIVE_HEADERS else value
        for name, value in headers.items()
    }


def strip_custom_context_data_values(custom_context: Dict[str, Any]) -> None:
    """Mask every custom context value in place, keeping the keys."""
    for key, item in custom_context.items():
        if isinstance(item, dict) and "value" in item:
            item["value"] = MASK
        else:
            custom_context[key] = MASK


def strip_pre_chat_response(pre_chat_response: Dict[str, Any]) -> None:
    """Mask pre-chat answers in place; the Type marker is kept."""
    for key in pre_chat_response:
        if key != "Type":
            pre_chat_response[key] = MASK


def strip_geolocation(payload: Dict[str, Any]) -> None:
    for key in GEOLOCATION_KEYS:
        payload.pop(key, None)


def sanitize_payload(payload: Any) -> Any:
    """
    Sanitized deep copy of a request payload.

    Args:
        payload: Request body (only dicts are inspected)

    Returns:
        Copy safe to log, or None if there was no payload
    """
    if payload is None:
        return None
    if not isinstance(payload, dict):
        return payload

    sanitized = copy.deepcopy(payload)
    if isinstance(sanitized.get("customContextData"), dict):
        strip_custom_context_data_values(sanitized["customContextData"])
    if isinstance(sanitized.get("preChatResponse"), dict):
        strip_pre_chat_response(sanitized["preChatResponse"])
    strip_geolocation(sanitized)
    return sanitized


def auth_token_details(token: Optional[str]) -> Optional[Dict[str, Any]]:
    """
    Non-sensitive claims of an authenticated user JWT.

    Returns:
        Dict with sub, exp and sanitized lwiContexts, or None if the token
        cannot be decoded
    """
    if not token:
        return None

    parts = token.split(".")
    if len(parts) < 2:
        return None

    payload = parts[1] + "=" * (-len(parts[1]) % 4)
    try:
        claims = json.loads(base64.urlsafe_b64decode(payload))
    except (binascii.Error, ValueError):
        return None
    if not isinstance(claims, dict):
        return None

    details: Dict[str, Any] = {"sub": claims.get("sub"), "exp": claims.get("exp")}

    lwi_contexts = claims.get("lwicontexts")
    if lwi_contexts:
        try:
            contexts = json.loads(lwi_contexts)
        except (TypeError, ValueError):
            contexts = None
        if isinstance(contexts, dict):
            strip_custom_context_data_values(contexts)
            details["lwiContexts"] = contexts

    return details
