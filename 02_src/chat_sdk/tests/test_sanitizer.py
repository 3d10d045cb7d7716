"""
Unit tests for telemetry sanitization.
"""
import base64
import json

from chat_sdk.sanitizer import (
    MASK,
    auth_token_details,
    sanitize_payload,
    strip_request_headers,
)


def make_jwt(claims):
    payload = base64.urlsafe_b64encode(json.dumps(claims).encode()).decode().rstrip("=")
    return f"header.{payload}.signature"


class TestSanitizePayload:
    """Tests for payload sanitization."""

    def test_masks_sensitive_fields(self):
        payload = {
            "customContextData": {"email": {"value": "a@b.c", "isDisplayable": True}},
            "preChatResponse": {"Type": "InputSubmit", "name": "Jordan"},
            "latitude": 1.5,
            "longitude": 2.5,
            "locale": "en-us",
        }

        sanitized = sanitize_payload(payload)

        assert sanitized == {
            "customContextData": {"email": {"value": MASK, "isDisplayable": True}},
            "preChatResponse": {"Type": "InputSubmit", "name": MASK},
            "locale": "en-us",
        }

    def test_input_payload_untouched(self):
        payload = {"customContextData": {"email": {"value": "a@b.c"}}}

        sanitize_payload(payload)

        assert payload["customContextData"]["email"]["value"] == "a@b.c"

    def test_non_dict_payloads(self):
        assert sanitize_payload(None) is None
        assert sanitize_payload([1, 2]) == [1, 2]


def test_strip_request_headers():
    headers = {
        "AuthenticatedUserToken": "jwt",
        "authorization": "token",
        "AuthCodeNonce": "n",
        "Correlation-Id": "req-1",
    }

    assert strip_request_headers(headers) == {
        "AuthenticatedUserToken": MASK,
        "authorization": MASK,
        "AuthCodeNonce": MASK,
        "Correlation-Id": "req-1",
    }


class TestAuthTokenDetails:
    """Tests for JWT claim extraction."""

    def test_sub_and_exp(self):
        token = make_jwt({"sub": "user-1", "exp": 123, "email": "a@b.c"})

        assert auth_token_details(token) == {"sub": "user-1", "exp": 123}

    def test_lwi_contexts_sanitized(self):
        contexts = json.dumps({"plan": {"value": "gold"}})
        token = make_jwt({"sub": "user-1", "exp": 1, "lwicontexts": contexts})

        details = auth_token_details(token)

        assert details["lwiContexts"] == {"plan": {"value": MASK}}

    def test_undecodable_tokens(self):
        assert auth_token_details(None) is None
        assert auth_token_details("opaque") is None
        assert auth_token_details("a.!!!not-base64!!!.c") is None
