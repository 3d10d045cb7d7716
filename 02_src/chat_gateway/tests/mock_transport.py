"""
Scripted HTTP transport for testing.

Replays a queue of canned responses (or exceptions) through
httpx.MockTransport and records every request it receives.
"""
import json
from typing import Any, Callable, Dict, List, Optional, Union

import httpx

Step = Union[httpx.Response, Exception, Callable[[httpx.Request], httpx.Response]]


class ScriptedTransport:
    """
    Mock live-chat server.

    Each request consumes the next scripted step. When the script runs out,
    the last step is repeated.
    """

    def __init__(self, steps: Optional[List[Step]] = None):
        self.steps: List[Step] = list(steps or [])
        self.requests: List[httpx.Request] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if not self.steps:
            return httpx.Response(200, json={})

        index = min(len(self.requests) - 1, len(self.steps) - 1)
        step = self.steps[index]

        if isinstance(step, Exception):
            raise step
        if callable(step) and not isinstance(step, httpx.Response):
            return step(request)
        return step

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self.handler))

    @property
    def call_count(self) -> int:
        return len(self.requests)

    def request_json(self, index: int = -1) -> Any:
        """Decoded JSON body of a recorded request."""
        content = self.requests[index].content
        return json.loads(content) if content else None


def json_response(
    status_code: int = 200,
    body: Any = None,
    headers: Optional[Dict[str, str]] = None,
) -> httpx.Response:
    """Response with a JSON body (no body when body is None)."""
    if body is None:
        return httpx.Response(status_code, headers=headers)
    return httpx.Response(status_code, json=body, headers=headers)
