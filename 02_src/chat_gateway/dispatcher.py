"""
Request Dispatcher for the live-chat gateway.

Runs one logical operation as an explicit attempt loop:
snapshot session state -> send -> commit response state -> classify ->
ask the retry policy -> refresh headers -> next attempt.
"""
import asyncio
import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, FrozenSet, Optional, Union

import httpx

from .models import (
    HTTP_TIMEOUT_MESSAGE,
    AttemptContext,
    Failure,
    FailureKind,
    OperationSpec,
    Result,
)
from .retry_policy import RetryDecision, classify_status, evaluate, normalize_headers
from .session_state import SessionStateStore

NO_CONTENT_STATUS = 204
NOT_FOUND_STATUS = 404


class RequestDispatcher:
    """
    Executes OperationSpecs against the transport with retry.

    The dispatcher owns no session state of its own; it reads from and
    writes to the shared SessionStateStore on every attempt.
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        state: SessionStateStore,
        log_dir: Optional[str] = None,
    ):
        """
        Args:
            client: Async HTTP transport
            state: Session state shared by all calls of one SDK instance
            log_dir: Directory for retry logs (optional)
        """
        self._client = client
        self.state = state
        self.log_dir = log_dir
        self.logger = logging.getLogger(__name__)

    async def execute(self, spec: OperationSpec) -> Result:
        """
        Run the operation until it succeeds or the policy stops it.

        On error:
        1. Classify the failure
        2. Ask the retry policy
        3. Wait the fixed delay
        4. Refresh overwritten headers from session state
        5. Retry

        Args:
            spec: Operation to execute

        Returns:
            Result with the response body, a not-found marker or a failure
        """
        context = AttemptContext()
        request_headers = self._build_headers(spec)

        while True:
            outcome = await self._attempt(spec, request_headers)

            if isinstance(outcome, Result):
                outcome.attempts = context.attempts_dispatched
                return outcome

            context.last_failure = outcome
            decision = evaluate(context, outcome, spec.policy)

            if not decision.retry:
                return self._resolve_failure(spec, outcome, context)

            self._log_retry(spec, context, outcome, decision)
            await asyncio.sleep(decision.delay_ms / 1000)

            # Re-read after the wait: another call may have rotated the nonce
            request_headers = self._refresh_headers(
                spec, request_headers, decision.headers_to_refresh
            )
            context.attempt_number += 1

    async def _attempt(
        self, spec: OperationSpec, headers: Dict[str, str]
    ) -> Union[Result, Failure]:
        """
        Send one physical request.

        Returns:
            Result for terminal outcomes, Failure for outcomes the retry
            policy has to judge
        """
        timeout: Any = httpx.USE_CLIENT_DEFAULT
        deadline: Optional[float] = None
        if spec.timeout_ms is not None:
            timeout = deadline = spec.timeout_ms / 1000

        try:
            # httpx limits each phase separately; wait_for bounds the whole request
            response = await asyncio.wait_for(
                self._client.request(
                    spec.method,
                    spec.url,
                    headers=headers,
                    params=spec.params,
                    json=spec.json,
                    timeout=timeout,
                ),
                timeout=deadline,
            )
        except (httpx.TimeoutException, asyncio.TimeoutError) as e:
            return Failure(FailureKind.TIMEOUT, HTTP_TIMEOUT_MESSAGE, cause=e)
        except httpx.RequestError as e:
            return Failure(
                FailureKind.NETWORK_ERROR, str(e) or type(e).__name__, cause=e
            )

        # Commit before deciding anything so a retry sees the fresh nonce
        self.state.commit_from_headers(response.headers)

        return self._classify_response(spec, response)

    def _classify_response(
        self, spec: OperationSpec, response: httpx.Response
    ) -> Union[Result, Failure]:
        status = response.status_code
        response_headers = dict(response.headers)
        body = self._parse_body(response)

        if not response.is_success:
            return Failure(
                classify_status(status, spec.policy.retry_on_429),
                f"Request failed with status code {status}",
                status_code=status,
                body=body,
                headers=response_headers,
            )

        if status == NO_CONTENT_STATUS and spec.reconnect:
            return Result(not_found=True, status_code=status, headers=response_headers)

        if spec.require_body and _is_empty(body):
            # Contract violation, not a transient fault: never retried
            return Result(
                failure=Failure(
                    FailureKind.EMPTY_RESPONSE,
                    f"Empty data received from {spec.name}",
                    status_code=status,
                    headers=response_headers,
                ),
                status_code=status,
                headers=response_headers,
            )

        return Result(value=body, status_code=status, headers=response_headers)

    def _resolve_failure(
        self, spec: OperationSpec, failure: Failure, context: AttemptContext
    ) -> Result:
        if failure.status_code == NOT_FOUND_STATUS and spec.not_found_as_empty:
            return Result(
                value={},
                status_code=failure.status_code,
                headers=failure.headers,
                attempts=context.attempts_dispatched,
            )

        self.logger.warning(
            "%s failed after %d attempt(s): %s",
            spec.name,
            context.attempts_dispatched,
            failure.message,
        )
        return Result(
            failure=failure,
            status_code=failure.status_code,
            headers=failure.headers,
            attempts=context.attempts_dispatched,
        )

    def _build_headers(self, spec: OperationSpec) -> Dict[str, str]:
        headers = dict(spec.headers)
        snapshot = self.state.read_snapshot()
        headers.update(snapshot.to_headers(include_nonce=spec.authenticated))
        return headers

    def _refresh_headers(
        self,
        spec: OperationSpec,
        headers: Dict[str, str],
        names: FrozenSet[str],
    ) -> Dict[str, str]:
        """
        Overwrite the listed headers with current session state values.

        Headers not listed keep the value sent on the previous attempt.
        """
        wanted = normalize_headers(names)
        fresh = self.state.read_snapshot().to_headers(include_nonce=spec.authenticated)

        refreshed = dict(headers)
        for name, value in fresh.items():
            if name.lower() in wanted:
                refreshed[name] = value
        return refreshed

    @staticmethod
    def _parse_body(response: httpx.Response) -> Any:
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError:
            return response.text

    def _log_retry(
        self,
        spec: OperationSpec,
        context: AttemptContext,
        failure: Failure,
        decision: RetryDecision,
    ):
        """
        Log retry attempt.

        Args:
            spec: Operation being retried
            context: Attempt context of the failed attempt
            failure: Failure that caused the retry
            decision: Retry verdict
        """
        self.logger.debug(
            "Retrying %s (attempt %d) in %d ms: %s",
            spec.name,
            context.attempt_number + 1,
            decision.delay_ms,
            failure.message,
        )

        if not self.log_dir:
            return

        log_path = Path(self.log_dir) / "gateway" / "retries.jsonl"
        log_path.parent.mkdir(parents=True, exist_ok=True)

        log_entry = {
            "timestamp": datetime.now().isoformat(),
            "operation": spec.name,
            "request_id": spec.request_id,
            "attempt": context.attempt_number,
            "error": failure.message,
            "error_type": failure.kind.value,
            "status_code": failure.status_code,
            "delay_ms": decision.delay_ms,
            "status": "retry",
        }

        with open(log_path, "a", encoding="utf-8") as f:
            f.write(json.dumps(log_entry, ensure_ascii=False) + "\n")


def _is_empty(body: Any) -> bool:
    if body is None or body == "":
        return True
    if isinstance(body, (dict, list)) and len(body) == 0:
        return True
    return False
