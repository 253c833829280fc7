"""Single request/response JSON-RPC 2.0 exchange over HTTP POST."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Dict, Mapping, Optional
from uuid import uuid4

import httpx
from pydantic import ValidationError

from .errors import A2AProtocolError, A2ATransportError
from .http_utils import get_http_client, request_timeout, run_abortable
from .models import JSONRPCRequest, JSONRPCResponse

logger = logging.getLogger(__name__)


def new_request_id() -> str:
    return str(uuid4())


def parse_rpc_response(payload: Any) -> JSONRPCResponse:
    """Validate a decoded body as a JSON-RPC response envelope."""

    if not isinstance(payload, dict):
        raise A2ATransportError("Invalid JSON-RPC response format: expected an object")
    try:
        response = JSONRPCResponse.model_validate(payload)
    except ValidationError as exc:
        raise A2ATransportError(f"Invalid JSON-RPC response format: {exc}") from exc
    if not response.has_payload:
        raise A2ATransportError(
            "Invalid JSON-RPC response format: response has neither result nor error"
        )
    return response


async def send_request(
    endpoint_url: str,
    method: str,
    params: Optional[Mapping[str, Any]] = None,
    *,
    http_client: Optional[httpx.AsyncClient] = None,
    timeout: Optional[float] = None,
    headers: Optional[Mapping[str, str]] = None,
    abort_signal: Optional[asyncio.Event] = None,
) -> Any:
    """POST a JSON-RPC request to ``endpoint_url`` and return its ``result``.

    Raises:
        A2ATransportError: network failure, timeout, non-success status,
            unparseable body, or an invalid response envelope.
        A2AProtocolError: the response carries an ``error`` object. This
            wins even when a ``result`` is present too.
        A2ARequestAborted: ``abort_signal`` fired before the reply arrived.
    """

    request = JSONRPCRequest(id=new_request_id(), method=method, params=dict(params or {}))
    request_headers: Dict[str, str] = {"Content-Type": "application/json"}
    if headers:
        request_headers.update(headers)

    logger.debug("A2A %s -> %s (id=%s)", method, endpoint_url, request.id)
    try:
        async with get_http_client(http_client, timeout=timeout) as client:
            response = await run_abortable(
                client.post(
                    endpoint_url,
                    content=request.model_dump_json(),
                    headers=request_headers,
                    timeout=request_timeout(timeout),
                ),
                abort_signal,
                description=method,
            )
    except httpx.TimeoutException as exc:
        raise A2ATransportError(
            f"Request to {endpoint_url} timed out"
            + (f" after {timeout}s" if timeout is not None else "")
        ) from exc
    except (httpx.HTTPError, httpx.InvalidURL) as exc:
        raise A2ATransportError(f"Request to {endpoint_url} failed: {exc}") from exc

    if not response.is_success:
        raise A2ATransportError(
            f"Request failed: {response.status_code} {response.reason_phrase}",
            status_code=response.status_code,
        )

    try:
        payload = response.json()
    except ValueError as exc:
        raise A2ATransportError(f"Failed to parse JSON response: {exc}") from exc

    rpc_response = parse_rpc_response(payload)
    if rpc_response.error is not None:
        error = rpc_response.error
        logger.info("A2A %s returned error %s: %s", method, error.code, error.message)
        raise A2AProtocolError(error.code, error.message, error.data)

    return rpc_response.result
