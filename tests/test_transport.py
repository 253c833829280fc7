"""Tests for the JSON-RPC transport."""

from __future__ import annotations

import asyncio
import json

import httpx
import pytest

from agentlink.a2a.errors import A2AProtocolError, A2ARequestAborted, A2ATransportError
from agentlink.a2a.transport import send_request

ENDPOINT = "http://agent.test/rpc"


def _reply(body=None, *, status_code=200, text=None):
    captured = []

    def handler(request: httpx.Request) -> httpx.Response:
        captured.append(request)
        if text is not None:
            return httpx.Response(status_code, text=text)
        return httpx.Response(status_code, json=body)

    return handler, captured


@pytest.mark.asyncio
async def test_send_posts_jsonrpc_envelope_and_returns_result(mock_http):
    handler, captured = _reply({"jsonrpc": "2.0", "id": "abc", "result": {"kind": "message"}})

    result = await send_request(
        ENDPOINT,
        "message/send",
        {"message": {"role": "user", "parts": []}},
        http_client=mock_http(handler),
    )

    assert result == {"kind": "message"}
    request = captured[0]
    assert request.method == "POST"
    assert str(request.url) == ENDPOINT
    assert request.headers["content-type"] == "application/json"
    body = json.loads(request.content)
    assert body["jsonrpc"] == "2.0"
    assert body["method"] == "message/send"
    assert body["params"] == {"message": {"role": "user", "parts": []}}
    assert isinstance(body["id"], str) and body["id"]


@pytest.mark.asyncio
async def test_each_request_gets_a_fresh_id(mock_http):
    handler, captured = _reply({"jsonrpc": "2.0", "id": 1, "result": None})
    client = mock_http(handler)

    await send_request(ENDPOINT, "message/send", {}, http_client=client)
    await send_request(ENDPOINT, "message/send", {}, http_client=client)

    ids = {json.loads(request.content)["id"] for request in captured}
    assert len(ids) == 2


@pytest.mark.asyncio
async def test_extra_headers_are_sent(mock_http):
    handler, captured = _reply({"jsonrpc": "2.0", "id": 1, "result": {}})

    await send_request(
        ENDPOINT,
        "message/send",
        {},
        http_client=mock_http(handler),
        headers={"Authorization": "Bearer secret"},
    )

    assert captured[0].headers["authorization"] == "Bearer secret"
    assert captured[0].headers["content-type"] == "application/json"


@pytest.mark.asyncio
async def test_timeout_is_applied_per_request(mock_http):
    handler, captured = _reply({"jsonrpc": "2.0", "id": 1, "result": {}})

    await send_request(ENDPOINT, "message/send", {}, http_client=mock_http(handler), timeout=7.5)

    assert captured[0].extensions["timeout"]["read"] == 7.5


@pytest.mark.asyncio
async def test_error_object_raises_protocol_error(mock_http):
    handler, _ = _reply(
        {
            "jsonrpc": "2.0",
            "id": 1,
            "error": {"code": -32601, "message": "Method not found", "data": {"method": "x"}},
        }
    )

    with pytest.raises(A2AProtocolError) as exc_info:
        await send_request(ENDPOINT, "message/send", {}, http_client=mock_http(handler))

    assert exc_info.value.code == -32601
    assert exc_info.value.message == "Method not found"
    assert exc_info.value.data == {"method": "x"}
    assert "A2A Error -32601: Method not found" in str(exc_info.value)


@pytest.mark.asyncio
async def test_error_wins_over_result(mock_http):
    handler, _ = _reply(
        {
            "jsonrpc": "2.0",
            "id": 1,
            "result": {"kind": "message", "role": "agent", "parts": []},
            "error": {"code": 500, "message": "boom"},
        }
    )

    with pytest.raises(A2AProtocolError) as exc_info:
        await send_request(ENDPOINT, "message/send", {}, http_client=mock_http(handler))
    assert exc_info.value.code == 500


@pytest.mark.asyncio
async def test_response_without_result_or_error_is_invalid(mock_http):
    handler, _ = _reply({"protocolVersion": "2.0", "id": 1})

    with pytest.raises(A2ATransportError, match="Invalid JSON-RPC response format"):
        await send_request(ENDPOINT, "message/send", {}, http_client=mock_http(handler))


@pytest.mark.asyncio
async def test_protocol_version_key_is_accepted(mock_http):
    handler, _ = _reply({"protocolVersion": "2.0", "id": 1, "result": {"ok": True}})

    result = await send_request(ENDPOINT, "message/send", {}, http_client=mock_http(handler))

    assert result == {"ok": True}


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "body",
    [
        {"jsonrpc": "1.0", "id": 1, "result": {}},
        {"id": 1, "result": {}},
        {"jsonrpc": "2.0", "result": {}},
        {"jsonrpc": "2.0", "id": 1, "error": "broken"},
        ["jsonrpc", "2.0"],
        "2.0",
    ],
)
async def test_malformed_envelopes_are_transport_errors(mock_http, body):
    handler, _ = _reply(body)

    with pytest.raises(A2ATransportError):
        await send_request(ENDPOINT, "message/send", {}, http_client=mock_http(handler))


@pytest.mark.asyncio
async def test_http_error_status_is_reported(mock_http):
    handler, _ = _reply(status_code=500, text="internal error")

    with pytest.raises(A2ATransportError) as exc_info:
        await send_request(ENDPOINT, "message/send", {}, http_client=mock_http(handler))

    assert exc_info.value.status_code == 500
    assert "Request failed: 500 Internal Server Error" in str(exc_info.value)


@pytest.mark.asyncio
async def test_unparseable_body_is_transport_error(mock_http):
    handler, _ = _reply(text="not json at all")

    with pytest.raises(A2ATransportError, match="Failed to parse JSON response"):
        await send_request(ENDPOINT, "message/send", {}, http_client=mock_http(handler))


@pytest.mark.asyncio
async def test_network_failure_is_transport_error(mock_http):
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(A2ATransportError, match="connection refused"):
        await send_request(ENDPOINT, "message/send", {}, http_client=mock_http(handler))


@pytest.mark.asyncio
async def test_timeout_is_transport_error(mock_http):
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("too slow", request=request)

    with pytest.raises(A2ATransportError, match="timed out after 2.0s"):
        await send_request(
            ENDPOINT, "message/send", {}, http_client=mock_http(handler), timeout=2.0
        )


@pytest.mark.asyncio
async def test_abort_signal_cancels_in_flight_request(mock_http):
    started = asyncio.Event()

    async def handler(request: httpx.Request) -> httpx.Response:
        started.set()
        await asyncio.sleep(30)
        return httpx.Response(200, json={"jsonrpc": "2.0", "id": 1, "result": {}})

    abort = asyncio.Event()

    async def abort_when_started():
        await started.wait()
        abort.set()

    trigger = asyncio.create_task(abort_when_started())
    with pytest.raises(A2ARequestAborted):
        await asyncio.wait_for(
            send_request(
                ENDPOINT,
                "message/send",
                {},
                http_client=mock_http(handler),
                abort_signal=abort,
            ),
            timeout=5,
        )
    await trigger
