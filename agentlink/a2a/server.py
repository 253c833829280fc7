"""FastAPI echo agent speaking the A2A JSON-RPC surface.

Handy for manual testing of the client: it publishes ``/.well-known/agent.json``
pointing at its ``/rpc`` endpoint and answers ``message/send`` by echoing the
incoming text back, either as a direct Message or as a completed Task.
"""

from __future__ import annotations

import inspect
import json
import logging
from typing import Any, Awaitable, Callable, Dict, Literal, Optional, Union
from uuid import uuid4

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.routing import APIRouter
from pydantic import ValidationError
import uvicorn

from .formatting import text_of
from .models import Message, MessageSendParams, Task, TaskState, TaskStatus, TextPart

logger = logging.getLogger(__name__)

Responder = Callable[[MessageSendParams], Union[Task, Message, Awaitable[Union[Task, Message]]]]

PARSE_ERROR = -32700
INVALID_REQUEST = -32600
METHOD_NOT_FOUND = -32601
INVALID_PARAMS = -32602
INTERNAL_ERROR = -32603


def _rpc_error(request_id: Any, code: int, message: str) -> JSONResponse:
    return JSONResponse(
        {"jsonrpc": "2.0", "id": request_id, "error": {"code": code, "message": message}}
    )


class EchoAgentServer:
    """Expose a toy agent over HTTP with the A2A discovery and RPC endpoints."""

    def __init__(
        self,
        public_url: str,
        *,
        name: str = "Echo Agent",
        reply_kind: Literal["message", "task"] = "message",
        responder: Optional[Responder] = None,
        host: str = "0.0.0.0",
        port: int = 9000,
    ):
        self.public_url = public_url.rstrip("/")
        self.name = name
        self.reply_kind = reply_kind
        self.responder = responder or self._echo
        self.host = host
        self.port = port
        self._app: Optional[FastAPI] = None

    @property
    def rpc_url(self) -> str:
        return f"{self.public_url}/rpc"

    def agent_descriptor(self) -> Dict[str, Any]:
        return {"name": self.name, "a2a": {"url": self.rpc_url}}

    def _echo(self, params: MessageSendParams) -> Union[Task, Message]:
        incoming = params.message
        reply = Message(
            role="agent",
            parts=[TextPart(text=f"echo: {text_of(incoming)}")],
            message_id=uuid4().hex,
            context_id=incoming.context_id,
        )
        if self.reply_kind == "message":
            return reply
        return Task(
            id=uuid4().hex,
            context_id=incoming.context_id or uuid4().hex,
            status=TaskStatus(state=TaskState.COMPLETED),
            history=[incoming, reply],
        )

    async def _dispatch(self, payload: Any) -> JSONResponse:
        if not isinstance(payload, dict) or payload.get("jsonrpc") != "2.0":
            return _rpc_error(None, INVALID_REQUEST, "Invalid Request")

        request_id = payload.get("id")
        method = payload.get("method")
        if method != "message/send":
            return _rpc_error(request_id, METHOD_NOT_FOUND, f"Method not found: {method}")

        try:
            params = MessageSendParams.model_validate(payload.get("params") or {})
        except ValidationError as exc:
            return _rpc_error(request_id, INVALID_PARAMS, f"Invalid params: {exc.error_count()} error(s)")

        try:
            result = self.responder(params)
            if inspect.isawaitable(result):
                result = await result
        except Exception as exc:  # noqa: BLE001
            logger.exception("Echo agent %s failed to answer", self.name)
            return _rpc_error(request_id, INTERNAL_ERROR, str(exc))

        return JSONResponse({"jsonrpc": "2.0", "id": request_id, "result": result.to_wire()})

    def _build_router(self) -> APIRouter:
        router = APIRouter()

        @router.get("/.well-known/agent.json")
        async def get_agent_descriptor() -> Dict[str, Any]:
            return self.agent_descriptor()

        @router.post("/rpc")
        async def rpc(request: Request) -> JSONResponse:
            try:
                payload = json.loads(await request.body())
            except ValueError:
                return _rpc_error(None, PARSE_ERROR, "Parse error")
            return await self._dispatch(payload)

        return router

    def to_fastapi_app(self) -> FastAPI:
        """Build (or memoise) the FastAPI application."""

        if self._app is None:
            app = FastAPI(title=self.name, description="A2A echo agent")
            app.include_router(self._build_router())
            self._app = app
        return self._app

    def serve(self) -> None:
        """Start a uvicorn server hosting the FastAPI application."""

        uvicorn.run(self.to_fastapi_app(), host=self.host, port=self.port, log_level="info")
