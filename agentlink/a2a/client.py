"""HTTP client for sending messages to a remote A2A agent."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Dict, Mapping, Optional, Union

import httpx
from pydantic import BaseModel, Field, TypeAdapter, ValidationError

from agentlink.config import get_settings

from .discovery import resolve_endpoint
from .errors import A2AResponseValidationError
from .models import Message, MessageSendParams, SendMessageResult, Task
from .transport import send_request

logger = logging.getLogger(__name__)

MESSAGE_SEND_METHOD = "message/send"

_RESULT_ADAPTER: TypeAdapter[Union[Task, Message]] = TypeAdapter(SendMessageResult)


def classify_result(result: Any) -> Union[Task, Message]:
    """Turn a raw ``message/send`` result into a ``Task`` or a ``Message``.

    Only ``kind == "task"`` and ``kind == "message"`` are accepted; anything
    else, including a matching kind with a malformed body, is rejected.
    """

    kind = result.get("kind") if isinstance(result, dict) else None
    if kind not in ("task", "message"):
        raise A2AResponseValidationError("Invalid response format: expected Task or Message")
    try:
        return _RESULT_ADAPTER.validate_python(result)
    except ValidationError as exc:
        raise A2AResponseValidationError(
            f"Invalid response format: malformed {kind}: {exc}"
        ) from exc


class A2AAuthentication(BaseModel):
    type: str
    credentials: Dict[str, Any] = Field(default_factory=dict)


class A2AClientConfig(BaseModel):
    """Where and how to reach a remote agent."""

    base_url: str
    authentication: Optional[A2AAuthentication] = None
    timeout: Optional[float] = None
    discovery_path: Optional[str] = None


class A2AClient:
    """Minimal async client for talking to an A2A-compatible agent server."""

    def __init__(
        self,
        config: A2AClientConfig,
        *,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        self.config = config
        self.timeout = config.timeout if config.timeout is not None else get_settings().timeout
        self.discovery_path = config.discovery_path or get_settings().discovery_path
        self._http_client = http_client

    @property
    def base_url(self) -> str:
        return self.config.base_url

    def _auth_headers(self) -> Dict[str, str]:
        auth = self.config.authentication
        if auth is None:
            return {}
        if auth.type.lower() == "bearer" and auth.credentials.get("token"):
            return {"Authorization": f"Bearer {auth.credentials['token']}"}
        logger.warning(
            "Unsupported A2A authentication type %r for %s; sending without credentials",
            auth.type,
            self.base_url,
        )
        return {}

    async def resolve_endpoint(self, *, abort_signal: Optional[asyncio.Event] = None) -> str:
        return await resolve_endpoint(
            self.base_url,
            http_client=self._http_client,
            timeout=self.timeout,
            discovery_path=self.discovery_path,
            abort_signal=abort_signal,
        )

    async def send_message(
        self,
        params: Union[MessageSendParams, Mapping[str, Any]],
        *,
        abort_signal: Optional[asyncio.Event] = None,
    ) -> Union[Task, Message]:
        """Send ``message/send`` to the remote agent and classify the reply.

        Transport, protocol and validation errors propagate unchanged.
        """

        if not isinstance(params, MessageSendParams):
            params = MessageSendParams.model_validate(params)
        wire_params = params.to_wire()

        endpoint = await self.resolve_endpoint(abort_signal=abort_signal)
        result = await send_request(
            endpoint,
            MESSAGE_SEND_METHOD,
            wire_params,
            http_client=self._http_client,
            timeout=self.timeout,
            headers=self._auth_headers(),
            abort_signal=abort_signal,
        )
        response = classify_result(result)
        logger.debug("A2A %s replied with a %s", self.base_url, response.kind)
        return response
