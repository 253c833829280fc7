"""Tool that sends a message to a remote agent and reports its reply."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, Literal, Mapping, Optional, Union
from uuid import uuid4

import httpx
from pydantic import BaseModel, ConfigDict, Field

from agentlink.a2a.client import A2AClient, A2AClientConfig
from agentlink.a2a.errors import A2AError
from agentlink.a2a.formatting import format_response
from agentlink.a2a.http_utils import run_abortable
from agentlink.a2a.models import Message, MessageSendParams, TextPart
from agentlink.confirmation import (
    ConfirmationGate,
    ConfirmationRequest,
    ToolConfirmationOutcome,
    default_gate,
)

logger = logging.getLogger(__name__)

ConfirmationHandler = Callable[[ConfirmationRequest], Awaitable[ToolConfirmationOutcome]]
ClientFactory = Callable[[A2AClientConfig], A2AClient]

PARAMETER_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "properties": {
        "url": {
            "type": "string",
            "description": "The URL of the agent to send the message to.",
        },
        "message": {
            "type": "string",
            "description": "The message to send to the agent.",
        },
        "contextId": {
            "type": "string",
            "description": "Optional context ID to continue an existing conversation with the remote agent.",
        },
    },
    "required": ["url", "message"],
}


class ConfirmationRequiredError(A2AError):
    """Raised when a call needs approval but no one is there to give it."""

    def __init__(self, request: ConfirmationRequest):
        super().__init__(f"{request.title}: {request.prompt}")
        self.request = request


class ToolCallDeclinedError(A2AError):
    """Raised when the user declines an outbound A2A call."""


class A2AToolParams(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    url: str = Field(min_length=1)
    message: str
    context_id: Optional[str] = Field(default=None, alias="contextId")


@dataclass
class ToolResult:
    llm_content: str
    return_display: str

    def to_dict(self) -> Dict[str, str]:
        return {"llmContent": self.llm_content, "returnDisplay": self.return_display}


class A2ATool:
    """Send a message to another agent and return the formatted response.

    Calls to hosts that are not on the gate's allowlist are confirmed through
    ``confirmation_handler`` first; a ``cancel`` outcome aborts the call before
    any network traffic.
    """

    name = "a2a"
    display_name = "A2A"
    description = "Sends a message to another agent and returns the response."
    parameter_schema = PARAMETER_SCHEMA

    def __init__(
        self,
        gate: Optional[ConfirmationGate] = None,
        *,
        confirmation_handler: Optional[ConfirmationHandler] = None,
        client_factory: Optional[ClientFactory] = None,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        self.gate = gate if gate is not None else default_gate()
        self.confirmation_handler = confirmation_handler
        self._client_factory = client_factory
        self._http_client = http_client

    @staticmethod
    def validate_params(params: Union[A2AToolParams, Mapping[str, Any]]) -> A2AToolParams:
        if isinstance(params, A2AToolParams):
            return params
        return A2AToolParams.model_validate(params)

    def _create_client(self, config: A2AClientConfig) -> A2AClient:
        if self._client_factory is not None:
            return self._client_factory(config)
        return A2AClient(config, http_client=self._http_client)

    async def should_confirm_execute(
        self,
        params: Union[A2AToolParams, Mapping[str, Any]],
        abort_signal: Optional[asyncio.Event] = None,
    ) -> Union[ConfirmationRequest, Literal[False]]:
        """Return the confirmation details for this call, or ``False`` if pre-approved."""

        tool_params = self.validate_params(params)
        request = self.gate.check(tool_params.url, tool_params.message)
        return request if request is not None else False

    async def _confirm(
        self,
        params: A2AToolParams,
        abort_signal: Optional[asyncio.Event],
    ) -> None:
        request = await self.should_confirm_execute(params, abort_signal)
        if not request:
            return
        if self.confirmation_handler is None:
            raise ConfirmationRequiredError(request)

        outcome = await run_abortable(
            self.confirmation_handler(request),
            abort_signal,
            description="confirmation",
        )
        outcome = ToolConfirmationOutcome(outcome)
        await request.on_confirm(outcome)
        if outcome == ToolConfirmationOutcome.CANCEL:
            logger.info("User declined A2A call to %s", params.url)
            raise ToolCallDeclinedError(f"A2A call to {params.url} was declined by the user")

    @staticmethod
    def build_message(params: A2AToolParams) -> Message:
        return Message(
            message_id=str(uuid4()),
            role="user",
            parts=[TextPart(text=params.message)],
            context_id=params.context_id or None,
        )

    async def execute(
        self,
        params: Union[A2AToolParams, Mapping[str, Any]],
        *,
        abort_signal: Optional[asyncio.Event] = None,
    ) -> ToolResult:
        """Confirm (when needed), send, and format the remote agent's reply."""

        tool_params = self.validate_params(params)
        await self._confirm(tool_params, abort_signal)

        client = self._create_client(A2AClientConfig(base_url=tool_params.url))
        response = await client.send_message(
            MessageSendParams(message=self.build_message(tool_params)),
            abort_signal=abort_signal,
        )

        llm_content = format_response(response)
        logger.info("A2A call to %s returned a %s", tool_params.url, response.kind)
        return ToolResult(
            llm_content=llm_content,
            return_display=f"Received response: {llm_content}",
        )
