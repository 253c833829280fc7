"""Pydantic models for the A2A wire format and its JSON-RPC envelope."""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Any, Dict, List, Literal, Optional, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Discriminator, Field, Tag
from pydantic.alias_generators import to_camel


class A2AModel(BaseModel):
    """Base model using camelCase on the wire and snake_case in Python."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="allow",
    )

    def to_wire(self) -> Dict[str, Any]:
        """Serialise with wire aliases, leaving out unset optionals."""

        return self.model_dump(by_alias=True, exclude_none=True, mode="json")


# --- JSON-RPC envelope ---


class JSONRPCError(BaseModel):
    code: int
    message: str
    data: Any = None


class JSONRPCRequest(BaseModel):
    jsonrpc: Literal["2.0"] = "2.0"
    id: str
    method: str
    params: Dict[str, Any] = Field(default_factory=dict)


class JSONRPCResponse(BaseModel):
    """A JSON-RPC 2.0 response.

    The version key is accepted either as ``jsonrpc`` or ``protocolVersion``.
    Whether ``result`` or ``error`` was actually sent is tracked through
    ``model_fields_set`` since both may legitimately be ``null``.
    """

    jsonrpc: Literal["2.0"] = Field(
        validation_alias=AliasChoices("jsonrpc", "protocolVersion"),
    )
    id: Union[str, int, None]
    result: Any = None
    error: Optional[JSONRPCError] = None

    @property
    def has_payload(self) -> bool:
        return "result" in self.model_fields_set or "error" in self.model_fields_set


# --- Discovery ---


class AgentEndpoint(BaseModel):
    url: str = Field(min_length=1)


class AgentDescriptor(BaseModel):
    """The subset of ``/.well-known/agent.json`` used to locate the RPC endpoint."""

    a2a: AgentEndpoint


# --- A2A payloads ---


class TextPart(A2AModel):
    kind: Literal["text"] = "text"
    text: str
    metadata: Optional[Dict[str, Any]] = None


class FileContent(A2AModel):
    """File reference carried either inline (base64 ``bytes``) or by ``uri``."""

    name: Optional[str] = None
    mime_type: Optional[str] = None
    bytes: Optional[str] = None
    uri: Optional[str] = None


class FilePart(A2AModel):
    kind: Literal["file"] = "file"
    file: FileContent
    metadata: Optional[Dict[str, Any]] = None


class DataPart(A2AModel):
    kind: Literal["data"] = "data"
    data: Any = None
    metadata: Optional[Dict[str, Any]] = None


class UnknownPart(A2AModel):
    """Any part kind this client does not understand; kept, never rendered."""

    kind: Optional[str] = None


_KNOWN_PART_KINDS = frozenset({"text", "file", "data"})


def _part_kind(value: Any) -> str:
    if isinstance(value, dict):
        kind = value.get("kind")
    else:
        kind = getattr(value, "kind", None)
    return kind if kind in _KNOWN_PART_KINDS else "unknown"


Part = Annotated[
    Union[
        Annotated[TextPart, Tag("text")],
        Annotated[FilePart, Tag("file")],
        Annotated[DataPart, Tag("data")],
        Annotated[UnknownPart, Tag("unknown")],
    ],
    Discriminator(_part_kind),
]


class Message(A2AModel):
    role: Literal["user", "agent"]
    parts: List[Part]
    message_id: Optional[str] = None
    task_id: Optional[str] = None
    context_id: Optional[str] = None
    metadata: Optional[Dict[str, Any]] = None
    kind: Literal["message"] = "message"


class TaskState(str, Enum):
    SUBMITTED = "submitted"
    WORKING = "working"
    INPUT_REQUIRED = "input-required"
    AUTH_REQUIRED = "auth-required"
    COMPLETED = "completed"
    FAILED = "failed"
    CANCELED = "canceled"
    REJECTED = "rejected"
    UNKNOWN = "unknown"


TERMINAL_TASK_STATES = frozenset({TaskState.COMPLETED, TaskState.FAILED, TaskState.CANCELED})


class TaskStatus(A2AModel):
    state: TaskState
    message: Optional[Message] = None
    timestamp: Optional[str] = None

    @property
    def is_terminal(self) -> bool:
        return self.state in TERMINAL_TASK_STATES


class Artifact(A2AModel):
    artifact_id: str
    name: Optional[str] = None
    description: Optional[str] = None
    parts: List[Part] = Field(default_factory=list)
    metadata: Optional[Dict[str, Any]] = None


class Task(A2AModel):
    id: str
    context_id: Optional[str] = None
    status: TaskStatus
    artifacts: Optional[List[Artifact]] = None
    history: Optional[List[Message]] = None
    metadata: Optional[Dict[str, Any]] = None
    kind: Literal["task"] = "task"


# Reply to ``message/send``; the ``kind`` field selects the variant.
SendMessageResult = Annotated[Union[Task, Message], Field(discriminator="kind")]


class MessageSendParams(A2AModel):
    """Params for the ``message/send`` method."""

    message: Message
    metadata: Optional[Dict[str, Any]] = None


__all__ = [
    "A2AModel",
    "AgentDescriptor",
    "AgentEndpoint",
    "Artifact",
    "DataPart",
    "FileContent",
    "FilePart",
    "JSONRPCError",
    "JSONRPCRequest",
    "JSONRPCResponse",
    "Message",
    "MessageSendParams",
    "Part",
    "SendMessageResult",
    "TERMINAL_TASK_STATES",
    "Task",
    "TaskState",
    "TaskStatus",
    "TextPart",
    "UnknownPart",
]
