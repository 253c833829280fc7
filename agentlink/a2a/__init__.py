"""Client side of the A2A protocol: discovery, JSON-RPC transport and replies."""

from .client import A2AAuthentication, A2AClient, A2AClientConfig, classify_result
from .discovery import resolve_endpoint
from .errors import (
    A2ADiscoveryError,
    A2AError,
    A2AProtocolError,
    A2ARequestAborted,
    A2AResponseValidationError,
    A2ATransportError,
)
from .formatting import format_response, text_of
from .models import (
    Artifact,
    FilePart,
    Message,
    MessageSendParams,
    Task,
    TaskState,
    TaskStatus,
    TextPart,
)
from .transport import send_request

__all__ = [
    "A2AAuthentication",
    "A2AClient",
    "A2AClientConfig",
    "classify_result",
    "resolve_endpoint",
    "send_request",
    "format_response",
    "text_of",
    "A2AError",
    "A2ADiscoveryError",
    "A2ATransportError",
    "A2AProtocolError",
    "A2AResponseValidationError",
    "A2ARequestAborted",
    "Artifact",
    "FilePart",
    "Message",
    "MessageSendParams",
    "Task",
    "TaskState",
    "TaskStatus",
    "TextPart",
]
