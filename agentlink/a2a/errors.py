"""Exceptions raised while talking to a remote A2A agent."""

from __future__ import annotations

from typing import Any, Optional


class A2AError(RuntimeError):
    """Base class for A2A client failures."""


class A2ADiscoveryError(A2AError):
    """Raised internally when the agent descriptor cannot be resolved."""


class A2ATransportError(A2AError):
    """Raised when the HTTP exchange or the JSON-RPC envelope is unusable."""

    def __init__(self, message: str, *, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class A2AProtocolError(A2AError):
    """Raised when the remote agent answers with a JSON-RPC error object."""

    def __init__(self, code: int, message: str, data: Any = None):
        super().__init__(f"A2A Error {code}: {message}")
        self.code = code
        self.message = message
        self.data = data


class A2AResponseValidationError(A2AError):
    """Raised when a successful result is neither a Task nor a Message."""


class A2ARequestAborted(A2AError):
    """Raised when the caller's abort signal fires during a network call."""


__all__ = [
    "A2AError",
    "A2ADiscoveryError",
    "A2ATransportError",
    "A2AProtocolError",
    "A2AResponseValidationError",
    "A2ARequestAborted",
]
