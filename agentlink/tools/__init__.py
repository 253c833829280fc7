"""Tool-style entry points for sending A2A messages."""

from .a2a_tool import (
    PARAMETER_SCHEMA,
    A2ATool,
    A2AToolParams,
    ConfirmationRequiredError,
    ToolCallDeclinedError,
    ToolResult,
)

__all__ = [
    "PARAMETER_SCHEMA",
    "A2ATool",
    "A2AToolParams",
    "ConfirmationRequiredError",
    "ToolCallDeclinedError",
    "ToolResult",
]
