"""A2A messaging exposed as a strands tool for LLM agents."""

import logging
from typing import Any, Dict, Optional

from strands import tool

from agentlink.a2a.errors import A2AError
from agentlink.tools.a2a_tool import A2ATool, A2AToolParams, ConfirmationHandler

logger = logging.getLogger(__name__)

_confirmation_handler: Optional[ConfirmationHandler] = None


def set_confirmation_handler(handler: Optional[ConfirmationHandler]) -> None:
    """Set the global confirmation handler used by ``send_a2a_message``.

    Args:
        handler: Coroutine function receiving a ``ConfirmationRequest`` and
            returning a ``ToolConfirmationOutcome``. ``None`` means calls to
            hosts outside the allowlist are refused.
    """
    global _confirmation_handler
    _confirmation_handler = handler


@tool
async def send_a2a_message(
    url: str,
    message: str,
    context_id: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Send a message to another agent over A2A and return its response.

    Args:
        url: The URL of the agent to send the message to
        message: The message to send to the agent
        context_id: Optional context ID to continue an existing conversation
            with the remote agent

    Returns:
        Dict containing:
        - success: Whether the remote agent answered
        - llm_content: Formatted reply (task summary or message text)
        - return_display: Human-facing summary of the reply
        - error: Failure description when success is False
    """
    a2a_tool = A2ATool(confirmation_handler=_confirmation_handler)
    try:
        params = A2AToolParams(url=url, message=message, context_id=context_id)
        result = await a2a_tool.execute(params)
    except A2AError as exc:
        logger.warning("A2A call to %s failed: %s", url, exc)
        return {"success": False, "url": url, "error": str(exc)}
    except Exception as exc:  # noqa: BLE001
        logger.error("Unexpected error sending A2A message to %s: %s", url, exc, exc_info=True)
        return {"success": False, "url": url, "error": str(exc)}

    return {
        "success": True,
        "url": url,
        "llm_content": result.llm_content,
        "return_display": result.return_display,
    }
