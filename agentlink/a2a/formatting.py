"""Render A2A replies as plain text for the LLM and the user."""

from __future__ import annotations

from typing import List, Optional, Union

from .models import FilePart, Message, Part, Task, TextPart


def _part_text(part: Part) -> str:
    if isinstance(part, TextPart):
        return part.text
    if isinstance(part, FilePart):
        name = part.file.name or "unknown"
        mime_type = part.file.mime_type or "unknown"
        return f"[file: {name} ({mime_type})]"
    return ""


def text_of(message: Optional[Message]) -> str:
    """Join the renderable parts of ``message`` with single spaces."""

    if message is None:
        return ""
    pieces = [_part_text(part) for part in message.parts]
    return " ".join(piece for piece in pieces if piece)


def _format_task(task: Task) -> str:
    bits: List[str] = [f"Task ID: {task.id}"]
    if task.context_id:
        bits.append(f"Context: {task.context_id}")
    bits.append(f"Status: {task.status.state.value}")

    if task.status.is_terminal:
        # status.message wins over the latest history entry
        message = task.status.message
        if message is None and task.history:
            message = task.history[-1]
        text = text_of(message)
        if text:
            bits.append(f"Message: {text}")

    if task.artifacts:
        names = [
            artifact.name if artifact.name is not None else artifact.artifact_id
            for artifact in task.artifacts
        ]
        bits.append(f"Artifacts ({len(task.artifacts)}): {', '.join(names)}")

    return ", ".join(bits)


def format_response(response: Union[Task, Message]) -> str:
    """Format a classified ``message/send`` reply."""

    if response.kind == "task":
        return _format_task(response)
    if response.kind == "message":
        return text_of(response)
    raise TypeError(f"Unsupported A2A response kind: {response.kind!r}")
