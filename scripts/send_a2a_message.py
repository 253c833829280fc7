#!/usr/bin/env python
"""
Send a single message to a remote A2A agent from the command line.

Run with:
    python scripts/send_a2a_message.py http://localhost:5050 "Hello, agent!"
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import os
import sys

from dotenv import load_dotenv

load_dotenv(override=True)
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from agentlink.a2a.errors import A2AError
from agentlink.config import get_settings
from agentlink.confirmation import ConfirmationRequest, ToolConfirmationOutcome
from agentlink.tools import A2ATool, A2AToolParams

ANSWERS = {
    "y": ToolConfirmationOutcome.PROCEED_ONCE,
    "a": ToolConfirmationOutcome.PROCEED_ALWAYS,
    "n": ToolConfirmationOutcome.CANCEL,
}


async def prompt_user(request: ConfirmationRequest) -> ToolConfirmationOutcome:
    """Ask on stdin whether the call may proceed."""
    print(f"{request.title}\n  {request.prompt}")
    answer = await asyncio.to_thread(input, "Proceed? [y]es / [a]lways / [n]o: ")
    return ANSWERS.get(answer.strip().lower()[:1], ToolConfirmationOutcome.CANCEL)


async def run(args: argparse.Namespace) -> int:
    tool = A2ATool(confirmation_handler=prompt_user)
    params = A2AToolParams(url=args.url, message=args.message, context_id=args.context_id)
    try:
        result = await tool.execute(params)
    except A2AError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    print(result.return_display)
    return 0


def main() -> None:
    parser = argparse.ArgumentParser(description="Send a message to a remote A2A agent")
    parser.add_argument("url", help="Base URL of the remote agent")
    parser.add_argument("message", help="Message text to send")
    parser.add_argument("--context-id", dest="context_id", default=None,
                        help="Continue an existing conversation with the remote agent")
    args = parser.parse_args()

    logging.basicConfig(level=get_settings().log_level)
    sys.exit(asyncio.run(run(args)))


if __name__ == "__main__":
    main()
