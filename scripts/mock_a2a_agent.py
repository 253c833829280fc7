#!/usr/bin/env python
"""
Minimal A2A echo agent for manual testing.

Run with:
    python scripts/mock_a2a_agent.py

Endpoints:
    GET  /.well-known/agent.json -> {"a2a": {"url": "<public url>/rpc"}}
    POST /rpc                    -> JSON-RPC 2.0, method "message/send"
"""

from __future__ import annotations

import logging
import os
import sys

from dotenv import load_dotenv

load_dotenv(override=True)
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from agentlink.a2a.server import EchoAgentServer

HOST = os.getenv("MOCK_AGENT_HOST", "0.0.0.0")
PORT = int(os.getenv("MOCK_AGENT_PORT", "5050"))
AGENT_NAME = os.getenv("MOCK_AGENT_NAME", "Mock Echo Agent")
REPLY_KIND = os.getenv("MOCK_AGENT_REPLY_KIND", "message")


def main() -> None:
    """Launch the mock agent server."""
    logging.basicConfig(level=os.getenv("LOG_LEVEL", "INFO"))
    public_url = os.getenv("MOCK_AGENT_PUBLIC_URL", f"http://localhost:{PORT}")
    server = EchoAgentServer(
        public_url,
        name=AGENT_NAME,
        reply_kind="task" if REPLY_KIND == "task" else "message",
        host=HOST,
        port=PORT,
    )
    server.serve()


if __name__ == "__main__":
    main()
