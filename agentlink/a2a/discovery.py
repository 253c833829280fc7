"""Best-effort resolution of an agent's JSON-RPC endpoint.

An agent may advertise its real RPC endpoint in ``/.well-known/agent.json``.
When that document is missing or unusable the base URL itself is used.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Optional

import httpx
from pydantic import ValidationError

from agentlink.config import DEFAULT_DISCOVERY_PATH

from .errors import A2ADiscoveryError
from .http_utils import get_http_client, request_timeout, run_abortable
from .models import AgentDescriptor

logger = logging.getLogger(__name__)


def descriptor_url(base_url: str, discovery_path: str = DEFAULT_DISCOVERY_PATH) -> str:
    return f"{base_url.rstrip('/')}/{discovery_path.lstrip('/')}"


async def fetch_agent_descriptor(
    base_url: str,
    *,
    http_client: Optional[httpx.AsyncClient] = None,
    timeout: Optional[float] = None,
    discovery_path: str = DEFAULT_DISCOVERY_PATH,
    abort_signal: Optional[asyncio.Event] = None,
) -> AgentDescriptor:
    """Fetch and validate the agent descriptor.

    Raises:
        A2ADiscoveryError: on network errors, non-success status, a body
            that is not JSON, or a body that lacks a non-empty ``a2a.url``.
        A2ARequestAborted: when ``abort_signal`` fires mid-request.
    """

    url = descriptor_url(base_url, discovery_path)
    try:
        async with get_http_client(http_client, timeout=timeout) as client:
            response = await run_abortable(
                client.get(url, timeout=request_timeout(timeout)),
                abort_signal,
                description="discovery",
            )
    except (httpx.HTTPError, httpx.InvalidURL) as exc:
        raise A2ADiscoveryError(f"A2A endpoint discovery failed: {exc}") from exc

    if not response.is_success:
        raise A2ADiscoveryError(
            f"A2A endpoint discovery failed: {response.status_code} {response.reason_phrase}"
        )

    try:
        payload = response.json()
    except ValueError as exc:
        raise A2ADiscoveryError(f"Failed to parse agent.json response: {exc}") from exc

    try:
        return AgentDescriptor.model_validate(payload)
    except ValidationError as exc:
        raise A2ADiscoveryError("agent.json did not match expected schema") from exc


async def resolve_endpoint(
    base_url: str,
    *,
    http_client: Optional[httpx.AsyncClient] = None,
    timeout: Optional[float] = None,
    discovery_path: str = DEFAULT_DISCOVERY_PATH,
    abort_signal: Optional[asyncio.Event] = None,
) -> str:
    """Return the advertised RPC endpoint for ``base_url``, or ``base_url`` itself."""

    try:
        descriptor = await fetch_agent_descriptor(
            base_url,
            http_client=http_client,
            timeout=timeout,
            discovery_path=discovery_path,
            abort_signal=abort_signal,
        )
    except A2ADiscoveryError as exc:
        logger.warning("%s. Falling back to base URL %s", exc, base_url)
        return base_url

    logger.debug("Resolved A2A endpoint for %s -> %s", base_url, descriptor.a2a.url)
    return descriptor.a2a.url
