"""Shared httpx plumbing for discovery and transport."""

from __future__ import annotations

import asyncio
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Awaitable, Optional, TypeVar

import httpx

from .errors import A2ARequestAborted

T = TypeVar("T")


@asynccontextmanager
async def get_http_client(
    client: Optional[httpx.AsyncClient] = None,
    *,
    timeout: Optional[float] = None,
) -> AsyncIterator[httpx.AsyncClient]:
    """Yield the caller's client, or a short-lived one closed on exit."""

    if client is not None:
        yield client
        return
    kwargs = {} if timeout is None else {"timeout": timeout}
    async with httpx.AsyncClient(**kwargs) as new_client:
        yield new_client


def request_timeout(timeout: Optional[float]) -> Any:
    """Per-request timeout argument; ``None`` keeps the client default."""

    return httpx.USE_CLIENT_DEFAULT if timeout is None else timeout


async def run_abortable(
    awaitable: Awaitable[T],
    abort_signal: Optional[asyncio.Event] = None,
    *,
    description: str = "request",
) -> T:
    """Await ``awaitable`` unless ``abort_signal`` is set first.

    The pending network call is cancelled when the signal fires and
    ``A2ARequestAborted`` is raised in its place.
    """

    if abort_signal is None:
        return await awaitable

    request_task = asyncio.ensure_future(awaitable)
    if abort_signal.is_set():
        request_task.cancel()
        await asyncio.gather(request_task, return_exceptions=True)
        raise A2ARequestAborted(f"A2A {description} aborted before it was sent")

    abort_task = asyncio.ensure_future(abort_signal.wait())
    try:
        await asyncio.wait({request_task, abort_task}, return_when=asyncio.FIRST_COMPLETED)
    finally:
        abort_task.cancel()
        if not request_task.done():
            request_task.cancel()
            await asyncio.gather(request_task, return_exceptions=True)

    if request_task.cancelled() and abort_signal.is_set():
        raise A2ARequestAborted(f"A2A {description} aborted")
    return request_task.result()
