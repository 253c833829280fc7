from typing import Callable

import httpx
import pytest

from agentlink import confirmation
from agentlink.config import get_settings


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch):
    """Keep env-driven settings and the process-wide gate out of other tests."""
    for name in ("A2A_TIMEOUT", "A2A_TRUSTED_HOSTS", "A2A_DISCOVERY_PATH"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr(confirmation, "_DEFAULT_GATE", None)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def mock_http() -> Callable[[Callable], httpx.AsyncClient]:
    """Build an ``httpx.AsyncClient`` whose requests are answered by ``handler``."""

    def _factory(handler: Callable) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(handler))

    return _factory
