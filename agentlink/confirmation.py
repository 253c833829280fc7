"""User confirmation for outbound A2A calls, with a per-host allowlist."""

from __future__ import annotations

import enum
import logging
import threading
from dataclasses import dataclass, field
from typing import Awaitable, Callable, Iterable, List, Literal, Optional
from urllib.parse import urlsplit

from agentlink.config import get_settings

logger = logging.getLogger(__name__)


class ToolConfirmationOutcome(str, enum.Enum):
    PROCEED_ONCE = "proceed-once"
    PROCEED_ALWAYS = "proceed-always"
    CANCEL = "cancel"


@dataclass
class ConfirmationRequest:
    """Details handed to the UI when a call needs the user's approval."""

    title: str
    prompt: str
    urls: List[str]
    on_confirm: Callable[[ToolConfirmationOutcome], Awaitable[None]] = field(repr=False)
    type: Literal["info"] = "info"


_DEFAULT_PORTS = {"http": ":80", "https": ":443"}


def host_key(url: str) -> str:
    """Allowlist key for ``url``: its host (with any non-default port), or the raw string."""

    try:
        parts = urlsplit(url)
    except ValueError:
        return url
    # userinfo is not part of the host
    host = parts.netloc.rpartition("@")[2].lower()
    default_port = _DEFAULT_PORTS.get(parts.scheme.lower())
    if default_port and host.endswith(default_port):
        host = host[: -len(default_port)]
    return host or url


class ConfirmationGate:
    """Tracks hosts the user approved permanently for the process lifetime."""

    def __init__(self, trusted_hosts: Optional[Iterable[str]] = None):
        self._lock = threading.Lock()
        self._allowlist: set[str] = set(trusted_hosts or ())

    def is_allowed(self, host: str) -> bool:
        with self._lock:
            return host in self._allowlist

    def allow(self, host: str) -> None:
        with self._lock:
            if host in self._allowlist:
                return
            self._allowlist.add(host)
        logger.info("Host %s added to the A2A allowlist", host)

    @property
    def allowed_hosts(self) -> frozenset[str]:
        with self._lock:
            return frozenset(self._allowlist)

    def check(self, target_url: str, message: str) -> Optional[ConfirmationRequest]:
        """Return ``None`` when ``target_url`` is pre-approved, else a request to confirm."""

        host = host_key(target_url)
        if self.is_allowed(host):
            return None

        async def on_confirm(outcome: ToolConfirmationOutcome) -> None:
            if outcome == ToolConfirmationOutcome.PROCEED_ALWAYS:
                self.allow(host)

        return ConfirmationRequest(
            title="Confirm A2A Call",
            prompt=f'Send message "{message}" to {target_url}',
            urls=[target_url],
            on_confirm=on_confirm,
        )


_DEFAULT_GATE: Optional[ConfirmationGate] = None
_DEFAULT_GATE_LOCK = threading.Lock()


def default_gate() -> ConfirmationGate:
    """Return the process-wide gate, seeded from ``A2A_TRUSTED_HOSTS``."""

    global _DEFAULT_GATE
    with _DEFAULT_GATE_LOCK:
        if _DEFAULT_GATE is None:
            _DEFAULT_GATE = ConfirmationGate(get_settings().trusted_host_list)
        return _DEFAULT_GATE
