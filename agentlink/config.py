"""Runtime configuration loaded from the environment."""

from functools import lru_cache
from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_DISCOVERY_PATH = "/.well-known/agent.json"


class A2ASettings(BaseSettings):
    """A2A client configuration from environment."""

    timeout: float = 300.0
    discovery_path: str = DEFAULT_DISCOVERY_PATH
    # Comma separated hosts that never require confirmation.
    trusted_hosts: str = ""
    log_level: str = "INFO"

    model_config = SettingsConfigDict(env_prefix="A2A_", case_sensitive=False, extra="ignore")

    @property
    def trusted_host_list(self) -> List[str]:
        return [host.strip().lower() for host in self.trusted_hosts.split(",") if host.strip()]


@lru_cache(maxsize=1)
def get_settings() -> A2ASettings:
    """Return the cached settings instance."""
    return A2ASettings()
