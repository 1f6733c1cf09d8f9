"""Runtime configuration for the backend client."""
from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from version import __version__, is_dev_build

DEFAULT_BASE_URL = "https://api.cycb.chat/api/"
BASE_URL_ENV_VAR = "CYCB_API_BASE_URL"
LOG_BODIES_ENV_VAR = "CYCB_API_LOG_BODIES"
DEFAULT_TIMEOUT_SECONDS = 30.0
DEFAULT_MAX_REDIRECTS = 5


def _env_flag(value: Optional[str]) -> Optional[bool]:
    if value is None:
        return None
    token = value.strip().lower()
    if token in {"1", "true", "yes", "on"}:
        return True
    if token in {"0", "false", "no", "off"}:
        return False
    return None


@dataclass(frozen=True)
class ApiConfig:
    base_url: str = DEFAULT_BASE_URL
    connect_timeout: float = DEFAULT_TIMEOUT_SECONDS
    read_timeout: float = DEFAULT_TIMEOUT_SECONDS
    log_bodies: bool = False
    max_redirects: int = DEFAULT_MAX_REDIRECTS
    user_agent: str = f"CYCBChat/{__version__}"

    @property
    def timeout(self) -> tuple:
        return (self.connect_timeout, self.read_timeout)

    def url_for(self, path: str) -> str:
        return self.base_url.rstrip("/") + "/" + path.lstrip("/")

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "ApiConfig":
        """Build a config from environment overrides; bodies are logged in dev builds only."""
        source = os.environ if env is None else env
        base_url = (source.get(BASE_URL_ENV_VAR) or "").strip() or DEFAULT_BASE_URL
        log_bodies = _env_flag(source.get(LOG_BODIES_ENV_VAR))
        if log_bodies is None:
            log_bodies = is_dev_build()
        return cls(base_url=base_url, log_bodies=log_bodies)
