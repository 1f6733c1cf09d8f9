"""Version metadata for the CYCB chat client."""
from __future__ import annotations

import os
from typing import Optional

__version__ = "1.6.2"
VERSION_CODE = 162
DEV_MODE_ENV_VAR = "CYCB_CHAT_DEV_MODE"


def is_dev_build(version: Optional[str] = None) -> bool:
    """Return True when the dev-mode env var or a -dev version suffix is present."""
    value = os.getenv(DEV_MODE_ENV_VAR)
    if value is not None:
        token = value.strip().lower()
        if token in {"1", "true", "yes", "on"}:
            return True
        if token in {"0", "false", "no", "off"}:
            return False
    candidate = (version if version is not None else __version__) or ""
    return "-dev" in candidate.lower()
