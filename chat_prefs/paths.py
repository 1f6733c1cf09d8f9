"""Location of app-private preference files."""
from __future__ import annotations

import os
from pathlib import Path

DATA_DIR_ENV_VAR = "CYCB_CHAT_DATA_DIR"
APP_DIR_NAME = "cycb-chat"


def resolve_data_dir() -> Path:
    """Return (and create) the directory holding the preference stores."""
    env_override = os.environ.get(DATA_DIR_ENV_VAR)
    if env_override:
        target = Path(env_override).expanduser()
    else:
        data_home = Path(os.environ.get("XDG_DATA_HOME", Path.home() / ".local" / "share"))
        target = data_home / APP_DIR_NAME
    target.mkdir(parents=True, exist_ok=True)
    return target
