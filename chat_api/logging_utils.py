from __future__ import annotations

import json
import logging
import os
import tempfile
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Iterable, Mapping, Optional

ROOT_LOGGER_NAME = "CYCB.Chat"
LOG_DIR_ENV_VAR = "CYCB_CHAT_LOG_DIR"
PROPAGATE_ENV_VAR = "CYCB_CHAT_PROPAGATE_LOGS"
DEFAULT_LOG_FILENAME = "cycb-chat.log"
REDACTED = "<redacted>"
_SENSITIVE_HEADERS = {"authorization", "cookie", "set-cookie", "proxy-authorization"}


class ReleaseLogLevelFilter(logging.Filter):
    """Promote debug logs to INFO in release builds so diagnostics stay visible."""

    def __init__(self, release_mode: bool) -> None:
        super().__init__()
        self._release_mode = release_mode

    def filter(self, record: logging.LogRecord) -> bool:
        if self._release_mode and record.levelno == logging.DEBUG:
            record.levelno = logging.INFO
            record.levelname = "INFO"
        return True


def resolve_logs_dir(base_path: Optional[Path] = None, log_dir_name: str = "cycb-chat") -> Path:
    """
    Resolve the directory to store client logs.

    Strategy:
    - Use CYCB_CHAT_LOG_DIR if set.
    - Fall back to XDG state/cache locations, then `base_path/logs` (or `cwd/logs`).
    - Final fallback: tempdir/<log_dir_name>.
    """
    candidates = []

    env_override = os.environ.get(LOG_DIR_ENV_VAR)
    if env_override:
        try:
            candidates.append(Path(env_override).expanduser())
        except Exception:
            pass

    state_home = Path(os.environ.get("XDG_STATE_HOME", Path.home() / ".local" / "state"))
    cache_home = Path(os.environ.get("XDG_CACHE_HOME", Path.home() / ".cache"))
    candidates.append(state_home / "cycb-chat" / "logs")
    candidates.append(cache_home / "cycb-chat" / "logs")
    candidates.append((base_path or Path.cwd()) / "logs")

    for base in candidates:
        try:
            target = base / log_dir_name
            target.mkdir(parents=True, exist_ok=True)
            return target
        except Exception:
            continue

    temp_fallback = Path(tempfile.gettempdir()) / "cycb-chat" / log_dir_name
    temp_fallback.mkdir(parents=True, exist_ok=True)
    return temp_fallback


def build_rotating_file_handler(
    log_dir: Path,
    filename: str,
    *,
    retention: int = 5,
    max_bytes: int = 512 * 1024,
    formatter: Optional[logging.Formatter] = None,
) -> logging.Handler:
    """Construct a rotating file handler with sane defaults."""
    retention = max(1, retention)
    backup_count = max(0, retention - 1)
    log_dir.mkdir(parents=True, exist_ok=True)
    handler = RotatingFileHandler(
        log_dir / filename,
        maxBytes=max_bytes,
        backupCount=backup_count,
        encoding="utf-8",
    )
    if formatter is not None:
        handler.setFormatter(formatter)
    return handler


def propagation_enabled() -> bool:
    return os.environ.get(PROPAGATE_ENV_VAR, "").strip().lower() in {"1", "true", "yes", "on"}


def configure_logging(
    *,
    debug_enabled: bool,
    log_dir: Optional[Path] = None,
    retention: int = 5,
    filename: str = DEFAULT_LOG_FILENAME,
) -> logging.Logger:
    """Attach a rotating file handler to the CYCB.Chat logger tree (idempotent)."""
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    # DEBUG reaches the handler in every build; the release filter relabels it as INFO.
    logger.setLevel(logging.DEBUG)
    logger.propagate = propagation_enabled()
    target_dir = log_dir or resolve_logs_dir()
    target_path = (target_dir / filename).resolve()
    for handler in logger.handlers:
        if isinstance(handler, RotatingFileHandler) and Path(handler.baseFilename).resolve() == target_path:
            return logger
    formatter = logging.Formatter("%(asctime)s - %(levelname)s - %(name)s - %(message)s")
    handler = build_rotating_file_handler(target_dir, filename, retention=retention, formatter=formatter)
    handler.setLevel(logging.DEBUG)
    handler.addFilter(ReleaseLogLevelFilter(release_mode=not debug_enabled))
    logger.addHandler(handler)
    return logger


def redact_headers(headers: Mapping[str, str], extra: Iterable[str] = ()) -> dict:
    """Copy headers with credential-bearing values replaced."""
    sensitive = _SENSITIVE_HEADERS | {name.lower() for name in extra}
    return {key: (REDACTED if key.lower() in sensitive else value) for key, value in headers.items()}


_SENSITIVE_BODY_KEYS = {"password", "currentPassword", "newPassword", "token", "fcmToken"}


def redact_json_text(text: str) -> str:
    """Mask credential fields in a JSON object body; non-JSON text passes through."""
    try:
        data = json.loads(text)
    except ValueError:
        return text
    if not isinstance(data, dict):
        return text
    masked = {key: (REDACTED if key in _SENSITIVE_BODY_KEYS else value) for key, value in data.items()}
    return json.dumps(masked, ensure_ascii=False)
