"""Checks the backend for newer app releases and streams the package download."""
from __future__ import annotations

import logging
import re
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Iterator, Optional, Union

from packaging.version import InvalidVersion, Version

from chat_api.api_service import ChatApiService
from chat_api.logging_utils import ROOT_LOGGER_NAME
from chat_models import AppUpdateInfo
from chat_prefs.store import JsonKeyValueStore, open_store

LOGGER = logging.getLogger(f"{ROOT_LOGGER_NAME}.Update")

UPDATE_PREFS_STORE = "update_prefs"
LAST_CHECK_KEY = "last_check_time"
CHECK_INTERVAL_SECONDS = 24 * 60 * 60
PROGRESS_INTERVAL_SECONDS = 0.1
CHUNK_SIZE = 8192
_TOKEN_SPLIT = re.compile(r"[.\-+_]")


@dataclass(frozen=True)
class Downloading:
    progress: float
    downloaded_bytes: int
    total_bytes: int


@dataclass(frozen=True)
class Downloaded:
    path: Path


@dataclass(frozen=True)
class Error:
    message: str


DownloadState = Union[Downloading, Downloaded, Error]


def compare_versions(current: str, latest: str) -> int:
    """Return -1, 0 or 1 comparing two version strings."""
    try:
        current_version = Version(current)
        latest_version = Version(latest)
    except InvalidVersion:
        return _fallback_compare(current, latest)
    if current_version < latest_version:
        return -1
    if current_version > latest_version:
        return 1
    return 0


def _fallback_compare(current: str, latest: str) -> int:
    current_tokens = _tokenize(current)
    latest_tokens = _tokenize(latest)
    length = min(len(current_tokens), len(latest_tokens))
    for index in range(length):
        cur = current_tokens[index]
        lat = latest_tokens[index]
        if cur == lat:
            continue
        # Numeric tokens outrank string tokens.
        if cur[0] != lat[0]:
            return 1 if cur[0] == "num" else -1
        if cur[1] < lat[1]:
            return -1
        return 1
    longer = current_tokens if len(current_tokens) > len(latest_tokens) else latest_tokens
    sign = 1 if len(current_tokens) > len(latest_tokens) else -1
    for token in longer[length:]:
        if token[0] == "num":
            if token[1] == 0:
                continue
            return sign
        # A trailing word marks a pre-release.
        return -sign
    return 0


def _tokenize(value: str) -> list:
    tokens = []
    for part in _TOKEN_SPLIT.split(value.lstrip("vV")):
        if not part:
            continue
        if part.isdigit():
            tokens.append(("num", int(part)))
        else:
            tokens.append(("str", part.lower()))
    return tokens


def _total_from_content_range(header: Optional[str]) -> int:
    # bytes 0-1023/4096
    if not header or "/" not in header:
        return 0
    try:
        return max(int(header.rsplit("/", 1)[1]), 0)
    except ValueError:
        return 0


def format_file_size(size_bytes: int) -> str:
    kb = size_bytes / 1024.0
    mb = kb / 1024.0
    if mb >= 1:
        return f"{mb:.1f} MB"
    if kb >= 1:
        return f"{kb:.1f} KB"
    return f"{size_bytes} B"


class UpdateManager:
    def __init__(
        self,
        api: ChatApiService,
        store: Optional[JsonKeyValueStore] = None,
        *,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._api = api
        self._store = store or open_store(UPDATE_PREFS_STORE)
        self._clock = clock
        self.cached_update_info: Optional[AppUpdateInfo] = None

    def check_for_updates(self, current_version_code: int, current_version: str) -> Optional[AppUpdateInfo]:
        """Ask the backend for the latest release; None on soft failure or any error."""
        try:
            response = self._api.get_latest_app_version()
            if not response.success:
                LOGGER.warning("Update check failed: backend reported success=false")
                return None
            if response.version_code > 0 and current_version_code > 0:
                available = response.version_code > current_version_code
            else:
                available = compare_versions(current_version, response.version) < 0
            LOGGER.debug(
                "Update check: current=%s (%s) remote=%s (%s) available=%s",
                current_version,
                current_version_code,
                response.version,
                response.version_code,
                available,
            )
            info = AppUpdateInfo.from_response(response, is_update_available=available)
        except Exception as exc:
            LOGGER.error("Failed to check for updates: %s", exc, exc_info=exc)
            return None
        if available:
            self.cached_update_info = info
        return info

    def should_check_for_updates(self, now: Optional[float] = None) -> bool:
        now = time.time() if now is None else now
        last_check = self._store.get(LAST_CHECK_KEY, 0)
        if not isinstance(last_check, (int, float)):
            last_check = 0
        return (now - last_check) > CHECK_INTERVAL_SECONDS

    def mark_update_checked(self, now: Optional[float] = None) -> None:
        self._store.set(LAST_CHECK_KEY, time.time() if now is None else now)

    def download_update(self, info: AppUpdateInfo, dest_dir: Path) -> Iterator[DownloadState]:
        """Stream the release package into ``dest_dir``, yielding progress states."""
        yield Downloading(0.0, 0, 0)
        target = Path(dest_dir) / info.file_name
        try:
            response = self._open_download(info.download_url)
        except Exception as exc:
            LOGGER.error("Update download failed to start: %s", exc, exc_info=exc)
            yield Error(str(exc) or "Download failed")
            return
        try:
            if response.status_code != 200:
                yield Error(f"Server returned HTTP {response.status_code}")
                return
            total = self._content_length(response)
            LOGGER.debug("Download starting: %s (%s bytes)", info.download_url, total or "unknown")
            target.parent.mkdir(parents=True, exist_ok=True)
            downloaded = 0
            last_emit: Optional[float] = None
            with target.open("wb") as handle:
                for chunk in response.iter_content(chunk_size=CHUNK_SIZE):
                    if not chunk:
                        continue
                    handle.write(chunk)
                    downloaded += len(chunk)
                    now = self._clock()
                    finished = total > 0 and downloaded >= total
                    if finished or last_emit is None or now - last_emit > PROGRESS_INTERVAL_SECONDS:
                        last_emit = now
                        yield self._progress(downloaded, total)
            if not (total > 0 and downloaded >= total):
                yield self._progress(downloaded, total)
        except Exception as exc:
            LOGGER.error("Update download failed: %s", exc, exc_info=exc)
            yield Error(str(exc) or "Download failed")
            return
        finally:
            response.close()
        LOGGER.info("Update downloaded to %s (%d bytes)", target, downloaded)
        yield Downloaded(target)

    def _open_download(self, url: str):
        return self._api.client.request_raw("GET", url, auth_required=False, stream=True, absolute_url=True)

    @staticmethod
    def _content_length(response) -> int:
        header = response.headers.get("Content-Length")
        try:
            length = int(header) if header is not None else 0
        except ValueError:
            length = 0
        if length > 0:
            return length
        return _total_from_content_range(response.headers.get("Content-Range"))

    @staticmethod
    def _progress(downloaded: int, total: int) -> Downloading:
        if total > 0:
            return Downloading(downloaded / total, downloaded, total)
        return Downloading(0.0, downloaded, 0)
