from __future__ import annotations

import io
import json
import os
import sys
from pathlib import Path
from typing import Any, List, Optional

import pytest

ROOT = Path(__file__).resolve().parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import requests  # noqa: E402
from requests.adapters import BaseAdapter  # noqa: E402
from requests.structures import CaseInsensitiveDict  # noqa: E402

from chat_api.config import ApiConfig  # noqa: E402
from chat_api.http_client import HttpClient  # noqa: E402
from chat_api.session import SessionContext  # noqa: E402

BASE_URL = "https://api.test/api/"


def pytest_runtest_setup(item):
    if item.get_closest_marker("pyqt_required"):
        if not os.getenv("PYQT_TESTS"):
            pytest.skip("PYQT_TESTS not set; skipping PyQt-dependent test")


@pytest.fixture
def qt_app():
    from PyQt6.QtWidgets import QApplication

    app = QApplication.instance()
    if app is None:
        app = QApplication([])
    yield app


class FakeAdapter(BaseAdapter):
    """Transport adapter replaying queued responses and recording requests."""

    def __init__(self) -> None:
        super().__init__()
        self.queue: List[Any] = []
        self.requests: List[requests.PreparedRequest] = []
        self.send_kwargs: List[dict] = []

    def reply(self, status: int = 200, payload: Any = None, *, body: Optional[bytes] = None, headers=None) -> None:
        if body is None:
            body = b"" if payload is None else json.dumps(payload).encode("utf-8")
        self.queue.append((status, body, dict(headers or {})))

    def fail(self, exc: Exception) -> None:
        self.queue.append(exc)

    def send(self, request, stream=False, timeout=None, verify=True, cert=None, proxies=None):
        self.requests.append(request)
        self.send_kwargs.append({"stream": stream, "timeout": timeout})
        item = self.queue.pop(0)
        if isinstance(item, Exception):
            raise item
        status, body, headers = item
        response = requests.Response()
        response.status_code = status
        response.reason = "OK" if status < 400 else "Error"
        response.headers = CaseInsensitiveDict(headers)
        response.raw = io.BytesIO(body)
        response.encoding = "utf-8"
        response.url = request.url
        response.request = request
        return response

    def close(self) -> None:
        pass


@pytest.fixture
def fake_adapter():
    return FakeAdapter()


@pytest.fixture
def session_context():
    return SessionContext()


@pytest.fixture
def make_client(fake_adapter, session_context):
    def _make(*, log_bodies: bool = False) -> HttpClient:
        http = requests.Session()
        http.mount("https://", fake_adapter)
        http.mount("http://", fake_adapter)
        config = ApiConfig(base_url=BASE_URL, log_bodies=log_bodies)
        return HttpClient(config, session_context, http_session=http)

    return _make
