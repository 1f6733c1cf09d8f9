from __future__ import annotations

import logging

from chat_api.session import SessionContext
from chat_prefs.settings import SettingsPreferences
from chat_prefs.token_store import TokenStore
from chat_push.channels import CHANNELS
from chat_push.dispatcher import stable_hash
from chat_push.push_service import PushService


class FakeSurface:
    def __init__(self, fail: bool = False) -> None:
        self.channels = []
        self.shown = []
        self.fail = fail

    def create_channel(self, channel) -> None:
        self.channels.append(channel)

    def notify(self, spec) -> None:
        if self.fail:
            raise RuntimeError("surface unavailable")
        self.shown.append(spec)

    def cancel(self, notification_id) -> None:
        self.shown = [spec for spec in self.shown if spec.id != notification_id]


class FakeResponse:
    def __init__(self, status_code: int) -> None:
        self.status_code = status_code
        self.ok = 200 <= status_code < 300
        self.closed = False

    def close(self) -> None:
        self.closed = True


class FakeApi:
    def __init__(self, status_code: int = 200, error: Exception = None) -> None:
        self.session = SessionContext()
        self.registered = []
        self.status_code = status_code
        self.error = error

    def register_push_token(self, push_token: str) -> FakeResponse:
        if self.error is not None:
            raise self.error
        self.registered.append((push_token, self.session.token))
        return FakeResponse(self.status_code)


def _service(tmp_path, surface=None, api=None, **kwargs):
    return PushService(
        surface or FakeSurface(),
        SettingsPreferences(data_dir=tmp_path),
        api or FakeApi(),
        clock_ms=lambda: 1_000,
        **kwargs,
    )


def test_create_channels_registers_both(tmp_path):
    surface = FakeSurface()
    _service(tmp_path, surface).create_channels()
    assert [channel.id for channel in surface.channels] == [channel.id for channel in CHANNELS]


def test_message_shown_when_enabled_and_suppressed_when_disabled(tmp_path):
    surface = FakeSurface()
    service = _service(tmp_path, surface)
    payload = {"type": "new_message", "chatId": "c1", "senderName": "Alice", "body": "hi"}

    spec = service.on_message_received(payload)
    assert spec is not None and spec.id == stable_hash("c1")
    assert surface.shown == [spec]

    SettingsPreferences(data_dir=tmp_path).messages_notif = False
    assert service.on_message_received(payload) is None
    assert len(surface.shown) == 1


def test_surface_failure_is_logged_not_raised(tmp_path, caplog):
    service = _service(tmp_path, FakeSurface(fail=True))

    with caplog.at_level(logging.ERROR, logger="CYCB.Chat.Push"):
        result = service.on_message_received({"type": "friend_request"})

    assert result is None
    assert "surface unavailable" in caplog.text


def test_register_token_requires_auth(tmp_path):
    api = FakeApi()
    service = _service(tmp_path, api=api)

    assert service.register_push_token("push-1") is False
    assert api.registered == []

    api.session.sign_in("auth-1", "u1")
    assert service.register_push_token("push-1") is True
    assert api.registered == [("push-1", "auth-1")]


def test_register_token_restores_saved_session(tmp_path):
    api = FakeApi()
    tokens = TokenStore(data_dir=tmp_path)
    tokens.save("saved-auth", "u1")
    service = _service(tmp_path, api=api, token_store=tokens)

    assert service.register_push_token("push-1") is True
    assert api.registered == [("push-1", "saved-auth")]


def test_failed_registration_is_logged(tmp_path, caplog):
    api = FakeApi(status_code=500)
    api.session.sign_in("auth-1", "u1")
    service = _service(tmp_path, api=api)

    with caplog.at_level(logging.ERROR, logger="CYCB.Chat.Push"):
        assert service.register_push_token("push-1") is False

    assert "HTTP 500" in caplog.text


def test_registration_errors_never_raise(tmp_path):
    api = FakeApi(error=ConnectionError("offline"))
    api.session.sign_in("auth-1", "u1")
    assert _service(tmp_path, api=api).register_push_token("push-1") is False


def test_new_token_registers_in_background(tmp_path):
    api = FakeApi()
    api.session.sign_in("auth-1", "u1")

    worker = _service(tmp_path, api=api).on_new_token("push-2")
    worker.join(timeout=5)

    assert not worker.is_alive()
    assert api.registered == [("push-2", "auth-1")]
