from __future__ import annotations

import logging

import pytest
import requests

from chat_api.errors import AuthenticationError, DecodeError, HttpStatusError, TransportError


def test_authorization_header_present_only_with_token(make_client, fake_adapter, session_context):
    client = make_client()
    fake_adapter.reply(200, {"ok": True})
    fake_adapter.reply(200, {"ok": True})

    client.request_json("GET", "app/version", auth_required=False)
    session_context.set_token("secret-token")
    client.request_json("GET", "users/me")

    first, second = fake_adapter.requests
    assert "Authorization" not in first.headers
    assert second.headers["Authorization"] == "Bearer secret-token"


def test_auth_required_without_token_fails_before_network(make_client, fake_adapter):
    client = make_client()

    with pytest.raises(AuthenticationError) as excinfo:
        client.request_json("GET", "users/me")

    assert excinfo.value.status_code == 401
    assert fake_adapter.requests == []


def test_status_mapping(make_client, fake_adapter, session_context):
    session_context.set_token("t")
    client = make_client()
    fake_adapter.reply(401, {"error": "Token expired"})
    fake_adapter.reply(404, {"message": "Chat not found"})

    with pytest.raises(AuthenticationError) as auth_exc:
        client.request_json("GET", "users/me")
    with pytest.raises(HttpStatusError) as status_exc:
        client.request_json("GET", "chats/missing")

    assert "Token expired" in str(auth_exc.value)
    assert status_exc.value.status_code == 404
    assert not isinstance(status_exc.value, AuthenticationError)
    assert "Chat not found" in str(status_exc.value)


def test_bad_body_maps_to_decode_error(make_client, fake_adapter, session_context):
    session_context.set_token("t")
    client = make_client()
    fake_adapter.reply(200, body=b"<html>oops</html>")

    with pytest.raises(DecodeError):
        client.request_json("GET", "users/me")


def test_connection_error_maps_to_transport_error(make_client, fake_adapter, session_context):
    session_context.set_token("t")
    client = make_client()
    fake_adapter.fail(requests.exceptions.ConnectionError("connection refused"))

    with pytest.raises(TransportError):
        client.request_json("GET", "users/me")


def test_empty_body_decodes_as_empty_object(make_client, fake_adapter, session_context):
    session_context.set_token("t")
    client = make_client()
    fake_adapter.reply(204)

    assert client.request_json("DELETE", "messages/m1") == {}


def test_timeouts_and_none_params(make_client, fake_adapter, session_context):
    session_context.set_token("t")
    client = make_client()
    fake_adapter.reply(200, {"messages": []})

    client.request_json("GET", "messages/chat/c1", params={"limit": 50, "before": None})

    assert fake_adapter.requests[0].url == "https://api.test/api/messages/chat/c1?limit=50"
    assert fake_adapter.send_kwargs[0]["timeout"] == (30.0, 30.0)


def test_token_never_logged_in_clear_text(make_client, fake_adapter, session_context, caplog):
    session_context.set_token("super-secret")
    client = make_client(log_bodies=True)
    fake_adapter.reply(200, {"success": True, "token": "issued-secret"})

    with caplog.at_level(logging.DEBUG, logger="CYCB.Chat"):
        client.request_json("POST", "auth/login", json={"username": "a", "password": "hunter2"}, auth_required=False)

    text = caplog.text
    assert "auth/login" in text
    assert "super-secret" not in text
    assert "issued-secret" not in text
    assert "hunter2" not in text
    assert "<redacted>" in text


def test_bodies_not_logged_by_default(make_client, fake_adapter, caplog):
    client = make_client(log_bodies=False)
    fake_adapter.reply(200, {"version": "1.0"})

    with caplog.at_level(logging.DEBUG, logger="CYCB.Chat"):
        client.request_json("GET", "app/version", auth_required=False)

    assert "app/version" in caplog.text
    assert "body" not in caplog.text
