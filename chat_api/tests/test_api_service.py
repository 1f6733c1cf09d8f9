from __future__ import annotations

import json

import pytest

from chat_api.api_service import ChatApiService
from chat_api.errors import AuthenticationError, DecodeError
from chat_models import SendMessageRequest


def _user(user_id="u1", **extra):
    payload = {"_id": user_id, "username": "alice", "displayName": "Alice"}
    payload.update(extra)
    return payload


@pytest.fixture
def api(make_client):
    return ChatApiService(make_client())


def test_sign_in_installs_token_and_user(api, fake_adapter, session_context):
    fake_adapter.reply(200, {"success": True, "token": "tok-1", "user": _user("u1")})

    response = api.sign_in("alice", "pw")

    assert response.user.id == "u1"
    state = session_context.snapshot()
    assert (state.token, state.current_user_id) == ("tok-1", "u1")
    assert "Authorization" not in fake_adapter.requests[0].headers
    assert json.loads(fake_adapter.requests[0].body) == {"username": "alice", "password": "pw"}


def test_restore_session_drops_rejected_token(api, fake_adapter, session_context):
    fake_adapter.reply(401, {"error": "invalid token"})

    with pytest.raises(AuthenticationError):
        api.restore_session("stale")

    assert session_context.snapshot().token is None


def test_get_chats_normalises_ids(api, fake_adapter, session_context):
    session_context.sign_in("t", "u1")
    fake_adapter.reply(200, {"chats": [{"_id": "c1", "type": "private"}, {"id": "c2", "_id": "x", "type": "group"}]})

    chats = api.get_chats()

    assert [chat.id for chat in chats] == ["c1", "c2"]


def test_schema_mismatch_surfaces_as_decode_error(api, fake_adapter, session_context):
    session_context.sign_in("t", "u1")
    fake_adapter.reply(200, {"chats": [{"type": "private"}]})

    with pytest.raises(DecodeError):
        api.get_chats()


def test_soft_failure_is_returned_untouched(api, fake_adapter):
    fake_adapter.reply(200, {"success": False, "message": "no release"})

    response = api.get_latest_app_version()

    assert response.success is False


def test_send_message_posts_camel_case_payload(api, fake_adapter, session_context):
    session_context.sign_in("t", "u1")
    fake_adapter.reply(
        200,
        {
            "success": True,
            "message": {
                "_id": "m1",
                "chatId": "c1",
                "senderId": _user("u1"),
                "content": "hi",
                "createdAt": "2024-01-01T00:00:00Z",
            },
        },
    )

    response = api.send_message("c1", SendMessageRequest(content="hi"))

    request = fake_adapter.requests[0]
    assert request.url.endswith("/messages/chat/c1")
    assert json.loads(request.body) == {"content": "hi", "messageType": "text"}
    assert response.message.id == "m1"


def test_paginated_messages_send_cursor(api, fake_adapter, session_context):
    session_context.sign_in("t", "u1")
    fake_adapter.reply(200, {"messages": [], "hasMore": True, "nextCursor": "m0"})

    page = api.get_messages_paginated("c1", before="m9")

    assert "limit=50" in fake_adapter.requests[0].url
    assert "before=m9" in fake_adapter.requests[0].url
    assert page.has_more
    assert page.next_cursor == "m0"


def test_upload_image_is_multipart(api, fake_adapter, session_context):
    session_context.sign_in("t", "u1")
    fake_adapter.reply(200, {"success": True, "url": "https://cdn.test/a.jpg"})

    response = api.upload_image("a.jpg", b"\xff\xd8data")

    request = fake_adapter.requests[0]
    assert request.headers["Content-Type"].startswith("multipart/form-data")
    assert b'name="image"; filename="a.jpg"' in request.body
    assert response.url == "https://cdn.test/a.jpg"


def test_unregister_push_token_sends_delete_with_body(api, fake_adapter, session_context):
    session_context.sign_in("t", "u1")
    fake_adapter.reply(200, {"success": True})

    response = api.unregister_push_token("push-1")

    request = fake_adapter.requests[0]
    assert request.method == "DELETE"
    assert json.loads(request.body) == {"fcmToken": "push-1"}
    assert response.status_code == 200
