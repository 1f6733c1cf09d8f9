from __future__ import annotations

import dataclasses

import pytest

from chat_prefs.settings import NotificationSettings
from chat_push.channels import MESSAGES_CHANNEL, SOCIAL_CHANNEL
from chat_push.dispatcher import BigTextStyle, DeepLink, InboxStyle, MessagingStyle, dispatch, stable_hash

NOW_MS = 1_700_000_000_000
ALL_ON = NotificationSettings()

PAYLOADS = {
    "new_message": ({"type": "new_message", "chatId": "c1", "senderName": "Alice", "body": "hi"}, "messages_notif"),
    "friend_request": ({"type": "friend_request", "senderDisplayName": "Bob", "senderId": "u2"}, "friend_requests_notif"),
    "friend_request_accepted": ({"type": "friend_request_accepted", "displayName": "Cy"}, "friend_requests_notif"),
    "chat_invite": ({"type": "chat_invite", "chatName": "Crew", "inviterName": "Dee"}, "chat_invites_notif"),
}


@pytest.mark.parametrize("kind", sorted(PAYLOADS))
def test_each_type_is_shown_with_all_toggles_on(kind):
    payload, _ = PAYLOADS[kind]
    assert dispatch(payload, ALL_ON, now_ms=NOW_MS) is not None


@pytest.mark.parametrize("kind", sorted(PAYLOADS))
def test_global_toggle_off_suppresses_everything(kind):
    payload, _ = PAYLOADS[kind]
    settings = NotificationSettings(notifications_enabled=False)
    assert dispatch(payload, settings, now_ms=NOW_MS) is None


@pytest.mark.parametrize("kind", sorted(PAYLOADS))
def test_category_toggle_off_suppresses_its_type(kind):
    payload, toggle = PAYLOADS[kind]
    settings = dataclasses.replace(ALL_ON, **{toggle: False})
    assert dispatch(payload, settings, now_ms=NOW_MS) is None


def test_unknown_or_missing_type_is_ignored():
    assert dispatch({"type": "mystery"}, ALL_ON, now_ms=NOW_MS) is None
    assert dispatch({"chatId": "c1"}, ALL_ON, now_ms=NOW_MS) is None


def test_new_message_rendering():
    payload, _ = PAYLOADS["new_message"]
    spec = dispatch(payload, ALL_ON, now_ms=NOW_MS)

    assert spec.id == stable_hash("c1")
    assert spec.channel_id == MESSAGES_CHANNEL.id
    assert spec.title == "New Message"
    assert spec.style == MessagingStyle(sender_name="Alice", conversation_title="New Message", text="hi", timestamp_ms=NOW_MS)
    assert spec.vibration_pattern == (0, 250, 250, 250)
    assert spec.colorized
    assert spec.deep_link == DeepLink("chat", chat_id="c1")


def test_new_message_fallbacks_and_notification_body():
    spec = dispatch(
        {"type": "new_message", "chatId": "c9", "chatName": "Crew", "timestamp": "12345", "body": "data body"},
        ALL_ON,
        now_ms=NOW_MS,
        notification_body="shown body",
    )

    assert spec.style.sender_name == "Crew"
    assert spec.text == "shown body"
    assert spec.when_ms == 12345


def test_new_message_requires_chat_id():
    assert dispatch({"type": "new_message", "body": "hi"}, ALL_ON, now_ms=NOW_MS) is None


def test_messages_for_same_chat_share_an_id():
    first = dispatch({"type": "new_message", "chatId": "c1"}, ALL_ON, now_ms=NOW_MS)
    second = dispatch({"type": "new_message", "chatId": "c1"}, ALL_ON, now_ms=NOW_MS + 5000)
    assert first.id == second.id


def test_friend_request_rendering():
    spec = dispatch({"type": "friend_request"}, ALL_ON, now_ms=NOW_MS)

    assert spec.channel_id == SOCIAL_CHANNEL.id
    assert spec.text == "Someone wants to be your friend"
    assert spec.style == BigTextStyle(
        big_text="Someone wants to connect with you", big_title="👋 New Friend Request", summary="Tap to view"
    )
    assert spec.deep_link == DeepLink("friends")
    assert spec.vibration_pattern == (0, 200, 100, 200)


def test_friend_request_accepted_links_to_profile_when_user_known():
    with_user = dispatch({"type": "friend_request_accepted", "displayName": "Cy", "userId": "u3"}, ALL_ON, now_ms=NOW_MS)
    without_user = dispatch({"type": "friend_request_accepted"}, ALL_ON, now_ms=NOW_MS)

    assert with_user.deep_link == DeepLink("profile", user_id="u3")
    assert with_user.style.big_title == "🎉 Cy accepted your request"
    assert without_user.deep_link == DeepLink("friends")
    assert without_user.text == "Someone accepted your friend request"


def test_chat_invite_rendering():
    spec = dispatch(
        {"type": "chat_invite", "chatName": "Crew", "inviterName": "Dee", "chatId": "c7", "memberCount": "4"},
        ALL_ON,
        now_ms=NOW_MS,
    )
    bare = dispatch({"type": "chat_invite"}, ALL_ON, now_ms=NOW_MS)

    assert spec.text == "Dee invited you to 'Crew'"
    assert spec.style == InboxStyle(
        big_title="💬 Group Chat Invite",
        lines=("Group: Crew", "Invited by: Dee", "Members: 4"),
        summary="Tap to join",
    )
    assert spec.group == "chat_invites"
    assert spec.deep_link == DeepLink("chat", chat_id="c7")
    assert bare.style.lines == ("Group: a group", "Invited by: Someone")
    assert bare.deep_link == DeepLink("chats")


def test_social_notifications_get_time_derived_ids():
    first = dispatch({"type": "friend_request"}, ALL_ON, now_ms=NOW_MS)
    second = dispatch({"type": "friend_request"}, ALL_ON, now_ms=NOW_MS + 1)
    assert first.id != second.id


def test_sound_and_vibration_toggles_flow_through():
    settings = NotificationSettings(sound_enabled=False, vibration_enabled=False)
    spec = dispatch({"type": "new_message", "chatId": "c1"}, settings, now_ms=NOW_MS)
    assert spec.play_sound is False
    assert spec.vibrate is False


def test_stable_hash_is_deterministic_and_non_negative():
    assert stable_hash("c1") == stable_hash("c1")
    assert stable_hash("c1") != stable_hash("c2")
    assert 0 <= stable_hash("anything") <= 0x7FFFFFFF
