"""Turns a push payload plus the user's toggles into a notification description.

``dispatch`` is pure: it reads nothing but its arguments and touches no
platform API, so every gating and rendering rule can be checked directly.
"""
from __future__ import annotations

import zlib
from dataclasses import dataclass
from typing import Any, Callable, Dict, Mapping, Optional, Tuple, Union

from chat_prefs.settings import NotificationSettings
from chat_push.channels import (
    LIGHT_BLUE,
    LIGHT_CYAN,
    LIGHT_GREEN,
    LIGHT_MAGENTA,
    MESSAGES_CHANNEL,
    SOCIAL_CHANNEL,
)

TYPE_NEW_MESSAGE = "new_message"
TYPE_FRIEND_REQUEST = "friend_request"
TYPE_FRIEND_REQUEST_ACCEPTED = "friend_request_accepted"
TYPE_CHAT_INVITE = "chat_invite"

CATEGORY_MESSAGE = "msg"
CATEGORY_SOCIAL = "social"
ACCENT_COLOR = "#6200EE"
CHAT_INVITES_GROUP = "chat_invites"

# Deep link destinations understood by the app shell.
LINK_CHAT = "chat"
LINK_CHATS = "chats"
LINK_FRIENDS = "friends"
LINK_PROFILE = "profile"


def stable_hash(text: str) -> int:
    """Process-independent non-negative 31-bit hash used as a notification id."""
    return zlib.crc32(text.encode("utf-8")) & 0x7FFFFFFF


def _fresh_id(now_ms: int) -> int:
    return int(now_ms) & 0x7FFFFFFF


@dataclass(frozen=True)
class DeepLink:
    destination: str
    chat_id: Optional[str] = None
    user_id: Optional[str] = None


@dataclass(frozen=True)
class MessagingStyle:
    sender_name: str
    conversation_title: str
    text: str
    timestamp_ms: int


@dataclass(frozen=True)
class BigTextStyle:
    big_text: str
    big_title: str
    summary: str


@dataclass(frozen=True)
class InboxStyle:
    big_title: str
    lines: Tuple[str, ...]
    summary: str


NotificationStyle = Union[MessagingStyle, BigTextStyle, InboxStyle]


@dataclass(frozen=True)
class NotificationSpec:
    id: int
    channel_id: str
    title: str
    text: str
    style: NotificationStyle
    category: str
    light_color: str
    vibration_pattern: Tuple[int, ...]
    when_ms: int
    deep_link: DeepLink
    colorized: bool = False
    color: str = ACCENT_COLOR
    group: Optional[str] = None
    play_sound: bool = True
    vibrate: bool = True


def _text(data: Mapping[str, Any], key: str) -> Optional[str]:
    value = data.get(key)
    if value is None:
        return None
    return str(value)


def _timestamp(data: Mapping[str, Any], now_ms: int) -> int:
    try:
        return int(str(data.get("timestamp")))
    except (TypeError, ValueError):
        return now_ms


def _new_message(data, settings, now_ms, notification_body) -> Optional[NotificationSpec]:
    chat_id = _text(data, "chatId")
    if chat_id is None:
        return None
    chat_name = _text(data, "chatName") or "New Message"
    sender_name = _text(data, "senderName") or chat_name
    content = notification_body if notification_body is not None else (_text(data, "body") or "")
    timestamp = _timestamp(data, now_ms)
    return NotificationSpec(
        id=stable_hash(chat_id),
        channel_id=MESSAGES_CHANNEL.id,
        title=chat_name,
        text=content,
        style=MessagingStyle(sender_name=sender_name, conversation_title=chat_name, text=content, timestamp_ms=timestamp),
        category=CATEGORY_MESSAGE,
        light_color=LIGHT_BLUE,
        vibration_pattern=(0, 250, 250, 250),
        when_ms=timestamp,
        deep_link=DeepLink(LINK_CHAT, chat_id=chat_id),
        colorized=True,
        play_sound=settings.sound_enabled,
        vibrate=settings.vibration_enabled,
    )


def _friend_request(data, settings, now_ms, notification_body) -> NotificationSpec:
    sender_name = _text(data, "senderDisplayName") or "Someone"
    title = "👋 New Friend Request"
    return NotificationSpec(
        id=_fresh_id(now_ms),
        channel_id=SOCIAL_CHANNEL.id,
        title=title,
        text=f"{sender_name} wants to be your friend",
        style=BigTextStyle(big_text=f"{sender_name} wants to connect with you", big_title=title, summary="Tap to view"),
        category=CATEGORY_SOCIAL,
        light_color=LIGHT_GREEN,
        vibration_pattern=(0, 200, 100, 200),
        when_ms=now_ms,
        deep_link=DeepLink(LINK_FRIENDS, user_id=_text(data, "senderId")),
        play_sound=settings.sound_enabled,
        vibrate=settings.vibration_enabled,
    )


def _friend_request_accepted(data, settings, now_ms, notification_body) -> NotificationSpec:
    user_name = _text(data, "displayName") or "Someone"
    user_id = _text(data, "userId")
    return NotificationSpec(
        id=_fresh_id(now_ms),
        channel_id=SOCIAL_CHANNEL.id,
        title="🎉 Friend Request Accepted",
        text=f"{user_name} accepted your friend request",
        style=BigTextStyle(
            big_text=f"You and {user_name} are now friends! Start chatting now.",
            big_title=f"🎉 {user_name} accepted your request",
            summary="Tap to message",
        ),
        category=CATEGORY_SOCIAL,
        light_color=LIGHT_CYAN,
        vibration_pattern=(0, 150, 100, 150, 100, 150),
        when_ms=now_ms,
        deep_link=DeepLink(LINK_PROFILE if user_id is not None else LINK_FRIENDS, user_id=user_id),
        play_sound=settings.sound_enabled,
        vibrate=settings.vibration_enabled,
    )


def _chat_invite(data, settings, now_ms, notification_body) -> NotificationSpec:
    chat_name = _text(data, "chatName") or "a group"
    inviter_name = _text(data, "inviterName") or "Someone"
    chat_id = _text(data, "chatId")
    member_count = _text(data, "memberCount")
    lines = [f"Group: {chat_name}", f"Invited by: {inviter_name}"]
    if member_count is not None:
        lines.append(f"Members: {member_count}")
    return NotificationSpec(
        id=_fresh_id(now_ms),
        channel_id=SOCIAL_CHANNEL.id,
        title="💬 Chat Invite",
        text=f"{inviter_name} invited you to '{chat_name}'",
        style=InboxStyle(big_title="💬 Group Chat Invite", lines=tuple(lines), summary="Tap to join"),
        category=CATEGORY_SOCIAL,
        light_color=LIGHT_MAGENTA,
        vibration_pattern=(0, 200, 100, 200),
        when_ms=now_ms,
        deep_link=DeepLink(LINK_CHAT if chat_id is not None else LINK_CHATS, chat_id=chat_id),
        group=CHAT_INVITES_GROUP,
        play_sound=settings.sound_enabled,
        vibrate=settings.vibration_enabled,
    )


_Renderer = Callable[[Mapping[str, Any], NotificationSettings, int, Optional[str]], Optional[NotificationSpec]]

# type -> (category toggle attribute, renderer)
_HANDLERS: Dict[str, Tuple[str, _Renderer]] = {
    TYPE_NEW_MESSAGE: ("messages_notif", _new_message),
    TYPE_FRIEND_REQUEST: ("friend_requests_notif", _friend_request),
    TYPE_FRIEND_REQUEST_ACCEPTED: ("friend_requests_notif", _friend_request_accepted),
    TYPE_CHAT_INVITE: ("chat_invites_notif", _chat_invite),
}


def category_toggle(notification_type: str) -> Optional[str]:
    """Name of the settings toggle gating ``notification_type``, if it is known."""
    handler = _HANDLERS.get(notification_type)
    return handler[0] if handler else None


def dispatch(
    payload: Mapping[str, Any],
    settings: NotificationSettings,
    *,
    now_ms: int,
    notification_body: Optional[str] = None,
) -> Optional[NotificationSpec]:
    """Return the notification to show for ``payload``, or None when it is suppressed."""
    if not settings.notifications_enabled:
        return None
    handler = _HANDLERS.get(str(payload.get("type") or ""))
    if handler is None:
        return None
    toggle, render = handler
    if not getattr(settings, toggle):
        return None
    return render(payload, settings, now_ms, notification_body)
