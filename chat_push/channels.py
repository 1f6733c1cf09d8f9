"""Notification channels registered once at push service start-up."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

IMPORTANCE_HIGH = "high"
VISIBILITY_PRIVATE = "private"
VISIBILITY_PUBLIC = "public"

LIGHT_BLUE = "#0000FF"
LIGHT_GREEN = "#00FF00"
LIGHT_CYAN = "#00FFFF"
LIGHT_MAGENTA = "#FF00FF"


@dataclass(frozen=True)
class NotificationChannel:
    id: str
    name: str
    description: str
    importance: str
    vibration_pattern: Tuple[int, ...]
    light_color: str
    lock_screen_visibility: str
    show_badge: bool = True


MESSAGES_CHANNEL = NotificationChannel(
    id="messages",
    name="Messages",
    description="Notifications for new messages from your chats",
    importance=IMPORTANCE_HIGH,
    vibration_pattern=(0, 250, 250, 250),
    light_color=LIGHT_BLUE,
    lock_screen_visibility=VISIBILITY_PRIVATE,
)

SOCIAL_CHANNEL = NotificationChannel(
    id="social",
    name="Social",
    description="Friend requests, acceptances, and group invites",
    importance=IMPORTANCE_HIGH,
    vibration_pattern=(0, 200, 100, 200),
    light_color=LIGHT_GREEN,
    lock_screen_visibility=VISIBILITY_PUBLIC,
)

CHANNELS = (MESSAGES_CHANNEL, SOCIAL_CHANNEL)
