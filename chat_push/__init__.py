"""Push notification dispatch for the CYCB chat client."""

from chat_push.channels import CHANNELS, MESSAGES_CHANNEL, SOCIAL_CHANNEL, NotificationChannel
from chat_push.dispatcher import (
    BigTextStyle,
    DeepLink,
    InboxStyle,
    MessagingStyle,
    NotificationSpec,
    dispatch,
    stable_hash,
)
from chat_push.push_service import PushService
from chat_push.surface import NotificationSurface

__all__ = [
    "BigTextStyle",
    "CHANNELS",
    "DeepLink",
    "InboxStyle",
    "MESSAGES_CHANNEL",
    "MessagingStyle",
    "NotificationChannel",
    "NotificationSpec",
    "NotificationSurface",
    "PushService",
    "SOCIAL_CHANNEL",
    "dispatch",
    "stable_hash",
]
