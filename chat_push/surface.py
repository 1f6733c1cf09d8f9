"""Platform seam for showing notifications."""
from __future__ import annotations

from typing import Protocol

from chat_push.channels import NotificationChannel
from chat_push.dispatcher import NotificationSpec


class NotificationSurface(Protocol):
    def create_channel(self, channel: NotificationChannel) -> None:
        ...

    def notify(self, spec: NotificationSpec) -> None:
        ...

    def cancel(self, notification_id: int) -> None:
        ...
