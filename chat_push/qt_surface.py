"""System tray adapter for :class:`~chat_push.surface.NotificationSurface`."""
from __future__ import annotations

import logging
from typing import Callable, Dict, Optional

from PyQt6.QtWidgets import QSystemTrayIcon

from chat_push.channels import NotificationChannel
from chat_push.dispatcher import BigTextStyle, DeepLink, InboxStyle, MessagingStyle, NotificationSpec

LOGGER = logging.getLogger("CYCB.Chat.Push")
DEFAULT_DISPLAY_MS = 10000


def render_body(spec: NotificationSpec) -> str:
    """Flatten the rich style into the plain text a tray balloon can show."""
    style = spec.style
    if isinstance(style, MessagingStyle):
        if style.sender_name and style.sender_name != style.conversation_title:
            return f"{style.sender_name}: {style.text}"
        return style.text
    if isinstance(style, BigTextStyle):
        return f"{style.big_text}\n{style.summary}"
    if isinstance(style, InboxStyle):
        return "\n".join(style.lines + (style.summary,))
    return spec.text


class QtTrayNotificationSurface:
    """Shows notifications as tray balloons; a balloon click opens its deep link."""

    def __init__(
        self,
        tray: QSystemTrayIcon,
        on_open: Callable[[DeepLink], None],
        *,
        display_ms: int = DEFAULT_DISPLAY_MS,
    ) -> None:
        self._tray = tray
        self._on_open = on_open
        self._display_ms = display_ms
        self._channels: Dict[str, NotificationChannel] = {}
        self._active: Dict[int, NotificationSpec] = {}
        self._shown_id: Optional[int] = None
        self._vibration_warned = False
        self._tray.messageClicked.connect(self._handle_clicked)

    def create_channel(self, channel: NotificationChannel) -> None:
        self._channels[channel.id] = channel
        LOGGER.debug("Registered notification channel %s (%s)", channel.id, channel.name)

    def notify(self, spec: NotificationSpec) -> None:
        if spec.channel_id not in self._channels:
            LOGGER.warning("Notification %s targets unknown channel %s", spec.id, spec.channel_id)
        if spec.vibrate and spec.vibration_pattern and not self._vibration_warned:
            LOGGER.info("Vibration pattern %s not supported by the tray surface", spec.vibration_pattern)
            self._vibration_warned = True
        # Same id replaces the earlier entry.
        self._active[spec.id] = spec
        self._shown_id = spec.id
        self._tray.showMessage(
            spec.title,
            render_body(spec),
            QSystemTrayIcon.MessageIcon.Information,
            self._display_ms,
        )

    def cancel(self, notification_id: int) -> None:
        self._active.pop(notification_id, None)
        if self._shown_id == notification_id:
            self._shown_id = None

    def active_ids(self):
        return frozenset(self._active)

    def _handle_clicked(self) -> None:
        if self._shown_id is None:
            return
        spec = self._active.pop(self._shown_id, None)
        self._shown_id = None
        if spec is None:
            return
        try:
            self._on_open(spec.deep_link)
        except Exception as exc:
            LOGGER.error("Failed to open notification target %s: %s", spec.deep_link, exc, exc_info=exc)
