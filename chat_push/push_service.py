"""Entry points invoked by the push transport: new messages and token rotation."""
from __future__ import annotations

import logging
import threading
import time
from typing import Any, Callable, Mapping, Optional

from chat_api.api_service import ChatApiService
from chat_prefs.settings import SettingsPreferences
from chat_prefs.token_store import TokenStore
from chat_push.channels import CHANNELS
from chat_push.dispatcher import NotificationSpec, dispatch
from chat_push.surface import NotificationSurface

LOGGER = logging.getLogger("CYCB.Chat.Push")


def _now_ms() -> int:
    return int(time.time() * 1000)


class PushService:
    """Shows incoming push messages and keeps the backend's push token current.

    Nothing here raises: failures are logged and reported through return values.
    """

    def __init__(
        self,
        surface: NotificationSurface,
        settings: SettingsPreferences,
        api: ChatApiService,
        *,
        token_store: Optional[TokenStore] = None,
        clock_ms: Callable[[], int] = _now_ms,
    ) -> None:
        self._surface = surface
        self._settings = settings
        self._api = api
        self._token_store = token_store
        self._clock_ms = clock_ms

    def create_channels(self) -> None:
        for channel in CHANNELS:
            try:
                self._surface.create_channel(channel)
            except Exception as exc:
                LOGGER.warning("Failed to create notification channel %s: %s", channel.id, exc, exc_info=exc)

    def on_message_received(
        self,
        data: Mapping[str, Any],
        notification_body: Optional[str] = None,
    ) -> Optional[NotificationSpec]:
        try:
            settings = self._settings.notification_snapshot()
            spec = dispatch(data, settings, now_ms=self._clock_ms(), notification_body=notification_body)
            if spec is None:
                LOGGER.debug("Push message type=%s suppressed", data.get("type"))
                return None
            self._surface.notify(spec)
            LOGGER.debug("Shown notification id=%s channel=%s", spec.id, spec.channel_id)
            return spec
        except Exception as exc:
            LOGGER.error("Failed to handle push message: %s", exc, exc_info=exc)
            return None

    def on_new_token(self, push_token: str) -> threading.Thread:
        """Register a rotated push token in the background."""
        worker = threading.Thread(
            target=self.register_push_token,
            args=(push_token,),
            name="CYCBChat-PushToken",
            daemon=True,
        )
        worker.start()
        return worker

    def register_push_token(self, push_token: str) -> bool:
        try:
            if not self._ensure_auth_token():
                LOGGER.debug("Skipping push token registration: not signed in")
                return False
            response = self._api.register_push_token(push_token)
            try:
                if response.ok:
                    LOGGER.info("Push token registered")
                    return True
                LOGGER.error("Failed to register push token: HTTP %s", response.status_code)
                return False
            finally:
                response.close()
        except Exception as exc:
            LOGGER.error("Error registering push token: %s", exc, exc_info=exc)
            return False

    def _ensure_auth_token(self) -> bool:
        session = self._api.session
        if session.snapshot().is_authenticated:
            return True
        if self._token_store is None:
            return False
        token, user_id = self._token_store.load()
        if not token:
            return False
        session.sign_in(token, user_id)
        return True
