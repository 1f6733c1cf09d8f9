"""User-facing app settings persisted in the ``settings`` store."""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

from chat_prefs.store import JsonKeyValueStore, open_store

DEFAULT_THEME_NAME = "Electric Sunset"


class _Setting:
    """Descriptor mapping an attribute to one independently defaulted store key."""

    def __init__(self, key: str, default: Any, kind: type) -> None:
        self.key = key
        self.default = default
        self.kind = kind

    def __set_name__(self, owner, name: str) -> None:
        self.name = name

    def __get__(self, instance: Optional["SettingsPreferences"], owner=None):
        if instance is None:
            return self
        return self.coerce(instance.store.get(self.key))

    def __set__(self, instance: "SettingsPreferences", value: Any) -> None:
        if not isinstance(value, self.kind):
            raise TypeError(f"{self.name} expects {self.kind.__name__}, got {type(value).__name__}")
        instance.store.set(self.key, value)

    def coerce(self, raw: Any) -> Any:
        if raw is None or not isinstance(raw, self.kind):
            return self.default
        return raw


def _flag(key: str, default: bool) -> _Setting:
    return _Setting(key, default, bool)


@dataclass(frozen=True)
class NotificationSettings:
    """Snapshot of the toggles consulted when a push message arrives."""

    notifications_enabled: bool = True
    messages_notif: bool = True
    friend_requests_notif: bool = True
    chat_invites_notif: bool = True
    sound_enabled: bool = True
    vibration_enabled: bool = True


class SettingsPreferences:
    # Notifications
    notifications_enabled = _flag("notifications_enabled", True)
    messages_notif = _flag("messages_notif", True)
    friend_requests_notif = _flag("friend_requests_notif", True)
    chat_invites_notif = _flag("chat_invites_notif", True)
    sound_enabled = _flag("sound_enabled", True)
    vibration_enabled = _flag("vibration_enabled", True)

    # Appearance
    dark_mode = _flag("dark_mode", False)
    dynamic_colors = _flag("dynamic_colors", False)
    compact_mode = _flag("compact_mode", False)
    selected_theme = _Setting("selected_theme", DEFAULT_THEME_NAME, str)

    # Privacy
    read_receipts = _flag("read_receipts", True)
    typing_indicator = _flag("typing_indicator", True)
    last_seen_visible = _flag("last_seen_visible", True)
    profile_photo_visible = _flag("profile_photo_visible", True)

    # Chat behaviour
    auto_download_media = _flag("auto_download_media", True)
    auto_play_gifs = _flag("auto_play_gifs", True)
    enter_to_send = _flag("enter_to_send", False)

    def __init__(self, store: Optional[JsonKeyValueStore] = None, *, data_dir: Optional[Path] = None) -> None:
        self.store = store or open_store("settings", data_dir)

    @classmethod
    def settings(cls) -> Dict[str, _Setting]:
        return {name: value for name, value in vars(cls).items() if isinstance(value, _Setting)}

    def as_dict(self) -> Dict[str, Any]:
        """All settings resolved against their defaults, from one consistent read."""
        data = self.store.data()
        return {name: setting.coerce(data.get(setting.key)) for name, setting in self.settings().items()}

    def notification_snapshot(self) -> NotificationSettings:
        values = self.as_dict()
        return NotificationSettings(
            notifications_enabled=values["notifications_enabled"],
            messages_notif=values["messages_notif"],
            friend_requests_notif=values["friend_requests_notif"],
            chat_invites_notif=values["chat_invites_notif"],
            sound_enabled=values["sound_enabled"],
            vibration_enabled=values["vibration_enabled"],
        )
