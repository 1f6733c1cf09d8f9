from __future__ import annotations

import pytest

from chat_prefs.chat_preferences import ChatPreferences
from chat_prefs.settings import NotificationSettings, SettingsPreferences
from chat_prefs.token_store import TokenStore

EXPECTED_DEFAULTS = {
    "notifications_enabled": True,
    "messages_notif": True,
    "friend_requests_notif": True,
    "chat_invites_notif": True,
    "sound_enabled": True,
    "vibration_enabled": True,
    "dark_mode": False,
    "dynamic_colors": False,
    "compact_mode": False,
    "selected_theme": "Electric Sunset",
    "read_receipts": True,
    "typing_indicator": True,
    "last_seen_visible": True,
    "profile_photo_visible": True,
    "auto_download_media": True,
    "auto_play_gifs": True,
    "enter_to_send": False,
}


def test_defaults_when_store_is_empty(tmp_path):
    settings = SettingsPreferences(data_dir=tmp_path)
    assert settings.as_dict() == EXPECTED_DEFAULTS
    assert settings.dark_mode is False


def test_assignment_persists_each_key_independently(tmp_path):
    settings = SettingsPreferences(data_dir=tmp_path)

    settings.dark_mode = True
    settings.selected_theme = "Midnight"

    reloaded = SettingsPreferences(data_dir=tmp_path)
    assert reloaded.dark_mode is True
    assert reloaded.selected_theme == "Midnight"
    assert reloaded.store.data() == {"dark_mode": True, "selected_theme": "Midnight"}


def test_wrong_type_is_rejected(tmp_path):
    settings = SettingsPreferences(data_dir=tmp_path)
    with pytest.raises(TypeError):
        settings.dark_mode = "yes"


def test_corrupt_value_reads_as_default(tmp_path):
    settings = SettingsPreferences(data_dir=tmp_path)
    settings.store.set("messages_notif", "nope")
    assert settings.messages_notif is True


def test_notification_snapshot(tmp_path):
    settings = SettingsPreferences(data_dir=tmp_path)
    settings.messages_notif = False
    settings.vibration_enabled = False

    snapshot = settings.notification_snapshot()

    assert snapshot == NotificationSettings(messages_notif=False, vibration_enabled=False)


def test_pin_and_hide_chats(tmp_path):
    prefs = ChatPreferences(data_dir=tmp_path)

    assert prefs.toggle_pin_chat("c1") is True
    assert prefs.toggle_pin_chat("c2") is True
    assert prefs.toggle_pin_chat("c1") is False
    prefs.hide_chat("c3")
    prefs.hide_chat("c3")
    prefs.unhide_chat("missing")

    assert prefs.pinned_chat_ids() == frozenset({"c2"})
    assert prefs.hidden_chat_ids() == frozenset({"c3"})

    prefs.unhide_chat("c3")
    assert prefs.hidden_chat_ids() == frozenset()


def test_token_store_round_trip_and_clear(tmp_path):
    tokens = TokenStore(data_dir=tmp_path)
    assert tokens.load() == (None, None)

    tokens.save("tok", "u1")
    assert TokenStore(data_dir=tmp_path).load() == ("tok", "u1")

    tokens.clear()
    assert tokens.token is None
