"""Local preference storage for the CYCB chat client."""

from chat_prefs.chat_preferences import ChatPreferences
from chat_prefs.custom_themes import ColorScheme, ColorTheme, CustomTheme, CustomThemesPreferences, parse_hex_color
from chat_prefs.paths import DATA_DIR_ENV_VAR, resolve_data_dir
from chat_prefs.settings import DEFAULT_THEME_NAME, NotificationSettings, SettingsPreferences
from chat_prefs.store import JsonKeyValueStore, open_store
from chat_prefs.token_store import TokenStore

__all__ = [
    "ChatPreferences",
    "ColorScheme",
    "ColorTheme",
    "CustomTheme",
    "CustomThemesPreferences",
    "DATA_DIR_ENV_VAR",
    "DEFAULT_THEME_NAME",
    "JsonKeyValueStore",
    "NotificationSettings",
    "SettingsPreferences",
    "TokenStore",
    "open_store",
    "parse_hex_color",
]
