"""User-defined colour themes, stored as one JSON list."""
from __future__ import annotations

import json
import logging
import string
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any, Dict, List, Mapping, MutableMapping, Optional, Tuple

from chat_prefs.store import JsonKeyValueStore, open_store

LOGGER = logging.getLogger("CYCB.Chat.Prefs")

CUSTOM_THEMES_KEY = "custom_themes_json"
FALLBACK_GRAY: Tuple[int, int, int, int] = (128, 128, 128, 255)

RGBA = Tuple[int, int, int, int]


def parse_hex_color(value: str) -> RGBA:
    """Parse ``#RRGGBB`` or ``#AARRGGBB``; anything else maps to opaque gray."""
    if not isinstance(value, str):
        return FALLBACK_GRAY
    text = value.strip()
    if text.startswith("#"):
        text = text[1:]
    if len(text) not in (6, 8) or not all(char in string.hexdigits for char in text):
        return FALLBACK_GRAY
    packed = int(text, 16)
    if len(text) == 6:
        alpha = 255
    else:
        alpha = (packed >> 24) & 0xFF
    return ((packed >> 16) & 0xFF, (packed >> 8) & 0xFF, packed & 0xFF, alpha)


@dataclass(frozen=True)
class ColorScheme:
    primary: RGBA
    secondary: RGBA
    tertiary: RGBA
    background: RGBA
    surface: RGBA


@dataclass(frozen=True)
class ColorTheme:
    name: str
    light: ColorScheme
    dark: ColorScheme

    def scheme(self, dark_mode: bool) -> ColorScheme:
        return self.dark if dark_mode else self.light


@dataclass(frozen=True)
class CustomTheme:
    name: str
    light_primary: str
    light_secondary: str
    light_tertiary: str
    light_background: str
    light_surface: str
    dark_primary: str
    dark_secondary: str
    dark_tertiary: str
    dark_background: str
    dark_surface: str

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "CustomTheme":
        values = {}
        for field in fields(cls):
            value = data.get(field.name)
            if not isinstance(value, str):
                raise ValueError(f"custom theme field {field.name!r} must be a string")
            values[field.name] = value
        return cls(**values)

    def to_dict(self) -> Dict[str, str]:
        return asdict(self)

    def to_color_theme(self) -> ColorTheme:
        return ColorTheme(
            name=self.name,
            light=ColorScheme(
                primary=parse_hex_color(self.light_primary),
                secondary=parse_hex_color(self.light_secondary),
                tertiary=parse_hex_color(self.light_tertiary),
                background=parse_hex_color(self.light_background),
                surface=parse_hex_color(self.light_surface),
            ),
            dark=ColorScheme(
                primary=parse_hex_color(self.dark_primary),
                secondary=parse_hex_color(self.dark_secondary),
                tertiary=parse_hex_color(self.dark_tertiary),
                background=parse_hex_color(self.dark_background),
                surface=parse_hex_color(self.dark_surface),
            ),
        )


def _decode_themes(raw: Any) -> List[CustomTheme]:
    if not raw:
        return []
    try:
        entries = json.loads(raw)
        if not isinstance(entries, list):
            raise ValueError("custom themes payload is not a list")
        return [CustomTheme.from_dict(entry) for entry in entries]
    except (TypeError, ValueError, AttributeError) as exc:
        LOGGER.warning("Ignoring unreadable custom themes: %s", exc)
        return []


def _encode_themes(themes: List[CustomTheme]) -> str:
    return json.dumps([theme.to_dict() for theme in themes])


class CustomThemesPreferences:
    def __init__(self, store: Optional[JsonKeyValueStore] = None, *, data_dir: Optional[Path] = None) -> None:
        self.store = store or open_store("custom_themes", data_dir)

    def get_custom_themes(self) -> List[CustomTheme]:
        return _decode_themes(self.store.get(CUSTOM_THEMES_KEY))

    def get_custom_theme(self, name: str) -> Optional[CustomTheme]:
        for theme in self.get_custom_themes():
            if theme.name == name:
                return theme
        return None

    def save_custom_theme(self, theme: CustomTheme) -> None:
        """Replace any theme with the same name; the saved theme moves to the end."""

        def _save(data: MutableMapping[str, Any]) -> None:
            themes = [existing for existing in _decode_themes(data.get(CUSTOM_THEMES_KEY)) if existing.name != theme.name]
            themes.append(theme)
            data[CUSTOM_THEMES_KEY] = _encode_themes(themes)

        self.store.edit(_save)

    def delete_custom_theme(self, name: str) -> None:
        def _delete(data: MutableMapping[str, Any]) -> None:
            themes = _decode_themes(data.get(CUSTOM_THEMES_KEY))
            remaining = [theme for theme in themes if theme.name != name]
            if len(remaining) != len(themes):
                data[CUSTOM_THEMES_KEY] = _encode_themes(remaining)

        self.store.edit(_delete)
