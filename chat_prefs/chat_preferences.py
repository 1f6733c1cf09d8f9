from __future__ import annotations

from pathlib import Path
from typing import Any, FrozenSet, MutableMapping, Optional

from chat_prefs.store import JsonKeyValueStore, open_store

PINNED_CHATS_KEY = "pinned_chats"
HIDDEN_CHATS_KEY = "hidden_chats"


def _id_set(raw: Any) -> FrozenSet[str]:
    if not isinstance(raw, list):
        return frozenset()
    return frozenset(str(item) for item in raw if item)


class ChatPreferences:
    """Pinned and hidden chat ids, kept in the ``chat_prefs`` store."""

    def __init__(self, store: Optional[JsonKeyValueStore] = None, *, data_dir: Optional[Path] = None) -> None:
        self.store = store or open_store("chat_prefs", data_dir)

    def pinned_chat_ids(self) -> FrozenSet[str]:
        return _id_set(self.store.get(PINNED_CHATS_KEY))

    def hidden_chat_ids(self) -> FrozenSet[str]:
        return _id_set(self.store.get(HIDDEN_CHATS_KEY))

    def toggle_pin_chat(self, chat_id: str) -> bool:
        """Pin or unpin ``chat_id``; returns True when the chat ends up pinned."""
        outcome = {}

        def _toggle(data: MutableMapping[str, Any]) -> None:
            pinned = set(_id_set(data.get(PINNED_CHATS_KEY)))
            if chat_id in pinned:
                pinned.discard(chat_id)
                outcome["pinned"] = False
            else:
                pinned.add(chat_id)
                outcome["pinned"] = True
            data[PINNED_CHATS_KEY] = sorted(pinned)

        self.store.edit(_toggle)
        return outcome["pinned"]

    def hide_chat(self, chat_id: str) -> None:
        def _hide(data: MutableMapping[str, Any]) -> None:
            data[HIDDEN_CHATS_KEY] = sorted(_id_set(data.get(HIDDEN_CHATS_KEY)) | {chat_id})

        self.store.edit(_hide)

    def unhide_chat(self, chat_id: str) -> None:
        def _unhide(data: MutableMapping[str, Any]) -> None:
            hidden = _id_set(data.get(HIDDEN_CHATS_KEY))
            if chat_id in hidden:
                data[HIDDEN_CHATS_KEY] = sorted(hidden - {chat_id})

        self.store.edit(_unhide)
