"""Persists the signed-in session across restarts."""
from __future__ import annotations

from pathlib import Path
from typing import Any, MutableMapping, Optional, Tuple

from chat_prefs.store import JsonKeyValueStore, open_store

AUTH_TOKEN_KEY = "auth_token"
USER_ID_KEY = "user_id"


class TokenStore:
    def __init__(self, store: Optional[JsonKeyValueStore] = None, *, data_dir: Optional[Path] = None) -> None:
        self.store = store or open_store("auth", data_dir)

    def load(self) -> Tuple[Optional[str], Optional[str]]:
        data = self.store.data()
        token = data.get(AUTH_TOKEN_KEY)
        user_id = data.get(USER_ID_KEY)
        return (token if isinstance(token, str) and token else None, user_id if isinstance(user_id, str) and user_id else None)

    @property
    def token(self) -> Optional[str]:
        return self.load()[0]

    def save(self, token: str, user_id: Optional[str]) -> None:
        """Write token and user together so a reader never sees a mixed pair."""

        def _save(data: MutableMapping[str, Any]) -> None:
            data[AUTH_TOKEN_KEY] = token
            if user_id:
                data[USER_ID_KEY] = user_id
            else:
                data.pop(USER_ID_KEY, None)

        self.store.edit(_save)

    def clear(self) -> None:
        def _clear(data: MutableMapping[str, Any]) -> None:
            data.pop(AUTH_TOKEN_KEY, None)
            data.pop(USER_ID_KEY, None)

        self.store.edit(_clear)
