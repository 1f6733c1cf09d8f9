"""Auth session shared by every outgoing request."""
from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class SessionState:
    token: Optional[str] = None
    current_user_id: Optional[str] = None

    @property
    def is_authenticated(self) -> bool:
        return bool(self.token)


class SessionContext:
    """Single-writer, multi-reader cell holding the current bearer token and user.

    Each write swaps in a new immutable ``SessionState`` under a lock, so a reader
    never observes a token from one login paired with the user of another.
    """

    def __init__(self, token: Optional[str] = None, current_user_id: Optional[str] = None) -> None:
        self._lock = threading.Lock()
        self._state = SessionState(token=token, current_user_id=current_user_id)

    def snapshot(self) -> SessionState:
        return self._state

    @property
    def token(self) -> Optional[str]:
        return self._state.token

    @property
    def current_user_id(self) -> Optional[str]:
        return self._state.current_user_id

    def set_token(self, token: Optional[str]) -> None:
        with self._lock:
            self._state = SessionState(token=token or None, current_user_id=self._state.current_user_id)

    def set_current_user_id(self, user_id: Optional[str]) -> None:
        with self._lock:
            self._state = SessionState(token=self._state.token, current_user_id=user_id or None)

    def sign_in(self, token: str, user_id: Optional[str]) -> None:
        with self._lock:
            self._state = SessionState(token=token or None, current_user_id=user_id or None)

    def sign_out(self) -> None:
        with self._lock:
            self._state = SessionState()


_DEFAULT_CONTEXT = SessionContext()


def default_session() -> SessionContext:
    """Process-wide session used when a client is built without an explicit one."""
    return _DEFAULT_CONTEXT
