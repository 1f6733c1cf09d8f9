"""Call overlay lifecycle: show, update, tear down, and react to button taps."""
from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Mapping, Optional

LOGGER = logging.getLogger("CYCB.Chat.Overlay")

ACTION_START_OVERLAY = "com.cycb.chat.START_OVERLAY"
ACTION_UPDATE_OVERLAY = "com.cycb.chat.UPDATE_OVERLAY"
ACTION_STOP_OVERLAY = "com.cycb.chat.STOP_OVERLAY"
ACTION_END_CALL = "com.cycb.chat.END_CALL"

EXTRA_CHAT_NAME = "chat_name"
EXTRA_CALL_DURATION = "call_duration"

DEFAULT_CHAT_NAME = "Voice Call"
DEFAULT_DURATION = "00:00"


class OverlayState(enum.Enum):
    HIDDEN = "hidden"
    SHOWING = "showing"


@dataclass(frozen=True)
class OverlayCommand:
    action: str
    extras: Mapping[str, str] = field(default_factory=dict)


def start_overlay_command(chat_name: str, call_duration: str = DEFAULT_DURATION) -> OverlayCommand:
    return OverlayCommand(ACTION_START_OVERLAY, {EXTRA_CHAT_NAME: chat_name, EXTRA_CALL_DURATION: call_duration})


def update_overlay_command(call_duration: str) -> OverlayCommand:
    return OverlayCommand(ACTION_UPDATE_OVERLAY, {EXTRA_CALL_DURATION: call_duration})


def stop_overlay_command() -> OverlayCommand:
    return OverlayCommand(ACTION_STOP_OVERLAY)


def format_call_duration(seconds: int) -> str:
    """``MM:SS`` below one hour, ``H:MM:SS`` from then on."""
    total = max(int(seconds), 0)
    hours, remainder = divmod(total, 3600)
    minutes, secs = divmod(remainder, 60)
    if hours:
        return f"{hours}:{minutes:02d}:{secs:02d}"
    return f"{minutes:02d}:{secs:02d}"


def parse_call_duration(text: str) -> int:
    """Inverse of :func:`format_call_duration`; unparseable input reads as zero."""
    try:
        parts = [int(part) for part in text.strip().split(":")]
    except (AttributeError, ValueError):
        return 0
    if not parts or len(parts) > 3 or any(part < 0 for part in parts):
        return 0
    total = 0
    for part in parts:
        total = total * 60 + part
    return total


class CallOverlayController:
    """Pure overlay state machine; every platform effect arrives as an injected callable."""

    def __init__(
        self,
        *,
        create_window_fn: Callable[[str, str], Any],
        set_duration_fn: Callable[[Any, str], None],
        destroy_window_fn: Callable[[Any], None],
        stop_self_fn: Callable[[], None],
        toggle_mute_fn: Callable[[], bool],
        broadcast_fn: Callable[[str], None],
        launch_app_fn: Callable[[], None],
        log_fn: Callable[..., None] = LOGGER.debug,
    ) -> None:
        self._create_window = create_window_fn
        self._set_duration = set_duration_fn
        self._destroy_window = destroy_window_fn
        self._stop_self = stop_self_fn
        self._toggle_mute = toggle_mute_fn
        self._broadcast = broadcast_fn
        self._launch_app = launch_app_fn
        self._log = log_fn
        self._state = OverlayState.HIDDEN
        self._window: Any = None

    @property
    def state(self) -> OverlayState:
        return self._state

    @property
    def window(self) -> Any:
        return self._window

    def start(self, chat_name: str = DEFAULT_CHAT_NAME, duration: str = DEFAULT_DURATION) -> bool:
        if self._state is OverlayState.SHOWING:
            self._log("Overlay already showing")
            return False
        try:
            window = self._create_window(chat_name, duration)
        except Exception as exc:
            LOGGER.error("Failed to create call overlay: %s", exc, exc_info=exc)
            return False
        self._window = window
        self._state = OverlayState.SHOWING
        self._log("Overlay shown for %s", chat_name)
        return True

    def update(self, duration: str) -> None:
        if self._state is not OverlayState.SHOWING:
            return
        try:
            self._set_duration(self._window, duration)
        except Exception as exc:
            LOGGER.error("Failed to update call overlay: %s", exc, exc_info=exc)

    def stop(self) -> None:
        window, self._window = self._window, None
        self._state = OverlayState.HIDDEN
        try:
            if window is not None:
                self._destroy_window(window)
        except Exception as exc:
            LOGGER.error("Failed to remove call overlay window: %s", exc, exc_info=exc)
        finally:
            try:
                self._stop_self()
            except Exception as exc:
                LOGGER.error("Failed to stop call overlay service: %s", exc, exc_info=exc)
        self._log("Overlay stopped")

    def on_destroy(self) -> None:
        self.stop()

    def handle_command(self, command: OverlayCommand) -> None:
        extras = command.extras or {}
        if command.action == ACTION_START_OVERLAY:
            self.start(
                extras.get(EXTRA_CHAT_NAME) or DEFAULT_CHAT_NAME,
                extras.get(EXTRA_CALL_DURATION) or DEFAULT_DURATION,
            )
        elif command.action == ACTION_UPDATE_OVERLAY:
            self.update(extras.get(EXTRA_CALL_DURATION) or DEFAULT_DURATION)
        elif command.action == ACTION_STOP_OVERLAY:
            self.stop()
        else:
            self._log("Ignoring unknown overlay action %s", command.action)

    # Tap targets ---------------------------------------------------------

    def on_mute_tapped(self) -> Optional[bool]:
        """Toggle the microphone; returns the new muted state, or None if toggling failed."""
        try:
            return bool(self._toggle_mute())
        except Exception as exc:
            LOGGER.error("Failed to toggle mute: %s", exc, exc_info=exc)
            return None

    def on_end_call_tapped(self) -> None:
        try:
            self._broadcast(ACTION_END_CALL)
        except Exception as exc:
            LOGGER.error("Failed to broadcast end of call: %s", exc, exc_info=exc)
        finally:
            self.stop()

    def on_expand_tapped(self) -> None:
        try:
            self._launch_app()
        except Exception as exc:
            LOGGER.error("Failed to bring the app to front: %s", exc, exc_info=exc)
        finally:
            self.stop()
