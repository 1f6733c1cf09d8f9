"""Floating in-call overlay shown while the chat app is in the background."""

from call_overlay.drag_tracker import DragTracker
from call_overlay.overlay_controller import (
    ACTION_END_CALL,
    ACTION_START_OVERLAY,
    ACTION_STOP_OVERLAY,
    ACTION_UPDATE_OVERLAY,
    EXTRA_CALL_DURATION,
    EXTRA_CHAT_NAME,
    CallOverlayController,
    OverlayCommand,
    OverlayState,
    format_call_duration,
    parse_call_duration,
    start_overlay_command,
    stop_overlay_command,
    update_overlay_command,
)

__all__ = [
    "ACTION_END_CALL",
    "ACTION_START_OVERLAY",
    "ACTION_STOP_OVERLAY",
    "ACTION_UPDATE_OVERLAY",
    "CallOverlayController",
    "DragTracker",
    "EXTRA_CALL_DURATION",
    "EXTRA_CHAT_NAME",
    "OverlayCommand",
    "OverlayState",
    "format_call_duration",
    "parse_call_duration",
    "start_overlay_command",
    "stop_overlay_command",
    "update_overlay_command",
]
