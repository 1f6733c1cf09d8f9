"""Qt host for :class:`CallOverlayController` with a thread-safe command queue."""
from __future__ import annotations

import logging
from typing import Callable, Optional

from PyQt6.QtCore import QObject, Qt, pyqtSignal

from call_overlay.overlay_controller import CallOverlayController, OverlayCommand, OverlayState
from call_overlay.overlay_window import CallOverlayWindow

LOGGER = logging.getLogger("CYCB.Chat.Overlay")


class CallOverlayService(QObject):
    """Owns the overlay window; commands from any thread run one at a time on the Qt thread."""

    stopped = pyqtSignal()
    broadcast = pyqtSignal(str)
    launch_requested = pyqtSignal()
    _command_posted = pyqtSignal(object)

    def __init__(
        self,
        *,
        toggle_mute_fn: Optional[Callable[[], bool]] = None,
        parent: Optional[QObject] = None,
    ) -> None:
        super().__init__(parent)
        self._muted = False
        self._toggle_mute_fn = toggle_mute_fn or self._toggle_local_mute
        self._controller = CallOverlayController(
            create_window_fn=self._create_window,
            set_duration_fn=lambda window, duration: window.set_duration(duration),
            destroy_window_fn=self._destroy_window,
            stop_self_fn=self.stopped.emit,
            toggle_mute_fn=self._toggle_mute_fn,
            broadcast_fn=self.broadcast.emit,
            launch_app_fn=self.launch_requested.emit,
            log_fn=LOGGER.debug,
        )
        self._command_posted.connect(self._controller.handle_command, Qt.ConnectionType.QueuedConnection)

    @property
    def controller(self) -> CallOverlayController:
        return self._controller

    @property
    def window(self) -> Optional[CallOverlayWindow]:
        return self._controller.window

    @property
    def is_showing(self) -> bool:
        return self._controller.state is OverlayState.SHOWING

    def submit(self, command: OverlayCommand) -> None:
        """Queue ``command``; safe to call from any thread."""
        self._command_posted.emit(command)

    def shutdown(self) -> None:
        self._controller.on_destroy()

    def _toggle_local_mute(self) -> bool:
        self._muted = not self._muted
        return self._muted

    def _create_window(self, chat_name: str, call_duration: str) -> CallOverlayWindow:
        window = CallOverlayWindow(chat_name, call_duration)
        window.mute_clicked.connect(lambda: self._handle_mute(window))
        window.end_call_clicked.connect(self._controller.on_end_call_tapped)
        window.expand_clicked.connect(self._controller.on_expand_tapped)
        window.show()
        return window

    def _handle_mute(self, window: CallOverlayWindow) -> None:
        muted = self._controller.on_mute_tapped()
        if muted is not None:
            window.set_muted(muted)

    @staticmethod
    def _destroy_window(window: CallOverlayWindow) -> None:
        window.hide()
        window.deleteLater()
