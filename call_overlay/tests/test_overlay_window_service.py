from __future__ import annotations

import pytest

from call_overlay.overlay_controller import (
    ACTION_END_CALL,
    start_overlay_command,
    stop_overlay_command,
    update_overlay_command,
)

pytestmark = pytest.mark.pyqt_required


def _drain(app):
    for _ in range(3):
        app.processEvents()


def test_window_flags_and_initial_position(qt_app):
    from PyQt6.QtCore import Qt

    from call_overlay.overlay_window import CallOverlayWindow

    window = CallOverlayWindow("Crew", "00:00")
    flags = window.windowFlags()

    assert flags & Qt.WindowType.FramelessWindowHint
    assert flags & Qt.WindowType.WindowStaysOnTopHint
    assert window.testAttribute(Qt.WidgetAttribute.WA_ShowWithoutActivating)
    assert window.testAttribute(Qt.WidgetAttribute.WA_TranslucentBackground)
    assert (window.x(), window.y()) == (0, 100)
    assert window.chat_name_label.text() == "Crew"

    window.set_duration("00:42")
    window.set_muted(True)
    assert window.duration_label.text() == "00:42"
    assert window.mute_button.text() != window.end_call_button.text()
    window.deleteLater()


def test_buttons_emit_signals(qt_app):
    from call_overlay.overlay_window import CallOverlayWindow

    window = CallOverlayWindow("Crew", "00:00")
    seen = []
    window.mute_clicked.connect(lambda: seen.append("mute"))
    window.end_call_clicked.connect(lambda: seen.append("end"))
    window.expand_clicked.connect(lambda: seen.append("expand"))

    window.mute_button.click()
    window.end_call_button.click()
    window.expand_button.click()

    assert seen == ["mute", "end", "expand"]
    window.deleteLater()


def test_service_runs_commands_on_qt_thread(qt_app):
    import threading

    from call_overlay.overlay_service import CallOverlayService

    service = CallOverlayService()
    stopped = []
    service.stopped.connect(lambda: stopped.append(True))

    worker = threading.Thread(target=service.submit, args=(start_overlay_command("Crew", "00:01"),))
    worker.start()
    worker.join()
    _drain(qt_app)
    assert service.is_showing
    assert service.window.duration_label.text() == "00:01"

    service.submit(update_overlay_command("00:02"))
    _drain(qt_app)
    assert service.window.duration_label.text() == "00:02"

    service.submit(stop_overlay_command())
    _drain(qt_app)
    assert not service.is_showing
    assert stopped == [True]


def test_end_call_button_broadcasts_and_stops(qt_app):
    from call_overlay.overlay_service import CallOverlayService

    service = CallOverlayService()
    broadcasts = []
    service.broadcast.connect(broadcasts.append)
    service.submit(start_overlay_command("Crew"))
    _drain(qt_app)

    service.window.end_call_button.click()

    assert broadcasts == [ACTION_END_CALL]
    assert not service.is_showing


def test_mute_button_updates_icon(qt_app):
    from call_overlay.overlay_service import CallOverlayService
    from call_overlay.overlay_window import MIC_OFF_GLYPH

    service = CallOverlayService()
    service.submit(start_overlay_command("Crew"))
    _drain(qt_app)

    service.window.mute_button.click()

    assert service.window.mute_button.text() == MIC_OFF_GLYPH
    service.shutdown()
