"""Frameless always-on-top call bar with mute, end, and expand controls."""
from __future__ import annotations

from typing import Optional

from PyQt6.QtCore import QEvent, QObject, Qt, pyqtSignal
from PyQt6.QtWidgets import QFrame, QHBoxLayout, QLabel, QPushButton, QVBoxLayout, QWidget

from call_overlay.drag_tracker import DragTracker

INITIAL_POSITION = (0, 100)
MIC_ON_GLYPH = "🎤"
MIC_OFF_GLYPH = "🔇"

_STYLE_SHEET = """
QFrame#overlayBody {
    background-color: rgba(32, 33, 36, 230);
    border-radius: 16px;
}
QLabel { color: white; }
QLabel#chatNameText { font-weight: bold; }
QPushButton {
    border: none;
    border-radius: 18px;
    min-width: 36px;
    min-height: 36px;
    color: white;
    background-color: rgba(255, 255, 255, 40);
}
QPushButton#endCallButton { background-color: #E53935; }
"""


class CallOverlayWindow(QWidget):
    mute_clicked = pyqtSignal()
    end_call_clicked = pyqtSignal()
    expand_clicked = pyqtSignal()

    def __init__(self, chat_name: str, call_duration: str, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self.setWindowFlags(
            Qt.WindowType.FramelessWindowHint
            | Qt.WindowType.WindowStaysOnTopHint
            | Qt.WindowType.Tool
        )
        self.setAttribute(Qt.WidgetAttribute.WA_ShowWithoutActivating, True)
        self.setAttribute(Qt.WidgetAttribute.WA_TranslucentBackground, True)
        self.setWindowTitle(chat_name)
        self.setStyleSheet(_STYLE_SHEET)
        self._drag = DragTracker()

        body = QFrame(self)
        body.setObjectName("overlayBody")
        outer = QVBoxLayout(self)
        outer.setContentsMargins(0, 0, 0, 0)
        outer.addWidget(body)

        self.drag_handle = QLabel("⋮⋮", body)
        self.drag_handle.setObjectName("dragHandle")
        self.drag_handle.setCursor(Qt.CursorShape.SizeAllCursor)

        self.info_area = QWidget(body)
        self.info_area.setObjectName("topInfoArea")
        info_layout = QVBoxLayout(self.info_area)
        info_layout.setContentsMargins(0, 0, 0, 0)
        info_layout.setSpacing(0)
        self.chat_name_label = QLabel(chat_name, self.info_area)
        self.chat_name_label.setObjectName("chatNameText")
        self.duration_label = QLabel(call_duration, self.info_area)
        self.duration_label.setObjectName("callDurationText")
        info_layout.addWidget(self.chat_name_label)
        info_layout.addWidget(self.duration_label)

        self.mute_button = QPushButton(MIC_ON_GLYPH, body)
        self.mute_button.setObjectName("muteButton")
        self.end_call_button = QPushButton("✕", body)
        self.end_call_button.setObjectName("endCallButton")
        self.expand_button = QPushButton("⤢", body)
        self.expand_button.setObjectName("expandButton")
        for button in (self.mute_button, self.end_call_button, self.expand_button):
            button.setFocusPolicy(Qt.FocusPolicy.NoFocus)

        row = QHBoxLayout(body)
        row.setContentsMargins(12, 8, 12, 8)
        row.setSpacing(8)
        row.addWidget(self.drag_handle)
        row.addWidget(self.info_area, 1)
        row.addWidget(self.mute_button)
        row.addWidget(self.end_call_button)
        row.addWidget(self.expand_button)

        self.mute_button.clicked.connect(lambda _checked=False: self.mute_clicked.emit())
        self.end_call_button.clicked.connect(lambda _checked=False: self.end_call_clicked.emit())
        self.expand_button.clicked.connect(lambda _checked=False: self.expand_clicked.emit())

        self.drag_handle.installEventFilter(self)
        self.info_area.installEventFilter(self)
        self.move(*INITIAL_POSITION)

    def set_duration(self, call_duration: str) -> None:
        self.duration_label.setText(call_duration)

    def set_muted(self, muted: bool) -> None:
        self.mute_button.setText(MIC_OFF_GLYPH if muted else MIC_ON_GLYPH)

    @property
    def is_dragging(self) -> bool:
        return self._drag.active

    def eventFilter(self, watched: QObject, event: QEvent) -> bool:  # type: ignore[override]
        if watched is not self.drag_handle and watched is not self.info_area:
            return super().eventFilter(watched, event)
        kind = event.type()
        if kind == QEvent.Type.MouseButtonPress and event.button() == Qt.MouseButton.LeftButton:
            point = event.globalPosition()
            self._drag.press((point.x(), point.y()), (self.x(), self.y()))
            return True
        if kind == QEvent.Type.MouseMove and self._drag.active:
            point = event.globalPosition()
            target = self._drag.move((point.x(), point.y()))
            if target is not None:
                self.move(*target)
            return True
        if kind == QEvent.Type.MouseButtonRelease and self._drag.active:
            self._drag.release()
            return True
        return super().eventFilter(watched, event)
