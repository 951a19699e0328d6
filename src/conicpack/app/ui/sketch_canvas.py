"""
Sketch Canvas Widget
Drives the frame loop and forwards pointer/key input to the store.
"""
from __future__ import annotations

from PySide6.QtCore import Qt, QTimer, Signal
from PySide6.QtGui import QKeyEvent, QMouseEvent, QPainter, QPaintEvent
from PySide6.QtWidgets import QWidget

from conicpack.app.capture import QPainterCanvas
from conicpack.app.state import Store
from conicpack.model.packing import PointerState


class SketchCanvas(QWidget):
    """
    Fixed-size drawing surface.

      - a QTimer ticks the sketch (one placement attempt per timeout),
      - paintEvent renders the whole collection,
      - mouse press/drag biases placement toward the pointer,
      - arrows adjust the noise cursor, S captures, N restarts, Space pauses.
    """
    paused_changed = Signal(bool)

    def __init__(self, store: Store, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.store = store
        config = store.sketch.config

        self.setFixedSize(config.canvas_width, config.canvas_height)
        self.setFocusPolicy(Qt.FocusPolicy.StrongFocus)
        self.setMouseTracking(True)

        self._pointer = PointerState()

        self._timer = QTimer(self)
        self._timer.setInterval(config.frame_interval_ms)
        self._timer.timeout.connect(self._on_frame)

    # ------------------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------------------

    def start(self) -> None:
        self._timer.start()
        self.paused_changed.emit(False)

    def stop(self) -> None:
        self._timer.stop()
        self.paused_changed.emit(True)

    def is_running(self) -> bool:
        return self._timer.isActive()

    def toggle_pause(self) -> None:
        if self.is_running():
            self.stop()
        else:
            self.start()

    def flush_input(self) -> None:
        """Apply queued controls and captures now; the timer would only do it when running."""
        if self.is_running():
            return
        self.store.flush_controls(self.width(), self.height())
        self.update()

    # ------------------------------------------------------------------------------
    # Qt events
    # ------------------------------------------------------------------------------

    def _on_frame(self) -> None:
        self.store.advance(self.width(), self.height(), self._pointer)
        self.update()

    def paintEvent(self, event: QPaintEvent) -> None:
        painter = QPainter(self)
        try:
            self.store.sketch.render(
                QPainterCanvas(painter, self.store.sketch.config),
                (self.width(), self.height()),
            )
        finally:
            painter.end()

    def mousePressEvent(self, event: QMouseEvent) -> None:
        if event.button() == Qt.MouseButton.LeftButton:
            pos = event.position()
            self._pointer = PointerState(pressed=True, x=pos.x(), y=pos.y())

    def mouseMoveEvent(self, event: QMouseEvent) -> None:
        pos = event.position()
        self._pointer = PointerState(pressed=self._pointer.pressed, x=pos.x(), y=pos.y())

    def mouseReleaseEvent(self, event: QMouseEvent) -> None:
        if event.button() == Qt.MouseButton.LeftButton:
            self._pointer = PointerState(pressed=False, x=self._pointer.x, y=self._pointer.y)

    def keyPressEvent(self, event: QKeyEvent) -> None:
        key = event.key()
        if key == Qt.Key.Key_Up:
            self.store.queue_start(+1)
        elif key == Qt.Key.Key_Down:
            self.store.queue_start(-1)
        elif key == Qt.Key.Key_Right:
            self.store.queue_step(+1)
        elif key == Qt.Key.Key_Left:
            self.store.queue_step(-1)
        elif key == Qt.Key.Key_S:
            self.store.queue_capture()
        elif key == Qt.Key.Key_N:
            self.store.new_sketch()
            self.update()
        elif key == Qt.Key.Key_Space:
            self.toggle_pause()
            return
        else:
            super().keyPressEvent(event)
            return
        self.flush_input()
