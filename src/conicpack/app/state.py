from __future__ import annotations

import logging
from typing import Optional

from PySide6.QtCore import QObject, Signal

from conicpack.app.capture import SvgCapture
from conicpack.controller.sketch import ControlSignals, Sketch
from conicpack.model.packing import PointerState

logger = logging.getLogger(__name__)


class Store(QObject):
    """Central sketch holder with signals for the window/status bar sync."""
    circles_changed = Signal(int)
    cursor_changed = Signal(float, float)
    capture_written = Signal(str)
    capture_failed = Signal(str)

    def __init__(self, sketch: Sketch, capture: Optional[SvgCapture] = None) -> None:
        super().__init__()
        self.sketch = sketch
        self.capture = capture or SvgCapture(sketch.config.capture_dir)
        self._pending = ControlSignals()
        self._last_count = 0

    # --- input from the widget ---

    def queue_start(self, delta: int) -> None:
        if delta > 0:
            self._pending.start_up += 1
        else:
            self._pending.start_down += 1

    def queue_step(self, delta: int) -> None:
        if delta > 0:
            self._pending.step_up += 1
        else:
            self._pending.step_down += 1

    def queue_capture(self) -> None:
        self._pending.capture = True

    # --- frame driving ---

    def advance(self, width: int, height: int, pointer: PointerState, place: bool = True) -> int:
        controls, self._pending = self._pending, ControlSignals()
        count = self.sketch.advance((width, height), pointer, controls, place=place)

        if not controls.is_empty:
            cursor = self.sketch.state.cursor
            self.cursor_changed.emit(cursor.position, cursor.step)
        if count != self._last_count:
            self._last_count = count
            self.circles_changed.emit(count)

        if self.sketch.state.consume_capture_request():
            self._write_capture(width, height)
        return count

    def flush_controls(self, width: int, height: int) -> int:
        """Apply queued controls and captures without attempting a placement."""
        return self.advance(width, height, PointerState(), place=False)

    def _write_capture(self, width: int, height: int) -> None:
        try:
            path = self.capture.write(self.sketch, width, height)
        except OSError as e:
            logger.exception(f"Failed to write capture: {e}")
            self.capture_failed.emit(str(e))
            return
        self.capture_written.emit(path)

    def new_sketch(self) -> None:
        self.sketch.state.new_sketch()
        self._last_count = 0
        self.circles_changed.emit(0)
