"""
Sketch Controller
=================
The per-frame entry point the host calls: apply user controls to the
process-wide noise cursor, attempt one placement, then render the whole
collection with a per-frame copy of the cursor.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Tuple

from conicpack.config import SketchConfig
from conicpack.model.noise_field import NoiseCursor
from conicpack.model.packing import PointerState
from conicpack.model.rendering import Canvas, render_frame
from conicpack.model.state import SketchState

logger = logging.getLogger(__name__)


@dataclass
class ControlSignals:
    """
    Discrete control input collected since the previous tick.

    Counts allow a host to queue several key presses between two frames.
    """
    start_up: int = 0
    start_down: int = 0
    step_up: int = 0
    step_down: int = 0
    capture: bool = False

    @property
    def is_empty(self) -> bool:
        return not (self.start_up or self.start_down or self.step_up or self.step_down or self.capture)


def apply_controls(cursor: NoiseCursor, signals: ControlSignals, config: SketchConfig) -> None:
    """Mutate the process-wide cursor; step decrements are floored at zero one by one."""
    cursor.shift_start((signals.start_up - signals.start_down) * config.start_delta)
    for _ in range(signals.step_up):
        cursor.adjust_step(config.step_delta)
    for _ in range(signals.step_down):
        cursor.adjust_step(-config.step_delta)


class Sketch:
    """
    Glue between the host and the core.

    `tick` is the all-in-one frame; hosts that paint asynchronously (Qt
    paintEvent) call `advance` from their timer and `render` when painting.
    """

    def __init__(self, state: SketchState) -> None:
        self.state = state

    @classmethod
    def from_config(cls, config: SketchConfig) -> Sketch:
        return cls(SketchState(config=config))

    @property
    def config(self) -> SketchConfig:
        return self.state.config

    def _check_canvas(self, canvas_size: Tuple[float, float]) -> Tuple[float, float]:
        width, height = canvas_size
        margin = 2.0 * self.config.min_radius
        if width <= margin or height <= margin:
            raise ValueError(
                f"Canvas {width}x{height} is too small for min_radius {self.config.min_radius}."
            )
        return float(width), float(height)

    def advance(
        self,
        canvas_size: Tuple[float, float],
        pointer: Optional[PointerState] = None,
        controls: Optional[ControlSignals] = None,
        place: bool = True,
    ) -> int:
        """
        Apply controls and attempt one placement. Returns the circle count.

        With `place=False` only the controls are applied (paused host); the
        collection and the frame counter are left alone.
        """
        width, height = self._check_canvas(canvas_size)
        if controls is not None and not controls.is_empty:
            apply_controls(self.state.cursor, controls, self.config)
            if controls.capture:
                self.state.request_capture()
            logger.debug(
                f"Cursor position={self.state.cursor.position:.3f} step={self.state.cursor.step:.3f}"
            )
        if place:
            self.state.engine.step(width, height, pointer or PointerState())
            self.state.frame += 1
        return len(self.state.circles)

    def render(self, canvas: Canvas, canvas_size: Tuple[float, float]) -> NoiseCursor:
        """
        Render the collection with a copy of the process-wide cursor.

        Returns the frame cursor so callers can inspect how far it advanced.
        """
        width, height = canvas_size
        frame_cursor = self.state.cursor.copy()
        canvas.begin_frame(width, height)
        try:
            render_frame(canvas, self.state.circles, frame_cursor, self.state.noise, self.config.ring_gap)
        finally:
            canvas.end_frame()
        return frame_cursor

    def tick(
        self,
        canvas_size: Tuple[float, float],
        pointer: Optional[PointerState] = None,
        controls: Optional[ControlSignals] = None,
        canvas: Optional[Canvas] = None,
    ) -> int:
        """One placement attempt plus, when a canvas is given, one full render pass."""
        count = self.advance(canvas_size, pointer, controls)
        if canvas is not None:
            self.render(canvas, canvas_size)
        return count
