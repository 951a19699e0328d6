"""
Canvas adapters for Qt painting and SVG capture.

The core only knows the `Canvas` protocol; this module maps it onto QPainter,
which can target either the interactive widget or a QSvgGenerator.
"""
from __future__ import annotations

import logging
import os
from datetime import datetime

from PySide6.QtCore import QPointF, QRect, QSize, Qt
from PySide6.QtGui import QColor, QPainter, QPen
from PySide6.QtSvg import QSvgGenerator

from conicpack.config import SketchConfig
from conicpack.controller.sketch import Sketch

logger = logging.getLogger(__name__)


class QPainterCanvas:
    """Draws rings as unfilled ellipses on an already active QPainter."""

    def __init__(self, painter: QPainter, config: SketchConfig) -> None:
        self.painter = painter
        self.config = config

    def begin_frame(self, width: float, height: float) -> None:
        self.painter.setRenderHint(QPainter.RenderHint.Antialiasing, True)
        self.painter.fillRect(0, 0, int(width), int(height), QColor(self.config.background))
        pen = QPen(QColor(self.config.stroke))
        pen.setWidthF(self.config.stroke_width)
        self.painter.setPen(pen)
        self.painter.setBrush(Qt.BrushStyle.NoBrush)

    def draw_ring(self, x: float, y: float, diameter: float) -> None:
        radius = diameter / 2.0
        self.painter.drawEllipse(QPointF(x, y), radius, radius)

    def end_frame(self) -> None:
        pass


def capture_filename(frame: int) -> str:
    return f"conicpack_{datetime.now().strftime('%Y%m%d_%H%M%S')}_{frame:05d}.svg"


class SvgCapture:
    """Renders one frame of a sketch into an SVG file."""

    def __init__(self, directory: str) -> None:
        self.directory = directory

    def write(self, sketch: Sketch, width: int, height: int, filepath: str | None = None) -> str:
        if filepath is None:
            filepath = os.path.join(self.directory, capture_filename(sketch.state.frame))
        parent = os.path.dirname(os.path.abspath(filepath))
        os.makedirs(parent, exist_ok=True)

        generator = QSvgGenerator()
        generator.setFileName(filepath)
        generator.setSize(QSize(width, height))
        generator.setViewBox(QRect(0, 0, width, height))
        generator.setTitle("conicpack")
        generator.setDescription(f"{len(sketch.state.circles)} circles, frame {sketch.state.frame}")

        painter = QPainter()
        if not painter.begin(generator):
            raise OSError(f"Could not open SVG output '{filepath}'.")
        try:
            sketch.render(QPainterCanvas(painter, sketch.config), (width, height))
        finally:
            painter.end()

        logger.info(f"Captured {len(sketch.state.circles)} circles to: {filepath}")
        return filepath
