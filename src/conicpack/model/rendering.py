"""
Noise-Driven Renderer
=====================
Draws every circle of the collection as a cone of nested rings.

For circle i the ring pattern is rotated by an angle sampled from the noise
field at the cursor position; the cursor then advances by its step before the
next circle is sampled. The renderer only reads the collection and only
advances the cursor it is given, which must be a per-frame copy.
"""
from __future__ import annotations

import math
from typing import Iterable, Protocol, TYPE_CHECKING

import numpy as np

from conicpack.model.geometry_primitives import Circle, Vector
from conicpack.model.noise_field import NoiseCursor, NoiseField

if TYPE_CHECKING:
    import numpy.typing as npt

TWO_PI = 2.0 * math.pi


class Canvas(Protocol):
    """Drawing surface the renderer paints on (Qt widget, SVG generator, test recorder)."""
    def begin_frame(self, width: float, height: float) -> None: ...
    def draw_ring(self, x: float, y: float, diameter: float) -> None: ...
    def end_frame(self) -> None: ...


def ring_diameters(radius: float, gap: float) -> npt.NDArray[np.float64]:
    """
    Ring diameters from 2*radius down by `gap`, keeping only positive values.
    """
    if gap <= 0.0:
        raise ValueError(f"Ring gap must be positive, got {gap}.")
    count = int(math.ceil(2.0 * radius / gap))
    diameters = 2.0 * radius - gap * np.arange(count, dtype=np.float64)
    return diameters[diameters > 0.0]


def ring_layout(circle: Circle, angle: float, gap: float) -> npt.NDArray[np.float64]:
    """
    Return an (n, 3) array of (x, y, diameter), outermost ring first.

    Each ring is shifted from the circle center by (diameter/2 - r) along the
    axis rotated by `angle`, so every ring touches the outer boundary at the
    same point. The outermost ring coincides with the circle itself.
    """
    diameters = ring_diameters(circle.r, gap)
    axis = Vector(1.0, 0.0).rotate(angle).to_array()
    offsets = (diameters / 2.0 - circle.r)[:, np.newaxis] * axis
    centers = circle.center.to_array() + offsets
    return np.column_stack((centers, diameters))


def render_frame(
    canvas: Canvas,
    circles: Iterable[Circle],
    cursor: NoiseCursor,
    field: NoiseField,
    gap: float,
) -> None:
    """
    Paint the whole collection in insertion order, advancing `cursor` once per circle.
    """
    for circle in circles:
        angle = field.sample_range(cursor.position, 0.0, TWO_PI)
        for x, y, diameter in ring_layout(circle, angle, gap):
            canvas.draw_ring(float(x), float(y), float(diameter))
        cursor.advance()
