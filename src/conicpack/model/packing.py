"""
Packing Engine
==============
Greedy, append-only circle packing.

Each call proposes exactly one candidate center (uniformly random, or biased
toward the pointer), rejects it if it sits too close to any existing circle,
and otherwise grows it until it touches its nearest neighbour, a canvas edge
or the maximum radius. Rejection is the normal steady-state outcome and is
reported as `None`, never as an exception.

Classes:
    PointerState: Pointer pressed flag and coordinates for one tick.
    CircleCollection: Ordered, bounded, append-only container of circles.
    PackingEngine: Owns a collection and attempts one placement per step.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterator, Optional, Sequence, TYPE_CHECKING, Union

import numpy as np

from conicpack.config import SketchConfig
from conicpack.model.geometry_primitives import Circle

if TYPE_CHECKING:
    import numpy.typing as npt

logger = logging.getLogger(__name__)

# Seed radius of pointer-biased candidates
POINTER_MIN_RADIUS: float = 1.0


class PackingInvariantError(AssertionError):
    """A placement produced a degenerate radius; the packing invariants are broken."""


@dataclass(frozen=True)
class PointerState:
    pressed: bool = False
    x: float = 0.0
    y: float = 0.0


class CircleCollection:
    """
    Insertion-ordered circles, bounded at `capacity`.

    Circles are never removed or replaced. `as_array()` exposes a read-only
    (n, 3) array of (x, y, r) rows for vectorised distance checks.
    """

    def __init__(self, capacity: int) -> None:
        if capacity < 0:
            raise ValueError(f"Capacity must not be negative, got {capacity}.")
        self.capacity = capacity
        self._circles: list[Circle] = []
        self._data: npt.NDArray[np.float64] = np.empty((0, 3), dtype=np.float64)

    def __len__(self) -> int:
        return len(self._circles)

    def __iter__(self) -> Iterator[Circle]:
        return iter(self._circles)

    def __getitem__(self, index: int) -> Circle:
        return self._circles[index]

    @property
    def is_full(self) -> bool:
        return len(self._circles) >= self.capacity

    def append(self, circle: Circle) -> bool:
        """Append a circle. Returns False (and stores nothing) when full."""
        if self.is_full:
            return False
        self._circles.append(circle)
        self._data = np.vstack((self._data, circle.to_array()))
        if self.is_full:
            logger.info(f"Circle collection is full ({self.capacity} circles).")
        return True

    def as_array(self) -> npt.NDArray[np.float64]:
        view = self._data.view()
        view.flags.writeable = False
        return view


Circles = Union[CircleCollection, Sequence[Circle]]


def _as_array(circles: Circles) -> npt.NDArray[np.float64]:
    if isinstance(circles, CircleCollection):
        return circles.as_array()
    if len(circles) == 0:
        return np.empty((0, 3), dtype=np.float64)
    return np.array([(c.x, c.y, c.r) for c in circles], dtype=np.float64)


def sample_candidate(
    width: float,
    height: float,
    pointer: PointerState,
    config: SketchConfig,
    rng: np.random.Generator,
) -> tuple[float, float, float]:
    """
    Draw a candidate center and its minimum (seed) radius.

    Without pointer bias the center is uniform over the canvas inset by
    `max_radius`. With bias it is uniform over a `pointer_rect_size` square
    around the pointer, clamped into [min_radius, dim - min_radius].
    """
    if not pointer.pressed:
        # Canvases narrower than two max radii collapse the range onto the middle
        inset_x = min(config.max_radius, width / 2.0)
        inset_y = min(config.max_radius, height / 2.0)
        x = rng.uniform(inset_x, width - inset_x)
        y = rng.uniform(inset_y, height - inset_y)
        return float(x), float(y), config.min_radius

    half = config.pointer_rect_size / 2.0
    x = rng.uniform(pointer.x - half, pointer.x + half)
    y = rng.uniform(pointer.y - half, pointer.y + half)
    x = float(np.clip(x, config.min_radius, width - config.min_radius))
    y = float(np.clip(y, config.min_radius, height - config.min_radius))
    return x, y, POINTER_MIN_RADIUS


def find_conflict(x: float, y: float, min_radius: float, circles: Circles) -> Optional[int]:
    """
    Index of the first circle closer than `min_radius + c.r`, or None.
    """
    data = _as_array(circles)
    if data.shape[0] == 0:
        return None
    distances = np.hypot(data[:, 0] - x, data[:, 1] - y)
    hits = np.flatnonzero(distances < min_radius + data[:, 2])
    return int(hits[0]) if hits.size else None


def grow_radius(
    x: float,
    y: float,
    width: float,
    height: float,
    circles: Circles,
    max_radius: float,
) -> float:
    """
    Largest radius at (x, y) that stays clear of every circle and inside the canvas.

    Seeded with `width` as the unbounded upper bound, folded with the slack
    (distance - r) to each existing circle, then clamped by `max_radius` and
    the distances to the four canvas edges.
    """
    radius = float(width)
    data = _as_array(circles)
    if data.shape[0]:
        slack = np.hypot(data[:, 0] - x, data[:, 1] - y) - data[:, 2]
        radius = min(radius, float(slack.min()))
    radius = min(radius, max_radius)
    return min(radius, x, width - x, y, height - y)


def attempt_placement(
    width: float,
    height: float,
    circles: Circles,
    pointer: PointerState,
    config: SketchConfig,
    rng: np.random.Generator,
) -> Optional[Circle]:
    """
    Propose one candidate and return the placed circle, or None.

    The collection is only read; appending is the caller's job.
    """
    x, y, min_radius = sample_candidate(width, height, pointer, config, rng)
    return place_candidate(x, y, min_radius, width, height, circles, config)


def place_candidate(
    x: float,
    y: float,
    min_radius: float,
    width: float,
    height: float,
    circles: Circles,
    config: SketchConfig,
) -> Optional[Circle]:
    conflict = find_conflict(x, y, min_radius, circles)
    if conflict is not None:
        logger.debug(f"Candidate ({x:.1f}, {y:.1f}) rejected by circle #{conflict}.")
        return None

    if len(circles) >= config.max_circles:
        return None

    radius = grow_radius(x, y, width, height, circles, config.max_radius)
    if not radius > 0.0:
        raise PackingInvariantError(
            f"Degenerate radius {radius} at ({x}, {y}) on a {width}x{height} canvas."
        )
    return Circle(x, y, radius)


class PackingEngine:
    """
    Owns the circle collection and performs at most one placement per step.
    """

    def __init__(self, config: SketchConfig, rng: Optional[np.random.Generator] = None) -> None:
        self.config = config
        self.rng = rng if rng is not None else np.random.default_rng(config.seed)
        self.circles = CircleCollection(config.max_circles)

    def step(self, width: float, height: float, pointer: PointerState) -> Optional[Circle]:
        """Attempt one placement; append and return the circle when one is placed."""
        if self.circles.is_full:
            return None
        circle = attempt_placement(width, height, self.circles, pointer, self.config, self.rng)
        if circle is None:
            return None
        self.circles.append(circle)
        logger.debug(
            f"Placed circle #{len(self.circles)} at ({circle.x:.1f}, {circle.y:.1f}) r={circle.r:.2f}."
        )
        return circle
