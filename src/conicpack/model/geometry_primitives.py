"""
Geometric Primitives for packing and ring rendering.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import TYPE_CHECKING
import numpy as np
import math

if TYPE_CHECKING:
    import numpy.typing as npt


@dataclass(frozen=True)
class Vector:
    """
    A vector in the canvas plane representing direction and magnitude.
    """
    x: float
    y: float

    def rotate(self, angle_rad: float) -> Vector:
        """Rotate vector around the canvas origin."""
        cos_a = math.cos(angle_rad)
        sin_a = math.sin(angle_rad)
        return Vector(
            self.x * cos_a - self.y * sin_a,
            self.x * sin_a + self.y * cos_a,
        )

    def to_array(self) -> npt.NDArray[np.float64]:
        return np.array([self.x, self.y])


@dataclass(frozen=True)
class Circle:
    """
    A placed disk. Immutable once created by the packing engine.
    """
    x: float
    y: float
    r: float

    @property
    def center(self) -> Vector:
        return Vector(self.x, self.y)

    def to_array(self) -> npt.NDArray[np.float64]:
        return np.array([self.x, self.y, self.r])
