"""
Noise Field & Cursor
====================
1D Perlin noise sampling and the cursor that walks through it.

The cursor has two lifetimes: the process-wide instance held by the sketch state
(mutated by user controls across frames) and a per-frame copy made at the start
of every render pass. Only the copy is advanced while rendering, so the
process-wide position "snaps back" at the next frame.
"""
from __future__ import annotations

import math
from dataclasses import dataclass

from noise import pnoise1

# pnoise1 output is roughly [-1, 1]; the sampler promises [0, 1)
_UPPER_BOUND = math.nextafter(1.0, 0.0)


@dataclass(frozen=True)
class NoiseField:
    """Deterministic, continuous 1D gradient noise mapped to [0, 1)."""
    octaves: int = 2
    persistence: float = 0.5
    lacunarity: float = 2.0
    base: int = 0

    def sample(self, position: float) -> float:
        raw = pnoise1(
            float(position),
            octaves=self.octaves,
            persistence=self.persistence,
            lacunarity=self.lacunarity,
            base=self.base,
        )
        return min(max((raw + 1.0) * 0.5, 0.0), _UPPER_BOUND)

    def sample_range(self, position: float, low: float, high: float) -> float:
        """low + noise(position) * (high - low)"""
        return low + self.sample(position) * (high - low)


@dataclass
class NoiseCursor:
    """
    Position and step in the noise domain.

    `step` never goes below zero; decrements are clamped silently.
    """
    position: float = 0.0
    step: float = 0.02

    def __post_init__(self) -> None:
        self.step = max(0.0, self.step)

    def copy(self) -> NoiseCursor:
        """Value copy used for one render pass."""
        return NoiseCursor(position=self.position, step=self.step)

    def advance(self) -> None:
        self.position += self.step

    def shift_start(self, amount: float) -> None:
        self.position += amount

    def adjust_step(self, amount: float) -> None:
        self.step = max(0.0, self.step + amount)
