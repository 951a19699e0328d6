"""
Sketch State (Data Model)
=========================
This module defines the central data structure for a running sketch.

Why is this file needed?
------------------------
1. State Management: It holds the circle collection, the process-wide noise
   cursor and the pending capture request in one place.
2. Decoupling: The host (Qt window, headless CLI) writes input into this
   object; the controller reads it once per tick.

Classes:
    SketchState: The main container class.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional

import numpy as np

from conicpack.config import SketchConfig
from conicpack.model.noise_field import NoiseCursor, NoiseField
from conicpack.model.packing import CircleCollection, PackingEngine

logger = logging.getLogger(__name__)


@dataclass
class SketchState:
    """
    Holds the entire state of one sketch.
    Pass this instance to the controller and to the host views.
    """
    config: SketchConfig = field(default_factory=SketchConfig)
    rng: Optional[np.random.Generator] = None

    engine: PackingEngine = field(init=False)
    cursor: NoiseCursor = field(init=False)
    noise: NoiseField = field(init=False)
    frame: int = field(init=False, default=0)
    capture_requested: bool = field(init=False, default=False)

    def __post_init__(self) -> None:
        self.engine = PackingEngine(self.config, self.rng)
        self.cursor = NoiseCursor(position=self.config.noise_start, step=self.config.noise_step)
        self.noise = NoiseField(
            octaves=self.config.noise_octaves,
            persistence=self.config.noise_persistence,
            base=self.config.noise_base,
        )

    @property
    def circles(self) -> CircleCollection:
        return self.engine.circles

    def request_capture(self) -> None:
        self.capture_requested = True

    def consume_capture_request(self) -> bool:
        """Return the pending capture flag and clear it."""
        requested = self.capture_requested
        self.capture_requested = False
        return requested

    def new_sketch(self) -> None:
        """
        Start over with an empty collection.

        The previous collection is dropped, not cleared, so any reference the
        host still holds keeps its circles. The noise cursor is kept.
        """
        self.engine = PackingEngine(self.config, self.engine.rng)
        self.frame = 0
        self.capture_requested = False
        logger.info("Started a new sketch.")
