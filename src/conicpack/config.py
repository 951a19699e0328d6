"""
Configuration & Path Management
===============================
This module serves as the central registry for file paths and the tunable
constants of a sketch.

Why is this file needed?
------------------------
1. Abstraction: Packing and rendering constants (radii, ring gap, noise step...)
   live in one validated object instead of being scattered through the code.
2. Deployment: It handles the logic required by PyInstaller (sys._MEIPASS) to
   find assets (default JSON configuration) when the app is frozen into an .exe.

Exports:
    ASSETS_PATH (str): Absolute path to the assets directory.
    DEFAULT_CONFIG_PATH (str): Absolute path to the default sketch configuration.
    SketchConfig: Validated container of all sketch constants.
"""
from __future__ import annotations

import dataclasses
import json
import logging
import os
import sys
from dataclasses import dataclass, asdict, fields
from pathlib import Path
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)


def get_resource_path(relative_path: str) -> str:
    """
    Get absolute path to resource, works for dev and for PyInstaller.
    """
    if hasattr(sys, '_MEIPASS'):
        # PyInstaller temp folder
        base_path: str = getattr(sys, '_MEIPASS')
        return os.path.join(base_path, relative_path)

    # config.py is in src/conicpack/
    current_file_path: Path = Path(__file__)
    project_root: Path = current_file_path.parent.parent.parent
    return os.path.join(str(project_root), relative_path)


# Global Constants
ASSETS_PATH: str = get_resource_path("assets")
DEFAULT_CONFIG_PATH: str = os.path.join(ASSETS_PATH, "sketch_default.json")

if not os.path.exists(ASSETS_PATH):
    logger.warning(f"Assets path not found at {ASSETS_PATH}")


@dataclass(frozen=True)
class SketchConfig:
    """
    All constants governing packing, rendering and the host window.

    Packing:
        min_radius: Seed radius of a random candidate (and the clamp margin of
            pointer-biased candidates).
        max_radius: Upper bound of any placed circle.
        pointer_rect_size: Side of the square sampled around the pointer.
        max_circles: Capacity of the circle collection.
    Rendering:
        ring_gap: Diameter decrement between two nested rings.
        noise_*: Perlin noise parameters and the initial cursor.
    Controls:
        start_delta: Amount added/removed from the noise start position.
        step_delta: Amount added/removed from the noise step (floored at 0).
    """
    canvas_width: int = 500
    canvas_height: int = 500

    min_radius: float = 4.0
    max_radius: float = 60.0
    ring_gap: float = 6.0
    pointer_rect_size: float = 12.0
    max_circles: int = 1000

    start_delta: float = 0.1
    step_delta: float = 0.005

    noise_start: float = 0.0
    noise_step: float = 0.02
    noise_octaves: int = 2
    noise_persistence: float = 0.5
    noise_base: int = 0

    seed: Optional[int] = None

    frame_interval_ms: int = 16
    background: str = "#ffffff"
    stroke: str = "#000000"
    stroke_width: float = 1.0
    capture_dir: str = "captures"

    def __post_init__(self) -> None:
        if self.canvas_width <= 0 or self.canvas_height <= 0:
            raise ValueError(f"Canvas size must be positive, got {self.canvas_width}x{self.canvas_height}.")
        if self.min_radius <= 0.0:
            raise ValueError(f"min_radius must be positive, got {self.min_radius}.")
        if min(self.canvas_width, self.canvas_height) <= 2.0 * self.min_radius:
            raise ValueError(
                f"Canvas {self.canvas_width}x{self.canvas_height} is too small for min_radius {self.min_radius}."
            )
        if self.max_radius < self.min_radius:
            raise ValueError(f"max_radius ({self.max_radius}) must not be smaller than min_radius ({self.min_radius}).")
        if self.ring_gap <= 0.0:
            raise ValueError(f"ring_gap must be positive, got {self.ring_gap}.")
        if self.pointer_rect_size < 0.0:
            raise ValueError(f"pointer_rect_size must not be negative, got {self.pointer_rect_size}.")
        if self.max_circles < 0:
            raise ValueError(f"max_circles must not be negative, got {self.max_circles}.")
        if self.start_delta < 0.0 or self.step_delta < 0.0:
            raise ValueError("start_delta and step_delta must not be negative.")
        if self.noise_step < 0.0:
            raise ValueError(f"noise_step must not be negative, got {self.noise_step}.")
        if self.noise_octaves < 1:
            raise ValueError(f"noise_octaves must be at least 1, got {self.noise_octaves}.")
        if self.frame_interval_ms <= 0:
            raise ValueError(f"frame_interval_ms must be positive, got {self.frame_interval_ms}.")

    # --- Serialization ---

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> SketchConfig:
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            logger.warning(f"Ignoring unknown configuration keys: {', '.join(unknown)}")
        return cls(**{k: v for k, v in data.items() if k in known})

    @classmethod
    def from_json(cls, filepath: str) -> SketchConfig:
        logger.info(f"Loading sketch configuration from: {filepath}")
        try:
            with open(filepath, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.exception(f"Failed to read configuration '{filepath}': {e}")
            raise
        if not isinstance(data, dict):
            raise ValueError(f"Configuration '{filepath}' must contain a JSON object.")
        return cls.from_dict(data)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    def replace(self, **changes: Any) -> SketchConfig:
        """Return a validated copy with the given fields overridden."""
        return dataclasses.replace(self, **changes)


def load_config(filepath: Optional[str] = None) -> SketchConfig:
    """
    Load the configuration from `filepath`, or the bundled defaults.

    Falls back to the dataclass defaults when no file is given and the bundled
    JSON is missing (e.g. an installed wheel without the assets folder).
    """
    if filepath:
        return SketchConfig.from_json(filepath)
    if os.path.exists(DEFAULT_CONFIG_PATH):
        return SketchConfig.from_json(DEFAULT_CONFIG_PATH)
    return SketchConfig()
