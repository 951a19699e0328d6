"""
Run with: python -m conicpack.app.main
"""
from __future__ import annotations

import sys

from conicpack.app.application import create_app
from conicpack.app.state import Store
from conicpack.app.ui.main_window import MainWindow
from conicpack.config import SketchConfig, load_config
from conicpack.controller.sketch import Sketch


def run_window(config: SketchConfig) -> int:
    """Open the interactive window and block in the Qt event loop."""
    app = create_app()
    store = Store(Sketch.from_config(config))
    win = MainWindow(store)
    win.show()
    return app.exec()


def run_headless(config: SketchConfig, frames: int, output: str) -> str:
    """Tick the sketch `frames` times without a window and capture the last frame."""
    from conicpack.app.capture import SvgCapture

    create_app(headless=True)
    sketch = Sketch.from_config(config)
    size = (config.canvas_width, config.canvas_height)
    for _ in range(frames):
        sketch.advance(size)
    return SvgCapture(config.capture_dir).write(sketch, config.canvas_width, config.canvas_height, output)


def main() -> int:
    """Main entry point for the application."""
    return run_window(load_config())


if __name__ == "__main__":
    sys.exit(main())
