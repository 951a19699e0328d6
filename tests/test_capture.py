"""Tests for the Qt host capture path, run on the offscreen platform."""

import os

os.environ["QT_QPA_PLATFORM"] = "offscreen"

import pytest
from PySide6.QtCore import QEvent, Qt
from PySide6.QtGui import QKeyEvent

from conicpack.__main__ import main
from conicpack.app.application import create_app
from conicpack.app.capture import SvgCapture
from conicpack.app.main import run_headless
from conicpack.app.state import Store
from conicpack.app.ui.sketch_canvas import SketchCanvas
from conicpack.config import SketchConfig
from conicpack.controller.sketch import Sketch
from conicpack.model.packing import PointerState

SIZE = 500


@pytest.fixture(scope="module")
def qt_app():
    return create_app(headless=True)


def _ring_count(svg_text):
    return svg_text.count("<circle") + svg_text.count("<ellipse")


def _store(tmp_path, **overrides):
    sketch = Sketch.from_config(SketchConfig(seed=2, **overrides))
    return Store(sketch, SvgCapture(str(tmp_path)))


def _warm_up(store, frames=50):
    for _ in range(frames):
        store.advance(SIZE, SIZE, PointerState())


def test_headless_run_writes_rings(qt_app, tmp_path):
    output = tmp_path / "o.svg"
    cfg = SketchConfig(seed=1)

    path = run_headless(cfg, 200, str(output))

    assert path == str(output)
    assert _ring_count(output.read_text(encoding="utf-8")) > 0


def test_cli_headless_returns_success(qt_app, tmp_path):
    output = tmp_path / "cli.svg"

    assert main(["--seed", "4", "--headless", "50", "--output", str(output)]) == 0
    assert output.exists()


def test_queued_capture_is_written_once(qt_app, tmp_path):
    store = _store(tmp_path)
    written = []
    store.capture_written.connect(written.append)
    _warm_up(store)

    store.queue_capture()
    store.advance(SIZE, SIZE, PointerState())
    store.advance(SIZE, SIZE, PointerState())

    assert len(written) == 1
    assert os.listdir(tmp_path) == [os.path.basename(written[0])]
    with open(written[0], encoding="utf-8") as f:
        assert _ring_count(f.read()) > 0


def test_flush_applies_controls_without_placing(qt_app, tmp_path):
    store = _store(tmp_path)
    _warm_up(store)
    sketch = store.sketch
    count, frame = len(sketch.state.circles), sketch.state.frame

    store.queue_step(+1)
    store.queue_capture()
    store.flush_controls(SIZE, SIZE)

    assert sketch.state.cursor.step == pytest.approx(0.02 + sketch.config.step_delta)
    assert (len(sketch.state.circles), sketch.state.frame) == (count, frame)
    assert len(os.listdir(tmp_path)) == 1


def test_paused_canvas_still_applies_keys_and_captures(qt_app, tmp_path):
    store = _store(tmp_path)
    canvas = SketchCanvas(store)
    for _ in range(50):
        canvas._on_frame()
    canvas.stop()
    count = len(store.sketch.state.circles)

    canvas.keyPressEvent(QKeyEvent(QEvent.Type.KeyPress, Qt.Key.Key_Right, Qt.KeyboardModifier.NoModifier))
    canvas.keyPressEvent(QKeyEvent(QEvent.Type.KeyPress, Qt.Key.Key_S, Qt.KeyboardModifier.NoModifier))

    assert store.sketch.state.cursor.step == pytest.approx(0.02 + store.sketch.config.step_delta)
    assert len(os.listdir(tmp_path)) == 1
    assert len(store.sketch.state.circles) == count
    assert not canvas.is_running()
