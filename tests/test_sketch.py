"""Unit tests for the per-frame sketch controller."""

import pytest

from conicpack.config import SketchConfig
from conicpack.controller.sketch import ControlSignals, Sketch, apply_controls
from conicpack.model.noise_field import NoiseCursor
from conicpack.model.packing import PointerState

SIZE = (500, 500)


class CountingCanvas:
    def __init__(self):
        self.frames = 0
        self.open = False
        self.rings = 0

    def begin_frame(self, width, height):
        assert (width, height) == SIZE
        self.open = True

    def draw_ring(self, x, y, diameter):
        assert self.open
        self.rings += 1

    def end_frame(self):
        self.open = False
        self.frames += 1


def _sketch(**overrides):
    return Sketch.from_config(SketchConfig(seed=3, **overrides))


def test_tick_places_at_most_one_circle_and_renders():
    sketch = _sketch()
    canvas = CountingCanvas()

    counts = [sketch.tick(SIZE, canvas=canvas) for _ in range(200)]

    assert counts[0] <= 1
    assert all(b - a in (0, 1) for a, b in zip(counts, counts[1:]))
    assert canvas.frames == 200
    assert sketch.state.frame == 200


def test_render_snaps_cursor_back():
    sketch = _sketch(noise_start=0.4, noise_step=0.03)
    for _ in range(150):
        sketch.advance(SIZE)
    count = len(sketch.state.circles)
    assert count > 0

    frame_cursor = sketch.render(CountingCanvas(), SIZE)

    assert (sketch.state.cursor.position, sketch.state.cursor.step) == (0.4, 0.03)
    assert frame_cursor.position == pytest.approx(0.4 + count * 0.03)


def test_consecutive_renders_are_identical():
    sketch = _sketch()
    for _ in range(100):
        sketch.advance(SIZE)

    class Recorder(CountingCanvas):
        def __init__(self):
            super().__init__()
            self.calls = []

        def draw_ring(self, x, y, diameter):
            super().draw_ring(x, y, diameter)
            self.calls.append((x, y, diameter))

    first, second = Recorder(), Recorder()
    sketch.render(first, SIZE)
    sketch.render(second, SIZE)

    assert first.calls == second.calls


def test_controls_move_start_and_step():
    sketch = _sketch(noise_start=0.0, noise_step=0.02, start_delta=0.1, step_delta=0.005)

    sketch.advance(SIZE, controls=ControlSignals(start_up=3, start_down=1, step_up=2))

    assert sketch.state.cursor.position == pytest.approx(0.2)
    assert sketch.state.cursor.step == pytest.approx(0.03)


def test_step_controls_never_go_negative():
    cfg = SketchConfig(step_delta=0.05)
    cursor = NoiseCursor(position=0.0, step=0.02)

    apply_controls(cursor, ControlSignals(step_down=3), cfg)

    assert cursor.step == 0.0


def test_step_floor_is_applied_per_press():
    cfg = SketchConfig(step_delta=0.05)
    cursor = NoiseCursor(position=0.0, step=0.02)

    apply_controls(cursor, ControlSignals(step_up=1, step_down=2), cfg)

    # up then down, down: 0.07 -> 0.02 -> 0.0
    assert cursor.step == 0.0


def test_controls_do_not_touch_circles():
    sketch = _sketch()
    for _ in range(50):
        sketch.advance(SIZE)
    before = list(sketch.state.circles)

    apply_controls(sketch.state.cursor, ControlSignals(start_up=5, step_up=5), sketch.config)

    assert list(sketch.state.circles) == before


def test_capture_request_is_consumed_once():
    sketch = _sketch()

    sketch.advance(SIZE, controls=ControlSignals(capture=True))

    assert sketch.state.consume_capture_request() is True
    assert sketch.state.consume_capture_request() is False


def test_pointer_bias_concentrates_small_circles():
    sketch = _sketch()
    pointer = PointerState(pressed=True, x=100.0, y=100.0)
    for _ in range(300):
        sketch.advance(SIZE, pointer=pointer)

    circles = list(sketch.state.circles)
    assert circles
    for c in circles:
        assert abs(c.x - 100.0) <= 6.0 and abs(c.y - 100.0) <= 6.0


def test_collection_stops_at_max_but_rendering_continues():
    sketch = _sketch(max_circles=3)
    canvas = CountingCanvas()
    for _ in range(500):
        sketch.tick(SIZE, canvas=canvas)

    assert len(sketch.state.circles) == 3
    assert canvas.frames == 500


def test_new_sketch_starts_a_fresh_collection():
    sketch = _sketch()
    for _ in range(100):
        sketch.advance(SIZE)
    old = sketch.state.circles
    old_circles = list(old)
    sketch.state.cursor.shift_start(1.0)

    sketch.state.new_sketch()

    assert len(sketch.state.circles) == 0
    assert sketch.state.frame == 0
    assert list(old) == old_circles
    assert sketch.state.cursor.position == pytest.approx(1.0)


def test_too_small_canvas_is_rejected():
    sketch = _sketch(min_radius=4.0)

    with pytest.raises(ValueError):
        sketch.advance((8, 500))
