"""Unit tests for sketch configuration loading and validation."""

import json
import logging

import pytest

from conicpack.config import SketchConfig, load_config


def test_defaults_match_reference_constants():
    cfg = SketchConfig()

    assert cfg.max_radius == 60.0
    assert cfg.pointer_rect_size == 12.0
    assert cfg.max_circles == 1000


@pytest.mark.parametrize(
    "overrides",
    [
        {"min_radius": 0.0},
        {"min_radius": 10.0, "max_radius": 5.0},
        {"ring_gap": 0.0},
        {"max_circles": -1},
        {"step_delta": -0.1},
        {"noise_step": -0.01},
        {"canvas_width": 0},
        {"canvas_width": 8, "min_radius": 4.0},
    ],
)
def test_invalid_values_are_rejected(overrides):
    with pytest.raises(ValueError):
        SketchConfig(**overrides)


def test_replace_revalidates():
    with pytest.raises(ValueError):
        SketchConfig().replace(ring_gap=-1.0)
    assert SketchConfig().replace(seed=9).seed == 9


def test_from_json_reads_overrides(tmp_path):
    path = tmp_path / "sketch.json"
    path.write_text(json.dumps({"max_radius": 40.0, "seed": 12}), encoding="utf-8")

    cfg = SketchConfig.from_json(str(path))

    assert cfg.max_radius == 40.0
    assert cfg.seed == 12
    assert cfg.min_radius == SketchConfig().min_radius


def test_unknown_keys_are_ignored_with_warning(caplog):
    with caplog.at_level(logging.WARNING, logger="conicpack.config"):
        cfg = SketchConfig.from_dict({"ring_gap": 3.0, "colour": "red"})

    assert cfg.ring_gap == 3.0
    assert "colour" in caplog.text


def test_from_json_rejects_non_object(tmp_path):
    path = tmp_path / "list.json"
    path.write_text("[1, 2]", encoding="utf-8")

    with pytest.raises(ValueError):
        SketchConfig.from_json(str(path))


def test_from_json_propagates_parse_errors(tmp_path):
    path = tmp_path / "broken.json"
    path.write_text("{not json", encoding="utf-8")

    with pytest.raises(json.JSONDecodeError):
        SketchConfig.from_json(str(path))


def test_bundled_defaults_load():
    assert load_config() == SketchConfig()


def test_round_trip_through_dict():
    cfg = SketchConfig(seed=4, ring_gap=2.5)

    assert SketchConfig.from_dict(cfg.to_dict()) == cfg
