"""Unit tests for the command-line front end (no Qt involved)."""

import logging

from conicpack.__main__ import build_parser, main
from conicpack.logging_config import parse_level


def test_parser_defaults():
    args = build_parser().parse_args([])

    assert args.headless is None
    assert args.output == "conicpack.svg"
    assert args.log_level == "info"


def test_parser_reads_overrides():
    args = build_parser().parse_args(["--width", "800", "--seed", "3", "--headless", "500"])

    assert (args.width, args.seed, args.headless) == (800, 3, 500)


def test_unknown_log_level_exits_with_usage_error():
    assert main(["--log-level", "chatty"]) == 2


def test_parse_level_accepts_names():
    assert parse_level("debug") == logging.DEBUG
    assert parse_level("WARNING") == logging.WARNING


def test_too_small_canvas_exits_with_usage_error():
    assert main(["--width", "6", "--headless", "1"]) == 2


def test_unreadable_config_exits_with_usage_error(tmp_path):
    path = tmp_path / "broken.json"
    path.write_text("{not json", encoding="utf-8")

    assert main(["--config", str(path)]) == 2
