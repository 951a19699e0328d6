"""Command-line interface."""
from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional, Sequence

from conicpack.config import load_config
from conicpack.logging_config import parse_level, setup_logging

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="conicpack",
        description="Greedy circle packing rendered as noise-rotated nested rings.",
    )
    parser.add_argument("--config", help="JSON file overriding the default sketch configuration.")
    parser.add_argument("--width", type=int, help="Canvas width in pixels.")
    parser.add_argument("--height", type=int, help="Canvas height in pixels.")
    parser.add_argument("--seed", type=int, help="Seed for reproducible placements.")
    parser.add_argument("--log-level", default="info", help="Logging level (debug, info, warning...).")
    parser.add_argument("--log-file", help="Also write the log to this file.")
    parser.add_argument(
        "--headless", type=int, metavar="FRAMES",
        help="Run FRAMES ticks without a window and write one SVG capture.",
    )
    parser.add_argument("--output", default="conicpack.svg", help="SVG path for --headless (default: %(default)s).")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        level = parse_level(args.log_level)
    except ValueError as e:
        print(e, file=sys.stderr)
        return 2
    setup_logging(level=level, log_file=args.log_file)

    overrides = {
        key: value
        for key, value in (("canvas_width", args.width), ("canvas_height", args.height), ("seed", args.seed))
        if value is not None
    }
    try:
        config = load_config(args.config)
        if overrides:
            config = config.replace(**overrides)
    except ValueError as e:
        logger.error(f"Invalid configuration: {e}")
        return 2

    # Qt is imported lazily so --help works without a display stack
    from conicpack.app.main import run_headless, run_window

    if args.headless is not None:
        if args.headless < 0:
            logger.error("--headless needs a non-negative frame count.")
            return 2
        try:
            run_headless(config, args.headless, args.output)
        except ValueError as e:
            logger.error(f"Headless run failed: {e}")
            return 2
        return 0

    logger.info(f"Starting sketch {config.canvas_width}x{config.canvas_height} (seed={config.seed}).")
    return run_window(config)


if __name__ == "__main__":
    sys.exit(main())
