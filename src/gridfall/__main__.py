"""Command line entry point.

Run with: `python -m gridfall`

``--renderer`` picks the front-end: a pygame window (default), an
interactive curses console, or a plain ``text`` stream that only watches the
pieces fall.
"""

from __future__ import annotations

import argparse
import logging
from dataclasses import replace
from typing import Optional, Sequence

from .config import RENDERERS, GameConfig


LOGGER = logging.getLogger(__name__)

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="gridfall", description=__doc__.splitlines()[0])
    parser.add_argument("--renderer", choices=RENDERERS, help="Front-end to run")
    parser.add_argument("--config", help="INI file with a [game] section")
    parser.add_argument("--tick-ms", type=int, help="Gravity period in milliseconds")
    parser.add_argument("--seed", type=int, help="Seed for the piece generator")
    parser.add_argument("--cell-size", type=int, help="Cell size in pixels (pygame only)")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        type=str.upper,
        choices=LOG_LEVELS,
        help="Logging level",
    )
    parser.add_argument("--log-file", help="Write logs to this file instead of stderr")
    return parser


def load_config(args: argparse.Namespace) -> GameConfig:
    """Combine the config file (if any) with command line overrides."""

    config = GameConfig.from_file(args.config) if args.config else GameConfig()
    overrides = {
        "renderer": args.renderer,
        "tick_ms": args.tick_ms,
        "seed": args.seed,
        "cell_size": args.cell_size,
    }
    config = replace(config, **{k: v for k, v in overrides.items() if v is not None})
    return config.validate()


def configure_logging(level: str, log_file: Optional[str] = None) -> None:
    logging.basicConfig(
        level=getattr(logging, level),
        filename=log_file,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_level, args.log_file)
    try:
        config = load_config(args)
    except ValueError as exc:
        parser.error(str(exc))

    LOGGER.info("Starting %s renderer", config.renderer)
    if config.renderer == "pygame":
        from .run_pygame import main as run
    elif config.renderer == "curses":
        from .run_console import run_game as run
    else:
        from .run_console import watch as run

    state = run(config)
    print(f"Game over! Score: {state.score}" if state.game_over else f"Score: {state.score}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
