# main.py
from __future__ import annotations
import argparse
import curses
import logging
import random
import sys
from contextlib import ExitStack, contextmanager
from typing import Iterator, List, Optional, Tuple

import pygame  # type: ignore

from .config import PRESETS, Config, Preset, get_preset
from .intents import DisplaySink, InputSource
from .loop import run
from .simulation import Simulation

logger = logging.getLogger(__name__)

FRONTENDS = ("terminal", "window")


def parse_args(argv: Optional[List[str]] = None) -> Config:
    parser = argparse.ArgumentParser(prog="termsnake", description="Snake in your terminal.")
    parser.add_argument(
        "--preset",
        type=str,
        default=None,
        help="Arena size to play on: " + ", ".join(f"{p.name} ({p.width}x{p.height})" for p in PRESETS)
             + ". Shows a menu when omitted.",
    )
    parser.add_argument("--frontend", choices=FRONTENDS, default="terminal")
    parser.add_argument("--seed", type=int, default=None, help="seed food placement for a repeatable game")
    parser.add_argument("--log-file", type=str, default=None, help="write a log here (nothing is logged otherwise)")
    parser.add_argument(
        "--log-level",
        type=str.upper,
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
    )
    args = parser.parse_args(argv)

    if args.preset is not None:
        try:
            get_preset(args.preset)
        except KeyError as e:
            parser.error(e.args[0])

    return Config(
        seed=args.seed,
        frontend=args.frontend,
        preset=args.preset,
        log_file=args.log_file,
        log_level=args.log_level,
    )


def setup_logging(cfg: Config) -> None:
    # Never log to the terminal: it belongs to curses while the game runs
    if cfg.log_file:
        handler: logging.Handler = logging.FileHandler(cfg.log_file)
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
    else:
        handler = logging.NullHandler()
    logging.basicConfig(level=cfg.log_level, handlers=[handler], force=True)


@contextmanager
def open_frontend(name: str) -> Iterator[Tuple[InputSource, DisplaySink]]:
    if name == "window":
        from .window import WindowDisplay, WindowInput, open_window
        with open_window() as screen:
            yield WindowInput(), WindowDisplay(screen)
    else:
        from .terminal import TerminalDisplay, TerminalInput, open_terminal
        with open_terminal() as screen:
            yield TerminalInput(screen), TerminalDisplay(screen)


def choose_preset(display: DisplaySink, name: Optional[str]) -> Tuple[Optional[Preset], Optional[str]]:
    """Returns (preset, error). (None, None) means the player quit the menu."""
    if name is None:
        return display.select_preset(PRESETS), None
    preset = get_preset(name)
    if not display.fits(preset):
        cols, rows = preset.required_display_area
        return None, f"{preset.name} ({preset.width}x{preset.height}) does not fit: needs {cols}x{rows}"
    return preset, None


def main(argv: Optional[List[str]] = None) -> int:
    cfg = parse_args(argv)
    setup_logging(cfg)
    rng = random.Random(cfg.seed)

    final: Optional[Simulation] = None
    error: Optional[str] = None
    with ExitStack() as stack:
        # only acquiring the display counts as a start-up failure
        try:
            source, display = stack.enter_context(open_frontend(cfg.frontend))
        except (curses.error, pygame.error) as e:
            logger.error("Failed to initialize %s frontend: %s", cfg.frontend, e)
            print(f"Failed to initialize {cfg.frontend} frontend: {e}", file=sys.stderr)
            return 1

        preset, error = choose_preset(display, cfg.preset)
        if preset is not None:
            logger.info(
                "Session start: preset=%s (%dx%d) frontend=%s seed=%s",
                preset.name, preset.width, preset.height, cfg.frontend, cfg.seed,
            )
            final = run(source, display, preset.width, preset.height, rng=rng)

    if error is not None:
        print(error, file=sys.stderr)
        return 2
    if final is not None:
        print(f"Final score: {final.score} (length {len(final.snake)})")
    return 0


if __name__ == "__main__":
    sys.exit(main())
