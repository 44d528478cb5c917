"""
main.py — Entry point and game loop for Click Speed Test.

Responsibilities:
    - Parse command-line options and configure logging
    - Initialise pygame and create the window
    - Build the subsystems (durations, ticker, high score store, Game)
    - Run the main loop: handle events → update → render → flip
    - Wrap the loop in async for pygbag (WASM/itch.io export)

Architecture note:
    main.py is intentionally thin. It owns the pygame lifecycle and the
    window. All game logic lives in core/.

pygbag compatibility:
    The game loop is an async function driven by asyncio.run(). pygbag
    replaces asyncio with its own event loop that yields to the browser
    each frame. In the browser sys.argv is empty, so every option falls
    back to its default and the high score goes to localStorage.

Usage (local):
    python main.py [--duration SECONDS] [--highscore-file PATH] [--debug]

Usage (WASM export):
    pygbag .
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import os
import sys
from pathlib import Path

os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")

import pygame

from core.duration import DurationSelector
from core.game import Game
from core.storage import HighScoreStore, default_backend
from core.timer import PygameTicker
from settings import SCREEN_W, SCREEN_H, FPS, TITLE, HIGHSCORE_FILE


class RuntimeArgs(argparse.Namespace):
    """Container for command-line runtime options."""

    duration: str | None
    highscore_file: Path
    debug: bool


def parse_arguments(argv: list[str] | None = None) -> RuntimeArgs:
    """Parse CLI arguments for the desktop build."""
    parser = argparse.ArgumentParser(description=TITLE)
    parser.add_argument("--duration", metavar="SECONDS",
                        help="initial round length in seconds (invalid values fall back to 5)")
    parser.add_argument("--highscore-file", type=Path, default=HIGHSCORE_FILE,
                        help=f"where to keep the high score (default: {HIGHSCORE_FILE})")
    parser.add_argument("--debug", action="store_true", help="enable debug logging")

    args = parser.parse_args(argv, namespace=RuntimeArgs())

    if args.highscore_file.exists() and args.highscore_file.is_dir():
        parser.error("--highscore-file must be a file, not a directory")

    return args


def configure_logging(debug_enabled: bool) -> logging.Logger:
    """Send log records to stderr; quiet unless debug is enabled."""
    logging.basicConfig(
        level=logging.DEBUG if debug_enabled else logging.WARNING,
        format="%(levelname)s clickspeed %(name)s %(message)s",
        stream=sys.stderr,
        force=True,
    )
    return logging.getLogger("clickspeed")


async def main(argv: list[str] | None = None) -> None:
    """Async main loop, compatible with both CPython and pygbag WASM.

    Each iteration yields to the event loop via asyncio.sleep(0), which
    pygbag uses to hand control back to the browser.
    """
    args = parse_arguments(argv)
    logger = configure_logging(args.debug)

    pygame.init()
    window = pygame.display.set_mode((SCREEN_W, SCREEN_H))
    pygame.display.set_caption(TITLE)

    # ── Subsystems ────────────────────────────────────────────────────────────
    clock  = pygame.time.Clock()
    ticker = PygameTicker()
    store  = HighScoreStore(default_backend(args.highscore_file))
    game   = Game(DurationSelector(initial=args.duration), ticker, store)
    logger.debug("ready: duration=%ss high score=%d",
                 game.durations.current_duration(), game.controller.high_score)

    # ── Main loop ─────────────────────────────────────────────────────────────
    running = True
    try:
        while running:
            dt = clock.tick(FPS) / 1000.0   # seconds since last frame
            dt = min(dt, 0.05)              # clamp to 50ms after tab switches

            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                else:
                    game.handle_event(event)

            game.update(dt)
            game.render(window)
            pygame.display.flip()

            # ── Yield to browser (pygbag) ─────────────────────────────────────
            await asyncio.sleep(0)
    finally:
        ticker.stop()
        pygame.quit()


if __name__ == "__main__":
    asyncio.run(main())
