"""
main.py — Entry point and game loop for Flower Button.

Responsibilities:
    - Parse the command line and configure logging
    - Read the persisted accessibility settings
    - Run the offline rule self-test (--verify-rules) and exit
    - Initialise pygame, audio and the window
    - Run the main loop: handle events → update → render → flip

main.py is intentionally thin. It owns the pygame lifecycle and the window,
nothing else. All bomb and module logic lives in core/.

The loop is an async function driven by asyncio.run(), so the game can
also be packaged for the browser with pygbag unchanged.

Usage:
    python main.py
    python main.py --modules 3 --seed 42 --log-level DEBUG
    python main.py --zen
    python main.py --verify-rules
"""

from __future__ import annotations
import argparse
import asyncio
import logging
import sys

import pygame

from core.audio import Audio
from core.config import read_settings
from core.game import Game
from rules.verify import verify_all_rules
from settings import (
    BOMB_MAX_STRIKES,
    BOMB_START_S,
    DEFAULT_MODULES,
    FPS,
    MAX_MODULES,
    SCREEN_H,
    SCREEN_W,
    SETTINGS_FILE,
    TITLE,
)

logger = logging.getLogger("flowerbutton")

# Longest frame the simulation will step. Longer gaps (window drag, tab
# switch) are clamped so the music-box clock can't skip a whole tick range.
_MAX_DT = 0.05


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="flowerbutton", description=TITLE)
    parser.add_argument(
        "--modules", type=int, default=DEFAULT_MODULES, choices=range(1, MAX_MODULES + 1),
        help="number of flower buttons on the bomb",
    )
    parser.add_argument("--seed", type=int, default=None, help="seed for rule generation")
    parser.add_argument("--zen", action="store_true", help="zen mode: the timer counts up")
    parser.add_argument("--time-mode", action="store_true", help="time mode: strikes stop after three")
    parser.add_argument("--settings", default=SETTINGS_FILE, help="path of the settings JSON file")
    parser.add_argument("--bomb-time", type=float, default=BOMB_START_S, help="bomb time in seconds")
    parser.add_argument(
        "--strikes", type=int, default=BOMB_MAX_STRIKES,
        help="strikes before the bomb explodes, 0 for no limit",
    )
    parser.add_argument(
        "--log-level", default="INFO",
        choices=("DEBUG", "INFO", "WARNING", "ERROR"),
        help="logging verbosity",
    )
    parser.add_argument(
        "--verify-rules", action="store_true",
        help="check every rule combination, then exit (status 1 on issues)",
    )
    return parser


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level),
        format="%(asctime)s %(levelname)-7s %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


async def main(args: argparse.Namespace) -> None:
    """Async main loop, compatible with both CPython and pygbag.

    Each iteration yields via asyncio.sleep(0), which pygbag uses to hand
    control back to the browser.
    """
    settings = read_settings(args.settings)

    pygame.init()
    window = pygame.display.set_mode((SCREEN_W, SCREEN_H))
    pygame.display.set_caption(TITLE)

    # ── Subsystems ────────────────────────────────────────────────────────────
    clock = pygame.Clock()
    game = Game(
        modules=args.modules,
        seed=args.seed,
        zen_mode=args.zen,
        time_mode=args.time_mode,
        settings=settings,
        bomb_time=args.bomb_time,
        max_strikes=args.strikes or None,
    )

    audio = Audio()
    audio.init()
    game.set_audio(audio)

    # ── Main loop ─────────────────────────────────────────────────────────────
    running = True
    while running:
        dt = min(clock.tick(FPS) / 1000.0, _MAX_DT)

        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
            elif event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                running = False
            elif event.type in (pygame.KEYDOWN, pygame.KEYUP,
                                pygame.MOUSEBUTTONDOWN, pygame.MOUSEBUTTONUP):
                game.handle_event(event)

        game.update(dt)
        game.render(window)
        pygame.display.flip()

        await asyncio.sleep(0)

    audio.quit()
    pygame.quit()


def run(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.log_level)

    if args.verify_rules:
        report = verify_all_rules()
        logger.info(
            "%d combinations checked, %d issue(s)", report.combinations, len(report.issues),
        )
        return 0 if report.passed else 1

    asyncio.run(main(args))
    return 0


if __name__ == "__main__":
    sys.exit(run())
