#!/usr/bin/env python3
"""HoleBreaker - Standalone Entry Point.

Play with the mouse: the paddle follows the pointer, a click launches
balls held by a sticky paddle.

Usage:
    holebreaker
    holebreaker --lives 3 --max-level 8
    holebreaker --config tuning.yaml --record
"""

import argparse
import random
import sys
import time
from dataclasses import replace
from pathlib import Path
from typing import List

import pygame

from .config import CHARACTERS, FPS, SCREEN_HEIGHT, SCREEN_WIDTH, GameConfig, load_config
from .errors import ConfigurationError
from .game_mode import HoleBreakerMode
from .game_state import GameState
from .input import InputEvent, InputKind
from .logging import (
    FileSink,
    close_all_sinks,
    configure_logging,
    get_log_dir,
    get_logger,
    register_sink,
)
from .models import Vector2D
from .scheduler import FrameScheduler
from .skins import GeometricSkin

log = get_logger('main')


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="HoleBreaker - Standalone")

    # Display options
    parser.add_argument('--width', type=int, default=SCREEN_WIDTH, help='Screen width')
    parser.add_argument('--height', type=int, default=SCREEN_HEIGHT, help='Screen height')
    parser.add_argument('--fullscreen', action='store_true', help='Run fullscreen')

    # Session options
    parser.add_argument('--config', type=Path, default=None, help='YAML tuning file')
    parser.add_argument('--record', action='store_true', help='Write a JSONL session log')
    parser.add_argument('--log-level', type=str, default=None, help='Console log level')

    # Game-specific arguments
    for arg in HoleBreakerMode.get_arguments():
        kwargs = {k: v for k, v in arg.items() if k != 'name'}
        parser.add_argument(arg['name'], **kwargs)

    return parser


def build_config(args: argparse.Namespace, width: int, height: int) -> GameConfig:
    """Combine the tuning file and command line into a validated config."""
    config = load_config(args.config) if args.config else GameConfig()

    overrides = {'arena_width': float(width), 'arena_height': float(height)}
    if args.lives is not None:
        overrides['lives'] = args.lives
    if args.max_level is not None:
        overrides['max_level'] = args.max_level
    return replace(config, **overrides).validate()


def main() -> int:
    """Run HoleBreaker standalone."""
    args = build_parser().parse_args()

    if args.log_level:
        configure_logging(level=args.log_level)

    # Initialize pygame
    pygame.init()
    pygame.font.init()

    # Create display
    if args.fullscreen:
        screen = pygame.display.set_mode((0, 0), pygame.FULLSCREEN)
        width, height = screen.get_size()
    else:
        width, height = args.width, args.height
        screen = pygame.display.set_mode((width, height), pygame.RESIZABLE)

    pygame.display.set_caption("HoleBreaker")

    try:
        config = build_config(args, width, height)
    except ConfigurationError as e:
        log.error("Invalid configuration: %s", e)
        pygame.quit()
        return 2

    if args.record:
        sink = FileSink()
        register_sink('session', sink)
        log.info("Recording session log to %s", get_log_dir())

    rng = random.Random(args.seed)
    game = HoleBreakerMode(config=config, rng=rng)
    skin = GeometricSkin(rng=random.Random(args.seed))
    game.subscribe(skin.on_event)

    clock = pygame.time.Clock()
    scheduler = FrameScheduler(game, fps=FPS, clock=clock)

    print("\n" + "=" * 50)
    print("HOLEBREAKER")
    print("=" * 50)
    print("Controls:")
    print("  - Move the mouse to steer the paddle")
    print("  - Click or SPACE to launch / start / continue")
    print("  - 1-%d to pick a character on the menu" % len(CHARACTERS))
    print("  - R to return to the menu")
    print("  - ESC to quit")
    print("=" * 50 + "\n")

    running = True
    while running:
        input_events: List[InputEvent] = []

        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
            elif event.type == pygame.VIDEORESIZE:
                screen = pygame.display.set_mode((event.w, event.h), pygame.RESIZABLE)
                game.resize(event.w, event.h)
            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    running = False
                elif event.key == pygame.K_r:
                    game.reset()
                    print("Back to menu")
                elif event.key == pygame.K_SPACE:
                    _activate(game, args.character, input_events)
                elif game.state == GameState.MENU and pygame.K_1 <= event.key < pygame.K_1 + len(CHARACTERS):
                    game.start_session(event.key - pygame.K_1)
            elif event.type == pygame.MOUSEMOTION:
                input_events.append(InputEvent(
                    position=Vector2D(x=float(event.pos[0]), y=float(event.pos[1])),
                    timestamp=time.monotonic(),
                    kind=InputKind.MOVE,
                ))
            elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                _activate(game, args.character, input_events)

        # Pass input to game
        game.handle_input(input_events)

        # Step the simulation (paces to FPS even when idle)
        scheduler.tick()
        skin.update(clock.get_time() / 1000.0)

        # Render
        skin.render(game.snapshot(), screen)
        pygame.display.flip()

    close_all_sinks()
    pygame.quit()
    return 0


def _activate(game: HoleBreakerMode, character: int, input_events: List[InputEvent]) -> None:
    """Primary action: start from the menu, dismiss end screens, or launch."""
    if game.state == GameState.MENU:
        game.start_session(character)
    elif game.state.is_terminal:
        game.acknowledge_terminal()
    else:
        input_events.append(InputEvent(
            position=Vector2D(x=0.0, y=0.0),
            timestamp=time.monotonic(),
            kind=InputKind.LAUNCH,
        ))


if __name__ == "__main__":
    sys.exit(main())
