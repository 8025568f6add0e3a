"""Shared fixtures for HoleBreaker tests."""

import random
from dataclasses import replace

import pytest

from holebreaker.config import DifficultyTable, GameConfig
from holebreaker.entities import Ball, Brick, BrickKind, TargetZone
from holebreaker.game_mode import HoleBreakerMode
from holebreaker.logging import close_all_sinks


ARENA_WIDTH = 800.0
ARENA_HEIGHT = 600.0


@pytest.fixture
def rng():
    """Seeded random source so layouts repeat between runs."""
    return random.Random(1234)


@pytest.fixture
def config():
    """Small arena with every random side effect switched off.

    No power-up drops, no indestructible bricks, no flavor messages and
    every normal brick at health 1.
    """
    return GameConfig(
        arena_width=ARENA_WIDTH,
        arena_height=ARENA_HEIGHT,
        lives=3,
        max_level=3,
        level_transition_frames=3,
        difficulty=DifficultyTable(
            health_bands=(),
            indestructible_chance=0.0,
            power_up_chance=0.0,
            flavor_message_chance=0.0,
        ),
    )


@pytest.fixture
def game(config, rng):
    """A HoleBreakerMode with a session already started."""
    mode = HoleBreakerMode(config=config, rng=rng)
    mode.start_session()
    return mode


@pytest.fixture
def make_game(config, rng):
    """Factory for a started game with config overrides."""
    def _make(**overrides):
        mode = HoleBreakerMode(config=replace(config, **overrides), rng=rng)
        mode.start_session()
        return mode
    return _make


@pytest.fixture
def stage():
    """Replace a game's generated layout with a scripted one.

    The zone defaults to the top-right corner, away from the action, and
    a spare brick in the bottom-left keeps the level from clearing.
    """
    def _stage(mode, balls, bricks=None, zone=None, keep_spare=True):
        bricks = list(bricks or [])
        if keep_spare:
            bricks.append(make_brick(10, 400))
        mode._balls[:] = balls
        mode._bricks[:] = bricks
        mode._power_ups.clear()
        mode._particles.clear()
        mode._zone = zone or TargetZone(x=ARENA_WIDTH - 60, y=60, radius=35)
        return mode
    return _stage


@pytest.fixture(autouse=True)
def _reset_sinks():
    """Keep record sinks from leaking between tests."""
    yield
    close_all_sinks()


def make_ball(x, y, dx=0.0, dy=0.0, radius=12.0, **kwargs):
    return Ball(x=x, y=y, dx=dx, dy=dy, radius=radius, **kwargs)


def make_brick(x, y, health=1, kind=BrickKind.NORMAL, width=40.0, height=20.0):
    return Brick(
        x=x, y=y, width=width, height=height,
        health=health, max_health=health, kind=kind,
        color='slate' if kind is BrickKind.INDESTRUCTIBLE else 'pink',
    )
