"""
Smoke tests for the geometric skin, run headless.

Run with: pytest tests/test_skins.py -v
"""

import random

import pygame
import pytest

from conftest import make_ball
from holebreaker.events import GameEvent, GameEventType
from holebreaker.game_state import GameState
from holebreaker.skins import GeometricSkin, HoleBreakerSkin


@pytest.fixture
def screen(monkeypatch):
    """Offscreen surface with the dummy video driver."""
    monkeypatch.setenv('SDL_VIDEODRIVER', 'dummy')
    pygame.init()
    yield pygame.Surface((800, 600))
    pygame.quit()


@pytest.fixture
def skin():
    return GeometricSkin(rng=random.Random(3))


class TestGeometricSkin:
    """Drawing and win effects."""

    def test_renders_every_state(self, game, stage, skin, screen):
        stage(game, balls=[make_ball(400, 300, dx=2, dy=-2)])
        skin.render(game.snapshot(), screen)

        game.reset()
        assert game.state == GameState.MENU
        skin.render(game.snapshot(), screen)

    def test_win_launches_confetti(self, skin, screen):
        skin.on_event(GameEvent(type=GameEventType.SESSION_WON, frame=1))
        assert len(skin._confetti) == GeometricSkin.CONFETTI_COUNT

        start = [piece['y'] for piece in skin._confetti]
        skin.update(0.1)
        assert all(piece['y'] > y for piece, y in zip(skin._confetti, start))


class TestSoundHooks:
    """Event to sound-hook routing on the base skin."""

    def test_events_route_to_hooks(self):
        calls = []

        class RecordingSkin(HoleBreakerSkin):
            def render(self, snapshot, screen):
                pass

            def play_brick_break_sound(self):
                calls.append('brick')

            def play_game_over_sound(self):
                calls.append('gameover')

        skin = RecordingSkin()
        skin.on_event(GameEvent(type=GameEventType.BRICK_DESTROYED, frame=1, points=10))
        skin.on_event(GameEvent(type=GameEventType.SESSION_OVER, frame=2))
        skin.on_event(GameEvent(type=GameEventType.PADDLE_HIT, frame=3))

        assert calls == ['brick', 'gameover']
