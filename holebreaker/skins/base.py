"""Base class for HoleBreaker skins.

Skins handle ALL rendering - the game only manages state.
"""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

import pygame

from ..events import GameEvent, GameEventType

if TYPE_CHECKING:
    from ..snapshot import RenderSnapshot


class HoleBreakerSkin(ABC):
    """Base class for game skins (visuals + audio).

    Skins read a RenderSnapshot each frame and react to GameEvents.
    They never touch the live simulation.
    """

    NAME: str = "base"
    DESCRIPTION: str = "Base skin"

    @abstractmethod
    def render(self, snapshot: 'RenderSnapshot', screen: pygame.Surface) -> None:
        """Draw one frame.

        Args:
            snapshot: Immutable view of the current frame
            screen: Pygame surface to draw on
        """
        pass

    def on_event(self, event: GameEvent) -> None:
        """Route a simulation event to the matching hook.

        Subscribe this to the game with ``game.subscribe(skin.on_event)``.
        """
        if event.type == GameEventType.PADDLE_HIT:
            self.play_paddle_hit_sound()
        elif event.type == GameEventType.BRICK_DESTROYED:
            self.play_brick_break_sound()
        elif event.type == GameEventType.POWER_UP_COLLECTED:
            self.play_power_up_sound()
        elif event.type == GameEventType.BALL_LOST:
            self.play_life_lost_sound()
        elif event.type == GameEventType.LEVEL_CLEARED:
            self.play_level_complete_sound()
        elif event.type == GameEventType.SESSION_WON:
            self.play_win_sound()
        elif event.type == GameEventType.SESSION_OVER:
            self.play_game_over_sound()

    def update(self, dt: float) -> None:
        """Update skin state (animations, timers, etc.).

        Args:
            dt: Delta time in seconds
        """
        pass

    def play_paddle_hit_sound(self) -> None:
        """Play sound when ball hits paddle."""
        pass

    def play_brick_break_sound(self) -> None:
        """Play sound when brick is destroyed."""
        pass

    def play_power_up_sound(self) -> None:
        """Play sound when a power-up is collected."""
        pass

    def play_life_lost_sound(self) -> None:
        """Play sound when a ball falls past the paddle."""
        pass

    def play_level_complete_sound(self) -> None:
        """Play sound when level is completed."""
        pass

    def play_win_sound(self) -> None:
        """Play sound when the final level is cleared."""
        pass

    def play_game_over_sound(self) -> None:
        """Play sound when game is over."""
        pass
