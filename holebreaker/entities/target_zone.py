"""The target zone ("the hole") a ball must enter to clear the level."""

import math
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .ball import Ball


@dataclass
class TargetZone:
    """Circular level-clear destination. Position is the center."""

    x: float
    y: float
    radius: float

    def distance_to(self, px: float, py: float) -> float:
        return math.hypot(px - self.x, py - self.y)

    def contains_ball(self, ball: 'Ball') -> bool:
        """True when the ball overlaps the zone (center distance < sum of radii)."""
        return self.distance_to(ball.x, ball.y) < self.radius + ball.radius

    def clamp_to(self, arena_width: float, arena_height: float, margin: float) -> None:
        """Keep the zone inside the arena after a resize."""
        low_x = min(margin, arena_width / 2)
        self.x = max(low_x, min(arena_width - low_x, self.x))
        low_y = min(self.radius, arena_height / 2)
        self.y = max(low_y, min(arena_height - low_y, self.y))
