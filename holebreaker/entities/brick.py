"""Brick entity.

Normal bricks lose one health per hit and die when health reaches zero.
Indestructible bricks ignore ordinary hits; only a penetrating ball can
force-clear them.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Sequence, Tuple


class BrickKind(Enum):
    """Brick classification."""

    NORMAL = "normal"
    INDESTRUCTIBLE = "indestructible"


def color_for_health(health: int, palette: Sequence[str]) -> str:
    """Colour tag for a normal brick, cycling through the palette by health."""
    return palette[(health - 1) % len(palette)]


@dataclass
class Brick:
    """A brick in the level grid.

    Position is the top-left corner.
    """

    x: float
    y: float
    width: float
    height: float
    health: int
    max_health: int
    kind: BrickKind = BrickKind.NORMAL
    color: str = "pink"
    row: int = 0
    col: int = 0
    alive: bool = True

    @property
    def center_x(self) -> float:
        """Get center X position."""
        return self.x + self.width / 2

    @property
    def center_y(self) -> float:
        """Get center Y position."""
        return self.y + self.height / 2

    @property
    def is_indestructible(self) -> bool:
        return self.kind is BrickKind.INDESTRUCTIBLE

    def get_bounds(self) -> Tuple[float, float, float, float]:
        """Get bounds (left, top, right, bottom)."""
        return (
            self.x,
            self.y,
            self.x + self.width,
            self.y + self.height,
        )

    def contains_point(self, px: float, py: float) -> bool:
        """Strict point-in-rectangle test (edges excluded)."""
        return (
            self.x < px < self.x + self.width
            and self.y < py < self.y + self.height
        )

    def hit(self, palette: Sequence[str]) -> bool:
        """Apply one ordinary hit.

        Args:
            palette: Colour tags used to recolour a damaged brick

        Returns:
            True if this hit destroyed the brick
        """
        if not self.alive or self.is_indestructible:
            return False

        self.health -= 1
        if self.health <= 0:
            self.health = 0
            self.alive = False
            return True

        self.color = color_for_health(self.health, palette)
        return False

    def force_clear(self) -> bool:
        """Destroy the brick regardless of kind or health (penetrating hit).

        Returns:
            True if the brick was alive before the call
        """
        if not self.alive:
            return False
        self.health = 0
        self.alive = False
        return True
