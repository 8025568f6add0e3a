"""Paddle entity.

The paddle jumps straight to the commanded position (pointer/touch
tracking), clamped so it never leaves the arena. Power-ups change its
width and stickiness.
"""

from dataclasses import dataclass


@dataclass
class Paddle:
    """Player paddle. Exactly one per session.

    Position is the paddle center.
    """

    x: float
    y: float
    width: float
    height: float
    arena_width: float
    sticky: bool = False

    @classmethod
    def for_arena(
        cls,
        arena_width: float,
        arena_height: float,
        width: float,
        height: float,
        bottom_offset: float,
    ) -> 'Paddle':
        """Create a centered paddle whose top edge sits ``bottom_offset`` above the floor."""
        return cls(
            x=arena_width / 2,
            y=arena_height - bottom_offset + height / 2,
            width=width,
            height=height,
            arena_width=arena_width,
        )

    @property
    def left(self) -> float:
        """Get paddle left edge X."""
        return self.x - self.width / 2

    @property
    def right(self) -> float:
        """Get paddle right edge X."""
        return self.x + self.width / 2

    @property
    def top(self) -> float:
        """Get paddle top Y."""
        return self.y - self.height / 2

    @property
    def bottom(self) -> float:
        """Get paddle bottom Y."""
        return self.y + self.height / 2

    def spans(self, x: float) -> bool:
        """Check whether a horizontal position lies within the paddle."""
        return self.left <= x <= self.right

    def move_to(self, target_x: float) -> None:
        """Move paddle center to ``target_x``, clamped to the arena."""
        half_width = self.width / 2
        self.x = max(half_width, min(self.arena_width - half_width, target_x))

    def widen(self, factor: float, max_width: float) -> None:
        """Multiply width by ``factor``, never beyond ``max_width``."""
        self.width = min(self.width * factor, max_width)
        self.move_to(self.x)

    def resize_arena(
        self,
        arena_width: float,
        arena_height: float,
        bottom_offset: float,
        max_width: float,
    ) -> None:
        """Re-anchor the paddle after the arena changes size.

        Width shrinks to ``max_width`` if the new arena caps it lower.
        """
        self.arena_width = arena_width
        self.width = min(self.width, max_width, arena_width)
        self.y = arena_height - bottom_offset + self.height / 2
        self.move_to(self.x)
