"""
Shared value types for HoleBreaker.

Pydantic models for the small immutable values passed across the
core boundary: positions and arena dimensions.
"""

from pydantic import BaseModel, ConfigDict, Field


class Point2D(BaseModel):
    """Immutable 2D point/vector for positions and velocities.

    Attributes:
        x: X coordinate (horizontal, grows to the right)
        y: Y coordinate (vertical, grows downward)

    Examples:
        >>> pos = Point2D(x=100.0, y=200.0)
        >>> vel = Point2D(x=-4.0, y=-4.0)  # Moving up and left
    """
    x: float
    y: float

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        """String representation for debugging."""
        return f"Point2D(x={self.x:.2f}, y={self.y:.2f})"


Vector2D = Point2D


class ArenaSize(BaseModel):
    """Playable arena dimensions in pixels.

    Both dimensions must be positive; pydantic rejects anything else,
    which is how degenerate arenas are refused before a level is built.
    """
    width: float = Field(..., gt=0)
    height: float = Field(..., gt=0)

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return f"ArenaSize({self.width:g}x{self.height:g})"
