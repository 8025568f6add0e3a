"""Falling power-up capsules."""

from dataclasses import dataclass
from enum import Enum


class PowerUpKind(Enum):
    """Power-up effects."""

    EXTRA_BALL_SINGLE = "extra_ball_single"
    EXTRA_BALL_DOUBLE = "extra_ball_double"
    PADDLE_WIDEN = "paddle_widen"
    PADDLE_STICKY = "paddle_sticky"
    BALL_PENETRATE = "ball_penetrate"

    @property
    def label(self) -> str:
        """Short capsule label for rendering."""
        return _LABELS[self]


_LABELS = {
    PowerUpKind.EXTRA_BALL_SINGLE: "+1",
    PowerUpKind.EXTRA_BALL_DOUBLE: "+2",
    PowerUpKind.PADDLE_WIDEN: "W",
    PowerUpKind.PADDLE_STICKY: "S",
    PowerUpKind.BALL_PENETRATE: "P",
}


@dataclass
class PowerUp:
    """A power-up falling at constant speed. Position is the capsule center."""

    x: float
    y: float
    dy: float
    kind: PowerUpKind
    radius: float = 15.0
    alive: bool = True

    def fall(self) -> None:
        """Advance one frame."""
        self.y += self.dy

    def destroy(self) -> None:
        """Mark for removal (claimed or fell out)."""
        self.alive = False
