"""Cosmetic particles from brick bursts."""

from dataclasses import dataclass


@dataclass
class Particle:
    """Short-lived debris. Has no effect on the simulation."""

    x: float
    y: float
    dx: float
    dy: float
    color: str
    life: float = 1.0

    @property
    def alive(self) -> bool:
        return self.life > 0

    def update(self, decay: float) -> None:
        """Move one frame and fade by ``decay``."""
        self.x += self.dx
        self.y += self.dy
        self.life -= decay
