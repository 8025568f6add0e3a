"""Ball entity with per-frame velocity physics.

The ball moves by a fixed step every frame (no delta time). It bounces off
walls, the paddle and bricks, and can be glued to a sticky paddle.

Fields stay present in every mode: ``attach_offset`` is only meaningful
while ``attached`` is True, and velocity is (0, 0) exactly when attached.
"""

import math
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .paddle import Paddle


@dataclass
class Ball:
    """A ball in play."""

    x: float
    y: float
    dx: float
    dy: float
    radius: float
    attached: bool = False
    attach_offset: float = 0.0      # Offset from paddle center while attached
    penetrating: bool = False       # Passes through bricks without bouncing
    alive: bool = True

    @property
    def speed(self) -> float:
        """Get current ball speed (pixels per frame)."""
        return math.hypot(self.dx, self.dy)

    def move(self) -> None:
        """Advance one frame (explicit Euler, fixed step)."""
        self.x += self.dx
        self.y += self.dy

    def bounce_vertical(self) -> None:
        """Bounce off a horizontal surface (reverse Y velocity)."""
        self.dy = -self.dy

    def bounce_off_paddle(
        self,
        paddle_x: float,
        paddle_width: float,
        deflection: float,
        speedup: float,
        max_speed: float,
    ) -> None:
        """Bounce off the paddle with angle based on hit position.

        Vertical velocity is forced upward keeping its magnitude. Horizontal
        velocity is replaced (not combined) by the hit offset from the paddle
        center, normalized to [-1, 1] and scaled by ``deflection``, so edge
        hits rebound at steeper angles. Both axes then speed up by
        ``speedup``, capped at ``max_speed``.

        Args:
            paddle_x: Paddle center X position
            paddle_width: Paddle width
            deflection: Horizontal speed for an edge hit
            speedup: Multiplier applied to both axes (>= 1)
            max_speed: Speed cap
        """
        offset = (self.x - paddle_x) / (paddle_width / 2)
        offset = max(-1.0, min(1.0, offset))

        self.dy = -abs(self.dy)
        self.dx = offset * deflection
        self.dx *= speedup
        self.dy *= speedup
        self.cap_speed(max_speed)

    def cap_speed(self, max_speed: float) -> None:
        """Scale velocity down so speed never exceeds ``max_speed``."""
        current_speed = self.speed
        if current_speed > max_speed:
            scale = max_speed / current_speed
            self.dx *= scale
            self.dy *= scale

    def attach_to(self, paddle: 'Paddle') -> None:
        """Glue the ball to the paddle, recording its offset."""
        half_width = paddle.width / 2
        self.attached = True
        self.attach_offset = max(-half_width, min(half_width, self.x - paddle.x))
        self.dx = 0.0
        self.dy = 0.0
        self.follow(paddle)

    def follow(self, paddle: 'Paddle') -> None:
        """Track the paddle position while attached."""
        self.x = paddle.x + self.attach_offset
        self.y = paddle.top - self.radius

    def launch(self, speed: float, deflection: float, paddle_width: float) -> None:
        """Release an attached ball upward.

        The horizontal component follows the same offset rule as a paddle
        bounce, so a ball glued near the edge leaves at an angle.

        Args:
            speed: Upward speed
            deflection: Horizontal speed for an edge launch
            paddle_width: Current paddle width
        """
        if not self.attached:
            return
        offset = self.attach_offset / (paddle_width / 2)
        offset = max(-1.0, min(1.0, offset))
        self.attached = False
        self.attach_offset = 0.0
        self.dx = offset * deflection
        self.dy = -abs(speed)

    def destroy(self) -> None:
        """Mark ball for removal (lost or consumed by the hole)."""
        self.alive = False
