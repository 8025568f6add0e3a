"""
Read-only render snapshots.

Each frame the presentation layer receives a RenderSnapshot: immutable
copies of every entity plus session counters. Collaborators read it
freely; nothing in it aliases the live simulation state.
"""

from dataclasses import dataclass
from typing import Optional, Tuple, TYPE_CHECKING

from .entities.brick import BrickKind
from .entities.power_up import PowerUpKind
from .game_state import GameState

if TYPE_CHECKING:
    from .entities import Ball, Brick, Paddle, Particle, PowerUp, TargetZone


@dataclass(frozen=True)
class BallView:
    x: float
    y: float
    dx: float
    dy: float
    radius: float
    attached: bool
    penetrating: bool

    @classmethod
    def from_entity(cls, ball: 'Ball') -> 'BallView':
        return cls(
            x=ball.x, y=ball.y, dx=ball.dx, dy=ball.dy, radius=ball.radius,
            attached=ball.attached, penetrating=ball.penetrating,
        )


@dataclass(frozen=True)
class PaddleView:
    x: float
    y: float
    width: float
    height: float
    sticky: bool

    @classmethod
    def from_entity(cls, paddle: 'Paddle') -> 'PaddleView':
        return cls(
            x=paddle.x, y=paddle.y, width=paddle.width, height=paddle.height,
            sticky=paddle.sticky,
        )

    @property
    def rect(self) -> Tuple[float, float, float, float]:
        """Bounding rectangle (x, y, width, height) with x, y the top-left corner."""
        return (self.x - self.width / 2, self.y - self.height / 2, self.width, self.height)


@dataclass(frozen=True)
class BrickView:
    x: float
    y: float
    width: float
    height: float
    health: int
    max_health: int
    kind: BrickKind
    color: str

    @classmethod
    def from_entity(cls, brick: 'Brick') -> 'BrickView':
        return cls(
            x=brick.x, y=brick.y, width=brick.width, height=brick.height,
            health=brick.health, max_health=brick.max_health,
            kind=brick.kind, color=brick.color,
        )

    @property
    def rect(self) -> Tuple[float, float, float, float]:
        return (self.x, self.y, self.width, self.height)


@dataclass(frozen=True)
class PowerUpView:
    x: float
    y: float
    radius: float
    kind: PowerUpKind

    @classmethod
    def from_entity(cls, power_up: 'PowerUp') -> 'PowerUpView':
        return cls(x=power_up.x, y=power_up.y, radius=power_up.radius, kind=power_up.kind)


@dataclass(frozen=True)
class ParticleView:
    x: float
    y: float
    life: float
    color: str

    @classmethod
    def from_entity(cls, particle: 'Particle') -> 'ParticleView':
        return cls(x=particle.x, y=particle.y, life=particle.life, color=particle.color)


@dataclass(frozen=True)
class ZoneView:
    x: float
    y: float
    radius: float

    @classmethod
    def from_entity(cls, zone: 'TargetZone') -> 'ZoneView':
        return cls(x=zone.x, y=zone.y, radius=zone.radius)


@dataclass(frozen=True)
class RenderSnapshot:
    """Everything a renderer needs for one frame."""

    state: GameState
    frame: int
    score: int
    lives: int
    level: int
    max_level: int

    arena_width: float
    arena_height: float

    balls: Tuple[BallView, ...]
    paddle: Optional[PaddleView]
    bricks: Tuple[BrickView, ...]         # Alive bricks only
    power_ups: Tuple[PowerUpView, ...]
    particles: Tuple[ParticleView, ...]
    zone: Optional[ZoneView]

    character_name: str = ""
    ball_color: str = "white"
    message: str = ""
    ball_lost_flash: bool = False
    transition_frames_left: int = 0
