"""HoleBreaker game entities."""

from .ball import Ball
from .paddle import Paddle
from .brick import Brick, BrickKind
from .power_up import PowerUp, PowerUpKind
from .particle import Particle
from .target_zone import TargetZone

__all__ = [
    'Ball',
    'Paddle',
    'Brick', 'BrickKind',
    'PowerUp', 'PowerUpKind',
    'Particle',
    'TargetZone',
]
