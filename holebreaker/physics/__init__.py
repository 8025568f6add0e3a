"""HoleBreaker physics and collision detection."""

from .collision import (
    check_target_zone,
    check_wall_collision,
    crosses_paddle_plane,
    check_brick_collision,
    resolve_brick_collision,
    check_power_up_pickup,
)

__all__ = [
    'check_target_zone',
    'check_wall_collision',
    'crosses_paddle_plane',
    'check_brick_collision',
    'resolve_brick_collision',
    'check_power_up_pickup',
]
