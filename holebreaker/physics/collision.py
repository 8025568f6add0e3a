"""Collision detection and response for HoleBreaker.

Handles ball-zone, ball-wall, ball-paddle, ball-brick and
power-up-paddle interactions. All checks are per-frame and discrete:
brick hits test only the ball's center point against the brick rectangle,
so a fast ball can tunnel through a thin brick between two frames.
"""

from typing import Sequence, TYPE_CHECKING

if TYPE_CHECKING:
    from ..entities.ball import Ball
    from ..entities.brick import Brick
    from ..entities.paddle import Paddle
    from ..entities.power_up import PowerUp
    from ..entities.target_zone import TargetZone


def check_target_zone(ball: 'Ball', zone: 'TargetZone') -> bool:
    """Check whether the ball has entered the target zone."""
    return zone.contains_ball(ball)


def check_wall_collision(ball: 'Ball', arena_width: float) -> bool:
    """Reflect the ball off the side walls and the ceiling.

    Uses the ball's next position: when the next step would reach a wall,
    the ball is clamped against it and its velocity turned away from it.
    The floor is not a wall; see crosses_paddle_plane.

    Args:
        ball: Ball to check (mutated in place)
        arena_width: Arena width in pixels

    Returns:
        True if the ball touched any wall
    """
    hit = False
    radius = ball.radius

    # Right wall
    if ball.x + ball.dx >= arena_width - radius or ball.x > arena_width - radius:
        ball.x = arena_width - radius
        ball.dx = -abs(ball.dx)
        hit = True
    # Left wall
    elif ball.x + ball.dx <= radius or ball.x < radius:
        ball.x = radius
        ball.dx = abs(ball.dx)
        hit = True

    # Ceiling
    if ball.y + ball.dy <= radius or ball.y < radius:
        ball.y = radius
        ball.dy = abs(ball.dy)
        hit = True

    return hit


def crosses_paddle_plane(ball: 'Ball', paddle: 'Paddle') -> bool:
    """Check whether the ball's next step crosses the paddle's top edge.

    Only a descending ball can cross; a ball moving up never triggers a
    paddle hit or a loss.
    """
    if ball.dy <= 0:
        return False
    return ball.y + ball.radius + ball.dy > paddle.top


def check_brick_collision(ball: 'Ball', brick: 'Brick') -> bool:
    """Point-in-rectangle test of the ball center against a live brick."""
    if not brick.alive:
        return False
    return brick.contains_point(ball.x, ball.y)


def resolve_brick_collision(
    ball: 'Ball',
    brick: 'Brick',
    palette: Sequence[str],
) -> bool:
    """Apply a ball-brick hit.

    A normal ball bounces (vertical velocity inverts) and deals one hit;
    indestructible bricks absorb it. A penetrating ball keeps its course
    and force-clears any brick, indestructible ones included.

    Args:
        ball: Ball that hit the brick (mutated in place)
        brick: Brick that was hit (mutated in place)
        palette: Colour tags for recolouring damaged bricks

    Returns:
        True if the brick died from this hit
    """
    if ball.penetrating:
        return brick.force_clear()

    ball.bounce_vertical()
    return brick.hit(palette)


def check_power_up_pickup(power_up: 'PowerUp', paddle: 'Paddle') -> bool:
    """Check whether the paddle catches a falling power-up.

    The capsule's vertical span must overlap the paddle's and its center
    must lie within the paddle's horizontal span.
    """
    if not power_up.alive:
        return False
    overlaps_vertically = (
        power_up.y + power_up.radius >= paddle.top
        and power_up.y - power_up.radius <= paddle.bottom
    )
    return overlaps_vertically and paddle.spans(power_up.x)
