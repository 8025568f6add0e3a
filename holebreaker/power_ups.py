"""Power-up system: spawn policy, pickup detection and effects.

A destroyed normal brick may drop one capsule, which falls at constant
speed. The paddle claims it on contact; a capsule leaving the arena
bottom is discarded. Claiming removes the capsule and applies its effect
in the same step, so a capsule can never be claimed twice.
"""

import random
from typing import Dict, List, Optional

from .config import GameConfig
from .entities.ball import Ball
from .entities.brick import Brick
from .entities.paddle import Paddle
from .entities.power_up import PowerUp, PowerUpKind
from .logging import get_logger
from .physics.collision import check_power_up_pickup
from .scheduler import DeferredQueue

log = get_logger('power_ups')

# Deferred-queue keys for timed effects
PENETRATE_EXPIRY = 'penetrate_expiry'
STICKY_EXPIRY = 'sticky_expiry'

BANNERS: Dict[PowerUpKind, str] = {
    PowerUpKind.EXTRA_BALL_SINGLE: "Extra ball!",
    PowerUpKind.EXTRA_BALL_DOUBLE: "Multiball!",
    PowerUpKind.PADDLE_WIDEN: "Wide paddle!",
    PowerUpKind.PADDLE_STICKY: "Sticky paddle!",
    PowerUpKind.BALL_PENETRATE: "Wrecking ball!",
}


class PowerUpSystem:
    """Spawns, moves and applies power-ups."""

    def __init__(self, config: GameConfig, rng: random.Random, deferred: DeferredQueue):
        """Initialize power-up system.

        Args:
            config: Game configuration
            rng: Random source for drop checks, kinds and extra-ball spread
            deferred: Queue used to schedule effect expiry
        """
        self._config = config
        self._rng = rng
        self._deferred = deferred

    def maybe_spawn(self, brick: Brick) -> Optional[PowerUp]:
        """Roll the drop chance for a destroyed brick.

        Returns:
            New PowerUp at the brick center, or None
        """
        if self._rng.random() >= self._config.difficulty.power_up_chance:
            return None
        return PowerUp(
            x=brick.center_x,
            y=brick.center_y,
            dy=self._config.power_up_speed,
            kind=self.choose_kind(),
            radius=self._config.power_up_radius,
        )

    def choose_kind(self) -> PowerUpKind:
        """Weighted random pick over the configured kinds."""
        weights = self._config.difficulty.power_up_weights
        total = sum(weights.values())
        draw = self._rng.random() * total

        cumulative = 0.0
        chosen = None
        for kind, weight in weights.items():
            if weight <= 0:
                continue
            chosen = kind
            cumulative += weight
            if draw < cumulative:
                return kind
        # Floating-point leftovers land on the last positive weight
        return chosen

    def update(
        self,
        power_ups: List[PowerUp],
        paddle: Paddle,
        arena_height: float,
    ) -> List[PowerUp]:
        """Move capsules one frame and collect the ones the paddle catches.

        Claimed and escaped capsules are marked dead; the caller compacts
        the list after the pass.

        Returns:
            Capsules claimed this frame, in list order
        """
        claimed = []
        for power_up in power_ups:
            if not power_up.alive:
                continue
            power_up.fall()
            if check_power_up_pickup(power_up, paddle):
                power_up.destroy()
                claimed.append(power_up)
            elif power_up.y - power_up.radius > arena_height:
                power_up.destroy()
        return claimed

    def apply(
        self,
        kind: PowerUpKind,
        balls: List[Ball],
        paddle: Paddle,
        frame: int,
        level_index: int,
    ) -> List[Ball]:
        """Apply a claimed power-up's effect.

        Args:
            kind: Effect to apply
            balls: Live ball collection (kept by reference for expiry)
            paddle: The paddle
            frame: Current simulation frame
            level_index: Current level, for serve speed

        Returns:
            Newly spawned balls for the caller to add
        """
        log.info("Power-up collected: %s", kind.value)

        if kind is PowerUpKind.EXTRA_BALL_SINGLE:
            return self._spawn_extra_balls(balls, 1, level_index)
        if kind is PowerUpKind.EXTRA_BALL_DOUBLE:
            return self._spawn_extra_balls(balls, 2, level_index)

        if kind is PowerUpKind.PADDLE_WIDEN:
            paddle.widen(
                self._config.paddle_widen_factor,
                self._config.max_paddle_width_for(paddle.arena_width),
            )

        elif kind is PowerUpKind.PADDLE_STICKY:
            paddle.sticky = True
            duration = self._config.sticky_duration_frames
            if duration is not None:
                self._deferred.schedule(
                    STICKY_EXPIRY, frame + duration, lambda: setattr(paddle, 'sticky', False)
                )

        elif kind is PowerUpKind.BALL_PENETRATE:
            for ball in balls:
                if ball.alive:
                    ball.penetrating = True
            self._deferred.schedule(
                PENETRATE_EXPIRY,
                frame + self._config.penetrate_frames,
                lambda: self._end_penetration(balls),
            )

        return []

    def _spawn_extra_balls(self, balls: List[Ball], count: int, level_index: int) -> List[Ball]:
        """Spawn ``count`` balls at the first live ball, heading upward."""
        base = next((b for b in balls if b.alive), None)
        if base is None:
            return []

        upward = max(abs(base.dy), self._config.ball_speed(level_index))
        spread = self._config.extra_ball_spread
        return [
            Ball(
                x=base.x,
                y=base.y,
                dx=(self._rng.random() - 0.5) * spread,
                dy=-upward,
                radius=base.radius,
            )
            for _ in range(count)
        ]

    @staticmethod
    def _end_penetration(balls: List[Ball]) -> None:
        for ball in balls:
            ball.penetrating = False
