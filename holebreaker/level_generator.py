"""Procedural level generator for HoleBreaker.

Places the target zone near the top of the arena and fills a centered
grid of bricks below it. Rows grow with the level index, and the
difficulty table decides which bricks are indestructible and how much
health the rest get.

Generation draws from an injected ``random.Random``; layouts are not
reproducible unless the caller seeds it.
"""

import math
import random
from typing import List, Optional, Tuple

from pydantic import ValidationError

from .config import INDESTRUCTIBLE_COLOR, GameConfig
from .entities.brick import Brick, BrickKind, color_for_health
from .entities.target_zone import TargetZone
from .errors import ConfigurationError
from .logging import get_logger
from .models import ArenaSize

log = get_logger('level_generator')


def _distance_to_rect(
    px: float,
    py: float,
    bounds: Tuple[float, float, float, float],
) -> float:
    """Distance from a point to the closest point of a rectangle."""
    left, top, right, bottom = bounds
    nearest_x = max(left, min(px, right))
    nearest_y = max(top, min(py, bottom))
    return math.hypot(px - nearest_x, py - nearest_y)


class LevelGenerator:
    """Builds the target zone and brick grid for a level."""

    def __init__(self, config: Optional[GameConfig] = None, rng: Optional[random.Random] = None):
        """Initialize generator.

        Args:
            config: Game configuration (validated here)
            rng: Random source (default: unseeded Random)

        Raises:
            ConfigurationError: If the configuration is invalid
        """
        self._config = (config or GameConfig()).validate()
        self._rng = rng or random.Random()

    @property
    def config(self) -> GameConfig:
        return self._config

    def generate(
        self,
        level_index: int,
        arena_width: float,
        arena_height: float,
    ) -> Tuple[TargetZone, List[Brick]]:
        """Generate the layout for one level.

        Args:
            level_index: Level number, starting at 1
            arena_width: Arena width in pixels
            arena_height: Arena height in pixels

        Returns:
            Tuple of (target zone, bricks)

        Raises:
            ConfigurationError: On non-positive arena dimensions, a level
                index below 1, or an arena too small to hold the zone
        """
        try:
            arena = ArenaSize(width=arena_width, height=arena_height)
        except ValidationError as e:
            log.error("Rejected arena %sx%s", arena_width, arena_height)
            raise ConfigurationError(f"Invalid arena dimensions: {e}") from e

        if level_index < 1:
            raise ConfigurationError(f"Level index must be >= 1, got {level_index}")

        cfg = self._config
        if arena.width < 2 * cfg.zone_margin:
            raise ConfigurationError(
                f"Arena width {arena.width:g} cannot hold the target zone "
                f"(needs at least {2 * cfg.zone_margin:g})"
            )
        if arena.height < 2 * cfg.zone_radius:
            raise ConfigurationError(
                f"Arena height {arena.height:g} cannot hold the target zone "
                f"(needs at least {2 * cfg.zone_radius:g})"
            )

        zone = self._place_zone(arena)
        bricks = self._build_grid(level_index, arena, zone)

        indestructible = sum(1 for b in bricks if b.is_indestructible)
        log.debug(
            "Generated level %d in %s: %d bricks (%d indestructible), zone at (%.1f, %.1f)",
            level_index, arena, len(bricks), indestructible, zone.x, zone.y,
        )
        return zone, bricks

    def _place_zone(self, arena: ArenaSize) -> TargetZone:
        """Random X within the side margins, fixed Y near the top."""
        cfg = self._config
        x = self._rng.uniform(cfg.zone_margin, arena.width - cfg.zone_margin)
        y = min(cfg.zone_y, arena.height - cfg.zone_radius)
        return TargetZone(x=x, y=y, radius=cfg.zone_radius)

    def _build_grid(
        self,
        level_index: int,
        arena: ArenaSize,
        zone: TargetZone,
    ) -> List[Brick]:
        """Lay out the centered brick grid, skipping cells near the zone."""
        cfg = self._config
        brick_width = cfg.brick_width_for(arena.width)
        step_x = brick_width + cfg.brick_padding
        step_y = cfg.brick_height + cfg.brick_padding

        columns = int((arena.width - cfg.brick_margin) // step_x)
        rows = cfg.brick_base_rows + level_index
        if columns < 1:
            return []

        # Center the grid
        total_row_width = columns * step_x - cfg.brick_padding
        start_x = (arena.width - total_row_width) / 2

        bricks: List[Brick] = []
        for col in range(columns):
            for row in range(rows):
                x = start_x + col * step_x
                y = cfg.brick_offset_top + row * step_y
                bounds = (x, y, x + brick_width, y + cfg.brick_height)

                # Keep the hole clear
                if _distance_to_rect(zone.x, zone.y, bounds) < cfg.zone_exclusion_radius:
                    continue

                bricks.append(self._classify(level_index, row, col, x, y, brick_width))

        return bricks

    def _classify(
        self,
        level_index: int,
        row: int,
        col: int,
        x: float,
        y: float,
        width: float,
    ) -> Brick:
        """Decide kind and health for one grid cell."""
        cfg = self._config
        table = cfg.difficulty

        if row >= table.indestructible_min_row and self._rng.random() < table.indestructible_chance:
            return Brick(
                x=x, y=y, width=width, height=cfg.brick_height,
                health=cfg.indestructible_health,
                max_health=cfg.indestructible_health,
                kind=BrickKind.INDESTRUCTIBLE,
                color=INDESTRUCTIBLE_COLOR,
                row=row, col=col,
            )

        health = table.health_for(level_index, self._rng.random())
        return Brick(
            x=x, y=y, width=width, height=cfg.brick_height,
            health=health,
            max_health=health,
            kind=BrickKind.NORMAL,
            color=color_for_health(health, cfg.brick_palette),
            row=row, col=col,
        )
