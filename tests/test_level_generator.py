"""
Tests for procedural level generation.

Run with: pytest tests/test_level_generator.py -v
"""

import random
from dataclasses import replace

import pytest

from holebreaker.config import DifficultyTable, GameConfig
from holebreaker.errors import ConfigurationError
from holebreaker.level_generator import LevelGenerator, _distance_to_rect


@pytest.fixture
def generator(config, rng):
    return LevelGenerator(config, rng)


def _columns(cfg, width):
    step = cfg.brick_width_for(width) + cfg.brick_padding
    return int((width - cfg.brick_margin) // step)


class TestZonePlacement:
    """Where the hole goes."""

    @pytest.mark.parametrize("seed", range(10))
    def test_zone_within_side_margins(self, config, seed):
        zone, _ = LevelGenerator(config, random.Random(seed)).generate(1, 800, 600)
        assert config.zone_margin <= zone.x <= 800 - config.zone_margin
        assert zone.y == config.zone_y
        assert zone.radius == config.zone_radius

    def test_zone_y_clamped_on_short_arena(self, config, rng):
        cfg = replace(config, zone_y=500)
        zone, _ = LevelGenerator(cfg, rng).generate(1, 800, 300)
        assert zone.y == 300 - cfg.zone_radius

    def test_no_brick_near_the_hole(self, config, rng):
        cfg = replace(config, zone_y=170)
        zone, bricks = LevelGenerator(cfg, rng).generate(2, 800, 600)

        full = _columns(cfg, 800) * (cfg.brick_base_rows + 2)
        assert len(bricks) < full
        for brick in bricks:
            assert _distance_to_rect(zone.x, zone.y, brick.get_bounds()) >= cfg.zone_exclusion_radius


class TestGrid:
    """Brick grid layout."""

    def test_rows_grow_with_level(self, generator, config):
        for level in (1, 3):
            _, bricks = generator.generate(level, 800, 600)
            assert len(bricks) == _columns(config, 800) * (config.brick_base_rows + level)
            assert max(b.row for b in bricks) == config.brick_base_rows + level - 1

    def test_grid_is_centered(self, generator):
        _, bricks = generator.generate(1, 800, 600)
        left = min(b.x for b in bricks)
        right = max(b.x + b.width for b in bricks)
        assert left == pytest.approx(800 - right)

    def test_narrow_arena_uses_narrow_bricks(self, generator, config):
        _, bricks = generator.generate(1, 400, 600)
        assert {b.width for b in bricks} == {config.brick_width_narrow}

    def test_same_seed_same_layout(self, config):
        first = LevelGenerator(config, random.Random(7)).generate(4, 800, 600)
        second = LevelGenerator(config, random.Random(7)).generate(4, 800, 600)
        assert first == second


class TestBrickClassification:
    """Health and indestructible placement."""

    def test_level_one_bricks_have_one_health(self, rng):
        _, bricks = LevelGenerator(GameConfig(), rng).generate(1, 800, 600)
        normal = [b for b in bricks if not b.is_indestructible]
        assert all(b.health == 1 for b in normal)

    @pytest.mark.parametrize("level", [2, 3, 4, 5])
    def test_health_within_bounds(self, level, rng):
        cfg = GameConfig()
        _, bricks = LevelGenerator(cfg, rng).generate(level, 1280, 720)
        for brick in bricks:
            if brick.is_indestructible:
                assert brick.health == cfg.indestructible_health
            else:
                assert 1 <= brick.health <= cfg.difficulty.max_brick_health
                assert brick.health == brick.max_health

    def test_indestructible_only_below_second_row(self, config, rng):
        cfg = replace(config, difficulty=DifficultyTable(indestructible_chance=1.0))
        _, bricks = LevelGenerator(cfg, rng).generate(1, 800, 600)

        for brick in bricks:
            if brick.row < 2:
                assert not brick.is_indestructible
            else:
                assert brick.is_indestructible
                assert brick.color == 'slate'

    def test_colour_follows_health(self, rng):
        cfg = GameConfig()
        _, bricks = LevelGenerator(cfg, rng).generate(5, 1280, 720)
        for brick in bricks:
            if not brick.is_indestructible:
                assert brick.color == cfg.brick_palette[(brick.health - 1) % len(cfg.brick_palette)]


class TestRejectedInput:
    """Invalid arenas and levels."""

    @pytest.mark.parametrize("width,height", [(0, 600), (800, 0), (-10, 600)])
    def test_non_positive_arena(self, generator, width, height):
        with pytest.raises(ConfigurationError):
            generator.generate(1, width, height)

    def test_level_below_one(self, generator):
        with pytest.raises(ConfigurationError):
            generator.generate(0, 800, 600)

    def test_arena_too_narrow_for_zone(self, generator, config):
        with pytest.raises(ConfigurationError):
            generator.generate(1, 2 * config.zone_margin - 1, 600)

    def test_arena_too_short_for_zone(self, generator, config):
        with pytest.raises(ConfigurationError):
            generator.generate(1, 800, 2 * config.zone_radius - 1)

    def test_shortest_arena_keeps_zone_inside(self, generator, config):
        zone, _ = generator.generate(1, 800, 2 * config.zone_radius)
        assert zone.y - zone.radius >= 0

    def test_invalid_config(self, config):
        with pytest.raises(ConfigurationError):
            LevelGenerator(replace(config, brick_palette=()))
