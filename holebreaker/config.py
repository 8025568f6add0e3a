"""Configuration for HoleBreaker.

Contains arena dimensions, per-frame physics constants, the difficulty
table, colour tags, and the YAML tuning loader.

All speeds and durations are per-frame: the simulation advances one fixed
step per display refresh (~60 steps/second) and does not scale by delta
time. Changing the frame rate changes the observable game speed.
"""
import os
from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

import yaml
from dotenv import load_dotenv

from .entities.power_up import PowerUpKind
from .errors import ConfigurationError

# Load .env from package directory
_env_path = Path(__file__).parent / '.env'
load_dotenv(_env_path)


def _get_bool(key: str, default: bool) -> bool:
    """Get boolean from environment."""
    val = os.getenv(key, str(default)).lower()
    return val in ('true', '1', 'yes')


def _get_int(key: str, default: int) -> int:
    """Get integer from environment."""
    return int(os.getenv(key, str(default)))


def _get_float(key: str, default: float) -> float:
    """Get float from environment."""
    return float(os.getenv(key, str(default)))


# Display settings
SCREEN_WIDTH = _get_int('SCREEN_WIDTH', 1280)
SCREEN_HEIGHT = _get_int('SCREEN_HEIGHT', 720)
FPS = _get_int('FPS', 60)

# Session
STARTING_LIVES = _get_int('STARTING_LIVES', 5)
MAX_LEVEL = _get_int('MAX_LEVEL', 5)
SERVE_ATTACHED = _get_bool('SERVE_ATTACHED', False)

# Ball (pixels per frame)
BALL_RADIUS = 12.0
BALL_BASE_SPEED = 4.0
BALL_SPEED_PER_LEVEL = 0.5
BALL_MAX_SPEED = _get_float('BALL_MAX_SPEED', 16.0)
BALL_SERVE_HEIGHT = 100.0   # Serve position above the arena bottom

# Paddle
PADDLE_HEIGHT = 15.0
PADDLE_BOTTOM_OFFSET = 40.0
PADDLE_BASE_WIDTH = 100.0
PADDLE_SHRINK_PER_LEVEL = 5.0
PADDLE_MIN_WIDTH = 60.0
PADDLE_MAX_WIDTH_FRACTION = 0.5
PADDLE_WIDEN_FACTOR = 1.5
PADDLE_DEFLECTION = 6.0     # Horizontal speed at the paddle edge
PADDLE_SPEEDUP = 1.02       # Applied to both axes on every paddle hit

# Brick grid
BRICK_WIDTH = 60.0
BRICK_WIDTH_NARROW = 40.0
NARROW_ARENA_WIDTH = 500.0
BRICK_HEIGHT = 25.0
BRICK_PADDING = 5.0
BRICK_OFFSET_TOP = 120.0
BRICK_MARGIN = 20.0
BRICK_BASE_ROWS = 6
MAX_BRICK_HEALTH = 4
INDESTRUCTIBLE_HEALTH = 999
POINTS_PER_BRICK = 10

# Target zone ("the hole")
ZONE_RADIUS = 35.0
ZONE_Y = 60.0
ZONE_MARGIN = 50.0
ZONE_EXCLUSION_RADIUS = 60.0

# Particles
PARTICLE_BURST = 6
PARTICLE_SPEED = 6.0
PARTICLE_DECAY = 0.04

# Power-ups
POWER_UP_SPEED = 3.0
POWER_UP_RADIUS = 15.0
EXTRA_BALL_SPREAD = 8.0

# Timings (frames at ~60 steps/second)
PENETRATE_FRAMES = 600          # 10 seconds
LEVEL_TRANSITION_FRAMES = 180   # 3 seconds
MESSAGE_FRAMES = 120            # 2 seconds
BANNER_FRAMES = 90              # 1.5 seconds
BALL_LOST_FLASH_FRAMES = 12

# Visual
BACKGROUND_COLOR: Tuple[int, int, int] = (10, 10, 12)

# Brick colour tags cycle by health; indestructible bricks use INDESTRUCTIBLE_COLOR
BRICK_PALETTE: Tuple[str, ...] = ('pink', 'violet', 'blue', 'emerald')
INDESTRUCTIBLE_COLOR = 'slate'

BRICK_COLORS: Dict[str, Tuple[int, int, int]] = {
    'pink': (244, 114, 182),
    'violet': (167, 139, 250),
    'blue': (96, 165, 250),
    'emerald': (52, 211, 153),
    'slate': (71, 85, 105),
    'yellow': (250, 204, 21),
    'white': (255, 255, 255),
}

FLAVOR_MESSAGES: Tuple[str, ...] = (
    "A la la la la long",
    "Sweat till you can't sweat no more",
    "Push it some more",
    "I never lie",
    "Pistols at dawn!",
    "Keep it rolling",
)


@dataclass(frozen=True)
class Character:
    """Selectable ball character."""

    name: str
    color: str


CHARACTERS: Tuple[Character, ...] = (
    Character(name='Smashly', color='pink'),
    Character(name='Sagi', color='violet'),
)


@dataclass(frozen=True)
class HealthBand:
    """One row of the brick health table.

    A band applies when the level index is at least ``min_level`` and the
    brick's uniform draw is below ``chance``. Bands are checked in order;
    the first match wins and bricks matching none get health 1.
    """

    min_level: int
    chance: float
    health: int


DEFAULT_HEALTH_BANDS: Tuple[HealthBand, ...] = (
    HealthBand(min_level=4, chance=0.10, health=4),
    HealthBand(min_level=3, chance=0.20, health=3),
    HealthBand(min_level=2, chance=0.40, health=2),
)

DEFAULT_POWER_UP_WEIGHTS: Dict[PowerUpKind, float] = {
    PowerUpKind.EXTRA_BALL_SINGLE: 0.30,
    PowerUpKind.EXTRA_BALL_DOUBLE: 0.20,
    PowerUpKind.PADDLE_WIDEN: 0.20,
    PowerUpKind.PADDLE_STICKY: 0.15,
    PowerUpKind.BALL_PENETRATE: 0.15,
}


@dataclass(frozen=True)
class DifficultyTable:
    """Probability knobs that shape how hard a level plays.

    These are the primary difficulty controls; tests and tuning files
    override them without touching the simulation code.
    """

    health_bands: Tuple[HealthBand, ...] = DEFAULT_HEALTH_BANDS
    max_brick_health: int = MAX_BRICK_HEALTH
    indestructible_chance: float = 0.05
    indestructible_min_row: int = 2     # Rows 0 and 1 are always breakable
    power_up_chance: float = 0.15
    power_up_weights: Dict[PowerUpKind, float] = field(
        default_factory=lambda: dict(DEFAULT_POWER_UP_WEIGHTS)
    )
    flavor_message_chance: float = 0.10

    def health_for(self, level_index: int, draw: float) -> int:
        """Pick a normal brick's health from the band table.

        Args:
            level_index: Current level (1-based)
            draw: Uniform random draw in [0, 1)

        Returns:
            Brick health in [1, max_brick_health]
        """
        for band in self.health_bands:
            if level_index >= band.min_level and draw < band.chance:
                return min(band.health, self.max_brick_health)
        return 1

    def validate(self) -> None:
        """Raise ConfigurationError if the table is unusable."""
        if self.max_brick_health < 1:
            raise ConfigurationError(
                f"max_brick_health must be >= 1, got {self.max_brick_health}"
            )
        for band in self.health_bands:
            if not 1 <= band.health <= self.max_brick_health:
                raise ConfigurationError(
                    f"Health band {band} outside [1, {self.max_brick_health}]"
                )
            if not 0.0 <= band.chance <= 1.0:
                raise ConfigurationError(f"Health band chance out of range: {band}")
        for name in ('indestructible_chance', 'power_up_chance', 'flavor_message_chance'):
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                raise ConfigurationError(f"{name} must be in [0, 1], got {value}")
        if any(w < 0 for w in self.power_up_weights.values()):
            raise ConfigurationError("Power-up weights must be non-negative")
        if sum(self.power_up_weights.values()) <= 0:
            raise ConfigurationError("At least one power-up weight must be positive")


@dataclass(frozen=True)
class GameConfig:
    """Complete tunable configuration for one game session.

    Defaults come from the module constants above. Use
    ``dataclasses.replace`` (or ``load_config``) to derive variants.
    """

    arena_width: float = SCREEN_WIDTH
    arena_height: float = SCREEN_HEIGHT

    lives: int = STARTING_LIVES
    max_level: int = MAX_LEVEL
    serve_attached: bool = SERVE_ATTACHED

    ball_radius: float = BALL_RADIUS
    ball_base_speed: float = BALL_BASE_SPEED
    ball_speed_per_level: float = BALL_SPEED_PER_LEVEL
    ball_max_speed: float = BALL_MAX_SPEED
    ball_serve_height: float = BALL_SERVE_HEIGHT

    paddle_height: float = PADDLE_HEIGHT
    paddle_bottom_offset: float = PADDLE_BOTTOM_OFFSET
    paddle_base_width: float = PADDLE_BASE_WIDTH
    paddle_shrink_per_level: float = PADDLE_SHRINK_PER_LEVEL
    paddle_min_width: float = PADDLE_MIN_WIDTH
    paddle_max_width_fraction: float = PADDLE_MAX_WIDTH_FRACTION
    paddle_widen_factor: float = PADDLE_WIDEN_FACTOR
    paddle_deflection: float = PADDLE_DEFLECTION
    paddle_speedup: float = PADDLE_SPEEDUP

    brick_width: float = BRICK_WIDTH
    brick_width_narrow: float = BRICK_WIDTH_NARROW
    narrow_arena_width: float = NARROW_ARENA_WIDTH
    brick_height: float = BRICK_HEIGHT
    brick_padding: float = BRICK_PADDING
    brick_offset_top: float = BRICK_OFFSET_TOP
    brick_margin: float = BRICK_MARGIN
    brick_base_rows: int = BRICK_BASE_ROWS
    brick_palette: Tuple[str, ...] = BRICK_PALETTE
    indestructible_health: int = INDESTRUCTIBLE_HEALTH
    points_per_brick: int = POINTS_PER_BRICK

    zone_radius: float = ZONE_RADIUS
    zone_y: float = ZONE_Y
    zone_margin: float = ZONE_MARGIN
    zone_exclusion_radius: float = ZONE_EXCLUSION_RADIUS

    particle_burst: int = PARTICLE_BURST
    particle_speed: float = PARTICLE_SPEED
    particle_decay: float = PARTICLE_DECAY

    power_up_speed: float = POWER_UP_SPEED
    power_up_radius: float = POWER_UP_RADIUS
    extra_ball_spread: float = EXTRA_BALL_SPREAD

    penetrate_frames: int = PENETRATE_FRAMES
    sticky_duration_frames: Optional[int] = None    # None: sticky lasts the whole life
    level_transition_frames: int = LEVEL_TRANSITION_FRAMES
    message_frames: int = MESSAGE_FRAMES
    banner_frames: int = BANNER_FRAMES
    ball_lost_flash_frames: int = BALL_LOST_FLASH_FRAMES

    difficulty: DifficultyTable = field(default_factory=DifficultyTable)

    @property
    def paddle_max_width(self) -> float:
        """Largest paddle width allowed in the configured arena."""
        return self.max_paddle_width_for(self.arena_width)

    def max_paddle_width_for(self, arena_width: float) -> float:
        """Largest paddle width allowed in an arena ``arena_width`` wide."""
        return arena_width * self.paddle_max_width_fraction

    def ball_speed(self, level_index: int) -> float:
        """Serve speed per axis for a level."""
        return self.ball_base_speed + level_index * self.ball_speed_per_level

    def paddle_width(self, level_index: int, arena_width: Optional[float] = None) -> float:
        """Starting paddle width for a level (shrinks as levels rise).

        Capped for ``arena_width``, or the configured arena when omitted.
        """
        if arena_width is None:
            arena_width = self.arena_width
        width = max(
            self.paddle_min_width,
            self.paddle_base_width - level_index * self.paddle_shrink_per_level,
        )
        return min(width, self.max_paddle_width_for(arena_width))

    def brick_width_for(self, arena_width: float) -> float:
        """Brick width, narrower on small arenas."""
        if arena_width < self.narrow_arena_width:
            return self.brick_width_narrow
        return self.brick_width

    def validate(self) -> 'GameConfig':
        """Check every value; raise ConfigurationError on the first problem.

        Returns:
            self, so calls can be chained
        """
        positive = (
            'arena_width', 'arena_height', 'ball_radius', 'ball_max_speed',
            'paddle_height', 'paddle_min_width', 'brick_width', 'brick_width_narrow',
            'brick_height', 'zone_radius', 'power_up_speed', 'paddle_widen_factor',
        )
        for name in positive:
            value = getattr(self, name)
            if value <= 0:
                raise ConfigurationError(f"{name} must be positive, got {value}")
        if self.lives < 1:
            raise ConfigurationError(f"lives must be >= 1, got {self.lives}")
        if self.max_level < 1:
            raise ConfigurationError(f"max_level must be >= 1, got {self.max_level}")
        if self.brick_base_rows < 0 or self.brick_padding < 0:
            raise ConfigurationError("Brick grid rows and padding must be non-negative")
        if not self.brick_palette:
            raise ConfigurationError("brick_palette must not be empty")
        if self.paddle_speedup < 1.0:
            raise ConfigurationError(
                f"paddle_speedup must be >= 1, got {self.paddle_speedup}"
            )
        if not 0.0 < self.paddle_max_width_fraction <= 1.0:
            raise ConfigurationError(
                f"paddle_max_width_fraction must be in (0, 1], "
                f"got {self.paddle_max_width_fraction}"
            )
        if self.paddle_min_width > self.paddle_max_width:
            raise ConfigurationError(
                f"paddle_min_width {self.paddle_min_width} exceeds "
                f"max width {self.paddle_max_width}"
            )
        if self.particle_burst < 0 or self.particle_decay <= 0:
            raise ConfigurationError("Particle burst must be >= 0 and decay > 0")
        if self.sticky_duration_frames is not None and self.sticky_duration_frames < 1:
            raise ConfigurationError("sticky_duration_frames must be None or >= 1")
        self.difficulty.validate()
        return self


def _parse_difficulty(data: Dict[str, Any]) -> DifficultyTable:
    """Build a DifficultyTable from a YAML mapping."""
    known = {f.name for f in fields(DifficultyTable)}
    unknown = set(data) - known
    if unknown:
        raise ConfigurationError(f"Unknown difficulty keys: {sorted(unknown)}")

    kwargs: Dict[str, Any] = dict(data)
    if 'health_bands' in data:
        kwargs['health_bands'] = tuple(
            HealthBand(
                min_level=int(band.get('min_level', 1)),
                chance=float(band['chance']),
                health=int(band['health']),
            )
            for band in data['health_bands']
        )
    if 'power_up_weights' in data:
        try:
            kwargs['power_up_weights'] = {
                PowerUpKind(name): float(weight)
                for name, weight in data['power_up_weights'].items()
            }
        except ValueError as e:
            raise ConfigurationError(f"Invalid power-up weights: {e}") from e
    return DifficultyTable(**kwargs)


def load_config(path: Path, base: Optional[GameConfig] = None) -> GameConfig:
    """Load a YAML tuning file on top of a base configuration.

    Example YAML:
        lives: 3
        max_level: 8
        difficulty:
          power_up_chance: 0.2
          health_bands:
            - {min_level: 2, chance: 0.5, health: 2}
          power_up_weights:
            extra_ball_single: 1.0
            paddle_widen: 1.0

    Args:
        path: YAML file to read
        base: Configuration to override (default: GameConfig())

    Returns:
        Validated GameConfig

    Raises:
        ConfigurationError: On unknown keys or invalid values
    """
    with open(path) as f:
        data = yaml.safe_load(f) or {}

    if not isinstance(data, dict):
        raise ConfigurationError(f"{path}: top level must be a mapping")

    known = {f.name for f in fields(GameConfig)}
    unknown = set(data) - known
    if unknown:
        raise ConfigurationError(f"{path}: unknown config keys {sorted(unknown)}")

    overrides: Dict[str, Any] = dict(data)
    if 'difficulty' in data:
        overrides['difficulty'] = _parse_difficulty(data['difficulty'] or {})
    if 'brick_palette' in data:
        overrides['brick_palette'] = tuple(data['brick_palette'] or ())

    config = replace(base or GameConfig(), **overrides)
    return config.validate()
