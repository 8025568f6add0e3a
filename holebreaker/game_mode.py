"""HoleBreaker - brick breaking where the hole clears the level.

Features:
- Procedurally generated brick grids that grow with the level
- Route a ball into the hole (or clear every breakable brick) to advance
- Multiball, wide paddle, sticky paddle and penetrating-ball power-ups
- Per-frame simulation with a read-only snapshot for renderers
"""

import random
from typing import List, Optional, Tuple

from pydantic import ValidationError

from .config import CHARACTERS, FLAVOR_MESSAGES, Character, GameConfig
from .entities.ball import Ball
from .entities.brick import Brick
from .entities.paddle import Paddle
from .entities.particle import Particle
from .entities.power_up import PowerUp
from .entities.target_zone import TargetZone
from .errors import ConfigurationError
from .events import EventBus, EventListener, GameEvent, GameEventType
from .game_state import GameState
from .input import InputEvent, InputKind
from .level_generator import LevelGenerator
from .logging import emit_record, get_logger
from .models import ArenaSize
from .physics.collision import (
    check_brick_collision,
    check_target_zone,
    check_wall_collision,
    crosses_paddle_plane,
    resolve_brick_collision,
)
from .power_ups import BANNERS, PENETRATE_EXPIRY, STICKY_EXPIRY, PowerUpSystem
from .scheduler import DeferredQueue
from .snapshot import (
    BallView,
    BrickView,
    PaddleView,
    ParticleView,
    PowerUpView,
    RenderSnapshot,
    ZoneView,
)

log = get_logger('game_mode')

TRANSITION_MESSAGE = "PUSH IT!"

# Deferred-queue keys
_MESSAGE_EXPIRY = 'message_expiry'
_FLASH_EXPIRY = 'ball_lost_flash_expiry'


class HoleBreakerMode:
    """HoleBreaker simulation and session state machine.

    Owns every entity. Collaborators read ``snapshot()`` and listen to
    events; they change the game only through the commands
    ``set_paddle_x``, ``launch``, ``start_session``,
    ``acknowledge_terminal`` and ``resize``. Each call to ``step()``
    advances exactly one frame.
    """

    # Game metadata
    NAME = "HoleBreaker"
    DESCRIPTION = "Break bricks and sink the ball in the hole."
    VERSION = "1.0.0"
    AUTHOR = "HoleBreaker Team"

    # CLI arguments
    ARGUMENTS = [
        {
            'name': '--lives',
            'type': int,
            'default': None,
            'help': 'Starting lives'
        },
        {
            'name': '--max-level',
            'type': int,
            'default': None,
            'help': 'Level that wins the session'
        },
        {
            'name': '--character',
            'type': int,
            'default': 0,
            'choices': list(range(len(CHARACTERS))),
            'help': 'Ball character: ' + ', '.join(
                f"{i}={c.name}" for i, c in enumerate(CHARACTERS)
            ),
        },
        {
            'name': '--seed',
            'type': int,
            'default': None,
            'help': 'Random seed for reproducible layouts'
        },
    ]

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        rng: Optional[random.Random] = None,
    ):
        """Initialize HoleBreaker.

        Args:
            config: Game configuration (validated here)
            rng: Random source shared by generation, drops and effects

        Raises:
            ConfigurationError: If the configuration is invalid
        """
        self._config = (config or GameConfig()).validate()
        self._rng = rng or random.Random()

        self._arena_width = self._config.arena_width
        self._arena_height = self._config.arena_height

        self._deferred = DeferredQueue()
        self._generator = LevelGenerator(self._config, self._rng)
        self._power_up_system = PowerUpSystem(self._config, self._rng, self._deferred)
        self._events = EventBus()
        self._step_events: List[GameEvent] = []

        # Session state
        self._internal_state = GameState.MENU
        self._score = 0
        self._lives = self._config.lives
        self._level = 1
        self._frame = 0
        self._character: Character = CHARACTERS[0]

        # Game entities (initialized in _init_level)
        self._paddle: Optional[Paddle] = None
        self._zone: Optional[TargetZone] = None
        self._balls: List[Ball] = []
        self._bricks: List[Brick] = []
        self._power_ups: List[PowerUp] = []
        self._particles: List[Particle] = []

        # Presentation cues
        self._message = ""
        self._ball_lost_flash = False
        self._transition_frames_left = 0

    @classmethod
    def get_arguments(cls) -> List[dict]:
        return list(cls.ARGUMENTS)

    # =========================================================================
    # Read-only state
    # =========================================================================

    @property
    def state(self) -> GameState:
        return self._internal_state

    @property
    def config(self) -> GameConfig:
        return self._config

    @property
    def score(self) -> int:
        return self._score

    @property
    def lives(self) -> int:
        return self._lives

    @property
    def level(self) -> int:
        return self._level

    @property
    def frame(self) -> int:
        return self._frame

    @property
    def message(self) -> str:
        return self._message

    @property
    def character(self) -> Character:
        return self._character

    @property
    def arena_size(self) -> Tuple[float, float]:
        return (self._arena_width, self._arena_height)

    @property
    def paddle(self) -> Optional[Paddle]:
        return self._paddle

    @property
    def zone(self) -> Optional[TargetZone]:
        return self._zone

    @property
    def balls(self) -> Tuple[Ball, ...]:
        return tuple(self._balls)

    @property
    def bricks(self) -> Tuple[Brick, ...]:
        return tuple(self._bricks)

    @property
    def power_ups(self) -> Tuple[PowerUp, ...]:
        return tuple(self._power_ups)

    @property
    def particles(self) -> Tuple[Particle, ...]:
        return tuple(self._particles)

    # =========================================================================
    # Events
    # =========================================================================

    def subscribe(self, listener: EventListener) -> None:
        """Register a listener for GameEvents."""
        self._events.subscribe(listener)

    def unsubscribe(self, listener: EventListener) -> None:
        self._events.unsubscribe(listener)

    def _emit(self, event_type: GameEventType, **payload) -> None:
        event = GameEvent(type=event_type, frame=self._frame, level=self._level, **payload)
        self._step_events.append(event)
        self._events.publish(event)

    def _record(self, record_type: str, **fields) -> None:
        emit_record('session', {
            'type': record_type,
            'frame': self._frame,
            'level': self._level,
            'score': self._score,
            'lives': self._lives,
            **fields,
        })

    # =========================================================================
    # Lifecycle commands
    # =========================================================================

    def start_session(self, character: int = 0) -> bool:
        """Start a new session from the menu.

        Args:
            character: Index into CHARACTERS

        Returns:
            True if a session started (False when not in the menu)

        Raises:
            ConfigurationError: On an unknown character index
        """
        if not 0 <= character < len(CHARACTERS):
            raise ConfigurationError(
                f"Unknown character {character}; choose 0-{len(CHARACTERS) - 1}"
            )
        if self._internal_state != GameState.MENU:
            return False

        self._character = CHARACTERS[character]
        self._score = 0
        self._level = 1
        self._lives = self._config.lives
        self._frame = 0
        self._init_level(self._level)
        self._internal_state = GameState.PLAYING

        log.info("Session started with %s", self._character.name)
        self._record('session_start', character=self._character.name)
        return True

    def acknowledge_terminal(self) -> bool:
        """Return from WON or GAME_OVER to the menu."""
        if not self._internal_state.is_terminal:
            return False
        self._internal_state = GameState.MENU
        self._message = ""
        return True

    def reset(self) -> None:
        """Abandon the current session and return to the menu."""
        self._deferred.clear()
        self._internal_state = GameState.MENU
        self._message = ""
        self._ball_lost_flash = False
        self._transition_frames_left = 0

    def resize(self, width: float, height: float) -> None:
        """Adapt to a new arena size, keeping every entity in bounds.

        Bricks keep their positions; the paddle, the zone and the balls
        are clamped into the new arena.

        Raises:
            ConfigurationError: On non-positive dimensions
        """
        try:
            arena = ArenaSize(width=width, height=height)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid arena dimensions: {e}") from e

        self._arena_width = arena.width
        self._arena_height = arena.height

        if self._paddle is not None:
            self._paddle.resize_arena(
                arena.width,
                arena.height,
                self._config.paddle_bottom_offset,
                self._config.max_paddle_width_for(arena.width),
            )
        if self._zone is not None:
            self._zone.clamp_to(arena.width, arena.height, self._config.zone_margin)
        for ball in self._balls:
            if ball.attached and self._paddle is not None:
                ball.follow(self._paddle)
                continue
            ball.x = max(ball.radius, min(arena.width - ball.radius, ball.x))
            ball.y = max(ball.radius, min(arena.height - ball.radius, ball.y))

    # =========================================================================
    # Input commands
    # =========================================================================

    def set_paddle_x(self, x: float) -> None:
        """Move the paddle center to ``x`` (clamped). No-op unless playing."""
        if self._internal_state != GameState.PLAYING or self._paddle is None:
            return
        self._paddle.move_to(x)
        for ball in self._balls:
            if ball.attached:
                ball.follow(self._paddle)

    def launch(self) -> bool:
        """Release every attached ball. No-op unless playing.

        Returns:
            True if at least one ball was launched
        """
        if self._internal_state != GameState.PLAYING or self._paddle is None:
            return False

        launched = 0
        speed = self._config.ball_speed(self._level)
        for ball in self._balls:
            if ball.alive and ball.attached:
                ball.launch(speed, self._config.paddle_deflection, self._paddle.width)
                launched += 1
        return launched > 0

    def handle_input(self, events: List[InputEvent]) -> None:
        """Process input events in order."""
        for event in events:
            if event.kind is InputKind.MOVE:
                self.set_paddle_x(event.position.x)
            elif event.kind is InputKind.LAUNCH:
                self.launch()

    # =========================================================================
    # Simulation
    # =========================================================================

    def step(self) -> List[GameEvent]:
        """Advance the simulation by one frame.

        Returns:
            Events emitted during this step
        """
        self._step_events = []

        if self._internal_state == GameState.LEVEL_TRANSITION:
            self._frame += 1
            self._advance_transition()
        elif self._internal_state == GameState.PLAYING:
            self._frame += 1
            self._deferred.drain(self._frame)
            self._step_playing()

        return self._step_events

    def _step_playing(self) -> None:
        """One PLAYING frame: power-ups, balls, bookkeeping, particles."""
        paddle = self._paddle
        if paddle is None or self._zone is None:
            return

        for ball in self._balls:
            if ball.alive and ball.attached:
                ball.follow(paddle)

        self._update_power_ups(paddle)
        zone_entered = self._update_balls(paddle)

        # Compact after the passes; nothing is removed mid-iteration
        self._balls[:] = [b for b in self._balls if b.alive]
        self._bricks[:] = [b for b in self._bricks if b.alive]
        self._power_ups[:] = [p for p in self._power_ups if p.alive]

        if zone_entered:
            log.info("Ball entered the hole on level %d", self._level)
            self._begin_level_transition()
            return

        if not self._balls:
            self._lose_life()
            return

        if not any(not b.is_indestructible for b in self._bricks):
            log.info("All breakable bricks cleared on level %d", self._level)
            self._begin_level_transition()
            return

        self._update_particles()

    def _update_power_ups(self, paddle: Paddle) -> None:
        claimed = self._power_up_system.update(self._power_ups, paddle, self._arena_height)
        for power_up in claimed:
            new_balls = self._power_up_system.apply(
                power_up.kind, self._balls, paddle, self._frame, self._level,
            )
            self._balls.extend(new_balls)
            self._show_message(BANNERS[power_up.kind], self._config.banner_frames)
            self._emit(
                GameEventType.POWER_UP_COLLECTED,
                power_up=power_up.kind, x=power_up.x, y=power_up.y,
            )

    def _update_balls(self, paddle: Paddle) -> bool:
        """Move and collide every free ball.

        Returns:
            True if a ball entered the hole (the level is cleared)
        """
        zone = self._zone
        for ball in self._balls:
            if not ball.alive or ball.attached:
                continue

            ball.move()

            if check_target_zone(ball, zone):
                ball.destroy()
                return True

            check_wall_collision(ball, self._arena_width)

            if crosses_paddle_plane(ball, paddle):
                if not paddle.spans(ball.x):
                    ball.destroy()
                    self._on_ball_lost(ball)
                    continue
                self._hit_paddle(ball, paddle)
                if ball.attached:
                    continue

            self._collide_bricks(ball)

        return False

    def _hit_paddle(self, ball: Ball, paddle: Paddle) -> None:
        if paddle.sticky:
            ball.attach_to(paddle)
        else:
            ball.bounce_off_paddle(
                paddle.x,
                paddle.width,
                self._config.paddle_deflection,
                self._config.paddle_speedup,
                self._config.ball_max_speed,
            )
        self._emit(GameEventType.PADDLE_HIT, x=ball.x, y=ball.y)

    def _collide_bricks(self, ball: Ball) -> None:
        """Test the ball against every live brick; several may fall in one frame."""
        for brick in self._bricks:
            if not check_brick_collision(ball, brick):
                continue
            if resolve_brick_collision(ball, brick, self._config.brick_palette):
                self._on_brick_destroyed(brick)

    def _on_brick_destroyed(self, brick: Brick) -> None:
        cfg = self._config
        points = cfg.points_per_brick
        self._score += points
        self._emit(
            GameEventType.BRICK_DESTROYED,
            x=brick.center_x, y=brick.center_y, points=points,
        )

        if not brick.is_indestructible:
            power_up = self._power_up_system.maybe_spawn(brick)
            if power_up is not None:
                self._power_ups.append(power_up)

        if self._rng.random() < cfg.difficulty.flavor_message_chance:
            self._show_message(self._rng.choice(FLAVOR_MESSAGES), cfg.message_frames)

        for _ in range(cfg.particle_burst):
            self._particles.append(Particle(
                x=brick.center_x,
                y=brick.center_y,
                dx=(self._rng.random() - 0.5) * cfg.particle_speed,
                dy=(self._rng.random() - 0.5) * cfg.particle_speed,
                color=brick.color,
            ))

    def _on_ball_lost(self, ball: Ball) -> None:
        self._emit(GameEventType.BALL_LOST, x=ball.x, y=ball.y)
        self._ball_lost_flash = True
        self._deferred.schedule(
            _FLASH_EXPIRY,
            self._frame + self._config.ball_lost_flash_frames,
            lambda: setattr(self, '_ball_lost_flash', False),
        )

    def _update_particles(self) -> None:
        for particle in self._particles:
            particle.update(self._config.particle_decay)
        self._particles[:] = [p for p in self._particles if p.alive]

    def _show_message(self, text: str, frames: int) -> None:
        self._message = text
        self._deferred.schedule(
            _MESSAGE_EXPIRY,
            self._frame + frames,
            lambda: setattr(self, '_message', ""),
        )

    # =========================================================================
    # State machine
    # =========================================================================

    def _lose_life(self) -> None:
        """Handle losing the last live ball."""
        self._lives = max(0, self._lives - 1)
        log.info("Life lost, %d remaining", self._lives)

        if self._lives == 0:
            self._internal_state = GameState.GAME_OVER
            self._deferred.clear()
            log.info("Game over with score %d", self._score)
            self._emit(GameEventType.SESSION_OVER, points=self._score)
            self._record('gameover')
        else:
            self._reset_ball_and_paddle(self._level)
            self._record('life_lost')

    def _begin_level_transition(self) -> None:
        self._internal_state = GameState.LEVEL_TRANSITION
        self._transition_frames_left = self._config.level_transition_frames
        self._deferred.clear()
        self._message = TRANSITION_MESSAGE
        self._emit(GameEventType.LEVEL_CLEARED)
        self._record('level_cleared')

    def _advance_transition(self) -> None:
        """Run the interstitial timer; on expiry win or start the next level."""
        self._transition_frames_left -= 1
        if self._transition_frames_left > 0:
            return

        self._transition_frames_left = 0
        self._message = ""
        if self._level >= self._config.max_level:
            self._internal_state = GameState.WON
            log.info("Session won with score %d", self._score)
            self._emit(GameEventType.SESSION_WON, points=self._score)
            self._record('won')
            return

        self._level += 1
        self._init_level(self._level)
        self._internal_state = GameState.PLAYING

    def _init_level(self, level_index: int) -> None:
        """Generate the layout and serve for a level."""
        zone, bricks = self._generator.generate(level_index, self._arena_width, self._arena_height)
        self._zone = zone
        self._bricks[:] = bricks
        self._particles.clear()
        self._deferred.clear()
        self._message = ""
        self._ball_lost_flash = False
        self._reset_ball_and_paddle(level_index)
        log.info("Level %d ready: %d bricks", level_index, len(bricks))

    def _reset_ball_and_paddle(self, level_index: int) -> None:
        """Serve a fresh ball and rebuild the paddle for ``level_index``.

        Power-ups in flight are discarded and timed ball/paddle effects end.
        """
        cfg = self._config
        self._paddle = Paddle.for_arena(
            self._arena_width,
            self._arena_height,
            width=cfg.paddle_width(level_index, self._arena_width),
            height=cfg.paddle_height,
            bottom_offset=cfg.paddle_bottom_offset,
        )

        speed = cfg.ball_speed(level_index)
        direction = 1 if self._rng.random() > 0.5 else -1
        ball = Ball(
            x=self._arena_width / 2,
            y=self._arena_height - cfg.ball_serve_height,
            dx=speed * direction,
            dy=-speed,
            radius=cfg.ball_radius,
        )
        if cfg.serve_attached:
            ball.attach_to(self._paddle)

        self._balls[:] = [ball]
        self._power_ups.clear()
        self._deferred.cancel(PENETRATE_EXPIRY)
        self._deferred.cancel(STICKY_EXPIRY)

    # =========================================================================
    # Snapshot
    # =========================================================================

    def snapshot(self) -> RenderSnapshot:
        """Immutable view of the current frame for renderers."""
        return RenderSnapshot(
            state=self._internal_state,
            frame=self._frame,
            score=self._score,
            lives=self._lives,
            level=self._level,
            max_level=self._config.max_level,
            arena_width=self._arena_width,
            arena_height=self._arena_height,
            balls=tuple(BallView.from_entity(b) for b in self._balls if b.alive),
            paddle=PaddleView.from_entity(self._paddle) if self._paddle else None,
            bricks=tuple(BrickView.from_entity(b) for b in self._bricks if b.alive),
            power_ups=tuple(PowerUpView.from_entity(p) for p in self._power_ups if p.alive),
            particles=tuple(ParticleView.from_entity(p) for p in self._particles),
            zone=ZoneView.from_entity(self._zone) if self._zone else None,
            character_name=self._character.name,
            ball_color=self._character.color,
            message=self._message,
            ball_lost_flash=self._ball_lost_flash,
            transition_frames_left=self._transition_frames_left,
        )
