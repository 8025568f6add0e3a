"""
Tests for HoleBreakerMode: simulation step, state machine and commands.

Each scenario starts a session, swaps in a scripted layout with the
``stage`` fixture and steps frame by frame.

Run with: pytest tests/test_game_mode.py -v
"""

from dataclasses import FrozenInstanceError, replace

import pytest

from conftest import ARENA_HEIGHT, ARENA_WIDTH, make_ball, make_brick
from holebreaker.config import CHARACTERS
from holebreaker.entities import BrickKind, PowerUp, PowerUpKind, TargetZone
from holebreaker.errors import ConfigurationError
from holebreaker.events import GameEventType
from holebreaker.game_mode import TRANSITION_MESSAGE, HoleBreakerMode
from holebreaker.game_state import GameState


def _types(events):
    return [e.type for e in events]


class TestSessionLifecycle:
    """Menu, start, acknowledge and reset."""

    def test_new_game_waits_in_menu(self, config, rng):
        mode = HoleBreakerMode(config=config, rng=rng)
        assert mode.state == GameState.MENU
        assert mode.step() == []
        assert mode.frame == 0

    def test_start_session_generates_level(self, game, config):
        assert game.state == GameState.PLAYING
        assert game.level == 1
        assert game.score == 0
        assert game.lives == config.lives
        assert len(game.balls) == 1
        assert game.bricks
        assert game.zone is not None

    def test_start_session_picks_character(self, config, rng):
        mode = HoleBreakerMode(config=config, rng=rng)
        mode.start_session(1)
        assert mode.character == CHARACTERS[1]
        assert mode.snapshot().ball_color == CHARACTERS[1].color

    def test_unknown_character_rejected(self, config, rng):
        mode = HoleBreakerMode(config=config, rng=rng)
        with pytest.raises(ConfigurationError):
            mode.start_session(len(CHARACTERS))

    def test_start_session_ignored_while_playing(self, game):
        assert game.start_session() is False
        assert game.state == GameState.PLAYING

    def test_acknowledge_only_from_terminal_states(self, game):
        assert game.acknowledge_terminal() is False
        assert game.state == GameState.PLAYING

    def test_reset_returns_to_menu(self, game):
        game.reset()
        assert game.state == GameState.MENU
        assert game.step() == []

    def test_invalid_config_rejected(self, config):
        with pytest.raises(ConfigurationError):
            HoleBreakerMode(config=replace(config, lives=0))


class TestBrickHits:
    """Ball against bricks."""

    def test_brick_destroyed_scores_and_bursts(self, game, stage):
        """A ball moving up into a health-1 brick destroys it."""
        target = make_brick(380, 200)
        ball = make_ball(400, 225, dy=-10)
        stage(game, balls=[ball], bricks=[target])

        events = game.step()

        assert not target.alive
        assert target not in game.bricks
        assert game.score == 10
        assert ball.dy == 10
        assert len(game.particles) == game.config.particle_burst
        destroyed = [e for e in events if e.type == GameEventType.BRICK_DESTROYED]
        assert len(destroyed) == 1
        assert destroyed[0].points == 10

    def test_multi_hit_brick_loses_health_and_recolours(self, game, stage):
        target = make_brick(380, 200, health=3)
        target.color = 'emerald'
        stage(game, balls=[make_ball(400, 225, dy=-10)], bricks=[target])

        game.step()

        assert target.alive
        assert target.health == 2
        assert target.color == game.config.brick_palette[1]
        assert game.score == 0

    def test_indestructible_brick_bounces_without_damage(self, game, stage):
        wall = make_brick(380, 200, health=999, kind=BrickKind.INDESTRUCTIBLE)
        ball = make_ball(400, 225, dy=-10)
        stage(game, balls=[ball], bricks=[wall])

        game.step()

        assert wall.alive
        assert wall.health == 999
        assert ball.dy == 10

    def test_overlapping_bricks_all_hit_in_one_frame(self, game, stage):
        """Every brick containing the ball center is resolved, not just the first."""
        first = make_brick(380, 200)
        second = make_brick(390, 205)
        ball = make_ball(400, 225, dy=-10)
        stage(game, balls=[ball], bricks=[first, second])

        game.step()

        assert not first.alive
        assert not second.alive
        assert game.score == 20
        # Two bounces cancel out
        assert ball.dy == -10

    def test_fast_ball_tunnels_through_thin_brick(self, game, stage):
        target = make_brick(380, 200)
        stage(game, balls=[make_ball(400, 240, dy=-45)], bricks=[target])

        game.step()

        assert target.alive
        assert game.score == 0

    def test_penetrating_ball_clears_indestructible_brick(self, game, stage):
        wall = make_brick(380, 200, health=999, kind=BrickKind.INDESTRUCTIBLE)
        ball = make_ball(400, 225, dy=-10, penetrating=True)
        stage(game, balls=[ball], bricks=[wall])

        game.step()

        assert not wall.alive
        assert ball.dy == -10
        assert game.score == 10


class TestBallLoss:
    """Missing the paddle."""

    def test_last_ball_lost_with_one_life_ends_session(self, make_game, stage):
        game = make_game(lives=1)
        stage(game, balls=[make_ball(100, 540, dy=10)])

        events = game.step()

        assert game.state == GameState.GAME_OVER
        assert game.lives == 0
        assert GameEventType.BALL_LOST in _types(events)
        assert GameEventType.SESSION_OVER in _types(events)

    def test_game_over_freezes_simulation(self, make_game, stage):
        game = make_game(lives=1)
        stage(game, balls=[make_ball(100, 540, dy=10)])
        game.step()

        before = game.snapshot()
        for _ in range(5):
            assert game.step() == []
        game.set_paddle_x(10)
        assert game.launch() is False

        assert game.snapshot() == before

    def test_ball_lost_with_lives_left_serves_again(self, game, stage):
        stage(game, balls=[make_ball(100, 540, dy=10)])

        game.step()

        assert game.state == GameState.PLAYING
        assert game.lives == game.config.lives - 1
        assert len(game.balls) == 1
        served = game.balls[0]
        assert served.x == ARENA_WIDTH / 2
        assert served.y == ARENA_HEIGHT - game.config.ball_serve_height
        assert served.dy < 0

    def test_ball_lost_flashes_briefly(self, game, stage):
        stage(game, balls=[make_ball(100, 540, dy=10), make_ball(400, 300, dx=1, dy=-1)])

        game.step()
        assert game.snapshot().ball_lost_flash is True
        assert game.lives == game.config.lives

        for _ in range(game.config.ball_lost_flash_frames):
            game.step()
        assert game.snapshot().ball_lost_flash is False

    def test_upward_ball_below_paddle_top_is_not_lost(self, game, stage):
        ball = make_ball(100, 570, dy=-5)
        stage(game, balls=[ball])

        game.step()

        assert ball.alive
        assert game.lives == game.config.lives


class TestPaddle:
    """Paddle hits, movement and the sticky power-up."""

    def test_paddle_hit_bounces_upward(self, game, stage):
        ball = make_ball(400, 540, dy=10)
        stage(game, balls=[ball])

        events = game.step()

        assert ball.dy < 0
        assert abs(ball.dx) < 1e-9
        assert GameEventType.PADDLE_HIT in _types(events)

    def test_edge_hit_deflects_sideways(self, game, stage):
        paddle = game.paddle
        ball = make_ball(paddle.right - 1, 540, dy=10)
        stage(game, balls=[ball])

        game.step()

        assert ball.dx > 0
        assert ball.dy < 0

    def test_set_paddle_x_clamps_to_arena(self, game):
        game.set_paddle_x(-500)
        assert game.paddle.left == 0
        game.set_paddle_x(ARENA_WIDTH + 500)
        assert game.paddle.right == ARENA_WIDTH

    def test_sticky_paddle_catches_and_launches(self, game, stage):
        ball = make_ball(400, 540, dy=10)
        stage(game, balls=[ball])
        game.paddle.sticky = True

        game.step()
        assert ball.attached
        assert (ball.dx, ball.dy) == (0.0, 0.0)
        assert ball.y == game.paddle.top - ball.radius

        game.set_paddle_x(300)
        assert ball.x == 300

        assert game.launch() is True
        assert not ball.attached
        assert ball.dy < 0

    def test_launch_without_attached_ball(self, game):
        assert game.launch() is False

    def test_serve_attached(self, make_game):
        game = make_game(serve_attached=True)
        ball = game.balls[0]
        assert ball.attached
        assert ball.x == game.paddle.x

        game.step()
        assert ball.attached
        game.launch()
        assert ball.dy == -game.config.ball_speed(1)


class TestPowerUpPickup:
    """Capsules reaching the paddle."""

    def test_capsule_claimed_once(self, game, stage):
        stage(game, balls=[make_ball(600, 300, dx=1, dy=-1)])
        width = game.paddle.width
        game._power_ups.append(PowerUp(x=400, y=545, dy=3, kind=PowerUpKind.PADDLE_WIDEN))

        events = game.step()

        assert game.power_ups == ()
        assert game.paddle.width == pytest.approx(width * game.config.paddle_widen_factor)
        assert game.message == "Wide paddle!"
        collected = [e for e in events if e.type == GameEventType.POWER_UP_COLLECTED]
        assert len(collected) == 1
        assert collected[0].power_up is PowerUpKind.PADDLE_WIDEN

        game.step()
        assert game.paddle.width == pytest.approx(width * game.config.paddle_widen_factor)

    def test_extra_ball_joins_play(self, game, stage):
        stage(game, balls=[make_ball(600, 300, dx=1, dy=-1)])
        game._power_ups.append(PowerUp(x=400, y=545, dy=3, kind=PowerUpKind.EXTRA_BALL_DOUBLE))

        game.step()

        assert len(game.balls) == 3

    def test_destroyed_brick_drops_capsule(self, config, make_game, stage):
        game = make_game(difficulty=replace(config.difficulty, power_up_chance=1.0))
        target = make_brick(380, 200)
        stage(game, balls=[make_ball(400, 225, dy=-10)], bricks=[target])

        game.step()

        assert len(game.power_ups) == 1
        capsule = game.power_ups[0]
        assert (capsule.x, capsule.y) == (target.center_x, target.center_y)


class TestLevelFlow:
    """Level transitions, winning and acknowledgement."""

    def test_ball_in_hole_starts_transition(self, game, stage):
        zone = TargetZone(x=400, y=60, radius=35)
        stage(game, balls=[make_ball(400, 105, dy=-10)], zone=zone)

        events = game.step()

        assert game.state == GameState.LEVEL_TRANSITION
        assert game.message == TRANSITION_MESSAGE
        assert GameEventType.LEVEL_CLEARED in _types(events)

    def test_clearing_breakables_starts_transition(self, game, stage):
        """Only indestructible bricks remain, so the level is done."""
        target = make_brick(380, 200)
        wall = make_brick(100, 300, health=999, kind=BrickKind.INDESTRUCTIBLE)
        stage(game, balls=[make_ball(400, 225, dy=-10)], bricks=[target, wall], keep_spare=False)

        game.step()

        assert game.state == GameState.LEVEL_TRANSITION
        assert game.bricks == (wall,)

    def test_transition_advances_to_next_level(self, game, stage):
        stage(game, balls=[make_ball(400, 105, dy=-10)], zone=TargetZone(x=400, y=60, radius=35))
        game.step()

        for _ in range(game.config.level_transition_frames - 1):
            game.step()
            assert game.state == GameState.LEVEL_TRANSITION
        game.step()

        assert game.state == GameState.PLAYING
        assert game.level == 2
        assert game.message == ""
        rows = {b.row for b in game.bricks}
        assert max(rows) == game.config.brick_base_rows + 1

    def test_commands_ignored_during_transition(self, game, stage):
        stage(game, balls=[make_ball(400, 105, dy=-10)], zone=TargetZone(x=400, y=60, radius=35))
        game.step()
        paddle_x = game.paddle.x

        game.set_paddle_x(100)
        assert game.paddle.x == paddle_x
        assert game.launch() is False

    def test_final_level_wins_then_menu(self, make_game, stage):
        game = make_game(max_level=1)
        stage(game, balls=[make_ball(400, 105, dy=-10)], zone=TargetZone(x=400, y=60, radius=35))
        game.step()

        events = []
        for _ in range(game.config.level_transition_frames):
            events.extend(game.step())

        assert game.state == GameState.WON
        assert GameEventType.SESSION_WON in _types(events)

        assert game.acknowledge_terminal() is True
        assert game.state == GameState.MENU
        assert game.start_session() is True
        assert game.score == 0
        assert game.level == 1


class TestSnapshotAndResize:
    """Read-only views and arena changes."""

    def test_snapshot_is_immutable_copy(self, game, stage):
        ball = make_ball(400, 300, dx=2, dy=-2)
        stage(game, balls=[ball])

        snap = game.snapshot()
        ball.x = 0

        assert snap.balls[0].x == 400
        with pytest.raises(FrozenInstanceError):
            snap.score = 99

    def test_snapshot_lists_only_live_bricks(self, game, stage):
        target = make_brick(380, 200)
        stage(game, balls=[make_ball(400, 225, dy=-10)], bricks=[target])
        game.step()

        snap = game.snapshot()
        assert all(b.x != 380 for b in snap.bricks)
        assert snap.score == 10
        assert snap.state == GameState.PLAYING

    def test_resize_keeps_entities_in_bounds(self, game, stage):
        stage(game, balls=[make_ball(700, 500, dx=1, dy=-1)], zone=TargetZone(x=750, y=60, radius=35))
        game.set_paddle_x(ARENA_WIDTH)

        game.resize(400, 300)

        assert game.arena_size == (400, 300)
        assert game.paddle.right <= 400
        assert game.paddle.top < 300
        assert game.zone.x <= 400 - game.config.zone_margin
        ball = game.balls[0]
        assert ball.x <= 400 - ball.radius
        assert ball.y <= 300 - ball.radius

    def test_widen_after_resize_respects_new_arena(self, game):
        game.resize(600, 600)

        for _ in range(6):
            game._power_up_system.apply(
                PowerUpKind.PADDLE_WIDEN, [], game.paddle, game.frame, game.level
            )

        cap = 600 * game.config.paddle_max_width_fraction
        assert game.paddle.width == pytest.approx(cap)
        assert 0 <= game.paddle.left and game.paddle.right <= 600

    def test_resize_shrinks_widened_paddle(self, game):
        for _ in range(6):
            game._power_up_system.apply(
                PowerUpKind.PADDLE_WIDEN, [], game.paddle, game.frame, game.level
            )
        assert game.paddle.width == pytest.approx(game.config.paddle_max_width)

        game.resize(300, 600)

        assert game.paddle.width == pytest.approx(300 * game.config.paddle_max_width_fraction)

    def test_rebuilt_paddle_capped_for_current_arena(self, game):
        game.resize(150, 600)
        game._reset_ball_and_paddle(game.level)

        assert game.paddle.width == pytest.approx(150 * game.config.paddle_max_width_fraction)

    def test_resize_rejects_degenerate_arena(self, game):
        with pytest.raises(ConfigurationError):
            game.resize(0, 300)


class TestEvents:
    """Listener delivery."""

    def test_subscribers_receive_step_events(self, game, stage):
        received = []
        game.subscribe(received.append)
        stage(game, balls=[make_ball(400, 225, dy=-10)], bricks=[make_brick(380, 200)])

        events = game.step()

        assert received == events
        assert all(e.level == 1 for e in received)
        assert all(e.frame == game.frame for e in received)

    def test_unsubscribed_listener_hears_nothing(self, game, stage):
        received = []

        def listener(event):
            received.append(event)

        game.subscribe(listener)
        game.unsubscribe(listener)
        stage(game, balls=[make_ball(400, 225, dy=-10)], bricks=[make_brick(380, 200)])

        game.step()

        assert received == []
