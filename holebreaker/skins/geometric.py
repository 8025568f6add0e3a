"""Geometric skin - simple shapes, no assets."""

import random
from typing import List, Optional, Tuple

import pygame

from .base import HoleBreakerSkin
from ..config import BACKGROUND_COLOR, BRICK_COLORS, CHARACTERS
from ..entities.brick import BrickKind
from ..events import GameEvent, GameEventType
from ..game_state import GameState
from ..snapshot import BrickView, RenderSnapshot


class GeometricSkin(HoleBreakerSkin):
    """Renders the game using simple geometric shapes.

    - Hole: dark circle with a gold ring
    - Bricks: coloured rectangles, darkened by damage, health number on multi-hit
    - Indestructible bricks: slate with an X
    - Ball: circle in the character colour, yellow while penetrating
    - Power-ups: labelled capsules
    """

    NAME = "geometric"
    DESCRIPTION = "Simple shapes"

    # Paddle colors
    PADDLE_COLOR = (100, 150, 255)
    STICKY_PADDLE_COLOR = (250, 204, 21)
    PADDLE_OUTLINE = (255, 255, 255)

    # Hole colors
    ZONE_FILL = (0, 0, 0)
    ZONE_RING = (255, 200, 60)

    # HUD colors
    HUD_COLOR = (255, 255, 255)
    MESSAGE_COLOR = (255, 220, 120)
    FLASH_COLOR = (255, 0, 0, 70)
    OVERLAY_COLOR = (0, 0, 0, 180)

    CONFETTI_COUNT = 120
    CONFETTI_GRAVITY = 240.0    # px/s^2

    def __init__(self, rng: Optional[random.Random] = None):
        """Initialize geometric skin.

        Args:
            rng: Random source for confetti (default: unseeded Random)
        """
        self._font: Optional[pygame.font.Font] = None
        self._font_large: Optional[pygame.font.Font] = None
        self._rng = rng or random.Random()
        self._confetti: List[dict] = []
        self._arena_width = 0.0

    def _ensure_font(self) -> None:
        """Ensure fonts are initialized."""
        if self._font is None:
            pygame.font.init()
            self._font = pygame.font.Font(None, 36)
            self._font_large = pygame.font.Font(None, 72)

    @staticmethod
    def _color(tag: str) -> Tuple[int, int, int]:
        return BRICK_COLORS.get(tag, (255, 255, 255))

    def _get_brick_color(self, brick: BrickView) -> Tuple[int, int, int]:
        """Get color for brick, darkened based on damage."""
        base_color = self._color(brick.color)
        if brick.kind == BrickKind.INDESTRUCTIBLE or brick.max_health <= 1:
            return base_color

        damage_pct = 1 - (brick.health / brick.max_health)
        # Darken by up to 50% based on damage
        darkening = 1 - (damage_pct * 0.5)
        return tuple(int(c * darkening) for c in base_color)  # type: ignore

    # =========================================================================
    # Events and animation
    # =========================================================================

    def on_event(self, event: GameEvent) -> None:
        if event.type == GameEventType.SESSION_WON:
            self._launch_confetti()
        super().on_event(event)

    def _launch_confetti(self) -> None:
        width = self._arena_width
        colors = [self._color(c.color) for c in CHARACTERS] + [self._color('yellow')]
        self._confetti = [
            {
                'x': self._rng.uniform(0, width),
                'y': self._rng.uniform(-200, 0),
                'vx': self._rng.uniform(-60, 60),
                'vy': self._rng.uniform(60, 180),
                'size': self._rng.randint(4, 8),
                'color': self._rng.choice(colors),
            }
            for _ in range(self.CONFETTI_COUNT)
        ]

    def update(self, dt: float) -> None:
        """Advance confetti (wall-clock, independent of the simulation)."""
        for piece in self._confetti:
            piece['vy'] += self.CONFETTI_GRAVITY * dt
            piece['x'] += piece['vx'] * dt
            piece['y'] += piece['vy'] * dt

    # =========================================================================
    # Rendering
    # =========================================================================

    def render(self, snapshot: RenderSnapshot, screen: pygame.Surface) -> None:
        self._ensure_font()
        self._arena_width = snapshot.arena_width
        screen.fill(BACKGROUND_COLOR)

        if snapshot.state == GameState.MENU:
            self._confetti.clear()
            self._render_menu(screen)
            return

        self._render_zone(snapshot, screen)
        for brick in snapshot.bricks:
            self._render_brick(brick, screen)
        for particle in snapshot.particles:
            self._render_particle(particle, screen)
        for power_up in snapshot.power_ups:
            self._render_power_up(power_up, screen)
        if snapshot.paddle is not None:
            self._render_paddle(snapshot, screen)
        for ball in snapshot.balls:
            self._render_ball(snapshot, ball, screen)

        if snapshot.ball_lost_flash:
            self._render_overlay(screen, self.FLASH_COLOR)

        self._render_hud(snapshot, screen)

        if snapshot.state == GameState.LEVEL_TRANSITION:
            self._render_banner(screen, snapshot.message, f"Level {snapshot.level} cleared")
        elif snapshot.state == GameState.WON:
            self._render_overlay(screen, self.OVERLAY_COLOR)
            self._render_confetti(screen)
            self._render_banner(screen, "YOU WIN!", f"Final score: {snapshot.score} - click to continue")
        elif snapshot.state == GameState.GAME_OVER:
            self._render_overlay(screen, self.OVERLAY_COLOR)
            self._render_banner(screen, "GAME OVER", f"Final score: {snapshot.score} - click to continue")
        elif snapshot.message:
            self._render_message(screen, snapshot.message)

    def _render_zone(self, snapshot: RenderSnapshot, screen: pygame.Surface) -> None:
        zone = snapshot.zone
        if zone is None:
            return
        center = (int(zone.x), int(zone.y))
        pygame.draw.circle(screen, self.ZONE_FILL, center, int(zone.radius))
        pygame.draw.circle(screen, self.ZONE_RING, center, int(zone.radius), 3)

    def _render_brick(self, brick: BrickView, screen: pygame.Surface) -> None:
        """Render brick as a colored rectangle with indicators."""
        color = self._get_brick_color(brick)
        rect = brick.rect

        pygame.draw.rect(screen, color, rect)
        pygame.draw.rect(screen, (255, 255, 255), rect, 1)

        center_x = int(brick.x + brick.width / 2)
        center_y = int(brick.y + brick.height / 2)

        # Indestructible indicator: X
        if brick.kind == BrickKind.INDESTRUCTIBLE:
            margin = 5
            pygame.draw.line(
                screen,
                (0, 0, 0),
                (rect[0] + margin, rect[1] + margin),
                (rect[0] + rect[2] - margin, rect[1] + rect[3] - margin),
                2
            )
            pygame.draw.line(
                screen,
                (0, 0, 0),
                (rect[0] + rect[2] - margin, rect[1] + margin),
                (rect[0] + margin, rect[1] + rect[3] - margin),
                2
            )
            return

        # Multi-hit indicator: show remaining health
        if brick.max_health > 1 and self._font:
            text = self._font.render(str(brick.health), True, (0, 0, 0))
            screen.blit(text, text.get_rect(center=(center_x, center_y)))

    def _render_particle(self, particle, screen: pygame.Surface) -> None:
        alpha = int(255 * max(0.0, min(1.0, particle.life)))
        surf = pygame.Surface((8, 8), pygame.SRCALPHA)
        pygame.draw.rect(surf, (*self._color(particle.color), alpha), (0, 0, 8, 8))
        screen.blit(surf, (int(particle.x) - 4, int(particle.y) - 4))

    def _render_power_up(self, power_up, screen: pygame.Surface) -> None:
        r = power_up.radius
        rect = pygame.Rect(int(power_up.x - r * 1.5), int(power_up.y - r), int(r * 3), int(r * 2))
        pygame.draw.rect(screen, self._color('yellow'), rect, border_radius=int(r))
        if self._font:
            text = self._font.render(power_up.kind.label, True, (0, 0, 0))
            screen.blit(text, text.get_rect(center=rect.center))

    def _render_paddle(self, snapshot: RenderSnapshot, screen: pygame.Surface) -> None:
        """Render paddle as a colored rectangle."""
        paddle = snapshot.paddle
        color = self.STICKY_PADDLE_COLOR if paddle.sticky else self.PADDLE_COLOR
        pygame.draw.rect(screen, color, paddle.rect)
        pygame.draw.rect(screen, self.PADDLE_OUTLINE, paddle.rect, 2)

    def _render_ball(self, snapshot: RenderSnapshot, ball, screen: pygame.Surface) -> None:
        color = self._color('yellow') if ball.penetrating else self._color(snapshot.ball_color)
        pygame.draw.circle(screen, color, (int(ball.x), int(ball.y)), int(ball.radius))

    def _render_confetti(self, screen: pygame.Surface) -> None:
        for piece in self._confetti:
            size = piece['size']
            pygame.draw.rect(screen, piece['color'], (int(piece['x']), int(piece['y']), size, size))

    def _render_overlay(self, screen: pygame.Surface, rgba: Tuple[int, int, int, int]) -> None:
        overlay = pygame.Surface(screen.get_size(), pygame.SRCALPHA)
        overlay.fill(rgba)
        screen.blit(overlay, (0, 0))

    def _render_hud(self, snapshot: RenderSnapshot, screen: pygame.Surface) -> None:
        """Render HUD with score, level and lives."""
        if not self._font:
            return

        # Score (top left)
        score_text = self._font.render(f"Score: {snapshot.score}", True, self.HUD_COLOR)
        screen.blit(score_text, (10, 10))

        # Level (top center)
        level_text = self._font.render(
            f"Level {snapshot.level}/{snapshot.max_level}", True, self.HUD_COLOR
        )
        level_rect = level_text.get_rect()
        level_rect.midtop = (screen.get_width() // 2, 10)
        screen.blit(level_text, level_rect)

        # Lives (top right)
        lives_text = self._font.render(f"Lives: {snapshot.lives}", True, self.HUD_COLOR)
        lives_rect = lives_text.get_rect()
        lives_rect.topright = (screen.get_width() - 10, 10)
        screen.blit(lives_text, lives_rect)

    def _render_message(self, screen: pygame.Surface, message: str) -> None:
        text = self._font.render(message, True, self.MESSAGE_COLOR)
        rect = text.get_rect(center=(screen.get_width() // 2, screen.get_height() // 2))
        screen.blit(text, rect)

    def _render_banner(self, screen: pygame.Surface, title: str, subtitle: str) -> None:
        center_x = screen.get_width() // 2
        y = screen.get_height() // 2 - 40

        text = self._font_large.render(title, True, self.MESSAGE_COLOR)
        screen.blit(text, text.get_rect(center=(center_x, y)))

        text = self._font.render(subtitle, True, self.HUD_COLOR)
        screen.blit(text, text.get_rect(center=(center_x, y + 60)))

    def _render_menu(self, screen: pygame.Surface) -> None:
        center_x = screen.get_width() // 2
        y = screen.get_height() // 3

        text = self._font_large.render("HOLEBREAKER", True, self.ZONE_RING)
        screen.blit(text, text.get_rect(center=(center_x, y)))
        y += 90

        for index, character in enumerate(CHARACTERS):
            label = self._font.render(f"{index + 1}: {character.name}", True, self._color(character.color))
            screen.blit(label, label.get_rect(center=(center_x, y)))
            y += 45

        hint = self._font.render("Press a number (or click) to play", True, self.HUD_COLOR)
        screen.blit(hint, hint.get_rect(center=(center_x, y + 30)))
