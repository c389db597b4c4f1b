"""Game state and per-frame simulation for the levelled game."""

from __future__ import annotations

import enum
import math
from dataclasses import dataclass, field, replace
from typing import Protocol

from slingfort.entities import LEVEL_COUNT, Bird, SLING_POSITION, level_blocks, level_enemies
from slingfort.geometry import (
    Rect,
    Vec2,
    circle_rect_collide,
    circles_collide,
    point_in_circle,
    point_in_rect,
    rects_collide,
    trajectory,
)
from slingfort.settings import SettingsPanel

SCREEN_WIDTH = 1536
SCREEN_HEIGHT = 800
GROUND_Y = SCREEN_HEIGHT - 250.0
GRAVITY = 0.41
BLOCK_GRAVITY = 0.5
MAX_LIVES = 3
LAUNCH_FACTOR = 0.2
ENEMY_HIT_COOLDOWN = 0.5
AIM_POINTS = 50
AIM_TIME_STEP = 0.9

PLAY_BUTTON = Rect(800, 150, 300, 100)
MENU_SETTINGS_BUTTON = Rect(950, 500, 300, 100)
EXIT_BUTTON = Rect(450, 440, 300, 100)
NEXT_LEVEL_BUTTON = Rect(SCREEN_WIDTH // 2 - 100, SCREEN_HEIGHT // 2, 200, 50)
MAIN_MENU_BUTTON = Rect(SCREEN_WIDTH // 2 - 100, SCREEN_HEIGHT // 2 + 70, 200, 50)
GAME_SETTINGS_BUTTON = Rect(SCREEN_WIDTH - 100, 20, 80, 30)


class RandomSource(Protocol):
    def randint(self, a: int, b: int) -> int: ...


class GameState(enum.Enum):
    """Which screen the game is showing."""

    MENU = enum.auto()
    GAME = enum.auto()
    SETTINGS = enum.auto()
    LEVEL_COMPLETE = enum.auto()


@dataclass(frozen=True)
class FrameInput:
    """The player's input during one frame."""

    dt: float = 1.0 / 60.0
    mouse: Vec2 = field(default_factory=Vec2)
    mouse_pressed: bool = False
    mouse_released: bool = False
    reset_pressed: bool = False


class World:
    """Everything in play: the bird, the fort, the enemies, score and lives."""

    def __init__(self, rng: RandomSource) -> None:
        self.rng = rng
        self.state = GameState.MENU
        self.level = 1
        self.settings = SettingsPanel()
        self.dragging = False
        self.victory = False
        self.reset()

    def reset(self) -> None:
        """Restart the current level from scratch."""
        self.bird = Bird.at_sling()
        self.score = 0
        self.lives = MAX_LIVES
        self.game_over = False
        self.enemies = level_enemies(self.level)
        self.blocks = level_blocks(self.level)

    def next_level(self) -> None:
        """Advance to the next level, wrapping to the first; the score carries over."""
        self.level += 1
        if self.level > LEVEL_COUNT:
            self.level = 1
        self.bird = Bird.at_sling()
        self.lives = MAX_LIVES
        self.game_over = False
        self.enemies = level_enemies(self.level)
        self.blocks = level_blocks(self.level)

    def damage_enemy(self, index: int, damage: int) -> None:
        """Take health from an enemy; unknown or inactive enemies are ignored."""
        if not 0 <= index < len(self.enemies):
            return
        enemy = self.enemies[index]
        if not enemy.active:
            return
        enemy.health -= damage
        if enemy.health <= 0:
            enemy.active = False

    def all_enemies_dead(self) -> bool:
        return not any(enemy.active for enemy in self.enemies)

    def update_blocks(self, dt: float) -> None:
        """Move falling blocks under gravity, drag, bounce and the screen edges."""
        scale = dt * 60.0
        for block in self.blocks:
            if not block.active or block.on_ground or not block.falling:
                continue

            vx, vy = block.velocity.x, block.velocity.y
            vy += BLOCK_GRAVITY * block.mass * scale
            vx *= 1.0 - 0.02 * scale
            vy *= 1.0 - 0.01 * scale

            x = block.rect.x + vx * scale
            y = block.rect.y + vy * scale

            block.rotation += block.angular_velocity * scale
            block.angular_velocity *= 1.0 - 0.05 * scale

            width, height = block.rect.width, block.rect.height
            settled = False
            if y + height >= GROUND_Y:
                y = GROUND_Y - height
                vy *= -block.bounciness
                vx *= block.friction
                block.angular_velocity *= 0.7
                if abs(vy) < 1.0 and abs(vx) < 0.5:
                    vx = vy = 0.0
                    block.angular_velocity = 0.0
                    settled = True

            if x < 0:
                x = 0.0
                vx *= -0.5
            if x + width > SCREEN_WIDTH:
                x = SCREEN_WIDTH - width
                vx *= -0.5

            block.rect = replace(block.rect, x=x, y=y)
            block.velocity = Vec2(vx, vy)
            if settled:
                block.falling = False
                block.on_ground = True

    def step(self, frame: FrameInput) -> None:
        """Advance play by one frame; does nothing outside the game screen."""
        if self.state is not GameState.GAME:
            return

        for enemy in self.enemies:
            if enemy.hit_timer > 0.0:
                enemy.hit_timer -= frame.dt

        self.update_blocks(frame.dt)
        self._blocks_hit_enemies()
        self._drop_enemies()
        self._handle_sling(frame)
        if self.bird.launched:
            self._fly_bird()

        if self.all_enemies_dead() and not self.victory:
            self.victory = True
            if self.level < LEVEL_COUNT:
                self.state = GameState.LEVEL_COMPLETE

        if frame.reset_pressed:
            self.reset()
            self.victory = False

        self._blocks_hit_blocks()

        if frame.mouse_pressed and point_in_rect(frame.mouse, GAME_SETTINGS_BUTTON):
            self.settings.open = True

    def aim_trajectory(self) -> list[Vec2]:
        """The predicted flight path while aiming, or nothing if not shown."""
        if self.bird.launched or not self.dragging or not self.settings.show_trajectory:
            return []
        velocity = (SLING_POSITION - self.bird.position) * LAUNCH_FACTOR
        return trajectory(SLING_POSITION, velocity, AIM_POINTS, AIM_TIME_STEP)

    def menu_click(self, point: Vec2) -> bool:
        """Handle a click on the main menu; True means the player chose to quit."""
        if point_in_rect(point, PLAY_BUTTON):
            self.state = GameState.GAME
            self.victory = False
        if point_in_rect(point, MENU_SETTINGS_BUTTON):
            self.settings.open = True
        return point_in_rect(point, EXIT_BUTTON)

    def level_complete_click(self, point: Vec2) -> None:
        """Handle a click on the level-complete screen."""
        if point_in_rect(point, NEXT_LEVEL_BUTTON):
            self.next_level()
            self.state = GameState.GAME
            self.victory = False
        if point_in_rect(point, MAIN_MENU_BUTTON):
            self.state = GameState.MENU
            self.level = 1
            self.reset()
            self.victory = False

    def _blocks_hit_enemies(self) -> None:
        for block in self.blocks:
            if not (block.active and block.falling):
                continue
            for index, enemy in enumerate(self.enemies):
                if (
                    enemy.active
                    and not enemy.falling
                    and enemy.hit_timer <= 0.0
                    and circle_rect_collide(enemy.position, enemy.radius, block.rect)
                ):
                    self.damage_enemy(index, 1)
                    enemy.hit_timer = ENEMY_HIT_COOLDOWN
                    if enemy.active:
                        enemy.falling = True
                        enemy.velocity = Vec2(0.0, -4.0)
                    else:
                        self.score += 100

    def _drop_enemies(self) -> None:
        for enemy in self.enemies:
            if not (enemy.active and enemy.falling):
                continue
            vy = enemy.velocity.y + GRAVITY
            y = enemy.position.y + vy
            if y + enemy.radius >= GROUND_Y:
                y = GROUND_Y - enemy.radius
                vy = 0.0
                enemy.falling = False
                enemy.landed = True
            enemy.velocity = Vec2(enemy.velocity.x, vy)
            enemy.position = Vec2(enemy.position.x, y)

    def _handle_sling(self, frame: FrameInput) -> None:
        bird = self.bird
        if (
            not bird.launched
            and frame.mouse_pressed
            and point_in_circle(frame.mouse, bird.position, bird.radius)
        ):
            self.dragging = True

        if self.dragging:
            bird.position = frame.mouse
            if frame.mouse_released:
                self.dragging = False
                bird.velocity = (SLING_POSITION - bird.position) * LAUNCH_FACTOR
                bird.launched = True

    def _fly_bird(self) -> None:
        bird = self.bird
        bird.velocity = Vec2(bird.velocity.x, bird.velocity.y + GRAVITY)
        bird.position = bird.position + bird.velocity

        for enemy in self.enemies:
            if enemy.active and circles_collide(
                bird.position, bird.radius, enemy.position, enemy.radius
            ):
                enemy.active = False
                self.score += 150

        if bird.position.y + bird.radius >= GROUND_Y:
            bird.position = Vec2(bird.position.x, GROUND_Y - bird.radius)
            vy = bird.velocity.y * -0.5
            if abs(vy) < 1.0:
                vy = 0.0
            bird.velocity = Vec2(bird.velocity.x, vy)

        stopped = abs(bird.velocity.x) < 0.5 and abs(bird.velocity.y) < 0.5
        out_of_bounds = (
            bird.position.x > SCREEN_WIDTH or bird.position.x < 0.0 or bird.position.y < 0.0
        )
        if stopped or out_of_bounds:
            if self.lives > 1:
                self.bird = bird = Bird.at_sling()
                self.lives -= 1
                if self.all_enemies_dead():
                    self.victory = True
            else:
                self.game_over = True

        for block in self.blocks:
            if (
                block.active
                and not block.falling
                and circle_rect_collide(bird.position, bird.radius, block.rect)
            ):
                block.falling = True
                impact = math.hypot(bird.velocity.x, bird.velocity.y)
                block.velocity = Vec2(
                    bird.velocity.x * 0.3 + self.rng.randint(-2, 2), -impact * 0.2
                )
                block.angular_velocity = self.rng.randint(-30, 30) / 10.0
                self.score += 10
                bird.velocity = bird.velocity * 0.7

    def _blocks_hit_blocks(self) -> None:
        for i, mover in enumerate(self.blocks):
            if not mover.active or not mover.falling or mover.on_ground:
                continue
            for j, other in enumerate(self.blocks):
                if i == j or not other.active or other.falling or other.on_ground:
                    continue
                if rects_collide(mover.rect, other.rect):
                    other.falling = True
                    vx = mover.velocity.x * 0.5 + self.rng.randint(-1, 1)
                    vy = -3.0 + self.rng.randint(-1, 1)
                    other.velocity = Vec2(vx, vy)
                    other.angular_velocity = self.rng.randint(-15, 15) / 10.0
                    mover.velocity = mover.velocity * 0.8