"""The classic single-level game: one fort, two enemies and simpler physics."""

from __future__ import annotations

import math

from slingfort.classic_setup import classic_block_mass, classic_blocks, classic_enemies
from slingfort.entities import SLING_POSITION, Bird, Enemy
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
from slingfort.world import (
    GRAVITY,
    GROUND_Y,
    LAUNCH_FACTOR,
    MAX_LIVES,
    SCREEN_WIDTH,
    FrameInput,
    GameState,
    RandomSource,
)

CLASSIC_PLAY_BUTTON = Rect(900, 180, 300, 100)
CLASSIC_AIM_POINTS = 100
CLASSIC_AIM_TIME_STEP = 0.9
ENEMY_KILL_SCORE = 50
BLOCK_HIT_SCORE = 10


def _round_half_away(value: float) -> float:
    """Round to the nearest whole number, halves away from zero."""
    return math.copysign(math.floor(abs(value) + 0.5), value)


class ClassicWorld:
    """State of the classic game: enemies must be knocked down, then hit on the ground."""

    def __init__(self, rng: RandomSource) -> None:
        self.rng = rng
        self.state = GameState.MENU
        self.bird = Bird.at_sling()
        self.score = 0
        self.lives = MAX_LIVES
        self.game_over = False
        self.dragging = False
        self.enemies: list[Enemy] = classic_enemies()
        self.blocks = classic_blocks()

    @property
    def won(self) -> bool:
        """True once every enemy is gone and the game is not lost."""
        return self.all_enemies_dead() and not self.game_over

    def reset(self) -> None:
        """Put the bird back, rebuild the fort and revive the enemies where they are."""
        self.bird = Bird.at_sling()
        self.score = 0
        self.lives = MAX_LIVES
        self.game_over = False
        for enemy in self.enemies:
            enemy.active = True
        for block in self.blocks:
            block.rect = block.start_rect
            block.active = True
            block.falling = False
            block.velocity = Vec2(0.0, 0.0)
            block.angular_velocity = 0.0
            block.rotation = 0.0

    def all_enemies_dead(self) -> bool:
        return not any(enemy.active for enemy in self.enemies)

    def update_blocks(self) -> None:
        """Move falling blocks one frame; a block stops dead when it reaches the ground."""
        for block in self.blocks:
            if not (block.active and block.falling):
                continue
            vx = block.velocity.x * 0.99
            vy = block.velocity.y + GRAVITY * classic_block_mass(block)

            x = block.rect.x + vx
            if abs(vy) < 0.5:
                vy = 0.0
            y = block.rect.y + vy

            block.rotation += block.angular_velocity
            block.angular_velocity *= 0.99

            if y + block.rect.height >= GROUND_Y:
                y = GROUND_Y - block.rect.height
                vx = vy = 0.0
                block.angular_velocity = 0.0
                block.rotation = _round_half_away(block.rotation)
                block.falling = False

            block.rect = Rect(x, y, block.rect.width, block.rect.height)
            block.velocity = Vec2(vx, vy)

    def step(self, frame: FrameInput) -> None:
        """Advance one frame: the menu waits for the play button, the game simulates."""
        if self.state is GameState.MENU:
            if frame.mouse_pressed and point_in_rect(frame.mouse, CLASSIC_PLAY_BUTTON):
                self.state = GameState.GAME
            return

        self._blocks_topple_enemies()
        for enemy in self.enemies:
            if enemy.active and enemy.falling:
                self._drop(enemy)
        self._bird_finishes_landed()
        self._handle_sling(frame)
        if self.bird.launched:
            self._fly_bird()

        if frame.reset_pressed:
            self.reset()

        self.update_blocks()
        self._blocks_hit_blocks()

    def aim_trajectory(self) -> list[Vec2]:
        """The predicted flight path while the bird is being dragged."""
        if self.bird.launched or not self.dragging:
            return []
        velocity = (SLING_POSITION - self.bird.position) * LAUNCH_FACTOR
        return trajectory(SLING_POSITION, velocity, CLASSIC_AIM_POINTS, CLASSIC_AIM_TIME_STEP)

    def _knock(self, enemy: Enemy) -> None:
        enemy.falling = True
        enemy.velocity = Vec2(0.0, -4.0)

    def _drop(self, enemy: Enemy) -> None:
        vy = enemy.velocity.y + GRAVITY
        y = enemy.position.y + vy
        if y + enemy.radius >= GROUND_Y:
            y = GROUND_Y - enemy.radius
            vy = 0.0
            enemy.falling = False
            enemy.landed = True
        enemy.velocity = Vec2(enemy.velocity.x, vy)
        enemy.position = Vec2(enemy.position.x, y)

    def _bird_touches(self, enemy: Enemy) -> bool:
        return circles_collide(
            self.bird.position, self.bird.radius, enemy.position, enemy.radius
        )

    def _finish_if_landed(self, enemy: Enemy) -> None:
        if enemy.active and enemy.landed and self._bird_touches(enemy):
            enemy.active = False
            self.score += ENEMY_KILL_SCORE

    def _blocks_topple_enemies(self) -> None:
        for block in self.blocks:
            if not (block.active and block.falling):
                continue
            for enemy in self.enemies:
                if (
                    enemy.active
                    and not enemy.falling
                    and circle_rect_collide(enemy.position, enemy.radius, block.rect)
                ):
                    self._knock(enemy)

    def _bird_finishes_landed(self) -> None:
        for enemy in self.enemies:
            self._finish_if_landed(enemy)

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
            if enemy.active and not enemy.falling and self._bird_touches(enemy):
                self._knock(enemy)
            if enemy.active and enemy.falling:
                self._drop(enemy)
            self._finish_if_landed(enemy)

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
                self.bird = Bird.at_sling()
                self.lives -= 1
            else:
                self.game_over = True

        bird = self.bird
        for block in self.blocks:
            if (
                block.active
                and not block.falling
                and circle_rect_collide(bird.position, bird.radius, block.rect)
            ):
                block.falling = True
                block.angular_velocity = self.rng.randint(-20, 20) / 10.0
                self.score += BLOCK_HIT_SCORE
                block.velocity = Vec2(float(self.rng.randint(-3, 3)), -4.0)
                self.score += BLOCK_HIT_SCORE
                bird.velocity = bird.velocity * -0.3

    def _blocks_hit_blocks(self) -> None:
        for i, mover in enumerate(self.blocks):
            if not (mover.active and mover.falling):
                continue
            for j, other in enumerate(self.blocks):
                if i == j or not other.active or other.falling:
                    continue
                if rects_collide(mover.rect, other.rect):
                    other.falling = True
                    other.velocity = Vec2(float(self.rng.randint(-1, 1)), -2.0)
                    other.angular_velocity = self.rng.randint(-10, 10) / 10.0