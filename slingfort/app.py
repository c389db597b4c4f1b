"""The game window: reads input, advances the world and draws each frame."""

from __future__ import annotations

import argparse
import logging
import random
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

import pygame

from slingfort.classic import ClassicWorld
from slingfort.entities import LEVEL_COUNT, SLING_POSITION
from slingfort.geometry import Rect, Vec2
from slingfort.world import (
    GAME_SETTINGS_BUTTON,
    MAIN_MENU_BUTTON,
    NEXT_LEVEL_BUTTON,
    SCREEN_HEIGHT,
    SCREEN_WIDTH,
    FrameInput,
    GameState,
    World,
)

log = logging.getLogger(__name__)

TITLE = "Sling Fort"
FPS = 60
BACKGROUND_SIZE = (1536, 1024)

RAYWHITE = (245, 245, 245)
WHITE = (255, 255, 255)
BLACK = (0, 0, 0)
RED = (230, 41, 55)
GREEN = (0, 228, 48)
DARKGREEN = (0, 100, 0)
DARKBLUE = (0, 0, 139)
DARKGRAY = (80, 80, 80)
GRAY = (130, 130, 130)
LIGHTGRAY = (200, 200, 200)
ORANGE = (255, 161, 0)
YELLOW = (253, 249, 0)

_ASSET_FILES = {
    "background": "backpeace.jpg",
    "ground": "ground.png",
    "sling": "sling.png",
    "block_a": "blockd.png",
    "block_b": "blocky.png",
    "enemy": "enemy.png",
    "menu": "menu.png",
    "bird": "angrybird.png",
}


@dataclass
class _Textures:
    background: pygame.Surface | None = None
    ground: pygame.Surface | None = None
    sling: pygame.Surface | None = None
    block_a: pygame.Surface | None = None
    block_b: pygame.Surface | None = None
    enemy: pygame.Surface | None = None
    menu: pygame.Surface | None = None
    bird: pygame.Surface | None = None


def _load_image(path: Path, size: tuple[int, int] | None = None) -> pygame.Surface | None:
    """Load an image file, or return None (and log) if it cannot be read."""
    if not path.is_file():
        log.error("image %s not found", path)
        return None
    try:
        image = pygame.image.load(str(path))
    except pygame.error as exc:
        log.error("image %s could not be loaded: %s", path, exc)
        return None
    if size is not None:
        image = pygame.transform.smoothscale(image, size)
    if pygame.display.get_surface() is not None:
        image = image.convert_alpha()
    return image


def _frame_from_events(
    events: Iterable[pygame.event.Event], mouse: Vec2, dt: float
) -> tuple[FrameInput, bool]:
    """Fold one frame's events into a FrameInput; the flag is True if the player quit."""
    pressed = released = reset = quit_requested = False
    for event in events:
        if event.type == pygame.QUIT:
            quit_requested = True
        elif event.type == pygame.KEYDOWN:
            if event.key == pygame.K_ESCAPE:
                quit_requested = True
            elif event.key == pygame.K_r:
                reset = True
        elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            pressed = True
        elif event.type == pygame.MOUSEBUTTONUP and event.button == 1:
            released = True
    frame = FrameInput(
        dt=dt,
        mouse=mouse,
        mouse_pressed=pressed,
        mouse_released=released,
        reset_pressed=reset,
    )
    return frame, quit_requested


def _pg_rect(rect: Rect) -> pygame.Rect:
    return pygame.Rect(round(rect.x), round(rect.y), round(rect.width), round(rect.height))


def parse_args(argv: list[str] | None) -> argparse.Namespace:
    """Parse the command line."""
    parser = argparse.ArgumentParser(prog="slingfort", description="Knock down the fort.")
    parser.add_argument(
        "--classic",
        action="store_true",
        help="play the single-level classic game",
    )
    parser.add_argument(
        "--assets",
        dest="asset_dir",
        type=Path,
        default=Path("."),
        help="directory holding the game's images (default: current directory)",
    )
    return parser.parse_args(argv)


class App:
    """A window running either the levelled game or the classic one."""

    def __init__(self, classic: bool = False, asset_dir: str | Path = ".") -> None:
        self.classic = classic
        self.asset_dir = Path(asset_dir)
        self.rng = random.Random()
        self.world: World | ClassicWorld = (
            ClassicWorld(self.rng) if classic else World(self.rng)
        )
        self._textures = _Textures()
        self._fonts: dict[int, pygame.font.Font] = {}

    def run(self) -> int:
        """Open the window and play until it is closed or the player quits."""
        pygame.init()
        try:
            screen = pygame.display.set_mode((SCREEN_WIDTH, SCREEN_HEIGHT))
            pygame.display.set_caption(TITLE)
            self._textures = self._load_textures()
            clock = pygame.time.Clock()
            dt = 0.0
            while True:
                x, y = pygame.mouse.get_pos()
                frame, quit_requested = _frame_from_events(
                    pygame.event.get(), Vec2(float(x), float(y)), dt
                )
                if quit_requested or not self._tick(frame):
                    break
                self._draw(screen)
                pygame.display.flip()
                dt = clock.tick(FPS) / 1000.0
        finally:
            pygame.quit()
        return 0

    # -- logic -------------------------------------------------------------

    def _tick(self, frame: FrameInput) -> bool:
        """Advance one frame; False means the player chose to leave."""
        world = self.world
        if isinstance(world, ClassicWorld):
            world.step(frame)
            return True

        if world.state is GameState.MENU:
            if frame.mouse_pressed and world.menu_click(frame.mouse):
                return False
            self._settings_click(frame)
        elif world.state is GameState.LEVEL_COMPLETE:
            if frame.mouse_pressed:
                world.level_complete_click(frame.mouse)
        else:
            world.step(frame)
            self._settings_click(frame)
        return True

    def _settings_click(self, frame: FrameInput) -> None:
        if frame.mouse_pressed and isinstance(self.world, World):
            self.world.settings.handle_click(frame.mouse)

    def _load_textures(self) -> _Textures:
        loaded = {}
        for name, filename in _ASSET_FILES.items():
            size = BACKGROUND_SIZE if name == "background" else None
            loaded[name] = _load_image(self.asset_dir / filename, size)
        if loaded["bird"] is None:
            log.error("Bird texture failed to load!")
        return _Textures(**loaded)

    # -- drawing -----------------------------------------------------------

    def _font(self, size: int) -> pygame.font.Font:
        if size not in self._fonts:
            self._fonts[size] = pygame.font.Font(None, size)
        return self._fonts[size]

    def _text(
        self, surface: pygame.Surface, text: str, x: float, y: float, size: int, color
    ) -> None:
        surface.blit(self._font(size).render(text, True, color), (round(x), round(y)))

    @staticmethod
    def _blit(
        surface: pygame.Surface,
        texture: pygame.Surface | None,
        dest: Rect,
        rotation: float = 0.0,
    ) -> None:
        """Draw a texture stretched over ``dest``, turned clockwise about its centre."""
        if texture is None or dest.width <= 0 or dest.height <= 0:
            return
        image = pygame.transform.smoothscale(
            texture, (max(1, round(dest.width)), max(1, round(dest.height)))
        )
        if rotation:
            image = pygame.transform.rotate(image, -rotation)
        center = dest.center
        surface.blit(image, image.get_rect(center=(round(center.x), round(center.y))))

    def _draw(self, screen: pygame.Surface) -> None:
        screen.fill(RAYWHITE)
        world = self.world
        if world.state is GameState.MENU:
            if self._textures.menu is not None:
                screen.blit(self._textures.menu, (0, 0))
            if isinstance(world, World):
                self._draw_settings(screen, world)
            return
        if isinstance(world, ClassicWorld):
            self._draw_classic(screen, world)
        elif world.state is GameState.LEVEL_COMPLETE:
            self._draw_level_complete(screen, world)
        else:
            self._draw_game(screen, world)
            self._draw_settings(screen, world)

    def _draw_scenery(self, screen: pygame.Surface) -> None:
        textures = self._textures
        if textures.background is not None:
            screen.blit(textures.background, (0, -200))
        self._blit(
            screen, textures.ground, Rect(0.0, SCREEN_HEIGHT - 600.0, SCREEN_WIDTH, 700.0)
        )

    def _draw_bird(self, screen: pygame.Surface, position: Vec2) -> None:
        bird = self._textures.bird
        if bird is None:
            return
        w, h = bird.get_size()
        self._blit(screen, bird, Rect(position.x - w / 2.0, position.y - h / 2.0, w, h))

    def _draw_enemy(self, screen: pygame.Surface, position: Vec2) -> None:
        enemy = self._textures.enemy
        if enemy is None:
            return
        w, h = (side * 0.05 for side in enemy.get_size())
        self._blit(screen, enemy, Rect(position.x - w / 1.2, position.y - h / 2.0, w, h))

    def _draw_blocks(self, screen: pygame.Surface, blocks, degrees_per_unit: float) -> None:
        for slot, block in enumerate(blocks):
            if not block.active:
                continue
            texture = self._textures.block_a if slot % 2 == 0 else self._textures.block_b
            self._blit(screen, texture, block.rect, block.rotation * degrees_per_unit)

    def _draw_sling(self, screen: pygame.Surface, bird) -> None:
        if not bird.launched:
            pygame.draw.line(
                screen,
                GRAY,
                (SLING_POSITION.x, SLING_POSITION.y),
                (bird.position.x, bird.position.y),
                3,
            )
        sling = self._textures.sling
        if sling is not None:
            w, h = (side * 0.18 for side in sling.get_size())
            self._blit(
                screen, sling, Rect(SLING_POSITION.x - w / 2.0, SLING_POSITION.y - h / 8.0, w, h)
            )

    def _draw_classic(self, screen: pygame.Surface, world: ClassicWorld) -> None:
        self._draw_scenery(screen)
        self._text(screen, f"{TITLE} (classic)", 20, 20, 30, RED)
        self._text(screen, f"Score: {world.score}", 20, 60, 20, DARKGRAY)
        self._text(screen, f"Lives: {world.lives}", 20, 120, 20, DARKBLUE)
        self._text(screen, "R to reset", 20, 90, 20, GRAY)

        cx, cy = SCREEN_WIDTH // 2, SCREEN_HEIGHT // 2
        if world.game_over:
            self._text(screen, "GAME OVER!", cx - 100, cy, 40, RED)
            self._text(screen, "R - Try again", cx - 100, cy + 50, 20, GRAY)
        if world.won:
            self._text(screen, "YOU WIN!", cx - 80, cy - 40, 40, DARKGREEN)

        self._draw_bird(screen, world.bird.position)
        for enemy in world.enemies:
            if enemy.active:
                self._draw_enemy(screen, enemy.position)
        self._draw_blocks(screen, world.blocks, 1.0)
        self._draw_sling(screen, world.bird)
        for point in world.aim_trajectory():
            pygame.draw.circle(screen, WHITE, (point.x, point.y), 2)

    def _draw_level_complete(self, screen: pygame.Surface, world: World) -> None:
        if self._textures.background is not None:
            screen.blit(self._textures.background, (0, -200))
        cx, cy = SCREEN_WIDTH // 2, SCREEN_HEIGHT // 2
        self._text(screen, "LEVEL COMPLETE!", cx - 150, cy - 100, 40, DARKGREEN)
        self._text(screen, f"Final Score: {world.score}", cx - 100, cy - 50, 24, DARKGRAY)
        pygame.draw.rect(screen, DARKGREEN, _pg_rect(NEXT_LEVEL_BUTTON))
        pygame.draw.rect(screen, DARKBLUE, _pg_rect(MAIN_MENU_BUTTON))
        self._text(
            screen, "NEXT LEVEL", NEXT_LEVEL_BUTTON.x + 50, NEXT_LEVEL_BUTTON.y + 15, 20, WHITE
        )
        self._text(
            screen, "MAIN MENU", MAIN_MENU_BUTTON.x + 50, MAIN_MENU_BUTTON.y + 15, 20, WHITE
        )

    def _draw_game(self, screen: pygame.Surface, world: World) -> None:
        self._draw_scenery(screen)
        self._text(screen, TITLE, 20, 20, 30, RED)
        self._text(screen, f"Score: {world.score}", 20, 60, 20, DARKGRAY)
        self._text(screen, f"Lives: {world.lives}", 20, 90, 20, DARKBLUE)
        self._text(screen, f"Level: {world.level}/{LEVEL_COUNT}", 20, 120, 20, DARKGREEN)
        self._text(screen, "R to reset", 20, 150, 20, GRAY)

        cx, cy = SCREEN_WIDTH // 2, SCREEN_HEIGHT // 2
        if world.game_over and not world.victory:
            self._text(screen, "GAME OVER!", cx - 100, cy, 40, RED)
            self._text(screen, "R - Try again", cx - 100, cy + 50, 20, GRAY)
        if world.victory and world.level >= LEVEL_COUNT:
            self._text(screen, "ALL LEVELS COMPLETE!", cx - 150, cy - 40, 40, DARKGREEN)
            self._text(screen, "R - Play again", cx - 100, cy + 10, 20, GRAY)

        self._draw_bird(screen, world.bird.position)
        for enemy in world.enemies:
            if not enemy.active:
                continue
            self._draw_enemy(screen, enemy.position)
            bar = Rect(enemy.position.x - 20, enemy.position.y - 25, 40, 6)
            pygame.draw.rect(screen, RED, _pg_rect(bar))
            fill = Rect(bar.x, bar.y, bar.width * enemy.health / enemy.max_health, bar.height)
            pygame.draw.rect(screen, GREEN, _pg_rect(fill))
            pygame.draw.rect(screen, BLACK, _pg_rect(bar), 1)

        self._draw_blocks(screen, world.blocks, 57.29577951308232)
        self._draw_sling(screen, world.bird)

        points = world.aim_trajectory()
        if points:
            overlay = pygame.Surface(screen.get_size(), pygame.SRCALPHA)
            for step, point in enumerate(points):
                alpha = 1.0 - step / len(points)
                pygame.draw.circle(overlay, (*YELLOW, round(255 * alpha)), (point.x, point.y), 2)
            screen.blit(overlay, (0, 0))

        self._text(screen, "Bird: Instant kill | Blocks: 3 hits to kill", 20, 180, 16, DARKGRAY)
        self._text(screen, "Use mouse to aim and shoot", 20, 200, 16, DARKGRAY)
        pygame.draw.rect(screen, LIGHTGRAY, _pg_rect(GAME_SETTINGS_BUTTON))
        self._text(
            screen, "Settings", GAME_SETTINGS_BUTTON.x + 10, GAME_SETTINGS_BUTTON.y + 8, 16, DARKGRAY
        )

    def _draw_settings(self, screen: pygame.Surface, world: World) -> None:
        panel = world.settings
        if not panel.open:
            return
        overlay = pygame.Surface(screen.get_size(), pygame.SRCALPHA)
        overlay.fill((0, 0, 0, 128))
        screen.blit(overlay, (0, 0))

        layout = panel.layout()
        window = layout.window
        pygame.draw.rect(screen, LIGHTGRAY, _pg_rect(window))
        pygame.draw.rect(screen, DARKGRAY, _pg_rect(window), 3)
        self._text(screen, "SETTINGS", window.x + 130, window.y + 20, 24, DARKGRAY)

        self._text(screen, "Master Volume:", window.x + 20, window.y + 70, 16, DARKGRAY)
        slider = layout.volume_slider
        pygame.draw.rect(screen, WHITE, _pg_rect(slider))
        pygame.draw.rect(screen, DARKGRAY, _pg_rect(slider), 2)
        knob_x = int(slider.x + panel.master_volume * slider.width)
        pygame.draw.circle(screen, RED, (knob_x, int(slider.y + slider.height / 2)), 8)

        toggle = layout.trajectory_toggle
        pygame.draw.rect(screen, GREEN if panel.show_trajectory else RED, _pg_rect(toggle))
        pygame.draw.rect(screen, DARKGRAY, _pg_rect(toggle), 2)
        self._text(screen, "Show Trajectory", window.x + 50, window.y + 143, 16, DARKGRAY)

        self._text(screen, "Difficulty:", window.x + 20, window.y + 180, 16, DARKGRAY)
        selected_colors = (DARKGREEN, ORANGE, RED)
        labels = (("Easy", 15), ("Medium", 8), ("Hard", 15))
        for (level, button), color, (label, offset) in zip(
            layout.difficulty_buttons().items(), selected_colors, labels
        ):
            fill = color if panel.difficulty == level else LIGHTGRAY
            pygame.draw.rect(screen, fill, _pg_rect(button))
            self._text(screen, label, button.x + offset, button.y + 8, 12, WHITE)

        close = layout.close
        pygame.draw.rect(screen, GRAY, _pg_rect(close))
        self._text(screen, "Close", close.x + 12, close.y + 8, 16, WHITE)


def main(argv: list[str] | None = None) -> int:
    """Start the game from the command line."""
    args = parse_args(argv)
    return App(classic=args.classic, asset_dir=args.asset_dir).run()