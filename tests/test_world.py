import random

import pytest

from slingfort.entities import SLING_POSITION, Bird, Enemy
from slingfort.geometry import Vec2
from slingfort.world import (
    EXIT_BUTTON,
    GAME_SETTINGS_BUTTON,
    GROUND_Y,
    MAIN_MENU_BUTTON,
    MAX_LIVES,
    MENU_SETTINGS_BUTTON,
    NEXT_LEVEL_BUTTON,
    PLAY_BUTTON,
    SCREEN_WIDTH,
    FrameInput,
    GameState,
    World,
)


@pytest.fixture
def world():
    return World(random.Random(7))


@pytest.fixture
def playing(world):
    world.state = GameState.GAME
    return world


def test_new_world(world):
    assert world.state is GameState.MENU
    assert world.level == 1
    assert world.lives == MAX_LIVES
    assert world.score == 0
    assert len(world.enemies) == 2
    assert len(world.blocks) == 8
    assert world.bird == Bird.at_sling()


def test_menu_play(world):
    assert world.menu_click(PLAY_BUTTON.center) is False
    assert world.state is GameState.GAME


def test_menu_settings_and_exit(world):
    world.menu_click(MENU_SETTINGS_BUTTON.center)
    assert world.settings.open is True
    assert world.menu_click(EXIT_BUTTON.center) is True
    assert world.state is GameState.MENU


def test_damage_enemy_until_dead(world):
    world.damage_enemy(0, 1)
    assert world.enemies[0].health == 2
    assert world.enemies[0].active is True
    world.damage_enemy(0, 2)
    assert world.enemies[0].active is False
    assert world.all_enemies_dead() is False
    world.damage_enemy(1, 5)
    assert world.all_enemies_dead() is True


def test_damage_enemy_ignores_bad_index(world):
    world.damage_enemy(-1, 1)
    world.damage_enemy(len(world.enemies), 1)
    assert [e.health for e in world.enemies] == [e.max_health for e in world.enemies]


def test_next_level_wraps_and_keeps_score(world):
    world.score = 40
    world.lives = 1
    world.next_level()
    assert world.level == 2
    assert len(world.enemies) == 3
    assert world.lives == MAX_LIVES
    assert world.score == 40
    world.next_level()
    assert world.level == 1


def test_reset_restores_level(playing):
    playing.score = 99
    playing.lives = 1
    playing.game_over = True
    playing.enemies[0].active = False
    playing.reset()
    assert playing.score == 0
    assert playing.lives == MAX_LIVES
    assert playing.game_over is False
    assert all(e.active for e in playing.enemies)


def test_update_blocks_ignores_resting_blocks(world):
    before = [b.rect for b in world.blocks]
    world.update_blocks(1 / 60)
    assert [b.rect for b in world.blocks] == before


def test_falling_block_settles_on_ground(world):
    block = world.blocks[0]
    block.falling = True
    for _ in range(2000):
        world.update_blocks(1 / 60)
        if block.on_ground:
            break
    assert block.on_ground is True
    assert block.falling is False
    assert block.rect.bottom == pytest.approx(GROUND_Y)
    assert block.velocity == Vec2(0.0, 0.0)


def test_falling_block_bounces_off_left_edge(world):
    block = world.blocks[0]
    block.falling = True
    block.rect = block.rect.__class__(2.0, 100.0, block.rect.width, block.rect.height)
    block.velocity = Vec2(-10.0, 0.0)
    world.update_blocks(1 / 60)
    assert block.rect.x == 0.0
    assert block.velocity.x > 0


def test_step_outside_game_does_nothing(world):
    world.step(FrameInput(mouse=SLING_POSITION, mouse_pressed=True))
    assert world.dragging is False
    assert world.bird == Bird.at_sling()


def test_drag_and_launch(playing):
    playing.step(FrameInput(mouse=SLING_POSITION, mouse_pressed=True))
    assert playing.dragging is True
    aim = Vec2(100.0, 450.0)
    playing.step(FrameInput(mouse=aim))
    path = playing.aim_trajectory()
    assert len(path) == 50
    assert path[0] == SLING_POSITION
    playing.step(FrameInput(mouse=aim, mouse_released=True))
    assert playing.dragging is False
    assert playing.bird.launched is True
    assert playing.bird.velocity.x > 0
    assert playing.aim_trajectory() == []


def test_aim_hidden_when_disabled(playing):
    playing.settings.show_trajectory = False
    playing.step(FrameInput(mouse=SLING_POSITION, mouse_pressed=True))
    assert playing.dragging is True
    assert playing.aim_trajectory() == []


def test_bird_kills_enemy_and_completes_level(playing):
    playing.enemies = [Enemy(Vec2(300.0, 300.0))]
    playing.bird = Bird(Vec2(300.0, 300.0), Vec2(5.0, 0.0), True)
    playing.step(FrameInput())
    assert playing.enemies[0].active is False
    assert playing.score == 150
    assert playing.victory is True
    assert playing.state is GameState.LEVEL_COMPLETE


def test_last_level_victory_stays_in_game(playing):
    playing.next_level()
    for enemy in playing.enemies:
        enemy.active = False
    playing.step(FrameInput())
    assert playing.victory is True
    assert playing.state is GameState.GAME


def test_falling_block_damages_enemy(playing):
    block = playing.blocks[0]
    block.falling = True
    playing.enemies = [Enemy(block.rect.center)]
    playing.step(FrameInput())
    enemy = playing.enemies[0]
    assert enemy.health == enemy.max_health - 1
    assert enemy.hit_timer == 0.5
    assert enemy.falling is True


def test_bird_leaving_screen_costs_a_life(playing):
    playing.bird = Bird(Vec2(5.0, 300.0), Vec2(-20.0, 0.0), True)
    playing.step(FrameInput())
    assert playing.lives == MAX_LIVES - 1
    assert playing.bird == Bird.at_sling()
    assert playing.game_over is False


def test_last_life_ends_game(playing):
    playing.lives = 1
    playing.bird = Bird(Vec2(SCREEN_WIDTH - 5.0, 300.0), Vec2(20.0, 0.0), True)
    playing.step(FrameInput())
    assert playing.game_over is True
    assert playing.lives == 1


def test_reset_key(playing):
    playing.score = 70
    playing.victory = True
    playing.step(FrameInput(reset_pressed=True))
    assert playing.score == 0
    assert playing.victory is False


def test_settings_button_in_game(playing):
    playing.step(FrameInput(mouse=GAME_SETTINGS_BUTTON.center, mouse_pressed=True))
    assert playing.settings.open is True


def test_level_complete_next(world):
    world.state = GameState.LEVEL_COMPLETE
    world.victory = True
    world.level_complete_click(NEXT_LEVEL_BUTTON.center)
    assert world.level == 2
    assert world.state is GameState.GAME
    assert world.victory is False


def test_level_complete_main_menu(world):
    world.next_level()
    world.state = GameState.LEVEL_COMPLETE
    world.score = 30
    world.level_complete_click(MAIN_MENU_BUTTON.center)
    assert world.state is GameState.MENU
    assert world.level == 1
    assert world.score == 0