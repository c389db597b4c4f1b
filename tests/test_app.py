from pathlib import Path

import pygame
import pytest

from slingfort.app import App, _frame_from_events, _load_image, parse_args
from slingfort.classic import ClassicWorld
from slingfort.geometry import Vec2
from slingfort.world import FrameInput, GameState, World


def _click(x, y):
    return FrameInput(mouse=Vec2(x, y), mouse_pressed=True)


def test_parse_args_defaults():
    args = parse_args([])
    assert args.classic is False
    assert args.asset_dir == Path(".")


def test_parse_args_options():
    args = parse_args(["--classic", "--assets", "images"])
    assert args.classic is True
    assert args.asset_dir == Path("images")


def test_parse_args_rejects_unknown_option():
    with pytest.raises(SystemExit):
        parse_args(["--bogus"])


def test_app_levelled_world(tmp_path):
    app = App(classic=False, asset_dir=tmp_path)
    assert isinstance(app.world, World)
    assert app.world.state is GameState.MENU
    assert app.world.level == 1
    assert app.asset_dir == tmp_path


def test_app_classic_world(tmp_path):
    app = App(classic=True, asset_dir=str(tmp_path))
    assert isinstance(app.world, ClassicWorld)
    assert app.world.state is GameState.MENU
    assert app.asset_dir == tmp_path


def test_frame_from_events_left_click_and_reset():
    events = [
        pygame.event.Event(pygame.MOUSEBUTTONDOWN, button=1, pos=(5, 6)),
        pygame.event.Event(pygame.MOUSEBUTTONUP, button=1, pos=(5, 6)),
        pygame.event.Event(pygame.KEYDOWN, key=pygame.K_r),
    ]
    frame, quit_requested = _frame_from_events(events, Vec2(5.0, 6.0), 0.25)
    assert frame.mouse_pressed and frame.mouse_released and frame.reset_pressed
    assert frame.mouse == Vec2(5.0, 6.0)
    assert frame.dt == 0.25
    assert quit_requested is False


def test_frame_from_events_ignores_other_buttons():
    events = [pygame.event.Event(pygame.MOUSEBUTTONDOWN, button=3, pos=(0, 0))]
    frame, quit_requested = _frame_from_events(events, Vec2(), 0.0)
    assert frame.mouse_pressed is False
    assert quit_requested is False


@pytest.mark.parametrize(
    "event",
    [
        pygame.event.Event(pygame.QUIT),
        pygame.event.Event(pygame.KEYDOWN, key=pygame.K_ESCAPE),
    ],
)
def test_frame_from_events_quit(event):
    _, quit_requested = _frame_from_events([event], Vec2(), 0.0)
    assert quit_requested is True


def test_load_image_missing_file(tmp_path):
    assert _load_image(tmp_path / "absent.png") is None


def test_load_image_round_trip_and_resize(tmp_path):
    path = tmp_path / "tile.png"
    pygame.image.save(pygame.Surface((8, 4)), str(path))
    assert _load_image(path).get_size() == (8, 4)
    assert _load_image(path, (16, 10)).get_size() == (16, 10)


def test_menu_play_click_starts_game(tmp_path):
    app = App(classic=False, asset_dir=tmp_path)
    assert app._tick(_click(900, 200)) is True
    assert app.world.state is GameState.GAME


def test_menu_exit_click_quits(tmp_path):
    app = App(classic=False, asset_dir=tmp_path)
    assert app._tick(_click(500, 480)) is False
    assert app.world.state is GameState.MENU


def test_menu_settings_open_then_close(tmp_path):
    app = App(classic=False, asset_dir=tmp_path)
    app._tick(_click(1000, 550))
    assert app.world.settings.open is True
    close = app.world.settings.layout().close
    app._tick(_click(close.x + 1, close.y + 1))
    assert app.world.settings.open is False


def test_game_settings_toggle_trajectory(tmp_path):
    app = App(classic=False, asset_dir=tmp_path)
    app._tick(_click(900, 200))
    app.world.settings.open = True
    toggle = app.world.settings.layout().trajectory_toggle
    app._tick(_click(toggle.x + 1, toggle.y + 1))
    assert app.world.settings.show_trajectory is False


def test_classic_play_click_starts_game(tmp_path):
    app = App(classic=True, asset_dir=tmp_path)
    assert app._tick(_click(1000, 200)) is True
    assert app.world.state is GameState.GAME


def test_level_complete_main_menu_click(tmp_path):
    app = App(classic=False, asset_dir=tmp_path)
    app.world.state = GameState.LEVEL_COMPLETE
    app.world.score = 500
    app._tick(_click(768, 480))
    assert app.world.state is GameState.MENU
    assert app.world.score == 0
    assert app.world.level == 1