import pytest

from slingfort.geometry import Vec2, point_in_rect
from slingfort.settings import Difficulty, SettingsPanel


@pytest.fixture
def panel():
    return SettingsPanel(open=True)


def test_defaults():
    panel = SettingsPanel()
    assert panel.open is False
    assert panel.master_volume == 1.0
    assert panel.show_trajectory is True
    assert panel.difficulty is Difficulty.EASY


def test_layout_controls_lie_inside_window(panel):
    layout = panel.layout()
    window = layout.window
    for rect in (
        layout.volume_slider,
        layout.trajectory_toggle,
        layout.easy,
        layout.medium,
        layout.hard,
        layout.close,
    ):
        assert window.x <= rect.x and rect.right <= window.right
        assert window.y <= rect.y and rect.bottom <= window.bottom


def test_close_button_closes(panel):
    panel.handle_click(panel.layout().close.center)
    assert panel.open is False


def test_clicks_ignored_while_closed():
    panel = SettingsPanel()
    panel.handle_click(panel.layout().trajectory_toggle.center)
    assert panel.show_trajectory is True


def test_volume_slider_start_is_silent(panel):
    slider = panel.layout().volume_slider
    panel.handle_click(Vec2(slider.x, slider.y + 5))
    assert panel.master_volume == 0.0


def test_volume_slider_middle(panel):
    slider = panel.layout().volume_slider
    panel.handle_click(slider.center)
    assert panel.master_volume == pytest.approx(0.5)


def test_volume_stays_in_unit_range(panel):
    slider = panel.layout().volume_slider
    for offset in range(0, int(slider.width), 7):
        panel.handle_click(Vec2(slider.x + offset, slider.y + 1))
        assert 0.0 <= panel.master_volume <= 1.0


def test_click_outside_slider_keeps_volume(panel):
    panel.handle_click(Vec2(panel.window.x + 1, panel.window.y + 1))
    assert panel.master_volume == 1.0
    assert panel.open is True


def test_trajectory_toggle_flips_back_and_forth(panel):
    toggle = panel.layout().trajectory_toggle.center
    panel.handle_click(toggle)
    assert panel.show_trajectory is False
    panel.handle_click(toggle)
    assert panel.show_trajectory is True


@pytest.mark.parametrize("level", list(Difficulty))
def test_difficulty_buttons(panel, level):
    button = panel.layout().difficulty_buttons()[level]
    panel.handle_click(button.center)
    assert panel.difficulty is level


def test_difficulty_buttons_are_disjoint(panel):
    buttons = list(panel.layout().difficulty_buttons().values())
    for button in buttons:
        hits = [other for other in buttons if point_in_rect(button.center, other)]
        assert hits == [button]