"""The settings panel: master volume, trajectory preview and difficulty."""

from __future__ import annotations

import enum
from dataclasses import dataclass

from slingfort.geometry import Rect, Vec2, point_in_rect

DEFAULT_WINDOW = Rect(400.0, 200.0, 400.0, 300.0)


class Difficulty(enum.IntEnum):
    """Selectable difficulty levels."""

    EASY = 1
    MEDIUM = 2
    HARD = 3


@dataclass(frozen=True)
class PanelLayout:
    """Screen rectangles of the panel's window and controls."""

    window: Rect
    volume_slider: Rect
    trajectory_toggle: Rect
    easy: Rect
    medium: Rect
    hard: Rect
    close: Rect

    def difficulty_buttons(self) -> dict[Difficulty, Rect]:
        return {
            Difficulty.EASY: self.easy,
            Difficulty.MEDIUM: self.medium,
            Difficulty.HARD: self.hard,
        }


@dataclass
class SettingsPanel:
    """A modal panel of game settings that reacts to mouse clicks while open."""

    window: Rect = DEFAULT_WINDOW
    open: bool = False
    master_volume: float = 1.0
    show_trajectory: bool = True
    difficulty: Difficulty = Difficulty.EASY

    def layout(self) -> PanelLayout:
        """Where each control sits, relative to the panel window."""
        x, y = self.window.x, self.window.y
        return PanelLayout(
            window=self.window,
            volume_slider=Rect(x + 20, y + 100, 200, 20),
            trajectory_toggle=Rect(x + 20, y + 140, 20, 20),
            easy=Rect(x + 20, y + 200, 60, 30),
            medium=Rect(x + 90, y + 200, 60, 30),
            hard=Rect(x + 160, y + 200, 60, 30),
            close=Rect(
                x + self.window.width - 80, y + self.window.height - 50, 60, 30
            ),
        )

    def handle_click(self, point: Vec2) -> None:
        """Apply a left click at ``point``; clicks are ignored while closed."""
        if not self.open:
            return
        layout = self.layout()

        if point_in_rect(point, layout.close):
            self.open = False

        slider = layout.volume_slider
        if point_in_rect(point, slider):
            volume = (point.x - slider.x) / slider.width
            self.master_volume = max(0.0, min(1.0, volume))

        if point_in_rect(point, layout.trajectory_toggle):
            self.show_trajectory = not self.show_trajectory

        for level, button in layout.difficulty_buttons().items():
            if point_in_rect(point, button):
                self.difficulty = level