"""Plane geometry: vectors, rectangles, collision tests and launch trajectories."""

from __future__ import annotations

import math
from dataclasses import dataclass

MAX_TRAJECTORY_POINTS = 100
TRAJECTORY_GRAVITY = 0.5


@dataclass(frozen=True)
class Vec2:
    """An immutable 2D vector."""

    x: float = 0.0
    y: float = 0.0

    def __add__(self, other: Vec2) -> Vec2:
        return Vec2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Vec2) -> Vec2:
        return Vec2(self.x - other.x, self.y - other.y)

    def __mul__(self, factor: float) -> Vec2:
        return Vec2(self.x * factor, self.y * factor)

    __rmul__ = __mul__

    def __neg__(self) -> Vec2:
        return Vec2(-self.x, -self.y)

    def __abs__(self) -> float:
        return math.hypot(self.x, self.y)


@dataclass(frozen=True)
class Rect:
    """An immutable axis-aligned rectangle given by its top-left corner and size."""

    x: float
    y: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    @property
    def center(self) -> Vec2:
        return Vec2(self.x + self.width / 2.0, self.y + self.height / 2.0)


def point_in_rect(point: Vec2, rect: Rect) -> bool:
    """True if the point lies inside the rectangle (left/top edges inclusive)."""
    return rect.x <= point.x < rect.right and rect.y <= point.y < rect.bottom


def point_in_circle(point: Vec2, center: Vec2, radius: float) -> bool:
    """True if the point lies inside or on the circle."""
    return circles_collide(point, 0.0, center, radius)


def circles_collide(center1: Vec2, radius1: float, center2: Vec2, radius2: float) -> bool:
    """True if two circles overlap or touch."""
    dx = center2.x - center1.x
    dy = center2.y - center1.y
    reach = radius1 + radius2
    return dx * dx + dy * dy <= reach * reach


def circle_rect_collide(center: Vec2, radius: float, rect: Rect) -> bool:
    """True if a circle overlaps or touches a rectangle."""
    half_w = rect.width / 2.0
    half_h = rect.height / 2.0
    rect_center = rect.center
    dx = abs(center.x - rect_center.x)
    dy = abs(center.y - rect_center.y)

    if dx > half_w + radius or dy > half_h + radius:
        return False
    if dx <= half_w or dy <= half_h:
        return True
    corner_x = dx - half_w
    corner_y = dy - half_h
    return corner_x * corner_x + corner_y * corner_y <= radius * radius


def rects_collide(a: Rect, b: Rect) -> bool:
    """True if two rectangles overlap; rectangles sharing only an edge do not."""
    return a.x < b.right and a.right > b.x and a.y < b.bottom and a.bottom > b.y


def trajectory(start: Vec2, velocity: Vec2, count: int, time_step: float) -> list[Vec2]:
    """Predicted positions of a projectile at ``count`` evenly spaced instants."""
    if not 0 <= count <= MAX_TRAJECTORY_POINTS:
        raise ValueError(
            f"point count must be between 0 and {MAX_TRAJECTORY_POINTS}, got {count}"
        )
    points = []
    for step in range(count):
        t = step * time_step
        points.append(
            Vec2(
                start.x + velocity.x * t,
                start.y + velocity.y * t + 0.5 * TRAJECTORY_GRAVITY * t * t,
            )
        )
    return points