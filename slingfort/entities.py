"""The bird, the blocks and the enemies, and the starting layout of each level."""

from __future__ import annotations

from dataclasses import dataclass, field

from slingfort.geometry import Rect, Vec2

MAX_BLOCKS = 10
MAX_ENEMIES = 5
ENEMY_MAX_HEALTH = 3
BIRD_RADIUS = 15.0
ENEMY_RADIUS = 15.0
SLING_POSITION = Vec2(150.0, 400.0)
LEVEL_COUNT = 2


@dataclass
class Bird:
    """The projectile launched from the sling."""

    position: Vec2
    velocity: Vec2 = field(default_factory=Vec2)
    launched: bool = False
    radius: float = BIRD_RADIUS

    @classmethod
    def at_sling(cls) -> Bird:
        """A fresh bird resting in the sling."""
        return cls(SLING_POSITION, Vec2(0.0, 0.0), False, BIRD_RADIUS)


@dataclass
class Block:
    """A rigid building block of a fort."""

    rect: Rect
    mass: float = 1.0
    friction: float = 1.0
    bounciness: float = 0.0
    active: bool = True
    velocity: Vec2 = field(default_factory=Vec2)
    falling: bool = False
    rotation: float = 0.0
    angular_velocity: float = 0.0
    on_ground: bool = False
    start_rect: Rect | None = None

    def __post_init__(self) -> None:
        if self.start_rect is None:
            self.start_rect = self.rect


@dataclass
class Enemy:
    """A target that must be knocked out to clear a level."""

    position: Vec2
    radius: float = ENEMY_RADIUS
    active: bool = True
    velocity: Vec2 = field(default_factory=Vec2)
    falling: bool = False
    landed: bool = False
    health: int = ENEMY_MAX_HEALTH
    max_health: int = ENEMY_MAX_HEALTH
    hit_timer: float = 0.0


_ENEMY_POSITIONS = {
    1: ((1000.0, 390.0), (1000.0, 505.0)),
    2: ((1000.0, 390.0), (1000.0, 505.0), (920.0, 390.0)),
}

_BLOCK_RECTS = {
    1: (
        (1000.0, 300.0, 46.0, 120.0),
        (913.0, 500.0, 140.0, 70.0),
        (1000.0, 416.0, 46.0, 120.0),
        (913.0, 270.0, 140.0, 70.0),
        (912.0, 300.0, 46.0, 120.0),
        (913.0, 384.0, 140.0, 70.0),
        (915.0, 416.0, 46.0, 120.0),
        (913.0, 250.0, 140.0, 70.0),
    ),
    2: (
        (1000.0, 300.0, 46.0, 120.0),
        (913.0, 500.0, 140.0, 70.0),
        (1000.0, 416.0, 46.0, 120.0),
        (913.0, 270.0, 140.0, 70.0),
        (850.0, 300.0, 46.0, 120.0),
        (850.0, 384.0, 140.0, 70.0),
        (850.0, 416.0, 46.0, 120.0),
        (850.0, 250.0, 140.0, 70.0),
    ),
}

# (mass, friction, bounciness) for upright posts and horizontal planks, per level.
_BLOCK_MATERIALS = {
    1: ((2.0, 0.8, 0.3), (3.0, 0.9, 0.2)),
    2: ((2.5, 0.7, 0.4), (3.5, 0.8, 0.3)),
}


def _check_level(level: int) -> None:
    if level not in _ENEMY_POSITIONS:
        raise ValueError(f"unknown level {level}; levels run from 1 to {LEVEL_COUNT}")


def level_enemies(level: int) -> list[Enemy]:
    """The enemies a level starts with, at full health."""
    _check_level(level)
    return [Enemy(Vec2(x, y)) for x, y in _ENEMY_POSITIONS[level]]


def level_blocks(level: int) -> list[Block]:
    """The blocks a level starts with; even slots are posts, odd slots planks."""
    _check_level(level)
    post, plank = _BLOCK_MATERIALS[level]
    blocks = []
    for slot, (x, y, w, h) in enumerate(_BLOCK_RECTS[level]):
        mass, friction, bounciness = plank if slot % 2 else post
        blocks.append(Block(Rect(x, y, w, h), mass, friction, bounciness))
    return blocks