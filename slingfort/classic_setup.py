"""Starting layout of the classic single-level game and its block weighting."""

from __future__ import annotations

from slingfort.entities import ENEMY_RADIUS, Block, Enemy
from slingfort.geometry import Rect, Vec2

_CLASSIC_ENEMY_POSITIONS = (
    (1000.0, 400.0),
    (1000.0, 520.0),
)

_CLASSIC_BLOCK_RECTS = (
    (1000.0, 300.0, 46.0, 120.0),
    (913.0, 500.0, 140.0, 70.0),
    (1000.0, 416.0, 46.0, 120.0),
    (913.0, 270.0, 140.0, 70.0),
    (912.0, 300.0, 46.0, 120.0),
    (913.0, 384.0, 140.0, 70.0),
    (915.0, 416.0, 46.0, 120.0),
    (913.0, 250.0, 140.0, 70.0),
)

_MASS_AREA_UNIT = 10000.0


def classic_enemies() -> list[Enemy]:
    """The two enemies the classic game starts with."""
    return [Enemy(Vec2(x, y), ENEMY_RADIUS) for x, y in _CLASSIC_ENEMY_POSITIONS]


def classic_blocks() -> list[Block]:
    """The eight blocks of the classic fort, resting where they were built."""
    return [Block(Rect(x, y, w, h)) for x, y, w, h in _CLASSIC_BLOCK_RECTS]


def classic_block_mass(block: Block) -> float:
    """Weight of a block in the classic game: one plus its area in units of 10000."""
    return 1.0 + (block.rect.width * block.rect.height) / _MASS_AREA_UNIT