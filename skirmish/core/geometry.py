"""
Board geometry helpers. Pure functions, no side effects.
"""

from __future__ import annotations

from typing import Iterable, Optional, TYPE_CHECKING

from .types import Facing, GridPos

if TYPE_CHECKING:
    from ..entities.unit import Unit


def in_bounds(pos: GridPos, size: int) -> bool:
    x, y = pos
    return 1 <= x <= size and 1 <= y <= size


def vector_for(facing: Facing) -> GridPos:
    return facing.vector


def manhattan(a: GridPos, b: GridPos) -> int:
    return abs(a[0] - b[0]) + abs(a[1] - b[1])


def unit_at(units: Iterable["Unit"], pos: GridPos) -> Optional["Unit"]:
    """Return the live unit standing on ``pos``, if any."""
    return next((u for u in units if u.pos == pos), None)


def facing_towards(src: GridPos, dst: GridPos, default: Facing) -> Facing:
    """
    Facing a unit adopts after travelling from ``src`` to ``dst``.

    Checked in fixed order: north, east, south, west. ``default`` is kept
    when the two tiles coincide.
    """
    if dst[1] < src[1]:
        return Facing.NORTH
    if dst[0] > src[0]:
        return Facing.EAST
    if dst[1] > src[1]:
        return Facing.SOUTH
    if dst[0] < src[0]:
        return Facing.WEST
    return default


def all_tiles(size: int) -> list[GridPos]:
    """Every tile of the board in row-major order."""
    return [(x, y) for y in range(1, size + 1) for x in range(1, size + 1)]
