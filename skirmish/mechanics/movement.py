"""
Movement and rotation rules.

A unit steps one tile orthogonally for 1 move point. Cavalry may also charge
two tiles straight along its current facing for 2 points when the tile in
between is empty. No other multi-tile path is legal.
"""

from __future__ import annotations

from typing import Iterable, List

from ..core.geometry import all_tiles, facing_towards, in_bounds, manhattan, unit_at
from ..core.types import ActionValidation, Facing, GridPos, UnitKind
from ..entities.unit import Unit


def validate_move(
    unit: Unit,
    target: GridPos,
    units: Iterable[Unit],
    size: int,
) -> ActionValidation:
    """
    Check the geometric legality of moving ``unit`` to ``target``.

    Budget is only consulted for the charge (which needs 2 points); the
    engine separately rejects a step the unit cannot pay for.
    """
    units = list(units)
    if not in_bounds(target, size):
        return ActionValidation.fail("OUT_OF_BOUNDS", f"{target} is outside the board")
    if unit_at(units, target) is not None:
        return ActionValidation.fail("OCCUPIED", f"{target} is occupied")

    dx = target[0] - unit.x
    dy = target[1] - unit.y
    dist = abs(dx) + abs(dy)

    if dist == 1:
        return ActionValidation.success()

    if unit.kind is UnitKind.CAVALRY and dist == 2 and unit.moves_left >= 2:
        fx, fy = unit.facing.vector
        if (dx, dy) == (fx * 2, fy * 2):
            mid = (unit.x + fx, unit.y + fy)
            if unit_at(units, mid) is not None:
                return ActionValidation.fail("BLOCKED", f"charge path through {mid} is blocked")
            return ActionValidation.success()

    return ActionValidation.fail(
        "INVALID_MOVE",
        f"{unit.label()} cannot reach {target} from {unit.pos}",
    )


def is_valid_move(unit: Unit, target: GridPos, units: Iterable[Unit], size: int) -> bool:
    return validate_move(unit, target, units, size).valid


def can_rotate(unit: Unit) -> bool:
    """A unit may reorient only while it still has movement left."""
    return unit.moves_left > 0


def move_cost(unit: Unit, target: GridPos) -> int:
    return manhattan(unit.pos, target)


def legal_destinations(unit: Unit, units: Iterable[Unit], size: int) -> List[GridPos]:
    """Tiles the unit can move to right now, budget included, in row-major order."""
    units = list(units)
    return [
        tile
        for tile in all_tiles(size)
        if move_cost(unit, tile) <= unit.moves_left and is_valid_move(unit, tile, units, size)
    ]


def apply_move(unit: Unit, target: GridPos) -> None:
    """Relocate the unit, pay the cost and face the direction of travel."""
    cost = move_cost(unit, target)
    unit.facing = facing_towards(unit.pos, target, unit.facing)
    unit.x, unit.y = target
    unit.moves_left = max(0, unit.moves_left - cost)


def apply_rotation(unit: Unit, facing: Facing) -> None:
    unit.facing = facing
