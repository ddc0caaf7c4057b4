"""
Deployment zones and rosters.
"""

from __future__ import annotations

import random
from typing import List, Sequence

from ..core.types import Facing, GridPos, Side, UnitKind, Zone

DEFAULT_ROSTER = (
    UnitKind.INFANTRY,
    UnitKind.INFANTRY,
    UnitKind.ARCHER,
    UnitKind.ARCHER,
    UnitKind.CAVALRY,
    UnitKind.CAVALRY,
)


def default_zone(side: Side, board_size: int) -> Zone:
    """
    Two edge rows by the three centre columns.

    On the 7x7 board the player deploys on rows 6-7 and the computer on
    rows 1-2, both in columns 3-5.
    """
    centre = (board_size + 1) // 2
    if side is Side.PLAYER:
        return Zone(centre - 1, centre + 1, board_size - 1, board_size)
    return Zone(centre - 1, centre + 1, 1, 2)


def deployment_facing(side: Side) -> Facing:
    """Each side starts facing the opponent's edge."""
    return Facing.NORTH if side is Side.PLAYER else Facing.SOUTH


def shuffled_placements(zone: Zone, roster: Sequence[UnitKind], rng: random.Random) -> List[GridPos]:
    """Random distinct zone tiles, one per roster entry."""
    tiles = zone.tiles()
    if len(roster) > len(tiles):
        raise ValueError(f"roster of {len(roster)} does not fit in a zone of {len(tiles)} tiles")
    rng.shuffle(tiles)
    return tiles[: len(roster)]
