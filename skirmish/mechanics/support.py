"""
Support-line rules: placement legality and the per-tile strength bonus.
"""

from __future__ import annotations

import random
from typing import Iterable, List, Sequence

from ..core.types import ActionValidation, Side, SupportAxis
from ..entities.support import SupportLine
from ..entities.unit import Unit

MAX_SUPPORT_LINES = 3

# Centre-control layouts the computer picks from at game start
COMPUTER_LAYOUTS = (
    ((SupportAxis.COL, 3), (SupportAxis.COL, 4), (SupportAxis.COL, 5)),
    ((SupportAxis.ROW, 3), (SupportAxis.ROW, 4), (SupportAxis.ROW, 5)),
    ((SupportAxis.COL, 4), (SupportAxis.ROW, 3), (SupportAxis.ROW, 5)),
    ((SupportAxis.ROW, 4), (SupportAxis.COL, 3), (SupportAxis.COL, 5)),
)


def support_bonus(unit: Unit, lines: Iterable[SupportLine]) -> int:
    """Number of the unit's own support lines crossing its tile (0, 1 or 2+)."""
    return sum(
        1 for line in lines
        if line.side is unit.side and line.covers(unit.x, unit.y)
    )


def validate_placement(existing: Sequence[SupportLine], candidate: SupportLine) -> ActionValidation:
    """
    A side holds at most three lines and never the same line twice.

    Parallel lines on neighbouring indices are allowed.
    """
    own = [line for line in existing if line.side is candidate.side]
    if len(own) >= MAX_SUPPORT_LINES:
        return ActionValidation.fail(
            "SUPPORT_QUOTA",
            f"at most {MAX_SUPPORT_LINES} support lines per side",
        )
    if any(line.axis is candidate.axis and line.index == candidate.index for line in own):
        return ActionValidation.fail("DUPLICATE_SUPPORT", f"{candidate} is already selected")
    return ActionValidation.success()


def is_valid_placement(existing: Sequence[SupportLine], candidate: SupportLine) -> bool:
    return validate_placement(existing, candidate).valid


def choose_computer_lines(side: Side, rng: random.Random, board_size: int) -> List[SupportLine]:
    """Pick one centre-control layout, shifted to the centre of the board."""
    layout = rng.choice(COMPUTER_LAYOUTS)
    shift = (board_size + 1) // 2 - 4
    return [SupportLine(side, axis, index + shift) for axis, index in layout]
