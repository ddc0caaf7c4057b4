"""
Static evaluation used by the greedy planner.

Scores are from the point of view of ``side``: own material counts
positive, enemy material negative.
"""

from __future__ import annotations

from skirmish.core.types import Side, UnitKind
from skirmish.mechanics.combat import is_engaged
from skirmish.mechanics.support import support_bonus
from skirmish.state import GameState

KILL_REWARD = 100
SURVIVAL = 50
UNIT_VALUE_WEIGHT = 10
SUPPORT_BONUS = 10
EXPOSED_ARCHER_PENALTY = -40


def material_value(kind: UnitKind) -> int:
    return SURVIVAL + kind.worth * UNIT_VALUE_WEIGHT


def evaluate_state(state: GameState, side: Side) -> float:
    score = 0.0
    own_lines = state.lines_for(side)

    for unit in state.units:
        if unit.side is side:
            score += material_value(unit.kind)
            score += support_bonus(unit, own_lines) * SUPPORT_BONUS
            if unit.kind is UnitKind.ARCHER and is_engaged(unit, state.units):
                score += EXPOSED_ARCHER_PENALTY
        else:
            score -= material_value(unit.kind)
    return score


def kill_reward(before: GameState, after: GameState, side: Side) -> float:
    """Immediate reward for every enemy present in ``before`` but gone in ``after``."""
    survivors = {u.id for u in after.units}
    return sum(
        KILL_REWARD * unit.kind.worth
        for unit in before.units
        if unit.side is not side and unit.id not in survivors
    )


def score_transition(before: GameState, after: GameState, side: Side) -> float:
    return kill_reward(before, after, side) + evaluate_state(after, side)
