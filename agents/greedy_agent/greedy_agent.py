"""
Greedy turn planner.

Units are processed one at a time in id order. For each unit the planner
builds a set of candidate action sequences, simulates each one with the
same transition functions the engine uses, scores the result and commits
the best sequence into its private working state before moving on to the
next unit. Difficulty only changes how many destination tiles are
examined, never the rules.
"""

from __future__ import annotations

import math
import random
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from infra.logger import get_logger
from skirmish.core.actions import Action
from skirmish.core.errors import IllegalOperation
from skirmish.core.types import Difficulty, GridPos, Side
from skirmish.entities.unit import Unit, unit_order_key
from skirmish.mechanics.combat import valid_attack_targets
from skirmish.mechanics.movement import legal_destinations
from skirmish.rules import move_unit, simulate_sequence
from skirmish.state import GameState
from ..base_agent import BaseAgent
from ..registry import register_agent
from .evaluation import score_transition

logger = get_logger(__name__)


@dataclass
class Candidate:
    """One action sequence considered for a unit."""

    label: str
    actions: List[Action] = field(default_factory=list)


@register_agent("greedy")
class GreedyAgent(BaseAgent):
    """
    Per-unit greedy planner scored by material and position.

    Candidate order (first found wins ties):
    1. attack in place, one per reachable enemy
    2. move then attack, one per (destination, enemy) pair
    3. move only, one per destination
    4. stay put
    """

    def __init__(
        self,
        side: Side,
        name: str | None = None,
        difficulty: Difficulty | str | None = None,
        seed: Optional[int] = None,
        **_: Any,
    ):
        """
        Args:
            side: Side to control
            name: Optional agent name (default: "GreedyAgent")
            difficulty: Fixed difficulty; None follows the game state
            seed: Random seed for destination sampling (None = random)
        """
        super().__init__(side, name)
        self.difficulty = Difficulty(difficulty) if difficulty is not None else None
        self.rng = random.Random(seed)

    def get_actions(
        self,
        state: GameState,
        **kwargs: Any,
    ) -> tuple[List[Action], Dict[str, Any]]:
        difficulty = self.difficulty or state.difficulty
        metadata: Dict[str, Any] = {"policy": "greedy", "difficulty": difficulty.value, "decisions": []}

        if state.active_side is not self.side:
            metadata["skipped"] = f"not {self.side.value}'s turn"
            return [Action.end_turn()], metadata

        working = state.clone()
        plan: List[Action] = []

        for unit_id in [u.id for u in sorted(working.units_of(self.side), key=unit_order_key)]:
            if working.is_game_over:
                break
            unit = working.get_unit(unit_id)
            if unit is None:
                # lost earlier this turn (repulsed attack)
                continue

            best: Optional[Candidate] = None
            best_state = working
            best_score = -math.inf
            candidates = self._candidates(working, unit, difficulty)

            for candidate in candidates:
                try:
                    after = simulate_sequence(working, candidate.actions, self.side)
                except IllegalOperation:
                    continue
                score = score_transition(working, after, self.side)
                if score > best_score:
                    best, best_state, best_score = candidate, after, score

            if best is None:
                continue
            plan.extend(best.actions)
            working = best_state
            metadata["decisions"].append(
                {
                    "unit_id": unit_id,
                    "choice": best.label,
                    "score": best_score,
                    "candidates": len(candidates),
                }
            )
            logger.debug(
                "%s: %s chose %s (score=%.1f of %d candidates)",
                self.name, unit_id, best.label, best_score, len(candidates),
            )

        plan.append(Action.end_turn())
        metadata["actions_count"] = len(plan) - 1
        return plan, metadata

    # ------------------------------------------------------------------#
    # Candidate generation
    # ------------------------------------------------------------------#
    def _candidates(self, state: GameState, unit: Unit, difficulty: Difficulty) -> List[Candidate]:
        candidates: List[Candidate] = []

        for enemy in valid_attack_targets(unit, state.units):
            candidates.append(
                Candidate(f"attack {enemy.id}", [Action.attack(unit.id, enemy.x, enemy.y)])
            )

        destinations = self.sample_destinations(
            legal_destinations(unit, state.units, state.board_size),
            difficulty,
        )

        for dest in destinations:
            moved_state = move_unit(state, unit.id, dest, self.side)
            moved = moved_state.get_unit(unit.id)
            for enemy in valid_attack_targets(moved, moved_state.units):
                candidates.append(
                    Candidate(
                        f"move {dest} then attack {enemy.id}",
                        [Action.move(unit.id, *dest), Action.attack(unit.id, enemy.x, enemy.y)],
                    )
                )

        for dest in destinations:
            candidates.append(Candidate(f"move {dest}", [Action.move(unit.id, *dest)]))

        candidates.append(Candidate("hold"))
        return candidates

    def sample_destinations(self, destinations: List[GridPos], difficulty: Difficulty) -> List[GridPos]:
        """
        Keep a difficulty-sized random subset, preserving generation order.

        At least one destination survives whenever any exist.
        """
        if difficulty is Difficulty.HARD or len(destinations) <= 1:
            return list(destinations)
        count = max(1, math.ceil(len(destinations) * difficulty.sample_fraction))
        picked = sorted(self.rng.sample(range(len(destinations)), count))
        return [destinations[i] for i in picked]
