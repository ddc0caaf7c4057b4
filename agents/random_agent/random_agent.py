"""
Random agent implementation for testing and baseline comparison.

This agent makes random legal decisions for all its units.
"""

import random
from typing import Any, Dict, List, Optional

from skirmish.core.actions import Action
from skirmish.core.errors import IllegalOperation
from skirmish.core.types import Side
from skirmish.entities.unit import unit_order_key
from skirmish.mechanics.combat import valid_attack_targets
from skirmish.mechanics.movement import legal_destinations
from skirmish.rules import simulate_action
from skirmish.state import GameState
from ..base_agent import BaseAgent
from ..registry import register_agent


@register_agent("random")
class RandomAgent(BaseAgent):
    """
    Agent that takes random actions.

    Decision process:
    - For each unit, sample uniformly from holding, its legal destinations
      and its attackable enemies.

    This serves as a baseline for comparing the planner.
    """

    def __init__(
        self,
        side: Side,
        name: str = None,
        seed: Optional[int] = None,
        **_: Any,
    ):
        """
        Initialize random agent.

        Args:
            side: Side to control
            name: Agent name (default: "RandomAgent")
            seed: Random seed for reproducibility (None = random)
        """
        super().__init__(side, name)
        self.rng = random.Random(seed)

    def get_actions(
        self,
        state: GameState,
        **kwargs: Any,
    ) -> tuple[List[Action], Dict[str, Any]]:
        """
        Generate one random legal action per unit.

        Args:
            state: Current game state

        Returns:
            Tuple of (actions, metadata)
        """
        working = state.clone()
        actions: List[Action] = []

        if working.active_side is self.side:
            for unit in sorted(working.units_of(self.side), key=unit_order_key):
                if working.is_game_over:
                    break
                current = working.get_unit(unit.id)
                if current is None:
                    continue
                options: List[Optional[Action]] = [None]
                options += [Action.attack(current.id, e.x, e.y) for e in valid_attack_targets(current, working.units)]
                options += [
                    Action.move(current.id, x, y)
                    for x, y in legal_destinations(current, working.units, working.board_size)
                ]
                choice = self.rng.choice(options)
                if choice is None:
                    continue
                try:
                    working = simulate_action(working, choice, self.side)
                except IllegalOperation:
                    continue
                actions.append(choice)

        metadata = {
            "policy": "random",
            "actions_count": len(actions),
        }
        actions.append(Action.end_turn())
        return actions, metadata
