"""
Base agent interface for computer-controlled sides.

All agents must implement this interface to produce a turn plan.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List

from skirmish.core.actions import Action
from skirmish.core.types import Side
from skirmish.state import GameState


class BaseAgent(ABC):
    """
    Abstract base class for all agents.

    An agent looks at the current state and returns an ordered action list
    for its side, terminated by an end-turn marker. The list is applied by
    ``SkirmishEnv.apply_action_list``, which re-validates every entry, so an
    agent can never bypass the rules.

    Subclasses must implement:
    - get_actions(): Produce the action list for one turn

    Attributes:
        side: The side this agent controls
        name: Agent name for logging/identification
    """

    def __init__(self, side: Side, name: str = None):
        """
        Initialize the agent.

        Args:
            side: Side this agent controls
            name: Optional name for the agent (defaults to class name)
        """
        self.side = side
        self.name = name or self.__class__.__name__

    @abstractmethod
    def get_actions(
        self,
        state: GameState,
        **kwargs: Any,
    ) -> tuple[List[Action], Dict[str, Any]]:
        """
        Plan one turn.

        Called once at the start of the agent's turn. The state must be
        treated as read-only; agents that simulate should work on
        ``state.clone()`` or use ``skirmish.rules`` which never mutate their
        input.

        Args:
            state: Current game state (the agent's side is active)
            **kwargs: Reserved for future fields

        Returns:
            Tuple of:
                - Ordered list of actions ending with ``Action.end_turn()``
                - Metadata dict (reasoning/scores/errors/etc.)
        """
        pass

    def __str__(self) -> str:
        return f"{self.name} ({self.side.name})"

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(side={self.side.name}, name='{self.name}')"
