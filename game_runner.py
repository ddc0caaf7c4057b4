from __future__ import annotations

from typing import Any, Dict, Optional

from agents import PreparedAgent, create_agent_from_spec
from infra.logger import get_logger
from skirmish import RenderStateBuilder, Scenario, SkirmishEnv
from skirmish.core.types import Side
from skirmish.state import GameState

from game_frame import TurnReport

logger = get_logger(__name__)


class GameRunner:
    """
    Session wrapper used by the HTTP layer.

    The human drives the player side through ``env``; the computer side is
    played by the agent named in the scenario via play_computer_turn().
    """

    def __init__(self, scenario: Scenario):
        self.scenario = scenario.clone()
        self.env = SkirmishEnv()
        self.env.reset(self.scenario)
        self._computer = self._agent_from_scenario(self.scenario, Side.COMPUTER)

    # ------------------------------------------------------------------#
    # Properties
    # ------------------------------------------------------------------#
    @property
    def state(self) -> GameState:
        return self.env.state

    @property
    def done(self) -> bool:
        return self.env.is_game_over

    @property
    def turn(self) -> int:
        return self.env.state.turn

    @property
    def computer(self) -> PreparedAgent:
        return self._computer

    # ------------------------------------------------------------------#
    # Core API
    # ------------------------------------------------------------------#
    def snapshot(self, viewer: Side = Side.PLAYER) -> Dict[str, Any]:
        """Render state for ``viewer``; the opponent's support lines are revealed once the game is over."""
        return RenderStateBuilder.build(
            self.env.state,
            viewer=viewer,
            reveal_opponent_support=self.env.is_game_over,
        )

    def play_computer_turn(self, **injections: Any) -> TurnReport:
        """
        Ask the computer agent for a plan and apply it.

        Illegal entries in the plan are dropped by the engine; the turn is
        handed back to the player unless the game ended.

        Raises:
            IllegalOperation: If it is not the computer's turn
        """
        state = self.env.state
        actions, metadata = self._computer.agent.get_actions(state, **injections)
        logger.debug("%s planned %d action(s)", self._computer.agent.name, len(actions))

        report = self.env.apply_action_list(actions, Side.COMPUTER)
        if report.rejected:
            logger.info("%d computer action(s) rejected", len(report.rejected))

        return TurnReport(
            turn=self.env.state.turn,
            actions=actions,
            report=report,
            snapshot=self.snapshot(),
            action_metadata=metadata,
            done=self.done,
        )

    # Helpers
    def _agent_from_scenario(self, scenario: Scenario, side: Side) -> PreparedAgent:
        spec = scenario.agent_for(side)
        if spec is None:
            raise ValueError(f"No AgentSpec found for side {side.value}")
        overrides: Dict[str, Optional[int]] = {}
        if "seed" not in spec.params:
            overrides["seed"] = scenario.seed
        return create_agent_from_spec(spec, **overrides)
