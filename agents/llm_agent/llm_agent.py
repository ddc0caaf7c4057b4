import json
from typing import Any, Dict, List, Optional

from infra.logger import get_logger
from skirmish.core.actions import Action, parse_action_list
from skirmish.core.types import Side
from skirmish.state import GameState, serialize_for_side
from .commander import build_commander
from ..base_agent import BaseAgent
from ..registry import register_agent

logger = get_logger(__name__)

USER_PROMPT_TEMPLATE = """
It is your turn ({side} side, turn {turn}). Here is the game state:
{state_json}
"""


@register_agent("llm")
class LLMAgent(BaseAgent):
    """
    External move source backed by a language model.

    The model sees the side-restricted state and returns structured orders,
    which are parsed as an untrusted action list. Any failure of the model
    call yields a plan that only ends the turn.
    """

    def __init__(
            self,
            side: Side,
            name: str = None,
            model: Optional[str] = None,
            commander: Any = None,
            **_: Any,
    ):
        """
        Args:
            side: Side to control
            name: Agent name (default: "LLMAgent")
            model: Model identifier passed to the commander
            commander: Prebuilt object with ``run_sync``; built lazily when None
        """
        super().__init__(side, name)
        self.model = model
        self._commander = commander

    @property
    def commander(self):
        if self._commander is None:
            self._commander = build_commander(self.model)
        return self._commander

    def get_actions(
            self,
            state: GameState,
            **kwargs: Any,
    ) -> tuple[List[Action], Dict[str, Any]]:
        prompt = USER_PROMPT_TEMPLATE.format(
            side=self.side.value,
            turn=state.turn,
            state_json=json.dumps(serialize_for_side(state, self.side), indent=2),
        )
        metadata: Dict[str, Any] = {"policy": "llm"}

        try:
            result = self.commander.run_sync(user_prompt=prompt)
            orders = result.output
        except Exception as exc:
            logger.exception("%s: model call failed, ending turn", self.name)
            metadata["error"] = str(exc)
            return [Action.end_turn()], metadata

        raw = [command.model_dump() for command in orders.actions]
        actions, errors = parse_action_list(raw)
        metadata["reasoning"] = orders.reasoning
        if errors:
            metadata["parse_errors"] = errors
            logger.info("%s: dropped %d malformed command(s)", self.name, len(errors))
        metadata["actions_count"] = len(actions) - 1
        return actions, metadata
