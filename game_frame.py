from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional

from skirmish.core.actions import Action
from skirmish.environment import ActionListReport


@dataclass
class TurnReport:
    """
    Record of one computer turn, with helpers to serialize for transport.

    ``snapshot`` is the render state after the turn, taken for the player.
    """

    turn: int
    actions: List[Action]
    report: ActionListReport
    snapshot: Dict[str, Any]
    action_metadata: Optional[Mapping[str, Any]] = None
    done: bool = False

    def to_dict(self) -> Dict[str, Any]:
        """
        Serialize the report into a JSON-friendly dictionary.
        """
        frame: Dict[str, Any] = {
            "turn": self.turn,
            "planned": [a.to_dict() for a in self.actions],
            "result": self.report.to_dict(),
            "state": self.snapshot,
            "done": self.done,
        }
        if self.action_metadata is not None:
            frame["action_metadata"] = dict(self.action_metadata)
        return frame
