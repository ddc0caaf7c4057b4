from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from skirmish.core.types import Side


@dataclass
class AgentSpec:
    """
    Declarative agent configuration stored in a scenario.

    Attributes:
        side: Side the agent plays
        type: Registered agent type ("greedy", "random", "llm")
        name: Optional display name
        params: Extra constructor keyword arguments
    """

    side: Side
    type: str
    name: Optional[str] = None
    params: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "side": self.side.value,
            "type": self.type,
            "name": self.name,
            "params": dict(self.params),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AgentSpec":
        return cls(
            side=Side(data["side"]),
            type=data["type"],
            name=data.get("name"),
            params=dict(data.get("params") or {}),
        )
