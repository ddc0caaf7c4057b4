from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List

from ..core.types import Side, SupportAxis


@dataclass(frozen=True)
class SupportLine:
    """A secretly chosen row or column granting +1 strength to its owner's units."""

    side: Side
    axis: SupportAxis
    index: int

    def covers(self, x: int, y: int) -> bool:
        if self.axis is SupportAxis.ROW:
            return self.index == y
        return self.index == x

    def to_dict(self) -> Dict[str, Any]:
        return {"side": self.side.value, "axis": self.axis.value, "index": self.index}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SupportLine":
        return cls(
            side=Side(data["side"]),
            axis=SupportAxis(data["axis"]),
            index=data["index"],
        )

    def __str__(self) -> str:
        return f"{self.axis.value.upper()} {self.index}"


@dataclass
class PendingAttack:
    """Attackers staged against one target before resolution."""

    target_id: str
    attacker_ids: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {"target_id": self.target_id, "attacker_ids": list(self.attacker_ids)}
