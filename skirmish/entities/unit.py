from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict

from ..core.types import Facing, GridPos, Side, UnitKind


@dataclass
class Unit:
    """
    A single piece on the board.

    Budgets are per turn: ``moves_left`` is spent by moving (1 per tile) and
    gates rotation, ``attacks_left`` is spent by taking part in a combat.
    """

    id: str
    kind: UnitKind
    side: Side
    x: int
    y: int
    facing: Facing
    max_moves: int = field(default=-1)
    moves_left: int = field(default=-1)
    attacks_left: int = 1

    def __post_init__(self):
        """Fill kind-derived budgets and check their ranges."""
        if self.max_moves < 0:
            self.max_moves = self.kind.max_moves
        if self.moves_left < 0:
            self.moves_left = self.max_moves
        if not 0 <= self.moves_left <= self.max_moves:
            raise ValueError(
                f"moves_left must be in [0, {self.max_moves}]: {self.moves_left}"
            )
        if not 0 <= self.attacks_left <= 1:
            raise ValueError(f"attacks_left must be 0 or 1: {self.attacks_left}")

    @property
    def pos(self) -> GridPos:
        return self.x, self.y

    def reset_budget(self) -> None:
        self.moves_left = self.max_moves
        self.attacks_left = 1

    def label(self) -> str:
        """Human-readable label, e.g. ``Cavalry#player-5(PLAYER)``."""
        return f"{self.kind.value}#{self.id}({self.side.name})"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "kind": self.kind.value,
            "side": self.side.value,
            "position": {"x": self.x, "y": self.y},
            "facing": self.facing.name,
            "moves_left": self.moves_left,
            "max_moves": self.max_moves,
            "attacks_left": self.attacks_left,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Unit":
        return cls(
            id=data["id"],
            kind=UnitKind(data["kind"]),
            side=Side(data["side"]),
            x=data["position"]["x"],
            y=data["position"]["y"],
            facing=Facing[data["facing"]],
            max_moves=data.get("max_moves", -1),
            moves_left=data.get("moves_left", -1),
            attacks_left=data.get("attacks_left", 1),
        )

    def __str__(self) -> str:
        return f"{self.label()} at {self.pos} facing {self.facing.name}"


def unit_order_key(unit: Unit) -> tuple:
    """Deterministic processing order: by id, numeric suffix compared as a number."""
    prefix, _, suffix = unit.id.rpartition("-")
    return (prefix, int(suffix)) if suffix.isdigit() else (unit.id, -1)
