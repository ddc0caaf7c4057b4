"""
Core enums and small value types shared by every layer of the engine.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

# 1-based (x, y) board coordinate
GridPos = Tuple[int, int]


class Side(Enum):
    """Owner of a unit or support line."""

    PLAYER = "player"
    COMPUTER = "computer"

    @property
    def opponent(self) -> "Side":
        return Side.COMPUTER if self is Side.PLAYER else Side.PLAYER


class Facing(Enum):
    """Compass facing. Values follow clockwise order starting at north."""

    NORTH = 0
    EAST = 1
    SOUTH = 2
    WEST = 3

    @property
    def vector(self) -> GridPos:
        return _FACING_VECTORS[self]

    def rotated(self, direction: "RotateDir") -> "Facing":
        """Turn 90 degrees (left = counter-clockwise)."""
        step = -1 if direction is RotateDir.LEFT else 1
        return Facing((self.value + step) % 4)


_FACING_VECTORS = {
    Facing.NORTH: (0, -1),
    Facing.EAST: (1, 0),
    Facing.SOUTH: (0, 1),
    Facing.WEST: (-1, 0),
}


class RotateDir(Enum):
    LEFT = "left"
    RIGHT = "right"


class UnitKind(Enum):
    """Unit types and their static stats."""

    INFANTRY = "Infantry"
    ARCHER = "Archer"
    CAVALRY = "Cavalry"

    @property
    def max_moves(self) -> int:
        return 2 if self is UnitKind.CAVALRY else 1

    @property
    def is_ranged(self) -> bool:
        return self is UnitKind.ARCHER

    @property
    def worth(self) -> int:
        """Relative material value used by the evaluator."""
        return _UNIT_WORTH[self]


_UNIT_WORTH = {
    UnitKind.CAVALRY: 5,
    UnitKind.ARCHER: 4,
    UnitKind.INFANTRY: 2,
}


class SupportAxis(Enum):
    ROW = "row"
    COL = "col"


class Phase(Enum):
    """Session phase; governs which operations are callable."""

    DEPLOYMENT = "deployment"
    SUPPORT_SELECTION = "support_selection"
    PLAYER_TURN = "player_turn"
    COMPUTER_TURN = "computer_turn"
    GAME_OVER = "game_over"

    @property
    def active_side(self) -> Optional[Side]:
        if self is Phase.PLAYER_TURN:
            return Side.PLAYER
        if self is Phase.COMPUTER_TURN:
            return Side.COMPUTER
        return None

    @staticmethod
    def turn_of(side: Side) -> "Phase":
        return Phase.PLAYER_TURN if side is Side.PLAYER else Phase.COMPUTER_TURN


class Difficulty(Enum):
    """Planner search breadth."""

    RANDOM = "random"
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"

    @property
    def sample_fraction(self) -> float:
        return _SAMPLE_FRACTIONS[self]


_SAMPLE_FRACTIONS = {
    Difficulty.RANDOM: 0.1,
    Difficulty.EASY: 0.2,
    Difficulty.MEDIUM: 0.5,
    Difficulty.HARD: 1.0,
}


class CombatWinner(Enum):
    ATTACKER = "attacker"
    DEFENDER = "defender"
    TIE = "tie"


@dataclass(frozen=True)
class Zone:
    """Inclusive rectangle of tiles a side may deploy into."""

    min_x: int
    max_x: int
    min_y: int
    max_y: int

    def contains(self, pos: GridPos) -> bool:
        x, y = pos
        return self.min_x <= x <= self.max_x and self.min_y <= y <= self.max_y

    def tiles(self) -> list[GridPos]:
        """All tiles in row-major order."""
        return [
            (x, y)
            for y in range(self.min_y, self.max_y + 1)
            for x in range(self.min_x, self.max_x + 1)
        ]

    def to_dict(self) -> dict:
        return {"min_x": self.min_x, "max_x": self.max_x, "min_y": self.min_y, "max_y": self.max_y}

    @classmethod
    def from_dict(cls, data: dict) -> "Zone":
        return cls(
            min_x=data["min_x"],
            max_x=data["max_x"],
            min_y=data["min_y"],
            max_y=data["max_y"],
        )


@dataclass(frozen=True)
class ActionValidation:
    """Outcome of a legality check: valid, or a reason code and message."""

    valid: bool
    code: str = "OK"
    message: str = ""

    @classmethod
    def success(cls, message: str = "") -> "ActionValidation":
        return cls(True, "OK", message)

    @classmethod
    def fail(cls, code: str, message: str) -> "ActionValidation":
        return cls(False, code, message)

    def __bool__(self) -> bool:
        return self.valid
