"""
Turn actions and the conservative parser for externally supplied plans.

An action list is the contract shared by the local planner and any external
move source: an ordered list of move / rotate / attack actions terminated by
an end-turn marker. Wire shape (one dict per action):

    {"action_type": "move",   "unit_id": "computer-1", "target": {"x": 4, "y": 3}}
    {"action_type": "rotate", "unit_id": "computer-1", "facing": "EAST"}
    {"action_type": "attack", "unit_id": "computer-1", "target": {"x": 4, "y": 4}}
    {"action_type": "end_turn"}
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from .types import Facing, GridPos


class ActionType(Enum):
    MOVE = "move"
    ROTATE = "rotate"
    ATTACK = "attack"
    END_TURN = "end_turn"


@dataclass(frozen=True)
class Action:
    """
    A single step of a turn plan.

    Attributes:
        type: Which operation to apply
        unit_id: Acting unit (None for END_TURN)
        target: Destination tile (MOVE) or defender tile (ATTACK)
        facing: Absolute facing to adopt (ROTATE)
    """

    type: ActionType
    unit_id: Optional[str] = None
    target: Optional[GridPos] = None
    facing: Optional[Facing] = None

    @classmethod
    def move(cls, unit_id: str, x: int, y: int) -> "Action":
        return cls(ActionType.MOVE, unit_id=unit_id, target=(x, y))

    @classmethod
    def rotate(cls, unit_id: str, facing: Facing) -> "Action":
        return cls(ActionType.ROTATE, unit_id=unit_id, facing=facing)

    @classmethod
    def attack(cls, unit_id: str, x: int, y: int) -> "Action":
        return cls(ActionType.ATTACK, unit_id=unit_id, target=(x, y))

    @classmethod
    def end_turn(cls) -> "Action":
        return cls(ActionType.END_TURN)

    @property
    def is_end_turn(self) -> bool:
        return self.type is ActionType.END_TURN

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"action_type": self.type.value}
        if self.unit_id is not None:
            data["unit_id"] = self.unit_id
        if self.target is not None:
            data["target"] = {"x": self.target[0], "y": self.target[1]}
        if self.facing is not None:
            data["facing"] = self.facing.name
        return data

    @classmethod
    def from_dict(cls, data: Any) -> "Action":
        """
        Strictly parse one action dict.

        Field presence is never trusted: every required field is checked for
        type and shape.

        Raises:
            ValueError: If the entry is malformed
        """
        if not isinstance(data, dict):
            raise ValueError(f"action must be an object, got {type(data).__name__}")

        raw_type = data.get("action_type")
        try:
            action_type = ActionType(raw_type)
        except ValueError:
            raise ValueError(f"unknown action_type {raw_type!r}") from None

        if action_type is ActionType.END_TURN:
            return cls.end_turn()

        unit_id = data.get("unit_id")
        if not isinstance(unit_id, str) or not unit_id:
            raise ValueError("unit_id must be a non-empty string")

        if action_type is ActionType.ROTATE:
            return cls.rotate(unit_id, _parse_facing(data))

        x, y = _parse_target(data.get("target"))
        if action_type is ActionType.MOVE:
            return cls.move(unit_id, x, y)
        return cls.attack(unit_id, x, y)

    def __str__(self) -> str:
        if self.type is ActionType.END_TURN:
            return "END_TURN"
        if self.type is ActionType.ROTATE:
            return f"ROTATE({self.unit_id} -> {self.facing.name})"
        return f"{self.type.name}({self.unit_id} -> {self.target})"


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _parse_target(raw: Any) -> GridPos:
    if not isinstance(raw, dict):
        raise ValueError("target must be an object with integer x and y")
    x, y = raw.get("x"), raw.get("y")
    # JSON numbers may arrive as floats; accept only integral ones
    if isinstance(x, float) and x.is_integer():
        x = int(x)
    if isinstance(y, float) and y.is_integer():
        y = int(y)
    if not (_is_int(x) and _is_int(y)):
        raise ValueError("target must be an object with integer x and y")
    return x, y


def _parse_facing(data: Dict[str, Any]) -> Facing:
    raw = data.get("facing", data.get("direction"))
    if isinstance(raw, str) and raw.upper() in Facing.__members__:
        return Facing[raw.upper()]
    if _is_int(raw) and 0 <= raw <= 3:
        return Facing(raw)
    raise ValueError(f"invalid facing {raw!r}")


def parse_action_list(raw: Any) -> Tuple[List[Action], List[str]]:
    """
    Parse an untrusted action list.

    Malformed entries are dropped with a reason. Parsing stops at the first
    end-turn marker, and one is appended if the source omitted it.

    Returns:
        (actions, errors)
    """
    actions: List[Action] = []
    errors: List[str] = []

    if not isinstance(raw, list):
        errors.append(f"action list must be an array, got {type(raw).__name__}")
        return [Action.end_turn()], errors

    for idx, entry in enumerate(raw):
        try:
            action = Action.from_dict(entry)
        except ValueError as exc:
            errors.append(f"entry {idx}: {exc}")
            continue
        actions.append(action)
        if action.is_end_turn:
            break

    if not actions or not actions[-1].is_end_turn:
        actions.append(Action.end_turn())
    return actions, errors
