"""Core types, actions, errors and geometry."""

from .types import (
    ActionValidation,
    CombatWinner,
    Difficulty,
    Facing,
    GridPos,
    Phase,
    RotateDir,
    Side,
    SupportAxis,
    UnitKind,
    Zone,
)
from .actions import Action, ActionType, parse_action_list
from .errors import IllegalOperation, SkirmishError, TerminalState, UntrustedActionRejected
from .geometry import facing_towards, in_bounds, manhattan, unit_at, vector_for

__all__ = [
    "ActionValidation",
    "CombatWinner",
    "Difficulty",
    "Facing",
    "GridPos",
    "Phase",
    "RotateDir",
    "Side",
    "SupportAxis",
    "UnitKind",
    "Zone",
    "Action",
    "ActionType",
    "parse_action_list",
    "IllegalOperation",
    "SkirmishError",
    "TerminalState",
    "UntrustedActionRejected",
    "facing_towards",
    "in_bounds",
    "manhattan",
    "unit_at",
    "vector_for",
]
