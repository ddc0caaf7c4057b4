"""Rule modules: movement, combat, support lines, deployment and victory."""

from .movement import (
    apply_move,
    can_rotate,
    is_valid_move,
    legal_destinations,
    move_cost,
    validate_move,
)
from .combat import (
    AttackerContribution,
    CombatOutcome,
    base_strength,
    can_attack,
    charge_bonus,
    flank_bonus,
    is_engaged,
    resolve_combat,
    valid_attack_targets,
    validate_attack,
)
from .support import (
    MAX_SUPPORT_LINES,
    choose_computer_lines,
    is_valid_placement,
    support_bonus,
    validate_placement,
)
from .deployment import DEFAULT_ROSTER, default_zone, deployment_facing
from .victory import VictoryResult, check_elimination

__all__ = [
    "apply_move",
    "can_rotate",
    "is_valid_move",
    "legal_destinations",
    "move_cost",
    "validate_move",
    "AttackerContribution",
    "CombatOutcome",
    "base_strength",
    "can_attack",
    "charge_bonus",
    "flank_bonus",
    "is_engaged",
    "resolve_combat",
    "valid_attack_targets",
    "validate_attack",
    "MAX_SUPPORT_LINES",
    "choose_computer_lines",
    "is_valid_placement",
    "support_bonus",
    "validate_placement",
    "DEFAULT_ROSTER",
    "default_zone",
    "deployment_facing",
    "VictoryResult",
    "check_elimination",
]
