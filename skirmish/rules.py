"""
Pure state transitions.

Each operation takes the current ``GameState`` and returns an updated copy,
or raises ``IllegalOperation`` leaving the input untouched. The same
functions back the human-facing operation API, the application of
externally supplied plans and the planner's internal simulation, so the
planner's predictions always match what really happens.
"""

from __future__ import annotations

from typing import Iterable, List, Optional, Sequence

from .core.actions import Action, ActionType
from .core.errors import IllegalOperation, TerminalState
from .core.geometry import in_bounds, unit_at
from .core.types import ActionValidation, Facing, GridPos, Phase, Side, SupportAxis
from .entities.support import PendingAttack, SupportLine
from .entities.unit import Unit
from .mechanics.combat import CombatOutcome, resolve_combat, validate_attack
from .mechanics.deployment import deployment_facing
from .mechanics.movement import apply_move, apply_rotation, can_rotate, move_cost, validate_move
from .mechanics.support import MAX_SUPPORT_LINES, validate_placement
from .mechanics.victory import check_elimination
from .state import GameState

TURN_PHASES = (Phase.PLAYER_TURN, Phase.COMPUTER_TURN)


# ----------------------------------------------------------------------#
# Gates
# ----------------------------------------------------------------------#
def _ensure(validation: ActionValidation) -> None:
    if not validation.valid:
        raise IllegalOperation(validation.code, validation.message)


def _require_phase(state: GameState, *phases: Phase) -> None:
    if state.phase is Phase.GAME_OVER:
        raise TerminalState()
    if state.phase not in phases:
        allowed = ", ".join(p.value for p in phases)
        raise IllegalOperation(
            "WRONG_PHASE",
            f"not allowed during {state.phase.value} (allowed: {allowed})",
        )


def _require_turn(state: GameState, side: Optional[Side]) -> None:
    """Turn operations act for the active side; ``side`` names the caller when known."""
    _require_phase(state, *TURN_PHASES)
    if side is not None and side is not state.active_side:
        raise IllegalOperation("WRONG_PHASE", f"it is not the {side.value} side's turn")


def _require_own_unit(state: GameState, unit_id: str) -> Unit:
    unit = state.get_unit(unit_id)
    if unit is None:
        raise IllegalOperation("UNKNOWN_UNIT", f"no live unit with id {unit_id!r}")
    if unit.side is not state.active_side:
        raise IllegalOperation("NOT_YOUR_UNIT", f"{unit.label()} does not belong to the active side")
    return unit


def _require_uncommitted(state: GameState, unit: Unit) -> None:
    pending = state.pending_attack
    if pending is not None and unit.id in pending.attacker_ids:
        raise IllegalOperation(
            "COMMITTED_TO_ATTACK",
            f"{unit.label()} is preparing to attack; cancel or remove it first",
        )


# ----------------------------------------------------------------------#
# Setup
# ----------------------------------------------------------------------#
def deploy_unit(state: GameState, side: Side, pos: GridPos) -> GameState:
    """Place the next unit of ``side``'s roster on ``pos`` inside its zone."""
    _require_phase(state, Phase.DEPLOYMENT)
    if not state.roster_left.get(side):
        raise IllegalOperation("ROSTER_EXHAUSTED", f"{side.value} has no units left to deploy")
    if not in_bounds(pos, state.board_size):
        raise IllegalOperation("OUT_OF_BOUNDS", f"{pos} is outside the board")
    if not state.zones[side].contains(pos):
        raise IllegalOperation("OUTSIDE_ZONE", f"{pos} is outside the {side.value} deployment zone")
    if unit_at(state.units, pos) is not None:
        raise IllegalOperation("OCCUPIED", f"{pos} is occupied")

    new = state.clone()
    kind = new.roster_left[side].pop(0)
    unit = Unit(
        id=new.next_unit_id(side),
        kind=kind,
        side=side,
        x=pos[0],
        y=pos[1],
        facing=deployment_facing(side),
    )
    new.units.append(unit)
    new.add_log(f"{unit.label()} deployed at {pos}")

    if all(not kinds for kinds in new.roster_left.values()):
        new.phase = Phase.SUPPORT_SELECTION
        new.add_log("Deployment complete. Choose 3 secret support lines.")
    return new


def assign_support_lines(state: GameState, side: Side, lines: Sequence[SupportLine]) -> GameState:
    """Non-interactive selection and confirmation used for the computer side."""
    _require_phase(state, Phase.DEPLOYMENT, Phase.SUPPORT_SELECTION)
    if side in state.support_confirmed:
        raise IllegalOperation("WRONG_PHASE", f"{side.value} support selection is already confirmed")
    if len(lines) != MAX_SUPPORT_LINES:
        raise IllegalOperation("SUPPORT_INCOMPLETE", f"exactly {MAX_SUPPORT_LINES} support lines are required")

    new = state.clone()
    new.support_lines = [line for line in new.support_lines if line.side is not side]
    for line in lines:
        if line.side is not side:
            raise IllegalOperation("NOT_YOUR_LINE", f"support line {line} belongs to {line.side.value}")
        _check_line_index(new, line.index)
        _ensure(validate_placement(new.support_lines, line))
        new.support_lines.append(line)
    new.support_confirmed.add(side)
    _maybe_start_battle(new)
    return new


def toggle_support_line(state: GameState, side: Side, axis: SupportAxis, index: int) -> GameState:
    """Remove the line if ``side`` already holds it, otherwise try to add it."""
    _require_phase(state, Phase.SUPPORT_SELECTION)
    if side in state.support_confirmed:
        raise IllegalOperation("WRONG_PHASE", f"{side.value} support selection is already confirmed")
    _check_line_index(state, index)

    candidate = SupportLine(side, axis, index)
    new = state.clone()
    if candidate in new.support_lines:
        new.support_lines.remove(candidate)
        return new

    _ensure(validate_placement(new.support_lines, candidate))
    new.support_lines.append(candidate)
    return new


def confirm_support_selection(state: GameState, side: Side) -> GameState:
    _require_phase(state, Phase.SUPPORT_SELECTION)
    if side in state.support_confirmed:
        raise IllegalOperation("WRONG_PHASE", f"{side.value} support selection is already confirmed")
    held = len(state.lines_for(side))
    if held != MAX_SUPPORT_LINES:
        raise IllegalOperation(
            "SUPPORT_INCOMPLETE",
            f"exactly {MAX_SUPPORT_LINES} support lines must be selected (have {held})",
        )
    new = state.clone()
    new.support_confirmed.add(side)
    _maybe_start_battle(new)
    return new


def _check_line_index(state: GameState, index: int) -> None:
    if not 1 <= index <= state.board_size:
        raise IllegalOperation("OUT_OF_BOUNDS", f"line index {index} is outside the board")


def _maybe_start_battle(state: GameState) -> None:
    if (
        state.phase is Phase.SUPPORT_SELECTION
        and state.support_confirmed >= set(Side)
    ):
        state.phase = Phase.PLAYER_TURN
        state.add_log("Battle begins. Player's turn.")


# ----------------------------------------------------------------------#
# Turn operations
# ----------------------------------------------------------------------#
def select_unit(state: GameState, unit_id: Optional[str], side: Optional[Side] = None) -> GameState:
    _require_turn(state, side)
    if unit_id is not None:
        _require_own_unit(state, unit_id)
    new = state.clone()
    new.selected_unit_id = unit_id
    return new


def move_unit(state: GameState, unit_id: str, target: GridPos, side: Optional[Side] = None) -> GameState:
    _require_turn(state, side)
    unit = _require_own_unit(state, unit_id)
    _require_uncommitted(state, unit)
    _ensure(validate_move(unit, target, state.units, state.board_size))
    cost = move_cost(unit, target)
    if cost > unit.moves_left:
        raise IllegalOperation(
            "INSUFFICIENT_MOVES",
            f"{unit.label()} needs {cost} move(s) but has {unit.moves_left}",
        )

    new = state.clone()
    apply_move(new.get_unit(unit_id), target)
    return new


def rotate_unit(state: GameState, unit_id: str, facing: Facing, side: Optional[Side] = None) -> GameState:
    _require_turn(state, side)
    unit = _require_own_unit(state, unit_id)
    _require_uncommitted(state, unit)
    if not can_rotate(unit):
        raise IllegalOperation("CANNOT_ROTATE", f"{unit.label()} needs at least 1 move left to rotate")

    new = state.clone()
    apply_rotation(new.get_unit(unit_id), facing)
    return new


def begin_attack(state: GameState, attacker_id: str, target_id: str, side: Optional[Side] = None) -> GameState:
    _require_turn(state, side)
    if state.pending_attack is not None:
        raise IllegalOperation("ATTACK_PENDING", "resolve or cancel the pending attack first")
    attacker = _require_own_unit(state, attacker_id)
    defender = _require_target(state, target_id)
    _ensure(validate_attack(attacker, defender, state.units))

    new = state.clone()
    new.pending_attack = PendingAttack(target_id=defender.id, attacker_ids=[attacker.id])
    return new


def add_attacker(state: GameState, attacker_id: str, side: Optional[Side] = None) -> GameState:
    _require_turn(state, side)
    pending = _require_pending(state)
    attacker = _require_own_unit(state, attacker_id)
    if attacker.id in pending.attacker_ids:
        raise IllegalOperation("COMMITTED_TO_ATTACK", f"{attacker.label()} is already in the attack")
    defender = _require_target(state, pending.target_id)
    _ensure(validate_attack(attacker, defender, state.units))

    new = state.clone()
    new.pending_attack.attacker_ids.append(attacker.id)
    return new


def remove_attacker(state: GameState, attacker_id: str, side: Optional[Side] = None) -> GameState:
    """Withdraw a unit; withdrawing the last one discards the pending attack."""
    _require_turn(state, side)
    pending = _require_pending(state)
    if attacker_id not in pending.attacker_ids:
        raise IllegalOperation("NOT_COMMITTED", f"{attacker_id!r} is not part of the pending attack")

    new = state.clone()
    new.pending_attack.attacker_ids.remove(attacker_id)
    if not new.pending_attack.attacker_ids:
        new.pending_attack = None
    return new


def cancel_attack(state: GameState, side: Optional[Side] = None) -> GameState:
    _require_turn(state, side)
    _require_pending(state)
    new = state.clone()
    new.pending_attack = None
    new.add_log("Attack cancelled.")
    return new


def resolve_attack(state: GameState, side: Optional[Side] = None) -> GameState:
    """Resolve the pending attack with every staged attacker."""
    _require_turn(state, side)
    pending = _require_pending(state)
    defender = _require_target(state, pending.target_id)
    attackers = [_require_own_unit(state, uid) for uid in pending.attacker_ids]
    for attacker in attackers:
        _ensure(validate_attack(attacker, defender, state.units))

    new = state.clone()
    new.pending_attack = None
    _fight(new, [new.get_unit(a.id) for a in attackers], new.get_unit(defender.id))
    return new


def attack(state: GameState, unit_id: str, target: GridPos, side: Optional[Side] = None) -> GameState:
    """Single-unit attack on the unit standing at ``target``."""
    _require_turn(state, side)
    if state.pending_attack is not None:
        raise IllegalOperation("ATTACK_PENDING", "resolve or cancel the pending attack first")
    attacker = _require_own_unit(state, unit_id)
    defender = unit_at(state.units, target)
    if defender is None:
        raise IllegalOperation("UNKNOWN_UNIT", f"no unit at {target}")
    _ensure(validate_attack(attacker, defender, state.units))

    new = state.clone()
    _fight(new, [new.get_unit(unit_id)], new.get_unit(defender.id))
    return new


def end_turn(state: GameState, side: Optional[Side] = None) -> GameState:
    """
    Hand the turn to the other side.

    The incoming side's budgets are refreshed; any pending attack and the
    selection are cleared.
    """
    _require_turn(state, side)
    new = state.clone()
    incoming = new.active_side.opponent
    for unit in new.units_of(incoming):
        unit.reset_budget()
    new.pending_attack = None
    new.selected_unit_id = None
    new.phase = Phase.turn_of(incoming)
    new.turn += 1
    new.add_log(f"{incoming.value.capitalize()}'s turn.")
    return new


def _require_target(state: GameState, target_id: str) -> Unit:
    defender = state.get_unit(target_id)
    if defender is None:
        raise IllegalOperation("UNKNOWN_UNIT", f"no live unit with id {target_id!r}")
    return defender


def _require_pending(state: GameState) -> PendingAttack:
    if state.pending_attack is None:
        raise IllegalOperation("NO_PENDING_ATTACK", "no attack is being prepared")
    return state.pending_attack


def _fight(state: GameState, attackers: List[Unit], defender: Unit) -> CombatOutcome:
    """Resolve combat in place on an already cloned state."""
    defender_side = defender.side
    outcome = resolve_combat(
        attackers,
        defender,
        state.lines_for(attackers[0].side),
        state.lines_for(defender_side),
    )
    for unit in attackers:
        unit.attacks_left = 0

    removed = set(outcome.removed_ids)
    state.units = [u for u in state.units if u.id not in removed]
    if state.selected_unit_id in removed:
        state.selected_unit_id = None
    state.last_combat = outcome
    state.combat_count += 1
    state.add_log(outcome.log)

    victory = check_elimination(state.units)
    if victory.is_game_over:
        state.phase = Phase.GAME_OVER
        state.winner = victory.winner
        state.game_over_reason = victory.reason
        state.pending_attack = None
        state.add_log(victory.reason)
    return outcome


# ----------------------------------------------------------------------#
# Action lists
# ----------------------------------------------------------------------#
def simulate_action(state: GameState, action: Action, side: Optional[Side] = None) -> GameState:
    """Apply one plan step. Raises ``IllegalOperation`` when it is not legal now."""
    if action.type is ActionType.MOVE:
        return move_unit(state, action.unit_id, action.target, side)
    if action.type is ActionType.ROTATE:
        return rotate_unit(state, action.unit_id, action.facing, side)
    if action.type is ActionType.ATTACK:
        return attack(state, action.unit_id, action.target, side)
    if action.type is ActionType.END_TURN:
        return end_turn(state, side)
    raise IllegalOperation("UNKNOWN_ACTION", f"unsupported action type {action.type}")


def simulate_sequence(state: GameState, actions: Iterable[Action], side: Optional[Side] = None) -> GameState:
    """Apply several steps; the first illegal one raises."""
    for action in actions:
        state = simulate_action(state, action, side)
    return state
