"""
SkirmishEnv - session owner and inbound operation API.

Usage:
    from skirmish import SkirmishEnv, create_default_scenario

    env = SkirmishEnv()
    env.reset(create_default_scenario(seed=1))

    for pos in [(3, 6), (4, 6), (5, 6), (3, 7), (4, 7), (5, 7)]:
        env.place_unit(pos)
    for index in (3, 4, 5):
        env.toggle_support_line(SupportAxis.COL, index)
    env.confirm_support_selection()

    env.move("player-7", 3, 5)
    env.end_turn()

The environment holds exactly one ``GameState``. Every operation runs the
matching pure transition from ``skirmish.rules`` and commits the returned
state only on success, so a rejected call leaves the session unchanged.
"""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterable, List, Optional

from infra.logger import get_logger
from . import rules
from .core.actions import Action, ActionType
from .core.errors import IllegalOperation, TerminalState, UntrustedActionRejected
from .core.types import Phase, RotateDir, Side, SupportAxis
from .mechanics.combat import CombatOutcome
from .mechanics.deployment import shuffled_placements
from .mechanics.support import choose_computer_lines
from .scenario import Scenario
from .state import GameState

logger = get_logger(__name__)


@dataclass
class ActionListReport:
    """
    What happened while applying an action list for one side.

    Attributes:
        applied: Actions that passed validation and were applied
        rejected: Actions dropped because they were illegal at that point
        combats: Combat outcomes produced by applied attacks
        ended_turn: Whether the turn was handed over
    """

    side: Side
    applied: List[Action] = field(default_factory=list)
    rejected: List[UntrustedActionRejected] = field(default_factory=list)
    combats: List[CombatOutcome] = field(default_factory=list)
    ended_turn: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "side": self.side.value,
            "applied": [a.to_dict() for a in self.applied],
            "rejected": [r.to_dict() for r in self.rejected],
            "combats": [c.to_dict() for c in self.combats],
            "ended_turn": self.ended_turn,
        }


class SkirmishEnv:
    """
    Single-session game engine.

    The presentation layer calls the operation methods for the human side;
    the computer side's plan is applied through ``apply_action_list``.
    Every operation returns the committed state or raises
    ``IllegalOperation`` (``TerminalState`` once the game is over).

    Attributes:
        state: Current authoritative state (None before reset())
        scenario: Configuration the session was started from
    """

    def __init__(self):
        self.state: Optional[GameState] = None
        self.scenario: Optional[Scenario] = None
        self.rng = random.Random()

    def reset(self, scenario: Scenario | Dict[str, Any]) -> GameState:
        """
        Start a new session.

        The computer deploys its roster into a shuffled zone and picks its
        support lines immediately; both stay hidden from the player.
        """
        scenario_obj = scenario.clone() if isinstance(scenario, Scenario) else Scenario.from_dict(scenario)
        self.scenario = scenario_obj
        self.rng = random.Random(scenario_obj.seed)

        state = GameState(
            board_size=scenario_obj.board_size,
            zones=dict(scenario_obj.zones),
            difficulty=scenario_obj.difficulty,
            roster_left={side: list(scenario_obj.roster) for side in Side},
        )

        placements = shuffled_placements(state.zones[Side.COMPUTER], scenario_obj.roster, self.rng)
        for pos in placements:
            state = rules.deploy_unit(state, Side.COMPUTER, pos)
        lines = choose_computer_lines(Side.COMPUTER, self.rng, state.board_size)
        state = rules.assign_support_lines(state, Side.COMPUTER, lines)
        state.add_log(f"Place your units in the player zone ({len(scenario_obj.roster)} to deploy).")

        self.state = state
        logger.info(
            "Session started: board=%dx%d difficulty=%s seed=%s",
            state.board_size,
            state.board_size,
            state.difficulty.value,
            scenario_obj.seed,
        )
        return state

    # ------------------------------------------------------------------#
    # Setup operations
    # ------------------------------------------------------------------#
    def place_unit(self, pos: tuple[int, int], side: Side = Side.PLAYER) -> GameState:
        return self._commit("place_unit", lambda s: rules.deploy_unit(s, side, tuple(pos)))

    def toggle_support_line(self, axis: SupportAxis, index: int, side: Side = Side.PLAYER) -> GameState:
        return self._commit("toggle_support_line", lambda s: rules.toggle_support_line(s, side, axis, index))

    def confirm_support_selection(self, side: Side = Side.PLAYER) -> GameState:
        return self._commit("confirm_support_selection", lambda s: rules.confirm_support_selection(s, side))

    # ------------------------------------------------------------------#
    # Turn operations (rejected unless ``side`` is the active side)
    # ------------------------------------------------------------------#
    def select_unit(self, unit_id: Optional[str], side: Side = Side.PLAYER) -> GameState:
        return self._commit("select_unit", lambda s: rules.select_unit(s, unit_id, side))

    def move(self, unit_id: str, x: int, y: int, side: Side = Side.PLAYER) -> GameState:
        return self._commit("move", lambda s: rules.move_unit(s, unit_id, (x, y), side))

    def rotate(self, unit_id: str, direction: RotateDir, side: Side = Side.PLAYER) -> GameState:
        def _rotate(s: GameState) -> GameState:
            unit = s.get_unit(unit_id)
            if unit is None:
                raise IllegalOperation("UNKNOWN_UNIT", f"no live unit with id {unit_id!r}")
            return rules.rotate_unit(s, unit_id, unit.facing.rotated(direction), side)

        return self._commit("rotate", _rotate)

    def begin_attack(self, attacker_id: str, target_id: str, side: Side = Side.PLAYER) -> GameState:
        return self._commit("begin_attack", lambda s: rules.begin_attack(s, attacker_id, target_id, side))

    def add_attacker(self, attacker_id: str, side: Side = Side.PLAYER) -> GameState:
        return self._commit("add_attacker", lambda s: rules.add_attacker(s, attacker_id, side))

    def remove_attacker(self, attacker_id: str, side: Side = Side.PLAYER) -> GameState:
        return self._commit("remove_attacker", lambda s: rules.remove_attacker(s, attacker_id, side))

    def resolve_attack(self, side: Side = Side.PLAYER) -> GameState:
        return self._commit("resolve_attack", lambda s: rules.resolve_attack(s, side))

    def cancel_attack(self, side: Side = Side.PLAYER) -> GameState:
        return self._commit("cancel_attack", lambda s: rules.cancel_attack(s, side))

    def end_turn(self, side: Side = Side.PLAYER) -> GameState:
        return self._commit("end_turn", lambda s: rules.end_turn(s, side))

    # ------------------------------------------------------------------#
    # Plans from agents / external move sources
    # ------------------------------------------------------------------#
    def apply_action_list(self, actions: Iterable[Action], side: Side) -> ActionListReport:
        """
        Apply an ordered plan for ``side``, re-validating every action.

        Illegal actions are dropped and processing continues with the next
        one. The turn is handed over at the end-turn marker, or when the list
        runs out without one. Processing stops early if the game ends.
        """
        state = self._require_state()
        if state.active_side is not side:
            if state.is_game_over:
                raise TerminalState()
            raise IllegalOperation("WRONG_PHASE", f"it is not the {side.value} side's turn")

        report = ActionListReport(side=side)
        for action in actions:
            if self.state.is_game_over:
                break
            if action.is_end_turn:
                break
            try:
                self._commit(str(action), lambda s, a=action: rules.simulate_action(s, a, side))
            except IllegalOperation as exc:
                report.rejected.append(UntrustedActionRejected(action, exc.code, exc.message))
                logger.info("Dropped %s from %s plan: %s", action, side.value, exc)
                continue
            report.applied.append(action)
            if action.type is ActionType.ATTACK and self.state.last_combat is not None:
                report.combats.append(self.state.last_combat)

        if not self.state.is_game_over:
            self.end_turn(side)
            report.ended_turn = True
        return report

    # ------------------------------------------------------------------#
    # Queries
    # ------------------------------------------------------------------#
    def snapshot(self, viewer: Optional[Side] = Side.PLAYER) -> Dict[str, Any]:
        return self._require_state().to_dict(viewer=viewer)

    @property
    def phase(self) -> Phase:
        return self._require_state().phase

    @property
    def is_game_over(self) -> bool:
        return self.state is not None and self.state.is_game_over

    @property
    def winner(self) -> Optional[Side]:
        return self.state.winner if self.state else None

    # ------------------------------------------------------------------#
    # Internals
    # ------------------------------------------------------------------#
    def _require_state(self) -> GameState:
        if self.state is None:
            raise RuntimeError("Must call reset() before playing")
        return self.state

    def _commit(self, name: str, transition: Callable[[GameState], GameState]) -> GameState:
        before = self._require_state()
        try:
            after = transition(before)
        except IllegalOperation as exc:
            logger.info("Rejected %s: %s", name, exc)
            raise

        self.state = after
        logger.debug("Applied %s (phase=%s)", name, after.phase.value)
        if after.combat_count != before.combat_count:
            logger.info("%s", after.last_combat.log)
        if after.is_game_over and not before.is_game_over:
            winner = after.winner.value if after.winner else "nobody"
            logger.info("Game over after turn %d: %s wins (%s)", after.turn, winner, after.game_over_reason)
        return after
