"""
GameState - the single authoritative aggregate of a session.

All mutation goes through the rule functions in ``skirmish.rules``, which
work on a clone and hand back the updated state, so a rejected operation
never leaves a partially applied change behind.
"""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Set

from .core.types import Difficulty, Phase, Side, UnitKind, Zone
from .entities.support import PendingAttack, SupportLine
from .entities.unit import Unit
from .mechanics.combat import CombatOutcome

MAX_LOG_ENTRIES = 200


@dataclass
class GameState:
    """
    Complete session state.

    Attributes:
        board_size: Side length N of the square board (tiles are 1..N)
        units: Live units of both sides
        support_lines: Support lines of both sides
        support_confirmed: Sides that have confirmed their support selection
        phase: Current phase
        winner: Winning side once the game is over
        pending_attack: Attack being staged by the active side
        selected_unit_id: Unit currently selected by the presentation layer
        difficulty: Planner search breadth for the computer side
        roster_left: Units each side still has to deploy, in placement order
        zones: Deployment zone per side
        turn: Number of completed turns
        log: Recent human-readable events (in memory only)
        last_combat: Most recent combat outcome
    """

    board_size: int
    zones: Dict[Side, Zone]
    units: List[Unit] = field(default_factory=list)
    support_lines: List[SupportLine] = field(default_factory=list)
    support_confirmed: Set[Side] = field(default_factory=set)
    phase: Phase = Phase.DEPLOYMENT
    winner: Optional[Side] = None
    game_over_reason: str = ""
    pending_attack: Optional[PendingAttack] = None
    selected_unit_id: Optional[str] = None
    difficulty: Difficulty = Difficulty.MEDIUM
    roster_left: Dict[Side, List[UnitKind]] = field(default_factory=dict)
    turn: int = 0
    log: List[str] = field(default_factory=list)
    last_combat: Optional[CombatOutcome] = None
    combat_count: int = 0
    next_unit_seq: int = 1

    # ------------------------------------------------------------------#
    # Queries
    # ------------------------------------------------------------------#
    def get_unit(self, unit_id: str) -> Optional[Unit]:
        return next((u for u in self.units if u.id == unit_id), None)

    def units_of(self, side: Side) -> List[Unit]:
        return [u for u in self.units if u.side is side]

    def lines_for(self, side: Side) -> List[SupportLine]:
        return [line for line in self.support_lines if line.side is side]

    @property
    def active_side(self) -> Optional[Side]:
        return self.phase.active_side

    @property
    def is_game_over(self) -> bool:
        return self.phase is Phase.GAME_OVER

    # ------------------------------------------------------------------#
    # Mutation helpers (used by the rule functions only)
    # ------------------------------------------------------------------#
    def clone(self) -> "GameState":
        return copy.deepcopy(self)

    def add_log(self, message: str) -> None:
        self.log.append(message)
        if len(self.log) > MAX_LOG_ENTRIES:
            del self.log[: len(self.log) - MAX_LOG_ENTRIES]

    def next_unit_id(self, side: Side) -> str:
        unit_id = f"{side.value}-{self.next_unit_seq}"
        self.next_unit_seq += 1
        return unit_id

    # ------------------------------------------------------------------#
    # Serialization
    # ------------------------------------------------------------------#
    def to_dict(self, viewer: Optional[Side] = None) -> Dict[str, Any]:
        """
        Serialize the state for rendering.

        Args:
            viewer: When given, support lines of the other side are omitted.
        """
        lines = self.support_lines if viewer is None else self.lines_for(viewer)
        return {
            "board_size": self.board_size,
            "phase": self.phase.value,
            "turn": self.turn,
            "difficulty": self.difficulty.value,
            "winner": self.winner.value if self.winner else None,
            "game_over_reason": self.game_over_reason,
            "units": [u.to_dict() for u in self.units],
            "support_lines": [line.to_dict() for line in lines],
            "support_confirmed": sorted(side.value for side in self.support_confirmed),
            "pending_attack": self.pending_attack.to_dict() if self.pending_attack else None,
            "selected_unit_id": self.selected_unit_id,
            "roster_left": {
                side.value: [kind.value for kind in kinds]
                for side, kinds in self.roster_left.items()
            },
            "zones": {side.value: zone.to_dict() for side, zone in self.zones.items()},
            "last_combat": self.last_combat.to_dict() if self.last_combat else None,
            "log": list(self.log),
        }

    def view_for(self, side: Side) -> Dict[str, Any]:
        """
        Serialization handed to an external move source acting for ``side``.

        Only the acting side's own support lines are revealed.
        """
        return {
            "acting_side": side.value,
            "board_size": self.board_size,
            "turn": self.turn,
            "units": [u.to_dict() for u in self.units],
            "support_lines": [line.to_dict() for line in self.lines_for(side)],
        }


def serialize_for_side(state: GameState, side: Side) -> Dict[str, Any]:
    return state.view_for(side)
