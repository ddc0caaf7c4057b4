"""
Helper utilities for converting game state into render-friendly payloads.

The presentation layer expects plain JSON data and must not re-derive the
rules, so the builder also ships the highlight sets it needs: legal
destinations and targets of the selected unit, units that may still join
the pending attack and free deployment tiles.
"""

from __future__ import annotations

from typing import Any, Dict, List, Set

from ..core.geometry import unit_at
from ..core.types import Phase, Side
from ..mechanics.combat import base_strength, can_attack, valid_attack_targets
from ..mechanics.movement import can_rotate, legal_destinations
from ..entities.unit import Unit
from ..state import GameState


class RenderStateBuilder:
    """Build JSON-serializable render state snapshots."""

    @staticmethod
    def build(
        state: GameState,
        viewer: Side = Side.PLAYER,
        reveal_opponent_support: bool = False,
    ) -> Dict[str, Any]:
        """
        Convert the game state into a JSON-friendly dict for ``viewer``.

        Args:
            state: Current game state
            viewer: Side the snapshot is rendered for
            reveal_opponent_support: Include the other side's support lines

        Returns:
            Dictionary ready to send to the browser
        """
        payload = state.to_dict(viewer=None if reveal_opponent_support else viewer)
        payload["viewer"] = viewer.value
        payload["strength"] = {
            unit.id: base_strength(unit, state.lines_for(unit.side))
            for unit in state.units
            if unit.side is viewer or reveal_opponent_support
        }
        payload["highlights"] = RenderStateBuilder._highlights(state, viewer)
        return payload

    @staticmethod
    def _highlights(state: GameState, viewer: Side) -> Dict[str, Any]:
        highlights: Dict[str, Any] = {
            "valid_moves": [],
            "valid_targets": [],
            "can_rotate": False,
            "can_join_attack": [],
            "deploy_tiles": [],
        }

        if state.phase is Phase.DEPLOYMENT and state.roster_left.get(viewer):
            highlights["deploy_tiles"] = [
                list(tile)
                for tile in state.zones[viewer].tiles()
                if unit_at(state.units, tile) is None
            ]
            return highlights

        if state.active_side is not viewer:
            return highlights

        selected = state.get_unit(state.selected_unit_id) if state.selected_unit_id else None
        committed = set(state.pending_attack.attacker_ids) if state.pending_attack else set()

        if selected is not None and selected.side is viewer:
            if selected.id not in committed:
                highlights["valid_moves"] = [
                    list(tile) for tile in legal_destinations(selected, state.units, state.board_size)
                ]
                highlights["can_rotate"] = can_rotate(selected)
            highlights["valid_targets"] = [
                enemy.id for enemy in valid_attack_targets(selected, state.units)
            ]

        if state.pending_attack is not None:
            target = state.get_unit(state.pending_attack.target_id)
            if target is not None:
                highlights["can_join_attack"] = RenderStateBuilder._joiners(state, viewer, committed, target)
        return highlights

    @staticmethod
    def _joiners(state: GameState, viewer: Side, committed: Set[str], target: Unit) -> List[str]:
        return [
            unit.id
            for unit in state.units_of(viewer)
            if unit.id not in committed and can_attack(unit, target, state.units)
        ]
