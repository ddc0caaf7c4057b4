"""
Combat rules.

This module handles:
- Attack legality (melee facing cone, archer ranged geometry)
- Strength computation (base, support, flank and charge bonuses)
- Combat resolution for a group of attackers against one defender

Everything here is pure: resolution reports who is removed, and the caller
applies the result to the state.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Sequence

from ..core.geometry import manhattan, unit_at
from ..core.types import ActionValidation, CombatWinner, UnitKind
from ..entities.support import SupportLine
from ..entities.unit import Unit
from .support import support_bonus

BASE_STRENGTH = 1


def base_strength(unit: Unit, lines: Iterable[SupportLine]) -> int:
    """Base value plus +1 for every own support line crossing the unit's tile."""
    return BASE_STRENGTH + support_bonus(unit, lines)


def flank_bonus(attacker: Unit, defender: Unit) -> int:
    """
    +1 unless the attacker stands exactly on the defender's front tile.

    Archers never receive the bonus.

    Examples:
        Defender at (4, 4) facing NORTH (front tile (4, 3)):
        attacker at (4, 3) -> 0, attacker at (5, 4) -> 1, attacker at (4, 5) -> 1
    """
    if attacker.kind is UnitKind.ARCHER:
        return 0
    d = (attacker.x - defender.x, attacker.y - defender.y)
    return 0 if d == defender.facing.vector else 1


def charge_bonus(attacker: Unit) -> int:
    """Cavalry committing unused movement to the impact gains +1."""
    return 1 if attacker.kind is UnitKind.CAVALRY and attacker.moves_left > 0 else 0


def is_engaged(unit: Unit, units: Iterable[Unit]) -> bool:
    """True when any enemy stands orthogonally adjacent to ``unit``."""
    return any(
        other.side is not unit.side and manhattan(unit.pos, other.pos) == 1
        for other in units
    )


def validate_attack(attacker: Unit, defender: Unit, units: Iterable[Unit]) -> ActionValidation:
    """
    Check whether ``attacker`` may attack ``defender`` right now.

    The defender must lie strictly inside the attacker's forward cone (positive
    dot product with the facing vector). Melee units then need distance 1.
    Archers fire at diagonal neighbours, or over an empty tile in a straight
    line, and never while engaged.
    """
    units = list(units)
    if attacker.attacks_left <= 0:
        return ActionValidation.fail("NO_ATTACKS_LEFT", f"{attacker.label()} has already attacked")
    if attacker.side is defender.side:
        return ActionValidation.fail("FRIENDLY_TARGET", f"{defender.label()} is a friendly unit")

    dx_raw = defender.x - attacker.x
    dy_raw = defender.y - attacker.y
    fx, fy = attacker.facing.vector
    if dx_raw * fx + dy_raw * fy <= 0:
        return ActionValidation.fail(
            "OUT_OF_CONE",
            f"{attacker.label()} is not facing {defender.label()}",
        )

    dx, dy = abs(dx_raw), abs(dy_raw)

    if attacker.kind is not UnitKind.ARCHER:
        if dx + dy == 1:
            return ActionValidation.success()
        return ActionValidation.fail("OUT_OF_RANGE", f"{defender.label()} is not adjacent")

    if is_engaged(attacker, units):
        return ActionValidation.fail("ARCHER_ENGAGED", f"{attacker.label()} is engaged and cannot fire")

    if dx == 1 and dy == 1:
        return ActionValidation.success()
    if (dx, dy) in ((2, 0), (0, 2)):
        mid = ((attacker.x + defender.x) // 2, (attacker.y + defender.y) // 2)
        if unit_at(units, mid) is not None:
            return ActionValidation.fail("BLOCKED", f"line of fire through {mid} is blocked")
        return ActionValidation.success()
    return ActionValidation.fail("OUT_OF_RANGE", f"{defender.label()} is out of bow range")


def can_attack(attacker: Unit, defender: Unit, units: Iterable[Unit]) -> bool:
    return validate_attack(attacker, defender, units).valid


def valid_attack_targets(unit: Unit, units: Iterable[Unit]) -> List[Unit]:
    """Enemies ``unit`` can attack right now, in list order."""
    units = list(units)
    return [
        enemy
        for enemy in units
        if enemy.side is not unit.side and can_attack(unit, enemy, units)
    ]


@dataclass
class AttackerContribution:
    """Strength breakdown of one attacker."""

    unit_id: str
    base: int
    flank: int
    charge: int

    @property
    def total(self) -> int:
        return self.base + self.flank + self.charge

    def to_dict(self) -> Dict[str, Any]:
        return {
            "unit_id": self.unit_id,
            "base": self.base,
            "flank": self.flank,
            "charge": self.charge,
            "total": self.total,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AttackerContribution":
        return cls(
            unit_id=data["unit_id"],
            base=data["base"],
            flank=data["flank"],
            charge=data["charge"],
        )


@dataclass
class CombatOutcome:
    """
    Result of resolving one attack.

    Attributes:
        attacker_ids: Units that took part in the attack
        defender_id: Unit that was attacked
        winner: ATTACKER, DEFENDER or TIE (TIE also covers a failed volley)
        atk_total: Sum of attacker strengths
        def_total: Defender strength (0 when archers are overrun)
        contributions: Per-attacker strength breakdown
        removed_ids: Units removed from the board by this combat
        log: Human-readable summary
    """

    attacker_ids: List[str]
    defender_id: str
    winner: CombatWinner
    atk_total: int
    def_total: int
    contributions: List[AttackerContribution] = field(default_factory=list)
    removed_ids: List[str] = field(default_factory=list)
    log: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "attacker_ids": list(self.attacker_ids),
            "defender_id": self.defender_id,
            "winner": self.winner.value,
            "atk_total": self.atk_total,
            "def_total": self.def_total,
            "contributions": [c.to_dict() for c in self.contributions],
            "removed_ids": list(self.removed_ids),
            "log": self.log,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CombatOutcome":
        return cls(
            attacker_ids=list(data["attacker_ids"]),
            defender_id=data["defender_id"],
            winner=CombatWinner(data["winner"]),
            atk_total=data["atk_total"],
            def_total=data["def_total"],
            contributions=[AttackerContribution.from_dict(c) for c in data.get("contributions", [])],
            removed_ids=list(data.get("removed_ids", [])),
            log=data.get("log", ""),
        )


def resolve_combat(
    attackers: Sequence[Unit],
    defender: Unit,
    attacker_lines: Iterable[SupportLine],
    defender_lines: Iterable[SupportLine],
) -> CombatOutcome:
    """
    Compare attacker and defender strength and decide who is removed.

    - A defending archer hit by any non-archer is overrun: attackers win and
      the defender total is reported as 0.
    - Attackers stronger: the defender is removed.
    - Defender stronger: a group containing any melee unit is repulsed and
      every attacker is removed; an all-archer volley simply fails.
    - Equal: stalemate, nobody is removed.

    Budgets are not touched here; callers spend every participant's attack.
    """
    if not attackers:
        raise ValueError("resolve_combat needs at least one attacker")

    attacker_lines = list(attacker_lines)
    def_total = base_strength(defender, defender_lines)

    contributions = [
        AttackerContribution(
            unit_id=atk.id,
            base=base_strength(atk, attacker_lines),
            flank=flank_bonus(atk, defender),
            charge=charge_bonus(atk),
        )
        for atk in attackers
    ]
    atk_total = sum(c.total for c in contributions)
    attacker_ids = [atk.id for atk in attackers]
    has_melee = any(atk.kind is not UnitKind.ARCHER for atk in attackers)

    parts = " + ".join(_describe(atk, c) for atk, c in zip(attackers, contributions))
    summary = f"COMBAT: {parts} = {atk_total} vs {defender.label()}({def_total})"

    if defender.kind is UnitKind.ARCHER and has_melee:
        return CombatOutcome(
            attacker_ids=attacker_ids,
            defender_id=defender.id,
            winner=CombatWinner.ATTACKER,
            atk_total=atk_total,
            def_total=0,
            contributions=contributions,
            removed_ids=[defender.id],
            log=f"Melee units overrun {defender.label()}! Auto-win.",
        )

    if atk_total > def_total:
        winner, removed, verdict = CombatWinner.ATTACKER, [defender.id], "Attackers win!"
    elif def_total > atk_total and has_melee:
        winner, removed, verdict = CombatWinner.DEFENDER, list(attacker_ids), "Defender repels the attack! Attackers lost."
    elif def_total > atk_total:
        winner, removed, verdict = CombatWinner.TIE, [], "Ranged attack failed."
    else:
        winner, removed, verdict = CombatWinner.TIE, [], "Stalemate."

    return CombatOutcome(
        attacker_ids=attacker_ids,
        defender_id=defender.id,
        winner=winner,
        atk_total=atk_total,
        def_total=def_total,
        contributions=contributions,
        removed_ids=removed,
        log=f"{summary}. {verdict}",
    )


def _describe(unit: Unit, contribution: AttackerContribution) -> str:
    details = f"{unit.kind.value}({contribution.base}"
    if contribution.flank:
        details += "+Flank"
    if contribution.charge:
        details += "+Charge"
    return details + ")"
