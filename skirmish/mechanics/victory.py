"""
End-of-game detection.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterable, Optional

from ..core.types import Side
from ..entities.unit import Unit


@dataclass
class VictoryResult:
    is_game_over: bool
    winner: Optional[Side] = None
    reason: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "is_game_over": self.is_game_over,
            "winner": self.winner.value if self.winner else None,
            "reason": self.reason,
        }


def check_elimination(units: Iterable[Unit]) -> VictoryResult:
    """
    The game ends as soon as one side has no live units; the other side wins.

    Combat only ever removes one side's units, so both sides cannot be
    wiped out by the same resolution. Should it happen anyway the game ends
    without a winner.
    """
    alive = {side: 0 for side in Side}
    for unit in units:
        alive[unit.side] += 1

    player_out = alive[Side.PLAYER] == 0
    computer_out = alive[Side.COMPUTER] == 0
    if player_out and computer_out:
        return VictoryResult(True, None, "Both sides eliminated")
    if player_out:
        return VictoryResult(True, Side.COMPUTER, "Player army eliminated")
    if computer_out:
        return VictoryResult(True, Side.PLAYER, "Computer army eliminated")
    return VictoryResult(False)
