"""
Scenario system for configuring a session.

A scenario carries the configuration needed to start a game: board size,
roster, deployment zones, difficulty, random seed and the agent that plays
the computer side. Only configuration is serialized; game state is never
persisted.
"""

from __future__ import annotations

import json
import time
from pathlib import Path
from typing import Any, Dict, List, Optional

from agents.spec import AgentSpec
from infra.logger import get_logger
from infra.paths import PROJECT_ROOT, SCENARIO_STORAGE_DIR
from .core.types import Difficulty, Side, UnitKind, Zone
from .mechanics.deployment import DEFAULT_ROSTER, default_zone

logger = get_logger(__name__)

DEFAULT_BOARD_SIZE = 7


class Scenario:
    """
    A complete, self-contained session configuration.

    Example:
        scenario = Scenario(difficulty=Difficulty.HARD, seed=7)
        scenario.save_json("hard.json")
        scenario = Scenario.load_json("hard.json")
    """

    def __init__(
        self,
        board_size: int = DEFAULT_BOARD_SIZE,
        roster: Optional[List[UnitKind]] = None,
        difficulty: Difficulty = Difficulty.MEDIUM,
        seed: Optional[int] = None,
        zones: Optional[Dict[Side, Zone]] = None,
        agents: Optional[List[AgentSpec]] = None,
    ):
        """
        Args:
            board_size: Side length of the square board
            roster: Unit kinds each side deploys, in placement order
            difficulty: Planner search breadth for the computer
            seed: Random seed for computer deployment, support choice and
                planner sampling (None = random)
            zones: Deployment zone per side (defaults to the edge rows)
            agents: Agent specs; the COMPUTER entry drives the computer turn
        """
        if board_size < 5:
            raise ValueError(f"board_size must be at least 5, got {board_size}")
        self.board_size = board_size
        self.roster: List[UnitKind] = list(roster) if roster is not None else list(DEFAULT_ROSTER)
        self.difficulty = difficulty
        self.seed = seed
        self.zones: Dict[Side, Zone] = zones or {
            side: default_zone(side, board_size) for side in Side
        }
        self.agents: List[AgentSpec] = agents if agents is not None else [
            AgentSpec(side=Side.COMPUTER, type="greedy", name="Greedy Planner"),
        ]

        for side, zone in self.zones.items():
            if not (1 <= zone.min_x <= zone.max_x <= board_size and 1 <= zone.min_y <= zone.max_y <= board_size):
                raise ValueError(f"{side.value} zone {zone.to_dict()} does not lie on a {board_size}x{board_size} board")
            if len(zone.tiles()) < len(self.roster):
                raise ValueError(f"{side.value} zone is too small for a roster of {len(self.roster)}")
        if set(Side) - set(self.zones):
            raise ValueError("both sides need a deployment zone")
        if set(self.zones[Side.PLAYER].tiles()) & set(self.zones[Side.COMPUTER].tiles()):
            raise ValueError("deployment zones overlap")

    def agent_for(self, side: Side) -> Optional[AgentSpec]:
        matches = [spec for spec in self.agents if spec.side is side]
        if len(matches) > 1:
            raise ValueError(f"Multiple AgentSpecs found for side {side.value}")
        return matches[0] if matches else None

    def clone(self) -> "Scenario":
        return Scenario.from_dict(self.to_dict())

    def to_dict(self) -> Dict[str, Any]:
        return {
            "config": {
                "board_size": self.board_size,
                "roster": [kind.value for kind in self.roster],
                "difficulty": self.difficulty.value,
                "seed": self.seed,
                "zones": {side.value: zone.to_dict() for side, zone in self.zones.items()},
            },
            "agents": [spec.to_dict() for spec in self.agents],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Scenario":
        if not isinstance(data, dict) or not isinstance(data.get("config", {}), dict):
            raise ValueError("scenario must be an object with a 'config' object")
        config = data.get("config", {})
        zones = config.get("zones")
        agents = data.get("agents")
        roster = config.get("roster")
        return cls(
            board_size=config.get("board_size", DEFAULT_BOARD_SIZE),
            roster=[UnitKind(kind) for kind in roster] if roster is not None else None,
            difficulty=Difficulty(config.get("difficulty", Difficulty.MEDIUM.value)),
            seed=config.get("seed"),
            zones={Side(side): Zone.from_dict(zone) for side, zone in zones.items()} if zones else None,
            agents=[AgentSpec.from_dict(spec) for spec in agents] if agents is not None else None,
        )

    def save_json(self, filepath: str | Path | None = None, indent: int = 2) -> Path:
        """
        Save the configuration to a JSON file.

        Args:
            filepath: Target path. If None, saves under storage/scenarios with a timestamped name.
        """
        if filepath is None:
            SCENARIO_STORAGE_DIR.mkdir(parents=True, exist_ok=True)
            timestamp = time.strftime("%Y%m%d_%H%M%S")
            filepath = SCENARIO_STORAGE_DIR / f"scenario_{timestamp}.json"
        else:
            filepath = Path(filepath)
            if not filepath.is_absolute():
                filepath = PROJECT_ROOT / filepath
            filepath.parent.mkdir(parents=True, exist_ok=True)

        logger.info("Saving scenario JSON to %s", filepath)
        with open(filepath, "w", encoding="utf-8") as f:
            json.dump(self.to_dict(), f, indent=indent, ensure_ascii=False)
        return filepath

    @classmethod
    def load_json(cls, filepath: str | Path) -> "Scenario":
        with open(filepath, "r", encoding="utf-8") as f:
            data = json.load(f)
        return cls.from_dict(data)

    def __repr__(self) -> str:
        return (
            f"Scenario(board_size={self.board_size}, difficulty={self.difficulty.value}, "
            f"seed={self.seed}, roster={len(self.roster)} units)"
        )


def create_default_scenario(
    difficulty: Difficulty = Difficulty.MEDIUM,
    seed: Optional[int] = None,
    agent_type: str = "greedy",
) -> Scenario:
    """Standard 7x7 game: 2 infantry, 2 archers, 2 cavalry per side."""
    return Scenario(
        difficulty=difficulty,
        seed=seed,
        agents=[AgentSpec(side=Side.COMPUTER, type=agent_type, name=f"Computer ({agent_type})")],
    )


if __name__ == "__main__":
    # Can be run via python -m skirmish.scenario
    from infra.logger import configure_logging
    configure_logging(level="INFO", json=True)
    create_default_scenario().save_json()
