"""Scenario configuration and JSON persistence."""

import json
import tempfile
import unittest
from pathlib import Path

from agents import AgentSpec
from skirmish import Scenario, SkirmishEnv, create_default_scenario
from skirmish.core import Difficulty, Side, UnitKind, Zone


class TestScenario(unittest.TestCase):
    def test_defaults(self) -> None:
        scenario = create_default_scenario()
        self.assertEqual(scenario.board_size, 7)
        self.assertEqual(len(scenario.roster), 6)
        self.assertEqual(scenario.difficulty, Difficulty.MEDIUM)
        self.assertEqual(scenario.zones[Side.PLAYER], Zone(3, 5, 6, 7))
        self.assertEqual(scenario.zones[Side.COMPUTER], Zone(3, 5, 1, 2))
        self.assertEqual(scenario.agent_for(Side.COMPUTER).type, "greedy")
        self.assertIsNone(scenario.agent_for(Side.PLAYER))

    def test_dict_round_trip(self) -> None:
        scenario = Scenario(
            roster=[UnitKind.CAVALRY, UnitKind.ARCHER],
            difficulty=Difficulty.HARD,
            seed=99,
            agents=[AgentSpec(side=Side.COMPUTER, type="random", params={"seed": 4})],
        )
        restored = Scenario.from_dict(json.loads(json.dumps(scenario.to_dict())))
        self.assertEqual(restored.to_dict(), scenario.to_dict())
        self.assertEqual(restored.agent_for(Side.COMPUTER).params, {"seed": 4})

    def test_save_and_load(self) -> None:
        scenario = create_default_scenario(difficulty=Difficulty.EASY, seed=12)
        with tempfile.TemporaryDirectory() as tmpdir:
            path = scenario.save_json(Path(tmpdir) / "easy.json")
            loaded = Scenario.load_json(path)
        self.assertEqual(loaded.to_dict(), scenario.to_dict())

    def test_invalid_configuration(self) -> None:
        with self.assertRaises(ValueError):
            Scenario(board_size=3)
        with self.assertRaises(ValueError):
            Scenario(roster=[UnitKind.INFANTRY] * 7)
        with self.assertRaises(ValueError):
            Scenario(zones={Side.PLAYER: Zone(3, 5, 6, 7), Side.COMPUTER: Zone(8, 10, 1, 2)})
        with self.assertRaises(ValueError):
            Scenario(zones={Side.PLAYER: Zone(3, 5, 5, 7), Side.COMPUTER: Zone(1, 7, 4, 5)})
        with self.assertRaises(ValueError):
            Scenario.from_dict({"config": "7x7"})

    def test_env_accepts_dict(self) -> None:
        state = SkirmishEnv().reset(create_default_scenario(seed=1).to_dict())
        self.assertEqual(len(state.units_of(Side.COMPUTER)), 6)

    def test_small_roster_skips_to_support(self) -> None:
        env = SkirmishEnv()
        env.reset(Scenario(roster=[UnitKind.CAVALRY], seed=2))
        env.place_unit((4, 7))
        self.assertEqual(env.state.phase.value, "support_selection")


if __name__ == "__main__":
    unittest.main()
