"""Parsing of untrusted action lists."""

import unittest

from skirmish.core import Action, ActionType, Facing
from skirmish.core.actions import parse_action_list


class TestActionDicts(unittest.TestCase):
    def test_to_dict_from_dict(self) -> None:
        for action in [
            Action.move("computer-1", 3, 4),
            Action.rotate("computer-2", Facing.WEST),
            Action.attack("computer-3", 4, 5),
            Action.end_turn(),
        ]:
            self.assertEqual(Action.from_dict(action.to_dict()), action)

    def test_integral_floats_accepted(self) -> None:
        action = Action.from_dict({"action_type": "move", "unit_id": "computer-1", "target": {"x": 3.0, "y": 4}})
        self.assertEqual(action.target, (3, 4))

    def test_facing_forms(self) -> None:
        by_name = Action.from_dict({"action_type": "rotate", "unit_id": "computer-1", "facing": "east"})
        by_index = Action.from_dict({"action_type": "rotate", "unit_id": "computer-1", "direction": 3})
        self.assertEqual(by_name.facing, Facing.EAST)
        self.assertEqual(by_index.facing, Facing.WEST)

    def test_malformed_entries_raise(self) -> None:
        for bad in [
            "move",
            {"action_type": "teleport", "unit_id": "computer-1"},
            {"action_type": "move", "target": {"x": 1, "y": 1}},
            {"action_type": "move", "unit_id": "computer-1", "target": {"x": 1.5, "y": 1}},
            {"action_type": "attack", "unit_id": "computer-1", "target": {"x": True, "y": 1}},
            {"action_type": "attack", "unit_id": "computer-1", "target": [1, 1]},
            {"action_type": "rotate", "unit_id": "computer-1", "facing": 7},
        ]:
            with self.assertRaises(ValueError, msg=repr(bad)):
                Action.from_dict(bad)


class TestParseActionList(unittest.TestCase):
    def test_non_list_becomes_end_turn(self) -> None:
        actions, errors = parse_action_list({"actions": []})
        self.assertEqual(actions, [Action.end_turn()])
        self.assertEqual(len(errors), 1)

    def test_drops_bad_entries_and_appends_end_turn(self) -> None:
        actions, errors = parse_action_list([
            {"action_type": "move", "unit_id": "computer-1", "target": {"x": 3, "y": 3}},
            {"action_type": "fly"},
            42,
        ])
        self.assertEqual(actions, [Action.move("computer-1", 3, 3), Action.end_turn()])
        self.assertEqual(len(errors), 2)
        self.assertTrue(errors[0].startswith("entry 1"))

    def test_stops_at_first_end_turn(self) -> None:
        actions, errors = parse_action_list([
            {"action_type": "end_turn"},
            {"action_type": "move", "unit_id": "computer-1", "target": {"x": 3, "y": 3}},
        ])
        self.assertEqual(actions, [Action.end_turn()])
        self.assertEqual(errors, [])
        self.assertIs(actions[-1].type, ActionType.END_TURN)


if __name__ == "__main__":
    unittest.main()
