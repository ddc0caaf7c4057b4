"""Support-line placement and selection."""

import random
import unittest

from skirmish import rules
from skirmish.core import IllegalOperation, Phase, Side, SupportAxis
from skirmish.entities import SupportLine
from skirmish.mechanics import MAX_SUPPORT_LINES, choose_computer_lines, default_zone, validate_placement
from skirmish.state import GameState


def selection_state() -> GameState:
    return GameState(
        board_size=7,
        zones={side: default_zone(side, 7) for side in Side},
        phase=Phase.SUPPORT_SELECTION,
        roster_left={side: [] for side in Side},
    )


class TestPlacement(unittest.TestCase):
    def test_quota(self) -> None:
        existing = [SupportLine(Side.PLAYER, SupportAxis.ROW, i) for i in (1, 2, 3)]
        result = validate_placement(existing, SupportLine(Side.PLAYER, SupportAxis.COL, 4))
        self.assertEqual(result.code, "SUPPORT_QUOTA")
        # the other side's lines do not count against the quota
        self.assertTrue(validate_placement(existing, SupportLine(Side.COMPUTER, SupportAxis.COL, 4)).valid)

    def test_exact_duplicate_rejected(self) -> None:
        existing = [SupportLine(Side.PLAYER, SupportAxis.ROW, 4)]
        self.assertEqual(
            validate_placement(existing, SupportLine(Side.PLAYER, SupportAxis.ROW, 4)).code,
            "DUPLICATE_SUPPORT",
        )

    def test_adjacent_and_crossing_lines_allowed(self) -> None:
        existing = [SupportLine(Side.PLAYER, SupportAxis.ROW, 4)]
        self.assertTrue(validate_placement(existing, SupportLine(Side.PLAYER, SupportAxis.ROW, 5)).valid)
        self.assertTrue(validate_placement(existing, SupportLine(Side.PLAYER, SupportAxis.COL, 4)).valid)

    def test_computer_layout(self) -> None:
        for seed in range(10):
            lines = choose_computer_lines(Side.COMPUTER, random.Random(seed), 7)
            self.assertEqual(len(lines), MAX_SUPPORT_LINES)
            self.assertEqual(len(set(lines)), MAX_SUPPORT_LINES)
            for line in lines:
                self.assertEqual(line.side, Side.COMPUTER)
                self.assertIn(line.index, (3, 4, 5))


class TestSelection(unittest.TestCase):
    def test_toggle_adds_and_removes(self) -> None:
        state = rules.toggle_support_line(selection_state(), Side.PLAYER, SupportAxis.COL, 4)
        self.assertEqual(state.lines_for(Side.PLAYER), [SupportLine(Side.PLAYER, SupportAxis.COL, 4)])
        state = rules.toggle_support_line(state, Side.PLAYER, SupportAxis.COL, 4)
        self.assertEqual(state.lines_for(Side.PLAYER), [])

    def test_index_must_be_on_board(self) -> None:
        with self.assertRaises(IllegalOperation) as ctx:
            rules.toggle_support_line(selection_state(), Side.PLAYER, SupportAxis.ROW, 8)
        self.assertEqual(ctx.exception.code, "OUT_OF_BOUNDS")

    def test_confirm_requires_three(self) -> None:
        state = selection_state()
        for index in (2, 4):
            state = rules.toggle_support_line(state, Side.PLAYER, SupportAxis.ROW, index)
        with self.assertRaises(IllegalOperation) as ctx:
            rules.confirm_support_selection(state, Side.PLAYER)
        self.assertEqual(ctx.exception.code, "SUPPORT_INCOMPLETE")

    def test_battle_starts_when_both_confirmed(self) -> None:
        state = selection_state()
        computer_lines = [SupportLine(Side.COMPUTER, SupportAxis.COL, i) for i in (3, 4, 5)]
        state = rules.assign_support_lines(state, Side.COMPUTER, computer_lines)
        self.assertEqual(state.phase, Phase.SUPPORT_SELECTION)

        for index in (3, 4, 5):
            state = rules.toggle_support_line(state, Side.PLAYER, SupportAxis.ROW, index)
        state = rules.confirm_support_selection(state, Side.PLAYER)
        self.assertEqual(state.phase, Phase.PLAYER_TURN)

        with self.assertRaises(IllegalOperation) as ctx:
            rules.toggle_support_line(state, Side.PLAYER, SupportAxis.ROW, 1)
        self.assertEqual(ctx.exception.code, "WRONG_PHASE")

    def test_assigned_lines_must_belong_to_side(self) -> None:
        lines = [SupportLine(Side.COMPUTER, SupportAxis.COL, 3), SupportLine(Side.PLAYER, SupportAxis.COL, 4),
                 SupportLine(Side.COMPUTER, SupportAxis.COL, 5)]
        with self.assertRaises(IllegalOperation) as ctx:
            rules.assign_support_lines(selection_state(), Side.COMPUTER, lines)
        self.assertEqual(ctx.exception.code, "NOT_YOUR_LINE")

    def test_confirmed_selection_is_permanent(self) -> None:
        state = selection_state()
        for index in (3, 4, 5):
            state = rules.toggle_support_line(state, Side.PLAYER, SupportAxis.ROW, index)
        state = rules.confirm_support_selection(state, Side.PLAYER)
        with self.assertRaises(IllegalOperation):
            rules.toggle_support_line(state, Side.PLAYER, SupportAxis.ROW, 3)


if __name__ == "__main__":
    unittest.main()
