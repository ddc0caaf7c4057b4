"""Attack legality, strength bonuses and combat resolution."""

import unittest

from skirmish import rules
from skirmish.core import CombatWinner, Facing, IllegalOperation, Phase, Side, SupportAxis, TerminalState, UnitKind
from skirmish.entities import SupportLine, Unit
from skirmish.mechanics import (
    base_strength,
    can_attack,
    charge_bonus,
    default_zone,
    flank_bonus,
    resolve_combat,
    validate_attack,
)
from skirmish.state import GameState


def battle_state(*units, lines=(), phase=Phase.PLAYER_TURN) -> GameState:
    return GameState(
        board_size=7,
        zones={side: default_zone(side, 7) for side in Side},
        units=list(units),
        support_lines=list(lines),
        support_confirmed=set(Side),
        phase=phase,
        roster_left={side: [] for side in Side},
    )


def infantry(uid, side, x, y, facing, **kwargs) -> Unit:
    return Unit(uid, UnitKind.INFANTRY, side, x, y, facing, **kwargs)


class TestStrength(unittest.TestCase):
    def test_support_lines_add_up(self) -> None:
        unit = infantry("player-1", Side.PLAYER, 3, 3, Facing.NORTH)
        lines = [
            SupportLine(Side.PLAYER, SupportAxis.ROW, 3),
            SupportLine(Side.PLAYER, SupportAxis.COL, 3),
            SupportLine(Side.PLAYER, SupportAxis.COL, 6),
        ]
        self.assertEqual(base_strength(unit, lines), 3)

    def test_enemy_lines_do_not_count(self) -> None:
        unit = infantry("player-1", Side.PLAYER, 3, 3, Facing.NORTH)
        lines = [SupportLine(Side.COMPUTER, SupportAxis.ROW, 3)]
        self.assertEqual(base_strength(unit, lines), 1)

    def test_flank_bonus_every_position_and_facing(self) -> None:
        for facing in Facing:
            defender = infantry("computer-1", Side.COMPUTER, 4, 4, facing)
            for dx, dy in [(0, -1), (1, 0), (0, 1), (-1, 0), (1, 1), (-1, -1), (2, 0), (0, 2)]:
                for kind in UnitKind:
                    attacker = Unit("player-1", kind, Side.PLAYER, 4 + dx, 4 + dy, Facing.NORTH)
                    expected = 0 if kind is UnitKind.ARCHER or (dx, dy) == facing.vector else 1
                    self.assertEqual(
                        flank_bonus(attacker, defender), expected,
                        f"{kind} at offset {(dx, dy)} vs defender facing {facing}",
                    )

    def test_charge_bonus_needs_moves(self) -> None:
        fresh = Unit("player-1", UnitKind.CAVALRY, Side.PLAYER, 4, 5, Facing.NORTH)
        spent = Unit("player-1", UnitKind.CAVALRY, Side.PLAYER, 4, 5, Facing.NORTH, moves_left=0)
        foot = infantry("player-2", Side.PLAYER, 4, 5, Facing.NORTH)
        self.assertEqual(charge_bonus(fresh), 1)
        self.assertEqual(charge_bonus(spent), 0)
        self.assertEqual(charge_bonus(foot), 0)


class TestAttackLegality(unittest.TestCase):
    def test_melee_needs_adjacency_in_cone(self) -> None:
        attacker = infantry("player-1", Side.PLAYER, 4, 6, Facing.NORTH)
        adjacent = infantry("computer-1", Side.COMPUTER, 4, 5, Facing.SOUTH)
        self.assertTrue(can_attack(attacker, adjacent, [attacker, adjacent]))

        behind = infantry("computer-2", Side.COMPUTER, 4, 7, Facing.SOUTH)
        self.assertEqual(validate_attack(attacker, behind, [attacker, behind]).code, "OUT_OF_CONE")

        beside = infantry("computer-3", Side.COMPUTER, 5, 6, Facing.SOUTH)
        self.assertEqual(validate_attack(attacker, beside, [attacker, beside]).code, "OUT_OF_CONE")

    def test_infantry_cannot_attack_at_range_two(self) -> None:
        attacker = infantry("player-1", Side.PLAYER, 4, 6, Facing.NORTH)
        archer = Unit("computer-1", UnitKind.ARCHER, Side.COMPUTER, 4, 4, Facing.SOUTH)
        self.assertEqual(validate_attack(attacker, archer, [attacker, archer]).code, "OUT_OF_RANGE")

    def test_archer_gap_shot_needs_empty_midpoint(self) -> None:
        archer = Unit("player-1", UnitKind.ARCHER, Side.PLAYER, 4, 6, Facing.NORTH)
        target = infantry("computer-1", Side.COMPUTER, 4, 4, Facing.SOUTH)
        self.assertTrue(can_attack(archer, target, [archer, target]))

        blocker = infantry("player-2", Side.PLAYER, 4, 5, Facing.NORTH)
        self.assertEqual(validate_attack(archer, target, [archer, target, blocker]).code, "BLOCKED")

    def test_archer_diagonal_and_out_of_range(self) -> None:
        archer = Unit("player-1", UnitKind.ARCHER, Side.PLAYER, 4, 6, Facing.NORTH)
        diagonal = infantry("computer-1", Side.COMPUTER, 5, 5, Facing.SOUTH)
        far = infantry("computer-2", Side.COMPUTER, 4, 3, Facing.SOUTH)
        units = [archer, diagonal, far]
        self.assertTrue(can_attack(archer, diagonal, units))
        self.assertEqual(validate_attack(archer, far, units).code, "OUT_OF_RANGE")

    def test_engaged_archer_cannot_fire(self) -> None:
        archer = Unit("player-1", UnitKind.ARCHER, Side.PLAYER, 4, 6, Facing.NORTH)
        target = infantry("computer-1", Side.COMPUTER, 5, 5, Facing.SOUTH)
        pest = infantry("computer-2", Side.COMPUTER, 3, 6, Facing.EAST)
        self.assertEqual(
            validate_attack(archer, target, [archer, target, pest]).code,
            "ARCHER_ENGAGED",
        )

    def test_spent_attack_and_friendly_target(self) -> None:
        attacker = infantry("player-1", Side.PLAYER, 4, 6, Facing.NORTH, attacks_left=0)
        enemy = infantry("computer-1", Side.COMPUTER, 4, 5, Facing.SOUTH)
        friend = infantry("player-2", Side.PLAYER, 4, 5, Facing.SOUTH)
        self.assertEqual(validate_attack(attacker, enemy, [attacker, enemy]).code, "NO_ATTACKS_LEFT")
        attacker.attacks_left = 1
        self.assertEqual(validate_attack(attacker, friend, [attacker, friend]).code, "FRIENDLY_TARGET")


class TestResolution(unittest.TestCase):
    def test_melee_overruns_archer(self) -> None:
        attacker = infantry("player-1", Side.PLAYER, 4, 5, Facing.NORTH)
        archer = Unit("computer-1", UnitKind.ARCHER, Side.COMPUTER, 4, 4, Facing.SOUTH)
        lines = [
            SupportLine(Side.COMPUTER, SupportAxis.ROW, 4),
            SupportLine(Side.COMPUTER, SupportAxis.COL, 4),
        ]
        outcome = resolve_combat([attacker], archer, [], lines)
        self.assertEqual(outcome.winner, CombatWinner.ATTACKER)
        self.assertEqual(outcome.def_total, 0)
        self.assertEqual(outcome.removed_ids, ["computer-1"])

    def test_cavalry_charge_bonus_in_total(self) -> None:
        defender = infantry("computer-1", Side.COMPUTER, 4, 4, Facing.SOUTH)
        fresh = Unit("player-1", UnitKind.CAVALRY, Side.PLAYER, 4, 5, Facing.NORTH)
        outcome = resolve_combat([fresh], defender, [], [])
        self.assertEqual(outcome.atk_total, 2)
        self.assertEqual(outcome.winner, CombatWinner.ATTACKER)

        spent = Unit("player-1", UnitKind.CAVALRY, Side.PLAYER, 4, 5, Facing.NORTH, moves_left=0)
        outcome = resolve_combat([spent], defender, [], [])
        self.assertEqual(outcome.atk_total, 1)
        self.assertEqual(outcome.winner, CombatWinner.TIE)
        self.assertEqual(outcome.removed_ids, [])

    def test_repulse_removes_melee_attackers(self) -> None:
        defender = infantry("computer-1", Side.COMPUTER, 4, 4, Facing.SOUTH)
        attacker = infantry("player-1", Side.PLAYER, 4, 5, Facing.NORTH)
        lines = [SupportLine(Side.COMPUTER, SupportAxis.ROW, 4)]
        outcome = resolve_combat([attacker], defender, [], lines)
        self.assertEqual(outcome.winner, CombatWinner.DEFENDER)
        self.assertEqual(outcome.removed_ids, ["player-1"])

    def test_failed_volley_removes_nobody(self) -> None:
        defender = infantry("computer-1", Side.COMPUTER, 4, 4, Facing.SOUTH)
        archer = Unit("player-1", UnitKind.ARCHER, Side.PLAYER, 4, 6, Facing.NORTH)
        lines = [SupportLine(Side.COMPUTER, SupportAxis.ROW, 4)]
        outcome = resolve_combat([archer], defender, [], lines)
        self.assertEqual(outcome.removed_ids, [])
        self.assertEqual(outcome.def_total, 2)

    def test_group_strength_is_summed(self) -> None:
        defender = infantry("computer-1", Side.COMPUTER, 4, 4, Facing.SOUTH)
        front = infantry("player-1", Side.PLAYER, 4, 5, Facing.NORTH)
        side = infantry("player-2", Side.PLAYER, 3, 4, Facing.EAST)
        lines = [SupportLine(Side.COMPUTER, SupportAxis.ROW, 4), SupportLine(Side.COMPUTER, SupportAxis.COL, 4)]
        outcome = resolve_combat([front, side], defender, [], lines)
        # 1 (front) + 2 (flank) vs 3
        self.assertEqual((outcome.atk_total, outcome.def_total), (3, 3))
        self.assertEqual(outcome.winner, CombatWinner.TIE)

    def test_needs_attackers(self) -> None:
        with self.assertRaises(ValueError):
            resolve_combat([], infantry("computer-1", Side.COMPUTER, 4, 4, Facing.SOUTH), [], [])


class TestPendingAttack(unittest.TestCase):
    def setUp(self) -> None:
        self.state = battle_state(
            infantry("player-1", Side.PLAYER, 4, 5, Facing.NORTH),
            infantry("player-2", Side.PLAYER, 3, 4, Facing.EAST),
            infantry("player-3", Side.PLAYER, 1, 7, Facing.NORTH),
            infantry("computer-4", Side.COMPUTER, 4, 4, Facing.SOUTH),
            infantry("computer-5", Side.COMPUTER, 7, 1, Facing.SOUTH),
            lines=[SupportLine(Side.COMPUTER, SupportAxis.ROW, 4)],
        )

    def test_group_attack_succeeds(self) -> None:
        state = rules.begin_attack(self.state, "player-1", "computer-4")
        state = rules.add_attacker(state, "player-2")
        self.assertEqual(state.pending_attack.attacker_ids, ["player-1", "player-2"])
        state = rules.resolve_attack(state)
        self.assertIsNone(state.get_unit("computer-4"))
        self.assertIsNone(state.pending_attack)
        self.assertEqual(state.get_unit("player-1").attacks_left, 0)
        self.assertEqual(state.get_unit("player-2").attacks_left, 0)

    def test_committed_unit_cannot_move(self) -> None:
        state = rules.begin_attack(self.state, "player-1", "computer-4")
        with self.assertRaises(IllegalOperation) as ctx:
            rules.move_unit(state, "player-1", (5, 5))
        self.assertEqual(ctx.exception.code, "COMMITTED_TO_ATTACK")
        state = rules.remove_attacker(state, "player-1")
        self.assertIsNone(state.pending_attack)
        rules.move_unit(state, "player-1", (5, 5))

    def test_illegal_joiner_rejected(self) -> None:
        state = rules.begin_attack(self.state, "player-1", "computer-4")
        with self.assertRaises(IllegalOperation) as ctx:
            rules.add_attacker(state, "player-3")
        self.assertEqual(ctx.exception.code, "OUT_OF_RANGE")

    def test_single_attack_repulsed(self) -> None:
        state = rules.begin_attack(self.state, "player-1", "computer-4")
        state = rules.resolve_attack(state)
        self.assertIsNone(state.get_unit("player-1"))
        self.assertIsNotNone(state.get_unit("computer-4"))

    def test_second_pending_attack_rejected(self) -> None:
        state = rules.begin_attack(self.state, "player-1", "computer-4")
        with self.assertRaises(IllegalOperation) as ctx:
            rules.begin_attack(state, "player-2", "computer-4")
        self.assertEqual(ctx.exception.code, "ATTACK_PENDING")

    def test_cancel_discards(self) -> None:
        state = rules.begin_attack(self.state, "player-1", "computer-4")
        state = rules.cancel_attack(state)
        self.assertIsNone(state.pending_attack)
        with self.assertRaises(IllegalOperation) as ctx:
            rules.resolve_attack(state)
        self.assertEqual(ctx.exception.code, "NO_PENDING_ATTACK")


class TestGameOver(unittest.TestCase):
    def test_last_unit_removed_ends_game(self) -> None:
        state = battle_state(
            Unit("player-1", UnitKind.CAVALRY, Side.PLAYER, 4, 5, Facing.NORTH),
            infantry("player-2", Side.PLAYER, 1, 7, Facing.NORTH),
            infantry("computer-3", Side.COMPUTER, 4, 4, Facing.SOUTH),
        )
        state = rules.attack(state, "player-1", (4, 4))
        self.assertEqual(state.phase, Phase.GAME_OVER)
        self.assertEqual(state.winner, Side.PLAYER)

        with self.assertRaises(TerminalState):
            rules.move_unit(state, "player-2", (1, 6))
        with self.assertRaises(TerminalState):
            rules.attack(state, "player-2", (1, 6))
        with self.assertRaises(TerminalState):
            rules.end_turn(state)

    def test_attack_on_empty_tile(self) -> None:
        state = battle_state(infantry("player-1", Side.PLAYER, 4, 5, Facing.NORTH))
        with self.assertRaises(IllegalOperation) as ctx:
            rules.attack(state, "player-1", (4, 4))
        self.assertEqual(ctx.exception.code, "UNKNOWN_UNIT")


if __name__ == "__main__":
    unittest.main()
