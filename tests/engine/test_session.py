from __future__ import annotations

import random
import unittest

from ludo_engine.session import Session
from ludo_engine.types import Color, GameConfig, Phase, PlayerType, SeatConfig


class ScriptedRandom(random.Random):
    """Random source whose dice follow a fixed script."""

    rolls: list

    def randint(self, a, b):
        return self.rolls.pop(0)


def scripted(*rolls) -> ScriptedRandom:
    rng = ScriptedRandom(0)
    rng.rolls = list(rolls)
    return rng


def human_vs_computer() -> GameConfig:
    return GameConfig(
        seats=[
            SeatConfig(Color.RED, PlayerType.HUMAN, "Ada"),
            SeatConfig(Color.GREEN, PlayerType.COMPUTER, "CPU"),
        ]
    )


def computer_vs_human() -> GameConfig:
    return GameConfig(
        seats=[
            SeatConfig(Color.GREEN, PlayerType.COMPUTER, "CPU"),
            SeatConfig(Color.RED, PlayerType.HUMAN, "Ada"),
        ]
    )


class TestPacing(unittest.TestCase):
    def setUp(self):
        self.sleeps: list[float] = []
        self.session = Session(
            human_vs_computer(),
            roll_delay=0.5,
            step_delay=0.1,
            turn_delay=0.8,
            think_delay=1.0,
            sleep=self.sleeps.append,
        )

    def test_delays_follow_transitions(self):
        self.session.game.rng = scripted(3, 6)

        self.assertEqual(self.session.roll(), 3)
        self.assertEqual(self.sleeps, [0.5, 0.8])
        self.assertEqual(self.session.game.current_player.color, Color.GREEN)

        self.assertTrue(self.session.step_computer())
        self.assertEqual(self.session.game.phase, Phase.AWAITING_MOVE)
        self.assertTrue(self.session.step_computer())

        # Bonus roll after the six is granted without the hand-off pause
        self.assertEqual(self.sleeps, [0.5, 0.8, 1.0, 0.5, 1.0, 0.1])
        self.assertEqual(self.session.game.current_player.color, Color.GREEN)
        self.assertEqual(self.session.game.phase, Phase.AWAITING_ROLL)
        self.assertEqual(self.session.snapshot().step_counts["GREEN_0"], 0)

    def test_listener_sees_each_stage(self):
        phases = []
        self.session.on_change = lambda snap: phases.append(snap.phase)
        self.session.game.rng = scripted(2)
        self.session.roll()
        self.assertEqual(
            phases, [Phase.ROLLING, Phase.AUTO_ADVANCING, Phase.AWAITING_ROLL]
        )

    def test_headless_session_never_sleeps(self):
        sleeps = []
        session = Session.headless(human_vs_computer(), sleep=sleeps.append)
        session.game.rng = scripted(1)
        session.roll()
        self.assertTrue(all(s == 0.0 for s in sleeps))


class TestBusyGuard(unittest.TestCase):
    def test_reentrant_requests_are_rejected(self):
        session = Session.headless(human_vs_computer())
        session.game.rng = scripted(6, 6, 6)
        answers = []

        def listener(_snap):
            answers.append(session.roll())
            answers.append(session.move("RED_0"))

        session.on_change = listener
        self.assertEqual(session.roll(), 6)
        self.assertTrue(answers)
        self.assertTrue(all(a is None for a in answers))
        self.assertFalse(session.busy)
        self.assertEqual(session.game.dice_value, 6)
        self.assertEqual(session.game.players[0].step_counts(), [-1, -1, -1, -1])

    def test_human_actions_rejected_on_computer_turn(self):
        session = Session.headless(computer_vs_human())
        self.assertIsNone(session.roll())
        self.assertIsNone(session.move("RED_0"))
        self.assertEqual(session.game.phase, Phase.AWAITING_ROLL)

    def test_step_computer_ignores_human_turn(self):
        session = Session.headless(human_vs_computer())
        self.assertFalse(session.step_computer())


class TestNewGame(unittest.TestCase):
    def test_new_game_aborts_pending_roll(self):
        session = None
        calls = []

        def sleep(seconds):
            calls.append(seconds)
            if len(calls) == 1:
                session.new_game()

        session = Session(human_vs_computer(), sleep=sleep)
        old_game = session.game
        self.assertIsNone(session.roll())

        self.assertIsNot(session.game, old_game)
        self.assertFalse(session.busy)
        snap = session.snapshot()
        self.assertEqual(snap.phase, Phase.AWAITING_ROLL)
        self.assertIsNone(snap.dice_value)
        self.assertEqual(snap.log, ["Game Started!"])
        self.assertEqual(old_game.phase, Phase.ROLLING)

    def test_new_game_with_other_seats(self):
        session = Session.headless(human_vs_computer())
        session.game.rng = scripted(6)
        session.roll()
        snap = session.new_game(computer_vs_human())
        self.assertEqual(snap.current_color, Color.GREEN)
        self.assertEqual(snap.positions.shape, (2, 4))
        self.assertTrue((snap.positions == -1).all())


class TestRunUntilHuman(unittest.TestCase):
    def test_stops_at_human_turn(self):
        session = Session.headless(computer_vs_human())
        session.game.rng = scripted(4)
        snap = session.run_until_human()
        self.assertEqual(snap.current_color, Color.RED)
        self.assertEqual(snap.phase, Phase.AWAITING_ROLL)

    def test_all_computer_match_finishes(self):
        seats = [SeatConfig(c, PlayerType.COMPUTER) for c in (Color.RED, Color.BLUE)]
        session = Session.headless(GameConfig(seats=seats, seed=5))
        snap = session.run_until_human()
        self.assertTrue(snap.is_over)
        self.assertEqual(sorted(snap.standings), sorted([Color.RED, Color.BLUE]))


if __name__ == "__main__":
    unittest.main()
