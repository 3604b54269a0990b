import unittest

from parchis.config import config
from parchis.errors import IllegalMoveError, UnknownPieceError
from parchis.game import create_game
from parchis.rules import can_move, execute_move
from parchis.types import MoveCheck, MoveRejection


def place(state, player_index, slot, progress):
    player = state.players[player_index]
    piece = player.pieces[slot]
    return state.with_player(player.with_piece(piece.moved_to(progress)))


def check(state, player_index, slot, steps):
    return can_move(state, player_index, state.players[player_index].pieces[slot], steps)


class StepAndFinishRulesTests(unittest.TestCase):
    def setUp(self) -> None:
        self.state = place(create_game(2, 2), 0, 0, 10)

    def test_invalid_steps(self) -> None:
        for steps in (0, -3, 2.5, True, None, "5"):
            self.assertEqual(check(self.state, 0, 0, steps), MoveRejection.INVALID_STEPS)

    def test_finished_piece_cannot_move(self) -> None:
        state = place(self.state, 0, 0, config.MAX_PROGRESS)
        self.assertEqual(check(state, 0, 0, 1), MoveRejection.ALREADY_FINISHED)

    def test_exact_roll_needed_for_home(self) -> None:
        state = place(self.state, 0, 0, 73)
        self.assertEqual(check(state, 0, 0, 3), MoveRejection.NEEDS_EXACT_ROLL)
        outcome = check(state, 0, 0, 2)
        self.assertEqual(outcome, MoveCheck(75, None, False))

    def test_entering_home_lane_has_no_track_index(self) -> None:
        state = place(self.state, 0, 0, 65)
        self.assertEqual(check(state, 0, 0, 5), MoveCheck(70, None, False))
        self.assertEqual(check(state, 0, 0, 2), MoveCheck(67, 67, False))


class NestExitTests(unittest.TestCase):
    def setUp(self) -> None:
        self.state = create_game(2, 3)

    def test_only_five_leaves_the_nest(self) -> None:
        for steps in range(1, 13):
            outcome = check(self.state, 1, 0, steps)
            if steps == 5:
                self.assertEqual(outcome, MoveCheck(0, 17, True))
            else:
                self.assertEqual(outcome, MoveRejection.NEED_FIVE_TO_EXIT)

    def test_opponent_barrier_on_start_blocks_exit(self) -> None:
        # player 1 progress 51 sits on player 0's start (track 0)
        state = place(self.state, 1, 0, 51)
        state = place(state, 1, 1, 51)
        self.assertEqual(check(state, 0, 0, 5), MoveRejection.START_BLOCKED_BY_BARRIER)

    def test_single_opponent_on_start_does_not_block(self) -> None:
        state = place(self.state, 1, 0, 51)
        self.assertIsInstance(check(state, 0, 0, 5), MoveCheck)

    def test_own_barrier_on_start_caps_exit(self) -> None:
        state = place(self.state, 0, 0, 0)
        self.assertIsInstance(check(state, 0, 2, 5), MoveCheck)
        state = place(state, 0, 1, 0)
        self.assertEqual(check(state, 0, 2, 5), MoveRejection.START_HAS_OWN_BARRIER)


class BarrierTests(unittest.TestCase):
    def setUp(self) -> None:
        self.state = create_game(2, 3)

    def test_opponent_barrier_blocks_passage(self) -> None:
        state = place(self.state, 1, 0, 56)  # track 5
        state = place(state, 1, 1, 56)
        state = place(state, 0, 0, 3)
        self.assertEqual(check(state, 0, 0, 1), MoveCheck(4, 4, False))
        self.assertEqual(check(state, 0, 0, 2), MoveRejection.BLOCKED_BY_BARRIER)
        self.assertEqual(check(state, 0, 0, 6), MoveRejection.BLOCKED_BY_BARRIER)

    def test_own_barrier_blocks_passage(self) -> None:
        state = place(self.state, 0, 0, 5)
        state = place(state, 0, 1, 5)
        state = place(state, 0, 2, 3)
        self.assertEqual(check(state, 0, 2, 4), MoveRejection.BLOCKED_BY_BARRIER)

    def test_barrier_member_can_leave(self) -> None:
        state = place(self.state, 0, 0, 5)
        state = place(state, 0, 1, 5)
        self.assertEqual(check(state, 0, 0, 3), MoveCheck(8, 8, False))

    def test_barrier_check_stops_at_home_lane(self) -> None:
        # opponent barrier at player 0's track 66; piece at 67 walks into the lane
        state = place(self.state, 1, 0, 49)
        state = place(state, 1, 1, 49)
        state = place(state, 0, 0, 67)
        self.assertEqual(check(state, 0, 0, 4), MoveCheck(71, None, False))
        state = place(state, 0, 0, 65)
        self.assertEqual(check(state, 0, 0, 4), MoveRejection.BLOCKED_BY_BARRIER)

    def test_landing_on_single_own_piece_forms_barrier(self) -> None:
        state = place(self.state, 0, 0, 10)
        state = place(state, 0, 1, 7)
        self.assertEqual(check(state, 0, 1, 3), MoveCheck(10, 10, False))


class ExecuteMoveTests(unittest.TestCase):
    def setUp(self) -> None:
        self.state = create_game(3, 2)

    def test_capture_on_unsafe_square(self) -> None:
        state = place(self.state, 0, 0, 3)
        state = place(state, 1, 0, 55)  # track 4
        new_state, result = execute_move(state, 0, "p0-0", 1)
        self.assertEqual(new_state.players[1].pieces[0].progress, -1)
        self.assertEqual(new_state.players[0].pieces[0].progress, 4)
        self.assertEqual(result.captured, 1)
        self.assertEqual((result.from_progress, result.to_progress), (3, 4))
        self.assertFalse(result.reached_home)
        # input untouched
        self.assertEqual(state.players[1].pieces[0].progress, 55)

    def test_captures_every_opponent_on_square(self) -> None:
        state = place(self.state, 0, 0, 3)
        state = place(state, 1, 0, 55)  # track 4
        state = place(state, 2, 1, 38)  # track 4
        new_state, result = execute_move(state, 0, "p0-0", 1)
        self.assertEqual(result.captured, 2)
        self.assertEqual(new_state.players[2].pieces[1].progress, -1)

    def test_no_capture_on_safe_squares(self) -> None:
        for safe in sorted(config.SAFE_INDICES):
            if safe == 0:
                continue
            for opponent in (1, 2):
                start = config.START_INDICES[opponent]
                opp_progress = (safe - start) % config.TRACK_LENGTH
                state = place(self.state, 0, 0, safe - 1)
                state = place(state, opponent, 0, opp_progress)
                new_state, result = execute_move(state, 0, "p0-0", 1)
                self.assertEqual(result.captured, 0, safe)
                self.assertEqual(new_state.players[opponent].pieces[0].progress, opp_progress)

    def test_exit_onto_occupied_start_does_not_capture(self) -> None:
        state = place(self.state, 1, 0, 51)  # player 1 on player 0's start
        new_state, result = execute_move(state, 0, "p0-1", 5)
        self.assertEqual(result.captured, 0)
        self.assertEqual(result.to_progress, 0)
        self.assertEqual(new_state.players[1].pieces[0].progress, 51)

    def test_reached_home(self) -> None:
        state = place(self.state, 0, 0, 70)
        _, result = execute_move(state, 0, "p0-0", 5)
        self.assertTrue(result.reached_home)
        self.assertEqual(result.piece_slot, 0)

    def test_rejections_raise(self) -> None:
        with self.assertRaises(UnknownPieceError):
            execute_move(self.state, 0, "p1-0", 5)
        with self.assertRaises(IllegalMoveError) as ctx:
            execute_move(self.state, 0, "p0-0", 4)
        self.assertEqual(ctx.exception.reason, MoveRejection.NEED_FIVE_TO_EXIT)


if __name__ == "__main__":
    unittest.main()
