import unittest

from parchis.board import Board, is_safe_track_index, track_index_for_progress
from parchis.config import config
from parchis.describe import describe_location
from parchis.game import create_game, get_piece_locations
from parchis.types import Color, Zone


def place(state, player_index, slot, progress):
    player = state.players[player_index]
    piece = player.pieces[slot]
    return state.with_player(player.with_piece(piece.moved_to(progress)))


class TopologyTests(unittest.TestCase):
    def test_constants(self) -> None:
        self.assertEqual(config.TRACK_LENGTH, 68)
        self.assertEqual(config.HOME_LENGTH, 7)
        self.assertEqual(config.MAX_PROGRESS, 75)
        self.assertEqual(config.START_INDICES, (0, 17, 34, 51))
        self.assertEqual(len(config.SAFE_INDICES), 12)
        for start in config.START_INDICES:
            self.assertTrue(is_safe_track_index(start))

    def test_track_index_for_progress(self) -> None:
        self.assertEqual(track_index_for_progress(17, 0), 17)
        self.assertEqual(track_index_for_progress(17, 55), 4)
        self.assertEqual(track_index_for_progress(51, 67), 50)
        self.assertIsNone(track_index_for_progress(0, -1))
        self.assertIsNone(track_index_for_progress(0, 68))
        self.assertIsNone(track_index_for_progress(0, 75))

    def test_players_get_seat_colors_and_starts(self) -> None:
        state = create_game(4, 2)
        self.assertEqual(
            [p.color for p in state.players],
            [Color.RED, Color.YELLOW, Color.BLUE, Color.GREEN],
        )
        self.assertEqual([p.start_index for p in state.players], [0, 17, 34, 51])
        self.assertEqual(
            [pc.piece_id for pc in state.players[2].pieces], ["p2-0", "p2-1"]
        )


class BoardOccupancyTests(unittest.TestCase):
    def setUp(self) -> None:
        self.state = create_game(2, 3)

    def test_barrier_owners_counts_any_player(self) -> None:
        state = place(self.state, 1, 0, 55)  # track 4
        state = place(state, 1, 1, 55)
        state = place(state, 0, 0, 4)
        board = Board(state.players)
        self.assertEqual(board.barrier_owners(4), {1})
        self.assertTrue(board.has_barrier(4))
        self.assertEqual(board.count_at(0, 4), 1)
        self.assertEqual(board.count_at(1, 4), 2)
        self.assertEqual(board.count_at(1, 4, exclude_piece_id="p1-0"), 1)

    def test_occupancy_matrix(self) -> None:
        state = place(self.state, 0, 0, 10)
        state = place(state, 0, 1, 70)  # home lane, not on the track
        counts = Board(state.players).occupancy()
        self.assertEqual(counts.shape, (2, config.TRACK_LENGTH))
        self.assertEqual(int(counts.sum()), 1)
        self.assertEqual(int(counts[0, 10]), 1)

    def test_pieces_at_excludes_player(self) -> None:
        state = place(self.state, 0, 0, 4)
        state = place(state, 1, 2, 55)
        board = Board(state.players)
        self.assertEqual(len(board.pieces_at(4)), 2)
        occupants = board.pieces_at(4, exclude_player=0)
        self.assertEqual([(i, pc.piece_id) for i, pc in occupants], [(1, "p1-2")])


class PieceLocationTests(unittest.TestCase):
    def test_zone_partition_is_total(self) -> None:
        state = create_game(2, 1)
        for progress in range(-1, config.MAX_PROGRESS + 1):
            moved = place(state, 0, 0, progress)
            loc = get_piece_locations(moved)[0]
            pc = moved.players[0].pieces[0]
            flags = [pc.in_nest, pc.on_track, pc.in_home_lane, pc.finished]
            self.assertEqual(sum(flags), 1, progress)
            if progress == -1:
                self.assertEqual(loc.zone, Zone.NEST)
                self.assertIsNone(loc.track_index)
                self.assertIsNone(loc.lane_index)
            elif progress < config.TRACK_LENGTH:
                self.assertEqual(loc.zone, Zone.TRACK)
                self.assertEqual(loc.track_index, progress)
                self.assertIsNone(loc.lane_index)
            elif progress < config.MAX_PROGRESS:
                self.assertEqual(loc.zone, Zone.HOME_LANE)
                self.assertIsNone(loc.track_index)
                self.assertEqual(loc.lane_index, progress - config.TRACK_LENGTH)
            else:
                self.assertEqual(loc.zone, Zone.HOME)
                self.assertEqual(loc.lane_index, config.HOME_LENGTH)

    def test_locations_cover_every_piece(self) -> None:
        state = place(create_game(3, 2), 1, 1, 55)
        locs = get_piece_locations(state)
        self.assertEqual(len(locs), 6)
        loc = next(l for l in locs if l.piece_id == "p1-1")
        self.assertEqual((loc.player_index, loc.slot, loc.track_index), (1, 1, 4))

    def test_describe_location(self) -> None:
        state = create_game(2, 1)
        texts = [
            describe_location(get_piece_locations(place(state, 0, 0, p))[0])
            for p in (-1, 12, 70, 75)
        ]
        self.assertEqual(
            texts, ["in nest", "on track square 12", "home lane step 3 of 7", "home"]
        )


if __name__ == "__main__":
    unittest.main()
