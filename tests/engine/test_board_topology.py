import unittest

from ludo_engine import board
from ludo_engine.config import config
from ludo_engine.player import Player
from ludo_engine.token import Token
from ludo_engine.types import Color, Coordinates


class TestRingGeometry(unittest.TestCase):
    def test_ring_has_52_distinct_adjacent_cells(self):
        path = board.GLOBAL_PATH
        self.assertEqual(len(path), config.RING_LENGTH)
        self.assertEqual(len(set(path)), config.RING_LENGTH)
        for i, cell in enumerate(path):
            nxt = path[(i + 1) % len(path)]
            self.assertEqual(
                max(abs(cell.x - nxt.x), abs(cell.y - nxt.y)), 1, f"gap after {i}"
            )

    def test_entry_offsets_are_spaced_and_safe(self):
        offsets = sorted(board.entry_offset(c) for c in Color)
        self.assertEqual(offsets, [0, 13, 26, 39])
        for c in Color:
            self.assertTrue(board.is_safe(board.entry_offset(c)))
        self.assertEqual(len(board.SAFE_SQUARES), 8)

    def test_home_stretch_starts_next_to_last_ring_cell(self):
        for c in Color:
            last_ring = board.cell_for(c, config.LAST_RING_STEP)
            first_home = board.cell_for(c, config.HOME_STRETCH_START)
            self.assertEqual(
                max(abs(last_ring.x - first_home.x), abs(last_ring.y - first_home.y)),
                1,
            )

    def test_arrival_slots_are_distinct(self):
        arrivals = {board.cell_for(c, config.FINISH_STEP) for c in Color}
        self.assertEqual(len(arrivals), 4)


class TestCellFor(unittest.TestCase):
    def test_entry_cells(self):
        self.assertEqual(board.cell_for(Color.RED, 0), Coordinates(2, 7))
        self.assertEqual(board.cell_for(Color.GREEN, 0), Coordinates(9, 2))
        self.assertEqual(board.cell_for(Color.BLUE, 0), Coordinates(14, 9))
        self.assertEqual(board.cell_for(Color.YELLOW, 0), Coordinates(7, 14))

    def test_ring_wraps_around(self):
        # Green step 40 is ring index (13 + 40) % 52 == 1
        self.assertEqual(board.cell_for(Color.GREEN, 40), board.GLOBAL_PATH[1])

    def test_base_slots_are_stable_per_token(self):
        self.assertEqual(board.cell_for(Color.RED, -1, 0), Coordinates(2, 2))
        self.assertEqual(board.cell_for(Color.RED, -1, 3), Coordinates(5, 5))
        self.assertEqual(
            board.cell_for(Color.BLUE, -1, 2), board.cell_for(Color.BLUE, -1, 2)
        )
        slots = {board.cell_for(Color.YELLOW, -1, i) for i in range(4)}
        self.assertEqual(len(slots), 4)

    def test_home_stretch_and_arrival(self):
        self.assertEqual(board.cell_for(Color.RED, 51), Coordinates(2, 8))
        self.assertEqual(board.cell_for(Color.RED, 56), Coordinates(7, 8))
        self.assertEqual(board.cell_for(Color.GREEN, 56), Coordinates(8, 7))

    def test_out_of_range_step_raises(self):
        with self.assertRaises(ValueError):
            board.cell_for(Color.RED, 57)
        with self.assertRaises(ValueError):
            board.cell_for(Color.RED, -2)


class TestGlobalRingIndex(unittest.TestCase):
    def test_ring_positions(self):
        self.assertEqual(board.global_ring_index(Token(Color.RED, 0, 5)), 5)
        self.assertEqual(board.global_ring_index(Token(Color.GREEN, 0, 10)), 23)
        self.assertEqual(board.global_ring_index(Token(Color.YELLOW, 0, 20)), 7)
        self.assertEqual(board.global_ring_index(Token(Color.BLUE, 0, 50)), 24)

    def test_base_and_home_are_off_ring(self):
        self.assertEqual(board.global_ring_index(Token(Color.RED, 0)), board.OFF_RING)
        for step in range(51, 57):
            self.assertEqual(
                board.global_ring_index(Token(Color.GREEN, 1, step)), board.OFF_RING
            )


class TestOccupiedCells(unittest.TestCase):
    def test_groups_tokens_by_drawn_cell(self):
        red, green = Player(Color.RED), Player(Color.GREEN)
        red.tokens[0].step_count = 5
        green.tokens[2].step_count = 44
        cells = board.occupied_cells([red, green])
        self.assertEqual(cells[board.GLOBAL_PATH[5]], ["RED_0", "GREEN_2"])
        self.assertEqual(cells[board.token_cell(red.tokens[1])], ["RED_1"])
        self.assertEqual(sum(len(v) for v in cells.values()), 8)


class TestPathCells(unittest.TestCase):
    def test_leaving_base_is_one_hop(self):
        self.assertEqual(board.path_cells(Color.RED, -1, 0), [Coordinates(2, 7)])

    def test_path_turns_into_home_stretch(self):
        cells = board.path_cells(Color.RED, 48, 52)
        self.assertEqual(
            cells,
            [Coordinates(1, 9), Coordinates(1, 8), Coordinates(2, 8), Coordinates(3, 8)],
        )

    def test_backwards_path_raises(self):
        with self.assertRaises(ValueError):
            board.path_cells(Color.RED, 10, 5)


if __name__ == "__main__":
    unittest.main()
