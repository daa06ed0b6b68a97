"""Unit tests for the incremental board state."""

from pathlib import Path
import copy
import itertools
import sys
import unittest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from allqueens.board import Board
from allqueens.errors import InvalidArgument, InvalidState, QueensError
from allqueens.utils import conflicts_on2


def _observed(board):
    """Everything a caller can see about a board, prefix of queens included."""
    rank = board.current_rank()
    return (
        board.size,
        rank,
        board.has_conflict(),
        board.is_solved(),
        board.queens_snapshot()[:rank],
        [board.is_file_free(f) for f in range(board.size)],
        [board.is_left_diagonal_free(d) for d in range(max(2 * board.size - 1, 0))],
        [board.is_right_diagonal_free(d) for d in range(max(2 * board.size - 1, 0))],
    )


def _valid_prefixes(size, max_depth):
    """Yield every conflict-free placement prefix up to ``max_depth`` queens."""
    for depth in range(max_depth + 1):
        for prefix in itertools.product(range(size), repeat=depth):
            if conflicts_on2(prefix) == 0:
                yield list(prefix)


class ConstructionTests(unittest.TestCase):

    def test_empty_board(self):
        board = Board(5)
        self.assertEqual(board.size, 5)
        self.assertEqual(board.current_rank(), 0)
        self.assertFalse(board.has_conflict())
        self.assertFalse(board.is_solved())
        self.assertTrue(all(board.is_file_free(f) for f in range(5)))
        self.assertTrue(all(board.is_left_diagonal_free(d) for d in range(9)))
        self.assertTrue(all(board.is_right_diagonal_free(d) for d in range(9)))

    def test_zero_size_board_is_solved(self):
        board = Board(0)
        self.assertEqual(board.current_rank(), 0)
        self.assertTrue(board.is_solved())
        self.assertEqual(board.queens_snapshot(), [])

    def test_negative_size_rejected(self):
        with self.assertRaises(InvalidArgument):
            Board(-1)

    def test_non_integer_size_rejected(self):
        for bad in (2.5, "8", None, True):
            with self.subTest(size=bad):
                with self.assertRaises(InvalidArgument):
                    Board(bad)

    def test_errors_share_a_base_and_builtin(self):
        self.assertTrue(issubclass(InvalidArgument, QueensError))
        self.assertTrue(issubclass(InvalidArgument, ValueError))
        self.assertTrue(issubclass(InvalidState, QueensError))
        self.assertTrue(issubclass(InvalidState, RuntimeError))


class DiagonalNumberingTests(unittest.TestCase):

    def test_left_diagonal_layout(self):
        board = Board(4)
        grid = [[board.left_diagonal(r, f) for f in range(4)] for r in range(4)]
        self.assertEqual(grid, [[3, 2, 1, 0], [4, 3, 2, 1], [5, 4, 3, 2], [6, 5, 4, 3]])

    def test_right_diagonal_layout(self):
        board = Board(4)
        grid = [[board.right_diagonal(r, f) for f in range(4)] for r in range(4)]
        self.assertEqual(grid, [[0, 1, 2, 3], [1, 2, 3, 4], [2, 3, 4, 5], [3, 4, 5, 6]])

    def test_place_marks_expected_ids(self):
        board = Board(5)
        board.place(3)
        board.place(0)
        # (0, 3): left 0 - 3 + 4 = 1, right 3; (1, 0): left 5, right 1.
        self.assertFalse(board.is_left_diagonal_free(1))
        self.assertFalse(board.is_right_diagonal_free(3))
        self.assertFalse(board.is_left_diagonal_free(5))
        self.assertFalse(board.is_right_diagonal_free(1))
        self.assertFalse(board.is_file_free(3))
        self.assertFalse(board.is_file_free(0))
        self.assertTrue(board.is_file_free(1))


class PlaceTests(unittest.TestCase):

    def test_valid_placement_advances_rank(self):
        board = Board(4)
        self.assertTrue(board.place(1))
        self.assertEqual(board.current_rank(), 1)
        self.assertFalse(board.has_conflict())
        self.assertEqual(board.queens_snapshot()[:1], [1])

    def test_file_conflict(self):
        board = Board(4)
        board.place(2)
        self.assertFalse(board.place(2))
        self.assertTrue(board.has_conflict())
        self.assertEqual(board.current_rank(), 2)

    def test_left_diagonal_conflict(self):
        board = Board(4)
        board.place(0)
        self.assertFalse(board.place(1))
        self.assertTrue(board.has_conflict())

    def test_right_diagonal_conflict(self):
        board = Board(4)
        board.place(2)
        self.assertFalse(board.place(1))
        self.assertTrue(board.has_conflict())

    def test_distant_diagonal_conflict(self):
        board = Board(5)
        self.assertTrue(board.place(0))
        self.assertTrue(board.place(4))
        # (2, 2) shares only the down-right diagonal with (0, 0).
        self.assertTrue(board.is_file_free(2))
        self.assertTrue(board.is_right_diagonal_free(board.right_diagonal(2, 2)))
        self.assertFalse(board.place(2))
        self.assertTrue(board.has_conflict())

    def test_out_of_range_file_rejected(self):
        board = Board(4)
        for bad in (-1, 4, 10):
            with self.subTest(file=bad):
                with self.assertRaises(InvalidArgument):
                    board.place(bad)
        self.assertEqual(board.current_rank(), 0)

    def test_place_on_zero_board_rejected(self):
        with self.assertRaises(InvalidArgument):
            Board(0).place(0)

    def test_place_on_full_board_rejected(self):
        board = Board.from_queens([1, 3, 0, 2])
        self.assertTrue(board.is_solved())
        with self.assertRaises(InvalidState):
            board.place(0)

    def test_place_on_conflicted_board_rejected(self):
        board = Board(4)
        board.place(0)
        board.place(0)
        with self.assertRaises(InvalidState):
            board.place(2)
        self.assertEqual(board.current_rank(), 2)

    def test_full_board_with_conflict_is_not_solved(self):
        board = Board(2)
        board.place(0)
        board.place(1)
        self.assertEqual(board.current_rank(), 2)
        self.assertTrue(board.has_conflict())
        self.assertFalse(board.is_solved())


class RetractTests(unittest.TestCase):

    def test_retract_on_empty_board_rejected(self):
        with self.assertRaises(InvalidState):
            Board(3).retract()
        with self.assertRaises(InvalidState):
            Board(0).retract()

    def test_retract_clears_conflict(self):
        board = Board(4)
        board.place(0)
        board.place(1)
        board.retract()
        self.assertFalse(board.has_conflict())
        self.assertEqual(board.current_rank(), 1)

    def test_retract_after_conflict_keeps_earlier_marks(self):
        board = Board(4)
        board.place(2)
        board.place(2)  # same file as rank 0
        board.retract()
        self.assertFalse(board.is_file_free(2))
        # The sibling that would share file 2 must still be caught.
        self.assertFalse(board.place(2))

    def test_place_then_retract_restores_state(self):
        for size in range(1, 6):
            for prefix in _valid_prefixes(size, min(size - 1, 3)):
                board = Board.from_queens(prefix, size)
                before = _observed(board)
                for file in range(size):
                    with self.subTest(size=size, prefix=prefix, file=file):
                        board.place(file)
                        board.retract()
                        self.assertEqual(_observed(board), before)

    def test_retract_all_returns_to_empty(self):
        board = Board.from_queens([1, 3, 0, 2])
        for _ in range(4):
            board.retract()
        self.assertEqual(board, Board(4))


class QueryTests(unittest.TestCase):

    def test_snapshot_is_independent(self):
        board = Board.from_queens([1, 3, 0, 2])
        snapshot = board.queens_snapshot()
        board.retract()
        board.retract()
        board.place(1)
        self.assertEqual(snapshot, [1, 3, 0, 2])
        snapshot[0] = 99
        self.assertEqual(board.queens_snapshot()[0], 1)

    def test_placements(self):
        board = Board(6)
        board.place(1)
        board.place(3)
        self.assertEqual(list(board.placements()), [(0, 1), (1, 3)])

    def test_from_queens_with_explicit_size(self):
        board = Board.from_queens([0, 2], size=5)
        self.assertEqual(board.size, 5)
        self.assertEqual(board.current_rank(), 2)
        self.assertFalse(board.is_solved())


class CopyTests(unittest.TestCase):

    def test_copy_is_equal_and_independent(self):
        board = Board(5)
        board.place(0)
        board.place(2)
        clone = board.copy()
        self.assertEqual(clone, board)
        self.assertIsNot(clone, board)

        clone.place(4)
        self.assertEqual(board.current_rank(), 2)
        self.assertTrue(board.is_file_free(4))
        self.assertNotEqual(clone, board)

    def test_copy_preserves_conflict(self):
        board = Board(4)
        board.place(1)
        board.place(1)
        clone = copy.copy(board)
        self.assertTrue(clone.has_conflict())
        clone.retract()
        self.assertTrue(board.has_conflict())
        self.assertFalse(clone.is_file_free(1))

    def test_deepcopy(self):
        board = Board.from_queens([1, 3], size=4)
        clone = copy.deepcopy(board)
        clone.retract()
        self.assertEqual(board.current_rank(), 2)
        self.assertEqual(clone.current_rank(), 1)


class RenderingTests(unittest.TestCase):

    def test_render_solved_board(self):
        text = str(Board.from_queens([1, 3, 0, 2]))
        lines = text.splitlines()
        self.assertEqual(lines[0], "Board:")
        self.assertEqual(lines[1], "+---+---+---+---+")
        self.assertEqual(lines[2], "|   | Q |   |   |")
        self.assertEqual(lines[4], "|   |   |   | Q |")
        self.assertEqual(lines[6], "| Q |   |   |   |")
        self.assertEqual(lines[8], "|   |   | Q |   |")
        self.assertIn("Size: 4", lines)
        self.assertIn("Current rank: 4", lines)
        self.assertIn("SOLVED!", lines)
        self.assertIn("No conflicts.", lines)

    def test_render_partial_board_hides_stale_entries(self):
        board = Board.from_queens([1, 3, 0, 2])
        board.retract()
        lines = str(board).splitlines()
        self.assertEqual(lines[8], "|   |   |   |   |")
        self.assertIn("Unsolved.", lines)

    def test_render_conflict(self):
        board = Board(3)
        board.place(0)
        board.place(1)
        self.assertIn("CONFLICT!", str(board).splitlines())

    def test_render_empty_board(self):
        lines = str(Board(0)).splitlines()
        self.assertEqual(lines[0], "No board.")
        self.assertIn("SOLVED!", lines)

    def test_repr(self):
        board = Board(4)
        board.place(2)
        self.assertEqual(repr(board), "Board(size=4, rank=1, queens=[2], conflict=False)")


if __name__ == "__main__":
    unittest.main()
