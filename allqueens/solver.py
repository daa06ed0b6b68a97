"""Exhaustive recursive backtracking over a single shared :class:`Board`.

The search fills one rank per recursion level. At each level every file is
tried in ascending order: the attempt is counted, the queen is placed, the
search descends if the board is still conflict-free, and the placement is
always retracted before the next file is tried. Solutions therefore come out
in lexicographic order.

Contract (public API)
---------------------
- ``Solver().solve(size)`` returns a :class:`SolverRun` holding every
  solution, the number of boards examined and the elapsed wall-clock seconds
  (``perf_counter``).
- ``solve_nqueens(size)`` returns the same data as a
  ``(solutions, boards_examined, elapsed_seconds)`` tuple.
- Boards examined counts every placement attempt, including those that
  introduce a conflict.
- ``size < 0`` raises :class:`~allqueens.errors.InvalidArgument`.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, field
from time import perf_counter
from typing import Callable, List, Tuple

from .board import Board

# Headroom above the search depth for the caller's own frames.
_STACK_MARGIN = 100


@dataclass
class SolverRun:
    """Accumulated output of one ``solve`` call."""

    size: int
    solutions: List[List[int]] = field(default_factory=list)
    boards: int = 0
    elapsed: float = 0.0

    @property
    def count(self) -> int:
        return len(self.solutions)

    def summary(self) -> str:
        """One-line human-readable report of the run."""
        return (
            f"Found {self.count} solutions in {self.elapsed} "
            f"after considering {self.boards} boards."
        )


def search(board: Board, run: SolverRun) -> None:
    """Extend ``board`` from its current rank, recording solutions in ``run``.

    Requires ranks ``0 .. board.current_rank() - 1`` to hold a conflict-free
    prefix. On return the board is back in the state it was called with.
    """
    if board.is_solved():
        run.solutions.append(board.queens_snapshot())
        return

    for file in range(board.size):
        run.boards += 1
        if board.place(file):
            search(board, run)
        # place() advances the rank even on conflict.
        board.retract()


class Solver:
    """Enumerate every N-Queens solution for a board size.

    Parameters
    ----------
    board_factory : callable, default :class:`Board`
        Builds the board for a run from its size. Tests inject instrumented
        subclasses here.

    Attributes
    ----------
    solutions, boards, elapsed
        Mirror the most recent run; reset at the start of every ``solve``.
    """

    def __init__(self, board_factory: Callable[[int], Board] = Board):
        self.board_factory = board_factory
        self.run = SolverRun(size=0)

    @property
    def solutions(self) -> List[List[int]]:
        return self.run.solutions

    @property
    def boards(self) -> int:
        return self.run.boards

    @property
    def elapsed(self) -> float:
        return self.run.elapsed

    def solve(self, size: int) -> SolverRun:
        """Run the exhaustive search for ``size`` and return its result.

        Raises
        ------
        InvalidArgument
            If ``size`` is negative.
        """
        start = perf_counter()
        self.run = SolverRun(size=size)
        board = self.board_factory(size)

        needed = size + _STACK_MARGIN
        if sys.getrecursionlimit() < needed:
            sys.setrecursionlimit(needed)

        search(board, self.run)
        self.run.elapsed = perf_counter() - start
        return self.run


def solve_nqueens(size: int) -> Tuple[List[List[int]], int, float]:
    """Enumerate all solutions for ``size``.

    Returns
    -------
    (solutions, boards_examined, elapsed_seconds)
    """
    run = Solver().solve(size)
    return run.solutions, run.boards, run.elapsed
