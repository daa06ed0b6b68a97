"""Exhaustive N-Queens enumeration by incremental backtracking."""

from .board import Board
from .errors import InvalidArgument, InvalidState, QueensError
from .solver import Solver, SolverRun, search, solve_nqueens
from .utils import (
    KNOWN_SOLUTION_COUNTS,
    conflicts,
    conflicts_on2,
    expected_solution_count,
    is_valid_solution,
)

__all__ = [
    "Board",
    "Solver",
    "SolverRun",
    "search",
    "solve_nqueens",
    "QueensError",
    "InvalidArgument",
    "InvalidState",
    "KNOWN_SOLUTION_COUNTS",
    "conflicts",
    "conflicts_on2",
    "expected_solution_count",
    "is_valid_solution",
]
