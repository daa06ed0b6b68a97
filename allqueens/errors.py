"""Exceptions raised by the board and the solver.

Both concrete errors derive from the builtin they specialise so callers that
already handle ``ValueError``/``RuntimeError`` keep working.
"""

from __future__ import annotations


class QueensError(Exception):
    """Base class for all errors raised by :mod:`allqueens`."""


class InvalidArgument(QueensError, ValueError):
    """A board size is negative or a file lies outside ``[0, size)``."""


class InvalidState(QueensError, RuntimeError):
    """An operation does not fit the board's current state.

    Raised when placing into a full or conflicted board, or retracting from an
    empty one. These indicate a broken calling contract in the search driver.
    """
