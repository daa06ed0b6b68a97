"""Incremental board state for the N-Queens search.

A :class:`Board` holds the queens placed so far, one per rank, filled from the
top rank downwards. Three boolean arrays track occupied files and diagonals so
that "does a queen on this square conflict with an earlier one?" is answered in
O(1) on every placement.

Representation
--------------
- ``queens[r] = f`` means a queen on rank ``r``, file ``f``. Only entries with
  ``r < rank`` are meaningful.
- ``files[f]`` marks an occupied file.
- ``left_diagonals[rank - file + size - 1]`` marks an occupied down-right
  diagonal; ``right_diagonals[rank + file]`` an occupied down-left one. Both
  arrays hold ``2 * size - 1`` entries (none when ``size == 0``).

Diagonal numbering on a 4x4 board::

    left (rank - file + 3)      right (rank + file)
        0 1 2 3                     0 1 2 3
      +---------+                 +---------+
    0 | 3 2 1 0 |               0 | 0 1 2 3 |
    1 | 4 3 2 1 |               1 | 1 2 3 4 |
    2 | 5 4 3 2 |               2 | 2 3 4 5 |
    3 | 6 5 4 3 |               3 | 3 4 5 6 |
      +---------+                 +---------+

Contract
--------
- ``place`` always advances the board by one rank, even when the new queen
  conflicts. Callers must ``retract`` after every placement.
- Only the most recent queen can be in conflict: placing onto a conflicted
  board raises :class:`~allqueens.errors.InvalidState`.
"""

from __future__ import annotations

from typing import Iterable, Iterator, List, Optional, Tuple

from .errors import InvalidArgument, InvalidState


class Board:
    """One N x N board mid-search.

    Parameters
    ----------
    size : int
        Number of ranks (and files). Must be a non-negative integer.

    Raises
    ------
    InvalidArgument
        If ``size`` is negative or not an integer.
    """

    __slots__ = (
        "_size",
        "_rank",
        "_conflict",
        "_queens",
        "_files",
        "_left_diagonals",
        "_right_diagonals",
        "_fresh",
    )

    def __init__(self, size: int):
        if isinstance(size, bool) or not isinstance(size, int):
            raise InvalidArgument(f"Board size must be an integer, got {size!r}")
        if size < 0:
            raise InvalidArgument(f"Invalid board size: {size}")

        diagonals = max(2 * size - 1, 0)
        self._size = size
        self._rank = 0
        self._conflict = False
        self._queens: List[int] = [0] * size
        self._files: List[bool] = [False] * size
        self._left_diagonals: List[bool] = [False] * diagonals
        self._right_diagonals: List[bool] = [False] * diagonals
        # Which of (file, left, right) the top queen marked itself; only
        # differs from (True, True, True) while the board is in conflict.
        self._fresh: Tuple[bool, bool, bool] = (True, True, True)

    @classmethod
    def from_queens(cls, files: Iterable[int], size: Optional[int] = None) -> "Board":
        """Build a board by placing ``files`` rank by rank.

        ``size`` defaults to the number of files given. Placement follows the
        usual rules, so a conflicting queen may only appear last.
        """
        files = list(files)
        board = cls(len(files) if size is None else size)
        for file in files:
            board.place(file)
        return board

    # ------------- Diagonal numbering -----------------------------------

    def left_diagonal(self, rank: int, file: int) -> int:
        """Id of the down-right diagonal through ``(rank, file)``."""
        return rank - file + self._size - 1

    def right_diagonal(self, rank: int, file: int) -> int:
        """Id of the down-left diagonal through ``(rank, file)``."""
        return rank + file

    # ------------- Mutation ---------------------------------------------

    def place(self, file: int) -> bool:
        """Add a queen to the current rank in ``file``.

        Parameters
        ----------
        file : int
            File index in ``[0, size)``.

        Returns
        -------
        bool
            True when the board is still conflict-free after the placement.

        Raises
        ------
        InvalidArgument
            If ``file`` is outside ``[0, size)``.
        InvalidState
            If the board is full or already in conflict.
        """
        if isinstance(file, bool) or not isinstance(file, int) or not 0 <= file < self._size:
            raise InvalidArgument(f"Invalid file number: {file!r} (board size {self._size})")
        if self._rank >= self._size:
            raise InvalidState("Cannot add a queen when the board is full")
        if self._conflict:
            raise InvalidState("Cannot add a queen when the board is in a conflict state")

        rank = self._rank
        left = rank - file + self._size - 1
        right = rank + file

        fresh = (
            not self._files[file],
            not self._left_diagonals[left],
            not self._right_diagonals[right],
        )
        self._conflict = not all(fresh)
        self._fresh = fresh

        self._queens[rank] = file
        self._files[file] = True
        self._left_diagonals[left] = True
        self._right_diagonals[right] = True
        self._rank = rank + 1
        return not self._conflict

    def retract(self) -> None:
        """Remove the most recently placed queen.

        The board returns to the state it had before the matching ``place``.
        Marks shared with an earlier queen (the conflicting case) are left set.

        Raises
        ------
        InvalidState
            If no queen has been placed.
        """
        if self._rank <= 0:
            raise InvalidState("No queens to retract")

        self._rank -= 1
        rank = self._rank
        file = self._queens[rank]
        fresh_file, fresh_left, fresh_right = self._fresh

        if fresh_file:
            self._files[file] = False
        if fresh_left:
            self._left_diagonals[rank - file + self._size - 1] = False
        if fresh_right:
            self._right_diagonals[rank + file] = False

        # Every queen below the top was placed onto a conflict-free board.
        self._conflict = False
        self._fresh = (True, True, True)

    # ------------- Queries ----------------------------------------------

    @property
    def size(self) -> int:
        return self._size

    def current_rank(self) -> int:
        """Rank the next queen goes to; also the number of queens placed."""
        return self._rank

    def is_solved(self) -> bool:
        """True when every rank is filled and no queen is attacked."""
        return self._rank == self._size and not self._conflict

    def has_conflict(self) -> bool:
        """True when the last placed queen attacks an earlier one."""
        return self._conflict

    def queens_snapshot(self) -> List[int]:
        """Independent copy of the queens array.

        Only the first ``current_rank()`` entries are meaningful.
        """
        return self._queens.copy()

    def placements(self) -> Iterator[Tuple[int, int]]:
        """Yield ``(rank, file)`` for every placed queen, top rank first."""
        for rank in range(self._rank):
            yield rank, self._queens[rank]

    def is_file_free(self, file: int) -> bool:
        return not self._files[file]

    def is_left_diagonal_free(self, diagonal: int) -> bool:
        return not self._left_diagonals[diagonal]

    def is_right_diagonal_free(self, diagonal: int) -> bool:
        return not self._right_diagonals[diagonal]

    # ------------- Copying ----------------------------------------------

    def copy(self) -> "Board":
        """Return an independent board with identical state."""
        other = Board.__new__(Board)
        other._size = self._size
        other._rank = self._rank
        other._conflict = self._conflict
        other._queens = self._queens.copy()
        other._files = self._files.copy()
        other._left_diagonals = self._left_diagonals.copy()
        other._right_diagonals = self._right_diagonals.copy()
        other._fresh = self._fresh
        return other

    def __copy__(self) -> "Board":
        return self.copy()

    def __deepcopy__(self, memo) -> "Board":
        return self.copy()

    # ------------- Comparison and rendering -----------------------------

    def _state(self):
        return (
            self._size,
            self._rank,
            self._conflict,
            self._queens[: self._rank],
            self._files,
            self._left_diagonals,
            self._right_diagonals,
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self._state() == other._state()

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        placed = self._queens[: self._rank]
        return f"Board(size={self._size}, rank={self._rank}, queens={placed}, conflict={self._conflict})"

    def __str__(self) -> str:
        lines: List[str] = []
        if self._size <= 0:
            lines.append("No board.")
        else:
            separator = "+" + "---+" * self._size
            lines.append("Board:")
            lines.append(separator)
            for rank in range(self._size):
                placed = rank < self._rank
                cells = [
                    " Q " if placed and file == self._queens[rank] else "   "
                    for file in range(self._size)
                ]
                lines.append("|" + "|".join(cells) + "|")
                lines.append(separator)

        lines.append(f"Size: {self._size}")
        lines.append(f"Current rank: {self._rank}")
        lines.append("SOLVED!" if self.is_solved() else "Unsolved.")
        lines.append("CONFLICT!" if self._conflict else "No conflicts.")
        return "\n".join(lines) + "\n"
