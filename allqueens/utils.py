"""Independent checks for N-Queens placements.

These helpers do not share any state with :class:`~allqueens.board.Board`; they
re-derive conflicts from a plain placement so solver output can be validated
against a separate implementation.

Representation
--------------
Placements are encoded as a 1D sequence where ``queens[rank] = file``.
"""

from __future__ import annotations

from collections import Counter
from typing import Dict, Optional, Sequence

# Number of distinct solutions per board size (OEIS A000170).
KNOWN_SOLUTION_COUNTS: Dict[int, int] = {
    0: 1,
    1: 1,
    2: 0,
    3: 0,
    4: 2,
    5: 10,
    6: 4,
    7: 40,
    8: 92,
    9: 352,
    10: 724,
    11: 2680,
    12: 14200,
    13: 73712,
    14: 365596,
}


def conflicts(queens: Sequence[int]) -> int:
    """Count attacking queen pairs in O(N).

    Groups queens by file and by both diagonals with counters; every group of
    ``k`` queens contributes ``k * (k - 1) / 2`` pairs.
    """
    file_count: Counter[int] = Counter()
    left: Counter[int] = Counter()
    right: Counter[int] = Counter()

    for rank, file in enumerate(queens):
        file_count[file] += 1
        left[rank - file] += 1
        right[rank + file] += 1

    def _pairs(counter: Counter[int]) -> int:
        total = 0
        for count in counter.values():
            if count > 1:
                total += count * (count - 1) // 2
        return total

    return _pairs(file_count) + _pairs(left) + _pairs(right)


def conflicts_on2(queens: Sequence[int]) -> int:
    """Count attacking queen pairs in O(N^2).

    Naive reference used to cross-check ``conflicts`` and the board's
    incremental bookkeeping.
    """
    n = len(queens)
    conflicts_count = 0
    for i in range(n):
        for j in range(i + 1, n):
            if queens[i] == queens[j] or abs(queens[i] - queens[j]) == abs(i - j):
                conflicts_count += 1
    return conflicts_count


def is_valid_solution(queens: Sequence[int], size: Optional[int] = None) -> bool:
    """Return True if ``queens`` is a complete, non-attacking placement.

    Contract
    - Input: sequence where queens[rank] = file (0-based); ``size`` defaults
      to ``len(queens)`` and must match it when given.
    - Valid if: every file is an int in ``[0, size)``, all files are distinct
      and no two queens share a diagonal.
    - The empty placement is the single solution of the 0 x 0 board.
    """
    n = len(queens)
    if size is not None and size != n:
        return False
    for file in queens:
        if isinstance(file, bool) or not isinstance(file, int):
            return False
        if file < 0 or file >= n:
            return False
    if len(set(queens)) != n:
        return False
    return conflicts_on2(queens) == 0


def expected_solution_count(size: int) -> Optional[int]:
    """Known number of solutions for ``size``, or None when not tabulated."""
    return KNOWN_SOLUTION_COUNTS.get(size)
