"""Typed result shapes and statistics helpers for the analysis pipeline.

Defines ``TypedDict`` structures for experiment outputs and provides utilities
to compute aggregate statistics across repeated solver runs.
"""
from __future__ import annotations

import statistics
from typing import Dict, List, Optional, TypedDict


class StatsSummary(TypedDict, total=False):
    count: int
    mean: Optional[float]
    median: Optional[float]
    std: Optional[float]
    min: Optional[float]
    max: Optional[float]
    q25: Optional[float]
    q75: Optional[float]
    range: Optional[float]


class RunRecord(TypedDict):
    size: int
    run: int
    solutions: int
    boards: int
    time: float


class SizeEntry(TypedDict, total=False):
    size: int
    total_runs: int
    solutions: int
    boards: int
    expected_solutions: Optional[int]
    matches_expected: Optional[bool]
    time: StatsSummary
    time_per_board: StatsSummary
    first_solution: Optional[List[int]]
    raw_runs: List[RunRecord]


class ExperimentResults(TypedDict):
    sizes: List[int]
    entries: Dict[int, SizeEntry]
    solutions: Dict[int, List[List[int]]]


class ProgressPrinter:
    """Minimal, stdout-only progress reporter for long-running loops.

    Parameters
    ----------
    total : int
        Total number of steps/items expected. Values <= 0 are coerced to 1 to
        avoid division by zero when reporting percentages.
    label : str
        Short label printed in front of the progress counters to provide
        context (e.g., the current phase).
    """

    def __init__(self, total: int, label: str):
        self.total = max(1, total)
        self.label = label

    def update(self, index: int, detail: str = "") -> None:
        """Print a single-line progress update to stdout.

        ``index`` may exceed ``total``; the percentage then reads above 100%.
        ``detail`` is appended after a dash when non-empty.
        """
        percent = (index / self.total) * 100
        suffix = f" - {detail}" if detail else ""
        print(f"[{self.label}] {index}/{self.total} ({percent:.0f}%)" + suffix)


def compute_detailed_statistics(values: List[float]) -> StatsSummary:
    """Compute summary statistics for a numeric sequence.

    Parameters
    ----------
    values : List[float]
        Finite numeric values to summarize.

    Returns
    -------
    StatsSummary
        count, mean, median, std, min, max, 25th and 75th percentiles (q25,
        q75) and range. When ``values`` is empty, all numeric fields are
        ``None`` and ``count`` is 0 to keep CSV/plot generation consistent.
        Standard deviation is the population one.
    """
    if not values:
        return {
            "count": 0,
            "mean": None,
            "median": None,
            "std": None,
            "min": None,
            "max": None,
            "q25": None,
            "q75": None,
            "range": None,
        }

    sorted_vals = sorted(values)
    n = len(values)

    mean_val = statistics.mean(values)
    median_val = statistics.median(values)
    min_val = min(values)
    max_val = max(values)
    range_val = max_val - min_val
    std_val = statistics.pstdev(values) if n > 1 else 0

    q25 = sorted_vals[n // 4] if n >= 4 else min_val
    q75 = sorted_vals[3 * n // 4] if n >= 4 else max_val

    return {
        "count": n,
        "mean": mean_val,
        "median": median_val,
        "std": std_val,
        "min": min_val,
        "max": max_val,
        "q25": q25,
        "q75": q75,
        "range": range_val,
    }


def summarize_runs(records: List[RunRecord]) -> SizeEntry:
    """Aggregate repeated runs of one board size.

    Solution and board counts are taken from the first record; callers are
    expected to have checked that every run agrees on them. Time per board is
    left out for runs that examined no boards.
    """
    if not records:
        return {"total_runs": 0, "time": compute_detailed_statistics([]), "raw_runs": []}

    first = records[0]
    times = [r["time"] for r in records]
    per_board = [r["time"] / r["boards"] for r in records if r["boards"] > 0]
    return {
        "size": first["size"],
        "total_runs": len(records),
        "solutions": first["solutions"],
        "boards": first["boards"],
        "time": compute_detailed_statistics(times),
        "time_per_board": compute_detailed_statistics(per_board),
        "raw_runs": list(records),
    }
