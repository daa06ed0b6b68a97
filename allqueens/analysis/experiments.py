"""Repeated solver runs over several board sizes.

The search is deterministic, so repeated runs of the same size must agree on
the number of solutions and on the number of boards examined; only the
wall-clock time varies. Runs are executed sequentially to keep timings free of
scheduling noise.

Outputs are structured dictionaries suitable for CSV export and plotting.
Validation hooks optionally re-check every solution with the naive conflict
counter and compare solution counts against the known table.
"""
from __future__ import annotations

from typing import List, Optional, Sequence

import numpy as np

from .settings import RUNS
from .stats import ExperimentResults, ProgressPrinter, RunRecord, summarize_runs
from allqueens.solver import Solver
from allqueens.utils import expected_solution_count, is_valid_solution


def run_single_size(size: int, run_index: int, solver: Optional[Solver] = None):
    """Solve ``size`` once and return ``(record, solutions)``."""
    solver = solver or Solver()
    result = solver.solve(size)
    record: RunRecord = {
        "size": size,
        "run": run_index,
        "solutions": result.count,
        "boards": result.boards,
        "time": result.elapsed,
    }
    return record, result.solutions


def validate_solutions(size: int, solutions: Sequence[Sequence[int]]) -> None:
    """Raise ``AssertionError`` unless every solution checks out independently."""
    for solution in solutions:
        if not is_valid_solution(solution, size):
            raise AssertionError(f"Invalid solution produced for N={size}: {list(solution)}")
    if len({tuple(s) for s in solutions}) != len(solutions):
        raise AssertionError(f"Duplicate solutions produced for N={size}")
    expected = expected_solution_count(size)
    if expected is not None and expected != len(solutions):
        raise AssertionError(
            f"Wrong number of solutions for N={size}: found {len(solutions)}, expected {expected}"
        )


def run_experiments(
    sizes: Sequence[int],
    runs: int = RUNS,
    validate: bool = False,
    progress_label: str = "Experiments",
) -> ExperimentResults:
    """Solve every size ``runs`` times and aggregate the outcome.

    Parameters
    ----------
    sizes : Sequence[int]
        Board sizes to evaluate, in the order they should be reported.
    runs : int
        Number of repetitions per size (at least 1).
    validate : bool
        Re-check solutions and compare with known counts.
    progress_label : str
        Label for the progress lines printed to stdout.

    Returns
    -------
    ExperimentResults
        ``entries`` maps size to its aggregate ``SizeEntry``; ``solutions``
        maps size to the solutions of the first run.

    Raises
    ------
    ValueError
        If ``runs`` is smaller than 1.
    AssertionError
        If runs disagree, or validation is enabled and a check fails.
    """
    if runs < 1:
        raise ValueError(f"runs must be at least 1, got {runs}")

    size_list = list(sizes)
    results: ExperimentResults = {"sizes": size_list, "entries": {}, "solutions": {}}
    progress = ProgressPrinter(len(size_list) * runs, progress_label)
    solver = Solver()
    step = 0

    for size in size_list:
        records: List[RunRecord] = []
        for run_index in range(runs):
            record, solutions = run_single_size(size, run_index, solver)
            step += 1
            progress.update(step, f"N={size} run {run_index + 1}/{runs}")

            if records:
                reference = records[0]
                if (record["solutions"], record["boards"]) != (reference["solutions"], reference["boards"]):
                    raise AssertionError(
                        f"Non-deterministic result for N={size}: "
                        f"{record['solutions']}/{record['boards']} vs "
                        f"{reference['solutions']}/{reference['boards']}"
                    )
            else:
                if validate:
                    validate_solutions(size, solutions)
                results["solutions"][size] = solutions
            records.append(record)

        entry = summarize_runs(records)
        expected = expected_solution_count(size)
        entry["expected_solutions"] = expected
        entry["matches_expected"] = None if expected is None else expected == entry["solutions"]
        first = results["solutions"][size]
        entry["first_solution"] = list(first[0]) if first else None
        results["entries"][size] = entry

    return results


def queen_frequency(solutions: Sequence[Sequence[int]], size: int) -> np.ndarray:
    """Count how often each square holds a queen across ``solutions``.

    Returns an integer ``size x size`` matrix indexed ``[rank, file]``.
    """
    matrix = np.zeros((size, size), dtype=int)
    for solution in solutions:
        for rank, file in enumerate(solution):
            matrix[rank, file] += 1
    return matrix
