"""CSV export utilities for solver outputs (aggregates, raw runs, solutions).

These helpers materialize concise CSV summaries as well as full per-run raw
data for downstream analysis or spreadsheet inspection. Filenames carry the
optional run tag and date suffix configured in ``settings``.
"""
from __future__ import annotations

import csv
import os
from typing import Any, List, Optional, Sequence

from . import settings
from .stats import ExperimentResults, StatsSummary


def _fmt(value: Optional[Any]) -> Any:
    return "" if value is None else value


def _stat(summary: Optional[StatsSummary], key: str) -> Any:
    if not summary:
        return ""
    return _fmt(summary.get(key))


def save_results_to_csv(results: ExperimentResults, out_dir: str) -> str:
    """Write one aggregate row per board size and return the file path.

    Column names follow lowercase snake_case; time columns are in seconds.
    """
    os.makedirs(out_dir, exist_ok=True)
    filename = os.path.join(out_dir, f"results{settings.filename_suffix()}.csv")

    with open(filename, "w", newline="") as f:
        writer = csv.writer(f)
        writer.writerow([
            "n",
            "runs",
            "solutions",
            "expected_solutions",
            "matches_expected",
            "boards_examined",
            "time_mean_seconds",
            "time_median_seconds",
            "time_std_seconds",
            "time_min_seconds",
            "time_max_seconds",
            "time_per_board_mean_seconds",
            "first_solution",
        ])
        for size in results["sizes"]:
            entry = results["entries"].get(size)
            if not entry:
                continue
            first = entry.get("first_solution")
            writer.writerow([
                size,
                entry.get("total_runs", 0),
                entry.get("solutions", 0),
                _fmt(entry.get("expected_solutions")),
                _fmt(entry.get("matches_expected")),
                entry.get("boards", 0),
                _stat(entry.get("time"), "mean"),
                _stat(entry.get("time"), "median"),
                _stat(entry.get("time"), "std"),
                _stat(entry.get("time"), "min"),
                _stat(entry.get("time"), "max"),
                _stat(entry.get("time_per_board"), "mean"),
                " ".join(str(file) for file in first) if first else "",
            ])

    print(f"Saved aggregate results: {filename}")
    return filename


def save_raw_runs_to_csv(results: ExperimentResults, out_dir: str) -> str:
    """Write every individual run (size, run index, counts, time) to CSV."""
    os.makedirs(out_dir, exist_ok=True)
    filename = os.path.join(out_dir, f"raw_runs{settings.filename_suffix()}.csv")

    with open(filename, "w", newline="") as f:
        writer = csv.writer(f)
        writer.writerow(["n", "run", "solutions", "boards_examined", "time_seconds"])
        for size in results["sizes"]:
            entry = results["entries"].get(size)
            if not entry:
                continue
            for record in entry.get("raw_runs", []):
                writer.writerow([
                    record["size"],
                    record["run"],
                    record["solutions"],
                    record["boards"],
                    record["time"],
                ])

    print(f"Saved raw runs: {filename}")
    return filename


def save_solutions_to_csv(solutions: Sequence[Sequence[int]], size: int, out_dir: str) -> str:
    """Write the solutions of one size, one row each, one column per rank.

    The header is ``index, rank_0 .. rank_{size-1}``; cells hold file indices.
    """
    os.makedirs(out_dir, exist_ok=True)
    filename = os.path.join(out_dir, f"solutions_N{size}{settings.filename_suffix()}.csv")

    with open(filename, "w", newline="") as f:
        writer = csv.writer(f)
        header: List[str] = ["index"] + [f"rank_{rank}" for rank in range(size)]
        writer.writerow(header)
        for index, solution in enumerate(solutions):
            writer.writerow([index] + list(solution))

    print(f"Saved {len(solutions)} solutions for N={size}: {filename}")
    return filename
