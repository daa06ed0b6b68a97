"""Command-line interface and high-level pipelines for the N-Queens solver.

This module wires together configuration loading, the single-run driver
(solve one size and print the summary line), the multi-size experiment
pipeline (repeated runs, CSV export, charts), and a quick regression check. It
isolates I/O, argument parsing, and progress reporting from the core board and
solver so that those remain easy to test programmatically.
"""
from __future__ import annotations

import argparse
import os
import tempfile
from pathlib import Path
from time import perf_counter
from typing import List, Optional, Sequence

from . import settings
from .experiments import run_experiments, validate_solutions
from .reporting import save_raw_runs_to_csv, save_results_to_csv, save_solutions_to_csv
from config_manager import ConfigManager
from allqueens.board import Board
from allqueens.errors import InvalidArgument
from allqueens.solver import Solver, SolverRun
from allqueens.utils import KNOWN_SOLUTION_COUNTS, is_valid_solution


# ------------- Utils --------------------------------------------------------

def parse_sizes(size_args: Optional[List[str]]) -> Optional[List[int]]:
    """Normalize board-size CLI inputs into an ordered list of ints.

    Accepts repeated flags (``-s 4 -s 8``), comma-separated lists
    (``-s 4,6,8``) and inclusive ranges (``-s 4-10``). Duplicates are dropped
    keeping first occurrence. Returns ``None`` when no sizes are given so that
    callers can fall back to the configured default set.
    """
    if not size_args:
        return None
    selected: List[int] = []
    for entry in size_args:
        for token in entry.split(","):
            token = token.strip()
            if not token:
                continue
            try:
                if "-" in token.lstrip("-"):
                    low_text, high_text = token.split("-", 1)
                    low, high = int(low_text), int(high_text)
                    if low > high:
                        raise ValueError(f"Empty size range '{token}'")
                    selected.extend(range(low, high + 1))
                else:
                    selected.append(int(token))
            except ValueError as exc:
                raise ValueError(f"Invalid board size '{token}': {exc}") from exc
    negative = [n for n in selected if n < 0]
    if negative:
        raise ValueError("Board sizes must be non-negative: " + ", ".join(str(n) for n in negative))
    unique = list(dict.fromkeys(selected))  # preserve order, remove dups
    return unique or None


def apply_configuration(config_path: str) -> ConfigManager:
    """Load configuration and apply it to the global ``settings`` module.

    Missing sections keep the module defaults. Returns the ``ConfigManager``
    used so callers can persist further changes.
    """
    config_mgr = ConfigManager(config_path)

    solver_settings = config_mgr.get_solver_settings()
    if solver_settings:
        settings.DEFAULT_SIZE = int(solver_settings.get("default_size", settings.DEFAULT_SIZE))
        settings.SHOW_SOLUTIONS = bool(solver_settings.get("show_solutions", settings.SHOW_SOLUTIONS))
        limit = solver_settings.get("solution_limit", settings.SOLUTION_LIMIT)
        settings.SOLUTION_LIMIT = None if limit is None else int(limit)

    experiment_settings = config_mgr.get_experiment_settings()
    if experiment_settings:
        settings.SIZES = [int(n) for n in experiment_settings.get("sizes", settings.SIZES)]
        settings.RUNS = int(experiment_settings.get("runs", settings.RUNS))
        settings.OUT_DIR = experiment_settings.get("output_dir", settings.OUT_DIR)

    output_settings = config_mgr.get_output_settings()
    if output_settings:
        settings.set_output_naming(
            date_in_filenames=output_settings.get("date_in_filenames", settings.DATE_IN_FILENAMES),
            run_tag=output_settings.get("run_tag", settings.RUN_TAG),
        )

    if settings.DEFAULT_SIZE < 0:
        raise ValueError(f"default_size must be non-negative, got {settings.DEFAULT_SIZE}")
    if settings.RUNS < 1:
        raise ValueError(f"runs must be at least 1, got {settings.RUNS}")
    return config_mgr


def render_solutions(solutions: Sequence[Sequence[int]], size: int, limit: Optional[int] = None) -> None:
    """Print the board of each solution, up to ``limit`` of them."""
    shown = solutions if limit is None else solutions[:limit]
    for index, solution in enumerate(shown, start=1):
        print(f"Solution {index}/{len(solutions)}: {list(solution)}")
        print(Board.from_queens(solution, size))
    hidden = len(solutions) - len(shown)
    if hidden > 0:
        print(f"... {hidden} more solutions not shown.")


# ------------- Pipeline: single run ----------------------------------------

def run_single(
    size: int,
    show: bool = False,
    limit: Optional[int] = None,
    validate: bool = False,
) -> SolverRun:
    """Solve one board size and print the summary line.

    With ``validate`` every solution is re-checked independently and the count
    compared with the known table before the summary is printed.
    """
    solver = Solver()
    run = solver.solve(size)
    if validate:
        validate_solutions(size, run.solutions)
        print(f"Validation passed: {run.count} solutions for N={size} checked independently.")
    if show:
        render_solutions(run.solutions, size, limit)
    print(run.summary())
    return run


# ------------- Pipeline: experiments ---------------------------------------

def run_experiment_pipeline(
    sizes: List[int],
    runs: int,
    out_dir: str,
    validate: bool = False,
    plot: bool = False,
    save_solutions: bool = False,
) -> None:
    """Run repeated solves over ``sizes`` and export CSV (and charts)."""
    start_total = perf_counter()

    print("\n" + "=" * 70)
    print("PHASE 1: REPEATED RUNS")
    print("=" * 70)
    results = run_experiments(sizes, runs=runs, validate=validate)

    for size in sizes:
        entry = results["entries"][size]
        mean_time = entry["time"].get("mean") or 0.0
        expected = entry.get("expected_solutions")
        check = "" if expected is None else (" (ok)" if entry.get("matches_expected") else f" (expected {expected})")
        print(
            f"  N={size}: {entry['solutions']} solutions{check}, "
            f"{entry['boards']} boards, mean {mean_time:.6f}s over {entry['total_runs']} runs"
        )

    print("\n" + "=" * 70)
    print("PHASE 2: EXPORT")
    print("=" * 70)
    save_results_to_csv(results, out_dir)
    save_raw_runs_to_csv(results, out_dir)
    if save_solutions:
        for size in sizes:
            save_solutions_to_csv(results["solutions"][size], size, out_dir)

    if plot:
        from .plots import plot_and_save  # local import to avoid loading matplotlib if unused

        print("\n" + "=" * 70)
        print("PHASE 3: CHARTS")
        print("=" * 70)
        plot_and_save(results, os.path.join(out_dir, "charts"))

    total_time = perf_counter() - start_total
    print("\nExperiment pipeline completed!")
    print(f"Total time: {total_time:.1f}s")
    print(f"Sizes processed: {len(sizes)}")


# ------------- Quick regression -------------------------------------------

def run_quick_regression_tests() -> None:
    """Execute a fast, deterministic check for N = 0..8.

    Verifies that:
    - Solution counts match the known table.
    - Every solution passes the independent O(N^2) checker.
    - Boards examined is positive for N >= 1 and stable across two runs.
    - The experiment pipeline produces a non-empty CSV in a temporary folder.
    """
    print("Running quick regression tests (N=0..8)...")

    solver = Solver()
    for size in range(9):
        run = solver.solve(size)
        expected = KNOWN_SOLUTION_COUNTS[size]
        if run.count != expected:
            raise AssertionError(f"N={size}: found {run.count} solutions, expected {expected}.")
        for solution in run.solutions:
            if not is_valid_solution(solution, size):
                raise AssertionError(f"N={size}: invalid solution {solution}.")
        if size > 0 and run.boards <= 0:
            raise AssertionError(f"N={size}: invalid boards count {run.boards}.")
        boards = run.boards
        if solver.solve(size).boards != boards:
            raise AssertionError(f"N={size}: boards examined differs between runs.")
        print(f"  N={size}: {run.count} solutions, boards={boards}, time={run.elapsed:.4f}s")

    results = run_experiments([4, 6, 8], runs=2, validate=True, progress_label="Quick regression experiments")

    with tempfile.TemporaryDirectory() as tmpdir:
        csv_path = Path(save_results_to_csv(results, tmpdir))
        if not csv_path.exists() or csv_path.stat().st_size == 0:
            raise AssertionError("Results CSV was not generated successfully during quick tests.")

    print("Quick regression tests passed.")


# ------------- CLI wiring --------------------------------------------------

def build_arg_parser():
    """Construct the argument parser for the CLI entry point."""
    parser = argparse.ArgumentParser(description="Enumerate every N-Queens solution by backtracking.")
    parser.add_argument("--size", "-n", type=int, default=None, help="Board size for a single run (default: 8 or config).")
    parser.add_argument("--show", action="store_true", help="Print the board of each solution found.")
    parser.add_argument("--limit", type=int, default=None, help="Print at most this many solution boards.")
    parser.add_argument("--experiment", action="store_true", help="Run repeated solves over several sizes and export CSV.")
    parser.add_argument(
        "--sizes",
        "-s",
        action="append",
        help="Sizes for --experiment (comma-separated, ranges like 4-10, or multiple flags).",
    )
    parser.add_argument("--runs", "-r", type=int, default=None, help="Repetitions per size for --experiment.")
    parser.add_argument("--out-dir", default=None, help="Output directory for CSV and charts.")
    parser.add_argument("--plot", action="store_true", help="Also generate charts (requires matplotlib/seaborn).")
    parser.add_argument("--save-solutions", action="store_true", help="Export every solution to CSV during --experiment.")
    parser.add_argument("--config", default=None, help="Path to configuration file (default: config.json if present).")
    parser.add_argument("--quick-test", action="store_true", help="Run quick regression tests (N=0..8) and exit.")
    parser.add_argument("--validate", action="store_true", help="Re-check solutions independently (extra assertions).")
    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """CLI entry point: parse arguments and dispatch to the chosen pipeline."""
    parser = build_arg_parser()
    args = parser.parse_args(argv)

    if args.quick_test:
        run_quick_regression_tests()
        return

    config_path = args.config
    if config_path is None and Path("config.json").exists():
        config_path = "config.json"

    try:
        if config_path is not None:
            apply_configuration(config_path)
        sizes = parse_sizes(args.sizes) or settings.SIZES
    except FileNotFoundError as exc:
        print(f"Configuration file not found: {exc}")
        raise SystemExit(1) from exc
    except ValueError as exc:
        print(f"Configuration error: {exc}")
        raise SystemExit(1) from exc

    try:
        if args.experiment:
            run_experiment_pipeline(
                sizes,
                runs=args.runs if args.runs is not None else settings.RUNS,
                out_dir=args.out_dir or settings.OUT_DIR,
                validate=args.validate,
                plot=args.plot,
                save_solutions=args.save_solutions,
            )
        else:
            size = args.size if args.size is not None else settings.DEFAULT_SIZE
            limit = args.limit if args.limit is not None else settings.SOLUTION_LIMIT
            run_single(size, show=args.show or settings.SHOW_SOLUTIONS, limit=limit, validate=args.validate)
    except KeyboardInterrupt:
        print("\nExecution interrupted by user.")
        raise SystemExit(130) from None
    except InvalidArgument as exc:
        print(f"Invalid argument: {exc}")
        raise SystemExit(1) from exc
    except ValueError as exc:
        print(f"Execution error: {exc}")
        raise SystemExit(1) from exc
