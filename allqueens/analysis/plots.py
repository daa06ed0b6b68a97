"""Visualization utilities for experiment outputs.

Overview
--------
Plotting helpers that turn ``ExperimentResults`` into PNG charts. All figures
are rendered with the non-interactive Agg backend so they can be produced on
headless machines.

Chart map
---------
- 01_solutions_vs_N.png: Number of solutions vs N
    - X: N (board size). Y: solutions found (log scale, zero counts drawn at
      the bottom of the axis).
- 02_boards_vs_N.png: Boards examined vs N
    - X: N. Y: placement attempts (log scale). Hardware-independent effort.
- 03_time_vs_N.png: Mean wall-clock time vs N with ±1σ error bars (log scale)
- 04_time_vs_boards.png: Time vs boards examined
    - Scatter of every raw run with a least-squares trend line; near-linearity
      means time per placement stays flat as N grows.
- heatmap_N{N}.png: Queen placement frequency over all solutions of one size
    - Rank on Y, file on X; cell = number of solutions with a queen there.

Outputs and naming
------------------
Charts are written into ``out_dir`` with the optional run tag and date suffix
from ``allqueens.analysis.settings``. Each function returns the path(s) it
wrote and prints them.
"""
from __future__ import annotations

import os
from typing import List, Sequence

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt  # noqa: E402
import numpy as np  # noqa: E402
import seaborn as sns  # noqa: E402

from . import settings  # noqa: E402
from .experiments import queen_frequency  # noqa: E402
from .stats import ExperimentResults  # noqa: E402


def _plotted_sizes(results: ExperimentResults) -> List[int]:
    return [size for size in results["sizes"] if size in results["entries"]]


def _save(fig, out_dir: str, name: str, description: str) -> str:
    os.makedirs(out_dir, exist_ok=True)
    fname = os.path.join(out_dir, f"{name}{settings.filename_suffix()}.png")
    fig.savefig(fname, bbox_inches="tight", dpi=150)
    plt.close(fig)
    print(f"Saved {description}: {fname}")
    return fname


def plot_solutions_vs_n(results: ExperimentResults, out_dir: str) -> str:
    sizes = _plotted_sizes(results)
    counts = [results["entries"][n].get("solutions", 0) for n in sizes]

    fig, ax = plt.subplots(figsize=(10, 6))
    ax.semilogy(sizes, [max(c, 0.5) for c in counts], marker="o", linewidth=2, markersize=8)
    for n, c in zip(sizes, counts):
        ax.annotate(str(c), (n, max(c, 0.5)), textcoords="offset points", xytext=(0, 6), ha="center", fontsize=9)
    ax.set_xlabel("N (board size)", fontsize=12)
    ax.set_ylabel("Solutions (log scale)", fontsize=12)
    ax.set_title("Number of Solutions vs Problem Size", fontsize=14)
    ax.set_xticks(sizes)
    ax.grid(True, alpha=0.7)
    return _save(fig, out_dir, "01_solutions_vs_N", "solutions chart")


def plot_boards_vs_n(results: ExperimentResults, out_dir: str) -> str:
    sizes = _plotted_sizes(results)
    boards = [max(results["entries"][n].get("boards", 0), 1) for n in sizes]

    fig, ax = plt.subplots(figsize=(10, 6))
    ax.semilogy(sizes, boards, marker="s", linewidth=2, markersize=8, color="tab:orange")
    ax.set_xlabel("N (board size)", fontsize=12)
    ax.set_ylabel("Boards examined (log scale)", fontsize=12)
    ax.set_title("Search Effort vs Problem Size\n(placement attempts, including dead ends)", fontsize=14)
    ax.set_xticks(sizes)
    ax.grid(True, alpha=0.7)
    return _save(fig, out_dir, "02_boards_vs_N", "boards-examined chart")


def plot_time_vs_n(results: ExperimentResults, out_dir: str) -> str:
    sizes = _plotted_sizes(results)
    means: List[float] = []
    stds: List[float] = []
    for n in sizes:
        summary = results["entries"][n].get("time", {})
        means.append(max(summary.get("mean") or 0.0, 1e-7))
        stds.append(summary.get("std") or 0.0)

    fig, ax = plt.subplots(figsize=(10, 6))
    ax.errorbar(sizes, means, yerr=stds, marker="o", linewidth=2, markersize=8, capsize=4, color="tab:green")
    ax.set_yscale("log")
    ax.set_xlabel("N (board size)", fontsize=12)
    ax.set_ylabel("Mean time [s] (log scale)", fontsize=12)
    ax.set_title("Execution Time vs Problem Size", fontsize=14)
    ax.set_xticks(sizes)
    ax.grid(True, alpha=0.7)
    return _save(fig, out_dir, "03_time_vs_N", "execution-time chart")


def plot_time_vs_boards(results: ExperimentResults, out_dir: str) -> str:
    boards: List[float] = []
    times: List[float] = []
    for n in _plotted_sizes(results):
        for record in results["entries"][n].get("raw_runs", []):
            boards.append(record["boards"])
            times.append(record["time"])

    fig, ax = plt.subplots(figsize=(10, 6))
    ax.scatter(boards, times, alpha=0.7, s=40)
    if len(set(boards)) > 1:
        z = np.polyfit(boards, times, 1)
        p = np.poly1d(z)
        x_trend = np.linspace(min(boards), max(boards), 100)
        ax.plot(x_trend, p(x_trend), "r--", alpha=0.8, label=f"Trend: {z[0]:.2e} s/board")
        ax.legend(fontsize=11)
    ax.set_xlabel("Boards examined", fontsize=12)
    ax.set_ylabel("Time [s]", fontsize=12)
    ax.set_title("Logical vs Practical Cost\n(placement attempts vs wall-clock time)", fontsize=14)
    ax.grid(True, alpha=0.7)
    return _save(fig, out_dir, "04_time_vs_boards", "cost-correlation chart")


def plot_queen_heatmap(solutions: Sequence[Sequence[int]], size: int, out_dir: str) -> str:
    """Heatmap of how often each square is occupied across all solutions."""
    matrix = queen_frequency(solutions, size)

    fig, ax = plt.subplots(figsize=(max(4, size * 0.8), max(3.5, size * 0.7)))
    sns.heatmap(matrix, annot=size <= 12, fmt="d", cmap="viridis", square=True, cbar=True, ax=ax)
    ax.set_xlabel("File", fontsize=12)
    ax.set_ylabel("Rank", fontsize=12)
    ax.set_title(f"Queen Placement Frequency (N={size}, {len(solutions)} solutions)", fontsize=13)
    return _save(fig, out_dir, f"heatmap_N{size}", "placement heatmap")


def plot_and_save(results: ExperimentResults, out_dir: str) -> List[str]:
    """Generate every chart for an experiment and return the written paths.

    Heatmaps are drawn only for sizes that have at least one solution.
    """
    os.makedirs(out_dir, exist_ok=True)
    sns.set_theme(style="whitegrid")

    written = [
        plot_solutions_vs_n(results, out_dir),
        plot_boards_vs_n(results, out_dir),
        plot_time_vs_n(results, out_dir),
        plot_time_vs_boards(results, out_dir),
    ]
    for size in _plotted_sizes(results):
        solutions = results["solutions"].get(size, [])
        if size > 0 and solutions:
            written.append(plot_queen_heatmap(solutions, size, out_dir))
    return written
