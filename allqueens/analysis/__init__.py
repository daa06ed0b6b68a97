"""
Analysis and orchestration package for the N-Queens solver.

This package contains:
- settings: global defaults and output naming
- stats: typed summaries and aggregation helpers
- experiments: repeated runs over several sizes with result shaping
- reporting: CSV exports of aggregates, raw runs and solutions
- plots: visualization utilities (imported on demand; needs matplotlib)
- cli: top-level pipeline entry points and argument parser
"""

from . import settings as settings  # re-export for convenience
from .stats import (
    StatsSummary,
    RunRecord,
    SizeEntry,
    ExperimentResults,
    compute_detailed_statistics,
    summarize_runs,
    ProgressPrinter,
)

__all__ = [
    # types
    "StatsSummary",
    "RunRecord",
    "SizeEntry",
    "ExperimentResults",
    # utils
    "compute_detailed_statistics",
    "summarize_runs",
    "ProgressPrinter",
    # settings module
    "settings",
]
