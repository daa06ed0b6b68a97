"""Global settings for the N-Queens driver and analysis pipeline.

This module centralizes tunable constants used across the orchestration code.
Values can be overridden at runtime via the configuration loader in
`allqueens.analysis.cli.apply_configuration`.
"""
from __future__ import annotations

from datetime import datetime
from typing import List, Optional

# Board size solved by the plain driver run
DEFAULT_SIZE: int = 8

# Print every solution board after a single run
SHOW_SOLUTIONS: bool = False

# Cap on rendered solution boards (None = all of them)
SOLUTION_LIMIT: Optional[int] = 10

# Board sizes to evaluate (in ascending order) for scalability analysis
SIZES: List[int] = [4, 5, 6, 7, 8, 9, 10]

# Repeated runs per size; the search is deterministic so only timings vary
RUNS: int = 5

# Output directory for CSV and charts
OUT_DIR: str = "results_allqueens"

# Output naming policy --------------------------------------------------------

# When True, results and plots will include a datestamp suffix (e.g., _20251113-142530)
# applied consistently across all artifacts produced within the same run.
DATE_IN_FILENAMES: bool = True

# Unique run identifier used for filename stamping; set once at import time.
RUN_ID: str = datetime.now().strftime("%Y%m%d-%H%M%S")

# Optional run labeling to avoid overwriting outputs
RUN_TAG: Optional[str] = None


def set_output_naming(date_in_filenames: bool = True, run_tag: Optional[str] = None) -> None:
    """Configure how output filenames are suffixed.

    Side effects
    - Updates module-level globals and prints the resulting policy so the
      naming of artifacts is explicit at run start.
    """
    global DATE_IN_FILENAMES, RUN_TAG
    DATE_IN_FILENAMES = bool(date_in_filenames)
    RUN_TAG = run_tag or None

    print("Output naming configured:")
    print(f"   - Date suffix: {'on' if DATE_IN_FILENAMES else 'off'}")
    print(f"   - Run tag: {RUN_TAG}" if RUN_TAG else "   - Run tag: none")


def filename_suffix() -> str:
    """Return the ``_<tag>_<run id>`` suffix for output files (or empty)."""
    parts: List[str] = []
    if RUN_TAG:
        parts.append(str(RUN_TAG))
    if DATE_IN_FILENAMES and RUN_ID:
        parts.append(str(RUN_ID))
    return ("_" + "_".join(parts)) if parts else ""
