"""Diff engine: pure functions over two coverage reports."""

from .comparison import CoverageDiff
from .delta import evaluate_delta, exceeds_delta
from .diff import classify, compute_file_diffs, diff_file, display_path

__all__ = [
    "CoverageDiff",
    "classify",
    "compute_file_diffs",
    "diff_file",
    "display_path",
    "evaluate_delta",
    "exceeds_delta",
]
