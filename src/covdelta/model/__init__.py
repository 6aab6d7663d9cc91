"""Domain model for covdelta (pure types + validation; no IO)."""

from .diff import DiffOptions, DiffReport, FileCoverageDiff, MetricDelta
from .metrics import pct_delta
from .report import CoverageReport, FileCoverage, MetricSummary
from .thresholds import DeltaFailure, DeltaThreshold, DeltaViolation
from .types import FULL_COVERAGE, METRICS, TOTAL_KEY, DiffStatus, Metric

__all__ = [
    "FULL_COVERAGE",
    "METRICS",
    "TOTAL_KEY",
    "CoverageReport",
    "DeltaFailure",
    "DeltaThreshold",
    "DeltaViolation",
    "DiffOptions",
    "DiffReport",
    "DiffStatus",
    "FileCoverage",
    "FileCoverageDiff",
    "Metric",
    "MetricDelta",
    "MetricSummary",
    "pct_delta",
]
