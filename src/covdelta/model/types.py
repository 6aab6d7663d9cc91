"""Shared type aliases and enumerations used across covdelta."""

from __future__ import annotations

from enum import StrEnum

# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------


class Metric(StrEnum):
    """The four coverage categories tracked by a coverage summary."""

    STATEMENTS = "statements"
    BRANCHES = "branches"
    FUNCTIONS = "functions"
    LINES = "lines"


class DiffStatus(StrEnum):
    """Classification of a single file when comparing two reports."""

    ADDED = "added"
    REMOVED = "removed"
    INCREASED = "increased"
    DECREASED = "decreased"
    UNCHANGED = "unchanged"


# Column order used everywhere metrics are listed or scanned.
METRICS: tuple[Metric, ...] = (
    Metric.STATEMENTS,
    Metric.BRANCHES,
    Metric.FUNCTIONS,
    Metric.LINES,
)

# Reserved key holding the aggregate entry in the coverage-summary format.
TOTAL_KEY = "total"

FULL_COVERAGE: int = 100


__all__ = [
    "FULL_COVERAGE",
    "METRICS",
    "TOTAL_KEY",
    "DiffStatus",
    "Metric",
]
