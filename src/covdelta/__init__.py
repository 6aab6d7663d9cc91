"""covdelta - compare two coverage-summary reports and gate on regressions."""

from covdelta._meta import __version__, logger
from covdelta.engine import CoverageDiff, compute_file_diffs, exceeds_delta
from covdelta.errors import MalformedReportError
from covdelta.model import CoverageReport, DeltaViolation, DiffStatus, FileCoverageDiff

__all__ = [
    "CoverageDiff",
    "CoverageReport",
    "DeltaViolation",
    "DiffStatus",
    "FileCoverageDiff",
    "MalformedReportError",
    "__version__",
    "compute_file_diffs",
    "exceeds_delta",
    "logger",
]
