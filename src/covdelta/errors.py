"""Centralised exception hierarchy for covdelta."""

from __future__ import annotations


class CovdeltaError(Exception):
    """Base class for all custom covdelta exceptions."""


class CoverageReportError(CovdeltaError):
    """Base class for errors related to coverage-summary handling."""


class ReportNotFoundError(CoverageReportError):
    """Coverage-summary file could not be located on disk."""


class InvalidReportJSONError(CoverageReportError):
    """Coverage-summary file was found but is not a JSON object."""


class MalformedReportError(CoverageReportError):
    """Coverage-summary data violates the report's structural invariants."""


class ConfigError(CovdeltaError):
    """``[tool.covdelta]`` configuration is invalid."""


__all__ = [
    "ConfigError",
    "CovdeltaError",
    "CoverageReportError",
    "InvalidReportJSONError",
    "MalformedReportError",
    "ReportNotFoundError",
]
