from __future__ import annotations

from typing import TYPE_CHECKING

from covdelta._meta import logger
from covdelta.engine import CoverageDiff
from covdelta.errors import ConfigError, InvalidReportJSONError, MalformedReportError, ReportNotFoundError
from covdelta.inputs import load_summary
from covdelta.model.diff import DiffOptions, DiffReport
from covdelta.render.render import RenderOptions, render

if TYPE_CHECKING:
    from pathlib import Path

    from covdelta.model.thresholds import DeltaViolation


class PipelineError(Exception):
    """Base class for errors emitted by the pipeline."""


class NoInputError(PipelineError):
    """A coverage summary was missing."""


class DataError(PipelineError):
    """A coverage summary is malformed or could not be parsed."""


class SystemIOError(PipelineError):
    """Filesystem IO error while reading a coverage summary."""


class ConfigurationError(PipelineError):
    """Invalid thresholds or ``[tool.covdelta]`` settings."""


class DeltaExceededError(PipelineError):
    """Coverage dropped by more than the allowed delta."""

    def __init__(self, violation: DeltaViolation, *, per_file_delta: float) -> None:
        super().__init__("coverage delta exceeded")
        self.violation = violation
        self.per_file_delta = per_file_delta


class UnexpectedError(PipelineError):
    """Unexpected failure while comparing or rendering."""


def compare_files(
    *,
    base: Path,
    head: Path,
    skip_unchanged: bool,
    strip_prefix: str,
    per_file_delta: float | None,
    aggregate_delta: float | None,
) -> DiffReport:
    """Load *base* (old) and *head* (new) summaries and compare them."""
    try:
        old = load_summary(base)
        new = load_summary(head)
    except ReportNotFoundError as exc:
        raise NoInputError(str(exc)) from exc
    except (InvalidReportJSONError, MalformedReportError) as exc:
        msg = f"failed to read coverage summary: {exc}"
        raise DataError(msg) from exc
    except OSError as exc:
        raise SystemIOError(str(exc)) from exc

    try:
        return compare_reports(
            CoverageDiff(new=new, old=old),
            skip_unchanged=skip_unchanged,
            strip_prefix=strip_prefix,
            per_file_delta=per_file_delta,
            aggregate_delta=aggregate_delta,
        )
    except (ConfigError, ValueError, TypeError) as exc:
        raise ConfigurationError(str(exc)) from exc


def compare_reports(
    comparison: CoverageDiff,
    *,
    skip_unchanged: bool,
    strip_prefix: str,
    per_file_delta: float | None,
    aggregate_delta: float | None,
) -> DiffReport:
    """Build the presenter-facing :class:`DiffReport` for an in-memory comparison."""
    rows = comparison.file_diffs(skip_unchanged=skip_unchanged, strip_prefix=strip_prefix)
    violation = None
    if per_file_delta is not None:
        violation = comparison.exceeds_delta(per_file_delta, aggregate_delta)
    elif aggregate_delta is not None:
        msg = "an aggregate delta requires a per-file delta"
        raise ValueError(msg)
    return DiffReport(
        files=tuple(rows),
        options=DiffOptions(
            skip_unchanged=skip_unchanged,
            strip_prefix=strip_prefix,
            per_file_delta=per_file_delta,
            aggregate_delta=aggregate_delta,
        ),
        violation=violation,
    )


def render_report(report: DiffReport, *, fmt: str, options: RenderOptions) -> str:
    try:
        return render(report, fmt=fmt, options=options)
    except ValueError as exc:
        raise ConfigurationError(str(exc)) from exc
    except Exception as exc:
        logger.exception("unexpected failure")
        raise UnexpectedError(str(exc)) from exc


def evaluate_delta_or_raise(report: DiffReport) -> None:
    """Raise :class:`DeltaExceededError` if the report's verdict is a violation."""
    if not report.violation:
        return
    per_file = report.options.per_file_delta
    raise DeltaExceededError(report.violation, per_file_delta=per_file if per_file is not None else 0.0)


__all__ = [
    "ConfigurationError",
    "DataError",
    "DeltaExceededError",
    "NoInputError",
    "PipelineError",
    "RenderOptions",
    "SystemIOError",
    "UnexpectedError",
    "compare_files",
    "compare_reports",
    "evaluate_delta_or_raise",
    "render_report",
]
