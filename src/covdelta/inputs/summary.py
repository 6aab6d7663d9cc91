"""Read ``coverage-summary.json`` files into :class:`CoverageReport` objects."""

from __future__ import annotations

import json
from pathlib import Path

from covdelta._meta import logger
from covdelta.errors import InvalidReportJSONError, MalformedReportError, ReportNotFoundError
from covdelta.model.report import CoverageReport


def parse_summary(text: str, *, source: str = "<string>") -> CoverageReport:
    """Parse coverage-summary JSON *text* into a report."""
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        msg = f"{source}: invalid JSON: {exc}"
        raise InvalidReportJSONError(msg) from exc
    if not isinstance(data, dict):
        msg = f"{source}: expected a JSON object at the top level, got {type(data).__name__}"
        raise InvalidReportJSONError(msg)
    try:
        return CoverageReport.from_summary(data)
    except MalformedReportError as exc:
        msg = f"{source}: {exc}"
        raise MalformedReportError(msg) from exc


def load_summary(path: str | Path) -> CoverageReport:
    """Load and validate the coverage summary at *path*."""
    p = Path(path)
    if not p.is_file():
        msg = f"coverage summary not found: {p}"
        raise ReportNotFoundError(msg)
    try:
        text = p.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        msg = f"{p}: not valid UTF-8: {exc}"
        raise InvalidReportJSONError(msg) from exc
    report = parse_summary(text, source=str(p))
    logger.debug("loaded %s (%d file(s))", p, len(report.files))
    return report


__all__ = ["load_summary", "parse_summary"]
