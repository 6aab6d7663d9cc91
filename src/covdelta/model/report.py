from __future__ import annotations

import math
from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType

from covdelta.errors import MalformedReportError
from covdelta.model.types import FULL_COVERAGE, METRICS, TOTAL_KEY, Metric

# Istanbul writes this instead of a number when a metric has no measurable units.
_UNKNOWN_PCT = "Unknown"

# -----------------------------------------------------------------------------
# Metric / file level
# -----------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class MetricSummary:
    """Counts for one coverage category of a single file (or of the aggregate).

    Notes
    -----
    ``pct`` is taken verbatim from the coverage tool and is never recomputed.
    """

    total: int
    covered: int
    skipped: int
    pct: float

    def __post_init__(self) -> None:
        """Validate counts and percentage bounds."""
        if self.total < 0 or self.covered < 0 or self.skipped < 0:
            msg = "MetricSummary counts must be >= 0"
            raise MalformedReportError(msg)
        if self.covered > self.total:
            msg = f"covered ({self.covered}) exceeds total ({self.total})"
            raise MalformedReportError(msg)
        if not (0 <= self.pct <= FULL_COVERAGE):
            msg = f"pct must be in [0, {FULL_COVERAGE}], got {self.pct}"
            raise MalformedReportError(msg)

    @classmethod
    def from_summary(cls, data: object) -> MetricSummary:
        if not isinstance(data, Mapping):
            msg = f"metric summary must be an object, got {type(data).__name__}"
            raise MalformedReportError(msg)
        total = _require_count(data, "total")
        covered = _require_count(data, "covered")
        skipped = _require_count(data, "skipped", default=0)
        return cls(total=total, covered=covered, skipped=skipped, pct=_require_pct(data, total=total))

    def to_summary(self) -> dict[str, int | float]:
        return {"total": self.total, "covered": self.covered, "skipped": self.skipped, "pct": self.pct}


@dataclass(frozen=True, slots=True)
class FileCoverage:
    """The four coverage categories recorded for one file."""

    statements: MetricSummary
    branches: MetricSummary
    functions: MetricSummary
    lines: MetricSummary

    def metric(self, metric: Metric) -> MetricSummary:
        return getattr(self, metric.value)

    def pcts(self) -> tuple[float, ...]:
        """Return the percentages in :data:`METRICS` order."""
        return tuple(self.metric(m).pct for m in METRICS)

    @classmethod
    def from_summary(cls, data: object) -> FileCoverage:
        if not isinstance(data, Mapping):
            msg = f"file entry must be an object, got {type(data).__name__}"
            raise MalformedReportError(msg)
        parsed: dict[str, MetricSummary] = {}
        for metric in METRICS:
            if metric.value not in data:
                msg = f"missing metric category {metric.value!r}"
                raise MalformedReportError(msg)
            try:
                parsed[metric.value] = MetricSummary.from_summary(data[metric.value])
            except MalformedReportError as exc:
                msg = f"{metric.value}: {exc}"
                raise MalformedReportError(msg) from exc
        return cls(**parsed)

    def to_summary(self) -> dict[str, dict[str, int | float]]:
        return {m.value: self.metric(m).to_summary() for m in METRICS}


# -----------------------------------------------------------------------------
# Report
# -----------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class CoverageReport:
    """One coverage snapshot: per-file entries plus the aggregate ``total``.

    The aggregate lives in its own field; ``files`` never contains it. Key
    order of ``files`` is the order entries appeared in the source mapping.
    """

    files: Mapping[str, FileCoverage]
    total: FileCoverage

    def __post_init__(self) -> None:
        """Freeze the file mapping and reject the reserved aggregate key."""
        if TOTAL_KEY in self.files:
            msg = f"{TOTAL_KEY!r} is reserved for the aggregate entry"
            raise MalformedReportError(msg)
        object.__setattr__(self, "files", MappingProxyType(dict(self.files)))

    def __contains__(self, key: object) -> bool:
        return key in self.files

    @classmethod
    def from_summary(cls, data: object) -> CoverageReport:
        """Build a report from a parsed ``coverage-summary.json`` mapping.

        Raises
        ------
        MalformedReportError
            If the aggregate entry is absent, any entry lacks one of the four
            categories, or any metric is inconsistent (``covered > total``).
        """
        if not isinstance(data, Mapping):
            msg = f"coverage summary must be an object, got {type(data).__name__}"
            raise MalformedReportError(msg)
        if TOTAL_KEY not in data:
            msg = f"coverage summary has no {TOTAL_KEY!r} entry"
            raise MalformedReportError(msg)

        files: dict[str, FileCoverage] = {}
        total: FileCoverage | None = None
        for key, entry in data.items():
            if not isinstance(key, str):
                msg = f"coverage summary keys must be strings, got {key!r}"
                raise MalformedReportError(msg)
            try:
                parsed = FileCoverage.from_summary(entry)
            except MalformedReportError as exc:
                msg = f"{key}: {exc}"
                raise MalformedReportError(msg) from exc
            if key == TOTAL_KEY:
                total = parsed
            else:
                files[key] = parsed

        if total is None:  # pragma: no cover - guarded above
            msg = f"coverage summary has no {TOTAL_KEY!r} entry"
            raise MalformedReportError(msg)
        return cls(files=files, total=total)

    def to_summary(self) -> dict[str, dict[str, dict[str, int | float]]]:
        """Return the report in ``coverage-summary.json`` shape (aggregate first)."""
        out = {TOTAL_KEY: self.total.to_summary()}
        out.update({key: cov.to_summary() for key, cov in self.files.items()})
        return out


def _require_count(data: Mapping[str, object], field: str, *, default: int | None = None) -> int:
    if field not in data:
        if default is not None:
            return default
        msg = f"missing field {field!r}"
        raise MalformedReportError(msg)
    value = data[field]
    # bool is an int subclass; reject it explicitly.
    if isinstance(value, bool) or not isinstance(value, int):
        msg = f"{field!r} must be an integer, got {value!r}"
        raise MalformedReportError(msg)
    return value


def _require_pct(data: Mapping[str, object], *, total: int) -> float:
    if "pct" not in data:
        msg = "missing field 'pct'"
        raise MalformedReportError(msg)
    value = data["pct"]
    if value == _UNKNOWN_PCT and total == 0:
        return float(FULL_COVERAGE)
    if isinstance(value, bool) or not isinstance(value, int | float):
        msg = f"'pct' must be a number, got {value!r}"
        raise MalformedReportError(msg)
    if not math.isfinite(value):
        msg = f"'pct' must be finite, got {value!r}"
        raise MalformedReportError(msg)
    return float(value)


__all__ = ["CoverageReport", "FileCoverage", "MetricSummary"]
