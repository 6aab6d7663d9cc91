from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from covdelta.model.types import DiffStatus, Metric

if TYPE_CHECKING:
    from covdelta.model.thresholds import DeltaViolation


@dataclass(frozen=True, slots=True)
class MetricDelta:
    """New/old percentages for one metric of one file.

    ``old_pct`` is ``None`` for added files and ``new_pct`` is ``None`` for
    removed ones; ``delta`` is only set when both sides exist.
    """

    metric: Metric
    new_pct: float | None
    old_pct: float | None
    delta: float | None = None


@dataclass(frozen=True, slots=True)
class FileCoverageDiff:
    """Comparison result for a single file."""

    path: str  # display path (prefix stripped)
    key: str  # comparison key as found in the reports
    status: DiffStatus
    metrics: tuple[MetricDelta, ...]

    def metric(self, metric: Metric) -> MetricDelta:
        for m in self.metrics:
            if m.metric is metric:
                return m
        msg = f"no {metric.value} delta recorded for {self.key!r}"
        raise KeyError(msg)

    @property
    def deltas(self) -> tuple[float | None, ...]:
        return tuple(m.delta for m in self.metrics)


@dataclass(frozen=True, slots=True)
class DiffOptions:
    """Options a comparison was run with (echoed by renderers)."""

    skip_unchanged: bool = False
    strip_prefix: str = ""
    per_file_delta: float | None = None
    aggregate_delta: float | None = None


@dataclass(frozen=True, slots=True)
class DiffReport:
    """Everything a presenter needs: the kept rows and, when evaluated, the verdict."""

    files: tuple[FileCoverageDiff, ...]
    options: DiffOptions
    violation: DeltaViolation | None = None


__all__ = ["DiffOptions", "DiffReport", "FileCoverageDiff", "MetricDelta"]
