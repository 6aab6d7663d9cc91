from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from covdelta.engine.delta import exceeds_delta
from covdelta.engine.diff import compute_file_diffs

if TYPE_CHECKING:
    from covdelta.model.diff import FileCoverageDiff
    from covdelta.model.report import CoverageReport
    from covdelta.model.thresholds import DeltaViolation


@dataclass(frozen=True, slots=True)
class CoverageDiff:
    """A single new-vs-old comparison.

    Holds the two reports for the lifetime of the comparison and exposes
    the row listing and the delta verdict.
    """

    new: CoverageReport
    old: CoverageReport

    def file_diffs(self, *, skip_unchanged: bool = False, strip_prefix: str = "") -> list[FileCoverageDiff]:
        return compute_file_diffs(self.new, self.old, skip_unchanged=skip_unchanged, strip_prefix=strip_prefix)

    def exceeds_delta(self, per_file_delta: float, aggregate_delta: float | None = None) -> DeltaViolation:
        return exceeds_delta(
            self.new,
            self.old,
            per_file_delta=per_file_delta,
            aggregate_delta=aggregate_delta,
        )


__all__ = ["CoverageDiff"]
