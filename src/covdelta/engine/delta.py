"""Delta-threshold evaluation: did coverage drop by more than allowed?"""

from __future__ import annotations

from typing import TYPE_CHECKING

from covdelta._meta import logger
from covdelta.model.metrics import pct_delta
from covdelta.model.thresholds import DeltaFailure, DeltaThreshold, DeltaViolation
from covdelta.model.types import METRICS, TOTAL_KEY

if TYPE_CHECKING:
    from covdelta.model.report import CoverageReport, FileCoverage


def _metric_failures(
    key: str,
    new_cov: FileCoverage,
    old_cov: FileCoverage,
    *,
    allowed: float,
    aggregate: bool = False,
) -> list[DeltaFailure]:
    failures: list[DeltaFailure] = []
    for m in METRICS:
        new_pct = new_cov.metric(m).pct
        old_pct = old_cov.metric(m).pct
        delta = pct_delta(new_pct, old_pct)
        if delta < -allowed:
            failures.append(
                DeltaFailure(
                    file=key,
                    metric=m,
                    old_pct=old_pct,
                    new_pct=new_pct,
                    delta=delta,
                    allowed=allowed,
                    aggregate=aggregate,
                )
            )
    return failures


def evaluate_delta(new: CoverageReport, old: CoverageReport, threshold: DeltaThreshold) -> DeltaViolation:
    """Evaluate *threshold* against the per-file and aggregate drops.

    Notes
    -----
    Only files present in both reports are eligible; added and removed
    files have no baseline to regress against. The per-file and aggregate
    checks are both always run.
    """
    failures: list[DeltaFailure] = []

    for key, new_cov in new.files.items():
        old_cov = old.files.get(key)
        if old_cov is None:
            continue
        failures.extend(_metric_failures(key, new_cov, old_cov, allowed=threshold.per_file))

    if threshold.aggregate is not None:
        failures.extend(
            _metric_failures(TOTAL_KEY, new.total, old.total, allowed=threshold.aggregate, aggregate=True)
        )

    for f in failures:
        logger.debug(
            "delta exceeded: %s %s %.2f -> %.2f (%+.2f, allowed -%s)",
            f.file,
            f.metric.value,
            f.old_pct,
            f.new_pct,
            f.delta,
            f.allowed,
        )
    return DeltaViolation(violated=bool(failures), failures=tuple(failures))


def exceeds_delta(
    new: CoverageReport,
    old: CoverageReport,
    *,
    per_file_delta: float,
    aggregate_delta: float | None = None,
) -> DeltaViolation:
    """Return the :class:`DeltaViolation` for the given allowed drops."""
    return evaluate_delta(new, old, DeltaThreshold(per_file=per_file_delta, aggregate=aggregate_delta))


__all__ = ["evaluate_delta", "exceeds_delta"]
