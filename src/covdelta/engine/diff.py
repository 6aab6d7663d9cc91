"""Per-file comparison of two coverage reports."""

from __future__ import annotations

from typing import TYPE_CHECKING

from covdelta._meta import logger
from covdelta.model.diff import FileCoverageDiff, MetricDelta
from covdelta.model.metrics import pct_delta
from covdelta.model.types import METRICS, DiffStatus

if TYPE_CHECKING:
    from covdelta.model.report import CoverageReport, FileCoverage


def _union_keys(new: CoverageReport, old: CoverageReport) -> list[str]:
    # dict preserves first-encounter order: new report first, then old-only keys.
    return list(dict.fromkeys([*new.files, *old.files]))


def display_path(key: str, strip_prefix: str) -> str:
    """Return *key* with *strip_prefix* removed when it starts with it."""
    if strip_prefix and key.startswith(strip_prefix):
        return key[len(strip_prefix) :]
    return key


def classify(new_cov: FileCoverage, old_cov: FileCoverage) -> DiffStatus:
    """Classify a file present in both reports.

    A drop in any metric wins over a gain in another.
    """
    pairs = list(zip(new_cov.pcts(), old_cov.pcts(), strict=True))
    if any(n < o for n, o in pairs):
        return DiffStatus.DECREASED
    if any(n > o for n, o in pairs):
        return DiffStatus.INCREASED
    return DiffStatus.UNCHANGED


def diff_file(
    key: str,
    new_cov: FileCoverage | None,
    old_cov: FileCoverage | None,
    *,
    strip_prefix: str = "",
) -> FileCoverageDiff:
    """Build the :class:`FileCoverageDiff` for one key (at least one side must exist)."""
    path = display_path(key, strip_prefix)
    if new_cov is None and old_cov is None:
        msg = f"{key!r} is absent from both reports"
        raise ValueError(msg)

    if new_cov is not None and old_cov is None:
        metrics = tuple(MetricDelta(m, new_pct=new_cov.metric(m).pct, old_pct=None) for m in METRICS)
        return FileCoverageDiff(path=path, key=key, status=DiffStatus.ADDED, metrics=metrics)

    if new_cov is None:
        metrics = tuple(MetricDelta(m, new_pct=None, old_pct=old_cov.metric(m).pct) for m in METRICS)
        return FileCoverageDiff(path=path, key=key, status=DiffStatus.REMOVED, metrics=metrics)

    metrics = tuple(
        MetricDelta(
            m,
            new_pct=new_cov.metric(m).pct,
            old_pct=old_cov.metric(m).pct,
            delta=pct_delta(new_cov.metric(m).pct, old_cov.metric(m).pct),
        )
        for m in METRICS
    )
    return FileCoverageDiff(path=path, key=key, status=classify(new_cov, old_cov), metrics=metrics)


def compute_file_diffs(
    new: CoverageReport,
    old: CoverageReport,
    *,
    skip_unchanged: bool = False,
    strip_prefix: str = "",
) -> list[FileCoverageDiff]:
    """Compare every file of *new* and *old*, in first-encounter order.

    Parameters
    ----------
    skip_unchanged:
        Omit files whose four percentages are all equal.
    strip_prefix:
        Removed from the start of each display path; comparison keys are
        left untouched.
    """
    keys = _union_keys(new, old)
    out: list[FileCoverageDiff] = []
    for key in keys:
        row = diff_file(key, new.files.get(key), old.files.get(key), strip_prefix=strip_prefix)
        if skip_unchanged and row.status is DiffStatus.UNCHANGED:
            continue
        out.append(row)
    logger.debug("compared %d file(s), %d row(s) kept", len(keys), len(out))
    return out


__all__ = ["classify", "compute_file_diffs", "diff_file", "display_path"]
