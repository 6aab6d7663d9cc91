from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from covdelta.engine import evaluate_delta, exceeds_delta
from covdelta.model import DeltaFailure, DeltaThreshold, DeltaViolation, Metric

if TYPE_CHECKING:
    from collections.abc import Callable

    from covdelta.model import CoverageReport


def test_violation_cites_first_file_and_metric(make_report: Callable[..., CoverageReport]) -> None:
    new = make_report({"a.ts": 80.0}, total=80.0)
    old = make_report({"a.ts": 90.0}, total=90.0)

    result = exceeds_delta(new, old, per_file_delta=5)

    assert result
    assert result.violated
    assert result.first == DeltaFailure(
        file="a.ts",
        metric=Metric.STATEMENTS,
        old_pct=90.0,
        new_pct=80.0,
        delta=-10.0,
        allowed=5,
    )
    assert [f.metric for f in result.failures] == [
        Metric.STATEMENTS,
        Metric.BRANCHES,
        Metric.FUNCTIONS,
        Metric.LINES,
    ]


def test_larger_delta_passes(make_report: Callable[..., CoverageReport]) -> None:
    new = make_report({"a.ts": 80.0}, total=80.0)
    old = make_report({"a.ts": 90.0}, total=90.0)

    result = exceeds_delta(new, old, per_file_delta=15)

    assert result == DeltaViolation(violated=False, failures=())
    assert not result
    assert result.first is None


def test_added_files_are_not_eligible(make_report: Callable[..., CoverageReport]) -> None:
    new = make_report({"a.ts": 50.0, "b.ts": 0.0})
    old = make_report({"a.ts": 50.0})
    assert not exceeds_delta(new, old, per_file_delta=0)


def test_removed_files_are_not_eligible(make_report: Callable[..., CoverageReport]) -> None:
    new = make_report({})
    old = make_report({"gone.ts": 100.0})
    assert not exceeds_delta(new, old, per_file_delta=0)


def test_identical_reports_pass(make_report: Callable[..., CoverageReport]) -> None:
    files = {"a.ts": 33.33, "b.ts": 0.0}
    assert not exceeds_delta(make_report(files), make_report(files), per_file_delta=0)


def test_drop_equal_to_delta_is_allowed(make_report: Callable[..., CoverageReport]) -> None:
    new = make_report({"a.ts": {"lines": 85.0}})
    old = make_report({"a.ts": {"lines": 90.0}})
    assert not exceeds_delta(new, old, per_file_delta=5)
    assert exceeds_delta(new, old, per_file_delta=4.99)


def test_increase_never_violates(make_report: Callable[..., CoverageReport]) -> None:
    new = make_report({"a.ts": 100.0}, total=100.0)
    old = make_report({"a.ts": 0.0}, total=0.0)
    assert not exceeds_delta(new, old, per_file_delta=0, aggregate_delta=0)


def test_aggregate_checked_only_when_configured(make_report: Callable[..., CoverageReport]) -> None:
    new = make_report({"a.ts": 50.0}, total=70.0)
    old = make_report({"a.ts": 50.0}, total=80.0)

    assert not exceeds_delta(new, old, per_file_delta=1)

    result = exceeds_delta(new, old, per_file_delta=1, aggregate_delta=5)
    assert result
    assert result.file_failures == ()
    assert len(result.aggregate_failures) == 4
    assert result.first is not None
    assert result.first.file == "total"
    assert result.first.aggregate

    assert not exceeds_delta(new, old, per_file_delta=1, aggregate_delta=10)


def test_both_checks_are_reported(make_report: Callable[..., CoverageReport]) -> None:
    new = make_report({"a.ts": {"branches": 40.0}}, total={"functions": 60.0})
    old = make_report({"a.ts": {"branches": 60.0}}, total={"functions": 70.0})

    result = exceeds_delta(new, old, per_file_delta=10, aggregate_delta=5)

    assert [(f.file, f.metric, f.aggregate) for f in result.failures] == [
        ("a.ts", Metric.BRANCHES, False),
        ("total", Metric.FUNCTIONS, True),
    ]


def test_aggregate_uses_its_own_threshold(make_report: Callable[..., CoverageReport]) -> None:
    new = make_report({"a.ts": 50.0}, total=88.0)
    old = make_report({"a.ts": 60.0}, total=90.0)

    result = exceeds_delta(new, old, per_file_delta=1, aggregate_delta=3)

    assert result
    assert result.aggregate_failures == ()
    assert {f.file for f in result.failures} == {"a.ts"}


def test_all_eligible_files_are_scanned(make_report: Callable[..., CoverageReport]) -> None:
    new = make_report({"a.ts": 90.0, "b.ts": {"lines": 10.0}, "c.ts": 50.0})
    old = make_report({"a.ts": 90.0, "b.ts": {"lines": 20.0}, "c.ts": 40.0})

    result = exceeds_delta(new, old, per_file_delta=2)

    assert [(f.file, f.metric) for f in result.failures] == [("b.ts", Metric.LINES)]


def test_evaluate_delta_with_threshold_object(make_report: Callable[..., CoverageReport]) -> None:
    new = make_report({"a.ts": 80.0})
    old = make_report({"a.ts": 90.0})
    assert evaluate_delta(new, old, DeltaThreshold(per_file=5)).violated


@pytest.mark.parametrize(
    ("per_file", "aggregate", "error", "pattern"),
    [
        (-1, None, ValueError, "per-file delta must be non-negative"),
        (1, -0.5, ValueError, "aggregate delta must be non-negative"),
        (float("nan"), None, ValueError, "per-file delta must be non-negative"),
        (1, float("nan"), ValueError, "aggregate delta must be non-negative"),
        ("5", None, TypeError, "must be a number"),
        (True, None, TypeError, "must be a number"),
    ],
)
def test_invalid_thresholds(per_file: object, aggregate: object, error: type[Exception], pattern: str) -> None:
    with pytest.raises(error, match=pattern):
        DeltaThreshold(per_file=per_file, aggregate=aggregate)  # type: ignore[arg-type]


def test_threshold_above_full_coverage_never_fails(make_report: Callable[..., CoverageReport]) -> None:
    new = make_report({"a.ts": 0.0}, total=0.0)
    old = make_report({"a.ts": 100.0}, total=100.0)

    result = exceeds_delta(new, old, per_file_delta=150, aggregate_delta=150)

    assert not result
    assert result.failures == ()
