from __future__ import annotations

import math
from dataclasses import dataclass

from covdelta.model.types import Metric


@dataclass(frozen=True, slots=True)
class DeltaThreshold:
    """Maximum allowed coverage drop, in percentage points.

    Fields
    ------
    per_file:
        Allowed drop for any metric of any file present in both reports.
    aggregate:
        Allowed drop for any metric of the ``total`` entry. ``None`` disables
        the aggregate check.
    """

    per_file: float
    aggregate: float | None = None

    def __post_init__(self) -> None:
        """Validate that the allowed drops are non-negative numbers."""
        _check_delta("per-file delta", self.per_file)
        if self.aggregate is not None:
            _check_delta("aggregate delta", self.aggregate)


@dataclass(frozen=True, slots=True)
class DeltaFailure:
    """A single metric whose drop exceeded the allowed delta."""

    file: str  # comparison key, or "total" for the aggregate entry
    metric: Metric
    old_pct: float
    new_pct: float
    delta: float
    allowed: float
    aggregate: bool = False


@dataclass(frozen=True, slots=True)
class DeltaViolation:
    """Outcome of a delta-threshold evaluation.

    Truthy when coverage dropped by more than allowed. ``failures`` lists
    every offending metric in scan order (files first, aggregate last).
    """

    violated: bool
    failures: tuple[DeltaFailure, ...] = ()

    def __bool__(self) -> bool:
        return self.violated

    @property
    def first(self) -> DeltaFailure | None:
        return self.failures[0] if self.failures else None

    @property
    def file_failures(self) -> tuple[DeltaFailure, ...]:
        return tuple(f for f in self.failures if not f.aggregate)

    @property
    def aggregate_failures(self) -> tuple[DeltaFailure, ...]:
        return tuple(f for f in self.failures if f.aggregate)


def _check_delta(name: str, value: float) -> None:
    if isinstance(value, bool) or not isinstance(value, int | float):
        msg = f"{name} must be a number, got {value!r}"
        raise TypeError(msg)
    if math.isnan(value) or value < 0:
        msg = f"{name} must be non-negative, got {value}"
        raise ValueError(msg)


__all__ = ["DeltaFailure", "DeltaThreshold", "DeltaViolation"]
