from __future__ import annotations

# Deltas are reported with two decimal places.
DELTA_PRECISION = 2


def pct_delta(new_pct: float, old_pct: float) -> float:
    """Return ``new_pct - old_pct`` rounded for display (``-0.0`` folded to ``0.0``)."""
    return round(new_pct - old_pct, DELTA_PRECISION) + 0.0


__all__ = ["DELTA_PRECISION", "pct_delta"]
