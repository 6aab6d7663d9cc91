from __future__ import annotations

from covdelta.model.types import DiffStatus, Metric

METRIC_HEADERS: dict[Metric, str] = {
    Metric.STATEMENTS: "% Stmts",
    Metric.BRANCHES: "% Branch",
    Metric.FUNCTIONS: "% Funcs",
    Metric.LINES: "% Lines",
}

STATUS_LABELS: dict[DiffStatus, str] = {
    DiffStatus.ADDED: "new",
    DiffStatus.REMOVED: "removed",
    DiffStatus.INCREASED: "up",
    DiffStatus.DECREASED: "down",
    DiffStatus.UNCHANGED: "",
}


def format_pct(value: float) -> str:
    """Render a percentage with at most two decimals and no trailing zeros."""
    text = f"{value:.2f}".rstrip("0").rstrip(".")
    return "0" if text == "-0" else text


def format_delta(value: float, *, signed: bool = False) -> str:
    text = format_pct(value)
    if signed and value > 0:
        return f"+{text}"
    return text
