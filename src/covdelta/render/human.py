from __future__ import annotations

from io import StringIO
from typing import TYPE_CHECKING

from rich.console import Console
from rich.table import Table
from rich.text import Text

from covdelta.model.types import METRICS, DiffStatus
from covdelta.render._util import METRIC_HEADERS, STATUS_LABELS, format_delta, format_pct

if TYPE_CHECKING:
    from covdelta.model.diff import DiffReport, FileCoverageDiff, MetricDelta
    from covdelta.model.thresholds import DeltaViolation
    from covdelta.render.render import RenderOptions

_NO_CHANGES = "No coverage changes."

_STATUS_STYLES: dict[DiffStatus, str] = {
    DiffStatus.ADDED: "cyan",
    DiffStatus.REMOVED: "magenta",
    DiffStatus.INCREASED: "green",
    DiffStatus.DECREASED: "red",
    DiffStatus.UNCHANGED: "dim",
}


def _heading(text: str, options: RenderOptions) -> str:
    return f"\x1b[1m{text}\x1b[0m" if (options.color and options.is_tty) else text


def _render_rich_table(table: Table, *, color: bool) -> str:
    buf = StringIO()
    console = Console(
        file=buf,
        force_terminal=color,
        color_system="standard" if color else None,
        no_color=not color,
        width=10_000,
    )
    console.print(table)
    return buf.getvalue().rstrip()


def _metric_cell(md: MetricDelta) -> Text:
    if md.new_pct is None and md.old_pct is not None:
        return Text(format_pct(md.old_pct), style="strike")
    if md.new_pct is None:  # pragma: no cover - every row carries at least one side
        return Text("")
    cell = Text(format_pct(md.new_pct))
    if md.delta:
        cell.append(f" ({format_delta(md.delta, signed=True)})", style="red" if md.delta < 0 else "green")
    return cell


def _row_cells(row: FileCoverageDiff) -> list[Text]:
    style = _STATUS_STYLES[row.status]
    return [
        Text(STATUS_LABELS[row.status], style=style),
        Text(row.path),
        *(_metric_cell(md) for md in row.metrics),
    ]


def _verdict_lines(violation: DeltaViolation, options: RenderOptions) -> list[str]:
    if not violation:
        return [_heading("Delta check: passed", options)]
    lines = [_heading("Delta check: FAILED", options)]
    for f in violation.failures:
        label = "total" if f.aggregate else f.file
        lines.append(
            f"  {label}: {f.metric.value} {format_pct(f.old_pct)} -> {format_pct(f.new_pct)} "
            f"({format_delta(f.delta, signed=True)}, allowed -{format_pct(f.allowed)})"
        )
    return lines


def format_human(report: DiffReport, options: RenderOptions) -> str:
    """Render a terminal table of the kept rows plus the delta verdict."""
    parts: list[str] = []
    if options.base_name and options.head_name:
        parts.append(_heading(f"Coverage diff: {options.base_name} -> {options.head_name}", options))

    if report.files:
        t = Table(show_header=True, header_style="bold")
        t.add_column("Status")
        t.add_column("File")
        for m in METRICS:
            t.add_column(METRIC_HEADERS[m], justify="right")
        for row in report.files:
            t.add_row(*_row_cells(row))
        parts.append(_render_rich_table(t, color=options.color))
    else:
        parts.append(_NO_CHANGES)

    if report.violation is not None:
        parts.append("")
        parts.extend(_verdict_lines(report.violation, options))

    return "\n".join(parts).rstrip()


__all__ = ["format_human"]
