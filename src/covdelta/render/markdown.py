"""Markdown rendering of a coverage diff, shaped as a pull-request comment."""

from __future__ import annotations

from typing import TYPE_CHECKING

from covdelta.model.types import METRICS, DiffStatus
from covdelta.render._util import METRIC_HEADERS, format_delta, format_pct

if TYPE_CHECKING:
    from covdelta.model.diff import DiffReport, FileCoverageDiff
    from covdelta.render.render import RenderOptions

# Hidden markers let a publisher find and update its own earlier comments.
DIFF_COMMENT_MARKER = "<!-- codeCoverageDiffComment -->"
DELTA_COMMENT_MARKER = "<!-- codeCoverageDeltaComment -->"

HEADING = "## Test coverage results :test_tube:"
NO_CHANGES = "No changes to code coverage between the base branch and the head branch"

STATUS_ICONS: dict[DiffStatus, str] = {
    DiffStatus.ADDED: ":sparkles: :new:",
    DiffStatus.REMOVED: ":x:",
    DiffStatus.INCREASED: ":green_circle:",
    DiffStatus.DECREASED: ":red_circle:",
    DiffStatus.UNCHANGED: "",
}

_TABLE_HEAD = "Status | File | " + " | ".join(METRIC_HEADERS[m] for m in METRICS)
_TABLE_RULE = "-----|-----|---------|----------|---------|------"


def _cells(row: FileCoverageDiff) -> list[str]:
    cells: list[str] = []
    for md in row.metrics:
        if row.status is DiffStatus.ADDED and md.new_pct is not None:
            cells.append(f"**{format_pct(md.new_pct)}**")
        elif row.status is DiffStatus.REMOVED and md.old_pct is not None:
            cells.append(f"~~{format_pct(md.old_pct)}~~")
        elif md.new_pct is not None and md.delta:
            cells.append(f"{format_pct(md.new_pct)} **({format_delta(md.delta)})**")
        elif md.new_pct is not None:
            cells.append(format_pct(md.new_pct))
        else:  # pragma: no cover - every row carries at least one side
            cells.append("")
    return cells


def format_row(row: FileCoverageDiff) -> str:
    """Return one markdown table row for *row*."""
    if row.status is DiffStatus.ADDED:
        name = f"**{row.path}**"
    elif row.status is DiffStatus.REMOVED:
        name = f"~~{row.path}~~"
    else:
        name = row.path
    return " | ".join([f" {STATUS_ICONS[row.status]}", name, *_cells(row)])


def format_rows(rows: tuple[FileCoverageDiff, ...] | list[FileCoverageDiff]) -> list[str]:
    return [format_row(r) for r in rows]


def _header(marker: str, commit_sha: str | None) -> str:
    lines = [marker]
    if commit_sha:
        lines.append(f"Commit SHA:{commit_sha}")
    return "\n".join(lines)


def format_markdown(report: DiffReport, options: RenderOptions) -> str:
    """Render the coverage-diff comment body."""
    if not report.files:
        body = NO_CHANGES
    else:
        parts = [HEADING, ""]
        if options.base_name and options.head_name:
            parts.append(
                f"Code coverage diff between base branch: {options.base_name} "
                f"and head branch: {options.head_name}"
            )
            parts.append("")
        parts.append(_TABLE_HEAD)
        parts.append(_TABLE_RULE)
        parts.extend(format_rows(report.files))
        body = "\n".join(parts)
    return f"{_header(DIFF_COMMENT_MARKER, options.commit_sha)}\n{body}"


def format_delta_comment(delta: float, *, commit_sha: str | None = None) -> str:
    """Render the comment posted when the per-file delta was exceeded."""
    message = f"Current PR reduces the test coverage percentage by {format_pct(delta)} for some tests"
    return f"{_header(DELTA_COMMENT_MARKER, commit_sha)}\n{message}"


__all__ = [
    "DELTA_COMMENT_MARKER",
    "DIFF_COMMENT_MARKER",
    "NO_CHANGES",
    "STATUS_ICONS",
    "format_delta_comment",
    "format_markdown",
    "format_row",
    "format_rows",
]
