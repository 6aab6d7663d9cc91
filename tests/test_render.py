from __future__ import annotations

import json
from typing import TYPE_CHECKING

import pytest
from jsonschema import validate

from covdelta.config import get_schema
from covdelta.engine import CoverageDiff
from covdelta.model import DiffOptions, DiffReport
from covdelta.pipeline import compare_reports
from covdelta.render import RenderOptions, format_delta_comment, format_markdown, render
from covdelta.render.json import SCHEMA_ID
from covdelta.render.markdown import DELTA_COMMENT_MARKER, DIFF_COMMENT_MARKER, NO_CHANGES, format_row

if TYPE_CHECKING:
    from collections.abc import Callable

    from covdelta.model import CoverageReport


@pytest.fixture
def mixed_report(make_report: Callable[..., CoverageReport]) -> DiffReport:
    new = make_report(
        {"/repo/src/a.ts": 80.0, "/repo/src/new.ts": 66.67, "/repo/src/same.ts": 50.0, "/repo/src/up.ts": 75.5},
        total=70.0,
    )
    old = make_report(
        {"/repo/src/a.ts": 90.0, "/repo/src/gone.ts": 12.0, "/repo/src/same.ts": 50.0, "/repo/src/up.ts": 70.0},
        total=75.0,
    )
    return compare_reports(
        CoverageDiff(new=new, old=old),
        skip_unchanged=True,
        strip_prefix="/repo/",
        per_file_delta=5,
        aggregate_delta=None,
    )


def test_markdown_rows(mixed_report: DiffReport) -> None:
    rows = [format_row(r) for r in mixed_report.files]
    assert rows == [
        " :red_circle: | src/a.ts | 80 **(-10)** | 80 **(-10)** | 80 **(-10)** | 80 **(-10)**",
        " :sparkles: :new: | **src/new.ts** | **66.67** | **66.67** | **66.67** | **66.67**",
        " :green_circle: | src/up.ts | 75.5 **(5.5)** | 75.5 **(5.5)** | 75.5 **(5.5)** | 75.5 **(5.5)**",
        " :x: | ~~src/gone.ts~~ | ~~12~~ | ~~12~~ | ~~12~~ | ~~12~~",
    ]


def test_markdown_comment_layout(mixed_report: DiffReport) -> None:
    text = format_markdown(
        mixed_report,
        RenderOptions(base_name="main", head_name="feature", commit_sha="abc123"),
    )
    lines = text.splitlines()
    assert lines[0] == DIFF_COMMENT_MARKER
    assert lines[1] == "Commit SHA:abc123"
    assert lines[2] == "## Test coverage results :test_tube:"
    assert "Code coverage diff between base branch: main and head branch: feature" in lines
    assert "Status | File | % Stmts | % Branch | % Funcs | % Lines" in lines
    assert "same.ts" not in text


def test_markdown_unchanged_row_has_blank_status(make_report: Callable[..., CoverageReport]) -> None:
    report = make_report({"a.ts": 40.0})
    result = compare_reports(
        CoverageDiff(new=report, old=report),
        skip_unchanged=False,
        strip_prefix="",
        per_file_delta=None,
        aggregate_delta=None,
    )
    assert format_row(result.files[0]) == "  | a.ts | 40 | 40 | 40 | 40"
    assert result.violation is None


def test_markdown_without_rows() -> None:
    empty = DiffReport(files=(), options=DiffOptions(skip_unchanged=True))
    assert format_markdown(empty, RenderOptions()) == f"{DIFF_COMMENT_MARKER}\n{NO_CHANGES}"


def test_delta_comment() -> None:
    assert format_delta_comment(5.0, commit_sha="abc") == (
        f"{DELTA_COMMENT_MARKER}\nCommit SHA:abc\n"
        "Current PR reduces the test coverage percentage by 5 for some tests"
    )
    assert format_delta_comment(0.5).endswith("by 0.5 for some tests")


def test_human_output(mixed_report: DiffReport) -> None:
    text = render(mixed_report, fmt="human", options=RenderOptions(base_name="main", head_name="feature"))
    assert text.startswith("Coverage diff: main -> feature")
    assert "src/a.ts" in text
    assert "80 (-10)" in text
    assert "75.5 (+5.5)" in text
    assert "Delta check: FAILED" in text
    assert "src/a.ts" in text.split("Delta check: FAILED", 1)[1]
    assert "\x1b[" not in text


def test_human_headings_bold_only_on_color_tty(mixed_report: DiffReport) -> None:
    names = {"base_name": "main", "head_name": "feature"}
    tty = render(mixed_report, fmt="human", options=RenderOptions(color=True, is_tty=True, **names))
    piped = render(mixed_report, fmt="human", options=RenderOptions(color=True, is_tty=False, **names))

    assert tty.startswith("\x1b[1mCoverage diff: main -> feature\x1b[0m")
    assert "\x1b[1mDelta check: FAILED\x1b[0m" in tty
    assert piped.startswith("Coverage diff: main -> feature\n")


def test_human_output_without_changes() -> None:
    empty = DiffReport(files=(), options=DiffOptions())
    assert render(empty, fmt="human", options=RenderOptions()) == "No coverage changes."


def test_json_output_validates(mixed_report: DiffReport) -> None:
    payload = json.loads(render(mixed_report, fmt="json", options=RenderOptions()))

    validate(payload, get_schema("v1"))
    assert payload["schema"] == SCHEMA_ID
    assert payload["tool"]["name"] == "covdelta"
    assert payload["options"] == {"skip_unchanged": True, "strip_prefix": "/repo/", "per_file_delta": 5}
    assert [f["status"] for f in payload["files"]] == ["decreased", "added", "increased", "removed"]
    added = payload["files"][1]
    assert added["metrics"]["lines"] == {"new": 66.67}
    assert payload["files"][0]["metrics"]["statements"] == {"new": 80.0, "old": 90.0, "delta": -10.0}
    assert payload["verdict"]["evaluated"] is True
    assert payload["verdict"]["violated"] is True
    assert {f["file"] for f in payload["verdict"]["failures"]} == {"/repo/src/a.ts"}


def test_json_without_verdict() -> None:
    empty = DiffReport(files=(), options=DiffOptions())
    payload = json.loads(render(empty, fmt="json", options=RenderOptions()))
    assert payload["verdict"] == {"evaluated": False, "violated": False, "failures": []}


def test_unknown_format_suggests_alternative(mixed_report: DiffReport) -> None:
    with pytest.raises(ValueError, match="Did you mean 'markdown'"):
        render(mixed_report, fmt="markdwn", options=RenderOptions())
