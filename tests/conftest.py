from __future__ import annotations

import json
from collections.abc import Callable, Mapping
from pathlib import Path

import pytest
from click.testing import CliRunner

from covdelta.model import FULL_COVERAGE, METRICS, CoverageReport

# A file shape is either one percentage used for all four metrics, or a
# mapping of metric name -> percentage (missing metrics default to 100).
FileShape = float | Mapping[str, float]


def _metric(value: float) -> dict[str, float | int]:
    total = 200
    covered = round(total * value / 100)
    return {"total": total, "covered": covered, "skipped": 0, "pct": value}


def _entry(shape: FileShape) -> dict[str, dict[str, float | int]]:
    if isinstance(shape, Mapping):
        return {m.value: _metric(shape.get(m.value, 100.0)) for m in METRICS}
    return {m.value: _metric(shape) for m in METRICS}


def build_summary(files: Mapping[str, FileShape], *, total: FileShape = 100.0) -> dict[str, object]:
    data: dict[str, object] = {"total": _entry(total)}
    data.update({key: _entry(shape) for key, shape in files.items()})
    return data


def counts(covered: int, total: int, *, skipped: int = 0) -> dict[str, float | int]:
    """Return one metric dict whose ``pct`` is derived from the counts."""
    value = FULL_COVERAGE if total == 0 else covered / total * FULL_COVERAGE
    return {"total": total, "covered": covered, "skipped": skipped, "pct": round(value, 2)}


@pytest.fixture
def cli_runner() -> CliRunner:
    """Return a Click CLI runner for invoking the command-line interface."""
    return CliRunner()


@pytest.fixture
def summary_data() -> Callable[..., dict[str, object]]:
    return build_summary


@pytest.fixture
def make_report() -> Callable[..., CoverageReport]:
    def build(files: Mapping[str, FileShape], *, total: FileShape = 100.0) -> CoverageReport:
        return CoverageReport.from_summary(build_summary(files, total=total))

    return build


@pytest.fixture
def summary_file(tmp_path: Path) -> Callable[..., Path]:
    def write(
        files: Mapping[str, FileShape],
        *,
        total: FileShape = 100.0,
        filename: str = "coverage-summary.json",
    ) -> Path:
        path = tmp_path / filename
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(build_summary(files, total=total)), encoding="utf-8")
        return path

    return write
