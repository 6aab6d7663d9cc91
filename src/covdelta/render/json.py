from __future__ import annotations

import json
from typing import TYPE_CHECKING

from jsonschema import validate

from covdelta._meta import __version__
from covdelta.config import get_schema

if TYPE_CHECKING:
    from covdelta.model.diff import DiffOptions, DiffReport, FileCoverageDiff
    from covdelta.model.thresholds import DeltaFailure, DeltaViolation
    from covdelta.render.render import RenderOptions

SCHEMA_ID = str(get_schema("v1")["$id"])


def _prune_none(obj: object) -> object:
    """Recursively drop dict keys with None values; tuples become lists."""
    if isinstance(obj, dict):
        return {k: _prune_none(v) for k, v in obj.items() if v is not None}
    if isinstance(obj, list | tuple):
        return [_prune_none(v) for v in obj]
    return obj


def _options_payload(opts: DiffOptions) -> dict[str, object]:
    return {
        "skip_unchanged": opts.skip_unchanged,
        "strip_prefix": opts.strip_prefix,
        "per_file_delta": opts.per_file_delta,
        "aggregate_delta": opts.aggregate_delta,
    }


def _file_payload(row: FileCoverageDiff) -> dict[str, object]:
    return {
        "path": row.path,
        "key": row.key,
        "status": row.status.value,
        "metrics": {
            md.metric.value: {"new": md.new_pct, "old": md.old_pct, "delta": md.delta} for md in row.metrics
        },
    }


def _failure_payload(f: DeltaFailure) -> dict[str, object]:
    return {
        "file": f.file,
        "metric": f.metric.value,
        "old": f.old_pct,
        "new": f.new_pct,
        "delta": f.delta,
        "allowed": f.allowed,
        "aggregate": f.aggregate,
    }


def _verdict_payload(violation: DeltaViolation | None) -> dict[str, object]:
    if violation is None:
        return {"evaluated": False, "violated": False, "failures": []}
    return {
        "evaluated": True,
        "violated": violation.violated,
        "failures": [_failure_payload(f) for f in violation.failures],
    }


def format_json(report: DiffReport, options: RenderOptions | None = None) -> str:  # noqa: ARG001
    """Render the comparison as schema-validated JSON."""
    payload = _prune_none(
        {
            "schema": SCHEMA_ID,
            "schema_version": 1,
            "tool": {"name": "covdelta", "version": __version__},
            "options": _options_payload(report.options),
            "files": [_file_payload(r) for r in report.files],
            "verdict": _verdict_payload(report.violation),
        }
    )
    validate(payload, get_schema("v1"))
    return json.dumps(payload, indent=2, sort_keys=True)


__all__ = ["SCHEMA_ID", "format_json"]
