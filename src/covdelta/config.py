"""Central configuration and constants for ``covdelta``."""

from __future__ import annotations

import json
import math
import tomllib
from dataclasses import dataclass, fields
from functools import cache
from importlib import resources
from pathlib import Path

from covdelta._meta import logger
from covdelta.errors import ConfigError

# Default logging format used by the CLI entry point.
LOG_FORMAT = "%(levelname)s: %(message)s"

# Default allowed drop (percentage points) when neither flag nor config sets one.
DEFAULT_DELTA = 0.0

_FORMATS = frozenset({"auto", "markdown", "human", "json"})

_SCHEMA_FILES: dict[str, str] = {
    "v1": "schema.json",
}


@cache
def get_schema(version: str = "v1") -> dict[str, object]:
    """Load and cache the JSON schema for structured output."""
    try:
        filename = _SCHEMA_FILES[version]
    except KeyError as exc:
        choices = ", ".join(sorted(_SCHEMA_FILES))
        msg = f"Unsupported schema version: {version!r}. Available versions: {choices}"
        raise ValueError(msg) from exc
    return json.loads(resources.files("covdelta.data").joinpath(filename).read_text(encoding="utf-8"))


@dataclass(frozen=True, slots=True)
class Settings:
    """Values read from ``[tool.covdelta]``; ``None`` means "not configured"."""

    delta: float | None = None
    total_delta: float | None = None
    full: bool | None = None
    strip_prefix: str | None = None
    format: str | None = None


def _get_number(table: dict[str, object], key: str) -> float | None:
    value = table.get(key)
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int | float) or math.isnan(value) or value < 0:
        msg = f"[tool.covdelta] {key} must be a non-negative number, got {value!r}"
        raise ConfigError(msg)
    return float(value)


def _get_bool(table: dict[str, object], key: str) -> bool | None:
    value = table.get(key)
    if value is None:
        return None
    if not isinstance(value, bool):
        msg = f"[tool.covdelta] {key} must be a boolean, got {value!r}"
        raise ConfigError(msg)
    return value


def _get_str(table: dict[str, object], key: str, *, choices: frozenset[str] | None = None) -> str | None:
    value = table.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        msg = f"[tool.covdelta] {key} must be a string, got {value!r}"
        raise ConfigError(msg)
    if choices is not None and value not in choices:
        msg = f"[tool.covdelta] {key} must be one of {', '.join(sorted(choices))}, got {value!r}"
        raise ConfigError(msg)
    return value


def settings_from_pyproject(pyproject: Path) -> Settings:
    """Extract ``[tool.covdelta]`` settings from *pyproject*.

    An unreadable file is logged and ignored; invalid values raise :class:`ConfigError`.
    """
    try:
        with pyproject.open("rb") as f:
            data = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        logger.warning("Failed to parse %s: %s", pyproject, e)
        return Settings()

    table = data.get("tool", {}).get("covdelta", {})
    if not isinstance(table, dict):
        msg = "[tool.covdelta] must be a table"
        raise ConfigError(msg)

    known = {f.name.replace("_", "-") for f in fields(Settings)}
    for key in table:
        if key not in known:
            logger.warning("ignoring unknown [tool.covdelta] key: %s", key)

    return Settings(
        delta=_get_number(table, "delta"),
        total_delta=_get_number(table, "total-delta"),
        full=_get_bool(table, "full"),
        strip_prefix=_get_str(table, "strip-prefix"),
        format=_get_str(table, "format", choices=_FORMATS),
    )


def load_settings(cwd: Path | None = None) -> Settings:
    """Look for ``pyproject.toml`` in *cwd* (default: current directory)."""
    pyproject = (cwd or Path.cwd()) / "pyproject.toml"
    if not pyproject.is_file():
        return Settings()
    settings = settings_from_pyproject(pyproject)
    logger.debug("settings from %s: %s", pyproject, settings)
    return settings


__all__ = ["DEFAULT_DELTA", "LOG_FORMAT", "Settings", "get_schema", "load_settings", "settings_from_pyproject"]
