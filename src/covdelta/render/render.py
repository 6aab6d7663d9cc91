"""Format dispatch for coverage-diff output."""

from __future__ import annotations

import difflib
from dataclasses import dataclass
from typing import TYPE_CHECKING

from covdelta._meta import logger
from covdelta.render.human import format_human
from covdelta.render.json import format_json
from covdelta.render.markdown import format_markdown

if TYPE_CHECKING:
    from collections.abc import Callable

    from covdelta.model.diff import DiffReport


@dataclass(frozen=True, slots=True)
class RenderOptions:
    """Presentation-only settings shared by all renderers."""

    color: bool = False
    is_tty: bool = False
    base_name: str | None = None
    head_name: str | None = None
    commit_sha: str | None = None


FORMATTERS: dict[str, Callable[[DiffReport, RenderOptions], str]] = {
    "markdown": format_markdown,
    "human": format_human,
    "json": format_json,
}


def render(report: DiffReport, *, fmt: str, options: RenderOptions) -> str:
    """Render *report* with the formatter registered for *fmt*."""
    try:
        formatter = FORMATTERS[fmt]
    except KeyError as err:
        choices = sorted(FORMATTERS)
        suggestion = difflib.get_close_matches(fmt, choices, n=1)
        hint = f". Did you mean {suggestion[0]!r}?" if suggestion else ""
        msg = f"{fmt!r} is not one of {', '.join(choices)}{hint}"
        raise ValueError(msg) from err

    logger.debug("selected formatter %s", fmt)
    return formatter(report, options)


__all__ = ["FORMATTERS", "RenderOptions", "render"]
