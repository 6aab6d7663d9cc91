from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer

from covdelta.cli._shared import resolve_use_color
from covdelta.cli.exit_codes import (
    EXIT_CONFIG,
    EXIT_DATAERR,
    EXIT_DELTA,
    EXIT_GENERIC,
    EXIT_NOINPUT,
    EXIT_OK,
)
from covdelta.config import DEFAULT_DELTA, Settings, load_settings
from covdelta.errors import ConfigError
from covdelta.io import OutputFormat, compute_io_policy, write_output
from covdelta.pipeline import (
    ConfigurationError,
    DataError,
    DeltaExceededError,
    NoInputError,
    RenderOptions,
    SystemIOError,
    UnexpectedError,
    compare_files,
    evaluate_delta_or_raise,
    render_report,
)
from covdelta.render._util import format_pct
from covdelta.render.markdown import format_delta_comment


def _load_settings_or_exit() -> Settings:
    try:
        return load_settings()
    except ConfigError as exc:
        typer.echo(f"ERROR: {exc}", err=True)
        raise typer.Exit(code=EXIT_CONFIG) from exc


def _default_strip_prefix() -> str:
    return f"{Path.cwd().as_posix()}/"


def _report_delta_failure(exc: DeltaExceededError, *, delta_comment: Path | None, commit_sha: str | None) -> None:
    message = format_delta_comment(exc.per_file_delta, commit_sha=commit_sha)
    if delta_comment is not None:
        write_output(message, delta_comment)
    typer.echo(
        f"ERROR: Current PR reduces the test coverage percentage by {format_pct(exc.per_file_delta)} "
        "for some tests",
        err=True,
    )
    for f in exc.violation.failures:
        label = "total" if f.aggregate else f.file
        typer.echo(
            f"  {label}: {f.metric.value} dropped {format_pct(-f.delta)} (allowed {format_pct(f.allowed)})",
            err=True,
        )


def register(app: typer.Typer) -> None:
    @app.command("diff")
    def diff_cmd(
        base: Annotated[Path, typer.Argument(..., help="Base-branch coverage-summary.json (old).")],
        head: Annotated[Path, typer.Argument(..., help="Head-branch coverage-summary.json (new).")],
        delta: Annotated[
            float | None,
            typer.Option("--delta", min=0, help="Allowed per-file drop in percentage points."),
        ] = None,
        total_delta: Annotated[
            float | None,
            typer.Option("--total-delta", min=0, help="Allowed drop of the total entry (unchecked if unset)."),
        ] = None,
        strip_prefix: Annotated[
            str | None,
            typer.Option("--strip-prefix", help="Prefix removed from displayed paths (default: CWD + '/')."),
        ] = None,
        output_format: Annotated[
            OutputFormat | None,
            typer.Option("--format", help="Output format: auto, markdown, human, json."),
        ] = None,
        output: Annotated[
            Path | None,
            typer.Option("--output", help="Write output to PATH (use '-' for stdout)."),
        ] = None,
        delta_comment: Annotated[
            Path | None,
            typer.Option("--delta-comment", help="On delta failure, write the failure comment to PATH."),
        ] = None,
        commit_sha: Annotated[
            str | None, typer.Option("--commit-sha", help="Commit SHA recorded in the comment header.")
        ] = None,
        base_name: Annotated[str | None, typer.Option("--base-name", help="Base branch name.")] = None,
        head_name: Annotated[str | None, typer.Option("--head-name", help="Head branch name.")] = None,
        *,
        full: Annotated[
            bool,
            typer.Option("--full", help="List unchanged files too (default: changed only)."),
        ] = False,
        color: Annotated[bool, typer.Option("--color", help="Force ANSI color output.")] = False,
        no_color: Annotated[bool, typer.Option("--no-color", help="Disable ANSI color output.")] = False,
    ) -> None:
        """Compare BASE and HEAD coverage summaries and fail on coverage drops."""
        settings = _load_settings_or_exit()

        fmt = output_format or OutputFormat(settings.format or OutputFormat.AUTO)
        render_fmt, is_tty_like, color_allowed = compute_io_policy(fmt=fmt, output=output)
        use_color = resolve_use_color(color=color, no_color=no_color, color_allowed=color_allowed)

        per_file_delta = delta if delta is not None else settings.delta
        aggregate_delta = total_delta if total_delta is not None else settings.total_delta
        show_full = full or bool(settings.full)
        prefix = strip_prefix if strip_prefix is not None else settings.strip_prefix
        if prefix is None:
            prefix = _default_strip_prefix()

        try:
            report = compare_files(
                base=base,
                head=head,
                skip_unchanged=not show_full,
                strip_prefix=prefix,
                per_file_delta=per_file_delta if per_file_delta is not None else DEFAULT_DELTA,
                aggregate_delta=aggregate_delta,
            )
            text = render_report(
                report,
                fmt=render_fmt,
                options=RenderOptions(
                    color=use_color,
                    is_tty=is_tty_like,
                    base_name=base_name,
                    head_name=head_name,
                    commit_sha=commit_sha,
                ),
            )
        except NoInputError as exc:
            typer.echo(f"ERROR: {exc}", err=True)
            raise typer.Exit(code=EXIT_NOINPUT) from exc
        except DataError as exc:
            typer.echo(f"ERROR: {exc}", err=True)
            raise typer.Exit(code=EXIT_DATAERR) from exc
        except SystemIOError as exc:
            typer.echo(f"ERROR: {exc}", err=True)
            raise typer.Exit(code=EXIT_NOINPUT) from exc
        except ConfigurationError as exc:
            typer.echo(f"ERROR: {exc}", err=True)
            raise typer.Exit(code=EXIT_CONFIG) from exc
        except UnexpectedError as exc:
            typer.echo(f"ERROR: {exc}", err=True)
            raise typer.Exit(code=EXIT_GENERIC) from exc

        write_output(text, output)

        try:
            evaluate_delta_or_raise(report)
        except DeltaExceededError as exc:
            _report_delta_failure(exc, delta_comment=delta_comment, commit_sha=commit_sha)
            raise typer.Exit(code=EXIT_DELTA) from exc

        raise typer.Exit(code=EXIT_OK)


__all__ = ["register"]
