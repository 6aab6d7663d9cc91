from __future__ import annotations

from typing import Annotated

import typer
from typer.main import get_command

from covdelta._meta import __version__
from covdelta.cli import diff, man
from covdelta.cli._shared import configure_logging


def _version_callback(value: bool) -> None:  # noqa: FBT001
    if value:
        typer.echo(f"covdelta {__version__}")
        raise typer.Exit


def create_app() -> typer.Typer:
    app = typer.Typer(help="Compare two coverage-summary.json reports and gate on coverage drops.")

    @app.callback()
    def _root(
        *,
        version: Annotated[  # noqa: ARG001 - handled by the eager callback
            bool,
            typer.Option("--version", callback=_version_callback, is_eager=True, help="Show version and exit"),
        ] = False,
        quiet: Annotated[bool, typer.Option("-q", "--quiet", help="Emit only errors")] = False,
        verbose: Annotated[bool, typer.Option("-v", "--verbose", help="Emit diagnostic logging")] = False,
    ) -> None:
        configure_logging(quiet=quiet, verbose=verbose)

    diff.register(app)
    man.register(app)

    return app


def main() -> None:
    app = create_app()
    get_command(app)()


# Click-compatible object for tooling that imports it
cli = get_command(create_app())

__all__ = ["cli", "create_app", "main"]
