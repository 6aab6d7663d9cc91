"""Utility helpers for generating CLI documentation artefacts."""

from __future__ import annotations

import click

_EXIT_STATUS = """\
0  success
1  generic error (unexpected failure)
2  coverage dropped by more than the allowed delta
65 malformed coverage summary data
66 required coverage summary input missing
78 configuration error
"""


def _plain_command(command: click.Command) -> click.Command:
    """Return a plain Click command mirroring *command*.

    Typer commands render help through Rich straight to the console, which
    leaves nothing in the returned help string; a plain command keeps the
    text.
    """
    return click.Command(
        name=command.name,
        params=command.params,
        help=command.help,
        epilog=command.epilog,
        context_settings=command.context_settings,
    )


def _command_help(command: click.Command, name: str) -> str:
    plain = _plain_command(command)
    ctx = click.Context(plain, info_name=name)
    return plain.get_help(ctx).strip()


def build_man_page(command: click.Command, *, prog: str = "covdelta") -> str:
    """Return a plain-text manual page for *command* and its sub-commands."""
    sections = [
        f"{prog.upper()}(1)\n",
        f"NAME\n----\n{prog} - coverage diff and delta gate for coverage-summary.json reports\n\n",
        f"SYNOPSIS\n--------\n{prog} [OPTIONS] COMMAND [ARGS]...\n\n",
        "DESCRIPTION\n-----------\n",
        _command_help(command, prog),
    ]
    if isinstance(command, click.Group):
        for name in sorted(command.commands):
            sub = command.commands[name]
            sections.append(f"\n\n{prog.upper()} {name.upper()}\n")
            sections.append(_command_help(sub, f"{prog} {name}"))
    sections.extend(["\n\nEXIT STATUS\n-----------\n", _EXIT_STATUS.strip(), "\n"])
    return "".join(sections)


__all__ = ["build_man_page"]
