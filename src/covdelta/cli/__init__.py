from covdelta.cli.exit_codes import (
    EXIT_CONFIG,
    EXIT_DATAERR,
    EXIT_DELTA,
    EXIT_GENERIC,
    EXIT_NOINPUT,
    EXIT_OK,
)
from covdelta.cli.root import cli, create_app, main

__all__ = [
    "EXIT_CONFIG",
    "EXIT_DATAERR",
    "EXIT_DELTA",
    "EXIT_GENERIC",
    "EXIT_NOINPUT",
    "EXIT_OK",
    "cli",
    "create_app",
    "main",
]
