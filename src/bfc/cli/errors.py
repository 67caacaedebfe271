"""
CLI Error Handling
==================

Maps exceptions to a one-line message on stderr and a process exit code.
"""

import sys
import traceback
from enum import IntEnum
from typing import NoReturn

import click

from bfc.errors import BFCError


class ExitCode(IntEnum):
    """Exit codes for the bfc tool."""
    SUCCESS = 0
    FAILURE = 1      # Rejected program, machine fault, or internal error


def handle_cli_exception(error: Exception, verbose: bool = False) -> NoReturn:
    """
    Report an exception and exit.

    BFCError messages are already formatted with their "error:" prefix
    and are printed as-is. Anything else is an internal error; its
    traceback is printed only in verbose mode.

    Args:
        error: The exception that was raised
        verbose: If True, print full traceback for internal errors

    Raises:
        SystemExit: Always exits with ExitCode.FAILURE
    """
    if isinstance(error, BFCError):
        click.echo(str(error), err=True)
        sys.exit(ExitCode.FAILURE)

    click.echo(f"internal error: {error!r}", err=True)
    if verbose:
        traceback.print_exc()
    sys.exit(ExitCode.FAILURE)
