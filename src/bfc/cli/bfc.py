"""
bfc - Compile and Run Command-Line Interface
============================================

Reads a program from standard input, compiles it, and runs it. Once the
source has been read to end-of-stream the same stream supplies the
program's ',' input: a terminal keeps accepting bytes after Ctrl-D,
while a pipe or redirected file reports end-of-input straight away.

Usage Examples
--------------
Run a program:
    $ bfc < hello.b

Type a program at a terminal, end it with Ctrl-D, then type its input:
    $ bfc

Show the compiled program instead of running it:
    $ bfc --dump < hello.b

Wrap the data pointer instead of failing at the tape edge:
    $ bfc --pointer-policy wrap < program.b

Exit status is 0 on normal halt and 1 if the program is rejected or
fails at run time.

Copyright (c) 2025-2026 bfc Contributors
"""

import logging
import sys
from typing import Optional

import click

from bfc import __version__
from bfc.cli.errors import handle_cli_exception
from bfc.compiler import Compiler
from bfc.config import MachineConfig, PointerPolicy
from bfc.opcodes import disassemble

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool) -> None:
    """Configure logging on stderr based on verbosity."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s" if verbose else "%(message)s",
    )


# =============================================================================
# CLI Definition
# =============================================================================

@click.command()
@click.option(
    "--tape-length",
    type=click.IntRange(min=3),
    default=None,
    help="Number of tape cells; also bounds program length (default: 30000)",
)
@click.option(
    "--eof-value",
    type=click.IntRange(0, 255),
    default=None,
    help="Byte stored by ',' once input is exhausted (default: 255)",
)
@click.option(
    "--pointer-policy",
    type=click.Choice([p.value for p in PointerPolicy], case_sensitive=False),
    default=None,
    help="What happens when the data pointer leaves the tape (default: error)",
)
@click.option(
    "--no-optimize",
    is_flag=True,
    help="Keep one instruction per source character",
)
@click.option(
    "--dump",
    is_flag=True,
    help="Print the compiled program listing instead of running it",
)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Log pipeline stages and optimizer statistics to stderr",
)
@click.version_option(version=__version__, prog_name="bfc")
def main(
    tape_length: Optional[int],
    eof_value: Optional[int],
    pointer_policy: Optional[str],
    no_optimize: bool,
    dump: bool,
    verbose: bool,
) -> None:
    """
    Compile and run a program read from standard input.

    Only the characters + - > < . , [ ] are significant; everything else
    is a comment. After the program text, the rest of standard input is
    the program's input.

    \b
    Environment:
        BFC_TAPE_LENGTH      default for --tape-length
        BFC_EOF_VALUE        default for --eof-value
        BFC_POINTER_POLICY   default for --pointer-policy
    """
    setup_logging(verbose)

    config = MachineConfig.from_env()
    if tape_length is not None:
        config.tape_length = tape_length
    if eof_value is not None:
        config.eof_value = eof_value
    if pointer_policy is not None:
        config.pointer_policy = PointerPolicy(pointer_policy.lower())

    stdin = sys.stdin.buffer
    stdout = sys.stdout.buffer

    try:
        compiler = Compiler(config, optimize=not no_optimize)
        result = compiler.compile(stdin)

        if verbose:
            click.echo(str(result.stats), err=True)

        if dump:
            click.echo(disassemble(result.program))
            return

        vm = compiler.machine(result.program, stdin, stdout)
        state = vm.run()
        logger.debug(f"Executed {state.steps} instructions")

    except Exception as e:
        handle_cli_exception(e, verbose)


if __name__ == "__main__":
    main(prog_name="bfc")
