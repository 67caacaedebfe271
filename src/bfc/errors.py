"""
bfc Error Hierarchy
===================

This module defines the exception hierarchy for the whole toolchain.
All exceptions inherit from BFCError, allowing callers to catch every
compiler or machine error with a single except clause if desired.

Exception Hierarchy
-------------------
BFCError (base)
├── CompileError (rejected before any instruction executes)
│   ├── CapacityExceededError - program longer than the tape can hold
│   └── UnmatchedBracketError - '[' / ']' nesting is unbalanced
├── MachineError (raised while a program runs)
│   └── TapeBoundsError - data pointer left the tape
└── ConfigurationError - invalid machine configuration

Error messages are a single line so the CLI can print them verbatim:

    error: unmatched ']' at token 4
"""

from typing import Optional


# =============================================================================
# Base Exception Class
# =============================================================================

class BFCError(Exception):
    """
    Base exception for all bfc errors.

    Subclasses set ``message`` and let ``_format_message`` build the
    final text, so ``str(error)`` is always one line:

        try:
            run_program(source)
        except BFCError as e:
            print(e)

    Attributes:
        message: The error description (without the "error:" prefix)
    """

    def __init__(self, message: str):
        self.message = message
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        return f"error: {self.message}"


# =============================================================================
# Compile-Time Errors
# =============================================================================

class CompileError(BFCError):
    """
    Base class for errors detected before execution begins.

    When one of these is raised no bytecode has run and no output has
    been produced.
    """
    pass


class CapacityExceededError(CompileError):
    """
    The source holds more significant characters than the tape allows.

    Raised by the lexer as soon as the limit is crossed; the rest of the
    input is not read.

    Attributes:
        limit: Maximum number of significant characters accepted
    """

    def __init__(self, limit: int):
        self.limit = limit
        super().__init__(
            f"program exceeds available memory "
            f"(more than {limit} instructions)"
        )


class UnmatchedBracketError(CompileError):
    """
    Loop brackets are not balanced.

    Covers both a ']' with no open loop and a '[' that is never closed.

    Attributes:
        bracket: The offending bracket character, '[' or ']'
        position: Index of the offending token in the token stream
    """

    def __init__(self, bracket: str, position: Optional[int] = None):
        self.bracket = bracket
        self.position = position
        message = f"unmatched '{bracket}'"
        if position is not None:
            message += f" at token {position}"
        super().__init__(message)


# =============================================================================
# Machine Errors
# =============================================================================

class MachineError(BFCError):
    """Base class for fatal conditions raised while a program runs."""
    pass


class TapeBoundsError(MachineError):
    """
    The data pointer moved outside the tape.

    Only raised under PointerPolicy.ERROR; PointerPolicy.WRAP folds the
    pointer back onto the tape instead.

    Attributes:
        pointer: The out-of-range data pointer value
        tape_length: Number of cells on the tape
        ip: Index of the instruction that moved the pointer
    """

    def __init__(self, pointer: int, tape_length: int, ip: int):
        self.pointer = pointer
        self.tape_length = tape_length
        self.ip = ip
        super().__init__(
            f"data pointer moved to {pointer}, outside tape of "
            f"{tape_length} cells (instruction {ip})"
        )


# =============================================================================
# Configuration Errors
# =============================================================================

class ConfigurationError(BFCError):
    """Invalid machine configuration (tape length, EOF value, policy)."""
    pass
