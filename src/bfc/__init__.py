"""
bfc - Optimizing Bytecode Compiler for the Eight-Instruction Tape Language
==========================================================================

This package compiles programs written in the classic bracket-structured
tape language (``+ - > < . , [ ]``) into a compact bytecode and runs
them on a byte-cell virtual machine.

Main Components
---------------
- **lexer**: drops everything but the eight significant characters and
  enforces the program-length bound
- **parser**: maps tokens to opcodes and validates bracket nesting
- **codegen**: lowers opcodes to one instruction each
- **optimizer**: folds runs of identical instructions and links loops
- **vm**: executes the program on a 30,000-cell tape

Quick Start
-----------
Run a program:
    >>> from bfc import run_program
    >>> run_program(b"++++++++[>++++++++<-]>+.").output
    b'A'

Inspect the compiled program:
    >>> from bfc import Compiler, disassemble
    >>> print(disassemble(Compiler().compile(b"+++[-]").program))
    0000  ADD   3
    0001  JZ    -> 0003
    0002  SUB   1
    0003  JNZ   -> 0001
    0004  HALT

Or use the command-line tool:
    $ bfc < hello.b
"""

__version__ = "1.0.0"

# =============================================================================
# Public API Exports
# =============================================================================

from bfc.config import MachineConfig, PointerPolicy
from bfc.errors import (
    BFCError,
    CompileError,
    CapacityExceededError,
    UnmatchedBracketError,
    MachineError,
    TapeBoundsError,
    ConfigurationError,
)
from bfc.lexer import Lexer, TokenType, tokenize
from bfc.opcodes import Instruction, Opcode, disassemble
from bfc.parser import Parser, parse_tokens
from bfc.codegen import CodeGenerator, generate_bytecode
from bfc.optimizer import Optimizer, OptimizationStats, optimize_bytecode
from bfc.vm import VirtualMachine, MachineState
from bfc.compiler import Compiler, CompilerResult, ExecutionResult, run_program

__all__ = [
    "__version__",
    # Configuration
    "MachineConfig",
    "PointerPolicy",
    # Exception hierarchy
    "BFCError",
    "CompileError",
    "CapacityExceededError",
    "UnmatchedBracketError",
    "MachineError",
    "TapeBoundsError",
    "ConfigurationError",
    # Pipeline stages
    "Lexer",
    "TokenType",
    "tokenize",
    "Parser",
    "parse_tokens",
    "Instruction",
    "Opcode",
    "disassemble",
    "CodeGenerator",
    "generate_bytecode",
    "Optimizer",
    "OptimizationStats",
    "optimize_bytecode",
    "VirtualMachine",
    "MachineState",
    # Driver
    "Compiler",
    "CompilerResult",
    "ExecutionResult",
    "run_program",
]
