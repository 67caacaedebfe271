"""
Compiler Main Module
====================

Orchestrates the complete pipeline:

    Source → Lex → Parse → Generate → Optimize → Execute

Usage
-----
Command line:
    $ bfc < hello.b

Programmatic:
    >>> from bfc import run_program
    >>> run_program(b"++++++++[>++++++++<-]>+.").output
    b'A'

Compilation Pipeline
--------------------
1. **Lexical Analysis**: keep the eight significant characters, enforce
   the program-length bound
2. **Parsing**: map tokens to opcodes, validate bracket nesting
3. **Code Generation**: one instruction per opcode
4. **Optimization**: fold runs, link jump targets

Every compile error is raised before execution starts, so a rejected
program never produces output.

Copyright (c) 2025-2026 bfc Contributors
"""

from dataclasses import dataclass, field
from typing import BinaryIO, Optional
import io
import logging

from bfc.codegen import CodeGenerator
from bfc.config import MachineConfig
from bfc.lexer import Lexer, SourceInput, TokenType
from bfc.opcodes import Instruction, Opcode
from bfc.optimizer import OptimizationStats, Optimizer
from bfc.parser import Parser
from bfc.vm import MachineState, VirtualMachine

logger = logging.getLogger(__name__)


@dataclass
class CompilerResult:
    """
    Everything produced by one compilation.

    Attributes:
        tokens: Lexer output (ends with EOF)
        opcodes: Parser output (ends with HALT)
        bytecode: Raw instructions, jumps unresolved (ends with HALT)
        program: Executable instructions (ends with HALT)
        stats: Optimizer statistics
    """
    tokens: list[TokenType] = field(default_factory=list)
    opcodes: list[Opcode] = field(default_factory=list)
    bytecode: list[Instruction] = field(default_factory=list)
    program: list[Instruction] = field(default_factory=list)
    stats: OptimizationStats = field(default_factory=OptimizationStats)


@dataclass
class ExecutionResult:
    """
    Outcome of running a program to completion.

    Attributes:
        output: Bytes written by '.' in execution order
        tape: Final tape contents
        state: Final machine registers
    """
    output: bytes
    tape: bytes
    state: MachineState


class Compiler:
    """
    Source-to-program compiler.

    Example:
        compiler = Compiler()
        result = compiler.compile(b"+[-]")
        vm = compiler.machine(result.program)

    Attributes:
        config: Machine configuration (capacity bound, tape, EOF, policy)
        optimize: Whether to fold runs (jumps are always linked)
    """

    def __init__(self, config: Optional[MachineConfig] = None, optimize: bool = True):
        """
        Initialize the compiler.

        Args:
            config: Machine configuration (uses defaults if None)
            optimize: If False, keep one instruction per source character
        """
        self.config = (config or MachineConfig()).validate()
        self.optimize = optimize

    def compile(self, source: SourceInput) -> CompilerResult:
        """
        Compile source to an executable program.

        Args:
            source: Program text as bytes, str, or a binary stream; a
                stream is read to end-of-stream

        Returns:
            CompilerResult with every intermediate stage

        Raises:
            CapacityExceededError: If the program is longer than the tape allows
            UnmatchedBracketError: If loop brackets are unbalanced
        """
        result = CompilerResult()

        # Stage 1: Lexical analysis
        result.tokens = Lexer(source, self.config.max_program_length).tokenize()

        # Stage 2: Parsing
        result.opcodes = Parser(result.tokens).parse()

        # Stage 3: Code generation
        result.bytecode = CodeGenerator().generate(result.opcodes)

        # Stage 4: Optimization
        optimizer = Optimizer(fold_runs=self.optimize)
        result.program = optimizer.optimize(result.bytecode)
        result.stats = optimizer.stats

        logger.debug(f"Compiled program of {len(result.program)} instructions")
        return result

    def machine(
        self,
        program: list[Instruction],
        input_stream: Optional[BinaryIO] = None,
        output_stream: Optional[BinaryIO] = None,
    ) -> VirtualMachine:
        """Create a VirtualMachine for ``program`` using this compiler's config."""
        return VirtualMachine(program, self.config, input_stream, output_stream)


def run_program(
    source: SourceInput,
    input_data: bytes = b"",
    config: Optional[MachineConfig] = None,
    optimize: bool = True,
) -> ExecutionResult:
    """
    Compile and run a program with in-memory I/O.

    Args:
        source: Program text
        input_data: Bytes supplied to ',' operations
        config: Machine configuration (uses defaults if None)
        optimize: Whether to fold runs

    Returns:
        ExecutionResult with the output bytes and final tape

    Raises:
        CompileError: If the program is rejected
        MachineError: If execution fails (e.g. pointer out of bounds)
    """
    compiler = Compiler(config, optimize=optimize)
    compiled = compiler.compile(source)

    output = io.BytesIO()
    vm = compiler.machine(compiled.program, io.BytesIO(input_data), output)
    state = vm.run()

    return ExecutionResult(
        output=output.getvalue(),
        tape=bytes(vm.tape),
        state=state,
    )
