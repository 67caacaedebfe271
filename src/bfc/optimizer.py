"""
Bytecode Optimizer
==================

A single forward pass over raw bytecode that produces the program the
virtual machine executes.

Supported Optimizations
-----------------------
1. **Run-Length Folding**: consecutive identical non-jump instructions
   collapse into one instruction whose argument is the run length
   (``+++++`` → ``ADD 5``, ``>>>`` → ``INC 3``, ``...`` → ``PUT 3``).

2. **Jump Linking**: each loop bracket pair is resolved into direct,
   mutually referencing targets. A JZ at index i and its JNZ at index j
   end up with ``JZ.arg == j`` and ``JNZ.arg == i``.

Jump linking always runs, since the machine cannot execute unresolved
jumps. Folding can be switched off (``fold_runs=False``) to execute
bytecode with its original one-instruction-per-character layout.

Architecture
------------
Pending loop opens are kept on an explicit list used as a LIFO stack,
never the Python call stack, so nesting depth is limited only by the
program length. A loop close with no pending open cannot happen on
parser output and is guarded by an assertion.

Folding never crosses a jump: a run ends at the first instruction with
a different opcode, and jumps are always emitted on their own.

Usage
-----
>>> from bfc.optimizer import Optimizer
>>> optimizer = Optimizer()
>>> program = optimizer.optimize(bytecode)
>>> print(optimizer.stats)

Copyright (c) 2025-2026 bfc Contributors
"""

from dataclasses import dataclass
import logging

from bfc.opcodes import Instruction, Opcode

logger = logging.getLogger(__name__)


# =============================================================================
# Optimization Statistics
# =============================================================================

@dataclass
class OptimizationStats:
    """
    Statistics about one optimizer pass.

    Attributes:
        input_instructions: Raw instructions consumed (excluding HALT)
        output_instructions: Instructions emitted (excluding HALT)
        runs_folded: Emitted instructions that absorbed two or more raw ones
        loops_linked: Bracket pairs resolved
    """
    input_instructions: int = 0
    output_instructions: int = 0
    runs_folded: int = 0
    loops_linked: int = 0

    @property
    def instructions_removed(self) -> int:
        """Raw instructions eliminated by folding."""
        return self.input_instructions - self.output_instructions

    def __str__(self) -> str:
        """Human-readable summary of the pass."""
        lines = ["Optimization Statistics:"]
        lines.append(f"  Instructions in: {self.input_instructions}")
        lines.append(f"  Instructions out: {self.output_instructions}")
        if self.runs_folded:
            lines.append(f"  Runs folded: {self.runs_folded}")
        if self.loops_linked:
            lines.append(f"  Loops linked: {self.loops_linked}")
        lines.append(f"  Instructions removed: {self.instructions_removed}")
        return "\n".join(lines)


# =============================================================================
# Optimizer
# =============================================================================

class Optimizer:
    """
    Run-length folding and jump-linking pass.

    The input bytecode is left untouched; fresh Instruction objects are
    emitted.

    Attributes:
        fold_runs: Whether to collapse runs of identical instructions
        stats: Statistics about the last optimize() call
    """

    def __init__(self, fold_runs: bool = True):
        """
        Initialize the optimizer.

        Args:
            fold_runs: If False, only link jumps and keep one instruction
                per raw instruction
        """
        self.fold_runs = fold_runs
        self.stats = OptimizationStats()

    def optimize(self, bytecode: list[Instruction]) -> list[Instruction]:
        """
        Optimize raw bytecode.

        Args:
            bytecode: Code generator output, terminated by HALT

        Returns:
            Executable program with resolved jumps, terminated by HALT
        """
        self.stats = OptimizationStats()

        out: list[Instruction] = []
        loop_stack: list[int] = []
        i = 0

        while bytecode[i].op is not Opcode.HALT:
            op = bytecode[i].op

            if op is Opcode.JUMP_IF_ZERO:
                loop_stack.append(len(out))
                out.append(Instruction(op, bytecode[i].arg))
                i += 1
                continue

            if op is Opcode.JUMP_IF_NONZERO:
                assert loop_stack, f"loop close at {i} has no pending loop open"
                start = loop_stack.pop()
                cur = len(out)
                out[start].arg = cur
                out.append(Instruction(op, start))
                self.stats.loops_linked += 1
                i += 1
                continue

            count = bytecode[i].arg
            j = i + 1
            if self.fold_runs:
                while bytecode[j].op is op:
                    count += bytecode[j].arg
                    j += 1
                if j - i > 1:
                    self.stats.runs_folded += 1
            out.append(Instruction(op, count))
            i = j

        assert not loop_stack, f"{len(loop_stack)} loop opens never closed"

        self.stats.input_instructions = i
        self.stats.output_instructions = len(out)
        out.append(Instruction(Opcode.HALT, 0))

        logger.debug(
            f"Optimized {self.stats.input_instructions} instructions into "
            f"{self.stats.output_instructions} "
            f"({self.stats.runs_folded} runs folded, "
            f"{self.stats.loops_linked} loops linked)"
        )
        return out


# =============================================================================
# Convenience Function
# =============================================================================

def optimize_bytecode(
    bytecode: list[Instruction],
    fold_runs: bool = True,
) -> tuple[list[Instruction], OptimizationStats]:
    """
    Convenience function to optimize bytecode.

    Args:
        bytecode: Raw bytecode terminated by HALT
        fold_runs: Whether to collapse runs of identical instructions

    Returns:
        Tuple of (optimized program, optimization statistics)
    """
    optimizer = Optimizer(fold_runs=fold_runs)
    result = optimizer.optimize(bytecode)
    return result, optimizer.stats
