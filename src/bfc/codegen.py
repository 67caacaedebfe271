"""
Bytecode Compiler
=================

Lowers a validated opcode sequence into Instructions, one per opcode.
Counted operations start with argument 1; jumps start UNRESOLVED and
are linked by the optimizer. The output always ends with HALT, arg 0.
"""

import logging

from bfc.opcodes import Instruction, Opcode, UNRESOLVED

logger = logging.getLogger(__name__)


class CodeGenerator:
    """Opcode-to-bytecode lowering. Total: never raises on parser output."""

    def generate(self, opcodes: list[Opcode]) -> list[Instruction]:
        """
        Build one Instruction per opcode.

        Args:
            opcodes: Parser output; anything after the first HALT is ignored

        Returns:
            Raw bytecode terminated by Instruction(HALT, 0)
        """
        bytecode: list[Instruction] = []

        for op in opcodes:
            if op is Opcode.HALT:
                break
            arg = UNRESOLVED if op.is_jump else 1
            bytecode.append(Instruction(op, arg))

        bytecode.append(Instruction(Opcode.HALT, 0))
        logger.debug(f"Generated {len(bytecode)} instructions")
        return bytecode


def generate_bytecode(opcodes: list[Opcode]) -> list[Instruction]:
    """Convenience wrapper around CodeGenerator().generate(opcodes)."""
    return CodeGenerator().generate(opcodes)
