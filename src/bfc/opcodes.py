"""
Instruction Set
===============

The uniform instruction representation shared by the parser, bytecode
compiler, optimizer and virtual machine.

Opcodes
-------
| Token | Opcode          | Mnemonic | Argument (after optimization)     |
|-------|-----------------|----------|-----------------------------------|
| +     | ADD             | ADD      | amount added to the current cell  |
| -     | SUB             | SUB      | amount subtracted                 |
| >     | INC_PTR         | INC      | cells moved right                 |
| <     | DEC_PTR         | DEC      | cells moved left                  |
| .     | OUTPUT          | PUT      | times the cell is written         |
| ,     | INPUT           | GET      | times a byte is read              |
| [     | JUMP_IF_ZERO    | JZ       | index of the matching JNZ         |
| ]     | JUMP_IF_NONZERO | JNZ      | index of the matching JZ          |
|       | HALT            | HALT     | always 0; ends every program      |

Before optimization every counted instruction carries 1 and jumps carry
UNRESOLVED.
"""

from dataclasses import dataclass
from enum import Enum, auto

from bfc.lexer import TokenType


# =============================================================================
# Opcode Enumeration
# =============================================================================

class Opcode(Enum):
    """Machine operations, plus the HALT sentinel."""

    ADD = auto()
    SUB = auto()
    INC_PTR = auto()
    DEC_PTR = auto()
    OUTPUT = auto()
    INPUT = auto()
    JUMP_IF_ZERO = auto()
    JUMP_IF_NONZERO = auto()

    # End-of-program sentinel
    HALT = auto()

    @property
    def is_jump(self) -> bool:
        """True for the two loop-bracket opcodes."""
        return self in JUMP_OPCODES


JUMP_OPCODES = frozenset({Opcode.JUMP_IF_ZERO, Opcode.JUMP_IF_NONZERO})

TOKEN_OPCODES: dict[TokenType, Opcode] = {
    TokenType.PLUS: Opcode.ADD,
    TokenType.MINUS: Opcode.SUB,
    TokenType.GREATER: Opcode.INC_PTR,
    TokenType.LESS: Opcode.DEC_PTR,
    TokenType.DOT: Opcode.OUTPUT,
    TokenType.COMMA: Opcode.INPUT,
    TokenType.LBRACKET: Opcode.JUMP_IF_ZERO,
    TokenType.RBRACKET: Opcode.JUMP_IF_NONZERO,
    TokenType.EOF: Opcode.HALT,
}

MNEMONICS: dict[Opcode, str] = {
    Opcode.ADD: "ADD",
    Opcode.SUB: "SUB",
    Opcode.INC_PTR: "INC",
    Opcode.DEC_PTR: "DEC",
    Opcode.OUTPUT: "PUT",
    Opcode.INPUT: "GET",
    Opcode.JUMP_IF_ZERO: "JZ",
    Opcode.JUMP_IF_NONZERO: "JNZ",
    Opcode.HALT: "HALT",
}

# Placeholder jump target written by the bytecode compiler
UNRESOLVED = -1


# =============================================================================
# Instruction
# =============================================================================

@dataclass
class Instruction:
    """
    One opcode with its integer argument.

    Mutable: the optimizer back-patches a loop-open's target once the
    matching loop-close has been placed.
    """
    op: Opcode
    arg: int = 1

    def __str__(self) -> str:
        mnemonic = MNEMONICS[self.op]
        if self.op is Opcode.HALT:
            return mnemonic
        if self.op.is_jump:
            if self.arg == UNRESOLVED:
                return f"{mnemonic:<5} -> ????"
            return f"{mnemonic:<5} -> {self.arg:04d}"
        return f"{mnemonic:<5} {self.arg}"


# =============================================================================
# Listing
# =============================================================================

def format_instruction(index: int, instruction: Instruction) -> str:
    """Format one listing line: ``0003  ADD   5``."""
    return f"{index:04d}  {instruction}"


def disassemble(program: list[Instruction]) -> str:
    """
    Render a program as a numbered listing, one instruction per line.

    Example:
        >>> print(disassemble(program))
        0000  ADD   2
        0001  JZ    -> 0003
        0002  SUB   1
        0003  JNZ   -> 0001
        0004  HALT
    """
    return "\n".join(
        format_instruction(index, instruction)
        for index, instruction in enumerate(program)
    )
