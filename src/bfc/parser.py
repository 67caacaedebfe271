"""
Parser / Validator
==================

Maps tokens one-to-one onto opcodes and checks that loop brackets
nest correctly. Jump targets are not resolved here; the optimizer
links each bracket pair once the final instruction layout is known.

Validation Rules
----------------
- A ']' with no open '[' is rejected at that token.
- A '[' still open when EOF is reached is rejected; the innermost
  unclosed bracket is reported.

Both cases raise UnmatchedBracketError.
"""

import logging

from bfc.errors import UnmatchedBracketError
from bfc.lexer import TokenType
from bfc.opcodes import Opcode, TOKEN_OPCODES

logger = logging.getLogger(__name__)


class Parser:
    """
    Token-to-opcode parser with bracket validation.

    Example:
        >>> Parser(tokenize(b"+[-]")).parse()
        [<Opcode.ADD: 1>, <Opcode.JUMP_IF_ZERO: 7>, <Opcode.SUB: 2>,
         <Opcode.JUMP_IF_NONZERO: 8>, <Opcode.HALT: 9>]
    """

    def __init__(self, tokens: list[TokenType]):
        """
        Initialize the parser.

        Args:
            tokens: Lexer output; a trailing TokenType.EOF is optional
        """
        self.tokens = tokens

    def parse(self) -> list[Opcode]:
        """
        Convert the token stream to opcodes.

        Returns:
            Opcodes in token order, terminated by Opcode.HALT

        Raises:
            UnmatchedBracketError: If loop brackets are unbalanced
        """
        opcodes: list[Opcode] = []
        # Positions of '[' still waiting for their ']'
        open_brackets: list[int] = []

        for position, token in enumerate(self.tokens):
            if token is TokenType.EOF:
                break

            if token is TokenType.LBRACKET:
                open_brackets.append(position)
            elif token is TokenType.RBRACKET:
                if not open_brackets:
                    raise UnmatchedBracketError("]", position)
                open_brackets.pop()

            opcodes.append(TOKEN_OPCODES[token])

        if open_brackets:
            raise UnmatchedBracketError("[", open_brackets[-1])

        logger.debug(f"Parsed {len(opcodes)} opcodes")
        opcodes.append(Opcode.HALT)
        return opcodes


def parse_tokens(tokens: list[TokenType]) -> list[Opcode]:
    """Convenience wrapper around Parser(tokens).parse()."""
    return Parser(tokens).parse()
