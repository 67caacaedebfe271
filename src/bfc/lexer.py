"""
Lexer (Tokenizer)
=================

Reduces a byte stream to the eight significant characters of the
language. Every other byte is dropped, which is how comments and
whitespace are supported.

Token Categories
----------------
| Char | Token            | Meaning                      |
|------|------------------|------------------------------|
| +    | PLUS             | increment current cell       |
| -    | MINUS            | decrement current cell       |
| >    | GREATER          | move data pointer right      |
| <    | LESS             | move data pointer left       |
| .    | DOT              | output current cell          |
| ,    | COMMA            | input into current cell      |
| [    | LBRACKET         | loop open                    |
| ]    | RBRACKET         | loop close                   |

The token list always ends with a single EOF token.

The lexer enforces the program-length bound: once more significant
characters arrive than the tape can hold it raises
CapacityExceededError and stops reading.

Example Usage
-------------
>>> from bfc.lexer import tokenize
>>> tokenize(b"+[-] comment")
[<TokenType.PLUS: '+'>, <TokenType.LBRACKET: '['>, <TokenType.MINUS: '-'>, <TokenType.RBRACKET: ']'>, <TokenType.EOF: ''>]

Copyright (c) 2025-2026 bfc Contributors
"""

from enum import Enum
from typing import BinaryIO, Union
import io
import logging

from bfc.config import DEFAULT_TAPE_LENGTH, RESERVED_SLOTS
from bfc.errors import CapacityExceededError

logger = logging.getLogger(__name__)


# =============================================================================
# Token Type Enumeration
# =============================================================================

class TokenType(Enum):
    """Significant characters, valued by their source text."""

    PLUS = "+"
    MINUS = "-"
    GREATER = ">"
    LESS = "<"
    DOT = "."
    COMMA = ","
    LBRACKET = "["
    RBRACKET = "]"

    # Terminal sentinel
    EOF = ""


# byte value -> token, for the eight significant characters only
SIGNIFICANT_BYTES: dict[int, TokenType] = {
    ord(t.value): t for t in TokenType if t is not TokenType.EOF
}

# Read granularity for stream input
CHUNK_SIZE = 4096

SourceInput = Union[bytes, bytearray, str, BinaryIO]


# =============================================================================
# Lexer Class
# =============================================================================

class Lexer:
    """
    Tokenizer for program source.

    Attributes:
        max_tokens: Maximum number of significant characters accepted
    """

    def __init__(
        self,
        source: SourceInput,
        max_tokens: int = DEFAULT_TAPE_LENGTH - RESERVED_SLOTS,
    ):
        """
        Initialize the lexer.

        Args:
            source: Program text as bytes, str (UTF-8), or a binary stream
            max_tokens: Capacity bound on significant characters
        """
        if isinstance(source, str):
            source = source.encode("utf-8")
        if isinstance(source, (bytes, bytearray)):
            source = io.BytesIO(source)
        self._stream = source
        self.max_tokens = max_tokens

    def tokenize(self) -> list[TokenType]:
        """
        Read the stream to end-of-stream and return its tokens.

        Returns:
            Significant tokens in source order, followed by TokenType.EOF

        Raises:
            CapacityExceededError: If there are more than max_tokens
                significant characters
        """
        tokens: list[TokenType] = []
        bytes_read = 0

        while chunk := self._stream.read(CHUNK_SIZE):
            bytes_read += len(chunk)
            for byte in chunk:
                token = SIGNIFICANT_BYTES.get(byte)
                if token is None:
                    continue
                if len(tokens) >= self.max_tokens:
                    logger.debug(
                        f"Capacity of {self.max_tokens} tokens exceeded "
                        f"after {bytes_read} bytes"
                    )
                    raise CapacityExceededError(self.max_tokens)
                tokens.append(token)

        logger.debug(f"Lexed {bytes_read} bytes into {len(tokens)} tokens")
        tokens.append(TokenType.EOF)
        return tokens


def tokenize(
    source: SourceInput,
    max_tokens: int = DEFAULT_TAPE_LENGTH - RESERVED_SLOTS,
) -> list[TokenType]:
    """Convenience wrapper around Lexer(source, max_tokens).tokenize()."""
    return Lexer(source, max_tokens).tokenize()
