"""
Machine Configuration
=====================

Settings shared by the lexer (capacity bound) and the virtual machine
(tape size, end-of-input value, pointer policy). Configuration can come
from:
- Default values (defined here)
- Environment variables
- Command-line flags (applied by the CLI on top of the environment)

Defaults reproduce the classic machine: 30,000 cells, programs of at
most 29,998 instructions, and 0xFF stored when input is exhausted.
"""

from dataclasses import dataclass
from enum import Enum
import logging
import os

from bfc.errors import ConfigurationError

logger = logging.getLogger(__name__)


# Classic tape size
DEFAULT_TAPE_LENGTH = 30_000

# Slots of the program-length bound held back for terminal sentinels
RESERVED_SLOTS = 2

# getchar() EOF narrowed to a byte
DEFAULT_EOF_VALUE = 0xFF


class PointerPolicy(Enum):
    """
    What happens when the data pointer leaves the tape.

    ERROR stops the machine with TapeBoundsError; WRAP reduces the
    pointer modulo the tape length.
    """
    ERROR = "error"
    WRAP = "wrap"


@dataclass
class MachineConfig:
    """
    Configuration for one compile-and-run.

    Attributes:
        tape_length: Number of cells on the tape; also bounds program length
        eof_value: Byte stored by ',' when the input stream is exhausted
        pointer_policy: Behaviour when '<' or '>' leaves the tape
    """

    tape_length: int = DEFAULT_TAPE_LENGTH
    eof_value: int = DEFAULT_EOF_VALUE
    pointer_policy: PointerPolicy = PointerPolicy.ERROR

    @property
    def max_program_length(self) -> int:
        """Maximum number of significant characters a program may hold."""
        return self.tape_length - RESERVED_SLOTS

    def validate(self) -> "MachineConfig":
        """
        Check the values are usable.

        Returns:
            self, so calls can be chained

        Raises:
            ConfigurationError: If any value is out of range
        """
        if self.tape_length <= RESERVED_SLOTS:
            raise ConfigurationError(
                f"tape length must be greater than {RESERVED_SLOTS}, "
                f"got {self.tape_length}"
            )
        if not 0 <= self.eof_value <= 0xFF:
            raise ConfigurationError(
                f"EOF value must be a byte (0-255), got {self.eof_value}"
            )
        if not isinstance(self.pointer_policy, PointerPolicy):
            raise ConfigurationError(
                f"unknown pointer policy {self.pointer_policy!r}"
            )
        return self

    @classmethod
    def from_env(cls) -> "MachineConfig":
        """
        Create MachineConfig from environment variables.

        Environment variables (all optional):
            BFC_TAPE_LENGTH: Number of tape cells (integer)
            BFC_EOF_VALUE: Byte stored at end of input (0-255)
            BFC_POINTER_POLICY: "error" or "wrap"

        Invalid values are logged and the default is kept.

        Returns:
            MachineConfig with values from environment variables
        """
        config = cls()

        if tape_length := os.environ.get("BFC_TAPE_LENGTH"):
            try:
                config.tape_length = int(tape_length)
            except ValueError:
                logger.warning(f"Ignoring invalid BFC_TAPE_LENGTH={tape_length!r}")

        if eof_value := os.environ.get("BFC_EOF_VALUE"):
            try:
                config.eof_value = int(eof_value, 0)
            except ValueError:
                logger.warning(f"Ignoring invalid BFC_EOF_VALUE={eof_value!r}")

        if policy := os.environ.get("BFC_POINTER_POLICY"):
            try:
                config.pointer_policy = PointerPolicy(policy.lower())
            except ValueError:
                logger.warning(f"Ignoring invalid BFC_POINTER_POLICY={policy!r}")

        return config
