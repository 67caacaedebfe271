"""
Virtual Machine
===============

Executes optimized programs against a fixed-size tape of byte cells.

Machine State
-------------
- ip: index of the next instruction
- dp: index of the current tape cell
- tape: ``config.tape_length`` cells, all zero at start

Every instruction is dispatched and then ip advances by exactly one.
A jump sets ip to its partner's index, so the uniform +1 lands one past
that partner: JZ skips the loop body, JNZ re-enters it.

Cell arithmetic is explicitly masked to 8 bits. Pointer moves follow
``config.pointer_policy``: PointerPolicy.ERROR raises TapeBoundsError,
PointerPolicy.WRAP wraps modulo the tape length.

Reading past end-of-input stores ``config.eof_value`` and does not
block. There is no step limit; a program such as ``+[]`` runs until the
process is stopped externally.

Copyright (c) 2025-2026 bfc Contributors
"""

from dataclasses import dataclass
from typing import BinaryIO, Optional
import io
import logging

from bfc.config import MachineConfig, PointerPolicy
from bfc.errors import TapeBoundsError
from bfc.opcodes import Instruction, Opcode

logger = logging.getLogger(__name__)


@dataclass
class MachineState:
    """
    Snapshot of the machine registers.

    Attributes:
        ip: Instruction pointer
        dp: Data pointer
        steps: Instructions executed so far
        halted: True once HALT has been reached
    """
    ip: int = 0
    dp: int = 0
    steps: int = 0
    halted: bool = False


class VirtualMachine:
    """
    Interpreter for optimized bytecode.

    Example:
        vm = VirtualMachine(program, input_stream=io.BytesIO(b"A"))
        vm.run()
        print(vm.tape[0])

    Attributes:
        program: Instructions to execute, terminated by HALT
        config: Tape size, EOF value and pointer policy
        tape: Cell storage
        ip: Instruction pointer
        dp: Data pointer
        steps: Instructions executed so far
    """

    def __init__(
        self,
        program: list[Instruction],
        config: Optional[MachineConfig] = None,
        input_stream: Optional[BinaryIO] = None,
        output_stream: Optional[BinaryIO] = None,
    ):
        """
        Initialize the machine.

        Args:
            program: Optimized program (jumps resolved), terminated by HALT
            config: Machine configuration (uses defaults if None)
            input_stream: Binary stream read by ',' (empty if None)
            output_stream: Binary stream written by '.' (discarded if None)

        Raises:
            ConfigurationError: If the configuration is invalid
        """
        self.program = program
        self.config = (config or MachineConfig()).validate()
        self.input_stream = input_stream if input_stream is not None else io.BytesIO()
        self.output_stream = output_stream if output_stream is not None else io.BytesIO()

        self.tape = bytearray(self.config.tape_length)
        self.ip = 0
        self.dp = 0
        self.steps = 0

    # ========================================
    # State
    # ========================================

    @property
    def halted(self) -> bool:
        """True when the instruction at ip is HALT."""
        return self.program[self.ip].op is Opcode.HALT

    @property
    def state(self) -> MachineState:
        """Snapshot of the current registers."""
        return MachineState(
            ip=self.ip,
            dp=self.dp,
            steps=self.steps,
            halted=self.halted,
        )

    # ========================================
    # Main Execution Loop
    # ========================================

    def run(self) -> MachineState:
        """
        Execute until HALT.

        Returns:
            Final machine state

        Raises:
            TapeBoundsError: If the pointer leaves the tape under
                PointerPolicy.ERROR
        """
        try:
            while self.step():
                pass
        finally:
            self.output_stream.flush()

        logger.debug(f"Halted after {self.steps} steps at dp={self.dp}")
        return self.state

    def step(self) -> bool:
        """
        Execute exactly one instruction.

        Returns:
            False if the machine was already halted, True otherwise
        """
        instruction = self.program[self.ip]
        op = instruction.op
        arg = instruction.arg

        if op is Opcode.HALT:
            return False

        if op is Opcode.ADD:
            self.tape[self.dp] = (self.tape[self.dp] + arg) & 0xFF
        elif op is Opcode.SUB:
            self.tape[self.dp] = (self.tape[self.dp] - arg) & 0xFF
        elif op is Opcode.INC_PTR:
            self._move(arg)
        elif op is Opcode.DEC_PTR:
            self._move(-arg)
        elif op is Opcode.OUTPUT:
            self.output_stream.write(bytes((self.tape[self.dp],)) * arg)
        elif op is Opcode.INPUT:
            self._read(arg)
        elif op is Opcode.JUMP_IF_ZERO:
            if self.tape[self.dp] == 0:
                self.ip = arg
        elif op is Opcode.JUMP_IF_NONZERO:
            if self.tape[self.dp] != 0:
                self.ip = arg

        self.ip += 1
        self.steps += 1
        return True

    # ========================================
    # Helpers
    # ========================================

    def _move(self, delta: int) -> None:
        """Move the data pointer, applying the pointer policy."""
        target = self.dp + delta
        tape_length = self.config.tape_length

        if 0 <= target < tape_length:
            self.dp = target
        elif self.config.pointer_policy is PointerPolicy.WRAP:
            self.dp = target % tape_length
        else:
            raise TapeBoundsError(target, tape_length, self.ip)

    def _read(self, count: int) -> None:
        """Read ``count`` bytes into the current cell; the last one sticks."""
        # Prompts written before a read must reach the user first
        self.output_stream.flush()
        for _ in range(count):
            data = self.input_stream.read(1)
            self.tape[self.dp] = data[0] if data else self.config.eof_value
