"""Instruction set for the register VM.

Instructions:
    cpy x y: Copy x (immediate or register) into register y
    inc x:   Increment register x by 1
    dec x:   Decrement register x by 1
    jnz x y: Jump y instructions away (relative to this one) if x is not zero

Every instruction and argument is a frozen dataclass, so parsed programs
compare structurally and can't be modified once loaded. Executing an
instruction never touches the instruction pointer directly: it returns a
control transfer (ADVANCE or JumpTo) and the machine loop applies it.
"""

from dataclasses import dataclass
from typing import Union

from .state import REGISTER_NAMES, RegisterFile


# =============================================================================
# Arguments
# =============================================================================

@dataclass(frozen=True)
class Immediate:
    """Literal signed 32-bit integer operand."""
    value: int

    def resolve(self, registers: RegisterFile) -> int:
        return self.value

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class RegisterRef:
    """Operand that reads a register (index 0-3)."""
    index: int

    def resolve(self, registers: RegisterFile) -> int:
        return registers.read(self.index)

    def __str__(self) -> str:
        return REGISTER_NAMES[self.index]


Argument = Union[Immediate, RegisterRef]


# =============================================================================
# Control transfer
# =============================================================================

@dataclass(frozen=True)
class Advance:
    """Continue with the next instruction."""


@dataclass(frozen=True)
class JumpTo:
    """Continue at an absolute instruction address."""
    address: int


ADVANCE = Advance()

ControlTransfer = Union[Advance, JumpTo]


# =============================================================================
# Instructions
# =============================================================================

@dataclass(frozen=True)
class Copy:
    """cpy source destination"""
    source: Argument
    destination: int

    MNEMONIC = "cpy"

    def execute(self, registers: RegisterFile, address: int) -> ControlTransfer:
        registers.write(self.destination, self.source.resolve(registers))
        return ADVANCE

    def __str__(self) -> str:
        return f"{self.MNEMONIC} {self.source} {REGISTER_NAMES[self.destination]}"


@dataclass(frozen=True)
class Increment:
    """inc target"""
    target: int

    MNEMONIC = "inc"

    def execute(self, registers: RegisterFile, address: int) -> ControlTransfer:
        registers.write(self.target, registers.read(self.target) + 1)
        return ADVANCE

    def __str__(self) -> str:
        return f"{self.MNEMONIC} {REGISTER_NAMES[self.target]}"


@dataclass(frozen=True)
class Decrement:
    """dec target"""
    target: int

    MNEMONIC = "dec"

    def execute(self, registers: RegisterFile, address: int) -> ControlTransfer:
        registers.write(self.target, registers.read(self.target) - 1)
        return ADVANCE

    def __str__(self) -> str:
        return f"{self.MNEMONIC} {REGISTER_NAMES[self.target]}"


@dataclass(frozen=True)
class JumpNotZero:
    """jnz condition offset

    When the condition resolves to a nonzero value, control moves to
    ``address + offset`` where ``address`` is this instruction's own slot.
    An offset of 1 therefore behaves like falling through, 0 loops on the
    jump itself, and negative offsets jump backwards.
    """
    condition: Argument
    offset: Argument

    MNEMONIC = "jnz"

    def execute(self, registers: RegisterFile, address: int) -> ControlTransfer:
        if self.condition.resolve(registers) == 0:
            return ADVANCE
        return JumpTo(address + self.offset.resolve(registers))

    def __str__(self) -> str:
        return f"{self.MNEMONIC} {self.condition} {self.offset}"


Instruction = Union[Copy, Increment, Decrement, JumpNotZero]
