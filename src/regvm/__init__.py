"""regvm: A minimal register-machine interpreter.

Programs are written in a four-instruction assembly language and run
against four signed 32-bit registers named a-d:

    cpy x y   copy x (register or integer) into register y
    inc x     increment register x
    dec x     decrement register x
    jnz x y   if x is not zero, jump y instructions away

Architecture:
    SOURCE -> PARSER -> INSTRUCTIONS -> MACHINE (fetch/execute loop) -> REGISTERS

Modules:
    state: Register file and machine state with 32-bit wraparound
    instruction: Argument and instruction types, control transfers
    registry: Frozen mnemonic dispatch table
    parser: Source text to instructions, structured parse errors
    machine: RegisterMachine execution loop and trace
"""

__version__ = "0.1.0"

from .state import MachineState, RegisterFile
from .instruction import (
    ADVANCE,
    Copy,
    Decrement,
    Immediate,
    Increment,
    JumpNotZero,
    JumpTo,
    RegisterRef,
)
from .registry import InstructionRegistry, get_registry
from .parser import (
    InvalidArgumentError,
    InvalidDestinationError,
    MissingOperandError,
    ParseError,
    UnknownMnemonicError,
    parse_instruction,
    parse_program,
)
from .machine import ExecutionTraceEntry, RegisterMachine

__all__ = [
    "MachineState",
    "RegisterFile",
    "ADVANCE",
    "Copy",
    "Decrement",
    "Immediate",
    "Increment",
    "JumpNotZero",
    "JumpTo",
    "RegisterRef",
    "InstructionRegistry",
    "get_registry",
    "InvalidArgumentError",
    "InvalidDestinationError",
    "MissingOperandError",
    "ParseError",
    "UnknownMnemonicError",
    "parse_instruction",
    "parse_program",
    "ExecutionTraceEntry",
    "RegisterMachine",
]
