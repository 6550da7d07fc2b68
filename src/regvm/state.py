"""Machine state for the register VM.

State Components:
    - Registers: a-d (4 general-purpose 32-bit signed integers)
    - PC: Instruction pointer
    - Instructions: The loaded program (immutable tuple)
    - Halted: Set once the PC leaves the program
    - Cycle count: Total executed instructions

Register arithmetic wraps around like native two's-complement 32-bit
integers instead of clamping or faulting.
"""

from dataclasses import dataclass, field
from typing import List, Sequence, Tuple


# 32-bit signed integer bounds
INT32_MIN = -(2**31)
INT32_MAX = (2**31) - 1

REGISTER_NAMES = "abcd"
REGISTER_COUNT = len(REGISTER_NAMES)


def wrap_int32(value: int) -> int:
    """Wrap an integer into the signed 32-bit range.

    Args:
        value: Arbitrary Python integer

    Returns:
        Value reduced modulo 2**32 into [INT32_MIN, INT32_MAX]
    """
    value &= 0xFFFFFFFF
    if value > INT32_MAX:
        value -= 1 << 32
    return value


def register_index(reg) -> int:
    """Resolve a register name ('a'-'d') or index (0-3) to an index.

    Raises:
        KeyError: If the register doesn't exist
    """
    if isinstance(reg, int):
        if 0 <= reg < REGISTER_COUNT:
            return reg
    elif isinstance(reg, str) and len(reg) == 1 and reg in REGISTER_NAMES:
        return REGISTER_NAMES.index(reg)
    raise KeyError(f"Invalid register: {reg}")


class RegisterFile:
    """Fixed-size file of four signed 32-bit registers.

    Every write is wrapped to 32 bits, so the stored values always stay in
    range no matter what arithmetic produced them.
    """

    def __init__(self, values: Sequence[int] = (0,) * REGISTER_COUNT):
        if len(values) != REGISTER_COUNT:
            raise ValueError(f"Expected {REGISTER_COUNT} register values, got {len(values)}")
        self._values: List[int] = [wrap_int32(v) for v in values]

    def read(self, index: int) -> int:
        return self._values[index]

    def write(self, index: int, value: int) -> None:
        self._values[index] = wrap_int32(value)

    def values(self) -> List[int]:
        """Copy of all register values in register order."""
        return list(self._values)

    def as_dict(self):
        return {name: self._values[i] for i, name in enumerate(REGISTER_NAMES)}

    def __len__(self) -> int:
        return REGISTER_COUNT

    def __eq__(self, other) -> bool:
        if isinstance(other, RegisterFile):
            return self._values == other._values
        return NotImplemented

    def __repr__(self) -> str:
        return f"RegisterFile({self._values})"


@dataclass
class MachineState:
    """Mutable state of one execution run.

    Attributes:
        instructions: Parsed program (never modified after load)
        registers: Register file, all zero at start
        pc: Instruction pointer (index into instructions)
        halted: Whether the PC has left the program
        cycle_count: Number of instructions executed
    """
    instructions: Tuple = ()
    registers: RegisterFile = field(default_factory=RegisterFile)
    pc: int = 0
    halted: bool = False
    cycle_count: int = 0

    def pc_in_range(self) -> bool:
        return 0 <= self.pc < len(self.instructions)

    def snapshot(self) -> dict:
        """Create a detached snapshot of current state for tracing.

        Returns:
            Dictionary containing copies of all state components
        """
        return {
            "registers": self.registers.values(),
            "pc": self.pc,
            "halted": self.halted,
            "cycle_count": self.cycle_count,
            # instructions excluded, they never change during a run
        }

    def validate(self) -> bool:
        """Validate state integrity.

        Checks:
            - Exactly four registers, all within 32-bit signed bounds
            - PC is an int
            - Cycle count is non-negative

        Returns:
            True if state is valid, False otherwise
        """
        values = self.registers.values()
        if len(values) != REGISTER_COUNT:
            return False
        for value in values:
            if not isinstance(value, int) or value < INT32_MIN or value > INT32_MAX:
                return False

        if not isinstance(self.pc, int):
            return False

        if self.cycle_count < 0:
            return False

        return True

    def dump_registers(self) -> List[int]:
        return self.registers.values()

    def __str__(self) -> str:
        """Human-readable state representation."""
        regs = " ".join(f"{k}={v}" for k, v in self.registers.as_dict().items())
        return f"[Cycle {self.cycle_count}] PC={self.pc} {regs} {'HALTED' if self.halted else ''}".rstrip()


def create_initial_state(instructions: Sequence) -> MachineState:
    """Create initial machine state with a loaded program.

    Args:
        instructions: Parsed instruction sequence

    Returns:
        Fresh MachineState with zeroed registers and PC at 0
    """
    return MachineState(
        instructions=tuple(instructions),
        registers=RegisterFile(),
        pc=0,
        halted=False,
        cycle_count=0
    )
