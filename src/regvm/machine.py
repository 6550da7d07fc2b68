"""RegisterMachine: execution loop for the register VM.

Each cycle runs:
    FETCH (instruction at PC) -> EXECUTE (returns control transfer) -> UPDATE PC

The machine halts exactly when the PC is not a valid index into the
program. There is no cycle limit: a program that never leaves its own
instruction range runs forever.
"""

from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence

from .instruction import Instruction, JumpTo
from .parser import parse_program
from .state import REGISTER_NAMES, MachineState, create_initial_state, register_index


@dataclass
class ExecutionTraceEntry:
    """Single entry in the execution trace.

    Attributes:
        cycle: Cycle number (0-indexed)
        address: PC the instruction was fetched from
        instruction: Executed instruction
        pre_state: State before execution
        post_state: State after execution
        jumped: Whether the instruction was a taken jump
    """
    cycle: int
    address: int
    instruction: Instruction
    pre_state: dict
    post_state: dict
    jumped: bool = False


class RegisterMachine:
    """Interpreter for cpy/inc/dec/jnz programs over registers a-d.

    Attributes:
        state: Current machine state (None until a program is loaded)
        trace: Execution trace entries (only filled when tracing)
        record_trace: Whether step() records trace entries
    """

    def __init__(self, trace: bool = False):
        """Initialize the machine.

        Args:
            trace: Record an ExecutionTraceEntry for every cycle
        """
        self.record_trace = trace
        self.state: Optional[MachineState] = None
        self.trace: List[ExecutionTraceEntry] = []

    def load_program(self, source: str) -> None:
        """Parse source text and reset the machine to run it.

        Args:
            source: Program source text

        Raises:
            ParseError: If the program is malformed (nothing is loaded)
        """
        self.load_instructions(parse_program(source))

    def load_instructions(self, instructions: Sequence[Instruction]) -> None:
        """Load a pre-parsed program with all registers zeroed."""
        self.state = create_initial_state(instructions)
        self.trace = []

    def _require_state(self) -> MachineState:
        if self.state is None:
            raise RuntimeError("No program loaded")
        return self.state

    def step(self) -> Optional[ExecutionTraceEntry]:
        """Execute a single instruction cycle.

        Returns:
            The trace entry for the cycle when tracing, otherwise None.
            Also None when the PC has left the program (machine halts).

        Raises:
            RuntimeError: If no program loaded or machine halted
        """
        state = self._require_state()
        if state.halted:
            raise RuntimeError("Machine is halted")

        if not state.pc_in_range():
            state.halted = True
            return None

        address = state.pc
        instruction = state.instructions[address]
        pre_state = state.snapshot() if self.record_trace else None

        transfer = instruction.execute(state.registers, address)
        jumped = isinstance(transfer, JumpTo)
        state.pc = transfer.address if jumped else address + 1
        state.cycle_count += 1

        if not self.record_trace:
            return None

        entry = ExecutionTraceEntry(
            cycle=state.cycle_count - 1,
            address=address,
            instruction=instruction,
            pre_state=pre_state,
            post_state=state.snapshot(),
            jumped=jumped
        )
        self.trace.append(entry)
        return entry

    def run(self) -> List[int]:
        """Run until the PC leaves the program.

        Returns:
            Final register values in register order (a, b, c, d)
        """
        state = self._require_state()

        while not state.halted:
            self.step()

        return state.dump_registers()

    def run_source(self, source: str) -> List[int]:
        """Parse, load and run a program in one call."""
        self.load_program(source)
        return self.run()

    def get_register(self, reg) -> int:
        """Get value of a register.

        Args:
            reg: Register name ('a'-'d') or index (0-3)
        """
        return self._require_state().registers.read(register_index(reg))

    def dump_registers(self) -> List[int]:
        return self._require_state().dump_registers()

    def get_pc(self) -> int:
        return self._require_state().pc

    def get_cycle_count(self) -> int:
        if self.state is None:
            return 0
        return self.state.cycle_count

    def is_halted(self) -> bool:
        if self.state is None:
            return True
        return self.state.halted

    def format_trace(self, limit: Optional[int] = None) -> str:
        """Render the execution trace in human-readable form.

        Args:
            limit: Show at most this many cycles (all if None)
        """
        lines = [
            "=" * 60,
            "EXECUTION TRACE",
            "=" * 60,
        ]

        entries = self.trace if limit is None else self.trace[:limit]
        for entry in entries:
            lines.append(f"[Cycle {entry.cycle}] PC={entry.address}  {entry.instruction}")

            pre_regs = entry.pre_state["registers"]
            post_regs = entry.post_state["registers"]
            changes = [
                f"{name}: {pre_regs[i]} -> {post_regs[i]}"
                for i, name in enumerate(REGISTER_NAMES)
                if pre_regs[i] != post_regs[i]
            ]
            if changes:
                lines.append(f"  Changes: {', '.join(changes)}")
            if entry.jumped:
                lines.append(f"  Jump: {entry.address} -> {entry.post_state['pc']}")

        if len(entries) < len(self.trace):
            lines.append(f"... ({len(self.trace) - len(entries)} more entries)")

        lines.append("=" * 60)
        if self.state is not None:
            lines.append(f"Registers: {self.dump_registers()}")
            lines.append(f"Cycles: {self.get_cycle_count()}")
        return "\n".join(lines)

    def get_summary(self) -> Dict:
        """Get execution summary.

        Returns:
            Dictionary with execution statistics and final state
        """
        return {
            "cycles": self.get_cycle_count(),
            "halted": self.is_halted(),
            "registers": self.dump_registers() if self.state else [],
            "pc": self.get_pc() if self.state else 0,
            "program_length": len(self.state.instructions) if self.state else 0,
            "trace_length": len(self.trace),
        }
