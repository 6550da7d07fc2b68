"""InstructionRegistry: mnemonic dispatch table for the register VM.

The registry maps each of the four mnemonics to the instruction class it
builds and the operands it consumes. It is frozen after initialization,
so no fifth instruction kind can appear at runtime.

Registered mnemonics:
    cpy: Copy (source, destination register)
    inc: Increment (target register)
    dec: Decrement (target register)
    jnz: JumpNotZero (condition, offset)
"""

from dataclasses import dataclass
from typing import Dict, Optional, Tuple, Type

from .instruction import Copy, Decrement, Increment, JumpNotZero


@dataclass(frozen=True)
class Operand:
    """One operand slot of an instruction.

    Attributes:
        name: Name used in error messages (e.g. "destination")
        register_only: Whether the slot rejects immediates
    """
    name: str
    register_only: bool = False


@dataclass(frozen=True)
class InstructionSpec:
    """How to build one instruction kind from its operand tokens."""
    mnemonic: str
    cls: Type
    operands: Tuple[Operand, ...]

    @property
    def arity(self) -> int:
        return len(self.operands)


class InstructionRegistry:
    """Frozen registry of instruction kinds keyed by mnemonic.

    Attributes:
        _specs: Dictionary mapping mnemonics to instruction specs
        _frozen: Whether the registry is locked against modifications
    """

    def __init__(self):
        """Initialize registry with the full instruction set."""
        self._specs: Dict[str, InstructionSpec] = {}
        self._frozen = False
        self._register_all_instructions()
        self.freeze()

    def _register_all_instructions(self) -> None:
        # Data movement
        self.register(InstructionSpec(
            Copy.MNEMONIC, Copy,
            (Operand("source"), Operand("destination", register_only=True)),
        ))

        # Arithmetic
        self.register(InstructionSpec(
            Increment.MNEMONIC, Increment, (Operand("target", register_only=True),)
        ))
        self.register(InstructionSpec(
            Decrement.MNEMONIC, Decrement, (Operand("target", register_only=True),)
        ))

        # Control flow
        self.register(InstructionSpec(
            JumpNotZero.MNEMONIC, JumpNotZero, (Operand("condition"), Operand("offset"))
        ))

    def register(self, spec: InstructionSpec) -> None:
        """Register an instruction kind.

        Raises:
            RuntimeError: If registry is frozen
            ValueError: If mnemonic already registered
        """
        if self._frozen:
            raise RuntimeError("Cannot register instructions: registry is frozen")
        if spec.mnemonic in self._specs:
            raise ValueError(f"Instruction already registered: {spec.mnemonic}")
        self._specs[spec.mnemonic] = spec

    def freeze(self) -> None:
        """Freeze the registry to prevent further modifications."""
        self._frozen = True

    def is_frozen(self) -> bool:
        return self._frozen

    def get_mnemonics(self) -> set:
        """Get set of all recognized mnemonics."""
        return set(self._specs.keys())

    def lookup(self, mnemonic: str) -> Optional[InstructionSpec]:
        """Exact-match lookup of a mnemonic.

        Returns:
            The InstructionSpec, or None if the mnemonic is unknown
        """
        return self._specs.get(mnemonic)


# Singleton registry instance
_registry: Optional[InstructionRegistry] = None


def get_registry() -> InstructionRegistry:
    """Get the singleton instruction registry instance.

    Returns:
        The frozen InstructionRegistry instance
    """
    global _registry
    if _registry is None:
        _registry = InstructionRegistry()
    return _registry
