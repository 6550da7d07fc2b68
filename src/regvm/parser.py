"""Parser for register VM source text.

Architecture:
    source text -> lines -> tokens -> (registry lookup) -> Instruction

Each non-blank line holds exactly one instruction: a mnemonic followed by
its operands, separated by single spaces. Blank lines are skipped and do
not count as instructions, so they never shift jump addressing.

Malformed input raises a ParseError subclass. The parser never exits the
process itself; the caller decides what a failed load means.
"""

import re
from typing import Optional, Tuple

from .instruction import Argument, Immediate, Instruction, RegisterRef
from .registry import get_registry
from .state import INT32_MAX, INT32_MIN, REGISTER_NAMES


_INTEGER_RE = re.compile(r'^[+-]?[0-9]+$')


# =============================================================================
# Errors
# =============================================================================

class ParseError(ValueError):
    """Base class for all load-time failures.

    Attributes:
        line_number: 1-based source line, if known
        line: Raw source line, if known
    """

    def __init__(self, message: str, line_number: Optional[int] = None, line: Optional[str] = None):
        self.message = message
        self.line_number = line_number
        self.line = line
        super().__init__(self._format())

    def _format(self) -> str:
        if self.line_number is None:
            return self.message
        return f"line {self.line_number}: {self.message}"

    def at(self, line_number: int, line: str) -> "ParseError":
        """Attach source position and refresh the message."""
        self.line_number = line_number
        self.line = line
        self.args = (self._format(),)
        return self


class UnknownMnemonicError(ParseError):
    def __init__(self, mnemonic: str, **kwargs):
        self.mnemonic = mnemonic
        super().__init__(f"Unknown instruction: {mnemonic}", **kwargs)


class MissingOperandError(ParseError):
    def __init__(self, mnemonic: str, operand: str, **kwargs):
        self.mnemonic = mnemonic
        self.operand = operand
        super().__init__(f"{mnemonic} requires a {operand} operand", **kwargs)


class InvalidArgumentError(ParseError):
    def __init__(self, token: str, **kwargs):
        self.token = token
        super().__init__(f"{token!r} is not a valid input value", **kwargs)


class InvalidDestinationError(ParseError):
    def __init__(self, mnemonic: str, token: str, **kwargs):
        self.mnemonic = mnemonic
        self.token = token
        super().__init__(
            f"{mnemonic} requires a register but was supplied a number instead: {token}",
            **kwargs
        )


# =============================================================================
# Parsing
# =============================================================================

def parse_argument(token: str) -> Argument:
    """Classify a token as a register reference or an immediate.

    Args:
        token: Single operand token

    Returns:
        RegisterRef if the token is exactly one of a-d, else Immediate

    Raises:
        InvalidArgumentError: If the token is neither a register nor a
            signed decimal integer that fits in 32 bits
    """
    if len(token) == 1 and token in REGISTER_NAMES:
        return RegisterRef(REGISTER_NAMES.index(token))

    if not _INTEGER_RE.match(token):
        raise InvalidArgumentError(token)
    value = int(token)
    if value < INT32_MIN or value > INT32_MAX:
        raise InvalidArgumentError(token)
    return Immediate(value)


def parse_instruction(line: str, line_number: Optional[int] = None) -> Instruction:
    """Parse one line of source into an Instruction.

    Args:
        line: Source line (surrounding whitespace is ignored)
        line_number: 1-based line number used in error messages

    Returns:
        The parsed Instruction

    Raises:
        ParseError: On unknown mnemonic, missing operand, bad argument,
            or an immediate where a register is required
    """
    tokens = line.strip().split(" ")
    mnemonic = tokens[0]

    try:
        spec = get_registry().lookup(mnemonic)
        if spec is None:
            raise UnknownMnemonicError(mnemonic)

        # Extra trailing tokens are ignored
        operands = []
        for position, operand in enumerate(spec.operands, start=1):
            if position >= len(tokens):
                raise MissingOperandError(mnemonic, operand.name)
            token = tokens[position]
            argument = parse_argument(token)

            if operand.register_only:
                if not isinstance(argument, RegisterRef):
                    raise InvalidDestinationError(mnemonic, token)
                operands.append(argument.index)
            else:
                operands.append(argument)

        return spec.cls(*operands)

    except ParseError as e:
        if line_number is not None:
            e.at(line_number, line)
        raise


def parse_program(source: str) -> Tuple[Instruction, ...]:
    """Parse full source text into an instruction sequence.

    Handles:
        - One instruction per line
        - Leading/trailing whitespace on each line
        - Blank and whitespace-only lines (skipped)

    Args:
        source: Program source text

    Returns:
        Tuple of parsed instructions in program order

    Raises:
        ParseError: On the first malformed line, tagged with its line number
    """
    instructions = []

    for line_number, line in enumerate(source.split("\n"), start=1):
        if not line.strip():
            continue
        instructions.append(parse_instruction(line, line_number))

    return tuple(instructions)
