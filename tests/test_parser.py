"""Tests for the source parser."""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

import pytest
from regvm.instruction import Copy, Decrement, Immediate, Increment, JumpNotZero, RegisterRef
from regvm.parser import (
    InvalidArgumentError,
    InvalidDestinationError,
    MissingOperandError,
    ParseError,
    UnknownMnemonicError,
    parse_argument,
    parse_instruction,
    parse_program,
)


class TestParseArgument:
    """Test register/immediate classification."""

    @pytest.mark.parametrize("token,index", [("a", 0), ("b", 1), ("c", 2), ("d", 3)])
    def test_registers(self, token, index):
        assert parse_argument(token) == RegisterRef(index)

    def test_positive(self):
        assert parse_argument("42") == Immediate(42)

    def test_negative(self):
        assert parse_argument("-17") == Immediate(-17)

    def test_explicit_plus(self):
        assert parse_argument("+3") == Immediate(3)

    def test_int32_bounds(self):
        assert parse_argument("2147483647") == Immediate(2147483647)
        assert parse_argument("-2147483648") == Immediate(-2147483648)

    @pytest.mark.parametrize("token", ["e", "A", "ab", "", "0x10", "1.5", "2147483648", "1_000"])
    def test_invalid(self, token):
        with pytest.raises(InvalidArgumentError) as exc_info:
            parse_argument(token)
        assert exc_info.value.token == token
        assert repr(token) in str(exc_info.value)


class TestParseInstruction:
    """Test single-line parsing."""

    def test_cpy_immediate(self):
        assert parse_instruction("cpy 41 a") == Copy(Immediate(41), 0)

    def test_cpy_register(self):
        assert parse_instruction("cpy a d") == Copy(RegisterRef(0), 3)

    def test_inc(self):
        assert parse_instruction("inc b") == Increment(1)

    def test_dec(self):
        assert parse_instruction("dec c") == Decrement(2)

    def test_jnz(self):
        assert parse_instruction("jnz a -2") == JumpNotZero(RegisterRef(0), Immediate(-2))

    def test_jnz_all_immediate(self):
        assert parse_instruction("jnz 1 5") == JumpNotZero(Immediate(1), Immediate(5))

    def test_surrounding_whitespace(self):
        assert parse_instruction("   inc d  \t") == Increment(3)

    def test_extra_tokens_ignored(self):
        assert parse_instruction("inc a b") == Increment(0)

    def test_mnemonic_is_case_sensitive(self):
        with pytest.raises(UnknownMnemonicError):
            parse_instruction("INC a")


class TestParseErrors:
    """Test every malformed-input condition."""

    def test_unknown_mnemonic(self):
        with pytest.raises(UnknownMnemonicError) as exc_info:
            parse_instruction("tgl a")
        assert exc_info.value.mnemonic == "tgl"
        assert "tgl" in str(exc_info.value)

    @pytest.mark.parametrize("line,mnemonic,operand", [
        ("cpy", "cpy", "source"),
        ("cpy 5", "cpy", "destination"),
        ("inc", "inc", "target"),
        ("dec", "dec", "target"),
        ("jnz", "jnz", "condition"),
        ("jnz a", "jnz", "offset"),
    ])
    def test_missing_operand(self, line, mnemonic, operand):
        with pytest.raises(MissingOperandError) as exc_info:
            parse_instruction(line)
        assert exc_info.value.mnemonic == mnemonic
        assert exc_info.value.operand == operand
        assert operand in str(exc_info.value)

    def test_invalid_argument(self):
        with pytest.raises(InvalidArgumentError) as exc_info:
            parse_instruction("cpy x a")
        assert exc_info.value.token == "x"

    def test_double_space_yields_empty_token(self):
        """Tokens are split on single spaces."""
        with pytest.raises(InvalidArgumentError):
            parse_instruction("cpy  5 a")

    def test_cpy_to_immediate(self):
        with pytest.raises(InvalidDestinationError) as exc_info:
            parse_instruction("cpy a 5")
        assert exc_info.value.mnemonic == "cpy"
        assert exc_info.value.token == "5"

    @pytest.mark.parametrize("line", ["inc 3", "dec -1"])
    def test_inc_dec_immediate(self, line):
        with pytest.raises(InvalidDestinationError):
            parse_instruction(line)

    def test_errors_are_value_errors(self):
        with pytest.raises(ValueError):
            parse_instruction("nop")

    def test_line_number_in_message(self):
        with pytest.raises(ParseError) as exc_info:
            parse_instruction("jnz a", line_number=7)
        assert exc_info.value.line_number == 7
        assert exc_info.value.line == "jnz a"
        assert str(exc_info.value).startswith("line 7: ")


class TestParseProgram:
    """Test whole-program parsing."""

    def test_simple_program(self):
        source = """cpy 41 a
inc a
jnz a 2
dec a"""
        assert parse_program(source) == (
            Copy(Immediate(41), 0),
            Increment(0),
            JumpNotZero(RegisterRef(0), Immediate(2)),
            Decrement(0),
        )

    def test_blank_lines_skipped(self):
        source = "\n\ninc a\n   \n\t\ndec b\n\n"
        assert parse_program(source) == (Increment(0), Decrement(1))

    def test_crlf_line_endings(self):
        assert parse_program("inc a\r\ndec b\r\n") == (Increment(0), Decrement(1))

    def test_empty_source(self):
        assert parse_program("") == ()
        assert parse_program("\n  \n\n") == ()

    def test_deterministic(self):
        source = "cpy 1 a\ncpy a b\ninc c\ndec d\njnz b -3\n"
        assert parse_program(source) == parse_program(source)

    def test_error_reports_source_line(self):
        """Line numbers count blank lines too."""
        source = "inc a\n\n\ncpy 1 2\n"
        with pytest.raises(InvalidDestinationError) as exc_info:
            parse_program(source)
        assert exc_info.value.line_number == 4
        assert "line 4" in str(exc_info.value)

    def test_first_error_wins(self):
        with pytest.raises(UnknownMnemonicError):
            parse_program("foo a\ncpy a 1\n")
