#!/usr/bin/env python3
"""regvm Command Line Interface.

Run cpy/inc/dec/jnz programs and print the final registers.

Usage:
    python main.py                              # runs inputs/input.txt
    python main.py --program programs/fibonacci.txt
    python main.py --inline "cpy 41 a; inc a" --trace
"""

import argparse
import sys
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent / "src"))

from regvm import ParseError, RegisterMachine


DEFAULT_PROGRAM_PATH = "inputs/input.txt"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="regvm: minimal register-machine interpreter",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    # Run the default input file
    python main.py

    # Run a program with full trace output
    python main.py --program programs/countdown.txt --trace

    # Run inline source
    python main.py --inline "cpy 5 a; inc a"
        """
    )

    parser.add_argument(
        "--program", "-p",
        type=str,
        default=DEFAULT_PROGRAM_PATH,
        help=f"Path to program source file. Default: {DEFAULT_PROGRAM_PATH}"
    )
    parser.add_argument(
        "--inline", "-i",
        type=str,
        help="Inline source (separate instructions with ;)"
    )
    parser.add_argument(
        "--trace", "-t",
        action="store_true",
        help="Print full execution trace"
    )
    parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Minimal output (final registers only)"
    )
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)

    # Load program
    if args.inline is not None:
        source = args.inline.replace(";", "\n")
        if not args.quiet:
            print("Running inline source")
    else:
        program_path = Path(args.program)
        if not program_path.exists():
            print(f"Error: Program file not found: {args.program}")
            return 1
        source = program_path.read_text()
        if not args.quiet:
            print(f"Loading program: {args.program}")

    machine = RegisterMachine(trace=args.trace)

    try:
        machine.load_program(source)
    except ParseError as e:
        print(f"Error: {e}")
        return 1

    machine.run()

    # Output
    if args.trace:
        print(machine.format_trace())
    elif not args.quiet:
        summary = machine.get_summary()
        print(f"Instructions: {summary['program_length']}")
        print(f"Cycles: {summary['cycles']}")
        print(f"Registers: {summary['registers']}")
    else:
        print(machine.dump_registers())

    return 0


if __name__ == "__main__":
    sys.exit(main())
