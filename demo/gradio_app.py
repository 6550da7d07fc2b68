"""regvm Interactive Demo.

A Gradio web interface for running and visualizing regvm programs.

Usage:
    cd /path/to/regvm
    python demo/gradio_app.py

Features:
    - Write or load example programs
    - See step-by-step execution trace
    - Visualize final register state
"""

import sys
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

import gradio as gr
from regvm import ParseError, RegisterMachine
from regvm.state import REGISTER_NAMES


TRACE_DISPLAY_LIMIT = 100


# =============================================================================
# Example Programs
# =============================================================================

EXAMPLE_PROGRAMS = {
    "Count to 42": """cpy 41 a
inc a
inc a
dec a
jnz a 2
dec a""",

    "Fibonacci": """cpy 1 a
cpy 1 b
cpy 10 d
cpy a c
inc a
dec b
jnz b -2
cpy c b
dec d
jnz d -6""",

    "Add b to a": """cpy 7 a
cpy 6 b
inc a
dec b
jnz b -2""",

    "Skip forward": """cpy 2 a
jnz a 2
inc a
inc a
inc a""",

    "Custom": ""
}


# =============================================================================
# Execution Functions
# =============================================================================

def run_program(program: str, trace_enabled: bool) -> tuple:
    """Execute a program and return formatted results.

    Args:
        program: Program source text
        trace_enabled: Record and return the execution trace

    Returns:
        Tuple of (summary_text, trace_text, registers_text)
    """
    if not program.strip():
        return "Error: No program provided", "", ""

    machine = RegisterMachine(trace=trace_enabled)
    try:
        machine.load_program(program)
    except ParseError as e:
        return f"Error: {e}", "", ""

    machine.run()

    summary = machine.get_summary()
    summary_text = "\n".join([
        "EXECUTION SUMMARY",
        "=" * 40,
        f"Instructions: {summary['program_length']}",
        f"Cycles: {summary['cycles']}",
        f"Final PC: {summary['pc']}",
    ])

    if trace_enabled:
        trace_text = machine.format_trace(limit=TRACE_DISPLAY_LIMIT)
    else:
        trace_text = "(trace disabled)"

    regs = machine.dump_registers()
    reg_lines = [
        "FINAL REGISTERS",
        "=" * 30,
    ]
    for name, value in zip(REGISTER_NAMES, regs):
        marker = " *" if value != 0 else ""
        reg_lines.append(f"  {name}: {value:>12}{marker}")
    reg_lines.append("")
    reg_lines.append(str(regs))

    return summary_text, trace_text, "\n".join(reg_lines)


def load_example(example_name: str) -> str:
    """Load an example program."""
    return EXAMPLE_PROGRAMS.get(example_name, "")


# =============================================================================
# Gradio Interface
# =============================================================================

def create_demo():
    """Create and return the Gradio demo interface."""

    with gr.Blocks(title="regvm Demo") as demo:
        gr.Markdown("""
        # regvm: Register-Machine Interpreter

        Four signed 32-bit registers (`a`-`d`), four instructions, and a
        fetch/execute loop that stops when the instruction pointer leaves
        the program.
        """)

        with gr.Row():
            with gr.Column(scale=2):
                gr.Markdown("### Program")

                example_dropdown = gr.Dropdown(
                    choices=list(EXAMPLE_PROGRAMS.keys()),
                    value="Count to 42",
                    label="Load Example"
                )

                program_input = gr.Textbox(
                    value=EXAMPLE_PROGRAMS["Count to 42"],
                    label="Source Code",
                    lines=15,
                    placeholder="Enter one instruction per line..."
                )

                trace_checkbox = gr.Checkbox(
                    value=True,
                    label="Record trace",
                    info="Disable for long-running programs"
                )

                run_button = gr.Button("Run Program", variant="primary")

            with gr.Column(scale=3):
                with gr.Row():
                    summary_output = gr.Textbox(
                        label="Summary",
                        lines=8,
                        interactive=False
                    )
                    registers_output = gr.Textbox(
                        label="Final Registers",
                        lines=8,
                        interactive=False
                    )

                trace_output = gr.Textbox(
                    label="Execution Trace",
                    lines=20,
                    interactive=False
                )

        with gr.Accordion("Instruction Reference", open=False):
            gr.Markdown("""
            | Instruction | Description | Example |
            |-------------|-------------|---------|
            | `cpy x y` | Copy register or integer `x` into register `y` | `cpy 41 a` |
            | `inc x` | Increment register `x` | `inc a` |
            | `dec x` | Decrement register `x` | `dec b` |
            | `jnz x y` | If `x` is not zero, jump `y` instructions away | `jnz b -2` |

            **Registers**: a-d (signed 32-bit, wrapping arithmetic)
            **Jumps**: relative to the `jnz` itself; blank lines don't count
            """)

        example_dropdown.change(
            fn=load_example,
            inputs=[example_dropdown],
            outputs=[program_input]
        )

        run_button.click(
            fn=run_program,
            inputs=[program_input, trace_checkbox],
            outputs=[summary_output, trace_output, registers_output]
        )

    return demo


# =============================================================================
# Main
# =============================================================================

if __name__ == "__main__":
    demo = create_demo()
    demo.launch(
        share=False,
        server_name="0.0.0.0",
        server_port=7861,
        show_error=True
    )
