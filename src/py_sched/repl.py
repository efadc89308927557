"""Interactive REPL (Read-Eval-Print Loop) for the simulators.

The REPL is the thin I/O wrapper around the shell:

    1. **Read** — display a prompt and read user input.
    2. **Eval** — pass the command to ``shell.execute()``.
    3. **Print** — display the result.
    4. **Loop** — repeat until the shell returns the exit sentinel.

The shell is fully testable (returns strings, no I/O); ``format_banner``
is pure.  ``run()`` is the I/O entrypoint and the ``py-sched`` console
script.
"""

import readline

from py_sched.completer import Completer
from py_sched.shell import Shell

_BANNER_WIDTH = 44
PROMPT = "sched $ "


def format_banner(shell: Shell) -> str:
    """Return the start-up banner listing the available commands."""
    border = "=" * _BANNER_WIDTH
    header = (
        f"\n  {border}\n"
        "               py-sched v0.1.0\n"
        "     Disk, paging and CPU scheduling costs\n"
        f"  {border}\n"
    )
    examples = (
        "  disk sstf 200 53 53 98,183,37,122,14,124,65,67\n"
        "  mem all 3 1,2,3,4,1,2,5,1,2,3,4,5\n"
        "  cpu all 24,3,3\n"
    )
    footer = f"\nCommands: {', '.join(shell.command_names)}.  Type 'exit' to quit.\n"
    return header + "\nExamples:\n" + examples + footer


def run() -> None:
    """Run the interactive REPL until ``exit``, Ctrl+D or Ctrl+C."""
    shell = Shell()

    # Wire up tab completion via readline.
    completer = Completer(shell)
    readline.set_completer(completer.complete)
    readline.set_completer_delims(" \t")
    readline.parse_and_bind("tab: complete")

    print(format_banner(shell))  # noqa: T201

    try:
        while True:
            try:
                command = input(PROMPT)
            except EOFError:
                # Ctrl+D — graceful exit
                print()  # noqa: T201
                break

            result = shell.execute(command)
            if result == Shell.EXIT_SENTINEL:
                break
            if result:
                print(result)  # noqa: T201

    except KeyboardInterrupt:
        # Ctrl+C — graceful exit
        print("\nInterrupted.")  # noqa: T201
