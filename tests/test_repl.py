"""Tests for the REPL (Read-Eval-Print Loop).

The REPL is the interactive terminal interface.  The banner helper is
pure; the loop itself is driven with patched ``input``/``print``.
"""

from unittest.mock import MagicMock, patch

from py_sched.repl import format_banner, run
from py_sched.shell import Shell


def _printed(mock_print: MagicMock) -> str:
    """Join everything passed to a patched print()."""
    return "\n".join(str(c.args[0]) if c.args else "" for c in mock_print.call_args_list)


class TestBanner:
    """Verify the start-up banner."""

    def test_banner_names_program(self) -> None:
        """The banner includes the program name and every command."""
        shell = Shell()
        banner = format_banner(shell)
        assert "py-sched" in banner
        for name in shell.command_names:
            assert name in banner

    def test_banner_has_examples(self) -> None:
        """The banner shows example commands."""
        assert "disk sstf" in format_banner(Shell())


class TestRun:
    """Drive the loop with scripted input."""

    def test_runs_commands_until_exit(self) -> None:
        """Command output is printed; exit ends the loop."""
        with (
            patch("py_sched.repl.readline"),
            patch("builtins.input", side_effect=["mem fifo 3 1,2,3,4", "", "exit"]),
            patch("builtins.print") as mock_print,
        ):
            run()
        assert "faults: 4" in _printed(mock_print)

    def test_eof_exits(self) -> None:
        """Ctrl+D ends the loop cleanly."""
        with (
            patch("py_sched.repl.readline"),
            patch("builtins.input", side_effect=EOFError),
            patch("builtins.print") as mock_print,
        ):
            run()
        assert "Interrupted." not in _printed(mock_print)

    def test_keyboard_interrupt_exits(self) -> None:
        """Ctrl+C ends the loop with a message."""
        with (
            patch("py_sched.repl.readline"),
            patch("builtins.input", side_effect=KeyboardInterrupt),
            patch("builtins.print") as mock_print,
        ):
            run()
        assert "Interrupted." in _printed(mock_print)
