"""Tab completer for the simulator shell.

The completer separates **what to complete** (pure logic, fully
testable) from **how to wire it** (readline integration in the REPL).

Only two positions are completed: the command name, and the policy
name that follows ``disk``, ``mem`` or ``cpu``.  Everything after that
is numbers, which nobody wants suggested.
"""

from __future__ import annotations

import readline
from typing import TYPE_CHECKING

from py_sched.disk import DISK_POLICIES
from py_sched.paging import PAGING_POLICIES

if TYPE_CHECKING:
    from py_sched.shell import Shell

# Word position of the policy name.
_SECOND_WORD = 2

# Commands that take a policy name as their second word.
_POLICIES: dict[str, list[str]] = {
    "disk": [*DISK_POLICIES, "all"],
    "mem": [*PAGING_POLICIES, "all"],
    "cpu": ["fcfs", "sjf", "priority", "rr", "all"],
}


class Completer:
    """Context-aware tab completer for the simulator shell."""

    def __init__(self, shell: Shell) -> None:
        """Create a completer attached to a shell instance."""
        self._shell = shell

    def complete(self, text: str, state: int) -> str | None:
        """Readline callback — return the *state*-th candidate for *text*.

        Args:
            text: The partial word being completed.
            state: Index into the candidate list (0, 1, 2, …).

        Returns:
            The candidate at *state*, or ``None`` when exhausted.

        """
        line = readline.get_line_buffer()
        candidates = self.completions(text, line)
        if state < len(candidates):
            return candidates[state]
        return None

    def completions(self, text: str, line: str) -> list[str]:
        """Return completion candidates based on context.

        Args:
            text: The partial word under the cursor.
            line: The full input line so far.

        Returns:
            Sorted list of matching candidates.

        """
        words = line.lstrip().split()

        # No words yet, or still typing the first word → command completion
        if not words or (len(words) == 1 and not line.endswith(" ")):
            return [c for c in self._shell.command_names if c.startswith(text)]

        typing_second = len(words) == 1 or (len(words) == _SECOND_WORD and not line.endswith(" "))
        if typing_second and words[0] in _POLICIES:
            return sorted(p for p in _POLICIES[words[0]] if p.startswith(text))
        return []
