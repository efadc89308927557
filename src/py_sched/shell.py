"""The shell — command interpreter for the simulators.

The shell reads a command string, splits it into a command name and
arguments, dispatches to a handler, and returns a string result.  It
is the only place text is turned into numbers (via ``py_sched.parsing``)
and the only place errors are turned into messages.

Commands::

    disk <fcfs|sstf|look|clook|all> <cylinders> <current> <previous> <requests>
    mem  <fifo|opt|lru|all> <frames> <references>
    cpu  <fcfs|sjf|priority|rr|all> <bursts> [priorities]
    quantum [ticks]
    log | history | help | exit

Design choices:
    - **Returns strings, not prints.**  The shell is fully testable; the
      REPL decides how to display output.
    - **Command dispatch via a dict.**  Adding a command means writing
      a method and adding one dict entry.
    - **Fresh engine per command.**  Nothing carries over between two
      ``disk`` or ``mem`` commands except the log.
"""

from collections.abc import Callable

from py_sched.config import DEFAULT_QUANTUM, ConfigurationError, require_positive
from py_sched.disk import DISK_POLICIES, DiskScheduler, SeekResult
from py_sched.logging import Logger, LogLevel
from py_sched.paging import PAGING_POLICIES, FaultResult, PagingEngine
from py_sched.parsing import ParseError, parse_int, parse_sequence
from py_sched.process import ProcessScheduler, ProcessSpec, WaitResult

# Type alias for a command handler: takes a list of args, returns output.
_Handler = Callable[[list[str]], str]

_ALL = "all"
_CPU_POLICIES = ("fcfs", "sjf", "priority", "rr")
_DISK_ARGS = 5
_MEM_ARGS = 3
_CPU_MIN_ARGS = 2


def _format_seek(result: SeekResult) -> str:
    walk = " -> ".join(str(c) for c in (result.start, *result.order))
    return f"{result.policy:<6} total movement: {result.total_movement}\n  {walk}"


def _format_faults(result: FaultResult) -> str:
    return (
        f"{result.policy:<5} faults: {result.faults}  hits: {result.hits}  "
        f"hit ratio: {result.hit_ratio:.2f}"
    )


def _format_waits(result: WaitResult) -> str:
    waits = ", ".join(str(w) for w in result.waiting_times)
    return f"{result.policy:<9} average wait: {result.average_wait:.2f}  [{waits}]"


class Shell:
    """Command interpreter over the disk, paging, and CPU simulators.

    Args:
        logger: Event log shared by every engine the shell creates.

    """

    EXIT_SENTINEL = "__EXIT__"

    def __init__(self, *, logger: Logger | None = None) -> None:
        """Create a shell with an empty history."""
        self._logger = logger if logger is not None else Logger(min_level=LogLevel.INFO)
        self._history: list[str] = []
        self._quantum = DEFAULT_QUANTUM

        # Command dispatch table — maps command names to handler methods.
        self._commands: dict[str, _Handler] = {
            "help": self._cmd_help,
            "disk": self._cmd_disk,
            "mem": self._cmd_mem,
            "cpu": self._cmd_cpu,
            "quantum": self._cmd_quantum,
            "log": self._cmd_log,
            "history": self._cmd_history,
            "exit": self._cmd_exit,
        }

    @property
    def logger(self) -> Logger:
        """Return the shell's event log."""
        return self._logger

    @property
    def command_names(self) -> list[str]:
        """Return the sorted list of command names."""
        return sorted(self._commands)

    def execute(self, command: str) -> str:
        """Parse and execute one command.

        Args:
            command: The raw command string (e.g. "mem lru 3 1,2,3,1").

        Returns:
            The command output, or an error message.

        """
        stripped = command.strip()
        if not stripped:
            return ""
        self._history.append(stripped)

        name, *args = stripped.split()
        handler = self._commands.get(name)
        if handler is None:
            return f"Unknown command: {name}"
        try:
            return handler(args)
        except (ParseError, ConfigurationError) as e:
            self._logger.log(LogLevel.ERROR, str(e), source="shell")
            return f"Error: {e}"

    def _cmd_help(self, _args: list[str]) -> str:
        """List available commands."""
        return "Available commands: " + ", ".join(self.command_names)

    def _cmd_disk(self, args: list[str]) -> str:
        """Run disk head scheduling policies."""
        if len(args) != _DISK_ARGS:
            return "Usage: disk <fcfs|sstf|look|clook|all> <cylinders> <current> <previous> <requests>"
        policy, cylinders, current, previous, requests = args
        names = list(DISK_POLICIES) if policy == _ALL else [policy]
        if any(n not in DISK_POLICIES for n in names):
            return f"Error: unknown disk policy '{policy}'"

        scheduler = DiskScheduler(
            parse_int(cylinders, name="cylinders"),
            parse_int(current, name="current"),
            parse_int(previous, name="previous"),
            logger=self._logger,
        )
        sequence = parse_sequence(requests)
        return "\n".join(_format_seek(scheduler.run(DISK_POLICIES[n](), sequence)) for n in names)

    def _cmd_mem(self, args: list[str]) -> str:
        """Run page replacement policies."""
        if len(args) != _MEM_ARGS:
            return "Usage: mem <fifo|opt|lru|all> <frames> <references>"
        policy, frames, references = args
        names = list(PAGING_POLICIES) if policy == _ALL else [policy]
        if any(n not in PAGING_POLICIES for n in names):
            return f"Error: unknown paging policy '{policy}'"

        engine = PagingEngine(parse_int(frames, name="frames"), logger=self._logger)
        sequence = parse_sequence(references)
        return "\n".join(
            _format_faults(engine.run(PAGING_POLICIES[n](sequence), sequence)) for n in names
        )

    def _cmd_cpu(self, args: list[str]) -> str:
        """Run CPU scheduling policies over a batch of bursts."""
        if not _CPU_MIN_ARGS <= len(args) <= _CPU_MIN_ARGS + 1:
            return "Usage: cpu <fcfs|sjf|priority|rr|all> <bursts> [priorities]"
        policy, bursts_text = args[0], args[1]
        names = list(_CPU_POLICIES) if policy == _ALL else [policy]
        if any(n not in _CPU_POLICIES for n in names):
            return f"Error: unknown cpu policy '{policy}'"

        bursts = parse_sequence(bursts_text)
        priorities = parse_sequence(args[2]) if len(args) > _CPU_MIN_ARGS else [0] * len(bursts)
        if len(priorities) != len(bursts):
            return f"Error: {len(bursts)} bursts but {len(priorities)} priorities"

        scheduler = ProcessScheduler(quantum=self._quantum, logger=self._logger)
        for i, (burst, priority) in enumerate(zip(bursts, priorities, strict=True)):
            scheduler.add(ProcessSpec(name=f"P{i + 1}", burst=burst, priority=priority))

        runners: dict[str, Callable[[], WaitResult]] = {
            "fcfs": scheduler.run_fcfs,
            "sjf": scheduler.run_sjf,
            "priority": scheduler.run_priority,
            "rr": scheduler.run_round_robin,
        }
        return "\n".join(_format_waits(runners[n]()) for n in names)

    def _cmd_quantum(self, args: list[str]) -> str:
        """Show or set the round-robin quantum."""
        if not args:
            return f"quantum: {self._quantum}"
        self._quantum = require_positive(parse_int(args[0], name="quantum"), name="quantum")
        return ""

    def _cmd_log(self, _args: list[str]) -> str:
        """Show recorded log entries."""
        entries = self._logger.entries
        return "\n".join(str(e) for e in entries) if entries else "No log entries."

    def _cmd_history(self, _args: list[str]) -> str:
        """Show command history (including this command)."""
        return "\n".join(f"  {i + 1}  {cmd}" for i, cmd in enumerate(self._history))

    def _cmd_exit(self, _args: list[str]) -> str:
        """Signal the REPL to stop."""
        return self.EXIT_SENTINEL
