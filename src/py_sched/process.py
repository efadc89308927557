"""CPU process scheduling — average waiting time of a batch.

All processes arrive at time 0 with a known next CPU burst.  A policy
decides the order they get the CPU; a process's **waiting time** is how
long it sits in the ready queue before it finishes its burst (minus the
time it actually ran).  The metric is the average over the batch.

- **FCFS** — run in arrival order.  One long job in front makes
  everyone behind it wait (the convoy effect).
- **SJF** — shortest burst first.  Provably minimal average wait when
  all jobs arrive together.
- **Priority** — lowest priority *number* first (1 beats 5); equal
  priorities keep arrival order.
- **Round Robin** — each process runs for at most ``quantum`` ticks,
  then goes to the back of the line.

Unlike the disk and paging engines this one holds a ready queue:
processes are ``add``-ed, policies are run over a snapshot of it.
"""

from dataclasses import dataclass

from py_sched.config import DEFAULT_QUANTUM, ConfigurationError, require_positive
from py_sched.logging import Logger, LogLevel

_SOURCE = "cpu"


@dataclass(frozen=True)
class ProcessSpec:
    """A process waiting for the CPU.

    Attributes:
        name: Label used in output.
        burst: Length of the next CPU burst in ticks.
        priority: Smaller numbers are more urgent.

    """

    name: str
    burst: int
    priority: int = 0


@dataclass(frozen=True)
class WaitResult:
    """Waiting times for one policy run.

    ``waiting_times`` is in ready-queue (arrival) order regardless of
    the order the policy ran the processes in.
    """

    policy: str
    waiting_times: tuple[int, ...]
    average_wait: float


def _average(values: list[int]) -> float:
    return sum(values) / len(values) if values else 0.0


def _sequential_waits(bursts: list[int]) -> list[int]:
    """Waiting times when processes run to completion one after another."""
    waits: list[int] = []
    elapsed = 0
    for burst in bursts:
        waits.append(elapsed)
        elapsed += burst
    return waits


class ProcessScheduler:
    """Ready queue plus the four classic non-preemptive/RR policies.

    Args:
        quantum: Round-robin time slice in ticks.
        logger: Optional event log.

    Raises:
        ConfigurationError: If *quantum* is not positive.

    """

    def __init__(self, *, quantum: int = DEFAULT_QUANTUM, logger: Logger | None = None) -> None:
        """Create a scheduler with an empty ready queue."""
        self._quantum = require_positive(quantum, name="quantum")
        self._logger = logger
        self._ready: list[ProcessSpec] = []

    @property
    def quantum(self) -> int:
        """Return the round-robin time slice."""
        return self._quantum

    @property
    def processes(self) -> list[ProcessSpec]:
        """Return the ready queue in arrival order."""
        return list(self._ready)

    def add(self, process: ProcessSpec) -> None:
        """Append a process to the ready queue.

        Raises:
            ConfigurationError: If the process has a negative burst.

        """
        if process.burst < 0:
            msg = f"Burst of {process.name} must not be negative (got {process.burst})"
            raise ConfigurationError(msg)
        self._ready.append(process)

    def clear(self) -> None:
        """Empty the ready queue."""
        self._ready.clear()

    def _finish(self, policy: str, waits: list[int]) -> WaitResult:
        result = WaitResult(policy=policy, waiting_times=tuple(waits), average_wait=_average(waits))
        if self._logger is not None:
            self._logger.log(
                LogLevel.INFO,
                f"{policy}: {len(waits)} processes, average wait {result.average_wait:.2f}",
                source=_SOURCE,
            )
        return result

    def _run_in_order(self, policy: str, order: list[int]) -> WaitResult:
        """Run processes to completion in *order* (indices into the queue)."""
        bursts = [self._ready[i].burst for i in order]
        waits = [0] * len(self._ready)
        for index, wait in zip(order, _sequential_waits(bursts), strict=True):
            waits[index] = wait
        return self._finish(policy, waits)

    def run_fcfs(self) -> WaitResult:
        """Run processes in arrival order."""
        return self._run_in_order("FCFS", list(range(len(self._ready))))

    def run_sjf(self) -> WaitResult:
        """Run the shortest burst first (ties keep arrival order)."""
        order = sorted(range(len(self._ready)), key=lambda i: self._ready[i].burst)
        return self._run_in_order("SJF", order)

    def run_priority(self) -> WaitResult:
        """Run the smallest priority number first (ties keep arrival order)."""
        order = sorted(range(len(self._ready)), key=lambda i: self._ready[i].priority)
        return self._run_in_order("Priority", order)

    def run_round_robin(self) -> WaitResult:
        """Cycle through the queue, giving each process one quantum per turn."""
        remaining = [p.burst for p in self._ready]
        waits = [0] * len(self._ready)
        clock = 0
        while any(remaining):
            for i, left in enumerate(remaining):
                if left == 0:
                    continue
                ran = min(left, self._quantum)
                clock += ran
                remaining[i] = left - ran
                if remaining[i] == 0:
                    waits[i] = clock - self._ready[i].burst
        return self._finish("RR", waits)
