"""Disk head scheduling — how far does the arm travel?

A disk arm moves across tracks (cylinders) to service I/O requests.
The dominant cost is **seek time**, which we measure as total head
movement: the sum of ``|from - to|`` over every move the head makes.
Disk scheduling policies decide the *order* in which a batch of
requests is serviced; the order alone determines the cost.

Think of a disk arm like an elevator in a building:
    - **FCFS** — stop at every floor in the order people pressed buttons.
    - **SSTF** — always go to the nearest requested floor (greedy).
    - **LOOK** — keep going the way you're going while anyone is waiting
      in that direction, then turn around.
    - **C-LOOK** — only ever go up; after the highest request, jump
      straight back down to the lowest one and go up again.

Unlike SCAN, LOOK never travels to the physical end of the disk — it
turns around at the last *request*.  That is why the cylinder count is
informational only: no policy here needs to know where the platter ends.

All policies implement the ``DiskPolicy`` protocol (Strategy pattern).
``DiskScheduler`` holds the head state and turns a policy's order into
an immutable ``SeekResult``.
"""

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from enum import StrEnum
from typing import Protocol

from py_sched.config import require_positive
from py_sched.logging import Logger, LogLevel

_SOURCE = "disk"


class Direction(StrEnum):
    """Direction of the first sweep for LOOK."""

    UP = "up"
    DOWN = "down"


def initial_direction(current: int, previous: int) -> Direction:
    """Derive the sweep direction from the last two head positions.

    A head that moved toward lower cylinders keeps going down; anything
    else (including a head that did not move) goes up.
    """
    return Direction.DOWN if current - previous < 0 else Direction.UP


def seek_distance(order: Sequence[int], *, head: int) -> int:
    """Return the total head movement for visiting *order* from *head*."""
    total = 0
    current = head
    for cylinder in order:
        total += abs(current - cylinder)
        current = cylinder
    return total


class DiskPolicy(Protocol):
    """Protocol for disk scheduling policies (Strategy pattern)."""

    name: str

    def schedule(self, requests: list[int], *, head: int, previous: int) -> list[int]:
        """Return the order in which requests should be serviced.

        Args:
            requests: Cylinder numbers to visit.
            head: Current position of the disk head.
            previous: Position the head held before *head*.

        Returns:
            A permutation of *requests*.

        """
        ...  # pragma: no cover


class FCFSPolicy:
    """First Come, First Served — service in arrival order.

    Fair (no starvation), but the arm zigzags across the disk.
    """

    name = "FCFS"

    def schedule(self, requests: list[int], *, head: int, previous: int) -> list[int]:  # noqa: ARG002
        """Return requests in their original order."""
        return list(requests)


class SSTFPolicy:
    """Shortest Seek Time First — always go to the nearest request.

    Greedy: lowest immediate cost, but distant requests can starve.

    Tiebreaker: when two pending requests are equally close, the one
    that appears first in the input wins.  ``min`` returns the first
    minimum it meets and ``remaining`` keeps input order, so the scan
    is left-to-right over the still-unvisited requests.
    """

    name = "SSTF"

    def schedule(self, requests: list[int], *, head: int, previous: int) -> list[int]:  # noqa: ARG002
        """Return requests ordered by nearest-first from the head."""
        remaining = list(requests)
        order: list[int] = []
        current = head
        while remaining:
            nearest = min(range(len(remaining)), key=lambda i: abs(remaining[i] - current))
            current = remaining.pop(nearest)
            order.append(current)
        return order


def _partition(requests: list[int], head: int) -> tuple[list[int], list[int]]:
    """Split requests into (``<= head``, ``> head``), both ascending."""
    ordered = sorted(requests)
    lower = [r for r in ordered if r <= head]
    upper = [r for r in ordered if r > head]
    return lower, upper


class LOOKPolicy:
    """LOOK — sweep one way to the last request, then reverse.

    The first direction comes from the head's previous position and is
    fixed for the whole run.  Requests at or below the head form the
    lower side; requests strictly above it form the upper side.  If one
    side is empty the sweep simply never reverses.
    """

    name = "LOOK"

    def schedule(self, requests: list[int], *, head: int, previous: int) -> list[int]:
        """Return requests in LOOK order."""
        lower, upper = _partition(requests, head)
        lower.reverse()
        if initial_direction(head, previous) is Direction.DOWN:
            return lower + upper
        return upper + lower


class CLOOKPolicy:
    """Circular LOOK — sweep up, jump back to the lowest request, sweep up.

    Every request is serviced while moving toward higher cylinders.  The
    jump from the highest request back to the lowest is charged like any
    other move.  The previous head position is not consulted.
    """

    name = "CLOOK"

    def schedule(self, requests: list[int], *, head: int, previous: int) -> list[int]:  # noqa: ARG002
        """Return requests in C-LOOK order."""
        lower, upper = _partition(requests, head)
        return upper + lower


DISK_POLICIES: dict[str, Callable[[], DiskPolicy]] = {
    "fcfs": FCFSPolicy,
    "sstf": SSTFPolicy,
    "look": LOOKPolicy,
    "clook": CLOOKPolicy,
}


@dataclass(frozen=True)
class SeekResult:
    """Outcome of servicing one batch of requests.

    Attributes:
        policy: Name of the policy that produced the order.
        order: Cylinders in the order they were serviced.
        start: Head position before the first move.
        final_head: Head position after the last move.
        total_movement: Sum of absolute head movements.

    """

    policy: str
    order: tuple[int, ...]
    start: int
    final_head: int
    total_movement: int


class DiskScheduler:
    """Simulated disk head — runs policies over request batches.

    Every run starts from the head position given at construction and
    returns a fresh ``SeekResult``; runs never add to each other's cost.
    The scheduler remembers its results so the latest one is available
    through ``total_movement`` and the whole history through ``results``.

    Args:
        cylinders: Number of cylinders on the disk (informational).
        current: Initial head position.
        previous: Head position before *current*; sets LOOK's direction.
        logger: Optional event log.

    Raises:
        ConfigurationError: If *cylinders* is not positive.

    """

    def __init__(
        self,
        cylinders: int,
        current: int,
        previous: int,
        *,
        logger: Logger | None = None,
    ) -> None:
        """Create a disk scheduler with a fixed starting head state."""
        self._cylinders = require_positive(cylinders, name="cylinder count")
        self._head = current
        self._previous = previous
        self._logger = logger
        self._results: list[SeekResult] = []

    @property
    def cylinders(self) -> int:
        """Return the number of cylinders on the disk."""
        return self._cylinders

    @property
    def head(self) -> int:
        """Return the head position every run starts from."""
        return self._head

    @property
    def previous(self) -> int:
        """Return the head position before ``head``."""
        return self._previous

    @property
    def direction(self) -> Direction:
        """Return the initial sweep direction LOOK will use."""
        return initial_direction(self._head, self._previous)

    @property
    def last_result(self) -> SeekResult | None:
        """Return the most recent result, or None before any run."""
        return self._results[-1] if self._results else None

    @property
    def total_movement(self) -> int:
        """Return the head movement of the most recent run (0 if none)."""
        last = self.last_result
        return last.total_movement if last is not None else 0

    @property
    def final_head(self) -> int:
        """Return where the head stopped on the most recent run."""
        last = self.last_result
        return last.final_head if last is not None else self._head

    @property
    def results(self) -> list[SeekResult]:
        """Return every result produced so far, oldest first."""
        return list(self._results)

    @property
    def cumulative_movement(self) -> int:
        """Return the head movement summed over every run so far."""
        return sum(r.total_movement for r in self._results)

    def reset(self) -> None:
        """Forget all previous results."""
        self._results.clear()

    def run(self, policy: DiskPolicy, requests: Sequence[int]) -> SeekResult:
        """Service *requests* in the order *policy* chooses.

        Args:
            policy: The scheduling strategy.
            requests: Cylinder numbers, in arrival order.

        Returns:
            The service order and its total head movement.

        """
        order = policy.schedule(list(requests), head=self._head, previous=self._previous)
        total = 0
        current = self._head
        for step, cylinder in enumerate(order):
            distance = abs(current - cylinder)
            total += distance
            if self._logger is not None:
                self._logger.log(
                    LogLevel.DEBUG,
                    f"{policy.name}: {current} -> {cylinder} ({distance})",
                    source=_SOURCE,
                    step=step,
                )
            current = cylinder

        result = SeekResult(
            policy=policy.name,
            order=tuple(order),
            start=self._head,
            final_head=current,
            total_movement=total,
        )
        self._results.append(result)
        if self._logger is not None:
            self._logger.log(
                LogLevel.INFO,
                f"{policy.name}: {len(order)} requests, total movement {total}",
                source=_SOURCE,
            )
        return result

    def run_fcfs(self, requests: Sequence[int]) -> SeekResult:
        """Run First Come, First Served."""
        return self.run(FCFSPolicy(), requests)

    def run_sstf(self, requests: Sequence[int]) -> SeekResult:
        """Run Shortest Seek Time First."""
        return self.run(SSTFPolicy(), requests)

    def run_look(self, requests: Sequence[int]) -> SeekResult:
        """Run LOOK."""
        return self.run(LOOKPolicy(), requests)

    def run_clook(self, requests: Sequence[int]) -> SeekResult:
        """Run Circular LOOK."""
        return self.run(CLOOKPolicy(), requests)
