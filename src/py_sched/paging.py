"""Page replacement — which resident page should make room?

A process has more pages than the machine has physical frames.  When
it touches a page that isn't resident, that's a **page fault**: the
page must be loaded, and if every frame is taken, some resident page
must be evicted first.  The replacement policy picks the victim; the
number of faults over a reference string is its cost.

Replacement Policies (Strategy pattern):
    - **FIFO** — evict the page that was loaded first.  A plain queue;
      re-using a page doesn't save it.  Suffers from Belady's anomaly:
      for some reference strings, *more* frames cause *more* faults.
    - **OPT** — evict the page whose next use lies farthest in the
      future (Belady's optimal algorithm).  Needs the whole reference
      string in advance, so it is a yardstick rather than something a
      real kernel can run.  No policy can fault less.
    - **LRU** — evict the page whose last use lies farthest in the
      past.  The practical approximation of OPT, looking backward
      instead of forward.

``PagingEngine`` owns the resident set and the fault accounting; the
policy only tracks whatever ordering it needs and names a victim.
"""

from collections import deque
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Protocol

from py_sched.config import require_positive
from py_sched.logging import Logger, LogLevel

_SOURCE = "paging"

# ---------------------------------------------------------------------------
# Replacement Policy Protocol (Strategy pattern)
# ---------------------------------------------------------------------------


class ReplacementPolicy(Protocol):
    """Interface for page replacement algorithms.

    ``position`` is always the index of the reference being processed.
    """

    name: str

    def add_page(self, page_id: int, *, position: int) -> None:
        """Record that a page was loaded into a frame."""
        ...  # pragma: no cover

    def remove_page(self, page_id: int) -> None:
        """Record that a page was evicted."""
        ...  # pragma: no cover

    def record_access(self, page_id: int, *, position: int) -> None:
        """Record a hit on a resident page."""
        ...  # pragma: no cover

    def select_victim(self, *, position: int) -> int:
        """Choose which resident page to evict.

        Raises:
            IndexError: If no pages are resident.

        """
        ...  # pragma: no cover


# ---------------------------------------------------------------------------
# FIFO Policy
# ---------------------------------------------------------------------------


class FIFOPolicy:
    """First In, First Out — evict the oldest loaded page.

    The front of the deque is always the page that arrived first.
    """

    name = "FIFO"

    def __init__(self) -> None:
        """Create an empty FIFO policy."""
        self._queue: deque[int] = deque()

    def add_page(self, page_id: int, *, position: int) -> None:  # noqa: ARG002
        """Append the page to the back of the queue."""
        self._queue.append(page_id)

    def remove_page(self, page_id: int) -> None:
        """Remove a page from the queue."""
        self._queue.remove(page_id)

    def record_access(self, page_id: int, *, position: int) -> None:
        """FIFO ignores accesses — order is purely by load time."""

    def select_victim(self, *, position: int) -> int:  # noqa: ARG002
        """Return the oldest page (front of the queue).

        Raises:
            IndexError: If no pages are tracked.

        """
        if not self._queue:
            msg = "No pages to evict"
            raise IndexError(msg)
        return self._queue[0]


# ---------------------------------------------------------------------------
# OPT Policy
# ---------------------------------------------------------------------------


class OPTPolicy:
    """Belady's optimal replacement — evict the page used farthest ahead.

    For every resident page, scan forward from the current reference
    to find its next use.  A page that is never used again is evicted
    at once (first such page in load order).  Otherwise the page with
    the latest next use goes.

    The forward scan restarts on every eviction, so a run is O(n²) in
    the length of the reference string.  Fine for the strings people
    work through by hand.

    Args:
        references: The full reference string the engine will replay.

    """

    name = "OPT"

    def __init__(self, references: Sequence[int]) -> None:
        """Create an OPT policy that can see the future."""
        self._references = list(references)
        # dict keeps load order for the scan
        self._resident: dict[int, None] = {}

    def add_page(self, page_id: int, *, position: int) -> None:  # noqa: ARG002
        """Record that a page was loaded."""
        self._resident[page_id] = None

    def remove_page(self, page_id: int) -> None:
        """Record that a page was evicted."""
        del self._resident[page_id]

    def record_access(self, page_id: int, *, position: int) -> None:
        """OPT ignores the past."""

    def next_use(self, page_id: int, *, position: int) -> int | None:
        """Return the index of the next reference to *page_id* after *position*.

        Returns:
            The index, or None if the page is never referenced again.

        """
        for index in range(position + 1, len(self._references)):
            if self._references[index] == page_id:
                return index
        return None

    def select_victim(self, *, position: int) -> int:
        """Return the resident page whose next use is farthest away.

        Raises:
            IndexError: If no pages are tracked.

        """
        if not self._resident:
            msg = "No pages to evict"
            raise IndexError(msg)
        victim = -1
        farthest = -1
        for page_id in self._resident:
            upcoming = self.next_use(page_id, position=position)
            if upcoming is None:
                return page_id
            if upcoming > farthest:
                farthest = upcoming
                victim = page_id
        return victim


# ---------------------------------------------------------------------------
# LRU Policy
# ---------------------------------------------------------------------------


class LRUPolicy:
    """Least Recently Used — evict the page accessed longest ago.

    Keeps a recency map of page -> index of its most recent reference.
    Indices are unique, so the minimum is never tied.
    """

    name = "LRU"

    def __init__(self) -> None:
        """Create an empty LRU policy."""
        self._last_used: dict[int, int] = {}

    def add_page(self, page_id: int, *, position: int) -> None:
        """Record that a page was loaded (most recently used)."""
        self._last_used[page_id] = position

    def remove_page(self, page_id: int) -> None:
        """Forget an evicted page."""
        del self._last_used[page_id]

    def record_access(self, page_id: int, *, position: int) -> None:
        """Mark a page as the most recently used."""
        self._last_used[page_id] = position

    def select_victim(self, *, position: int) -> int:  # noqa: ARG002
        """Return the least recently used page.

        Raises:
            IndexError: If no pages are tracked.

        """
        if not self._last_used:
            msg = "No pages to evict"
            raise IndexError(msg)
        return min(self._last_used, key=self._last_used.__getitem__)


PAGING_POLICIES: dict[str, Callable[[Sequence[int]], ReplacementPolicy]] = {
    "fifo": lambda _references: FIFOPolicy(),
    "opt": OPTPolicy,
    "lru": lambda _references: LRUPolicy(),
}


# ---------------------------------------------------------------------------
# Paging Engine
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class FaultResult:
    """Outcome of replaying one reference string.

    Attributes:
        policy: Name of the replacement policy.
        frames: Number of physical frames available.
        references: Length of the reference string.
        faults: References that missed the resident set.
        hits: References that found their page resident.
        evictions: Victim pages, in eviction order.
        resident: Pages still resident at the end, in load order.

    """

    policy: str
    frames: int
    references: int
    faults: int
    hits: int
    evictions: tuple[int, ...]
    resident: tuple[int, ...]

    @property
    def hit_ratio(self) -> float:
        """Return hits / references (0.0 for an empty string)."""
        if self.references == 0:
            return 0.0
        return self.hits / self.references


class PagingEngine:
    """Demand paging simulator over a fixed number of frames.

    Each run starts with every frame empty and returns a fresh
    ``FaultResult``.  Fault counts are never carried from one run into
    the next; ``cumulative_faults`` sums them on request.

    Args:
        frames: Number of physical frames.
        logger: Optional event log.

    Raises:
        ConfigurationError: If *frames* is not positive.

    """

    def __init__(self, frames: int, *, logger: Logger | None = None) -> None:
        """Create a paging engine with *frames* physical frames."""
        self._frames = require_positive(frames, name="frame count")
        self._logger = logger
        self._results: list[FaultResult] = []

    @property
    def frames(self) -> int:
        """Return the number of physical frames."""
        return self._frames

    @property
    def last_result(self) -> FaultResult | None:
        """Return the most recent result, or None before any run."""
        return self._results[-1] if self._results else None

    @property
    def fault_count(self) -> int:
        """Return the fault count of the most recent run (0 if none)."""
        last = self.last_result
        return last.faults if last is not None else 0

    @property
    def results(self) -> list[FaultResult]:
        """Return every result produced so far, oldest first."""
        return list(self._results)

    @property
    def cumulative_faults(self) -> int:
        """Return the faults summed over every run so far."""
        return sum(r.faults for r in self._results)

    def reset(self) -> None:
        """Forget all previous results."""
        self._results.clear()

    def run(self, policy: ReplacementPolicy, references: Sequence[int]) -> FaultResult:
        """Replay *references* against an empty set of frames.

        Args:
            policy: A fresh replacement policy for this run.
            references: Page ids in access order.

        Returns:
            Fault and hit counts for the run.

        """
        resident: dict[int, None] = {}
        evictions: list[int] = []
        hits = 0
        for position, page_id in enumerate(references):
            if page_id in resident:
                hits += 1
                policy.record_access(page_id, position=position)
                continue

            if len(resident) >= self._frames:
                victim = policy.select_victim(position=position)
                policy.remove_page(victim)
                del resident[victim]
                evictions.append(victim)
                if self._logger is not None:
                    self._logger.log(
                        LogLevel.DEBUG,
                        f"{policy.name}: evict {victim} for {page_id}",
                        source=_SOURCE,
                        step=position,
                    )
            resident[page_id] = None
            policy.add_page(page_id, position=position)

        result = FaultResult(
            policy=policy.name,
            frames=self._frames,
            references=len(references),
            faults=len(references) - hits,
            hits=hits,
            evictions=tuple(evictions),
            resident=tuple(resident),
        )
        self._results.append(result)
        if self._logger is not None:
            self._logger.log(
                LogLevel.INFO,
                f"{policy.name}: {result.faults} faults in {result.references} references "
                f"({self._frames} frames)",
                source=_SOURCE,
            )
        return result

    def run_fifo(self, references: Sequence[int]) -> FaultResult:
        """Run First In, First Out replacement."""
        return self.run(FIFOPolicy(), references)

    def run_opt(self, references: Sequence[int]) -> FaultResult:
        """Run Belady's optimal replacement."""
        return self.run(OPTPolicy(references), references)

    def run_lru(self, references: Sequence[int]) -> FaultResult:
        """Run Least Recently Used replacement."""
        return self.run(LRUPolicy(), references)
