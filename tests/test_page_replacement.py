"""Tests for page replacement algorithms.

When every frame is full and a process touches a page that isn't
resident, some page must be evicted.  The policy picks the victim and
the number of page faults over a reference string is its cost.

Components tested:
    - **Replacement Policies**: FIFO, OPT (Belady's optimal), LRU.
    - **PagingEngine**: replays a reference string and counts faults.
"""

import pytest

from py_sched.config import ConfigurationError
from py_sched.logging import Logger, LogLevel
from py_sched.paging import FIFOPolicy, LRUPolicy, OPTPolicy, PagingEngine

# -- Reference strings ---------------------------------------------------------
# The string that exhibits Belady's anomaly under FIFO.
_BELADY = [1, 2, 3, 4, 1, 2, 5, 1, 2, 3, 4, 5]
# The classic 20-reference textbook string.
_TEXTBOOK = [7, 0, 1, 2, 0, 3, 0, 4, 2, 3, 0, 3, 2, 1, 2, 0, 1, 7, 0, 1]


# -- FIFO Policy --------------------------------------------------------------


class TestFIFOPolicy:
    """FIFO always evicts the page that has been in memory the longest."""

    def test_selects_oldest_page(self) -> None:
        """FIFO should evict the page that was loaded first."""
        policy = FIFOPolicy()
        for position, page in enumerate([1, 2, 3]):
            policy.add_page(page, position=position)
        assert policy.select_victim(position=3) == 1

    def test_access_does_not_change_order(self) -> None:
        """In FIFO, re-accessing a page has no effect on eviction order."""
        policy = FIFOPolicy()
        policy.add_page(1, position=0)
        policy.add_page(2, position=1)
        policy.record_access(1, position=2)
        assert policy.select_victim(position=3) == 1

    def test_remove_page(self) -> None:
        """Removing a page should exclude it from victim selection."""
        policy = FIFOPolicy()
        policy.add_page(1, position=0)
        policy.add_page(2, position=1)
        policy.remove_page(1)
        remaining = 2
        assert policy.select_victim(position=2) == remaining

    def test_empty_raises(self) -> None:
        """Selecting from an empty policy should raise IndexError."""
        with pytest.raises(IndexError):
            FIFOPolicy().select_victim(position=0)


# -- OPT Policy ---------------------------------------------------------------


class TestOPTPolicy:
    """OPT evicts the page whose next use lies farthest in the future."""

    def test_next_use(self) -> None:
        """next_use finds the first later reference to a page."""
        policy = OPTPolicy(_BELADY)
        expected = 4
        assert policy.next_use(1, position=0) == expected
        assert policy.next_use(4, position=10) is None

    def test_selects_farthest_next_use(self) -> None:
        """At reference 3 (page 4), page 3 is needed last of 1, 2, 3."""
        policy = OPTPolicy(_BELADY)
        for position, page in enumerate([1, 2, 3]):
            policy.add_page(page, position=position)
        expected_victim = 3
        assert policy.select_victim(position=3) == expected_victim

    def test_never_used_again_is_evicted_first(self) -> None:
        """A page with no future reference has infinite distance."""
        policy = OPTPolicy([1, 2, 3, 1, 2])
        for position, page in enumerate([1, 2, 3]):
            policy.add_page(page, position=position)
        expected_victim = 3
        assert policy.select_victim(position=2) == expected_victim

    def test_first_dead_page_in_load_order_wins(self) -> None:
        """Among several never-used-again pages, the earliest loaded goes."""
        policy = OPTPolicy([5, 6, 7, 8])
        for position, page in enumerate([5, 6, 7]):
            policy.add_page(page, position=position)
        expected_victim = 5
        assert policy.select_victim(position=3) == expected_victim

    def test_empty_raises(self) -> None:
        """Selecting from an empty policy should raise IndexError."""
        with pytest.raises(IndexError):
            OPTPolicy([]).select_victim(position=0)


# -- LRU Policy ---------------------------------------------------------------


class TestLRUPolicy:
    """LRU evicts the page that hasn't been accessed for the longest time."""

    def test_selects_least_recently_used(self) -> None:
        """LRU should evict the page accessed longest ago."""
        policy = LRUPolicy()
        for position, page in enumerate([1, 2, 3]):
            policy.add_page(page, position=position)
        assert policy.select_victim(position=3) == 1

    def test_access_updates_recency(self) -> None:
        """Accessing a page should make it the most recently used."""
        policy = LRUPolicy()
        for position, page in enumerate([1, 2, 3]):
            policy.add_page(page, position=position)
        policy.record_access(1, position=3)
        # Page 2 is now least recently used
        expected_victim = 2
        assert policy.select_victim(position=4) == expected_victim

    def test_remove_page(self) -> None:
        """Removing a page should exclude it from victim selection."""
        policy = LRUPolicy()
        policy.add_page(1, position=0)
        policy.add_page(2, position=1)
        policy.remove_page(1)
        remaining = 2
        assert policy.select_victim(position=2) == remaining

    def test_empty_raises(self) -> None:
        """Selecting from an empty policy should raise IndexError."""
        with pytest.raises(IndexError):
            LRUPolicy().select_victim(position=0)


# -- PagingEngine ---------------------------------------------------------------


class TestPagingEngineCreation:
    """Verify construction and configuration checks."""

    def test_rejects_zero_frames(self) -> None:
        """Zero frames is a configuration error."""
        with pytest.raises(ConfigurationError, match="frame count"):
            PagingEngine(0)

    def test_rejects_negative_frames(self) -> None:
        """Negative frames is a configuration error."""
        with pytest.raises(ConfigurationError, match="must be positive"):
            PagingEngine(-1)

    def test_fault_count_before_any_run(self) -> None:
        """No run, no faults."""
        engine = PagingEngine(3)
        assert engine.fault_count == 0
        assert engine.last_result is None


class TestFIFO:
    """FIFO fault counts, including Belady's anomaly."""

    def test_belady_three_frames(self) -> None:
        """Nine faults with three frames."""
        expected = 9
        assert PagingEngine(3).run_fifo(_BELADY).faults == expected

    def test_belady_four_frames(self) -> None:
        """Ten faults with four frames — more frames, more faults."""
        expected = 10
        assert PagingEngine(4).run_fifo(_BELADY).faults == expected

    def test_eviction_order(self) -> None:
        """Victims leave in the order they arrived."""
        result = PagingEngine(3).run_fifo(_BELADY)
        assert result.evictions == (1, 2, 3, 4, 1, 2)
        assert result.resident == (5, 3, 4)

    def test_textbook(self) -> None:
        """Fifteen faults on the 20-reference string with three frames."""
        expected = 15
        assert PagingEngine(3).run_fifo(_TEXTBOOK).faults == expected


class TestOPT:
    """Belady's optimal algorithm."""

    def test_belady_three_frames(self) -> None:
        """Seven faults with three frames."""
        expected = 7
        assert PagingEngine(3).run_opt(_BELADY).faults == expected

    def test_eviction_order(self) -> None:
        """3 goes first (needed last), later dead pages go immediately."""
        result = PagingEngine(3).run_opt(_BELADY)
        assert result.evictions == (3, 4, 1, 2)
        assert result.resident == (5, 3, 4)

    def test_textbook(self) -> None:
        """Nine faults on the 20-reference string with three frames."""
        expected = 9
        assert PagingEngine(3).run_opt(_TEXTBOOK).faults == expected


class TestLRU:
    """Least Recently Used."""

    def test_belady_three_frames(self) -> None:
        """Ten faults with three frames."""
        expected = 10
        assert PagingEngine(3).run_lru(_BELADY).faults == expected

    def test_textbook(self) -> None:
        """Twelve faults on the 20-reference string with three frames."""
        expected = 12
        assert PagingEngine(3).run_lru(_TEXTBOOK).faults == expected

    def test_hit_refreshes_recency(self) -> None:
        """A hit on 1 saves it; 2 is evicted instead."""
        result = PagingEngine(2).run_lru([1, 2, 1, 3])
        assert result.evictions == (2,)
        assert result.resident == (1, 3)


# -- Properties shared by all policies -----------------------------------------


_POLICY_RUNNERS = ["run_fifo", "run_opt", "run_lru"]
_SAMPLE_STRINGS = [
    _BELADY,
    _TEXTBOOK,
    [1, 2, 3, 1, 2, 3, 4, 4, 4, 1],
    [-1, 0, -1, 2, 0, 3, -1, 2],
]


class TestAllPolicies:
    """Invariants every replacement policy must satisfy."""

    @pytest.mark.parametrize("runner", _POLICY_RUNNERS)
    def test_empty_reference_string(self, runner: str) -> None:
        """No references, no faults."""
        result = getattr(PagingEngine(3), runner)([])
        assert result.faults == 0
        assert result.hit_ratio == 0.0

    @pytest.mark.parametrize("runner", _POLICY_RUNNERS)
    def test_enough_frames_faults_once_per_page(self, runner: str) -> None:
        """With a frame for every distinct page, only cold misses fault."""
        references = [1, 2, 1, 3, 2, 1]
        distinct = 3
        result = getattr(PagingEngine(distinct), runner)(references)
        assert result.faults == distinct
        assert result.evictions == ()

    @pytest.mark.parametrize("runner", _POLICY_RUNNERS)
    def test_faults_plus_hits_is_length(self, runner: str) -> None:
        """Every reference is either a hit or a fault."""
        result = getattr(PagingEngine(3), runner)(_TEXTBOOK)
        assert result.faults + result.hits == len(_TEXTBOOK)
        assert len(result.resident) <= result.frames

    @pytest.mark.parametrize("references", _SAMPLE_STRINGS)
    @pytest.mark.parametrize("frames", [1, 2, 3, 4])
    def test_opt_is_never_beaten(self, references: list[int], frames: int) -> None:
        """OPT faults no more than FIFO or LRU on the same input."""
        engine = PagingEngine(frames)
        opt = engine.run_opt(references).faults
        assert opt <= engine.run_fifo(references).faults
        assert opt <= engine.run_lru(references).faults


# -- Result history -------------------------------------------------------------


class TestRunHistory:
    """Runs on one engine are independent of each other."""

    def test_runs_do_not_accumulate(self) -> None:
        """Running FIFO twice reports nine faults both times."""
        engine = PagingEngine(3)
        engine.run_fifo(_BELADY)
        engine.run_fifo(_BELADY)
        expected = 9
        assert engine.fault_count == expected

    def test_cumulative_faults(self) -> None:
        """Cumulative faults sum every run explicitly."""
        engine = PagingEngine(3)
        engine.run_fifo(_BELADY)
        engine.run_lru(_BELADY)
        expected = 9 + 10
        assert engine.cumulative_faults == expected
        engine.reset()
        assert engine.cumulative_faults == 0

    def test_hit_ratio(self) -> None:
        """Three hits in twelve references."""
        result = PagingEngine(3).run_fifo(_BELADY)
        assert result.hit_ratio == pytest.approx(3 / 12)


# -- Logging --------------------------------------------------------------------


class TestPagingLogging:
    """The engine reports evictions to an optional logger."""

    def test_logs_evictions_and_summary(self) -> None:
        """One DEBUG entry per eviction, one INFO summary."""
        logger = Logger()
        result = PagingEngine(3, logger=logger).run_fifo(_BELADY)
        evictions = [e for e in logger.entries if e.level is LogLevel.DEBUG]
        assert len(evictions) == len(result.evictions)
        first_eviction_step = 3
        assert evictions[0].step == first_eviction_step
        summary = logger.filter(min_level=LogLevel.INFO, source="paging")
        assert len(summary) == 1
        assert "9 faults" in summary[0].message
