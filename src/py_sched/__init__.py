"""Cost metrics for classic OS scheduling policies.

Re-exports the engines so callers can write::

    from py_sched import DiskScheduler, PagingEngine

Disk policy classes (FCFSPolicy, etc.) are NOT re-exported here to
avoid name collisions with the paging policies.  Import them directly
from ``py_sched.disk`` or ``py_sched.paging``.
"""

from py_sched.config import ConfigurationError
from py_sched.disk import DiskScheduler, SeekResult
from py_sched.paging import FaultResult, PagingEngine
from py_sched.parsing import ParseError, parse_sequence
from py_sched.process import ProcessScheduler, ProcessSpec, WaitResult

__all__ = [
    "ConfigurationError",
    "DiskScheduler",
    "FaultResult",
    "PagingEngine",
    "ParseError",
    "ProcessScheduler",
    "ProcessSpec",
    "SeekResult",
    "WaitResult",
    "parse_sequence",
]
