"""
Execution-unit detection and work splitting for data-parallel fitting.

Parallel mode is only enabled when the host reports enough cores; otherwise
the engine falls back to serial execution with an informational notice.
"""

from typing import Optional, List, Tuple, NamedTuple
import os

from ..config import MIN_EXECUTION_UNITS


class ParallelPlan(NamedTuple):
    """Resolved execution mode for one engine."""
    parallel: bool
    n_workers: int
    notice: Optional[str] = None


def available_execution_units() -> int:
    """Number of cores usable by this process (at least 1)."""
    if hasattr(os, 'sched_getaffinity'):
        try:
            return max(1, len(os.sched_getaffinity(0)))
        except OSError:
            pass
    return max(1, os.cpu_count() or 1)


def resolve_parallelism(requested: bool,
                        min_units: int = MIN_EXECUTION_UNITS,
                        n_jobs: Optional[int] = None,
                        available: Optional[int] = None) -> ParallelPlan:
    """Decide whether a fit may run in parallel.

    Args:
        requested: Whether the caller asked for parallel execution
        min_units: Cores required before parallel mode is allowed
        n_jobs: Worker count; None uses every available core
        available: Override for the detected core count

    Returns:
        ParallelPlan; ``notice`` is set when parallelism was requested but
        refused
    """
    if not requested:
        return ParallelPlan(False, 1)

    if available is None:
        available = available_execution_units()

    if available < min_units:
        return ParallelPlan(
            False, 1,
            f"min num cores required for parallel: {min_units} (found {available})")

    n_workers = available if n_jobs is None else max(1, min(n_jobs, available))
    return ParallelPlan(True, n_workers)


def chunk_ranges(n_items: int, n_chunks: int) -> List[Tuple[int, int]]:
    """Split ``range(n_items)`` into at most ``n_chunks`` contiguous blocks.

    Block sizes differ by at most one; empty blocks are never returned.
    """
    n_chunks = max(1, min(n_chunks, n_items))
    base, extra = divmod(n_items, n_chunks)
    ranges = []
    start = 0
    for i in range(n_chunks):
        stop = start + base + (1 if i < extra else 0)
        if stop > start:
            ranges.append((start, stop))
        start = stop
    return ranges
