"""
Parallel execution infrastructure for merge passes.

Provides AlignmentParallelExecutor for distributing the pending scanners of a
merge pass across multiple CPU cores using multiprocessing. Workers only read
the map snapshot they are given; placements are committed by the caller.
"""

from __future__ import annotations

import time
from multiprocessing import Pool, cpu_count
from typing import TYPE_CHECKING, Any, Callable, Dict, List, Optional, Tuple

from ..utils.logging import setup_logger

if TYPE_CHECKING:
    from ..alignment.aligner import Placement
    from ..alignment.distance_index import IndexedScanner
    from ..alignment.global_map import GlobalMap

logger = setup_logger(__name__)


def _worker_wrapper(args: Tuple[int, Any, Callable, Dict[str, Any]]) -> Tuple[int, Any, Optional[str]]:
    """
    Worker wrapper function for parallel alignment attempts.

    Must be at module level for pickling on Windows.

    Args:
        args: Tuple of (item_index, item, worker_fn, worker_kwargs)

    Returns:
        Tuple of (item_index, result, error_message)
    """
    idx, item, worker_fn, worker_kwargs = args
    try:
        result = worker_fn(item, **worker_kwargs)
        return (idx, result, None)
    except Exception as e:
        error_msg = f"{type(e).__name__}: {str(e)}"
        logger.error(f"Worker error on item {idx}: {error_msg}")
        return (idx, None, error_msg)


def align_candidate(
    candidate: "IndexedScanner",
    *,
    known: "GlobalMap",
    min_overlap: int,
) -> Optional["Placement"]:
    """
    Try one pending scanner against a map snapshot.

    Module-level so worker processes can unpickle it; the aligner is imported
    here because the alignment package itself depends on this module.
    """
    from ..alignment.aligner import ScannerAligner

    return ScannerAligner(min_overlap=min_overlap).try_align(candidate, known)


class AlignmentParallelExecutor:
    """
    Parallel executor for per-pass alignment attempts.

    Distributes items (pending scanners) to a worker pool and collects the
    results in input order, so a parallel pass commits exactly what a
    sequential pass would.

    Example:
        executor = AlignmentParallelExecutor(n_workers=4)
        placements = executor.align_pending(pending, known=snapshot, min_overlap=12)
    """

    def __init__(self, n_workers: Optional[int] = None):
        """
        Initialize parallel executor.

        Args:
            n_workers: Number of worker processes. If None, uses cpu_count - 1
                to leave one core for the driver. Minimum is 1.
        """
        if n_workers is None:
            n_workers = max(1, cpu_count() - 1)
        else:
            n_workers = max(1, int(n_workers))

        self.n_workers = n_workers

        logger.debug(
            f"Initialized AlignmentParallelExecutor with {self.n_workers} workers "
            f"(total CPUs: {cpu_count()})"
        )

    def align_pending(
        self,
        pending: List["IndexedScanner"],
        known: "GlobalMap",
        min_overlap: int,
    ) -> List[Optional["Placement"]]:
        """
        Run one merge pass: try every pending scanner against `known`.

        Args:
            pending: Scanners not yet placed
            known: Snapshot of the global map; workers only read it
            min_overlap: Beacons required for a placement

        Returns:
            One placement (or None) per pending scanner, in input order
        """
        start_time = time.time()
        placements = self.map_items(
            items=pending,
            worker_fn=align_candidate,
            worker_kwargs={"known": known, "min_overlap": min_overlap},
        )
        placed = sum(1 for p in placements if p is not None)
        logger.info(
            f"Tried {len(pending)} pending scanners against {len(known)} known "
            f"with {self.n_workers} workers: {placed} placed in {time.time() - start_time:.2f}s"
        )
        return placements

    def map_items(
        self,
        items: List[Any],
        worker_fn: Callable,
        worker_kwargs: Dict[str, Any],
    ) -> List[Any]:
        """
        Map worker function over items in parallel.

        Args:
            items: Items to process
            worker_fn: Function to apply to each item. Must be picklable and
                have signature: worker_fn(item, **worker_kwargs) -> result
            worker_kwargs: Fixed keyword arguments passed to each worker call

        Returns:
            List of results in same order as input items

        Raises:
            RuntimeError: If any worker fails
        """
        n_items = len(items)

        if n_items == 0:
            return []

        start_time = time.time()

        # If only 1 worker or 1 item, use sequential processing (no pool overhead)
        if self.n_workers == 1 or n_items == 1:
            results = []
            for i, item in enumerate(items):
                try:
                    results.append(worker_fn(item, **worker_kwargs))
                except Exception as e:
                    logger.error(f"Error processing item {i}: {e}", exc_info=True)
                    raise RuntimeError(f"Alignment attempt failed: {e}") from e
            return results

        results = self._parallel_map(items, worker_fn, worker_kwargs)

        total_time = time.time() - start_time
        logger.debug(
            f"Parallel pass complete: {n_items} items in {total_time:.2f}s "
            f"with {self.n_workers} workers"
        )
        return results

    def _parallel_map(
        self,
        items: List[Any],
        worker_fn: Callable,
        worker_kwargs: Dict[str, Any],
    ) -> List[Any]:
        """
        Execute parallel mapping using multiprocessing.Pool.

        Uses imap_unordered for responsiveness, then reorders results to
        match input order.
        """
        n_items = len(items)
        worker_args = [(i, item, worker_fn, worker_kwargs) for i, item in enumerate(items)]

        results_dict: Dict[int, Any] = {}
        errors = []
        with Pool(processes=min(self.n_workers, n_items)) as pool:
            for idx, result, error in pool.imap_unordered(_worker_wrapper, worker_args):
                if error:
                    errors.append((idx, error))
                else:
                    results_dict[idx] = result

        if errors:
            error_msg = f"{len(errors)} alignment attempts failed out of {n_items}"
            logger.error(error_msg)
            for idx, error in errors[:5]:  # Log first 5 errors
                logger.error(f"  Item {idx}: {error}")
            if len(errors) > 5:
                logger.error(f"  ... and {len(errors) - 5} more errors")
            raise RuntimeError(error_msg)

        return [results_dict[i] for i in range(n_items)]
