"""
Acceleration Module

Process-level parallelism for the merge loop: the pending scanners of one
pass are independent read-only queries against the same map snapshot.
"""

from .parallel_executor import AlignmentParallelExecutor, align_candidate

__all__ = [
    "AlignmentParallelExecutor",
    "align_candidate",
]
