"""Internal helpers for effectstack.

Common functions used across multiple modules."""

from __future__ import annotations

from collections.abc import Iterable

from .writer import Log, WriterResult

# Log merging helpers
def merge_logs[W](logs: Iterable[Log[W]]) -> Log[W]:
    """
    Merge multiple logs into one using monoidal combine, in iteration order.

    Usage:
        merged = merge_logs(wr.log for wr in writer_results)
    """
    result = Log[W]()
    for log in logs:
        result = result.combine(log)
    return result

def merge_writer_logs[T, E, W](wrs: Iterable[WriterResult[T, E, Log[W]]]) -> Log[W]:
    """Extract and merge logs from multiple WriterResults."""
    return merge_logs(wr.log for wr in wrs)

__all__ = (
    "merge_logs",
    "merge_writer_logs",
)
