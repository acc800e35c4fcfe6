"""Split result sets into size-bounded batches."""

from __future__ import annotations

from collections.abc import Sequence
from typing import TypeVar

T = TypeVar("T")


def plan_batches(items: Sequence[T], batch_size: int) -> list[list[T]]:
    """Partition *items* into consecutive chunks of at most *batch_size*.

    Order is preserved and the last chunk holds the remainder. An empty
    *items* yields no chunks at all.
    """
    if batch_size <= 0:
        raise ValueError(f"batch_size must be positive, got {batch_size}")
    return [list(items[start : start + batch_size]) for start in range(0, len(items), batch_size)]
