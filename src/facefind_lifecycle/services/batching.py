"""Chunked deletion against stores with per-call batch limits."""

from collections.abc import Iterator, Sequence
from typing import Protocol

# Provider limits: structured-record batch writes and S3 DeleteObjects.
RECORD_BATCH_LIMIT = 25
BLOB_BATCH_LIMIT = 1000


class BatchDeleteTarget(Protocol):
    """A store that deletes a bounded batch of item ids per call."""

    def delete_batch(self, ids: Sequence[str]) -> None:
        """Delete the given ids in a single provider call."""


def chunked(ids: Sequence[str], size: int) -> Iterator[list[str]]:
    """Yield consecutive chunks of at most ``size`` ids."""
    if size < 1:
        raise ValueError(f"Batch size must be positive, got {size}")
    for start in range(0, len(ids), size):
        yield list(ids[start : start + size])


def delete_all(
    target: BatchDeleteTarget, ids: Sequence[str], max_batch_size: int
) -> int:
    """Delete all ids in sequential chunks and return how many were submitted.

    A failing chunk propagates its exception; earlier chunks stay deleted.
    """
    submitted = 0
    for batch in chunked(ids, max_batch_size):
        target.delete_batch(batch)
        submitted += len(batch)
    return submitted
