"""Cooperative chunked processing for large row sets.

`process_in_chunks` is the only coroutine in the core: it maps a transform
over a sequence in fixed-size batches and yields to the event loop between
batches so pending UI work can run.
"""
from __future__ import annotations

import asyncio
import logging
from typing import Any, Callable, Dict, List, Optional, Sequence

from .config import settings
from .errors import ChunkingCancelled

logger = logging.getLogger("data-inspector")

# category -> (base chunk size, ceiling)
CHUNK_SIZE_POLICY: Dict[str, tuple] = {
    'low': (1000, 5000),
    'medium': (500, 2000),
    'high': (100, 500),
}
TARGET_CHUNK_COUNT = 50

ProgressCallback = Callable[[int, int], Any]


class CancellationToken:
    """Flag checked between chunks; once cancelled it stays cancelled."""

    def __init__(self):
        self._cancelled = False

    def cancel(self) -> None:
        self._cancelled = True

    @property
    def cancelled(self) -> bool:
        return self._cancelled


def should_chunk(row_count: int, threshold: int = None) -> bool:
    if threshold is None:
        threshold = settings.CHUNK_ROW_THRESHOLD
    return row_count > threshold


def calculate_optimal_chunk_size(total_items: int, size_category: str = 'medium') -> int:
    """Pick a chunk size that grows with the input up to the category ceiling.

    Inputs no larger than the base size run as a single chunk. Larger inputs
    aim for about TARGET_CHUNK_COUNT chunks, never below the base size and
    never above the ceiling. The result is non-decreasing in `total_items`.
    """
    if size_category not in CHUNK_SIZE_POLICY:
        raise ValueError(f"Unknown size category: {size_category!r}")

    base, ceiling = CHUNK_SIZE_POLICY[size_category]
    if total_items <= 0:
        return 1
    if total_items <= base:
        return total_items
    return min(ceiling, max(base, total_items // TARGET_CHUNK_COUNT))


async def process_in_chunks(
    items: Sequence[Any],
    transform: Callable[..., Any],
    chunk_size: int,
    delay_ms: float = 0,
    on_progress: Optional[ProgressCallback] = None,
    on_complete: Optional[Callable[[], Any]] = None,
    cancel_token: Optional[CancellationToken] = None,
    with_index: bool = False,
) -> List[Any]:
    """Order-preserving map of `transform` over `items`, one chunk at a time.

    With `with_index=True` the transform is called as `transform(item, index)`.
    `on_progress(processed, total)` fires after every chunk. The coroutine
    sleeps `delay_ms` between chunks (not after the last one) and raises
    `ChunkingCancelled` if `cancel_token` is cancelled before a chunk starts.
    """
    if chunk_size < 1:
        raise ValueError("chunk_size must be at least 1")

    total = len(items)
    results: List[Any] = []
    delay = max(0.0, delay_ms) / 1000.0

    for start in range(0, total, chunk_size):
        if cancel_token is not None and cancel_token.cancelled:
            logger.warning(f"Chunked processing cancelled at {start}/{total}")
            raise ChunkingCancelled(start, total)

        chunk = items[start:start + chunk_size]
        if with_index:
            results.extend(transform(item, start + offset) for offset, item in enumerate(chunk))
        else:
            results.extend(transform(item) for item in chunk)

        processed = min(start + chunk_size, total)
        if on_progress is not None:
            on_progress(processed, total)

        if processed < total:
            await asyncio.sleep(delay)

    if on_complete is not None:
        on_complete()

    return results
