from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, List, Sequence

from .config import settings

MAX_DIRECT_SLICE = 1000


@dataclass(frozen=True)
class PageWindow:
    total_pages: int
    current_page: int
    start_index: int
    end_index: int  # exclusive

    @property
    def size(self) -> int:
        return self.end_index - self.start_index


def _clamp_bounds(length: int, start: int, end: int):
    start = max(0, min(start, length))
    end = max(start, min(end, length))
    return start, end


def efficient_slice(items: Sequence[Any], start: int, end: int, max_slice_size: int = MAX_DIRECT_SLICE) -> List[Any]:
    """Return `items[start:end]` as a list, bounds clamped to the sequence.

    Small ranges use a native slice. Larger ranges are gathered by index so
    sequences backed by lazy row access never materialise more than the page.
    """
    start, end = _clamp_bounds(len(items), start, end)
    if end - start <= max_slice_size:
        return list(items[start:end])
    return [items[i] for i in range(start, end)]


def paginate(total_rows: int, current_page: int, row_limit: int) -> PageWindow:
    """Compute the visible window; the page is clamped to 1..total_pages."""
    if row_limit < 1:
        raise ValueError("row_limit must be at least 1")

    total_pages = math.ceil(total_rows / row_limit) if total_rows > 0 else 0
    page = min(max(1, current_page), max(total_pages, 1))
    start = (page - 1) * row_limit
    end = min(start + row_limit, total_rows)
    return PageWindow(total_pages=total_pages, current_page=page, start_index=start, end_index=max(start, end))


def visible_rows(rows: Sequence[Any], window: PageWindow, threshold: int = None) -> List[Any]:
    if threshold is None:
        threshold = settings.EFFICIENT_SLICE_THRESHOLD
    if len(rows) > threshold:
        return efficient_slice(rows, window.start_index, window.end_index)
    return list(rows[window.start_index:window.end_index])
