"""CSV viewer pipeline: validate, parse, reprocess in chunks, measure."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, List, Optional

from .chunking import CancellationToken, calculate_optimal_chunk_size, process_in_chunks, should_chunk
from .config import settings
from .csv_table import HeaderDetector, ParsedTable, assume_header_row, parse_csv
from .errors import ChunkingCancelled
from .performance import PerformanceMetrics, PerformanceMonitor, format_performance_warning
from .text_utils import byte_length
from .validation import validate_csv, validate_file_size

logger = logging.getLogger("data-inspector")

TOOL_ID = 'csv-viewer'
TOOL_PATH = '/csv-viewer'


@dataclass
class ProcessingState:
    is_processing: bool = False
    progress: int = 0
    total: int = 0

    @classmethod
    def idle(cls) -> "ProcessingState":
        return cls()


@dataclass
class CSVLoadResult:
    table: ParsedTable = field(default_factory=ParsedTable.empty)
    errors: List[str] = field(default_factory=list)
    warning: Optional[str] = None
    metrics: Optional[PerformanceMetrics] = None

    @property
    def ok(self) -> bool:
        return not self.errors


def default_viewer_state() -> dict:
    return {
        'raw_input': '',
        'row_limit': settings.DEFAULT_ROW_LIMIT,
        'current_page': 1,
        'has_headers': None,
    }


def progress_percent(processed: int, total: int) -> int:
    if total <= 0:
        return 100
    return round(processed / total * 100)


def _identity(row):
    return row


async def load_csv(
    content: str,
    has_headers: Optional[bool] = None,
    *,
    header_detector: HeaderDetector = assume_header_row,
    monitor: Optional[PerformanceMonitor] = None,
    on_progress: Optional[Callable[[ProcessingState], Any]] = None,
    cancel_token: Optional[CancellationToken] = None,
    row_transform: Callable[[List[str]], List[str]] = _identity,
    max_size_kb: Optional[float] = None,
    chunk_threshold: Optional[int] = None,
    delay_ms: Optional[float] = None,
    size_category: Optional[str] = None,
) -> CSVLoadResult:
    """Run raw CSV text through the whole viewer pipeline.

    Validation failures come back as `errors` with an empty table. Row sets
    above the chunk threshold are reprocessed cooperatively and reported
    through `on_progress`, which always ends with an idle state. Inputs over
    `LARGE_INPUT_BYTES` report a processing state before validation starts.
    """
    monitor = monitor or PerformanceMonitor()
    end_measurement = monitor.start_measurement('CSV Parsing')

    if content is None or not content.strip():
        return CSVLoadResult()

    def notify(state: ProcessingState) -> None:
        if on_progress is not None:
            on_progress(state)

    data_size = byte_length(content)
    processing = data_size > settings.LARGE_INPUT_BYTES
    if processing:
        notify(ProcessingState(True, 0, 100))

    try:
        size_check = validate_file_size(content, max_size_kb)
        if not size_check.is_valid:
            return CSVLoadResult(errors=size_check.errors)

        validation = validate_csv(content)
        if not validation.is_valid:
            return CSVLoadResult(errors=validation.errors)

        table = parse_csv(content, has_headers, header_detector=header_detector)

        if should_chunk(table.total_rows, chunk_threshold):
            processing = True
            category = size_category or settings.CHUNK_SIZE_CATEGORY
            chunk_size = calculate_optimal_chunk_size(table.total_rows, category)

            def report(processed: int, total: int) -> None:
                notify(ProcessingState(True, progress_percent(processed, total), total))

            try:
                table.rows = await process_in_chunks(
                    table.rows,
                    row_transform,
                    chunk_size,
                    delay_ms=settings.CHUNK_DELAY_MS if delay_ms is None else delay_ms,
                    on_progress=report,
                    cancel_token=cancel_token,
                )
            except ChunkingCancelled as exc:
                return CSVLoadResult(errors=[str(exc)])
        else:
            table.rows = [row_transform(row) for row in table.rows]
    finally:
        if processing:
            notify(ProcessingState.idle())

    metrics = end_measurement(table.total_rows, data_size)
    warning = None
    if monitor.is_performance_degraded(metrics):
        warning = format_performance_warning(metrics, monitor.get_performance_recommendations(metrics))

    return CSVLoadResult(table=table, warning=warning, metrics=metrics)
