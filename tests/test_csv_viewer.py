import pytest

from data_inspector.chunking import CancellationToken
from data_inspector.config import settings
from data_inspector.csv_table import detect_csv_headers
from data_inspector.csv_viewer import ProcessingState, load_csv, progress_percent
from data_inspector.performance import PerformanceMonitor, PerformanceThresholds


def large_csv(rows: int) -> str:
    return "id,value\n" + "\n".join(f"{i},v{i}" for i in range(rows))


@pytest.mark.asyncio
async def test_small_csv_loads_synchronously():
    states = []
    result = await load_csv("Name,Age\nAda,36", on_progress=states.append)
    assert result.ok
    assert result.table.headers == ["Name", "Age"]
    assert result.table.total_rows == 1
    assert result.metrics.row_count == 1
    assert states == []


@pytest.mark.asyncio
async def test_blank_input_gives_empty_table():
    result = await load_csv("   ")
    assert result.ok
    assert result.table.total_rows == 0
    assert result.metrics is None


@pytest.mark.asyncio
async def test_validation_fails_fast():
    result = await load_csv("a,b\n1,2,3")
    assert not result.ok
    assert result.errors == ["Row 2 has 3 columns, but expected 2"]
    assert result.table.total_rows == 0


@pytest.mark.asyncio
async def test_size_limit():
    result = await load_csv("a,b\n1,2", max_size_kb=0.001)
    assert not result.ok
    assert "exceeds maximum allowed size" in result.errors[0]


@pytest.mark.asyncio
async def test_large_csv_is_chunked_with_progress():
    states = []
    monitor = PerformanceMonitor(PerformanceThresholds())
    result = await load_csv(large_csv(1500), monitor=monitor, on_progress=states.append, delay_ms=0)

    assert result.ok
    assert result.table.total_rows == 1500
    assert result.table.rows[0] == ["0", "v0"]
    assert result.table.rows[-1] == ["1499", "v1499"]

    processing = [s for s in states if s.is_processing]
    assert processing
    assert processing[-1].progress == 100
    assert all(s.total == 1500 for s in processing)
    assert states[-1] == ProcessingState.idle()

    assert result.warning.startswith("Large dataset detected (1500 rows")
    assert monitor.history[-1].row_count == 1500


@pytest.mark.asyncio
async def test_cancelled_run_resets_to_idle():
    token = CancellationToken()
    token.cancel()
    states = []
    result = await load_csv(large_csv(1200), on_progress=states.append, cancel_token=token, delay_ms=0)
    assert not result.ok
    assert "cancelled" in result.errors[0]
    assert states[-1] == ProcessingState.idle()


@pytest.mark.asyncio
@pytest.mark.parametrize("rows", [10, 1500])
async def test_row_transform_applies_on_both_paths(rows):
    result = await load_csv(large_csv(rows), row_transform=lambda row: [c.upper() for c in row], delay_ms=0)
    assert result.table.rows[0] == ["0", "V0"]


@pytest.mark.asyncio
async def test_header_detection_hook():
    result = await load_csv("a,b\nc,d", header_detector=detect_csv_headers)
    assert result.table.has_headers is False
    assert result.table.total_rows == 2


def wide_csv(rows: int, width: int = 250) -> str:
    return "id,text\n" + "\n".join(f"{i},{'x' * width}" for i in range(rows))


@pytest.mark.asyncio
async def test_large_input_reports_processing_before_parse():
    content = wide_csv(500)
    assert len(content) > settings.LARGE_INPUT_BYTES
    states = []
    result = await load_csv(content, on_progress=states.append)
    assert result.ok
    assert result.table.total_rows == 500
    assert states == [ProcessingState(True, 0, 100), ProcessingState.idle()]


@pytest.mark.asyncio
async def test_large_invalid_input_still_ends_idle():
    content = wide_csv(500) + "\n1,2,3"
    states = []
    result = await load_csv(content, on_progress=states.append)
    assert not result.ok
    assert states[0] == ProcessingState(True, 0, 100)
    assert states[-1] == ProcessingState.idle()


def test_progress_percent():
    assert progress_percent(0, 10) == 0
    assert progress_percent(5, 10) == 50
    assert progress_percent(10, 10) == 100
    assert progress_percent(0, 0) == 100
