import asyncio

import pytest

from data_inspector.chunking import (
    CHUNK_SIZE_POLICY,
    CancellationToken,
    calculate_optimal_chunk_size,
    process_in_chunks,
    should_chunk,
)
from data_inspector.errors import ChunkingCancelled


@pytest.mark.parametrize("category", sorted(CHUNK_SIZE_POLICY))
def test_chunk_size_is_positive_and_monotonic(category):
    previous = 0
    for total in range(0, 300000, 613):
        size = calculate_optimal_chunk_size(total, category)
        assert isinstance(size, int)
        assert size >= 1
        assert size >= previous
        previous = size


def test_chunk_size_policy_values():
    assert calculate_optimal_chunk_size(10, 'medium') == 10
    assert calculate_optimal_chunk_size(500, 'medium') == 500
    assert calculate_optimal_chunk_size(5000, 'medium') == 500
    assert calculate_optimal_chunk_size(100000, 'medium') == 2000
    assert calculate_optimal_chunk_size(100000, 'high') == 500
    assert calculate_optimal_chunk_size(0, 'low') == 1


def test_chunk_size_unknown_category():
    with pytest.raises(ValueError):
        calculate_optimal_chunk_size(10, 'huge')


def test_should_chunk_threshold():
    assert not should_chunk(1000, threshold=1000)
    assert should_chunk(1001, threshold=1000)


@pytest.mark.asyncio
async def test_process_in_chunks_preserves_order_and_reports_progress():
    progress = []
    result = await process_in_chunks(
        list(range(10)),
        lambda x: x * 2,
        chunk_size=3,
        on_progress=lambda done, total: progress.append((done, total)),
    )
    assert result == [x * 2 for x in range(10)]
    assert progress == [(3, 10), (6, 10), (9, 10), (10, 10)]


@pytest.mark.asyncio
@pytest.mark.parametrize("chunk_size", [1, 2, 7, 10, 11, 1000])
async def test_process_in_chunks_matches_plain_map(chunk_size):
    items = [f"row{i}" for i in range(10)]
    result = await process_in_chunks(items, str.upper, chunk_size=chunk_size)
    assert result == [item.upper() for item in items]


@pytest.mark.asyncio
async def test_single_chunk_when_size_exceeds_length():
    progress = []
    await process_in_chunks([1, 2, 3, 4, 5], abs, 50, on_progress=lambda d, t: progress.append((d, t)))
    assert progress == [(5, 5)]


@pytest.mark.asyncio
async def test_transform_with_index():
    result = await process_in_chunks(['a', 'b', 'c'], lambda item, i: f"{i}:{item}", 2, with_index=True)
    assert result == ['0:a', '1:b', '2:c']


@pytest.mark.asyncio
async def test_empty_input_still_completes():
    completed = []
    result = await process_in_chunks([], abs, 5, on_complete=lambda: completed.append(True))
    assert result == []
    assert completed == [True]


@pytest.mark.asyncio
async def test_invalid_chunk_size():
    with pytest.raises(ValueError):
        await process_in_chunks([1], abs, 0)


@pytest.mark.asyncio
async def test_yields_to_other_tasks_between_chunks():
    events = []

    def record(item):
        events.append(item)
        return item

    async def other():
        events.append('other')

    await asyncio.gather(process_in_chunks([0, 1, 2, 3], record, 2), other())
    assert events == [0, 1, 'other', 2, 3]


@pytest.mark.asyncio
async def test_cancellation_between_chunks():
    token = CancellationToken()
    seen = []

    def on_progress(done, total):
        seen.append(done)
        token.cancel()

    with pytest.raises(ChunkingCancelled) as exc_info:
        await process_in_chunks(list(range(9)), abs, 3, on_progress=on_progress, cancel_token=token)

    assert seen == [3]
    assert exc_info.value.processed == 3
    assert exc_info.value.total == 9
    assert token.cancelled
