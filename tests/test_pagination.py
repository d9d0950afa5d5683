import pytest

from data_inspector.pagination import PageWindow, efficient_slice, paginate, visible_rows


def test_efficient_slice_matches_plain_slice():
    items = list(range(25))
    for a in range(len(items) + 1):
        for b in range(a, len(items) + 1):
            assert efficient_slice(items, a, b, max_slice_size=5) == items[a:b]


def test_efficient_slice_clamps_bounds():
    assert efficient_slice([1, 2, 3], 1, 99) == [2, 3]
    assert efficient_slice([1, 2, 3], 5, 9) == []
    assert efficient_slice([1, 2, 3], 2, 1) == []


def test_efficient_slice_large_range_on_lazy_sequence():
    assert efficient_slice(range(20000), 100, 2100) == list(range(100, 2100))


def test_paginate_empty():
    assert paginate(0, 1, 50) == PageWindow(total_pages=0, current_page=1, start_index=0, end_index=0)


def test_paginate_last_partial_page():
    window = paginate(120, 3, 50)
    assert (window.total_pages, window.start_index, window.end_index) == (3, 100, 120)
    assert window.size == 20


def test_paginate_clamps_page():
    assert paginate(120, 9, 50).current_page == 3
    assert paginate(120, 0, 50).current_page == 1


def test_paginate_rejects_zero_limit():
    with pytest.raises(ValueError):
        paginate(10, 1, 0)


def test_visible_rows_both_paths_agree():
    rows = [[str(i)] for i in range(30)]
    window = paginate(len(rows), 2, 10)
    assert visible_rows(rows, window, threshold=5) == rows[10:20]
    assert visible_rows(rows, window, threshold=100) == rows[10:20]
