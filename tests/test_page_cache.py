import pytest

from turbogrid.domain.models import Cell, RowRecord
from turbogrid.gui.viewmodels.page_cache import PageCache


def _rows(start, stop, prefix="A"):
    return [RowRecord(index=i, cells=(Cell(f"{prefix},{i}"),)) for i in range(start, stop)]


def test_page_arithmetic():
    cache = PageCache(rows_per_page=60)
    assert cache.page_of(0) == 0
    assert cache.page_of(59) == 0
    assert cache.page_of(60) == 1
    assert cache.page_range(2) == (120, 180)


def test_page_of_handles_huge_row_indices():
    cache = PageCache(rows_per_page=60)
    assert cache.page_of(999_999_999) == 16_666_666


def test_install_for_active_generation_makes_rows_resident():
    cache = PageCache(rows_per_page=10)

    assert cache.install(_rows(0, 10), for_generation=0) is True

    assert cache.resident_count == 10
    assert cache.get(3).cells[0].content == "A,3"
    assert cache.get(10) is None


def test_stale_install_is_dropped():
    cache = PageCache(rows_per_page=10)
    cache.invalidate(1)

    assert cache.install(_rows(0, 10), for_generation=0) is False

    assert cache.resident_count == 0
    assert cache.get(0) is None


def test_loading_markers_gate_pages():
    cache = PageCache(rows_per_page=10)
    assert not cache.is_loading(4)

    cache.mark_loading(4)

    assert cache.is_loading(4)
    assert cache.loading_pages == frozenset({4})
    cache.finish_loading(4, for_generation=0)
    assert not cache.is_loading(4)


def test_finish_loading_from_older_generation_keeps_new_marker():
    cache = PageCache(rows_per_page=10)
    cache.mark_loading(0)
    cache.invalidate(1)
    cache.mark_loading(0)

    cache.finish_loading(0, for_generation=0)

    assert cache.is_loading(0)


def test_invalidate_drops_rows_and_markers():
    cache = PageCache(rows_per_page=10)
    cache.install(_rows(0, 10), for_generation=0)
    cache.mark_loading(1)

    cache.invalidate(5)

    assert cache.resident_count == 0
    assert cache.loading_pages == frozenset()
    assert cache.generation == 5


def test_rows_view_is_read_only():
    cache = PageCache(rows_per_page=10)
    cache.install(_rows(0, 2), for_generation=0)
    with pytest.raises(TypeError):
        cache.rows[5] = _rows(5, 6)[0]


def test_rows_per_page_must_be_positive():
    with pytest.raises(ValueError):
        PageCache(rows_per_page=0)
