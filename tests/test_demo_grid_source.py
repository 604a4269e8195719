import pytest

from turbogrid.errors import BoundaryError, GridRangeError, SourceUnavailableError
from turbogrid.infrastructure.demo_grid_source import DemoGridSource, column_name


@pytest.mark.parametrize(
    "index, expected",
    [(0, "A"), (25, "Z"), (26, "AA"), (27, "AB"), (701, "ZZ"), (702, "AAA")],
)
def test_column_name(index, expected):
    assert column_name(index) == expected


def test_column_name_rejects_negative():
    with pytest.raises(ValueError):
        column_name(-1)


def test_headers_cover_requested_range():
    source = DemoGridSource(100, 100)
    assert source.fetch_headers(24, 4) == ["Y", "Z", "AA", "AB"]


def test_headers_past_end_raise_range_error():
    source = DemoGridSource(100, 10)
    with pytest.raises(GridRangeError):
        source.fetch_headers(8, 6)


def test_rows_carry_column_and_row_in_each_cell():
    source = DemoGridSource(1_000_000_000, 1_000_000_000)

    rows = source.fetch_rows(999_999_998, 60, 1, 2)

    assert [row.index for row in rows] == [999_999_998, 999_999_999]
    assert rows[0].contents == ("B,999999998", "C,999999998")


def test_rows_have_exactly_requested_columns():
    source = DemoGridSource(10, 10)
    rows = source.fetch_rows(0, 3, 4, 6)
    assert all(len(row.cells) == 6 for row in rows)


def test_fault_injection_raises_boundary_error():
    source = DemoGridSource(100, 100, fail_when=lambda kind, start: kind == "rows" and start == 60)

    assert len(source.fetch_rows(0, 60, 0, 3)) == 60
    with pytest.raises(SourceUnavailableError) as excinfo:
        source.fetch_rows(60, 60, 0, 3)
    assert isinstance(excinfo.value, BoundaryError)
    assert source.call_count == 2
