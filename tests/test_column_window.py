import pytest

from turbogrid.gui.viewmodels.column_window import ColumnWindow

BILLION = 1_000_000_000


def test_initial_window_starts_at_zero():
    window = ColumnWindow(total_cols=BILLION, width=6)
    assert window.start == 0
    assert window.width == 6
    assert window.generation == 0
    assert window.max_start == BILLION - 6


def test_shift_left_at_left_edge_is_noop():
    window = ColumnWindow(total_cols=BILLION, width=6)

    assert window.shift(-1) is False

    assert window.start == 0
    assert window.generation == 0


def test_shift_zero_never_bumps_generation():
    window = ColumnWindow(total_cols=BILLION, width=6)
    window.jump_to(100)
    generation = window.generation

    assert window.shift(0) is False
    assert window.generation == generation


def test_jump_past_end_saturates():
    window = ColumnWindow(total_cols=BILLION, width=6)

    assert window.jump_to(BILLION) is True

    assert window.start == BILLION - 6
    assert window.stop == BILLION
    assert window.generation == 1


def test_jump_to_negative_saturates_at_zero():
    window = ColumnWindow(total_cols=100, width=6, start=50)

    assert window.jump_to(-40) is True
    assert window.start == 0


def test_repeated_scroll_at_right_edge_does_not_bump_generation():
    window = ColumnWindow(total_cols=10, width=6)
    window.jump_to(10)
    assert window.start == 4
    generation = window.generation

    assert window.shift(1) is False
    assert window.shift(1000) is False
    assert window.generation == generation


@pytest.mark.parametrize("delta", [-BILLION * 3, -7, -1, 0, 1, 7, BILLION - 7, BILLION * 3])
def test_shift_always_stays_in_bounds(delta):
    window = ColumnWindow(total_cols=BILLION, width=6, start=3)

    window.shift(delta)

    assert 0 <= window.start <= BILLION - 6


def test_each_move_increments_generation_once():
    window = ColumnWindow(total_cols=100, width=6)
    window.shift(1)
    window.shift(1)
    window.jump_to(50)
    assert window.generation == 3


def test_grid_narrower_than_display_collapses_range():
    window = ColumnWindow(total_cols=3, width=6)

    assert window.width == 3
    assert window.max_start == 0
    assert window.jump_to(2) is False
    assert window.start + window.width <= 3


def test_width_must_be_positive():
    with pytest.raises(ValueError):
        ColumnWindow(total_cols=10, width=0)


def test_clamp_is_a_pure_query():
    window = ColumnWindow(total_cols=20, width=6)
    assert window.clamp(-5) == 0
    assert window.clamp(7) == 7
    assert window.clamp(99) == 14
    assert window.generation == 0
