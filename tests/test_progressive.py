import pytest

from wkformat.progressive import (
    AC_HIGH_INDICES,
    AC_LOW_INDICES,
    RESYNC_MARKER,
    ScanOrder,
    ScanPass,
    TileGrid,
    find_resync_marker,
    insert_resync_marker,
    merge_progressive_coefficients,
    reorder_coefficients,
)


def test_tile_grid_covers_image_exactly():
    grid = TileGrid(100, 50, 32)
    assert grid.tile_count() == grid.cols * grid.rows
    assert sum(t.width * t.height for t in grid.tiles) == 100 * 50
    for tile in grid.tiles:
        assert 0 < tile.width <= 32
        assert 0 < tile.height <= 32
        assert tile.x + tile.width <= 100
        assert tile.y + tile.height <= 50


def test_even_grid_count():
    assert TileGrid(64, 64, 32).tile_count() == 4


def test_get_tile_contains_pixel():
    grid = TileGrid(70, 45, 16)
    for y in range(0, 45, 7):
        for x in range(0, 70, 9):
            tile = grid.get_tile(x, y)
            assert tile.x <= x < tile.x + tile.width
            assert tile.y <= y < tile.y + tile.height


def test_get_tile_outside_grid():
    grid = TileGrid(70, 45, 16)
    assert grid.get_tile(grid.cols * 16, 0) is None
    assert grid.get_tile(0, grid.rows * 16) is None


def test_tile_offsets_default_zero():
    grid = TileGrid(10, 10, 4)
    assert all(t.data_offset == 0 and t.data_size == 0 for t in grid.tiles)


def test_zero_tile_size_raises():
    with pytest.raises(ValueError):
        TileGrid(10, 10, 0)


def test_sequential_order():
    assert list(ScanOrder.sequential(5)) == list(range(5))


def test_dc_first_order():
    assert list(ScanOrder.dc_first_8x8()) == list(range(64))


def test_progressive_order_is_permutation():
    order = list(ScanOrder.progressive_8x8())
    assert sorted(order) == list(range(64))
    assert order[0] == 0
    assert order[1:16] == [1, 2, 3, 8, 9, 10, 16, 17, 18, 24, 25, 32, 33, 40, 48]


def test_pass_split_and_merge_round_trip():
    coeffs = [i * 3 - 50 for i in range(64)]
    dc = reorder_coefficients(coeffs, ScanPass.DC)
    low = reorder_coefficients(coeffs, ScanPass.AC_LOW)
    high = reorder_coefficients(coeffs, ScanPass.AC_HIGH)
    assert dc == [coeffs[0]]
    assert len(low) == len(AC_LOW_INDICES)
    assert len(dc) + len(low) + len(high) == 64
    assert merge_progressive_coefficients(dc, low, high) == coeffs


def test_all_pass_copies_block():
    coeffs = list(range(64))
    assert reorder_coefficients(coeffs, ScanPass.ALL) == coeffs


def test_reorder_wrong_length_raises():
    with pytest.raises(ValueError):
        reorder_coefficients([0] * 10, ScanPass.ALL)


def test_merge_empty_passes_is_zero_block():
    assert merge_progressive_coefficients([], [], []) == [0] * 64


def test_merge_partial_passes_fill_prefix():
    block = merge_progressive_coefficients([7], [5], [])
    assert block[0] == 7
    assert block[AC_LOW_INDICES[0]] == 5
    assert all(block[i] == 0 for i in AC_HIGH_INDICES)


def test_insert_resync_marker_preserves_data():
    data = bytes(range(40))
    marked = insert_resync_marker(data, 8)
    assert marked.count(RESYNC_MARKER) > 0
    assert marked.replace(RESYNC_MARKER, b"") == data
    assert find_resync_marker(marked, 0) == 8


def test_insert_resync_marker_short_data_unchanged():
    data = b"abc"
    assert insert_resync_marker(data, 8) == data


def test_find_resync_marker_absent():
    assert find_resync_marker(b"\x00" * 16, 0) is None


def test_find_resync_marker_from_start():
    data = b"ab" + RESYNC_MARKER + b"cd" + RESYNC_MARKER
    first = find_resync_marker(data, 0)
    second = find_resync_marker(data, first + 1)
    assert data[first : first + 4] == RESYNC_MARKER
    assert data[second : second + 4] == RESYNC_MARKER
    assert second > first
    assert find_resync_marker(data, second + 1) is None


def test_find_resync_marker_start_past_end():
    assert find_resync_marker(RESYNC_MARKER, len(RESYNC_MARKER) + 3) is None