"""
Tests for turning raw spreadsheet values into an ElevationGrid.
"""

import math

import numpy as np
import pytest

from ocean_flow import normalize
from ocean_flow.errors import EmptyGrid, GridTooLarge, InvalidCellValue, MalformedGrid
from ocean_flow.normalize import coerce_elevation, normalize_grid


class TestCoerceElevation:
    @pytest.mark.parametrize("raw, expected", [
        (3, 3.0),
        (0, 0.0),
        (2.5, 2.5),
        ("7", 7.0),
        ("  4.25 ", 4.25),
        ("1e3", 1000.0),
        (np.float32(1.5), 1.5),
        (np.int64(8), 8.0),
    ])
    def test_accepts_numbers_and_numeric_strings(self, raw, expected):
        assert coerce_elevation(raw, 0, 0) == expected

    @pytest.mark.parametrize("raw", [
        "N/A", "", "   ", None, True, False, -1, "-0.5", "nan", "inf", float("nan"), [1], {"v": 1},
        10 ** 400, -(10 ** 400),
    ])
    def test_rejects_everything_else(self, raw):
        with pytest.raises(InvalidCellValue) as exc:
            coerce_elevation(raw, 2, 5)
        assert (exc.value.row, exc.value.col) == (2, 5)


class TestNormalizeGrid:
    def test_numeric_grid(self):
        grid = normalize_grid([[1, 2, 3], [4, 5, 6]])
        assert (grid.rows, grid.cols) == (2, 3)
        assert grid.total_cells == 6
        assert grid.heights.dtype == np.float64
        np.testing.assert_array_equal(grid.heights, [[1, 2, 3], [4, 5, 6]])

    def test_spreadsheet_strings(self):
        grid = normalize_grid([["1", " 2 "], ["3.5", 4]])
        np.testing.assert_array_equal(grid.heights, [[1.0, 2.0], [3.5, 4.0]])

    def test_heights_are_read_only(self):
        grid = normalize_grid([[1, 2], [3, 4]])
        with pytest.raises(ValueError):
            grid.heights[0, 0] = 9

    def test_trailing_blank_cells_and_rows_are_ignored(self):
        raw = [
            ["", ""],
            ["1", "2", ""],
            ["3", "4", None],
            [],
            ["", "", ""],
        ]
        grid = normalize_grid(raw)
        np.testing.assert_array_equal(grid.heights, [[1, 2], [3, 4]])

    def test_ragged_rows_are_rejected(self):
        with pytest.raises(MalformedGrid) as exc:
            normalize_grid([[1, 2], [3]])
        assert (exc.value.row, exc.value.expected, exc.value.actual) == (1, 2, 1)

    def test_longer_row_is_rejected_too(self):
        with pytest.raises(MalformedGrid) as exc:
            normalize_grid([[1], [2, 3], [4]])
        assert exc.value.row == 1

    def test_interior_blank_row_is_ragged(self):
        with pytest.raises(MalformedGrid) as exc:
            normalize_grid([[1, 2], [], [3, 4]])
        assert (exc.value.row, exc.value.actual) == (1, 0)

    def test_row_indices_refer_to_raw_input(self):
        with pytest.raises(MalformedGrid) as exc:
            normalize_grid([[], [1, 2], [3]])
        assert exc.value.row == 2

    def test_not_a_row(self):
        with pytest.raises(MalformedGrid) as exc:
            normalize_grid([[1, 2], 3])
        assert exc.value.actual is None

    def test_text_cell_is_rejected_with_location(self):
        with pytest.raises(InvalidCellValue) as exc:
            normalize_grid([[1, 2], [3, "N/A"]])
        assert (exc.value.row, exc.value.col, exc.value.value) == (1, 1, "N/A")

    def test_interior_blank_cell_is_rejected(self):
        with pytest.raises(InvalidCellValue) as exc:
            normalize_grid([[1, "", 3]])
        assert (exc.value.row, exc.value.col) == (0, 1)

    @pytest.mark.parametrize("raw, where", [
        ([[1, ""], [3, 4]], (0, 1)),
        ([[1, 2], [3, ""]], (1, 1)),
        ([[1, None], [3, 4]], (0, 1)),
    ])
    def test_blank_cell_inside_the_width_is_rejected(self, raw, where):
        with pytest.raises(InvalidCellValue) as exc:
            normalize_grid(raw)
        assert (exc.value.row, exc.value.col) == where

    def test_column_blank_in_every_row_is_padding(self):
        grid = normalize_grid([[1, 2, ""], [3, 4, ""], [5, 6]])
        np.testing.assert_array_equal(grid.heights, [[1, 2], [3, 4], [5, 6]])

    def test_integer_too_big_for_float(self):
        with pytest.raises(InvalidCellValue) as exc:
            normalize_grid([[1, 10 ** 400], [3, 4]])
        assert (exc.value.row, exc.value.col) == (0, 1)

    def test_negative_cell_is_rejected(self):
        with pytest.raises(InvalidCellValue):
            normalize_grid([[1, 2], [-3, 4]])

    @pytest.mark.parametrize("raw", [[], [[]], [["", ""]], [[], []], None, "1,2,3", {"grid": []}])
    def test_empty_input(self, raw):
        with pytest.raises(EmptyGrid):
            normalize_grid(raw)

    def test_numpy_input(self):
        grid = normalize_grid(np.arange(6, dtype=np.int32).reshape(2, 3))
        assert (grid.rows, grid.cols) == (2, 3)
        assert grid.height((1, 2)) == 5.0

    def test_size_limit(self, monkeypatch):
        monkeypatch.setattr(normalize, "MAX_GRID_DIM", 2)
        with pytest.raises(GridTooLarge) as exc:
            normalize_grid([[1, 2, 3]])
        assert exc.value.details == {"rows": 1, "cols": 3, "limit": 2}

    def test_large_grid_only_warns(self, monkeypatch, caplog):
        monkeypatch.setattr(normalize, "LARGE_GRID_CELLS", 3)
        grid = normalize_grid([[1, 2], [3, 4]])
        assert grid.total_cells == 4
        assert "Large grid" in caplog.text

    def test_zero_is_a_valid_elevation(self):
        grid = normalize_grid([[0]])
        assert grid.height((0, 0)) == 0.0
        assert not math.isnan(grid.height((0, 0)))
