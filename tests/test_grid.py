"""Tests for the flat-backed Grid."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

import torch
import pytest
from seamcarve.grid import Grid
from seamcarve.errors import DimensionMismatch, SeamLengthMismatch, SeamCarveError


class TestConstruction:
    def test_compatible_width(self):
        grid = Grid(3, [1, 2, 3, 4, 5, 6, 7, 8, 9])
        assert grid.width == 3
        assert grid.height == 3
        assert grid.size == 9

    def test_incompatible_width_fails(self):
        with pytest.raises(DimensionMismatch):
            Grid(4, [1, 2, 3, 4, 5, 6, 7, 8, 9])

    @pytest.mark.parametrize("width", [1, 2, 3, 4, 5, 6, 7])
    def test_valid_iff_length_divisible(self, width):
        data = list(range(12))
        if 12 % width == 0:
            grid = Grid(width, data)
            assert grid.height == 12 // width
            assert grid.size == 12
        else:
            with pytest.raises(DimensionMismatch):
                Grid(width, data)

    def test_zero_width_with_data_fails(self):
        with pytest.raises(DimensionMismatch):
            Grid(0, [1, 2, 3])

    def test_zero_width_empty_is_valid(self):
        grid = Grid(0, [])
        assert grid.height == 0
        assert grid.size == 0

    def test_errors_are_value_errors(self):
        """Structural errors share a base that callers can catch as ValueError."""
        with pytest.raises(ValueError):
            Grid(2, [1, 2, 3])
        assert issubclass(SeamLengthMismatch, SeamCarveError)

    def test_shape_is_height_width(self):
        grid = Grid(2, torch.zeros(6))
        assert grid.shape == (3, 2)


class TestIndexing:
    def test_reads_row_major(self):
        grid = Grid(3, [1, 2, 3, 4, 5, 6, 7, 8, 9])
        expected = {
            (0, 0): 1, (1, 0): 2, (2, 0): 3,
            (0, 1): 4, (1, 1): 5, (2, 1): 6,
            (0, 2): 7, (1, 2): 8, (2, 2): 9,
        }
        for (x, y), value in expected.items():
            assert grid[x, y].item() == value

    def test_write_then_read(self):
        grid = Grid(3, [1, 2, 3, 4, 5, 6, 7, 8, 9])
        assert grid[0, 0].item() == 1
        grid[0, 0] = 2
        assert grid[0, 0].item() == 2
        grid[2, 1] = 42
        assert grid.data.tolist() == [2, 2, 3, 4, 5, 42, 7, 8, 9]

    def test_out_of_range_raises(self):
        grid = Grid(3, [1, 2, 3, 4, 5, 6])
        with pytest.raises(IndexError):
            grid[3, 0]
        with pytest.raises(IndexError):
            grid[0, 2]
        with pytest.raises(IndexError):
            grid[-1, 0]

    def test_row_is_writable_view(self):
        grid = Grid(2, [1, 2, 3, 4])
        grid.row(1)[:] = torch.tensor([7, 8])
        assert grid.data.tolist() == [1, 2, 7, 8]
        assert [row.tolist() for row in grid.rows()] == [[1, 2], [7, 8]]


class TestRemoveSeam:
    def test_removes_one_cell_per_row(self):
        grid = Grid(3, [1, 2, 3, 4, 5, 6, 7, 8, 9])
        grid.remove_seam([1, 2, 1])
        assert grid.width == 2
        assert grid.height == 3
        assert grid.data.tolist() == [1, 3, 4, 5, 7, 9]
        assert grid == Grid(2, [1, 3, 4, 5, 7, 9])

    def test_straight_seam_removes_column(self):
        grid = Grid(4, list(range(12)))
        grid.remove_seam([0, 0, 0])
        assert grid.data.tolist() == [1, 2, 3, 5, 6, 7, 9, 10, 11]

    def test_last_column(self):
        grid = Grid(3, list(range(6)))
        grid.remove_seam(torch.tensor([2, 2]))
        assert grid.data.tolist() == [0, 1, 3, 4]

    def test_length_mismatch(self):
        grid = Grid(3, [1, 2, 3, 4, 5, 6, 7, 8, 9])
        with pytest.raises(SeamLengthMismatch):
            grid.remove_seam([1, 1])
        # Grid is untouched after a failed removal
        assert grid.width == 3
        assert grid.data.tolist() == [1, 2, 3, 4, 5, 6, 7, 8, 9]

    def test_out_of_range_seam_raises(self):
        grid = Grid(3, list(range(6)))
        with pytest.raises(IndexError):
            grid.remove_seam([0, 3])

    def test_zero_height_grid_still_narrows(self):
        grid = Grid(3, [])
        grid.remove_seam([])
        assert grid.width == 2
        assert grid.height == 0

    def test_zero_width_grid_has_nothing_to_remove(self):
        grid = Grid(0, [])
        with pytest.raises(IndexError):
            grid.remove_seam([])
        assert grid.width == 0

    def test_repeated_removal_down_to_one_column(self):
        grid = Grid(3, list(range(6)))
        grid.remove_seam([0, 1])
        grid.remove_seam([1, 0])
        assert grid.width == 1
        assert grid.height == 2
        assert grid.data.tolist() == [1, 5]

    def test_pixel_grid_keeps_channels(self):
        """Removal drops whole cells, so multi-channel pixels stay intact."""
        image = torch.arange(2 * 3 * 4).reshape(2, 3, 4)
        grid = Grid.from_image(image)
        grid.remove_seam([1, 2, 3])
        carved = grid.to_image()
        assert carved.shape == (2, 3, 3)
        for c in range(2):
            assert carved[c, 0].tolist() == image[c, 0, [0, 2, 3]].tolist()
            assert carved[c, 2].tolist() == image[c, 2, :3].tolist()


class TestImageConversion:
    def test_round_trip_color(self):
        image = torch.randint(0, 256, (3, 4, 5), dtype=torch.int64).to(torch.uint8)
        grid = Grid.from_image(image)
        assert grid.width == 5
        assert grid.height == 4
        assert grid[2, 1].tolist() == image[:, 1, 2].tolist()
        assert torch.equal(grid.to_image(), image)

    def test_round_trip_grayscale(self):
        image = torch.arange(12).reshape(3, 4)
        grid = Grid.from_image(image)
        assert grid[3, 2].item() == 11
        assert torch.equal(grid.to_image(), image)

    def test_clone_is_independent(self):
        grid = Grid(2, [1, 2, 3, 4])
        copy = grid.clone()
        copy[0, 0] = 9
        assert grid[0, 0].item() == 1
        assert grid != copy

    def test_repr_lists_rows(self):
        text = repr(Grid(2, [1, 2, 3, 4]))
        assert "[1, 2]" in text
        assert "[3, 4]" in text
