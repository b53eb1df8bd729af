"""
Flat-backed 2D grid.

A grid is a single tensor whose first axis runs over cells in row-major
order, plus a width. Height is derived from the data length, so it can
never disagree with the stored width:

    index(x, y) = x + y * width      (x = column, y = row)

Trailing axes are kept per cell, so a grid of shape (W*H, 3) stores one
RGB pixel per cell while a grid of shape (W*H,) stores a scalar (e.g. an
energy value).
"""

import torch
from typing import Iterator, Sequence, Tuple, Union

from .errors import DimensionMismatch, SeamLengthMismatch


class Grid:
    """
    Width-tagged 2D table over a flat tensor.

    Only vertical seams can be removed. Horizontal removal is not
    supported; transpose the data yourself if you need it.
    """

    def __init__(self, width: int, data):
        """
        Args:
            width: Number of columns
            data: Backing sequence (anything torch.as_tensor accepts),
                  first axis of length width * height

        Raises:
            DimensionMismatch: if len(data) is not a multiple of width
        """
        data = torch.as_tensor(data)
        if data.dim() == 0:
            raise DimensionMismatch("grid data must be a sequence, got a scalar")

        length = data.shape[0]
        if width <= 0:
            if width < 0 or length != 0:
                raise DimensionMismatch(
                    f"width {width} is not compatible with data of length {length}")
        elif length % width != 0:
            raise DimensionMismatch(
                f"length of data ({length}) is not a multiple of width ({width})")

        self._width = int(width)
        self.data = data

    @classmethod
    def from_image(cls, image: torch.Tensor) -> 'Grid':
        """
        Build a grid from an image tensor.

        Args:
            image: (C, H, W) or (H, W)

        Returns:
            Grid of width W with one (C,) pixel (or one scalar) per cell
        """
        if image.dim() == 2:
            H, W = image.shape
            return cls(W, image.reshape(H * W).clone())
        C, H, W = image.shape
        return cls(W, image.permute(1, 2, 0).reshape(H * W, C).clone())

    def to_image(self) -> torch.Tensor:
        """Inverse of from_image: (C, H, W) for pixel grids, (H, W) otherwise."""
        H, W = self.height, self.width
        if self.data.dim() == 1:
            return self.data.reshape(H, W).clone()
        C = self.data.shape[1]
        return self.data.reshape(H, W, C).permute(2, 0, 1).contiguous()

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        if self._width == 0:
            return 0
        return self.size // self._width

    @property
    def size(self) -> int:
        return self.data.shape[0]

    @property
    def shape(self) -> Tuple[int, int]:
        """(height, width), matching the (H, W) order used for images."""
        return self.height, self.width

    def clone(self) -> 'Grid':
        return Grid(self._width, self.data.clone())

    def _flat_index(self, x: int, y: int) -> int:
        if not (0 <= x < self._width and 0 <= y < self.height):
            raise IndexError(
                f"({x}, {y}) is outside a {self._width}x{self.height} grid")
        return x + y * self._width

    def __getitem__(self, index: Tuple[int, int]) -> torch.Tensor:
        x, y = index  # col, row
        return self.data[self._flat_index(x, y)]

    def __setitem__(self, index: Tuple[int, int], value):
        x, y = index
        self.data[self._flat_index(x, y)] = torch.as_tensor(value, dtype=self.data.dtype)

    def row(self, y: int) -> torch.Tensor:
        """Writable view of row y."""
        start = self._flat_index(0, y)
        return self.data[start:start + self._width]

    def rows(self) -> Iterator[torch.Tensor]:
        for y in range(self.height):
            yield self.row(y)

    def remove_seam(self, seam: Union[Sequence[int], torch.Tensor]):
        """
        Remove one cell per row along a vertical seam, in place.

        Row r loses the cell at column seam[r]; the rest of the row shifts
        left and the width drops by one. All rows are compacted in a single
        step, which gives the same result as deleting row by row from the
        top (where row r's flat index is r*width + seam[r] - r once the r
        earlier rows have each lost a cell).

        Args:
            seam: Column index per row, length == height

        Raises:
            SeamLengthMismatch: if len(seam) != height
            IndexError: if a seam entry is outside [0, width), or the grid
                        has no column left to remove
        """
        seam = torch.as_tensor(seam, dtype=torch.long, device=self.data.device).reshape(-1)
        H, W = self.height, self._width
        if seam.shape[0] != H:
            raise SeamLengthMismatch(
                f"seam length ({seam.shape[0]}) should be equal to grid height ({H})")
        if H == 0:
            if W == 0:
                raise IndexError("cannot remove a seam from a zero-width grid")
            self._width = W - 1
            return
        if seam.min() < 0 or seam.max() >= W:
            raise IndexError(f"seam entries must lie in [0, {W})")

        rows = torch.arange(H, device=self.data.device)
        keep = torch.ones(self.size, dtype=torch.bool, device=self.data.device)
        keep[rows * W + seam] = False

        self.data = self.data[keep]
        self._width = W - 1

    def __eq__(self, other):
        if not isinstance(other, Grid):
            return NotImplemented
        return (self._width == other._width
                and self.data.shape == other.data.shape
                and bool((self.data == other.data).all()))

    __hash__ = None

    def __repr__(self):
        lines = [f"Grid(width={self._width}, height={self.height}) {{"]
        for row in self.rows():
            lines.append(f"  {row.tolist()}")
        lines.append("}")
        return "\n".join(lines)
