"""
Seam computation.

Minimum-cost vertical seams are found by dynamic programming over an
energy grid, sweeping from the bottom row up. Each row depends only on the
row below it, so every row is computed in one vectorized step across its
columns.
"""

import logging

import torch
from typing import Sequence, Union

from .grid import Grid

logger = logging.getLogger(__name__)


def _accumulator_dtype(dtype: torch.dtype) -> torch.dtype:
    if dtype.is_floating_point:
        return dtype
    return torch.int64


def find_vertical_seam(energy: Grid) -> torch.Tensor:
    """
    Find the top-to-bottom seam with the lowest cumulative energy.

    From each cell the seam steps to the cell directly below or to one of
    its two diagonal neighbours (clamped at the edges, no wraparound).
    Ties are broken deterministically:
    - between successors: straight down, then left, then right
      (a later candidate only wins on strict improvement)
    - between start columns in the top row: the leftmost wins

    Args:
        energy: Grid of non-negative per-pixel energies

    Returns:
        Seam indices (H,) with the column index per row, top to bottom
    """
    W, H = energy.width, energy.height
    if W == 0 or H == 0:
        return torch.zeros(0, dtype=torch.long)

    device = energy.data.device
    acc_dtype = _accumulator_dtype(energy.data.dtype)
    cost = Grid(W, torch.zeros(energy.size, dtype=acc_dtype, device=device))
    path = Grid(W, torch.zeros(energy.size, dtype=torch.long, device=device))
    cols = torch.arange(W, dtype=torch.long, device=device)

    cost.row(H - 1)[:] = energy.row(H - 1).to(acc_dtype)

    for y in range(H - 2, -1, -1):
        below = cost.row(y + 1)

        # Straight down is the default candidate
        best = cols.clone()
        min_cost = below.clone()

        # Left only wins on strict improvement
        take_left = torch.zeros(W, dtype=torch.bool, device=device)
        take_left[1:] = below[:-1] < min_cost[1:]
        best[1:] = torch.where(take_left[1:], cols[:-1], best[1:])
        min_cost[1:] = torch.where(take_left[1:], below[:-1], min_cost[1:])

        # Right is compared against the possibly-updated minimum
        take_right = torch.zeros(W, dtype=torch.bool, device=device)
        take_right[:-1] = below[1:] < min_cost[:-1]
        best[:-1] = torch.where(take_right[:-1], cols[1:], best[:-1])
        min_cost[:-1] = torch.where(take_right[:-1], below[1:], min_cost[:-1])

        path.row(y)[:] = best
        cost.row(y)[:] = energy.row(y).to(acc_dtype) + min_cost

    # argmin returns the first minimal index, i.e. the leftmost column
    seam = torch.zeros(H, dtype=torch.long, device=device)
    seam[0] = torch.argmin(cost.row(0))
    for y in range(H - 1):
        seam[y + 1] = path[seam[y].item(), y]

    if logger.isEnabledFor(logging.DEBUG):
        start = seam[0].item()
        logger.debug("vertical seam on %dx%d grid: start=%d cost=%s",
                     W, H, start, cost[start, 0].item())
    return seam


def seam_energy(energy: Grid, seam: Union[Sequence[int], torch.Tensor]):
    """Sum of energy along a vertical seam."""
    seam = torch.as_tensor(seam, dtype=torch.long)
    total = 0
    for y in range(energy.height):
        total += energy[seam[y].item(), y].item()
    return total


def is_valid_seam(seam: Union[Sequence[int], torch.Tensor], width: int) -> bool:
    """
    Check that a seam lies within [0, width) and is 8-connected
    (adjacent entries differ by at most 1).
    """
    seam = torch.as_tensor(seam, dtype=torch.long)
    if seam.numel() == 0:
        return True
    if seam.min() < 0 or seam.max() >= width:
        return False
    return bool((torch.abs(seam[1:] - seam[:-1]) <= 1).all())
