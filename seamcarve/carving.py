"""
High-level carving helpers built on the grid, seam and insertion modules.

Only vertical seams are carved. Choosing how many seams to remove or insert
to reach a target size is left to the caller.
"""

import logging

import torch
from typing import Callable, List

from .energy import dual_gradient_energy
from .grid import Grid
from .insertion import insert_vertical_seams
from .seam import find_vertical_seam

logger = logging.getLogger(__name__)

EnergyFn = Callable[[Grid], Grid]


def _check_seam_count(n_seams: int, width: int):
    if not 0 <= n_seams < width:
        raise ValueError(f"n_seams must be in [0, {width}), got {n_seams}")


def reduce_width(image: torch.Tensor, n_seams: int,
                 energy_fn: EnergyFn = dual_gradient_energy) -> torch.Tensor:
    """
    Remove vertical seams one at a time, recomputing energy after each.

    Args:
        image: Image tensor (C, H, W)
        n_seams: Number of seams to remove
        energy_fn: Maps a pixel Grid to an energy Grid of the same shape

    Returns:
        Carved image (C, H, W - n_seams)
    """
    C, H, W = image.shape
    _check_seam_count(n_seams, W)

    grid = Grid.from_image(image)
    for i in range(n_seams):
        seam = find_vertical_seam(energy_fn(grid))
        grid.remove_seam(seam)
        logger.debug("removed seam %d/%d, width now %d", i + 1, n_seams, grid.width)

    logger.info("reduced width %d -> %d", W, grid.width)
    return grid.to_image()


def select_insertion_seams(image: torch.Tensor, n_seams: int,
                           energy_fn: EnergyFn = dual_gradient_energy) -> List[List[int]]:
    """
    Pick the n_seams cheapest successive seams, in original column indices.

    The seams are found on a shrinking copy of the image (so each one is
    distinct), while a parallel grid of column indices tracks where every
    remaining pixel came from.

    Args:
        image: Image tensor (C, H, W)
        n_seams: Number of seams to select
        energy_fn: Maps a pixel Grid to an energy Grid of the same shape

    Returns:
        Per-row lists of n_seams distinct original columns, the batch shape
        insert_vertical_seams expects
    """
    C, H, W = image.shape
    _check_seam_count(n_seams, W)

    work = Grid.from_image(image)
    origin = Grid(W, torch.arange(W).repeat(H))
    batch: List[List[int]] = [[] for _ in range(H)]

    for i in range(n_seams):
        seam = find_vertical_seam(energy_fn(work))
        for y in range(H):
            batch[y].append(origin[seam[y].item(), y].item())
        work.remove_seam(seam)
        origin.remove_seam(seam)
        logger.debug("selected insertion seam %d/%d starting at column %d",
                     i + 1, n_seams, batch[0][-1])

    return batch


def expand_width(image: torch.Tensor, n_seams: int,
                 energy_fn: EnergyFn = dual_gradient_energy) -> torch.Tensor:
    """
    Widen an image by inserting n_seams vertical seams in one batch.

    Args:
        image: uint8 image tensor (C, H, W)
        n_seams: Number of seams to insert
        energy_fn: Maps a pixel Grid to an energy Grid of the same shape

    Returns:
        uint8 image (C, H, W + n_seams)
    """
    C, H, W = image.shape
    if n_seams == 0:
        return image.clone()

    seams = select_insertion_seams(image, n_seams, energy_fn=energy_fn)
    expanded = insert_vertical_seams(image, seams)
    logger.info("expanded width %d -> %d", W, expanded.shape[2])
    return expanded
