"""
Energy functions for seam carving.

The energy function determines which pixels are "important".
Low-energy seams are preferred for removal.

We use the dual-gradient energy: for an interior pixel (x, y),

    Δx² = Σ_c (I_c(x+1, y) - I_c(x-1, y))²
    Δy² = Σ_c (I_c(x, y+1) - I_c(x, y-1))²
    E(x, y) = round(sqrt(Δx² + Δy²))

Pixels on the image border get a fixed, high energy so that seams only
touch the border when nothing cheaper exists.
"""

import torch
from typing import Union

from .grid import Grid

BORDER_ENERGY = 1000


def dual_gradient_energy(image: Union[torch.Tensor, Grid],
                         border_energy: int = BORDER_ENERGY) -> Grid:
    """
    Compute the dual-gradient energy of an image.

    Args:
        image: Image tensor (C, H, W), grayscale (H, W), or a pixel Grid
        border_energy: Energy assigned to pixels on the image border

    Returns:
        int64 energy Grid with the image's width and height
    """
    if isinstance(image, Grid):
        image = image.to_image()
    if image.dim() == 2:
        image = image.unsqueeze(0)

    C, H, W = image.shape
    pixels = image.to(torch.float64)

    energy = torch.full((H, W), float(border_energy), dtype=torch.float64,
                        device=image.device)

    if H > 2 and W > 2:
        # Neighbour differences for the interior only
        dx = pixels[:, 1:-1, 2:] - pixels[:, 1:-1, :-2]
        dy = pixels[:, 2:, 1:-1] - pixels[:, :-2, 1:-1]
        grad_sq = (dx ** 2).sum(dim=0) + (dy ** 2).sum(dim=0)
        energy[1:-1, 1:-1] = torch.sqrt(grad_sq)

    energy = torch.round(energy).to(torch.int64)
    return Grid(W, energy.reshape(H * W))
