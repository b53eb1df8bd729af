"""
Seam insertion.

Widens (or heightens) an image by inserting several seams at once. The
batch is grouped by scanline: for vertical insertion seams[y] holds the
columns to expand in row y, for horizontal insertion seams[x] holds the
rows to expand in column x. Every scanline must list the same number k
of positions, and the output grows by k.

Each expanded position x is replaced by two blended pixels:
avg(left, x) followed by avg(x, right). The left neighbour is clamped at
0 and the right neighbour wraps to 0 past the last column.
"""

import torch
from typing import Sequence, Union

SeamBatch = Sequence[Union[Sequence[int], torch.Tensor]]


def avg_channel(a, b):
    """
    Average of two 8-bit channel values, rounded down unless both are odd.

    Uses a/2 + b/2 + (a%2 + b%2)/2 so that the intermediate never exceeds
    255, which keeps the result exact in uint8 tensors.
    """
    return (a // 2) + (b // 2) + ((a % 2 + b % 2) // 2)


def _to_channels(pixel) -> torch.Tensor:
    pixel = torch.as_tensor(pixel)
    if pixel.dtype == torch.uint8:
        return pixel
    # Anything that doesn't fit in a u8 saturates to 255
    out_of_range = (pixel < 0) | (pixel > 255)
    return torch.where(out_of_range, torch.full_like(pixel, 255), pixel).to(torch.uint8)


def avg_pixel(pixel_1, pixel_2) -> torch.Tensor:
    """Channel-wise avg_channel of two pixels, as a uint8 tensor."""
    return avg_channel(_to_channels(pixel_1), _to_channels(pixel_2))


def _batch_size(seams: SeamBatch) -> int:
    if len(seams) == 0:
        raise ValueError("seam batch must not be empty")
    return len(seams[0])


def _insert_along_scanline(src: torch.Tensor, dst: torch.Tensor,
                           positions, to_insert: int):
    """
    Expand one scanline.

    Args:
        src: Source scanline (C, L)
        dst: Destination scanline (C, L + to_insert), written in place
        positions: Positions in src to expand
        to_insert: Batch size k
    """
    length = src.shape[1]
    if length == 0:
        return
    targets = sorted(int(p) for p in positions)
    already_inserted = 0

    # Blends for every position at once: avg(before, i) and avg(i, after)
    idx = torch.arange(length, device=src.device)
    before = (idx - 1).clamp(min=0)
    after = (idx + 1) % length
    blend_before = avg_pixel(src[:, before], src)
    blend_after = avg_pixel(src, src[:, after])

    for i in range(length):
        if already_inserted < to_insert and i == targets[already_inserted]:
            dst[:, i + already_inserted] = blend_before[:, i]
            already_inserted += 1
            dst[:, i + already_inserted] = blend_after[:, i]
        else:
            dst[:, i + already_inserted] = src[:, i]


def insert_vertical_seams(image: torch.Tensor, seams: SeamBatch) -> torch.Tensor:
    """
    Insert k vertical seams, widening the image by k columns.

    Args:
        image: uint8 image (C, H, W)
        seams: Per-row column positions, len(seams) == H, k entries each

    Returns:
        New uint8 image (C, H, W + k)
    """
    C, H, W = image.shape
    to_insert = _batch_size(seams)
    new_image = torch.zeros(C, H, W + to_insert, dtype=torch.uint8, device=image.device)

    for y, to_insert_xs in enumerate(seams):
        _insert_along_scanline(image[:, y, :], new_image[:, y, :], to_insert_xs, to_insert)

    return new_image


def insert_horizontal_seams(image: torch.Tensor, seams: SeamBatch) -> torch.Tensor:
    """
    Insert k horizontal seams, heightening the image by k rows.

    Args:
        image: uint8 image (C, H, W)
        seams: Per-column row positions, len(seams) == W, k entries each

    Returns:
        New uint8 image (C, H + k, W)
    """
    C, H, W = image.shape
    to_insert = _batch_size(seams)
    new_image = torch.zeros(C, H + to_insert, W, dtype=torch.uint8, device=image.device)

    for x, to_insert_ys in enumerate(seams):
        _insert_along_scanline(image[:, :, x], new_image[:, :, x], to_insert_ys, to_insert)

    return new_image
