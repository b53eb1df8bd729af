"""Shared test fixtures for the seamcarve test suite."""

import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

import torch
import pytest


# 6x5 dual-gradient fixture, pixel (x, y) -> RGB
FIXTURE_6X5 = [
    [(78, 209, 79), (63, 118, 247), (92, 175, 95), (243, 73, 183), (210, 109, 104), (252, 101, 119)],
    [(224, 191, 182), (108, 89, 82), (80, 196, 230), (112, 156, 180), (176, 178, 120), (142, 151, 142)],
    [(117, 189, 149), (171, 231, 153), (149, 164, 168), (107, 119, 71), (120, 105, 138), (163, 174, 196)],
    [(163, 222, 132), (187, 117, 183), (92, 145, 69), (158, 143, 79), (220, 75, 222), (189, 73, 214)],
    [(211, 120, 173), (188, 218, 244), (214, 103, 68), (163, 166, 246), (79, 125, 246), (211, 201, 98)],
]


@pytest.fixture
def image_6x5():
    """The 6x5 RGB fixture image as a uint8 (3, 5, 6) tensor."""
    return torch.tensor(FIXTURE_6X5, dtype=torch.uint8).permute(2, 0, 1).contiguous()


def make_random_image(H, W, seed=0):
    """Random uint8 RGB image (3, H, W)."""
    gen = torch.Generator().manual_seed(seed)
    return torch.randint(0, 256, (3, H, W), generator=gen, dtype=torch.int64).to(torch.uint8)
