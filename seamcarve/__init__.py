"""
Content-aware image resizing by seam carving.

A flat-backed Grid, dynamic-programming seam finding, and batch seam
insertion with overflow-free pixel averaging.
"""

__version__ = "0.1.0"

from .errors import SeamCarveError, DimensionMismatch, SeamLengthMismatch
from .grid import Grid
from .energy import dual_gradient_energy, BORDER_ENERGY
from .seam import find_vertical_seam, seam_energy, is_valid_seam
from .insertion import (avg_channel, avg_pixel,
                        insert_vertical_seams, insert_horizontal_seams)
from .carving import reduce_width, select_insertion_seams, expand_width

__all__ = [
    'SeamCarveError',
    'DimensionMismatch',
    'SeamLengthMismatch',
    'Grid',
    'dual_gradient_energy',
    'BORDER_ENERGY',
    'find_vertical_seam',
    'seam_energy',
    'is_valid_seam',
    'avg_channel',
    'avg_pixel',
    'insert_vertical_seams',
    'insert_horizontal_seams',
    'reduce_width',
    'select_insertion_seams',
    'expand_width',
]
