"""Errors raised at the package boundary."""


class SeamCarveError(ValueError):
    """Base class for structural errors in grids and seams."""


class DimensionMismatch(SeamCarveError):
    """Grid data length is not a multiple of the declared width."""


class SeamLengthMismatch(SeamCarveError):
    """Seam length does not equal the height of the grid it is applied to."""
