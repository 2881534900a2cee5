"""Exceptions raised by `pdf2d`.

Each exception also derives from the builtin that would otherwise be raised (e.g. `ValueError`
for bad input), so that generic handlers continue to catch them.
"""

__all__ = [
    'PDF2DError', 'DimensionMismatch', 'DegenerateDistribution', 'NotNormalized', 'OutOfBounds',
    'NumericInstability'
]


class PDF2DError(Exception):
    """Base class for all `pdf2d` errors."""


class DimensionMismatch(PDF2DError, ValueError):
    """The shape of `prob` is inconsistent with the lengths of the `x` and `y` axes."""


class DegenerateDistribution(PDF2DError, ValueError):
    """The grid has no cells, or the total probability mass is zero or non-finite."""


class NotNormalized(PDF2DError, RuntimeError):
    """A distribution was used before it was constructed (normalized)."""


class OutOfBounds(PDF2DError, ValueError):
    """An evaluation point lies outside of the grid domain."""


class NumericInstability(PDF2DError, ArithmeticError):
    """Root extraction failed during sampling (e.g. a negative discriminant)."""
