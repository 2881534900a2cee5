"""Continuous two-dimensional distributions from tabulated densities: sampling and interpolation.

Copyright (C) 2026 pdf2d Contributors.
"""

import os

import numpy as np

# Load the version information stored within the package contents
_path = os.path.dirname(os.path.abspath(__file__))
_vers_path = os.path.join(_path, "VERSION.txt")
with open(_vers_path) as inn:
    _version = inn.read().strip()

__version__ = _version
__copyright__ = "Copyright (C) 2026 pdf2d Contributors"

# Value returned for density evaluations outside of the grid, when `bounds_error=False`
_DEF_FILL_VALUE = np.nan

from pdf2d import errors   # noqa
from pdf2d import utils    # noqa
from pdf2d.errors import *  # noqa
from pdf2d.pdf import PDF2D, build, evaluate   # noqa
from pdf2d.sample import sample_pdf2d, resample_pdf2d   # noqa

# cleanup imports and objects so they're not visible in the imported package
del os
del np
del inn
del _version
del _vers_path
del _path


# High Level API Functions
# -----------------------------------

def resample(pdf, size, random_state=None):
    """Draw `size` samples from the given `PDF2D` distribution.

    Wrapper for `pdf2d.sample.resample_pdf2d`.

    Returns
    -------
    vals : (2, N) ndarray of scalar

    """
    return resample_pdf2d(pdf, size, random_state=random_state)


def density(x, y, prob, points, bounds_error=True, fill_value=None):
    """Construct a distribution from the given grid and evaluate its density at `points`.

    Arguments
    ---------
    x : (nx,) array_like of scalar, grid locations along x.
    y : (ny,) array_like of scalar, grid locations along y.
    prob : (nx, ny) array_like of scalar, (unnormalized) densities at the grid nodes.
    points : (2, M) array_like of scalar
        Locations at which to evaluate the normalized density, `x` values in ``points[0]`` and
        `y` values in ``points[1]``.

    Returns
    -------
    vals : (M,) ndarray of scalar

    """
    pdf = build(x, y, prob)
    xx, yy = points
    return pdf.density(xx, yy, bounds_error=bounds_error, fill_value=fill_value)
