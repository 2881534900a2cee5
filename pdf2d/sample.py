"""Perform sampling of 2D distributions tabulated on a grid.

The sampling of each point is an exact inverse-transform: a y-bin is chosen from the marginal
CDF (`cdfy`), an x-bin from the CDF along x within that y-bin (`cdf`), and then the location
within the cell is found by analytically inverting the CDF of the bilinear interpolant of the
densities at the four corners of the cell.

"""
import logging

import numba
import numpy as np

from pdf2d import utils
from pdf2d.errors import NotNormalized, NumericInstability
from pdf2d.utils import locate

__all__ = ['sample_pdf2d', 'resample_pdf2d']

def sample_pdf2d(pdf, xi=None, random_state=None):
    """Draw sample(s) from the given distribution.

    Parameters
    ----------
    pdf : `pdf2d.PDF2D` instance
        Distribution to sample from.
    xi : None, (4,) or (4, N) array_like of scalar in [0.0, 1.0)
        Uniform random values used for each draw: for choosing the y-bin, the x-bin, the
        position along y within the cell, and the position along x within the cell.
        If `None`, these four values are drawn using `random_state`.
    random_state : None, int, or `numpy.random.Generator`
        Source of random values if `xi` is not given.  See `pdf2d.utils.get_rng`.

    Returns
    -------
    (x, y) : tuple of float
        The sampled location, if `xi` is `None` or has shape (4,).
    vals : (2, N) ndarray of scalar
        The sampled locations, if `xi` has shape (4, N).

    """
    _check_pdf(pdf)
    if xi is None:
        rng = utils.get_rng(random_state)
        xi = rng.uniform(0.0, 1.0, 4)

    xi, single = _parse_xi(xi)
    vals = _sample(pdf, xi)
    if single:
        return float(vals[0, 0]), float(vals[1, 0])

    return vals


def resample_pdf2d(pdf, size, random_state=None):
    """Draw `size` samples from the given distribution.

    Parameters
    ----------
    pdf : `pdf2d.PDF2D` instance
    size : int
        Number of samples to draw (floats are cast to integers).
    random_state : None, int, or `numpy.random.Generator`

    Returns
    -------
    vals : (2, N) ndarray of scalar
        Sampled `x` values are in ``vals[0]`` and `y` values in ``vals[1]``.

    """
    _check_pdf(pdf)
    size = int(size)
    if size < 0:
        raise ValueError("`size` ({}) must be non-negative!".format(size))

    rng = utils.get_rng(random_state)
    xi = rng.uniform(0.0, 1.0, (4, size))
    return _sample(pdf, xi)


def _check_pdf(pdf):
    if not pdf.normalized:
        raise NotNormalized("Cannot sample from a distribution that is not normalized!")
    return


def _parse_xi(xi):
    """Convert random values to a (4, N) float array, checking that they are within [0.0, 1.0).
    """
    # NOTE: keep double precision even for `float32` distributions, values just below 1.0 would
    #       otherwise be rounded up to 1.0
    xi = np.asarray(xi, dtype=np.float64)
    single = (xi.ndim == 1)
    if single:
        xi = xi[:, np.newaxis]

    if (xi.ndim != 2) or (xi.shape[0] != 4):
        err = "Random values `xi` must have shape (4,) or (4, N), not {}!".format(np.shape(xi))
        raise ValueError(err)

    bads = ~((0.0 <= xi) & (xi < 1.0))
    if np.any(bads):
        err = "Random values `xi` must be within [0.0, 1.0)!  {} bad values: {}".format(
            np.count_nonzero(bads), utils.array_str(xi[bads]))
        raise ValueError(err)

    return xi, single


def _sample(pdf, xi):
    nsamp = xi.shape[1]
    vals = np.zeros((2, nsamp), dtype=pdf.dtype)
    _sample_numba(pdf.x, pdf.y, pdf.prob, pdf.cdf, pdf.cdfy, xi, vals)

    bads = np.isnan(vals[0]) | np.isnan(vals[1])
    if np.any(bads):
        idx = np.nonzero(bads)[0][0]
        logging.error("{}/{} failed draws, first with xi = {}".format(
            np.count_nonzero(bads), nsamp, utils.array_str(xi[:, idx])))
        raise NumericInstability("Failed to invert the CDF within a cell (no real root)!")

    return vals


@numba.njit
def _sample_numba(xx, yy, prob, cdf, cdfy, xi, vals):
    nsamp = xi.shape[1]
    for ii in range(nsamp):
        # Find y bin
        if xi[0, ii] < cdfy[0]:
            ybin = 0
        else:
            ybin = locate(cdfy, xi[0, ii]) + 1

        # Find x bin
        col = cdf[:, ybin]
        if xi[1, ii] < col[0]:
            xbin = 0
        else:
            xbin = locate(col, xi[1, ii]) + 1

        # Sample the position within the cell from the bilinear interpolant of its corners,
        #     z = b1 + b2*u + b3*v + b4*u*v    for (u, v) in [0.0, 1.0]
        b1 = prob[xbin, ybin]
        b2 = prob[xbin + 1, ybin] - b1
        b3 = prob[xbin, ybin + 1] - b1
        b4 = prob[xbin + 1, ybin + 1] - b2 - b3 - b1

        # invert the CDF along y, after integrating over x
        aa = 0.5 * (b3 + 0.5 * b4)
        bb = b1 + 0.5 * b2
        cc = - xi[2, ii] * (aa + bb)
        vv = _solve_quadratic(aa, bb, cc)
        if np.isnan(vv):
            vals[0, ii] = np.nan
            vals[1, ii] = np.nan
            continue

        # invert the CDF along x, at the chosen y
        aa = 0.5 * (b2 + b4 * vv)
        bb = b1 + b3 * vv
        cc = - xi[3, ii] * (aa + bb)
        if (aa == 0.0) and (bb == 0.0):
            # zero density along x at this y, every position is equally likely
            uu = xi[3, ii]
        else:
            uu = _solve_quadratic(aa, bb, cc)
        if np.isnan(uu):
            vals[0, ii] = np.nan
            vals[1, ii] = np.nan
            continue

        # convert from relative to absolute positions, kept within the cell
        lo = xx[xbin]
        hi = xx[xbin + 1]
        vals[0, ii] = min(max(uu * (hi - lo) + lo, lo), hi)
        lo = yy[ybin]
        hi = yy[ybin + 1]
        vals[1, ii] = min(max(vv * (hi - lo) + lo, lo), hi)

    return


@numba.njit
def _solve_quadratic(aa, bb, cc):
    """Find the root of ``aa*t^2 + bb*t + cc = 0`` that lies within [0.0, 1.0].

    Returns NaN if there is no real root.
    """
    # not a quadratic
    if aa == 0.0:
        if bb == 0.0:
            return np.nan
        return - cc / bb

    disc = bb * bb - 4.0 * aa * cc
    if disc < 0.0:
        return np.nan

    delta = np.sqrt(disc)
    if aa < 0.0:
        # NOTE: `>=` so that a zero random value (`delta == bb`) gives the zero root
        if bb >= delta:
            tt = _near_root(bb, cc, delta)
        else:
            tt = (- bb - delta) / (2.0 * aa)
    else:
        if - bb < delta:
            tt = _near_root(bb, cc, delta)
        else:
            tt = (- bb - delta) / (2.0 * aa)

    return tt


@numba.njit
def _near_root(bb, cc, delta):
    """Root ``(-bb + delta) / (2*aa)`` rewritten as ``-2*cc / (bb + delta)``.

    The two are equal, but the first loses all precision when ``|aa| << |bb|``.
    """
    den = bb + delta
    if den == 0.0:
        return 0.0
    return - 2.0 * cc / den
