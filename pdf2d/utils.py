"""pdf2d's internal, utility functions.
"""
import functools
import logging

import numpy as np
import numba
import scipy as sp
import scipy.interpolate  # noqa

from pdf2d.errors import OutOfBounds


# =================================================================================================
# ====    Primary / API Functions    ====
# =================================================================================================


def array_str(data, num=3, format=':.2e'):
    fmt = "{{{}}}".format(format)

    def _astr(vals):
        try:
            temp = ", ".join([fmt.format(dd) for dd in vals])
        except TypeError:
            logging.error("Failed to format object of type: {}, shape: {}!".format(
                type(vals), np.shape(vals)))
            raise

        return temp

    data = np.atleast_1d(data).flatten()
    if len(data) <= 2*num:
        rv = _astr(data)
    else:
        rv = _astr(data[:num]) + " ... " + _astr(data[-num:])

    rv = '[' + rv + ']'
    return rv


def get_rng(random_state=None):
    """Construct a random number generator from the given specification.

    Arguments
    ---------
    random_state : None, int, `numpy.random.SeedSequence`, or `numpy.random.Generator`
        * `None` : a new generator seeded with fresh entropy from the operating system.
        * int or SeedSequence : a new generator with the given seed.
        * Generator : returned unaltered (i.e. the caller owns the random stream).

    Returns
    -------
    rng : `numpy.random.Generator`

    """
    if isinstance(random_state, np.random.Generator):
        return random_state
    return np.random.default_rng(random_state)


def interp2d(x_axis, y_axis, grid, qx, qy, bounds_error=True, fill_value=None):
    """Bilinearly interpolate the values of a rectilinear grid at the given points.

    Arguments
    ---------
    x_axis : (X,) array_like of scalar, strictly increasing grid coordinates along x.
    y_axis : (Y,) array_like of scalar, strictly increasing grid coordinates along y.
    grid : (X, Y) array_like of scalar, values at the grid nodes.
    qx, qy : scalar or array_like of scalar
        Query locations.  The two are broadcast against each other.
    bounds_error : bool
        If True, raise `OutOfBounds` when any query point lies outside of the grid.
    fill_value : scalar or None
        Value returned for out-of-bounds points when `bounds_error` is False.
        `None` is treated as NaN.

    Returns
    -------
    vals : ndarray of scalar
        Interpolated values, with the broadcast shape of `qx` and `qy`.

    """
    x_axis = np.asarray(x_axis)
    y_axis = np.asarray(y_axis)
    qx, qy = np.broadcast_arrays(np.asarray(qx), np.asarray(qy))

    outside = (qx < x_axis[0]) | (x_axis[-1] < qx) | (qy < y_axis[0]) | (y_axis[-1] < qy)
    if bounds_error and np.any(outside):
        err = "{} points outside of grid x: [{}, {}], y: [{}, {}]!  x={}, y={}".format(
            np.count_nonzero(outside), x_axis[0], x_axis[-1], y_axis[0], y_axis[-1],
            array_str(qx[outside]), array_str(qy[outside]))
        raise OutOfBounds(err)

    if fill_value is None:
        fill_value = np.nan

    interp = sp.interpolate.RegularGridInterpolator(
        (x_axis, y_axis), np.asarray(grid), method='linear',
        bounds_error=False, fill_value=fill_value
    )
    pnts = np.stack([qx, qy], axis=-1).reshape(-1, 2)
    vals = interp(pnts).reshape(qx.shape)
    return vals


@numba.njit
def locate(seq, value):
    """Find the index of the rightmost element of the sorted `seq` that is <= `value`.

    Returns `-1` if `value` is below the first element.
    """
    return np.searchsorted(seq, value, side='right') - 1

def trapz_dens_to_mass(dens, edges):
    """Convert from density to mass, for values on the corners of a grid, using the trapezoid rule.

    The mass of each cell is the average of the densities at its corners, times the volume of the
    cell.

    Arguments
    ---------
    dens : array_like
        Density values, computed at the grid edges specified by the `edges` list-of-lists.
    edges : array_like of array_like
        Edge-locations along each dimension, e.g. `[[x0, x1, ... xn], [y0, y1, ... ym]]`.
        The length of each sub-list must match the shape of `dens`.

    Returns
    -------
    mass : ndarray
        Same number of dimensions as `dens`, with each dimension one element shorter.
        e.g. if the shape of `dens` is (N, M), then the shape of `mass` is (N-1, M-1).

    """
    dens = np.asarray(dens)
    shp_inn = np.array([len(ed) for ed in edges])
    ndim = len(shp_inn)
    if not np.all(np.shape(dens) == shp_inn):
        err = "Shape of dens ({}) does not match edges ({})!".format(np.shape(dens), shp_inn)
        raise ValueError(err)

    # `widths` along each axis, broadcastable to the shape of the cells
    widths = []
    for ii, ed in enumerate(edges):
        cut = [np.newaxis for jj in range(ndim)]
        cut[ii] = slice(None)
        widths.append(np.diff(ed)[tuple(cut)])

    volumes = functools.reduce(np.multiply, widths)

    # Sum the corner values of every cell,
    #    e.g. for 2D:  [0 0], [0 1], [1 0], [1 1]  are lower-left, upper-left, lower-right, upper-right
    mass = np.zeros(shp_inn - 1, dtype=np.result_type(dens, volumes))
    for inds in np.ndindex(*([2]*ndim)):
        cut = tuple(slice(0, -1, None) if ii == 0 else slice(1, None, None) for ii in inds)
        mass += dens[cut]

    mass *= volumes / (2**ndim)
    return mass
