"""Two-dimensional probability distributions tabulated on a rectilinear grid.

Contents:

- :class:`PDF2D <pdf2d.pdf.PDF2D>` :
  immutable, normalized distribution built from density values at grid nodes.

- :func:`build <pdf2d.pdf.build>` :
  construct a `PDF2D` instance.

- :func:`evaluate <pdf2d.pdf.evaluate>` :
  bilinearly interpolated density of a `PDF2D` at the given points.

"""
import logging

import numpy as np

import pdf2d
from pdf2d import sample, utils
from pdf2d.errors import DimensionMismatch, DegenerateDistribution, NotNormalized

__all__ = ['PDF2D', 'build', 'evaluate']


class PDF2D:
    """Continuous 2D probability distribution defined by density values at the nodes of a grid.

    The distribution is defined by a set of `nx x ny` probability densities (`prob`) at the nodes
    given by the axes `x` (nx,) and `y` (ny,).  From these a binned PDF (`pdf`) with shape
    `(nx-1, ny-1)` is calculated, giving the probability mass in each rectangle bounded by four
    nodes: the average of the four corner densities times the area of the rectangle.

    Process for drawing a sample from the distribution:

    1) The CDF along the x-direction (`cdf`) is calculated for each y-column of cells.  The total
       mass of each column (`pdfy`) defines the marginal distribution in the y-direction, and its
       cumulative distribution (`cdfy`).
    2) A y-bin is chosen by inverting `cdfy`, then an x-bin by inverting the `cdf` of that column.
    3) Within the chosen cell, the position is drawn from the bilinear interpolant of the four
       corner densities, ``z = b1 + b2*u + b3*v + b4*u*v``, by analytically inverting its CDF:
       first along y (marginalized over x), then along x (conditional on y).

    Instances are immutable: all arrays are private copies which are flagged as read-only.

    Examples
    --------
    >>> import numpy as np
    >>> import pdf2d
    >>> xx = np.linspace(0.0, 2.0, 3)
    >>> yy = np.linspace(0.0, 2.0, 3)
    >>> pdf = pdf2d.build(xx, yy, np.ones((3, 3)))
    >>> pdf.cdfy
    array([0.5, 1. ])
    >>> pdf.sample([0.9, 0.9, 0.5, 0.5])
    (1.5, 1.5)

    """

    _normalized = False

    def __init__(self, x, y, prob, dtype=None):
        """Construct and normalize the distribution from the given grid and density values.

        Arguments
        ---------
        x : (nx,) array_like of scalar
            Strictly increasing locations of the grid nodes along the x-axis.
        y : (ny,) array_like of scalar
            Strictly increasing locations of the grid nodes along the y-axis.
        prob : (nx, ny) array_like of scalar
            Probability densities at the grid nodes.  Need not be normalized; must be finite and
            non-negative.
        dtype : `numpy.float32`, `numpy.float64`, or None
            Floating point type of the stored arrays.  If `None`, `float32` is used when every
            input is already `float32`, otherwise `float64`.

        """
        if dtype is None:
            dtype = _infer_dtype(x, y, prob)
        dtype = np.dtype(dtype)
        if dtype not in [np.dtype(np.float32), np.dtype(np.float64)]:
            raise ValueError("`dtype` ({}) must be either `float32` or `float64`!".format(dtype))

        xx = np.array(x, dtype=dtype)
        yy = np.array(y, dtype=dtype)
        prob = np.array(prob, dtype=dtype)

        # ---- Check consistency of inputs

        if (xx.ndim != 1) or (yy.ndim != 1):
            err = "`x` ({}) and `y` ({}) must both be 1D!".format(xx.shape, yy.shape)
            raise DimensionMismatch(err)

        if prob.shape != (xx.size, yy.size):
            err = "Shape of `prob` ({}) inconsistent with `x` ({}) and `y` ({})!".format(
                prob.shape, xx.size, yy.size)
            raise DimensionMismatch(err)

        nx, ny = prob.shape
        if (nx < 2) or (ny < 2):
            err = "At least two nodes are required along each axis!  (nx, ny) = ({}, {})".format(
                nx, ny)
            raise DegenerateDistribution(err)

        for name, axis in zip(['x', 'y'], [xx, yy]):
            if not np.all(np.isfinite(axis)) or np.any(np.diff(axis) <= 0.0):
                logging.error("`{}` = {}".format(name, utils.array_str(axis)))
                raise ValueError("`{}` must be finite and strictly increasing!".format(name))

        if np.any(~np.isfinite(prob) | (prob < 0.0)):
            bads = ~np.isfinite(prob) | (prob < 0.0)
            logging.error("{} bad `prob` values: {}".format(
                np.count_nonzero(bads), utils.array_str(prob[bads])))
            raise ValueError("Invalid `prob` entries, all must be finite and >= 0!")

        # ---- Binned PDF: probability mass in each cell

        pdf = utils.trapz_dens_to_mass(prob, [xx, yy])

        norm = pdf.sum()
        if (norm == 0.0) or not np.isfinite(norm):
            err = "Total probability mass is {}, cannot normalize!".format(norm)
            raise DegenerateDistribution(err)

        prob = prob / norm
        pdf = pdf / norm

        # ---- Cumulative distributions

        # CDF along the x-direction, for each y-column
        cdf = np.cumsum(pdf, axis=0)
        # Marginal mass in each y-column, before `cdf` is normalized
        pdfy = cdf[-1, :].copy()
        cdfy = np.cumsum(pdfy)
        cdfy = cdfy / cdfy[-1]

        # Normalize each column of `cdf` by its total mass (`pdfy`, *not* `cdfy`)
        empty = (pdfy == 0.0)
        if np.any(empty):
            logging.warning("{}/{} y-columns have zero probability mass".format(
                np.count_nonzero(empty), empty.size))
        with np.errstate(divide='ignore', invalid='ignore'):
            cdf = cdf / pdfy[np.newaxis, :]
        # Columns without mass can never be selected, give them a uniform CDF
        cdf[:, empty] = (np.arange(1, nx, dtype=dtype) / (nx - 1))[:, np.newaxis]

        logging.debug("PDF2D: (nx, ny) = ({}, {}), dtype = {}, norm = {:.4e}".format(
            nx, ny, dtype, norm))

        self._nx = nx
        self._ny = ny
        self._dtype = dtype
        self._x = _frozen(xx)
        self._y = _frozen(yy)
        self._prob = _frozen(prob)
        self._pdf = _frozen(pdf)
        self._cdf = _frozen(cdf)
        self._pdfy = _frozen(pdfy)
        self._cdfy = _frozen(cdfy)
        self._normalized = True
        return

    def __repr__(self):
        rv = "{}(nx={}, ny={}, x=[{}, {}], y=[{}, {}], dtype={})".format(
            self.__class__.__name__, self._nx, self._ny,
            self._x[0], self._x[-1], self._y[0], self._y[-1], self._dtype)
        return rv

    def density(self, x, y, bounds_error=True, fill_value=None):
        """Evaluate the (normalized) probability density at the given location(s).

        The density is bilinearly interpolated between the grid nodes, i.e. from `prob`.

        Arguments
        ---------
        x, y : scalar or array_like of scalar
            Locations at which to evaluate the density.  Broadcast against each other.
        bounds_error : bool
            Raise an `OutOfBounds` error if any location lies outside of the grid.
        fill_value : scalar or None
            Value to use for locations outside of the grid when `bounds_error` is False.
            If `None`, `pdf2d._DEF_FILL_VALUE` (NaN) is used.

        Returns
        -------
        vals : float or ndarray of float
            A float for scalar `x` and `y`, otherwise an array of their broadcast shape.

        """
        self._check_normalized()
        if fill_value is None:
            fill_value = pdf2d._DEF_FILL_VALUE
        vals = utils.interp2d(self._x, self._y, self._prob, x, y,
                              bounds_error=bounds_error, fill_value=fill_value)
        if np.ndim(vals) == 0:
            return float(vals)
        return vals

    def sample(self, xi=None, random_state=None):
        """Draw a sample from the distribution.

        Arguments
        ---------
        xi : None, (4,) or (4, N) array_like of scalar in [0.0, 1.0)
            Uniform random values to use for the draw(s).  If `None`, four values are drawn from
            the generator specified by `random_state`.
        random_state : None, int, or `numpy.random.Generator`
            Source of random values when `xi` is not given.  See `pdf2d.utils.get_rng`.

        Returns
        -------
        (x, y) : tuple of float, for a single draw
        vals : (2, N) ndarray, if `xi` has shape (4, N)

        """
        return sample.sample_pdf2d(self, xi=xi, random_state=random_state)

    def resample(self, size, random_state=None):
        """Draw `size` samples from the distribution.

        Returns
        -------
        vals : (2, N) ndarray of scalar
            Sampled `x` values are in ``vals[0]`` and `y` values in ``vals[1]``.

        """
        return sample.resample_pdf2d(self, size, random_state=random_state)

    def _check_normalized(self):
        if not self._normalized:
            raise NotNormalized("{} has not been constructed/normalized!".format(
                self.__class__.__name__))
        return

    @property
    def nx(self):
        return self._nx

    @property
    def ny(self):
        return self._ny

    @property
    def dtype(self):
        return self._dtype

    @property
    def normalized(self):
        return self._normalized

    @property
    def x(self):
        return self._x

    @property
    def y(self):
        return self._y

    @property
    def prob(self):
        """Normalized probability density at each grid node, shape (nx, ny)."""
        return self._prob

    @property
    def pdf(self):
        """Probability mass in each grid cell, shape (nx-1, ny-1)."""
        return self._pdf

    @property
    def cdf(self):
        """Cumulative distribution along x for each column of cells, shape (nx-1, ny-1)."""
        return self._cdf

    @property
    def pdfy(self):
        """Marginal probability mass in each column of cells, shape (ny-1,)."""
        return self._pdfy

    @property
    def cdfy(self):
        """Cumulative distribution of the marginal along y, shape (ny-1,)."""
        return self._cdfy

    @property
    def edges(self):
        return (self._x, self._y)

    @property
    def extrema(self):
        return np.array([[self._x[0], self._x[-1]], [self._y[0], self._y[-1]]])

    @property
    def area(self):
        """Area of each grid cell, shape (nx-1, ny-1)."""
        return np.diff(self._x)[:, np.newaxis] * np.diff(self._y)[np.newaxis, :]


def build(x, y, prob, dtype=None):
    """Construct a normalized 2D distribution from density values at grid nodes.

    See `PDF2D.__init__` for a description of the arguments.

    Returns
    -------
    pdf : `PDF2D` instance

    """
    return PDF2D(x, y, prob, dtype=dtype)


def evaluate(pdf, x, y, bounds_error=True, fill_value=None):
    """Evaluate the probability density of the `PDF2D` instance `pdf` at the given location(s).

    See `PDF2D.density` for a description of the arguments.
    """
    return pdf.density(x, y, bounds_error=bounds_error, fill_value=fill_value)


def _frozen(arr):
    arr.setflags(write=False)
    return arr


def _infer_dtype(*args):
    if all(np.asarray(aa).dtype == np.float32 for aa in args):
        return np.float32
    return np.float64
