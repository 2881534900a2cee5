"""pdf2d's plotting submodule

Draw the binned probability distribution of a `PDF2D` instance, and samples drawn from it, using
`matplotlib`.  This submodule is not imported into the base package namespace, import it with
`import pdf2d.plot`.

API Contents
------------
- plot_pdf2d : construct a figure (if needed) and draw a distribution, and optionally samples.
- draw_pdf2d : draw the binned probability density of a distribution with `pcolormesh`.
- draw_samples : draw a scatter plot of sampled points.

"""

import copy

import numpy as np
import matplotlib as mpl
import matplotlib.pyplot as plt

__all__ = ["plot_pdf2d", "draw_pdf2d", "draw_samples"]


def plot_pdf2d(pdf, samples=None, ax=None, cmap=None, colorbar=True, **kwargs):
    """Plot the binned density of a distribution, and optionally points sampled from it.

    Arguments
    ---------
    pdf : `pdf2d.PDF2D` instance
    samples : (2, N) array_like of scalar, or None
        Sampled locations to overplot.
    ax : `matplotlib.axes.Axes` instance, or `None`; if `None` then a new figure is created.
    cmap : `matplotlib.colors.Colormap`, str, or None
    colorbar : bool, whether to add a colorbar for the density.
    **kwargs : additional keyword-arguments passed to `draw_samples()`.

    Returns
    -------
    fig : `matplotlib.figure.Figure`
    ax : `matplotlib.axes.Axes`

    """
    if ax is None:
        fig, ax = _figax()
    else:
        fig = ax.get_figure()

    *_, pcm = draw_pdf2d(ax, pdf, cmap=cmap)
    if colorbar:
        fig.colorbar(pcm, ax=ax, label='probability density')

    if samples is not None:
        draw_samples(ax, samples, **kwargs)

    ax.set(xlim=pdf.extrema[0], ylim=pdf.extrema[1])
    return fig, ax


def draw_pdf2d(ax, pdf, cmap=None, **kwargs):
    """Draw the binned probability density (mass per area) of each cell of the distribution.
    """
    edges = pdf.edges
    dens = pdf.pdf / pdf.area
    cmap = _get_cmap(cmap)
    kwargs.setdefault('shading', 'auto')
    # NOTE: this avoids edge artifacts when alpha is not unity!
    kwargs.setdefault('edgecolors', [1.0, 1.0, 1.0, 0.0])
    kwargs.setdefault('linewidth', 0.01)
    rv = ax.pcolormesh(*edges, dens.T, cmap=cmap, **kwargs)
    return edges, dens, rv


def draw_samples(ax, samples, alpha=None, s=4, **kwargs):
    xx, yy = samples
    if alpha is None:
        alpha = _scatter_alpha(xx)
    kwargs.setdefault('alpha', alpha)
    kwargs.setdefault('s', s)
    kwargs.setdefault('color', 'r')
    return ax.scatter(xx, yy, **kwargs)


# ====  Utility Methods  ====
# ===========================


def _figax(figsize=[6, 5], grid=True, **kwfig):
    """Construct a matplotlib figure and single axes.
    """
    fig, ax = plt.subplots(figsize=figsize, **kwfig)
    if grid is True:
        grid = dict(alpha=0.2, color='0.5', lw=0.5)
    if grid:
        ax.grid(True, **grid)
    ax.set(xlabel='x', ylabel='y')
    return fig, ax


def _get_cmap(cmap=None, under='w'):
    if not isinstance(cmap, mpl.colors.Colormap):
        if cmap is None:
            cmap = 'viridis'
        cmap = mpl.colormaps[cmap]

    cmap = copy.copy(cmap)
    if under is not None:
        cmap.set_under(under)
    return cmap


def _scatter_alpha(xx, norm=10.0):
    """Choose a transparency for the given number of scatter points.
    """
    num = max(len(xx), 1)
    alpha = norm / np.sqrt(num)
    alpha = float(np.clip(alpha, 0.01, 1.0))
    return alpha
