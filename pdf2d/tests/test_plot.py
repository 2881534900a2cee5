"""

Can be run with:
    $ pytest pdf2d/tests/test_plot.py

"""

import numpy as np
import matplotlib as mpl
mpl.use('Agg')
import matplotlib.pyplot as plt  # noqa

import pdf2d
import pdf2d.plot  # noqa


class Test_Plot:

    @classmethod
    def setup_class(cls):
        np.random.seed(5678)
        xx = np.linspace(0.0, 3.0, 4)
        yy = np.linspace(-1.0, 1.0, 6)
        prob = np.random.uniform(0.5, 2.0, (4, 6))
        cls.pdf = pdf2d.build(xx, yy, prob)
        return

    def test_plot_pdf2d(self):
        pdf = self.pdf
        fig, ax = pdf2d.plot.plot_pdf2d(pdf)
        assert isinstance(fig, mpl.figure.Figure)
        assert len(ax.collections) == 1
        assert np.allclose(ax.get_xlim(), pdf.extrema[0])
        assert np.allclose(ax.get_ylim(), pdf.extrema[1])
        plt.close(fig)

        samples = pdf.resample(100, random_state=1)
        fig, ax = pdf2d.plot.plot_pdf2d(pdf, samples=samples, colorbar=False)
        assert len(ax.collections) == 2
        plt.close(fig)
        return

    def test_existing_axes(self):
        fig, ax = plt.subplots()
        rv_fig, rv_ax = pdf2d.plot.plot_pdf2d(self.pdf, ax=ax, cmap='Greys')
        assert rv_fig is fig
        assert rv_ax is ax
        plt.close(fig)
        return

    def test_draw_pdf2d(self):
        pdf = self.pdf
        fig, ax = plt.subplots()
        edges, dens, pcm = pdf2d.plot.draw_pdf2d(ax, pdf)
        assert np.allclose(dens, pdf.pdf / pdf.area)
        # mass summed over all cells is unity
        assert np.isclose(np.sum(dens * pdf.area), 1.0)
        assert len(edges) == 2
        plt.close(fig)
        return

    def test_scatter_alpha(self):
        assert pdf2d.plot._scatter_alpha(np.zeros(10)) == 1.0
        assert pdf2d.plot._scatter_alpha(np.zeros(int(1e7))) == 0.01
        alpha = pdf2d.plot._scatter_alpha(np.zeros(10000))
        assert np.isclose(alpha, 0.1)
        return
