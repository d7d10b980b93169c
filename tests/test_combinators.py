"""
Unit tests for sums and convolutions of models.
"""

import numpy as np
import pytest

from ComposeVis import Gaussian, Disk, Ring, stretched, shifted
from ComposeVis.exceptions import ConfigurationError
from ComposeVis.model import AddModel, ConvolvedModel, added, convolved, smoothed, components


@pytest.fixture
def uv():
    rng = np.random.default_rng(5)
    return rng.uniform(-0.2, 0.2, 30), rng.uniform(-0.2, 0.2, 30)


class TestAdd:

    def test_flattening_and_order(self):
        a, b, c = Gaussian(), Disk(), Ring()
        m = added(added(a, b), c)
        assert isinstance(m, AddModel)
        assert m.components == (a, b, c)
        assert m.components[0] is a and m.components[2] is c

    def test_sum_of_visibilities(self, uv):
        a, b = stretched(Gaussian(), 2.0, 2.0), shifted(Disk(), 1.0, 0.0)
        np.testing.assert_allclose((a + b).visibility_point(*uv), a.visibility_point(*uv) + b.visibility_point(*uv))

    def test_flux_and_extent(self):
        m = 0.5 * Gaussian() + 2.0 * stretched(Disk(), 3.0, 3.0)
        assert m.flux() == 2.5
        np.testing.assert_allclose(m.radialextent(), np.hypot(3.0, 3.0) * 3.0)

    def test_needs_two_components(self):
        with pytest.raises(ConfigurationError):
            AddModel([Gaussian()])

    def test_rejects_non_models(self):
        with pytest.raises(ConfigurationError):
            AddModel([Gaussian(), 1.0])


class TestConvolve:

    def test_convolution_theorem(self, uv):
        a, b = stretched(Disk(), 2.0, 1.0), shifted(Gaussian(), 0.5, 0.5)
        m = convolved(a, b)
        np.testing.assert_allclose(m.visibility_point(*uv), a.visibility_point(*uv) * b.visibility_point(*uv))

    def test_gaussians_add_in_quadrature(self, uv):
        m = convolved(stretched(Gaussian(), 3.0, 3.0), stretched(Gaussian(), 4.0, 4.0))
        np.testing.assert_allclose(m.visibility_point(*uv), stretched(Gaussian(), 5.0, 5.0).visibility_point(*uv),
                                   atol=1e-14)

    def test_flattening(self):
        a, b, c = Gaussian(), Disk(), Ring()
        m = convolved(a, convolved(b, c))
        assert isinstance(m, ConvolvedModel)
        assert len(m) == 3

    def test_flux_and_extent(self):
        m = convolved(2.0 * Gaussian(), 3.0 * Disk())
        assert m.flux() == 6.0
        assert m.radialextent() == 8.0

    def test_no_closed_form_image(self):
        m = convolved(Gaussian(), Disk())
        assert not m.imanalytic
        with pytest.raises(ConfigurationError):
            m.intensity_point(0.0, 0.0)

    def test_smoothed(self, uv):
        ring = stretched(Ring(), 10.0, 10.0)
        m = smoothed(ring, 2.0)
        expected = ring.visibility_point(*uv) * stretched(Gaussian(), 2.0, 2.0).visibility_point(*uv)
        np.testing.assert_allclose(m.visibility_point(*uv), expected)


class TestComponents:

    def test_recursive_leaves_in_order(self):
        m1, m2 = Gaussian(), Disk()
        mt = m1 + convolved(m1, m2)
        mc = components(mt)
        assert len(mc) == 3
        assert mc[0] is m1
        assert mc[1] is m1
        assert mc[2] is m2

    def test_modified_leaf(self):
        g = shifted(Gaussian(), 1.0, 1.0)
        assert components(g) == (g,)
