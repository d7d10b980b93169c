"""
Unit tests for image synthesis, including the ring + Gaussian scenario.
"""

import numpy as np
import pytest

from ComposeVis import (
    Gaussian, Ring, IntensityMap, imagepixels, SqExpPulse,
    shifted, stretched, smoothed, convolved, amplitude,
    fouriermap, phasedecenter, intensitymap, intensitymap_inplace,
)
from ComposeVis.exceptions import ConfigurationError
from ComposeVis.fourier import uvgrid
from ComposeVis.utils import fwhm_to_sigma


@pytest.fixture
def ring_gauss():
    """Ring of diameter 40 and width 4 plus a Gaussian of FWHM 20, half the flux each."""
    ring = smoothed(stretched(Ring(), 20.0, 20.0), float(fwhm_to_sigma(4.0)))
    sigma = float(fwhm_to_sigma(20.0))
    gauss = shifted(stretched(Gaussian(), sigma, sigma), 10.0, -5.0)
    return 0.5 * ring + 0.5 * gauss


# ===================================================================
#  Grids
# ===================================================================

class TestGrids:

    def test_imagepixels_centered(self):
        x, y = imagepixels(4.0, 2.0, 4, 2)
        np.testing.assert_allclose(x, [-1.5, -0.5, 0.5, 1.5])
        np.testing.assert_allclose(y, [-0.5, 0.5])

    def test_intensitymap_geometry(self):
        img = IntensityMap.zeros(10.0, 6.0, 20, 12)
        assert img.shape == (12, 20)
        assert img.psizex == 0.5 and img.psizey == 0.5
        assert img.similar().grid_key() == img.grid_key()

    def test_intensitymap_validation(self):
        with pytest.raises(ConfigurationError):
            IntensityMap(np.zeros(5), 1.0, 1.0)
        with pytest.raises(ConfigurationError):
            IntensityMap(np.zeros((2, 2)), 0.0, 1.0)

    def test_fouriermap(self):
        vis = fouriermap(Gaussian(), 10.0, 10.0, 16, 8)
        assert vis.shape == (8, 16)
        u, v = uvgrid(10.0, 10.0, 16, 8)
        assert u[8] == 0.0 and v[4] == 0.0
        assert vis[4, 8] == 1.0

    def test_phasedecenter_keeps_origin(self):
        vis = fouriermap(Gaussian(), 10.0, 10.0, 16, 16)
        out = phasedecenter(vis, 10.0, 10.0, 16, 16)
        assert out[8, 8] == vis[8, 8]
        np.testing.assert_allclose(np.abs(out), np.abs(vis))


# ===================================================================
#  Synthesis
# ===================================================================

class TestSynthesis:

    def test_fourier_path_matches_sampling(self):
        # a convolution of Gaussians has no closed-form image, its sum does
        m = shifted(convolved(stretched(Gaussian(), 1.5, 1.5), stretched(Gaussian(), 2.0, 2.0)), 2.0, -1.0)
        assert not m.imanalytic
        direct = shifted(stretched(Gaussian(), 2.5, 2.5), 2.0, -1.0)
        a = intensitymap(m, 40.0, 40.0, 128, 128)
        b = intensitymap(direct, 40.0, 40.0, 128, 128)
        np.testing.assert_allclose(a.data, b.data, atol=1e-10)

    def test_flux_consistency(self, ring_gauss):
        img = intensitymap(ring_gauss, 160.0, 160.0, 256, 256)
        np.testing.assert_allclose(img.flux(), ring_gauss.flux(), atol=1e-10)

    def test_odd_grid(self):
        m = convolved(stretched(Gaussian(), 1.5, 1.5), stretched(Gaussian(), 2.0, 2.0))
        a = intensitymap(m, 41.0, 39.0, 127, 125)
        b = intensitymap(stretched(Gaussian(), 2.5, 2.5), 41.0, 39.0, 127, 125)
        np.testing.assert_allclose(a.data, b.data, atol=1e-10)

    def test_pulse_deconvolved(self):
        m = convolved(Gaussian(), stretched(Gaussian(), 2.0, 2.0))
        img = intensitymap(m, 40.0, 40.0, 128, 128, pulse=SqExpPulse(0.5))
        np.testing.assert_allclose(img.flux(), 1.0, atol=1e-10)
        assert isinstance(img.pulse, SqExpPulse)

    def test_inplace_overwrites(self, ring_gauss):
        rng = np.random.default_rng(0)
        img = IntensityMap(rng.normal(size=(64, 64)), 160.0, 160.0)
        intensitymap_inplace(img, ring_gauss)
        first = img.data.copy()
        intensitymap_inplace(img, ring_gauss)
        np.testing.assert_array_equal(img.data, first)
        np.testing.assert_array_equal(img.data, intensitymap(ring_gauss, 160.0, 160.0, 64, 64).data)

    def test_inplace_overwrites_sampled(self):
        m = stretched(Gaussian(), 3.0, 3.0)
        img = IntensityMap(np.full((32, 32), 7.0), 30.0, 30.0)
        intensitymap_inplace(img, m)
        np.testing.assert_array_equal(img.data, intensitymap(m, 30.0, 30.0, 32, 32).data)

    def test_centroid(self):
        m = shifted(smoothed(stretched(Gaussian(), 2.0, 2.0), 1.0), -4.0, 3.0)
        img = intensitymap(m, 40.0, 40.0, 128, 128)
        np.testing.assert_allclose(img.centroid(), (-4.0, 3.0), atol=1e-6)


# ===================================================================
#  End-to-end scenario
# ===================================================================

class TestRingGaussianScenario:

    def test_image_flux(self, ring_gauss):
        img = intensitymap(ring_gauss, 160.0, 160.0, 256, 256)
        assert abs(img.flux() - 1.0) < 1e-3

    def test_zero_baseline_amplitude(self, ring_gauss):
        assert abs(amplitude(ring_gauss, 0.0, 0.0) - 1.0) < 1e-6

    def test_ring_brighter_than_center(self, ring_gauss):
        img = intensitymap(ring_gauss, 160.0, 160.0, 256, 256)
        x, y = img.imagepixels()
        ix = np.argmin(np.abs(x - (-20.0)))
        iy = np.argmin(np.abs(y - 0.0))
        ic = np.argmin(np.abs(x - 0.0))
        # west edge of the ring, away from the Gaussian at (10, -5)
        assert img.data[iy, ix] > img.data[iy, ic] * 0.5
        assert img.data.max() > 0.0
