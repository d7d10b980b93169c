"""
Unit tests for the modifier layer: shift, rotation, stretch and
renormalization, and the merging smart constructors.
"""

import numpy as np
import pytest

from ComposeVis import Gaussian, Disk, Crescent, intensitymap
from ComposeVis.exceptions import DomainError
from ComposeVis.model import (
    ShiftedModel, RotatedModel, StretchedModel, RenormalizedModel,
    shifted, rotated, stretched, renormed, basemodel, unmodified, posangle,
)


@pytest.fixture
def uv():
    rng = np.random.default_rng(11)
    return rng.uniform(-0.3, 0.3, 40), rng.uniform(-0.3, 0.3, 40)


@pytest.fixture
def elliptical():
    return stretched(Gaussian(), 2.0, 1.0)


# ===================================================================
#  Shift
# ===================================================================

class TestShift:

    def test_shift_law(self, uv, elliptical):
        u, v = uv
        m = shifted(elliptical, 1.5, -0.7)
        expected = np.exp(2j * np.pi * (u * 1.5 - v * 0.7)) * elliptical.visibility_point(u, v)
        np.testing.assert_allclose(m.visibility_point(u, v), expected, atol=1e-14)

    def test_shifted_image(self, elliptical):
        m = shifted(elliptical, 1.5, -0.7)
        x = np.linspace(-3, 3, 13)
        np.testing.assert_allclose(m.intensity_point(x + 1.5, x - 0.7), elliptical.intensity_point(x, x))

    def test_shifted_centroid(self):
        img = intensitymap(shifted(stretched(Gaussian(), 2.0, 2.0), 3.0, -2.0), 40.0, 40.0, 128, 128)
        np.testing.assert_allclose(img.centroid(), (3.0, -2.0), atol=1e-8)

    def test_shifts_merge(self):
        g = Gaussian()
        m = shifted(shifted(g, 1.0, 2.0), 3.0, 4.0)
        assert isinstance(m, ShiftedModel)
        assert m.model is g
        assert (m.dx, m.dy) == (4.0, 6.0)

    def test_radialextent(self):
        assert shifted(Gaussian(), 3.0, -4.0).radialextent() == 9.0

    def test_non_finite_shift(self):
        with pytest.raises(DomainError):
            shifted(Gaussian(), np.nan, 0.0)


# ===================================================================
#  Rotation
# ===================================================================

class TestRotation:

    def test_quarter_turn_swaps_axes(self, elliptical):
        m = rotated(elliptical, np.pi / 2)
        t = np.linspace(-0.4, 0.4, 9)
        np.testing.assert_allclose(m.visibility_point(0.0 * t, t), elliptical.visibility_point(t, 0.0 * t), atol=1e-14)
        np.testing.assert_allclose(m.intensity_point(0.0 * t, t), elliptical.intensity_point(t, 0.0 * t), atol=1e-14)

    def test_rotations_merge(self):
        g = Gaussian()
        m = rotated(rotated(g, 0.3), 0.5)
        assert isinstance(m, RotatedModel)
        assert m.model is g
        np.testing.assert_allclose(posangle(m), 0.8)

    def test_rotation_preserves_flux(self, uv):
        m = rotated(Crescent(1.0, 0.5, 0.2), 1.1)
        np.testing.assert_allclose(m.visibility_point(0.0, 0.0), 1.0, atol=1e-12)
        assert np.all(np.abs(m.visibility_point(*uv)) <= 1.0 + 1e-12)

    def test_off_circle(self):
        with pytest.raises(DomainError):
            RotatedModel(Gaussian(), 0.5, 0.5)

    def test_from_angle(self):
        m = RotatedModel.from_angle(Gaussian(), -0.4)
        np.testing.assert_allclose(m.posangle(), -0.4)


# ===================================================================
#  Stretch
# ===================================================================

class TestStretch:

    def test_flux_preserved(self):
        m = stretched(Gaussian(), 3.0, 0.5)
        assert m.flux() == 1.0
        np.testing.assert_allclose(m.visibility_point(0.0, 0.0), 1.0)
        img = intensitymap(m, 40.0, 40.0, 256, 256)
        np.testing.assert_allclose(img.flux(), 1.0, rtol=1e-6)

    def test_stretched_gaussian_visibility(self, uv):
        u, v = uv
        m = stretched(Gaussian(), 3.0, 0.5)
        expected = np.exp(-2 * np.pi ** 2 * ((3.0 * u) ** 2 + (0.5 * v) ** 2))
        np.testing.assert_allclose(m.visibility_point(u, v), expected, atol=1e-14)

    def test_stretches_merge(self):
        d = Disk()
        m = stretched(stretched(d, 2.0, 3.0), 0.5, 2.0)
        assert isinstance(m, StretchedModel)
        assert m.model is d
        assert (m.alpha, m.beta) == (1.0, 6.0)

    def test_radialextent(self):
        np.testing.assert_allclose(stretched(Disk(), 3.0, 4.0).radialextent(), 15.0)

    @pytest.mark.parametrize("alpha,beta", [(0.0, 1.0), (-1.0, 1.0), (1.0, np.inf)])
    def test_invalid_stretch(self, alpha, beta):
        with pytest.raises(DomainError):
            stretched(Gaussian(), alpha, beta)
        with pytest.raises(DomainError):
            stretched(stretched(Gaussian(), 2.0, 2.0), alpha, beta)


# ===================================================================
#  Renormalization
# ===================================================================

class TestRenormalization:

    def test_group_law(self, uv):
        g = Gaussian()
        m = renormed(renormed(g, 2.0), 3.0)
        assert isinstance(m, RenormalizedModel)
        assert m.model is g
        assert m.scale == 6.0
        assert m.flux() == 6.0
        np.testing.assert_allclose(m.visibility_point(*uv), 6.0 * g.visibility_point(*uv))

    def test_scales_image(self):
        m = renormed(Gaussian(), 0.25)
        np.testing.assert_allclose(m.intensity_point(0.3, 0.2), 0.25 * Gaussian().intensity_point(0.3, 0.2))


# ===================================================================
#  Tree helpers
# ===================================================================

class TestHelpers:

    def test_basemodel_and_unmodified(self):
        g = Gaussian()
        inner = stretched(g, 2.0, 2.0)
        m = shifted(rotated(inner, 0.2), 1.0, 1.0)
        assert basemodel(m).model is inner
        assert unmodified(m) is g
        assert basemodel(g) is g

    def test_flags_follow_child(self):
        m = shifted(Gaussian(), 1.0, 0.0)
        assert m.visanalytic and m.imanalytic and not m.isprimitive
