"""Primitive geometric models.

All primitives are unit-flux shapes of unit size; use the modifiers to
place, scale and orient them. Visibilities follow

    V(u, v) = \\int I(x, y) exp(+2 pi i (u x + v y)) dx dy
"""
from __future__ import annotations

from typing import Sequence

import numpy as np
from scipy import special, stats

from ..exceptions import DomainError
from ..image.intensitymap import IntensityMap
from .base import PrimitiveModel

# query points evaluated per block by ContinuousImage
_POINT_BLOCK = 4096


def _polar(u, v):
    return np.hypot(u, v), np.arctan2(v, u)


def _jinc(k):
    """2 J1(k) / k with the k -> 0 limit."""
    k = np.asarray(k, dtype=float)
    safe = np.where(k == 0.0, 1.0, k)
    return np.where(k == 0.0, 1.0, 2.0 * special.j1(safe) / safe)


# ----------------- Analytic visibilities ------------------------
class Gaussian(PrimitiveModel):
    """Circular Gaussian with unit standard deviation."""

    visanalytic = True
    imanalytic = True

    def _intensity_analytic(self, x, y):
        return np.exp(-0.5 * (x * x + y * y)) / (2.0 * np.pi)

    def _visibility_analytic(self, u, v):
        return np.exp(-2.0 * np.pi ** 2 * (u * u + v * v)) + 0j

    def flux(self):
        return 1.0

    def radialextent(self):
        return 5.0


class Disk(PrimitiveModel):
    """Uniform disk of unit radius."""

    visanalytic = True
    imanalytic = True

    def _intensity_analytic(self, x, y):
        return np.where(np.hypot(x, y) < 1.0, 1.0 / np.pi, 0.0)

    def _visibility_analytic(self, u, v):
        return _jinc(2.0 * np.pi * np.hypot(u, v)) + 0j

    def flux(self):
        return 1.0

    def radialextent(self):
        return 3.0


class Ring(PrimitiveModel):
    """Infinitely thin ring of unit radius."""

    visanalytic = True
    imanalytic = False

    def _visibility_analytic(self, u, v):
        return special.j0(2.0 * np.pi * np.hypot(u, v)) + 0j

    def flux(self):
        return 1.0

    def radialextent(self):
        return 1.5


class MRing(PrimitiveModel):
    """Thin unit ring with azimuthal brightness modes.

    I(r, theta) = delta(r - 1) / (2 pi) * (1 + sum_n alpha_n cos(n theta) + beta_n sin(n theta))

    Parameters
    ----------
    alpha, beta : sequence of float
        Cosine and sine amplitudes of modes n = 1 .. len(alpha).
    """

    visanalytic = True
    imanalytic = False
    _repr_fields = ('alpha', 'beta')

    def __init__(self, alpha: Sequence[float], beta: Sequence[float]):
        alpha = tuple(float(a) for a in np.atleast_1d(alpha))
        beta = tuple(float(b) for b in np.atleast_1d(beta))
        if len(alpha) != len(beta):
            raise DomainError(f"MRing needs as many alpha as beta modes, got {len(alpha)} and {len(beta)}")
        self.alpha = alpha
        self.beta = beta

    def _visibility_analytic(self, u, v):
        rho, phi = _polar(u, v)
        k = 2.0 * np.pi * rho
        vis = special.j0(k) + 0j
        for n, (a, b) in enumerate(zip(self.alpha, self.beta), start=1):
            vis = vis + (1j ** n) * special.jv(n, k) * (a * np.cos(n * phi) + b * np.sin(n * phi))
        return vis

    def flux(self):
        return 1.0

    def radialextent(self):
        return 1.5


class Crescent(PrimitiveModel):
    """Disk with an offset inner disk removed, normalised to unit flux.

    The inner disk is shifted by ``shift`` along +x and keeps a fraction
    ``floor`` of the outer brightness.
    """

    visanalytic = True
    imanalytic = True
    _repr_fields = ('radius_outer', 'radius_inner', 'shift', 'floor')

    def __init__(self, radius_outer: float, radius_inner: float, shift: float, floor: float = 0.0):
        if not 0.0 < radius_inner < radius_outer:
            raise DomainError(f"Crescent needs 0 < radius_inner < radius_outer, got {radius_inner}, {radius_outer}")
        if shift < 0.0 or shift + radius_inner > radius_outer:
            raise DomainError("Crescent inner disk must lie inside the outer disk")
        if not 0.0 <= floor <= 1.0:
            raise DomainError(f"Crescent floor must be in [0, 1], got {floor}")
        self.radius_outer = float(radius_outer)
        self.radius_inner = float(radius_inner)
        self.shift = float(shift)
        self.floor = float(floor)
        self._norm = np.pi * (self.radius_outer ** 2 - (1.0 - self.floor) * self.radius_inner ** 2)

    def _intensity_analytic(self, x, y):
        outer = np.hypot(x, y) < self.radius_outer
        inner = np.hypot(x - self.shift, y) < self.radius_inner
        return (outer - (1.0 - self.floor) * inner) / self._norm

    def _visibility_analytic(self, u, v):
        k = 2.0 * np.pi * np.hypot(u, v)
        ro, ri = self.radius_outer, self.radius_inner
        outer = np.pi * ro * ro * _jinc(k * ro)
        inner = np.pi * ri * ri * _jinc(k * ri) * np.exp(2j * np.pi * u * self.shift)
        return (outer - (1.0 - self.floor) * inner) / self._norm

    def flux(self):
        return 1.0

    def radialextent(self):
        return 1.5 * self.radius_outer


class Point(PrimitiveModel):
    """Unit point source at the origin."""

    visanalytic = True
    imanalytic = False

    def _visibility_analytic(self, u, v):
        return np.ones(np.broadcast(u, v).shape, dtype=complex)

    def flux(self):
        return 1.0

    def radialextent(self):
        return 1.0


# ----------------- Numerical visibilities ------------------------
class ExtendedRing(PrimitiveModel):
    """Ring with an inverse-gamma radial profile.

    The radial flux density 2 pi r I(r) is an inverse-gamma distribution with
    shape ``shape`` whose mode sits at ``radius``. Only the image has a
    closed form; visibilities need a numerical Fourier cache.
    """

    visanalytic = False
    imanalytic = True
    _repr_fields = ('radius', 'shape')

    def __init__(self, radius: float, shape: float):
        if not (radius > 0 and shape > 0):
            raise DomainError(f"ExtendedRing needs positive radius and shape, got {radius}, {shape}")
        self.radius = float(radius)
        self.shape = float(shape)
        self._scale = self.radius * (self.shape + 1.0)

    def _intensity_analytic(self, x, y):
        r = np.hypot(x, y)
        a, b = self.shape, self._scale
        safe = np.where(r > 0.0, r, 1.0)
        logi = a * np.log(b) - (a + 2.0) * np.log(safe) - b / safe - np.log(2.0 * np.pi) - special.gammaln(a)
        return np.where(r > 0.0, np.exp(logi), 0.0)

    def flux(self):
        return 1.0

    def radialextent(self):
        return float(stats.invgamma.ppf(0.9999, self.shape, scale=self._scale))


class ContinuousImage(PrimitiveModel):
    """Raster model: an intensity map made continuous by its pulse."""

    visanalytic = False
    imanalytic = True

    def __init__(self, image: IntensityMap):
        self.image = image

    def _intensity_analytic(self, x, y):
        img = self.image
        xp, yp = img.imagepixels()
        dx, dy = img.psizex, img.psizey
        x, y = np.broadcast_arrays(np.asarray(x, dtype=float), np.asarray(y, dtype=float))
        xf, yf = x.ravel(), y.ravel()
        out = np.empty(xf.size)
        # separable kernel, one block of query points at a time
        for start in range(0, xf.size, _POINT_BLOCK):
            sl = slice(start, start + _POINT_BLOCK)
            kx = img.pulse.intensity_point((xf[sl, None] - xp[None, :]) / dx)
            ky = img.pulse.intensity_point((yf[sl, None] - yp[None, :]) / dy)
            out[sl] = np.sum((ky @ img.data) * kx, axis=1)
        return out.reshape(x.shape) / (dx * dy)

    def flux(self):
        return self.image.flux()

    def radialextent(self):
        return 0.5 * max(self.image.fovx, self.image.fovy)

    def __repr__(self):
        return f"ContinuousImage({self.image!r})"
