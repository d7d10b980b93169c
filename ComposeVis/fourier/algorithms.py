"""Numerical Fourier transform strategies and the caches they build.

A strategy turns an :class:`~ComposeVis.image.IntensityMap` into a cache
answering ``cache.visibility(u, v)``:

  * ``FFTAlg``  regular Fourier grid + separable spline, any (u, v) inside
    the grid
  * ``DFTAlg``  exact DFT matrix for one fixed frequency set, O(N P)
  * ``NFFTAlg`` type-2 NUFFT for one fixed frequency set, O(P log P + N)

The last two are "observed" strategies: their caches only answer at the
frequencies they were planned for.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, Tuple

import numpy as np
from scipy.interpolate import RectBivariateSpline

from .. import config
from ..exceptions import ConfigurationError

logger = logging.getLogger(__name__)


def _as_uv(u, v) -> Tuple[np.ndarray, np.ndarray]:
    u = np.asarray(u, dtype=float)
    v = np.asarray(v, dtype=float)
    if u.shape != v.shape:
        raise ConfigurationError(f"u and v must have the same shape, got {u.shape} and {v.shape}")
    return u, v


class FourierAlgorithm:
    """Strategy interface."""

    observed = False

    def create_cache(self, image):
        raise NotImplementedError

    def cache_key(self) -> Tuple[Any, ...]:
        raise NotImplementedError


# ----------------- Regular grid: FFT + spline ------------------------
class FFTAlg(FourierAlgorithm):
    """Zero-padded FFT onto a regular Fourier grid.

    Parameters
    ----------
    padfac : int, optional
        Zero-padding factor; sets the grid spacing 1 / (padfac * fov).
    degree : int, optional
        Spline degree of the interpolant along each axis.
    """

    def __init__(self, padfac: int | None = None, degree: int | None = None):
        self.padfac = int(config.DEFAULT_PADFAC if padfac is None else padfac)
        self.degree = int(config.SPLINE_DEGREE if degree is None else degree)
        if self.padfac < 1:
            raise ConfigurationError(f"padfac must be >= 1, got {self.padfac}")

    def cache_key(self):
        return ('fft', self.padfac, self.degree)

    def map_to_uvgrid(self, image) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
        """Visibilities of ``image`` on the padded regular grid.

        Returns ``(grid, u, v)`` with ``grid[j, i]`` at ``(u[i], v[j])``, both
        axes ascending and the pixel pulse already applied.
        """
        ny, nx = image.shape
        nxp, nyp = self.padfac * nx, self.padfac * ny
        lx, ly = (nxp - nx) // 2, (nyp - ny) // 2
        padded = np.zeros((nyp, nxp))
        padded[ly:ly + ny, lx:lx + nx] = image.data

        dx, dy = image.psizex, image.psizey
        u = np.fft.fftshift(np.fft.fftfreq(nxp, d=dx))
        v = np.fft.fftshift(np.fft.fftfreq(nyp, d=dy))
        # sum_p F_p exp(+2 pi i k p / N), origin at the first padded pixel
        grid = np.fft.fftshift(np.fft.ifft2(padded)) * (nxp * nyp)

        x0 = -0.5 * image.fovx + 0.5 * dx - lx * dx
        y0 = -0.5 * image.fovy + 0.5 * dy - ly * dy
        U, V = np.meshgrid(u, v)
        grid *= np.exp(2j * np.pi * (U * x0 + V * y0))
        grid *= image.pulse.visibility(U * dx, V * dy)
        return grid, u, v

    def create_cache(self, image) -> "FFTCache":
        logger.info("Building FFT cache: %dx%d image, padfac %d", image.nx, image.ny, self.padfac)
        grid, u, v = self.map_to_uvgrid(image)
        return FFTCache(self, grid, u, v)

    def __repr__(self):
        return f"FFTAlg(padfac={self.padfac}, degree={self.degree})"


class FFTCache:
    """Separable spline over the gridded visibilities."""

    def __init__(self, alg: FFTAlg, grid: np.ndarray, u: np.ndarray, v: np.ndarray):
        self.alg = alg
        self.grid = grid
        self.u = u
        self.v = v
        k = alg.degree
        self._re = RectBivariateSpline(v, u, grid.real, kx=k, ky=k, s=0)
        self._im = RectBivariateSpline(v, u, grid.imag, kx=k, ky=k, s=0)

    def visibility(self, u, v):
        u, v = _as_uv(u, v)
        outside = (u < self.u[0]) | (u > self.u[-1]) | (v < self.v[0]) | (v > self.v[-1])
        if np.any(outside):
            raise ConfigurationError(
                f"Frequencies outside the cached grid |u| <= {self.u[-1]:.4g}, |v| <= {self.v[-1]:.4g}; "
                "use a finer image (smaller pixels)"
            )
        return self._re.ev(v, u) + 1j * self._im.ev(v, u)

    def with_image(self, image) -> "FFTCache":
        """Cache of another raster; the FFT grid has no plan worth keeping."""
        return self.alg.create_cache(image)


# ----------------- Fixed frequency sets: DFT / NUFFT ------------------------
class ObservedAlgorithm(FourierAlgorithm):
    """Strategy planned for a fixed set of frequencies."""

    observed = True

    def __init__(self, u, v):
        u, v = _as_uv(u, v)
        if u.ndim != 1:
            raise ConfigurationError(f"Frequency set must be 1D, got shape {u.shape}")
        self.u = u
        self.v = v

    def plan(self, image):
        raise NotImplementedError

    def apply(self, plan, data: np.ndarray) -> np.ndarray:
        raise NotImplementedError

    def create_cache(self, image) -> "NUFTCache":
        logger.info("Building %s cache: %dx%d image, %d frequencies",
                    type(self).__name__, image.nx, image.ny, self.u.size)
        plan = self.plan(image)
        phases = image.pulse.visibility(self.u * image.psizex, self.v * image.psizey)
        return NUFTCache(self, plan, phases, image)


class DFTAlg(ObservedAlgorithm):
    """Direct Fourier sum through a dense (frequencies x pixels) matrix."""

    def cache_key(self):
        return ('dft', self.u.tobytes(), self.v.tobytes())

    def plan(self, image) -> np.ndarray:
        x, y = image.imagepixels()
        X, Y = np.meshgrid(x, y)
        return np.exp(2j * np.pi * (np.outer(self.u, X.ravel()) + np.outer(self.v, Y.ravel())))

    def apply(self, plan, data):
        return plan @ data.ravel()

    def __repr__(self):
        return f"DFTAlg(<{self.u.size} frequencies>)"


class NFFTAlg(ObservedAlgorithm):
    """Non-uniform FFT through jax_finufft."""

    def __init__(self, u, v, eps: float | None = None):
        super().__init__(u, v)
        self.eps = float(config.NFFT_EPS if eps is None else eps)

    def cache_key(self):
        return ('nfft', self.u.tobytes(), self.v.tobytes(), self.eps)

    def plan(self, image):
        from .nfft import NUFFTTransformer
        return NUFFTTransformer(self.u, self.v, image.nx, image.ny,
                                image.psizex, image.psizey, eps=self.eps)

    def apply(self, plan, data):
        return plan.image_to_vis(data)

    def __repr__(self):
        return f"NFFTAlg(<{self.u.size} frequencies>, eps={self.eps})"


class NUFTCache:
    """Visibilities of one image at one fixed frequency set.

    Only the planned frequencies can be queried. ``with_image`` reuses the
    plan for another raster on the same grid.
    """

    def __init__(self, alg: ObservedAlgorithm, plan, phases: np.ndarray, image):
        self.alg = alg
        self.plan = plan
        self.phases = phases
        self.pulse = image.pulse
        self.grid_key = image.grid_key()
        self.vis = alg.apply(plan, image.data) * phases
        self._index: Dict[Tuple[float, float], int] = {
            (uu, vv): i for i, (uu, vv) in enumerate(zip(alg.u.tolist(), alg.v.tolist()))
        }

    def with_image(self, image) -> "NUFTCache":
        if image.grid_key() != self.grid_key:
            raise ConfigurationError(f"Image grid {image.grid_key()} does not match planned grid {self.grid_key}")
        cache = object.__new__(NUFTCache)
        cache.alg, cache.plan, cache.grid_key, cache._index = self.alg, self.plan, self.grid_key, self._index
        cache.pulse = image.pulse
        cache.phases = image.pulse.visibility(self.alg.u * image.psizex, self.alg.v * image.psizey)
        cache.vis = self.alg.apply(self.plan, image.data) * cache.phases
        return cache

    def visibility(self, u, v):
        u, v = _as_uv(u, v)
        if u.shape == self.alg.u.shape and np.array_equal(u, self.alg.u) and np.array_equal(v, self.alg.v):
            return self.vis.copy()
        idx = [self._index.get(key) for key in zip(u.ravel().tolist(), v.ravel().tolist())]
        if any(i is None for i in idx):
            raise ConfigurationError(
                f"{type(self.alg).__name__} cache queried at frequencies it was not planned for; rebuild it"
            )
        return self.vis[np.asarray(idx, dtype=int)].reshape(u.shape)


def select_algorithm(u, v, nx: int, ny: int) -> ObservedAlgorithm:
    """DFT for small problems, NUFFT once the dense matrix gets large."""
    u, v = _as_uv(u, v)
    if u.size * nx * ny <= config.DFT_MAX_ELEMENTS:
        return DFTAlg(u, v)
    return NFFTAlg(u, v)
