"""Pixelized intensity maps from sky models.

Image-analytic models are sampled at the pixel centers. Every other model
is synthesized from its visibilities on the regular Fourier grid of the
image:

    fouriermap -> phasedecenter -> ifftshift -> fft2 / (nx ny) -> real part

The k = 0 term of the grid is V(0, 0), so the synthesized map carries the
model flux exactly.
"""
from __future__ import annotations

import logging
from typing import Tuple

import numpy as np

from ..image.intensitymap import IntensityMap
from ..image.pulses import Pulse

logger = logging.getLogger(__name__)


def uvgrid(fovx: float, fovy: float, nx: int, ny: int) -> Tuple[np.ndarray, np.ndarray]:
    """Ascending Fourier-grid axes conjugate to an (nx, ny) image."""
    u = np.fft.fftshift(np.fft.fftfreq(nx, d=fovx / nx))
    v = np.fft.fftshift(np.fft.fftfreq(ny, d=fovy / ny))
    return u, v


def fouriermap(m, fovx: float, fovy: float, nx: int, ny: int) -> np.ndarray:
    """Model visibilities on the regular Fourier grid, shape (ny, nx)."""
    u, v = uvgrid(fovx, fovy, nx, ny)
    U, V = np.meshgrid(u, v)
    return np.asarray(m.visibility_point(U, V), dtype=complex)


def phasedecenter(vis: np.ndarray, fovx: float, fovy: float, nx: int, ny: int) -> np.ndarray:
    """Move the phase center of gridded visibilities to the first pixel.

    After this the DFT of the grid indexes pixels from 0 instead of being
    centered on the field of view.
    """
    u, v = uvgrid(fovx, fovy, nx, ny)
    x0 = -0.5 * fovx + 0.5 * fovx / nx
    y0 = -0.5 * fovy + 0.5 * fovy / ny
    U, V = np.meshgrid(u, v)
    return vis * np.exp(-2j * np.pi * (U * x0 + V * y0))


def _synthesize(m, fovx, fovy, nx, ny, pulse: Pulse) -> np.ndarray:
    vis = fouriermap(m, fovx, fovy, nx, ny)
    u, v = uvgrid(fovx, fovy, nx, ny)
    U, V = np.meshgrid(u, v)
    # pixel fluxes are the pulse amplitudes, so divide the kernel out
    vis = vis / pulse.visibility(U * fovx / nx, V * fovy / ny)
    grid = np.fft.ifftshift(phasedecenter(vis, fovx, fovy, nx, ny))
    return np.real(np.fft.fft2(grid)) / (nx * ny)


def intensitymap_inplace(img: IntensityMap, m) -> IntensityMap:
    """Overwrite every pixel of ``img`` with the pixel fluxes of ``m``."""
    ny, nx = img.shape
    if m.imanalytic:
        logger.debug("Sampling %s on a %dx%d grid", type(m).__name__, nx, ny)
        x, y = img.imagepixels()
        X, Y = np.meshgrid(x, y)
        img.data[...] = np.real(m.intensity_point(X, Y)) * img.psizex * img.psizey
    else:
        logger.debug("Synthesizing %s from a %dx%d Fourier grid", type(m).__name__, nx, ny)
        img.data[...] = _synthesize(m, img.fovx, img.fovy, nx, ny, img.pulse)
    return img


def intensitymap(m, fovx: float, fovy: float, nx: int, ny: int, pulse: Pulse | None = None) -> IntensityMap:
    """New (ny, nx) intensity map of ``m`` over the given field of view."""
    img = IntensityMap.zeros(fovx, fovy, nx, ny, pulse)
    return intensitymap_inplace(img, m)
