from __future__ import annotations

from typing import Tuple

import numpy as np

from ..exceptions import ConfigurationError
from .pulses import DeltaPulse, Pulse


def imagepixels(fovx: float, fovy: float, nx: int, ny: int) -> Tuple[np.ndarray, np.ndarray]:
    """Pixel-center coordinates of a centered grid.

    Centers run from ``-fov/2 + d/2`` to ``fov/2 - d/2`` in steps of
    ``d = fov/n`` along each axis.
    """
    dx = fovx / nx
    dy = fovy / ny
    x = -0.5 * fovx + 0.5 * dx + dx * np.arange(nx)
    y = -0.5 * fovy + 0.5 * dy + dy * np.arange(ny)
    return x, y


class IntensityMap:
    """Pixelized intensity: a grid of pixel fluxes on a centered field of view.

    Attributes
    ----------
    data : np.ndarray
        (ny, nx) array of pixel fluxes. Row 0 is the lowest ``y``, column 0
        the lowest ``x``.
    fovx, fovy : float
        Field of view along each axis, in the model's length unit.
    pulse : Pulse
        Pixel kernel used when the map is treated as a continuous image.
    """

    def __init__(self, data, fovx: float, fovy: float, pulse: Pulse | None = None):
        data = np.asarray(data, dtype=float)
        if data.ndim != 2:
            raise ConfigurationError(f"IntensityMap needs a 2D array, got shape {data.shape}")
        if not (fovx > 0 and fovy > 0):
            raise ConfigurationError(f"Field of view must be positive, got ({fovx}, {fovy})")
        self.data = data
        self.fovx = float(fovx)
        self.fovy = float(fovy)
        self.pulse = DeltaPulse() if pulse is None else pulse

    @classmethod
    def zeros(cls, fovx: float, fovy: float, nx: int, ny: int, pulse: Pulse | None = None):
        return cls(np.zeros((ny, nx)), fovx, fovy, pulse)

    # ----------------- Grid geometry ------------------------
    @property
    def shape(self) -> Tuple[int, int]:
        return self.data.shape

    @property
    def nx(self) -> int:
        return self.data.shape[1]

    @property
    def ny(self) -> int:
        return self.data.shape[0]

    @property
    def psizex(self) -> float:
        return self.fovx / self.nx

    @property
    def psizey(self) -> float:
        return self.fovy / self.ny

    def imagepixels(self) -> Tuple[np.ndarray, np.ndarray]:
        return imagepixels(self.fovx, self.fovy, self.nx, self.ny)

    def grid_key(self) -> Tuple[int, int, float, float]:
        """Hashable description of the pixel grid (not of its content)."""
        return (self.nx, self.ny, self.fovx, self.fovy)

    # ----------------- Content ------------------------
    def flux(self) -> float:
        return float(self.data.sum())

    def centroid(self) -> Tuple[float, float]:
        x, y = self.imagepixels()
        f = self.data.sum()
        return float((self.data.sum(axis=0) * x).sum() / f), float((self.data.sum(axis=1) * y).sum() / f)

    def similar(self) -> "IntensityMap":
        """Zeroed map on the same grid with the same pulse."""
        return IntensityMap(np.zeros_like(self.data), self.fovx, self.fovy, self.pulse)

    def __array__(self, dtype=None, copy=None):
        if dtype is None:
            return self.data
        return self.data.astype(dtype)

    def __repr__(self):
        return (f"IntensityMap(nx={self.nx}, ny={self.ny}, fovx={self.fovx!r}, "
                f"fovy={self.fovy!r}, pulse={self.pulse!r})")
