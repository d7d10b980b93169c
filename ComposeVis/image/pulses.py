"""Pixel pulses (interpolation kernels) for raster images.

A pulse turns a grid of pixel fluxes into a continuous intensity. Its
Fourier transform multiplies every visibility computed from the raster, so
it also acts as the anti-aliasing kernel of the numerical Fourier caches.
Coordinates are in pixel units: ``x`` in pixels, ``u`` in cycles per pixel.
"""
import numpy as np


class Pulse:
    """Separable 1D kernel applied along both image axes."""

    def intensity_point(self, x):
        raise NotImplementedError

    def visibility_point(self, u):
        raise NotImplementedError

    def intensity(self, x, y):
        return self.intensity_point(x) * self.intensity_point(y)

    def visibility(self, u, v):
        return self.visibility_point(u) * self.visibility_point(v)

    def __repr__(self):
        return f"{type(self).__name__}()"


class DeltaPulse(Pulse):
    """Point-like pixels; intensity lookups return the nearest pixel."""

    def intensity_point(self, x):
        return (np.abs(x) < 0.5).astype(float)

    def visibility_point(self, u):
        return np.ones_like(np.asarray(u, dtype=float))


class BoxPulse(Pulse):
    """Top-hat pixels of unit width (zeroth order B-spline)."""

    def intensity_point(self, x):
        return (np.abs(x) < 0.5).astype(float)

    def visibility_point(self, u):
        return np.sinc(u)


class SqExpPulse(Pulse):
    """Gaussian pixels with standard deviation ``epsilon`` pixels."""

    def __init__(self, epsilon: float = 1.0):
        self.epsilon = float(epsilon)

    def intensity_point(self, x):
        e = self.epsilon
        return np.exp(-0.5 * (x / e) ** 2) / (np.sqrt(2.0 * np.pi) * e)

    def visibility_point(self, u):
        return np.exp(-2.0 * (np.pi * self.epsilon * u) ** 2)

    def __repr__(self):
        return f"SqExpPulse(epsilon={self.epsilon!r})"
