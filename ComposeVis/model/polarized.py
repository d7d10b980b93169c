"""Full-Stokes models built from four total-intensity models."""
from __future__ import annotations

from typing import Dict, NamedTuple

import numpy as np

from ..fourier.synthesis import intensitymap
from ..image.intensitymap import IntensityMap
from ..image.pulses import Pulse
from .base import AbstractModel

STOKES = ('I', 'Q', 'U', 'V')


class StokesVisibility(NamedTuple):
    I: np.ndarray
    Q: np.ndarray
    U: np.ndarray
    V: np.ndarray


class PolarizedModel:
    """One model per Stokes parameter.

    Each of ``I``, ``Q``, ``U``, ``V`` is an ordinary model tree and is
    evaluated independently.
    """

    def __init__(self, I: AbstractModel, Q: AbstractModel, U: AbstractModel, V: AbstractModel):
        self.I = I
        self.Q = Q
        self.U = U
        self.V = V

    def visibility_point(self, u, v) -> StokesVisibility:
        return StokesVisibility(*(getattr(self, s).visibility_point(u, v) for s in STOKES))

    def intensity_point(self, x, y) -> StokesVisibility:
        return StokesVisibility(*(getattr(self, s).intensity_point(x, y) for s in STOKES))

    def flux(self) -> StokesVisibility:
        return StokesVisibility(*(getattr(self, s).flux() for s in STOKES))

    def radialextent(self) -> float:
        return max(getattr(self, s).radialextent() for s in STOKES)

    def intensitymap(self, fovx: float, fovy: float, nx: int, ny: int,
                     pulse: Pulse | None = None) -> Dict[str, IntensityMap]:
        """Stokes maps on a common grid, keyed by 'I', 'Q', 'U', 'V'."""
        return {s: intensitymap(getattr(self, s), fovx, fovy, nx, ny, pulse) for s in STOKES}

    def __repr__(self):
        return f"PolarizedModel(I={self.I!r}, Q={self.Q!r}, U={self.U!r}, V={self.V!r})"


def coherencymatrix(pm: PolarizedModel, u, v) -> np.ndarray:
    """Visibility coherency matrix in the circular basis, shape (..., 2, 2).

        [[RR, RL],     [[I + V,  Q + iU],
         [LR, LL]]  =   [Q - iU, I - V ]]
    """
    s = pm.visibility_point(u, v)
    rr = s.I + s.V
    ll = s.I - s.V
    rl = s.Q + 1j * s.U
    lr = s.Q - 1j * s.U
    return np.stack([np.stack([rr, rl], axis=-1), np.stack([lr, ll], axis=-1)], axis=-2)


def _linear_and_total(obj, u, v):
    if isinstance(obj, PolarizedModel):
        s = obj.visibility_point(u, v)
        return s.Q + 1j * s.U, s.I
    c = np.asarray(obj)
    return c[..., 0, 1], 0.5 * (c[..., 0, 0] + c[..., 1, 1])


def evpa(obj, u=None, v=None):
    """Electric-vector position angle, from a model at (u, v) or a coherency matrix."""
    p, _ = _linear_and_total(obj, u, v)
    return 0.5 * np.angle(p)


def mbreve(obj, u=None, v=None):
    """Fractional linear polarization (Q + iU) / I in the visibility domain."""
    p, i = _linear_and_total(obj, u, v)
    return p / i
