"""Baseline sets and closure design matrices.

A design matrix maps the phases (or log-amplitudes) of one batched
visibility vector to closure quantities, one row per triangle (or
quadrangle), one column per baseline.
"""
from __future__ import annotations

from typing import Dict, Hashable, Sequence, Tuple

import numpy as np

from ..exceptions import ConfigurationError


class ArrayConfiguration:
    """Baseline coordinates, optionally labelled by their station pair."""

    def __init__(self, u, v, ant1: Sequence[Hashable] | None = None, ant2: Sequence[Hashable] | None = None):
        u = np.asarray(u, dtype=float)
        v = np.asarray(v, dtype=float)
        if u.ndim != 1 or u.shape != v.shape:
            raise ConfigurationError(f"u and v must be 1D of equal length, got {u.shape} and {v.shape}")
        if (ant1 is None) != (ant2 is None):
            raise ConfigurationError("Give both station label arrays or neither")
        if ant1 is not None and not (len(ant1) == len(ant2) == u.size):
            raise ConfigurationError(
                f"Station labels ({len(ant1)}, {len(ant2)}) do not match {u.size} baselines"
            )
        self.u = u
        self.v = v
        self.ant1 = None if ant1 is None else list(ant1)
        self.ant2 = None if ant2 is None else list(ant2)

    def __len__(self):
        return self.u.size

    def __repr__(self):
        return f"ArrayConfiguration(<{len(self)} baselines>)"


class ClosureConfig:
    """Baselines plus a fixed (nclosures, nbaselines) design matrix."""

    def __init__(self, ac: ArrayConfiguration, designmat):
        designmat = np.asarray(designmat, dtype=float)
        if designmat.ndim != 2 or designmat.shape[1] != len(ac):
            raise ConfigurationError(
                f"Design matrix shape {designmat.shape} does not match {len(ac)} baselines"
            )
        self.ac = ac
        self.designmat = designmat

    def __len__(self):
        return self.designmat.shape[0]

    def __repr__(self):
        return f"ClosureConfig(<{len(self)} closures over {len(self.ac)} baselines>)"


def _baseline_index(ant1, ant2) -> Dict[Tuple[Hashable, Hashable], Tuple[int, float]]:
    """(station a, station b) -> (baseline column, orientation sign)."""
    if len(ant1) != len(ant2):
        raise ConfigurationError(f"Station label arrays differ in length: {len(ant1)} and {len(ant2)}")
    index = {}
    for i, (a, b) in enumerate(zip(ant1, ant2)):
        if (a, b) in index:
            raise ConfigurationError(
                f"Baseline {a!r}-{b!r} appears more than once (columns {index[(a, b)][0]} and {i}); "
                "build one design matrix per scan"
            )
        index[(a, b)] = (i, 1.0)
        index[(b, a)] = (i, -1.0)
    return index


def _lookup(index, a, b):
    try:
        return index[(a, b)]
    except KeyError:
        raise ConfigurationError(f"No baseline between stations {a!r} and {b!r}") from None


def closure_phase_designmat(ant1, ant2, triangles) -> np.ndarray:
    """Rows a-b + b-c + c-a for every triangle (a, b, c).

    A baseline stored as (b, a) enters with sign -1, since its visibility is
    the conjugate of the (a, b) one.
    """
    index = _baseline_index(ant1, ant2)
    mat = np.zeros((len(triangles), len(ant1)))
    for row, (a, b, c) in enumerate(triangles):
        for p, q in ((a, b), (b, c), (c, a)):
            col, sign = _lookup(index, p, q)
            mat[row, col] += sign
    return mat


def logclosure_amplitude_designmat(ant1, ant2, quadrangles) -> np.ndarray:
    """Rows log|V_ab| + log|V_cd| - log|V_ac| - log|V_bd| per quadrangle (a, b, c, d)."""
    index = _baseline_index(ant1, ant2)
    mat = np.zeros((len(quadrangles), len(ant1)))
    for row, (a, b, c, d) in enumerate(quadrangles):
        for (p, q), sign in (((a, b), 1.0), ((c, d), 1.0), ((a, c), -1.0), ((b, d), -1.0)):
            col, _ = _lookup(index, p, q)
            mat[row, col] += sign
    return mat
