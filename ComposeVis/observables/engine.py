"""Visibility-domain observables of a model.

Single-point functions take scalar (or equally shaped array) coordinates.
The plural functions take arrays of baselines, triangles or quadrangles:
for visibility-analytic models they return a lazy :class:`MappedArray`;
for numerical models they evaluate every visibility in one batched call
and return arrays. Closure phases and log-closure amplitudes also accept a
:class:`ClosureConfig` and then apply its design matrix to one visibility
vector.
"""
from __future__ import annotations

from functools import partial
from typing import List, Sequence, Tuple

import numpy as np

from ..exceptions import ConfigurationError
from .closures import ArrayConfiguration, ClosureConfig
from .lazy import MappedArray

UV = Tuple[np.ndarray, np.ndarray]


# ----------------- Single point ------------------------
def visibility(m, u, v):
    return m.visibility_point(u, v)


def amplitude(m, u, v):
    return np.abs(m.visibility_point(u, v))


def bispectrum(m, uv1: UV, uv2: UV, uv3: UV):
    """Product of the visibilities around a closed triangle."""
    return _bispectrum_flat(m, *uv1, *uv2, *uv3)


def closure_phase(m, uv1: UV, uv2: UV, uv3: UV):
    """Phase of the bispectrum, in (-pi, pi]."""
    return np.angle(bispectrum(m, uv1, uv2, uv3))


def logclosure_amplitude(m, uv1: UV, uv2: UV, uv3: UV, uv4: UV):
    """log(|V1 V2| / |V3 V4|)."""
    return _logclosure_flat(m, *uv1, *uv2, *uv3, *uv4)


def _bispectrum_flat(m, u1, v1, u2, v2, u3, v3):
    return m.visibility_point(u1, v1) * m.visibility_point(u2, v2) * m.visibility_point(u3, v3)


def _closure_phase_flat(m, u1, v1, u2, v2, u3, v3):
    return np.angle(_bispectrum_flat(m, u1, v1, u2, v2, u3, v3))


def _logclosure_flat(m, u1, v1, u2, v2, u3, v3, u4, v4):
    a1 = np.abs(m.visibility_point(u1, v1))
    a2 = np.abs(m.visibility_point(u2, v2))
    a3 = np.abs(m.visibility_point(u3, v3))
    a4 = np.abs(m.visibility_point(u4, v4))
    return np.log(a1 * a2 / (a3 * a4))


# ----------------- Vectorized ------------------------
def _flatten_pairs(pairs: Sequence[UV]) -> List[np.ndarray]:
    arrays = []
    for pair in pairs:
        if len(pair) != 2:
            raise ConfigurationError(f"Expected (u, v) pairs, got {pair!r}")
        arrays.extend(np.asarray(a, dtype=float) for a in pair)
    if any(a.ndim != 1 for a in arrays) or len({a.size for a in arrays}) != 1:
        raise ConfigurationError(f"Baseline arrays must be 1D of equal length, got {[a.shape for a in arrays]}")
    return arrays


def _batched_visibilities(m, arrays: List[np.ndarray]) -> List[np.ndarray]:
    """Visibilities of every (u, v) pair in ``arrays`` from one model call."""
    us, vs = arrays[0::2], arrays[1::2]
    vis = np.asarray(m.visibility_point(np.concatenate(us), np.concatenate(vs)))
    return np.split(vis, len(us))


def _uv_of(u, v) -> List[np.ndarray]:
    if isinstance(u, ArrayConfiguration):
        return [u.u, u.v]
    if v is None:
        raise ConfigurationError("Give both u and v, or an ArrayConfiguration")
    return _flatten_pairs([(u, v)])


def visibilities(m, u, v=None):
    """Visibilities at every baseline; ``u`` may be an ArrayConfiguration."""
    u, v = _uv_of(u, v)
    if m.visanalytic:
        return MappedArray(partial(visibility, m), u, v)
    return np.asarray(m.visibility_point(u, v))


def amplitudes(m, u, v=None):
    u, v = _uv_of(u, v)
    if m.visanalytic:
        return MappedArray(partial(amplitude, m), u, v)
    return np.abs(m.visibility_point(u, v))


def bispectra(m, uv1: UV, uv2: UV, uv3: UV):
    arrays = _flatten_pairs([uv1, uv2, uv3])
    if m.visanalytic:
        return MappedArray(partial(_bispectrum_flat, m), *arrays)
    v1, v2, v3 = _batched_visibilities(m, arrays)
    return v1 * v2 * v3


def _wrap(phase):
    return np.angle(np.exp(1j * phase))


def closure_phases(m, *args):
    """Closure phases from three (u, v) array pairs, or from a ClosureConfig."""
    if len(args) == 1 and isinstance(args[0], ClosureConfig):
        cc = args[0]
        vis = np.asarray(visibilities(m, cc.ac))
        return _wrap(cc.designmat @ np.angle(vis))
    if len(args) != 3:
        raise ConfigurationError(f"closure_phases takes three (u, v) pairs or a ClosureConfig, got {len(args)} arguments")
    arrays = _flatten_pairs(args)
    if m.visanalytic:
        return MappedArray(partial(_closure_phase_flat, m), *arrays)
    v1, v2, v3 = _batched_visibilities(m, arrays)
    return np.angle(v1 * v2 * v3)


def logclosure_amplitudes(m, *args):
    """Log-closure amplitudes from four (u, v) array pairs, or from a ClosureConfig."""
    if len(args) == 1 and isinstance(args[0], ClosureConfig):
        cc = args[0]
        vis = np.asarray(visibilities(m, cc.ac))
        return cc.designmat @ np.log(np.abs(vis))
    if len(args) != 4:
        raise ConfigurationError(
            f"logclosure_amplitudes takes four (u, v) pairs or a ClosureConfig, got {len(args)} arguments"
        )
    arrays = _flatten_pairs(args)
    if m.visanalytic:
        return MappedArray(partial(_logclosure_flat, m), *arrays)
    a1, a2, a3, a4 = (np.abs(x) for x in _batched_visibilities(m, arrays))
    return np.log(a1 * a2 / (a3 * a4))
