"""Fourier (visibility) operations package.

Provides:
  * numerical transform strategies and their caches (FFT, DFT, NUFFT)
  * image synthesis from visibilities on a regular Fourier grid
  * a lock-guarded store for reusing built caches
"""
from .algorithms import (
    FourierAlgorithm,
    FFTAlg,
    DFTAlg,
    NFFTAlg,
    FFTCache,
    NUFTCache,
    select_algorithm,
)
from .cache_store import CacheStore
from .synthesis import fouriermap, phasedecenter, intensitymap, intensitymap_inplace, uvgrid

__all__ = [
    'FourierAlgorithm', 'FFTAlg', 'DFTAlg', 'NFFTAlg', 'FFTCache', 'NUFTCache',
    'select_algorithm', 'CacheStore',
    'fouriermap', 'phasedecenter', 'intensitymap', 'intensitymap_inplace', 'uvgrid',
]
