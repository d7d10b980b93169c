"""
Configuration parameters for the ComposeVis model engine.

All tunable numerical constants are centralised here so they can be
inspected and overridden before caches are built.

Usage
-----
>>> from ComposeVis import config
>>> config.DEFAULT_PADFAC = 4          # finer Fourier grid for new FFT caches
>>> config.FLUX_RTOL = 1e-4            # stricter flux check when caching
"""

# ===========================================================================
#  Fourier cache construction
# ===========================================================================

DEFAULT_PADFAC = 2
"""Zero-padding factor applied to the image before the FFT cache is built."""

SPLINE_DEGREE = 3
"""Degree of the separable spline fitted to the gridded visibilities."""

NFFT_EPS = 1.0e-10
"""Requested relative precision of the non-uniform FFT."""

DFT_MAX_ELEMENTS = 2 ** 24
"""Largest (frequencies x pixels) product for which a direct DFT is chosen."""


# ===========================================================================
#  Default pixelization
# ===========================================================================

DEFAULT_NPIX = 256
"""Pixels per side when a cache has to allocate its own intensity map."""

FOV_EXTENT_FACTOR = 2.0
"""Default field of view as a multiple of the model radial extent."""


# ===========================================================================
#  Diagnostics
# ===========================================================================

FLUX_RTOL = 1.0e-3
"""Relative flux mismatch above which a NumericalWarning is issued."""
