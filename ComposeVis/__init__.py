"""
ComposeVis: composable sky models for radio interferometry
==========================================================

Build sky-brightness models from primitive shapes, modifiers (shift,
rotate, stretch, renormalize) and combinators (sum, convolution), and
evaluate them as visibilities, closure quantities or pixelized images.
Models without closed-form visibilities are evaluated through cached
numerical Fourier transforms (FFT + spline, DFT or NUFFT).

Quick start
-----------
>>> from ComposeVis import Gaussian, Ring, stretched, shifted, smoothed
>>> from ComposeVis import amplitude, intensitymap, config
>>> m = 0.5 * smoothed(stretched(Ring(), 20.0, 20.0), 1.7) + 0.5 * shifted(stretched(Gaussian(), 8.5, 8.5), 10.0, 0.0)
>>> amplitude(m, 0.0, 0.0)      # total flux
>>> img = intensitymap(m, 120.0, 120.0, 256, 256)
"""

from .model import *
from .model import __all__ as _model_all
from .image import IntensityMap, imagepixels, Pulse, DeltaPulse, BoxPulse, SqExpPulse
from .fourier import (
    FFTAlg, DFTAlg, NFFTAlg, select_algorithm, CacheStore,
    fouriermap, phasedecenter, intensitymap, intensitymap_inplace,
)
from .observables import *
from .observables import __all__ as _observables_all
from .exceptions import ComposeVisError, ConfigurationError, DomainError, NumericalWarning
from . import config
from . import utils

__all__ = list(_model_all) + list(_observables_all) + [
    "IntensityMap", "imagepixels", "Pulse", "DeltaPulse", "BoxPulse", "SqExpPulse",
    "FFTAlg", "DFTAlg", "NFFTAlg", "select_algorithm", "CacheStore",
    "fouriermap", "phasedecenter", "intensitymap", "intensitymap_inplace",
    "ComposeVisError", "ConfigurationError", "DomainError", "NumericalWarning",
    "config", "utils",
]
