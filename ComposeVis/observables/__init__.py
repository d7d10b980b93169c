"""Observable engine: visibilities, amplitudes and closure quantities."""
from .closures import ArrayConfiguration, ClosureConfig, closure_phase_designmat, logclosure_amplitude_designmat
from .engine import (
    visibility, amplitude, bispectrum, closure_phase, logclosure_amplitude,
    visibilities, amplitudes, bispectra, closure_phases, logclosure_amplitudes,
)
from .lazy import MappedArray

__all__ = [
    'ArrayConfiguration', 'ClosureConfig', 'closure_phase_designmat', 'logclosure_amplitude_designmat',
    'visibility', 'amplitude', 'bispectrum', 'closure_phase', 'logclosure_amplitude',
    'visibilities', 'amplitudes', 'bispectra', 'closure_phases', 'logclosure_amplitudes',
    'MappedArray',
]
