from .intensitymap import IntensityMap, imagepixels
from .pulses import Pulse, DeltaPulse, BoxPulse, SqExpPulse

__all__ = ['IntensityMap', 'imagepixels', 'Pulse', 'DeltaPulse', 'BoxPulse', 'SqExpPulse']
