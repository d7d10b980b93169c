from .utils import *

__all__ = ['uas2rad', 'rad2uas', 'to_radians', 'lambda_to_uv', 'fwhm_to_sigma', 'sigma_to_fwhm', 'FWHM_PER_SIGMA']
