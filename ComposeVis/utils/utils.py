import numpy as np

from astropy import units as u

# Gaussian FWHM / standard deviation ratio
FWHM_PER_SIGMA = 2.0 * np.sqrt(2.0 * np.log(2.0))

# ------------------------ Angular units ------------------------
def uas2rad(x):
    """Microarcseconds to radians."""
    return (np.asarray(x) * u.microarcsecond).to_value(u.rad)

def rad2uas(x):
    """Radians to microarcseconds."""
    return (np.asarray(x) * u.rad).to_value(u.microarcsecond)

def to_radians(x, unit='uas'):
    """Angle in ``unit`` (any astropy angular unit or its name) to radians."""
    return (np.asarray(x) * u.Unit(unit)).to_value(u.rad)

def lambda_to_uv(x, unit='Glambda'):
    """Baseline length in (kilo/mega/giga) wavelengths to wavelengths.

    Accepts 'lambda', 'klambda', 'Mlambda' and 'Glambda'.
    """
    scale = {'lambda': 1.0, 'klambda': 1e3, 'Mlambda': 1e6, 'Glambda': 1e9}
    if unit not in scale:
        raise ValueError(f"Unknown baseline unit '{unit}'. Available: {list(scale)}")
    return np.asarray(x, dtype=float) * scale[unit]


# ------------------------ Gaussian widths ------------------------
def fwhm_to_sigma(fwhm):
    return np.asarray(fwhm) / FWHM_PER_SIGMA

def sigma_to_fwhm(sigma):
    return np.asarray(sigma) * FWHM_PER_SIGMA
