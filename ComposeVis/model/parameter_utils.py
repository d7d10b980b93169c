"""
Parameter utilities: build model trees from plain parameter records.
Primitive types, their defaults and aliases live in models.yml.
"""
from pathlib import Path
from typing import Dict, Any, Optional, Sequence
import yaml

from ..exceptions import ConfigurationError
from ..utils.utils import fwhm_to_sigma
from . import geometric
from .combinators import added, convolved
from .modifiers import stretched, rotated, shifted, renormed


# ------------------------------------------------------------------
# Loading configuration
# ------------------------------------------------------------------

def load_model_catalog(path: Optional[Path] = None) -> Dict[str, Any]:
    path = Path(__file__).parent / "models.yml" if path is None else Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Model catalog not found: {path}")
    with open(path, 'r') as f:
        return yaml.safe_load(f)


# Placement keys shared by every primitive, mapped to canonical names
placement_alias = {
    'size': 'size', 'scale': 'size', 'sigma': 'size', 'radius_scale': 'size',
    'size_x': 'size_x', 'sigma_x': 'size_x', 'size_y': 'size_y', 'sigma_y': 'size_y',
    'fwhm': 'fwhm', 'diameter': 'diameter',
    'angle': 'angle', 'pa': 'angle', 'posangle': 'angle', 'theta': 'angle',
    'x0': 'x0', 'dx': 'x0', 'y0': 'y0', 'dy': 'y0',
    'flux': 'flux', 'f': 'flux', 'norm': 'flux', 'total_flux': 'flux',
}


def _resolve_type(name: str, models: Dict[str, Any]) -> str:
    key = str(name).lower()
    if key in models:
        return key
    for canonical, info in models.items():
        if key in [a.lower() for a in info.get('aliases', [])]:
            return canonical
    raise ConfigurationError(f"Unknown model type '{name}'. Available: {list(models.keys())}")


# ------------------------------------------------------------------
# Public API
# ------------------------------------------------------------------

def build_model(record: Dict[str, Any], catalog: Optional[Dict[str, Any]] = None):
    """Build a placed primitive from a parameter record.

    The record holds ``type`` plus constructor parameters of that type and
    any placement keys. Placement is applied in the order
    stretch -> rotation -> shift -> flux:

        {'type': 'gaussian', 'fwhm': 20.0, 'x0': 5.0, 'flux': 0.5}

    Keys are case-insensitive. ``fwhm`` sets a Gaussian-equivalent size and
    ``diameter`` sets size = diameter / 2.
    """
    catalog = load_model_catalog() if catalog is None else catalog
    models = catalog.get('models', {})
    rec = {str(k).lower(): v for k, v in record.items()}
    if 'type' not in rec:
        raise ConfigurationError(f"Model record has no 'type': {record}")
    name = _resolve_type(rec.pop('type'), models)
    info = models[name]

    params = dict(info.get('parameters') or {})
    placement: Dict[str, float] = {}
    for k, v in rec.items():
        if k in params:
            params[k] = v
        elif k in placement_alias:
            pk = placement_alias[k]
            # Width conversions
            if pk == 'fwhm':
                v, pk = float(fwhm_to_sigma(v)), 'size'
            elif pk == 'diameter':
                v, pk = 0.5 * float(v), 'size'
            placement[pk] = float(v)
        else:
            raise ConfigurationError(f"Unknown parameter '{k}' for model '{name}'")

    missing = [k for k, v in params.items() if v is None]
    if missing:
        raise ConfigurationError(f"Missing required parameters for '{name}': {missing}. Record: {record}")

    cls = getattr(geometric, info['model_type'])
    m = cls(**params)

    size = placement.get('size')
    sx = placement.get('size_x', size)
    sy = placement.get('size_y', size)
    if sx is not None or sy is not None:
        m = stretched(m, 1.0 if sx is None else sx, 1.0 if sy is None else sy)
    if placement.get('angle', 0.0) != 0.0:
        m = rotated(m, placement['angle'])
    if placement.get('x0', 0.0) != 0.0 or placement.get('y0', 0.0) != 0.0:
        m = shifted(m, placement.get('x0', 0.0), placement.get('y0', 0.0))
    if 'flux' in placement:
        m = renormed(m, placement['flux'])
    return m


def build_composite(records: Sequence[Dict[str, Any]], combine: str = 'add',
                    catalog: Optional[Dict[str, Any]] = None):
    """Build every record and combine them with ``added`` or ``convolved``."""
    catalog = load_model_catalog() if catalog is None else catalog
    models = [build_model(r, catalog) for r in records]
    if not models:
        raise ConfigurationError("build_composite needs at least one record")
    if len(models) == 1:
        return models[0]
    if combine == 'add':
        return added(*models)
    if combine == 'convolve':
        return convolved(*models)
    raise ConfigurationError(f"Unknown combine mode '{combine}'. Available: ['add', 'convolve']")

# ------------------------------------------------------------------
# Listing helpers
# ------------------------------------------------------------------

def list_available_models() -> list:
    catalog = load_model_catalog()
    return list(catalog.get('models', {}).keys())


def get_model_info(name: str) -> Dict[str, Any]:
    catalog = load_model_catalog()
    models = catalog.get('models', {})
    return models[_resolve_type(name, models)]
