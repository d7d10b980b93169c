"""Attach numerical Fourier caches to the numerical leaves of a model."""
from __future__ import annotations

import logging
import warnings

from .. import config
from ..exceptions import ConfigurationError, NumericalWarning
from ..fourier.algorithms import FFTAlg
from ..fourier.synthesis import intensitymap_inplace
from ..image.intensitymap import IntensityMap
from .base import AbstractModel, PrimitiveModel
from .combinators import CompositeModel
from .geometric import ContinuousImage
from .modifiers import ModifiedModel

logger = logging.getLogger(__name__)


class ModelImage(PrimitiveModel):
    """A numerical primitive together with its raster and Fourier cache.

    Visibilities come from ``cache``; intensity, flux and extent are those
    of the wrapped model.
    """

    visanalytic = False
    imanalytic = True

    def __init__(self, model: AbstractModel, image: IntensityMap, cache):
        self.model = model
        self.image = image
        self.cache = cache
        self.imanalytic = model.imanalytic

    def _intensity_analytic(self, x, y):
        return self.model.intensity_point(x, y)

    def flux(self):
        return self.model.flux()

    def radialextent(self):
        return self.model.radialextent()

    def __repr__(self):
        return f"ModelImage({self.model!r}, {self.image!r}, cache={type(self.cache).__name__})"


def _default_image(m: AbstractModel) -> IntensityMap:
    fov = config.FOV_EXTENT_FACTOR * m.radialextent()
    return IntensityMap.zeros(fov, fov, config.DEFAULT_NPIX, config.DEFAULT_NPIX)


def _build(m, image, alg, store) -> ModelImage:
    if isinstance(m, ContinuousImage) and image is None:
        image = m.image
    else:
        image = _default_image(m) if image is None else image
        intensitymap_inplace(image, m)
        expected = m.flux()
        if abs(image.flux() - expected) > config.FLUX_RTOL * abs(expected):
            warnings.warn(
                f"{type(m).__name__} image flux {image.flux():.6g} differs from model flux {expected:.6g}; "
                "refine the pixel grid or enlarge the field of view",
                NumericalWarning,
            )
    if store is None:
        cache = alg.create_cache(image)
    else:
        cache = store.get_or_build(alg, image, lambda: alg.create_cache(image))
    return ModelImage(m, image, cache)


def _pushdown(m, image, alg, store):
    if m.visanalytic or isinstance(m, ModelImage):
        return m
    if isinstance(m, ModifiedModel):
        if alg.observed and not m.uv_identity:
            raise ConfigurationError(
                f"{type(m).__name__} changes the frequencies its child is evaluated at; "
                f"{type(alg).__name__} only answers at its planned frequencies, use FFTAlg"
            )
        return m.with_model(_pushdown(m.model, image, alg, store))
    if isinstance(m, CompositeModel):
        return m.with_components(
            [_pushdown(c, None if image is None else image.similar(), alg, store) for c in m.components]
        )
    return _build(m, image, alg, store)


def modelimage(model: AbstractModel, image: IntensityMap | None = None, alg=None, store=None) -> AbstractModel:
    """Return ``model`` with every numerical leaf wrapped in a :class:`ModelImage`.

    Parameters
    ----------
    model : AbstractModel
        Model tree. Visibility-analytic trees are returned unchanged.
    image : IntensityMap, optional
        Buffer each numerical leaf is synthesized into (copies of its grid for
        every combinator child). Defaults to ``DEFAULT_NPIX`` pixels across
        ``FOV_EXTENT_FACTOR`` times the leaf's radial extent.
    alg : FourierAlgorithm, optional
        Transform strategy, ``FFTAlg()`` by default.
    store : CacheStore, optional
        Plans shared between calls, keyed by algorithm and image grid, so a
        fresh model built on every parameter update reuses them. Caches are
        rebuilt from scratch every call without it.
    """
    if model.visanalytic:
        return model
    alg = FFTAlg() if alg is None else alg
    logger.info("Caching numerical components of %s with %r", type(model).__name__, alg)
    return _pushdown(model, image, alg, store)
