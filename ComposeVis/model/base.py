"""Model node base classes and capability traits.

Every node of a sky model tree carries three flags:

  * ``isprimitive``  leaf node (True) or modifier/combinator (False)
  * ``visanalytic``  closed-form visibility available
  * ``imanalytic``   closed-form intensity available

Primitives resolve their flags per class. When a primitive class is defined
its ``visibility_point``/``intensity_point`` are bound once to either the
closed-form formula or the numerical fallback, so evaluation never inspects
types at call time. Composite nodes compute their flags from their children
at construction and recurse.
"""
from __future__ import annotations

from typing import Tuple

import numpy as np

from ..exceptions import ConfigurationError


class AbstractModel:
    """Base class of every sky model node.

    All point methods are numpy-vectorized: ``u, v`` (or ``x, y``) may be
    scalars or arrays of a common shape.
    """

    isprimitive: bool = True
    visanalytic: bool = True
    imanalytic: bool = True

    # names shown by __repr__
    _repr_fields: Tuple[str, ...] = ()

    # let numpy scalars defer to __rmul__ instead of broadcasting over us
    __array_ufunc__ = None

    def visibility_point(self, u, v):
        raise NotImplementedError

    def intensity_point(self, x, y):
        raise NotImplementedError

    def flux(self) -> float:
        raise NotImplementedError

    def radialextent(self) -> float:
        raise NotImplementedError

    # ----------------- Operator sugar ------------------------
    def __mul__(self, f):
        if not np.isscalar(f):
            return NotImplemented
        from .modifiers import renormed
        return renormed(self, f)

    __rmul__ = __mul__

    def __truediv__(self, f):
        if not np.isscalar(f):
            return NotImplemented
        from .modifiers import renormed
        return renormed(self, 1.0 / f)

    def __neg__(self):
        from .modifiers import renormed
        return renormed(self, -1.0)

    def __add__(self, other):
        if not isinstance(other, AbstractModel):
            return NotImplemented
        from .combinators import added
        return added(self, other)

    def __sub__(self, other):
        if not isinstance(other, AbstractModel):
            return NotImplemented
        from .combinators import added
        return added(self, -other)

    def __repr__(self):
        fields = ", ".join(f"{name}={getattr(self, name)!r}" for name in self._repr_fields)
        return f"{type(self).__name__}({fields})"


class PrimitiveModel(AbstractModel):
    """Leaf node with its own formulas.

    Subclasses set ``visanalytic``/``imanalytic`` and implement
    ``_visibility_analytic`` and/or ``_intensity_analytic``. Primitives
    without a closed-form visibility are evaluated through a numerical
    Fourier cache attached by :func:`ComposeVis.model.modelimage.modelimage`.
    """

    isprimitive = True
    cache = None

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)
        if cls.visanalytic:
            cls.visibility_point = cls._visibility_analytic
        else:
            cls.visibility_point = PrimitiveModel._visibility_numerical
        if cls.imanalytic:
            cls.intensity_point = cls._intensity_analytic
        else:
            cls.intensity_point = PrimitiveModel._intensity_missing

    def _visibility_analytic(self, u, v):
        raise NotImplementedError

    def _intensity_analytic(self, x, y):
        raise NotImplementedError

    def _visibility_numerical(self, u, v):
        if self.cache is None:
            raise ConfigurationError(
                f"{type(self).__name__} has no closed-form visibility; "
                "build a Fourier cache with modelimage() first"
            )
        return self.cache.visibility(u, v)

    def _intensity_missing(self, x, y):
        raise ConfigurationError(
            f"{type(self).__name__} has no closed-form intensity; use intensitymap()"
        )


def isprimitive(model: AbstractModel) -> bool:
    return model.isprimitive


def visanalytic(model: AbstractModel) -> bool:
    return model.visanalytic


def imanalytic(model: AbstractModel) -> bool:
    return model.imanalytic
