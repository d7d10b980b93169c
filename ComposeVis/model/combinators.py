"""Multi-child models: sums and convolutions.

Combinators flatten on construction, so a sum of sums is a single
``AddModel`` holding every term in insertion order.
"""
from __future__ import annotations

from functools import reduce
from typing import Tuple

import numpy as np

from ..exceptions import ConfigurationError
from .base import AbstractModel
from .geometric import Gaussian
from .modifiers import stretched


class CompositeModel(AbstractModel):
    """Ordered, flattened sequence of child models."""

    isprimitive = False

    def __init__(self, components):
        components = tuple(components)
        if len(components) < 2:
            raise ConfigurationError(f"{type(self).__name__} needs at least two components")
        for c in components:
            if not isinstance(c, AbstractModel):
                raise ConfigurationError(f"Cannot combine non-model object {c!r}")
        self.components = components
        self.visanalytic = all(c.visanalytic for c in components)
        self.imanalytic = all(c.imanalytic for c in components)

    def with_components(self, components) -> "CompositeModel":
        return type(self)(components)

    def __len__(self):
        return len(self.components)

    def __repr__(self):
        return f"{type(self).__name__}({', '.join(repr(c) for c in self.components)})"


class AddModel(CompositeModel):
    """Sum of models."""

    def visibility_point(self, u, v):
        return sum(c.visibility_point(u, v) for c in self.components)

    def intensity_point(self, x, y):
        return sum(c.intensity_point(x, y) for c in self.components)

    def flux(self):
        return sum(c.flux() for c in self.components)

    def radialextent(self):
        return max(c.radialextent() for c in self.components)


class ConvolvedModel(CompositeModel):
    """Convolution of models, evaluated through the product of visibilities."""

    def __init__(self, components):
        super().__init__(components)
        # the image needs a numerical convolution
        self.imanalytic = False

    def visibility_point(self, u, v):
        return reduce(lambda acc, c: acc * c.visibility_point(u, v), self.components[1:],
                      self.components[0].visibility_point(u, v))

    def intensity_point(self, x, y):
        raise ConfigurationError("ConvolvedModel has no closed-form intensity; use intensitymap()")

    def flux(self):
        return float(np.prod([c.flux() for c in self.components]))

    def radialextent(self):
        return sum(c.radialextent() for c in self.components)


# ----------------- Smart constructors ------------------------
def _flatten(cls, models) -> Tuple[AbstractModel, ...]:
    out = []
    for m in models:
        if type(m) is cls:
            out.extend(m.components)
        else:
            out.append(m)
    return tuple(out)


def added(*models: AbstractModel) -> AddModel:
    """Sum of ``models``; nested sums are flattened."""
    return AddModel(_flatten(AddModel, models))


def convolved(*models: AbstractModel) -> ConvolvedModel:
    """Convolution of ``models``; nested convolutions are flattened."""
    return ConvolvedModel(_flatten(ConvolvedModel, models))


def smoothed(model: AbstractModel, sigma: float) -> ConvolvedModel:
    """Convolve ``model`` with a circular Gaussian of standard deviation ``sigma``."""
    return convolved(model, stretched(Gaussian(), sigma, sigma))


def components(model: AbstractModel) -> Tuple[AbstractModel, ...]:
    """Leaf terms of a model, recursing through nested combinators in order."""
    if isinstance(model, CompositeModel):
        return tuple(leaf for c in model.components for leaf in components(c))
    return (model,)
