"""Single-child model wrappers built from Fourier transform identities.

Each modifier maps coordinates and applies a scale before recursing:

    intensity(x, y)  = scale_image(x, y) * child.intensity(transform_image(x, y))
    visibility(u, v) = scale_uv(u, v)    * child.visibility(transform_uv(u, v))

Always build modifiers through ``shifted``, ``rotated``, ``stretched`` and
``renormed``; they merge a modifier applied on top of the same kind instead
of nesting it.
"""
from __future__ import annotations

import numpy as np

from ..exceptions import DomainError
from .base import AbstractModel


def _check_finite(name: str, *values):
    if not np.all(np.isfinite(values)):
        raise DomainError(f"{name} parameters must be finite, got {values}")


class ModifiedModel(AbstractModel):
    """Base class of modifiers; flags are inherited from the child."""

    isprimitive = False
    # True when transform_uv is the identity
    uv_identity = False

    def __init__(self, model: AbstractModel):
        self.model = model
        self.visanalytic = model.visanalytic
        self.imanalytic = model.imanalytic

    def transform_image(self, x, y):
        return x, y

    def transform_uv(self, u, v):
        return u, v

    def scale_image(self, x, y):
        return 1.0

    def scale_uv(self, u, v):
        return 1.0

    def visibility_point(self, u, v):
        ut, vt = self.transform_uv(u, v)
        return self.scale_uv(u, v) * self.model.visibility_point(ut, vt)

    def intensity_point(self, x, y):
        xt, yt = self.transform_image(x, y)
        return self.scale_image(x, y) * self.model.intensity_point(xt, yt)

    def flux(self):
        return self.model.flux()

    def radialextent(self):
        return self.model.radialextent()

    def with_model(self, model: AbstractModel) -> "ModifiedModel":
        """Same modifier parameters around a different child."""
        raise NotImplementedError

    def __repr__(self):
        fields = "".join(f", {name}={getattr(self, name)!r}" for name in self._repr_fields)
        return f"{type(self).__name__}({self.model!r}{fields})"


class ShiftedModel(ModifiedModel):
    """Model translated by (dx, dy)."""

    uv_identity = True
    _repr_fields = ('dx', 'dy')

    def __init__(self, model, dx: float, dy: float):
        _check_finite("Shift", dx, dy)
        super().__init__(model)
        self.dx = dx
        self.dy = dy

    def transform_image(self, x, y):
        return x - self.dx, y - self.dy

    def scale_uv(self, u, v):
        return np.exp(2j * np.pi * (u * self.dx + v * self.dy))

    def radialextent(self):
        return self.model.radialextent() + max(abs(self.dx), abs(self.dy))

    def with_model(self, model):
        return ShiftedModel(model, self.dx, self.dy)


class RotatedModel(ModifiedModel):
    """Model rotated by an angle stored as its sine and cosine."""

    _repr_fields = ('s', 'c')

    def __init__(self, model, s: float, c: float):
        _check_finite("Rotation", s, c)
        if not np.isclose(s * s + c * c, 1.0):
            raise DomainError(f"Rotation sine/cosine are not on the unit circle: s={s}, c={c}")
        super().__init__(model)
        self.s = s
        self.c = c

    @classmethod
    def from_angle(cls, model, xi: float):
        _check_finite("Rotation", xi)
        return cls(model, np.sin(xi), np.cos(xi))

    def posangle(self) -> float:
        return float(np.arctan2(self.s, self.c))

    def transform_image(self, x, y):
        s, c = self.s, self.c
        return c * x - s * y, s * x + c * y

    def transform_uv(self, u, v):
        s, c = self.s, self.c
        return c * u - s * v, s * u + c * v

    def with_model(self, model):
        return RotatedModel(model, self.s, self.c)


class StretchedModel(ModifiedModel):
    """Model stretched by (alpha, beta), flux preserving.

    I_s(x, y) = I(x / alpha, y / beta) / (alpha beta)
    """

    _repr_fields = ('alpha', 'beta')

    def __init__(self, model, alpha: float, beta: float):
        _check_finite("Stretch", alpha, beta)
        if alpha <= 0 or beta <= 0:
            raise DomainError(f"Stretch factors must be positive, got ({alpha}, {beta})")
        super().__init__(model)
        self.alpha = alpha
        self.beta = beta

    def transform_image(self, x, y):
        return x / self.alpha, y / self.beta

    def transform_uv(self, u, v):
        return u * self.alpha, v * self.beta

    def scale_image(self, x, y):
        return 1.0 / (self.alpha * self.beta)

    def radialextent(self):
        return float(np.hypot(self.alpha, self.beta)) * self.model.radialextent()

    def with_model(self, model):
        return StretchedModel(model, self.alpha, self.beta)


class RenormalizedModel(ModifiedModel):
    """Model with its flux multiplied by ``scale``."""

    uv_identity = True
    _repr_fields = ('scale',)

    def __init__(self, model, scale: float):
        _check_finite("Renormalization", scale)
        super().__init__(model)
        self.scale = scale

    def scale_image(self, x, y):
        return self.scale

    def scale_uv(self, u, v):
        return self.scale

    def flux(self):
        return self.scale * self.model.flux()

    def with_model(self, model):
        return RenormalizedModel(model, self.scale)


# ----------------- Smart constructors ------------------------
def shifted(model: AbstractModel, dx: float, dy: float) -> ShiftedModel:
    """Shift ``model`` by (dx, dy); shifts of shifts add up."""
    if isinstance(model, ShiftedModel):
        return ShiftedModel(model.model, model.dx + dx, model.dy + dy)
    return ShiftedModel(model, dx, dy)


def rotated(model: AbstractModel, xi: float) -> RotatedModel:
    """Rotate ``model`` by ``xi`` radians; rotations of rotations add up."""
    _check_finite("Rotation", xi)
    s, c = np.sin(xi), np.cos(xi)
    if isinstance(model, RotatedModel):
        return RotatedModel(model.model, model.s * c + model.c * s, model.c * c - model.s * s)
    return RotatedModel(model, s, c)


def stretched(model: AbstractModel, alpha: float, beta: float) -> StretchedModel:
    """Stretch ``model`` by (alpha, beta); stretches of stretches multiply."""
    if isinstance(model, StretchedModel):
        _check_finite("Stretch", alpha, beta)
        if alpha <= 0 or beta <= 0:
            raise DomainError(f"Stretch factors must be positive, got ({alpha}, {beta})")
        return StretchedModel(model.model, model.alpha * alpha, model.beta * beta)
    return StretchedModel(model, alpha, beta)


def renormed(model: AbstractModel, f: float) -> RenormalizedModel:
    """Multiply the flux of ``model`` by ``f``; renormalizations multiply."""
    if isinstance(model, RenormalizedModel):
        _check_finite("Renormalization", f)
        return RenormalizedModel(model.model, model.scale * f)
    return RenormalizedModel(model, f)


def basemodel(model: AbstractModel) -> AbstractModel:
    """Child of a modifier, or the model itself."""
    if isinstance(model, ModifiedModel):
        return model.model
    return model


def unmodified(model: AbstractModel) -> AbstractModel:
    """Strip every modifier layer."""
    while isinstance(model, ModifiedModel):
        model = model.model
    return model


def posangle(model: RotatedModel) -> float:
    return model.posangle()
