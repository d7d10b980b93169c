from .base import AbstractModel, PrimitiveModel, isprimitive, visanalytic, imanalytic
from .geometric import Gaussian, Disk, Ring, MRing, Crescent, Point, ExtendedRing, ContinuousImage
from .modifiers import (
    ModifiedModel, ShiftedModel, RotatedModel, StretchedModel, RenormalizedModel,
    shifted, rotated, stretched, renormed, basemodel, unmodified, posangle,
)
from .combinators import CompositeModel, AddModel, ConvolvedModel, added, convolved, smoothed, components
from .modelimage import ModelImage, modelimage
from .polarized import PolarizedModel, StokesVisibility, coherencymatrix, evpa, mbreve
from .parameter_utils import (
    load_model_catalog,
    build_model,
    build_composite,
    list_available_models,
    get_model_info,
)

__all__ = [
    'AbstractModel', 'PrimitiveModel', 'isprimitive', 'visanalytic', 'imanalytic',
    'Gaussian', 'Disk', 'Ring', 'MRing', 'Crescent', 'Point', 'ExtendedRing', 'ContinuousImage',
    'ModifiedModel', 'ShiftedModel', 'RotatedModel', 'StretchedModel', 'RenormalizedModel',
    'shifted', 'rotated', 'stretched', 'renormed', 'basemodel', 'unmodified', 'posangle',
    'CompositeModel', 'AddModel', 'ConvolvedModel', 'added', 'convolved', 'smoothed', 'components',
    'ModelImage', 'modelimage',
    'PolarizedModel', 'StokesVisibility', 'coherencymatrix', 'evpa', 'mbreve',
    'load_model_catalog', 'build_model', 'build_composite', 'list_available_models', 'get_model_info',
]
