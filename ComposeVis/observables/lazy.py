"""Lazy elementwise views over baseline arrays."""
from __future__ import annotations

from typing import Callable

import numpy as np

from ..exceptions import ConfigurationError


class MappedArray:
    """``func`` applied elementwise to equally long arrays, on demand.

    Nothing is computed until an element, a slice or the whole array is
    requested. ``func`` must be numpy-vectorized; the view holds no state
    besides its inputs, so iterating it twice gives the same values.
    """

    def __init__(self, func: Callable, *arrays):
        arrays = tuple(np.asarray(a, dtype=float) for a in arrays)
        lengths = {a.shape[0] if a.ndim else None for a in arrays}
        if len(lengths) != 1 or None in lengths:
            raise ConfigurationError(f"MappedArray inputs must be 1D of equal length, got {[a.shape for a in arrays]}")
        self.func = func
        self.arrays = arrays

    def __len__(self):
        return self.arrays[0].shape[0]

    @property
    def shape(self):
        return (len(self),)

    def __getitem__(self, index):
        if isinstance(index, slice):
            return MappedArray(self.func, *(a[index] for a in self.arrays))
        return self.func(*(a[index] for a in self.arrays))

    def __iter__(self):
        for i in range(len(self)):
            yield self[i]

    def __array__(self, dtype=None, copy=None):
        out = np.asarray(self.func(*self.arrays))
        return out if dtype is None else out.astype(dtype)

    def __repr__(self):
        return f"MappedArray({getattr(self.func, '__name__', 'func')}, length={len(self)})"
