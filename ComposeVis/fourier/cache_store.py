"""Caller-owned memo of built Fourier plans."""
from __future__ import annotations

import logging
import threading
from typing import Callable, Dict, Tuple

logger = logging.getLogger(__name__)


class CacheStore:
    """Build each (algorithm, image grid) plan exactly once.

    Keys hold no model, so fresh model instances created on every parameter
    update share one plan. The first request for a key returns the cache
    built from its image; later requests return ``cache.with_image(image)``,
    which reuses the plan and recomputes only the visibilities. Builds happen
    under a lock, so concurrent requests for the same key never race. The
    store grows by one entry per distinct frequency set and grid.
    """

    def __init__(self):
        self._entries: Dict[Tuple, object] = {}
        self._lock = threading.Lock()

    @staticmethod
    def key(alg, image) -> Tuple:
        return (alg.cache_key(), image.grid_key())

    def get_or_build(self, alg, image, build: Callable[[], object]):
        key = self.key(alg, image)
        with self._lock:
            cache = self._entries.get(key)
            if cache is None:
                logger.debug("Plan miss for %r on grid %s", alg, image.grid_key())
                cache = build()
                self._entries[key] = cache
                return cache
        return cache.with_image(image)

    def __contains__(self, key):
        return key in self._entries

    def __len__(self):
        return len(self._entries)

    def clear(self):
        with self._lock:
            self._entries.clear()
