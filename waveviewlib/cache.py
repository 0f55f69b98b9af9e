from __future__ import annotations

import logging
from typing import Any

import numpy as np

from .audio import as_samples
from .decimate import decimate
from .log import dbg
from .models import CacheEntry

log = logging.getLogger(__name__)


class FullFileCache:
    """Single-slot memo of the whole-track decimation (the full-file view).

    The entry is reused while the resolution and the source buffer object
    stay the same.  Returned series are read-only because the same array
    is handed out on every hit.
    """

    def __init__(self) -> None:
        self._entry: CacheEntry | None = None

    @property
    def entry(self) -> CacheEntry | None:
        return self._entry

    def clear(self) -> None:
        self._entry = None

    def get(self, samples: Any, num_points: int) -> np.ndarray:
        if num_points <= 0:
            raise ValueError(f"num_points must be positive, got {num_points}")

        entry = self._entry
        if (entry is not None
                and entry.resolution == num_points
                and len(entry.series) == num_points
                and entry.source is samples):
            return entry.series

        try:
            data = as_samples(samples)
        except (TypeError, ValueError) as e:
            log.warning("Full-file view requested for non-numeric audio (%s); "
                        "returning %d zero points", e, num_points)
            return np.zeros(num_points, dtype=np.float64)
        if data.size == 0:
            log.warning("Full-file view requested for empty audio; "
                        "returning %d zero points", num_points)
            return np.zeros(num_points, dtype=np.float64)

        series = decimate(data, num_points)
        series.flags.writeable = False
        self._entry = CacheEntry(series=series, resolution=num_points,
                                 source=samples)
        dbg("FullFileCache",
            f"Full file decimated (no phantom): {len(data)} -> {num_points} points")
        return series
