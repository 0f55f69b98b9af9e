from __future__ import annotations

import logging
import math

import numpy as np

from .log import dbg
from .models import BoostState

log = logging.getLogger(__name__)


class GainNormalizer:
    """Adaptive, temporally smoothed boost for quiet focus windows.

    Each call to :meth:`apply` is one animation frame:

    1. The window peak is compared with the track's global max amplitude.
       Below ``min_threshold`` of it, the candidate boost is
       ``min_threshold / max(ratio, epsilon)``; otherwise 1.0.
    2. The target factor follows the candidate only when they differ by more
       than ``change_threshold`` (hysteresis).
    3. The current factor moves ``lerp_speed`` of the way to the target.
    4. Output values are ``series * current`` capped at
       ``global_max * max_multiplier``.

    Both factors always stay within ``[1, max_multiplier]``.
    """

    def __init__(self, min_threshold: float = 0.5, max_multiplier: float = 2.0,
                 lerp_speed: float = 0.15, change_threshold: float = 0.1,
                 epsilon: float = 0.01) -> None:
        self.min_threshold = min_threshold
        self.max_multiplier = max(1.0, max_multiplier)
        self.lerp_speed = min(max(lerp_speed, 0.0), 1.0)
        self.change_threshold = change_threshold
        self.epsilon = epsilon
        self.state = BoostState()

    def reset(self) -> None:
        self.state = BoostState()

    def _clamp(self, factor: float) -> float:
        return min(max(factor, 1.0), self.max_multiplier)

    def candidate_boost(self, raw_peak: float, global_max: float) -> float:
        ratio = raw_peak / global_max
        if ratio < self.min_threshold and raw_peak > 0:
            return self._clamp(self.min_threshold / max(ratio, self.epsilon))
        return 1.0

    def apply(self, series: np.ndarray, global_max: float) -> np.ndarray:
        values = np.asarray(series, dtype=np.float64)
        if not math.isfinite(global_max) or global_max <= 0:
            log.warning("Invalid global max amplitude %r; skipping boost", global_max)
            return values.copy()
        if values.size == 0:
            return values.copy()

        state = self.state
        raw_peak = float(np.max(values))
        candidate = self.candidate_boost(raw_peak, global_max)
        if abs(candidate - state.target_factor) > self.change_threshold:
            state.target_factor = candidate

        state.current_factor += (state.target_factor - state.current_factor) * self.lerp_speed
        state.current_factor = self._clamp(state.current_factor)

        if abs(state.current_factor - 1.0) > 0.01:
            dbg("GainNormalizer",
                f"Smooth boost - current: {state.current_factor:.3f}, "
                f"target: {state.target_factor:.3f}, raw: {raw_peak:.6f}",
                throttle=True)

        return np.minimum(values * state.current_factor,
                          global_max * self.max_multiplier)
