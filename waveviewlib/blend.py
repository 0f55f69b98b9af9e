from __future__ import annotations

import logging
import math

import numpy as np

from .models import ViewMode

log = logging.getLogger(__name__)


def blend_series(full: np.ndarray, windowed: np.ndarray, t: float) -> np.ndarray:
    """Cross-fade the full-file and focus series.

    *t* is the progress toward the focus view: 0 returns *full*, 1 returns
    *windowed*, values in between mix linearly.  Both inputs must have the
    same length (``ValueError`` otherwise).  Always returns a new array.
    """
    full = np.asarray(full, dtype=np.float64)
    windowed = np.asarray(windowed, dtype=np.float64)
    if full.shape != windowed.shape:
        raise ValueError(
            f"cannot blend series of different lengths: {full.shape} vs {windowed.shape}"
        )

    if not math.isfinite(t):
        log.warning("Non-finite blend factor %r; showing full-file view", t)
        t = 0.0
    t = min(max(float(t), 0.0), 1.0)

    if t == 0.0:
        return full.copy()
    if t == 1.0:
        return windowed.copy()
    return full * (1.0 - t) + windowed * t


def select_view_mode(transitioning: bool, is_playing: bool, playhead: float,
                     threshold: float = 0.001) -> ViewMode:
    """Pick which series feeds the renderer this frame.

    ======================  =========  ===============  ===========
    transitioning           playing    playhead <= thr  mode
    ======================  =========  ===============  ===========
    yes                     any        any              BLEND
    no                      no         yes              FULL
    no                      any        no               FOCUS
    no                      yes        yes              FOCUS
    ======================  =========  ===============  ===========
    """
    if transitioning:
        return ViewMode.BLEND
    at_start = not math.isfinite(playhead) or playhead <= threshold
    if not is_playing and at_start:
        return ViewMode.FULL
    return ViewMode.FOCUS
