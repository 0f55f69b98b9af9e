from __future__ import annotations

import math
from typing import Any

import numpy as np

from .models import WaveformBuffer


# ---------------------------------------------------------------------------
# Conversion helpers
# ---------------------------------------------------------------------------

def as_samples(data: Any) -> np.ndarray:
    """Return *data* as a 1-D floating-point array without copying when possible.

    None becomes an empty float32 array, integer data is converted to
    float64, and 2-D ``(frames, channels)`` data yields a view of the first
    channel.
    """
    if data is None:
        return np.zeros(0, dtype=np.float32)
    arr = np.asarray(data)
    if arr.ndim > 1:
        arr = arr[:, 0] if arr.shape[1] > 0 else np.zeros(0, dtype=np.float32)
    elif arr.ndim == 0:
        arr = arr.reshape(1)
    if not np.issubdtype(arr.dtype, np.floating):
        arr = arr.astype(np.float64)
    return arr


def format_time(seconds: float) -> str:
    if not math.isfinite(seconds) or seconds <= 0:
        return "00:00.000"
    m = int(seconds // 60)
    s = int(seconds % 60)
    ms = int((seconds % 1) * 1000)
    return f"{m:02d}:{s:02d}.{ms:03d}"


# ---------------------------------------------------------------------------
# Cached helpers — stored on the WaveformBuffer
# ---------------------------------------------------------------------------

def global_max_amplitude(samples: Any) -> float:
    """Peak linear magnitude of *samples*; 0.0 for empty input."""
    arr = as_samples(samples)
    if arr.size == 0:
        return 0.0
    return float(np.max(np.abs(arr)))


def get_max_amplitude(buffer: WaveformBuffer) -> float:
    """Global max amplitude of a loaded buffer. Cached."""
    if buffer.max_amplitude is None:
        buffer.max_amplitude = global_max_amplitude(buffer.samples)
    return buffer.max_amplitude


def is_silent(buffer: WaveformBuffer) -> bool:
    """True if the track is absolute silence (peak == 0)."""
    return get_max_amplitude(buffer) == 0.0
