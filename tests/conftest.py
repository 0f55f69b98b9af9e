from __future__ import annotations

import numpy as np
import pytest

from waveviewlib.models import WaveformBuffer

SR = 1000


def make_buffer(seconds: float, sample_rate: int = SR, amplitude: float = 0.8,
                freq: float = 5.0) -> WaveformBuffer:
    """Sine track of *seconds* at *sample_rate* (small rates keep tests fast)."""
    n = int(round(seconds * sample_rate))
    t = np.arange(n) / sample_rate
    samples = (amplitude * np.sin(2 * np.pi * freq * t)).astype(np.float32)
    return WaveformBuffer.from_array(samples, sample_rate)


@pytest.fixture
def ramp() -> np.ndarray:
    """Distinct, recognisable sample values 1..100."""
    return np.arange(1, 101, dtype=np.float64)


@pytest.fixture
def sine_buffer() -> WaveformBuffer:
    return make_buffer(60.0)
