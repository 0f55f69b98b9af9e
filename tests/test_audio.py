from __future__ import annotations

import numpy as np

from waveviewlib.audio import as_samples, format_time, get_max_amplitude, global_max_amplitude, is_silent
from waveviewlib.models import WaveformBuffer


def test_as_samples_takes_first_channel_without_copy():
    stereo = np.array([[0.1, 0.9], [-0.2, 0.8], [0.3, 0.7]], dtype=np.float32)
    mono = as_samples(stereo)
    assert mono.tolist() == [stereo[0, 0], stereo[1, 0], stereo[2, 0]]
    assert np.shares_memory(mono, stereo)


def test_as_samples_converts_integers():
    assert as_samples(np.array([1, 2], dtype=np.int16)).dtype == np.float64


def test_as_samples_none():
    assert as_samples(None).size == 0


def test_global_max_amplitude():
    assert global_max_amplitude([0.1, -0.7, 0.3]) == np.float64(0.7)
    assert global_max_amplitude([]) == 0.0


def test_buffer_from_array():
    buf = WaveformBuffer.from_array(np.zeros(22050), 44100)
    assert buf.duration_sec == 0.5
    assert buf.total_samples == 22050
    assert is_silent(buf)


def test_max_amplitude_is_cached_on_buffer():
    buf = WaveformBuffer.from_array(np.array([0.25, -0.5]), 10)
    assert get_max_amplitude(buf) == 0.5
    buf.samples = np.array([0.9])
    assert get_max_amplitude(buf) == 0.5


def test_format_time():
    assert format_time(83.25) == "01:23.250"
    assert format_time(float("nan")) == "00:00.000"
