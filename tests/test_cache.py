"""Tests for waveviewlib.cache — single-slot full-file decimation memo."""

from __future__ import annotations

import logging

import numpy as np
import pytest

from waveviewlib.cache import FullFileCache


class TestFullFileCache:

    def test_returns_full_decimation(self):
        data = np.linspace(-1, 1, 1000)
        out = FullFileCache().get(data, 10)
        assert len(out) == 10
        assert out[0] == pytest.approx(1.0)

    def test_repeated_calls_hit_the_cache(self):
        cache = FullFileCache()
        data = np.ones(500)
        first = cache.get(data, 50)
        assert cache.get(data, 50) is first

    def test_resolution_change_invalidates(self):
        cache = FullFileCache()
        data = np.ones(500)
        first = cache.get(data, 50)
        second = cache.get(data, 100)
        assert len(first) == 50
        assert len(second) == 100
        assert cache.entry.resolution == 100

    def test_new_buffer_invalidates(self):
        cache = FullFileCache()
        first = cache.get(np.ones(100), 10)
        second = cache.get(np.full(100, 0.5), 10)
        assert second is not first
        assert second.tolist() == [0.5] * 10

    def test_clear(self):
        cache = FullFileCache()
        data = np.ones(100)
        first = cache.get(data, 10)
        cache.clear()
        assert cache.entry is None
        second = cache.get(data, 10)
        assert second is not first
        np.testing.assert_array_equal(first, second)

    def test_cached_series_is_read_only(self):
        out = FullFileCache().get(np.ones(100), 10)
        with pytest.raises(ValueError):
            out[0] = 5.0

    @pytest.mark.parametrize("data", [None, [], np.zeros(0)])
    def test_empty_input_degrades_to_zeros(self, data, caplog):
        cache = FullFileCache()
        with caplog.at_level(logging.WARNING, logger="waveviewlib.cache"):
            out = cache.get(data, 16)
        assert out.tolist() == [0.0] * 16
        assert cache.entry is None
        assert "empty audio" in caplog.text

    @pytest.mark.parametrize("data", [["a", "b", "c"], {"left": 1.0}])
    def test_non_numeric_input_degrades_to_zeros(self, data, caplog):
        cache = FullFileCache()
        with caplog.at_level(logging.WARNING, logger="waveviewlib.cache"):
            out = cache.get(data, 4)
        assert out.tolist() == [0.0] * 4
        assert cache.entry is None
        assert "non-numeric audio" in caplog.text

    def test_non_positive_resolution_fails_fast(self):
        with pytest.raises(ValueError):
            FullFileCache().get(np.ones(10), 0)
