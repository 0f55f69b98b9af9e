"""Tests for waveviewlib.log — env-gated per-frame tracing."""

from __future__ import annotations

import pytest

from waveviewlib import log


@pytest.fixture(autouse=True)
def fresh_tracer(monkeypatch):
    monkeypatch.delenv("WAVEVIEW_DEBUG", raising=False)
    monkeypatch.delenv("WAVEVIEW_DEBUG_INTERVAL_MS", raising=False)
    log.reset()
    yield
    log.reset()


def test_silent_by_default(capsys):
    log.dbg("GainNormalizer", "boost 1.5")
    assert capsys.readouterr().err == ""


@pytest.mark.parametrize("value", ["1", "true", "TRUE"])
def test_enabled_by_env(monkeypatch, capsys, value):
    monkeypatch.setenv("WAVEVIEW_DEBUG", value)
    log.reset()
    log.dbg("FullFileCache", "decimated")
    err = capsys.readouterr().err
    assert "FullFileCache] decimated" in err


def test_throttled_traces_are_rate_limited_per_source(monkeypatch, capsys):
    monkeypatch.setenv("WAVEVIEW_DEBUG", "1")
    monkeypatch.setenv("WAVEVIEW_DEBUG_INTERVAL_MS", "60000")
    log.reset()
    for i in range(5):
        log.dbg("GainNormalizer", f"frame {i}", throttle=True)
    log.dbg("ViewEngine", "transition", throttle=True)
    lines = capsys.readouterr().err.splitlines()
    assert len(lines) == 2
    assert "frame 0" in lines[0]
    assert "ViewEngine] transition" in lines[1]


def test_unthrottled_traces_always_print(monkeypatch, capsys):
    monkeypatch.setenv("WAVEVIEW_DEBUG", "1")
    monkeypatch.setenv("WAVEVIEW_DEBUG_INTERVAL_MS", "60000")
    log.reset()
    for _ in range(3):
        log.dbg("FullFileCache", "decimated")
    assert len(capsys.readouterr().err.splitlines()) == 3


def test_bad_interval_falls_back_to_default(monkeypatch):
    monkeypatch.setenv("WAVEVIEW_DEBUG", "1")
    monkeypatch.setenv("WAVEVIEW_DEBUG_INTERVAL_MS", "fast")
    log.reset()
    assert log.enabled()
    assert log._interval_s == log.DEFAULT_INTERVAL_MS / 1000.0
