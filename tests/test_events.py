"""Tests for waveviewlib.events — the session event bus."""

from __future__ import annotations

import pytest

from waveviewlib.events import EventBus, SESSION_EVENTS, SESSION_RESET, TRACK_LOADED


def test_known_events():
    assert set(SESSION_EVENTS) == {TRACK_LOADED, SESSION_RESET}


def test_emit_calls_subscribers_in_order():
    bus = EventBus()
    seen = []
    bus.subscribe(TRACK_LOADED, lambda buffer: seen.append(("a", buffer)))
    bus.subscribe(TRACK_LOADED, lambda buffer: seen.append(("b", buffer)))
    bus.emit(TRACK_LOADED, buffer="b0")
    assert seen == [("a", "b0"), ("b", "b0")]


def test_unsubscribe_is_idempotent():
    bus = EventBus()
    seen = []

    def handler():
        seen.append(True)

    bus.subscribe(SESSION_RESET, handler)
    assert bus.subscriber_count(SESSION_RESET) == 1
    bus.unsubscribe(SESSION_RESET, handler)
    bus.unsubscribe(SESSION_RESET, handler)
    bus.emit(SESSION_RESET)
    assert seen == []
    assert bus.subscriber_count(SESSION_RESET) == 0


def test_emit_without_subscribers():
    EventBus().emit(SESSION_RESET)


@pytest.mark.parametrize("method", ["subscribe", "unsubscribe"])
def test_unknown_event_name_is_rejected(method):
    bus = EventBus()
    with pytest.raises(ValueError, match="track_loadd"):
        getattr(bus, method)("track_loadd", lambda **_: None)


def test_emit_unknown_event_is_rejected():
    with pytest.raises(ValueError):
        EventBus().emit("playback_started")


def test_track_loaded_requires_buffer():
    bus = EventBus()
    seen = []
    bus.subscribe(TRACK_LOADED, lambda **data: seen.append(data))
    with pytest.raises(ValueError, match="buffer"):
        bus.emit(TRACK_LOADED)
    assert seen == []


def test_session_reset_takes_no_payload():
    with pytest.raises(ValueError):
        EventBus().emit(SESSION_RESET, buffer=None)
