from __future__ import annotations

import threading
from typing import Any, Callable

TRACK_LOADED = "track_loaded"
SESSION_RESET = "session_reset"

# event name -> keyword payload every emit must carry
SESSION_EVENTS: dict[str, frozenset[str]] = {
    TRACK_LOADED: frozenset({"buffer"}),
    SESSION_RESET: frozenset(),
}


def _check_event(event_type: str) -> None:
    if event_type not in SESSION_EVENTS:
        known = ", ".join(sorted(SESSION_EVENTS))
        raise ValueError(f"Unknown session event {event_type!r} (expected one of {known})")


class EventBus:
    """Publish/subscribe bus for playback session events.

    Only the events in :data:`SESSION_EVENTS` exist: ``track_loaded``
    (payload ``buffer``, a :class:`~waveviewlib.models.WaveformBuffer`) and
    ``session_reset`` (no payload).  Subscribing to or emitting any other
    name, or emitting with the wrong payload, raises ``ValueError`` so a
    typo cannot silently leave a :class:`~waveviewlib.engine.ViewEngine`
    showing a stale track.

    Thread-safe registration: handlers are called on the emitting thread,
    outside the lock.
    """

    def __init__(self) -> None:
        self._handlers: dict[str, list[Callable[..., Any]]] = {
            name: [] for name in SESSION_EVENTS
        }
        self._lock = threading.Lock()

    def subscribe(self, event_type: str, handler: Callable[..., Any]) -> None:
        _check_event(event_type)
        with self._lock:
            self._handlers[event_type].append(handler)

    def unsubscribe(self, event_type: str, handler: Callable[..., Any]) -> None:
        """Remove *handler*; unknown handlers are ignored."""
        _check_event(event_type)
        with self._lock:
            handlers = self._handlers[event_type]
            if handler in handlers:
                handlers.remove(handler)

    def subscriber_count(self, event_type: str) -> int:
        _check_event(event_type)
        with self._lock:
            return len(self._handlers[event_type])

    def emit(self, event_type: str, **data: Any) -> None:
        """Deliver *data* to every handler of *event_type*, in subscription order."""
        _check_event(event_type)
        expected = SESSION_EVENTS[event_type]
        if set(data) != expected:
            raise ValueError(
                f"{event_type!r} carries {sorted(expected) or 'no payload'}, "
                f"got {sorted(data)}"
            )
        with self._lock:
            handlers = list(self._handlers[event_type])
        for handler in handlers:
            handler(**data)
