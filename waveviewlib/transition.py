from __future__ import annotations

import math


def ease_in_out_cubic(t: float) -> float:
    """Cubic ease-in/ease-out on [0, 1]; non-finite input maps to 0.5."""
    if not math.isfinite(t):
        return 0.5
    t = min(max(t, 0.0), 1.0)
    if t < 0.5:
        return 4 * t * t * t
    return (t - 1) * (2 * t - 2) * (2 * t - 2) + 1


def wants_focus(is_playing: bool, playhead: float, threshold: float = 0.001) -> bool:
    """True when the focus view should be shown: playing, or paused somewhere
    past the start of the track."""
    if is_playing:
        return True
    return math.isfinite(playhead) and playhead > threshold


class ViewTransition:
    """Animated blend factor between the full-file view (0) and the focus
    view (1).

    A transition eases from wherever the factor currently is to the new
    target over ``duration_ms``, so retargeting mid-flight never jumps.
    Timestamps are milliseconds from any monotonic clock.
    """

    def __init__(self, duration_ms: float = 1000) -> None:
        self.duration_ms = duration_ms
        self.progress = 0.0
        self.active = False
        self._from = 0.0
        self._to = 0.0
        self._start_ms = 0.0

    @property
    def target(self) -> float:
        return self._to if self.active else round(self.progress)

    def reset(self) -> None:
        self.progress = 0.0
        self.active = False
        self._from = self._to = 0.0

    def begin(self, now_ms: float, toward_focus: bool) -> None:
        self._from = self.progress
        self._to = 1.0 if toward_focus else 0.0
        self._start_ms = now_ms
        self.active = self._from != self._to

    def update(self, now_ms: float) -> float:
        if not self.active:
            return self.progress
        if self.duration_ms <= 0:
            raw = 1.0
        else:
            raw = (now_ms - self._start_ms) / self.duration_ms
        if raw >= 1.0:
            self.progress = self._to
            self.active = False
        else:
            self.progress = self._from + (self._to - self._from) * ease_in_out_cubic(raw)
        return self.progress

    def follow(self, now_ms: float, focus: bool) -> float:
        """Retarget if *focus* disagrees with the current target, then step."""
        goal = 1.0 if focus else 0.0
        if self.target != goal:
            self.begin(now_ms, focus)
        return self.update(now_ms)
