from __future__ import annotations

import logging
import math
from typing import Any

import numpy as np

from .audio import get_max_amplitude, is_silent
from .blend import blend_series, select_view_mode
from .cache import FullFileCache
from .config import ViewConfig
from .decimate import decimate
from .events import EventBus, SESSION_RESET, TRACK_LOADED
from .gain import GainNormalizer
from .log import dbg
from .models import ViewFrame, ViewMode, WaveformBuffer
from .transition import ViewTransition, wants_focus
from .window import prepare_window

log = logging.getLogger(__name__)


def placeholder_series(num_points: int) -> np.ndarray:
    """Gentle sinusoidal ring shown while no track is loaded."""
    i = np.arange(num_points, dtype=np.float64)
    return np.sin(i / num_points * np.pi * 8) * 0.5 + 0.5


class ViewEngine:
    """Per-session owner of the waveform view pipeline.

    Holds exactly one full-file cache slot, one boost state and one view
    transition.  Create one engine per player; call :meth:`frame` (or
    :meth:`tick`) once per animation frame.

    Not thread-safe: confine each engine to the thread running the frame
    loop.  Events delivered through an :class:`EventBus` from another
    thread must be marshalled onto that thread by the caller.
    """

    def __init__(self, config: ViewConfig | dict[str, Any] | None = None,
                 bus: EventBus | None = None) -> None:
        if not isinstance(config, ViewConfig):
            config = ViewConfig.from_config(config)
        self.config = config
        self.cache = FullFileCache()
        self.gain = GainNormalizer(
            min_threshold=config.boost_min_threshold,
            max_multiplier=config.boost_max_multiplier,
            lerp_speed=config.boost_lerp_speed,
            change_threshold=config.boost_change_threshold,
            epsilon=config.boost_epsilon,
        )
        self.transition = ViewTransition(config.transition_duration_ms)
        self.buffer: WaveformBuffer | None = None
        self._max_amp = 1.0
        self._bus = bus
        if bus is not None:
            bus.subscribe(TRACK_LOADED, self._on_track_loaded)
            bus.subscribe(SESSION_RESET, self._on_session_reset)

    # -- session --------------------------------------------------------

    @property
    def max_amp(self) -> float:
        return self._max_amp

    def load(self, buffer: WaveformBuffer) -> None:
        """Attach a newly loaded track; drops cached views and boost."""
        self.buffer = buffer
        self.cache.clear()
        self.gain.reset()
        peak = get_max_amplitude(buffer)
        if is_silent(buffer) or not math.isfinite(peak):
            log.warning("Track has no usable peak amplitude (%r); normalizing to 1.0", peak)
            peak = 1.0
        self._max_amp = peak
        log.debug("Loaded %d samples @ %d Hz, %.3f s, max amp %.6f",
                  buffer.total_samples, buffer.sample_rate,
                  buffer.duration_sec, peak)

    def reset(self) -> None:
        """Forget the track and return every piece of state to its initial value."""
        self.buffer = None
        self._max_amp = 1.0
        self.cache.clear()
        self.gain.reset()
        self.transition.reset()

    def close(self) -> None:
        """Detach from the event bus."""
        if self._bus is not None:
            self._bus.unsubscribe(TRACK_LOADED, self._on_track_loaded)
            self._bus.unsubscribe(SESSION_RESET, self._on_session_reset)
            self._bus = None

    def _on_track_loaded(self, buffer: WaveformBuffer, **_: Any) -> None:
        self.load(buffer)

    def _on_session_reset(self, **_: Any) -> None:
        self.reset()

    # -- per-frame pipeline ---------------------------------------------

    def full_series(self) -> np.ndarray:
        """Decimated whole-track envelope (cached, no phantom padding)."""
        samples = self.buffer.samples if self.buffer is not None else None
        return self.cache.get(samples, self.config.num_points)

    def window_series(self, playhead: float) -> np.ndarray:
        """Decimated focus window at *playhead*, before gain normalization."""
        cfg = self.config
        buf = self.buffer
        if buf is None:
            return np.zeros(cfg.num_points, dtype=np.float64)
        window = prepare_window(
            buf.samples, playhead, buf.duration_sec, buf.sample_rate,
            cfg.phantom_padding_sec,
            window_sec=cfg.window_duration_sec,
            default_sample_rate=cfg.default_sample_rate,
        )
        return decimate(window, cfg.num_points)

    def frame(self, playhead: float, is_playing: bool, *,
              transitioning: bool = False, progress: float = 0.0) -> ViewFrame:
        """Build the series the renderer draws this frame.

        Args:
            playhead:      Fraction of the track that has played, 0..1.
            is_playing:    Whether playback is running.
            transitioning: True while the view animates between full and
                           focus mode.
            progress:      Blend factor toward the focus view while
                           *transitioning*.
        """
        n = self.config.num_points
        if self.buffer is None:
            log.debug("No track loaded; returning placeholder pattern")
            return ViewFrame(placeholder_series(n), 1.0, n, ViewMode.PLACEHOLDER)

        mode = select_view_mode(transitioning, is_playing, playhead,
                                self.config.full_view_threshold)
        if mode is ViewMode.BLEND:
            series = blend_series(self.full_series(), self.window_series(playhead),
                                  progress)
            return ViewFrame(series, self._max_amp, n, mode)

        if mode is ViewMode.FULL:
            # the next focus session starts unboosted and eases in
            self.gain.reset()
            return ViewFrame(self.full_series(), self._max_amp, n, mode)

        series = self.gain.apply(self.window_series(playhead), self._max_amp)
        return ViewFrame(series, self._max_amp, n, mode,
                         boost=self.gain.state.current_factor)

    def tick(self, now_ms: float, playhead: float, is_playing: bool) -> ViewFrame:
        """Advance the view transition to *now_ms* and build the frame."""
        focus = wants_focus(is_playing, playhead, self.config.full_view_threshold)
        progress = self.transition.follow(now_ms, focus)
        if self.transition.active:
            dbg("ViewEngine",
                f"Transition progress {progress:.3f} toward "
                f"{'focus' if focus else 'full'} view",
                throttle=True)
        return self.frame(playhead, is_playing,
                          transitioning=self.transition.active,
                          progress=progress)
