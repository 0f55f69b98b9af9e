"""Focus-window extraction with phantom silence and circular wraparound.

The focus view shows ``window_sec`` of audio starting at the playhead.  A
silent "phantom" region of ``padding_sec`` is conceptually appended after
the last real sample so the ring keeps scrolling past end-of-file; starts
beyond that padded length wrap back onto the real audio.

Layout of the virtual timeline (``L`` real samples, ``P`` padding)::

    0 ............ L ............ L+P
    |  real audio  | phantom zeros |  -> wraps to 0

All functions here are pure, never mutate the source buffer and never
raise on bad data: invalid arguments are coerced to safe values and
reported through :mod:`logging`.
"""

from __future__ import annotations

import logging
import math
from typing import Any

import numpy as np

from .audio import as_samples
from .models import WindowDescriptor, WindowParamReport

log = logging.getLogger(__name__)

DEFAULT_WINDOW_SEC = 30.0
DEFAULT_PADDING_SEC = 30.0
DEFAULT_SAMPLE_RATE = 44100


def _is_number(value: Any) -> bool:
    return (isinstance(value, (int, float, np.integer, np.floating))
            and not isinstance(value, bool))


def _round_half_up(x: float) -> int:
    return int(math.floor(x + 0.5))


def _coerce(length: int, playhead: Any, duration: Any, sample_rate: Any,
            window_sec: Any, padding_sec: Any,
            default_sample_rate: int) -> tuple[float, float, int, float, float]:
    """Replace unusable numeric arguments with safe defaults, logging each."""
    if (not _is_number(sample_rate) or not math.isfinite(sample_rate)
            or _round_half_up(sample_rate) < 1):
        log.warning("Invalid sample rate %r; using %d Hz", sample_rate, default_sample_rate)
        sample_rate = default_sample_rate
    sample_rate = _round_half_up(sample_rate)

    if not _is_number(playhead) or not math.isfinite(playhead):
        log.warning("Non-finite playhead %r; using 0.0", playhead)
        playhead = 0.0
    elif playhead < 0.0 or playhead > 1.0:
        log.warning("Playhead %r outside [0, 1]; clamping", playhead)
        playhead = min(max(float(playhead), 0.0), 1.0)

    if not _is_number(duration) or not math.isfinite(duration) or duration <= 0:
        fallback = length / sample_rate
        log.warning("Invalid duration %r; using buffer length (%.3f s)", duration, fallback)
        duration = fallback

    if not _is_number(window_sec) or not math.isfinite(window_sec) or window_sec <= 0:
        log.warning("Invalid window duration %r; using %.1f s", window_sec, DEFAULT_WINDOW_SEC)
        window_sec = DEFAULT_WINDOW_SEC

    if not _is_number(padding_sec) or not math.isfinite(padding_sec) or padding_sec < 0:
        log.warning("Invalid phantom padding %r; using %.1f s", padding_sec, DEFAULT_PADDING_SEC)
        padding_sec = DEFAULT_PADDING_SEC

    return float(playhead), float(duration), sample_rate, float(window_sec), float(padding_sec)


def describe_window(length: int, playhead: Any, duration: Any, sample_rate: Any,
                    window_sec: Any = DEFAULT_WINDOW_SEC,
                    padding_sec: Any = DEFAULT_PADDING_SEC, *,
                    default_sample_rate: int = DEFAULT_SAMPLE_RATE,
                    ) -> WindowDescriptor:
    """Compute where the focus window sits on the padded virtual timeline."""
    playhead, duration, sample_rate, window_sec, padding_sec = _coerce(
        length, playhead, duration, sample_rate, window_sec, padding_sec,
        default_sample_rate,
    )
    window_samples = max(1, _round_half_up(window_sec * sample_rate))
    start = max(0, _round_half_up(playhead * duration * sample_rate))
    padding = int(math.floor(padding_sec * sample_rate))
    return WindowDescriptor(
        start_sample=start,
        end_sample=start + window_samples,
        padding_samples=padding,
        padded_length=length + padding,
        window_samples=window_samples,
    )


def circular_slice(samples: np.ndarray, start: int, width: int,
                   total_length: int) -> np.ndarray:
    """Read *width* samples from the virtual timeline of length *total_length*.

    *samples* occupies ``[0, len(samples))`` of the timeline and the rest up
    to *total_length* is silence.  A *start* at or past *total_length* is
    reduced modulo *total_length* and then read circularly over the real
    audio (tail first, then head).  Without wrapping, reads past the end of
    the real audio are silence.  Whatever the real audio cannot supply is
    zero.  Always returns a new array of exactly *width* samples.
    """
    length = len(samples)
    dtype = samples.dtype if np.issubdtype(samples.dtype, np.floating) else np.float64
    out = np.zeros(width, dtype=dtype)
    if length == 0 or width <= 0 or total_length <= 0:
        return out

    wrapped = start >= total_length
    if wrapped:
        start %= total_length

    if start + width <= length:
        out[:] = samples[start:start + width]
        return out

    if start < length:
        tail = length - start
        out[:tail] = samples[start:]
        if wrapped:
            head = min(width - tail, length)
            out[tail:tail + head] = samples[:head]
        return out

    # inside the phantom region
    return out


def prepare_window(samples: Any, playhead: Any, duration: Any, sample_rate: Any,
                   padding_sec: Any = DEFAULT_PADDING_SEC, *,
                   window_sec: Any = DEFAULT_WINDOW_SEC,
                   default_sample_rate: int = DEFAULT_SAMPLE_RATE,
                   ) -> np.ndarray:
    """Extract the raw focus-window slice around *playhead*.

    Args:
        samples:     Mono waveform buffer (not modified).
        playhead:    Fraction of *duration*, clamped to [0, 1].
        duration:    Actual track duration in seconds.
        sample_rate: Samples per second of *samples*.
        padding_sec: Length of the phantom silence after the track.
        window_sec:  Length of the window in seconds.

    Returns:
        A new array of exactly ``round(window_sec * sample_rate)`` samples:
        real audio, phantom silence, or a wrapped read from the start of the
        track, depending on where the window falls.  Tracks shorter than one
        window follow the same rules and are zero-filled to full width.
    """
    try:
        data = as_samples(samples)
    except (TypeError, ValueError) as e:
        log.warning("Focus window requested for non-numeric audio (%s); "
                    "treating it as empty", e)
        data = np.zeros(0, dtype=np.float64)
    desc = describe_window(
        len(data), playhead, duration, sample_rate, window_sec, padding_sec,
        default_sample_rate=default_sample_rate,
    )
    if data.size == 0:
        log.warning("Focus window requested for empty audio; "
                    "returning %d samples of silence", desc.window_samples)
    return circular_slice(data, desc.start_sample, desc.window_samples,
                          desc.padded_length)


def validate_window_params(samples: Any, playhead: Any, duration: Any,
                           sample_rate: Any, padding_sec: Any, *,
                           tolerance_sec: float = 0.1) -> WindowParamReport:
    """Check window-extraction arguments without raising.

    Collects every problem found so a caller can surface all of them at
    once.  The buffer length may differ from ``duration * sample_rate`` by
    up to *tolerance_sec* seconds of samples.
    """
    issues: list[str] = []
    try:
        data = as_samples(samples)
    except (TypeError, ValueError):
        issues.append("waveform must contain numeric samples")
        data = np.zeros(0, dtype=np.float64)
    else:
        if data.size == 0:
            issues.append("waveform is empty")

    if not _is_number(playhead) or not math.isfinite(playhead):
        issues.append(f"playhead must be a finite number, got {playhead!r}")
    elif playhead < 0.0 or playhead > 1.0:
        issues.append(f"playhead must be within [0, 1], got {playhead!r}")

    duration_ok = _is_number(duration) and math.isfinite(duration) and duration > 0
    if not duration_ok:
        issues.append(f"duration must be a positive number, got {duration!r}")

    rate_ok = (_is_number(sample_rate) and math.isfinite(sample_rate)
               and _round_half_up(sample_rate) >= 1)
    if not rate_ok:
        issues.append(f"sample rate must be at least 1 Hz, got {sample_rate!r}")

    if not _is_number(padding_sec) or not math.isfinite(padding_sec) or padding_sec < 0:
        issues.append(f"padding seconds must be a non-negative number, got {padding_sec!r}")

    if data.size > 0 and duration_ok and rate_ok:
        expected = duration * sample_rate
        if abs(len(data) - expected) > tolerance_sec * sample_rate:
            issues.append(
                f"waveform length mismatch: {len(data)} samples, "
                f"expected about {int(expected)}"
            )

    return WindowParamReport(is_valid=not issues, issues=issues)
