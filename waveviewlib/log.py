"""Per-frame debug tracing for the view pipeline.

Usage::

    from waveviewlib.log import dbg

    dbg("GainNormalizer", f"current={current:.3f}", throttle=True)

Traces are printed to stderr only when ``WAVEVIEW_DEBUG`` is ``1`` or
``true`` (case-insensitive).  The pipeline runs once per animation frame,
so a trace made with ``throttle=True`` is printed at most once every
``WAVEVIEW_DEBUG_INTERVAL_MS`` milliseconds (default 250) per source.
Diagnostics about bad input go through :mod:`logging` instead.
"""

from __future__ import annotations

import os
import sys
import time

DEFAULT_INTERVAL_MS = 250.0

_enabled: bool | None = None
_interval_s: float | None = None
_last_emit: dict[str, float] = {}


def _read_env() -> None:
    global _enabled, _interval_s
    val = os.environ.get("WAVEVIEW_DEBUG", "").strip().lower()
    _enabled = val in ("1", "true")
    try:
        interval_ms = float(os.environ.get("WAVEVIEW_DEBUG_INTERVAL_MS", DEFAULT_INTERVAL_MS))
    except ValueError:
        interval_ms = DEFAULT_INTERVAL_MS
    _interval_s = max(interval_ms, 0.0) / 1000.0


def enabled() -> bool:
    if _enabled is None:
        _read_env()
    return bool(_enabled)


def reset() -> None:
    """Re-read the environment and forget throttling state."""
    global _enabled, _interval_s
    _enabled = None
    _interval_s = None
    _last_emit.clear()


def dbg(source: str, msg: str, *, throttle: bool = False) -> None:
    """Print ``[HH:MM:SS.mmm source] msg`` to stderr when tracing is on."""
    if not enabled():
        return
    if throttle:
        now = time.monotonic()
        last = _last_emit.get(source)
        if last is not None and now - last < _interval_s:
            return
        _last_emit[source] = now
    t = time.strftime("%H:%M:%S")
    ms = int((time.time() % 1) * 1000)
    print(f"[{t}.{ms:03d} {source}] {msg}", file=sys.stderr, flush=True)
