from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

import numpy as np


class ViewMode(Enum):
    FULL = "full"
    FOCUS = "focus"
    BLEND = "blend"
    PLACEHOLDER = "placeholder"


@dataclass
class WaveformBuffer:
    """A loaded mono track as handed over by the audio-loading collaborator.

    Attributes:
        samples:       1-D float array, referenced (never copied or mutated)
                       by the view pipeline.
        sample_rate:   Samples per second.
        duration_sec:  Playback duration as reported by the decoder.  Usually
                       ``len(samples) / sample_rate`` but not guaranteed.
        max_amplitude: Global max amplitude, computed lazily once.
    """
    samples: np.ndarray
    sample_rate: int
    duration_sec: float
    max_amplitude: float | None = None

    @classmethod
    def from_array(cls, data: Any, sample_rate: int) -> WaveformBuffer:
        """Wrap decoded audio.  2-D data (frames, channels) uses the first
        channel as a view; channels are never mixed."""
        from .audio import as_samples

        samples = as_samples(data)
        duration = len(samples) / sample_rate if sample_rate > 0 else 0.0
        return cls(samples=samples, sample_rate=int(sample_rate), duration_sec=duration)

    @property
    def total_samples(self) -> int:
        return len(self.samples)


@dataclass(frozen=True)
class WindowDescriptor:
    """Where the focus window sits for one frame.  Recomputed every frame."""
    start_sample: int
    end_sample: int
    padding_samples: int
    padded_length: int
    window_samples: int


@dataclass
class CacheEntry:
    series: np.ndarray
    resolution: int
    source: Any


@dataclass
class BoostState:
    """Gain-normalizer state; both factors stay within [1, max_multiplier]."""
    current_factor: float = 1.0
    target_factor: float = 1.0


@dataclass
class ViewFrame:
    """What the renderer receives once per frame.

    Attributes:
        series:     Exactly ``num_points`` non-negative magnitudes.
        max_amp:    Normalization reference for mapping magnitudes to radius.
        num_points: Display resolution the series was built for.
        mode:       Which branch produced the series.
        boost:      Current boost factor (1.0 unless the focus branch ran).
    """
    series: np.ndarray
    max_amp: float
    num_points: int
    mode: ViewMode
    boost: float = 1.0


@dataclass
class WindowParamReport:
    is_valid: bool
    issues: list[str] = field(default_factory=list)
