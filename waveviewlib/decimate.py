"""Block-max decimation of a sample sequence to a fixed display resolution."""

from __future__ import annotations

from typing import Any

import numpy as np

from .audio import as_samples


def decimate(samples: Any, num_points: int) -> np.ndarray:
    """Reduce *samples* to exactly *num_points* non-negative magnitudes.

    - empty or None input gives ``num_points`` zeros
    - input no longer than ``num_points`` is copied (as magnitudes) and
      zero-padded, never interpolated
    - longer input is split into ``len // num_points`` sized blocks and each
      output value is the largest ``abs()`` in its block.  Samples past
      ``num_points * block`` fall outside every block and are ignored.

    Raises ``ValueError`` for a non-positive *num_points*.
    """
    if num_points <= 0:
        raise ValueError(f"num_points must be positive, got {num_points}")
    num_points = int(num_points)

    data = as_samples(samples)
    out = np.zeros(num_points, dtype=np.float64)
    n = len(data)
    if n == 0:
        return out
    if n <= num_points:
        out[:n] = np.abs(data)
        return out

    block = n // num_points
    blocks = data[:block * num_points].reshape(num_points, block)
    out[:] = np.abs(blocks).max(axis=1)
    return out
