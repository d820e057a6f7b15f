# bandenergy/dsp/filters.py
"""
Sliding-window smoothing.

Both kinds look *forward*: output[i] summarises samples[i : i + window_len].
Once the window would run past the end, the tail is tied off with a
shrinking plain average of samples[i : N].
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Sequence

import numpy as np
from numpy.lib.stride_tricks import sliding_window_view

from bandenergy.core.exceptions import InvalidParameter, InvalidWindow
from .kinds import FilterKind

logger = logging.getLogger(__name__)


def _check_window(n: int, window_len: int, kind: FilterKind) -> None:
    if isinstance(window_len, bool) or not isinstance(window_len, (int, np.integer)):
        raise InvalidWindow(f"window_len must be an integer, got {window_len!r}")
    if window_len <= 0 or window_len > n:
        raise InvalidWindow(
            f"window_len must be in [1, {n}] for a series of {n} samples, got {window_len}"
        )
    if kind is FilterKind.TRIMMED_MEAN and window_len < 3:
        raise InvalidWindow(f"trimmed mean needs window_len >= 3, got {window_len}")


def tail_means(x: np.ndarray, start: int) -> np.ndarray:
    """mean(x[i:]) for every i in [start, len(x))."""
    n = x.size
    if start >= n:
        return np.empty(0, dtype=np.float64)
    suffix = np.cumsum(x[::-1])[::-1]
    return suffix[start:] / np.arange(n - start, 0, -1, dtype=np.float64)


def sliding_filter(
    samples: Sequence[float] | np.ndarray,
    window_len: int,
    kind: FilterKind = FilterKind.AVERAGE,
) -> np.ndarray:
    """
    Smooth `samples` with a forward sliding window; output has the same length.

    kind:
      - AVERAGE: mean of the window
      - TRIMMED_MEAN: (sum - max - min) / (window_len - 2), i.e. the mean after
        dropping the single largest and single smallest value. This is not a
        median filter.
      - NONE: a copy of the input
    """
    x = np.asarray(samples, dtype=np.float64)
    if x.ndim != 1:
        raise InvalidWindow(f"samples must be 1D, got shape {x.shape}")
    if kind is FilterKind.NONE:
        return x.copy()

    n = x.size
    _check_window(n, window_len, kind)

    windows = sliding_window_view(x, window_len)
    if kind is FilterKind.AVERAGE:
        head = windows.mean(axis=1)
    elif kind is FilterKind.TRIMMED_MEAN:
        head = (windows.sum(axis=1) - windows.max(axis=1) - windows.min(axis=1)) / (
            window_len - 2
        )
    else:  # pragma: no cover - closed enum
        raise InvalidWindow(f"Unsupported filter kind: {kind!r}")

    out = np.empty(n, dtype=np.float64)
    out[: head.size] = head
    out[head.size:] = tail_means(x, head.size)
    logger.debug("%s filter, window=%d, n=%d", kind.label, window_len, n)
    return out


@dataclass(frozen=True, slots=True)
class SlidingWindowFilter:
    """Stateless filter bound to one kind and window length."""

    window_len: int
    kind: FilterKind = FilterKind.AVERAGE

    def filter(self, samples: Sequence[float] | np.ndarray) -> np.ndarray:
        return sliding_filter(samples, self.window_len, self.kind)


def block_average(samples: Sequence[float] | np.ndarray, block_len: int) -> np.ndarray:
    """
    Replace every contiguous block of `block_len` samples by its mean.

    Past the last full block, out[i] = mean(samples[i:]), the same shrinking
    tail the sliding filters use.
    """
    if isinstance(block_len, bool) or not isinstance(block_len, (int, np.integer)) or block_len <= 0:
        raise InvalidParameter(f"block_len must be a positive integer, got {block_len!r}")

    x = np.asarray(samples, dtype=np.float64)
    n = x.size
    out = np.empty_like(x)
    full = (n // block_len) * block_len
    if full:
        means = x[:full].reshape(-1, block_len).mean(axis=1)
        out[:full] = np.repeat(means, block_len)
    if full < n:
        out[full:] = tail_means(x, full)
    return out
