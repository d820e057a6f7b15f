# bandenergy/dsp/correlation.py
from __future__ import annotations

from typing import Sequence

import numpy as np
from numpy.lib.stride_tricks import sliding_window_view

from bandenergy.core.exceptions import InvalidWindow, LengthMismatch


def _pair(x, y) -> tuple[np.ndarray, np.ndarray]:
    a = np.asarray(x, dtype=np.float64)
    b = np.asarray(y, dtype=np.float64)
    if a.ndim != 1 or b.ndim != 1:
        raise LengthMismatch("x and y must be 1D")
    if a.size != b.size:
        raise LengthMismatch(f"x and y must have same length, got {a.size} vs {b.size}")
    return a, b


def pearson(x: Sequence[float] | np.ndarray, y: Sequence[float] | np.ndarray) -> float:
    """
    Pearson correlation of two equal-length series.

    Returns NaN when either series has zero variance (or is empty).
    """
    a, b = _pair(x, y)
    if a.size == 0:
        return float("nan")
    da = a - a.mean()
    db = b - b.mean()
    denom = np.sqrt(np.sum(da * da) * np.sum(db * db))
    if denom == 0:
        return float("nan")
    return float(np.sum(da * db) / denom)


def rolling_pearson(
    x: Sequence[float] | np.ndarray,
    y: Sequence[float] | np.ndarray,
    window_len: int,
) -> np.ndarray:
    """
    Correlation curve over a forward window, same length as the inputs.

    out[i] = pearson(x[i:i+w], y[i:i+w]); past N - w the window shrinks to
    the remaining samples. Degenerate windows give NaN.
    """
    a, b = _pair(x, y)
    n = a.size
    if isinstance(window_len, bool) or not isinstance(window_len, (int, np.integer)):
        raise InvalidWindow(f"window_len must be an integer, got {window_len!r}")
    if window_len < 2 or window_len > n:
        raise InvalidWindow(f"window_len must be in [2, {n}], got {window_len}")

    wa = sliding_window_view(a, window_len)
    wb = sliding_window_view(b, window_len)
    da = wa - wa.mean(axis=1, keepdims=True)
    db = wb - wb.mean(axis=1, keepdims=True)
    num = np.sum(da * db, axis=1)
    den = np.sqrt(np.sum(da * da, axis=1) * np.sum(db * db, axis=1))

    out = np.full(n, np.nan)
    head = num.size
    ok = den > 0
    out[:head][ok] = num[ok] / den[ok]
    for i in range(head, n):
        out[i] = pearson(a[i:], b[i:])
    return out
