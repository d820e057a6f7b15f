# bandenergy/dsp/resample.py
"""Two-point linear interpolation of an irregular series onto a uniform grid."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Sequence

import numpy as np

from bandenergy.core.exceptions import InvalidParameter, LengthMismatch

logger = logging.getLogger(__name__)

# Pairs closer than this in time use a stabilised slope denominator.
EPS = 1e-4


def resample(
    times: Sequence[int] | np.ndarray,
    values: Sequence[float] | np.ndarray,
    dt: int | float,
) -> tuple[np.ndarray, np.ndarray]:
    """
    Resample (times, values) onto the grid k*dt starting at floor(times[0]/dt)*dt.

    Every grid point t with t0 <= t <= t1 for some adjacent input pair
    (t0, y0), (t1, y1) is emitted once, interpolated from the first pair
    containing it:

        y = y0 + (y1 - y0) / (t1 - t0) * (t - t0)

    When |t1 - t0| < EPS the denominator becomes (t1 - t0 + dt / 2).

    Returns (grid_times, grid_values); both empty for fewer than two samples.
    """
    t = np.asarray(times)
    y = np.asarray(values, dtype=np.float64)
    if t.ndim != 1 or y.ndim != 1:
        raise LengthMismatch("times and values must be 1D")
    if t.size != y.size:
        raise LengthMismatch(
            f"times and values must have same length, got {t.size} vs {y.size}"
        )
    if not dt > 0:
        raise InvalidParameter(f"dt must be positive, got {dt!r}")

    integral = np.issubdtype(t.dtype, np.integer) and isinstance(dt, (int, np.integer))
    out_dtype = np.int64 if integral else np.float64

    if t.size < 2:
        return np.empty(0, dtype=out_dtype), np.empty(0, dtype=np.float64)
    if np.any(np.diff(t) < 0):
        raise InvalidParameter("times must be monotonic non-decreasing")

    if integral:
        t = t.astype(np.int64)
        start = (int(t[0]) // dt) * dt
        grid = np.arange(start, int(t[-1]) + 1, dt, dtype=np.int64)
    else:
        t = t.astype(np.float64)
        start = np.floor(t[0] / dt) * dt
        count = int(np.floor((t[-1] - start) / dt)) + 1
        grid = start + dt * np.arange(count, dtype=np.float64)
    grid = grid[(grid >= t[0]) & (grid <= t[-1])]

    # First pair (k-1, k) with t[k-1] <= g <= t[k].
    k = np.searchsorted(t, grid, side="left")
    k = np.clip(k, 1, t.size - 1)
    t0 = t[k - 1].astype(np.float64)
    t1 = t[k].astype(np.float64)
    y0 = y[k - 1]
    y1 = y[k]

    span = t1 - t0
    denom = np.where(np.abs(span) < EPS, span + dt / 2.0, span)
    out = y0 + (y1 - y0) / denom * (grid.astype(np.float64) - t0)

    logger.debug("resampled %d samples onto %d grid points (dt=%s)", t.size, grid.size, dt)
    return grid, out


@dataclass(frozen=True, slots=True)
class Resampler:
    """Stateless resampler bound to one grid step."""

    dt: int | float

    def __post_init__(self) -> None:
        if not self.dt > 0:
            raise InvalidParameter(f"dt must be positive, got {self.dt!r}")

    def resample(
        self,
        times: Sequence[int] | np.ndarray,
        values: Sequence[float] | np.ndarray,
    ) -> tuple[np.ndarray, np.ndarray]:
        return resample(times, values, self.dt)
