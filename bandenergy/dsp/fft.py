# bandenergy/dsp/fft.py
"""
In-place radix-2 decimation-in-time FFT with precomputed twiddle tables.

The butterflies of one stage are evaluated together with numpy, so a
2D (frames, N) buffer is transformed row by row in a single call.
"""
from __future__ import annotations

import logging
from typing import Any

import numpy as np

from bandenergy.core.exceptions import InvalidLength, LengthMismatch

logger = logging.getLogger(__name__)


def is_power_of_two(n: Any) -> bool:
    if isinstance(n, bool) or not isinstance(n, (int, np.integer)):
        return False
    return n > 0 and (n & (n - 1)) == 0


def _bit_reversal(n: int, m: int) -> np.ndarray:
    idx = np.arange(n)
    rev = np.zeros(n, dtype=np.intp)
    for bit in range(m):
        rev |= ((idx >> bit) & 1) << (m - 1 - bit)
    return rev


class FFTEngine:
    """
    Radix-2 FFT of fixed length N (a power of two).

    cos[k] = cos(-2 pi k / N), sin[k] = sin(-2 pi k / N) for k in [0, N/2).
    """

    def __init__(self, n: int):
        if not is_power_of_two(n):
            raise InvalidLength(f"FFT length must be a power of 2, got {n!r}")
        self.n = int(n)
        self.m = self.n.bit_length() - 1

        k = np.arange(self.n // 2, dtype=np.float64)
        self.cos = np.cos(-2 * np.pi * k / self.n)
        self.sin = np.sin(-2 * np.pi * k / self.n)
        self._perm = _bit_reversal(self.n, self.m)
        logger.debug("FFT engine ready, N=%d (%d stages)", self.n, self.m)

    def __repr__(self) -> str:
        return f"FFTEngine(n={self.n})"

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def transform(self, re, im) -> None:
        """Forward transform of (re, im), in place. Accepts (N,) or (frames, N)."""
        a, b = self._buffers(re, im)
        self._butterflies(a, b, self.sin)
        self._write_back(re, a)
        self._write_back(im, b)

    def inverse(self, re, im) -> None:
        """Inverse transform (conjugate twiddles, scaled by 1/N), in place."""
        a, b = self._buffers(re, im)
        self._butterflies(a, b, -self.sin)
        a /= self.n
        b /= self.n
        self._write_back(re, a)
        self._write_back(im, b)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------
    def _buffers(self, re, im) -> tuple[np.ndarray, np.ndarray]:
        a = np.ascontiguousarray(re, dtype=np.float64)
        b = np.ascontiguousarray(im, dtype=np.float64)
        if a.shape != b.shape:
            raise LengthMismatch(
                f"re and im must have the same shape, got {a.shape} vs {b.shape}"
            )
        if a.ndim not in (1, 2) or a.shape[-1] != self.n:
            raise LengthMismatch(
                f"buffers must have length {self.n} on the last axis, got shape {a.shape}"
            )
        return a, b

    @staticmethod
    def _write_back(target, result: np.ndarray) -> None:
        if target is result:
            return
        if isinstance(target, np.ndarray):
            target[...] = result
        else:
            target[:] = result.tolist()

    def _butterflies(self, a: np.ndarray, b: np.ndarray, sin: np.ndarray) -> None:
        n, m = self.n, self.m
        lead = a.shape[:-1]

        a[...] = a[..., self._perm]
        b[...] = b[..., self._perm]

        for s in range(m):
            half = 1 << s
            step = 1 << (m - s - 1)
            c = self.cos[::step]
            sn = sin[::step]

            ar = a.reshape(lead + (n // (2 * half), 2 * half))
            br = b.reshape(lead + (n // (2 * half), 2 * half))
            top_r, bot_r = ar[..., :half], ar[..., half:]
            top_i, bot_i = br[..., :half], br[..., half:]

            t1 = c * bot_r - sn * bot_i
            t2 = sn * bot_r + c * bot_i
            bot_r[...] = top_r - t1
            bot_i[...] = top_i - t2
            top_r += t1
            top_i += t2
