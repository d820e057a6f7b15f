# bandenergy/dsp/taper.py
"""Symmetric taper windows of length 2*half_length + 1."""
from __future__ import annotations

import logging

import numpy as np

from bandenergy.core.exceptions import InvalidWindow
from .kinds import WindowKind

logger = logging.getLogger(__name__)

# Shape parameter of the Gaussian window.
GAUSS_ALPHA = 18.0


def make_window(half_length: int, kind: WindowKind = WindowKind.GAUSSIAN) -> np.ndarray:
    """
    Build a taper window over t in [-0.5, 0.5], t = (i - L) / L * 0.5.

    - RECTANGLE: 1
    - HAMMING:   0.54 + 0.46 cos(2 pi t)
    - BLACKMAN:  0.42 + 0.5 cos(2 pi t) + 0.08 cos(4 pi t)
    - HANNING:   cos(pi t)^2
    - GAUSSIAN:  exp(-18 t^2)
    """
    if isinstance(half_length, bool) or not isinstance(half_length, (int, np.integer)):
        raise InvalidWindow(f"half_length must be an integer, got {half_length!r}")
    if half_length <= 0:
        raise InvalidWindow(f"half_length must be positive, got {half_length}")

    i = np.arange(2 * half_length + 1, dtype=np.float64)
    t = (i - half_length) / half_length * 0.5

    if kind is WindowKind.RECTANGLE:
        w = np.ones_like(t)
    elif kind is WindowKind.HAMMING:
        w = 0.54 + 0.46 * np.cos(2 * np.pi * t)
    elif kind is WindowKind.BLACKMAN:
        w = 0.42 + 0.5 * np.cos(2 * np.pi * t) + 0.08 * np.cos(4 * np.pi * t)
    elif kind is WindowKind.HANNING:
        w = np.cos(np.pi * t) ** 2
    elif kind is WindowKind.GAUSSIAN:
        w = np.exp(-GAUSS_ALPHA * t * t)
    else:  # pragma: no cover - closed enum
        raise InvalidWindow(f"Unsupported window kind: {kind!r}")

    # t is antisymmetric only up to rounding; mirror the left half so the
    # window is exactly symmetric.
    w[half_length + 1:] = w[half_length - 1::-1]
    logger.debug("%s window built, half_length=%d", kind.label, half_length)
    return w
