# bandenergy/dsp/protocols.py
"""Capability interfaces implemented by the stateless processors."""
from __future__ import annotations

from typing import Protocol, Sequence, runtime_checkable

import numpy as np


@runtime_checkable
class Filterable(Protocol):
    """Maps N samples to N smoothed samples."""

    def filter(self, samples: Sequence[float] | np.ndarray) -> np.ndarray: ...


@runtime_checkable
class Transformable(Protocol):
    """Transforms a (re, im) buffer pair in place."""

    n: int

    def transform(self, re, im) -> None: ...


@runtime_checkable
class SpectrallyDecomposable(Protocol):
    """Maps N samples to one energy-fraction series per band, shape (bands, N)."""

    @property
    def n_bands(self) -> int: ...

    def decompose(self, samples: Sequence[float] | np.ndarray) -> np.ndarray: ...
