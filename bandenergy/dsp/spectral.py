# bandenergy/dsp/spectral.py
"""
Frequency-band energy decomposition.

A tapered FFT frame is slid across the series one sample at a time. For each
position the power spectrum is split into contiguous bands and the fraction
of the frame's energy falling in each band is emitted, giving one output
series per band.
"""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Sequence

import numpy as np

from bandenergy.core.exceptions import (
    InvalidBandConfig,
    InvalidLength,
    InvalidParameter,
    InvalidWindow,
)
from .fft import FFTEngine, is_power_of_two
from .filters import block_average
from .kinds import WindowKind
from .taper import make_window

logger = logging.getLogger(__name__)

# Frames transformed per numpy batch; bounds memory at CHUNK * N doubles.
FRAME_CHUNK = 256

_LEVEL_STEPS = np.array([0.2, 0.4, 0.6, 0.8])


@dataclass(frozen=True, slots=True)
class BandLayout:
    """
    K ascending boundaries (Hz) -> K + 1 bands over [0, Nyquist).

    Band j covers power-spectrum bins [edges[j], edges[j + 1]) where
    edges = [0, floor(f_0/df), ..., floor(f_{K-1}/df), N/2].
    """

    boundaries: tuple[float, ...]
    frame_len: int
    dt: float
    edges: tuple[int, ...] = field(init=False)

    def __post_init__(self) -> None:
        if not is_power_of_two(self.frame_len):
            raise InvalidBandConfig(f"frame_len must be a power of 2, got {self.frame_len!r}")
        if not self.dt > 0:
            raise InvalidBandConfig(f"dt must be positive, got {self.dt!r}")

        bounds = tuple(float(f) for f in self.boundaries)
        nyquist = 0.5 / self.dt
        for f in bounds:
            if not math.isfinite(f) or f <= 0:
                raise InvalidBandConfig(f"band boundaries must be positive, got {f!r}")
            if f >= nyquist:
                raise InvalidBandConfig(
                    f"band boundary {f!r} Hz is not below Nyquist ({nyquist!r} Hz)"
                )
        for lo, hi in zip(bounds, bounds[1:]):
            if hi <= lo:
                raise InvalidBandConfig(f"band boundaries must be strictly increasing: {bounds!r}")

        df = self.df
        half = self.frame_len // 2
        edges = [0] + [min(int(math.floor(f / df)), half) for f in bounds] + [half]
        object.__setattr__(self, "boundaries", bounds)
        object.__setattr__(self, "edges", tuple(edges))

    @property
    def df(self) -> float:
        return 1.0 / self.dt / self.frame_len

    @property
    def nyquist(self) -> float:
        return 0.5 / self.dt

    @property
    def n_bands(self) -> int:
        return len(self.boundaries) + 1


def band_fractions(power: np.ndarray, edges: Sequence[int]) -> np.ndarray:
    """
    Energy fraction per band for each row of `power` (frames, N/2).

    Rows with zero total energy give 0.0 for every band.
    """
    total = power.sum(axis=-1)
    # Band sums via a cumulative sum: S[e_{j+1}] - S[e_j].
    csum = np.concatenate(
        [np.zeros(power.shape[:-1] + (1,)), np.cumsum(power, axis=-1)], axis=-1
    )
    e = np.asarray(edges)
    band = csum[..., e[1:]] - csum[..., e[:-1]]
    out = np.zeros_like(band)
    nonzero = total > 0
    out[nonzero] = band[nonzero] / total[nonzero][..., None]
    return out


@dataclass(frozen=True, slots=True)
class SpectralBandEnergy:
    """
    Sliding tapered-FFT band energy decomposition.

    frame_len: FFT length N (power of two)
    half_length: taper half-length L; the taper covers the first 2L + 1 frame
        samples and the rest of the frame stays zero
    window: taper shape
    dt: sample interval in seconds
    boundaries: ascending band boundaries in Hz
    average_len: if set, each output series is block-averaged with this length
    """

    frame_len: int
    half_length: int
    dt: float
    boundaries: tuple[float, ...]
    window: WindowKind = WindowKind.GAUSSIAN
    average_len: int | None = None
    layout: BandLayout = field(init=False, repr=False, compare=False)
    taper: np.ndarray = field(init=False, repr=False, compare=False)
    engine: FFTEngine = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if not is_power_of_two(self.frame_len):
            raise InvalidLength(f"FFT length must be a power of 2, got {self.frame_len!r}")
        if not isinstance(self.window, WindowKind):
            object.__setattr__(self, "window", WindowKind.from_label(self.window))
        if self.average_len is not None and (
            isinstance(self.average_len, bool)
            or not isinstance(self.average_len, (int, np.integer))
            or self.average_len <= 0
        ):
            raise InvalidParameter(f"average_len must be a positive integer, got {self.average_len!r}")

        taper = make_window(self.half_length, self.window)
        if taper.size > self.frame_len:
            raise InvalidWindow(
                f"taper length {taper.size} (2*{self.half_length}+1) exceeds frame length {self.frame_len}"
            )

        object.__setattr__(self, "boundaries", tuple(self.boundaries))
        object.__setattr__(self, "layout", BandLayout(self.boundaries, self.frame_len, self.dt))
        object.__setattr__(self, "taper", taper)
        object.__setattr__(self, "engine", FFTEngine(self.frame_len))

    @property
    def window_len(self) -> int:
        return int(self.taper.size)

    @property
    def n_bands(self) -> int:
        return self.layout.n_bands

    # ------------------------------------------------------------------
    # Frames
    # ------------------------------------------------------------------
    def frame_indices(self, total: int, start: int, stop: int) -> np.ndarray:
        """
        Sample indices feeding the taper for frame positions [start, stop).

        Positions past the end reflect: index 2*total - pos - 2.
        """
        pos = np.arange(start, stop)[:, None] + np.arange(self.window_len)[None, :]
        return np.where(pos < total, pos, 2 * total - pos - 2)

    def power_spectra(self, x: np.ndarray, start: int, stop: int) -> np.ndarray:
        """Power spectra (stop - start, N/2) of the frames at positions [start, stop)."""
        n = self.frame_len
        w = self.window_len
        frames = stop - start

        re = np.zeros((frames, n), dtype=np.float64)
        im = np.zeros((frames, n), dtype=np.float64)
        re[:, :w] = x[self.frame_indices(x.size, start, stop)] * self.taper
        # DC removal: mean over the full zero-padded frame, taken off the
        # tapered samples only.
        re[:, :w] -= re.mean(axis=1, keepdims=True)

        self.engine.transform(re, im)
        half = n // 2
        return re[:, :half] ** 2 + im[:, :half] ** 2

    def spectrum(self, samples: Sequence[float] | np.ndarray) -> np.ndarray:
        """Power spectrum (N/2,) of the single frame at position 0."""
        x = self._validated(samples)
        return self.power_spectra(x, 0, 1)[0]

    # ------------------------------------------------------------------
    # Decomposition
    # ------------------------------------------------------------------
    def decompose(self, samples: Sequence[float] | np.ndarray) -> np.ndarray:
        """
        Band energy fractions, shape (n_bands, len(samples)).

        Row j is the series for band j; each column sums to 1 unless the frame
        had no energy, in which case the column is all zeros.
        """
        x = self._validated(samples)
        total = x.size
        out = np.empty((self.n_bands, total), dtype=np.float64)

        for start in range(0, total, FRAME_CHUNK):
            stop = min(start + FRAME_CHUNK, total)
            power = self.power_spectra(x, start, stop)
            out[:, start:stop] = band_fractions(power, self.layout.edges).T

        if self.average_len is not None:
            for j in range(self.n_bands):
                out[j] = block_average(out[j], self.average_len)

        logger.debug(
            "band energy: %d frames, N=%d, taper=%s(%d), %d bands",
            total, self.frame_len, self.window.label, self.half_length, self.n_bands,
        )
        return out

    def _validated(self, samples: Sequence[float] | np.ndarray) -> np.ndarray:
        x = np.asarray(samples, dtype=np.float64)
        if x.ndim != 1:
            raise InvalidWindow(f"samples must be 1D, got shape {x.shape}")
        # Reflected indices stay non-negative only while the taper fits the series.
        if x.size < self.window_len:
            raise InvalidWindow(
                f"series of {x.size} samples is shorter than the taper window ({self.window_len})"
            )
        return x


def energy_levels(fractions: Sequence[float] | np.ndarray) -> np.ndarray:
    """
    Quantise energy fractions to levels 1..5 over [0, 0.2], (0.2, 0.4], ... (0.8, 1.0].

    Values outside [0, 1] (or NaN) map to 0.
    """
    f = np.asarray(fractions, dtype=np.float64)
    levels = 1.0 + np.searchsorted(_LEVEL_STEPS, f, side="left")
    valid = (f >= 0) & (f <= 1.0)
    return np.where(valid, levels, 0.0)
