# bandenergy/pipeline/config.py
from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from typing import Any, Mapping

import numpy as np

from bandenergy.core.exceptions import InvalidLength, InvalidParameter, InvalidWindow
from bandenergy.dsp import (
    BandLayout,
    FilterKind,
    SlidingWindowFilter,
    SpectralBandEnergy,
    WindowKind,
    is_power_of_two,
)


def _positive_int(name: str, value: Any, error: type[Exception] = InvalidParameter) -> None:
    if isinstance(value, bool) or not isinstance(value, (int, np.integer)) or value <= 0:
        raise error(f"{name} must be a positive integer, got {value!r}")


@dataclass(frozen=True, slots=True)
class ProcessingConfig:
    """
    Every processing parameter, passed explicitly to each operation.

    - filter_kind / filter_length: sliding-window smoothing
    - frame_len: FFT frame size N (power of two)
    - sample_rate: samples per second; dt = 1 / sample_rate
    - half_length / window: taper of 2 * half_length + 1 samples
    - boundaries: ascending band boundaries in Hz
    - average_length: block length for averaging band outputs, None = off

    Invalid combinations are rejected here, before any series is touched.
    """
    filter_kind: FilterKind = FilterKind.NONE
    filter_length: int = 5
    frame_len: int = 1024
    sample_rate: float = 101.0
    half_length: int = 250
    window: WindowKind = WindowKind.GAUSSIAN
    boundaries: tuple[float, ...] = ()
    average_length: int | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "filter_kind", FilterKind.from_label(self.filter_kind))
        object.__setattr__(self, "window", WindowKind.from_label(self.window))
        object.__setattr__(self, "boundaries", tuple(float(f) for f in self.boundaries))

        _positive_int("filter_length", self.filter_length, InvalidWindow)
        if self.filter_kind is FilterKind.TRIMMED_MEAN and self.filter_length < 3:
            raise InvalidWindow(f"trimmed mean needs filter_length >= 3, got {self.filter_length}")

        if not is_power_of_two(self.frame_len):
            raise InvalidLength(f"FFT length must be a power of 2, got {self.frame_len!r}")
        if not isinstance(self.sample_rate, (int, float, np.number)) or not self.sample_rate > 0:
            raise InvalidParameter(f"sample_rate must be positive, got {self.sample_rate!r}")

        _positive_int("half_length", self.half_length, InvalidWindow)
        if 2 * self.half_length + 1 > self.frame_len:
            raise InvalidWindow(
                f"taper length 2*{self.half_length}+1 exceeds frame length {self.frame_len}"
            )
        if self.average_length is not None:
            _positive_int("average_length", self.average_length)

        # Raises InvalidBandConfig.
        BandLayout(self.boundaries, self.frame_len, self.dt)

    @property
    def dt(self) -> float:
        return 1.0 / float(self.sample_rate)

    @property
    def nyquist(self) -> float:
        return 0.5 * float(self.sample_rate)

    def replace(self, **changes: Any) -> "ProcessingConfig":
        return dataclasses.replace(self, **changes)

    # ---- processors ----
    def sliding_filter(self) -> SlidingWindowFilter:
        return SlidingWindowFilter(window_len=self.filter_length, kind=self.filter_kind)

    def band_energy(self) -> SpectralBandEnergy:
        return SpectralBandEnergy(
            frame_len=self.frame_len,
            half_length=self.half_length,
            dt=self.dt,
            boundaries=self.boundaries,
            window=self.window,
            average_len=self.average_length,
        )

    # ---- construction from loosely typed input ----
    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any]) -> "ProcessingConfig":
        """
        Build a config from plain strings/numbers, e.g. parsed parameter lines.

        Unknown keys raise InvalidParameter. `boundaries` may be a sequence or
        a comma/space separated string.
        """
        names = {f.name for f in dataclasses.fields(cls)}
        kwargs: dict[str, Any] = {}
        for key, raw in mapping.items():
            if key not in names:
                raise InvalidParameter(f"Unknown config key: {key!r}")
            kwargs[key] = _coerce(key, raw)
        return cls(**kwargs)


def _coerce(key: str, raw: Any) -> Any:
    if key in {"filter_kind", "window"}:
        return raw
    if key == "boundaries":
        if isinstance(raw, str):
            parts = raw.replace(",", " ").split()
        else:
            parts = list(raw)
        try:
            return tuple(float(p) for p in parts)
        except (TypeError, ValueError) as e:
            raise InvalidParameter(f"boundaries must be numeric: {raw!r}") from e
    if key == "average_length" and (raw is None or str(raw).strip().lower() in {"", "none"}):
        return None
    try:
        if key == "sample_rate":
            return float(raw)
        return int(raw)
    except (TypeError, ValueError) as e:
        raise InvalidParameter(f"{key} must be numeric, got {raw!r}") from e
