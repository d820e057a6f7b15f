# bandenergy/core/timeseries.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Sequence

import numpy as np

from .exceptions import InvalidTimeSeries


def _as_samples(values: Any) -> np.ndarray:
    try:
        v = np.array(values, dtype=np.float64)
    except (TypeError, ValueError) as e:
        raise InvalidTimeSeries(f"`values` must be numeric: {e}") from e
    if v.ndim != 1:
        raise InvalidTimeSeries(f"`values` must be 1D, got shape {v.shape}")
    v.flags.writeable = False
    return v


@dataclass(frozen=True, slots=True)
class TimeSeries:
    """
    Immutable named curve: an ordered 1D vector of double samples.

    Identity is the name. `parent_name` records the curve this one was
    derived from, `file_name` the set it belongs to. Sample order is never
    changed; transforms return new series.
    """

    values: np.ndarray = field(repr=False)
    name: str
    parent_name: str | None = None
    file_name: str | None = None
    unit: str | None = None
    attrs: dict[str, Any] = field(default_factory=dict, repr=False)

    def __post_init__(self) -> None:
        if not isinstance(self.name, str) or not self.name.strip():
            raise InvalidTimeSeries("TimeSeries.name must be a non-empty string.")
        if self.parent_name is not None and not isinstance(self.parent_name, str):
            raise InvalidTimeSeries("TimeSeries.parent_name must be a string or None.")

        if self.attrs is None:
            object.__setattr__(self, "attrs", {})
        elif not isinstance(self.attrs, dict):
            raise InvalidTimeSeries("`attrs` must be a dict.")

        object.__setattr__(self, "values", _as_samples(self.values))

    def __len__(self) -> int:
        return int(self.values.size)

    @property
    def n(self) -> int:
        return int(self.values.size)

    @property
    def is_derived(self) -> bool:
        return self.parent_name is not None

    def mean(self, *, skipna: bool = True) -> float | None:
        if self.n == 0:
            return None
        if skipna:
            return float(np.nanmean(self.values))
        return float(np.mean(self.values))

    def std(self, *, ddof: int = 0, skipna: bool = True) -> float | None:
        if self.n == 0:
            return None
        if skipna:
            return float(np.nanstd(self.values, ddof=ddof))
        return float(np.std(self.values, ddof=ddof))

    def slice(self, start: int | None = None, stop: int | None = None) -> "TimeSeries":
        """Index slice [start, stop); keeps identity and lineage."""
        return self.with_values(self.values[start:stop])

    # ---- identity-preserving copies ----
    def with_values(self, values: Sequence[float] | np.ndarray) -> "TimeSeries":
        """Same curve, new content (used by in-place filters)."""
        return TimeSeries(
            values=values,
            name=self.name,
            parent_name=self.parent_name,
            file_name=self.file_name,
            unit=self.unit,
            attrs=self.attrs.copy(),
        )

    def cleared(self) -> "TimeSeries":
        return self.with_values(np.empty(0))

    def rename(self, name: str) -> "TimeSeries":
        return TimeSeries(
            values=self.values,
            name=name,
            parent_name=self.parent_name,
            file_name=self.file_name,
            unit=self.unit,
            attrs=self.attrs.copy(),
        )

    def with_file(self, file_name: str | None) -> "TimeSeries":
        return TimeSeries(
            values=self.values,
            name=self.name,
            parent_name=self.parent_name,
            file_name=file_name,
            unit=self.unit,
            attrs=self.attrs.copy(),
        )

    def derive(
        self,
        name: str,
        values: Sequence[float] | np.ndarray,
        **attrs: Any,
    ) -> "TimeSeries":
        """New curve computed from this one; lineage points back here."""
        return TimeSeries(
            values=values,
            name=name,
            parent_name=self.name,
            file_name=self.file_name,
            unit=self.unit,
            attrs=attrs,
        )

    def to_numpy(self, *, copy: bool = False) -> np.ndarray:
        if copy:
            return self.values.copy()
        return self.values
