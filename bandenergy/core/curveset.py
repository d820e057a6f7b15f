# bandenergy/core/curveset.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Iterator, Mapping

from .exceptions import CurveNotFound, InvalidCurveSet
from .metadata import CurveSetMeta
from .timeseries import TimeSeries


TIME_CURVE = "TIME"


@dataclass(frozen=True, slots=True)
class FileCurveSet:
    """
    A FileCurveSet holds every curve read from (or derived for) one file.

    Design goals:
    - easy access: curves["EEG1"]
    - unique names: adding a curve whose name exists replaces it
    - predictable: immutable; transformations return a new FileCurveSet
    """
    name: str
    curves: Mapping[str, TimeSeries] = field(default_factory=dict, repr=False)
    meta: CurveSetMeta = field(default_factory=CurveSetMeta, repr=False)

    def __post_init__(self) -> None:
        if not isinstance(self.name, str) or not self.name.strip():
            raise InvalidCurveSet("FileCurveSet.name must be a non-empty string.")
        if not isinstance(self.curves, Mapping):
            raise InvalidCurveSet("FileCurveSet.curves must be a mapping (e.g., dict).")
        if not isinstance(self.meta, CurveSetMeta):
            raise InvalidCurveSet("FileCurveSet.meta must be a CurveSetMeta instance.")

        normalized: dict[str, TimeSeries] = {}
        for key, ts in self.curves.items():
            if not isinstance(key, str) or not key.strip():
                raise InvalidCurveSet("FileCurveSet.curves keys must be non-empty strings.")
            if not isinstance(ts, TimeSeries):
                raise InvalidCurveSet("FileCurveSet.curves values must be TimeSeries instances.")
            if ts.name != key:
                raise InvalidCurveSet(
                    f"Curve name mismatch: key '{key}' but TimeSeries.name is '{ts.name}'."
                )
            # A curve belongs to exactly one set.
            if ts.file_name != self.name:
                ts = ts.with_file(self.name)
            normalized[key] = ts

        object.__setattr__(self, "curves", normalized)

    # ---- dict-like API ----
    def __len__(self) -> int:
        return len(self.curves)

    def __iter__(self) -> Iterator[str]:
        return iter(self.curves)

    def keys(self) -> Iterable[str]:
        return self.curves.keys()

    def items(self) -> Iterable[tuple[str, TimeSeries]]:
        return self.curves.items()

    def values(self) -> Iterable[TimeSeries]:
        return self.curves.values()

    def __contains__(self, name: object) -> bool:
        return name in self.curves

    def __getitem__(self, name: str) -> TimeSeries:
        try:
            return self.curves[name]
        except KeyError as e:
            raise CurveNotFound(name) from e

    def get(self, name: str, default: TimeSeries | None = None) -> TimeSeries | None:
        return self.curves.get(name, default)

    # ---- derived properties ----
    @property
    def time(self) -> TimeSeries | None:
        """The reserved time axis curve, if the file has one."""
        return self.curves.get(TIME_CURVE)

    @property
    def n_samples(self) -> int:
        return max((ts.n for ts in self.curves.values()), default=0)

    # ---- transformations ----
    def add(self, series: TimeSeries) -> "FileCurveSet":
        """
        Return a new FileCurveSet with `series` inserted.

        A curve with the same name is replaced; names never coexist twice.
        """
        if not isinstance(series, TimeSeries):
            raise InvalidCurveSet("add() expects a TimeSeries instance.")

        new_curves = dict(self.curves)
        new_curves[series.name] = series
        return FileCurveSet(name=self.name, curves=new_curves, meta=self._copy_meta())

    def add_many(self, series: Iterable[TimeSeries]) -> "FileCurveSet":
        new_curves = dict(self.curves)
        for ts in series:
            if not isinstance(ts, TimeSeries):
                raise InvalidCurveSet("add_many() expects TimeSeries instances.")
            new_curves[ts.name] = ts
        return FileCurveSet(name=self.name, curves=new_curves, meta=self._copy_meta())

    def drop(self, names: str | Iterable[str], *, missing: str = "raise") -> "FileCurveSet":
        """
        Drop one or more curves.

        missing:
          - "raise": error if any name is missing
          - "ignore": skip missing names
        """
        if isinstance(names, str):
            names_set = {names}
        else:
            names_set = set(names)

        new_curves = dict(self.curves)
        for n in names_set:
            if n in new_curves:
                del new_curves[n]
            elif missing == "raise":
                raise CurveNotFound(n)
        return FileCurveSet(name=self.name, curves=new_curves, meta=self._copy_meta())

    def select(self, names: Iterable[str], *, missing: str = "raise") -> "FileCurveSet":
        """
        Keep only the given curve names (order preserved by insertion in `names`).
        """
        selected: dict[str, TimeSeries] = {}
        for n in names:
            if n in self.curves:
                selected[n] = self.curves[n]
            elif missing == "raise":
                raise CurveNotFound(n)
        return FileCurveSet(name=self.name, curves=selected, meta=self._copy_meta())

    def rename(self, name: str) -> "FileCurveSet":
        return FileCurveSet(name=name, curves=dict(self.curves), meta=self._copy_meta())

    def cleared(self) -> "FileCurveSet":
        return FileCurveSet(name=self.name, curves={}, meta=self._copy_meta())

    def _copy_meta(self) -> CurveSetMeta:
        return CurveSetMeta(
            source=self.meta.source,
            description=self.meta.description,
            parameters=self.meta.parameters,
            attrs=self.meta.attrs.copy(),
        )
