# bandenergy/core/collection.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable, Iterator, Mapping

from .curveset import FileCurveSet
from .exceptions import CurveSetNotFound, InvalidCollection
from .metadata import CollectionMeta
from .timeseries import TimeSeries


@dataclass(frozen=True, slots=True)
class SeriesCollection:
    """
    SeriesCollection = every loaded file, keyed by file name.

    Design goals:
    - dict-like access: coll["subject01"]["EEG1"]
    - one entry per file: adding a set for a known file merges its curves
    - immutable: add/drop/merge return a new SeriesCollection
    """
    sets: Mapping[str, FileCurveSet] = field(default_factory=dict, repr=False)
    meta: CollectionMeta = field(default_factory=CollectionMeta, repr=False)

    def __post_init__(self) -> None:
        if not isinstance(self.sets, Mapping):
            raise InvalidCollection("SeriesCollection.sets must be a mapping (e.g., dict).")
        if not isinstance(self.meta, CollectionMeta):
            raise InvalidCollection("SeriesCollection.meta must be a CollectionMeta instance.")

        normalized: dict[str, FileCurveSet] = {}
        for key, cs in self.sets.items():
            if not isinstance(key, str) or not key.strip():
                raise InvalidCollection("SeriesCollection.sets keys must be non-empty strings.")
            if not isinstance(cs, FileCurveSet):
                raise InvalidCollection("SeriesCollection.sets values must be FileCurveSet instances.")
            if cs.name != key:
                raise InvalidCollection(
                    f"File name mismatch: key '{key}' but FileCurveSet.name is '{cs.name}'."
                )
            normalized[key] = cs

        object.__setattr__(self, "sets", normalized)

    # ---- dict-like API ----
    def __len__(self) -> int:
        return len(self.sets)

    def __iter__(self) -> Iterator[str]:
        return iter(self.sets)

    def __contains__(self, name: object) -> bool:
        return name in self.sets

    def keys(self) -> Iterable[str]:
        return self.sets.keys()

    def items(self) -> Iterable[tuple[str, FileCurveSet]]:
        return self.sets.items()

    def values(self) -> Iterable[FileCurveSet]:
        return self.sets.values()

    def __getitem__(self, name: str) -> FileCurveSet:
        try:
            return self.sets[name]
        except KeyError as e:
            raise CurveSetNotFound(name) from e

    def get(self, name: str, default: FileCurveSet | None = None) -> FileCurveSet | None:
        return self.sets.get(name, default)

    def curve(self, file_name: str, curve_name: str) -> TimeSeries:
        """Lookup a single curve; raises CurveSetNotFound / CurveNotFound."""
        return self[file_name][curve_name]

    # ---- transformations ----
    def add(self, curve_set: FileCurveSet) -> "SeriesCollection":
        """
        Return a new SeriesCollection with `curve_set` inserted.

        If a set with the same file name exists, the new curves are merged
        into it (same-name curves overwritten) instead of adding a duplicate.
        """
        if not isinstance(curve_set, FileCurveSet):
            raise InvalidCollection("add() expects a FileCurveSet instance.")

        new_sets = dict(self.sets)
        existing = new_sets.get(curve_set.name)
        if existing is None:
            new_sets[curve_set.name] = curve_set
        else:
            new_sets[curve_set.name] = existing.add_many(curve_set.values())
        return SeriesCollection(sets=new_sets, meta=self._copy_meta())

    def add_curves(self, file_name: str, series: Iterable[TimeSeries]) -> "SeriesCollection":
        """Insert curves into the set `file_name`, creating it when absent."""
        return self.add(FileCurveSet(name=file_name).add_many(series))

    def add_curve(self, file_name: str, series: TimeSeries) -> "SeriesCollection":
        return self.add_curves(file_name, [series])

    def drop(self, names: str | Iterable[str], *, missing: str = "raise") -> "SeriesCollection":
        """
        Drop one or more file sets.

        missing:
          - "raise": error if any name is missing
          - "ignore": skip missing names
        """
        if isinstance(names, str):
            names_set = {names}
        else:
            names_set = set(names)

        new_sets = dict(self.sets)
        for n in names_set:
            if n in new_sets:
                del new_sets[n]
            elif missing == "raise":
                raise CurveSetNotFound(n)
        return SeriesCollection(sets=new_sets, meta=self._copy_meta())

    def rename_file(self, old: str, new: str) -> "SeriesCollection":
        """
        Rename a file key and its FileCurveSet.name consistently.
        """
        if old not in self.sets:
            raise CurveSetNotFound(old)
        if not isinstance(new, str) or not new.strip():
            raise InvalidCollection("New file name must be a non-empty string.")
        if new in self.sets:
            raise InvalidCollection(f"File '{new}' already exists.")

        new_sets = dict(self.sets)
        cs = new_sets.pop(old)
        new_sets[new] = cs.rename(new)
        return SeriesCollection(sets=new_sets, meta=self._copy_meta())

    def merge(self, other: "SeriesCollection") -> "SeriesCollection":
        """Merge two collections file by file (see add())."""
        if not isinstance(other, SeriesCollection):
            raise InvalidCollection("merge() expects a SeriesCollection instance.")

        out = self
        for cs in other.sets.values():
            out = out.add(cs)
        return out

    def with_attrs(self, **attrs: Any) -> "SeriesCollection":
        """Same sets, with `attrs` merged into the collection metadata."""
        meta = CollectionMeta(
            description=self.meta.description,
            attrs={**self.meta.attrs, **attrs},
        )
        return SeriesCollection(sets=dict(self.sets), meta=meta)

    def cleared(self) -> "SeriesCollection":
        return SeriesCollection(sets={}, meta=self._copy_meta())

    def _copy_meta(self) -> CollectionMeta:
        return CollectionMeta(
            description=self.meta.description,
            attrs=self.meta.attrs.copy(),
        )
