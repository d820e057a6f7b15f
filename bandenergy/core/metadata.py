# bandenergy/core/metadata.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .exceptions import InvalidCurveSet, InvalidCollection


@dataclass(frozen=True, slots=True)
class CurveSetMeta:
    """
    Metadata attached to a FileCurveSet (one input file).

    - source: origin path, or "computed"
    - description: human-friendly description
    - parameters: raw parameter lines found in the input file header
    - attrs: arbitrary additional fields
    """
    source: str | None = None
    description: str | None = None
    parameters: tuple[str, ...] = ()
    attrs: dict[str, Any] = field(default_factory=dict, repr=False)

    def __post_init__(self) -> None:
        if self.attrs is None:
            object.__setattr__(self, "attrs", {})
        elif not isinstance(self.attrs, dict):
            raise InvalidCurveSet("CurveSetMeta.attrs must be a dict.")
        object.__setattr__(self, "parameters", tuple(self.parameters))


@dataclass(frozen=True, slots=True)
class CollectionMeta:
    """
    Metadata attached to a SeriesCollection.
    """
    description: str | None = None
    attrs: dict[str, Any] = field(default_factory=dict, repr=False)

    def __post_init__(self) -> None:
        if self.attrs is None:
            object.__setattr__(self, "attrs", {})
        elif not isinstance(self.attrs, dict):
            raise InvalidCollection("CollectionMeta.attrs must be a dict.")
