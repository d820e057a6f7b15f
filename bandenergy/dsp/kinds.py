# bandenergy/dsp/kinds.py
from __future__ import annotations

from enum import Enum

from bandenergy.core.exceptions import InvalidParameter


class FilterKind(Enum):
    """Sliding-window smoothing kinds. The value is the curve-name label."""

    NONE = "NoFilter"
    AVERAGE = "Average"
    TRIMMED_MEAN = "TrimmedMean"

    @property
    def label(self) -> str:
        return self.value

    @classmethod
    def from_label(cls, label: "str | FilterKind") -> "FilterKind":
        if isinstance(label, cls):
            return label
        key = str(label).strip()
        # "Median" is what older parameter files call the trimmed mean.
        if key.lower() == "median":
            return cls.TRIMMED_MEAN
        for kind in cls:
            if kind.value.lower() == key.lower() or kind.name.lower() == key.lower():
                return kind
        raise InvalidParameter(f"Unknown filter kind: {label!r}")


class WindowKind(Enum):
    """Taper window shapes. The value is the curve-name label."""

    BLACKMAN = "Blackman"
    HAMMING = "Hamming"
    HANNING = "Hanning"
    GAUSSIAN = "Gauss"
    RECTANGLE = "Rectangle"

    @property
    def label(self) -> str:
        return self.value

    @classmethod
    def from_label(cls, label: "str | WindowKind") -> "WindowKind":
        if isinstance(label, cls):
            return label
        key = str(label).strip().lower()
        for kind in cls:
            if kind.value.lower() == key or kind.name.lower() == key:
                return kind
        raise InvalidParameter(f"Unknown window kind: {label!r}")
