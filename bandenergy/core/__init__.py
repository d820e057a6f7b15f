"""
Core domain objects for bandenergy.

This module defines the in-memory data model:
- TimeSeries: named, immutable 1D curve of samples with lineage
- FileCurveSet: curves of one file, unique by name ("TIME" is the time axis)
- SeriesCollection: every loaded file, unique by file name

The core layer is independent from I/O and from the numeric transforms.
"""

from .timeseries import TimeSeries
from .curveset import FileCurveSet, TIME_CURVE
from .collection import SeriesCollection
from .metadata import CurveSetMeta, CollectionMeta
from .exceptions import (
    CoreError,
    InvalidTimeSeries,
    InvalidCurveSet,
    InvalidCollection,
    CurveNotFound,
    CurveSetNotFound,
    ProcessingError,
    InvalidLength,
    InvalidWindow,
    LengthMismatch,
    InvalidBandConfig,
    InvalidParameter,
    TableFormatError,
)


__all__ = [
    # time series
    "TimeSeries",

    # containers
    "FileCurveSet",
    "SeriesCollection",
    "TIME_CURVE",

    # metadata
    "CurveSetMeta",
    "CollectionMeta",

    # exceptions
    "CoreError",
    "InvalidTimeSeries",
    "InvalidCurveSet",
    "InvalidCollection",
    "CurveNotFound",
    "CurveSetNotFound",
    "ProcessingError",
    "InvalidLength",
    "InvalidWindow",
    "LengthMismatch",
    "InvalidBandConfig",
    "InvalidParameter",
    "TableFormatError",
]
