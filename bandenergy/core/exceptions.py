# bandenergy/core/exceptions.py
from __future__ import annotations


class CoreError(Exception):
    """Base error for all bandenergy exceptions."""


# ---- Validation / construction errors ----
class InvalidTimeSeries(CoreError):
    """Raised when a TimeSeries is constructed with invalid inputs."""


class InvalidCurveSet(CoreError):
    """Raised when a FileCurveSet is constructed with invalid inputs."""


class InvalidCollection(CoreError):
    """Raised when a SeriesCollection is constructed with invalid inputs."""


# ---- Lookup errors (also behave like KeyError for dict-like APIs) ----
class CurveNotFound(CoreError, KeyError):
    """Raised when a requested curve name is not present in a set."""


class CurveSetNotFound(CoreError, KeyError):
    """Raised when a requested file name is not present in a collection."""


# ---- Processing / configuration errors ----
class ProcessingError(CoreError):
    """Base error for rejected transform configurations."""


class InvalidLength(ProcessingError):
    """Raised when an FFT frame size is not a power of two."""


class InvalidWindow(ProcessingError):
    """Raised when a sliding or taper window does not fit the series."""


class LengthMismatch(ProcessingError):
    """Raised when paired buffers (re/im, x/y, time/values) differ in length."""


class InvalidBandConfig(ProcessingError):
    """Raised when frequency boundaries are not increasing, positive and below Nyquist."""


class InvalidParameter(ProcessingError):
    """Raised for any other out-of-range parameter (dt, sample rate, block length, kind)."""


# ---- I/O errors ----
class TableFormatError(CoreError):
    """Raised when a tabular text input cannot be parsed."""
