"""
bandenergy: smoothing, resampling and frequency-band energy of multi-channel
scalar time series.
"""

from bandenergy.core import FileCurveSet, SeriesCollection, TimeSeries
from bandenergy.pipeline import ProcessingConfig


__version__ = "0.1.0"

__all__ = [
    "FileCurveSet",
    "SeriesCollection",
    "TimeSeries",
    "ProcessingConfig",
]
