"""
Pipeline layer: explicit configuration, naming of derived curves, and the
operations that feed a curve through a transform and put the results back
into the collection.
"""

from .config import ProcessingConfig
from .naming import (
    band_curve_names,
    derived_name,
    filter_suffix,
    resample_suffix,
    taper_suffix,
)
from .operations import (
    band_energy_series,
    filter_series,
    process_many,
    resample_series,
    run_band_energy,
    run_filter,
    run_filter_in_place,
    run_resample,
    run_spectrum,
    spectrum_series,
)


__all__ = [
    "ProcessingConfig",

    # naming
    "band_curve_names",
    "derived_name",
    "filter_suffix",
    "resample_suffix",
    "taper_suffix",

    # operations
    "band_energy_series",
    "filter_series",
    "process_many",
    "resample_series",
    "run_band_energy",
    "run_filter",
    "run_filter_in_place",
    "run_resample",
    "run_spectrum",
    "spectrum_series",
]
