# bandenergy/pipeline/operations.py
"""
Operations that run a transform on one curve of a collection and insert the
derived curves back next to it.

Each operation has two layers:
- `*_series(series, ...)`: pure computation, returns fresh TimeSeries
- `run_*(collection, file_name, curve_name, config)`: lookup + insert,
  returns (new_collection, derived...)
"""
from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, Iterable

import numpy as np

from bandenergy.core import SeriesCollection, TimeSeries, TIME_CURVE
from bandenergy.core.exceptions import InvalidParameter, LengthMismatch
from bandenergy.dsp import FilterKind, resample
from .config import ProcessingConfig
from .naming import (
    band_curve_names,
    derived_name,
    filter_suffix,
    resample_suffix,
    taper_suffix,
)

logger = logging.getLogger(__name__)

SeriesOperation = Callable[[TimeSeries, ProcessingConfig], "TimeSeries | list[TimeSeries]"]


# ----------------------------------------------------------------------
# Pure computations
# ----------------------------------------------------------------------
def filter_series(series: TimeSeries, config: ProcessingConfig) -> TimeSeries:
    """Smoothed copy named <name>_<Kind><length>; NONE returns `series` itself."""
    if config.filter_kind is FilterKind.NONE:
        return series
    values = config.sliding_filter().filter(series.values)
    return series.derive(
        derived_name(series.name, filter_suffix(config.filter_kind, config.filter_length)),
        values,
        transform="filter",
        kind=config.filter_kind.label,
        length=config.filter_length,
    )


def spectrum_series(series: TimeSeries, config: ProcessingConfig) -> TimeSeries:
    """Power spectrum (N/2 bins) of the first tapered frame, named <name>_<Taper><L>."""
    power = config.band_energy().spectrum(series.values)
    return series.derive(
        derived_name(series.name, taper_suffix(config.window, config.half_length)),
        power,
        transform="spectrum",
        frame_len=config.frame_len,
        df=config.sample_rate / config.frame_len,
    )


def band_energy_series(series: TimeSeries, config: ProcessingConfig) -> list[TimeSeries]:
    """One energy-fraction curve per frequency band, same length as `series`."""
    fractions = config.band_energy().decompose(series.values)
    names = band_curve_names(series.name, config.boundaries)
    bounds = (0.0,) + config.boundaries + (config.nyquist,)
    return [
        series.derive(
            name,
            fractions[j],
            transform="band_energy",
            low_hz=bounds[j],
            high_hz=bounds[j + 1],
            average_length=config.average_length,
        )
        for j, name in enumerate(names)
    ]


def resample_series(
    series: TimeSeries,
    time: TimeSeries,
    dt: int | float,
) -> tuple[TimeSeries, TimeSeries]:
    """Resample `series` sampled at `time` onto a uniform grid of step `dt`."""
    if time.n != series.n:
        raise LengthMismatch(
            f"time curve has {time.n} samples but '{series.name}' has {series.n}"
        )
    t = time.values
    if np.all(np.isfinite(t)) and np.all(t == np.round(t)) and float(dt).is_integer():
        t = t.astype(np.int64)
        dt = int(dt)
    grid, values = resample(t, series.values, dt)
    suffix = resample_suffix(dt)
    out = series.derive(derived_name(series.name, suffix), values, transform="resample", dt=dt)
    grid_ts = time.derive(derived_name(time.name, suffix), grid, transform="resample", dt=dt)
    return out, grid_ts


# ----------------------------------------------------------------------
# Collection-level operations
# ----------------------------------------------------------------------
def run_filter(
    collection: SeriesCollection,
    file_name: str,
    curve_name: str,
    config: ProcessingConfig,
) -> tuple[SeriesCollection, TimeSeries]:
    series = collection.curve(file_name, curve_name)
    out = filter_series(series, config)
    if out is series:
        return collection, series
    logger.info("filtered %s/%s -> %s (%d samples)", file_name, curve_name, out.name, out.n)
    return collection.add_curves(file_name, [out]), out


def run_filter_in_place(
    collection: SeriesCollection,
    file_name: str,
    curve_name: str,
    config: ProcessingConfig,
) -> tuple[SeriesCollection, TimeSeries]:
    """Replace the content of `curve_name` with its filtered samples."""
    series = collection.curve(file_name, curve_name)
    filtered = filter_series(series, config)
    if filtered is series:
        return collection, series
    out = series.with_values(filtered.values)
    logger.info("filtered %s/%s in place (%s)", file_name, curve_name, config.filter_kind.label)
    return collection.add_curves(file_name, [out]), out


def run_spectrum(
    collection: SeriesCollection,
    file_name: str,
    curve_name: str,
    config: ProcessingConfig,
) -> tuple[SeriesCollection, TimeSeries]:
    series = collection.curve(file_name, curve_name)
    out = spectrum_series(series, config)
    logger.info("spectrum %s/%s -> %s (%d bins)", file_name, curve_name, out.name, out.n)
    return collection.add_curves(file_name, [out]), out


def run_band_energy(
    collection: SeriesCollection,
    file_name: str,
    curve_name: str,
    config: ProcessingConfig,
) -> tuple[SeriesCollection, list[TimeSeries]]:
    series = collection.curve(file_name, curve_name)
    outs = band_energy_series(series, config)
    logger.info(
        "band energy %s/%s -> %s",
        file_name, curve_name, ", ".join(ts.name for ts in outs),
    )
    return collection.add_curves(file_name, outs), outs


def run_resample(
    collection: SeriesCollection,
    file_name: str,
    curve_name: str,
    dt: int | float,
    *,
    time_curve: str = TIME_CURVE,
) -> tuple[SeriesCollection, TimeSeries, TimeSeries]:
    if not dt > 0:
        raise InvalidParameter(f"dt must be positive, got {dt!r}")
    curve_set = collection[file_name]
    series = curve_set[curve_name]
    time = curve_set[time_curve]
    out, grid = resample_series(series, time, dt)
    logger.info(
        "resampled %s/%s -> %s (%d -> %d samples)",
        file_name, curve_name, out.name, series.n, out.n,
    )
    return collection.add_curves(file_name, [out, grid]), out, grid


def process_many(
    collection: SeriesCollection,
    file_name: str,
    curve_names: Iterable[str],
    config: ProcessingConfig,
    operation: SeriesOperation = band_energy_series,
    *,
    max_workers: int | None = None,
) -> tuple[SeriesCollection, list[TimeSeries]]:
    """
    Apply a pure `operation` to several curves concurrently.

    Each task reads only its own input curve and returns fresh series; the
    results are inserted on the calling thread, in `curve_names` order.
    """
    curve_set = collection[file_name]
    inputs = [curve_set[name] for name in curve_names]

    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        futures = [executor.submit(operation, series, config) for series in inputs]
        results = [f.result() for f in futures]

    derived: list[TimeSeries] = []
    for series, result in zip(inputs, results):
        produced = [result] if isinstance(result, TimeSeries) else list(result)
        derived.extend(ts for ts in produced if ts is not series)

    logger.info("processed %d curves of %s -> %d derived", len(inputs), file_name, len(derived))
    return collection.add_curves(file_name, derived), derived
