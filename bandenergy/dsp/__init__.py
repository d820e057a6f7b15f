"""
Numeric processing for bandenergy.

Every function here is a pure, synchronous function of its arguments:
- filters: forward sliding average / trimmed mean, block averaging
- resample: two-point linear interpolation onto a uniform grid
- taper: symmetric weighting windows
- fft: in-place radix-2 FFT engine
- spectral: sliding band energy decomposition
- correlation: Pearson correlation (single value and rolling curve)
"""

from .kinds import FilterKind, WindowKind
from .filters import SlidingWindowFilter, sliding_filter, block_average
from .resample import Resampler, resample
from .taper import make_window
from .fft import FFTEngine, is_power_of_two
from .spectral import BandLayout, SpectralBandEnergy, band_fractions, energy_levels
from .correlation import pearson, rolling_pearson
from .protocols import Filterable, Transformable, SpectrallyDecomposable


__all__ = [
    # kinds
    "FilterKind",
    "WindowKind",

    # filters / resampling
    "SlidingWindowFilter",
    "sliding_filter",
    "block_average",
    "Resampler",
    "resample",

    # spectral
    "make_window",
    "FFTEngine",
    "is_power_of_two",
    "BandLayout",
    "SpectralBandEnergy",
    "band_fractions",
    "energy_levels",

    # correlation
    "pearson",
    "rolling_pearson",

    # capabilities
    "Filterable",
    "Transformable",
    "SpectrallyDecomposable",
]
