# bandenergy/pipeline/naming.py
"""
Names of derived curves: "<input>_<suffix>".

Downstream consumers find derived curves by these names, so the formats
here are a stable contract:
- filters:   EEG1_Average5, EEG1_TrimmedMean5
- spectrum:  EEG1_Gauss250
- resample:  EEG1_Interp10
- bands:     EEG1_f0_4, EEG1_f4_8, ..., EEG1_f30 (last band open to Nyquist)
"""
from __future__ import annotations

from typing import Sequence

from bandenergy.dsp import FilterKind, WindowKind


def fmt_number(x: float) -> str:
    """4.0 -> '4', 0.5 -> '0.5'."""
    return f"{float(x):g}"


def derived_name(name: str, suffix: str) -> str:
    return f"{name}_{suffix}"


def filter_suffix(kind: FilterKind, length: int) -> str:
    return f"{kind.label}{length}"


def taper_suffix(kind: WindowKind, half_length: int) -> str:
    return f"{kind.label}{half_length}"


def resample_suffix(dt: float) -> str:
    return f"Interp{fmt_number(dt)}"


def band_suffixes(boundaries: Sequence[float]) -> list[str]:
    edges = [fmt_number(f) for f in boundaries]
    if not edges:
        return ["f0"]
    out = [f"f0_{edges[0]}"]
    out += [f"f{lo}_{hi}" for lo, hi in zip(edges, edges[1:])]
    out.append(f"f{edges[-1]}")
    return out


def band_curve_names(name: str, boundaries: Sequence[float]) -> list[str]:
    return [derived_name(name, s) for s in band_suffixes(boundaries)]
