# test/test_correlation.py
import math

import numpy as np
import pytest

from bandenergy.dsp import pearson, rolling_pearson
from bandenergy.core import InvalidWindow, LengthMismatch


def test_perfect_correlation():
    assert pearson([1.0, 2.0, 3.0], [2.0, 4.0, 6.0]) == pytest.approx(1.0)
    assert pearson([1.0, 2.0, 3.0], [3.0, 2.0, 1.0]) == pytest.approx(-1.0)


def test_matches_numpy():
    rng = np.random.default_rng(4)
    x = rng.normal(size=100)
    y = 0.3 * x + rng.normal(size=100)
    assert pearson(x, y) == pytest.approx(np.corrcoef(x, y)[0, 1])


def test_zero_variance_is_nan():
    assert math.isnan(pearson([1.0, 1.0, 1.0], [1.0, 2.0, 3.0]))
    assert math.isnan(pearson([], []))


def test_length_mismatch():
    with pytest.raises(LengthMismatch):
        pearson([1.0, 2.0], [1.0])


def test_rolling_with_shrinking_tail():
    x = np.arange(10, dtype=float)
    out = rolling_pearson(x, 2 * x + 1, 4)
    assert out.size == 10
    assert np.allclose(out[:9], 1.0)
    # last window holds a single sample
    assert math.isnan(out[9])


def test_rolling_matches_pointwise():
    rng = np.random.default_rng(5)
    x = rng.normal(size=30)
    y = rng.normal(size=30)
    out = rolling_pearson(x, y, 6)
    for i in range(0, 25):
        assert out[i] == pytest.approx(pearson(x[i:i + 6], y[i:i + 6]))


@pytest.mark.parametrize("window", [1, 0, 11, 2.5])
def test_rolling_rejects_bad_window(window):
    with pytest.raises(InvalidWindow):
        rolling_pearson(np.arange(10.0), np.arange(10.0), window)
