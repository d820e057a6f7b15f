# test/test_curveset.py
import numpy as np
import pytest

from bandenergy.core import FileCurveSet, TimeSeries, CurveSetMeta, TIME_CURVE
from bandenergy.core import InvalidCurveSet, CurveNotFound


def _ts(name: str, v, **kw):
    return TimeSeries(values=np.array(v, dtype=float), name=name, **kw)


def test_curveset_basic_dict_api():
    t = _ts(TIME_CURVE, [0, 10, 20])
    a = _ts("EEG1", [1, 2, 3])

    cs = FileCurveSet(name="subject01", curves={TIME_CURVE: t, "EEG1": a})

    assert len(cs) == 2
    assert "EEG1" in cs
    assert list(cs) == [TIME_CURVE, "EEG1"]
    assert cs["EEG1"].file_name == "subject01"
    assert cs.time is not None and cs.time.name == TIME_CURVE
    assert cs.n_samples == 3


def test_curveset_without_time_curve():
    cs = FileCurveSet(name="f", curves={"a": _ts("a", [1])})
    assert cs.time is None


def test_curveset_rejects_key_name_mismatch():
    with pytest.raises(InvalidCurveSet):
        FileCurveSet(name="f", curves={"b": _ts("a", [1, 2])})


def test_curveset_rejects_non_series_values():
    with pytest.raises(InvalidCurveSet):
        FileCurveSet(name="f", curves={"a": [1, 2]})  # type: ignore[dict-item]


def test_curveset_getitem_missing_raises_curvenotfound():
    cs = FileCurveSet(name="f")
    with pytest.raises(CurveNotFound):
        _ = cs["missing"]
    with pytest.raises(KeyError):
        _ = cs["missing"]


def test_add_replaces_same_name():
    cs = FileCurveSet(name="f").add(_ts("a", [1, 2]))
    cs2 = cs.add(_ts("a", [7, 8, 9]))

    assert len(cs2) == 1
    assert np.allclose(cs2["a"].values, [7, 8, 9])
    # the original set is unchanged
    assert np.allclose(cs["a"].values, [1, 2])


def test_add_many_and_drop():
    cs = FileCurveSet(name="f").add_many([_ts("a", [1]), _ts("b", [2]), _ts("a", [3])])
    assert list(cs.keys()) == ["a", "b"]
    assert cs["a"].values[0] == 3.0

    cs2 = cs.drop("a")
    assert list(cs2.keys()) == ["b"]

    with pytest.raises(CurveNotFound):
        _ = cs2.drop("a")

    cs3 = cs2.drop(["a", "b"], missing="ignore")
    assert len(cs3) == 0


def test_select_missing_modes():
    cs = FileCurveSet(name="f", curves={"a": _ts("a", [1]), "b": _ts("b", [2])})

    assert list(cs.select(["b"]).keys()) == ["b"]
    with pytest.raises(CurveNotFound):
        _ = cs.select(["c"])
    assert list(cs.select(["c", "a"], missing="ignore").keys()) == ["a"]


def test_rename_moves_curves_to_new_file():
    cs = FileCurveSet(
        name="old",
        curves={"a": _ts("a", [1])},
        meta=CurveSetMeta(description="d", attrs={"k": 1}),
    )

    cs2 = cs.rename("new")
    assert cs2.name == "new"
    assert cs2["a"].file_name == "new"
    assert cs2.meta.description == "d"
    assert cs2.meta.attrs == {"k": 1}
    assert cs2.meta.attrs is not cs.meta.attrs


def test_cleared_keeps_name_and_meta():
    cs = FileCurveSet(name="f", curves={"a": _ts("a", [1])}, meta=CurveSetMeta(source="x.txt"))
    empty = cs.cleared()
    assert empty.name == "f"
    assert len(empty) == 0
    assert empty.meta.source == "x.txt"
