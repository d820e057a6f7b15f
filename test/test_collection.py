# test/test_collection.py
import numpy as np
import pytest

from bandenergy.core import SeriesCollection, FileCurveSet, TimeSeries, CollectionMeta
from bandenergy.core import InvalidCollection, CurveSetNotFound, CurveNotFound


def _ts(name: str, v):
    return TimeSeries(values=np.array(v, dtype=float), name=name)


def _cs(name: str, curves: list[TimeSeries]) -> FileCurveSet:
    return FileCurveSet(name=name, curves={ts.name: ts for ts in curves})


def test_collection_basic_access():
    coll = SeriesCollection(
        sets={"s1": _cs("s1", [_ts("a", [1, 2])]), "s2": _cs("s2", [_ts("b", [3])])},
        meta=CollectionMeta(description="x"),
    )

    assert len(coll) == 2
    assert "s1" in coll
    assert coll["s1"].name == "s1"
    assert coll.curve("s2", "b").values[0] == 3.0


def test_collection_rejects_key_name_mismatch():
    with pytest.raises(InvalidCollection):
        SeriesCollection(sets={"X": _cs("s1", [])})


def test_collection_lookup_errors():
    coll = SeriesCollection(sets={"s1": _cs("s1", [_ts("a", [1])])})
    with pytest.raises(CurveSetNotFound):
        _ = coll["missing"]
    with pytest.raises(CurveNotFound):
        _ = coll.curve("s1", "missing")


def test_add_existing_file_merges_curves():
    coll = SeriesCollection().add(_cs("s1", [_ts("a", [1]), _ts("b", [2])]))
    coll2 = coll.add(_cs("s1", [_ts("b", [20]), _ts("c", [30])]))

    assert len(coll2) == 1
    assert list(coll2["s1"].keys()) == ["a", "b", "c"]
    assert coll2["s1"]["b"].values[0] == 20.0
    # untouched original
    assert list(coll["s1"].keys()) == ["a", "b"]


def test_add_curves_creates_set_when_absent():
    coll = SeriesCollection().add_curves("s9", [_ts("x", [1.0])])
    assert "s9" in coll
    assert coll["s9"]["x"].file_name == "s9"


def test_drop_and_cleared():
    coll = SeriesCollection(sets={"s1": _cs("s1", []), "s2": _cs("s2", [])})

    coll2 = coll.drop("s1")
    assert list(coll2.keys()) == ["s2"]
    with pytest.raises(CurveSetNotFound):
        _ = coll2.drop("s1")
    assert len(coll2.drop("s1", missing="ignore")) == 1

    assert len(coll.cleared()) == 0


def test_rename_file():
    coll = SeriesCollection(sets={"s1": _cs("s1", [_ts("a", [1])])})

    coll2 = coll.rename_file("s1", "s1_new")
    assert "s1_new" in coll2
    assert coll2["s1_new"].name == "s1_new"
    assert coll2["s1_new"]["a"].file_name == "s1_new"

    with pytest.raises(CurveSetNotFound):
        _ = coll.rename_file("missing", "x")
    with pytest.raises(InvalidCollection):
        _ = SeriesCollection(sets={"a": _cs("a", []), "b": _cs("b", [])}).rename_file("a", "b")


def test_merge_by_file_name():
    c1 = SeriesCollection(sets={"s1": _cs("s1", [_ts("a", [1])])})
    c2 = SeriesCollection(
        sets={"s1": _cs("s1", [_ts("b", [2])]), "s2": _cs("s2", [_ts("c", [3])])}
    )

    merged = c1.merge(c2)
    assert set(merged.keys()) == {"s1", "s2"}
    assert set(merged["s1"].keys()) == {"a", "b"}


def test_add_curve_creates_or_extends_set():
    coll = SeriesCollection().add_curve("s1", _ts("a", [1, 2]))
    coll = coll.add_curve("s1", _ts("b", [3]))

    assert list(coll["s1"].keys()) == ["a", "b"]
    assert coll.curve("s1", "b").file_name == "s1"


def test_with_attrs_merges_metadata():
    coll = SeriesCollection(
        sets={"s1": _cs("s1", [_ts("a", [1])])},
        meta=CollectionMeta(description="d", attrs={"k": 1}),
    )

    new = coll.with_attrs(sources=["x.txt"])

    assert new.meta.description == "d"
    assert new.meta.attrs == {"k": 1, "sources": ["x.txt"]}
    assert coll.meta.attrs == {"k": 1}
    assert list(new.keys()) == ["s1"]
