# test/test_table_io.py
import numpy as np
import pytest

from bandenergy import FileCurveSet, TimeSeries
from bandenergy.core import TableFormatError
from bandenergy.io import (
    RawTable,
    TableReader,
    TextTableReader,
    load_table,
    parse_table,
    read_table,
    write_table,
)


TABLE = """\
Method: Average 5
TIME\tEEG1\tEEG2
0\t1.0\t2.0
1\t9999\t3.0
2\t1.5\t2.5

3\t2.0  2.0
"""


def _write(tmp_path, text, name="subject01.txt"):
    p = tmp_path / name
    p.write_text(text, encoding="utf-8")
    return p


def test_load_table(tmp_path):
    coll = load_table(_write(tmp_path, TABLE))

    cs = coll["subject01"]
    assert list(cs.keys()) == ["TIME", "EEG1", "EEG2"]
    assert cs.time.values.tolist() == [0.0, 2.0, 3.0]
    assert cs["EEG1"].values.tolist() == [1.0, 1.5, 2.0]
    assert cs["EEG2"].file_name == "subject01"
    assert cs.meta.parameters == ("Method: Average 5",)
    assert cs.meta.attrs["dropped_rows"] == 1


def test_load_merges_into_existing_collection(tmp_path):
    first = load_table(_write(tmp_path, TABLE))
    other = _write(tmp_path, "EEG3\n1\n2\n3\n", name="extra.txt")

    coll = load_table(other, first)

    assert set(coll.keys()) == {"subject01", "extra"}
    assert coll.curve("extra", "EEG3").n == 3


def test_sentinel_can_be_disabled():
    raw = parse_table(["a b", "1 9999", "2 3"], "f", sentinel=None)
    assert raw.n_rows == 2
    assert raw.dropped_rows == 0


def test_strict_rejects_bad_rows():
    with pytest.raises(TableFormatError):
        parse_table(["a b", "1 2 3"], "f")
    with pytest.raises(TableFormatError):
        # a column cannot come back once it has ended
        parse_table(["a b", "1", "2 3"], "f")
    with pytest.raises(TableFormatError):
        parse_table(["a b", "1 x"], "f")


def test_lenient_skips_bad_rows():
    raw = parse_table(["a b", "1 2", "3 4 5", "6 x", "7 8"], "f", strict=False)
    assert raw.columns["a"].tolist() == [1.0, 7.0]
    assert raw.dropped_rows == 2


def test_ragged_columns_end_at_their_last_cell():
    raw = parse_table(["a b c", "1 2 3", "4 5", "6 9999", "7"], "f")
    assert raw.columns["a"].tolist() == [1.0, 4.0, 7.0]
    assert raw.columns["b"].tolist() == [2.0, 5.0]
    assert raw.columns["c"].tolist() == [3.0]
    assert raw.n_rows == 3
    assert raw.dropped_rows == 1


def test_header_errors():
    with pytest.raises(TableFormatError):
        parse_table(["", "   "], "f")
    with pytest.raises(TableFormatError):
        parse_table(["a a", "1 2"], "f")


def test_header_only_gives_empty_curves():
    raw = parse_table(["a b"], "f")
    assert raw.n_rows == 0
    assert raw.columns["b"].size == 0


def test_write_then_read(tmp_path):
    curves = [
        TimeSeries(values=[0.0, 1.0, 2.0], name="TIME"),
        TimeSeries(values=[0.1, 0.25, -3.5], name="EEG1"),
        TimeSeries(values=[7.0, 8.0], name="SHORT"),
    ]
    cs = FileCurveSet(name="out", curves={ts.name: ts for ts in curves})
    path = tmp_path / "out.txt"

    write_table(cs, path, ["TIME", "EEG1"], parameters=["Method: none"])
    raw = TextTableReader(path).read()

    assert raw.file_name == "out"
    assert raw.header == ["TIME", "EEG1"]
    assert raw.parameters == ["Method: none"]
    assert np.array_equal(raw.columns["EEG1"], [0.1, 0.25, -3.5])


def test_write_leaves_short_tails_blank(tmp_path):
    curves = [
        TimeSeries(values=[5.0], name="b"),
        TimeSeries(values=[0.0, 1.0, 2.0], name="a"),
    ]
    cs = FileCurveSet(name="x", curves={ts.name: ts for ts in curves})

    path = write_table(cs, tmp_path / "x.txt")

    lines = path.read_text(encoding="utf-8").splitlines()
    # longest curve first
    assert lines == ["a\tb", "0.0\t5.0", "1.0", "2.0"]


def test_ragged_write_then_read(tmp_path):
    curves = [
        TimeSeries(values=[1.0, 2.0, 3.0], name="EEG1"),
        TimeSeries(values=[4.0, 5.0], name="EEG1_Gauss1"),
    ]
    cs = FileCurveSet(name="s", curves={ts.name: ts for ts in curves})

    back = read_table(write_table(cs, tmp_path / "s.txt"))

    assert list(back.keys()) == ["EEG1", "EEG1_Gauss1"]
    assert back["EEG1"].values.tolist() == [1.0, 2.0, 3.0]
    assert back["EEG1_Gauss1"].values.tolist() == [4.0, 5.0]


def test_write_rejects_short_curve_before_long(tmp_path):
    curves = [
        TimeSeries(values=[1.0, 2.0, 3.0], name="long"),
        TimeSeries(values=[4.0], name="short"),
    ]
    cs = FileCurveSet(name="s", curves={ts.name: ts for ts in curves})
    with pytest.raises(TableFormatError):
        write_table(cs, tmp_path / "s.txt", ["short", "long"])


def test_write_nothing_raises(tmp_path):
    with pytest.raises(TableFormatError):
        write_table(FileCurveSet(name="empty"), tmp_path / "e.txt")


def test_read_table(tmp_path):
    cs = read_table(_write(tmp_path, TABLE))
    assert cs.name == "subject01"
    assert cs.meta.source.endswith("subject01.txt")
    assert cs.n_samples == 3


class _LinesReader:
    def __init__(self, lines, name):
        self.lines = lines
        self.name = name

    def read(self) -> RawTable:
        return parse_table(self.lines, self.name)


def test_load_from_any_table_reader():
    reader = _LinesReader(["TIME x", "0 1", "1 2"], "mem")
    assert isinstance(reader, TableReader)

    coll = load_table(reader)

    assert coll.curve("mem", "x").values.tolist() == [1.0, 2.0]
    assert coll["mem"].meta.source == "_LinesReader"


def test_loaded_sources_are_recorded(tmp_path):
    first = _write(tmp_path, TABLE)
    second = _write(tmp_path, "EEG3\n1\n", name="extra.txt")

    coll = load_table(second, load_table(first))

    assert coll.meta.attrs["sources"] == [str(first), str(second)]
