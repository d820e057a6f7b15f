# bandenergy/io/load.py
from __future__ import annotations

from pathlib import Path
from typing import Iterable
import logging

from bandenergy.io.table_reader import DEFAULT_SENTINEL, RawTable, TableReader, TextTableReader
from bandenergy.core import (
    CurveSetMeta,
    FileCurveSet,
    SeriesCollection,
    TimeSeries,
)
from bandenergy.core.exceptions import TableFormatError

logger = logging.getLogger(__name__)


def table_to_curveset(raw: RawTable, *, source: str | None = None) -> FileCurveSet:
    curves = {
        name: TimeSeries(values=raw.columns[name], name=name, file_name=raw.file_name)
        for name in raw.header
    }
    return FileCurveSet(
        name=raw.file_name,
        curves=curves,
        meta=CurveSetMeta(
            source=source,
            parameters=tuple(raw.parameters),
            attrs={"dropped_rows": raw.dropped_rows},
        ),
    )


def load_table(
    source: str | Path | TableReader,
    collection: SeriesCollection | None = None,
    *,
    sentinel: float | None = DEFAULT_SENTINEL,
    strict: bool = True,
) -> SeriesCollection:
    """
    Read a text table and merge it into `collection` (a new one by default).

    `source` is a path or any TableReader. Loaded sources are listed, in
    load order, under the collection's `sources` attribute.
    """
    if isinstance(source, TableReader):
        reader = source
        origin = str(getattr(source, "path", type(source).__name__))
    else:
        reader = TextTableReader(source, sentinel=sentinel, strict=strict)
        origin = str(source)
    raw = reader.read()
    curve_set = table_to_curveset(raw, source=origin)
    logger.info(
        "loaded %s: %d curves x %d rows", raw.file_name, len(raw.header), raw.n_rows
    )
    if collection is None:
        collection = SeriesCollection()
    sources = list(collection.meta.attrs.get("sources", ())) + [origin]
    return collection.add(curve_set).with_attrs(sources=sources)


def read_table(
    path: str | Path,
    *,
    sentinel: float | None = DEFAULT_SENTINEL,
    strict: bool = True,
) -> FileCurveSet:
    """Read one text table into a FileCurveSet named after the file stem."""
    raw = TextTableReader(path, sentinel=sentinel, strict=strict).read()
    return table_to_curveset(raw, source=str(path))


def write_table(
    curve_set: FileCurveSet,
    path: str | Path,
    header: Iterable[str] | None = None,
    *,
    parameters: Iterable[str] | None = None,
) -> Path:
    """
    Write curves column-wise: optional parameter lines, a header, then rows.

    Rows run to the longest curve and shorter curves leave their trailing
    cells blank, so parse_table reads the file back. Blank cells can only
    close a row: by default curves are written longest first (stable), and an
    explicit `header` must not put a shorter curve before a longer one.
    """
    if header is not None:
        series = list(curve_set.select(header).values())
        for prev, cur in zip(series, series[1:]):
            if cur.n > prev.n:
                raise TableFormatError(
                    f"{curve_set.name}: '{cur.name}' ({cur.n} samples) cannot follow "
                    f"shorter curve '{prev.name}' ({prev.n} samples)"
                )
    else:
        series = sorted(curve_set.values(), key=lambda ts: ts.n, reverse=True)
    if not series:
        raise TableFormatError(f"{curve_set.name}: nothing to write")

    columns = [ts.values.tolist() for ts in series]
    n_rows = len(columns[0])

    out = Path(path)
    with out.open("w", encoding="utf-8") as fh:
        for line in parameters or ():
            fh.write(f"{line}\n")
        fh.write("\t".join(ts.name for ts in series) + "\n")
        for i in range(n_rows):
            fh.write("\t".join(repr(c[i]) for c in columns if i < len(c)) + "\n")
    logger.info("wrote %s: %d curves x %d rows", out, len(columns), n_rows)
    return out
