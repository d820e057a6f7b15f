from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Protocol, runtime_checkable
import logging
import re

import numpy as np

from bandenergy.core.exceptions import TableFormatError

logger = logging.getLogger(__name__)


DEFAULT_SENTINEL = 9999.0
PARAMETER_MARKER = "Method"

_SPLIT_RE = re.compile(r"[ \t]+")


@dataclass
class RawTable:
    """
    Columns of one whitespace-separated text file, before they become curves.

    file_name:   set name (file stem, e.g. "subject01" for "subject01.txt")
    header:      curve names in column order
    columns:     curve name -> float64 samples (rows with the sentinel dropped)
    parameters:  raw parameter lines (lines containing "Method")
    dropped_rows: number of data rows that were skipped
    """

    file_name: str
    header: list[str]
    columns: dict[str, np.ndarray]
    parameters: list[str] = field(default_factory=list)
    dropped_rows: int = 0

    @property
    def n_rows(self) -> int:
        return 0 if not self.header else int(self.columns[self.header[0]].size)


@runtime_checkable
class TableReader(Protocol):
    """Protocol for tabular readers."""

    def read(self) -> RawTable:
        ...


def _split(line: str) -> list[str]:
    return [tok for tok in _SPLIT_RE.split(line.strip()) if tok]


def parse_table(
    lines: Iterable[str],
    file_name: str,
    *,
    sentinel: float | None = DEFAULT_SENTINEL,
    strict: bool = True,
) -> RawTable:
    """Parse header + numeric rows.

    Curves of different lengths share one table: a shorter curve simply
    stops, so later rows carry fewer cells. Rows may narrow but never widen
    again, and each column ends at its last present cell.

    Parameters
    ----------
    lines:
        Text lines; blank lines are ignored.
    file_name:
        Name of the resulting set.
    sentinel:
        Rows holding this value in any column are dropped (None disables).
    strict:
        If True, a row that is wider than the header or than an earlier
        ragged row, or holds a non-numeric token, raises TableFormatError;
        otherwise it is skipped with a warning.
    """
    header: list[str] | None = None
    parameters: list[str] = []
    rows: list[list[float]] = []
    width = 0
    dropped = 0

    for lineno, raw in enumerate(lines, start=1):
        line = raw.rstrip("\r\n")
        if not line.strip():
            continue
        if PARAMETER_MARKER in line:
            parameters.append(line.strip())
            continue

        tokens = _split(line)
        if header is None:
            if len(set(tokens)) != len(tokens):
                raise TableFormatError(f"{file_name}:{lineno}: duplicate curve names in header")
            header = tokens
            width = len(header)
            continue

        msg = None
        if len(tokens) > width:
            msg = f"{file_name}:{lineno}: expected at most {width} columns, got {len(tokens)}"
        else:
            try:
                row = [float(tok) for tok in tokens]
            except ValueError as e:
                msg = f"{file_name}:{lineno}: non-numeric value ({e})"
        if msg is not None:
            if strict:
                raise TableFormatError(msg)
            logger.warning("%s; row skipped", msg)
            dropped += 1
            continue

        if sentinel is not None and sentinel in row:
            dropped += 1
            continue
        width = len(row)
        rows.append(row)

    if header is None:
        raise TableFormatError(f"{file_name}: input has no header line")

    columns = {
        name: np.array([row[i] for row in rows if len(row) > i], dtype=np.float64)
        for i, name in enumerate(header)
    }

    if dropped:
        logger.warning("%s: %d row(s) dropped", file_name, dropped)
    return RawTable(
        file_name=file_name,
        header=header,
        columns=columns,
        parameters=parameters,
        dropped_rows=dropped,
    )


class TextTableReader:
    """Reads a whitespace/tab separated text table from disk."""

    def __init__(
        self,
        path: str | Path,
        *,
        sentinel: float | None = DEFAULT_SENTINEL,
        strict: bool = True,
        encoding: str = "utf-8",
    ):
        self.path = Path(path)
        self.sentinel = sentinel
        self.strict = strict
        self.encoding = encoding

    def read(self) -> RawTable:
        with self.path.open("r", encoding=self.encoding) as fh:
            return parse_table(
                fh,
                self.path.stem,
                sentinel=self.sentinel,
                strict=self.strict,
            )
