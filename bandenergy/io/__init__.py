"""Simple tabular text input/output."""

from .table_reader import RawTable, TableReader, TextTableReader, parse_table
from .load import load_table, read_table, table_to_curveset, write_table


__all__ = [
    "RawTable",
    "TableReader",
    "TextTableReader",
    "parse_table",
    "load_table",
    "read_table",
    "table_to_curveset",
    "write_table",
]
