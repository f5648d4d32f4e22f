"""Tabular activity export (CSV) parsing."""

from .columns import DEFAULT_COLUMNS, ColumnSpec, resolve_columns
from .export_provider import ExportProvider, parse_tabular
from .records import split_records

__all__ = [
    "DEFAULT_COLUMNS",
    "ColumnSpec",
    "ExportProvider",
    "parse_tabular",
    "resolve_columns",
    "split_records",
]
