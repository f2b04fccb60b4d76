"""CSV source loading and parsing."""

from .reader import RawRow, SourceUnavailableError, load_rows, parse_csv, parse_records, read_source

__all__ = [
    "RawRow",
    "SourceUnavailableError",
    "load_rows",
    "parse_csv",
    "parse_records",
    "read_source",
]
