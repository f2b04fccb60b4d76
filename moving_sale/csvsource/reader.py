from __future__ import annotations

from pathlib import Path

"""CSV source reader for the moving-sale catalog.

The sale list is maintained by hand in a spreadsheet and exported as CSV, so
the parser favors best-effort output over strictness:
- `"` quoting with `""` escapes, commas / newlines literal inside quotes
- record separators: \\n, \\r\\n, bare \\r (outside quotes only)
- blank records (all fields whitespace) are dropped
- first kept record = header (trimmed); ragged rows padded / truncated
- unterminated quote at end of input closes the field implicitly
"""

__all__ = [
    "RawRow",
    "SourceUnavailableError",
    "parse_csv",
    "parse_records",
    "read_source",
    "load_rows",
]

RawRow = dict[str, str]


class SourceUnavailableError(Exception):
    """Raised when the CSV source cannot be read (missing file, I/O error, bad encoding)."""


def _is_blank(record: list[str]) -> bool:
    return not any(field.strip() for field in record)


def parse_records(text: str) -> list[list[str]]:
    """Split raw CSV text into records (lists of fields), blank records removed."""
    records: list[list[str]] = []
    record: list[str] = []
    field: list[str] = []
    inside_quotes = False
    i = 0
    n = len(text)

    while i < n:
        ch = text[i]
        if ch == '"':
            if inside_quotes and i + 1 < n and text[i + 1] == '"':
                field.append('"')
                i += 1
            else:
                inside_quotes = not inside_quotes
        elif ch == "," and not inside_quotes:
            record.append("".join(field))
            field = []
        elif ch in "\r\n" and not inside_quotes:
            if ch == "\r" and i + 1 < n and text[i + 1] == "\n":
                i += 1
            record.append("".join(field))
            if not _is_blank(record):
                records.append(record)
            record = []
            field = []
        else:
            field.append(ch)
        i += 1

    # 終端改行なしの最終行 (未閉鎖クォートもここで閉じる)
    if field or record:
        record.append("".join(field))
        if not _is_blank(record):
            records.append(record)
    return records


def parse_csv(text: str) -> list[RawRow]:
    """Parse CSV text into a list of column-name -> value mappings.

    The first non-blank record is the header; its values are trimmed and used
    as keys for every following record. Data values are kept as-is.

    Examples:
        >>> parse_csv("A,B\\n1,2\\n3\\n")
        [{'A': '1', 'B': '2'}, {'A': '3', 'B': ''}]
    """
    records = parse_records(text)
    if not records:
        return []
    headers = [h.strip() for h in records[0]]
    rows: list[RawRow] = []
    for record in records[1:]:
        row: RawRow = {}
        for index, header in enumerate(headers):
            row[header] = record[index] if index < len(record) else ""
        rows.append(row)
    return rows


def read_source(path: Path) -> str:
    """Read the CSV source as UTF-8 text (a leading BOM is ignored).

    Raises:
        SourceUnavailableError: file missing, unreadable or not valid UTF-8
    """
    try:
        return path.read_text(encoding="utf-8-sig")
    except (OSError, UnicodeDecodeError) as e:
        raise SourceUnavailableError(f"failed to load CSV {path}: {e}") from e


def load_rows(path: Path) -> list[RawRow]:
    return parse_csv(read_source(path))
