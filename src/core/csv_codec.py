"""Quote-aware CSV encode and decode primitives.

Every component reads and writes CSV through this module: the raw
export, the date partitions, and the item stats output. Decoding is
header-driven and tolerant of ragged rows; encoding quotes a cell only
when it has to.
"""

from __future__ import annotations

import csv
import io
from dataclasses import dataclass, field
from typing import Iterable, Mapping

from core.numeric import format_number

_QUOTE_TRIGGERS = (",", '"', "\n", "\r")


@dataclass(frozen=True)
class CsvTable:
    """Decoded CSV content.

    Attributes:
        header: Column names from the first non-empty row.
        records: One mapping per data row keyed by header column.
    """

    header: tuple[str, ...] = ()
    records: list[dict[str, str]] = field(default_factory=list)


def decode(text: str) -> CsvTable:
    """Decode CSV text into a header and keyed records.

    Missing trailing cells become empty strings and extra cells are
    ignored. Quoted cells may span line breaks.

    Args:
        text: Raw CSV text.

    Returns:
        Decoded table, empty when the text has no content rows.
    """
    rows = [row for row in csv.reader(io.StringIO(text, newline="")) if _has_content(row)]
    if not rows:
        return CsvTable()
    header = tuple(rows[0])
    records = [_map_row(header, row) for row in rows[1:]]
    return CsvTable(header=header, records=records)


def decode_line(line: str) -> list[str]:
    """Decode one logical CSV line into its cells."""
    return next(csv.reader(io.StringIO(line, newline="")), [""])


def encode_cell(value: object) -> str:
    """Encode one value as a CSV cell.

    Args:
        value: Cell value. None renders empty, numbers render in plain
            decimal form.

    Returns:
        The value unchanged, or wrapped in double quotes with internal
        quotes doubled when it contains a comma, quote, or line break.
    """
    if value is None:
        text = ""
    elif isinstance(value, (int, float)) and not isinstance(value, bool):
        text = format_number(float(value))
    else:
        text = str(value)
    if any(trigger in text for trigger in _QUOTE_TRIGGERS):
        return '"' + text.replace('"', '""') + '"'
    return text


def encode_row(values: Iterable[object]) -> str:
    """Encode a sequence of values as one CSV line without terminator."""
    return ",".join(encode_cell(value) for value in values)


def encode_records(columns: Iterable[str], records: Iterable[Mapping[str, object]]) -> str:
    """Encode keyed records as newline-terminated CSV rows.

    Args:
        columns: Ordered column names selecting values from each record.
        records: Records to encode.

    Returns:
        Encoded rows, each followed by a newline. No header is written.
    """
    ordered_columns = tuple(columns)
    lines = [
        encode_row(record.get(column) for column in ordered_columns) + "\n"
        for record in records
    ]
    return "".join(lines)


def _map_row(header: tuple[str, ...], row: list[str]) -> dict[str, str]:
    return {column: row[index] if index < len(row) else "" for index, column in enumerate(header)}


def _has_content(row: list[str]) -> bool:
    return len(row) > 1 or any(cell.strip() for cell in row)
