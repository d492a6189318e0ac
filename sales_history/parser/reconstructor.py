from __future__ import annotations

import logging
import re
from collections.abc import Sequence

from ..models.row_data import RawLine, RowData
from .errors import RowError

"""Row reconstructor.

Joins physical lines into logical rows and maps the fields onto the schema.
A quoted field with embedded line breaks spans several physical lines; lines
are accumulated until the row splits into exactly as many fields as there are
columns. Every field is assumed to be double quoted (see normalizer).
"""

__all__ = [
    "split_fields",
    "reconstruct_rows",
]

logger = logging.getLogger(__name__)

# `"` , `"` between two fields; never occurs inside a field's text
_FIELD_SEPARATOR = re.compile(r'"\s*,\s*"')


def split_fields(text: str) -> list[str]:
    return _FIELD_SEPARATOR.split(text)


def _strip_outer_quotes(fields: list[str]) -> list[str]:
    # The split consumes interior `","` runs; the row's outermost quotes are left over.
    # Eg. `"1234` => `1234`
    if fields[0].startswith('"'):
        fields[0] = fields[0][1:]
    if fields[-1].endswith('"'):
        fields[-1] = fields[-1][:-1]
    return fields


def reconstruct_rows(lines: Sequence[RawLine], columns: Sequence[str]) -> list[RowData]:
    """Rebuild logical rows from the data lines (header and trailer excluded).

    Args:
        lines: Normalized data lines in file order
        columns: Column identifiers from the header

    Returns:
        Rows in original file order

    Raises:
        RowError: A row has more fields than columns, or the last row is still
            incomplete when the data lines run out
    """
    rows: list[RowData] = []
    pending = ""
    start: RawLine | None = None

    for line in lines:
        if not pending:
            start = line
            pending = line.text
        else:
            pending = (pending + "\n" + line.text).strip()

        fields = split_fields(pending)
        if len(fields) > len(columns):
            raise RowError(
                f"There are more fields in the row at line {start.number} than there are column names "
                f"({len(fields)} > {len(columns)})",
                line=start.number,
            )
        if len(fields) < len(columns):
            # embedded line break; keep appending physical lines
            continue

        if start.number != line.number:
            logger.debug(f"joined lines {start.number}-{line.number} into one row")
        fields = _strip_outer_quotes(fields)
        rows.append(RowData(row_number=start.number, values=dict(zip(columns, fields))))
        pending = ""
        start = None

    if pending:
        raise RowError(
            f"Row starting at line {start.number} is incomplete: fewer fields than columns "
            f"before the record count line",
            line=start.number,
        )
    return rows
