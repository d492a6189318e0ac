from __future__ import annotations

import re
from collections.abc import Iterable

from ..models.row_data import RawLine
from .errors import EncodingError

"""Line normalizer.

Decodes raw lines from the legacy single-byte encoding, drops blank lines and
repairs unquoted empty fields so that every field is quote-delimited:

    "a",,"b",   ->   "a","","b",""

Downstream splitting relies on the `","` separator, so an empty unquoted field
would otherwise shift every later column.
"""

__all__ = [
    "repair_empty_fields",
    "normalize_lines",
]

# `,` followed by another `,`; lookahead so runs like `,,,` are fully repaired
_EMPTY_FIELD = re.compile(r",(?=,)")


def repair_empty_fields(line: str) -> str:
    """Insert `""` placeholders for unquoted empty fields. Idempotent."""
    line = _EMPTY_FIELD.sub(',""', line)
    if line.endswith(","):
        line += '""'
    return line


def normalize_lines(raw_lines: Iterable[bytes], encoding: str = "iso-8859-1") -> list[RawLine]:
    """Decode, trim and repair every non-blank line.

    Args:
        raw_lines: Byte lines as read from a binary file handle
        encoding: Source codec name (legacy Western European by default)

    Returns:
        Normalized lines in file order, each tagged with its physical line number

    Raises:
        EncodingError: A line holds a byte sequence illegal for `encoding`
    """
    lines: list[RawLine] = []
    for number, raw in enumerate(raw_lines, start=1):
        try:
            text = raw.decode(encoding)
        except UnicodeDecodeError as e:
            raise EncodingError(
                f"failed to convert character encoding from '{encoding}' on line {number}: {e}",
                line=number,
            ) from e
        text = text.strip()
        if not text:
            continue
        lines.append(RawLine(number=number, text=repair_empty_fields(text)))
    return lines
