from __future__ import annotations

from dataclasses import dataclass

"""RawLine / RowData models for the sales history parser.

RawLine is one normalized physical line; RowData is one logical record after
line reconstruction (column identifier -> raw string value).
"""

__all__ = [
    "RawLine",
    "RowData",
]


@dataclass(frozen=True)
class RawLine:
    """A single normalized text line.

    `number` is the 1-based physical line number in the source file, kept so
    later stages can report positions.
    """
    number: int
    text: str


@dataclass(frozen=True)
class RowData:
    """Logical row after reconstruction.

    The key set of `values` always equals the file schema.
    """
    row_number: int  # physical line where the logical row starts
    values: dict[str, str]

    def get(self, column: str) -> str:
        return self.values.get(column, "")
