from __future__ import annotations

"""Errors raised while parsing a sales history file.

Every failure aborts the whole parse; no partial result is ever returned.
`error_type` is the UPPER_SNAKE classification written to the error log.
"""

__all__ = [
    "SalesHistoryError",
    "UnsupportedSiteError",
    "InputNotFoundError",
    "EncodingError",
    "SchemaError",
    "TrailerError",
    "RowError",
    "FieldParseError",
]


class SalesHistoryError(Exception):
    """Base error for this package."""
    error_type = "PARSE_ERROR"
    line: int = -1


class UnsupportedSiteError(SalesHistoryError):
    """Raised when asked to parse a regional variant other than eBay UK."""
    error_type = "UNSUPPORTED_SITE"


class InputNotFoundError(SalesHistoryError):
    """Raised when the input path does not resolve to a readable file."""
    error_type = "INPUT_NOT_FOUND"


class EncodingError(SalesHistoryError):
    """Raised when a line contains bytes illegal for the source encoding."""
    error_type = "ENCODING_ERROR"

    def __init__(self, message: str, line: int = -1) -> None:
        super().__init__(message)
        self.line = line


class SchemaError(SalesHistoryError):
    """Raised when the header line lacks a required column."""
    error_type = "SCHEMA_ERROR"

    def __init__(self, message: str, column: str | None = None) -> None:
        super().__init__(message)
        self.column = column


class TrailerError(SalesHistoryError):
    """Raised when the record count or seller id line is missing or malformed."""
    error_type = "TRAILER_ERROR"


class RowError(SalesHistoryError):
    """Raised when a logical row cannot be reconstructed."""
    error_type = "ROW_ERROR"

    def __init__(self, message: str, line: int) -> None:
        super().__init__(message)
        self.line = line


class FieldParseError(SalesHistoryError):
    """Raised when a required or non-blank typed field cannot be parsed."""
    error_type = "FIELD_PARSE_ERROR"

    def __init__(self, message: str, column: str | None = None, value: str | None = None, line: int = -1) -> None:
        super().__init__(message)
        self.column = column
        self.value = value
        self.line = line
