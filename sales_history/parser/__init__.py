"""Sales history parsing engine."""

from .errors import (
    EncodingError,
    FieldParseError,
    InputNotFoundError,
    RowError,
    SalesHistoryError,
    SchemaError,
    TrailerError,
    UnsupportedSiteError,
)
from .sales_history_parser import parse_sales_history, parse_with_options

__all__ = [
    "parse_sales_history",
    "parse_with_options",
    "SalesHistoryError",
    "UnsupportedSiteError",
    "InputNotFoundError",
    "EncodingError",
    "SchemaError",
    "TrailerError",
    "RowError",
    "FieldParseError",
]
