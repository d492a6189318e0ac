from __future__ import annotations

from dataclasses import dataclass

"""Config dataclasses for the sales history parser.

Loaded and validated by sales_history.config.loader; consumed by the services
layer which passes the parse options through to parse_sales_history().
"""

SUPPORTED_SITE_IDS = frozenset({3})  # 3 = eBay UK

DEFAULT_ENCODING = "iso-8859-1"

DEFAULT_DATE_FORMATS: tuple[str, ...] = (
    "%d-%b-%y",
    "%d-%b-%Y",
    "%d/%m/%Y",
    "%d/%m/%y",
    "%Y-%m-%d",
)


@dataclass(frozen=True)
class ParseOptions:
    """Per-file parse settings. Only the UK regional schema is supported.

    `site_id` is checked before any file access.
    """
    site_id: int = 3
    encoding: str = DEFAULT_ENCODING
    date_formats: tuple[str, ...] = DEFAULT_DATE_FORMATS
    strict_record_count: bool = False


@dataclass(frozen=True)
class ImportConfig:
    """Root configuration object.

    Contains the directory to scan and the options applied to every file in it.
    """
    source_directory: str  # Directory to scan for *.csv sales history files
    parse_options: ParseOptions
    export_directory: str | None = None  # CSV export target (None = no export)
