from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path

from ..models.config_models import DEFAULT_DATE_FORMATS, DEFAULT_ENCODING, SUPPORTED_SITE_IDS, ParseOptions
from ..models.sales_history import SalesHistory
from .errors import InputNotFoundError, SchemaError, TrailerError, UnsupportedSiteError
from .normalizer import normalize_lines
from .rationalizer import rationalize
from .reconstructor import reconstruct_rows
from .schema import read_schema
from .trailer import read_trailer

"""Sales history file parser (single file).

Pipeline: read -> normalize -> schema -> trailer -> reconstruct -> rationalize.
Any failure aborts the parse; partial results are never returned.
"""

__all__ = [
    "parse_sales_history",
    "parse_with_options",
]

logger = logging.getLogger(__name__)


def parse_sales_history(
    path: Path | str,
    *,
    site_id: int = 3,
    encoding: str = DEFAULT_ENCODING,
    date_formats: Sequence[str] | None = None,
    strict_record_count: bool = False,
) -> SalesHistory:
    """Parse one eBay File Exchange sales history export.

    Args:
        path: CSV file path
        site_id: eBay site id; only 3 (UK) is supported
        encoding: Source codec of the file
        date_formats: strptime formats for date columns (None = defaults)
        strict_record_count: Raise instead of warn when the number of orders
            differs from the trailer's record count

    Returns:
        SalesHistory with orders in file order

    Raises:
        UnsupportedSiteError, InputNotFoundError, EncodingError, SchemaError,
        TrailerError, RowError, FieldParseError
    """
    if site_id not in SUPPORTED_SITE_IDS:
        raise UnsupportedSiteError(f"Can only parse CSV files from UK [3], got site id {site_id}")

    path = Path(path)
    if not path.is_file():
        raise InputNotFoundError(f"File '{path}' does not exist")

    formats = tuple(date_formats) if date_formats else DEFAULT_DATE_FORMATS

    try:
        with path.open("rb") as f:
            lines = normalize_lines(f, encoding=encoding)
    except OSError as e:
        raise InputNotFoundError(f"File '{path}' could not be read: {e}") from e
    logger.debug(f"{path.name}: {len(lines)} non-blank lines")

    if not lines:
        raise SchemaError("file is empty; no header line found")

    columns = read_schema(lines[0].text)
    trailer = read_trailer(lines)
    rows = reconstruct_rows(lines[1:-2], columns)
    orders = rationalize(rows, formats)

    if len(orders) != trailer.record_count:
        message = (
            f"{path.name}: trailer declares {trailer.record_count} record(s) but {len(orders)} order(s) were parsed"
        )
        if strict_record_count:
            raise TrailerError(message)
        logger.warning(message)

    logger.info(f"{path.name}: {len(orders)} order(s), {len(rows)} row(s), seller={trailer.seller_id}")
    return SalesHistory(
        source=path,
        columns=columns,
        orders=tuple(orders),
        record_count=trailer.record_count,
        seller_id=trailer.seller_id,
    )


def parse_with_options(path: Path | str, options: ParseOptions) -> SalesHistory:
    return parse_sales_history(
        path,
        site_id=options.site_id,
        encoding=options.encoding,
        date_formats=options.date_formats,
        strict_record_count=options.strict_record_count,
    )
